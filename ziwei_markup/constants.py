"""
Zi Wei Markup - Canonical Term Tables

Canonical vocabulary recognised in analysis text:
- Four transformation markers (祿/權/科/忌)
- Star names by family
- Classical pattern names (吉格 / 凶格)
- Flow, warning and verdict keywords
- Preprocessing markers and question headers

These tables are the built-in configuration. A YAML file with the same
shape can replace any of them (see registry.TermRegistry.from_yaml).
"""
from typing import Dict, List, Tuple

# =============================================================================
# TRANSFORMATION MARKERS (四化)
# =============================================================================

DEBT_TERMS: List[str] = [
    "化忌", "武曲化忌", "廉貞化忌", "巨門化忌", "天機化忌",
    "文昌化忌", "文曲化忌", "太陰化忌", "貪狼化忌", "太陽化忌",
]
OPPORTUNITY_TERMS: List[str] = ["化祿"]
AUTHORITY_TERMS: List[str] = ["化權"]
REPUTATION_TERMS: List[str] = ["化科"]

# =============================================================================
# STARS
# =============================================================================

ADVERSE_STARS: List[str] = [
    "擎羊", "陀羅", "火星", "鈴星", "地空", "地劫", "空宮",
    "天刑", "孤辰", "寡宿", "大耗", "破碎", "天哭", "天虛",
]
FAVORABLE_STARS: List[str] = [
    "祿存", "天馬", "左輔", "右弼", "天魁", "天鉞",
    "文昌", "文曲", "三台", "八座", "恩光", "天貴",
]
# 大耗 is listed here and in ADVERSE_STARS; romance is checked first
ROMANCE_STARS: List[str] = ["紅鸞", "天喜", "咸池", "天姚", "沐浴", "大耗"]
IMPERIAL_STARS: List[str] = ["紫微", "天府"]
ACTION_STARS: List[str] = ["七殺", "破軍", "貪狼", "廉貞", "武曲", "太陽"]
INTELLECT_STARS: List[str] = ["天機", "天梁", "天相", "天同", "太陰"]
DARK_STARS: List[str] = ["巨門"]

# =============================================================================
# PATTERNS (格局)
# =============================================================================

# 凶格 / 風險格: always rendered as adverse
ADVERSE_PATTERNS: List[str] = [
    "馬頭帶劍格", "馬頭帶劍", "羊陀夾祿格", "羊陀夾祿", "羊陀夾命格", "羊陀夾命",
    "鈴昌陀武格", "鈴昌羅紋格", "鈴昌羅紋", "鈴昌陀武",
    "火貪格", "鈴貪格", "火貪", "鈴貪",
    "泛水桃花格", "風流彩杖格", "刑囚夾印格", "路上埋屍格", "財與囚仇格",
    "巨火羊格", "空劫夾命格", "刑忌夾印格", "雙忌夾命格", "三忌沖命", "雙忌沖命",
    "十惡格", "十惡", "刑杖格", "刑杖", "運忌沖命", "天機化忌", "太陰化忌",
    "雙忌沖", "三忌沖", "權忌交戰", "權忌交沖", "祿忌交沖", "忌沖",
]

# 吉格 / 中性格. The whitelist used for matching is this list plus ADVERSE_PATTERNS.
FAVORABLE_PATTERNS: List[str] = [
    "極嚮離明格", "極嚮離明", "紫府同宮格", "紫府朝垣格", "君臣慶會格", "府相朝垣格", "府相朝垣",
    "機月同梁格", "機月同梁", "機巨同臨格", "機巨同臨", "陽梁昌祿格", "陽梁昌祿",
    "日照雷門格", "日照雷門", "金燦光輝格", "日麗中天",
    "月朗天門格", "月朗天門", "月生滄海格", "月生滄海", "明珠出海格", "明珠出海",
    "日月並明格", "日月並明", "日月同宮格", "巨日同宮格", "巨日同宮", "丹墀桂墀格",
    "石中隱玉格", "石中隱玉", "壽星入廟格", "壽星入廟", "英星入廟格", "英星入廟",
    "七殺朝斗格", "七殺朝斗", "雄宿朝元格", "雄宿朝元",
    "三奇加會格", "三奇加會", "雙祿朝垣格", "雙祿朝垣", "祿馬交馳格", "祿馬交馳", "祿馬佩印格",
    "坐貴向貴格", "坐貴向貴", "文星拱命格", "文星拱命", "將星得地格",
    "權祿巡逢格", "權祿巡逢", "科權祿夾格", "財蔭夾印格", "財蔭夾印",
    "命無正曜格", "命無正曜", "殺破狼格", "殺破狼", "殺破狼局",
    "天同坐戌格", "太陰坐酉格", "巨門坐子格", "巨門坐午格", "天梁坐午格",
    "左右同宮格", "左右同宮", "魁鉞夾命格", "兼文武格",
]

# Risk ideograms marking a pattern name as adverse when it is not listed
PATTERN_RISK_GLYPHS: Tuple[str, ...] = ("忌", "煞", "凶", "惡")

# Risk ideograms that promote a label-pair label to a pattern name
LABEL_RISK_GLYPHS: Tuple[str, ...] = ("忌", "沖", "煞", "刑")

# Suffixes that mark a short label as a configuration name
PATTERN_SUFFIXES: Tuple[str, ...] = ("格", "局")

# =============================================================================
# KEYWORDS
# =============================================================================

FLOW_KEYWORDS: List[str] = [
    "祿入", "忌入", "權入", "科入", "自化",
    "互沖", "互照", "拱照", "會照", "會合",
    "夾命", "夾宮", "夾局",
    "->", "→", "轉化", "連結", "引爆", "刑剋", "相欠", "共振",
    "沖", "沖射", "三合", "對宮",
]

WARNING_KEYWORDS: List[str] = [
    "警世", "注意", "警告", "風險", "危機", "破蕩", "刑傷", "血光", "官非", "糾紛",
    "分離", "災難", "煞氣", "破耗", "破局", "破損", "破壞", "水災", "止損", "沉沒成本",
    "內耗", "磨損", "殘酷", "紅色警報", "警報", "隱形債務",
]

VERDICT_KEYWORDS: List[str] = [
    "機率極大", "極大", "必然", "肯定", "絕對", "優勢", "核心", "關鍵", "必定", "機率高",
    "指數高", "做多", "唯一解", "突破口", "戰略批註", "紅樓夢原型", "終局對齊", "戰略總結",
    "執行方案", "機率偏高", "風險偏高", "突破", "格局總覽", "判斷：", "綜合判定：",
    "座標定位：", "星曜取證：", "四化盤點：", "命盤讀取確認", "格局定位", "空間座標",
    "本命底色", "大限環境", "關鍵能量",
]

BRACKET_GLYPHS: List[str] = ["【", "】", "「", "」"]

# Category name -> built-in literal list (category names match TermCategory values)
DEFAULT_TERMS: Dict[str, List[str]] = {
    "debt": DEBT_TERMS,
    "opportunity": OPPORTUNITY_TERMS,
    "authority": AUTHORITY_TERMS,
    "reputation": REPUTATION_TERMS,
    "adverseStar": ADVERSE_STARS,
    "favorableStar": FAVORABLE_STARS,
    "romanceStar": ROMANCE_STARS,
    "imperialStar": IMPERIAL_STARS,
    "actionStar": ACTION_STARS,
    "intellectStar": INTELLECT_STARS,
    "darkStar": DARK_STARS,
    "flow": FLOW_KEYWORDS,
    "warning": WARNING_KEYWORDS,
    "verdict": VERDICT_KEYWORDS,
    "bracketGlyph": BRACKET_GLYPHS,
    "patternName": FAVORABLE_PATTERNS + ADVERSE_PATTERNS,
}

# =============================================================================
# PREPROCESSING
# =============================================================================

# Leading system directive, e.g. "**【系統設定：紫微斗數戰略引擎】**"
SYSTEM_DIRECTIVE_LABELS: Tuple[str, ...] = ("System Upgrade", "系統設定")
ROLE_LABELS: Tuple[str, ...] = ("Role", "角色")
SYSTEM_CONTEXT_MARKER = "[System Context]"
BOLD_MARKER = "**"
ASCII_ARROW = "->"
UNICODE_ARROW = "→"

# Question block headers: "## ❓ 推薦追問" / "## ❓ Recommended Follow-up"
QUESTION_HEADERS: Tuple[str, ...] = ("推薦追問", "Recommended Follow-up")
QUESTION_BULLETS: Tuple[str, ...] = ("*", "❖", "-")
MIN_QUESTION_LENGTH = 3

MAX_SUGGESTED_QUESTIONS = 5

DEFAULT_QUESTIONS: List[str] = [
    "🔮 十年大運詳解",
    "💰 這個命盤適合創業嗎",
    "💘 分析這十年的桃花運",
    "🚑 身體有哪些隱疾要注意",
    "🏠 適合買房置產的時機",
]

# =============================================================================
# USER MESSAGES
# =============================================================================

ANALYSIS_TRIGGER_PREFIX = "Analyzing"
ATTACHED_FILE_MARKER = "[引用檔案內容]:"
ATTACHED_FILE_PLACEHOLDER = "📄 [已上傳命盤文本]"
CHART_HINT_WORDS: Tuple[str, ...] = ("命盤", "紫微")
CHART_MIN_LENGTH = 50
