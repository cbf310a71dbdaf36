"""
Tests for the label-pair and bracket-phrase parsers.
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from ziwei_markup import (
    TermCategory,
    TermRegistry,
    Token,
    classify_label,
    highlight,
    is_pattern_label,
    match_label_pair,
    parse_brackets,
    parse_label_pair,
)


def categories(tokens):
    return [t.category for t in tokens]


# =============================================================================
# LABEL PAIRS
# =============================================================================

class TestMatchLabelPair:

    def test_full_width_colon(self):
        pair = match_label_pair("事業宮：主星為紫微")
        assert pair.label == "事業宮"
        assert pair.content == "主星為紫微"
        assert pair.rest == ""

    def test_half_width_colon(self):
        pair = match_label_pair("Career: stable growth")
        assert pair.label == "Career"
        assert pair.content == "stable growth"

    def test_rest_after_line(self):
        pair = match_label_pair("命宮：紫微\n其餘內容")
        assert pair.content == "紫微"
        assert pair.rest == "\n其餘內容"

    def test_label_trimmed(self):
        pair = match_label_pair(" 命宮 ：紫微")
        assert pair.label == "命宮"

    def test_label_too_long(self):
        assert match_label_pair("這是一個超過十個字的標籤名稱：內容") is None

    def test_label_too_short(self):
        assert match_label_pair("命：紫微") is None

    def test_flow_keyword_not_label(self):
        assert match_label_pair("會照：天府") is None

    def test_blank_label(self):
        assert match_label_pair("   ：內容") is None

    def test_no_colon(self):
        assert match_label_pair("命宮坐紫微") is None


class TestLabelClassification:

    def test_whitelisted_pattern(self):
        assert is_pattern_label("三奇加會格")

    def test_qualifier_stripped_before_lookup(self):
        assert is_pattern_label("馬頭帶劍(大限)")
        assert is_pattern_label("府相朝垣（本命）")

    def test_risk_glyph(self):
        assert is_pattern_label("命宮見忌")
        assert is_pattern_label("財帛宮沖")
        assert is_pattern_label("兄弟宮刑")

    def test_short_suffix(self):
        assert is_pattern_label("自創新詞格")
        assert is_pattern_label("格局")

    def test_long_suffix_is_generic(self):
        assert not is_pattern_label("這是一個很長的新格")

    def test_generic_label(self):
        token = classify_label("事業宮")
        assert token == Token(text="事業宮", category=TermCategory.LABEL)
        assert token.is_adverse is None

    def test_pattern_label_adverse_flag(self):
        assert classify_label("雙忌夾命格（流年）").is_adverse is True
        assert classify_label("命宮見忌").is_adverse is True

    def test_clash_label_not_adverse(self):
        """沖/刑 promote a label to a pattern but are not adverse glyphs."""
        token = classify_label("財帛宮沖")
        assert token.category == TermCategory.PATTERN_NAME
        assert token.is_adverse is False

    def test_qualified_label_keeps_text(self):
        token = classify_label("馬頭帶劍(大限)")
        assert token.text == "馬頭帶劍(大限)"
        assert token.category == TermCategory.PATTERN_NAME
        # Adverse flag is computed on the raw label, which is not listed
        assert token.is_adverse is False


class TestParseLabelPair:

    def test_pattern_label_with_content(self):
        tokens = highlight("三奇加會格：命宮三方四正齊聚")
        assert tokens[0] == Token.pattern("三奇加會格", False)
        assert "".join(t.text for t in tokens[1:]) == "命宮三方四正齊聚"
        assert all(t.category != TermCategory.LABEL for t in tokens)

    def test_generic_label_content_tokenized(self):
        tokens = parse_label_pair("事業宮：主星為紫微")
        assert tokens == [
            Token(text="事業宮", category=TermCategory.LABEL),
            Token.plain("主星為"),
            Token(text="紫微", category=TermCategory.IMPERIAL_STAR),
        ]

    def test_nested_label_pair(self):
        tokens = parse_label_pair("格局總覽：三奇加會格：吉")
        assert categories(tokens) == [
            TermCategory.LABEL,
            TermCategory.PATTERN_NAME,
            None,
        ]
        assert tokens[1].text == "三奇加會格"

    def test_label_with_bracket_content(self):
        tokens = parse_label_pair("格局：「三奇加會格」")
        assert tokens == [
            Token.pattern("格局", False),
            Token.pattern("三奇加會格", False),
        ]

    def test_empty_content(self):
        assert parse_label_pair("命宮：") == [Token(text="命宮", category=TermCategory.LABEL)]

    def test_rest_is_parsed(self):
        tokens = parse_label_pair("命宮：紫微\n財帛宮：武曲化祿")
        assert [t.text for t in tokens] == ["命宮", "紫微", "\n", "財帛宮", "武曲", "化祿"]
        assert tokens[3].category == TermCategory.LABEL

    def test_flow_keyword_falls_through(self):
        tokens = parse_label_pair("會照：天府")
        assert tokens == [
            Token(text="會照", category=TermCategory.FLOW),
            Token.plain("："),
            Token(text="天府", category=TermCategory.IMPERIAL_STAR),
        ]

    def test_custom_suffixes(self):
        registry = TermRegistry.from_dict({"pattern_suffixes": ["式"]})
        assert is_pattern_label("新式", registry)
        assert not is_pattern_label("新格", registry)


# =============================================================================
# BRACKET PHRASES
# =============================================================================

class TestParseBrackets:

    def test_whitelisted_phrase(self):
        assert parse_brackets("「三奇加會格」") == [Token.pattern("三奇加會格", False)]

    def test_strict_whitelist(self):
        """Unlisted names stay bracket emphasis even with a pattern suffix."""
        assert parse_brackets("「自創新詞格」") == [
            Token(text="「自創新詞格」", category=TermCategory.BRACKET_PHRASE),
        ]
        assert highlight("「自創新詞格」") == parse_brackets("「自創新詞格」")

    def test_adverse_phrase(self):
        assert parse_brackets("【鈴昌羅紋】") == [Token.pattern("鈴昌羅紋", True)]

    def test_inner_whitespace_trimmed(self):
        assert parse_brackets("「 三奇加會 」") == [Token.pattern("三奇加會", False)]

    def test_phrase_inside_sentence(self):
        tokens = parse_brackets("見【羊陀夾忌】於命宮")
        assert tokens == [
            Token.plain("見"),
            Token(text="【羊陀夾忌】", category=TermCategory.BRACKET_PHRASE),
            Token.plain("於命宮"),
        ]

    def test_plain_segments_tokenized(self):
        tokens = parse_brackets("紫微坐命「重點」化祿")
        assert categories(tokens) == [
            TermCategory.IMPERIAL_STAR,
            None,
            TermCategory.BRACKET_PHRASE,
            TermCategory.OPPORTUNITY,
        ]

    def test_unterminated_bracket(self):
        tokens = parse_brackets("「三奇加會格")
        assert tokens == [
            Token(text="「", category=TermCategory.BRACKET_GLYPH),
            Token.pattern("三奇加會格", False),
        ]

    def test_no_brackets(self):
        assert parse_brackets("紫微") == [Token(text="紫微", category=TermCategory.IMPERIAL_STAR)]


# =============================================================================
# HIGHLIGHT
# =============================================================================

class TestHighlight:

    def test_empty(self):
        assert highlight("") == []

    def test_label_on_each_line(self):
        tokens = highlight("開場白\n事業宮：紫微")
        assert [t.text for t in tokens] == ["開場白", "\n", "事業宮", "紫微"]
        assert tokens[2].category == TermCategory.LABEL

    def test_lines_without_labels_keep_text(self):
        text = "武曲化忌入命\n見【擎羊】"
        tokens = highlight(text)
        assert "".join(t.text for t in tokens) == text

    @pytest.mark.parametrize("text", ["「", "」", "：", "::", "三奇加會格：", "【】", "「」「"])
    def test_degenerate_inputs(self, text):
        tokens = highlight(text)
        assert isinstance(tokens, list)
