"""
Tests for the master tokenizer.

Lossless tokenization, maximal munch, and the category precedence used
when a literal sits in more than one table.
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from ziwei_markup import (
    CATEGORY_PRECEDENCE,
    TermCategory,
    TermRegistry,
    Token,
    classify_term,
    default_registry,
    detokenize,
    tokenize,
)


# Deterministic sample of analysis text (no randomness)
SAMPLE_TEXTS = [
    "",
    "hello world",
    "命宮坐紫微天府，遷移宮七殺",
    "武曲化忌入夫妻宮，忌沖命宮，風險偏高",
    "大限命宮見擎羊陀羅，形成羊陀夾命格",
    "【格局】三奇加會格 → 權祿巡逢",
    "判斷：機率極大會有變動",
    "祿入->官祿宮",
    "「未閉合的括號",
    "天機化忌、太陰化忌、文昌化忌",
    "紅鸞天喜大耗咸池",
    "機率極",
    "\n\n  \t",
]


# =============================================================================
# LOSSLESSNESS
# =============================================================================

@pytest.mark.parametrize("text", SAMPLE_TEXTS)
def test_tokenize_is_lossless(text):
    assert detokenize(tokenize(text)) == text


def test_every_prefix_is_lossless():
    """Streamed prefixes never break the scanner."""
    text = "武曲化忌入命，形成雙忌夾命格【風險】"
    for end in range(len(text) + 1):
        prefix = text[:end]
        assert detokenize(tokenize(prefix)) == prefix


def test_all_literals_lossless():
    registry = default_registry()
    text = "|".join(registry.match_order)
    assert detokenize(tokenize(text, registry)) == text


def test_empty_input():
    assert tokenize("") == []


def test_plain_runs_are_merged():
    tokens = tokenize("今年紫微入命")
    assert [t.text for t in tokens] == ["今年", "紫微", "入命"]
    assert tokens[0].is_plain
    assert tokens[1].category == TermCategory.IMPERIAL_STAR
    assert tokens[2].is_plain


def test_no_terms_single_token():
    assert tokenize("plain text only") == [Token.plain("plain text only")]


# =============================================================================
# MAXIMAL MUNCH
# =============================================================================

class TestLongestMatch:

    def test_pattern_compound_not_split(self):
        """七殺 is an action star; 七殺朝斗格 must stay whole."""
        tokens = tokenize("七殺朝斗格")
        assert len(tokens) == 1
        assert tokens[0].category == TermCategory.PATTERN_NAME
        assert tokens[0].text == "七殺朝斗格"

    def test_debt_compound_not_split(self):
        tokens = tokenize("文昌化忌")
        assert tokens == [Token(text="文昌化忌", category=TermCategory.DEBT)]

    def test_flow_compound(self):
        tokens = tokenize("沖射")
        assert tokens == [Token(text="沖射", category=TermCategory.FLOW)]

    def test_truncated_compound_mid_stream(self):
        """A partial compound at the end of a stream prefix is tokenized by what is complete."""
        tokens = tokenize("武曲化")
        assert tokens[0] == Token(text="武曲", category=TermCategory.ACTION_STAR)
        assert tokens[1] == Token.plain("化")

    def test_partial_literal_is_plain(self):
        assert tokenize("機率極") == [Token.plain("機率極")]


# =============================================================================
# CLASSIFICATION
# =============================================================================

class TestClassification:

    @pytest.mark.parametrize("literal,category", [
        ("化忌", TermCategory.DEBT),
        ("化祿", TermCategory.OPPORTUNITY),
        ("化權", TermCategory.AUTHORITY),
        ("化科", TermCategory.REPUTATION),
        ("紅鸞", TermCategory.ROMANCE_STAR),
        ("紫微", TermCategory.IMPERIAL_STAR),
        ("破軍", TermCategory.ACTION_STAR),
        ("天梁", TermCategory.INTELLECT_STAR),
        ("巨門", TermCategory.DARK_STAR),
        ("擎羊", TermCategory.ADVERSE_STAR),
        ("祿存", TermCategory.FAVORABLE_STAR),
        ("會照", TermCategory.FLOW),
        ("→", TermCategory.FLOW),
        ("血光", TermCategory.WARNING),
        ("機率極大", TermCategory.VERDICT),
        ("判斷：", TermCategory.VERDICT),
        ("【", TermCategory.BRACKET_GLYPH),
        ("」", TermCategory.BRACKET_GLYPH),
    ])
    def test_category(self, literal, category):
        token = classify_term(literal)
        assert token.category == category
        assert token.is_adverse is None

    def test_romance_before_adverse_star(self):
        """大耗 is in both the romance and adverse star tables."""
        assert classify_term("大耗").category == TermCategory.ROMANCE_STAR

    def test_pattern_before_debt(self):
        """天機化忌 is a debt marker and a listed adverse pattern."""
        token = classify_term("天機化忌")
        assert token.category == TermCategory.PATTERN_NAME
        assert token.is_adverse is True

    def test_favorable_pattern(self):
        token = classify_term("三奇加會格")
        assert token == Token.pattern("三奇加會格", False)

    def test_adverse_pattern_flag(self):
        assert classify_term("鈴昌羅紋").is_adverse is True

    def test_unknown_literal_is_plain(self):
        assert classify_term("不存在").is_plain

    def test_flow_before_star(self):
        registry = TermRegistry(terms={"flow": ["X化"], "debt": ["X化"]})
        assert classify_term("X化", registry).category == TermCategory.FLOW

    def test_pattern_before_flow(self):
        registry = TermRegistry(terms={"flow": ["AB"], "patternName": ["AB"]})
        token = classify_term("AB", registry)
        assert token.category == TermCategory.PATTERN_NAME
        assert token.is_adverse is False

    def test_warning_before_verdict(self):
        registry = TermRegistry(terms={"verdict": ["CD"], "warning": ["CD"]})
        assert classify_term("CD", registry).category == TermCategory.WARNING

    def test_adverse_star_before_favorable(self):
        registry = TermRegistry(terms={"favorableStar": ["EF"], "adverseStar": ["EF"]})
        assert classify_term("EF", registry).category == TermCategory.ADVERSE_STAR

    @pytest.mark.parametrize("higher,lower", list(zip(
        (TermCategory.PATTERN_NAME,) + CATEGORY_PRECEDENCE,
        CATEGORY_PRECEDENCE,
    )), ids=lambda c: c.value)
    def test_adjacent_categories_ordered(self, higher, lower):
        """Each category wins over the one ranked just below it."""
        registry = TermRegistry(terms={lower.value: ["XY"], higher.value: ["XY"]})
        assert classify_term("XY", registry).category == higher

    def test_full_precedence_chain(self):
        order = (TermCategory.PATTERN_NAME,) + CATEGORY_PRECEDENCE
        for i, category in enumerate(order):
            registry = TermRegistry(terms={c.value: ["XY"] for c in order[i:]})
            assert classify_term("XY", registry).category == category


def test_sentence_tokens():
    tokens = tokenize("武曲化忌入夫妻宮，忌沖命宮")
    tagged = [(t.text, t.category) for t in tokens if not t.is_plain]
    assert tagged == [
        ("武曲化忌", TermCategory.DEBT),
        ("忌沖", TermCategory.PATTERN_NAME),
    ]


def test_custom_registry_isolated():
    """An alternate dictionary changes results without touching the default."""
    registry = TermRegistry(terms={"warning": ["紫微"]})
    assert tokenize("紫微", registry) == [Token(text="紫微", category=TermCategory.WARNING)]
    assert tokenize("紫微") == [Token(text="紫微", category=TermCategory.IMPERIAL_STAR)]


def test_empty_registry_is_not_replaced():
    registry = TermRegistry(terms={})
    assert len(registry) == 0
    assert tokenize("紫微化忌", registry) == [Token.plain("紫微化忌")]
