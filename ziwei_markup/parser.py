"""
Zi Wei Markup - Label-Pair and Bracket-Phrase Parsers

Recursive-descent layer above the master tokenizer:

    highlight -> parse_label_pair -> parse_brackets -> tokenize

parse_label_pair recognises "label：content" lines and recurses into itself
for the content. parse_brackets picks out 「…」 / 【…】 phrases and checks
them strictly against the pattern whitelist. Both fall back to the master
tokenizer, so every call terminates on a strictly shorter string or in
tokenize().
"""
from __future__ import annotations
import re
from typing import List, Optional

from .constants import BRACKET_GLYPHS
from .registry import TermRegistry, default_registry
from .tokenizer import tokenize
from .types import LabelPair, TermCategory, Token


# =============================================================================
# PATTERNS
# =============================================================================

# Label of 2-10 characters, full- or half-width colon, rest of the line
LABEL_PAIR_RE = re.compile(r"^([^\n：:]{2,10})([：:])\s*(.*)")

# Qualifier such as "(大限)" or "（流年）" inside a label
QUALIFIER_RE = re.compile(r"[（(].*?[)）]")

BRACKET_PHRASE_RE = re.compile(r"([「【][^」】]+[」】])")
BRACKET_GLYPH_RE = re.compile("[" + "".join(BRACKET_GLYPHS) + "]")

LINE_BREAK_RE = re.compile(r"(\n)")

MAX_LABEL_LENGTH = 20
SHORT_LABEL_LENGTH = 8


# =============================================================================
# LABEL PAIRS
# =============================================================================

def match_label_pair(text: str, registry: Optional[TermRegistry] = None) -> Optional[LabelPair]:
    """
    Split a run into label, content and rest if it starts with a label line.

    Returns None when the run has no label-pair shape, when the candidate is
    a flow keyword, or when it is blank.
    """
    if registry is None:
        registry = default_registry()
    match = LABEL_PAIR_RE.match(text)
    if not match:
        return None

    candidate = match.group(1)
    if registry.is_flow(candidate) or len(candidate) >= MAX_LABEL_LENGTH:
        return None

    label = candidate.strip()
    if not label:
        return None

    return LabelPair(label=label, content=match.group(3), rest=text[match.end():])


def is_pattern_label(label: str, registry: Optional[TermRegistry] = None) -> bool:
    """
    Decide whether a label names a configuration.

    Checks in order: whitelist (qualifiers removed), risk ideograms in the
    raw label, short label ending in a configuration suffix.
    """
    if registry is None:
        registry = default_registry()
    stripped = QUALIFIER_RE.sub("", label).strip()
    if registry.is_pattern(stripped):
        return True
    if any(glyph in label for glyph in registry.label_risk_glyphs):
        return True
    return len(label) <= SHORT_LABEL_LENGTH and label.endswith(registry.pattern_suffixes)


def classify_label(label: str, registry: Optional[TermRegistry] = None) -> Token:
    """Token for a label-pair label: pattern name or generic label."""
    if registry is None:
        registry = default_registry()
    if is_pattern_label(label, registry):
        return Token.pattern(label, registry.is_adverse_pattern(label))
    return Token(text=label, category=TermCategory.LABEL)


def parse_label_pair(text: str, registry: Optional[TermRegistry] = None) -> List[Token]:
    """
    Tokenize a run, treating a leading "label：content" line specially.

    The label becomes one token; the content is parsed by this function
    again. Text after the label line is parsed the same way. Runs that are
    not label pairs go to parse_brackets unchanged.
    """
    if registry is None:
        registry = default_registry()
    pair = match_label_pair(text, registry)
    if pair is None:
        return parse_brackets(text, registry)

    tokens = [classify_label(pair.label, registry)]
    if pair.content:
        tokens.extend(parse_label_pair(pair.content, registry))
    if pair.rest:
        # rest always starts at the line break ending the label line
        tokens.append(Token.plain(pair.rest[0]))
        if len(pair.rest) > 1:
            tokens.extend(parse_label_pair(pair.rest[1:], registry))
    return tokens


# =============================================================================
# BRACKET PHRASES
# =============================================================================

def parse_brackets(text: str, registry: Optional[TermRegistry] = None) -> List[Token]:
    """
    Tokenize a run containing bracket phrases.

    A bracketed phrase whose inner text is a whitelisted pattern becomes a
    pattern token for the inner text; any other bracketed phrase becomes one
    BRACKET_PHRASE token with its delimiters. Plain segments, and runs
    without a complete bracket phrase, go to the master tokenizer.
    """
    if registry is None:
        registry = default_registry()
    parts = BRACKET_PHRASE_RE.split(text)
    if len(parts) == 1:
        return tokenize(text, registry)

    tokens: List[Token] = []
    for i, part in enumerate(parts):
        if not part:
            continue
        # split() with one group puts captured phrases at odd indexes
        if i % 2 == 0:
            tokens.extend(tokenize(part, registry))
            continue
        inner = BRACKET_GLYPH_RE.sub("", part).strip()
        if registry.is_pattern(inner):
            tokens.append(Token.pattern(inner, registry.is_adverse_pattern(inner)))
        else:
            tokens.append(Token(text=part, category=TermCategory.BRACKET_PHRASE))
    return tokens


# =============================================================================
# ENTRY POINT
# =============================================================================

def highlight(text: str, registry: Optional[TermRegistry] = None) -> List[Token]:
    """
    Tokenize one text run of a rendered block.

    Each line is parsed on its own so a label pair is recognised at the
    start of any line; line breaks are kept as passthrough tokens.
    """
    if registry is None:
        registry = default_registry()
    tokens: List[Token] = []
    for piece in LINE_BREAK_RE.split(text):
        if not piece:
            continue
        if piece == "\n":
            tokens.append(Token.plain(piece))
        else:
            tokens.extend(parse_label_pair(piece, registry))
    return tokens
