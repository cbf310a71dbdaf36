"""
Zi Wei Markup - Master Tokenizer

Splits a text run into Tokens with a single left-to-right scan:
at each position the longest dictionary literal wins; characters that
start no literal accumulate into passthrough tokens.

Tokenization is lossless: "".join(t.text for t in tokens) == text.
"""
from __future__ import annotations
from typing import List, Optional, Tuple

from .registry import TermRegistry, default_registry
from .types import TermCategory, Token


# Classification precedence for a matched literal. Swapping entries changes
# which category wins for literals listed in more than one table.
CATEGORY_PRECEDENCE: Tuple[TermCategory, ...] = (
    TermCategory.FLOW,
    TermCategory.WARNING,
    TermCategory.VERDICT,
    TermCategory.DEBT,
    TermCategory.OPPORTUNITY,
    TermCategory.AUTHORITY,
    TermCategory.REPUTATION,
    TermCategory.ROMANCE_STAR,
    TermCategory.IMPERIAL_STAR,
    TermCategory.ACTION_STAR,
    TermCategory.INTELLECT_STAR,
    TermCategory.DARK_STAR,
    TermCategory.ADVERSE_STAR,
    TermCategory.FAVORABLE_STAR,
    TermCategory.BRACKET_GLYPH,
)


def classify_term(literal: str, registry: Optional[TermRegistry] = None) -> Token:
    """
    Classify an isolated literal.

    Pattern whitelist first (with its adverse flag), then CATEGORY_PRECEDENCE.
    A literal in no table becomes a passthrough token.
    """
    if registry is None:
        registry = default_registry()

    if registry.is_pattern(literal):
        return Token.pattern(literal, registry.is_adverse_pattern(literal))

    for category in CATEGORY_PRECEDENCE:
        if registry.is_member(category, literal):
            return Token(text=literal, category=category)

    return Token.plain(literal)


def tokenize(text: str, registry: Optional[TermRegistry] = None) -> List[Token]:
    """
    Tokenize a text run against the term dictionary.

    Args:
        text: Any string, including partial text from a stream
        registry: Term dictionary (defaults to the built-in one)

    Returns:
        Tokens in source order; adjacent unmatched characters are merged
        into one passthrough token.
    """
    if registry is None:
        registry = default_registry()
    tokens: List[Token] = []
    plain_start = 0
    i = 0
    n = len(text)

    while i < n:
        literal = registry.longest_match(text, i)
        if literal is None:
            i += 1
            continue
        if plain_start < i:
            tokens.append(Token.plain(text[plain_start:i]))
        tokens.append(classify_term(literal, registry))
        i += len(literal)
        plain_start = i

    if plain_start < n:
        tokens.append(Token.plain(text[plain_start:]))

    return tokens


def detokenize(tokens: List[Token]) -> str:
    """Concatenate token texts."""
    return "".join(t.text for t in tokens)
