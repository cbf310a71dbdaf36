"""
Zi Wei Markup - Type Definitions

Dataclasses for tokens, extraction results and rendered blocks.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any


class TermCategory(Enum):
    """Semantic category of a recognised span."""
    DEBT = "debt"
    OPPORTUNITY = "opportunity"
    AUTHORITY = "authority"
    REPUTATION = "reputation"
    ADVERSE_STAR = "adverseStar"
    FAVORABLE_STAR = "favorableStar"
    ROMANCE_STAR = "romanceStar"
    IMPERIAL_STAR = "imperialStar"
    ACTION_STAR = "actionStar"
    INTELLECT_STAR = "intellectStar"
    DARK_STAR = "darkStar"
    FLOW = "flow"
    WARNING = "warning"
    VERDICT = "verdict"
    BRACKET_GLYPH = "bracketGlyph"
    PATTERN_NAME = "patternName"
    # Emphasis produced by the parsers, never a dictionary category
    LABEL = "label"
    BRACKET_PHRASE = "bracketPhrase"


# Categories a dictionary may populate (LABEL and BRACKET_PHRASE are parser-only)
DICTIONARY_CATEGORIES = tuple(
    c for c in TermCategory
    if c not in (TermCategory.LABEL, TermCategory.BRACKET_PHRASE)
)


@dataclass(frozen=True)
class Token:
    """
    A span of analysis text with its semantic category.

    category is None for literal passthrough text. is_adverse is only set
    for PATTERN_NAME tokens.
    """
    text: str
    category: Optional[TermCategory] = None
    is_adverse: Optional[bool] = None

    @classmethod
    def plain(cls, text: str) -> "Token":
        """Create a passthrough token."""
        return cls(text=text)

    @classmethod
    def pattern(cls, text: str, adverse: bool) -> "Token":
        """Create a pattern-name token."""
        return cls(text=text, category=TermCategory.PATTERN_NAME, is_adverse=adverse)

    @property
    def is_plain(self) -> bool:
        return self.category is None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"text": self.text}
        if self.category is not None:
            d["category"] = self.category.value
        if self.is_adverse is not None:
            d["isAdverse"] = self.is_adverse
        return d

    def __str__(self) -> str:
        return self.text


@dataclass
class ExtractionResult:
    """
    Result of preprocessing one message.

    cleaned_text is the body with directives and the question block removed;
    extracted_questions keeps the source order and is not capped.
    """
    cleaned_text: str = ""
    extracted_questions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cleanedText": self.cleaned_text,
            "extractedQuestions": list(self.extracted_questions),
        }


@dataclass(frozen=True)
class LabelPair:
    """A "label：content" line split out of a text run."""
    label: str          # Trimmed label, qualifiers kept
    content: str        # Remainder of the label line
    rest: str = ""      # Text after the label line (starts with a newline)


class BlockKind(Enum):
    """Block-level unit of a cleaned message."""
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "list_item"
    CODE = "code"
    RULE = "rule"
    TABLE_CELL = "table_cell"
    HTML = "html"


@dataclass
class Block:
    """
    One block of a rendered message.

    text is the block content without its markdown marker (heading hashes,
    list bullet, quote marker). tokens is filled by the renderer.
    """
    kind: BlockKind
    text: str
    level: int = 0                  # Heading level or list nesting depth
    marker: str = ""                # List bullet, heading hashes or code fence
    quote_depth: int = 0            # Number of enclosing blockquotes
    tokens: List[Token] = field(default_factory=list)

    @property
    def highlighted(self) -> bool:
        """Whether the block text goes through the term parsers."""
        return self.kind in (BlockKind.PARAGRAPH, BlockKind.LIST_ITEM)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "text": self.text,
            "level": self.level,
            "quoteDepth": self.quote_depth,
            "tokens": [t.to_dict() for t in self.tokens],
        }


@dataclass
class RenderedMessage:
    """Full pipeline output for one model message."""
    extraction: ExtractionResult
    blocks: List[Block] = field(default_factory=list)

    @property
    def cleaned_text(self) -> str:
        return self.extraction.cleaned_text

    @property
    def questions(self) -> List[str]:
        return self.extraction.extracted_questions

    @property
    def tokens(self) -> List[Token]:
        """All block tokens in document order."""
        return [t for block in self.blocks for t in block.tokens]

    def to_dict(self) -> Dict[str, Any]:
        d = self.extraction.to_dict()
        d["blocks"] = [b.to_dict() for b in self.blocks]
        return d
