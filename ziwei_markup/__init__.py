# Zi Wei Markup
# Term recognition and tagging for streamed Zi Wei Dou Shu analysis text

from .types import (
    TermCategory,
    Token,
    ExtractionResult,
    LabelPair,
    Block,
    BlockKind,
    RenderedMessage,
)

from .registry import (
    TermRegistry,
    default_registry,
)

from .tokenizer import (
    tokenize,
    classify_term,
    detokenize,
    CATEGORY_PRECEDENCE,
)

from .parser import (
    highlight,
    parse_label_pair,
    parse_brackets,
    match_label_pair,
    classify_label,
    is_pattern_label,
)

from .preprocess import (
    preprocess_markdown,
    extract_questions,
    suggested_questions,
    display_user_message,
    is_chart_text,
)

from .blocks import (
    split_blocks,
    render_blocks,
    render_message,
)

__all__ = [
    # Types
    "TermCategory",
    "Token",
    "ExtractionResult",
    "LabelPair",
    "Block",
    "BlockKind",
    "RenderedMessage",
    # Registry
    "TermRegistry",
    "default_registry",
    # Tokenizer
    "tokenize",
    "classify_term",
    "detokenize",
    "CATEGORY_PRECEDENCE",
    # Parsers
    "highlight",
    "parse_label_pair",
    "parse_brackets",
    "match_label_pair",
    "classify_label",
    "is_pattern_label",
    # Preprocessing
    "preprocess_markdown",
    "extract_questions",
    "suggested_questions",
    "display_user_message",
    "is_chart_text",
    # Rendering
    "split_blocks",
    "render_blocks",
    "render_message",
]
