"""
Zi Wei Markup - Text Preprocessor and Question Extractor

Cleans a raw model message before block splitting:
1. Leading system directive ("**【系統設定：..." up to the line break)
2. Role declaration lines ("角色:" / "Role:")
3. Embedded "[System Context]" blocks
4. Bold markers
5. ASCII arrows -> Unicode arrows
6. Split off the trailing recommended follow-up question block

Nothing here raises: absent markers simply leave the text unchanged.
"""
from __future__ import annotations
import logging
import re
from typing import List, Optional, Tuple

from .constants import (
    SYSTEM_DIRECTIVE_LABELS,
    ROLE_LABELS,
    SYSTEM_CONTEXT_MARKER,
    BOLD_MARKER,
    ASCII_ARROW,
    UNICODE_ARROW,
    QUESTION_HEADERS,
    QUESTION_BULLETS,
    MIN_QUESTION_LENGTH,
    MAX_SUGGESTED_QUESTIONS,
    DEFAULT_QUESTIONS,
    ANALYSIS_TRIGGER_PREFIX,
    ATTACHED_FILE_MARKER,
    ATTACHED_FILE_PLACEHOLDER,
    CHART_HINT_WORDS,
    CHART_MIN_LENGTH,
)
from .types import ExtractionResult

logger = logging.getLogger(__name__)


def _alternation(words) -> str:
    return "|".join(re.escape(w) for w in words)


# =============================================================================
# PATTERNS
# =============================================================================

SYSTEM_DIRECTIVE_RE = re.compile(
    r"^\*\*【(?:" + _alternation(SYSTEM_DIRECTIVE_LABELS) + r")[:：][\s\S]*?(?=\n)"
)

# Bold markers may wrap the role label ("**角色:** ...")
ROLE_LINE_RE = re.compile(
    r"^(?:\*\*)*(?:" + _alternation(ROLE_LABELS) + r")(?:\*\*)*[:：][\s\S]*?\n",
    re.MULTILINE,
)

SYSTEM_CONTEXT_RE = re.compile(re.escape(SYSTEM_CONTEXT_MARKER) + r"[\s\S]*?\n")

QUESTION_HEADER_RE = re.compile(
    "|".join(r"##\s*❓\s*" + re.escape(h) for h in QUESTION_HEADERS)
)

QUESTION_BULLET_RE = re.compile(r"^[" + re.escape("".join(QUESTION_BULLETS)) + r"]\s*")

ATTACHED_FILE_RE = re.compile(re.escape(ATTACHED_FILE_MARKER) + r"[\s\S]*")


# =============================================================================
# CLEANING
# =============================================================================

def strip_directives(text: str) -> str:
    """Apply cleaning steps 1-5 once."""
    t = SYSTEM_DIRECTIVE_RE.sub("", text, count=1)
    t = ROLE_LINE_RE.sub("", t)
    t = SYSTEM_CONTEXT_RE.sub("", t)
    t = t.replace(BOLD_MARKER, "")
    t = t.replace(ASCII_ARROW, UNICODE_ARROW)
    return t


def split_question_block(text: str) -> Tuple[str, Optional[str]]:
    """
    Split text at the first question header.

    Returns (body, block). block is None when no header is present and runs
    up to a second header if there is one.
    """
    parts = QUESTION_HEADER_RE.split(text)
    if len(parts) == 1:
        return text, None
    return parts[0], parts[1]


def extract_questions(block: str) -> List[str]:
    """
    Parse a question block into plain questions.

    Keeps lines starting with a bullet (*, ❖, -), strips the bullet, drops
    anything shorter than MIN_QUESTION_LENGTH characters.
    """
    questions = []
    for line in block.split("\n"):
        line = line.strip()
        if not line.startswith(QUESTION_BULLETS):
            continue
        question = QUESTION_BULLET_RE.sub("", line).strip()
        if len(question) >= MIN_QUESTION_LENGTH:
            questions.append(question)
    return questions


def preprocess_markdown(text: str) -> ExtractionResult:
    """
    Clean a raw model message and extract its follow-up questions.

    Args:
        text: Raw message text, possibly a partial stream prefix

    Returns:
        ExtractionResult with the trimmed body and questions in source order.
        Running this again on cleaned_text returns the same cleaned_text.
    """
    if not text:
        return ExtractionResult(cleaned_text="", extracted_questions=[])

    body, block = split_question_block(strip_directives(text))
    questions = extract_questions(block) if block is not None else []
    body = body.strip()

    # A removal can expose a new directive (e.g. "*" + context block + "*角色:"),
    # so clean until the body stops changing. Every change shortens it.
    while True:
        cleaned = split_question_block(strip_directives(body))[0].strip()
        if cleaned == body:
            break
        body = cleaned

    logger.debug(
        "Preprocessed message: %d -> %d characters, %d questions",
        len(text), len(body), len(questions),
    )
    return ExtractionResult(cleaned_text=body, extracted_questions=questions)


def suggested_questions(result: ExtractionResult, limit: int = MAX_SUGGESTED_QUESTIONS) -> List[str]:
    """Questions to offer after a message: extracted ones capped, else the defaults."""
    if result.extracted_questions:
        return result.extracted_questions[:limit]
    return DEFAULT_QUESTIONS[:limit]


# =============================================================================
# USER MESSAGES
# =============================================================================

def display_user_message(content: str) -> Optional[str]:
    """
    Text to show for a user message, or None for internal trigger messages.

    An inlined chart file is collapsed to a short placeholder.
    """
    if content.startswith(ANALYSIS_TRIGGER_PREFIX) or SYSTEM_CONTEXT_MARKER in content:
        return None
    return ATTACHED_FILE_RE.sub(ATTACHED_FILE_PLACEHOLDER, content).strip()


def is_chart_text(text: str) -> bool:
    """Loose check that pasted text is a chart."""
    return any(word in text for word in CHART_HINT_WORDS) or len(text) > CHART_MIN_LENGTH
