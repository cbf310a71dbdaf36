"""
Zi Wei Markup - Term Dictionary Registry

Build-once, read-only dictionary of every recognised literal:
1. Per-category membership sets for classifying an isolated literal
2. A character trie over the union of all literals for maximal-munch scanning
3. The global match order (longest literal first, ties in source order)

The registry is passed explicitly to every parsing entry point;
default_registry() returns the shared instance built from constants.py.
"""
from __future__ import annotations
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple, Union

from .constants import (
    DEFAULT_TERMS,
    ADVERSE_PATTERNS,
    PATTERN_RISK_GLYPHS,
    LABEL_RISK_GLYPHS,
    PATTERN_SUFFIXES,
)
from .types import TermCategory, DICTIONARY_CATEGORIES

logger = logging.getLogger(__name__)

# Trie node key marking the end of a literal (never a real character)
_END = ""

CategoryKey = Union[str, TermCategory]


def _parse_category(key: CategoryKey) -> TermCategory:
    """Resolve a category given by enum member or by value name."""
    if isinstance(key, TermCategory):
        category = key
    else:
        try:
            category = TermCategory(key)
        except ValueError:
            category = None
    if category is None or category not in DICTIONARY_CATEGORIES:
        valid = ", ".join(c.value for c in DICTIONARY_CATEGORIES)
        raise ValueError(f"Unknown term category '{key}'.\n\nValid categories: {valid}")
    return category


def _clean_literals(name: str, values: Iterable[Any]) -> Tuple[str, ...]:
    """Validate literals and drop duplicates, keeping first occurrence."""
    if isinstance(values, str) or not isinstance(values, Iterable):
        raise ValueError(f"Terms for '{name}' must be a list of strings, got {type(values).__name__}")
    seen = set()
    result = []
    for value in values:
        if not isinstance(value, str) or not value:
            raise ValueError(f"Invalid literal {value!r} in '{name}' (must be a non-empty string)")
        if value not in seen:
            seen.add(value)
            result.append(value)
    return tuple(result)


class TermRegistry:
    """
    Immutable term dictionary shared by all parsing calls.

    Args:
        terms: Category (enum or value name) -> literals. Categories that are
            absent have no literals.
        adverse_patterns: Pattern names always flagged adverse. They are also
            added to the pattern whitelist.
        risk_glyphs: Ideograms flagging an unlisted pattern name as adverse.
        label_risk_glyphs: Ideograms promoting a label-pair label to a pattern.
        pattern_suffixes: Suffixes promoting a short label to a pattern.

    Raises:
        ValueError: On an unknown category or a malformed literal.
    """

    def __init__(
        self,
        terms: Mapping[CategoryKey, Iterable[str]],
        adverse_patterns: Iterable[str] = (),
        risk_glyphs: Iterable[str] = PATTERN_RISK_GLYPHS,
        label_risk_glyphs: Iterable[str] = LABEL_RISK_GLYPHS,
        pattern_suffixes: Iterable[str] = PATTERN_SUFFIXES,
    ):
        if not isinstance(terms, Mapping):
            raise ValueError(f"Terms must be a mapping of category -> literals, got {type(terms).__name__}")

        literals: Dict[TermCategory, Tuple[str, ...]] = {c: () for c in DICTIONARY_CATEGORIES}
        for key, values in terms.items():
            category = _parse_category(key)
            literals[category] = _clean_literals(category.value, values)

        adverse = _clean_literals("adverse_patterns", adverse_patterns)
        patterns = literals[TermCategory.PATTERN_NAME]
        literals[TermCategory.PATTERN_NAME] = patterns + tuple(p for p in adverse if p not in patterns)

        self._literals = literals
        self._members: Dict[TermCategory, FrozenSet[str]] = {
            c: frozenset(values) for c, values in literals.items()
        }
        self._adverse_patterns = frozenset(adverse)
        self._risk_glyphs = _clean_literals("risk_glyphs", risk_glyphs)
        self._label_risk_glyphs = _clean_literals("label_risk_glyphs", label_risk_glyphs)
        self._pattern_suffixes = _clean_literals("pattern_suffixes", pattern_suffixes)

        self._match_order = self._build_match_order()
        self._trie = self._build_trie(self._match_order)

        logger.debug(
            "Built term registry: %d literals, longest %d characters",
            len(self._match_order),
            len(self._match_order[0]) if self._match_order else 0,
        )

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def _build_match_order(self) -> Tuple[str, ...]:
        seen = set()
        union: List[str] = []
        for category in DICTIONARY_CATEGORIES:
            for literal in self._literals[category]:
                if literal not in seen:
                    seen.add(literal)
                    union.append(literal)
        # sorted() is stable, so equal lengths keep category/list order
        return tuple(sorted(union, key=len, reverse=True))

    @staticmethod
    def _build_trie(literals: Iterable[str]) -> Dict[str, Any]:
        root: Dict[str, Any] = {}
        for literal in literals:
            node = root
            for ch in literal:
                node = node.setdefault(ch, {})
            node[_END] = True
        return root

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "TermRegistry":
        """
        Create from a configuration mapping.

        Keys: terms, adverse_patterns, risk_glyphs, label_risk_glyphs,
        pattern_suffixes. Missing keys (and categories missing from terms)
        fall back to the built-in tables.
        """
        if not isinstance(d, Mapping):
            raise ValueError(f"Term configuration must be a mapping, got {type(d).__name__}")

        unknown = set(d) - {"terms", "adverse_patterns", "risk_glyphs", "label_risk_glyphs", "pattern_suffixes"}
        if unknown:
            raise ValueError(f"Unknown term configuration keys: {', '.join(sorted(unknown))}")

        overrides = d.get("terms") or {}
        if not isinstance(overrides, Mapping):
            raise ValueError(f"'terms' must be a mapping of category -> literals, got {type(overrides).__name__}")

        terms: Dict[CategoryKey, Iterable[str]] = dict(DEFAULT_TERMS)
        for key, values in overrides.items():
            terms[_parse_category(key).value] = values

        return cls(
            terms=terms,
            adverse_patterns=d.get("adverse_patterns", ADVERSE_PATTERNS),
            risk_glyphs=d.get("risk_glyphs", PATTERN_RISK_GLYPHS),
            label_risk_glyphs=d.get("label_risk_glyphs", LABEL_RISK_GLYPHS),
            pattern_suffixes=d.get("pattern_suffixes", PATTERN_SUFFIXES),
        )

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "TermRegistry":
        """Load from YAML file."""
        import yaml
        with open(path, encoding="utf-8") as f:
            d = yaml.safe_load(f)
        logger.debug("Loaded term configuration from %s", path)
        return cls.from_dict(d or {})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a configuration mapping accepted by from_dict."""
        adverse = self._adverse_patterns
        return {
            "terms": {
                c.value: [
                    t for t in values
                    if not (c is TermCategory.PATTERN_NAME and t in adverse)
                ]
                for c, values in self._literals.items()
            },
            "adverse_patterns": [
                t for t in self._literals[TermCategory.PATTERN_NAME] if t in adverse
            ],
            "risk_glyphs": list(self.risk_glyphs),
            "label_risk_glyphs": list(self.label_risk_glyphs),
            "pattern_suffixes": list(self.pattern_suffixes),
        }

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @property
    def match_order(self) -> Tuple[str, ...]:
        """Every literal, longest first."""
        return self._match_order

    @property
    def risk_glyphs(self) -> Tuple[str, ...]:
        """Ideograms flagging an unlisted pattern name as adverse."""
        return self._risk_glyphs

    @property
    def label_risk_glyphs(self) -> Tuple[str, ...]:
        return self._label_risk_glyphs

    @property
    def pattern_suffixes(self) -> Tuple[str, ...]:
        return self._pattern_suffixes

    def literals(self, category: TermCategory) -> Tuple[str, ...]:
        """Literals of one category in source order."""
        return self._literals.get(category, ())

    def is_member(self, category: TermCategory, text: str) -> bool:
        """Exact membership of an isolated literal."""
        members = self._members.get(category)
        return members is not None and text in members

    def is_pattern(self, text: str) -> bool:
        """Strict pattern whitelist membership."""
        return text in self._members[TermCategory.PATTERN_NAME]

    def is_flow(self, text: str) -> bool:
        return text in self._members[TermCategory.FLOW]

    def is_adverse_pattern(self, name: str) -> bool:
        """
        Adverse flag for a pattern name.

        Explicit adverse membership first, then the risk-ideogram heuristic.
        The heuristic is substring based and can flag a favourable name that
        happens to contain one of the glyphs.
        """
        if name in self._adverse_patterns:
            return True
        return any(glyph in name for glyph in self.risk_glyphs)

    def longest_match(self, text: str, start: int = 0) -> Optional[str]:
        """
        Longest literal beginning at text[start], or None.

        A literal cut off by the end of text does not match.
        """
        node = self._trie
        end = -1
        i = start
        n = len(text)
        while i < n:
            node = node.get(text[i])
            if node is None:
                break
            i += 1
            if _END in node:
                end = i
        if end < 0:
            return None
        return text[start:end]

    def __len__(self) -> int:
        return len(self._match_order)

    def __contains__(self, text: object) -> bool:
        return isinstance(text, str) and any(text in m for m in self._members.values())

    def __repr__(self) -> str:
        return f"TermRegistry({len(self)} literals)"


@lru_cache(maxsize=1)
def default_registry() -> TermRegistry:
    """Shared registry built from the built-in tables (built on first use)."""
    return TermRegistry(terms=DEFAULT_TERMS, adverse_patterns=ADVERSE_PATTERNS)
