"""
Zi Wei Markup - Block Splitting and Message Rendering

Markdown (CommonMark + GFM tables) is parsed with mistune v3 into an AST and
flattened into blocks: headings, paragraphs, list items, code, rules, table
cells and raw HTML. Blockquotes are unwrapped; their blocks record the quote
depth. render_message() runs the full pipeline:

    raw text -> preprocess_markdown -> split_blocks -> highlight per block
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional

import mistune

from .parser import highlight
from .preprocess import preprocess_markdown
from .registry import TermRegistry, default_registry
from .types import Block, BlockKind, RenderedMessage, Token


_markdown = mistune.create_markdown(renderer="ast", plugins=["table"])

# Inline nodes rendered as a line break in flattened text
_BREAK_NODES = ("softbreak", "linebreak")
_TEXT_BLOCKS = ("paragraph", "block_text")


def _inline_text(nodes: Iterable[Dict[str, Any]]) -> str:
    """Flatten inline nodes to their visible text (emphasis, links unwrapped)."""
    parts: List[str] = []
    for node in nodes:
        if node["type"] in _BREAK_NODES:
            parts.append("\n")
        elif "children" in node:
            parts.append(_inline_text(node["children"]))
        else:
            parts.append(node.get("raw", ""))
    return "".join(parts)


def _list_marker(node: Dict[str, Any], index: int) -> str:
    attrs = node.get("attrs", {})
    bullet = node.get("bullet", "")
    if attrs.get("ordered"):
        return f"{attrs.get('start', 1) + index}{bullet}"
    return bullet


class _BlockCollector:
    """Walks a mistune AST and appends blocks in document order."""

    def __init__(self):
        self.blocks: List[Block] = []

    def add(self, kind: BlockKind, text: str, quote_depth: int, **kwargs) -> None:
        self.blocks.append(Block(kind=kind, text=text, quote_depth=quote_depth, **kwargs))

    def walk(self, nodes: Iterable[Dict[str, Any]], quote_depth: int = 0) -> None:
        for node in nodes:
            kind = node["type"]
            if kind in _TEXT_BLOCKS:
                text = _inline_text(node.get("children", [])).strip()
                if text:
                    self.add(BlockKind.PARAGRAPH, text, quote_depth)
            elif kind == "heading":
                level = node.get("attrs", {}).get("level", 1)
                self.add(
                    BlockKind.HEADING,
                    _inline_text(node.get("children", [])).strip(),
                    quote_depth,
                    level=level,
                    marker="#" * level,
                )
            elif kind == "block_code":
                self.add(
                    BlockKind.CODE,
                    node.get("raw", "").rstrip("\n"),
                    quote_depth,
                    marker=node.get("marker", ""),
                )
            elif kind == "thematic_break":
                self.add(BlockKind.RULE, "", quote_depth)
            elif kind == "block_quote":
                self.walk(node.get("children", []), quote_depth + 1)
            elif kind == "list":
                self.walk_list(node, quote_depth)
            elif kind == "table_cell":
                self.add(BlockKind.TABLE_CELL, _inline_text(node.get("children", [])).strip(), quote_depth)
            elif kind == "block_html":
                self.add(BlockKind.HTML, node.get("raw", "").strip(), quote_depth)
            elif "children" in node:
                # table, table_head, table_body, table_row
                self.walk(node["children"], quote_depth)

    def walk_list(self, node: Dict[str, Any], quote_depth: int) -> None:
        depth = node.get("attrs", {}).get("depth", 0)
        for index, item in enumerate(node.get("children", [])):
            children = item.get("children", [])
            lines = [
                _inline_text(child.get("children", [])).strip()
                for child in children
                if child["type"] in _TEXT_BLOCKS
            ]
            text = "\n".join(line for line in lines if line)
            if text:
                self.add(
                    BlockKind.LIST_ITEM,
                    text,
                    quote_depth,
                    level=depth,
                    marker=_list_marker(node, index),
                )
            # Nested lists, code and quotes inside the item follow it
            self.walk([c for c in children if c["type"] not in _TEXT_BLOCKS], quote_depth)


def split_blocks(text: str) -> List[Block]:
    """
    Split cleaned message text into blocks.

    A paragraph keeps its soft line breaks. A list item's paragraphs are
    joined with line breaks and its nested lists follow it one level deeper.
    An unclosed code fence runs to the end of the text. Empty list items are
    dropped.
    """
    if not text.strip():
        return []
    collector = _BlockCollector()
    collector.walk(_markdown(text))
    return collector.blocks


def render_blocks(blocks: List[Block], registry: Optional[TermRegistry] = None) -> List[Block]:
    """Fill block tokens in place; only paragraphs and list items are highlighted."""
    if registry is None:
        registry = default_registry()
    for block in blocks:
        if block.highlighted:
            block.tokens = highlight(block.text, registry)
        elif block.text:
            block.tokens = [Token.plain(block.text)]
        else:
            block.tokens = []
    return blocks


def render_message(text: str, registry: Optional[TermRegistry] = None) -> RenderedMessage:
    """
    Run the whole pipeline on a (possibly partial) model message.

    Safe to call again on every streamed update; no state is kept between
    calls.
    """
    if registry is None:
        registry = default_registry()
    extraction = preprocess_markdown(text)
    blocks = render_blocks(split_blocks(extraction.cleaned_text), registry)
    return RenderedMessage(extraction=extraction, blocks=blocks)
