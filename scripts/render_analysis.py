#!/usr/bin/env python3
"""
Zi Wei Analysis Render CLI

Runs a model message through the markup pipeline and prints the tagged
token stream.

Usage:
  python scripts/render_analysis.py --text "三奇加會格：命宮三方四正齊聚"
  python scripts/render_analysis.py --file reply.md --format json
  python scripts/render_analysis.py --file reply.md --terms my_terms.yaml
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import yaml

from ziwei_markup import (
    RenderedMessage,
    TermRegistry,
    Token,
    default_registry,
    render_message,
    suggested_questions,
)

logger = logging.getLogger("ziwei_render")


def format_token(token: Token) -> str:
    """Format one token for text output: plain text as-is, tagged text marked."""
    if token.category is None:
        return token.text
    tag = token.category.value
    if token.is_adverse:
        tag += "!"
    return f"[{tag}:{token.text}]"


def format_text_output(rendered: RenderedMessage, max_questions: int) -> str:
    """Human-readable rendering: one line group per block, then questions."""
    lines = []
    for block in rendered.blocks:
        body = "".join(format_token(t) for t in block.tokens)
        prefix = f"{block.kind.value}"
        if block.level:
            prefix += f"({block.level})"
        lines.append(f"{prefix}: {body}")

    questions = suggested_questions(rendered.extraction, limit=max_questions)
    if questions:
        lines.append("")
        lines.append("=== QUESTIONS ===")
        for q in questions:
            lines.append(f"  - {q}")
    return "\n".join(lines)


def format_json_output(rendered: RenderedMessage, max_questions: int) -> str:
    """JSON rendering of blocks, tokens and questions."""
    output = rendered.to_dict()
    output["suggestedQuestions"] = suggested_questions(rendered.extraction, limit=max_questions)
    return json.dumps(output, ensure_ascii=False, indent=2)


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(
        description="Render Zi Wei analysis text as a tagged token stream",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/render_analysis.py --text "三奇加會格：命宮三方四正齊聚"
  python scripts/render_analysis.py --file reply.md --format json

Text output marks tagged spans as [category:text]; a trailing "!" on
patternName marks an adverse configuration.
        """
    )

    input_group = p.add_mutually_exclusive_group(required=True)
    input_group.add_argument("--text", help="Message text")
    input_group.add_argument("--file", help="Read message text from file (UTF-8)")

    p.add_argument(
        "--terms",
        help="YAML file overriding the built-in term tables"
    )
    p.add_argument(
        "--format",
        default="text",
        choices=["text", "json"],
        help="Output format (default: text)"
    )
    p.add_argument(
        "--max-questions",
        type=int,
        default=5,
        dest="max_questions",
        help="Maximum follow-up questions to show (default: 5)"
    )
    p.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr"
    )

    return p.parse_args(argv)


def run(argv: Optional[List[str]] = None) -> int:
    """Entry point returning an exit code."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    if args.file:
        try:
            text = Path(args.file).read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Cannot read %s: %s", args.file, e)
            return 1
    else:
        text = args.text

    if args.terms:
        try:
            registry = TermRegistry.from_yaml(args.terms)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error("Invalid term configuration %s: %s", args.terms, e)
            return 1
    else:
        registry = default_registry()

    rendered = render_message(text, registry)

    if args.format == "json":
        print(format_json_output(rendered, args.max_questions))
    else:
        print(format_text_output(rendered, args.max_questions))
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
