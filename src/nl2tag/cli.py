"""Command-line interface for nl2tag."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

from nl2tag.config import Settings
from nl2tag.converter import convert
from nl2tag.models import ConfigurationError, ListKind, Wrapper

logger = logging.getLogger(__name__)


def _tag_list(value: str) -> frozenset[str]:
    return frozenset(name.strip().lower() for name in value.split(",") if name.strip())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nl2tag",
        description="Convert new lines in HTML-bearing text to <br>, <p> or <li> markup.",
    )
    parser.add_argument(
        "mode",
        choices=[w.value for w in Wrapper],
        help="Wrapper to produce",
    )
    parser.add_argument(
        "-i", "--input",
        default=None,
        help="Input file path (default: stdin)",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output file path (default: stdout)",
    )
    parser.add_argument(
        "--list-kind",
        choices=[k.value for k in ListKind],
        default="ul",
        help="List element for li mode (default: ul)",
    )
    parser.add_argument(
        "--no-situational-break",
        action="store_true",
        help="Do not add <br> for new lines inside open tags",
    )
    parser.add_argument(
        "--no-collapse",
        action="store_true",
        help="Keep repeated <br> and empty paragraphs",
    )
    parser.add_argument(
        "--preserve-nbsp",
        action="store_true",
        help="Keep paragraphs that hold only a non-breaking space",
    )
    for flag, dest, what in (
        ("--phrasing", "phrasing_content", "allowed inside <p>"),
        ("--flow", "flow_content", "allowed inside <li>"),
        ("--wrapper-only", "wrapper_only", "that only wrap other elements"),
        ("--inside-wrappers-only", "inside_wrappers_only", "that only appear inside wrappers"),
        ("--preserve-space", "preserve_space_in", "whose new lines are kept"),
    ):
        parser.add_argument(
            flag,
            dest=dest,
            type=_tag_list,
            default=None,
            metavar="TAGS",
            help=f"Comma-separated extra tags {what}",
        )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full conversion result as JSON",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    overrides = {}
    for name in (
        "phrasing_content", "flow_content", "wrapper_only",
        "inside_wrappers_only", "preserve_space_in",
    ):
        extra = getattr(args, name)
        if extra:
            overrides[name] = getattr(settings, name) | extra
    if args.no_situational_break:
        overrides["situational_break"] = False
    if args.no_collapse:
        overrides["collapse_breaks"] = False
    if args.preserve_nbsp:
        overrides["preserve_non_breaking_space"] = True
    if overrides:
        settings = replace(settings, **overrides)
    return settings


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        settings = _apply_overrides(Settings.from_env(), args)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    if args.input:
        text = Path(args.input).read_text(encoding="utf-8")
        logger.info("Loaded %d chars from %s", len(text), args.input)
    else:
        text = sys.stdin.read()

    try:
        result = convert(text, args.mode, args.list_kind, settings=settings)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    if args.json:
        output = json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False)
    else:
        output = result.text

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        print(f"Output written to {args.output}", file=sys.stderr)
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
