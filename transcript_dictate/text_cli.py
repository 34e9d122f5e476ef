"""Run the post-processing pipeline on text given as arguments or stdin."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, TextIO

from transcript_dictate.pipeline import PipelineConfig, process_text
from transcript_dictate.replacements import ReplacementStore
from transcript_dictate.settings_store import load_settings
from transcript_dictate.styles import OutputStyle

STYLE_CHOICES = {
    "formal": OutputStyle.FORMAL,
    "no-capitals": OutputStyle.NO_CAPITALS,
    "casual": OutputStyle.CASUAL,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transcript-dictate --mode process",
        description="Apply replacements, de-stuttering, quotation detection, and output style to text.",
    )
    parser.add_argument("text", nargs="*", help="Text to process (reads stdin when omitted)")
    parser.add_argument("--style", choices=sorted(STYLE_CHOICES), help="Output style override")
    parser.add_argument(
        "--quotations",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Detect quoted speech (default: saved setting)",
    )
    parser.add_argument(
        "--stutter",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Remove repeated words (default: saved setting)",
    )
    parser.add_argument(
        "--rules",
        type=Path,
        default=None,
        help="Replacement rules JSON file (default: saved rules)",
    )
    return parser


def resolve_config(args: argparse.Namespace, settings: dict) -> PipelineConfig:
    """Merge command-line overrides over the saved settings."""
    base = PipelineConfig.from_settings(settings)
    return PipelineConfig(
        remove_stuttering=base.remove_stuttering if args.stutter is None else args.stutter,
        detect_quotations=base.detect_quotations if args.quotations is None else args.quotations,
        output_style=STYLE_CHOICES[args.style] if args.style else base.output_style,
    )


def main(argv: Optional[list[str]] = None, stdin: TextIO | None = None) -> None:
    args = build_parser().parse_args(argv)
    config = resolve_config(args, load_settings())
    store = ReplacementStore.load(args.rules)

    if args.text:
        print(process_text(" ".join(args.text), store.rules, config))
        return

    for line in stdin or sys.stdin:
        print(process_text(line.rstrip("\n"), store.rules, config))


if __name__ == "__main__":
    main()
