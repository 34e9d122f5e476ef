"""Unified entry point for Transcript Dictate."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence


def main(argv: Sequence[str] | None = None) -> None:
    raw_args = list(argv) if argv is not None else sys.argv[1:]

    parser = argparse.ArgumentParser(
        prog="python -m transcript_dictate",
        description="Run push-to-talk dictation, post-process text, or manage rules and settings.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--mode",
        choices=["dictate", "process", "rules", "settings"],
        default="dictate",
        help=(
            "dictate: push-to-talk recording (default); process: clean up text; "
            "rules: edit replacement rules; settings: show or change settings"
        ),
    )
    parser.add_argument(
        "-h",
        "--help",
        action="store_true",
        dest="show_help",
        help="Show this help message and exit",
    )

    args, remainder = parser.parse_known_args(raw_args)
    if args.show_help:
        remainder = ["--help"]

    # Audio, model, and keyboard imports are only needed for dictation
    if args.mode == "process":
        from .text_cli import main as text_main

        text_main(remainder)
        return

    if args.mode == "rules":
        from .rules_cli import main as rules_main

        rules_main(remainder)
        return

    if args.mode == "settings":
        from .settings_cli import main as settings_main

        settings_main(remainder)
        return

    from .cli import main as cli_main

    cli_main(remainder)


if __name__ == "__main__":
    main()
