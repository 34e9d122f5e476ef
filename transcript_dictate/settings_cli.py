"""Show and change saved settings from the command line."""

from __future__ import annotations

import argparse
from typing import Any, Optional

from transcript_dictate.settings_store import (
    default_settings,
    load_settings,
    parse_bool,
    save_settings,
)
from transcript_dictate.styles import OutputStyle


def coerce_value(key: str, raw: str) -> Any:
    """
    Convert a command-line value to the type the setting is stored as.

    Raises:
        ValueError: If the key is unknown or the value does not fit it
    """
    defaults = default_settings()
    if key not in defaults:
        raise ValueError(f"Unknown setting: {key} (choose from {', '.join(defaults)})")

    if isinstance(defaults[key], bool):
        value = parse_bool(raw, None)
        if value is None:
            raise ValueError(f"{key} expects true or false, got {raw!r}")
        return value

    if key == "output_style":
        style = OutputStyle.lookup(raw)
        if style is None:
            choices = ", ".join(s.value for s in OutputStyle)
            raise ValueError(f"Unknown output style {raw!r} (choose from {choices})")
        return style.value

    return raw.strip()


def format_settings(settings: dict[str, Any]) -> str:
    return "\n".join(f"{key} = {settings[key]}" for key in default_settings())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transcript-dictate --mode settings",
        description="Show or change saved settings.",
    )
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("show", help="Print every setting")

    set_cmd = commands.add_parser("set", help="Change one setting")
    set_cmd.add_argument("key", help="Setting name, e.g. detect_quotations")
    set_cmd.add_argument("value", help="New value")

    reset = commands.add_parser("reset", help="Restore defaults")
    reset.add_argument("key", nargs="?", help="Only reset this setting")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings()

    if args.command in (None, "show"):
        print(format_settings(settings))
        return

    if args.command == "set":
        try:
            settings[args.key] = coerce_value(args.key, args.value)
        except ValueError as e:
            parser.error(str(e))
    else:
        defaults = default_settings()
        if args.key is None:
            settings = defaults
        elif args.key in defaults:
            settings[args.key] = defaults[args.key]
        else:
            parser.error(f"Unknown setting: {args.key}")

    if not save_settings(settings):
        raise SystemExit("Could not save settings")
    print(format_settings(settings))


if __name__ == "__main__":
    main()
