"""Manage replacement rules from the command line."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, TextIO

from transcript_dictate.replacements import ReplacementRule, ReplacementStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transcript-dictate --mode rules",
        description="List and edit the replacement rules applied to every transcript.",
    )
    parser.add_argument(
        "--rules",
        type=Path,
        default=None,
        help="Replacement rules JSON file (default: saved rules)",
    )
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("list", help="Show rules in the order they are applied")

    add = commands.add_parser("add", help="Append a rule")
    add.add_argument("pattern", help="Word or phrase to match")
    add.add_argument("replacement", help="Text to insert")
    add.add_argument("--disabled", action="store_true", help="Add the rule switched off")

    for name, text in (
        ("remove", "Delete a rule"),
        ("enable", "Switch a rule on"),
        ("disable", "Switch a rule off"),
    ):
        sub = commands.add_parser(name, help=text)
        sub.add_argument("number", type=int, help="Rule number as shown by 'list'")

    import_csv = commands.add_parser("import-csv", help="Append rules from a CSV file")
    import_csv.add_argument("file", help="CSV file with pattern,replacement,enabled ('-' for stdin)")

    export_csv = commands.add_parser("export-csv", help="Write rules as CSV")
    export_csv.add_argument("file", nargs="?", type=Path, help="Output file (default: stdout)")
    return parser


def format_rules(store: ReplacementStore) -> str:
    if not store.rules:
        return "No replacement rules."
    lines = []
    for number, rule in enumerate(store.rules, start=1):
        mark = "x" if rule.enabled else " "
        lines.append(f"{number:>3}. [{mark}] {rule.pattern} -> {rule.replacement}")
    return "\n".join(lines)


def _index(parser: argparse.ArgumentParser, store: ReplacementStore, number: int) -> int:
    if not 1 <= number <= len(store.rules):
        parser.error(f"No rule number {number} (there are {len(store.rules)} rules)")
    return number - 1


def _save(store: ReplacementStore, path: Path | None) -> None:
    if not store.save(path):
        raise SystemExit("Could not save replacement rules")


def main(argv: Optional[list[str]] = None, stdin: TextIO | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    store = ReplacementStore.load(args.rules)

    if args.command in (None, "list"):
        print(format_rules(store))
        return

    if args.command == "add":
        store.add_rule(
            ReplacementRule(
                pattern=args.pattern,
                replacement=args.replacement,
                enabled=not args.disabled,
            )
        )
        _save(store, args.rules)
        print(f"Added rule {len(store.rules)}: {args.pattern} -> {args.replacement}")
    elif args.command == "remove":
        index = _index(parser, store, args.number)
        removed = store.rules[index]
        store.remove_rule(index)
        _save(store, args.rules)
        print(f"Removed rule {args.number}: {removed.pattern}")
    elif args.command in ("enable", "disable"):
        index = _index(parser, store, args.number)
        store.set_enabled(index, args.command == "enable")
        _save(store, args.rules)
        print(f"Rule {args.number} {args.command}d")
    elif args.command == "import-csv":
        if args.file == "-":
            csv_text = (stdin or sys.stdin).read()
        else:
            try:
                csv_text = Path(args.file).read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise SystemExit(f"Could not read {args.file}: {e}") from e
        added = store.import_csv(csv_text)
        _save(store, args.rules)
        print(f"Imported {added} rules")
    elif args.command == "export-csv":
        csv_text = store.export_csv()
        if args.file is None:
            print(csv_text)
        else:
            try:
                args.file.write_text(csv_text + "\n", encoding="utf-8")
            except OSError as e:
                raise SystemExit(f"Could not write {args.file}: {e}") from e


if __name__ == "__main__":
    main()
