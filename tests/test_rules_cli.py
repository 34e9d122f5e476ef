"""Tests for managing replacement rules from the command line."""

import io
from unittest.mock import patch

import pytest

from transcript_dictate.replacements import ReplacementRule, ReplacementStore
from transcript_dictate.rules_cli import format_rules, main


@pytest.fixture
def rules_file(tmp_path):
    path = tmp_path / "rules.json"
    ReplacementStore(
        [
            ReplacementRule(pattern="gonna", replacement="going to"),
            ReplacementRule(pattern="wanna", replacement="want to", enabled=False),
        ]
    ).save(path)
    return path


def run_rules(rules_file, *args, stdin=None):
    main(["--rules", str(rules_file), *args], stdin=stdin)
    return ReplacementStore.load(rules_file).rules


class TestListRules:
    """Test listing rules."""

    def test_list(self, rules_file, capsys):
        main(["--rules", str(rules_file), "list"])
        assert capsys.readouterr().out == "  1. [x] gonna -> going to\n  2. [ ] wanna -> want to\n"

    def test_list_is_the_default_command(self, rules_file, capsys):
        main(["--rules", str(rules_file)])
        assert "gonna -> going to" in capsys.readouterr().out

    def test_empty_store(self):
        assert format_rules(ReplacementStore()) == "No replacement rules."


class TestEditRules:
    """Test commands that change the saved rules."""

    def test_add(self, rules_file, capsys):
        rules = run_rules(rules_file, "add", "btw", "by the way")

        assert rules[-1] == ReplacementRule(pattern="btw", replacement="by the way")
        assert "Added rule 3" in capsys.readouterr().out

    def test_add_disabled(self, rules_file):
        rules = run_rules(rules_file, "add", "lol", "(laughs)", "--disabled")
        assert rules[-1].enabled is False

    def test_remove_uses_listed_number(self, rules_file):
        rules = run_rules(rules_file, "remove", "1")
        assert [r.pattern for r in rules] == ["wanna"]

    def test_enable_and_disable(self, rules_file):
        rules = run_rules(rules_file, "enable", "2")
        assert rules[1].enabled is True

        rules = run_rules(rules_file, "disable", "1")
        assert rules[0].enabled is False

    def test_out_of_range_number_exits(self, rules_file, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--rules", str(rules_file), "remove", "5"])

        assert exc_info.value.code == 2
        assert "No rule number 5" in capsys.readouterr().err
        assert len(ReplacementStore.load(rules_file).rules) == 2

    def test_save_failure_exits(self, rules_file):
        with patch.object(ReplacementStore, "save", return_value=False):
            with pytest.raises(SystemExit, match="Could not save replacement rules"):
                main(["--rules", str(rules_file), "add", "a", "b"])


class TestCsvExchange:
    """Test CSV import and export commands."""

    def test_import_from_file(self, rules_file, tmp_path, capsys):
        csv_file = tmp_path / "rules.csv"
        csv_file.write_text("pattern,replacement,enabled\nomw,on my way,true\n", encoding="utf-8")

        rules = run_rules(rules_file, "import-csv", str(csv_file))

        assert rules[-1] == ReplacementRule(pattern="omw", replacement="on my way")
        assert "Imported 1 rules" in capsys.readouterr().out

    def test_import_from_stdin(self, rules_file):
        stdin = io.StringIO("pattern,replacement\nidk,I don't know\n")
        rules = run_rules(rules_file, "import-csv", "-", stdin=stdin)
        assert rules[-1].pattern == "idk"

    def test_import_missing_file_exits(self, rules_file, tmp_path):
        with pytest.raises(SystemExit, match="Could not read"):
            main(["--rules", str(rules_file), "import-csv", str(tmp_path / "missing.csv")])

    def test_export_to_stdout(self, rules_file, capsys):
        main(["--rules", str(rules_file), "export-csv"])
        out = capsys.readouterr().out
        assert out.splitlines()[0] == "pattern,replacement,enabled"
        assert "wanna,want to,false" in out

    def test_export_to_file_round_trips(self, rules_file, tmp_path):
        csv_file = tmp_path / "out.csv"
        main(["--rules", str(rules_file), "export-csv", str(csv_file)])

        copy = ReplacementStore()
        copy.import_csv(csv_file.read_text(encoding="utf-8"))
        assert copy.rules == ReplacementStore.load(rules_file).rules
