"""
Tests for the cdlatex command line

Runs main() in-process and checks what it prints and its exit code.
"""

import json

import pytest

from cdlatex.cli import main, parse_keys
from cdlatex.vocabulary import Key


def run(capsys, *argv: str) -> tuple[int, str]:
    with pytest.raises(SystemExit) as exc:
        main(list(argv))
    return exc.value.code, capsys.readouterr().out


class TestParseKeys:
    def test_named_keys(self):
        assert parse_keys(["TAB", "RET", "C-g", "IDLE"]) == ["\t", Key.RETURN.value, Key.CANCEL.value, None]

    def test_plain_arguments_typed_per_character(self):
        assert parse_keys(["`a", "SPC"]) == ["`", "a", " "]


class TestTables:
    def test_all_tables(self, capsys):
        code, out = run(capsys, "tables")
        assert code == 0
        assert "Commands (" in out
        assert "Environments (" in out
        assert "Math symbols, level 1" in out
        assert "Modify with '<key>" in out

    def test_one_kind(self, capsys):
        code, out = run(capsys, "tables", "--kind", "environments")
        assert code == 0
        assert "itemize  [item]" in out
        assert "Commands" not in out

    def test_unknown_kind_rejected(self, capsys):
        code, _ = run(capsys, "tables", "--kind", "colors")
        assert code == 2

    def test_config_overrides_listed(self, capsys, tmp_path):
        config = tmp_path / "cdlatex.json"
        config.write_text(json.dumps({
            "environments": [{"name": "lemma", "body": "\\begin{lemma}\n?\n\\end{lemma}"}],
        }))
        code, out = run(capsys, "--config", str(config), "tables", "--kind", "environments")
        assert code == 0
        assert "  lemma" in out

    def test_missing_config(self, capsys, tmp_path):
        code, out = run(capsys, "--config", str(tmp_path / "nope.json"), "tables")
        assert code == 1
        assert out.startswith("[ERROR] Config file not found")


class TestPlay:
    def test_expand_keyword(self, capsys):
        code, out = run(capsys, "play", "$fr|$", "TAB")
        assert code == 0
        assert out == "$\\frac{|}{}$\n"

    def test_symbol_then_modifier(self, capsys):
        code, out = run(capsys, "play", "$|$", "`a", "'~")
        assert code == 0
        assert out == "$\\tilde{\\alpha}|$\n"

    def test_math_flag(self, capsys):
        code, out = run(capsys, "play", "x^{2|}", "TAB", "--math")
        assert code == 0
        assert out == "x^2|\n"

    def test_file_answer(self, capsys):
        code, out = run(capsys, "play", "|", "inc", "TAB", "--file", "fig.pdf")
        assert code == 0
        assert "fig.pdf" in out

    def test_error_reported(self, capsys):
        code, out = run(capsys, "play", "word|", "'~")
        assert code == 1
        assert out.splitlines() == ["word|", "[ERROR] No such modifier `~' in text mode"]

    def test_cancel_is_not_a_failure(self, capsys):
        code, out = run(capsys, "play", "$x|$", "`", "C-g")
        assert code == 0
        assert out == "$x|$\n"
