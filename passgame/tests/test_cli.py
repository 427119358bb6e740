"""
Tests for the command-line interface.
"""

from pathlib import Path

import pytest

from ..cli import main


class TestCli:

    def test_rules(self, capsys):
        main(["rules"])
        out = capsys.readouterr().out
        assert "length: Password must be at least 8 characters long" in out
        assert "Surprise rules:" in out
        assert "Cosmic Horror" in out

    def test_check(self, capsys):
        main(["check", "Password1!"])
        out = capsys.readouterr().out
        assert "Satisfied: 5/8" in out
        assert "Difficulty: Normal" in out

    def test_play_until_quit(self, capsys, monkeypatch):
        lines = iter(["Abc", ":submit", ":quit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

        main(["play", "--seed", "3"])

        out = capsys.readouterr().out
        assert "Rejected: Not all active rules are satisfied" in out

    def test_play_until_eof(self, capsys, monkeypatch):
        def no_more(prompt=""):
            raise EOFError
        monkeypatch.setattr("builtins.input", no_more)

        main(["play"])
        assert "Start typing" in capsys.readouterr().out

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])


class TestPackaging:

    def test_project_metadata(self):
        pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
        if not pyproject.exists():
            pytest.skip("not running from a source checkout")
        project = pyproject.read_text(encoding="utf-8")
        assert 'name = "passgame"' in project
        assert "readme" not in project
        assert 'passgame = "passgame.cli:main"' in project
