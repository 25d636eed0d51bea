"""Tests for the Shell class and the command line entry point."""

import os

import pytest
from click.testing import CliRunner

from shellcomplete import shell as shell_module
from shellcomplete.completion import Completion
from shellcomplete.editor import ReadlineCompleter
from shellcomplete.shell import Shell, format_completion, main


@pytest.fixture
def tree(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "docs").mkdir()
    (tmp_path / "notes.txt").touch()
    return tmp_path


@pytest.fixture
def shell(tmp_path):
    return Shell(history_file=str(tmp_path / "history"))


class TestFormatCompletion:
    def test_finished(self):
        assert format_completion(Completion("a\\ b", "a b", True)) == "a b\ta\\ b"

    def test_unfinished_is_marked(self):
        assert format_completion(Completion("docs/", "docs", False)) == "docs\tdocs/..."


class TestPrompt:
    def test_prompt_at_home(self, shell, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.chdir(tmp_path)
        assert shell.get_prompt() == "~ ? "

    def test_prompt_in_subdir(self, shell, tmp_path, monkeypatch):
        (tmp_path / "sub").mkdir()
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.chdir(tmp_path / "sub")
        assert shell.get_prompt() == "~/sub ? "

    def test_prompt_outside_home(self, shell, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path / "nowhere"))
        monkeypatch.chdir(tmp_path)
        assert shell.get_prompt() == f"{os.getcwd()} ? "


class TestShowCompletions:
    def test_prints_candidates(self, shell, tree, capsys):
        assert shell.show_completions("cat no") == 0
        assert capsys.readouterr().out == "notes.txt\tnotes.txt\n"

    def test_no_candidates(self, shell, tree, capsys):
        assert shell.show_completions("cat zzz") == 1
        assert capsys.readouterr().out == ""

    def test_os_error_is_reported(self, tree, tmp_path, capsys):
        def func(line):
            raise PermissionError(13, "Permission denied", "/root")

        assert Shell(func, history_file=str(tmp_path / "history")).show_completions("ls /root/") == 1
        assert "shellcomplete:" in capsys.readouterr().err


class TestRun:
    def test_loop_until_eof(self, shell, tree, monkeypatch, capsys):
        lines = iter(["cat do", "cat no"])

        def fake_input(prompt):
            try:
                return next(lines)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr("builtins.input", fake_input)
        monkeypatch.setattr(shell_module, "setup_completion", ReadlineCompleter)
        shell.run()

        out = capsys.readouterr().out
        assert "docs\tdocs/..." in out
        assert "notes.txt\tnotes.txt" in out
        assert os.path.exists(shell.history_file)

    def test_exit_command(self, shell, tree, monkeypatch, capsys):
        lines = iter(["exit", "cat no"])
        monkeypatch.setattr("builtins.input", lambda prompt: next(lines))
        monkeypatch.setattr(shell_module, "setup_completion", ReadlineCompleter)
        shell.run()
        assert "notes.txt" not in capsys.readouterr().out


class TestMain:
    def test_query(self, tree, tmp_path):
        result = CliRunner().invoke(main, ["--query", "ls d", "--history-file", str(tmp_path / "h")])
        assert result.exit_code == 0
        assert result.output == "docs\tdocs/...\n"

    def test_query_quoted(self, tree, tmp_path):
        result = CliRunner().invoke(main, ["-q", 'cat "no'])
        assert result.exit_code == 0
        assert result.output == 'notes.txt\t"notes.txt"\n'

    def test_query_without_matches(self, tree):
        result = CliRunner().invoke(main, ["--query", "cat zzz"])
        assert result.exit_code == 1
        assert result.output == ""

    def test_help(self):
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "--query" in result.output
