"""Tests for the gwn CLI and config loading."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from gwn import __version__
from gwn.cli import main
from gwn.config import GwnConfig, discover_config, find_config, load_config


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "main.gwn"
    path.write_text("x = 1 + 2\nx -> print\n")
    return path


class TestCliBasics:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "FILE" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_too_many_files(self, runner, tmp_path):
        a = tmp_path / "a.gwn"
        b = tmp_path / "b.gwn"
        a.write_text("1\n")
        b.write_text("2\n")
        result = runner.invoke(main, [str(a), str(b)])
        assert result.exit_code == 2
        assert "at most one FILE" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "nope.gwn")])
        assert result.exit_code == 2


class TestRunFile:
    def test_canonical_output(self, runner, source_file):
        result = runner.invoke(main, [str(source_file)])
        assert result.exit_code == 0, result.output
        assert result.output == "x = (1 + 2)\n(print <- x)\n"

    def test_tree_output(self, runner, source_file):
        result = runner.invoke(main, ["--tree", str(source_file)])
        assert result.exit_code == 0
        assert "ConstantDecl" in result.output
        assert "BinaryExpr : Unknown" in result.output
        assert "IntLit : Int" in result.output
        assert "ApplyExpr : Unknown" in result.output

    def test_errors_exit_nonzero(self, runner, tmp_path):
        path = tmp_path / "bad.gwn"
        path.write_text("1 + + 2\n3\n")
        result = runner.invoke(main, ["--no-color", str(path)])
        assert result.exit_code == 1
        assert "[line 1] Error at '+':" in result.output
        assert "Expected expression." in result.output
        # Later forms still parse and print
        assert "3\n" in result.output


class TestRepl:
    def test_each_line_parsed(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(main, [], input="1 + 2\nx -> f\n")
        assert result.exit_code == 0
        assert "gwn > " in result.output
        assert "(1 + 2)" in result.output
        assert "(f <- x)" in result.output

    def test_error_does_not_end_session(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(main, ["--no-color"], input="1 +\n4\n")
        assert result.exit_code == 0
        assert "Expected expression." in result.output
        assert "4\n" in result.output

    def test_eof_exits(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(main, [], input="")
        assert result.exit_code == 0
        assert result.output == "gwn > \n"

    def test_configured_prompt(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            with open("gwn.toml", "w") as f:
                f.write('[repl]\nprompt = ">> "\n')
            result = runner.invoke(main, [], input="1\n")
        assert result.exit_code == 0
        assert result.output.startswith(">> 1\n")


class TestConfig:
    def test_find_config(self, tmp_path):
        (tmp_path / "gwn.toml").write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config(nested) == (tmp_path / "gwn.toml").resolve()

    def test_find_config_from_file(self, tmp_path):
        (tmp_path / "gwn.toml").write_text("")
        src = tmp_path / "main.gwn"
        src.write_text("1\n")
        assert find_config(src) == (tmp_path / "gwn.toml").resolve()

    def test_find_config_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            find_config(tmp_path)

    def test_defaults(self, tmp_path):
        path = tmp_path / "gwn.toml"
        path.write_text("")
        config = load_config(path)
        assert config.repl.prompt == "gwn > "
        assert config.diagnostics.color is True
        assert config.output.format == "canonical"

    def test_load_values(self, tmp_path):
        path = tmp_path / "gwn.toml"
        path.write_text(
            '[repl]\nprompt = "? "\n'
            "[diagnostics]\ncolor = false\n"
            '[output]\nformat = "tree"\n'
        )
        config = load_config(path)
        assert config.repl.prompt == "? "
        assert config.diagnostics.color is False
        assert config.output.format == "tree"

    def test_bad_format(self, tmp_path):
        path = tmp_path / "gwn.toml"
        path.write_text('[output]\nformat = "json"\n')
        with pytest.raises(ValueError, match="output.format"):
            load_config(path)

    def test_discover_without_file(self, tmp_path):
        assert discover_config(tmp_path) == GwnConfig()

    def test_tree_format_from_config(self, runner, tmp_path):
        (tmp_path / "gwn.toml").write_text('[output]\nformat = "tree"\n')
        src = tmp_path / "main.gwn"
        src.write_text("1\n")
        result = runner.invoke(main, [str(src)])
        assert result.exit_code == 0
        assert "EvaluatedDecl" in result.output

    def test_bad_config_exits(self, runner, tmp_path):
        (tmp_path / "gwn.toml").write_text('[output]\nformat = "json"\n')
        src = tmp_path / "main.gwn"
        src.write_text("1\n")
        result = runner.invoke(main, [str(src)])
        assert result.exit_code == 1
        assert "output.format" in result.output
