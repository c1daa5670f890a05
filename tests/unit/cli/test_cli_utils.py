"""Unit tests for CLI utilities."""

import pytest

from lxbuild.cli_utils import ErrorFormatter, PathValidator


class TestErrorFormatter:
    """Tests for ErrorFormatter class."""

    def test_print_error(self, capsys):
        ErrorFormatter.print_error("Build failed during linking!", "MSVC failed at linking the objs.")
        out = capsys.readouterr().out

        assert "✗ Build failed during linking!" in out
        assert "MSVC failed at linking the objs." in out
        assert ErrorFormatter.RED in out
        assert ErrorFormatter.RESET in out

    def test_print_success(self, capsys):
        ErrorFormatter.print_success("Build successful!")
        out = capsys.readouterr().out
        assert "✓ Build successful!" in out
        assert ErrorFormatter.GREEN in out

    def test_print_build_failure_names_stage(self, capsys):
        ErrorFormatter.print_build_failure("header aggregation", "duplicate fn")
        out = capsys.readouterr().out
        assert "✗ Build failed during header aggregation!" in out
        assert "duplicate fn" in out

    def test_print_build_failure_without_stage(self, capsys):
        ErrorFormatter.print_build_failure(None, "oops")
        assert "Build failed during build!" in capsys.readouterr().out

    def test_keyboard_interrupt_exit_code(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            ErrorFormatter.handle_keyboard_interrupt()
        assert excinfo.value.code == 130
        assert "Build interrupted" in capsys.readouterr().out

    def test_unexpected_error_exit_code(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            ErrorFormatter.handle_unexpected_error(ValueError("bad"))
        assert excinfo.value.code == 1
        assert "ValueError: bad" in capsys.readouterr().out


class TestPathValidator:
    """Tests for PathValidator class."""

    def test_valid_descriptor(self, tmp_path):
        path = tmp_path / "app.lx-build"
        path.write_text("{}")
        PathValidator.validate_descriptor(path)

    def test_missing(self, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            PathValidator.validate_descriptor(tmp_path / "app.lx-build")
        assert excinfo.value.code == 2

    def test_wrong_extension(self, tmp_path, capsys):
        path = tmp_path / "app.lx"
        path.write_text("")
        with pytest.raises(SystemExit) as excinfo:
            PathValidator.validate_descriptor(path)
        assert excinfo.value.code == 2
        assert "Not a .lx-build file" in capsys.readouterr().out
