"""Tests for unified_cli module."""

import importlib
import sys
from unittest.mock import Mock, patch

import pytest

from ascii_viewer.unified_cli import COMMANDS, main, run_command, usage

# --- Fixtures ---


@pytest.fixture
def fake_module():
    module = Mock()
    module.main = Mock(return_value=0)
    return module


@pytest.fixture
def import_module():
    with patch("ascii_viewer.unified_cli.importlib.import_module") as mock_import:
        yield mock_import


# --- usage() ---


class TestUsage:
    def test_lists_commands_with_summaries(self, capsys):
        usage()
        out = capsys.readouterr().out
        assert "Usage: ascii-viewer <command> [args...]" in out
        for name, cmd in COMMANDS.items():
            assert f"{name}  {cmd.summary}" in out

    def test_alternate_stream(self, capsys):
        usage(file=sys.stderr)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Usage: ascii-viewer" in captured.err


# --- run_command() ---


class TestRunCommand:
    def test_passes_argv(self):
        entry = Mock(return_value=0)
        assert run_command(entry, ["a", "b"]) == 0
        entry.assert_called_once_with(["a", "b"])

    @pytest.mark.parametrize("code, expected", [(2, 2), (None, 0), ("bad", 0)])
    def test_system_exit(self, code, expected):
        assert run_command(Mock(side_effect=SystemExit(code)), []) == expected

    def test_exception_reported(self, capsys):
        assert run_command(Mock(side_effect=RuntimeError("boom")), []) == 1
        assert "Error running command: boom" in capsys.readouterr().err


# --- main() ---


class TestMain:
    @pytest.mark.parametrize("argv", [[], ["-h"], ["--help"]])
    def test_help(self, argv, capsys):
        assert main(argv) == 0
        assert "Usage: ascii-viewer" in capsys.readouterr().out

    def test_unknown_command(self, capsys):
        assert main(["text", "Hello"]) == 2
        err = capsys.readouterr().err
        assert "Unknown command: text" in err
        assert "Usage: ascii-viewer" in err

    @pytest.mark.parametrize("name", sorted(COMMANDS))
    def test_dispatch(self, name, import_module, fake_module):
        import_module.return_value = fake_module
        assert main([name, "--flag"]) == 0
        import_module.assert_called_once_with(COMMANDS[name].module)
        fake_module.main.assert_called_once_with(["--flag"])

    def test_import_error(self, import_module, capsys):
        import_module.side_effect = ImportError("no flask")
        assert main(["serve"]) == 3
        err = capsys.readouterr().err
        assert "Failed to import command 'serve'" in err
        assert "no flask" in err

    def test_missing_main(self, import_module, capsys):
        import_module.return_value = Mock(spec=[])
        assert main(["image"]) == 4
        assert "has no callable 'main'" in capsys.readouterr().err

    def test_subcommand_exit_code(self, import_module):
        module = Mock()
        module.main = Mock(return_value=42)
        import_module.return_value = module
        assert main(("image", "x.png")) == 42
        module.main.assert_called_once_with(["x.png"])

    def test_none_uses_sys_argv(self, import_module, fake_module, monkeypatch):
        import_module.return_value = fake_module
        monkeypatch.setattr(sys, "argv", ["ascii-viewer", "image", "x.png"])
        assert main(None) == 0
        fake_module.main.assert_called_once_with(["x.png"])


# --- End to end ---


class TestCommandsIntegration:
    def test_commands_table(self):
        assert {name: cmd.module for name, cmd in COMMANDS.items()} == {
            "image": "ascii_viewer.image_to_ascii",
            "serve": "ascii_viewer.web",
        }

    def test_all_commands_importable(self):
        for cmd in COMMANDS.values():
            module = importlib.import_module(cmd.module)
            assert callable(getattr(module, "main", None)), cmd.module

    def test_image_command(self, tmp_path, black_png, capsys):
        src = tmp_path / "black.png"
        src.write_bytes(black_png)
        assert main(["image", str(src), "--full-resolution"]) == 0
        assert capsys.readouterr().out == "  \n  \n"

    def test_image_command_help(self, capsys):
        assert main(["image", "--help"]) == 0
        assert "--full-resolution" in capsys.readouterr().out

    def test_image_command_bad_file(self, tmp_path):
        src = tmp_path / "bad.png"
        src.write_bytes(b"\x00\x01")
        assert main(["image", str(src)]) == 1

    def test_package_level_wrapper(self, tmp_path, white_png, capsys):
        from ascii_viewer import image_to_ascii_main

        src = tmp_path / "white.png"
        src.write_bytes(white_png)
        assert image_to_ascii_main([str(src), "--full-resolution", "--theme", "light"]) == 0
        assert capsys.readouterr().out == "    \n" * 4
