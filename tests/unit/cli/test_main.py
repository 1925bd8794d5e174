"""Unit tests for the top-level command group."""

from click.testing import CliRunner

from witu.cli.main import main


def test_commands_registered():
    result = CliRunner().invoke(main, ["--help"])

    assert result.exit_code == 0
    for command in ("render", "export", "ranks"):
        assert command in result.output


def test_verbose_flag(tmp_path):
    result = CliRunner().invoke(main, ["-v", "ranks", str(tmp_path / "missing.json")])
    assert result.exit_code == 1
