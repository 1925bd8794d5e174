"""Unit tests for the file and clipboard sinks."""

import logging
import subprocess
from unittest.mock import patch

import pytest

from witu.core.exceptions import SinkError
from witu.core.result import Err, Ok, then
from witu.core.sinks import copy_to_clipboard, mime_type_for, save_file


class TestSaveFile:
    def test_writes_utf8(self, tmp_path):
        out = tmp_path / "nested" / "report.txt"
        result = save_file(out, "Über\n")

        assert isinstance(result, Ok)
        assert result.unwrap() == out
        assert out.read_text(encoding="utf-8") == "Über\n"

    def test_refused_write_is_err(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        result = save_file(blocker / "out.csv", "x")

        assert result.is_err()
        assert isinstance(result.error, SinkError)

    def test_logs_written_mime_type(self, tmp_path, caplog):
        out = tmp_path / "deps.csv"
        with caplog.at_level(logging.DEBUG, logger="witu.core.sinks"):
            save_file(out, "a,b\n")

        assert f"Wrote {out} as text/csv" in caplog.text


class TestClipboard:
    @patch("witu.core.sinks.subprocess.run")
    @patch("witu.core.sinks.shutil.which")
    def test_uses_first_available_command(self, mock_which, mock_run):
        mock_which.side_effect = lambda name: "/usr/bin/xclip" if name == "xclip" else None

        result = copy_to_clipboard("graph TD\n")

        assert result == Ok("graph TD\n")
        args, kwargs = mock_run.call_args
        assert args[0] == ["xclip", "-selection", "clipboard"]
        assert kwargs["input"] == b"graph TD\n"

    @patch("witu.core.sinks.subprocess.run")
    def test_explicit_command(self, mock_run):
        copy_to_clipboard("text", command="my-copy --quiet")
        assert mock_run.call_args[0][0] == ["my-copy", "--quiet"]

    @patch("witu.core.sinks.shutil.which", return_value=None)
    def test_no_command_available(self, _mock_which):
        result = copy_to_clipboard("text")
        assert isinstance(result, Err)
        assert result.error.target == "clipboard"

    @patch("witu.core.sinks.subprocess.run")
    def test_command_failure(self, mock_run):
        mock_run.side_effect = subprocess.CalledProcessError(1, "pbcopy")
        result = copy_to_clipboard("text", command="pbcopy")
        assert result.is_err()
        assert result.error.target == "pbcopy"


def test_mime_types():
    assert mime_type_for("deps.csv") == "text/csv"
    assert mime_type_for("package.xml") == "application/xml"
    assert mime_type_for("report.TXT") == "text/plain"
    assert mime_type_for("unknown.bin") == "application/octet-stream"


class TestSinkResult:
    def test_unwrap(self):
        assert Ok("x").unwrap() == "x"
        error = SinkError("out.csv", "disk full")
        assert Err(error).unwrap_err() is error
        with pytest.raises(ValueError):
            Err(error).unwrap()
        with pytest.raises(ValueError):
            Ok("x").unwrap_err()

    def test_then_runs_after_successful_write(self, tmp_path):
        out = tmp_path / "graph.svg"
        result = then(save_file(out, "<svg/>"), lambda path: path.name)
        assert result == Ok("graph.svg")

    def test_then_skipped_after_refused_write(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        calls = []

        result = then(save_file(blocker / "graph.svg", "<svg/>"), calls.append)

        assert result.is_err()
        assert result.unwrap_err().target == str(blocker / "graph.svg")
        assert calls == []
