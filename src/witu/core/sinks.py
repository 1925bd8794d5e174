"""
Output sinks: file save and clipboard copy.

Both return a Result instead of raising. The caller shows failures as a
non-blocking notification; nothing here touches graph or view state.
"""

import logging
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from .exceptions import SinkError
from .result import Err, Ok, SinkResult

logger = logging.getLogger(__name__)

MIME_TYPES = {
    ".csv": "text/csv",
    ".xml": "application/xml",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".mmd": "text/plain",
    ".svg": "image/svg+xml",
    ".html": "text/html",
}

# Tried in order; the first one found on PATH wins
CLIPBOARD_COMMANDS: List[List[str]] = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip"],
]


def mime_type_for(path: Union[str, Path]) -> str:
    return MIME_TYPES.get(Path(path).suffix.lower(), "application/octet-stream")


def save_file(path: Union[str, Path], content: str) -> SinkResult[Path]:
    """Write content as UTF-8, creating parent directories as needed."""
    out_path = Path(path)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.debug(f"File write refused for {out_path}: {e}")
        return Err(SinkError(str(out_path), str(e)))
    logger.debug(f"Wrote {out_path} as {mime_type_for(out_path)}")
    return Ok(out_path)


def _clipboard_command(command: Optional[str]) -> Optional[List[str]]:
    if command:
        return shlex.split(command)
    for candidate in CLIPBOARD_COMMANDS:
        if shutil.which(candidate[0]):
            return candidate
    return None


def copy_to_clipboard(text: str, command: Optional[str] = None) -> SinkResult[str]:
    """
    Copy text to the system clipboard through the platform's copy command.

    Args:
        text: UTF-8 text to copy.
        command: Explicit command line (e.g. from config). Autodetected when None.
    """
    argv = _clipboard_command(command)
    if argv is None:
        return Err(SinkError("clipboard", "no clipboard command available"))

    try:
        subprocess.run(argv, input=text.encode("utf-8"), check=True, timeout=5)
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"Clipboard command {argv[0]} failed: {e}")
        return Err(SinkError(argv[0], str(e)))
    return Ok(text)
