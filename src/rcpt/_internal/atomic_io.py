"""Commit a file's contents all at once or not at all."""

import os
import tempfile
from pathlib import Path


def _default_file_mode() -> int:
    """Mode a plain open() would create a file with under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def atomic_write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write content to path via a sibling temporary file and os.replace.

    Readers see either the old file or the complete new one. On failure the
    temporary file is removed and the original exception propagates.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates 0600; match what a direct write would have produced
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise
