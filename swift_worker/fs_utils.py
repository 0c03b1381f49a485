"""Filesystem primitives for output file maps and incremental artifacts."""

from __future__ import annotations

import contextlib
import os
import shutil
import stat
import tempfile
from typing import TYPE_CHECKING

from .errors import OutputFileMapIOError

if TYPE_CHECKING:
    from pathlib import Path


def read_bytes(path: Path) -> bytes:
    """Read all bytes of a file, raising OutputFileMapIOError on failure."""
    try:
        return path.read_bytes()
    except OSError as err:
        raise OutputFileMapIOError(f"Failed to read ({err.strerror or err})", path) from err


def _target_mode(path: Path) -> int:
    """Keep the mode of the file being replaced, else use the umask default."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_bytes_atomic(path: Path, content: bytes) -> None:
    """Replace the file at ``path`` with ``content``.

    The bytes are written to a temporary file in the destination directory and
    renamed over the destination, so readers see either the old or the new
    content. On failure the temporary file is removed and the destination is
    left as it was.
    """
    tmp_name: str | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        # mkstemp creates the file 0600
        os.chmod(tmp_name, _target_mode(path))
        os.replace(tmp_name, path)
    except OSError as err:
        if tmp_name is not None:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
        raise OutputFileMapIOError(f"Failed to write ({err.strerror or err})", path) from err


def copy_file(src: Path, dest: Path) -> None:
    """Copy a file, creating destination directories as needed."""
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dest)
    except OSError as err:
        raise OutputFileMapIOError(f"Failed to copy {src} ({err.strerror or err})", dest) from err
