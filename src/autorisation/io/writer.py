"""Durable file writing.

:func:`write_atomic` never leaves a half written destination behind: bytes go
to a temporary file in the destination directory, are flushed and synced, and
the temporary file is then renamed over the destination with
:func:`os.replace`.  On failure the temporary file is removed and the previous
content of the destination, if any, is untouched.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from ..utils.errors import OutputPathError

PathLikeStr = os.PathLike[str]


def resolve_out_path(path: str | PathLikeStr) -> Path:
    """Return ``path`` as a :class:`Path`, rejecting existing directories."""

    out = Path(path)
    if out.is_dir():
        raise OutputPathError(f"output path is a directory: {out}")
    return out


def write_atomic(path: str | PathLikeStr, data: bytes) -> None:
    """Write ``data`` to ``path`` through a temporary file and an atomic rename.

    Parent directories are created with ``exist_ok=True``.
    """

    file_path = resolve_out_path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{file_path.name}.", suffix=".tmp", dir=file_path.parent
    )
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, file_path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def write_text_atomic(path: str | PathLikeStr, text: str, *, encoding: str = "utf-8") -> None:
    """Encode ``text`` and write it with :func:`write_atomic`."""

    write_atomic(path, text.encode(encoding))


__all__ = ["resolve_out_path", "write_atomic", "write_text_atomic"]
