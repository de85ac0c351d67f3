"""
Shared temporary file helpers.
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator


logger = logging.getLogger(__name__)

PREFIX = "mdeps-"


def new_temp_path(suffix: str = "") -> Path:
    """Create an empty temporary file that the caller owns."""
    fd, name = tempfile.mkstemp(prefix=PREFIX, suffix=suffix)
    os.close(fd)
    return Path(name)


@contextmanager
def temporary_path(suffix: str = "") -> Iterator[Path]:
    """Yield a fresh temporary file path and remove the file afterwards."""
    path = new_temp_path(suffix)
    try:
        yield path
    finally:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        else:
            logger.debug("Removed scratch file %s", path)


def check_writable(path: Path) -> None:
    """Raise OSError if ``path`` cannot be created or overwritten."""
    path = Path(path)
    if path.is_dir():
        raise IsADirectoryError(f"Is a directory: '{path}'")
    parent = path.parent
    if not parent.is_dir():
        raise FileNotFoundError(f"No such directory: '{parent}'")
    if not os.access(parent, os.W_OK) or (path.exists() and not os.access(path, os.W_OK)):
        raise PermissionError(f"Permission denied: '{path}'")


@contextmanager
def replace_on_success(path: Path) -> Iterator[IO[bytes]]:
    """Write to a scratch file next to ``path``; move it into place only if no error escapes."""
    path = Path(path)
    fd, name = tempfile.mkstemp(prefix=f".{PREFIX}", suffix=path.suffix, dir=path.parent)
    scratch = Path(name)
    try:
        with os.fdopen(fd, "wb") as f:
            yield f
    except BaseException:
        scratch.unlink(missing_ok=True)
        raise
    os.replace(scratch, path)
