"""
Persistence writers

Two strategies for replacing the kubeconfig contents:

- atomic: write a temporary file next to the target, fsync it and rename
  it over the target, so a crash leaves either the old or the new file
- truncate: rewrite the original file in place (seek, truncate, write,
  flush), kept for compatibility with tools that watch the inode
"""

import contextlib
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import BinaryIO, Callable, Union

from .errors import PersistError

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def fsync_directory(directory: PathLike) -> None:
    """Flush a directory entry so a completed rename survives power loss"""
    if os.name == "nt":
        return
    fd = os.open(directory, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


def write_atomic(path: PathLike, data: bytes) -> None:
    """
    Replace the file at ``path`` with ``data`` via temp file and rename

    Symlinks are resolved first so the link target is replaced and the
    link itself is kept. Permission bits of the existing file are copied.

    Raises:
        PersistError: if any step fails; the file holds either the old
            or the new content, never a partial one
    """
    target = Path(os.path.realpath(path))

    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
    except OSError as e:
        raise PersistError(path, f"cannot create temporary file: {e}", may_be_inconsistent=False) from e

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        if target.exists():
            os.chmod(tmp_path, stat.S_IMODE(target.stat().st_mode))
        os.replace(tmp_path, target)
    except OSError as e:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        raise PersistError(path, str(e), may_be_inconsistent=False) from e

    try:
        fsync_directory(target.parent)
    except OSError as e:
        raise PersistError(
            path,
            f"new content is in place but the rename was not synced: {e}",
            may_be_inconsistent=False,
        ) from e

    logger.debug(f"Atomically wrote {len(data)} bytes to {target}")


def rewrite_handle(handle: BinaryIO, data: bytes) -> None:
    """Reposition, truncate, write and flush an open read/write handle"""
    handle.seek(0)
    handle.truncate(0)
    written = handle.write(data)
    if written is not None and written != len(data):
        raise OSError(f"short write: {written} of {len(data)} bytes")
    handle.flush()
    os.fsync(handle.fileno())


def write_in_place(path: PathLike, data: bytes) -> None:
    """
    Rewrite the file at ``path`` in place

    Raises:
        PersistError: if any step fails; the file may be empty or partial
    """
    try:
        with open(path, "r+b") as handle:
            rewrite_handle(handle, data)
    except OSError as e:
        raise PersistError(path, str(e)) from e

    logger.debug(f"Rewrote {path} in place ({len(data)} bytes)")


WRITERS: dict[str, Callable[[PathLike, bytes], None]] = {
    "atomic": write_atomic,
    "truncate": write_in_place,
}


def get_writer(mode: str) -> Callable[[PathLike, bytes], None]:
    """Look up a writer by write mode name"""
    try:
        return WRITERS[mode]
    except KeyError:
        raise ValueError(f"Unknown write mode: {mode}") from None
