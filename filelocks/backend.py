"""Single call site for the OS advisory-lock primitive.

The state machine in ``filelocks.file_lock`` only talks to these functions, so an
alternate backend can be swapped in without touching it.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO

import portalocker


def open_handle(path: str | Path) -> BinaryIO:
    # O_CREAT without O_TRUNC: create when missing, keep existing content.
    fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o666)
    try:
        return os.fdopen(fd, "r+b")
    except OSError:
        os.close(fd)
        raise


def request_lock(handle: BinaryIO, exclusive: bool, blocking: bool) -> bool:
    flags = portalocker.LockFlags.EXCLUSIVE if exclusive else portalocker.LockFlags.SHARED
    if not blocking:
        flags |= portalocker.LockFlags.NON_BLOCKING
    try:
        portalocker.lock(handle, flags)
    except (portalocker.exceptions.LockException, OSError):
        return False
    return True


def release_lock(handle: BinaryIO) -> bool:
    try:
        portalocker.unlock(handle)
    except (portalocker.exceptions.LockException, OSError):
        return False
    return True


def close_handle(handle: BinaryIO) -> bool:
    try:
        handle.close()
    except OSError:
        return False
    return True
