from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, BinaryIO, Union

from filelocks import backend
from filelocks.errors import FileLockAcquireError, FileLockReleaseError
from filelocks.options import LockOptions

logger = logging.getLogger(__name__)

LoggerLike = Union[logging.Logger, logging.LoggerAdapter]


class FileLock:
    """Advisory lock on a single file.

    The handle is opened lazily on the first acquire attempt and kept until a
    successful release closes it. Failed attempts never change ``is_acquired``.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        options: LockOptions | int | None = None,
        logger: LoggerLike | None = None,
    ) -> None:
        self._path = Path(path)
        self._options = LockOptions.coerce(options)
        self._logger: LoggerLike | None = logger
        self._handle: BinaryIO | None = None
        self._acquired = False

    @classmethod
    def create(cls, path: str | os.PathLike[str], options: LockOptions | int | None = None) -> FileLock:
        return cls(path, options)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(path={str(self._path)!r}, "
            f"options={self.description!r}, acquired={self._acquired})"
        )

    def __enter__(self) -> FileLock:
        return self.acquire()

    def __exit__(self, *exc_info: Any) -> None:
        self.release()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def options(self) -> LockOptions:
        return self._options

    @property
    def logger(self) -> LoggerLike:
        return self._logger if self._logger is not None else logger

    @property
    def description(self) -> str:
        return self._options.description

    def set_file(self, path: str | os.PathLike[str]) -> FileLock:
        """Point the lock at another file.

        Only the target changes. A handle that is still open keeps its OS lock
        on the previous file and is the one ``release`` unlocks and closes;
        the new file is opened by the first acquire after that.
        """
        self._path = Path(path)
        return self

    def set_options(self, options: LockOptions | int | None) -> FileLock:
        self._options = LockOptions.coerce(options)
        return self

    def with_logger(self, logger: LoggerLike | None) -> FileLock:
        self._logger = logger
        return self

    def is_acquired(self) -> bool:
        return self._acquired

    def is_shared(self) -> bool:
        return not self._options.exclusive

    def is_exclusive(self) -> bool:
        return self._options.exclusive

    def is_blocking(self) -> bool:
        return self._options.blocking

    def is_non_blocking(self) -> bool:
        return not self._options.blocking

    def has_resource(self) -> bool:
        return self._handle is not None and not self._handle.closed

    def get_resource(self) -> BinaryIO | None:
        return self._handle

    def acquire(self) -> FileLock:
        if not self._lock_handle():
            self.logger.debug("Failed to acquire %(desc)s lock on %(file)s.", self._log_fields())
            raise FileLockAcquireError.for_file(self.description, str(self._path))

        self._acquired = True
        self.logger.debug("Successfully acquired %(desc)s lock on %(file)s.", self._log_fields())
        return self

    def release(self) -> FileLock:
        handle = self._handle
        if (
            handle is None
            or handle.closed
            or not backend.release_lock(handle)
            or not backend.close_handle(handle)
        ):
            self.logger.debug("Failed to release %(desc)s lock on %(file)s.", self._log_fields())
            raise FileLockReleaseError.for_file(self.description, str(self._path))

        self._handle = None
        self._acquired = False
        self.logger.debug("Successfully released %(desc)s lock on %(file)s.", self._log_fields())
        return self

    def _lock_handle(self) -> bool:
        handle = self._handle
        if handle is None or handle.closed:
            try:
                handle = backend.open_handle(self._path)
            except OSError:
                return False
            self._handle = handle
        return backend.request_lock(handle, self._options.exclusive, self._options.blocking)

    def _log_fields(self) -> dict[str, str]:
        return {"desc": self.description, "file": str(self._path)}
