from __future__ import annotations

import logging
import os
from typing import Any, Iterator

from filelocks.errors import FileLockAcquireError, FileLockReleaseError
from filelocks.file_lock import FileLock, LoggerLike
from filelocks.options import LockOptions

logger = logging.getLogger(__name__)


class FileLockGroup:
    """Acquire and release several file locks as one unit.

    Members are kept in the order given. ``acquire`` is all-or-nothing: on the
    first member failure every member already holding its lock is released again.
    ``release`` stops at the first member failure; ``release_all`` keeps going.

    ``set_locks`` replaces the members without releasing the previous ones.
    Release the group first if it may hold locks.
    """

    def __init__(
        self,
        options: LockOptions | int | None = None,
        logger: LoggerLike | None = None,
        *files: str | os.PathLike[str],
    ) -> None:
        self._options = LockOptions.coerce(options)
        self._logger: LoggerLike | None = logger
        self._locks: list[FileLock] = []
        self.set_locks(*files)

    @classmethod
    def create(cls, options: LockOptions | int | None = None, *files: str | os.PathLike[str]) -> FileLockGroup:
        return cls(options, None, *files)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(files={len(self._locks)}, options={self._options.description!r})"

    def __len__(self) -> int:
        return len(self._locks)

    def __iter__(self) -> Iterator[FileLock]:
        return iter(self._locks)

    def __enter__(self) -> FileLockGroup:
        return self.acquire()

    def __exit__(self, *exc_info: Any) -> None:
        self.release()

    @property
    def options(self) -> LockOptions:
        return self._options

    @property
    def logger(self) -> LoggerLike:
        return self._logger if self._logger is not None else logger

    def set_options(self, options: LockOptions | int | None) -> FileLockGroup:
        self._options = LockOptions.coerce(options)
        return self

    def with_logger(self, logger: LoggerLike | None) -> FileLockGroup:
        self._logger = logger
        return self

    def set_locks(self, *files: str | os.PathLike[str]) -> FileLockGroup:
        self._locks = [FileLock(path, self._options, self._logger) for path in files]
        return self

    def get_locks(self) -> list[FileLock]:
        return list(self._locks)

    def is_acquired(self) -> bool:
        return all(lock.is_acquired() for lock in self._locks)

    def acquire(self) -> FileLockGroup:
        try:
            for lock in self._locks:
                lock.with_logger(self._logger)
                lock.set_options(self._options)
                lock.acquire()
        except FileLockAcquireError as exc:
            rolled_back = self._rollback_acquired_locks()
            self.logger.debug(
                "Failed to acquire lock on group of %(number)s files; rolled back %(rollback)s files.",
                {"number": len(self._locks), "rollback": len(rolled_back)},
            )
            raise FileLockAcquireError.for_group(len(self._locks), len(rolled_back)) from exc

        self.logger.debug(
            "Successfully acquired %(number)s locks on grouped files.",
            {"number": len(self._locks)},
        )
        return self

    def release(self) -> FileLockGroup:
        try:
            for lock in self._locks:
                lock.release()
        except FileLockReleaseError as exc:
            self.logger.debug(
                "Failed to release lock on group of %(number)s files.",
                {"number": len(self._locks)},
            )
            raise FileLockReleaseError.for_group(len(self._locks), [exc]) from exc

        self.logger.debug(
            "Successfully released %(number)s locks on grouped files.",
            {"number": len(self._locks)},
        )
        return self

    def release_all(self) -> FileLockGroup:
        failures: list[FileLockReleaseError] = []
        for lock in self._locks:
            if not lock.has_resource():
                continue
            try:
                lock.release()
            except FileLockReleaseError as exc:
                failures.append(exc)

        if failures:
            self.logger.debug(
                "Failed to release lock on group of %(number)s files.",
                {"number": len(self._locks)},
            )
            raise FileLockReleaseError.for_group(len(self._locks), failures) from failures[0]

        self.logger.debug(
            "Successfully released %(number)s locks on grouped files.",
            {"number": len(self._locks)},
        )
        return self

    def _rollback_acquired_locks(self) -> list[FileLock]:
        # A release failure during rollback propagates unchanged.
        return [lock.release() for lock in self._locks if lock.is_acquired()]
