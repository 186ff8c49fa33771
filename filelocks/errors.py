from __future__ import annotations

from typing import Sequence


class FileLockError(Exception):
    """Base error for lock failures.

    The structured fields are always populated where they apply, so callers can
    branch on them instead of parsing the message.
    """

    def __init__(
        self,
        message: str,
        *,
        description: str | None = None,
        path: str | None = None,
        member_count: int | None = None,
        rolled_back_count: int | None = None,
    ) -> None:
        super().__init__(message)
        self.description = description
        self.path = path
        self.member_count = member_count
        self.rolled_back_count = rolled_back_count


class InvalidOptionError(FileLockError, ValueError):
    pass


class FileLockAcquireError(FileLockError, RuntimeError):
    @classmethod
    def for_file(cls, description: str, path: str) -> FileLockAcquireError:
        return cls(
            f"Failed to acquire {description} lock on {path}",
            description=description,
            path=path,
        )

    @classmethod
    def for_group(cls, member_count: int, rolled_back_count: int) -> FileLockAcquireError:
        return cls(
            f"Failed to acquire lock on group of {member_count} files; "
            f"rolled back {rolled_back_count} files.",
            member_count=member_count,
            rolled_back_count=rolled_back_count,
        )


class FileLockReleaseError(FileLockError, RuntimeError):
    def __init__(self, message: str, *, failures: Sequence[FileLockReleaseError] = (), **fields) -> None:
        super().__init__(message, **fields)
        self.failures = tuple(failures)

    @classmethod
    def for_file(cls, description: str, path: str) -> FileLockReleaseError:
        return cls(
            f"Failed to release {description} lock on {path}",
            description=description,
            path=path,
        )

    @classmethod
    def for_group(
        cls, member_count: int, failures: Sequence[FileLockReleaseError] = ()
    ) -> FileLockReleaseError:
        return cls(
            f"Failed to release lock on group of {member_count} files.",
            member_count=member_count,
            failures=failures,
        )
