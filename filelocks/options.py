from __future__ import annotations

import enum
from dataclasses import dataclass

from filelocks.errors import InvalidOptionError


class LockFlag(enum.IntFlag):
    SHARED = 1
    EXCLUSIVE = 2
    NON_BLOCKING = 4
    BLOCKING = 8


KNOWN_FLAGS = LockFlag.SHARED | LockFlag.EXCLUSIVE | LockFlag.NON_BLOCKING | LockFlag.BLOCKING


class SharingMode(enum.Enum):
    SHARED = "shared"
    EXCLUSIVE = "exclusive"


class WaitMode(enum.Enum):
    NON_BLOCKING = "non-blocking"
    BLOCKING = "blocking"


@dataclass(frozen=True)
class LockOptions:
    sharing: SharingMode = SharingMode.SHARED
    wait: WaitMode = WaitMode.NON_BLOCKING

    def __post_init__(self) -> None:
        if not isinstance(self.sharing, SharingMode):
            raise InvalidOptionError(f"Invalid sharing mode: {self.sharing!r}")
        if not isinstance(self.wait, WaitMode):
            raise InvalidOptionError(f"Invalid wait mode: {self.wait!r}")

    @classmethod
    def from_flags(cls, flags: int | None) -> LockOptions:
        """Validate a bitmask of LockFlag values.

        An axis with no flag set falls back to its default (shared, non-blocking).
        """
        if flags is None:
            return cls()
        flags = int(flags)
        if flags & ~int(KNOWN_FLAGS):
            raise InvalidOptionError(f"Lock options contain unknown flags: {flags:#x}")
        if flags & LockFlag.SHARED and flags & LockFlag.EXCLUSIVE:
            raise InvalidOptionError("Lock cannot be both shared and exclusive.")
        if flags & LockFlag.NON_BLOCKING and flags & LockFlag.BLOCKING:
            raise InvalidOptionError("Lock cannot be both non-blocking and blocking.")

        sharing = SharingMode.EXCLUSIVE if flags & LockFlag.EXCLUSIVE else SharingMode.SHARED
        wait = WaitMode.BLOCKING if flags & LockFlag.BLOCKING else WaitMode.NON_BLOCKING
        return cls(sharing=sharing, wait=wait)

    @classmethod
    def coerce(cls, value: LockOptions | int | None) -> LockOptions:
        if isinstance(value, LockOptions):
            return value
        if value is None or isinstance(value, int):
            return cls.from_flags(value)
        raise InvalidOptionError(f"Unsupported lock options value: {value!r}")

    @property
    def exclusive(self) -> bool:
        return self.sharing is SharingMode.EXCLUSIVE

    @property
    def blocking(self) -> bool:
        return self.wait is WaitMode.BLOCKING

    @property
    def flags(self) -> LockFlag:
        sharing = LockFlag.EXCLUSIVE if self.exclusive else LockFlag.SHARED
        wait = LockFlag.BLOCKING if self.blocking else LockFlag.NON_BLOCKING
        return sharing | wait

    @property
    def description(self) -> str:
        return f"{self.sharing.value} ({self.wait.value})"


DEFAULT_OPTIONS = LockOptions()
