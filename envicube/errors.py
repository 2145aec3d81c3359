from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class ErrorKind(enum.Enum):
    CONFIGURATION = "configuration"
    RANGE = "range"
    IO = "io"
    SHORT_READ = "short_read"
    INDEX = "index"


class CubeError(RuntimeError):
    def __init__(self, kind: ErrorKind, message: str, fatal: bool = False) -> None:
        super().__init__(message)
        self.kind = kind
        self.fatal = fatal


@dataclass(frozen=True)
class Status:
    """Outcome of a read, write or parse operation.

    ``fatal`` marks failures the caller cannot proceed from (e.g. a mandatory
    header that yields no values); other failures leave prior state intact.
    """

    ok: bool
    kind: Optional[ErrorKind] = None
    message: str = ""
    fatal: bool = False

    @classmethod
    def success(cls, message: str = "") -> "Status":
        return cls(True, message=message)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, fatal: bool = False) -> "Status":
        return cls(False, kind, message, fatal)

    def __bool__(self) -> bool:
        return self.ok

    def raise_for_status(self) -> None:
        if not self.ok:
            raise CubeError(self.kind or ErrorKind.CONFIGURATION, self.message, self.fatal)
