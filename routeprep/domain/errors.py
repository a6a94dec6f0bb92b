"""Typed errors raised while ingesting a routing problem.

Every failure surfaced by the package carries a coarse kind and a
human-readable message. The kind tells the caller who is at fault:
INPUT for malformed or inconsistent caller data, ROUTING for routing
backend resolution or configuration failures.

All errors inherit from RoutePrepError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional


class ErrorKind(Enum):
    """Coarse error classification, valued with the legacy exit codes."""

    INPUT = 2
    ROUTING = 3


@dataclass
class RoutePrepError(Exception):
    """Base error for the ingestion layer.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    kind: ClassVar[ErrorKind]

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InputError(RoutePrepError):
    """Caller data is malformed or inconsistent.

    Attributes:
        key: Name of the offending document key, when known
    """

    key: Optional[str] = None

    kind: ClassVar[ErrorKind] = ErrorKind.INPUT


@dataclass
class RoutingError(RoutePrepError):
    """A routing backend could not be built or failed to answer.

    Attributes:
        profile: Routing profile the backend was requested for
    """

    profile: str = ""

    kind: ClassVar[ErrorKind] = ErrorKind.ROUTING
