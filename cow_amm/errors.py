"""
Exceptions raised while discovering and verifying CoW AMMs.
"""

from __future__ import annotations
from enum import Enum


class CowAmmError(Exception):
    """Base class for all errors of this package."""


class ConfigurationError(CowAmmError):
    """Missing or malformed configuration. Entry points exit on it."""


class DecodeError(CowAmmError):
    """Data returned by a contract does not have the expected shape."""


class UnknownEncoding(DecodeError):
    """An order field hash matches none of the canonical constants."""


class InvalidInteraction(CowAmmError):
    """An interaction of an order hint sends a non-zero value."""


class RevertKind(Enum):
    """Closed set of reasons why the helper refused to produce an order hint."""

    POOL_DOES_NOT_EXIST = "pool does not exist"
    POOL_IS_CLOSED = "pool is closed"
    REVERT_REASON = "reverted"
    RAW = "unrecognized revert"


class HelperRevert(CowAmmError):
    """The helper contract reverted while computing an order hint."""

    def __init__(self, kind: RevertKind, detail: str = "") -> None:
        self.kind = kind
        self.detail = detail
        message = kind.value if not detail else f"{kind.value}: {detail}"
        super().__init__(message)


class SimulationReverted(CowAmmError):
    """The settlement simulation reverted as a whole."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"simulation reverted: {reason}")
