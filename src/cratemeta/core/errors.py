"""Errors raised while running and decoding ``cargo metadata``."""

from __future__ import annotations


class CargoMetadataError(RuntimeError):
    """Base class for every failure of a metadata request."""


class CargoProcessError(CargoMetadataError):
    """Raised when the cargo executable cannot be spawned or waited on."""

    def __init__(self, executable: str, reason: str) -> None:
        self.executable = executable
        super().__init__(f"could not run {executable!r}: {reason}")


class CargoEncodingError(CargoMetadataError):
    """Raised when cargo succeeded but its stdout is not valid UTF-8."""


class CargoToolError(CargoMetadataError):
    """
    Raised when cargo exits with a failure status.

    ``message`` is cargo's own diagnostic (stderr, surrounding whitespace
    trimmed), kept verbatim so callers can match on known messages.
    """

    def __init__(self, message: str, returncode: int | None = None) -> None:
        self.message = message
        self.returncode = returncode
        super().__init__(message)


class CargoDecodeError(CargoMetadataError):
    """Raised when stdout is text but not the metadata document we expect."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)

    @classmethod
    def unsupported_version(cls, found: int, expected: int) -> CargoDecodeError:
        """Return an error for a report in a format version we cannot read."""
        return cls(f"unsupported metadata format version {found} (expected {expected})")

    @classmethod
    def inconsistent(cls, problem: str) -> CargoDecodeError:
        """Return an error for a report whose package graph does not hold together."""
        return cls(f"inconsistent metadata graph: {problem}")
