"""Exception hierarchy shared by detection and filling."""

from __future__ import annotations


class SmartfillError(Exception):
    """Base class for every error raised by the engine."""


class InvalidArgumentError(SmartfillError, ValueError):
    """Raised when an entry point receives a structurally invalid argument."""


class SnapshotError(SmartfillError, RuntimeError):
    """Raised when a live page could not be captured."""


class FieldFillError(SmartfillError):
    """A single field could not be written. Never escapes a fill batch."""

    retryable = False

    def __init__(self, field_name: str, reason: str) -> None:
        super().__init__(f"{field_name}: {reason}")
        self.field_name = field_name
        self.reason = reason


class ValueMissingError(FieldFillError):
    """No value in the bag resolves to the field."""


class UnsupportedFieldTypeError(FieldFillError):
    """The field type cannot be written programmatically."""


class WriteRejectedError(FieldFillError):
    """The control refused the value (no matching option, value reverted...)."""

    retryable = True


class ElementGoneError(WriteRejectedError):
    """The referenced element is no longer attached to its page."""
