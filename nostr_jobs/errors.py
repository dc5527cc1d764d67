"""Error types raised by the record model and the codecs.

Validation failures are raised to the caller as typed exceptions; nothing in
this package logs and swallows them.
"""

from __future__ import annotations


class JobListingError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(JobListingError):
    """A job listing violates one of its invariants."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class MissingField(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(field, f"Missing required field: {field}")


class InvalidDateFormat(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(field, f"Invalid date format in: {field}")


class InvalidUrl(ValidationError):
    def __init__(self, field: str) -> None:
        super().__init__(field, f"Invalid URL in: {field}")


class InvalidConfiguration(ValidationError):
    def __init__(self, reason: str) -> None:
        super().__init__("eligible_worker_type", f"Invalid configuration: {reason}")
        self.reason = reason


class InvalidKind(JobListingError):
    """An event does not carry the job-listing kind."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Invalid event kind: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual
