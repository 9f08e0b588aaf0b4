# url_analyser/errors.py
# Exception hierarchy. Every failure ends up as a FailureDescriptor on a Failed session.

from __future__ import annotations

from typing import Optional

from url_analyser.models import FailureDescriptor, FailureKind


class UrlAnalyserError(Exception):
    """Base class for all errors raised by url_analyser."""

    def to_descriptor(self) -> FailureDescriptor:
        return FailureDescriptor(kind="transport", message=str(self))


class TransportError(UrlAnalyserError):
    """
    The service could not be reached, or answered with a non-2xx status.

    `status_code` and `status_text` are None when no response arrived.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        status_text: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.status_text = status_text

    def to_descriptor(self) -> FailureDescriptor:
        return FailureDescriptor(
            kind="transport",
            message=self.message,
            status_code=self.status_code,
            status_text=self.status_text,
        )


class ParseError(UrlAnalyserError):
    """A 2xx response whose body does not have the shape of a report."""

    kind: FailureKind = "type_mismatch"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message

    def to_descriptor(self) -> FailureDescriptor:
        return FailureDescriptor(kind=self.kind, message=self.message, field=self.field)


class MissingFieldError(ParseError):
    kind: FailureKind = "missing_field"

    def __init__(self, field: str) -> None:
        super().__init__(field, f"Response is missing required field '{field}'")


class TypeMismatchError(ParseError):
    kind: FailureKind = "type_mismatch"

    def __init__(self, field: str, expected: str, got: object) -> None:
        super().__init__(
            field,
            f"Field '{field}' should be {expected}, got {type(got).__name__}",
        )
