"""Operation result entities shared by every service operation.

A service operation never raises to its caller. It returns a Result that is
either successful (optionally carrying a payload) or failed with a
ServiceError describing what went wrong.
"""

from enum import StrEnum
from typing import Any

from attrs import define, field


class ErrorKind(StrEnum):
    """Failure categories reported through a Result."""

    # Expected, named outcomes: duplicate email, wrong password, not found
    BUSINESS = "business"
    # Storage errors and unexpected exceptions caught at the service boundary
    INFRASTRUCTURE = "infrastructure"


@define(frozen=True, slots=True)
class ServiceError:
    """Typed failure carried by an unsuccessful Result.

    ``cause`` holds the raw exception only for operations that report the
    underlying error instead of a fixed message.
    """

    kind: ErrorKind
    message: str
    cause: BaseException | None = field(default=None, eq=False)

    @classmethod
    def business(cls, message: str) -> "ServiceError":
        return cls(kind=ErrorKind.BUSINESS, message=message)

    @classmethod
    def infrastructure(
        cls, message: str, cause: BaseException | None = None
    ) -> "ServiceError":
        return cls(kind=ErrorKind.INFRASTRUCTURE, message=message, cause=cause)

    @classmethod
    def from_exception(cls, cause: BaseException) -> "ServiceError":
        """Wrap an unexpected exception, keeping the exception object itself."""
        return cls(
            kind=ErrorKind.INFRASTRUCTURE,
            message=str(cause) or cause.__class__.__name__,
            cause=cause,
        )

    @property
    def is_business(self) -> bool:
        return self.kind is ErrorKind.BUSINESS

    @property
    def has_cause(self) -> bool:
        return self.cause is not None


@define(frozen=True, slots=True)
class Result[T]:
    """Discriminated success/failure value returned by service operations.

    Invariant: ``ok`` is False exactly when ``error`` is set. A successful
    result may carry an operation-specific ``value``; a failed one never does.
    """

    ok: bool
    value: T | None = None
    error: ServiceError | None = None

    def __attrs_post_init__(self) -> None:
        if self.ok and self.error is not None:
            raise ValueError("A successful result cannot carry an error")
        if not self.ok and self.error is None:
            raise ValueError("A failed result must carry an error")
        if not self.ok and self.value is not None:
            raise ValueError("A failed result cannot carry a value")

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def fail(cls, message: str) -> "Result[T]":
        """Create a business rejection."""
        return cls(ok=False, error=ServiceError.business(message))

    @classmethod
    def internal_error(cls, message: str) -> "Result[T]":
        """Create an infrastructure failure reported with a fixed message."""
        return cls(ok=False, error=ServiceError.infrastructure(message))

    @classmethod
    def from_exception(cls, cause: BaseException) -> "Result[T]":
        """Create an infrastructure failure that carries the raw exception."""
        return cls(ok=False, error=ServiceError.from_exception(cause))

    @property
    def error_message(self) -> str | None:
        return self.error.message if self.error else None

    def to_payload(self, value_key: str | None = None) -> dict[str, Any]:
        """Render the ``{ok, error, <value_key>}`` shape used by transports.

        Args:
            value_key: Name under which a successful value is exposed, such as
                "token" or "podcast". The value is omitted when None.
        """
        payload: dict[str, Any] = {"ok": self.ok, "error": self.error_message}
        if value_key is not None and self.ok:
            payload[value_key] = self.value
        return payload
