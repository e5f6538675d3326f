"""Error taxonomy for the API client and a tagged result type for callers.

Every API operation raises on failure:

- ``TransportFailure``: the request never got a response (DNS, refused
  connection, timeout).  ``status`` is ``None``; ``cause`` is the underlying
  ``requests`` exception.
- ``ServerFailure``: the server answered with a non-2xx status.
- ``ValidationFailure``: rejected locally before anything was sent.

Code that prefers a value over an exception wraps the call in
:func:`attempt`, which returns ``Success`` or ``Failure``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")


class JobFinderError(Exception):
    """Base class for every error raised by jobfinder."""

    kind = "error"

    @property
    def user_message(self) -> str:
        return str(self) or "Something went wrong"


class ValidationFailure(JobFinderError):
    kind = "validation"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ApiError(JobFinderError):
    kind = "api"

    def __init__(
        self,
        message: str = "",
        *,
        status: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.cause = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status!r}, message={self.message!r})"


class TransportFailure(ApiError):
    kind = "transport"

    @property
    def user_message(self) -> str:
        return "Could not reach the server. Check your connection and try again."


class ServerFailure(ApiError):
    kind = "server"

    @property
    def user_message(self) -> str:
        if self.message:
            return self.message
        return f"Server error ({self.status})"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    ok = True


@dataclass(frozen=True)
class Failure:
    kind: str
    detail: str
    status: int | None = None
    ok = False


Result = Union[Success[T], Failure]


def attempt(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Result[T]:
    """Call *fn* and fold any jobfinder error into a ``Failure``."""
    try:
        return Success(fn(*args, **kwargs))
    except ApiError as exc:
        return Failure(kind=exc.kind, detail=exc.user_message, status=exc.status)
    except JobFinderError as exc:
        return Failure(kind=exc.kind, detail=exc.user_message)
