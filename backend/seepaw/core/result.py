"""Result — uniform success/failure wrapper returned by every handler.

Invariants:
    - is_success=True ⇒ error is None
    - is_success=False ⇒ error is a user-facing message and code is 4xx/5xx
    - code doubles as the HTTP status the route responds with

Design Decisions:
    - Values over exceptions inside services: guards chain with `or`, first failure wins
      (ADR: uniform handler response shape, same as the pure guard functions)
    - Frozen dataclass: a Result is never mutated after a handler returns it
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a command or query."""
    is_success: bool
    value: T | None = None
    error: str | None = None
    code: int = 200

    @classmethod
    def success(cls, value: T | None = None, code: int = 200) -> "Result[T]":
        return cls(is_success=True, value=value, code=code)

    @classmethod
    def failure(cls, error: str, code: int) -> "Result[T]":
        return cls(is_success=False, error=error, code=code)


# Shorthands for the guard modules — keep the status codes readable at call sites

def bad_request(message: str) -> Result:
    return Result.failure(message, 400)


def forbidden(message: str) -> Result:
    return Result.failure(message, 403)


def not_found(message: str) -> Result:
    return Result.failure(message, 404)


def conflict(message: str) -> Result:
    return Result.failure(message, 409)


def unprocessable(message: str) -> Result:
    return Result.failure(message, 422)
