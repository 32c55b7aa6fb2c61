"""
Outcome type returned by every public service operation.

A call produces exactly one of:

    - success: a payload (possibly an empty list, or ``None`` for writes)
    - empty: the looked-up entity does not exist (not an error)
    - unavailable: a read failed, or a required entity is missing
    - failure: a mutation could not be committed

The ``read_operation`` and ``write_operation`` decorators are the boundary
where store exceptions are caught, logged and translated. Nothing
psycopg-specific ends up in a Result.
"""

import functools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

import psycopg

from beeyard.errors import BeeyardError, DataUnavailable, OperationFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")

READ_FAILED = "data not available"
WRITE_FAILED = "operation failed"


class Status(str, Enum):
    SUCCESS = "success"
    EMPTY = "empty"
    UNAVAILABLE = "unavailable"
    FAILURE = "failure"


@dataclass(frozen=True)
class Result(Generic[T]):
    status: Status
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: T = None) -> "Result[T]":
        return cls(Status.SUCCESS, value)

    @classmethod
    def empty(cls) -> "Result[T]":
        return cls(Status.EMPTY)

    @classmethod
    def unavailable(cls, error: str = READ_FAILED) -> "Result[T]":
        return cls(Status.UNAVAILABLE, error=error)

    @classmethod
    def failure(cls, error: str = WRITE_FAILED) -> "Result[T]":
        return cls(Status.FAILURE, error=error)

    @classmethod
    def of(cls, value: Optional[T]) -> "Result[T]":
        """Success when a value was found, empty otherwise."""
        return cls.empty() if value is None else cls.success(value)

    @property
    def is_success(self) -> bool:
        return self.status is Status.SUCCESS

    @property
    def is_empty(self) -> bool:
        return self.status is Status.EMPTY

    @property
    def is_unavailable(self) -> bool:
        return self.status is Status.UNAVAILABLE

    @property
    def is_failure(self) -> bool:
        return self.status is Status.FAILURE

    def unwrap(self) -> Optional[T]:
        """Return the payload, or raise the error this outcome stands for."""
        if self.status is Status.UNAVAILABLE:
            raise DataUnavailable(self.error)
        if self.status is Status.FAILURE:
            raise OperationFailure(self.error)
        return self.value


def read_operation(func: Callable[..., Result[Any]]) -> Callable[..., Result[Any]]:
    """Report store errors and bad arguments raised by ``func`` as an unavailable result."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Result[Any]:
        try:
            return func(*args, **kwargs)
        except (DataUnavailable, OperationFailure, TypeError, ValueError) as e:
            logger.warning("%s: %s", func.__qualname__, e)
            return Result.unavailable(str(e))
        except (psycopg.Error, BeeyardError):
            logger.exception("%s failed", func.__qualname__)
            return Result.unavailable()

    return wrapper


def write_operation(func: Callable[..., Result[Any]]) -> Callable[..., Result[Any]]:
    """Report store errors and bad arguments raised by ``func`` as a failed result."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Result[Any]:
        try:
            return func(*args, **kwargs)
        except (DataUnavailable, OperationFailure, TypeError, ValueError) as e:
            logger.warning("%s: %s", func.__qualname__, e)
            return Result.failure(str(e))
        except (psycopg.Error, BeeyardError):
            logger.exception("%s failed", func.__qualname__)
            return Result.failure()

    return wrapper
