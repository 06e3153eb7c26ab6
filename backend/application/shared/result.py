"""Operation results returned by application handlers.

Handlers never let a DomainError or an input validation error cross the
application boundary: they return a failed OperationResult carrying the
error message and its machine-readable code. Unexpected exceptions (bugs,
storage outages) still propagate.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from pydantic import ValidationError

from domain.shared.errors import DomainError, ValidationFailedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """
    Outcome of a command or query.

    Attributes:
        success: True if the operation completed
        data: Payload on success (may be None for delete-like operations)
        error: Human-readable message on failure
        error_code: DomainError code on failure (e.g. "NOT_FOUND")
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "OperationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: DomainError) -> "OperationResult[T]":
        return cls(success=False, error=str(error), error_code=error.code)


def describe_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one line.

    Example:
        "basePrice: Input should be greater than or equal to 0"
    """
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ()))
        parts.append(f"{location}: {detail.get('msg')}" if location else str(detail.get("msg")))
    return "; ".join(parts)


async def execute(operation: str, action: Callable[[], Awaitable[T]]) -> OperationResult[T]:
    """
    Run an application operation and wrap its outcome.

    Args:
        operation: Name used in log records
        action: Coroutine factory doing the work

    Returns:
        OperationResult.ok(value) on success, OperationResult.fail(...) if
        the action raised a DomainError or a pydantic ValidationError
    """
    try:
        return OperationResult.ok(await action())
    except ValidationError as e:
        error = ValidationFailedError(describe_validation_error(e))
        logger.info(
            "Operation rejected invalid input",
            extra={"operation": operation, "error": str(error)},
        )
        return OperationResult.fail(error)
    except DomainError as e:
        logger.info(
            "Operation failed",
            extra={"operation": operation, "error_code": e.code, "error": str(e)},
        )
        return OperationResult.fail(e)
