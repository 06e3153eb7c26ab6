"""Shared application-layer helpers."""

from .result import OperationResult, describe_validation_error, execute

__all__ = [
    "OperationResult",
    "describe_validation_error",
    "execute",
]
