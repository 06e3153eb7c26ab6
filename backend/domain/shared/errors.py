"""
Domain exceptions.

Typed exceptions shared by the menu, subscription and cart contexts.
Application handlers translate them into failed OperationResults.
"""

from __future__ import annotations


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all domain errors.

    Attributes:
        code: Stable machine-readable error code.
    """

    code = "DOMAIN_ERROR"


# ═══════════════════════════════════════════════════════════
# LOOKUP / VALIDATION
# ═══════════════════════════════════════════════════════════


class NotFoundError(DomainError):
    """
    Referenced resource does not exist.

    Raised when:
    - Menu, plate, section or option id is unknown
    - Subscription, day or meal id is unknown
    - Cart or cart item id is unknown

    Example:
        >>> raise NotFoundError("Menu abc123 not found")
    """

    code = "NOT_FOUND"


class ValidationFailedError(DomainError, ValueError):
    """
    Input validation failed.

    Raised when:
    - A required section has no selection
    - A quantity <= 0 is submitted
    - A price is negative
    - An ingredient/option payload is malformed

    Example:
        >>> raise ValidationFailedError("Quantity must be positive, got 0")
    """

    code = "VALIDATION_FAILED"


class InvalidStatusTransitionError(ValidationFailedError):
    """
    Subscription status change not allowed from the current status.

    Example:
        >>> raise InvalidStatusTransitionError("Cannot resume a cancelled subscription")
    """

    code = "INVALID_STATUS_TRANSITION"


# ═══════════════════════════════════════════════════════════
# CONFLICTS
# ═══════════════════════════════════════════════════════════


class ConflictingResourceError(DomainError):
    """
    Resource conflict detected.

    Raised when:
    - Cart is already bound to a different restaurant
    - Optimistic transaction write found a stale document

    Example:
        >>> raise ConflictingResourceError(
        ...     "Your cart contains items from Trattoria. "
        ...     "Please checkout or clear cart before adding items from Sushi Bar"
        ... )
    """

    code = "CONFLICT"


class TransactionConflictError(ConflictingResourceError):
    """
    A document read inside a transaction changed before commit.

    Retried by DocumentStore.run_transaction; surfaced only once
    all attempts are exhausted.
    """

    code = "TRANSACTION_CONFLICT"


# ═══════════════════════════════════════════════════════════
# RECOVERABLE
# ═══════════════════════════════════════════════════════════


class StaleVariantCacheError(DomainError):
    """
    Selection combination has no precomputed variant.

    Always recovered by the customization resolver, which computes
    the ingredient list directly. Never surfaced to callers.
    """

    code = "STALE_VARIANT_CACHE"
