"""Identifier generation.

Entities use opaque string ids. Services that mint ids accept an
IdFactory so tests can make them predictable.
"""

from typing import Callable
from uuid import uuid4

IdFactory = Callable[[], str]


def new_id() -> str:
    """Generate new random id (UUID4 hex)."""
    return uuid4().hex
