"""Optimistic transaction plumbing shared by the document store adapters.

A transaction records the version of every document it reads and buffers
every write. Committing is adapter specific: it must apply the buffered
writes only if each read document still has the recorded version, and
raise TransactionConflictError otherwise. run_with_retry re-runs the
whole read → recompute → write function on conflict.
"""

from abc import ABC, abstractmethod
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, TypeVar

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from domain.shared.errors import TransactionConflictError
from domain.shared.ports.document_store import Document

logger = structlog.get_logger(__name__)

TResult = TypeVar("TResult")
DocKey = Tuple[str, str]

# Sentinel version of a document that did not exist when read
MISSING = None


@dataclass(frozen=True)
class BufferedWrite:
    """One staged write: op is "set", "update" or "delete"."""

    op: str
    collection: str
    doc_id: str
    payload: Optional[Document] = None


class BufferedTransaction(ABC):
    """
    ITransaction implementation that stages writes in memory.

    Reads after a staged write of the same document see the staged state.
    Subclasses provide _read_versioned (document plus version token) and
    the store commits the buffer.
    """

    def __init__(self) -> None:
        self.reads: Dict[DocKey, Any] = {}
        self.writes: List[BufferedWrite] = []
        self._staged: Dict[DocKey, Optional[Document]] = {}

    @abstractmethod
    async def _read_versioned(self, collection: str, doc_id: str) -> Tuple[Optional[Document], Any]:
        """Return (document or None, version token or MISSING)."""

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        key = (collection, doc_id)
        if key in self._staged:
            staged = self._staged[key]
            return deepcopy(staged) if staged is not None else None

        document, version = await self._read_versioned(collection, doc_id)
        # First read wins: a later re-read must not hide a concurrent change
        self.reads.setdefault(key, version)
        return document

    def set(self, collection: str, doc_id: str, document: Document) -> None:
        payload = deepcopy(document)
        payload["id"] = doc_id
        self.writes.append(BufferedWrite("set", collection, doc_id, payload))
        self._staged[(collection, doc_id)] = deepcopy(payload)

    def update(self, collection: str, doc_id: str, fields: Document) -> None:
        payload = deepcopy(fields)
        self.writes.append(BufferedWrite("update", collection, doc_id, payload))
        key = (collection, doc_id)
        if self._staged.get(key) is not None:
            self._staged[key].update(deepcopy(payload))

    def delete(self, collection: str, doc_id: str) -> None:
        self.writes.append(BufferedWrite("delete", collection, doc_id))
        self._staged[(collection, doc_id)] = None


def _log_retry(retry_state: RetryCallState) -> None:
    logger.warning(
        "transaction_conflict_retry",
        attempt=retry_state.attempt_number,
        error=str(retry_state.outcome.exception()) if retry_state.outcome else None,
    )


async def run_with_retry(
    attempt: Callable[[], Awaitable[TResult]],
    max_attempts: int,
) -> TResult:
    """
    Run attempt until it succeeds or max_attempts conflicts occurred.

    Only TransactionConflictError is retried, with a short exponential
    backoff. Any other exception propagates immediately.

    Raises:
        TransactionConflictError: If every attempt conflicted
    """
    async for retry_attempt in AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=0.01, min=0.01, max=0.5),
        retry=retry_if_exception_type(TransactionConflictError),
        before_sleep=_log_retry,
        reraise=True,
    ):
        with retry_attempt:
            return await attempt()

    raise AssertionError("unreachable: AsyncRetrying either returns or re-raises")
