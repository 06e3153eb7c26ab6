"""In-memory document store.

Implements IDocumentStore with dictionaries, for tests and local
development. Every document carries an integer version that is bumped on
each write; transactions commit under an asyncio.Lock after checking the
versions they read.
"""

import asyncio
from copy import deepcopy
from typing import Any, Dict, List, Optional, Tuple

import structlog

from domain.shared.errors import NotFoundError, TransactionConflictError
from domain.shared.ports.document_store import Document, TransactionFunction, TResult
from infrastructure.config import get_transaction_max_attempts
from infrastructure.persistence.transaction import MISSING, BufferedTransaction, run_with_retry

logger = structlog.get_logger(__name__)

# collection → id → (version, document); a deleted document keeps its
# version with a None document so a recreation never reuses a version
Entry = Tuple[int, Optional[Document]]


class InMemoryTransaction(BufferedTransaction):
    """Transaction handle reading from an InMemoryDocumentStore."""

    def __init__(self, store: "InMemoryDocumentStore") -> None:
        super().__init__()
        self._store = store

    async def _read_versioned(self, collection: str, doc_id: str) -> Tuple[Optional[Document], Any]:
        entry = self._store._collection(collection).get(doc_id)
        if entry is None:
            return None, MISSING
        version, document = entry
        return (deepcopy(document) if document is not None else None), version


class InMemoryDocumentStore:
    """
    Dictionary-backed IDocumentStore.

    Storage: collection → id → (version, document). Documents are deep
    copied on the way in and out so callers never share state with the
    store. Deletes leave a tombstone: versions of an id only ever grow.

    Thread safety: single event loop only.
    Persistence: data lost on process restart.

    Example:
        >>> store = InMemoryDocumentStore()
        >>> await store.set("menus", "m1", {"name": "Lunch"})
        >>> (await store.get_by_id("menus", "m1"))["name"]
        'Lunch'
    """

    def __init__(self, max_attempts: Optional[int] = None) -> None:
        self._data: Dict[str, Dict[str, Entry]] = {}
        self._lock = asyncio.Lock()
        self._max_attempts = max_attempts or get_transaction_max_attempts()

    def _collection(self, collection: str) -> Dict[str, Entry]:
        return self._data.setdefault(collection, {})

    def _current(self, collection: str, doc_id: str) -> Optional[Document]:
        entry = self._collection(collection).get(doc_id)
        return entry[1] if entry else None

    def _next_version(self, collection: str, doc_id: str) -> int:
        entry = self._collection(collection).get(doc_id)
        return entry[0] + 1 if entry else 1

    def _write(self, collection: str, doc_id: str, document: Document) -> None:
        stored = deepcopy(document)
        stored["id"] = doc_id
        self._collection(collection)[doc_id] = (self._next_version(collection, doc_id), stored)

    def _remove(self, collection: str, doc_id: str) -> bool:
        if self._current(collection, doc_id) is None:
            return False
        self._collection(collection)[doc_id] = (self._next_version(collection, doc_id), None)
        return True

    def _begin(self) -> InMemoryTransaction:
        return InMemoryTransaction(self)

    async def get_by_id(self, collection: str, doc_id: str) -> Optional[Document]:
        document = self._current(collection, doc_id)
        return deepcopy(document) if document is not None else None

    async def query_by_equality(
        self,
        collection: str,
        field: str,
        value: Any,
        limit: Optional[int] = None,
    ) -> List[Document]:
        results: List[Document] = []
        for _, document in self._collection(collection).values():
            if document is not None and document.get(field) == value:
                results.append(deepcopy(document))
                if limit is not None and len(results) >= limit:
                    break
        return results

    async def set(self, collection: str, doc_id: str, document: Document) -> None:
        async with self._lock:
            self._write(collection, doc_id, document)

    async def update(self, collection: str, doc_id: str, fields: Document) -> None:
        async with self._lock:
            current = self._current(collection, doc_id)
            if current is None:
                raise NotFoundError(f"Document {collection}/{doc_id} not found")
            merged = deepcopy(current)
            merged.update(deepcopy(fields))
            self._write(collection, doc_id, merged)

    async def delete(self, collection: str, doc_id: str) -> bool:
        async with self._lock:
            return self._remove(collection, doc_id)

    async def run_transaction(self, fn: TransactionFunction[TResult]) -> TResult:
        """
        Run fn in an optimistic transaction, retrying on conflict.

        Raises:
            TransactionConflictError: If every attempt conflicted
            NotFoundError: If a buffered update targets a missing document
        """

        async def attempt() -> TResult:
            tx = self._begin()
            result = await fn(tx)
            await self._commit(tx)
            return result

        return await run_with_retry(attempt, self._max_attempts)

    async def _commit(self, tx: InMemoryTransaction) -> None:
        async with self._lock:
            for (collection, doc_id), version in tx.reads.items():
                entry = self._collection(collection).get(doc_id)
                current = entry[0] if entry else MISSING
                if current != version:
                    logger.info(
                        "transaction_conflict",
                        collection=collection,
                        doc_id=doc_id,
                        read_version=version,
                        current_version=current,
                    )
                    raise TransactionConflictError(
                        f"Document {collection}/{doc_id} changed during transaction"
                    )

            # All writes resolve before any is applied; a failing update
            # leaves the store untouched
            pending: Dict[Tuple[str, str], Optional[Document]] = {}
            for write in tx.writes:
                key = (write.collection, write.doc_id)
                if write.op == "set":
                    pending[key] = write.payload
                elif write.op == "update":
                    if key in pending:
                        base = pending[key]
                    else:
                        base = self._current(write.collection, write.doc_id)
                    if base is None:
                        raise NotFoundError(f"Document {write.collection}/{write.doc_id} not found")
                    merged = deepcopy(base)
                    merged.update(write.payload)
                    pending[key] = merged
                else:
                    pending[key] = None

            for (collection, doc_id), document in pending.items():
                if document is None:
                    self._remove(collection, doc_id)
                else:
                    self._write(collection, doc_id, document)
