"""Document store port (interface).

Defines the contract of the persistent document database used by the
repositories: get/set/update/delete by id, query by equality, and
optimistic transactions with automatic retry on conflict.

Documents are plain dicts keyed by field name; the store never interprets
them beyond the "id" key.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, TypeVar

Document = Dict[str, Any]
TResult = TypeVar("TResult")


class ITransaction(Protocol):
    """
    Handle passed to the function run by IDocumentStore.run_transaction.

    Reads record the version of each document seen; writes are buffered
    and applied on commit only if none of the read documents changed.
    """

    async def get(self, collection: str, doc_id: str) -> Optional[Document]:
        """Read a document, recording its version for the commit check."""
        ...

    def set(self, collection: str, doc_id: str, document: Document) -> None:
        """Buffer a full document write (create or replace)."""
        ...

    def update(self, collection: str, doc_id: str, fields: Document) -> None:
        """Buffer a partial update of top-level fields."""
        ...

    def delete(self, collection: str, doc_id: str) -> None:
        """Buffer a document deletion."""
        ...


TransactionFunction = Callable[[ITransaction], Awaitable[TResult]]


class IDocumentStore(Protocol):
    """
    Interface for document persistence.

    Implementations:
    - InMemoryDocumentStore (tests, local development)
    - MongoDocumentStore (production, motor)

    Example usage (application layer):
        >>> async def rename(tx: ITransaction) -> Document:
        ...     doc = await tx.get("menus", menu_id)
        ...     doc["name"] = "Dinner"
        ...     tx.set("menus", menu_id, doc)
        ...     return doc
        ...
        >>> menu_doc = await store.run_transaction(rename)
    """

    async def get_by_id(self, collection: str, doc_id: str) -> Optional[Document]:
        """Return the document with the given id, or None if it does not exist."""
        ...

    async def query_by_equality(
        self,
        collection: str,
        field: str,
        value: Any,
        limit: Optional[int] = None,
    ) -> List[Document]:
        """Return documents whose top-level field equals value."""
        ...

    async def set(self, collection: str, doc_id: str, document: Document) -> None:
        """Create or replace a document."""
        ...

    async def update(self, collection: str, doc_id: str, fields: Document) -> None:
        """
        Update top-level fields of an existing document.

        Raises:
            NotFoundError: If the document does not exist
        """
        ...

    async def delete(self, collection: str, doc_id: str) -> bool:
        """Delete a document. Returns True if it existed."""
        ...

    async def run_transaction(self, fn: TransactionFunction[TResult]) -> TResult:
        """
        Run fn inside an optimistic transaction.

        The whole function is re-run on TransactionConflictError until the
        configured attempt limit is reached, then the conflict is re-raised.
        Domain errors raised by fn abort the transaction without retry.
        """
        ...
