"""MongoDB document store.

Implements IDocumentStore on MongoDB with motor. Documents are stored
with "_id" equal to their "id" and a "_version" token that changes on
every write. Transactions commit inside a MongoDB session transaction
(replica set or Atlas cluster required) using conditional writes on the
versions read, so a concurrent change makes the commit match nothing and
surface as TransactionConflictError.
"""

from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

import structlog
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorClientSession
from pymongo.errors import DuplicateKeyError, OperationFailure, PyMongoError

from domain.shared.errors import NotFoundError, TransactionConflictError
from domain.shared.ports.document_store import Document, TransactionFunction, TResult
from infrastructure.config import (
    get_mongodb_database,
    get_mongodb_uri,
    get_transaction_max_attempts,
)
from infrastructure.persistence.transaction import (
    MISSING,
    BufferedTransaction,
    BufferedWrite,
    run_with_retry,
)

logger = structlog.get_logger(__name__)

VERSION_FIELD = "_version"

# Server code of a write that collided with another open transaction
WRITE_CONFLICT_CODE = 112
RETRYABLE_LABELS = ("TransientTransactionError", "UnknownTransactionCommitResult")


def new_version() -> str:
    return uuid4().hex


def is_transient_transaction_error(error: PyMongoError) -> bool:
    """True when the server aborted the transaction and a rerun may succeed."""
    if any(error.has_error_label(label) for label in RETRYABLE_LABELS):
        return True
    return isinstance(error, OperationFailure) and error.code == WRITE_CONFLICT_CODE


def to_stored(doc_id: str, document: Document, version: str) -> Dict[str, Any]:
    """Domain document → stored document."""
    stored = {key: value for key, value in document.items() if key not in ("_id", VERSION_FIELD)}
    stored["id"] = doc_id
    stored["_id"] = doc_id
    stored[VERSION_FIELD] = version
    return stored


def from_stored(stored: Dict[str, Any]) -> Tuple[Document, Any]:
    """Stored document → (domain document, version)."""
    document = {key: value for key, value in stored.items() if key not in ("_id", VERSION_FIELD)}
    document.setdefault("id", str(stored["_id"]))
    return document, stored.get(VERSION_FIELD)


class MongoTransaction(BufferedTransaction):
    """Transaction handle reading from a MongoDocumentStore."""

    def __init__(self, store: "MongoDocumentStore") -> None:
        super().__init__()
        self._store = store

    async def _read_versioned(self, collection: str, doc_id: str) -> Tuple[Optional[Document], Any]:
        stored = await self._store._find_one(collection, {"_id": doc_id})
        if stored is None:
            return None, MISSING
        return from_stored(stored)


class MongoDocumentStore:
    """
    MongoDB implementation of IDocumentStore.

    Connection pooling is handled by motor; one store instance should be
    shared by all repositories.

    Example:
        >>> store = MongoDocumentStore()  # reads MONGODB_URI / MONGODB_DATABASE
        >>> await store.set("restaurants", "r1", {"name": "Trattoria"})
    """

    def __init__(
        self,
        client: Optional[AsyncIOMotorClient] = None,
        database_name: Optional[str] = None,
        max_attempts: Optional[int] = None,
    ) -> None:
        """
        Args:
            client: Motor client (if None, creates one from MONGODB_URI)
            database_name: Database (default: MONGODB_DATABASE)
            max_attempts: Transaction attempts (default: TRANSACTION_MAX_ATTEMPTS)

        Raises:
            ValueError: If no client is given and MONGODB_URI is not set
        """
        if client is None:
            uri = get_mongodb_uri()
            if not uri:
                raise ValueError(
                    "MONGODB_URI not configured. "
                    "Set MONGODB_URI, MONGODB_USER and MONGODB_PASSWORD environment variables."
                )
            client = AsyncIOMotorClient(uri)

        self._client = client
        self._db = client[database_name or get_mongodb_database()]
        self._max_attempts = max_attempts or get_transaction_max_attempts()

        logger.info("mongo_document_store_initialized", database=self._db.name)

    # ============================================================
    # Low-level helpers (log and re-raise storage errors)
    # ============================================================

    async def _find_one(
        self,
        collection: str,
        filter_dict: Dict[str, Any],
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> Optional[Dict[str, Any]]:
        try:
            return await self._db[collection].find_one(filter_dict, session=session)
        except Exception as e:
            logger.error("mongo_find_one_failed", collection=collection, filter=filter_dict, error=str(e))
            raise

    async def _find_many(
        self,
        collection: str,
        filter_dict: Dict[str, Any],
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        try:
            cursor = self._db[collection].find(filter_dict)
            if limit:
                cursor = cursor.limit(limit)
            return await cursor.to_list(length=limit)
        except Exception as e:
            logger.error("mongo_find_many_failed", collection=collection, filter=filter_dict, error=str(e))
            raise

    # ============================================================
    # IDocumentStore
    # ============================================================

    async def get_by_id(self, collection: str, doc_id: str) -> Optional[Document]:
        stored = await self._find_one(collection, {"_id": doc_id})
        if stored is None:
            return None
        document, _ = from_stored(stored)
        return document

    async def query_by_equality(
        self,
        collection: str,
        field: str,
        value: Any,
        limit: Optional[int] = None,
    ) -> List[Document]:
        stored_docs = await self._find_many(collection, {field: value}, limit=limit)
        return [from_stored(stored)[0] for stored in stored_docs]

    async def set(self, collection: str, doc_id: str, document: Document) -> None:
        try:
            await self._db[collection].replace_one(
                {"_id": doc_id},
                to_stored(doc_id, document, new_version()),
                upsert=True,
            )
        except Exception as e:
            logger.error("mongo_set_failed", collection=collection, doc_id=doc_id, error=str(e))
            raise

    async def update(self, collection: str, doc_id: str, fields: Document) -> None:
        changes = {key: value for key, value in fields.items() if key not in ("_id", "id")}
        changes[VERSION_FIELD] = new_version()
        try:
            result = await self._db[collection].update_one({"_id": doc_id}, {"$set": changes})
        except Exception as e:
            logger.error("mongo_update_failed", collection=collection, doc_id=doc_id, error=str(e))
            raise
        if result.matched_count == 0:
            raise NotFoundError(f"Document {collection}/{doc_id} not found")

    async def delete(self, collection: str, doc_id: str) -> bool:
        try:
            result = await self._db[collection].delete_one({"_id": doc_id})
        except Exception as e:
            logger.error("mongo_delete_failed", collection=collection, doc_id=doc_id, error=str(e))
            raise
        return result.deleted_count > 0

    async def run_transaction(self, fn: TransactionFunction[TResult]) -> TResult:
        """
        Run fn in an optimistic transaction, retrying on conflict.

        Raises:
            TransactionConflictError: If every attempt conflicted
        """

        async def attempt() -> TResult:
            tx = MongoTransaction(self)
            result = await fn(tx)
            await self._commit(tx)
            return result

        return await run_with_retry(attempt, self._max_attempts)

    async def _commit(self, tx: MongoTransaction) -> None:
        if not tx.writes:
            return

        try:
            async with await self._client.start_session() as session:
                async with session.start_transaction():
                    written = set()
                    for write in tx.writes:
                        key = (write.collection, write.doc_id)
                        # Only the first write to a read document checks its version
                        guarded = key in tx.reads and key not in written
                        await self._apply(write, tx.reads.get(key), guarded, session)
                        written.add(key)

                    await self._verify_unwritten_reads(tx, written, session)
        except PyMongoError as e:
            if not is_transient_transaction_error(e):
                raise
            logger.info(
                "transaction_aborted_by_server",
                error=str(e),
                code=getattr(e, "code", None),
                labels=[label for label in RETRYABLE_LABELS if e.has_error_label(label)],
            )
            raise TransactionConflictError("Transaction aborted by a concurrent write") from e

    async def _apply(
        self,
        write: BufferedWrite,
        expected: Any,
        guarded: bool,
        session: AsyncIOMotorClientSession,
    ) -> None:
        collection = self._db[write.collection]
        filter_dict: Dict[str, Any] = {"_id": write.doc_id}
        if guarded and expected is not MISSING:
            filter_dict[VERSION_FIELD] = expected

        try:
            if write.op == "set":
                stored = to_stored(write.doc_id, write.payload, new_version())
                if guarded and expected is MISSING:
                    await collection.insert_one(stored, session=session)
                    return
                result = await collection.replace_one(
                    filter_dict, stored, upsert=not guarded, session=session
                )
                matched = result.matched_count > 0 or result.upserted_id is not None
            elif write.op == "update":
                changes = dict(write.payload)
                changes[VERSION_FIELD] = new_version()
                result = await collection.update_one(filter_dict, {"$set": changes}, session=session)
                matched = result.matched_count > 0
            else:
                result = await collection.delete_one(filter_dict, session=session)
                matched = result.deleted_count > 0 or not guarded
        except DuplicateKeyError:
            raise TransactionConflictError(
                f"Document {write.collection}/{write.doc_id} was created during transaction"
            )

        if not matched:
            if guarded:
                logger.info("transaction_conflict", collection=write.collection, doc_id=write.doc_id)
                raise TransactionConflictError(
                    f"Document {write.collection}/{write.doc_id} changed during transaction"
                )
            raise NotFoundError(f"Document {write.collection}/{write.doc_id} not found")

    async def _verify_unwritten_reads(
        self,
        tx: MongoTransaction,
        written: set,
        session: AsyncIOMotorClientSession,
    ) -> None:
        for (collection, doc_id), version in tx.reads.items():
            if (collection, doc_id) in written:
                continue
            stored = await self._find_one(collection, {"_id": doc_id}, session=session)
            current = stored.get(VERSION_FIELD) if stored is not None else MISSING
            if current != version:
                raise TransactionConflictError(
                    f"Document {collection}/{doc_id} changed during transaction"
                )

    async def close(self) -> None:
        self._client.close()
        logger.info("mongo_document_store_closed")
