"""Unit tests for InMemoryDocumentStore and its optimistic transactions."""

import asyncio

import pytest

from domain.shared.errors import NotFoundError, TransactionConflictError, ValidationFailedError
from domain.shared.ports.document_store import ITransaction
from infrastructure.persistence.in_memory.document_store import InMemoryDocumentStore


class TestBasicOperations:
    """Test get/set/update/delete/query."""

    @pytest.mark.asyncio
    async def test_set_and_get(self, store: InMemoryDocumentStore) -> None:
        await store.set("menus", "m1", {"name": "Lunch"})

        doc = await store.get_by_id("menus", "m1")

        assert doc == {"name": "Lunch", "id": "m1"}

    @pytest.mark.asyncio
    async def test_documents_are_copied(self, store: InMemoryDocumentStore) -> None:
        """Mutating a returned document does not change the store."""
        original = {"name": "Lunch", "plates": []}
        await store.set("menus", "m1", original)
        original["plates"].append("leak")

        doc = await store.get_by_id("menus", "m1")
        doc["name"] = "Changed"

        assert await store.get_by_id("menus", "m1") == {"name": "Lunch", "plates": [], "id": "m1"}

    @pytest.mark.asyncio
    async def test_missing_document(self, store: InMemoryDocumentStore) -> None:
        assert await store.get_by_id("menus", "missing") is None

    @pytest.mark.asyncio
    async def test_update_merges_fields(self, store: InMemoryDocumentStore) -> None:
        await store.set("menus", "m1", {"name": "Lunch", "active": True})

        await store.update("menus", "m1", {"active": False})

        assert await store.get_by_id("menus", "m1") == {"name": "Lunch", "active": False, "id": "m1"}

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, store: InMemoryDocumentStore) -> None:
        with pytest.raises(NotFoundError):
            await store.update("menus", "missing", {"active": False})

    @pytest.mark.asyncio
    async def test_delete(self, store: InMemoryDocumentStore) -> None:
        await store.set("menus", "m1", {"name": "Lunch"})

        assert await store.delete("menus", "m1") is True
        assert await store.delete("menus", "m1") is False

    @pytest.mark.asyncio
    async def test_deleted_document_is_hidden(self, store: InMemoryDocumentStore) -> None:
        await store.set("menus", "m1", {"restaurantId": "r1"})
        await store.delete("menus", "m1")

        assert await store.get_by_id("menus", "m1") is None
        assert await store.query_by_equality("menus", "restaurantId", "r1") == []
        with pytest.raises(NotFoundError):
            await store.update("menus", "m1", {"active": False})

    @pytest.mark.asyncio
    async def test_query_by_equality(self, store: InMemoryDocumentStore) -> None:
        await store.set("menus", "m1", {"restaurantId": "r1"})
        await store.set("menus", "m2", {"restaurantId": "r2"})
        await store.set("menus", "m3", {"restaurantId": "r1"})

        docs = await store.query_by_equality("menus", "restaurantId", "r1")
        limited = await store.query_by_equality("menus", "restaurantId", "r1", limit=1)

        assert sorted(d["id"] for d in docs) == ["m1", "m3"]
        assert len(limited) == 1


class TestTransactions:
    """Test run_transaction()."""

    @pytest.mark.asyncio
    async def test_commit_applies_writes(self, store: InMemoryDocumentStore) -> None:
        await store.set("counters", "c1", {"value": 1})

        async def increment(tx: ITransaction) -> int:
            doc = await tx.get("counters", "c1")
            doc["value"] += 1
            tx.set("counters", "c1", doc)
            tx.set("audit", "a1", {"counter": "c1"})
            return doc["value"]

        result = await store.run_transaction(increment)

        assert result == 2
        assert (await store.get_by_id("counters", "c1"))["value"] == 2
        assert await store.get_by_id("audit", "a1") == {"counter": "c1", "id": "a1"}

    @pytest.mark.asyncio
    async def test_reads_see_staged_writes(self, store: InMemoryDocumentStore) -> None:
        async def write_then_read(tx: ITransaction) -> dict:
            tx.set("menus", "m1", {"name": "Lunch"})
            tx.update("menus", "m1", {"active": True})
            return await tx.get("menus", "m1")

        doc = await store.run_transaction(write_then_read)

        assert doc == {"name": "Lunch", "active": True, "id": "m1"}

    @pytest.mark.asyncio
    async def test_domain_error_aborts_without_retry(self, store: InMemoryDocumentStore) -> None:
        attempts = []

        async def reject(tx: ITransaction) -> None:
            attempts.append(1)
            tx.set("menus", "m1", {"name": "Lunch"})
            raise ValidationFailedError("nope")

        with pytest.raises(ValidationFailedError):
            await store.run_transaction(reject)

        assert len(attempts) == 1
        assert await store.get_by_id("menus", "m1") is None

    @pytest.mark.asyncio
    async def test_conflict_is_retried(self, store: InMemoryDocumentStore) -> None:
        """A concurrent write between read and commit re-runs the function."""
        await store.set("counters", "c1", {"value": 0})
        attempts = []

        async def increment(tx: ITransaction) -> None:
            doc = await tx.get("counters", "c1")
            attempts.append(doc["value"])
            if len(attempts) == 1:
                await store.set("counters", "c1", {"value": 10})
            doc["value"] += 1
            tx.set("counters", "c1", doc)

        await store.run_transaction(increment)

        assert attempts == [0, 10]
        assert (await store.get_by_id("counters", "c1"))["value"] == 11

    @pytest.mark.asyncio
    async def test_conflict_surfaces_after_max_attempts(self) -> None:
        store = InMemoryDocumentStore(max_attempts=2)
        await store.set("counters", "c1", {"value": 0})
        attempts = []

        async def always_conflicts(tx: ITransaction) -> None:
            doc = await tx.get("counters", "c1")
            attempts.append(1)
            await store.set("counters", "c1", {"value": doc["value"] + 100})
            tx.set("counters", "c1", doc)

        with pytest.raises(TransactionConflictError):
            await store.run_transaction(always_conflicts)

        assert len(attempts) == 2

    @pytest.mark.asyncio
    async def test_created_concurrently_conflicts(self, store: InMemoryDocumentStore) -> None:
        """Reading a missing document records it; a later create conflicts."""
        attempts = []

        async def create_if_missing(tx: ITransaction) -> bool:
            existing = await tx.get("carts", "c1")
            attempts.append(existing is None)
            if len(attempts) == 1:
                await store.set("carts", "c1", {"owner": "other"})
            if existing is None:
                tx.set("carts", "c1", {"owner": "me"})
            return existing is None

        created = await store.run_transaction(create_if_missing)

        assert attempts == [True, False]
        assert created is False
        assert (await store.get_by_id("carts", "c1"))["owner"] == "other"

    @pytest.mark.asyncio
    async def test_failed_update_leaves_store_untouched(self, store: InMemoryDocumentStore) -> None:
        async def partial(tx: ITransaction) -> None:
            tx.set("menus", "m1", {"name": "Lunch"})
            tx.update("menus", "missing", {"active": False})

        with pytest.raises(NotFoundError):
            await store.run_transaction(partial)

        assert await store.get_by_id("menus", "m1") is None

    @pytest.mark.asyncio
    async def test_concurrent_increments_serialize(self) -> None:
        """Concurrent transactions on one document never lose an update."""
        contended = InMemoryDocumentStore(max_attempts=20)
        await contended.set("counters", "c1", {"value": 0})

        async def increment(tx: ITransaction) -> None:
            doc = await tx.get("counters", "c1")
            await asyncio.sleep(0)
            doc["value"] += 1
            tx.set("counters", "c1", doc)

        await asyncio.gather(*(contended.run_transaction(increment) for _ in range(5)))

        assert (await contended.get_by_id("counters", "c1"))["value"] == 5

    @pytest.mark.asyncio
    async def test_delete_and_recreate_during_transaction_conflicts(self) -> None:
        """A recreated document never reuses the version a transaction read."""
        store = InMemoryDocumentStore(max_attempts=1)
        await store.set("counters", "d", {"value": 1})

        async def overwrite(tx: ITransaction) -> None:
            doc = await tx.get("counters", "d")
            await store.delete("counters", "d")
            await store.set("counters", "d", {"value": 50})
            doc["value"] += 100
            tx.set("counters", "d", doc)

        with pytest.raises(TransactionConflictError):
            await store.run_transaction(overwrite)

        assert (await store.get_by_id("counters", "d"))["value"] == 50

    @pytest.mark.asyncio
    async def test_read_of_deleted_document_conflicts_with_recreation(self) -> None:
        store = InMemoryDocumentStore(max_attempts=1)
        await store.set("carts", "c1", {"owner": "old"})
        await store.delete("carts", "c1")

        async def create_if_missing(tx: ITransaction) -> None:
            assert await tx.get("carts", "c1") is None
            await store.set("carts", "c1", {"owner": "other"})
            tx.set("carts", "c1", {"owner": "me"})

        with pytest.raises(TransactionConflictError):
            await store.run_transaction(create_if_missing)

        assert (await store.get_by_id("carts", "c1"))["owner"] == "other"
