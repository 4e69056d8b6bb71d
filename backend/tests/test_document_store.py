"""Tests for the SQL-backed document store."""

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from core.exceptions import NotFoundError, PersistenceError
from db.database import create_session_factory
from services.document_store import SQLDocumentStore


@pytest.mark.integration
class TestDocumentStore:

    async def test_create_and_get(self, store):
        doc_id = await store.create("workflows", {"id": "wf-1", "name": "Welcome", "steps": [{"id": "s1"}]})
        assert doc_id == "wf-1"

        doc = await store.get("workflows", "wf-1")
        assert doc == {"id": "wf-1", "name": "Welcome", "steps": [{"id": "s1"}]}

    async def test_create_generates_id(self, store):
        doc_id = await store.create("workflows", {"name": "No id"})
        assert doc_id
        assert (await store.get("workflows", doc_id))["id"] == doc_id

    async def test_get_missing_returns_none(self, store):
        assert await store.get("workflows", "nope") is None

    async def test_collections_are_separate(self, store):
        await store.create("workflows", {"id": "same", "kind": "workflow"})
        await store.create("drafts", {"id": "same", "kind": "draft"})

        assert (await store.get("workflows", "same"))["kind"] == "workflow"
        assert (await store.get("drafts", "same"))["kind"] == "draft"
        assert len(await store.list("workflows")) == 1

    async def test_list(self, store):
        for i in range(3):
            await store.create("workflows", {"id": f"wf-{i}", "n": i})
        docs = await store.list("workflows")
        assert {d["id"] for d in docs} == {"wf-0", "wf-1", "wf-2"}
        assert await store.list("empty") == []

    async def test_list_keeps_creation_order_within_a_second(self, store):
        ids = ["wf-e", "wf-d", "wf-c", "wf-b", "wf-a"]
        for doc_id in ids:
            await store.create("workflows", {"id": doc_id})
        assert [d["id"] for d in await store.list("workflows")] == ids

    async def test_updates_do_not_reorder(self, store):
        for doc_id in ("wf-b", "wf-a"):
            await store.create("workflows", {"id": doc_id})
        await store.update("workflows", "wf-b", {"name": "edited"})
        assert [d["id"] for d in await store.list("workflows")] == ["wf-b", "wf-a"]

    async def test_returned_documents_are_copies(self, store):
        await store.create("workflows", {"id": "wf-1", "steps": [{"id": "s1"}]})
        doc = await store.get("workflows", "wf-1")
        doc["steps"].clear()
        assert (await store.get("workflows", "wf-1"))["steps"] == [{"id": "s1"}]

    async def test_update_merges_top_level_keys(self, store):
        await store.create("workflows", {"id": "wf-1", "name": "Old", "isActive": False, "steps": [{"id": "a"}]})
        await store.update("workflows", "wf-1", {"name": "New", "steps": [{"id": "b"}]})

        doc = await store.get("workflows", "wf-1")
        assert doc == {"id": "wf-1", "name": "New", "isActive": False, "steps": [{"id": "b"}]}

    async def test_update_cannot_change_id(self, store):
        await store.create("workflows", {"id": "wf-1"})
        await store.update("workflows", "wf-1", {"id": "other"})
        assert (await store.get("workflows", "wf-1"))["id"] == "wf-1"

    async def test_update_missing_raises(self, store):
        with pytest.raises(NotFoundError):
            await store.update("workflows", "nope", {"name": "x"})

    async def test_delete(self, store):
        await store.create("workflows", {"id": "wf-1"})
        await store.delete("workflows", "wf-1")
        assert await store.get("workflows", "wf-1") is None

    async def test_delete_missing_raises(self, store):
        with pytest.raises(NotFoundError):
            await store.delete("workflows", "nope")

    async def test_duplicate_create_is_persistence_error(self, store):
        await store.create("workflows", {"id": "wf-1"})
        with pytest.raises(PersistenceError):
            await store.create("workflows", {"id": "wf-1"})


@pytest.mark.integration
class TestStoreFailures:

    async def test_missing_table_surfaces_as_persistence_error(self):
        engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
        broken = SQLDocumentStore(create_session_factory(engine))
        try:
            with pytest.raises(PersistenceError) as exc_info:
                await broken.list("workflows")
            assert exc_info.value.status_code == 503
            assert exc_info.value.__cause__ is not None
        finally:
            await engine.dispose()
