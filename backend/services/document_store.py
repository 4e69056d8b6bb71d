"""Document store: the persistence boundary for workflow documents.

``DocumentStore`` is the interface the services depend on: a keyed
collection of JSON documents with list/get/create/update/delete.
``SQLDocumentStore`` implements it on a single SQLAlchemy table.

Every storage failure surfaces as ``PersistenceError`` with the original
exception chained. Nothing here retries.
"""

import copy
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Protocol
from uuid import uuid4

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import NotFoundError, PersistenceError
from db.models.document import Document

logger = structlog.get_logger(__name__)


class DocumentStore(Protocol):
    """Async document store keyed by id within named collections."""

    async def list(self, collection: str) -> List[Dict[str, Any]]:
        ...

    async def get(self, collection: str, id: str) -> Optional[Dict[str, Any]]:
        ...

    async def create(self, collection: str, doc: Dict[str, Any]) -> str:
        ...

    async def update(self, collection: str, id: str, partial: Dict[str, Any]) -> None:
        ...

    async def delete(self, collection: str, id: str) -> None:
        ...


class SQLDocumentStore:
    """DocumentStore backed by the ``documents`` table.

    Usage:
        store = SQLDocumentStore(AsyncSessionLocal)
        doc_id = await store.create("workflows", {"name": "Welcome"})
    """

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, action: str, collection: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Document store failure", action=action, collection=collection, error=str(e))
            raise PersistenceError(f"Failed to {action} document in '{collection}': {e}") from e

    async def _get_row(self, session: AsyncSession, collection: str, id: str) -> Optional[Document]:
        return await session.get(Document, (collection, id))

    # ─── Read ──────────────────────────────────────────────

    async def list(self, collection: str) -> List[Dict[str, Any]]:
        """All documents of a collection in creation order.

        Rows created within the same microsecond fall back to id order.
        """
        async with self._session("list", collection) as session:
            result = await session.execute(
                select(Document)
                .where(Document.collection == collection)
                .order_by(Document.created_at, Document.id)
            )
            return [copy.deepcopy(row.data) for row in result.scalars().all()]

    async def get(self, collection: str, id: str) -> Optional[Dict[str, Any]]:
        """A single document, or None when absent."""
        async with self._session("get", collection) as session:
            row = await self._get_row(session, collection, id)
            return copy.deepcopy(row.data) if row else None

    # ─── Write ─────────────────────────────────────────────

    async def create(self, collection: str, doc: Dict[str, Any]) -> str:
        """Insert a document, generating an id when it has none.

        Returns:
            The document id
        """
        data = copy.deepcopy(doc)
        doc_id = str(data.get("id") or uuid4())
        data["id"] = doc_id
        async with self._session("create", collection) as session:
            session.add(Document(collection=collection, id=doc_id, data=data))
            await session.flush()
        logger.debug("Document created", collection=collection, id=doc_id)
        return doc_id

    async def update(self, collection: str, id: str, partial: Dict[str, Any]) -> None:
        """Merge top-level keys of ``partial`` into the stored document.

        Raises:
            NotFoundError: If the document does not exist
        """
        async with self._session("update", collection) as session:
            row = await self._get_row(session, collection, id)
            if row is None:
                raise NotFoundError(f"Document not found: {collection}/{id}")
            # Reassign so the JSON column is flagged dirty.
            row.data = {**row.data, **copy.deepcopy(partial), "id": id}
            await session.flush()
        logger.debug("Document updated", collection=collection, id=id)

    async def delete(self, collection: str, id: str) -> None:
        """Permanently remove a document.

        Raises:
            NotFoundError: If the document does not exist
        """
        async with self._session("delete", collection) as session:
            row = await self._get_row(session, collection, id)
            if row is None:
                raise NotFoundError(f"Document not found: {collection}/{id}")
            await session.delete(row)
            await session.flush()
        logger.debug("Document deleted", collection=collection, id=id)
