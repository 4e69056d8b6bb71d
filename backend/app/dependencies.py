"""FastAPI dependency injection functions."""

from fastapi import Depends

from app.config import Settings, get_settings
from services.document_store import DocumentStore, SQLDocumentStore
from services.workflow_service import WorkflowService


def get_document_store() -> DocumentStore:
    """
    Provide the document store for API endpoints.

    Reads the session factory at call time so a test engine swapped into
    ``db.database`` is picked up.
    """
    from db import database

    return SQLDocumentStore(database.AsyncSessionLocal)


def get_workflow_service(
    store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
) -> WorkflowService:
    """Workflow service bound to the configured collection."""
    return WorkflowService(store, collection=settings.WORKFLOWS_COLLECTION)
