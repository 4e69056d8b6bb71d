"""Shared pytest fixtures for the marketing workflow service test suite.

Provides:
- In-memory async SQLite database per test
- Document store and workflow service bound to it
- FastAPI test client (httpx.AsyncClient) wired to the same store
- Sample workflow definitions
"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

# Override settings BEFORE any app imports
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOG_FORMAT", "text")

from core.constants import StepType, WorkflowTrigger  # noqa: E402
from db.base import Base  # noqa: E402
from db.database import create_session_factory  # noqa: E402
from services.document_store import SQLDocumentStore  # noqa: E402
from services.workflow_service import WorkflowService  # noqa: E402
from workflow.definition import WorkflowDefinition  # noqa: E402
from workflow.steps import create_step  # noqa: E402


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        echo=False,
    )
    import db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def store(db_engine) -> SQLDocumentStore:
    return SQLDocumentStore(create_session_factory(db_engine))


@pytest_asyncio.fixture
async def workflow_service(store) -> WorkflowService:
    return WorkflowService(store)


# ---------------------------------------------------------------------------
# App / HTTP client fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def app(store):
    """FastAPI app whose document store is the per-test in-memory store."""
    from app.dependencies import get_document_store
    from app.main import create_app

    test_app = create_app()
    test_app.dependency_overrides[get_document_store] = lambda: store

    yield test_app

    test_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac


# ---------------------------------------------------------------------------
# Test data fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def three_steps():
    """Steps A (email), B (delay), C (sms)."""
    return [
        create_step(StepType.EMAIL),
        create_step(StepType.DELAY),
        create_step(StepType.SMS),
    ]


@pytest.fixture
def definition(three_steps) -> WorkflowDefinition:
    """A valid, unsaved workflow with three steps."""
    return WorkflowDefinition(
        name="Test Workflow",
        description="A workflow for testing",
        trigger=WorkflowTrigger.MANUAL,
        steps=three_steps,
    )
