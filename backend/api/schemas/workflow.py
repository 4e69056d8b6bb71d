"""Workflow schemas."""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from workflow.definition import WorkflowDefinition


class WorkflowRequest(BaseModel):
    """Request body for create/update: ``{"workflow": {...}}`` in stored shape."""

    workflow: WorkflowDefinition = Field(description="Complete workflow document")


class WorkflowEnvelope(BaseModel):
    """Single workflow response."""

    workflow: Dict[str, Any] = Field(description="Workflow document")
    message: str = Field(default="", description="Human-readable outcome")


class WorkflowListResponse(BaseModel):
    """All workflows in the collection."""

    workflows: List[Dict[str, Any]] = Field(description="Workflow documents")
    total: int = Field(description="Total number of workflows")
