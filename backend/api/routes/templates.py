"""Workflow Templates API routes.

Browse the pre-built template library and instantiate a template as a new,
saved workflow.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from api.schemas.common import ErrorResponse
from api.schemas.workflow import WorkflowEnvelope
from app.dependencies import get_workflow_service
from core.constants import TemplateCategory
from services.workflow_service import WorkflowService
from workflow.templates import get_template, list_categories, list_templates

router = APIRouter(tags=["templates"])
logger = logging.getLogger(__name__)


@router.get("")
async def list_library_templates(
    category: Optional[TemplateCategory] = Query(None),
    search: Optional[str] = Query(None),
):
    """List available workflow templates."""
    templates = list_templates(category)
    if search:
        q = search.lower()
        templates = [
            t for t in templates
            if q in t.name.lower() or q in t.description.lower()
        ]

    result = [t.to_dict(include_steps=False) for t in templates]
    return {"templates": result, "total": len(result)}


@router.get("/categories")
async def list_template_categories():
    """Get distinct template categories."""
    return {"categories": list_categories()}


@router.get("/{template_id}", responses={404: {"model": ErrorResponse}})
async def get_library_template(template_id: str):
    """Get a single template with full step details."""
    return get_template(template_id).to_dict(include_steps=True)


@router.post(
    "/{template_id}/instantiate",
    response_model=WorkflowEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def instantiate_template(
    template_id: str,
    svc: WorkflowService = Depends(get_workflow_service),
) -> WorkflowEnvelope:
    """Create and save a new workflow from a template."""
    wf = await svc.create_from_template(template_id)
    template = get_template(template_id)
    return WorkflowEnvelope(
        workflow=wf.to_document(),
        message=f"Workflow created from template '{template.name}'",
    )
