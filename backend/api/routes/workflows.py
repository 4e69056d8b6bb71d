"""Workflow CRUD endpoints plus toggle and the analytics summary."""

import logging

from fastapi import APIRouter, Depends, status

from api.schemas.common import ErrorResponse
from api.schemas.workflow import WorkflowEnvelope, WorkflowListResponse, WorkflowRequest
from app.dependencies import get_workflow_service
from services.workflow_service import WorkflowService
from workflow.analytics import summarize

logger = logging.getLogger(__name__)

router = APIRouter(tags=["workflows"])

_not_found = {404: {"model": ErrorResponse}}


@router.get("", response_model=WorkflowListResponse)
async def list_workflows(
    svc: WorkflowService = Depends(get_workflow_service),
) -> WorkflowListResponse:
    """
    List every stored workflow.
    """
    workflows = await svc.list_workflows()
    return WorkflowListResponse(
        workflows=[wf.to_document() for wf in workflows],
        total=len(workflows),
    )


@router.get("/analytics/summary", response_model=dict)
async def workflow_summary(
    svc: WorkflowService = Depends(get_workflow_service),
) -> dict:
    """
    Aggregate enrollment stats across all workflows.
    """
    return summarize(await svc.list_workflows())


@router.post("", response_model=WorkflowEnvelope, status_code=status.HTTP_201_CREATED)
async def create_workflow(
    request: WorkflowRequest,
    svc: WorkflowService = Depends(get_workflow_service),
) -> WorkflowEnvelope:
    """
    Save a workflow. An id already in the store is overwritten as a whole.
    """
    wf = await svc.save_workflow(request.workflow)
    return WorkflowEnvelope(workflow=wf.to_document(), message="Workflow saved successfully")


@router.get("/{workflow_id}", response_model=WorkflowEnvelope, responses=_not_found)
async def get_workflow(
    workflow_id: str,
    svc: WorkflowService = Depends(get_workflow_service),
) -> WorkflowEnvelope:
    """
    Get workflow by ID.
    """
    wf = await svc.get_workflow(workflow_id)
    return WorkflowEnvelope(workflow=wf.to_document())


@router.put("/{workflow_id}", response_model=WorkflowEnvelope, responses=_not_found)
async def update_workflow(
    workflow_id: str,
    request: WorkflowRequest,
    svc: WorkflowService = Depends(get_workflow_service),
) -> WorkflowEnvelope:
    """
    Replace an existing workflow document. The path id wins over the body id.
    """
    wf = await svc.update_workflow(workflow_id, request.workflow)
    return WorkflowEnvelope(workflow=wf.to_document(), message="Workflow updated successfully")


@router.delete("/{workflow_id}", status_code=status.HTTP_204_NO_CONTENT, responses=_not_found)
async def delete_workflow(
    workflow_id: str,
    svc: WorkflowService = Depends(get_workflow_service),
) -> None:
    """
    Permanently delete a workflow.
    """
    await svc.delete_workflow(workflow_id)


@router.post("/{workflow_id}/toggle", response_model=WorkflowEnvelope, responses=_not_found)
async def toggle_workflow(
    workflow_id: str,
    svc: WorkflowService = Depends(get_workflow_service),
) -> WorkflowEnvelope:
    """
    Flip the workflow's active flag.
    """
    wf = await svc.toggle_workflow(workflow_id)
    state = "activated" if wf.is_active else "deactivated"
    logger.info(f"Workflow {workflow_id} {state}")
    return WorkflowEnvelope(workflow=wf.to_document(), message=f"Workflow {state}")
