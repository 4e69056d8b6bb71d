"""Step Types API routes.

Exposes the step catalog to the frontend for the workflow builder palette.
"""

from fastapi import APIRouter

from workflow.steps import get_step_type, list_step_types

router = APIRouter()


@router.get("", summary="List all available step types")
async def list_available_step_types():
    """Get every step type with its default payload.

    Used by the workflow builder to populate the step palette.
    """
    catalog = list_step_types()
    return {
        "step_types": [info.to_dict() for info in catalog],
        "count": len(catalog),
    }


@router.get("/{step_type}", summary="Get step type details")
async def get_step_type_details(step_type: str):
    """Get a single step type. Unknown types answer 422."""
    return get_step_type(step_type).to_dict()
