"""API v1 aggregated router.

All v1 endpoints are registered here and mounted under /api/v1 in main.py.
"""

from fastapi import APIRouter

from api.routes import health, step_types, templates, workflows

api_v1_router = APIRouter()

# Health (no auth required)
api_v1_router.include_router(
    health.router,
    tags=["Health"],
)

# Workflows
api_v1_router.include_router(
    workflows.router,
    prefix="/workflows",
    tags=["Workflows"],
)

# Template library
api_v1_router.include_router(
    templates.router,
    prefix="/templates",
    tags=["Templates"],
)

# Step catalog
api_v1_router.include_router(
    step_types.router,
    prefix="/step-types",
    tags=["Step Types"],
)
