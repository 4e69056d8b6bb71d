"""
Workflow definition model and its persisted document shape.

A definition is an ordered list of steps attached to a trigger. Position in
``steps`` is the intended execution order; there is no separate order key.
Nothing in this package executes a definition: ``is_active`` and ``stats``
are display data only.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.constants import WorkflowTrigger
from core.utils import generate_id, utc_now
from workflow.steps import WorkflowStep


class WorkflowStats(BaseModel):
    """Enrollment counters populated outside this service."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_enrolled: int = Field(default=0, ge=0)
    completed: int = Field(default=0, ge=0)
    active: int = Field(default=0, ge=0)


class WorkflowBody(BaseModel):
    """The editable part of a workflow: everything but id, timestamps and stats.

    This is also the shape a template carries.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = ""
    description: str = ""
    trigger: Optional[WorkflowTrigger] = None
    is_active: bool = False
    steps: List[WorkflowStep] = Field(default_factory=list)


class WorkflowDefinition(WorkflowBody):
    """A complete workflow document.

    Attributes:
        id: Client-generated workflow id
        name: Display name, required at save time
        description: Optional free text
        trigger: Client event the workflow is attached to, required at save time
        is_active: Display/filter flag
        steps: Ordered steps
        created_at: Set once at creation
        updated_at: Refreshed by every mutation
        stats: Enrollment counters, zero at creation
    """

    id: str = Field(default_factory=lambda: generate_id("workflow"), min_length=1)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    stats: WorkflowStats = Field(default_factory=WorkflowStats)

    def step_ids(self) -> List[str]:
        return [step.id for step in self.steps]

    def index_of(self, step_id: str) -> int:
        """Position of a step, or -1 when absent."""
        for i, step in enumerate(self.steps):
            if step.id == step_id:
                return i
        return -1

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the stored JSON shape (camelCase keys, ISO-8601 timestamps)."""
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def from_document(cls, data: Dict[str, Any]) -> "WorkflowDefinition":
        """Parse a stored document back into a definition."""
        return cls.model_validate(data)
