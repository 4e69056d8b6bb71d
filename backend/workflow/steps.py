"""
Workflow step variants and the step type catalog.

Each step type is its own pydantic model; ``WorkflowStep`` is the tagged
union of all of them, discriminated on ``type``. Field names are snake_case
in Python and camelCase in the stored document (``delayUnit``,
``taskDescription``, ``assignedTo``).

The catalog mirrors what a picker UI needs: one entry per type with a
display title, a short description, an icon with its accent colour and the
payload a freshly added step starts with.
"""

import copy
from dataclasses import dataclass, field
from typing import Annotated, Any, ClassVar, Dict, List, Literal, Type, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

from core.constants import ConditionOperator, DelayUnit, StepType, TaskAssignee
from core.exceptions import InvalidStepTypeError
from core.utils import generate_id


class StepBase(BaseModel):
    """Fields shared by every step variant."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(min_length=1, description="Opaque step id, stable for the step's lifetime")
    title: str = Field(default="", description="Short label shown in the builder")
    description: str = Field(default="", description="Longer free-text label")

    display_name: ClassVar[str] = "Step"
    summary: ClassVar[str] = ""
    icon: ClassVar[str] = "fa-circle"
    color: ClassVar[str] = "#6c757d"
    defaults: ClassVar[Dict[str, Any]] = {}


class EmailStep(StepBase):
    """Send an email to the enrolled client."""

    type: Literal["email"] = "email"
    subject: str = ""
    content: str = ""

    display_name: ClassVar[str] = "Send Email"
    summary: ClassVar[str] = "Send an automated email to the client"
    icon: ClassVar[str] = "fa-envelope"
    color: ClassVar[str] = "#AD6269"
    defaults: ClassVar[Dict[str, Any]] = {
        "title": "Send Email",
        "description": "Send an email to the client",
        "subject": "Message from A Pretty Girl Matter",
        "content": "Hello! This is an automated message from our team.",
    }


class SmsStep(StepBase):
    """Send a text message. Content over 160 characters is allowed but flagged."""

    type: Literal["sms"] = "sms"
    content: str = ""

    display_name: ClassVar[str] = "Send SMS"
    summary: ClassVar[str] = "Send a text message to the client"
    icon: ClassVar[str] = "fa-sms"
    color: ClassVar[str] = "#28a745"
    defaults: ClassVar[Dict[str, Any]] = {
        "title": "Send SMS",
        "description": "Send a text message to the client",
        "content": "Hello! This is a message from A Pretty Girl Matter.",
    }


class DelayStep(StepBase):
    type: Literal["delay"] = "delay"
    delay: int = Field(default=1, gt=0)
    delay_unit: DelayUnit = DelayUnit.DAYS

    display_name: ClassVar[str] = "Wait/Delay"
    summary: ClassVar[str] = "Wait for a specified amount of time"
    icon: ClassVar[str] = "fa-clock"
    color: ClassVar[str] = "#ffc107"
    defaults: ClassVar[Dict[str, Any]] = {
        "title": "Wait",
        "description": "Wait before next step",
        "delay": 1,
        "delay_unit": DelayUnit.DAYS,
    }


class StepCondition(BaseModel):
    """Comparison of one client field against a literal value."""

    field: str
    operator: ConditionOperator = ConditionOperator.EQUALS
    value: str = ""


class ConditionStep(StepBase):
    type: Literal["condition"] = "condition"
    condition: StepCondition

    display_name: ClassVar[str] = "Condition"
    summary: ClassVar[str] = "Branch workflow based on client data"
    icon: ClassVar[str] = "fa-code-branch"
    color: ClassVar[str] = "#17a2b8"
    defaults: ClassVar[Dict[str, Any]] = {
        "title": "Check Condition",
        "description": "Check client data condition",
        "condition": {"field": "role", "operator": ConditionOperator.EQUALS, "value": "client"},
    }


class TagStep(StepBase):
    type: Literal["tag"] = "tag"
    tags: List[str] = Field(default_factory=list)

    display_name: ClassVar[str] = "Add Tag"
    summary: ClassVar[str] = "Add tags to client profile"
    icon: ClassVar[str] = "fa-tag"
    color: ClassVar[str] = "#6f42c1"
    defaults: ClassVar[Dict[str, Any]] = {
        "title": "Add Tag",
        "description": "Add tags to client profile",
        "tags": ["workflow_participant"],
    }

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: List[str]) -> List[str]:
        # A set semantically; first occurrence keeps its display position.
        return list(dict.fromkeys(v))


class TaskStep(StepBase):
    type: Literal["task"] = "task"
    task_description: str = ""
    assigned_to: TaskAssignee = TaskAssignee.ADMIN

    display_name: ClassVar[str] = "Create Task"
    summary: ClassVar[str] = "Create a task for team members"
    icon: ClassVar[str] = "fa-tasks"
    color: ClassVar[str] = "#fd7e14"
    defaults: ClassVar[Dict[str, Any]] = {
        "title": "Create Task",
        "description": "Create a task for team follow-up",
        "task_description": "Follow up with client",
        "assigned_to": TaskAssignee.ADMIN,
    }


WorkflowStep = Annotated[
    Union[EmailStep, SmsStep, DelayStep, ConditionStep, TagStep, TaskStep],
    Field(discriminator="type"),
]

STEP_CLASSES: Dict[StepType, Type[StepBase]] = {
    StepType.EMAIL: EmailStep,
    StepType.SMS: SmsStep,
    StepType.DELAY: DelayStep,
    StepType.CONDITION: ConditionStep,
    StepType.TAG: TagStep,
    StepType.TASK: TaskStep,
}

_step_adapter = TypeAdapter(WorkflowStep)


@dataclass(frozen=True)
class StepTypeInfo:
    """Catalog entry for one step type."""

    type: StepType
    title: str
    description: str
    icon: str
    color: str
    default_payload: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "icon": self.icon,
            "color": self.color,
            "defaultPayload": copy.deepcopy(self.default_payload),
        }


def _resolve_type(step_type: Union[StepType, str]) -> StepType:
    try:
        return StepType(step_type)
    except ValueError:
        raise InvalidStepTypeError(step_type) from None


def list_step_types() -> List[StepTypeInfo]:
    """List every supported step type with its default payload, in picker order."""
    entries = []
    for step_type, cls in STEP_CLASSES.items():
        sample = cls(id="catalog", **copy.deepcopy(cls.defaults))
        payload = sample.model_dump(by_alias=True, mode="json", exclude={"id", "type"})
        entries.append(
            StepTypeInfo(
                type=step_type,
                title=cls.display_name,
                description=cls.summary,
                icon=cls.icon,
                color=cls.color,
                default_payload=payload,
            )
        )
    return entries


def get_step_type(step_type: Union[StepType, str]) -> StepTypeInfo:
    """Look up a single catalog entry.

    Raises:
        InvalidStepTypeError: If the type is not in the catalog
    """
    kind = _resolve_type(step_type)
    for info in list_step_types():
        if info.type is kind:
            return info
    raise InvalidStepTypeError(step_type)


def create_step(step_type: Union[StepType, str]) -> StepBase:
    """Create a new step of the given type with a fresh id and catalog defaults.

    Args:
        step_type: One of the six step types, as enum or string

    Returns:
        New step instance of the matching variant

    Raises:
        InvalidStepTypeError: If the type is not in the catalog
    """
    cls = STEP_CLASSES[_resolve_type(step_type)]
    return cls(id=generate_id("step"), **copy.deepcopy(cls.defaults))


def parse_step(data: Dict[str, Any]) -> StepBase:
    """Build the matching step variant from its stored (camelCase) dict.

    Raises:
        InvalidStepTypeError: If ``type`` is missing or unknown
    """
    step_type = data.get("type") if isinstance(data, dict) else None
    _resolve_type(step_type)
    return _step_adapter.validate_python(data)
