"""
In-memory editing of workflow definitions.

Every operation takes a definition and returns a new one; the input is left
untouched so callers can keep it for undo or comparison. Operations that
change something refresh ``updated_at``.

Unknown step ids raise ``StepNotFoundError`` for remove, update and move
alike. Step ids are unique within a workflow; ``add_step`` refuses a repeat.
"""

from dataclasses import dataclass, field
from typing import Any, List, Union

import structlog

from core.constants import SMS_SOFT_LIMIT, MoveDirection, StepType, WorkflowTrigger
from core.exceptions import (
    DuplicateStepError,
    InvalidStepTypeError,
    StepNotFoundError,
    ValidationError,
    ValidationIssue,
)
from core.utils import utc_now
from workflow.definition import WorkflowDefinition
from workflow.steps import StepBase

logger = structlog.get_logger(__name__)


@dataclass
class ValidationResult:
    """Outcome of ``validate_for_save``.

    ``violations`` block saving; ``warnings`` are advisory only.
    """

    violations: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def to_dict(self) -> dict:
        return {
            "valid": self.is_valid,
            "violations": [v.to_dict() for v in self.violations],
            "warnings": [w.to_dict() for w in self.warnings],
        }


def new_definition(**fields: Any) -> WorkflowDefinition:
    """Blank draft as the builder form starts it: manual trigger, inactive, no steps."""
    fields.setdefault("trigger", WorkflowTrigger.MANUAL)
    return WorkflowDefinition(**fields)


def _with_steps(definition: WorkflowDefinition, steps: List[StepBase]) -> WorkflowDefinition:
    return definition.model_copy(update={"steps": steps, "updated_at": utc_now()})


def _require_index(definition: WorkflowDefinition, step_id: str) -> int:
    index = definition.index_of(step_id)
    if index == -1:
        raise StepNotFoundError(step_id)
    return index


def add_step(definition: WorkflowDefinition, step: StepBase) -> WorkflowDefinition:
    """Append a step to the end of the workflow.

    Raises:
        DuplicateStepError: If the workflow already has a step with that id
    """
    if definition.index_of(step.id) != -1:
        raise DuplicateStepError(step.id)
    return _with_steps(definition, [*definition.steps, step])


def remove_step(definition: WorkflowDefinition, step_id: str) -> WorkflowDefinition:
    """Remove the step with the given id.

    Raises:
        StepNotFoundError: If no step has that id
    """
    _require_index(definition, step_id)
    return _with_steps(definition, [s for s in definition.steps if s.id != step_id])


def update_step(definition: WorkflowDefinition, updated_step: StepBase) -> WorkflowDefinition:
    """Replace the step sharing ``updated_step.id``, keeping its position.

    Raises:
        StepNotFoundError: If no step has that id
        InvalidStepTypeError: If the replacement has a different type
    """
    index = _require_index(definition, updated_step.id)
    current = definition.steps[index]
    if current.type != updated_step.type:
        raise InvalidStepTypeError(
            updated_step.type,
            f"Step {updated_step.id} is a {current.type} step and cannot become {updated_step.type}",
        )
    steps = list(definition.steps)
    steps[index] = updated_step
    return _with_steps(definition, steps)


def move_step(
    definition: WorkflowDefinition,
    step_id: str,
    direction: Union[MoveDirection, str],
) -> WorkflowDefinition:
    """Swap a step with its neighbour above or below.

    Moving the first step up or the last step down returns the definition
    unchanged.

    Raises:
        StepNotFoundError: If no step has that id
        ValueError: If direction is not "up" or "down"
    """
    direction = MoveDirection(direction)
    index = _require_index(definition, step_id)
    target = index - 1 if direction is MoveDirection.UP else index + 1
    if target < 0 or target >= len(definition.steps):
        return definition

    steps = list(definition.steps)
    steps[index], steps[target] = steps[target], steps[index]
    return _with_steps(definition, steps)


def set_active(definition: WorkflowDefinition, is_active: bool) -> WorkflowDefinition:
    if definition.is_active == is_active:
        return definition
    return definition.model_copy(update={"is_active": is_active, "updated_at": utc_now()})


def toggle_active(definition: WorkflowDefinition) -> WorkflowDefinition:
    return set_active(definition, not definition.is_active)


def validate_for_save(definition: WorkflowDefinition) -> ValidationResult:
    """Check the required-field rules and collect every violation.

    Never raises; a caller renders ``result.violations`` all at once.
    """
    result = ValidationResult()

    if not (definition.name or "").strip():
        result.violations.append(ValidationIssue("name", "Workflow name is required"))

    trigger = definition.trigger
    if trigger is None or trigger not in set(WorkflowTrigger):
        result.violations.append(ValidationIssue("trigger", "Workflow trigger is required"))

    seen = set()
    duplicates = []
    for step in definition.steps:
        if step.id in seen and step.id not in duplicates:
            duplicates.append(step.id)
        seen.add(step.id)
    if duplicates:
        result.violations.append(
            ValidationIssue("steps", f"Duplicate step ids: {', '.join(duplicates)}")
        )

    for position, step in enumerate(definition.steps, start=1):
        if step.type == StepType.SMS and len(step.content) > SMS_SOFT_LIMIT:
            result.warnings.append(
                ValidationIssue(
                    f"steps[{position - 1}].content",
                    f"Step {position} SMS is {len(step.content)} characters "
                    f"(recommended max {SMS_SOFT_LIMIT})",
                )
            )

    return result


def prepare_for_save(definition: WorkflowDefinition) -> WorkflowDefinition:
    """Validate and stamp ``updated_at`` ahead of a whole-document write.

    ``created_at`` and ``stats`` are carried over unchanged.

    Raises:
        ValidationError: With every violated rule
    """
    result = validate_for_save(definition)
    if not result.is_valid:
        logger.info(
            "Workflow failed save validation",
            workflow_id=definition.id,
            violations=[v.field for v in result.violations],
        )
        raise ValidationError(result.violations)
    for warning in result.warnings:
        logger.warning("Workflow save warning", workflow_id=definition.id, detail=warning.message)
    return definition.model_copy(update={"updated_at": utc_now()})
