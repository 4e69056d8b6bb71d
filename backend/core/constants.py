"""Constants and enums for the marketing workflow service."""

from enum import Enum


class StepType(str, Enum):
    """Kind of action a workflow step describes."""

    EMAIL = "email"
    SMS = "sms"
    DELAY = "delay"
    CONDITION = "condition"
    TAG = "tag"
    TASK = "task"


class WorkflowTrigger(str, Enum):
    """Client event a workflow is attached to."""

    NEW_CLIENT = "new_client"
    APPOINTMENT_BOOKED = "appointment_booked"
    APPOINTMENT_COMPLETED = "appointment_completed"
    NO_SHOW = "no_show"
    MANUAL = "manual"
    BIRTHDAY = "birthday"
    FOLLOW_UP = "follow_up"


class DelayUnit(str, Enum):
    """Unit for a delay step."""

    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"


class ConditionOperator(str, Enum):
    """Comparison used by a condition step."""

    EQUALS = "equals"
    CONTAINS = "contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    NOT_EQUALS = "not_equals"


class TaskAssignee(str, Enum):
    """Team role a task step is assigned to."""

    ADMIN = "admin"
    ARTIST = "artist"
    MANAGER = "manager"


class TemplateCategory(str, Enum):
    """Template library category."""

    NURTURING = "nurturing"
    RETENTION = "retention"
    RECOVERY = "recovery"
    ONBOARDING = "onboarding"
    PROMOTIONAL = "promotional"


class MoveDirection(str, Enum):
    """Direction for reordering a step."""

    UP = "up"
    DOWN = "down"


# Advisory only; longer messages are split by carriers, not rejected.
SMS_SOFT_LIMIT = 160

WORKFLOWS_COLLECTION = "workflows"
