"""
Pre-built marketing workflow templates.

Templates are code-defined and read-only. ``instantiate`` always works on a
deep copy, so editing a workflow created from a template can never leak
back into the library.
"""

from typing import List, Optional, Union

import structlog
from pydantic import BaseModel, ConfigDict

from core.constants import TemplateCategory
from core.exceptions import NotFoundError
from core.utils import generate_id, utc_now
from workflow.definition import WorkflowBody, WorkflowDefinition, WorkflowStats

logger = structlog.get_logger(__name__)


class WorkflowTemplate(BaseModel):
    """A library entry: metadata plus the workflow body it seeds."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    category: TemplateCategory
    workflow: WorkflowBody

    def to_dict(self, include_steps: bool = True) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "stepCount": len(self.workflow.steps),
        }
        if include_steps:
            data["workflow"] = self.workflow.model_dump(by_alias=True, mode="json")
        return data


BUILTIN_TEMPLATES = [
    # ═══════════════════════════════════════════════════════════════════
    # ONBOARDING
    # ═══════════════════════════════════════════════════════════════════
    {
        "id": "new-client-welcome",
        "name": "New Client Welcome Series",
        "description": "Welcome new clients with educational content and appointment reminders",
        "category": "onboarding",
        "workflow": {
            "name": "New Client Welcome Series",
            "description": "Automated welcome sequence for new clients",
            "trigger": "new_client",
            "isActive": True,
            "steps": [
                {"id": "1", "type": "email", "title": "Welcome Email", "description": "Send welcome email immediately", "subject": "Welcome to A Pretty Girl Matter!", "content": "Thank you for choosing us for your permanent makeup journey..."},
                {"id": "2", "type": "delay", "title": "Wait 2 Days", "description": "Wait 2 days before next step", "delay": 2, "delayUnit": "days"},
                {"id": "3", "type": "email", "title": "Preparation Guide", "description": "Send pre-appointment preparation guide", "subject": "Preparing for Your Appointment", "content": "Here's everything you need to know before your appointment..."},
            ],
        },
    },
    # ═══════════════════════════════════════════════════════════════════
    # RETENTION
    # ═══════════════════════════════════════════════════════════════════
    {
        "id": "appointment-reminder",
        "name": "Appointment Reminder Sequence",
        "description": "Automated reminders leading up to appointments",
        "category": "retention",
        "workflow": {
            "name": "Appointment Reminder Sequence",
            "description": "Send reminders before appointments",
            "trigger": "appointment_booked",
            "isActive": True,
            "steps": [
                {"id": "1", "type": "delay", "title": "Wait Until 7 Days Before", "description": "Wait until 7 days before appointment", "delay": 7, "delayUnit": "days"},
                {"id": "2", "type": "email", "title": "7-Day Reminder", "description": "Send 7-day appointment reminder", "subject": "Your Appointment is Coming Up!", "content": "Your appointment is scheduled for next week..."},
                {"id": "3", "type": "delay", "title": "Wait Until 1 Day Before", "description": "Wait until 1 day before appointment", "delay": 1, "delayUnit": "days"},
                {"id": "4", "type": "sms", "title": "24-Hour SMS Reminder", "description": "Send SMS reminder 24 hours before", "content": "Reminder: Your appointment is tomorrow at [TIME]. Reply CONFIRM to confirm."},
            ],
        },
    },
    # ═══════════════════════════════════════════════════════════════════
    # NURTURING
    # ═══════════════════════════════════════════════════════════════════
    {
        "id": "post-appointment-care",
        "name": "Post-Appointment Care Series",
        "description": "Follow-up care instructions and check-ins after appointments",
        "category": "nurturing",
        "workflow": {
            "name": "Post-Appointment Care Series",
            "description": "Aftercare and follow-up sequence",
            "trigger": "appointment_completed",
            "isActive": True,
            "steps": [
                {"id": "1", "type": "email", "title": "Immediate Aftercare", "description": "Send aftercare instructions immediately", "subject": "Your Aftercare Instructions", "content": "Thank you for your appointment! Here are your aftercare instructions..."},
                {"id": "2", "type": "delay", "title": "Wait 3 Days", "description": "Wait 3 days for healing check-in", "delay": 3, "delayUnit": "days"},
                {"id": "3", "type": "email", "title": "Healing Check-in", "description": "Check on healing progress", "subject": "How is Your Healing Going?", "content": "It's been 3 days since your appointment. How is everything healing?"},
                {"id": "4", "type": "delay", "title": "Wait 4 Weeks", "description": "Wait 4 weeks for touch-up reminder", "delay": 4, "delayUnit": "weeks"},
                {"id": "5", "type": "email", "title": "Touch-up Reminder", "description": "Remind about touch-up appointment", "subject": "Time for Your Touch-up!", "content": "It's time to schedule your complimentary touch-up appointment..."},
            ],
        },
    },
    # ═══════════════════════════════════════════════════════════════════
    # RECOVERY
    # ═══════════════════════════════════════════════════════════════════
    {
        "id": "no-show-recovery",
        "name": "No-Show Recovery Campaign",
        "description": "Re-engage clients who missed their appointments",
        "category": "recovery",
        "workflow": {
            "name": "No-Show Recovery Campaign",
            "description": "Follow up with no-show clients",
            "trigger": "no_show",
            "isActive": True,
            "steps": [
                {"id": "1", "type": "email", "title": "We Missed You", "description": "Send understanding follow-up email", "subject": "We Missed You Today", "content": "We understand things come up. Let's reschedule your appointment..."},
                {"id": "2", "type": "delay", "title": "Wait 2 Days", "description": "Wait 2 days before follow-up", "delay": 2, "delayUnit": "days"},
                {"id": "3", "type": "sms", "title": "Reschedule Offer", "description": "Send SMS with easy rescheduling", "content": "Hi! We'd love to reschedule your appointment. Reply YES to get available times."},
                {"id": "4", "type": "delay", "title": "Wait 1 Week", "description": "Wait 1 week for final attempt", "delay": 1, "delayUnit": "weeks"},
                {"id": "5", "type": "email", "title": "Special Offer", "description": "Send special offer to re-engage", "subject": "Special Offer Just for You", "content": "We'd love to have you back! Here's a special offer..."},
            ],
        },
    },
    # ═══════════════════════════════════════════════════════════════════
    # PROMOTIONAL
    # ═══════════════════════════════════════════════════════════════════
    {
        "id": "birthday-campaign",
        "name": "Birthday Celebration Campaign",
        "description": "Special birthday offers and wishes for clients",
        "category": "promotional",
        "workflow": {
            "name": "Birthday Celebration Campaign",
            "description": "Birthday wishes and special offers",
            "trigger": "birthday",
            "isActive": True,
            "steps": [
                {"id": "1", "type": "email", "title": "Birthday Wishes", "description": "Send birthday wishes with special offer", "subject": "Happy Birthday from A Pretty Girl Matter!", "content": "Happy Birthday! Celebrate with a special birthday discount..."},
                {"id": "2", "type": "tag", "title": "Add Birthday Tag", "description": "Tag client as birthday celebrant", "tags": ["birthday_2024"]},
                {"id": "3", "type": "delay", "title": "Wait 1 Week", "description": "Wait 1 week for follow-up", "delay": 1, "delayUnit": "weeks"},
                {"id": "4", "type": "email", "title": "Birthday Offer Reminder", "description": "Remind about birthday offer", "subject": "Don't Forget Your Birthday Offer!", "content": "Your birthday offer expires soon. Book now to save!"},
            ],
        },
    },
]

_TEMPLATES: List[WorkflowTemplate] = [WorkflowTemplate.model_validate(t) for t in BUILTIN_TEMPLATES]


def list_templates(category: Optional[Union[TemplateCategory, str]] = None) -> List[WorkflowTemplate]:
    """List library templates, optionally filtered by category.

    Each entry is a private copy; the library itself is never handed out.
    """
    if category is not None:
        category = TemplateCategory(category)
    return [
        t.model_copy(deep=True)
        for t in _TEMPLATES
        if category is None or t.category is category
    ]


def list_categories() -> List[str]:
    """Distinct categories that have at least one template."""
    return sorted({t.category.value for t in _TEMPLATES})


def get_template(template_id: str) -> WorkflowTemplate:
    """Look up a template by id. Returns a copy the caller may freely edit.

    Raises:
        NotFoundError: If no template has that id
    """
    for template in _TEMPLATES:
        if template.id == template_id:
            return template.model_copy(deep=True)
    raise NotFoundError(f"Template not found: {template_id}")


def instantiate(template: WorkflowTemplate) -> WorkflowDefinition:
    """Create a new, independent workflow from a template.

    The body is deep-copied; the result gets a fresh id, ``created_at`` and
    ``updated_at`` set to now, and zeroed stats.
    """
    body = template.workflow.model_copy(deep=True)
    now = utc_now()
    definition = WorkflowDefinition(
        id=generate_id("workflow"),
        name=body.name,
        description=body.description,
        trigger=body.trigger,
        is_active=body.is_active,
        steps=body.steps,
        created_at=now,
        updated_at=now,
        stats=WorkflowStats(),
    )
    logger.debug("Instantiated workflow template", template_id=template.id, workflow_id=definition.id)
    return definition
