"""Tests for the step catalog and step factory."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from core.constants import DelayUnit, StepType, TaskAssignee
from core.exceptions import InvalidStepTypeError
from workflow.steps import (
    DelayStep,
    EmailStep,
    TagStep,
    create_step,
    get_step_type,
    list_step_types,
    parse_step,
)


REQUIRED_FIELDS = {
    StepType.EMAIL: ["subject", "content"],
    StepType.SMS: ["content"],
    StepType.DELAY: ["delay", "delay_unit"],
    StepType.CONDITION: ["condition"],
    StepType.TAG: ["tags"],
    StepType.TASK: ["task_description", "assigned_to"],
}


@pytest.mark.unit
class TestCreateStep:

    @pytest.mark.parametrize("step_type", list(StepType))
    def test_every_type_has_defaults(self, step_type):
        step = create_step(step_type)
        assert step.type == step_type
        assert step.id.startswith("step_")
        assert step.title
        for name in REQUIRED_FIELDS[step_type]:
            assert getattr(step, name) is not None

    def test_accepts_plain_string(self):
        step = create_step("delay")
        assert isinstance(step, DelayStep)
        assert step.delay == 1
        assert step.delay_unit == DelayUnit.DAYS

    def test_unknown_type_rejected(self):
        with pytest.raises(InvalidStepTypeError):
            create_step("bogus")

    def test_none_type_rejected(self):
        with pytest.raises(InvalidStepTypeError):
            create_step(None)

    def test_ids_are_unique(self):
        ids = {create_step(StepType.EMAIL).id for _ in range(50)}
        assert len(ids) == 50

    def test_defaults_not_shared_between_steps(self):
        first = create_step(StepType.TAG)
        first.tags.append("vip")
        second = create_step(StepType.TAG)
        assert second.tags == ["workflow_participant"]

    def test_condition_defaults(self):
        step = create_step(StepType.CONDITION)
        assert step.condition.field == "role"
        assert step.condition.operator.value == "equals"
        assert step.condition.value == "client"

    def test_task_defaults(self):
        step = create_step(StepType.TASK)
        assert step.task_description == "Follow up with client"
        assert step.assigned_to == TaskAssignee.ADMIN

    def test_variant_fields_do_not_leak(self):
        step = create_step(StepType.EMAIL)
        assert isinstance(step, EmailStep)
        assert not hasattr(step, "delay")
        assert not hasattr(step, "tags")


@pytest.mark.unit
class TestStepModels:

    def test_delay_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            DelayStep(id="s1", delay=0)

    def test_tags_deduplicated_in_order(self):
        step = TagStep(id="s1", tags=["vip", "new", "vip", "birthday", "new"])
        assert step.tags == ["vip", "new", "birthday"]

    def test_parse_step_from_stored_shape(self):
        step = parse_step({
            "id": "2",
            "type": "delay",
            "title": "Wait 2 Days",
            "description": "Wait 2 days before next step",
            "delay": 2,
            "delayUnit": "days",
        })
        assert isinstance(step, DelayStep)
        assert step.delay == 2
        assert step.delay_unit == DelayUnit.DAYS

    def test_parse_step_unknown_type(self):
        with pytest.raises(InvalidStepTypeError):
            parse_step({"id": "1", "type": "fax"})

    def test_parse_step_ignores_fields_of_other_variants(self):
        step = parse_step({"id": "1", "type": "email", "subject": "Hi", "content": "Hello", "delay": 3})
        assert isinstance(step, EmailStep)
        assert not hasattr(step, "delay")


@pytest.mark.unit
class TestStepCatalog:

    def test_six_types_in_picker_order(self):
        catalog = list_step_types()
        assert [info.type for info in catalog] == [
            StepType.EMAIL,
            StepType.SMS,
            StepType.DELAY,
            StepType.CONDITION,
            StepType.TAG,
            StepType.TASK,
        ]

    def test_catalog_is_restartable(self):
        assert list_step_types() == list_step_types()

    def test_default_payload_uses_stored_keys(self):
        delay = get_step_type(StepType.DELAY)
        assert delay.default_payload["delayUnit"] == "days"
        task = get_step_type("task")
        assert task.default_payload["taskDescription"] == "Follow up with client"
        assert task.default_payload["assignedTo"] == "admin"
        assert "id" not in task.default_payload

    def test_to_dict(self):
        data = get_step_type(StepType.EMAIL).to_dict()
        assert data["type"] == "email"
        assert data["title"] == "Send Email"
        assert data["icon"] == "fa-envelope"
        assert data["color"] == "#AD6269"
        assert data["defaultPayload"]["subject"] == "Message from A Pretty Girl Matter"

    def test_every_entry_has_a_color(self):
        colors = {info.type: info.color for info in list_step_types()}
        assert colors[StepType.DELAY] == "#ffc107"
        assert all(c.startswith("#") for c in colors.values())
        assert len(set(colors.values())) == 6

    def test_picker_labels_differ_from_step_defaults(self):
        delay = get_step_type(StepType.DELAY)
        assert (delay.title, delay.description) == ("Wait/Delay", "Wait for a specified amount of time")
        assert delay.default_payload["title"] == "Wait"
        assert delay.default_payload["description"] == "Wait before next step"

    def test_get_unknown_type(self):
        with pytest.raises(InvalidStepTypeError):
            get_step_type("bogus")
