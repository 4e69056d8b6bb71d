"""Tests for the workflow definition document shape."""

import json

import pytest

from core.constants import StepType, WorkflowTrigger
from workflow.builder import add_step
from workflow.definition import WorkflowDefinition, WorkflowStats
from workflow.steps import ConditionStep, DelayStep, create_step


@pytest.fixture
def full_definition():
    definition = WorkflowDefinition(
        name="Every Step",
        description="One of each",
        trigger=WorkflowTrigger.FOLLOW_UP,
        is_active=True,
        stats=WorkflowStats(total_enrolled=12, completed=7, active=3),
    )
    for step_type in StepType:
        definition = add_step(definition, create_step(step_type))
    return definition


@pytest.mark.unit
class TestDocumentShape:

    def test_top_level_keys(self, full_definition):
        doc = full_definition.to_document()
        assert set(doc) == {
            "id", "name", "description", "trigger", "isActive",
            "steps", "createdAt", "updatedAt", "stats",
        }
        assert doc["trigger"] == "follow_up"
        assert doc["stats"] == {"totalEnrolled": 12, "completed": 7, "active": 3}

    def test_timestamps_are_iso_strings(self, full_definition):
        doc = full_definition.to_document()
        assert isinstance(doc["createdAt"], str)
        assert doc["createdAt"].startswith(str(full_definition.created_at.year))

    def test_step_keys_are_camel_case(self, full_definition):
        steps = {s["type"]: s for s in full_definition.to_document()["steps"]}
        assert steps["delay"]["delayUnit"] == "days"
        assert steps["task"]["taskDescription"] == "Follow up with client"
        assert steps["task"]["assignedTo"] == "admin"
        assert steps["condition"]["condition"] == {"field": "role", "operator": "equals", "value": "client"}
        assert "delay" not in steps["email"]

    def test_round_trip_through_json(self, full_definition):
        text = json.dumps(full_definition.to_document())
        restored = WorkflowDefinition.from_document(json.loads(text))

        assert restored.model_dump() == full_definition.model_dump()
        assert restored.to_document() == full_definition.to_document()
        assert isinstance(restored.steps[2], DelayStep)
        assert isinstance(restored.steps[3], ConditionStep)

    def test_parse_document_with_legacy_ids(self):
        doc = {
            "id": "workflow_1718000000000",
            "name": "Legacy",
            "description": "",
            "trigger": "no_show",
            "isActive": False,
            "steps": [
                {"id": "step_1718000000001", "type": "tag", "title": "Tag", "description": "", "tags": ["a", "b"]},
            ],
            "createdAt": "2024-06-10T08:00:00.000Z",
            "updatedAt": "2024-06-11T08:00:00.000Z",
            "stats": {"totalEnrolled": 0, "completed": 0, "active": 0},
        }
        definition = WorkflowDefinition.from_document(doc)
        assert definition.id == "workflow_1718000000000"
        assert definition.trigger == WorkflowTrigger.NO_SHOW
        assert definition.steps[0].tags == ["a", "b"]
        assert definition.created_at.tzinfo is not None

    def test_index_of(self, full_definition):
        last = full_definition.steps[-1]
        assert full_definition.index_of(last.id) == len(full_definition.steps) - 1
        assert full_definition.index_of("nope") == -1
