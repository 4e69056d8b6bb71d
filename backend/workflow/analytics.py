"""Summary metrics computed from the stored workflow stats counters."""

from typing import Any, Dict, Iterable, Optional

from core.utils import completion_rate
from workflow.definition import WorkflowDefinition


def _rate(workflow: WorkflowDefinition) -> float:
    return completion_rate(workflow.stats.completed, workflow.stats.total_enrolled)


def summarize(workflows: Iterable[WorkflowDefinition]) -> Dict[str, Any]:
    """
    Aggregate enrollment counters across workflows.

    Args:
        workflows: Definitions as loaded from the store

    Returns:
        Dict with:
        - totalWorkflows / activeWorkflows
        - totalEnrolled / totalCompleted
        - averageCompletionRate: percent, 0 when nobody enrolled
        - topPerformingWorkflow: name of the best completion rate, first wins ties
        - performanceByTrigger: {trigger: {total, completed, rate}}
    """
    workflows = list(workflows)

    total_enrolled = sum(w.stats.total_enrolled for w in workflows)
    total_completed = sum(w.stats.completed for w in workflows)

    top: Optional[WorkflowDefinition] = None
    for wf in workflows:
        if top is None or _rate(wf) > _rate(top):
            top = wf

    by_trigger: Dict[str, Dict[str, Any]] = {}
    for wf in workflows:
        if wf.trigger is None:
            continue
        bucket = by_trigger.setdefault(wf.trigger.value, {"total": 0, "completed": 0, "rate": 0.0})
        bucket["total"] += wf.stats.total_enrolled
        bucket["completed"] += wf.stats.completed
    for bucket in by_trigger.values():
        bucket["rate"] = completion_rate(bucket["completed"], bucket["total"])

    return {
        "totalWorkflows": len(workflows),
        "activeWorkflows": sum(1 for w in workflows if w.is_active),
        "totalEnrolled": total_enrolled,
        "totalCompleted": total_completed,
        "averageCompletionRate": completion_rate(total_completed, total_enrolled),
        "topPerformingWorkflow": top.name if top else None,
        "performanceByTrigger": by_trigger,
    }
