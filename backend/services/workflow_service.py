"""Workflow service: load, save and delete whole workflow documents."""

from typing import List

import structlog

from core.constants import WORKFLOWS_COLLECTION
from core.exceptions import NotFoundError
from services.document_store import DocumentStore
from workflow.builder import prepare_for_save, toggle_active
from workflow.definition import WorkflowDefinition
from workflow.templates import get_template, instantiate

logger = structlog.get_logger(__name__)


class WorkflowService:
    """Persistence boundary for workflow definitions.

    Saves always write the complete document, so the stored ``steps`` list is
    replaced wholesale. Concurrent saves are last-writer-wins. Store errors
    (``PersistenceError``) reach the caller unchanged.
    """

    def __init__(self, store: DocumentStore, collection: str = WORKFLOWS_COLLECTION):
        self.store = store
        self.collection = collection

    async def list_workflows(self) -> List[WorkflowDefinition]:
        docs = await self.store.list(self.collection)
        return [WorkflowDefinition.from_document(doc) for doc in docs]

    async def get_workflow(self, workflow_id: str) -> WorkflowDefinition:
        """Load one workflow.

        Raises:
            NotFoundError: If no workflow has that id
        """
        doc = await self.store.get(self.collection, workflow_id)
        if doc is None:
            raise NotFoundError(f"Workflow not found: {workflow_id}")
        return WorkflowDefinition.from_document(doc)

    async def exists(self, workflow_id: str) -> bool:
        return await self.store.get(self.collection, workflow_id) is not None

    async def save_workflow(self, definition: WorkflowDefinition) -> WorkflowDefinition:
        """Validate and write a workflow, creating it when its id is new.

        Raises:
            ValidationError: If required fields are missing
        """
        prepared = prepare_for_save(definition)
        document = prepared.to_document()

        if await self.exists(prepared.id):
            await self.store.update(self.collection, prepared.id, document)
            logger.info("Workflow updated", workflow_id=prepared.id, steps=len(prepared.steps))
        else:
            await self.store.create(self.collection, document)
            logger.info("Workflow created", workflow_id=prepared.id, steps=len(prepared.steps))
        return prepared

    async def update_workflow(self, workflow_id: str, definition: WorkflowDefinition) -> WorkflowDefinition:
        """Overwrite an existing workflow with ``definition``.

        ``created_at`` and ``stats`` are kept from the stored copy unless the
        caller supplied them explicitly.

        Raises:
            NotFoundError: If no workflow has that id
            ValidationError: If required fields are missing
        """
        current = await self.get_workflow(workflow_id)
        update = {"id": workflow_id}
        if "created_at" not in definition.model_fields_set:
            update["created_at"] = current.created_at
        if "stats" not in definition.model_fields_set:
            update["stats"] = current.stats
        return await self.save_workflow(definition.model_copy(update=update))

    async def delete_workflow(self, workflow_id: str) -> None:
        """Permanently delete a workflow.

        Raises:
            NotFoundError: If no workflow has that id
        """
        await self.store.delete(self.collection, workflow_id)
        logger.info("Workflow deleted", workflow_id=workflow_id)

    async def toggle_workflow(self, workflow_id: str) -> WorkflowDefinition:
        """Flip ``is_active`` and save."""
        current = await self.get_workflow(workflow_id)
        return await self.save_workflow(toggle_active(current))

    async def create_from_template(self, template_id: str) -> WorkflowDefinition:
        """Instantiate a library template and save the result as a new workflow.

        Raises:
            NotFoundError: If no template has that id
        """
        definition = instantiate(get_template(template_id))
        saved = await self.save_workflow(definition)
        logger.info("Workflow created from template", template_id=template_id, workflow_id=saved.id)
        return saved
