"""
Composition of the incoming document workflow.

`build_workflow` wires store -> cache -> services -> controllers for a given
view and authoring surface. The tk view and the tests use the same wiring.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from core.config.config_service import ConfigService, PrintConfig
from incomingdocs.controllers.assignment_controller import AssignmentController
from incomingdocs.controllers.document_form_controller import DocumentFormController
from incomingdocs.controllers.inbox_controller import InboxController
from incomingdocs.controllers.lifecycle_controller import DocumentLifecycleController
from incomingdocs.controllers.viewer_controller import ViewerController
from incomingdocs.logic.editor.authoring_surface import AuthoringSurface
from incomingdocs.logic.policy.lifecycle_policy import LifecyclePolicy
from incomingdocs.logic.repository.document_cache import DocumentCache
from incomingdocs.logic.repository.document_store import DocumentStore
from incomingdocs.logic.repository.http.document_store_http import HttpDocumentStore
from incomingdocs.logic.services.actions.printing_service import PrintingService
from incomingdocs.logic.services.actions.workflow_service import WorkflowService
from incomingdocs.logic.services.document_creation_service import DocumentCreationService
from incomingdocs.logic.services.document_service import DocumentService


@dataclass
class IncomingDocumentsWorkflow:
    cache: DocumentCache
    documents: DocumentService
    viewer: ViewerController
    lifecycle: DocumentLifecycleController
    form: DocumentFormController
    assignment: AssignmentController
    inbox: InboxController


def http_store_from_config(config: ConfigService) -> HttpDocumentStore:
    return HttpDocumentStore(
        config.backend.base_url,
        timeout=config.backend.timeout_seconds,
        token_provider=config.auth_token,
    )


def build_workflow(
    *,
    view: Any,
    surface: AuthoringSurface,
    store: DocumentStore,
    printing: Optional[PrintingService] = None,
    print_config: Optional[PrintConfig] = None,
) -> IncomingDocumentsWorkflow:
    policy = LifecyclePolicy()
    cache = DocumentCache(store)
    documents = DocumentService(cache, policy)
    printing = printing or PrintingService(print_config)

    viewer = ViewerController(view=view, surface=surface, printing_service=printing)
    lifecycle = DocumentLifecycleController(
        view=view,
        doc_service=documents,
        workflow_service=WorkflowService(cache, policy),
        viewer=viewer,
        policy=policy,
    )
    form = DocumentFormController(
        view=view,
        creation_service=DocumentCreationService(cache, policy),
        surface=surface,
        on_created=lambda _doc: lifecycle.load_document_list(),
    )
    assignment = AssignmentController(view=view, lifecycle=lifecycle, doc_service=documents)
    inbox = InboxController(view=view, doc_service=documents, viewer=viewer)
    return IncomingDocumentsWorkflow(
        cache=cache,
        documents=documents,
        viewer=viewer,
        lifecycle=lifecycle,
        form=form,
        assignment=assignment,
        inbox=inbox,
    )
