"""
===============================================================================
WorkflowService – state transitions with store persistence
-------------------------------------------------------------------------------
Transitions:
    - archive -> archived (pending only; archived is a no-op)
    - assign  -> sets/overwrites the assignee (any status)

Every successful write is registered with the cache, which drops the cached
list so the following refresh re-fetches from the store.

Collaborators
    - DocumentCache (and its DocumentStore)
    - LifecyclePolicy
===============================================================================
"""
from __future__ import annotations

import logging
from typing import Optional

from incomingdocs.logic.policy.lifecycle_policy import LifecyclePolicy
from incomingdocs.logic.repository.document_cache import DocumentCache
from incomingdocs.models.document import Document

logger = logging.getLogger(__name__)


class WorkflowService:
    """Encapsulates lifecycle transitions and persistence."""

    def __init__(self, cache: DocumentCache, policy: Optional[LifecyclePolicy] = None) -> None:
        self._cache = cache
        self._policy = policy or LifecyclePolicy()

    def archive(self, *, document_id: str, current: Optional[Document] = None) -> Optional[Document]:
        """
        Archive a pending document.

        Returns the updated document, or None if it was already archived
        (nothing is sent to the store in that case).
        """
        doc = current or self._cache.get(document_id)
        target = self._policy.archive_target(doc)
        if target is None:
            logger.info("document %s already archived; skipping", document_id)
            return None
        updated = self._cache.store.update_status(document_id, target)
        self._cache.record_write(updated)
        logger.info("document %s: %s -> %s", document_id, doc.status.value, updated.status.value)
        return updated

    def assign(self, *, document_id: str, assignee: Optional[str]) -> Document:
        name = self._policy.normalize_assignee(assignee)
        updated = self._cache.store.assign(document_id, name)
        self._cache.record_write(updated)
        logger.info("document %s assigned to %s", document_id, name)
        return updated
