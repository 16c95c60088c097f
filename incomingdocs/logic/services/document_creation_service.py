"""
===============================================================================
DocumentCreationService – validate a draft and register it in the store
-------------------------------------------------------------------------------
Flow
    1. LifecyclePolicy.validate_draft (ValidationError lists every field)
    2. DocumentStore.create_document (TransportError on failure)
    3. cache.record_write so the next list() re-fetches

The draft itself is never mutated here; clearing it after success is the
form controller's job.
===============================================================================
"""
from __future__ import annotations

import logging
from typing import Optional

from incomingdocs.logic.policy.lifecycle_policy import LifecyclePolicy
from incomingdocs.logic.repository.document_cache import DocumentCache
from incomingdocs.models.document import Document, DocumentDraft

logger = logging.getLogger(__name__)


class DocumentCreationService:
    def __init__(self, cache: DocumentCache, policy: Optional[LifecyclePolicy] = None) -> None:
        self._cache = cache
        self._policy = policy or LifecyclePolicy()

    def create(self, draft: DocumentDraft) -> Document:
        self._policy.validate_draft(draft)
        doc = self._cache.store.create_document(draft)
        self._cache.record_write(doc)
        logger.info("created document %s (%s, %s)", doc.id, doc.doc_type.value, doc.document_number)
        return doc
