# incomingdocs/logic/services/document_service.py
"""
===============================================================================
DocumentService – read side for listing/fetching/tracking documents
-------------------------------------------------------------------------------
Purpose:
    Provide a thin, UI-friendly read side for the incoming document workflow.
    - Lists documents through the read-through cache and converts them into
      row DTOs carrying per-row action flags.
    - Fetches single records for the viewer.
    - Lists inbox items (no caching: one fetch per mount).

Non-Goals:
    - No mutation (see DocumentCreationService / WorkflowService).

Errors:
    TransportError / NotFoundError propagate to the controllers.
===============================================================================
"""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from incomingdocs.logic.policy.lifecycle_policy import LifecyclePolicy
from incomingdocs.logic.repository.document_cache import DocumentCache, ListSnapshot
from incomingdocs.models.document import Document, InboxSummary
from incomingdocs.models.dto.document_list_item_dto import DocumentListItemDTO
from incomingdocs.models.dto.inbox_item_dto import InboxItemDTO
from incomingdocs.models.mappers import to_inbox_item_dto, to_list_item_dto

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Read-only facade over the cache/store.

    Parameters
    ----------
    cache : DocumentCache
        Read-through cache in front of the document store.
    policy : Optional[LifecyclePolicy]
        Decides per-row action flags (archive enabled).
    """

    def __init__(self, cache: DocumentCache, policy: Optional[LifecyclePolicy] = None) -> None:
        self._cache = cache
        self._policy = policy or LifecyclePolicy()

    @property
    def cache(self) -> DocumentCache:
        return self._cache

    # ------------------------------------------------------------------ #
    # Documents
    # ------------------------------------------------------------------ #
    def list_documents(self) -> ListSnapshot:
        snap = self._cache.list()
        logger.debug("listed %d documents (gen %s, stale=%s)", len(snap.documents), snap.generation, snap.stale)
        return snap

    def to_rows(self, documents: Tuple[Document, ...] | List[Document]) -> List[DocumentListItemDTO]:
        return [to_list_item_dto(d, archive_enabled=self._policy.can_archive(d)) for d in documents]

    def get_document(self, doc_id: str) -> Document:
        return self._cache.get(doc_id)

    def find_cached(self, doc_id: str) -> Optional[Document]:
        return self._cache.peek(doc_id)

    def track(self, doc_id: str) -> str:
        status = self._cache.store.track(doc_id)
        logger.info("tracked document %s: %s", doc_id, status)
        return status

    # ------------------------------------------------------------------ #
    # Inbox
    # ------------------------------------------------------------------ #
    def list_inbox(self) -> List[InboxSummary]:
        items = self._cache.store.list_inbox()
        logger.debug("listed %d inbox items", len(items))
        return items

    @staticmethod
    def to_inbox_rows(items: List[InboxSummary]) -> List[InboxItemDTO]:
        return [to_inbox_item_dto(i) for i in items]
