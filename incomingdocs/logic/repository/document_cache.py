"""
===============================================================================
DocumentCache – read-through cache keyed by document id
-------------------------------------------------------------------------------
Purpose
    Replace "re-fetch everything and let the last response win" with an
    explicit cache in front of the DocumentStore:

    - get(id)  : served from cache, fetched from the store on a miss
    - list()   : served from cache, fetched on a miss
    - writes   : go through `record_write()` which stores the returned
                 document, drops the cached list and bumps the generation

Ordering
    Every write bumps `generation`. A list fetch that started before a write
    finished is not stored and is reported as stale (ListSnapshot.stale), so
    a slow response can no longer overwrite newer state.

Thread-safety
    Store calls may run on a worker thread while the Tk loop reads; a single
    lock guards the maps and the counter. The store call itself runs outside
    the lock.
===============================================================================
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from incomingdocs.logic.repository.document_store import DocumentStore
from incomingdocs.models.document import Document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListSnapshot:
    documents: Tuple[Document, ...]
    generation: int
    stale: bool = False


class DocumentCache:
    def __init__(self, store: DocumentStore) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._by_id: Dict[str, Document] = {}
        self._list: Optional[Tuple[Document, ...]] = None
        self._generation = 0

    @property
    def store(self) -> DocumentStore:
        return self._store

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #
    def get(self, doc_id: str) -> Document:
        key = str(doc_id)
        with self._lock:
            hit = self._by_id.get(key)
            gen = self._generation
        if hit is not None:
            logger.debug("cache hit %s", key)
            return hit

        doc = self._store.get_document(key)
        with self._lock:
            if gen == self._generation:
                self._by_id[key] = doc
        return doc

    def list(self) -> ListSnapshot:
        with self._lock:
            cached = self._list
            gen = self._generation
        if cached is not None:
            return ListSnapshot(cached, gen)

        docs = tuple(self._store.list_documents())
        with self._lock:
            if gen != self._generation:
                logger.debug("discarding stale list (gen %s, now %s)", gen, self._generation)
                return ListSnapshot(docs, gen, stale=True)
            self._list = docs
        return ListSnapshot(docs, gen)

    def peek(self, doc_id: str) -> Optional[Document]:
        """Cached document or the matching row of the cached list; never hits the store."""
        key = str(doc_id)
        with self._lock:
            if key in self._by_id:
                return self._by_id[key]
            for doc in self._list or ():
                if str(doc.id) == key:
                    return doc
        return None

    # ------------------------------------------------------------------ #
    # Writes / invalidation
    # ------------------------------------------------------------------ #
    def record_write(self, doc: Optional[Document] = None) -> int:
        """Register a completed write; returns the new generation."""
        with self._lock:
            self._generation += 1
            self._list = None
            if doc is not None:
                self._by_id[str(doc.id)] = doc
            logger.debug("cache invalidated (gen %s)", self._generation)
            return self._generation

    def invalidate(self, doc_id: Optional[str] = None) -> None:
        with self._lock:
            self._generation += 1
            self._list = None
            if doc_id is None:
                self._by_id.clear()
            else:
                self._by_id.pop(str(doc_id), None)

    def cached_ids(self) -> List[str]:
        with self._lock:
            return sorted(self._by_id)
