"""
FAQ service: CRUD over the store plus the /faqs/ask query engine.

``ask`` is a pure function of (text, lang, current entries). Store errors
are not caught here; they surface to the handler as infrastructure errors,
which keeps them distinct from the "not sure" fallback.
"""

from __future__ import annotations

import time
from typing import List, Optional, Protocol

from config.settings import MatchingConfig, Settings
from models.faq import AskResponse, FaqCreate, FaqEntry, FaqUpdate
from services.matching import ScoredCandidate, fallback_response, rank_candidates, score_entry
from utils.cache_service import SnapshotCache
from utils.error_handling import NotFoundError
from utils.logging_config import get_logger

logger = get_logger(__name__)


class FaqStore(Protocol):
    """What FaqService needs from a repository."""

    def fetch_entries(self, lang: Optional[str] = None) -> List[FaqEntry]: ...

    def get(self, entry_id: int) -> Optional[FaqEntry]: ...

    def create(self, data: FaqCreate) -> FaqEntry: ...

    def update(self, entry_id: int, data: FaqUpdate) -> Optional[FaqEntry]: ...

    def delete(self, entry_id: int) -> bool: ...

    def ping(self) -> None: ...

    def server_info(self) -> dict: ...


class FaqService:
    """Business logic behind the /faqs routes."""

    def __init__(
        self,
        repository: FaqStore,
        matching: Optional[MatchingConfig] = None,
        cache: Optional[SnapshotCache] = None,
        default_lang: str = "en",
    ) -> None:
        self.repository = repository
        self.matching = matching or MatchingConfig()
        self.cache = cache or SnapshotCache(ttl_seconds=0)
        self.default_lang = default_lang

    def create(self, data: FaqCreate) -> FaqEntry:
        entry = self.repository.create(data)
        self.cache.invalidate()
        logger.info("FAQ created", extra={"faq_id": entry.id, "lang": entry.lang})
        return entry

    def find_all(self, lang: Optional[str] = None) -> List[FaqEntry]:
        return self.repository.fetch_entries(lang)

    def find_one(self, entry_id: int) -> FaqEntry:
        entry = self.repository.get(entry_id)
        if entry is None:
            raise NotFoundError(f"FAQ with ID {entry_id} not found")
        return entry

    def update(self, entry_id: int, data: FaqUpdate) -> FaqEntry:
        entry = self.repository.update(entry_id, data)
        if entry is None:
            raise NotFoundError(f"FAQ with ID {entry_id} not found")
        self.cache.invalidate()
        logger.info("FAQ updated", extra={"faq_id": entry_id, "fields": sorted(data.changes())})
        return entry

    def remove(self, entry_id: int) -> None:
        if not self.repository.delete(entry_id):
            raise NotFoundError(f"FAQ with ID {entry_id} not found")
        self.cache.invalidate()
        logger.info("FAQ deleted", extra={"faq_id": entry_id})

    def ask(self, text: str, lang: Optional[str] = None) -> AskResponse:
        """
        Answer a free-text question from the stored FAQs.

        Returns up to ``max_results`` confident matches, every close match when
        they span several topics (``ambiguous``), or the fallback message.
        """
        start = time.perf_counter()
        lang = lang or self.default_lang

        entries = self._entries_for(lang)
        if not entries:
            response = fallback_response(self.matching)
        else:
            candidates = [
                ScoredCandidate(entry=entry, score=score_entry(text, entry, self.matching))
                for entry in entries
            ]
            response = rank_candidates(candidates, self.matching)

        logger.info(
            "FAQ ask answered",
            extra={
                "lang": lang,
                "candidates": len(entries),
                "results": len(response.results),
                "ambiguous": bool(response.ambiguous),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return response

    def health(self) -> dict:
        """Ping the store; raises when it is unreachable."""
        self.repository.ping()
        return {"database": "connected", "cache": self.cache.stats()}

    def database_info(self) -> dict:
        return self.repository.server_info()

    def _entries_for(self, lang: str) -> List[FaqEntry]:
        cached = self.cache.get(lang)
        if cached is not None:
            return cached
        return self.cache.set(lang, self.repository.fetch_entries(lang))


# Shared per-process instance (survives warm Lambda invocations).
_service: Optional[FaqService] = None


def get_faq_service(settings: Optional[Settings] = None) -> FaqService:
    """Build the service once: SQL store when configured, seeded memory store otherwise."""
    global _service
    if _service is None:
        from repositories.database import get_db_engine

        settings = settings or Settings.from_environment()
        engine = get_db_engine(settings)
        if engine is not None:
            from repositories.postgres_repo import FaqRepository

            repository: FaqStore = FaqRepository(engine)
            repository.create_schema()
        else:
            from repositories.memory_repo import InMemoryFaqRepository
            from repositories.seed_data import SEED_FAQS

            repository = InMemoryFaqRepository(seed=SEED_FAQS)

        _service = FaqService(
            repository,
            matching=settings.matching,
            cache=SnapshotCache(ttl_seconds=settings.snapshot_cache_ttl_seconds),
            default_lang=settings.default_lang,
        )
    return _service


def reset_faq_service() -> None:
    """Forget the shared instance (used by tests)."""
    global _service
    _service = None
