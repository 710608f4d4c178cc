"""In-process FAQ store used when no database is configured, and in tests."""

from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Iterable, List, Optional

from models.faq import FaqCreate, FaqEntry, FaqUpdate


class InMemoryFaqRepository:
    """Same interface as FaqRepository, backed by a dict."""

    def __init__(self, seed: Optional[Iterable[dict]] = None):
        self._entries: Dict[int, FaqEntry] = {}
        self._next_id = 1
        self._lock = Lock()
        for item in seed or ():
            self.create(FaqCreate.model_validate(item))

    def create_schema(self) -> None:
        """Nothing to create."""

    def fetch_entries(self, lang: Optional[str] = None) -> List[FaqEntry]:
        with self._lock:
            entries = sorted(self._entries.values(), key=lambda e: e.id)
        if lang:
            entries = [e for e in entries if e.lang == lang]
        return entries

    def get(self, entry_id: int) -> Optional[FaqEntry]:
        with self._lock:
            return self._entries.get(entry_id)

    def create(self, data: FaqCreate) -> FaqEntry:
        now = datetime.now(timezone.utc)
        with self._lock:
            entry = FaqEntry(id=self._next_id, created_at=now, updated_at=now, **data.model_dump())
            self._entries[entry.id] = entry
            self._next_id += 1
        return entry

    def update(self, entry_id: int, data: FaqUpdate) -> Optional[FaqEntry]:
        with self._lock:
            current = self._entries.get(entry_id)
            if current is None:
                return None
            updated = current.model_copy(
                update={**data.changes(), "updated_at": datetime.now(timezone.utc)}
            )
            self._entries[entry_id] = updated
            return updated

    def delete(self, entry_id: int) -> bool:
        with self._lock:
            return self._entries.pop(entry_id, None) is not None

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    def ping(self) -> None:
        """Always reachable."""

    def server_info(self) -> dict:
        return {
            "dialect": "memory",
            "version": "",
            "current_time": datetime.now(timezone.utc).isoformat(),
        }
