"""FAQ repository using SQLAlchemy Core (PostgreSQL in production)."""

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, func, insert, select, text, update
from sqlalchemy.engine import Engine

from models.faq import FaqCreate, FaqEntry, FaqUpdate
from repositories.database import faqs_table, metadata


def _now() -> datetime:
    return datetime.now(timezone.utc)


class FaqRepository:
    """Thin wrapper to keep SQL organized and parameterized."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def create_schema(self) -> None:
        """Create the faqs table if it does not exist yet."""
        metadata.create_all(self.engine)

    def fetch_entries(self, lang: Optional[str] = None) -> List[FaqEntry]:
        """All entries, optionally for one language, by ascending id."""
        stmt = select(faqs_table).order_by(faqs_table.c.id)
        if lang:
            stmt = stmt.where(faqs_table.c.lang == lang)
        with self.engine.connect() as conn:
            return [FaqEntry(**row._mapping) for row in conn.execute(stmt)]

    def get(self, entry_id: int) -> Optional[FaqEntry]:
        stmt = select(faqs_table).where(faqs_table.c.id == entry_id)
        with self.engine.connect() as conn:
            row = conn.execute(stmt).fetchone()
            return FaqEntry(**row._mapping) if row else None

    def create(self, data: FaqCreate) -> FaqEntry:
        now = _now()
        values = data.model_dump()
        values.update(created_at=now, updated_at=now)
        with self.engine.begin() as conn:
            result = conn.execute(insert(faqs_table).values(**values))
            entry_id = result.inserted_primary_key[0]
        return FaqEntry(id=entry_id, **values)

    def update(self, entry_id: int, data: FaqUpdate) -> Optional[FaqEntry]:
        """Apply the fields set on ``data``; None when the id is unknown."""
        values = data.changes()
        values["updated_at"] = _now()
        stmt = update(faqs_table).where(faqs_table.c.id == entry_id).values(**values)
        with self.engine.begin() as conn:
            if conn.execute(stmt).rowcount == 0:
                return None
        return self.get(entry_id)

    def delete(self, entry_id: int) -> bool:
        stmt = delete(faqs_table).where(faqs_table.c.id == entry_id)
        with self.engine.begin() as conn:
            return conn.execute(stmt).rowcount > 0

    def clear(self) -> int:
        """Remove every entry; returns the number of rows deleted."""
        with self.engine.begin() as conn:
            return conn.execute(delete(faqs_table)).rowcount

    def ping(self) -> None:
        """Round-trip a trivial query; raises when the database is unreachable."""
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def server_info(self) -> dict:
        with self.engine.connect() as conn:
            current_time = conn.execute(select(func.current_timestamp())).scalar()
        version = self.engine.dialect.server_version_info or ()
        return {
            "dialect": self.engine.dialect.name,
            "version": ".".join(str(part) for part in version),
            "current_time": str(current_time),
        }
