#!/usr/bin/env python3
"""Create the faqs table and load the starter clinic FAQs into the configured database."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from config.settings import Settings  # noqa: E402
from models.faq import FaqCreate  # noqa: E402
from repositories.database import get_db_engine, reset_engine  # noqa: E402
from repositories.postgres_repo import FaqRepository  # noqa: E402
from repositories.seed_data import SEED_FAQS  # noqa: E402


def main() -> int:
    settings = Settings.from_environment()
    engine = get_db_engine(settings)
    if engine is None:
        print("DATABASE_URL (or DB_SECRET_ARN) must be set to seed FAQs")
        return 1

    repository = FaqRepository(engine)
    try:
        print("Initializing database schema...")
        repository.create_schema()

        print("Clearing existing FAQs...")
        removed = repository.clear()
        print(f"Removed {removed} FAQs")

        print("Seeding FAQs...")
        for item in SEED_FAQS:
            entry = repository.create(FaqCreate.model_validate(item))
            print(f"Seeded #{entry.id}: {entry.question[:60]}...")

        print(f"Database seeding completed. Added {len(SEED_FAQS)} FAQs.")
        return 0
    except Exception as e:
        print(f"Error during seeding: {e}")
        return 1
    finally:
        reset_engine()
        print("Database connection closed.")


if __name__ == "__main__":
    sys.exit(main())
