"""
Pytest configuration to ensure paths are set up correctly for tests.

This allows imports like `from handlers import main` to work when running
tests, simulating the Lambda environment where code is deployed from the
src/ directory.
"""

import os
import sys
from pathlib import Path

import pytest


def _ensure_paths_on_sys_path() -> None:
    """Add repository root AND src/ to sys.path if missing."""
    repo_root = Path(__file__).resolve().parents[1]
    src_root = repo_root / "src"

    root_str = str(repo_root)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)

    src_str = str(src_root)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)


_ensure_paths_on_sys_path()

# Offline-friendly defaults: no database, so the service uses the seeded
# in-memory store unless a test wires its own repository.
os.environ.setdefault("AWS_REGION", "eu-west-2")
os.environ.setdefault("AWS_DEFAULT_REGION", "eu-west-2")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.pop("DATABASE_URL", None)
os.environ.pop("DB_SECRET_ARN", None)


@pytest.fixture
def sample_entries():
    """Three entries on distinct topics, ids in ascending order."""
    from models.faq import FaqEntry

    return [
        FaqEntry(
            id=1,
            question="What are your opening hours?",
            answer="We are open Monday to Friday 9-6",
            tags=["hours", "schedule"],
        ),
        FaqEntry(
            id=2,
            question="How to book appointment?",
            answer="Call us or use online portal",
            tags=["booking", "appointment"],
        ),
        FaqEntry(
            id=3,
            question="Do you provide vaccines?",
            answer="Yes, we offer various vaccination services",
            tags=["services", "vaccination"],
        ),
    ]


@pytest.fixture
def memory_repo(sample_entries):
    """In-memory repository loaded with the sample entries."""
    from repositories.memory_repo import InMemoryFaqRepository

    return InMemoryFaqRepository(
        seed=[entry.model_dump(include={"question", "answer", "tags", "lang"}) for entry in sample_entries]
    )


@pytest.fixture
def faq_service(memory_repo):
    from services.faq_service import FaqService

    return FaqService(memory_repo)


@pytest.fixture
def shared_service(monkeypatch, faq_service):
    """Install faq_service as the process-wide instance the handlers use."""
    import services.faq_service as faq_service_module

    monkeypatch.setattr(faq_service_module, "_service", faq_service)
    yield faq_service


@pytest.fixture(autouse=True)
def _reset_shared_state():
    yield
    from repositories.database import reset_engine
    from services.faq_service import reset_faq_service

    reset_faq_service()
    reset_engine()
