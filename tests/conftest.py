"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory async database, owner ids, scripted LLM gateways
Dependencies: pytest, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

import json
import uuid
from typing import Any

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from studybuddy.boundary.db.base import Base
    import studybuddy.boundary.db.models  # noqa: F401

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Create session factory
    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )

    # Create session for test
    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def owner_id() -> str:
    """Provide a test owner id."""
    return "user-" + uuid.uuid4().hex[:8]


def llm_reply(
    intent_type: str = "query",
    action: str | None = None,
    content: str = "Here you go.",
    document: dict[str, Any] | None = None,
    topic: str | None = None,
    subject: str | None = None,
) -> str:
    """Build a raw LLM reply in the JSON envelope the chat prompt asks for."""
    payload: dict[str, Any] = {
        "intent": {
            "type": intent_type,
            "action": action if action is not None else "null",
            "topic": topic,
            "subject": subject,
        },
        "message": {"content": content},
    }
    if document is not None:
        payload["document"] = document
    return json.dumps(payload)


def scripted_model(*responses: str) -> FakeListChatModel:
    """Chat model that returns the given raw replies in order."""
    return FakeListChatModel(responses=list(responses))


@pytest.fixture
def sample_quiz_document() -> dict[str, Any]:
    """Provide a quiz document as the LLM would return it."""
    return {
        "quiz": {
            "title": "Photosynthesis Basics",
            "description": "Light and dark reactions",
            "questions": [
                {
                    "question": "Where does photosynthesis happen?",
                    "options": [
                        {"text": "Chloroplast", "isCorrect": True},
                        {"text": "Mitochondria", "isCorrect": False},
                    ],
                    "explanation": "Chloroplasts hold chlorophyll.",
                }
            ],
        }
    }


@pytest.fixture
def sample_study_plan_document() -> dict[str, Any]:
    """Provide a study plan document as the LLM would return it."""
    return {
        "studyPlan": {
            "title": "Biology Finals",
            "description": "Two week plan",
            "topics": [
                {"title": "Cells", "description": "Cell structure", "deadline": "2024-05-03T00:00:00Z"},
                {"title": "Genetics", "deadline": "2024-05-10T00:00:00Z"},
            ],
            "startDate": "2024-05-01T00:00:00Z",
            "endDate": "2024-05-14T00:00:00Z",
        }
    }


@pytest.fixture
def sample_note_document() -> dict[str, Any]:
    """Provide a note document as the LLM would return it."""
    return {
        "note": {
            "title": "Krebs cycle",
            "content": "Citric acid cycle summary",
            "tags": ["biology", "metabolism"],
        }
    }


@pytest.fixture
def make_reply():
    """Provide the raw LLM reply builder."""
    return llm_reply


@pytest.fixture
def make_model():
    """Provide the scripted chat model builder."""
    return scripted_model
