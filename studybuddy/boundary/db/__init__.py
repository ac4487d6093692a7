"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin, OwnedMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - ChatModel, ChatMessageModel, QuizModel, StudyPlanModel, NoteModel: Domain entities
  - chat_crud, chat_message_crud, quiz_crud, study_plan_crud, note_crud: CRUD singletons

Dependencies: sqlalchemy, studybuddy.configs
System role: Database adapter providing persistent storage for chats and
study documents.
"""

from studybuddy.boundary.db.base import Base, OwnedMixin, TimestampMixin, UUIDMixin
from studybuddy.boundary.db.connection import (
    create_all_tables,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from studybuddy.boundary.db.models import (
    ChatMessageModel,
    ChatModel,
    NoteModel,
    QuizModel,
    StudyPlanModel,
)
from studybuddy.boundary.db.CRUD import (
    chat_crud,
    chat_message_crud,
    note_crud,
    quiz_crud,
    study_plan_crud,
)

__all__ = [
    # Base classes
    "Base",
    "OwnedMixin",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "create_all_tables",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "ChatModel",
    "ChatMessageModel",
    "QuizModel",
    "StudyPlanModel",
    "NoteModel",
    # CRUD singletons
    "chat_crud",
    "chat_message_crud",
    "quiz_crud",
    "study_plan_crud",
    "note_crud",
]
