"""
Database models package.

Exports:
  - ChatModel, ChatMessageModel: Conversation and its message log
  - QuizModel, StudyPlanModel, NoteModel: Study documents created from chat or CRUD

Dependencies: sqlalchemy, studybuddy.boundary.db.base
System role: Database model definitions for domain entities
"""

from studybuddy.boundary.db.models.chat_model import ChatModel
from studybuddy.boundary.db.models.chat_message_model import ChatMessageModel
from studybuddy.boundary.db.models.quiz_model import QuizModel
from studybuddy.boundary.db.models.study_plan_model import StudyPlanModel
from studybuddy.boundary.db.models.note_model import NoteModel

__all__ = [
    "ChatModel",
    "ChatMessageModel",
    "QuizModel",
    "StudyPlanModel",
    "NoteModel",
]
