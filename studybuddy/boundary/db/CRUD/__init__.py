"""
CRUD operations for database models.

Exports base CRUD classes and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from studybuddy.boundary.db.CRUD import chat_crud, quiz_crud

    chat = await chat_crud.get_for_owner(db, chat_id, owner_id)
"""

from studybuddy.boundary.db.CRUD.base_crud import BaseCRUD
from studybuddy.boundary.db.CRUD.owned_crud import OwnedCRUD
from studybuddy.boundary.db.CRUD.chat_crud import ChatCRUD, chat_crud
from studybuddy.boundary.db.CRUD.chat_message_crud import ChatMessageCRUD, chat_message_crud
from studybuddy.boundary.db.CRUD.quiz_crud import QuizCRUD, quiz_crud
from studybuddy.boundary.db.CRUD.study_plan_crud import StudyPlanCRUD, study_plan_crud
from studybuddy.boundary.db.CRUD.note_crud import NoteCRUD, note_crud

__all__ = [
    "BaseCRUD",
    "OwnedCRUD",
    "ChatCRUD",
    "chat_crud",
    "ChatMessageCRUD",
    "chat_message_crud",
    "QuizCRUD",
    "quiz_crud",
    "StudyPlanCRUD",
    "study_plan_crud",
    "NoteCRUD",
    "note_crud",
]
