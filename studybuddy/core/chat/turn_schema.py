"""
Chat turn schema.

Validated shape of one classified turn as returned by the intent parser:
the intent, the assistant message and an optional document payload.

Dependencies: pydantic, studybuddy.models
System role: Contract between the intent parser and the turn orchestrator
"""

from typing import Annotated, Literal, Union

from pydantic import Field, field_validator

from studybuddy.models.chat import ActionType, IntentType, MessageMetadata
from studybuddy.models.common import CamelModel
from studybuddy.models.note import NoteFields
from studybuddy.models.quiz import QuizFields
from studybuddy.models.study_plan import StudyPlanFields


class Intent(CamelModel):
    """Classified purpose of a turn."""

    type: IntentType
    action: ActionType | None = None
    topic: str | None = None
    subject: str | None = None

    @field_validator("action", mode="before")
    @classmethod
    def _null_action(cls, value: object) -> object:
        if isinstance(value, str) and value.strip().lower() in ("", "null", "none"):
            return None
        return value


class AssistantMessage(CamelModel):
    """Reply shown to the user, with metadata re-derived from the intent."""

    content: str
    metadata: MessageMetadata | None = None


class QuizPayload(QuizFields):
    kind: Literal[IntentType.QUIZ] = IntentType.QUIZ


class StudyPlanPayload(StudyPlanFields):
    kind: Literal[IntentType.STUDY_PLAN] = IntentType.STUDY_PLAN


class NotePayload(NoteFields):
    kind: Literal[IntentType.NOTE] = IntentType.NOTE


DocumentPayload = Annotated[
    Union[QuizPayload, StudyPlanPayload, NotePayload],
    Field(discriminator="kind"),
]

# Envelope keys the model uses for each document variant
DOCUMENT_KEYS: dict[str, IntentType] = {
    "quiz": IntentType.QUIZ,
    "studyPlan": IntentType.STUDY_PLAN,
    "note": IntentType.NOTE,
}

PAYLOAD_TYPES: dict[IntentType, type[CamelModel]] = {
    IntentType.QUIZ: QuizPayload,
    IntentType.STUDY_PLAN: StudyPlanPayload,
    IntentType.NOTE: NotePayload,
}


class ParsedTurn(CamelModel):
    """
    Parsed turn.

    Attributes:
        intent: Classified intent
        message: Assistant reply
        document: Document payload whose kind matches intent.type, if any
    """

    intent: Intent
    message: AssistantMessage
    document: DocumentPayload | None = None
