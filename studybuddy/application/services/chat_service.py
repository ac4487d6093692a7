"""
Chat service for the study assistant conversation.

Orchestrates chat lifecycle operations and the per-turn flow: history
retrieval, intent classification, document create/update/delete, active
item bookkeeping, title derivation and persistence.

Dependencies: studybuddy.core.chat, studybuddy.boundary.db, studybuddy.configs
System role: Chat service orchestration layer
"""

import logging
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from studybuddy.boundary.db.base import utc_now
from studybuddy.boundary.db.CRUD.chat_crud import chat_crud
from studybuddy.boundary.db.CRUD.chat_message_crud import chat_message_crud
from studybuddy.boundary.db.CRUD.note_crud import note_crud
from studybuddy.boundary.db.CRUD.owned_crud import OwnedCRUD
from studybuddy.boundary.db.CRUD.quiz_crud import quiz_crud
from studybuddy.boundary.db.CRUD.study_plan_crud import study_plan_crud
from studybuddy.boundary.db.models.chat_message_model import ChatMessageModel
from studybuddy.boundary.db.models.chat_model import ChatModel
from studybuddy.configs.chat import ChatSettings
from studybuddy.core.chat.active_items import latest_active_item, next_active_items
from studybuddy.core.chat.chat_prompt import get_chat_prompt
from studybuddy.core.chat.intent_parser import IntentParser
from studybuddy.core.chat.message_format import (
    build_prompt_messages,
    derive_title,
    format_chat,
    load_context,
    metadata_dict,
    should_retitle,
)
from studybuddy.core.chat.turn_schema import ParsedTurn
from studybuddy.core.exceptions import (
    ChatNotFoundError,
    ContextPersistenceError,
    ValidationError,
)
from studybuddy.models.chat import (
    ActionType,
    ChatContext,
    ChatResponse,
    IntentType,
    MessageMetadata,
)

logger = logging.getLogger(__name__)

DOCUMENT_STORES: dict[IntentType, OwnedCRUD] = {
    IntentType.QUIZ: quiz_crud,
    IntentType.STUDY_PLAN: study_plan_crud,
    IntentType.NOTE: note_crud,
}


def _as_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except (ValueError, TypeError):
        return None


class ChatService:
    """
    Chat service for study assistant conversations.

    Every operation is scoped to the requesting owner; a chat owned by
    someone else is indistinguishable from a missing one.
    """

    def __init__(
        self,
        db: AsyncSession,
        parser: IntentParser,
        settings: ChatSettings | None = None,
    ) -> None:
        """
        Initialize chat service.

        Args:
            db: AsyncSession for database operations
            parser: Intent parser wrapping the LLM gateway
            settings: Chat tunables (history window, active item cap, default title)
        """
        self.db = db
        self.parser = parser
        self.settings = settings or ChatSettings()

    async def _get_owned_chat(self, chat_id: UUID, owner_id: str) -> ChatModel:
        chat = await chat_crud.get_for_owner(self.db, chat_id, owner_id)
        if chat is None:
            raise ChatNotFoundError(str(chat_id))
        return chat

    async def _format(self, chat: ChatModel) -> ChatResponse:
        messages = await chat_message_crud.get_by_chat(self.db, chat.id)
        return format_chat(chat, messages)

    async def create_chat(self, owner_id: str, title: str | None = None) -> ChatResponse:
        """
        Create an empty chat.

        Args:
            owner_id: Owning user
            title: Optional title (defaults to the configured default title)

        Returns:
            ChatResponse with no messages and an empty context
        """
        chat = await chat_crud.create_for_owner(
            self.db,
            owner_id,
            title=(title or "").strip() or self.settings.default_title,
            context=ChatContext().model_dump(mode="json", by_alias=True),
        )
        await self.db.commit()
        logger.info("Chat created", extra={"chat_id": str(chat.id), "owner_id": owner_id})
        return format_chat(chat, [])

    async def list_chats(self, owner_id: str) -> list[ChatResponse]:
        """List the owner's chats, most recently active first."""
        chats = await chat_crud.list_for_owner(self.db, owner_id)
        return [await self._format(chat) for chat in chats]

    async def get_chat(self, chat_id: UUID, owner_id: str) -> ChatResponse:
        """
        Get a chat transcript.

        Raises:
            ChatNotFoundError: If the chat does not exist for this owner
        """
        chat = await self._get_owned_chat(chat_id, owner_id)
        return await self._format(chat)

    async def rename_chat(self, chat_id: UUID, owner_id: str, title: str) -> ChatResponse:
        """
        Rename a chat.

        Raises:
            ValidationError: If the title is blank
            ChatNotFoundError: If the chat does not exist for this owner
        """
        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required", field="title")

        chat = await self._get_owned_chat(chat_id, owner_id)
        chat = await chat_crud.apply_updates(self.db, chat, title=title)
        await self.db.commit()
        logger.info("Chat renamed", extra={"chat_id": str(chat_id)})
        return await self._format(chat)

    async def delete_chat(self, chat_id: UUID, owner_id: str) -> None:
        """
        Delete a chat and its messages.

        Raises:
            ChatNotFoundError: If the chat does not exist for this owner
        """
        chat = await self._get_owned_chat(chat_id, owner_id)
        removed = await chat_message_crud.delete_by_chat(self.db, chat.id)
        await chat_crud.delete_for_owner(self.db, chat.id, owner_id)
        await self.db.commit()
        logger.info(
            "Chat deleted",
            extra={"chat_id": str(chat_id), "messages_removed": removed},
        )

    async def process_turn(self, chat_id: UUID, owner_id: str, content: str) -> ChatResponse:
        """
        Process one user message.

        Flow:
        1. Validate content and resolve the chat
        2. Render the prompt from context and the recent history plus the new message
        3. Classify the turn through the intent parser
        4. Create, update or delete the referenced document
        5. Append the user and assistant messages
        6. Recompute active items, topic, subject and title
        7. Persist and commit

        Args:
            chat_id: Chat UUID
            owner_id: Owning user
            content: User message text

        Returns:
            ChatResponse: Full transcript after the turn

        Raises:
            ValidationError: If content is empty (nothing is written)
            ChatNotFoundError: If the chat does not exist for this owner
            ContextPersistenceError: If the context could not be stored
        """
        if not content or not content.strip():
            raise ValidationError("Message content is required", field="content")

        chat = await self._get_owned_chat(chat_id, owner_id)
        context = load_context(chat.context)
        title = chat.title
        user_timestamp = utc_now()

        # Stored history plus the not-yet-persisted user message
        history: list[ChatMessageModel] = []
        if self.settings.history_window > 1:
            history.extend(
                await chat_message_crud.get_by_chat(
                    self.db, chat.id, limit=self.settings.history_window - 1
                )
            )
        history.append(ChatMessageModel(role="user", content=content))

        prompt = get_chat_prompt(
            use_registry=self.settings.use_prompt_registry,
            label=self.settings.prompt_label,
        )
        turn = await self.parser.parse(build_prompt_messages(prompt, context, history))

        action, affected_id = await self._apply_document(turn, context, owner_id)
        if action is not None and affected_id is None:
            # A failed store write rolls back and expires the loaded chat
            chat = await self._get_owned_chat(chat_id, owner_id)

        metadata = None
        if action in (ActionType.CREATE, ActionType.UPDATE) and affected_id is not None:
            metadata = MessageMetadata(
                type=turn.intent.type,
                action=action,
                reference_id=affected_id,
            )

        await chat_message_crud.append(
            self.db, chat.id, "user", content, timestamp=user_timestamp
        )
        await chat_message_crud.append(
            self.db, chat.id, "assistant", turn.message.content,
            metadata=metadata_dict(metadata),
        )

        active_items = next_active_items(
            context.active_items,
            turn.intent.type,
            action,
            affected_id,
            max_per_type=self.settings.max_active_items,
        )
        new_context = {
            "currentTopic": turn.intent.topic or context.current_topic,
            "currentSubject": turn.intent.subject or context.current_subject,
            "activeItems": [item.model_dump(mode="json", by_alias=True) for item in active_items],
        }

        message_count = await chat_message_crud.count_by_chat(self.db, chat.id)
        if should_retitle(title, self.settings.default_title, message_count):
            title = derive_title(content)

        chat = await self._persist_turn_state(chat, new_context, title)
        await self.db.commit()

        logger.info(
            "Chat turn processed",
            extra={
                "chat_id": str(chat.id),
                "intent_type": turn.intent.type.value,
                "action": action.value if action else None,
                "reference_id": affected_id,
            },
        )
        return await self._format(chat)

    async def _apply_document(
        self,
        turn: ParsedTurn,
        context: ChatContext,
        owner_id: str,
    ) -> tuple[ActionType | None, str | None]:
        """
        Perform the document operation requested by a turn.

        Update targets the most recently touched active item of the intent's
        type and falls back to create when there is none or it no longer
        resolves. Store errors are logged and rolled back; the turn continues.

        Returns:
            (effective action, affected document id); the id is None when
            nothing was written
        """
        intent = turn.intent
        if not intent.type.is_document:
            return None, None

        store = DOCUMENT_STORES[intent.type]
        action = intent.action or ActionType.CREATE

        try:
            if action == ActionType.DELETE:
                return action, await self._delete_document(store, intent.type, context, owner_id)

            if turn.document is None:
                return action, None

            fields = turn.document.to_store_fields()

            if action == ActionType.UPDATE:
                target = latest_active_item(context.active_items, intent.type)
                target_id = _as_uuid(target.id) if target else None
                if target_id is not None:
                    updated = await store.update_for_owner(self.db, target_id, owner_id, **fields)
                    if updated is not None:
                        return ActionType.UPDATE, str(updated.id)
                    logger.info(
                        "Update target no longer exists, creating instead",
                        extra={"intent_type": intent.type.value, "target_id": target.id},
                    )

            created = await store.create_for_owner(self.db, owner_id, **fields)
            return ActionType.CREATE, str(created.id)
        except Exception as e:
            logger.error(
                "Document operation failed, continuing without it",
                extra={
                    "intent_type": intent.type.value,
                    "action": action.value,
                    "error_type": type(e).__name__,
                    "error": str(e),
                },
            )
            await self.db.rollback()
            return action, None

    async def _delete_document(
        self,
        store: OwnedCRUD,
        intent_type: IntentType,
        context: ChatContext,
        owner_id: str,
    ) -> str | None:
        """Delete the most recent active item of a type; returns its id for pruning."""
        target = latest_active_item(context.active_items, intent_type)
        if target is None:
            logger.info("Delete requested with no active item", extra={"intent_type": intent_type.value})
            return None

        target_id = _as_uuid(target.id)
        deleted = target_id is not None and await store.delete_for_owner(
            self.db, target_id, owner_id
        )
        logger.info(
            "Document deleted" if deleted else "Delete target already gone",
            extra={"intent_type": intent_type.value, "document_id": target.id},
        )
        return target.id

    async def _persist_turn_state(self, chat: ChatModel, context: dict, title: str) -> ChatModel:
        """
        Store context and title, clearing active items once if they do not validate.

        Raises:
            ContextPersistenceError: If the context still does not validate
        """
        try:
            return await chat_crud.save_turn_state(self.db, chat, context, title)
        except PydanticValidationError as e:
            if not any(err["loc"] and err["loc"][0] == "activeItems" for err in e.errors()):
                raise ContextPersistenceError(str(chat.id), {"errors": e.error_count()}) from e
            logger.warning(
                "Active items failed validation, retrying with an empty list",
                extra={"chat_id": str(chat.id), "errors": e.error_count()},
            )

        try:
            return await chat_crud.save_turn_state(
                self.db, chat, {**context, "activeItems": []}, title
            )
        except PydanticValidationError as e:
            raise ContextPersistenceError(str(chat.id), {"errors": e.error_count()}) from e
