"""
Test suite for the chat endpoints.

Services are replaced through dependency_overrides; the routers, request
schemas and error mapping run for real.

System role: Verification of the chat HTTP API
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from studybuddy.api.deps.auth import get_current_owner_id
from studybuddy.api.deps.dependencies import get_chat_service
from studybuddy.core.exceptions import (
    ChatNotFoundError,
    ContextPersistenceError,
    ValidationError,
)
from studybuddy.main import create_app
from studybuddy.models.chat import (
    ActionType,
    ChatContext,
    ChatMessageResponse,
    ChatResponse,
    IntentType,
    MessageMetadata,
)

OWNER_ID = "user-123"


@pytest.fixture
def chat_id() -> uuid.UUID:
    return uuid.uuid4()


@pytest.fixture
def chat_response(chat_id: uuid.UUID) -> ChatResponse:
    """Provide a chat transcript after one quiz turn."""
    return ChatResponse(
        id=str(chat_id),
        title="Quiz me on photosynthesis",
        messages=[
            ChatMessageResponse(
                id=str(uuid.uuid4()), role="user",
                content="Quiz me on photosynthesis", timestamp="2024-05-01T12:00:00+00:00",
            ),
            ChatMessageResponse(
                id=str(uuid.uuid4()), role="assistant",
                content="Here's a quiz.", timestamp="2024-05-01T12:00:01+00:00",
                metadata=MessageMetadata(type=IntentType.QUIZ, action=ActionType.CREATE, reference_id="q1"),
            ),
        ],
        context=ChatContext(current_topic="Photosynthesis"),
        created_at="2024-05-01T12:00:00+00:00",
        updated_at="2024-05-01T12:00:01+00:00",
    )


@pytest.fixture
def mock_chat_service(chat_response: ChatResponse) -> MagicMock:
    """Provide a chat service whose async methods return the sample chat."""
    service = MagicMock()
    service.create_chat = AsyncMock(return_value=chat_response)
    service.list_chats = AsyncMock(return_value=[chat_response])
    service.get_chat = AsyncMock(return_value=chat_response)
    service.rename_chat = AsyncMock(return_value=chat_response)
    service.delete_chat = AsyncMock(return_value=None)
    service.process_turn = AsyncMock(return_value=chat_response)
    return service


@pytest.fixture
def client(mock_chat_service: MagicMock) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_chat_service] = lambda: mock_chat_service
    app.dependency_overrides[get_current_owner_id] = lambda: OWNER_ID
    return TestClient(app)


class TestChatEndpoints:
    """Test suite for /chats routes."""

    def test_create_chat(self, client: TestClient, mock_chat_service: MagicMock) -> None:
        response = client.post("/api/v1/chats", json={"title": "Biology"})

        assert response.status_code == 201
        mock_chat_service.create_chat.assert_awaited_once_with(OWNER_ID, title="Biology")

    def test_list_chats(self, client: TestClient) -> None:
        response = client.get("/api/v1/chats")

        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_send_message_returns_camel_case_transcript(
        self, client: TestClient, mock_chat_service: MagicMock, chat_id: uuid.UUID
    ) -> None:
        response = client.post(f"/api/v1/chats/{chat_id}/messages", json={"content": "Quiz me"})

        assert response.status_code == 200
        body = response.json()
        assert body["context"]["currentTopic"] == "Photosynthesis"
        assert body["messages"][1]["metadata"] == {
            "type": "quiz",
            "action": "create",
            "referenceId": "q1",
        }
        assert "createdAt" in body
        mock_chat_service.process_turn.assert_awaited_once_with(chat_id, OWNER_ID, "Quiz me")

    def test_empty_message_is_400(
        self, client: TestClient, mock_chat_service: MagicMock, chat_id: uuid.UUID
    ) -> None:
        mock_chat_service.process_turn.side_effect = ValidationError(
            "Message content is required", field="content"
        )

        response = client.post(f"/api/v1/chats/{chat_id}/messages", json={"content": ""})

        assert response.status_code == 400
        assert response.json()["detail"] == "Message content is required"

    def test_unknown_chat_is_404(
        self, client: TestClient, mock_chat_service: MagicMock, chat_id: uuid.UUID
    ) -> None:
        mock_chat_service.get_chat.side_effect = ChatNotFoundError(str(chat_id))

        response = client.get(f"/api/v1/chats/{chat_id}")

        assert response.status_code == 404
        assert response.json()["detail"] == "Chat not found"

    def test_context_failure_is_500(
        self, client: TestClient, mock_chat_service: MagicMock, chat_id: uuid.UUID
    ) -> None:
        mock_chat_service.process_turn.side_effect = ContextPersistenceError(str(chat_id))

        response = client.post(f"/api/v1/chats/{chat_id}/messages", json={"content": "hi"})

        assert response.status_code == 500

    def test_rename_requires_title(self, client: TestClient, chat_id: uuid.UUID) -> None:
        response = client.put(f"/api/v1/chats/{chat_id}", json={"title": ""})

        assert response.status_code == 422

    def test_delete_chat(self, client: TestClient, mock_chat_service: MagicMock, chat_id: uuid.UUID) -> None:
        response = client.delete(f"/api/v1/chats/{chat_id}")

        assert response.status_code == 204
        mock_chat_service.delete_chat.assert_awaited_once_with(chat_id, OWNER_ID)

    def test_invalid_chat_id_is_422(self, client: TestClient) -> None:
        assert client.get("/api/v1/chats/not-a-uuid").status_code == 422
