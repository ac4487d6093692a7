"""
Study assistant chat prompt.

System instruction asking the model to classify each message and answer
with one JSON object, followed by the recent conversation history.
Supports Langfuse prompt registry integration.

Dependencies: langchain_core.prompts, studybuddy.observability.prompt_registry
System role: Prompt template for chat turn classification
"""

import logging

from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

from studybuddy.observability.prompt_registry.models import ModelConfig
from studybuddy.observability.prompt_registry.registry import PromptRegistry

logger = logging.getLogger(__name__)

CHAT_PROMPT_NAME = "study-assistant-chat"

SYSTEM_PROMPT = """You are an AI study assistant. Analyze the message and respond in a specific JSON format.

Current Context:
{context}

Rules for Response:
1. For regular queries (type: "query"), only include intent and message
2. For create/update actions, include the complete document structure
3. For delete actions, only include intent and message
4. Consider the context for better responses
5. Generate appropriate content based on the subject/topic
6. Include detailed explanations in quiz questions
7. Create structured study plans with realistic deadlines
8. Format dates in ISO string format
9. Respond with the JSON object only, without surrounding text

Required JSON Structure:
{{
  "intent": {{
    "type": "quiz|study_plan|note|query",
    "action": "create|update|delete|null",
    "topic": "specific topic",
    "subject": "main subject area"
  }},
  "message": {{
    "content": "your response message",
    "metadata": {{
      "type": "same as intent.type",
      "action": "same as intent.action"
    }}
  }},
  "document": {{
    "quiz": {{
      "title": "quiz title",
      "description": "quiz description",
      "questions": [
        {{
          "question": "question text",
          "options": [
            {{ "text": "option text", "isCorrect": true }}
          ],
          "explanation": "explanation text"
        }}
      ]
    }},
    "studyPlan": {{
      "title": "plan title",
      "description": "plan description",
      "topics": [
        {{
          "title": "topic title",
          "description": "topic description",
          "deadline": "ISO date string"
        }}
      ],
      "startDate": "ISO date string",
      "endDate": "ISO date string"
    }},
    "note": {{
      "title": "note title",
      "content": "note content",
      "tags": ["tag1", "tag2"]
    }}
  }}
}}

Include only the one document entry matching intent.type."""

CHAT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", SYSTEM_PROMPT),
    MessagesPlaceholder("history"),
])


def register_chat_prompt(
    model_id: str,
    temperature: float = 0.7,
    max_tokens: int | None = None,
    labels: list[str] | None = None,
) -> None:
    """
    Register the chat prompt with Langfuse.

    Args:
        model_id: Model or deployment identifier the prompt is tuned for
        temperature: Model temperature
        max_tokens: Completion token limit
        labels: Optional labels (e.g., ["production", "staging"])
    """
    registry = PromptRegistry()

    if not registry.is_enabled:
        logger.debug("Prompt registry disabled, skipping registration")
        return

    config = ModelConfig(
        model=model_id,
        temperature=temperature,
        max_tokens=max_tokens,
    )

    registry.register_prompt(
        name=CHAT_PROMPT_NAME,
        template=CHAT_PROMPT,
        config=config,
        labels=labels or ["development"],
    )
    logger.info("Registered chat prompt: name=%s", CHAT_PROMPT_NAME)


def get_chat_prompt(
    use_registry: bool = False,
    label: str | None = None,
) -> ChatPromptTemplate:
    """
    Get the chat prompt template.

    Args:
        use_registry: Whether to fetch from Langfuse registry
        label: Optional label filter when using registry

    Returns:
        ChatPromptTemplate: Template with ``context`` and ``history`` variables.
        Falls back to the local template when the registry lookup fails.
    """
    if use_registry:
        registry = PromptRegistry()
        if registry.is_enabled:
            try:
                prompt = registry.get_langchain_prompt(CHAT_PROMPT_NAME, label=label)
            except Exception as e:
                logger.warning(
                    "Prompt registry lookup failed, using local template",
                    extra={"prompt_name": CHAT_PROMPT_NAME, "error": str(e)},
                )
                return CHAT_PROMPT
            if prompt is not None:
                logger.debug("Using prompt from registry: name=%s", CHAT_PROMPT_NAME)
                return prompt
            logger.debug("Prompt not found in registry, using local template")

    return CHAT_PROMPT
