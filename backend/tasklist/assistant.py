"""
AI assistant client.

The chat handlers depend on the ``Assistant`` protocol; production uses
Claude through the Anthropic SDK, tests plug in a fake.
"""

import logging
from datetime import datetime
from typing import Optional, Protocol

import anthropic

from .config import Settings, get_settings
from .errors import AssistantUnavailable
from .prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)

# {"role": "user" | "assistant", "content": "..."}
ChatMessage = dict[str, str]


class Assistant(Protocol):
    async def reply(self, history: list[ChatMessage]) -> str: ...


class AnthropicAssistant:
    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()
        self._client: Optional[anthropic.AsyncAnthropic] = None

    @property
    def configured(self) -> bool:
        key = self._settings.anthropic_api_key
        return bool(key) and key != "your-api-key-here"

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            # the SDK retries connection errors, 429 and 5xx on its own
            self._client = anthropic.AsyncAnthropic(
                api_key=self._settings.anthropic_api_key,
                max_retries=self._settings.assistant_max_retries,
            )
        return self._client

    async def reply(self, history: list[ChatMessage]) -> str:
        if not self.configured:
            raise AssistantUnavailable("API key not configured")

        system_prompt = SYSTEM_PROMPT.format(today=datetime.now().strftime("%Y-%m-%d"))
        try:
            response = await self._get_client().messages.create(
                model=self._settings.assistant_model,
                max_tokens=self._settings.assistant_max_tokens,
                system=system_prompt,
                messages=history,
            )
        except anthropic.APIError as e:
            logger.exception("Assistant call failed")
            raise AssistantUnavailable(f"API error: {e}") from e

        text = "".join(block.text for block in response.content if block.type == "text").strip()
        if not text:
            raise AssistantUnavailable("Assistant returned an empty reply")
        return text


_assistant: Optional[AnthropicAssistant] = None


def get_assistant() -> Assistant:
    """FastAPI dependency; one shared client per process."""
    global _assistant
    if _assistant is None:
        _assistant = AnthropicAssistant()
    return _assistant
