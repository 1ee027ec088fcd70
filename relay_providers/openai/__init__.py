"""OpenAI backends (chat-completions and responses API) over raw httpx."""

from .client import OpenAIChatBackend
from .responses import OpenAIResponsesBackend
from .helpers import uses_responses_api

__all__ = ["OpenAIChatBackend", "OpenAIResponsesBackend", "uses_responses_api"]
