"""
Gemini chat generator.

Adapts ChatGoogleGenerativeAI to the Generator interface: renders the
message list, binds declared tools and converts the AI message into a
GeneratorResponse.

Dependencies: langchain_google_genai, langchain_core
System role: Generator adapter for the agent loop
"""

import logging
from typing import Any, Sequence

from dotenv import load_dotenv
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from ragchat.boundary.llm.errors import map_provider_error
from ragchat.configs import LLMSettings
from ragchat.core.exceptions import FatalError, RagChatError
from ragchat.models.generation import GeneratorResponse, ToolCallRequest

load_dotenv()
logger = logging.getLogger(__name__)


def content_to_text(content: Any) -> str:
    """
    Flatten message content to plain text.

    Gemini may return a list of content parts; text parts are joined and
    non-text parts (function calls, thoughts) are dropped.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return "" if content is None else str(content)


class GeminiChatGenerator:
    """Generator backed by a LangChain chat model (Gemini by default)."""

    def __init__(
        self,
        model: str = "gemini-2.0-flash",
        temperature: float = 0.7,
        max_output_tokens: int = 2048,
        timeout: float | None = None,
        max_retries: int = 0,
        api_key: str | None = None,
        chat_model: BaseChatModel | None = None,
    ) -> None:
        """
        Initialize generator.

        Args:
            model: Gemini model ID
            temperature: Sampling temperature
            max_output_tokens: Maximum tokens per answer
            timeout: Request timeout in seconds
            max_retries: Retries inside the Google client
            api_key: Google AI API key (GOOGLE_API_KEY from the environment when None)
            chat_model: Preconfigured chat model, overrides the other arguments
        """
        if chat_model is None:
            kwargs: dict[str, Any] = {}
            if api_key:
                kwargs["google_api_key"] = api_key
            chat_model = ChatGoogleGenerativeAI(
                model=model,
                temperature=temperature,
                max_output_tokens=max_output_tokens,
                timeout=timeout,
                max_retries=max_retries,
                **kwargs,
            )
        self._model = chat_model
        self.model_name = model
        logger.info(f"{__name__}:__init__ - Initialized with model={model}, temperature={temperature}")

    @classmethod
    def from_settings(cls, settings: LLMSettings) -> "GeminiChatGenerator":
        return cls(
            model=settings.chat_model,
            temperature=settings.temperature,
            max_output_tokens=settings.max_output_tokens,
            timeout=settings.timeout,
            max_retries=settings.client_max_retries,
            api_key=settings.api_key,
        )

    def invoke(
        self,
        messages: Sequence[BaseMessage],
        tools: Sequence[Any] | None = None,
    ) -> GeneratorResponse:
        """
        Call the model once.

        Args:
            messages: Rendered prompt messages
            tools: Tools the model may call (LangChain tools or schemas)

        Returns:
            GeneratorResponse: Answer text or tool call requests

        Raises:
            TransientError: Rate limit, unavailability, timeout or connection failure
            FatalError: Any other provider failure or a malformed response
        """
        runnable = self._model.bind_tools(list(tools)) if tools else self._model
        logger.debug(f"{__name__}:invoke - Calling model with {len(messages)} messages, tools={len(tools or [])}")

        try:
            message = runnable.invoke(list(messages))
        except RagChatError:
            raise
        except Exception as e:
            error = map_provider_error(e, collaborator="generator")
            logger.error(f"{__name__}:invoke - {type(error).__name__}: {type(e).__name__}: {e}")
            raise error from e

        return self.to_response(message)

    @staticmethod
    def to_response(message: BaseMessage) -> GeneratorResponse:
        """
        Convert a model message into a GeneratorResponse.

        Raises:
            FatalError: When the model returned something other than an AI message
        """
        if not isinstance(message, AIMessage):
            raise FatalError(
                f"Expected AIMessage from model, got {type(message).__name__}",
                collaborator="generator",
            )

        tool_calls = []
        for call in message.tool_calls:
            fields: dict[str, Any] = {"name": call["name"], "arguments": call.get("args") or {}}
            if call.get("id"):
                fields["id"] = call["id"]
            tool_calls.append(ToolCallRequest(**fields))

        return GeneratorResponse(content=content_to_text(message.content), tool_calls=tool_calls)
