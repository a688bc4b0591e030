"""
Test suite for the Gemini chat generator adapter.

Uses a mocked chat model; no network access.

System role: Verification of the generator boundary
"""

from unittest.mock import MagicMock, patch

import pytest
from google.api_core import exceptions as google_exceptions
from langchain_core.messages import AIMessage, HumanMessage

from ragchat.boundary.llm.gemini_generator import GeminiChatGenerator, content_to_text
from ragchat.configs import LLMSettings
from ragchat.core.exceptions import FatalError, TransientError
from tests.fakes import FakeTool


@pytest.fixture
def chat_model() -> MagicMock:
    model = MagicMock()
    model.invoke.return_value = AIMessage(content="Paris")
    return model


class TestGeminiChatGenerator:
    """Adapter behaviour."""

    def test_final_answer_converted(self, chat_model: MagicMock) -> None:
        """Plain AI message becomes a final response."""
        generator = GeminiChatGenerator(chat_model=chat_model)

        response = generator.invoke([HumanMessage(content="Capital of France?")])

        assert response.is_final
        assert response.content == "Paris"
        chat_model.bind_tools.assert_not_called()

    def test_tools_bound_and_tool_calls_converted(self, chat_model: MagicMock) -> None:
        """Declared tools are bound and tool calls surface as requests."""
        bound = MagicMock()
        bound.invoke.return_value = AIMessage(
            content="",
            tool_calls=[{"id": "call_9", "name": "lookup", "args": {"query": "LCEL"}}],
        )
        chat_model.bind_tools.return_value = bound
        tool = FakeTool(name="lookup")

        response = GeminiChatGenerator(chat_model=chat_model).invoke([HumanMessage(content="q")], tools=[tool])

        chat_model.bind_tools.assert_called_once_with([tool])
        assert not response.is_final
        assert response.tool_calls[0].id == "call_9"
        assert response.tool_calls[0].name == "lookup"
        assert response.tool_calls[0].arguments == {"query": "LCEL"}

    def test_missing_tool_call_id_generated(self, chat_model: MagicMock) -> None:
        """Tool calls without an id receive one."""
        message = AIMessage(content="", tool_calls=[{"id": None, "name": "lookup", "args": {}}])

        response = GeminiChatGenerator.to_response(message)

        assert response.tool_calls[0].id.startswith("call_")

    @pytest.mark.parametrize(
        "error",
        [
            google_exceptions.ResourceExhausted("quota"),
            google_exceptions.ServiceUnavailable("down"),
            google_exceptions.DeadlineExceeded("slow"),
            ConnectionError("reset"),
        ],
    )
    def test_transient_provider_errors_mapped(self, chat_model: MagicMock, error: Exception) -> None:
        """Rate limits, outages and timeouts become TransientError."""
        chat_model.invoke.side_effect = error

        with pytest.raises(TransientError) as exc_info:
            GeminiChatGenerator(chat_model=chat_model).invoke([HumanMessage(content="q")])

        assert exc_info.value.__cause__ is error
        assert exc_info.value.details["collaborator"] == "generator"

    def test_invalid_request_is_fatal(self, chat_model: MagicMock) -> None:
        """Client errors become FatalError."""
        chat_model.invoke.side_effect = google_exceptions.InvalidArgument("bad schema")

        with pytest.raises(FatalError):
            GeminiChatGenerator(chat_model=chat_model).invoke([HumanMessage(content="q")])

    def test_wrapped_transient_error_detected_through_cause(self, chat_model: MagicMock) -> None:
        """Errors re-raised by LangChain keep their transient cause."""
        try:
            try:
                raise google_exceptions.TooManyRequests("429")
            except google_exceptions.TooManyRequests as inner:
                raise RuntimeError("Error invoking model") from inner
        except RuntimeError as wrapped:
            chat_model.invoke.side_effect = wrapped

        with pytest.raises(TransientError):
            GeminiChatGenerator(chat_model=chat_model).invoke([HumanMessage(content="q")])

    def test_non_ai_message_is_fatal(self, chat_model: MagicMock) -> None:
        """Anything other than an AIMessage is malformed."""
        chat_model.invoke.return_value = HumanMessage(content="echo")

        with pytest.raises(FatalError):
            GeminiChatGenerator(chat_model=chat_model).invoke([HumanMessage(content="q")])

    def test_from_settings_configures_chat_model(self) -> None:
        """Settings map onto ChatGoogleGenerativeAI arguments."""
        settings = LLMSettings(api_key="test-key", chat_model="gemini-2.0-flash", temperature=0.2, max_output_tokens=512)

        with patch("ragchat.boundary.llm.gemini_generator.ChatGoogleGenerativeAI") as chat_cls:
            GeminiChatGenerator.from_settings(settings)

        kwargs = chat_cls.call_args.kwargs
        assert kwargs["model"] == "gemini-2.0-flash"
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_output_tokens"] == 512
        assert kwargs["google_api_key"] == "test-key"


class TestContentToText:
    """Flattening of message content."""

    def test_string_content(self) -> None:
        assert content_to_text("hello") == "hello"

    def test_list_content_joins_text_parts(self) -> None:
        """Only text parts are kept."""
        content = [{"type": "text", "text": "Hello "}, {"type": "function_call"}, "world"]

        assert content_to_text(content) == "Hello world"

    def test_none_content(self) -> None:
        assert content_to_text(None) == ""
