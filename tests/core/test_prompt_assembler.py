"""
Test suite for prompt assembly.

System role: Verification of prompt templates and assembled prompts
"""

from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage

from ragchat.core.prompt_assembler import PromptAssembler
from ragchat.core.prompts import ANSWER_PROMPT, NO_CONTEXT_PLACEHOLDER, REWRITE_PROMPT
from ragchat.models.chunk import Chunk, RetrievalResult, ScoredChunk
from ragchat.models.conversation import ConversationTurn
from ragchat.models.generation import GeneratorResponse, ToolCallRequest, ToolInvocation


def retrieval_of(*texts: str) -> RetrievalResult:
    return RetrievalResult(
        query="q",
        items=[ScoredChunk(chunk=Chunk(text=text, sequence_index=i), score=1.0 - i * 0.1) for i, text in enumerate(texts)],
    )


class TestPromptTemplates:
    """Template structure."""

    def test_answer_prompt_variables(self) -> None:
        """Answer prompt declares context, history, input and the optional scratchpad."""
        assert {"system_prompt", "context", "chat_history", "input"} <= set(ANSWER_PROMPT.input_variables)
        assert "agent_scratchpad" in ANSWER_PROMPT.optional_variables

    def test_rewrite_prompt_variables(self) -> None:
        """Rewrite prompt takes the history and the latest input."""
        assert set(REWRITE_PROMPT.input_variables) == {"chat_history", "input"}


class TestPromptAssembler:
    """Rendering of pipeline state."""

    def test_context_contains_chunk_texts_verbatim_in_rank_order(self) -> None:
        """Retrieved texts appear unchanged in the context and the system message."""
        assembler = PromptAssembler(system_prompt="Be brief.")
        retrieved = retrieval_of("first {chunk}", "second chunk")

        prompt = assembler.assemble("question?", retrieved=retrieved)

        assert prompt.context == "first {chunk}\n\nsecond chunk"
        system = prompt.to_messages()[0]
        assert isinstance(system, SystemMessage)
        assert "Be brief." in system.content
        assert "first {chunk}\n\nsecond chunk" in system.content

    def test_message_order_history_then_input(self) -> None:
        """System, history turns and the user turn come in order."""
        history = [ConversationTurn.user("hi"), ConversationTurn.assistant("hello")]

        messages = PromptAssembler().assemble("next question", history=history).to_messages()

        assert [type(message) for message in messages] == [SystemMessage, HumanMessage, AIMessage, HumanMessage]
        assert messages[-1].content == "next question"

    def test_empty_retrieval_uses_placeholder(self) -> None:
        """No retrieved chunks renders the no-context placeholder."""
        prompt = PromptAssembler().assemble("q", retrieved=RetrievalResult())

        assert prompt.context == ""
        assert NO_CONTEXT_PLACEHOLDER in prompt.to_messages()[0].content

    def test_scratchpad_appended_after_user_turn(self) -> None:
        """Tool call and tool result messages follow the user turn."""
        request = GeneratorResponse(tool_calls=[ToolCallRequest(id="call_1", name="lookup", arguments={"q": "x"})])
        invocation = ToolInvocation(call_id="call_1", tool_name="lookup", result="found")

        messages = PromptAssembler().assemble(
            "q",
            scratchpad=[request.to_ai_message(), invocation.to_tool_message()],
        ).to_messages()

        assert isinstance(messages[-2], AIMessage)
        assert messages[-2].tool_calls[0]["name"] == "lookup"
        assert isinstance(messages[-1], ToolMessage)
        assert messages[-1].tool_call_id == "call_1"
        assert messages[-1].content == "found"

    def test_assembled_prompt_keeps_structured_fields(self) -> None:
        """Structured fields mirror the inputs."""
        history = [ConversationTurn.user("hi")]

        prompt = PromptAssembler(system_prompt="sys").assemble("q", history=history)

        assert prompt.system == "sys"
        assert prompt.user_input == "q"
        assert prompt.history == history
        assert prompt.scratchpad == []
