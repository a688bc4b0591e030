"""
Conversational agent loop.

Per-turn state machine that rewrites the query, retrieves context,
generates an answer with an optional bounded tool loop and commits the
turn to conversation memory.

    AWAITING_INPUT -> REWRITING -> RETRIEVING -> GENERATING
        -> (TOOL_DISPATCH -> GENERATING)* -> RESPONDING -> AWAITING_INPUT

ERROR ends a failed turn; SHUTDOWN ends the session on the exit command.

Dependencies: ragchat.core (rewriter, retriever, prompt assembler, memory, retry)
System role: Orchestrator of the conversational pipeline
"""

import logging
from typing import Iterable, Sequence

from langchain_core.messages import BaseMessage

from ragchat.core.exceptions import ConfigError, SessionClosedError, ToolLoopExceeded
from ragchat.core.interfaces import ConversationMemory, Generator, Tool
from ragchat.core.memory import InMemoryConversationMemory
from ragchat.core.prompt_assembler import PromptAssembler
from ragchat.core.query_rewriter import HistoryAwareQueryRewriter
from ragchat.core.retriever import Retriever
from ragchat.core.retry import RetryPolicy
from ragchat.models.agent import AgentState, TurnResult
from ragchat.models.chunk import RetrievalResult
from ragchat.models.conversation import ConversationRole, ConversationTurn
from ragchat.models.generation import GeneratorResponse, ToolCallRequest, ToolInvocation
from ragchat.observability.correlation import correlation_scope
from ragchat.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class AgentLoop:
    """
    Drive one conversation session turn by turn.

    Memory is written only when a turn reaches RESPONDING, so a failed or
    interrupted turn leaves the conversation exactly as it was.
    """

    def __init__(
        self,
        generator: Generator,
        memory: ConversationMemory | None = None,
        rewriter: HistoryAwareQueryRewriter | None = None,
        retriever: Retriever | None = None,
        assembler: PromptAssembler | None = None,
        tools: Iterable[Tool] = (),
        max_tool_iterations: int = 5,
        history_window: int | None = 10,
        exit_commands: Iterable[str] = ("exit",),
        retry_policy: RetryPolicy | None = None,
        session_id: str | None = None,
    ) -> None:
        """
        Initialize agent loop.

        Args:
            generator: Model producing answers or tool calls
            memory: Conversation memory (in-memory when None)
            rewriter: History-aware query rewriter (REWRITING skipped when None)
            retriever: Retriever (RETRIEVING skipped when None)
            assembler: Prompt assembler
            tools: Tools declared to the generator
            max_tool_iterations: Maximum tool dispatch rounds per turn
            history_window: Most recent turns read from memory (None for all); a window
                never starts with an assistant turn, so an odd size replays one fewer
            exit_commands: Inputs that shut the session down (case-insensitive)
            retry_policy: Retry policy for rewrite, retrieve and generate
            session_id: Identifier used in logs and errors

        Raises:
            ConfigError: On negative bounds or duplicate tool names
        """
        if max_tool_iterations < 0:
            raise ConfigError(
                f"max_tool_iterations must be non-negative, got {max_tool_iterations}",
                field="max_tool_iterations",
            )
        if history_window is not None and history_window < 0:
            raise ConfigError(
                f"history_window must be non-negative, got {history_window}",
                field="history_window",
            )

        self._tools: dict[str, Tool] = {}
        for tool in tools:
            if tool.name in self._tools:
                raise ConfigError(f"Duplicate tool name '{tool.name}'", field="tools")
            self._tools[tool.name] = tool

        self._generator = generator
        self._memory = memory if memory is not None else InMemoryConversationMemory()
        self._rewriter = rewriter
        self._retriever = retriever
        self._assembler = assembler or PromptAssembler()
        self._retry = retry_policy or RetryPolicy()
        self.max_tool_iterations = max_tool_iterations
        self.history_window = history_window
        self.exit_commands = frozenset(command.strip().lower() for command in exit_commands)
        self.session_id = session_id
        self._state = AgentState.AWAITING_INPUT

    @property
    def state(self) -> AgentState:
        return self._state

    @property
    def memory(self) -> ConversationMemory:
        return self._memory

    @property
    def tools(self) -> list[Tool]:
        return list(self._tools.values())

    @property
    def is_shutdown(self) -> bool:
        return self._state is AgentState.SHUTDOWN

    def history(self) -> list[ConversationTurn]:
        """Return the full conversation log."""
        return self._memory.snapshot()

    def reset(self) -> None:
        """Clear memory and return to AWAITING_INPUT (reopens a shut-down session)."""
        self._memory.clear()
        self._state = AgentState.AWAITING_INPUT
        logger.info(f"{__name__}:reset - Session {self.session_id or '-'} reset")

    def is_exit_command(self, user_input: str) -> bool:
        return user_input.strip().lower() in self.exit_commands

    def process_turn(self, user_input: str) -> TurnResult:
        """
        Process one user turn end to end.

        Args:
            user_input: User message

        Returns:
            TurnResult: Answer, query, retrieved context and tool invocations

        Raises:
            SessionClosedError: When the session was shut down
            ToolLoopExceeded: When the model keeps calling tools past the bound
            TransientError: When retries are exhausted
            FatalError: On non-retryable collaborator failures
        """
        if self._state is AgentState.SHUTDOWN:
            raise SessionClosedError(self.session_id)

        if self.is_exit_command(user_input):
            self._state = AgentState.SHUTDOWN
            logger.info(f"{__name__}:process_turn - Exit command received, session {self.session_id or '-'} shut down")
            return TurnResult(state=AgentState.SHUTDOWN, shutdown=True)

        self._state = AgentState.AWAITING_INPUT
        with correlation_scope():
            try:
                return self._run_turn(user_input)
            except BaseException as e:
                failed_in = self._state
                self._state = AgentState.ERROR
                logger.error(
                    f"{__name__}:process_turn - Turn failed in {failed_in.value}: "
                    f"{type(e).__name__}: {e}"
                )
                raise

    def _transition(self, state: AgentState) -> None:
        logger.debug(f"{__name__}:_transition - {self._state.value} -> {state.value}")
        self._state = state

    def _windowed_history(self) -> list[ConversationTurn]:
        turns = self._memory.snapshot()
        if self.history_window is None:
            return turns
        if self.history_window == 0:
            return []
        window = turns[-self.history_window:]
        while window and window[0].role is ConversationRole.ASSISTANT:
            window = window[1:]
        return window

    def _run_turn(self, user_input: str) -> TurnResult:
        history = self._windowed_history()

        query = user_input
        if self._rewriter is not None and history:
            self._transition(AgentState.REWRITING)
            query = self._retry.call("rewrite", self._rewriter.rewrite, history, user_input)

        retrieved = RetrievalResult(query=query)
        if self._retriever is not None:
            self._transition(AgentState.RETRIEVING)
            retrieved = self._retry.call("retrieve", self._retriever.retrieve, query)

        scratchpad: list[BaseMessage] = []
        invocations: list[ToolInvocation] = []
        rounds = 0
        while True:
            self._transition(AgentState.GENERATING)
            response = self._generate(user_input, history, retrieved, scratchpad)
            if response.is_final:
                break
            if rounds >= self.max_tool_iterations:
                raise ToolLoopExceeded(
                    self.max_tool_iterations,
                    details={"requested_tools": [call.name for call in response.tool_calls]},
                )

            self._transition(AgentState.TOOL_DISPATCH)
            rounds += 1
            scratchpad.append(response.to_ai_message())
            for call in response.tool_calls:
                invocation = self._dispatch(call)
                invocations.append(invocation)
                scratchpad.append(invocation.to_tool_message())

        self._transition(AgentState.RESPONDING)
        self._memory.extend([
            ConversationTurn.user(user_input),
            ConversationTurn.assistant(response.content),
        ])
        self._transition(AgentState.AWAITING_INPUT)

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:process_turn - Turn complete",
            session_id=self.session_id,
            retrieved=len(retrieved),
            tool_rounds=rounds,
            answer_len=len(response.content),
        )
        return TurnResult(
            answer=response.content,
            query=query,
            retrieved=retrieved,
            tool_invocations=invocations,
            state=self._state,
        )

    def _generate(
        self,
        user_input: str,
        history: Sequence[ConversationTurn],
        retrieved: RetrievalResult,
        scratchpad: Sequence[BaseMessage],
    ) -> GeneratorResponse:
        prompt = self._assembler.assemble(
            user_input=user_input,
            history=history,
            retrieved=retrieved,
            scratchpad=scratchpad,
        )
        tools = self.tools or None
        return self._retry.call("generate", self._generator.invoke, prompt.to_messages(), tools)

    def _dispatch(self, call: ToolCallRequest) -> ToolInvocation:
        """Run one tool call; unknown tools and tool failures become error results."""
        tool = self._tools.get(call.name)
        if tool is None:
            logger.warning(f"{__name__}:_dispatch - Unknown tool requested: {call.name}")
            return ToolInvocation(
                call_id=call.id,
                tool_name=call.name,
                arguments=call.arguments,
                result=f"Error: unknown tool '{call.name}'. Available tools: {', '.join(self._tools) or 'none'}",
                is_error=True,
            )

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:_dispatch - Invoking tool {call.name}",
            arguments=call.arguments,
        )
        try:
            result = tool.invoke(call.arguments)
        except Exception as e:
            logger.warning(f"{__name__}:_dispatch - Tool {call.name} failed: {type(e).__name__}: {e}")
            return ToolInvocation(
                call_id=call.id,
                tool_name=call.name,
                arguments=call.arguments,
                result=f"Error: {type(e).__name__}: {e}",
                is_error=True,
            )

        return ToolInvocation(
            call_id=call.id,
            tool_name=call.name,
            arguments=call.arguments,
            result=result,
        )
