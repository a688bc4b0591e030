"""
Pipeline assembly from settings.

Wires the Gemini adapters, chunker, index, retriever, rewriter, prompt
assembler, tools and memory backend into components shared by every
session.

Dependencies: ragchat.configs, ragchat.boundary, ragchat.core
System role: Composition root for the conversational pipeline
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from sqlalchemy.orm import sessionmaker

from ragchat.application.index_builder import IndexBuilder
from ragchat.boundary.db.connection import create_tables, get_engine, get_session_factory
from ragchat.boundary.db.sql_memory import SQLConversationMemory
from ragchat.boundary.embeddings.gemini_embedder import GeminiEmbedder
from ragchat.boundary.llm.gemini_generator import GeminiChatGenerator
from ragchat.boundary.loaders.text_loader import TextFileDocumentSource
from ragchat.boundary.loaders.web_loader import WebDocumentSource
from ragchat.boundary.tools.retriever_tool import create_retriever_tool
from ragchat.boundary.tools.web_search_tool import create_web_search_tool
from ragchat.configs import AgentSettings, Settings
from ragchat.core.agent_loop import AgentLoop
from ragchat.core.chunker import TextChunker
from ragchat.core.exceptions import ConfigError
from ragchat.core.interfaces import ConversationMemory, Embedder, Generator
from ragchat.core.memory import InMemoryConversationMemory
from ragchat.core.prompt_assembler import PromptAssembler
from ragchat.core.prompts import DEFAULT_SYSTEM_PROMPT
from ragchat.core.query_rewriter import HistoryAwareQueryRewriter
from ragchat.core.retriever import Retriever
from ragchat.core.retry import RetryPolicy
from ragchat.core.vector_index import InMemoryVectorIndex

logger = logging.getLogger(__name__)


@dataclass
class PipelineComponents:
    """Collaborators shared by all sessions; memory is created per session."""

    generator: Generator
    agent_settings: AgentSettings
    retry_policy: RetryPolicy
    assembler: PromptAssembler
    retriever: Retriever | None = None
    rewriter: HistoryAwareQueryRewriter | None = None
    tools: list[Any] = field(default_factory=list)
    session_factory: sessionmaker | None = None

    def create_memory(self, session_id: str) -> ConversationMemory:
        """Create the configured memory backend for one session."""
        if self.agent_settings.memory_backend == "sql":
            if self.session_factory is None:
                raise ConfigError("SQL memory backend selected without a session factory", field="memory_backend")
            return SQLConversationMemory(self.session_factory, session_id)
        return InMemoryConversationMemory()

    @property
    def stored_memory_factory(self) -> Callable[[str], ConversationMemory] | None:
        """Memory opener for sessions not yet active in this process (sql backend only)."""
        if self.agent_settings.memory_backend == "sql":
            return self.create_memory
        return None

    def create_agent_loop(self, session_id: str) -> AgentLoop:
        """Create an agent loop for one session."""
        return AgentLoop(
            generator=self.generator,
            memory=self.create_memory(session_id),
            rewriter=self.rewriter,
            retriever=self.retriever,
            assembler=self.assembler,
            tools=self.tools,
            max_tool_iterations=self.agent_settings.max_tool_iterations,
            history_window=self.agent_settings.history_window,
            exit_commands=self.agent_settings.exit_commands,
            retry_policy=self.retry_policy,
            session_id=session_id,
        )


def build_retry_policy(agent_settings: AgentSettings) -> RetryPolicy:
    return RetryPolicy(
        attempts=agent_settings.retry_attempts,
        initial_wait=agent_settings.retry_initial_wait,
        max_wait=agent_settings.retry_max_wait,
        jitter=agent_settings.retry_jitter,
    )


def build_index(
    settings: Settings,
    embedder: Embedder,
    retry_policy: RetryPolicy,
) -> InMemoryVectorIndex:
    """
    Build the startup index from configured URLs and files.

    Args:
        settings: Application settings
        embedder: Embedder for chunk vectors
        retry_policy: Retry policy for loads and embeddings

    Returns:
        InMemoryVectorIndex: Index over every configured source (may be empty)
    """
    retrieval = settings.retrieval
    builder = IndexBuilder(
        chunker=TextChunker(
            window_size=retrieval.chunk_size,
            overlap=retrieval.chunk_overlap,
            strategy=retrieval.chunking_strategy,
        ),
        embedder=embedder,
        embed_concurrency=retrieval.embed_concurrency,
        retry_policy=retry_policy,
    )
    index = InMemoryVectorIndex(dimension=settings.llm.embedding_dimension)
    if retrieval.source_urls:
        builder.build_from_locators(WebDocumentSource(), retrieval.source_urls, index=index)
    if retrieval.source_paths:
        builder.build_from_locators(TextFileDocumentSource(), retrieval.source_paths, index=index)
    return index


def build_pipeline_components(
    settings: Settings,
    generator: Generator | None = None,
    embedder: Embedder | None = None,
    index: InMemoryVectorIndex | None = None,
) -> PipelineComponents:
    """
    Assemble pipeline components from settings.

    Args:
        settings: Application settings
        generator: Generator override (Gemini from settings when None)
        embedder: Embedder override (Gemini from settings when None)
        index: Prebuilt index (built from configured sources when None)

    Returns:
        PipelineComponents: Shared collaborators for session agent loops
    """
    agent_settings = settings.agent
    retrieval = settings.retrieval
    retry_policy = build_retry_policy(agent_settings)

    generator = generator or GeminiChatGenerator.from_settings(settings.llm)
    embedder = embedder or GeminiEmbedder.from_settings(settings.llm)
    if index is None:
        index = build_index(settings, embedder, retry_policy)

    retriever = Retriever(index, embedder, k=retrieval.top_k)
    tools: list[Any] = []
    if retrieval.retriever_tool_enabled:
        tools.append(create_retriever_tool(
            retriever,
            name=retrieval.retriever_tool_name,
            description=retrieval.retriever_tool_description,
        ))
    if retrieval.web_search_enabled:
        tools.append(create_web_search_tool(max_results=retrieval.web_search_max_results))

    session_factory = None
    if agent_settings.memory_backend == "sql":
        engine = get_engine(settings.database)
        create_tables(engine)
        session_factory = get_session_factory(engine)

    logger.info(
        f"{__name__}:build_pipeline_components - Ready (chunks={len(index)}, k={retrieval.top_k}, "
        f"tools={[tool.name for tool in tools]}, memory={agent_settings.memory_backend})"
    )
    return PipelineComponents(
        generator=generator,
        agent_settings=agent_settings,
        retry_policy=retry_policy,
        assembler=PromptAssembler(system_prompt=agent_settings.system_prompt or DEFAULT_SYSTEM_PROMPT),
        retriever=retriever,
        rewriter=HistoryAwareQueryRewriter(generator) if agent_settings.query_rewrite_enabled else None,
        tools=tools,
        session_factory=session_factory,
    )
