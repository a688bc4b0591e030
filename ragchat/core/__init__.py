"""
Core pipeline module.

Contains:
- Chunker, vector index and retriever (retrieval stages)
- History-aware query rewriter and prompt assembler
- Conversation memory and the agent loop state machine
- Prompt pipelines with output parsing

Usage:
    from ragchat.core import AgentLoop, InMemoryVectorIndex, Retriever

    loop = AgentLoop(generator, retriever=Retriever(index, embedder, k=2))
    result = loop.process_turn("What is LCEL?")
"""

from ragchat.core.agent_loop import AgentLoop
from ragchat.core.chunker import ChunkingStrategy, TextChunker
from ragchat.core.memory import InMemoryConversationMemory
from ragchat.core.output_parsing import (
    PromptPipeline,
    descriptions_parser,
    list_parser,
    schema_parser,
    string_parser,
)
from ragchat.core.prompt_assembler import AssembledPrompt, PromptAssembler
from ragchat.core.query_rewriter import HistoryAwareQueryRewriter
from ragchat.core.retriever import Retriever
from ragchat.core.retry import RetryPolicy
from ragchat.core.vector_index import InMemoryVectorIndex

__all__ = [
    "AgentLoop",
    "AssembledPrompt",
    "ChunkingStrategy",
    "HistoryAwareQueryRewriter",
    "InMemoryConversationMemory",
    "InMemoryVectorIndex",
    "PromptAssembler",
    "PromptPipeline",
    "Retriever",
    "RetryPolicy",
    "TextChunker",
    "descriptions_parser",
    "list_parser",
    "schema_parser",
    "string_parser",
]
