"""
Collaborator capability interfaces.

Structural protocols for the external collaborators consumed by the
pipeline. Concrete adapters live in ragchat.boundary; tests pass fakes.

Dependencies: langchain_core.messages
System role: Dependency-injection seams of the pipeline
"""

from typing import Any, Protocol, Sequence, runtime_checkable

from langchain_core.messages import BaseMessage

from ragchat.models.chunk import SourceDocument
from ragchat.models.conversation import ConversationTurn
from ragchat.models.generation import GeneratorResponse


@runtime_checkable
class Generator(Protocol):
    """Language model invoked with a rendered message list."""

    def invoke(
        self,
        messages: Sequence[BaseMessage],
        tools: Sequence["Tool"] | None = None,
    ) -> GeneratorResponse:
        """Return a final answer or tool call requests.

        Raises TransientError (retryable) or FatalError.
        """
        ...


@runtime_checkable
class Embedder(Protocol):
    """Maps text to a fixed-length vector."""

    def embed(self, text: str) -> list[float]:
        ...


@runtime_checkable
class DocumentSource(Protocol):
    """Fetches raw content for a locator (URL, path)."""

    def load(self, locator: str) -> list[SourceDocument]:
        ...


@runtime_checkable
class Tool(Protocol):
    """Externally implemented function the model may call."""

    name: str
    description: str

    def invoke(self, arguments: Any) -> Any:
        ...


@runtime_checkable
class ConversationMemory(Protocol):
    """Append-only ordered log of conversation turns."""

    def append(self, turn: ConversationTurn) -> None:
        ...

    def extend(self, turns: Sequence[ConversationTurn]) -> None:
        ...

    def snapshot(self) -> list[ConversationTurn]:
        ...

    def clear(self) -> None:
        ...

    def __len__(self) -> int:
        ...
