"""Chat API endpoints.

Routes:
- POST /sessions/{session_id}/chat - Process one conversation turn
- GET /sessions/{session_id}/history - Read the conversation log
- DELETE /sessions/{session_id}/history - Clear the log and reopen the session

Dependencies: ragchat.application.session_manager
System role: Chat messaging HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from ragchat.api.deps import get_session_manager
from ragchat.application.session_manager import SessionManager
from ragchat.core.exceptions import (
    ConfigError,
    FatalError,
    RagChatError,
    SessionClosedError,
    ToolLoopExceeded,
    TransientError,
)
from ragchat.models.agent import TurnResult
from ragchat.models.chat import (
    ChatHistoryResponse,
    ChatMessageResponse,
    ChatRequest,
    ChatResponse,
    ChatSource,
    ChatToolCall,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["chat"])

ERROR_STATUS: list[tuple[type[RagChatError], int]] = [
    (SessionClosedError, status.HTTP_409_CONFLICT),
    (ToolLoopExceeded, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (TransientError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (FatalError, status.HTTP_502_BAD_GATEWAY),
    (ConfigError, status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def to_http_exception(exc: RagChatError) -> HTTPException:
    """Map a pipeline error onto an HTTP status with a structured detail."""
    status_code = next(
        (code for error_type, code in ERROR_STATUS if isinstance(exc, error_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    return HTTPException(
        status_code=status_code,
        detail={"error": type(exc).__name__, "message": exc.message, "details": exc.details},
    )


def to_chat_response(result: TurnResult) -> ChatResponse:
    return ChatResponse(
        answer=result.answer,
        query=result.query,
        sources=[
            ChatSource(
                text=item.chunk.text,
                score=item.score,
                sequence_index=item.chunk.sequence_index,
                source=item.chunk.source_metadata.get("source"),
            )
            for item in result.retrieved.items
        ],
        tool_calls=[
            ChatToolCall(name=inv.tool_name, arguments=inv.arguments, is_error=inv.is_error)
            for inv in result.tool_invocations
        ],
        shutdown=result.shutdown,
    )


@router.post("/{session_id}/chat", response_model=ChatResponse)
async def chat(
    session_id: str,
    request: ChatRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> ChatResponse:
    """Send a message to a session and return the answer with its sources.

    Raises:
        HTTPException(409): Session was shut down with the exit command
        HTTPException(502): Non-retryable model failure
        HTTPException(503): Model unavailable after retries
        HTTPException(500): Tool loop exceeded or configuration error
    """
    logger.info(f"{__name__}:chat - START session_id={session_id}, message_len={len(request.message)}")
    try:
        result = await run_in_threadpool(manager.process_turn, session_id, request.message)
    except RagChatError as e:
        logger.error(f"{__name__}:chat - FAILED session_id={session_id}: {type(e).__name__}: {e}")
        raise to_http_exception(e) from e

    return to_chat_response(result)


@router.get("/{session_id}/history", response_model=ChatHistoryResponse)
async def get_history(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> ChatHistoryResponse:
    """Return the conversation log of a session, oldest first."""
    try:
        turns = await run_in_threadpool(manager.history, session_id)
    except RagChatError as e:
        raise to_http_exception(e) from e

    messages = [ChatMessageResponse(role=turn.role.value, content=turn.content) for turn in turns]
    return ChatHistoryResponse(messages=messages, total=len(messages))


@router.delete("/{session_id}/history", status_code=status.HTTP_204_NO_CONTENT)
async def clear_history(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> None:
    """Clear the conversation log and reopen the session."""
    try:
        await run_in_threadpool(manager.reset, session_id)
    except RagChatError as e:
        raise to_http_exception(e) from e
