"""LLM completion endpoint."""

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from upload_ai.dependencies import get_completion_handler
from upload_ai.domain import CompletionRequest
from upload_ai.exceptions import (
    NotFoundError,
    TranscriptionNotFoundError,
    UpstreamError,
)
from upload_ai.handlers import CompletionHandler
from upload_ai.logging import setup_logging

logger = setup_logging()

router = APIRouter(prefix="/ai", tags=["ai"])

HandlerDep = Annotated[CompletionHandler, Depends(get_completion_handler)]


async def _relay(chunks: AsyncIterator[str]) -> AsyncIterator[str]:
    try:
        async for chunk in chunks:
            yield chunk
    except UpstreamError as e:
        # Headers are already sent; the truncated body is all the client gets.
        logger.error(f"Completion stream aborted: {e}")


@router.post("/complete")
async def generate_completion(
    request: CompletionRequest, handler: HandlerDep
) -> StreamingResponse:
    """Streams the completion for a prompt filled with the video's transcription."""
    try:
        chunks = await handler.complete(request)
    except TranscriptionNotFoundError:
        raise HTTPException(status_code=404, detail="Video has no transcription")
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Video not found")
    except UpstreamError as e:
        logger.error(f"Completion provider failed for video {request.video_id}: {e}")
        raise HTTPException(status_code=502, detail="Completion failed")
    except Exception as e:
        logger.error(f"Error opening completion for video {request.video_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return StreamingResponse(_relay(chunks), media_type="text/plain; charset=utf-8")
