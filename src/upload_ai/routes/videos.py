"""Audio upload and transcription endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Depends, HTTPException, UploadFile

from upload_ai.dependencies import get_video_handler
from upload_ai.domain import TranscriptionRequest
from upload_ai.exceptions import (
    InputValidationError,
    NotFoundError,
    StorageDownloadError,
    StorageUploadError,
    UpstreamError,
)
from upload_ai.handlers import VideoHandler
from upload_ai.logging import setup_logging
from upload_ai.response_models import (
    TranscriptionResponse,
    VideoEnvelope,
    VideoResponse,
)

logger = setup_logging()

router = APIRouter(prefix="/videos", tags=["videos"])

HandlerDep = Annotated[VideoHandler, Depends(get_video_handler)]


@router.post("", response_model=VideoEnvelope)
def upload_video(handler: HandlerDep, file: UploadFile | None = None) -> VideoEnvelope:
    """
    Stores an uploaded audio file.

    The transcription stays empty until the transcription endpoint is called.
    """
    try:
        if file is None:
            video = handler.store(None, None, None)
        else:
            data = handler.read_upload(file.file, file.size)
            video = handler.store(file.filename, file.content_type, data)
    except InputValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageUploadError:
        raise HTTPException(status_code=500, detail="File upload failed")
    except Exception as e:
        logger.error(f"Error storing upload: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return VideoEnvelope(video=VideoResponse.model_validate(video))


@router.get("/{video_id}", response_model=VideoEnvelope)
def get_video(video_id: UUID, handler: HandlerDep) -> VideoEnvelope:
    try:
        video = handler.get(video_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Video not found")
    except Exception as e:
        logger.error(f"Error fetching video {video_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return VideoEnvelope(video=VideoResponse.model_validate(video))


@router.post("/{video_id}/transcription", response_model=TranscriptionResponse)
def create_transcription(
    video_id: UUID,
    handler: HandlerDep,
    body: Annotated[TranscriptionRequest | None, Body()] = None,
) -> TranscriptionResponse:
    """Transcribes the stored audio, optionally biased by keyword hints."""
    prompt = body.prompt if body else None

    try:
        transcription = handler.transcribe(video_id, prompt)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Video not found")
    except UpstreamError as e:
        logger.error(f"Transcription provider failed for video {video_id}: {e}")
        raise HTTPException(status_code=502, detail="Transcription failed")
    except StorageDownloadError:
        raise HTTPException(status_code=500, detail="Stored audio unavailable")
    except Exception as e:
        logger.error(f"Error transcribing video {video_id}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")

    return TranscriptionResponse(transcription=transcription)
