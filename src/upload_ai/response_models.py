"""Response models for the upload-ai API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class PromptResponse(BaseModel):
    """A reusable prompt template."""

    id: UUID
    title: str
    template: str


class VideoResponse(BaseModel):
    """A stored audio asset."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    path: str
    content_type: str
    size: int
    transcription: str | None = None
    created_at: datetime


class VideoEnvelope(BaseModel):
    """Wraps a video under the `video` key."""

    video: VideoResponse


class TranscriptionResponse(BaseModel):
    """Text returned by the speech-to-text provider."""

    transcription: str


class HealthResponse(BaseModel):
    status: str = "ok"
