"""Domain models shared by the API and the clients."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ConvertedAudio(BaseModel, frozen=True):
    """Audio produced from a video, ready to be uploaded."""

    data: bytes
    file_name: str = "audio.mp3"
    content_type: str = "audio/mpeg"

    @property
    def size(self) -> int:
        return len(self.data)


class TranscriptionRequest(BaseModel):
    """Body of a transcription request."""

    prompt: str | None = None


class CompletionRequest(BaseModel):
    """Body of a completion request; never persisted."""

    model_config = ConfigDict(populate_by_name=True)

    video_id: UUID = Field(alias="videoId")
    prompt: str
    temperature: float = Field(default=0.5, ge=0.0, le=1.0)
