"""Handler for storing and transcribing uploaded audio."""

import io
import mimetypes
import os
import uuid
from typing import BinaryIO
from uuid import UUID

from upload_ai.db_models import Video
from upload_ai.exceptions import MissingUploadError, UploadTooLargeError
from upload_ai.infrastructure.interfaces import StorageClient, TranscriptionService
from upload_ai.logging import setup_logging
from upload_ai.repositories import VideoRepository

logger = setup_logging()

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class VideoHandler:
    """Stores uploaded audio files and transcribes them on request."""

    def __init__(
        self,
        repository: VideoRepository,
        storage: StorageClient,
        transcriber: TranscriptionService,
        max_upload_bytes: int,
    ):
        self._repository = repository
        self._storage = storage
        self._transcriber = transcriber
        self._max_upload_bytes = max_upload_bytes

    def read_upload(self, source: BinaryIO, declared_size: int | None = None) -> bytes:
        """
        Reads an uploaded file, never buffering more than one byte past the limit.

        Raises:
            UploadTooLargeError: If the declared size already exceeds the limit.
        """
        if declared_size is not None and declared_size > self._max_upload_bytes:
            raise UploadTooLargeError(declared_size, self._max_upload_bytes)
        # An oversize stream comes back one byte too long and `store` rejects it.
        return source.read(self._max_upload_bytes + 1)

    def store(
        self, file_name: str | None, content_type: str | None, data: bytes | None
    ) -> Video:
        """
        Uploads the audio to storage and records it with no transcription.

        Raises:
            MissingUploadError: If no file or an empty file was sent.
            UploadTooLargeError: If the file exceeds the size limit.
            StorageUploadError: If the storage upload fails.
        """
        if data is None:
            raise MissingUploadError()
        if not data:
            raise MissingUploadError("Uploaded file is empty")
        if len(data) > self._max_upload_bytes:
            raise UploadTooLargeError(len(data), self._max_upload_bytes)

        name = os.path.basename(file_name or "") or "audio.mp3"
        resolved_type = self._resolve_content_type(name, content_type)
        video_id = uuid.uuid4()
        object_name = self._object_name(video_id, name)

        logger.info(
            "Received upload request",
            extra={
                "file_name": name,
                "object_name": object_name,
                "video_id": str(video_id),
                "size": len(data),
            },
        )

        self._storage.upload(
            object_name=object_name,
            data=io.BytesIO(data),
            size=len(data),
            content_type=resolved_type,
        )

        return self._repository.create(
            name=name,
            path=object_name,
            content_type=resolved_type,
            size=len(data),
            video_id=video_id,
        )

    def get(self, video_id: UUID) -> Video:
        return self._repository.get_by_id(video_id)

    def transcribe(self, video_id: UUID, prompt: str | None = None) -> str:
        """
        Transcribes a stored video and saves the text, replacing any earlier one.

        Raises:
            VideoNotFoundError: If the video does not exist.
            StorageDownloadError: If the audio cannot be read back.
            TranscriptionError: If the speech-to-text provider fails.
        """
        video = self._repository.get_by_id(video_id)

        logger.info(
            "Transcription requested",
            extra={"video_id": str(video_id), "has_prompt": bool(prompt)},
        )

        audio_data = self._storage.download(video.path)
        transcription = self._transcriber.transcribe(audio_data, prompt)

        self._repository.save_transcription(video_id, transcription)
        return transcription

    def _resolve_content_type(self, name: str, declared: str | None) -> str:
        if declared and declared != DEFAULT_CONTENT_TYPE:
            return declared
        guessed, _ = mimetypes.guess_type(name)
        return guessed or DEFAULT_CONTENT_TYPE

    def _object_name(self, video_id: UUID, name: str) -> str:
        """Builds audio/{id}/{stem}-{id}{ext} so names never collide."""
        stem, extension = os.path.splitext(name)
        return f"audio/{video_id}/{stem}-{video_id}{extension}"
