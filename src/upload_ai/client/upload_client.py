"""Client that converts a video and walks it through upload and transcription."""

import asyncio
import logging
from pathlib import Path
from uuid import UUID

import httpx

from upload_ai.config import ClientConfig
from upload_ai.domain import AudioConverter, ConvertedAudio

from .status import UploadStateMachine, UploadStatus

logger = logging.getLogger(__name__)


class UploadClient:
    """
    Drives the waiting, converting, uploading, generating, success chain.

    Every step runs only after the previous one succeeded. A failure at any
    step moves the machine to ERROR and re-raises the original exception;
    the caller recovers with `reset()`. After SUCCESS the machine returns to
    WAITING on its own once `reset_delay_seconds` have passed.
    """

    def __init__(
        self,
        config: ClientConfig,
        converter: AudioConverter | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._config = config
        self._converter = converter or AudioConverter()
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=config.api_base_url, timeout=config.timeout_seconds
        )
        self.state = UploadStateMachine()
        self._reset_handle: asyncio.TimerHandle | None = None

    @property
    def status(self) -> UploadStatus:
        return self.state.status

    async def submit(
        self, video_data: bytes | None, prompt: str | None = None
    ) -> UUID | None:
        """
        Converts, uploads and transcribes a video.

        Args:
            video_data: The selected video; None or empty means nothing selected.
            prompt: Optional comma-separated keywords for the transcription.

        Returns:
            The id of the stored video, or None when no video was selected.
        """
        if not video_data:
            logger.info("Submit ignored, no video selected")
            return None

        self.state.transition(UploadStatus.CONVERTING)

        try:
            audio = await asyncio.to_thread(
                self._converter.convert, video_data, self._log_progress
            )

            self.state.transition(UploadStatus.UPLOADING)
            video_id = await self._upload(audio)

            self.state.transition(UploadStatus.GENERATING)
            await self._transcribe(video_id, prompt)

            self.state.transition(UploadStatus.SUCCESS)
        except Exception:
            logger.exception(
                "An error occurred during the file upload process",
                extra={"status": self.state.status.value},
            )
            self.state.fail()
            raise

        self._schedule_reset()
        return video_id

    async def submit_file(self, path: str | Path, prompt: str | None = None) -> UUID | None:
        """Reads a local video file and submits it."""
        video_data = await asyncio.to_thread(Path(path).read_bytes)
        return await self.submit(video_data, prompt)

    def reset(self) -> None:
        """Returns to WAITING after an error or a success."""
        self._cancel_reset()
        self.state.reset()

    async def aclose(self) -> None:
        self._cancel_reset()
        if self._owns_http_client:
            await self._http.aclose()

    async def _upload(self, audio: ConvertedAudio) -> UUID:
        files = {"file": (audio.file_name, audio.data, audio.content_type)}
        response = await self._http.post("/videos", files=files)
        response.raise_for_status()
        video_id = UUID(response.json()["video"]["id"])
        logger.info(
            "Audio uploaded", extra={"video_id": str(video_id), "size": audio.size}
        )
        return video_id

    async def _transcribe(self, video_id: UUID, prompt: str | None) -> str:
        hint = prompt.strip() if prompt and prompt.strip() else None
        response = await self._http.post(
            f"/videos/{video_id}/transcription", json={"prompt": hint}
        )
        response.raise_for_status()
        transcription = response.json()["transcription"]
        logger.info(
            "Transcription finished",
            extra={"video_id": str(video_id), "length": len(transcription)},
        )
        return transcription

    def _log_progress(self, percent: int) -> None:
        logger.debug("Convert progress", extra={"percent": percent})

    def _schedule_reset(self) -> None:
        self._cancel_reset()
        loop = asyncio.get_running_loop()
        self._reset_handle = loop.call_later(
            self._config.reset_delay_seconds, self._reset_after_success
        )

    def _reset_after_success(self) -> None:
        self._reset_handle = None
        if self.state.status is UploadStatus.SUCCESS:
            self.state.reset()

    def _cancel_reset(self) -> None:
        if self._reset_handle is not None:
            self._reset_handle.cancel()
            self._reset_handle = None
