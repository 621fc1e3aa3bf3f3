"""Handler for prompt rendering and completion streaming."""

from collections.abc import AsyncIterator

from upload_ai.domain import CompletionRequest, render_prompt
from upload_ai.exceptions import TranscriptionNotFoundError
from upload_ai.infrastructure.interfaces import CompletionService
from upload_ai.logging import setup_logging
from upload_ai.repositories import VideoRepository

logger = setup_logging()


class CompletionHandler:
    """Fills a prompt with a video's transcription and streams the LLM answer."""

    def __init__(self, repository: VideoRepository, completion: CompletionService):
        self._repository = repository
        self._completion = completion

    async def complete(self, request: CompletionRequest) -> AsyncIterator[str]:
        """
        Renders the prompt and opens the completion stream.

        Raises:
            VideoNotFoundError: If the video does not exist.
            TranscriptionNotFoundError: If the video was never transcribed.
            CompletionError: If the provider rejects the request.
        """
        video = self._repository.get_by_id(request.video_id)
        if video.transcription is None:
            raise TranscriptionNotFoundError(request.video_id)

        prompt = render_prompt(request.prompt, video.transcription)

        logger.info(
            "Completion requested",
            extra={
                "video_id": str(request.video_id),
                "temperature": request.temperature,
                "prompt_length": len(prompt),
            },
        )
        return await self._completion.open_stream(prompt, request.temperature)
