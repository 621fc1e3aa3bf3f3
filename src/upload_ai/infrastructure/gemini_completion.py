"""Gemini implementation of the CompletionService interface."""

from collections.abc import AsyncIterator

from google import genai
from google.genai.types import GenerateContentConfig

from upload_ai.exceptions import CompletionError
from upload_ai.logging import setup_logging

from .interfaces import CompletionService

logger = setup_logging()


class GeminiCompletionService(CompletionService):
    """Streams completions from a single Google Gemini model."""

    def __init__(self, client: genai.Client, model_name: str):
        self._client = client
        self._model_name = model_name

    async def open_stream(self, prompt: str, temperature: float) -> AsyncIterator[str]:
        """
        Sends the request and waits for the first chunk.

        The SDK only contacts the API once the stream is iterated, so the
        first chunk is pulled here to surface a rejected request before the
        caller starts relaying.

        Raises:
            CompletionError: If the request fails before any chunk arrives.
        """
        try:
            stream = await self._client.aio.models.generate_content_stream(
                model=self._model_name,
                contents=prompt,
                config=GenerateContentConfig(temperature=temperature),
            )
            first = await anext(stream, None)
        except Exception as e:
            logger.exception(
                "Gemini API call failed", extra={"model": self._model_name}
            )
            raise CompletionError(f"Gemini completion failed: {e}", cause=e) from e

        logger.info(
            "Completion stream opened",
            extra={"model": self._model_name, "temperature": temperature},
        )
        return self._relay(first, stream)

    async def _relay(self, first, stream) -> AsyncIterator[str]:
        chunk_count = 0
        chunk = first
        try:
            # None marks the end of the stream.
            while chunk is not None:
                if chunk.text:
                    chunk_count += 1
                    yield chunk.text
                chunk = await anext(stream, None)
        except Exception as e:
            logger.exception(
                "Gemini stream interrupted", extra={"chunks": chunk_count}
            )
            raise CompletionError(f"Gemini stream interrupted: {e}", cause=e) from e
        logger.info("Completion stream finished", extra={"chunks": chunk_count})
