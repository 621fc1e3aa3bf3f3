"""Client that streams completions into an accumulating text buffer."""

import logging
from collections.abc import AsyncIterator
from uuid import UUID

import httpx

from upload_ai.config import ClientConfig
from upload_ai.exceptions import CompletionInProgressError

logger = logging.getLogger(__name__)


class CompletionClient:
    """
    Streams `/ai/complete` responses chunk by chunk.

    `completion` holds everything received so far for the current stream and
    `is_loading` stays true until the stream ends, fails or is closed. Only
    one stream may run at a time. Closing the generator drops the connection,
    which stops local consumption but not necessarily upstream generation.
    """

    def __init__(
        self, config: ClientConfig, http_client: httpx.AsyncClient | None = None
    ):
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=config.api_base_url, timeout=config.timeout_seconds
        )
        self._completion = ""
        self._is_loading = False

    @property
    def completion(self) -> str:
        return self._completion

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    async def stream(
        self, video_id: UUID | str, prompt: str, temperature: float
    ) -> AsyncIterator[str]:
        """
        Yields completion chunks as the server relays them.

        Raises:
            CompletionInProgressError: If another stream is still running.
            httpx.HTTPStatusError: If the server rejects the request.
        """
        if self._is_loading:
            raise CompletionInProgressError()

        self._is_loading = True
        self._completion = ""
        payload = {
            "videoId": str(video_id),
            "prompt": prompt,
            "temperature": temperature,
        }

        try:
            async with self._http.stream(
                "POST", "/ai/complete", json=payload
            ) as response:
                if response.is_error:
                    await response.aread()
                    response.raise_for_status()
                async for chunk in response.aiter_text():
                    if not chunk:
                        continue
                    self._completion += chunk
                    yield chunk
            logger.info(
                "Completion finished",
                extra={"video_id": str(video_id), "length": len(self._completion)},
            )
        finally:
            self._is_loading = False

    async def complete(self, video_id: UUID | str, prompt: str, temperature: float) -> str:
        """Consumes a whole stream and returns the final text."""
        async for _ in self.stream(video_id, prompt, temperature):
            pass
        return self._completion

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()
