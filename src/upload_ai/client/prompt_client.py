"""Client for the prompt template listing."""

import httpx

from upload_ai.config import ClientConfig
from upload_ai.response_models import PromptResponse


class PromptClient:
    """Fetches the prompt templates offered in the UI."""

    def __init__(
        self, config: ClientConfig, http_client: httpx.AsyncClient | None = None
    ):
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=config.api_base_url, timeout=config.timeout_seconds
        )

    async def list_prompts(self) -> list[PromptResponse]:
        response = await self._http.get("/prompts")
        response.raise_for_status()
        return [PromptResponse.model_validate(item) for item in response.json()]

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()
