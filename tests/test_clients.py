import asyncio
import uuid

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from upload_ai.client import (
    CompletionClient,
    PromptClient,
    UploadClient,
    UploadStatus,
)
from upload_ai.config import ClientConfig
from upload_ai.database import seed_prompts
from upload_ai.exceptions import (
    CompletionInProgressError,
    InvalidTransitionError,
    TranscodeError,
    TranscriptionError,
)


@pytest.fixture
def client_config():
    return ClientConfig(api_base_url="http://test", reset_delay_seconds=0.05)


@pytest.fixture
async def asgi_client(api):
    async with AsyncClient(transport=ASGITransport(app=api), base_url="http://test") as client:
        yield client


@pytest.fixture
async def upload_client(client_config, converter, asgi_client):
    client = UploadClient(client_config, converter=converter, http_client=asgi_client)
    yield client
    await client.aclose()


@pytest.fixture
def completion_client(client_config, asgi_client):
    return CompletionClient(client_config, http_client=asgi_client)


# ---------------------------------------------------------------------------
# UploadClient
# ---------------------------------------------------------------------------

class TestUploadClient:
    @pytest.mark.asyncio
    async def test_full_chain_reaches_success(
        self, upload_client, transcriber, asgi_client
    ):
        seen = []
        upload_client.state.subscribe(seen.append)

        video_id = await upload_client.submit(b"fake-video-bytes", "NLW, Rocketseat")

        assert isinstance(video_id, uuid.UUID)
        assert seen == [
            UploadStatus.CONVERTING,
            UploadStatus.UPLOADING,
            UploadStatus.GENERATING,
            UploadStatus.SUCCESS,
        ]
        assert upload_client.status is UploadStatus.SUCCESS
        assert transcriber.calls[0][1] == "NLW, Rocketseat"

        stored = await asgi_client.get(f"/videos/{video_id}")
        video = stored.json()["video"]
        assert video["name"] == "audio.mp3"
        assert video["content_type"] == "audio/mpeg"
        assert video["size"] > 0
        assert video["transcription"] == "olá mundo"

    @pytest.mark.asyncio
    async def test_silent_video_ends_with_empty_transcription(
        self, upload_client, transcriber, asgi_client
    ):
        transcriber.results = [""]

        video_id = await upload_client.submit(b"\x00" * 512)

        assert upload_client.status is UploadStatus.SUCCESS
        video = (await asgi_client.get(f"/videos/{video_id}")).json()["video"]
        assert video["size"] > 0
        assert video["transcription"] == ""

    @pytest.mark.asyncio
    async def test_no_video_selected_stays_waiting(self, upload_client, converter):
        assert await upload_client.submit(None) is None
        assert await upload_client.submit(b"") is None

        assert upload_client.status is UploadStatus.WAITING
        assert converter.inputs == []

    @pytest.mark.asyncio
    async def test_blank_hint_is_sent_as_null(self, upload_client, transcriber):
        await upload_client.submit(b"video", "   ")

        assert transcriber.calls[0][1] is None

    @pytest.mark.asyncio
    async def test_success_resets_to_waiting_after_delay(self, upload_client):
        await upload_client.submit(b"video")
        assert upload_client.status is UploadStatus.SUCCESS

        await asyncio.sleep(0.2)

        assert upload_client.status is UploadStatus.WAITING

    @pytest.mark.asyncio
    async def test_transcode_failure_moves_to_error(self, upload_client, converter, storage):
        converter.error = TranscodeError("not decodable")

        with pytest.raises(TranscodeError):
            await upload_client.submit(b"garbage")

        assert upload_client.status is UploadStatus.ERROR
        assert storage.objects == {}

    @pytest.mark.asyncio
    async def test_transcription_failure_leaves_uploaded_asset(
        self, upload_client, transcriber, storage
    ):
        transcriber.error = TranscriptionError("audio.mp3")

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await upload_client.submit(b"video")

        assert exc_info.value.response.status_code == 502
        assert upload_client.status is UploadStatus.ERROR
        assert len(storage.objects) == 1

    @pytest.mark.asyncio
    async def test_error_needs_manual_reset(self, upload_client, converter):
        converter.error = TranscodeError("boom")
        with pytest.raises(TranscodeError):
            await upload_client.submit(b"video")

        await asyncio.sleep(0.1)
        assert upload_client.status is UploadStatus.ERROR

        with pytest.raises(InvalidTransitionError):
            await upload_client.submit(b"video")

        converter.error = None
        upload_client.reset()
        assert await upload_client.submit(b"video") is not None

    @pytest.mark.asyncio
    async def test_submit_file_reads_from_disk(self, upload_client, converter, tmp_path):
        video = tmp_path / "clip.mp4"
        video.write_bytes(b"bytes-on-disk")

        await upload_client.submit_file(video)

        assert converter.inputs == [b"bytes-on-disk"]


# ---------------------------------------------------------------------------
# CompletionClient
# ---------------------------------------------------------------------------

class TestCompletionClient:
    async def _transcribed_video_id(self, upload_client):
        return await upload_client.submit(b"video")

    @pytest.mark.asyncio
    async def test_accumulates_streamed_text(self, upload_client, completion_client):
        video_id = await self._transcribed_video_id(upload_client)

        chunks = []
        async for chunk in completion_client.stream(video_id, "{transcription}", 0.5):
            assert completion_client.is_loading
            chunks.append(chunk)

        assert "".join(chunks) == "Título 1\nTítulo 2"
        assert completion_client.completion == "Título 1\nTítulo 2"
        assert not completion_client.is_loading

    @pytest.mark.asyncio
    async def test_complete_returns_final_text(
        self, upload_client, completion_client, completion_service
    ):
        video_id = await self._transcribed_video_id(upload_client)

        text = await completion_client.complete(video_id, "Resuma: {transcription}", 0.2)

        assert text == "Título 1\nTítulo 2"
        assert completion_service.requests == [("Resuma: olá mundo", 0.2)]

    @pytest.mark.asyncio
    async def test_rejects_second_stream_while_busy(self, upload_client, completion_client):
        video_id = await self._transcribed_video_id(upload_client)

        first = completion_client.stream(video_id, "p", 0.5)
        await first.__anext__()

        with pytest.raises(CompletionInProgressError):
            async for _ in completion_client.stream(video_id, "p", 0.5):
                pass

        await first.aclose()
        assert not completion_client.is_loading
        assert await completion_client.complete(video_id, "p", 0.5)

    @pytest.mark.asyncio
    async def test_new_stream_clears_previous_text(self, upload_client, completion_client):
        video_id = await self._transcribed_video_id(upload_client)
        await completion_client.complete(video_id, "p", 0.5)

        stream = completion_client.stream(video_id, "p", 0.5)
        first_chunk = await stream.__anext__()
        await stream.aclose()

        assert completion_client.completion == first_chunk

    @pytest.mark.asyncio
    async def test_server_error_raises_and_clears_busy_flag(self, completion_client):
        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await completion_client.complete(uuid.uuid4(), "p", 0.5)

        assert exc_info.value.response.status_code == 404
        assert not completion_client.is_loading


# ---------------------------------------------------------------------------
# PromptClient
# ---------------------------------------------------------------------------

class TestPromptClient:
    @pytest.mark.asyncio
    async def test_lists_prompts(self, client_config, asgi_client, engine):
        client = PromptClient(client_config, http_client=asgi_client)
        assert await client.list_prompts() == []

        seed_prompts(engine)

        prompts = await client.list_prompts()
        assert len(prompts) == 2
        assert all("{transcription}" in p.template for p in prompts)
