from collections.abc import AsyncIterator
from typing import BinaryIO

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from upload_ai.config import (
    AppConfig,
    AssemblyAIConfig,
    DatabaseConfig,
    GeminiConfig,
    MinioConfig,
    ServerConfig,
)
from upload_ai.dependencies import (
    get_completion_service,
    get_config,
    get_db_session,
    get_storage,
    get_transcription_service,
)
from upload_ai.domain import AudioConverter, ConvertedAudio
from upload_ai.exceptions import (
    CompletionError,
    StorageDownloadError,
)
from upload_ai.infrastructure.interfaces import (
    CompletionService,
    StorageClient,
    TranscriptionService,
)
from upload_ai.main import app

MAX_UPLOAD_BYTES = 1024


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class InMemoryStorage(StorageClient):
    def __init__(self):
        self.objects: dict[str, tuple[bytes, str]] = {}

    def upload(self, object_name: str, data: BinaryIO, size: int, content_type: str) -> None:
        self.objects[object_name] = (data.read(), content_type)

    def download(self, object_name: str) -> bytes:
        if object_name not in self.objects:
            raise StorageDownloadError(object_name)
        return self.objects[object_name][0]

    def ensure_bucket_exists(self) -> None:
        pass


class FakeTranscriber(TranscriptionService):
    def __init__(self):
        self.results: list[str] = ["olá mundo"]
        self.error: Exception | None = None
        self.calls: list[tuple[bytes, str | None]] = []

    def transcribe(self, audio_data: bytes, prompt: str | None = None) -> str:
        self.calls.append((audio_data, prompt))
        if self.error:
            raise self.error
        if len(self.results) > 1:
            return self.results.pop(0)
        return self.results[0]


class FakeCompletionService(CompletionService):
    def __init__(self):
        self.chunks: list[str] = ["Título ", "1\n", "Título 2"]
        self.open_error: Exception | None = None
        self.fail_after: int | None = None
        self.requests: list[tuple[str, float]] = []

    async def open_stream(self, prompt: str, temperature: float) -> AsyncIterator[str]:
        self.requests.append((prompt, temperature))
        if self.open_error:
            raise self.open_error
        return self._chunks()

    async def _chunks(self) -> AsyncIterator[str]:
        for index, chunk in enumerate(self.chunks):
            if self.fail_after is not None and index == self.fail_after:
                raise CompletionError("stream interrupted")
            yield chunk


class FakeConverter(AudioConverter):
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.inputs: list[bytes] = []

    def convert(self, video_data: bytes, on_progress=None) -> ConvertedAudio:
        self.inputs.append(video_data)
        if self.error:
            raise self.error
        if on_progress:
            on_progress(100)
        return ConvertedAudio(data=b"ID3" + video_data[:16])


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def config():
    return AppConfig(
        database=DatabaseConfig(
            host="", port="", user="", password="", database="", url_override="sqlite://"
        ),
        minio=MinioConfig(endpoint="minio:9000", user="", password=""),
        assemblyai=AssemblyAIConfig(api_key="test"),
        gemini=GeminiConfig(api_key="test"),
        server=ServerConfig(max_upload_bytes=MAX_UPLOAD_BYTES),
    )


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def transcriber():
    return FakeTranscriber()


@pytest.fixture
def completion_service():
    return FakeCompletionService()


@pytest.fixture
def converter():
    return FakeConverter()


@pytest.fixture
def api(engine, config, storage, transcriber, completion_service):
    def _db_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = _db_session
    app.dependency_overrides[get_config] = lambda: config
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_transcription_service] = lambda: transcriber
    app.dependency_overrides[get_completion_service] = lambda: completion_service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def http_client(api):
    async with AsyncClient(transport=ASGITransport(app=api), base_url="http://test") as client:
        yield client


@pytest.fixture
def upload(http_client):
    async def _upload(data: bytes = b"ID3-audio", name: str = "audio.mp3") -> dict:
        response = await http_client.post(
            "/videos", files={"file": (name, data, "audio/mpeg")}
        )
        assert response.status_code == 200, response.text
        return response.json()["video"]

    return _upload
