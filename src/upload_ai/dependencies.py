"""FastAPI dependency injection configuration."""

from functools import lru_cache
from typing import Annotated, Generator

import assemblyai as aai
from fastapi import Depends
from google import genai
from minio import Minio
from sqlalchemy.engine import Engine
from sqlmodel import Session as DBSession

from upload_ai.config import AppConfig, load_config
from upload_ai.database import get_engine
from upload_ai.handlers import CompletionHandler, VideoHandler
from upload_ai.infrastructure import (
    AssemblyAITranscriber,
    GeminiCompletionService,
    MinioStorageClient,
)
from upload_ai.infrastructure.interfaces import (
    CompletionService,
    StorageClient,
    TranscriptionService,
)
from upload_ai.repositories import PromptRepository, VideoRepository


@lru_cache
def get_config() -> AppConfig:
    """Returns the process-wide configuration."""
    return load_config()


@lru_cache
def get_db_engine() -> Engine:
    return get_engine(get_config().database.url)


@lru_cache
def get_storage() -> StorageClient:
    """Returns the configured storage client."""
    config = get_config().minio
    client = Minio(
        endpoint=config.endpoint,
        access_key=config.user,
        secret_key=config.password,
        secure=config.secure,
    )
    return MinioStorageClient(client, config.bucket_name)


@lru_cache
def get_transcription_service() -> TranscriptionService:
    """Returns the configured transcription service."""
    config = get_config().assemblyai
    aai.settings.api_key = config.api_key
    return AssemblyAITranscriber(aai.Transcriber(), config.language_code)


@lru_cache
def get_completion_service() -> CompletionService:
    """Returns the configured completion service."""
    config = get_config().gemini
    return GeminiCompletionService(
        genai.Client(api_key=config.api_key), config.model_name
    )


def get_db_session() -> Generator[DBSession, None, None]:
    """Yields a database session, ensuring proper cleanup."""
    with DBSession(get_db_engine()) as session:
        yield session


DBSessionDep = Annotated[DBSession, Depends(get_db_session)]
ConfigDep = Annotated[AppConfig, Depends(get_config)]
StorageDep = Annotated[StorageClient, Depends(get_storage)]
TranscriberDep = Annotated[TranscriptionService, Depends(get_transcription_service)]
CompletionDep = Annotated[CompletionService, Depends(get_completion_service)]


def get_prompt_repository(db_session: DBSessionDep) -> PromptRepository:
    return PromptRepository(db_session)


def get_video_handler(
    db_session: DBSessionDep,
    config: ConfigDep,
    storage: StorageDep,
    transcriber: TranscriberDep,
) -> VideoHandler:
    """Creates a VideoHandler bound to the request's DB session."""
    return VideoHandler(
        VideoRepository(db_session),
        storage,
        transcriber,
        config.server.max_upload_bytes,
    )


def get_completion_handler(
    db_session: DBSessionDep, completion: CompletionDep
) -> CompletionHandler:
    """Creates a CompletionHandler bound to the request's DB session."""
    return CompletionHandler(VideoRepository(db_session), completion)
