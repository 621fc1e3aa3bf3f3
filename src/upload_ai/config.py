"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel, computed_field


class DatabaseConfig(BaseModel, frozen=True):
    """Immutable database connection configuration."""

    host: str
    port: str
    user: str
    password: str
    database: str
    url_override: str | None = None

    @computed_field
    @property
    def url(self) -> str:
        """Returns the full connection URL, PostgreSQL unless overridden."""
        if self.url_override:
            return self.url_override
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class MinioConfig(BaseModel, frozen=True):
    """MinIO connection configuration."""

    endpoint: str
    user: str
    password: str
    bucket_name: str = "videos"
    secure: bool = False


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    language_code: str = "pt"


class GeminiConfig(BaseModel, frozen=True):
    """Gemini LLM configuration."""

    api_key: str
    model_name: str = "gemini-2.5-flash-lite"


class ServerConfig(BaseModel, frozen=True):
    """HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = 3333
    max_upload_bytes: int = 25 * 1024 * 1024


class AppConfig(BaseModel, frozen=True):
    """Root server configuration."""

    database: DatabaseConfig
    minio: MinioConfig
    assemblyai: AssemblyAIConfig
    gemini: GeminiConfig
    server: ServerConfig = ServerConfig()


class ClientConfig(BaseModel, frozen=True):
    """Settings shared by the upload and completion clients."""

    api_base_url: str = "http://localhost:3333"
    reset_delay_seconds: float = 7.0
    # None disables the timeout; provider calls behind the API can take minutes.
    timeout_seconds: float | None = None


def load_config() -> AppConfig:
    """Loads the server configuration from environment variables."""
    return AppConfig(
        database=DatabaseConfig(
            host=os.getenv("POSTGRES_HOST", "postgres"),
            port=os.getenv("POSTGRES_PORT", "5432"),
            user=os.getenv("POSTGRES_USER", ""),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            database=os.getenv("POSTGRES_DB", "upload_ai"),
            url_override=os.getenv("DATABASE_URL") or None,
        ),
        minio=MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
            bucket_name=os.getenv("MINIO_BUCKET", "videos"),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
            language_code=os.getenv("ASSEMBLYAI_LANGUAGE_CODE", "pt"),
        ),
        gemini=GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model_name=os.getenv("GEMINI_MODEL", "gemini-2.5-flash-lite"),
        ),
        server=ServerConfig(
            port=int(os.getenv("UPLOAD_AI_PORT", "3333")),
            max_upload_bytes=int(
                os.getenv("UPLOAD_AI_MAX_UPLOAD_BYTES", str(25 * 1024 * 1024))
            ),
        ),
    )


def load_client_config() -> ClientConfig:
    """Loads the client configuration from environment variables."""
    return ClientConfig(
        api_base_url=os.getenv("UPLOAD_AI_API_URL", "http://localhost:3333"),
    )
