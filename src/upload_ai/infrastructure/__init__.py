"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .gemini_completion import GeminiCompletionService
from .minio_storage import MinioStorageClient

__all__ = ["AssemblyAITranscriber", "GeminiCompletionService", "MinioStorageClient"]
