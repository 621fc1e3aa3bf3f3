"""Infrastructure interface exports."""

from .completion_service import CompletionService
from .storage import StorageClient
from .transcription_service import TranscriptionService

__all__ = ["CompletionService", "StorageClient", "TranscriptionService"]
