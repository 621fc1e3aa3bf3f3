"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod


class TranscriptionService(ABC):
    """Abstract base class for speech-to-text backends."""

    @abstractmethod
    def transcribe(self, audio_data: bytes, prompt: str | None = None) -> str:
        """
        Transcribes audio data into plain text.

        Args:
            audio_data: Raw audio file bytes.
            prompt: Optional comma-separated keywords used to bias recognition.

        Returns:
            The transcription text; empty for a silent recording.

        Raises:
            TranscriptionError: If transcription fails.
        """
