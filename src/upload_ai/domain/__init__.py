"""Domain layer containing business logic and models."""

from .audio_converter import AudioConverter
from .models import CompletionRequest, ConvertedAudio, TranscriptionRequest
from .prompt_renderer import TRANSCRIPTION_PLACEHOLDER, render_prompt

__all__ = [
    "AudioConverter",
    "CompletionRequest",
    "ConvertedAudio",
    "TranscriptionRequest",
    "TRANSCRIPTION_PLACEHOLDER",
    "render_prompt",
]
