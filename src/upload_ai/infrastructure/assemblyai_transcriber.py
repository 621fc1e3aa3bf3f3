"""AssemblyAI implementation of the TranscriptionService interface."""

import tempfile

import assemblyai as aai

from upload_ai.exceptions import TranscriptionError
from upload_ai.logging import setup_logging

from .interfaces import TranscriptionService

logger = setup_logging()


def parse_keywords(prompt: str | None) -> list[str]:
    """Splits a comma-separated keyword hint into boost terms."""
    if not prompt:
        return []
    return [term.strip() for term in prompt.split(",") if term.strip()]


class AssemblyAITranscriber(TranscriptionService):
    """Handles audio transcription using AssemblyAI."""

    def __init__(self, transcriber: aai.Transcriber, language_code: str = "pt"):
        self._transcriber = transcriber
        self._language_code = language_code

    def transcribe(self, audio_data: bytes, prompt: str | None = None) -> str:
        """
        Transcribes audio data using AssemblyAI.

        Writes audio to a temp file (required by AssemblyAI SDK) and boosts
        the keywords found in the prompt hint. A recording with no speech
        comes back as an empty string.
        """
        keywords = parse_keywords(prompt)
        config = aai.TranscriptionConfig(
            language_code=self._language_code,
            word_boost=keywords,
        )

        try:
            with tempfile.NamedTemporaryFile(suffix=".mp3", delete=True) as temp_file:
                temp_file.write(audio_data)
                temp_file.flush()

                transcript = self._transcriber.transcribe(temp_file.name, config=config)

                if transcript.status == aai.TranscriptStatus.error:
                    raise TranscriptionError(
                        temp_file.name,
                        Exception(transcript.error),
                    )

            text = transcript.text or ""
            logger.info(
                "Audio transcription successful",
                extra={"length": len(text), "keywords": len(keywords)},
            )
            return text

        except TranscriptionError:
            logger.exception("AssemblyAI returned an error status")
            raise
        except Exception as e:
            logger.exception("AssemblyAI transcription failed")
            raise TranscriptionError("audio_file", e) from e
