"""Video to compressed audio conversion."""

import os
import tempfile
from collections.abc import Callable

import moviepy
from proglog import ProgressBarLogger

from upload_ai.exceptions import TranscodeError
from upload_ai.logging import setup_logging

from .models import ConvertedAudio

logger = setup_logging()

AUDIO_CODEC = "libmp3lame"
AUDIO_BITRATE = "20k"

ProgressCallback = Callable[[int], None]


class ConversionProgressLogger(ProgressBarLogger):
    """Turns moviepy progress bar updates into whole percentages."""

    def __init__(self, on_progress: ProgressCallback):
        super().__init__()
        self._on_progress = on_progress
        self._last = -1

    def bars_callback(self, bar, attr, value, old_value=None):
        if attr != "index":
            return
        total = self.bars.get(bar, {}).get("total")
        if not total:
            return
        percent = min(100, round(value * 100 / total))
        if percent != self._last:
            self._last = percent
            self._on_progress(percent)

    def finish(self):
        if self._last != 100:
            self._last = 100
            self._on_progress(100)


class AudioConverter:
    """Extracts the audio track of a video as a low bitrate MP3."""

    def convert(
        self, video_data: bytes, on_progress: ProgressCallback | None = None
    ) -> ConvertedAudio:
        """
        Converts raw video bytes to MP3 audio.

        Args:
            video_data: Raw video file bytes.
            on_progress: Optional callback receiving percentages from 0 to 100.

        Returns:
            ConvertedAudio holding the MP3 bytes.

        Raises:
            TranscodeError: If the video cannot be decoded or has no audio.
        """
        logger.info("Convert started", extra={"size": len(video_data)})

        try:
            audio_bytes = self._convert_bytes(video_data, on_progress)
        except TranscodeError:
            logger.exception("Audio conversion failed")
            raise
        except Exception as e:
            logger.exception("Audio conversion failed")
            raise TranscodeError(str(e), e) from e

        if not audio_bytes:
            raise TranscodeError("codec produced no output")

        logger.info("Convert finished", extra={"size": len(audio_bytes)})
        return ConvertedAudio(data=audio_bytes)

    def _convert_bytes(
        self, video_data: bytes, on_progress: ProgressCallback | None
    ) -> bytes:
        """Runs moviepy on temporary input and output files."""
        progress_logger = (
            ConversionProgressLogger(on_progress) if on_progress else None
        )

        with tempfile.TemporaryDirectory() as temp_dir:
            input_path = os.path.join(temp_dir, "input.mp4")
            output_path = os.path.join(temp_dir, "output.mp3")

            with open(input_path, "wb") as f:
                f.write(video_data)

            video = moviepy.VideoFileClip(input_path)
            try:
                if video.audio is None:
                    raise TranscodeError("video has no audio track")
                video.audio.write_audiofile(
                    output_path,
                    codec=AUDIO_CODEC,
                    bitrate=AUDIO_BITRATE,
                    logger=progress_logger,
                )
            finally:
                if video.audio is not None:
                    video.audio.close()
                video.close()

            if progress_logger is not None:
                progress_logger.finish()

            with open(output_path, "rb") as f:
                return f.read()
