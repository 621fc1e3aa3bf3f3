"""Repository for video (audio asset) data access."""

from uuid import UUID

from sqlmodel import Session as DBSession

from upload_ai.db_models import Video
from upload_ai.exceptions import VideoNotFoundError
from upload_ai.logging import setup_logging

logger = setup_logging()


class VideoRepository:
    """
    Handles all database operations for uploaded videos.

    Encapsulates SQL queries and transaction management,
    keeping the handler layer free of database concerns.
    """

    def __init__(self, db_session: DBSession):
        self._db = db_session

    def create(
        self, name: str, path: str, content_type: str, size: int, video_id: UUID
    ) -> Video:
        """Inserts a new video row with no transcription and returns it."""
        video = Video(
            id=video_id,
            name=name,
            path=path,
            content_type=content_type,
            size=size,
        )
        self._db.add(video)
        self._db.commit()
        self._db.refresh(video)
        logger.info("Video stored", extra={"video_id": str(video.id), "size": size})
        return video

    def get_by_id(self, video_id: UUID) -> Video:
        """
        Retrieves a single video.

        Raises:
            VideoNotFoundError: If the video does not exist.
        """
        video = self._db.get(Video, video_id)
        if video is None:
            raise VideoNotFoundError(video_id)
        return video

    def save_transcription(self, video_id: UUID, transcription: str) -> Video:
        """
        Overwrites the transcription of an existing video.

        Raises:
            VideoNotFoundError: If the video does not exist.
        """
        video = self.get_by_id(video_id)
        video.transcription = transcription
        self._db.add(video)
        self._db.commit()
        self._db.refresh(video)
        logger.info(
            "Transcription saved",
            extra={"video_id": str(video_id), "length": len(transcription)},
        )
        return video
