from .prompt_repository import PromptRepository
from .video_repository import VideoRepository

__all__ = ["PromptRepository", "VideoRepository"]
