"""Request handlers orchestrating storage, persistence and providers."""

from .completion_handler import CompletionHandler
from .video_handler import VideoHandler

__all__ = ["CompletionHandler", "VideoHandler"]
