"""Custom exceptions for upload-ai."""

from uuid import UUID


class InputValidationError(Exception):
    """Raised when request input is missing or malformed."""


class MissingUploadError(InputValidationError):
    """Raised when an upload request carries no file or an empty file."""

    def __init__(self, reason: str = "Missing file input"):
        self.reason = reason
        super().__init__(reason)


class UploadTooLargeError(InputValidationError):
    """Raised when an uploaded file exceeds the configured size limit."""

    def __init__(self, size: int, max_size: int):
        self.size = size
        self.max_size = max_size
        super().__init__(f"File of {size} bytes exceeds the {max_size} bytes limit")


class NotFoundError(Exception):
    """Raised when a referenced entity does not exist."""


class VideoNotFoundError(NotFoundError):
    """Raised when a requested video does not exist."""

    def __init__(self, video_id: UUID):
        self.video_id = video_id
        super().__init__(f"Video {video_id} not found")


class TranscriptionNotFoundError(NotFoundError):
    """Raised when a video exists but has not been transcribed yet."""

    def __init__(self, video_id: UUID):
        self.video_id = video_id
        super().__init__(f"Video {video_id} has no transcription")


class UpstreamError(Exception):
    """Raised when a third-party provider call fails."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class TranscriptionError(UpstreamError):
    """Raised when speech-to-text transcription fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        super().__init__(f"Failed to transcribe audio file '{object_name}'", cause)


class CompletionError(UpstreamError):
    """Raised when the LLM completion call fails."""


class TranscodeError(Exception):
    """Raised when converting a video to audio fails."""

    def __init__(self, reason: str, cause: Exception | None = None):
        self.reason = reason
        self.cause = cause
        super().__init__(f"Failed to convert video to audio: {reason}")


class StorageUploadError(Exception):
    """Raised when uploading a file to storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to upload '{object_name}' to storage")


class StorageDownloadError(Exception):
    """Raised when downloading a file from storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to download '{object_name}' from storage")


class InvalidTransitionError(Exception):
    """Raised when the upload state machine is asked for a forbidden transition."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move from '{current}' to '{target}'")


class CompletionInProgressError(Exception):
    """Raised when a completion is requested while another one is streaming."""

    def __init__(self):
        super().__init__("A completion is already streaming")
