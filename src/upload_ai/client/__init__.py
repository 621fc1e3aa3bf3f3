"""Client-side pipeline: conversion, upload, transcription and completion."""

from .completion_client import CompletionClient
from .prompt_client import PromptClient
from .status import STATUS_MESSAGES, UploadStateMachine, UploadStatus
from .upload_client import UploadClient

__all__ = [
    "CompletionClient",
    "PromptClient",
    "STATUS_MESSAGES",
    "UploadClient",
    "UploadStateMachine",
    "UploadStatus",
]
