"""
upload.ai: upload a video, transcribe its audio and run prompt templates
against the transcription.

- `upload_ai.main` exposes the REST API (prompts, videos, transcription, completion).
- `upload_ai.client` converts videos locally and drives the API.
- `upload_ai.ui` is the Gradio front end.
"""

__version__ = "0.1.0"
