"""Gradio front end wiring the upload and completion clients together."""

import asyncio
import logging

import gradio as gr

from upload_ai.client import (
    STATUS_MESSAGES,
    CompletionClient,
    PromptClient,
    UploadClient,
    UploadStatus,
)
from upload_ai.config import ClientConfig, load_client_config
from upload_ai.domain import TRANSCRIPTION_PLACEHOLDER
from upload_ai.logging import setup_logging

logger = logging.getLogger(__name__)

STATUS_POLL_SECONDS = 0.1


def _upload_button(status: UploadStatus):
    return gr.update(
        value=STATUS_MESSAGES[status],
        interactive=status is UploadStatus.WAITING,
        variant="primary" if status is UploadStatus.SUCCESS else "secondary",
    )


class SessionClients:
    """Upload and completion clients owned by a single browser session."""

    def __init__(self, config: ClientConfig):
        self.upload = UploadClient(config)
        self.completion = CompletionClient(config)


def session_clients(clients: SessionClients | None, config: ClientConfig) -> SessionClients:
    """Returns the session's clients, creating them on its first event."""
    return clients if clients is not None else SessionClients(config)


def build_ui(config: ClientConfig) -> gr.Blocks:
    prompt_client = PromptClient(config)

    async def load_prompts():
        try:
            prompts = await prompt_client.list_prompts()
        except Exception:
            logger.exception("Could not load prompt templates")
            return gr.update(choices=[])
        return gr.update(choices=[(p.title, p.template) for p in prompts])

    async def upload_video(video_path, keywords, video_id, clients):
        clients = session_clients(clients, config)
        upload_client = clients.upload
        if not video_path:
            yield _upload_button(upload_client.status), video_id, clients
            return

        statuses: asyncio.Queue = asyncio.Queue()
        unsubscribe = upload_client.state.subscribe(statuses.put_nowait)
        task = asyncio.create_task(upload_client.submit_file(video_path, keywords))
        try:
            while not task.done() or not statuses.empty():
                try:
                    status = await asyncio.wait_for(
                        statuses.get(), timeout=STATUS_POLL_SECONDS
                    )
                except asyncio.TimeoutError:
                    continue
                yield _upload_button(status), video_id, clients
        finally:
            unsubscribe()

        try:
            video_id = str(task.result())
        except Exception:
            # Already logged by the client; the button shows the error state.
            await asyncio.sleep(config.reset_delay_seconds)
            upload_client.reset()
            yield _upload_button(upload_client.status), video_id, clients
            return

        yield _upload_button(upload_client.status), video_id, clients
        await asyncio.sleep(config.reset_delay_seconds)
        yield _upload_button(upload_client.status), video_id, clients

    async def run_completion(video_id, prompt, temperature, clients):
        if not video_id:
            raise gr.Error("Upload a video before running a prompt.")
        clients = session_clients(clients, config)
        completion_client = clients.completion
        yield "", gr.update(interactive=False), clients
        try:
            async for _ in completion_client.stream(video_id, prompt, temperature):
                yield completion_client.completion, gr.update(interactive=False), clients
        except Exception:
            logger.exception("Completion failed", extra={"video_id": video_id})
            yield completion_client.completion, gr.update(interactive=True), clients
            raise gr.Error("The completion failed.")
        yield completion_client.completion, gr.update(interactive=True), clients

    with gr.Blocks(title="upload.ai") as demo:
        video_id = gr.State(None)
        clients = gr.State(None)
        gr.Markdown("# upload.ai")

        with gr.Row():
            with gr.Column(scale=3):
                prompt = gr.Textbox(
                    label="Prompt",
                    placeholder="Write the prompt for the AI",
                    lines=12,
                )
                result = gr.Textbox(
                    label="Result",
                    placeholder="Text generated by the AI",
                    lines=12,
                    interactive=False,
                )
                gr.Markdown(
                    f"Use the `{TRANSCRIPTION_PLACEHOLDER}` variable in your prompt "
                    "to insert the transcription of the selected video."
                )

            with gr.Column(scale=1):
                video = gr.Video(label="Select a video", sources=["upload"])
                keywords = gr.Textbox(
                    label="Transcription prompt",
                    placeholder="Keywords mentioned in the video, separated by commas (,)",
                    lines=3,
                )
                upload_button = gr.Button(STATUS_MESSAGES[UploadStatus.WAITING])

                template = gr.Dropdown(label="Prompt template", choices=[])
                gr.Dropdown(
                    label="Model",
                    choices=["Server default"],
                    value="Server default",
                    interactive=False,
                )
                temperature = gr.Slider(
                    label="Temperature",
                    minimum=0.0,
                    maximum=1.0,
                    step=0.1,
                    value=0.5,
                    info="Higher values make the result more creative and more error prone.",
                )
                run_button = gr.Button("Run", variant="primary")

        demo.load(load_prompts, outputs=template)
        template.change(lambda value: value or "", inputs=template, outputs=prompt)
        upload_button.click(
            upload_video,
            inputs=[video, keywords, video_id, clients],
            outputs=[upload_button, video_id, clients],
        )
        run_button.click(
            run_completion,
            inputs=[video_id, prompt, temperature, clients],
            outputs=[result, run_button, clients],
        )

    return demo


def main():
    setup_logging()
    build_ui(load_client_config()).launch()


if __name__ == "__main__":
    main()
