import uuid

import pytest
from pydantic import ValidationError

from upload_ai.domain import CompletionRequest, ConvertedAudio, render_prompt


class TestRenderPrompt:
    def test_replaces_every_occurrence(self):
        template = "A {transcription} B {transcription}"

        assert render_prompt(template, "xyz") == "A xyz B xyz"

    def test_leaves_surrounding_text_untouched(self):
        template = "  {other} {transcription}\n'''{ transcription}'''  "

        assert render_prompt(template, "t") == "  {other} t\n'''{ transcription}'''  "

    def test_template_without_placeholder_is_unchanged(self):
        assert render_prompt("no variable here", "t") == "no variable here"

    def test_transcription_is_inserted_verbatim(self):
        assert render_prompt("{transcription}", "{transcription} $1 \\n") == (
            "{transcription} $1 \\n"
        )


class TestCompletionRequest:
    def test_reads_camel_case_video_id(self):
        video_id = uuid.uuid4()

        request = CompletionRequest.model_validate(
            {"videoId": str(video_id), "prompt": "p", "temperature": 1.0}
        )

        assert request.video_id == video_id

    @pytest.mark.parametrize("temperature", [0.0, 0.5, 1.0])
    def test_accepts_range(self, temperature):
        request = CompletionRequest(video_id=uuid.uuid4(), prompt="p", temperature=temperature)

        assert request.temperature == temperature

    @pytest.mark.parametrize("temperature", [-0.01, 1.01])
    def test_rejects_out_of_range(self, temperature):
        with pytest.raises(ValidationError):
            CompletionRequest(video_id=uuid.uuid4(), prompt="p", temperature=temperature)


class TestConvertedAudio:
    def test_defaults_to_mp3(self):
        audio = ConvertedAudio(data=b"ID3abc")

        assert audio.content_type == "audio/mpeg"
        assert audio.file_name == "audio.mp3"
        assert audio.size == 6
