TRANSCRIPTION_PLACEHOLDER = "{transcription}"


def render_prompt(template: str, transcription: str) -> str:
    """Replaces every transcription placeholder, leaving all other text as is."""
    return template.replace(TRANSCRIPTION_PLACEHOLDER, transcription)
