"""Abstract interface for streaming LLM completions."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator


class CompletionService(ABC):
    """Abstract base class for LLM backends that stream their output."""

    @abstractmethod
    async def open_stream(self, prompt: str, temperature: float) -> AsyncIterator[str]:
        """
        Starts a completion and returns its text chunks as they are produced.

        The provider request is sent before this coroutine returns, so a
        rejected request fails here rather than halfway through the stream.

        Args:
            prompt: The fully rendered prompt.
            temperature: Sampling temperature in [0.0, 1.0].

        Returns:
            An async iterator of text chunks, finite once the provider closes it.

        Raises:
            CompletionError: If the provider call fails.
        """
