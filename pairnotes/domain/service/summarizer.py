"""Summarizer interface and prompt construction."""

from abc import ABC, abstractmethod

from pairnotes.domain.model import Note

# Lines this short carry no text after the "N) " prefix
MIN_PROMPT_LINE_CHARS = 4


def build_summary_prompt(notes: list[Note]) -> str:
    """Number each note's text and join them one per line.

    Numbering follows the input order; lines with no usable text are
    dropped after numbering.
    """
    lines = (f"{i}) {note.text.strip()}" for i, note in enumerate(notes, start=1))
    return "\n".join(line for line in lines if len(line) >= MIN_PROMPT_LINE_CHARS)


class Summarizer(ABC):
    """External summarizer (an LLM behind an HTTP endpoint)."""

    @abstractmethod
    async def summarize(self, notes: list[Note]) -> str:
        """Summarize a window's notes.

        Args:
            notes: Notes in the window, newest first

        Returns:
            Plain-text summary

        Raises:
            ExternalServiceError: On timeout, network or HTTP failure
        """
        pass
