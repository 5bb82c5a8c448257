"""HTTP summarizer client.

The summarizer is a single endpoint that takes ``{"input": <prompt>}`` and
answers ``{"summary": <text>}``.
"""

import asyncio

import httpx
import logfire

from pairnotes.adapter.error import ProviderError, ProviderHTTPError
from pairnotes.domain.error import ExternalServiceError
from pairnotes.domain.model import Note
from pairnotes.domain.service.summarizer import Summarizer, build_summary_prompt


class HttpSummarizer(Summarizer):
    """Summarizer reached over HTTP with a bounded timeout."""

    def __init__(self, url: str, timeout_seconds: float = 90.0) -> None:
        """Initialize summarizer client.

        Args:
            url: Summarize endpoint
            timeout_seconds: Request timeout
        """
        self.url = url
        self.timeout_seconds = timeout_seconds

    async def summarize(self, notes: list[Note]) -> str:
        """Summarize notes via the remote endpoint.

        Raises:
            ExternalServiceError: ``TIMEOUT: ...``, ``NETWORK: ...`` or
                ``HTTP <status> <reason>: <body>``
        """
        prompt = build_summary_prompt(notes).strip()
        with logfire.span(
            "summarizer.summarize", notes_count=len(notes), prompt_chars=len(prompt)
        ):
            try:
                data = await self._post({"input": prompt})
            except ProviderError as e:
                logfire.error("Summarizer call failed", error=str(e))
                raise ExternalServiceError(str(e)) from e
            summary = data.get("summary") if isinstance(data, dict) else None
            return (summary or "").strip()

    async def _post(self, payload: dict) -> object:
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.post(self.url, json=payload)
        except httpx.TimeoutException as e:
            raise ProviderError(f"TIMEOUT: {str(e) or 'Request timed out'}") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"NETWORK: {str(e) or type(e).__name__}") from e

        if not response.is_success:
            raise ProviderHTTPError(
                response.status_code, response.reason_phrase, response.text
            )
        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                f"HTTP {response.status_code}: response is not JSON"
            ) from e


class MockSummarizer(Summarizer):
    """Mock summarizer for testing.

    Records every call. Set ``summary`` to change the answer, ``error`` to
    make calls fail, or ``delay_seconds`` to simulate a slow endpoint.
    """

    def __init__(self, summary: str = "Mock summary") -> None:
        self.summary = summary
        self.error: Exception | None = None
        self.delay_seconds = 0.0
        self.calls: list[list[Note]] = []

    async def summarize(self, notes: list[Note]) -> str:
        self.calls.append(list(notes))
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error
        return self.summary
