"""Summarizer infrastructure providers."""

from dishka import Scope, provide

from pairnotes.adapter.summarizer import HttpSummarizer
from pairnotes.config import Settings
from pairnotes.domain.service import Summarizer
from pairnotes.util.di.base import ProviderBase


class SummarizerProvider(ProviderBase):
    """Summarizer component base."""

    __mock_component__ = "summarizer"


class ProdSummarizerProvider(SummarizerProvider):
    """Production summarizer provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_summarizer(self, settings: Settings) -> Summarizer:
        """Provide HTTP summarizer client.

        Raises:
            ValueError: If the summarizer URL is not configured
        """
        if not settings.summarizer.url:
            raise ValueError("Summarizer URL must be configured")
        return HttpSummarizer(
            url=settings.summarizer.url,
            timeout_seconds=settings.summarizer.timeout_seconds,
        )
