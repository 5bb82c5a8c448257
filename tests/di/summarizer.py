"""Mock summarizer providers for testing."""

from dishka import Scope, provide

from pairnotes.adapter.summarizer import MockSummarizer
from pairnotes.domain.service import Summarizer
from pairnotes.util.di.infrastructure.summarizer import SummarizerProvider


class MockSummarizerProvider(SummarizerProvider):
    """Mock summarizer provider. Tests reach the mock via ``get(Summarizer)``."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_summarizer(self) -> Summarizer:
        return MockSummarizer()
