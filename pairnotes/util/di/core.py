"""Configuration providers (not mockable)."""

import logfire
from dishka import Scope, provide

from pairnotes.config import AuthSettings, ReportSettings, Settings
from pairnotes.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Loads ``Settings`` once per container and exposes the sections that
    services depend on directly, so they never see unrelated configuration.
    """

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        settings = Settings()
        logfire.info(
            "Settings loaded",
            environment=settings.environment,
            report_timezone=settings.report.timezone,
            report_override=settings.report.period_override is not None,
            auto_generate=settings.report.auto_generate,
        )
        return settings

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_report_settings(self, settings: Settings) -> ReportSettings:
        return settings.report
