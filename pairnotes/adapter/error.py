"""Adapter layer errors.

Raised inside adapters and translated to domain errors at the adapter's
public boundary.
"""

MAX_ERROR_BODY_CHARS = 500


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ProviderError(AdapterError):
    """External provider could not be reached or gave an unusable answer."""

    pass


class ProviderHTTPError(ProviderError):
    """External provider answered with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        reason: str,
        body: str,
        provider_code: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body[:MAX_ERROR_BODY_CHARS]
        # Machine-readable code from the provider's error payload, if any
        self.provider_code = provider_code
        message = f"HTTP {status_code} {reason}".rstrip()
        if self.body:
            message = f"{message}: {self.body}"
        super().__init__(message)
