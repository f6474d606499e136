"""Custom exception hierarchy for stock-viewer."""

from typing import Any


class StockViewerError(Exception):
    """Base exception for all stock-viewer errors.

    All exceptions carry an optional `context` dict for structured error
    metadata that can be logged or serialized without parsing the message.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class ConfigError(StockViewerError):
    """Invalid or missing configuration.

    Raised by load_config() during startup. Should be treated as fatal.

    Context keys:
        field: str: the config field that failed validation
        value: Any: the invalid value (redacted for secrets)
    """


class CatalogLoadError(StockViewerError):
    """The ticker catalog dataset could not be read.

    Policy: the caller decides whether to continue with an empty catalog
    or abort startup (see CatalogConfig.required).

    Context keys:
        path: str: the dataset path
        reason: str: why loading failed
    """


class InvalidRequestError(StockViewerError):
    """Missing, blank or malformed request parameters.

    Policy: report as HTTP 400. Never retried, never logged as a fault.

    Context keys:
        field: str: the offending parameter
        value: Any: the rejected value
    """


class UpstreamError(StockViewerError):
    """Base for failures talking to or interpreting the upstream API.

    Context keys:
        symbol: str: the ticker being fetched
    """


class UpstreamTransportError(UpstreamError):
    """Upstream returned a non-success status, an empty body, or no response.

    Policy: surface the upstream status code where available, otherwise 500.
    Not retried.

    Context keys:
        status_code: int | None: HTTP status returned by the upstream
    """

    @property
    def status_code(self) -> int:
        return self.context.get("status_code") or 500


class NormalizeError(UpstreamError):
    """The upstream payload could not be turned into a price series."""


class MalformedPayloadError(NormalizeError):
    """Upstream body is not a JSON object."""


class UnexpectedShapeError(NormalizeError):
    """The expected time-series container is missing from the payload.

    Signals upstream contract drift. Logged at error severity.

    Context keys:
        expected_key: str: the container key that was looked up
    """


class UpstreamDomainError(NormalizeError):
    """Upstream reported an explicit error (bad symbol, bad parameters).

    The message is the upstream's own text and is passed through to the
    caller as a 400.
    """


class RateLimitError(NormalizeError):
    """Upstream throttling notice.

    Policy: report as HTTP 429 so the caller can back off.

    Context keys:
        note: str: the upstream notice text
    """
