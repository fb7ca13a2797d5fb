"""Error taxonomy shared by every layer of the aggregator."""


class AggregatorError(Exception):
    """Base error. ``kind`` is the name reported to external callers."""

    kind = "AggregatorError"


class ConfigError(AggregatorError):
    """Invalid configuration value."""

    kind = "ConfigError"


class ValidationError(AggregatorError):
    """Caller-supplied parameters are invalid."""

    kind = "ValidationError"


class UpstreamError(AggregatorError):
    """Upstream was reachable but answered with an error or unexpected shape."""

    kind = "UpstreamError"

    def __init__(self, status: int | None, message: str):
        self.status = status
        self.message = message
        super().__init__(f"upstream error (status {status}): {message}")

    @property
    def retryable(self) -> bool:
        return self.status is not None and self.status >= 500


class UpstreamNotFoundError(UpstreamError):
    """Upstream reports that the contest or problem does not exist."""

    kind = "NotFound"


class MalformedUpstreamError(AggregatorError):
    """Upstream response lacks a field the schema requires."""

    kind = "MalformedUpstreamError"


class UpstreamTimeoutError(AggregatorError):
    """No upstream response within the deadline."""

    kind = "TimeoutError"

    def __init__(self, message: str = "upstream timeout"):
        super().__init__(message)
