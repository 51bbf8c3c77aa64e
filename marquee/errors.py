class MarqueeError(Exception):
    """Base class for failures that end one refresh cycle."""


class ConfigError(MarqueeError):
    """No upstream feed source is configured."""


class UpstreamError(MarqueeError):
    """
    Fetching the feed failed or the upstream answered with a non-success status.
    `status_code` is what the proxy relays to its own caller.
    """

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class MalformedFieldWarning(UserWarning):
    """A single event field could not be parsed and fell back to a default."""
