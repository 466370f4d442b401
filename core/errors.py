"""Exception hierarchy for the LuAI assistant."""


class LuAIError(Exception):
    """Base class for all LuAI errors."""


class ConfigError(LuAIError):
    """Required configuration is missing or invalid."""


class NetworkError(LuAIError):
    """A page could not be fetched (transport error, timeout or bad status)."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Failed to fetch {url}: {message}")


class ParseError(LuAIError):
    """A byte buffer could not be parsed as a PDF."""

    def __init__(self, source_label: str, message: str):
        self.source_label = source_label
        super().__init__(f"Failed to parse PDF {source_label}: {message}")


class UpstreamError(LuAIError):
    """The language model call failed."""


class PortalError(LuAIError):
    """Browser automation against the task portal failed."""
