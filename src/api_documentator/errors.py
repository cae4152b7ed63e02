"""Exceptions raised by api-documentator.

Only configuration and output problems are surfaced as exceptions.
Per-route extraction failures are converted to "no information" where
they happen.
"""


class DocumentatorError(Exception):
    """Base class for all api-documentator errors."""


class ConfigError(DocumentatorError):
    """Configuration is missing, malformed or inconsistent."""


class UnknownFormatError(ConfigError):
    """Requested response format is not registered."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(f"Unknown format: {name}. Available: {', '.join(available)}")


class OutputError(DocumentatorError):
    """The document could not be serialized or written."""
