"""
Error types raised by the Leto reader core.

``ReaderError`` subclasses are recoverable and meant to be shown to the user.
``PreconditionError`` marks a programming error and is deliberately kept
outside that hierarchy.
"""


class ReaderError(Exception):
    """Base class for user-presentable errors."""


class MalformedInputError(ReaderError):
    """Serialized payload could not be parsed as a structured object."""


class MissingFieldError(ReaderError):
    """A required field is absent from a serialized payload."""

    def __init__(self, field: str):
        super().__init__(f"{field} is missing but required")
        self.field = field


class ScrapingError(ReaderError):
    """Website extraction failed or was requested with an unknown method."""


class FetchError(ScrapingError):
    """Network failure, timeout or non-success HTTP status."""


class ParseError(ScrapingError):
    """The fetched markup could not be parsed at all."""


class NoContentFoundError(ScrapingError):
    """No candidate node on the page contains any text."""


class PathNotFoundError(ScrapingError):
    """A path-select extraction matched zero nodes."""

    def __init__(self, path: str, message: str = ""):
        super().__init__(message or f"No element matches path {path!r}")
        self.path = path


class InvalidPathError(PathNotFoundError):
    """The path expression itself is not valid."""


class PreconditionError(RuntimeError):
    """The orchestrator was used in a lifecycle stage that does not allow it."""
