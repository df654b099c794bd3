"""Custom exceptions for Schema Studio."""


class StudioError(Exception):
    """Base exception for all Schema Studio errors."""

    pass


class CliNotFoundError(StudioError):
    """Raised when neither a ``jsonschema`` binary nor ``npx`` is on PATH.

    Set SCHEMASTUDIO_CLI to point at an installation outside PATH.
    """

    def __init__(self, message: str = "jsonschema CLI not found on PATH") -> None:
        super().__init__(message)


class LaunchError(StudioError):
    """Raised when the jsonschema process could not be spawned at all.

    During a refresh this is collected per analysis and shown as that
    analysis's error state; the other analyses still render.
    """

    pass


class AnalysisError(StudioError):
    """Raised when ``jsonschema version`` or an in-place ``fmt`` exits nonzero.

    Lint, format-check and metaschema never raise this: their exit codes
    are part of the result.

    Attributes:
        stderr: The CLI's error output, empty when it printed nothing.
    """

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr
