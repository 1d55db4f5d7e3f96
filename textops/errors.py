from __future__ import annotations


class TextOpsError(Exception):
    """Base class for every error raised by textops."""


class InvalidInputError(TextOpsError, ValueError):
    """Input text is not a string, or is empty where a non-empty string is required."""


class ConfigurationError(TextOpsError, ValueError):
    """Required per-operation configuration is missing or malformed."""


class DuplicateOperationError(TextOpsError, ValueError):
    """A custom operation id collides with a built-in or registered id."""


class UnknownOperationError(TextOpsError, LookupError):
    """An operation id is unknown to the session."""


class InvalidArgumentError(TextOpsError, ValueError):
    """Malformed arguments to a session API call."""
