"""Exception hierarchy for bitfuse."""


class BitfuseError(Exception):
    """Base exception for all bitfuse errors."""


class ValidationError(BitfuseError, ValueError):
    """Raised when option validation fails (invalid parameters, out of range values)."""


class ConfigurationError(ValidationError):
    """Raised when a searchable key is malformed or its weight is outside (0, 1]."""


__all__ = ["BitfuseError", "ValidationError", "ConfigurationError"]
