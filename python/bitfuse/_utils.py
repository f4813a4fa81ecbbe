"""Internal utilities for bitfuse."""

import math
import re
from typing import Union

from bitfuse.exceptions import ValidationError

DEFAULT_TOKEN_SEPARATOR = re.compile(r" +")


def compile_separator(separator: Union[str, re.Pattern]) -> re.Pattern:
    """Compile a token separator, or validate an already compiled one.

    Args:
        separator: Either a regular expression string or a compiled pattern.

    Returns:
        The compiled pattern.

    Raises:
        ValidationError: If the expression does not compile, or if it can
            match the empty string (splitting on it would never terminate
            in a useful way).

    Example:
        >>> compile_separator(r"[ ,]+").split("a, b")
        ['a', 'b']
    """
    if isinstance(separator, str):
        try:
            separator = re.compile(separator)
        except re.error as exc:
            raise ValidationError(f"Invalid token_separator {separator!r}: {exc}") from exc
    elif not isinstance(separator, re.Pattern):
        raise ValidationError(
            f"token_separator must be str or compiled pattern, got {type(separator).__name__}"
        )

    if separator.fullmatch(""):
        raise ValidationError(f"token_separator {separator.pattern!r} matches the empty string")
    return separator


def check_number(name: str, value, minimum: float = 0.0, maximum: float = math.inf) -> None:
    """Reject non-numeric, NaN and out of range option values."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number, got {type(value).__name__}")
    if math.isnan(value) or not minimum <= value <= maximum:
        if maximum == math.inf:
            raise ValidationError(f"{name} must be >= {minimum}, got {value}")
        raise ValidationError(f"{name} must be between {minimum} and {maximum}, got {value}")


def check_int(name: str, value, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an int, got {type(value).__name__}")
    if value < minimum:
        raise ValidationError(f"{name} must be >= {minimum}, got {value}")


def check_bool(name: str, value) -> None:
    if not isinstance(value, bool):
        raise ValidationError(f"{name} must be a bool, got {type(value).__name__}")


__all__ = [
    "DEFAULT_TOKEN_SEPARATOR",
    "compile_separator",
    "check_number",
    "check_int",
    "check_bool",
]
