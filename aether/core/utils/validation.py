"""
Validation utilities for core domain models.

Provides consistent validation across the application.
"""

from typing import Any

from aether.core.constants import MAX_SYMBOL_LENGTH
from aether.core.exceptions.portfolio import ValidationError
from aether.core.types.financial import is_finite_number


def validate_symbol(symbol: Any, param_name: str = "symbol") -> str:
    """Validate and normalize a ticker symbol.

    Args:
        symbol: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The stripped, upper-cased symbol

    Raises:
        ValidationError: If symbol is not a non-empty string
    """
    if not isinstance(symbol, str):
        raise ValidationError(f"{param_name} must be a string, got {type(symbol).__name__}")
    normalized = symbol.strip().upper()
    if not normalized:
        raise ValidationError(f"{param_name} must not be empty")
    if len(normalized) > MAX_SYMBOL_LENGTH:
        raise ValidationError(
            f"{param_name} must be at most {MAX_SYMBOL_LENGTH} characters, got {normalized!r}"
        )
    return normalized


def validate_finite(value: Any, param_name: str) -> float:
    """Validate that a value is a finite number.

    Raises:
        ValidationError: If value is not numeric, NaN or infinite
    """
    if not is_finite_number(value):
        raise ValidationError(f"{param_name} must be a finite number, got {value!r}")
    return float(value)


def validate_positive(value: Any, param_name: str) -> float:
    """Validate that a numeric value is finite and positive.

    Args:
        value: Value to validate
        param_name: Parameter name for error messages

    Returns:
        The validated value as float

    Raises:
        ValidationError: If value is not positive
    """
    number = validate_finite(value, param_name)
    if number <= 0:
        raise ValidationError(f"{param_name} must be positive, got {value}")
    return number


def validate_non_zero(value: Any, param_name: str) -> float:
    """Validate that a numeric value is finite and non-zero.

    Raises:
        ValidationError: If value is zero
    """
    number = validate_finite(value, param_name)
    if number == 0:
        raise ValidationError(f"{param_name} must be non-zero, got {value}")
    return number


def validate_non_negative(value: Any, param_name: str) -> float:
    """Validate that a numeric value is finite and not negative.

    Raises:
        ValidationError: If value is negative
    """
    number = validate_finite(value, param_name)
    if number < 0:
        raise ValidationError(f"{param_name} must be non-negative, got {value}")
    return number


def validate_timestamp(value: Any, param_name: str = "timestamp") -> int:
    """Validate a millisecond epoch timestamp.

    Raises:
        ValidationError: If value is not a finite, non-negative number
    """
    number = validate_non_negative(value, param_name)
    return int(number)
