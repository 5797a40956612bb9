"""
Validation utilities for API endpoints and service functions.

This module provides validation functions for common input validation tasks.
"""

from typing import Any, Optional


def validate_string(value: Any, param_name: str = "parameter",
                   min_length: Optional[int] = None,
                   max_length: Optional[int] = None,
                   allow_empty: bool = False) -> str:
    """
    Validate that a value is a string with optional length constraints.

    Args:
        value: Value to validate
        param_name: Name of the parameter (for error messages)
        min_length: Minimum string length
        max_length: Maximum string length
        allow_empty: Whether empty strings are allowed

    Returns:
        Validated string, stripped of surrounding whitespace

    Raises:
        ValueError: If validation fails
    """
    if value is None:
        if allow_empty:
            return ""
        raise ValueError(f"{param_name} is required")

    if not isinstance(value, str):
        raise ValueError(f"{param_name} must be a string")

    value = value.strip()

    if not allow_empty and len(value) == 0:
        raise ValueError(f"{param_name} cannot be empty")

    if min_length is not None and len(value) < min_length:
        raise ValueError(f"{param_name} must be at least {min_length} characters")

    if max_length is not None and len(value) > max_length:
        raise ValueError(f"{param_name} must be at most {max_length} characters")

    return value


def validate_integer(value: Any, param_name: str = "parameter",
                    min_value: Optional[int] = None,
                    max_value: Optional[int] = None) -> int:
    """
    Validate that a value is an integer within optional bounds.

    Args:
        value: Value to validate
        param_name: Name of the parameter (for error messages)
        min_value: Minimum allowed value
        max_value: Maximum allowed value

    Returns:
        Validated integer

    Raises:
        ValueError: If validation fails
    """
    if value is None:
        raise ValueError(f"{param_name} is required")

    try:
        result = int(value)
    except (ValueError, TypeError) as e:
        raise ValueError(f"{param_name} must be an integer") from e

    if min_value is not None and result < min_value:
        raise ValueError(f"{param_name} must be at least {min_value}")

    if max_value is not None and result > max_value:
        raise ValueError(f"{param_name} must be at most {max_value}")

    return result
