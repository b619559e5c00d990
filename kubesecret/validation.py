"""
Input validation and sanitization for Kubesecret.

This module provides validation functions for user inputs and configuration
values in the Kubesecret application.

Key Functions:
- validate_fragment: Validates the secret name fragment
- validate_output_format: Validates and normalizes the output format name
- validate_timeout: Validates the API request timeout

All validation functions raise ConfigurationError with a descriptive message
when validation fails.

Example:
    ```python
    try:
        fragment = validate_fragment("my-apache")
        fmt = validate_output_format("yml")  # "yaml"
    except ConfigurationError as e:
        print(f"Validation failed: {e}")
    ```
"""

import math
from typing import Optional

from .constants import OUTPUT_FORMAT_ALIASES, OUTPUT_FORMATS
from .exceptions import ConfigurationError


def validate_fragment(fragment: str) -> str:
    """
    Validate the secret name fragment given on the command line.

    The fragment is matched as a literal substring of secret names, so it
    only has to be non-blank. Surrounding whitespace is removed.

    Args:
        fragment: Secret name or part of it

    Returns:
        str: The trimmed fragment

    Raises:
        ConfigurationError: If the fragment is empty or blank
    """
    if not fragment or not fragment.strip():
        raise ConfigurationError("Missing main argument")
    return fragment.strip()


def validate_output_format(fmt: str) -> str:
    """
    Validate an output format name and resolve its aliases.

    Args:
        fmt: Output format name (case-insensitive), e.g. "env", "yaml", "yml", "json"

    Returns:
        str: The canonical format name

    Raises:
        ConfigurationError: If the format is not supported

    Example:
        ```python
        validate_output_format("YML")  # Returns "yaml"
        validate_output_format("xml")  # Raises ConfigurationError
        ```
    """
    name = (fmt or "").strip().lower()
    name = OUTPUT_FORMAT_ALIASES.get(name, name)
    if name not in OUTPUT_FORMATS:
        raise ConfigurationError(
            f"Unknown output format: {fmt!r} (expected one of {', '.join(OUTPUT_FORMATS)})"
        )
    return name


def validate_timeout(timeout: Optional[float]) -> Optional[float]:
    """Validate the API request timeout; None means no timeout."""
    if timeout is None:
        return None
    if not isinstance(timeout, (int, float)) or not math.isfinite(timeout) or timeout <= 0:
        raise ConfigurationError(f"Request timeout must be a finite positive number, got: {timeout}")
    return float(timeout)
