"""Unit tests for input validation."""

import pytest

from kubesecret.exceptions import ConfigurationError
from kubesecret.validation import validate_fragment, validate_output_format, validate_timeout


def test_fragment_trimmed():
    assert validate_fragment("  my-apache ") == "my-apache"


@pytest.mark.parametrize("fragment", ["", "   ", None])
def test_fragment_missing(fragment):
    with pytest.raises(ConfigurationError, match="Missing main argument"):
        validate_fragment(fragment)


@pytest.mark.parametrize("fmt,expected", [("env", "env"), ("JSON", "json"), ("yml", "yaml"), (" yaml ", "yaml")])
def test_output_format(fmt, expected):
    assert validate_output_format(fmt) == expected


def test_output_format_unknown():
    with pytest.raises(ConfigurationError):
        validate_output_format("toml")


def test_timeout():
    assert validate_timeout(None) is None
    assert validate_timeout(5) == 5.0


@pytest.mark.parametrize("timeout", [0, -1])
def test_timeout_invalid(timeout):
    with pytest.raises(ConfigurationError):
        validate_timeout(timeout)


@pytest.mark.parametrize("timeout", [float("nan"), float("inf"), float("-inf")])
def test_timeout_not_finite(timeout):
    with pytest.raises(ConfigurationError, match="finite"):
        validate_timeout(timeout)
