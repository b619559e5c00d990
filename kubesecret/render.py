"""
Output rendering for Kubesecret.

This module serializes the projected entries of a secret, optionally preceded
by its metadata, into the supported output formats.

Key Functions:
- render_env: `KEY=VALUE` lines, metadata as `METADATA_<FIELD>=value`
- render_yaml: `metadata:` and `values:` blocks of indented `key: value` lines
- render_json: `{"metadata": {...}, "values": {...}}`
- render: Dispatch on the output format name

Values are written verbatim; a value containing a newline breaks env and yaml
output. Colors use ANSI codes from colorama and are never applied to JSON.

Example:
    ```python
    entries = project(secret.data)
    print(render(entries, "yaml", metadata=SecretMetadata.from_record(secret)))
    ```
"""

import json
from typing import Callable, Dict, List, Optional, Sequence

from colorama import Fore, Style

from .constants import (
    JSON_INDENT, METADATA_ENV_PREFIX, OUTPUT_ENV, OUTPUT_JSON, OUTPUT_YAML,
    YAML_INDENT
)
from .models import SecretEntry, SecretMetadata
from .validation import validate_output_format


def _painter(color: bool, fore: str) -> Callable[[object], str]:
    if not color:
        return str
    return lambda text: f"{fore}{text}{Style.RESET_ALL}"


def render_env(
    entries: Sequence[SecretEntry],
    metadata: Optional[SecretMetadata] = None,
    color: bool = False,
) -> str:
    """Render entries as bash-like `KEY=VALUE` lines."""
    key_c = _painter(color, Fore.BLUE)
    value_c = _painter(color, Fore.GREEN)

    lines: List[str] = []
    if metadata is not None:
        for field_name, value in metadata.as_dict().items():
            env_key = METADATA_ENV_PREFIX + field_name.upper()
            lines.append(f"{key_c(env_key)}={value_c(value)}")
    for entry in entries:
        lines.append(f"{key_c(entry.key)}={value_c(entry.value)}")
    return "\n".join(lines)


def render_yaml(
    entries: Sequence[SecretEntry],
    metadata: Optional[SecretMetadata] = None,
    color: bool = False,
) -> str:
    """
    Render entries as a YAML-like listing.

    The output looks like YAML but values are not quoted or escaped, so it
    is meant for reading rather than for a YAML parser.

    Args:
        entries: Projected secret entries
        metadata: Optional metadata block printed first
        color: Whether to color titles and keys blue and values green

    Returns:
        str: The rendered text, without trailing newline
    """
    key_c = _painter(color, Fore.BLUE)
    value_c = _painter(color, Fore.GREEN)

    lines: List[str] = []
    if metadata is not None:
        lines.append(key_c("metadata:"))
        for field_name, value in metadata.as_dict().items():
            lines.append(f"{YAML_INDENT}{key_c(field_name)}: {value_c(value)}")
    lines.append(key_c("values:"))
    for entry in entries:
        lines.append(f"{YAML_INDENT}{key_c(entry.key)}: {value_c(entry.value)}")
    return "\n".join(lines)


def render_json(
    entries: Sequence[SecretEntry],
    metadata: Optional[SecretMetadata] = None,
    compact: bool = False,
) -> str:
    """Render entries as a JSON document, pretty-printed unless compact."""
    doc: Dict[str, object] = {}
    if metadata is not None:
        doc["metadata"] = metadata.as_dict()
    doc["values"] = {entry.key: entry.value for entry in entries}
    if compact:
        return json.dumps(doc, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(doc, indent=JSON_INDENT, ensure_ascii=False)


def render(
    entries: Sequence[SecretEntry],
    fmt: str,
    metadata: Optional[SecretMetadata] = None,
    color: bool = False,
    compact: bool = False,
) -> str:
    """
    Render entries in the requested output format.

    Args:
        entries: Projected secret entries
        fmt: Output format name (env, yaml, yml or json)
        metadata: Optional metadata block
        color: Colorize env and yaml output
        compact: Single-line JSON output

    Returns:
        str: The rendered text, without trailing newline

    Raises:
        ConfigurationError: If the output format is unknown
    """
    fmt = validate_output_format(fmt)
    if fmt == OUTPUT_ENV:
        return render_env(entries, metadata, color)
    if fmt == OUTPUT_YAML:
        return render_yaml(entries, metadata, color)
    if fmt == OUTPUT_JSON:
        return render_json(entries, metadata, compact)
    raise AssertionError(f"unhandled output format {fmt}")  # pragma: no cover
