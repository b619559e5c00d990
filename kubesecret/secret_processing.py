"""
Secret data processing and transformation utilities.

This module provides functions for turning Kubernetes secret objects into
the records used by Kubesecret and for projecting their data into the sorted,
decoded entries handed to the renderers.

Key Functions:
- decode_data: Base64-decode the `data` mapping of a Kubernetes secret
- secret_to_record: Convert a Kubernetes secret object to a SecretRecord
- project: Filter data keys by substring, decode values and sort by key

Example:
    ```python
    record = secret_to_record(k8s_secret_object)
    for entry in project(record.data, "pass"):
        print(f"{entry.key}={entry.value}")
    ```
"""

import base64
import binascii
import sys
from typing import Any, Dict, List, Mapping, Optional

from .constants import NO_DATA_KEY_MESSAGE
from .exceptions import SecretDecodeError
from .models import SecretEntry, SecretRecord


def decode_data(name: str, data: Optional[Mapping[str, str]]) -> Dict[str, bytes]:
    """
    Base64-decode the data of a Kubernetes secret.

    The Kubernetes Python client returns secret values exactly as the API
    serves them, base64 encoded. Empty or missing data yields an empty dict.

    Args:
        name: Secret name, used in error messages
        data: Mapping of data key to base64 string (may be None)

    Returns:
        Dict[str, bytes]: Mapping of data key to raw bytes

    Raises:
        SecretDecodeError: If a value is not valid base64
    """
    decoded = {}
    for key, value in (data or {}).items():
        try:
            decoded[key] = base64.b64decode(value or "", validate=True)
        except (binascii.Error, ValueError) as e:
            raise SecretDecodeError(f"Secret {name}: key {key} is not valid base64: {e}") from e
    return decoded


def secret_to_record(secret: Any) -> SecretRecord:
    """Convert a Kubernetes `V1Secret` object to a SecretRecord."""
    meta = secret.metadata
    name = meta.name if meta else ""
    return SecretRecord(
        name=name or "",
        type=secret.type or "",
        data=decode_data(name, secret.data),
        namespace=meta.namespace if meta else None,
    )


def project(data: Mapping[str, bytes], key_filter: str = "") -> List[SecretEntry]:
    """
    Filter, decode and sort the data of a secret.

    A key is kept when `key_filter` is empty or appears in the key, ignoring
    case. Values are decoded as UTF-8 with undecodable bytes replaced, and the
    entries are sorted by key. When a non-empty filter matches nothing, an
    advisory is written to stderr and an empty list is returned.

    Args:
        data: Mapping of data key to raw value bytes
        key_filter: Case-insensitive substring to look for in keys

    Returns:
        List[SecretEntry]: Entries sorted by key ascending

    Example:
        ```python
        entries = project({"DB_PASSWORD": b"pw", "DB_USER": b"admin"}, "pass")
        # [SecretEntry(key='DB_PASSWORD', value='pw')]
        ```
    """
    needle = key_filter.lower()
    entries = [
        SecretEntry(key=key, value=value.decode("utf-8", "replace"))
        for key, value in data.items()
        if not needle or needle in key.lower()
    ]
    if key_filter and not entries:
        print(NO_DATA_KEY_MESSAGE.format(key_filter=key_filter), file=sys.stderr)
    entries.sort(key=lambda entry: entry.key)
    return entries
