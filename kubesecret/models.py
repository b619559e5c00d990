"""
Data models for Kubesecret.

This module defines the data structures used throughout the Kubesecret
application. It provides type-safe representations of Kubernetes secrets,
their decoded entries and the options driving a lookup.

Key Models:
- SecretRecord: Read-only copy of a Kubernetes Secret with raw byte values
- SecretEntry: A single decoded key/value pair ready for rendering
- SecretMetadata: Name, type, entry count and byte size of a secret
- LookupOptions: Configuration of a single lookup, built from the CLI

All models use dataclasses for clean, type-safe data structures with proper
default values and field definitions.

Example:
    ```python
    secret = SecretRecord(
        name="my-apache-9",
        type="Opaque",
        data={"password": b"s3cr3t"},
    )
    meta = SecretMetadata.from_record(secret)
    ```
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from .constants import DEFAULT_OUTPUT_FORMAT


@dataclass(frozen=True)
class SecretRecord:
    """
    Read-only copy of a Kubernetes Secret.

    Holds what the resolver and renderers need from a `V1Secret`: its name,
    its type tag and its already base64-decoded data.

    Attributes:
        name: Secret name (unique within the namespace)
        type: Secret type (e.g., "Opaque", "kubernetes.io/tls"); empty when unset
        data: Mapping of data key to raw value bytes
        namespace: Namespace the secret was read from, when known

    Example:
        ```python
        secret = SecretRecord(name="db", type="Opaque", data={"user": b"admin"})
        print(secret.count, secret.size)  # 1 5
        ```
    """
    name: str
    type: str = ""
    data: Dict[str, bytes] = field(default_factory=dict)
    namespace: Optional[str] = None

    @property
    def count(self) -> int:
        """Number of data keys in the secret."""
        return len(self.data)

    @property
    def size(self) -> int:
        """Total byte length of all data values."""
        return sum(len(value) for value in self.data.values())


@dataclass(frozen=True)
class SecretEntry:
    """A decoded data entry of a secret."""
    key: str
    value: str


@dataclass(frozen=True)
class SecretMetadata:
    """
    Metadata block printed with `--metadata`.

    Attributes:
        name: Secret name
        type: Secret type
        count: Number of data keys in the secret (before key filtering)
        size: Total byte length of the secret values
    """
    name: str
    type: str
    count: int
    size: int

    @classmethod
    def from_record(cls, secret: SecretRecord) -> "SecretMetadata":
        return cls(name=secret.name, type=secret.type, count=secret.count, size=secret.size)

    def as_dict(self) -> Dict[str, object]:
        """Return the metadata as an ordered mapping of display field to value."""
        return {"Name": self.name, "Type": self.type, "Count": self.count, "Size": self.size}


@dataclass
class LookupOptions:
    """
    Configuration for a single secret lookup.

    Built by the CLI from the parsed arguments and passed down to the
    Kubernetes layer and the renderers.

    Attributes:
        fragment: Secret name or name fragment to search for
        key_filter: Case-insensitive substring applied to data keys ("" keeps all)
        namespace: Namespace to search (None resolves it from kubeconfig)
        type_filter: Exact secret type to require ("" accepts any type)
        label_selector: Label selector forwarded to the list call
        field_selector: Field selector forwarded to the list call
        output: Output format (env, yaml or json)
        color: Whether to colorize env and yaml output
        metadata: Whether to print the metadata block
        compact: Whether to print JSON on a single line
        kubeconfig: Path to kubeconfig (None uses the default loading rules)
        context: Kubeconfig context override
        request_timeout: Timeout in seconds for each API call (None waits forever)

    Example:
        ```python
        opts = LookupOptions(fragment="my-apache", namespace="web", output="json")
        ```
    """
    fragment: str
    key_filter: str = ""
    namespace: Optional[str] = None
    type_filter: str = ""
    label_selector: str = ""
    field_selector: str = ""
    output: str = DEFAULT_OUTPUT_FORMAT
    color: bool = False
    metadata: bool = False
    compact: bool = False
    kubeconfig: Optional[str] = None
    context: Optional[str] = None
    request_timeout: Optional[float] = None
