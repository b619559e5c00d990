"""Shared fixtures for kubesecret tests."""

import base64
from typing import Dict, List, Optional
from unittest.mock import MagicMock

import pytest
from kubernetes import client

from kubesecret.models import LookupOptions, SecretRecord


def make_records(names: List[str], secret_type: str = "") -> List[SecretRecord]:
    """Build SecretRecords from a list of secret names."""
    return [SecretRecord(name=name, type=secret_type) for name in names]


def make_v1_secret(
    name: str,
    data: Optional[Dict[str, bytes]] = None,
    secret_type: str = "Opaque",
    namespace: str = "default",
) -> client.V1Secret:
    """Build a V1Secret the way the API client returns it (base64 data)."""
    encoded = None
    if data is not None:
        encoded = {k: base64.b64encode(v).decode("ascii") for k, v in data.items()}
    return client.V1Secret(
        metadata=client.V1ObjectMeta(name=name, namespace=namespace),
        type=secret_type,
        data=encoded,
    )


@pytest.fixture
def core() -> MagicMock:
    """CoreV1Api stand-in; read raises 404 and list returns nothing by default."""
    api = MagicMock(spec=client.CoreV1Api)
    api.read_namespaced_secret.side_effect = client.ApiException(status=404, reason="Not Found")
    api.list_namespaced_secret.return_value = client.V1SecretList(items=[])
    return api


@pytest.fixture
def options() -> LookupOptions:
    return LookupOptions(fragment="my-apache", namespace="web")
