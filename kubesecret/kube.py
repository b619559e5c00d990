"""
Kubernetes client and API interactions for Kubesecret.

This module provides the interface between Kubesecret and the Kubernetes API.
It handles client configuration, namespace discovery, secret retrieval and the
lookup flow that ties the API calls to the resolver.

Key Components:
- KubeContext: Container for the Kubernetes API client
- load_kube: Initialize the Kubernetes client with config loading
- resolve_namespace: Find the namespace of the current (or given) context
- fetch_secret: Retrieve a single secret by exact name
- list_secrets: Retrieve all secrets of a namespace matching selectors
- locate_secrets: Exact lookup first, then list and resolve

The module supports both external kubeconfig files and in-cluster
configuration, with automatic fallback when no override is given. All calls
are synchronous; `timeout` is forwarded to the client as `_request_timeout`.

Example:
    ```python
    kube = load_kube(kubeconfig=None, context=None)
    namespace = resolve_namespace(None, None)
    secret = fetch_secret(kube.core, namespace, "my-apache-9")
    ```
"""

from __future__ import annotations
import logging
from typing import List, Optional

from kubernetes import client, config
from kubernetes.client import ApiException
from kubernetes.config import ConfigException

from .constants import DEFAULT_NAMESPACE, HTTP_NOT_FOUND, INCLUSTER_NAMESPACE_PATH
from .exceptions import ConfigurationError, KubernetesConnectionError, SecretQueryError
from .models import LookupOptions, SecretRecord
from .resolution import resolve_secrets
from .secret_processing import secret_to_record

log = logging.getLogger('kubesecret')


class KubeContext:
    """
    Container for Kubernetes API clients.

    Attributes:
        core: CoreV1Api client for secret operations
    """

    def __init__(self, core: client.CoreV1Api):
        self.core = core


def load_kube(kubeconfig: Optional[str], context: Optional[str]) -> KubeContext:
    """
    Load Kubernetes configuration and create the API client.

    Uses the given kubeconfig and context when provided. Without overrides the
    default kubeconfig is tried first and in-cluster configuration second.

    Args:
        kubeconfig: Path to kubeconfig file (optional, uses default if None)
        context: Kubernetes context name (optional, uses current context if None)

    Returns:
        KubeContext: Initialized context with the CoreV1 client

    Raises:
        KubernetesConnectionError: If no configuration can be loaded
    """
    try:
        if kubeconfig or context:
            config.load_kube_config(config_file=kubeconfig, context=context)
        else:
            try:
                config.load_kube_config()
            except ConfigException:
                log.debug("No usable kubeconfig, trying in-cluster configuration")
                config.load_incluster_config()
    except (ConfigException, OSError) as e:
        raise KubernetesConnectionError(f"Unable to load Kubernetes configuration: {e}") from e
    return KubeContext(client.CoreV1Api())


def _incluster_namespace() -> Optional[str]:
    try:
        with open(INCLUSTER_NAMESPACE_PATH, encoding='utf-8') as fh:
            return fh.read().strip() or None
    except OSError:
        return None


def resolve_namespace(kubeconfig: Optional[str], context: Optional[str]) -> str:
    """
    Return the namespace configured for the kubeconfig context in use.

    Falls back to the service account namespace when running in a pod without a
    kubeconfig, and to "default" when the context does not set a namespace.

    Args:
        kubeconfig: Path to kubeconfig file (optional)
        context: Context name (optional, the current context if None)

    Returns:
        str: Namespace name

    Raises:
        ConfigurationError: If the namespace cannot be determined
    """
    try:
        contexts, active = config.list_kube_config_contexts(config_file=kubeconfig)
    except (ConfigException, OSError) as e:
        if kubeconfig or context:
            raise ConfigurationError(f"Invalid namespace: {e}") from e
        namespace = _incluster_namespace()
        if namespace is None:
            raise ConfigurationError(f"Invalid namespace: {e}") from e
        log.debug("Using in-cluster namespace %s", namespace)
        return namespace

    if context:
        matching = [c for c in contexts or [] if c.get('name') == context]
        if not matching:
            raise ConfigurationError(f"Invalid namespace: context {context!r} not found in kubeconfig")
        active = matching[0]
    if not active:
        raise ConfigurationError("Invalid namespace: no current context in kubeconfig")
    namespace = (active.get('context') or {}).get('namespace') or DEFAULT_NAMESPACE
    log.debug("Using namespace %s from context %s", namespace, active.get('name'))
    return namespace


def fetch_secret(
    core: client.CoreV1Api,
    namespace: str,
    name: str,
    timeout: Optional[float] = None,
) -> Optional[SecretRecord]:
    """
    Fetch a specific secret by exact name.

    Args:
        core: CoreV1Api client for Kubernetes operations
        namespace: Namespace containing the secret
        name: Exact secret name
        timeout: Request timeout in seconds (None for no timeout)

    Returns:
        Optional[SecretRecord]: The secret, or None if it does not exist

    Raises:
        SecretQueryError: For API errors other than 404
    """
    try:
        secret = core.read_namespaced_secret(name=name, namespace=namespace, _request_timeout=timeout)
    except ApiException as e:
        if e.status == HTTP_NOT_FOUND:
            return None
        raise SecretQueryError(f"Unable to get secret {namespace}/{name}: {e.status} {e.reason}") from e
    return secret_to_record(secret)


def list_secrets(
    core: client.CoreV1Api,
    namespace: str,
    label_selector: str = "",
    field_selector: str = "",
    timeout: Optional[float] = None,
) -> List[SecretRecord]:
    """
    List the secrets of a namespace matching label and field selectors.

    Empty selectors are not sent, so they match every secret.

    Raises:
        SecretQueryError: If the API call fails
    """
    kwargs = {}
    if label_selector:
        kwargs['label_selector'] = label_selector
    if field_selector:
        kwargs['field_selector'] = field_selector
    try:
        result = core.list_namespaced_secret(namespace=namespace, _request_timeout=timeout, **kwargs)
    except ApiException as e:
        raise SecretQueryError(f"Unable to list secrets in {namespace}: {e.status} {e.reason}") from e
    return [secret_to_record(item) for item in result.items or []]


def locate_secrets(core: client.CoreV1Api, namespace: str, options: LookupOptions) -> List[SecretRecord]:
    """
    Find the candidate secrets for a lookup.

    Tries the fragment as an exact name first. When that secret does not
    exist, has another type than requested or cannot be read, all secrets
    of the namespace are listed and narrowed down by the resolver.

    Args:
        core: CoreV1Api client for Kubernetes operations
        namespace: Namespace to search
        options: Lookup configuration (fragment, type filter, selectors, timeout)

    Returns:
        List[SecretRecord]: Candidates as returned by resolve_secrets, or the
        exact match alone

    Raises:
        SecretQueryError: If listing the secrets fails
    """
    timeout = options.request_timeout
    try:
        found = fetch_secret(core, namespace, options.fragment, timeout)
    except SecretQueryError as e:
        log.warning("%s, falling back to listing", e)
        found = None

    if found is not None and (not options.type_filter or found.type == options.type_filter):
        log.debug("Exact match for %s in %s", options.fragment, namespace)
        return [found]

    log.debug("No exact match for %s in %s, listing secrets", options.fragment, namespace)
    secrets = list_secrets(core, namespace, options.label_selector, options.field_selector, timeout)
    return resolve_secrets(options.fragment, options.type_filter, secrets)
