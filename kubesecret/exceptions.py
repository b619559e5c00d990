"""
Custom exceptions for Kubesecret.

This module defines custom exception classes used throughout the Kubesecret
application to provide more specific error handling and better error messages
for different failure scenarios.

Exception Hierarchy:
- KubesecretError: Base exception for all Kubesecret-specific errors
  - KubernetesConnectionError: Raised when the Kubernetes client cannot be built
  - ConfigurationError: Raised when there's a configuration issue
  - SecretQueryError: Raised when getting or listing secrets fails
  - SecretDecodeError: Raised when secret data is not valid base64

Example:
    ```python
    try:
        secrets = list_secrets(kube.core, "prod")
    except SecretQueryError as e:
        print(f"Listing failed: {e}")
    ```
"""


class KubesecretError(Exception):
    """Base exception for Kubesecret errors."""
    pass


class KubernetesConnectionError(KubesecretError):
    """Raised when unable to connect to Kubernetes cluster."""
    pass


class ConfigurationError(KubesecretError):
    """Raised when there's a configuration issue."""
    pass


class SecretQueryError(KubesecretError):
    """Raised when the secrets API call fails."""
    pass


class SecretDecodeError(KubesecretError):
    """Raised when a secret value cannot be base64 decoded."""
    pass
