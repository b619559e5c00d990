"""
Kubesecret - Kubernetes Secret lookup and decoding tool.

Kubesecret finds a Kubernetes Secret from a partial or versioned name and prints
its decoded data as environment variable lines, a YAML-like listing or JSON.
It is meant for operators and scripts that need the values of a secret without
piping `kubectl get secret -o yaml` through `base64 -d` by hand.

Key Features:
- Exact name lookup with a fuzzy fallback on substring matches
- Release family resolution (my-app-3, my-app-9 -> my-app-9)
- Secret type filtering (Opaque, kubernetes.io/tls, ...)
- Data key filtering with case-insensitive substring matching
- env, yaml and json output, with optional colors and metadata

Example:
    Basic usage:
    ```bash
    kubesecret my-apache
    ```

    Only the password keys, as JSON:
    ```bash
    kubesecret my-apache password --out json
    ```

    In a specific namespace, with metadata:
    ```bash
    kubesecret db-creds --namespace prod --metadata --out yaml
    ```
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
