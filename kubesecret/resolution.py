"""
Secret name resolution for Kubesecret.

This module turns a user supplied name fragment into the shortest possible
list of candidate secrets. Secrets deployed by release tooling usually carry a
trailing revision number (`my-apache-3`, `my-apache-4`, ...); secrets sharing a
name once that number is stripped form a release family, and only the latest
member of a family is ever proposed.

Key Functions:
- get_release: Extract the trailing release number of a secret name
- release_family: Strip the trailing release number from a secret name
- is_versioned: Test a name against the `<fragment>-<N>` pattern
- resolve_secrets: Narrow a secret listing down to the best candidates

Resolution rules:
- A secret is a candidate when its name contains the fragment and, if a type
  filter is given, its type is exactly that filter.
- If any candidate is named exactly `<fragment>-<N>`, the one with the highest
  N is the only result.
- Otherwise the result holds the highest release of every family.
- Equal release numbers are settled by the greatest full name, and results
  are sorted by name.

Example:
    ```python
    names = ["my-apache-3", "my-apache-9", "my-apache-1"]
    found = resolve_secrets("my-apache", "", [SecretRecord(name=n) for n in names])
    print([s.name for s in found])  # ['my-apache-9']
    ```
"""

import re
from typing import Dict, Iterable, List, Optional, Tuple

from .models import SecretRecord

_TRAILING_DIGITS = re.compile(r"(\d+)$")


def get_release(name: str) -> int:
    """Return the trailing release number of a secret name, or 0 if it has none."""
    match = _TRAILING_DIGITS.search(name)
    return int(match.group(1)) if match else 0


def release_family(name: str) -> str:
    """Return the secret name without its trailing release number."""
    return _TRAILING_DIGITS.sub("", name)


def is_versioned(name: str, fragment: str) -> bool:
    """
    Check whether a name is exactly `<fragment>-<N>`.

    The fragment is matched literally, so regex metacharacters in user input
    have no special meaning.

    Args:
        name: Secret name to test
        fragment: Name fragment supplied by the user

    Returns:
        bool: True when name is the fragment followed by a dash and digits only
    """
    return re.fullmatch(re.escape(fragment) + r"-[0-9]+", name) is not None


def _rank(secret: SecretRecord) -> Tuple[int, str]:
    # Release first, then full name
    return get_release(secret.name), secret.name


def _matches(secret: SecretRecord, fragment: str, type_filter: Optional[str]) -> bool:
    if type_filter and secret.type != type_filter:
        return False
    return fragment in secret.name


def resolve_secrets(
    fragment: str,
    type_filter: Optional[str],
    secrets: Iterable[SecretRecord],
) -> List[SecretRecord]:
    """
    Return the shortest list of secrets matching a name fragment.

    Filters the listing on type and name substring, then keeps either the
    latest exact versioned match (`<fragment>-<N>`) or, when there is none,
    the latest member of every release family.

    Args:
        fragment: Name fragment to look for (case-sensitive; "" matches all)
        type_filter: Exact secret type to require; empty or None accepts all
        secrets: Full secret listing of the namespace

    Returns:
        List[SecretRecord]: Candidates sorted by name. One element means the
        lookup succeeded, none means nothing matched and several mean the
        caller must ask the user to pick.

    Example:
        ```python
        found = resolve_secrets("env-cert", "", listing)
        if len(found) > 1:
            for secret in found:
                print(secret.name)
        ```
    """
    latest_versioned: Optional[SecretRecord] = None
    families: Dict[str, SecretRecord] = {}

    for secret in secrets:
        if not _matches(secret, fragment, type_filter):
            continue

        if is_versioned(secret.name, fragment):
            if latest_versioned is None or _rank(secret) > _rank(latest_versioned):
                latest_versioned = secret
            continue

        if latest_versioned is not None:
            # Family candidates are discarded once a versioned match exists
            continue

        family = release_family(secret.name)
        current = families.get(family)
        if current is None or _rank(secret) > _rank(current):
            families[family] = secret

    if latest_versioned is not None:
        return [latest_versioned]
    return sorted(families.values(), key=lambda s: s.name)
