"""
Command-line interface for Kubesecret.

This module provides the command-line interface for the Kubesecret application,
handling argument parsing, input validation, the lookup itself and the final
output. Every fatal error ends up in `main`, which reports it on stderr and
exits with status 1.

Key Functions:
- build_parser: Create and configure the argument parser
- parse_args: Parse argv, accepting `--color=false` style boolean values
- options_from_args: Validate parsed arguments into LookupOptions
- run: Execute a lookup and print its outcome
- main: Main entry point for the CLI application

Example:
    ```bash
    # All keys of the latest my-apache-<N> secret
    kubesecret my-apache

    # Keys containing "pass" of a TLS secret, as compact JSON
    kubesecret nginx pass --type kubernetes.io/tls --out json --compact
    ```
"""

import argparse
import logging
import os
import sys
from typing import List, Optional, TextIO

from colorama import just_fix_windows_console
from kubernetes.client import CoreV1Api

from .constants import (
    AMBIGUOUS_SECRET_MESSAGE, BOOL_FLAGS, DEFAULT_LOG_LEVEL, DEFAULT_OUTPUT_FORMAT,
    ENV_LOG_LEVEL, ENV_OUTPUT_FORMAT, EXIT_ERROR, EXIT_INTERRUPTED, EXIT_OK,
    FALSE_VALUES, NO_SECRET_FOUND_MESSAGE, TRUE_VALUES
)
from .exceptions import KubesecretError
from .kube import load_kube, locate_secrets, resolve_namespace
from .models import LookupOptions, SecretMetadata, SecretRecord
from .render import render
from .secret_processing import project
from .validation import validate_fragment, validate_output_format, validate_timeout

log = logging.getLogger('kubesecret')


def build_parser() -> argparse.ArgumentParser:
    """
    Build and configure the command-line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser with all options

    Environment Variables:
        KUBESECRET_OUTPUT: Default output format (default: env)
    """
    env_out = os.getenv(ENV_OUTPUT_FORMAT, DEFAULT_OUTPUT_FORMAT)

    p = argparse.ArgumentParser("kubesecret", description="Find a Kubernetes secret by (partial) name and print its decoded data")
    p.add_argument("secret", nargs="?", default=None, help="Secret name or name fragment (e.g. my-apache for my-apache-9)")
    p.add_argument("data_key", nargs="?", default="", help="Only print data keys containing this string (case-insensitive)")
    p.add_argument("--namespace", default=None, help="Namespace (default: namespace of the current context)")
    p.add_argument("--label", default="", help="Label selector")
    p.add_argument("--field", default="", help="Field selector")
    p.add_argument("--type", dest="secret_type", default="", help="Look for a specific secret type (ex: Opaque)")
    p.add_argument("--out", default=env_out, help="Output format: env, json, yaml (env: KUBESECRET_OUTPUT)")
    p.add_argument("--color", action=argparse.BooleanOptionalAction, default=False, help="Use colors")
    p.add_argument("--metadata", action=argparse.BooleanOptionalAction, default=False, help="Print metadata of the found secret (Name, Type, Count, Size)")
    p.add_argument("--compact", action=argparse.BooleanOptionalAction, default=False, help="Print JSON on a single line")
    p.add_argument("--kubeconfig", default=None, help="Path to kubeconfig (defaults to kube rules)")
    p.add_argument("--context", default=None, help="Kubecontext override")
    p.add_argument("--request-timeout", type=float, default=None, help="Timeout in seconds for Kubernetes API calls")
    return p


def parse_bool(value: str) -> bool:
    """Parse an explicit boolean flag value such as `true`, `0` or `no`."""
    text = value.strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {value!r}")


def expand_bool_flags(argv: List[str], parser: argparse.ArgumentParser) -> List[str]:
    """
    Rewrite `--flag=<bool>` forms of boolean switches for argparse.

    `--color=true` becomes `--color` and `--color=false` becomes `--no-color`,
    so both the bare switch and the explicit value form are accepted.
    Arguments after `--` are left untouched.

    Args:
        argv: Raw command-line arguments
        parser: Parser used to report invalid values

    Returns:
        List[str]: Arguments with boolean values expanded
    """
    expanded: List[str] = []
    for index, arg in enumerate(argv):
        if arg == "--":
            expanded.extend(argv[index:])
            break
        name, sep, value = arg.partition("=")
        if sep and name in BOOL_FLAGS:
            try:
                enabled = parse_bool(value)
            except argparse.ArgumentTypeError as e:
                parser.error(f"argument {name}: {e}")
            expanded.append(name if enabled else "--no-" + name[2:])
        else:
            expanded.append(arg)
    return expanded


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments (sys.argv when None)."""
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    return parser.parse_args(expand_bool_flags(argv, parser))


def options_from_args(args: argparse.Namespace) -> LookupOptions:
    """
    Validate parsed arguments and build the lookup options.

    Raises:
        ConfigurationError: If an argument is missing or invalid
    """
    return LookupOptions(
        fragment=validate_fragment(args.secret or ""),
        key_filter=args.data_key or "",
        namespace=args.namespace or None,
        type_filter=args.secret_type or "",
        label_selector=args.label or "",
        field_selector=args.field or "",
        output=validate_output_format(args.out),
        color=args.color,
        metadata=args.metadata,
        compact=args.compact,
        kubeconfig=args.kubeconfig,
        context=args.context,
        request_timeout=validate_timeout(args.request_timeout),
    )


def print_secret(secret: SecretRecord, options: LookupOptions, out: TextIO = sys.stdout) -> None:
    """Project and render a resolved secret on the output stream."""
    entries = project(secret.data, options.key_filter)
    metadata = SecretMetadata.from_record(secret) if options.metadata else None
    text = render(entries, options.output, metadata=metadata, color=options.color, compact=options.compact)
    if text:
        print(text, file=out)


def report_candidates(candidates: List[SecretRecord], options: LookupOptions, out: TextIO = sys.stdout) -> None:
    """Print the outcome of a lookup: the secret, nothing found, or the proposals."""
    if not candidates:
        print(NO_SECRET_FOUND_MESSAGE, file=out)
    elif len(candidates) == 1:
        print_secret(candidates[0], options, out)
    else:
        print(AMBIGUOUS_SECRET_MESSAGE, file=out)
        for secret in candidates:
            print(secret.name, file=out)


def run(options: LookupOptions, core: Optional[CoreV1Api] = None, out: TextIO = sys.stdout) -> int:
    """
    Execute a lookup and print its outcome.

    Args:
        options: Validated lookup options
        core: CoreV1Api client to use (built from kubeconfig if None)
        out: Stream receiving the output

    Returns:
        int: Process exit code (0; fatal conditions raise instead)

    Raises:
        KubesecretError: On configuration, connection or query failures
    """
    namespace = options.namespace or resolve_namespace(options.kubeconfig, options.context)
    if core is None:
        core = load_kube(options.kubeconfig, options.context).core

    candidates = locate_secrets(core, namespace, options)
    log.debug("%d candidate(s) for %s in %s", len(candidates), options.fragment, namespace)
    report_candidates(candidates, options, out)
    return EXIT_OK


def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper(), logging.WARNING),
        format='[%(asctime)s] %(levelname)s %(message)s',
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the Kubesecret CLI application.

    Parses command-line arguments, validates them, runs the lookup and exits.
    "No secret found" and the list of proposals are normal outcomes (exit 0);
    any Kubesecret or unexpected error is printed to stderr with exit 1.

    Raises:
        SystemExit: Always, with the exit code of the run
    """
    _configure_logging()
    args = parse_args(argv)

    try:
        options = options_from_args(args)
        if options.color:
            just_fix_windows_console()
        code = run(options)
    except KubesecretError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_ERROR)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        log.debug("Unexpected failure", exc_info=True)
        print(f"Error: {e.__class__.__name__}: {e}", file=sys.stderr)
        sys.exit(EXIT_ERROR)
    sys.exit(code)


if __name__ == "__main__":  # pragma: no cover
    main()
