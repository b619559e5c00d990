"""
Constants and configuration for Kubesecret.

This module contains the configuration constants used throughout the Kubesecret
application, including output formats, environment variable names, default
values and the Kubernetes locations used for namespace discovery.

Constants are organized by category:
- Output formats: Supported renderers and their aliases
- Environment variables: Names of variables read for defaults
- Logging: Default log levels
- Kubernetes: Namespace defaults and in-cluster paths
- Messages: Texts printed for resolution outcomes
- Exit codes and boolean switch values
"""

# Output formats
OUTPUT_ENV = "env"
OUTPUT_YAML = "yaml"
OUTPUT_JSON = "json"
OUTPUT_FORMAT_ALIASES = {"yml": OUTPUT_YAML}
OUTPUT_FORMATS = (OUTPUT_ENV, OUTPUT_JSON, OUTPUT_YAML)
DEFAULT_OUTPUT_FORMAT = OUTPUT_ENV

# Rendering
METADATA_ENV_PREFIX = "METADATA_"
YAML_INDENT = "  "
JSON_INDENT = 2

# Environment variables
ENV_OUTPUT_FORMAT = "KUBESECRET_OUTPUT"
ENV_LOG_LEVEL = "KUBESECRET_LOG_LEVEL"

# Logging
DEFAULT_LOG_LEVEL = "WARNING"

# Kubernetes
DEFAULT_NAMESPACE = "default"
INCLUSTER_NAMESPACE_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/namespace"
HTTP_NOT_FOUND = 404

# Messages
NO_SECRET_FOUND_MESSAGE = "No secret found"
AMBIGUOUS_SECRET_MESSAGE = "Unable to determine the target. Try one of these:"
NO_DATA_KEY_MESSAGE = "No data key found with {key_filter}"

# Exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130

# Boolean switches accepting an explicit value (--color=false)
BOOL_FLAGS = ("--color", "--metadata", "--compact")
TRUE_VALUES = ("1", "t", "true", "yes", "on")
FALSE_VALUES = ("0", "f", "false", "no", "off")
