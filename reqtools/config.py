"""
Default configuration for reqtools.

Module-level values read by the cURL generator, the import registry,
the CLI and the HTTP server. Each tunable can be overridden with a
REQTOOLS_* environment variable, or at runtime via ToolkitConfig.apply().
"""

import os


def _env_int(name: str, default: int) -> int:
    """Read an integer env var. Bad values are left for ToolkitConfig to report."""
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        return default


# cURL generation
CURL_WRAP_WIDTH = _env_int("REQTOOLS_CURL_WRAP_WIDTH", 80)
CURL_CONTINUATION_INDENT = "  "

VALID_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")

# Header names recognised as API-key auth, checked in this order
API_KEY_HEADER_NAMES = ("X-API-Key", "X-Api-Key", "API-Key", "apikey", "x-api-key")

# Environment import / export
DEFAULT_IMPORT_FORMAT = os.environ.get("REQTOOLS_IMPORT_FORMAT", "auto")
POSTMAN_EXPORTED_USING = "reqtools"

# API Server
API_HOST = os.environ.get("REQTOOLS_HOST", "127.0.0.1")
API_PORT = _env_int("REQTOOLS_PORT", 8765)

# Logging
LOG_LEVEL = os.environ.get("REQTOOLS_LOG_LEVEL", "WARNING").upper()
