"""
reqtools

cURL conversion and environment import/export for REST clients.

Quick start:
    from reqtools import parse_curl_command, generate_curl_command

    request = parse_curl_command("curl -X POST https://api.example.com/users -d '{}'")
    print(request.method, request.url)
    print(generate_curl_command(request))

    from reqtools import detect_and_parse

    result = detect_and_parse(open("staging.env").read(), source_name="staging.env")
    for env in result.environments:
        print(env.display_name, env.variables)
"""

from .curl import (
    tokenize,
    extract_request,
    parse_curl_command,
    parse_curl_commands,
    generate_curl_command,
    generate_request_name,
)
from .environment import (
    detect_and_parse,
    get_registry,
    export_environments,
    ImportResult,
)
from .models import (
    ParsedRequest,
    QueryParam,
    NoAuth,
    BearerAuth,
    BasicAuth,
    ApiKeyAuth,
    EnvironmentRecord,
    FormatInfo,
    ValidationResult,
)
from .config_manager import ToolkitConfig

__version__ = "1.0.0"
__all__ = [
    "tokenize",
    "extract_request",
    "parse_curl_command",
    "parse_curl_commands",
    "generate_curl_command",
    "generate_request_name",
    "detect_and_parse",
    "get_registry",
    "export_environments",
    "ImportResult",
    "ParsedRequest",
    "QueryParam",
    "NoAuth",
    "BearerAuth",
    "BasicAuth",
    "ApiKeyAuth",
    "EnvironmentRecord",
    "FormatInfo",
    "ValidationResult",
    "ToolkitConfig",
    "app",
]


def __getattr__(name):
    """Lazy import of the HTTP app.

    The server pulls in FastAPI and pydantic; library users who only
    convert text shouldn't pay for that import.
    """
    if name == "app":
        from .server import app
        return app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
