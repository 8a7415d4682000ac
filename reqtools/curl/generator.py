"""
Curl Command Generator

Renders a ParsedRequest back into a readable curl command. Long commands
are wrapped greedily onto " \\" continuation lines.
"""

import re
from typing import List, Sequence
from urllib.parse import quote, urlencode

from .. import config
from ..models import ApiKeyAuth, Auth, BasicAuth, BearerAuth, ParsedRequest, QueryParam
from .parser import split_url

_NEEDS_QUOTING = re.compile(r"[\s'\"$\\]")

FILE_PREFIX = "FILE::"

# Characters encodeURIComponent leaves alone besides alphanumerics and "_.-~"
_URI_COMPONENT_SAFE = "!*'()"


def escape_shell_string(value: str) -> str:
    """Single-quote a value if the shell would otherwise mangle it."""
    if not _NEEDS_QUOTING.search(value):
        return value
    return "'" + value.replace("'", "'\\''") + "'"


def build_url(base_url: str, query_params: Sequence[QueryParam]) -> str:
    """Append enabled query params to a URL"""
    enabled = [p for p in query_params if p.enabled and p.key]
    if not enabled:
        return base_url

    pairs = [(p.key, p.value or '') for p in enabled]
    parts = split_url(base_url)
    if parts is not None:
        query = urlencode(pairs)
        if parts.query:
            query = f"{parts.query}&{query}"
        fragment = f"#{parts.fragment}" if parts.fragment else ""
        return f"{parts.scheme}://{parts.netloc}{parts.path}?{query}{fragment}"

    # Not a full URL (e.g. contains a template variable), encode by hand
    query = '&'.join(
        f"{quote(key, safe=_URI_COMPONENT_SAFE)}={quote(value, safe=_URI_COMPONENT_SAFE)}"
        for key, value in pairs
    )
    separator = '&' if '?' in base_url else '?'
    return f"{base_url}{separator}{query}"


def auth_header_names(auth: Auth) -> List[str]:
    """Lowercased header names the auth flags will emit on their own"""
    if isinstance(auth, BearerAuth):
        return ['authorization']
    if isinstance(auth, ApiKeyAuth) and auth.header:
        return [auth.header.lower()]
    return []


def auth_flags(auth: Auth) -> List[str]:
    if isinstance(auth, BearerAuth):
        if auth.token:
            return ['-H', escape_shell_string(f"Authorization: Bearer {auth.token}")]
    elif isinstance(auth, BasicAuth):
        if auth.username:
            credentials = f"{auth.username}:{auth.password}" if auth.password else auth.username
            return ['-u', escape_shell_string(credentials)]
    elif isinstance(auth, ApiKeyAuth):
        if auth.api_key and auth.header:
            return ['-H', escape_shell_string(f"{auth.header}: {auth.api_key}")]
    return []


def body_flags(request: ParsedRequest) -> List[str]:
    flags = []
    if request.body_type == 'form-data' and request.body_form_data:
        for item in request.body_form_data:
            if not (item.enabled and item.key):
                continue
            if item.value.startswith(FILE_PREFIX):
                value = f"{item.key}=@{item.value[len(FILE_PREFIX):]}"
            else:
                value = f"{item.key}={item.value}"
            flags.extend(['-F', escape_shell_string(value)])
    elif request.body_type == 'x-www-form-urlencoded' and request.body_form_data:
        for item in request.body_form_data:
            if item.enabled and item.key:
                flags.extend(['--data-urlencode', escape_shell_string(f"{item.key}={item.value}")])
    elif request.body and request.body.strip():
        flags.extend(['--data-raw', escape_shell_string(request.body)])
    return flags


def format_multiline(parts: Sequence[str], width: int = None) -> str:
    """
    Join command parts, wrapping once a line would pass `width` columns.

    The check is made per part, so a flag and its value can end up on
    different lines.
    """
    if len(parts) <= 3:
        return ' '.join(parts)

    if width is None:
        width = config.CURL_WRAP_WIDTH
    indent = config.CURL_CONTINUATION_INDENT

    lines = []
    current = parts[0]
    for part in parts[1:]:
        if len(current) + len(part) + 1 > width and current != parts[0]:
            lines.append(current + ' \\')
            current = indent + part
        else:
            current += ' ' + part
    lines.append(current)

    return '\n'.join(lines)


def generate_curl_command(request: ParsedRequest, width: int = None) -> str:
    """
    Generate a curl command for a request.

    Args:
        request: The request to render
        width: Wrap column, defaults to config.CURL_WRAP_WIDTH

    Returns:
        The curl command, possibly spanning several lines
    """
    parts = ['curl']

    if request.method and request.method != 'GET':
        parts.extend(['-X', request.method])

    parts.append(escape_shell_string(build_url(request.url, request.query_params)))

    skip = auth_header_names(request.auth)
    for key, value in request.headers.items():
        if key.lower() in skip:
            continue
        parts.extend(['-H', escape_shell_string(f"{key}: {value}")])

    parts.extend(auth_flags(request.auth))
    parts.extend(body_flags(request))

    return format_multiline(parts, width)
