"""
Curl Command Parser

Recovers method, URL, headers, body, auth and query parameters from a
curl command. Each field is extracted by an independent scan over the
token list, so flag order in the command does not matter beyond a flag
being followed by its value.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence
from urllib.parse import parse_qsl, urlsplit

from .. import config
from ..exceptions import EmptyCommandError, MissingUrlError, ReqToolsError
from ..models import (
    ApiKeyAuth,
    Auth,
    BasicAuth,
    BearerAuth,
    CurlParseOutcome,
    NoAuth,
    ParsedRequest,
    QueryParam,
)
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

METHOD_FLAGS = ("-X", "--request")
HEADER_FLAGS = ("-H", "--header")
DATA_FLAGS = ("-d", "--data", "--data-raw")
USER_FLAGS = ("-u", "--user")


def _flag_values(tokens: Sequence[str], flags: Iterable[str]) -> List[str]:
    """Return the token following each occurrence of any of the flags."""
    flags = tuple(flags)
    return [
        tokens[i + 1]
        for i, token in enumerate(tokens)
        if token in flags and i + 1 < len(tokens)
    ]


def split_url(url: str):
    """urlsplit() that returns None for anything without scheme and host."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return parts


def parse_method(tokens: Sequence[str]) -> str:
    """Extract HTTP method from -X/--request, defaulting to GET"""
    for value in _flag_values(tokens, METHOD_FLAGS):
        method = value.upper()
        if method in config.VALID_METHODS:
            return method
    return "GET"


def parse_url(tokens: Sequence[str]) -> str:
    """Extract the URL, preferring an explicit --url"""
    explicit = _flag_values(tokens, ("--url",))
    if explicit:
        return explicit[0]

    for token in tokens:
        if token.startswith('-'):
            continue
        if token.startswith('http://') or token.startswith('https://'):
            return token

    raise MissingUrlError()


def parse_headers(tokens: Sequence[str]) -> Dict[str, str]:
    """Extract all headers from -H flags. Later duplicates win."""
    headers = {}
    for value in _flag_values(tokens, HEADER_FLAGS):
        key, sep, rest = value.partition(':')
        key = key.strip()
        if sep and key:
            headers[key] = rest.strip()
    return headers


def parse_data(tokens: Sequence[str]) -> str:
    """Extract the request body. The first data flag in the command wins."""
    for i, token in enumerate(tokens):
        has_value = i + 1 < len(tokens)

        if token in DATA_FLAGS:
            # An empty value doesn't count, keep looking
            if has_value and tokens[i + 1]:
                return tokens[i + 1]
        elif token == '--data-binary':
            if has_value:
                return tokens[i + 1]
        elif token.startswith('--data='):
            return token[len('--data='):]
        elif token.startswith('-d') and len(token) > 2:
            return token[2:]

    return ""


def parse_auth(tokens: Sequence[str], headers: Dict[str, str]) -> Auth:
    """Work out auth from headers and -u. First matching rule wins."""
    for key, value in headers.items():
        if key.lower() == 'authorization' and value[:7].lower() == 'bearer ':
            return BearerAuth(token=value[7:].strip())

    users = _flag_values(tokens, USER_FLAGS)
    if users:
        username, _, password = users[0].partition(':')
        return BasicAuth(username=username, password=password)

    for name in config.API_KEY_HEADER_NAMES:
        for candidate in (name, name.lower()):
            if headers.get(candidate):
                return ApiKeyAuth(api_key=headers[candidate], header=candidate)

    return NoAuth()


def parse_query_params(url: str) -> List[QueryParam]:
    """Split the query string of a URL into enabled QueryParam entries"""
    parts = split_url(url)
    if parts is None:
        return []
    return [
        QueryParam(key=key, value=value, enabled=True)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]


def strip_query(url: str) -> str:
    """Drop query string, fragment and credentials from a URL"""
    parts = split_url(url)
    if parts is not None:
        host = parts.netloc.rpartition('@')[2]
        return f"{parts.scheme}://{host}{parts.path}"

    query_index = url.find('?')
    if query_index > 0:
        return url[:query_index]
    return url


def generate_request_name(method: str, url: str) -> str:
    """Name a request after its method and last path segment, e.g. "GET users"."""
    parts = split_url(url)
    segments = [s for s in parts.path.split('/') if s] if parts else []
    if not segments:
        return f"{method} Request"
    return f"{method} {segments[-1]}"


def extract_request(tokens: Sequence[str]) -> ParsedRequest:
    """
    Build a ParsedRequest from a token list.

    A leading "curl" token is ignored when arguments follow it.

    Raises:
        EmptyCommandError: no tokens at all
        MissingUrlError: no URL-shaped argument
    """
    tokens = list(tokens)
    if len(tokens) > 1 and tokens[0] == 'curl':
        tokens = tokens[1:]
    if not tokens:
        raise EmptyCommandError()

    method = parse_method(tokens)
    url = parse_url(tokens)
    headers = parse_headers(tokens)
    body = parse_data(tokens)
    auth = parse_auth(tokens, headers)
    query_params = parse_query_params(url)

    return ParsedRequest(
        method=method,
        url=strip_query(url),
        headers=headers,
        body=body,
        query_params=query_params,
        auth=auth,
    )


def parse_curl_command(command: str) -> ParsedRequest:
    """
    Parse a curl command string into a ParsedRequest.

    Args:
        command: The full curl command as a string

    Returns:
        ParsedRequest with all extracted components
    """
    if not command or not command.strip():
        raise EmptyCommandError()

    tokens = tokenize(command.strip())
    logger.debug("Tokenized curl command into %d tokens", len(tokens))
    return extract_request(tokens)


def parse_curl_commands(commands: Sequence[str]) -> List[CurlParseOutcome]:
    """
    Parse several commands independently.

    A failing command never stops the batch; its outcome carries the error
    message, or "Failed to parse command N" (1-based) if the error had none.
    """
    outcomes = []
    for index, command in enumerate(commands, start=1):
        try:
            request = parse_curl_command(command)
        except ReqToolsError as e:
            message = str(e) or f"Failed to parse command {index}"
            logger.debug("Command %d failed: %s", index, message)
            outcomes.append(CurlParseOutcome(index=index, success=False, error=message))
        else:
            outcomes.append(CurlParseOutcome(index=index, success=True, request=request))
    return outcomes
