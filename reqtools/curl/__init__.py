"""
cURL module for converting between curl commands and requests.

- tokenizer.py: Splits a command into shell arguments
- parser.py: Extracts a ParsedRequest from the arguments
- generator.py: Renders a ParsedRequest back into a curl command
"""

from .tokenizer import tokenize
from .parser import (
    extract_request,
    parse_curl_command,
    parse_curl_commands,
    generate_request_name,
)
from .generator import generate_curl_command, escape_shell_string
