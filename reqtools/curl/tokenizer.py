"""
Shell Argument Tokenizer

Splits a single curl invocation into argument tokens.

Rules:
  - whitespace outside quotes separates tokens
  - '...' and "..." both quote; a quote only closes the region it opened
  - backslash escapes the next character, inside quotes too
  - backslash followed by a newline is a line continuation and is dropped
  - shell operators, variable expansion and globbing are not interpreted
"""

from typing import List

QUOTE_CHARS = ("'", '"')


def tokenize(command: str) -> List[str]:
    """
    Split a command string into argument tokens.

    Args:
        command: Raw command text, possibly spanning several lines

    Returns:
        List of tokens in order. Empty tokens are never emitted.
    """
    tokens = []
    current = []
    quote_char = None
    i = 0
    length = len(command)

    while i < length:
        char = command[i]

        if char == '\\':
            if i + 1 < length:
                nxt = command[i + 1]
                if nxt == '\n' and quote_char is None:
                    # Line continuation acts as a separator
                    if current:
                        tokens.append(''.join(current))
                        current = []
                elif nxt == '\r' and command[i + 2:i + 3] == '\n' and quote_char is None:
                    if current:
                        tokens.append(''.join(current))
                        current = []
                    i += 1
                else:
                    current.append(nxt)
            i += 2
            continue

        if char in QUOTE_CHARS:
            if quote_char is None:
                quote_char = char
            elif char == quote_char:
                quote_char = None
            else:
                current.append(char)
            i += 1
            continue

        if char.isspace() and quote_char is None:
            if current:
                tokens.append(''.join(current))
                current = []
            i += 1
            continue

        current.append(char)
        i += 1

    if current:
        tokens.append(''.join(current))

    return tokens
