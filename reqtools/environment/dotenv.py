"""
.env File Format

Line-oriented KEY=VALUE (or KEY: VALUE) text. Lines starting with # are
comments; a "# Environment: Name" comment names the environment. Values
may be wrapped in one layer of matching single or double quotes.

A file always produces exactly one environment.
"""

import re
from pathlib import PurePath
from typing import Iterator, List, Optional

from ..models import EnvironmentRecord
from .strategy import ImportStrategy, sanitize_name

KEY_VALUE_PATTERN = re.compile(r'^([A-Za-z_][A-Za-z0-9_]*)\s*[=:]\s*(.*)$')
ENV_NAME_PATTERN = re.compile(r'^environment:\s*(.+)', re.IGNORECASE)

DEFAULT_DISPLAY_NAME = "Imported Environment"
DEFAULT_NAME = "imported_environment"


def _non_blank_lines(content: str) -> Iterator[str]:
    for line in content.splitlines():
        line = line.strip()
        if line:
            yield line


def unquote_value(value: str) -> str:
    """Strip one layer of matching quotes. A lone quote character becomes empty."""
    if value and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def _stem(source_name: Optional[str]) -> Optional[str]:
    """File stem for naming, e.g. "staging" from "config/staging.env"."""
    if not source_name:
        return None
    name = PurePath(source_name).name
    # ".env" and ".env.local" have no useful stem
    if name.startswith('.env'):
        return None
    stem = name.split('.')[0]
    return stem or None


class DotenvStrategy(ImportStrategy):
    """.env key/value files"""

    format_name = "env"
    display_name = ".env File"
    file_extensions = (".env", ".env.local", ".env.production")
    mime_types = ("text/plain",)

    def _count(self, content: str):
        """Return (key/value lines, non-blank lines)"""
        matches = 0
        total = 0
        for line in _non_blank_lines(content):
            total += 1
            if line.startswith('#'):
                continue
            if KEY_VALUE_PATTERN.match(line):
                matches += 1
        return matches, total

    def detect(self, content: str) -> bool:
        matches, _ = self._count(content)
        return matches > 0

    def get_confidence(self, content: str) -> float:
        matches, total = self._count(content)
        if not matches or not total:
            return 0.0
        return min(1.0, matches / total)

    def parse(self, content: str, source_name: Optional[str] = None) -> List[EnvironmentRecord]:
        variables = {}
        env_name = None
        last_comment = None

        for line in _non_blank_lines(content):
            if line.startswith('#'):
                comment = line[1:].strip()
                match = ENV_NAME_PATTERN.match(comment)
                if match:
                    env_name = match.group(1).strip()
                elif comment:
                    last_comment = comment
                continue

            match = KEY_VALUE_PATTERN.match(line)
            if match:
                variables[match.group(1)] = unquote_value(match.group(2).strip())

        display_name = env_name or _stem(source_name) or last_comment or DEFAULT_DISPLAY_NAME

        return [
            EnvironmentRecord(
                name=sanitize_name(display_name, DEFAULT_NAME),
                display_name=display_name,
                variables=variables,
                is_default=0,
            )
        ]
