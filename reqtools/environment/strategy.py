"""
Environment Import Strategy

Shared base for the per-format import strategies. Each format (JSON,
Postman, .env) subclasses ImportStrategy and fills in detection, scoring
and parsing; validation and format metadata are shared.

A strategy holds no state after construction, so one instance can be
used from several threads at once.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from ..models import EnvironmentRecord, FormatInfo, ValidationResult


@dataclass(frozen=True)
class JsonResult:
    """Outcome of a JSON decode: a value, or the reason there isn't one"""
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def safe_parse_json(content: str) -> JsonResult:
    """Decode JSON without raising. JSON `null` is ok=True with value None."""
    try:
        return JsonResult(value=json.loads(content))
    except (TypeError, ValueError) as e:
        return JsonResult(error=str(e))


def sanitize_name(name: str, fallback: str) -> str:
    """Slug for internal names: lowercase, [a-z0-9_] only, single underscores"""
    slug = re.sub(r'[^a-z0-9_]', '_', name.lower())
    slug = re.sub(r'_+', '_', slug).strip('_')
    return slug or fallback


class ImportStrategy:
    """Base class for environment import formats."""

    format_name: str = ""
    display_name: str = ""
    file_extensions: tuple = ()
    mime_types: tuple = ()

    def detect(self, content: str) -> bool:
        """Cheap check whether this strategy can handle the content."""
        raise NotImplementedError

    def get_confidence(self, content: str) -> float:
        """Score in [0, 1]; 0 means not this format."""
        raise NotImplementedError

    def parse(self, content: str, source_name: Optional[str] = None) -> List[EnvironmentRecord]:
        """Convert content into environments. Raises EnvironmentParseError."""
        raise NotImplementedError

    def validate(self, environments: Sequence[EnvironmentRecord]) -> ValidationResult:
        """Report structural problems. Never modifies the environments."""
        result = ValidationResult()

        for env in environments:
            name = env.name if isinstance(env.name, str) else ""
            if not name.strip():
                result.errors.append("Environment missing name")

            display_name = env.display_name if isinstance(env.display_name, str) else ""
            if not display_name.strip():
                result.errors.append(f'Environment "{name}" missing display name')

            if not isinstance(env.variables, dict):
                result.errors.append(f'Environment "{name}" has invalid variables')
                continue

            for key in env.variables:
                if not str(key).strip():
                    result.warnings.append(f'Environment "{name}" has empty variable key')

        return result

    def get_format_info(self) -> FormatInfo:
        return FormatInfo(
            name=self.format_name,
            display_name=self.display_name,
            file_extensions=tuple(self.file_extensions),
            supports_import=True,
            supports_export=True,
        )

    def __repr__(self):
        return f"<{type(self).__name__}: {self.format_name}>"
