"""
Postman Environment Format

Postman v1 environment export:

    {"id": "...", "name": "Dev",
     "values": [{"key": "base_url", "value": "http://x", "enabled": true}],
     "_postman_variable_scope": "environment",
     "_postman_exported_using": "Postman/10.0"}

Disabled values are skipped. Postman has no notion of a default
environment in the file, so imported records always get isDefault 0.
"""

from typing import Any, List, Optional

from ..exceptions import EnvironmentParseError
from ..models import EnvironmentRecord, coerce_value
from .strategy import ImportStrategy, safe_parse_json, sanitize_name

DEFAULT_DISPLAY_NAME = "Imported Postman Environment"
DEFAULT_NAME = "imported_postman_environment"


class PostmanStrategy(ImportStrategy):
    """Postman environment JSON"""

    format_name = "postman"
    display_name = "Postman Environment"
    file_extensions = (".json",)
    mime_types = ("application/json",)

    def _load_object(self, content: str) -> Optional[dict]:
        parsed = safe_parse_json(content)
        if parsed.ok and isinstance(parsed.value, dict):
            return parsed.value
        return None

    def detect(self, content: str) -> bool:
        env = self._load_object(content)
        if env is None:
            return False
        return (
            isinstance(env.get("name"), str)
            and isinstance(env.get("values"), list)
            and (
                env.get("_postman_variable_scope") == "environment"
                or env.get("_postman_exported_using") == "Postman"
            )
        )

    def get_confidence(self, content: str) -> float:
        if not self.detect(content):
            return 0.0

        env = self._load_object(content)
        if env.get("_postman_variable_scope") == "environment":
            return 1.0
        if env.get("_postman_exported_using") == "Postman":
            return 0.9
        if isinstance(env.get("values"), list):
            return 0.8
        return 0.5

    def parse(self, content: str, source_name: Optional[str] = None) -> List[EnvironmentRecord]:
        parsed = safe_parse_json(content)
        if not parsed.ok:
            raise EnvironmentParseError("Invalid JSON format")

        value = parsed.value
        if isinstance(value, list):
            return [self._convert(item) for item in value]
        return [self._convert(value)]

    def _convert(self, postman_env: Any) -> EnvironmentRecord:
        """Convert one Postman environment object"""
        if not isinstance(postman_env, dict):
            raise EnvironmentParseError("Postman environment must be a JSON object")

        variables = {}
        values = postman_env.get("values")
        if isinstance(values, list):
            for item in values:
                if not isinstance(item, dict) or "key" not in item:
                    continue
                if item.get("enabled") is False:
                    continue
                variables[coerce_value(item["key"])] = coerce_value(item.get("value") or "")

        raw_name = postman_env.get("name")
        display_name = raw_name if isinstance(raw_name, str) and raw_name else DEFAULT_DISPLAY_NAME

        return EnvironmentRecord(
            name=sanitize_name(display_name, DEFAULT_NAME),
            display_name=display_name,
            variables=variables,
            is_default=0,
        )
