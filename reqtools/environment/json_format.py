"""
JSON Environment Format

Native format: either a single environment object or an array of them.

    {"name": "dev", "displayName": "Development",
     "variables": {"base_url": "http://localhost"}, "isDefault": 1}
"""

from typing import Any, Dict, List, Optional

from ..exceptions import EnvironmentParseError
from ..models import EnvironmentRecord, coerce_value
from .strategy import ImportStrategy, safe_parse_json

UNNAMED = "Unnamed"


def is_environment_like(obj: Any) -> bool:
    """Has a string name or displayName and a variables object"""
    if not isinstance(obj, dict):
        return False
    has_name = isinstance(obj.get("name"), str) or isinstance(obj.get("displayName"), str)
    return has_name and isinstance(obj.get("variables"), dict)


def _string_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _coerce_is_default(env: Dict) -> Optional[int]:
    if "isDefault" not in env:
        return None
    value = env["isDefault"]
    if isinstance(value, bool):
        return 1 if value else 0
    if isinstance(value, (int, float)):
        return value
    return 1 if value else 0


def normalize_environment(env: Any) -> EnvironmentRecord:
    """Fill in fallbacks and drop fields of the wrong type"""
    if not isinstance(env, dict):
        env = {}

    name = _string_or_none(env.get("name"))
    display_name = _string_or_none(env.get("displayName"))

    variables = env.get("variables")
    if isinstance(variables, dict):
        variables = {str(k): coerce_value(v) for k, v in variables.items()}
    else:
        variables = {}

    env_id = env.get("id")
    last_used = env.get("lastUsed")
    created_at = env.get("createdAt")

    return EnvironmentRecord(
        id=env_id if isinstance(env_id, int) and not isinstance(env_id, bool) else None,
        name=name or display_name or UNNAMED,
        display_name=display_name or name or UNNAMED,
        variables=variables,
        is_default=_coerce_is_default(env),
        last_used=last_used if isinstance(last_used, str) else None,
        created_at=created_at if isinstance(created_at, str) else None,
    )


class JsonStrategy(ImportStrategy):
    """Native JSON environments"""

    format_name = "json"
    display_name = "JSON"
    file_extensions = (".json",)
    mime_types = ("application/json",)

    def detect(self, content: str) -> bool:
        parsed = safe_parse_json(content)
        if not parsed.ok:
            return False
        value = parsed.value
        if isinstance(value, list):
            return len(value) > 0 and is_environment_like(value[0])
        return is_environment_like(value)

    def get_confidence(self, content: str) -> float:
        if not self.detect(content):
            return 0.0

        value = safe_parse_json(content).value
        if isinstance(value, list):
            return 1.0 if all(is_environment_like(item) for item in value) else 0.5
        return 1.0 if is_environment_like(value) else 0.5

    def parse(self, content: str, source_name: Optional[str] = None) -> List[EnvironmentRecord]:
        parsed = safe_parse_json(content)
        if not parsed.ok:
            raise EnvironmentParseError("Invalid JSON format")

        value = parsed.value
        if not isinstance(value, (dict, list)):
            raise EnvironmentParseError("Expected an environment object or an array of them")
        items = value if isinstance(value, list) else [value]
        return [normalize_environment(item) for item in items]
