"""
Environment Export

Renders environments in the formats the import strategies read back:
native JSON, .env text and Postman environment JSON.
"""

import json
import re
import uuid
from datetime import date, datetime, timezone
from typing import Dict, Optional, Sequence

from .. import config
from ..exceptions import UnsupportedFormatError
from ..models import EnvironmentRecord

EXPORT_FORMATS = ("json", "env", "postman")

_ENV_NEEDS_QUOTING = re.compile(r'[\s"$\\]')


def escape_env_value(value: str) -> str:
    """Double-quote a .env value containing whitespace, quotes, $ or backslashes"""
    if not _ENV_NEEDS_QUOTING.search(value):
        return value
    escaped = value.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


class EnvironmentExporter:
    """Generates export file content and file names"""

    def generate(self, environments: Sequence[EnvironmentRecord], format_name: str) -> str:
        if format_name == "json":
            return self.generate_json(environments)
        if format_name == "env":
            return self.generate_env(environments)
        if format_name == "postman":
            return self.generate_postman(environments)
        raise UnsupportedFormatError(format_name)

    def generate_filename(self, format_name: str, count: int, today: Optional[date] = None) -> str:
        stamp = (today or date.today()).isoformat()
        extension = ".env" if format_name == "env" else ".json"
        prefix = "environment" if count == 1 else "environments"
        return f"{prefix}-{stamp}{extension}"

    def generate_json(self, environments: Sequence[EnvironmentRecord]) -> str:
        exported = [self._for_export(env) for env in environments]
        if len(exported) == 1:
            return json.dumps(exported[0], indent=2, ensure_ascii=False)
        return json.dumps(exported, indent=2, ensure_ascii=False)

    def generate_env(self, environments: Sequence[EnvironmentRecord]) -> str:
        if not environments:
            return ""

        # .env holds a single environment
        env = environments[0]
        lines = [f"# Environment: {env.display_name}", ""]
        for key, value in env.variables.items():
            lines.append(f"{key}={escape_env_value(value)}")

        if len(environments) > 1:
            lines.append("")
            lines.append(f"# Note: Only exported first environment. Total: {len(environments)}")

        return "\n".join(lines)

    def generate_postman(self, environments: Sequence[EnvironmentRecord]) -> str:
        if not environments:
            return json.dumps([])

        exported_at = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        postman_envs = [
            {
                "id": str(uuid.uuid4()),
                "name": env.display_name,
                "values": [
                    {"key": key, "value": value or "", "enabled": True, "type": "default"}
                    for key, value in env.variables.items()
                ],
                "_postman_variable_scope": "environment",
                "_postman_exported_at": exported_at,
                "_postman_exported_using": config.POSTMAN_EXPORTED_USING,
            }
            for env in environments
        ]

        if len(postman_envs) == 1:
            return json.dumps(postman_envs[0], indent=2, ensure_ascii=False)
        return json.dumps(postman_envs, indent=2, ensure_ascii=False)

    @staticmethod
    def _for_export(env: EnvironmentRecord) -> Dict:
        """Drop internal fields (id, timestamps)"""
        data = {
            "name": env.name,
            "displayName": env.display_name,
            "variables": dict(env.variables),
        }
        if env.is_default is not None:
            data["isDefault"] = env.is_default
        return data


def export_environments(environments: Sequence[EnvironmentRecord], format_name: str) -> str:
    """Convenience function to export environments."""
    return EnvironmentExporter().generate(environments, format_name)
