"""
Value objects shared by the cURL and environment modules.

All of these are created fresh on every parse call. Python attributes
are snake_case; to_dict() produces the camelCase shape used by the JSON
export format and the HTTP API.
"""

import json
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Union

from .exceptions import InvalidPayloadError


def coerce_value(value: Any) -> str:
    """Turn a loosely typed value into a string"""
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return json.dumps(value, ensure_ascii=False)


def _require_dict(value: Any, what: str) -> Dict:
    if not isinstance(value, dict):
        raise InvalidPayloadError(f"{what} must be a JSON object")
    return value


def _require_list(value: Any, what: str) -> List:
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidPayloadError(f"{what} must be a JSON array")
    return value


# ---------------------------------------------------------------------------
# cURL request
# ---------------------------------------------------------------------------

@dataclass
class QueryParam:
    """A single key/value entry, used for query params and form bodies"""
    key: str
    value: str = ""
    enabled: bool = True

    def to_dict(self) -> Dict:
        return {"key": self.key, "value": self.value, "enabled": self.enabled}

    @classmethod
    def from_dict(cls, data: Dict) -> "QueryParam":
        data = _require_dict(data, "Key/value entry")
        return cls(
            key=coerce_value(data.get("key")),
            value=coerce_value(data.get("value")),
            enabled=data.get("enabled") is not False,
        )


@dataclass(frozen=True)
class NoAuth:
    type: ClassVar[str] = "none"

    def to_dict(self) -> Dict:
        return {"type": self.type}


@dataclass(frozen=True)
class BearerAuth:
    token: str
    type: ClassVar[str] = "bearer"

    def to_dict(self) -> Dict:
        return {"type": self.type, "token": self.token}


@dataclass(frozen=True)
class BasicAuth:
    username: str
    password: str = ""
    type: ClassVar[str] = "basic"

    def to_dict(self) -> Dict:
        return {"type": self.type, "username": self.username, "password": self.password}


@dataclass(frozen=True)
class ApiKeyAuth:
    api_key: str
    header: str
    type: ClassVar[str] = "apikey"

    def to_dict(self) -> Dict:
        return {"type": self.type, "apiKey": self.api_key, "apiKeyHeader": self.header}


Auth = Union[NoAuth, BearerAuth, BasicAuth, ApiKeyAuth]


def auth_from_dict(data: Optional[Dict]) -> Auth:
    """Build an auth variant from its dictionary form.

    Fields that don't belong to the declared type are ignored, so a loose
    object such as {"type": "bearer", "token": "t", "username": "u"}
    becomes BearerAuth("t").
    """
    if not data:
        return NoAuth()
    data = _require_dict(data, "Auth")

    auth_type = data.get("type", "none")
    if auth_type == "bearer":
        return BearerAuth(token=coerce_value(data.get("token")))
    if auth_type == "basic":
        return BasicAuth(
            username=coerce_value(data.get("username")),
            password=coerce_value(data.get("password")),
        )
    if auth_type == "apikey":
        return ApiKeyAuth(
            api_key=coerce_value(data.get("apiKey")),
            header=coerce_value(data.get("apiKeyHeader")),
        )
    return NoAuth()


@dataclass
class ParsedRequest:
    """Normalized HTTP request recovered from (or rendered to) a cURL command"""
    method: str = "GET"
    url: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    body: str = ""
    query_params: List[QueryParam] = field(default_factory=list)
    auth: Auth = field(default_factory=NoAuth)

    # Only consulted by the generator
    body_type: str = "raw"
    body_form_data: List[QueryParam] = field(default_factory=list)

    def to_dict(self) -> Dict:
        """Convert to dictionary"""
        result = {
            "method": self.method,
            "url": self.url,
            "headers": dict(self.headers),
            "body": self.body,
            "queryParams": [p.to_dict() for p in self.query_params],
            "auth": self.auth.to_dict(),
        }
        if self.body_type != "raw":
            result["bodyType"] = self.body_type
            result["bodyFormData"] = [p.to_dict() for p in self.body_form_data]
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string"""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict) -> "ParsedRequest":
        """
        Build a request from its dictionary form.

        Non-string scalars are converted to strings.

        Raises:
            InvalidPayloadError: data, headers, auth or a key/value entry
                                 is not an object
        """
        data = _require_dict(data, "Request")
        headers = _require_dict(data.get("headers") or {}, "Headers")
        return cls(
            method=(coerce_value(data.get("method")) or "GET").upper(),
            url=coerce_value(data.get("url")),
            headers={str(k): coerce_value(v) for k, v in headers.items()},
            body=coerce_value(data.get("body")),
            query_params=[QueryParam.from_dict(p) for p in _require_list(data.get("queryParams"), "queryParams")],
            auth=auth_from_dict(data.get("auth")),
            body_type=coerce_value(data.get("bodyType")) or "raw",
            body_form_data=[QueryParam.from_dict(p) for p in _require_list(data.get("bodyFormData"), "bodyFormData")],
        )


@dataclass
class CurlParseOutcome:
    """Result of parsing one command in a batch"""
    index: int
    success: bool
    request: Optional[ParsedRequest] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict:
        result: Dict[str, Any] = {"success": self.success}
        if self.request is not None:
            result["request"] = self.request.to_dict()
        if self.error is not None:
            result["error"] = self.error
        return result


# ---------------------------------------------------------------------------
# Environments
# ---------------------------------------------------------------------------

@dataclass
class EnvironmentRecord:
    """A named bundle of variables"""
    name: str
    display_name: str
    variables: Dict[str, str] = field(default_factory=dict)
    id: Optional[int] = None
    is_default: Optional[int] = None
    last_used: Optional[str] = None
    created_at: Optional[str] = None

    def to_dict(self) -> Dict:
        """Convert to dictionary, omitting unset optional fields"""
        result: Dict[str, Any] = {}
        if self.id is not None:
            result["id"] = self.id
        result["name"] = self.name
        result["displayName"] = self.display_name
        result["variables"] = dict(self.variables)
        if self.is_default is not None:
            result["isDefault"] = self.is_default
        if self.last_used is not None:
            result["lastUsed"] = self.last_used
        if self.created_at is not None:
            result["createdAt"] = self.created_at
        return result

    @classmethod
    def from_dict(cls, data: Dict) -> "EnvironmentRecord":
        data = _require_dict(data, "Environment")
        variables = data.get("variables")
        if not isinstance(variables, dict):
            variables = {}
        env_id = data.get("id")
        last_used = data.get("lastUsed")
        created_at = data.get("createdAt")
        return cls(
            name=coerce_value(data.get("name")),
            display_name=coerce_value(data.get("displayName")),
            variables={str(k): coerce_value(v) for k, v in variables.items()},
            id=env_id if isinstance(env_id, int) and not isinstance(env_id, bool) else None,
            is_default=data.get("isDefault"),
            last_used=last_used if isinstance(last_used, str) else None,
            created_at=created_at if isinstance(created_at, str) else None,
        )


@dataclass(frozen=True)
class FormatInfo:
    """Static descriptor of a registered import format"""
    name: str
    display_name: str
    file_extensions: tuple
    supports_import: bool = True
    supports_export: bool = True

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "fileExtensions": list(self.file_extensions),
            "supportsImport": self.supports_import,
            "supportsExport": self.supports_export,
        }


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> Dict:
        return {"isValid": self.is_valid, "errors": list(self.errors), "warnings": list(self.warnings)}


@dataclass
class FormatDetection:
    format: str
    confidence: float
    is_valid: bool

    def to_dict(self) -> Dict:
        return {"format": self.format, "isValid": self.is_valid, "confidence": self.confidence}


@dataclass
class EnvironmentConflict:
    """An imported environment whose name is already taken"""
    environment_name: str
    existing_id: Optional[int]
    imported_environment: EnvironmentRecord

    def to_dict(self) -> Dict:
        return {
            "environmentName": self.environment_name,
            "existingId": self.existing_id,
            "importedEnvironment": self.imported_environment.to_dict(),
        }
