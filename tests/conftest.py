import json

import pytest

from reqtools import config
from reqtools.environment import create_default_registry

_CONFIG_ATTRS = (
    "CURL_WRAP_WIDTH",
    "DEFAULT_IMPORT_FORMAT",
    "API_HOST",
    "API_PORT",
    "LOG_LEVEL",
)

_ENV_VARS = (
    "REQTOOLS_CURL_WRAP_WIDTH",
    "REQTOOLS_IMPORT_FORMAT",
    "REQTOOLS_HOST",
    "REQTOOLS_PORT",
    "REQTOOLS_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def restore_config(monkeypatch):
    """Tests may call ToolkitConfig.apply(); put module defaults back afterwards."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    saved = {attr: getattr(config, attr) for attr in _CONFIG_ATTRS}
    yield
    for attr, value in saved.items():
        setattr(config, attr, value)


@pytest.fixture
def registry():
    return create_default_registry()


@pytest.fixture
def postman_env() -> dict:
    return {
        "name": "Dev",
        "values": [
            {"key": "base_url", "value": "http://x", "enabled": True},
            {"key": "skip", "value": "y", "enabled": False},
        ],
        "_postman_variable_scope": "environment",
    }


@pytest.fixture
def postman_content(postman_env) -> str:
    return json.dumps(postman_env, indent=2)


@pytest.fixture
def native_content() -> str:
    return json.dumps(
        [
            {
                "id": 7,
                "name": "dev",
                "displayName": "Development",
                "variables": {"base_url": "http://localhost:3000", "token": "abc"},
                "isDefault": 1,
                "createdAt": "2024-01-01T00:00:00.000Z",
            },
            {
                "name": "prod",
                "displayName": "Production",
                "variables": {"base_url": "https://api.example.com"},
            },
        ],
        indent=2,
    )


@pytest.fixture
def dotenv_content() -> str:
    return (
        "# Environment: Staging\n"
        "\n"
        "BASE_URL=https://staging.example.com\n"
        "API_KEY = \"s3cr3t value\"\n"
        "TIMEOUT: 30\n"
        "EMPTY=\n"
    )
