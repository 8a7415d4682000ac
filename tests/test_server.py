import pytest
from fastapi.testclient import TestClient

from reqtools.server import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_parse_curl(client):
    response = client.post(
        "/api/curl/parse",
        json={"command": "curl -X POST 'https://api.example.com/users?page=2' -H 'Authorization: Bearer t'"},
    )
    data = response.json()

    assert data["success"] is True
    request = data["request"]
    assert request["name"] == "POST users"
    assert request["method"] == "POST"
    assert request["url"] == "https://api.example.com/users"
    assert request["queryParams"] == [{"key": "page", "value": "2", "enabled": True}]
    assert request["auth"] == {"type": "bearer", "token": "t"}


def test_parse_curl_failure(client):
    data = client.post("/api/curl/parse", json={"command": "   "}).json()
    assert data == {"success": False, "error": "Empty cURL command"}

    data = client.post("/api/curl/parse", json={"command": "curl -X GET"}).json()
    assert data == {"success": False, "error": "URL not found in cURL command"}


def test_parse_bulk(client):
    response = client.post(
        "/api/curl/parse-bulk",
        json={"commands": ["curl https://x.com/items", "curl -H 'A: b'"]},
    )
    data = response.json()

    assert data["success"] is True
    first, second = data["results"]
    assert first["success"] is True
    assert first["request"]["name"] == "GET items"
    assert second == {"success": False, "error": "URL not found in cURL command"}


def test_generate(client):
    response = client.post(
        "/api/curl/generate",
        json={
            "request": {
                "method": "post",
                "url": "https://x.com",
                "body": "a",
                "auth": {"type": "basic", "username": "u", "password": "p"},
            }
        },
    )
    assert response.json() == {"success": True, "command": "curl -X POST https://x.com -u u:p --data-raw a"}


def test_detect(client, dotenv_content):
    data = client.post("/api/env/detect", json={"content": dotenv_content}).json()
    assert data["format"] == "env"
    assert data["isValid"] is True
    assert data["confidence"] == pytest.approx(0.8)

    data = client.post("/api/env/detect", json={"content": "???"}).json()
    assert data == {"format": "unknown", "isValid": False, "confidence": 0.0}


def test_formats(client):
    data = client.get("/api/env/formats").json()
    assert [f["name"] for f in data] == ["json", "env", "postman"]
    assert data[1]["fileExtensions"] == [".env", ".env.local", ".env.production"]


def test_import(client, postman_content):
    response = client.post(
        "/api/env/import",
        json={
            "content": postman_content,
            "existing": [{"id": 3, "name": "dev", "displayName": "Dev", "variables": {}}],
        },
    )
    data = response.json()

    assert data["success"] is True
    assert data["format"] == "postman"
    assert data["environments"][0]["variables"] == {"base_url": "http://x"}
    assert data["conflicts"][0]["existingId"] == 3
    assert data["conflicts"][0]["environmentName"] == "dev"


def test_import_uses_source_name(client):
    data = client.post("/api/env/import", json={"content": "A=1", "sourceName": "staging.env"}).json()
    assert data["environments"][0]["displayName"] == "staging"

    data = client.post("/api/env/import", json={"content": "A=1", "source_name": "qa.env"}).json()
    assert data["environments"][0]["displayName"] == "qa"


def test_import_failure(client):
    data = client.post("/api/env/import", json={"content": "just words"}).json()
    assert data == {
        "success": False,
        "environments": [],
        "warnings": [],
        "errors": ["Could not detect format or invalid content: unknown"],
        "conflicts": [],
    }

    data = client.post("/api/env/import", json={"content": "A=1", "format": "xml"}).json()
    assert data["errors"] == ["Unsupported format: xml"]


def test_export(client):
    response = client.post(
        "/api/env/export",
        json={
            "environments": [{"name": "dev", "displayName": "Dev", "variables": {"A": "1"}}],
            "format": "env",
        },
    )
    data = response.json()

    assert data["success"] is True
    assert data["content"] == "# Environment: Dev\n\nA=1"
    assert data["filename"].startswith("environment-")
    assert data["filename"].endswith(".env")


def test_export_nothing(client):
    data = client.post("/api/env/export", json={"environments": [], "format": "json"}).json()
    assert data["success"] is False
    assert data["error"] == "No environments to export"


def test_export_unknown_format(client):
    response = client.post("/api/env/export", json={"environments": [], "format": "yaml"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Unsupported export format: yaml"


def test_validation_error(client):
    response = client.post("/api/curl/parse", json={})
    assert response.status_code == 422


def test_generate_coerces_loose_values(client):
    response = client.post(
        "/api/curl/generate",
        json={"request": {"url": "https://x.com", "body": {"a": 1}, "headers": {"X-Retry": 3}}},
    )
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "command": "curl https://x.com -H 'X-Retry: 3' --data-raw '{\"a\": 1}'",
    }


@pytest.mark.parametrize(
    "request_, error",
    [
        ({"url": "https://x.com", "auth": "bearer"}, "Auth must be a JSON object"),
        ({"url": "https://x.com", "queryParams": ["page=1"]}, "Key/value entry must be a JSON object"),
        ({"url": "https://x.com", "queryParams": {"page": "1"}}, "queryParams must be a JSON array"),
        ({"url": "https://x.com", "headers": ["A: b"]}, "Headers must be a JSON object"),
    ],
)
def test_generate_rejects_malformed_request(client, request_, error):
    response = client.post("/api/curl/generate", json={"request": request_})
    assert response.status_code == 200
    assert response.json() == {"success": False, "error": error}


def test_export_coerces_variable_values(client):
    response = client.post(
        "/api/env/export",
        json={
            "environments": [
                {"name": "dev", "displayName": "Dev", "variables": {"PORT": 8080, "DEBUG": True, "UNSET": None}}
            ],
            "format": "env",
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["content"] == "# Environment: Dev\n\nPORT=8080\nDEBUG=true\nUNSET="
