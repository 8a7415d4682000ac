"""
FastAPI Server for reqtools

Provides API endpoints for:
- Parsing curl commands (single and bulk)
- Generating curl commands from requests
- Detecting, importing and exporting environment files
"""

import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .curl import generate_curl_command, generate_request_name, parse_curl_command, parse_curl_commands
from .environment import EXPORT_FORMATS, EnvironmentExporter, detect_and_parse, get_registry
from .exceptions import ReqToolsError
from .models import EnvironmentRecord, ParsedRequest

logger = logging.getLogger(__name__)


# FastAPI app
app = FastAPI(title="reqtools API")

# Enable CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request Models
class CurlInput(BaseModel):
    command: str


class CurlBulkInput(BaseModel):
    commands: List[str]


class GenerateInput(BaseModel):
    request: Dict[str, Any]


class DetectInput(BaseModel):
    content: str


class ImportInput(BaseModel):
    content: str
    format: Optional[str] = None
    existing: List[Dict[str, Any]] = Field(default_factory=list)
    source_name: Optional[str] = Field(default=None, alias="sourceName")

    model_config = {"populate_by_name": True}


class ExportInput(BaseModel):
    environments: List[Dict[str, Any]]
    format: str


# Helper Functions
def request_payload(request: ParsedRequest) -> Dict[str, Any]:
    """Request dict with a display name, as the UI expects."""
    payload = request.to_dict()
    payload["name"] = generate_request_name(request.method, request.url)
    return payload


@app.get("/api/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


@app.post("/api/curl/parse")
async def parse_curl(data: CurlInput):
    """Parse one curl command."""
    try:
        request = parse_curl_command(data.command)
    except ReqToolsError as e:
        logger.warning("Failed to parse cURL command: %s", e)
        return {"success": False, "error": str(e)}
    return {"success": True, "request": request_payload(request)}


@app.post("/api/curl/parse-bulk")
async def parse_curl_bulk(data: CurlBulkInput):
    """Parse several curl commands; failures are reported per command."""
    results = []
    for outcome in parse_curl_commands(data.commands):
        result = outcome.to_dict()
        if outcome.request is not None:
            result["request"] = request_payload(outcome.request)
        results.append(result)
    return {"success": True, "results": results}


@app.post("/api/curl/generate")
async def generate_curl(data: GenerateInput):
    """Render a request as a curl command."""
    try:
        request = ParsedRequest.from_dict(data.request)
    except ReqToolsError as e:
        logger.warning("Invalid request for cURL generation: %s", e)
        return {"success": False, "error": str(e)}
    return {"success": True, "command": generate_curl_command(request)}


@app.post("/api/env/detect")
async def detect_format(data: DetectInput):
    """Detect which environment format some content is in."""
    return get_registry().detect_format(data.content).to_dict()


@app.get("/api/env/formats")
async def list_formats():
    """Formats available for import."""
    return [info.to_dict() for info in get_registry().get_supported_formats()]


@app.post("/api/env/import")
async def import_environments(data: ImportInput):
    """Import environments from file content."""
    start_time = time.perf_counter()
    try:
        existing = [EnvironmentRecord.from_dict(env) for env in data.existing]
        result = detect_and_parse(
            data.content,
            format_name=data.format,
            existing=existing,
            source_name=data.source_name,
        )
    except ReqToolsError as e:
        logger.error("Environment import failed: %s", e)
        return {
            "success": False,
            "environments": [],
            "warnings": [],
            "errors": [str(e) or "Failed to import environments"],
            "conflicts": [],
        }

    logger.info(
        "Environment import: format=%s count=%d load_time=%.1fms",
        result.format,
        len(result.environments),
        (time.perf_counter() - start_time) * 1000,
    )
    return result.to_dict()


@app.post("/api/env/export")
async def export_environments(data: ExportInput):
    """Export environments to JSON, .env or Postman format."""
    if data.format not in EXPORT_FORMATS:
        raise HTTPException(status_code=400, detail=f"Unsupported export format: {data.format}")

    try:
        environments = [EnvironmentRecord.from_dict(env) for env in data.environments]
    except ReqToolsError as e:
        return {"success": False, "content": "", "filename": "", "error": str(e)}
    if not environments:
        return {"success": False, "content": "", "filename": "", "error": "No environments to export"}

    generator = EnvironmentExporter()
    content = generator.generate(environments, data.format)

    return {
        "success": True,
        "content": content,
        "filename": generator.generate_filename(data.format, len(environments)),
    }
