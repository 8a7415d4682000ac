#!/usr/bin/env python
"""
Run the API Server

Starts the FastAPI server for cURL and environment conversions.

Usage:
    python run_server.py

The server runs on http://127.0.0.1:8765 unless REQTOOLS_HOST /
REQTOOLS_PORT say otherwise.

Endpoints:
    GET  /api/health           - Health check
    POST /api/curl/parse       - Parse a curl command
    POST /api/curl/parse-bulk  - Parse several curl commands
    POST /api/curl/generate    - Generate a curl command
    POST /api/env/detect       - Detect environment file format
    GET  /api/env/formats      - List import formats
    POST /api/env/import       - Import environments
    POST /api/env/export       - Export environments
"""

import logging

import uvicorn

from reqtools.config_manager import ToolkitConfig

if __name__ == "__main__":
    settings = ToolkitConfig()
    settings.apply()
    logging.basicConfig(level=settings.logging_level())
    uvicorn.run("reqtools.server:app", host=settings.host, port=settings.port, reload=False)
