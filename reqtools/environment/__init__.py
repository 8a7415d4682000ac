"""
Environment module for importing and exporting variable sets.

- strategy.py: Shared base for import formats (validation, format info)
- json_format.py: Native JSON environments
- postman.py: Postman environment exports
- dotenv.py: .env key/value files
- registry.py: Format detection across registered strategies
- importer.py: Detect, parse, validate and check for conflicts
- exporter.py: Render environments back to each format
"""

from .strategy import ImportStrategy, safe_parse_json, JsonResult
from .json_format import JsonStrategy
from .postman import PostmanStrategy
from .dotenv import DotenvStrategy
from .registry import FormatRegistry, get_registry, create_default_registry
from .importer import ImportResult, detect_and_parse, find_conflicts
from .exporter import EnvironmentExporter, export_environments, EXPORT_FORMATS
