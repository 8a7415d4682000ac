"""
Configuration manager for library usage.

Provides a clean configuration interface that bridges to the config.py
module. Internal modules read config values as module attributes at call
time, so apply() takes effect without re-importing anything.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from . import config
from .exceptions import ConfigurationError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
MIN_WRAP_WIDTH = 20


@dataclass
class ToolkitConfig:
    """Configuration for reqtools.

    Every field resolves as: explicit arg > REQTOOLS_* env var > config.py default.

    Args:
        wrap_width: Column at which generated cURL commands are wrapped
                    onto continuation lines (env REQTOOLS_CURL_WRAP_WIDTH).
        import_format: Default format for environment imports, "auto" to
                       detect (env REQTOOLS_IMPORT_FORMAT).
        host: Bind address for the HTTP server (env REQTOOLS_HOST).
        port: Port for the HTTP server (env REQTOOLS_PORT).
        log_level: Root log level used by the CLI and server
                   (env REQTOOLS_LOG_LEVEL).
    """

    wrap_width: Optional[int] = None
    import_format: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None
    log_level: Optional[str] = None

    def __post_init__(self):
        """Resolve unset fields from env vars, then module defaults."""
        if self.wrap_width is None:
            self.wrap_width = self._int_from_env("REQTOOLS_CURL_WRAP_WIDTH", config.CURL_WRAP_WIDTH)
        if self.import_format is None:
            self.import_format = os.environ.get("REQTOOLS_IMPORT_FORMAT", config.DEFAULT_IMPORT_FORMAT)
        if self.host is None:
            self.host = os.environ.get("REQTOOLS_HOST", config.API_HOST)
        if self.port is None:
            self.port = self._int_from_env("REQTOOLS_PORT", config.API_PORT)
        if self.log_level is None:
            self.log_level = os.environ.get("REQTOOLS_LOG_LEVEL", config.LOG_LEVEL)

        self.log_level = str(self.log_level).upper()
        self.validate()

    @staticmethod
    def _int_from_env(name: str, default: int) -> int:
        raw = os.environ.get(name)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            raise ConfigurationError(f"{name} must be an integer, got {raw!r}")

    def validate(self):
        """Raise ConfigurationError if any resolved value is unusable."""
        if not isinstance(self.wrap_width, int) or self.wrap_width < MIN_WRAP_WIDTH:
            raise ConfigurationError(
                f"wrap_width must be an integer >= {MIN_WRAP_WIDTH}, got {self.wrap_width!r}"
            )
        if not isinstance(self.port, int) or not 0 < self.port < 65536:
            raise ConfigurationError(f"port must be between 1 and 65535, got {self.port!r}")
        if self.log_level not in _LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level: {self.log_level}")

        from .environment.registry import get_registry
        known = {"auto"} | {info.name for info in get_registry().get_supported_formats()}
        if self.import_format not in known:
            raise ConfigurationError(f"Unknown import format: {self.import_format}")

    def apply(self):
        """Apply this configuration to the config module."""
        config.CURL_WRAP_WIDTH = self.wrap_width
        config.DEFAULT_IMPORT_FORMAT = self.import_format
        config.API_HOST = self.host
        config.API_PORT = self.port
        config.LOG_LEVEL = self.log_level

    def logging_level(self) -> int:
        return getattr(logging, self.log_level)
