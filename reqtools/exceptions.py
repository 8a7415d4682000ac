"""Custom exceptions for the reqtools library."""


class ReqToolsError(Exception):
    """Base exception for all reqtools errors."""
    pass


class ConfigurationError(ReqToolsError):
    """Raised when configuration is invalid or incomplete."""
    pass


class CurlParseError(ReqToolsError, ValueError):
    """Raised when a cURL command cannot be turned into a request."""
    pass


class EmptyCommandError(CurlParseError):
    """Raised when the cURL command has no content."""

    def __init__(self, message: str = "Empty cURL command"):
        super().__init__(message)


class MissingUrlError(CurlParseError):
    """Raised when no URL-shaped argument is found in the command."""

    def __init__(self, message: str = "URL not found in cURL command"):
        super().__init__(message)


class EnvironmentImportError(ReqToolsError):
    """Base exception for environment import failures."""
    pass


class EnvironmentParseError(EnvironmentImportError, ValueError):
    """Raised when content is malformed for the selected format."""
    pass


class UnrecognizedFormatError(EnvironmentImportError):
    """Raised when no registered format claims the content."""

    def __init__(self, message: str = "Could not detect format or invalid content: unknown"):
        super().__init__(message)


class UnsupportedFormatError(EnvironmentImportError):
    """Raised when an explicit format name is not registered."""

    def __init__(self, format_name: str):
        self.format_name = format_name
        super().__init__(f"Unsupported format: {format_name}")


class InvalidPayloadError(ReqToolsError, ValueError):
    """Raised when a request or environment dictionary has the wrong shape."""
    pass
