"""Exceptions raised by the GuerrillaMail client."""


class GuerrillaMailError(Exception):
    """Base exception for all GuerrillaMail client errors."""


class ResponseParseError(GuerrillaMailError):
    """Exception raised when a response does not have the expected shape."""


class TokenParseError(ResponseParseError):
    """Exception raised when the API token is missing from the landing page."""


class ConfigurationError(GuerrillaMailError):
    """Exception raised for invalid configuration values."""
