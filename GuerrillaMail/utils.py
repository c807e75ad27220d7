"""
Utility functions for the GuerrillaMail client.

Provides console logging, error formatting and masking of secrets.
"""

CURL_HINT = "See https://curl.se/libcurl/c/libcurl-errors.html"


def logger(message: str, level: int = 0) -> None:
    """
    Print a message with indentation based on level.

    Args:
        message: The message to print.
        level: Indentation level (each level adds 2 spaces).
    """
    indent = "  " * level
    print(f"{indent}{message}")


def format_error(e: Exception) -> str:
    """
    Format an exception message by removing the libcurl documentation hint.

    curl_cffi appends a pointer to the libcurl error table to every transport
    error. This function strips it for cleaner messages.

    Args:
        e: The exception to format.

    Returns:
        A cleaned error message string.
    """
    message = str(e).split(CURL_HINT)[0].strip()
    return message or type(e).__name__


def mask(value: str, show_chars: int = 3) -> str:
    """Mask sensitive data, showing only first few characters."""
    if not value:
        return "***"
    if len(value) <= show_chars:
        return "*" * len(value)
    return value[:show_chars] + "*" * (len(value) - show_chars)
