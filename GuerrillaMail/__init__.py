"""
GuerrillaMail - Async client for the guerrillamail.com disposable email service.

Usage:
- GuerrillaMailAPI.create(config) -> bootstrapped client
- create_email(alias) -> assigned address
- get_messages(email) -> list of Message
- fetch_email(email, mail_id) -> EmailDetails
- delete_email(email) -> bool
"""

from .config import ClientConfig
from .exceptions import (
    ConfigurationError,
    GuerrillaMailError,
    ResponseParseError,
    TokenParseError,
)
from .GuerrillaMailAPI import GuerrillaMailAPI, parse_api_token
from .models import Attachment, EmailDetails, Message

__all__ = [
    'Attachment',
    'ClientConfig',
    'ConfigurationError',
    'EmailDetails',
    'GuerrillaMailAPI',
    'GuerrillaMailError',
    'Message',
    'ResponseParseError',
    'TokenParseError',
    'parse_api_token',
]
