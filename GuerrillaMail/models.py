"""
Typed views of GuerrillaMail AJAX responses.

The service sends identifiers and timestamps either as strings or as numbers,
so both decode to str. Anything else in a field is a shape error.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .exceptions import ResponseParseError


def _str_field(data: Dict[str, Any], key: str, required: bool = True) -> Optional[str]:
    value = data.get(key)

    if value is None:
        if required:
            raise ResponseParseError(f"Missing field '{key}'")
        return None

    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ResponseParseError(
            f"Field '{key}' has unexpected type {type(value).__name__}"
        )

    return str(value)


def _read_flag(data: Dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if isinstance(value, bool):
        return value
    return _str_field(data, key, required=False) == "1"


def _require_dict(data: Any, kind: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ResponseParseError(f"Expected {kind} object, got {type(data).__name__}")
    return data


@dataclass
class Attachment:
    """Attachment metadata listed with a fetched email."""

    filename: str
    content_type: str = ""
    part_id: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Attachment":
        data = _require_dict(data, "attachment")
        return cls(
            filename=_str_field(data, "f"),
            content_type=_str_field(data, "t", required=False) or "",
            part_id=_str_field(data, "p", required=False) or "",
        )


@dataclass
class Message:
    """
    Inbox entry returned by check_email.

    Attributes:
        mail_id: Message identifier, used with fetch_email.
        mail_from: Sender address.
        mail_subject: Subject line.
        mail_excerpt: Short preview of the body.
        mail_timestamp: Arrival time as a Unix timestamp string.
        mail_read: Whether the message was already opened.
        mail_date: Human-readable arrival time, if the service sent one.
    """

    mail_id: str
    mail_from: str
    mail_subject: str
    mail_excerpt: str
    mail_timestamp: str
    mail_read: bool = False
    mail_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Message":
        """
        Decode a single inbox entry.

        Raises:
            ResponseParseError: If a required field is missing or mistyped.
        """
        data = _require_dict(data, "message")
        return cls(
            mail_id=_str_field(data, "mail_id"),
            mail_from=_str_field(data, "mail_from"),
            mail_subject=_str_field(data, "mail_subject"),
            mail_excerpt=_str_field(data, "mail_excerpt"),
            mail_timestamp=_str_field(data, "mail_timestamp"),
            mail_read=_read_flag(data, "mail_read"),
            mail_date=_str_field(data, "mail_date", required=False),
        )


@dataclass
class EmailDetails:
    """
    Full email returned by fetch_email.

    Attributes:
        mail_id: Message identifier.
        mail_from: Sender address.
        mail_subject: Subject line.
        mail_body: Message body, usually HTML.
        mail_timestamp: Arrival time as a Unix timestamp string.
        mail_excerpt: Short preview of the body.
        mail_date: Human-readable arrival time.
        mail_recipient: Recipient alias as seen by the service.
        content_type: MIME type of the body.
        mail_size: Message size in bytes, from 'mail_size' (or 'size').
        attachments: Attachment metadata from 'att_info'.
    """

    mail_id: str
    mail_from: str
    mail_subject: str
    mail_body: str
    mail_timestamp: str
    mail_excerpt: Optional[str] = None
    mail_date: Optional[str] = None
    mail_recipient: Optional[str] = None
    content_type: Optional[str] = None
    mail_size: Optional[str] = None
    attachments: List[Attachment] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "EmailDetails":
        """
        Decode a fetch_email response.

        Raises:
            ResponseParseError: If a required field is missing or mistyped.
        """
        data = _require_dict(data, "email")

        att_info = data.get("att_info") or []
        if not isinstance(att_info, list):
            raise ResponseParseError("Field 'att_info' is not a list")

        return cls(
            mail_id=_str_field(data, "mail_id"),
            mail_from=_str_field(data, "mail_from"),
            mail_subject=_str_field(data, "mail_subject"),
            mail_body=_str_field(data, "mail_body"),
            mail_timestamp=_str_field(data, "mail_timestamp"),
            mail_excerpt=_str_field(data, "mail_excerpt", required=False),
            mail_date=_str_field(data, "mail_date", required=False),
            mail_recipient=_str_field(data, "mail_recipient", required=False),
            content_type=_str_field(data, "content_type", required=False),
            mail_size=(
                _str_field(data, "mail_size", required=False)
                or _str_field(data, "size", required=False)
            ),
            attachments=[Attachment.from_dict(item) for item in att_info],
        )
