"""Pytest configuration and shared fixtures."""

import json
from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from curl_cffi.requests.exceptions import HTTPError

from GuerrillaMail import ClientConfig, GuerrillaMailAPI

LANDING_PAGE = """
<html><head><script>
    var gm = {
        api_token : 'abc123TOKEN',
        lang : 'en'
    };
</script></head><body>Guerrilla Mail</body></html>
"""


def make_response(
    status_code: int = 200,
    json_data: Any = None,
    text: Optional[str] = None
) -> MagicMock:
    """Build a mock curl_cffi response. Passing text makes json() fail."""
    response = MagicMock()
    response.status_code = status_code

    if text is not None:
        response.text = text
        response.json.side_effect = json.JSONDecodeError("Expecting value", text, 0)
    else:
        response.text = json.dumps(json_data)
        response.json.return_value = json_data

    if status_code >= 400:
        response.raise_for_status.side_effect = HTTPError(f"HTTP Error {status_code}")

    return response


@pytest.fixture
def session() -> MagicMock:
    s = MagicMock()
    s.get = AsyncMock()
    s.post = AsyncMock()
    s.close = AsyncMock()
    return s


@pytest.fixture
def api(session: MagicMock) -> GuerrillaMailAPI:
    """Client wrapping a mocked session (no live bootstrap needed)."""
    config = ClientConfig(ajax_url="http://mock.local/ajax.php")
    return GuerrillaMailAPI(session, "tok123", config)


@pytest.fixture
def sample_message() -> dict:
    return {
        "mail_id": "42",
        "mail_from": "sender@example.com",
        "mail_subject": "Your verification code",
        "mail_excerpt": "Use 123456 to verify",
        "mail_timestamp": "1700000000",
        "mail_read": 0,
        "mail_date": "12:00:00",
    }


@pytest.fixture
def sample_details(sample_message: dict) -> dict:
    return {
        **sample_message,
        "mail_body": "<p>Use <b>123456</b> to verify</p>",
        "mail_recipient": "myalias",
        "content_type": "text/html",
        "mail_size": "2048",
        "att_info": [
            {"f": "invoice.pdf", "t": "application/pdf", "p": "2"},
        ],
    }
