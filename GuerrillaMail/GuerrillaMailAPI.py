"""
GuerrillaMail temporary email service integration.

Website: https://www.guerrillamail.com
API: https://www.guerrillamail.com/ajax.php (internal AJAX endpoint)
Features: async curl_cffi transport, shared cookie jar, proxy support
"""

import asyncio
import re
import time
from typing import Any, Dict, List, Optional

from curl_cffi.requests import AsyncSession, Response
from curl_cffi.requests.exceptions import RequestException

from .config import API_TOKEN_PATTERN, HOST, LANG, SITE, ClientConfig
from .exceptions import ResponseParseError, TokenParseError
from .models import EmailDetails, Message
from .utils import format_error, logger, mask

_TOKEN_RE = re.compile(API_TOKEN_PATTERN)


def parse_api_token(html: str) -> str:
    """
    Extract the API token from the landing page.

    Args:
        html: Landing page body.

    Returns:
        The token string.

    Raises:
        TokenParseError: If the page does not embed a token.
    """
    match = _TOKEN_RE.search(html or "")
    if not match:
        raise TokenParseError("API token not found on the GuerrillaMail landing page")
    return match.group(1)


class GuerrillaMailAPI:
    """
    GuerrillaMail temporary email service client.

    Use GuerrillaMailAPI.create() to bootstrap a session. All calls reuse the
    session's cookie jar and send the scraped token in the Authorization header.

    Attributes:
        body_key: Key used to access the body in fetched emails.
    """

    body_key = "mail_body"

    def __init__(
        self,
        session: AsyncSession,
        api_token: str,
        config: Optional[ClientConfig] = None
    ):
        """
        Wrap an already bootstrapped session.

        Args:
            session: curl_cffi session holding the landing page cookies.
            api_token: Token scraped from the landing page.
            config: Options the session was created with.
        """
        self.config = config or ClientConfig()
        self.session = session
        self.api_token = api_token
        self.user_agent = self.config.resolve_user_agent()
        self.ajax_url = self.config.ajax_url

    @staticmethod
    def _init_session(config: ClientConfig) -> AsyncSession:
        """Create an HTTP session with proxy, TLS and impersonation settings."""
        proxies: Dict[str, str] = {}
        if config.proxy:
            proxies = {
                "http": config.proxy,
                "https": config.proxy
            }

        kwargs: Dict[str, Any] = {"verify": config.verify, "proxies": proxies}
        if config.impersonate:
            kwargs["impersonate"] = config.impersonate

        return AsyncSession(**kwargs)

    @classmethod
    async def create(cls, config: Optional[ClientConfig] = None) -> "GuerrillaMailAPI":
        """
        Bootstrap a new session.

        Fetches the landing page once to obtain the API token and the session
        cookies. The transport is closed again if bootstrapping fails.

        Args:
            config: Session options. Defaults to ClientConfig().

        Returns:
            A ready client.

        Raises:
            TokenParseError: If the landing page has no token.
            RequestException: On connection failure or HTTP error status.
        """
        config = config or ClientConfig()
        session = cls._init_session(config)

        if config.verbose:
            logger("🚀 Initializing GuerrillaMailAPI...", level=0)

        try:
            response = await session.get(config.base_url)
            response.raise_for_status()
            api_token = parse_api_token(response.text)
        except BaseException as e:
            if config.verbose:
                logger(f"✗ Bootstrap failed: {format_error(e)}", level=1)
            await session.close()
            raise

        if config.verbose:
            logger(f"✅ Token: {mask(api_token, 4)}", level=1)
            logger("✅ API ready", level=0)

        return cls(session, api_token, config)

    @property
    def proxy(self) -> Optional[str]:
        """Proxy URL the session was configured with, if any."""
        return self.config.proxy

    async def close(self) -> None:
        """Close the HTTP session."""
        await self.session.close()

    async def __aenter__(self) -> "GuerrillaMailAPI":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def _log(self, message: str, level: int = 0) -> None:
        if self.config.verbose:
            logger(message, level=level)

    @staticmethod
    def extract_alias(email: str) -> str:
        """Return the local part of an address, or the whole string without '@'."""
        return email.split("@", 1)[0]

    @staticmethod
    def timestamp() -> str:
        """Milliseconds since the epoch, used to bust caches on GET requests."""
        return str(time.time_ns() // 1_000_000)

    def _headers(self, form: bool = True) -> Dict[str, str]:
        """
        Build browser-like headers for AJAX requests.

        Args:
            form: Include the form Content-Type (POST requests).

        Returns:
            Headers dictionary.
        """
        headers = {
            "Host": HOST,
            "User-Agent": self.user_agent,
            "Accept": "application/json, text/javascript, */*; q=0.01",
            "Accept-Language": "en-US,en;q=0.5",
            "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
            "Authorization": f"ApiToken {self.api_token}",
            "X-Requested-With": "XMLHttpRequest",
            "Origin": "https://www.guerrillamail.com",
            "Referer": "https://www.guerrillamail.com/",
            "Sec-Fetch-Dest": "empty",
            "Sec-Fetch-Mode": "cors",
            "Sec-Fetch-Site": "same-origin",
            "Priority": "u=0",
        }
        if not form:
            del headers["Content-Type"]
        return headers

    async def _send(
        self,
        method: str,
        params: Dict[str, str],
        data: Optional[Dict[str, str]] = None,
        level: int = 0
    ) -> Response:
        """
        Send a single request to the AJAX endpoint.

        Args:
            method: HTTP method ('GET' or 'POST').
            params: Query string parameters.
            data: Form fields for POST requests.
            level: Logging indentation level.

        Returns:
            The raw response, whatever its status.
        """
        try:
            if method == "GET":
                return await self.session.get(
                    self.ajax_url,
                    params=params,
                    headers=self._headers(form=False)
                )
            return await self.session.post(
                self.ajax_url,
                params=params,
                data=data,
                headers=self._headers()
            )
        except RequestException as e:
            self._log(f"✗ Request failed: {format_error(e)}", level=level)
            raise

    def _json(self, response: Response, level: int = 0) -> Any:
        """Raise on HTTP error status, then decode the JSON body."""
        try:
            response.raise_for_status()
        except RequestException as e:
            self._log(f"✗ Error {response.status_code}: {format_error(e)}", level=level)
            raise

        try:
            return response.json()
        except ValueError as e:
            raise ResponseParseError(f"Invalid JSON response: {e}") from e

    async def _get_api(
        self,
        function: str,
        email: str,
        email_id: Optional[str] = None,
        level: int = 0
    ) -> Any:
        """
        Common GET request against the AJAX endpoint.

        Args:
            function: AJAX function name ('check_email', 'fetch_email').
            email: Full email address.
            email_id: Message id for fetch_email.
            level: Logging indentation level.

        Returns:
            Decoded JSON body.
        """
        params: Dict[str, str] = {"f": function}
        if function == "check_email":
            params["seq"] = "1"
        if email_id is not None:
            params["email_id"] = email_id
        params["site"] = SITE
        params["in"] = self.extract_alias(email)
        params["_"] = self.timestamp()

        response = await self._send("GET", params, level=level)
        return self._json(response, level=level)

    async def create_email(self, alias: str, level: int = 0) -> str:
        """
        Create a temporary email address.

        The service may alter the alias, so always use the returned address.

        Args:
            alias: Requested local part.
            level: Logging indentation level.

        Returns:
            The full email address assigned by GuerrillaMail.

        Raises:
            ResponseParseError: If the response has no 'email_addr'.
            RequestException: On transport failure or HTTP error status.
        """
        self._log("[######] Generating new email...", level=level)

        form = {
            "email_user": alias,
            "lang": LANG,
            "site": SITE,
            "in": " Set cancel",
        }
        response = await self._send("POST", {"f": "set_email_user"}, form, level=level + 1)
        data = self._json(response, level=level + 1)

        email = data.get("email_addr") if isinstance(data, dict) else None
        if not isinstance(email, str):
            self._log(f"✗ Failed to generate email: {data}", level=level + 1)
            raise ResponseParseError("Response has no 'email_addr' field")

        self._log(f"✅ Email: {email}", level=level + 1)
        return email

    async def get_messages(self, email: str, level: int = 0) -> List[Message]:
        """
        Retrieve the inbox of an address.

        Entries that do not decode are skipped, so one bad record does not hide
        the rest of the inbox.

        Args:
            email: Full email address.
            level: Logging indentation level.

        Returns:
            Messages in the inbox, possibly empty.
        """
        data = await self._get_api("check_email", email, level=level + 1)

        entries = data.get("list") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            entries = []

        messages: List[Message] = []
        for entry in entries:
            try:
                messages.append(Message.from_dict(entry))
            except ResponseParseError as e:
                self._log(f"⚠ Skipping malformed entry: {e}", level=level + 1)

        self._log(f"📬 Found {len(messages)} emails", level=level)
        return messages

    async def fetch_email(self, email: str, mail_id: str, level: int = 0) -> EmailDetails:
        """
        Retrieve the full content of a specific email.

        Args:
            email: Full email address.
            mail_id: Message id from get_messages.
            level: Logging indentation level.

        Returns:
            The email including its body.

        Raises:
            ResponseParseError: If the response does not decode.
        """
        data = await self._get_api("fetch_email", email, email_id=mail_id, level=level + 1)
        details = EmailDetails.from_dict(data)

        self._log(f"📧 Retrieved email: {mail_id}", level=level)
        return details

    async def delete_email(self, email: str, level: int = 0) -> bool:
        """
        Ask the service to forget an address.

        Args:
            email: Full email address.
            level: Logging indentation level.

        Returns:
            True if the service answered with a 2xx status.
        """
        form = {
            "site": SITE,
            "in": self.extract_alias(email),
        }
        response = await self._send("POST", {"f": "forget_me"}, form, level=level + 1)

        deleted = 200 <= response.status_code < 300
        if deleted:
            self._log(f"🗑 Forgot: {email}", level=level)
        else:
            self._log(f"✗ Error {response.status_code} while forgetting {email}", level=level)
        return deleted

    async def wait_for_email(
        self,
        email: str,
        timeout: float = 60,
        interval: float = 5,
        level: int = 0
    ) -> Optional[Message]:
        """
        Wait for a message to arrive in the inbox.

        Args:
            email: Full email address.
            timeout: Maximum wait time in seconds.
            interval: Poll interval in seconds.
            level: Logging indentation level.

        Returns:
            First message in the inbox, or None if timeout.
        """
        self._log(f"⏳ Waiting for email (timeout: {timeout}s)...", level=level)
        start = time.monotonic()

        while True:
            messages = await self.get_messages(email, level=level + 1)
            if messages:
                self._log("✅ New email received!", level=level + 1)
                return messages[0]

            elapsed = time.monotonic() - start
            if elapsed + interval > timeout:
                break

            self._log(f"⏳ Waiting... ({int(elapsed)}/{timeout}s)", level=level + 1)
            await asyncio.sleep(interval)

        self._log("⏰ Timeout - no email received", level=level + 1)
        return None

    async def print_inbox(self, email: str, level: int = 0) -> None:
        """
        Print formatted inbox contents.

        Args:
            email: Full email address.
            level: Logging indentation level.
        """
        messages = await self.get_messages(email, level=level)

        if not messages:
            logger("📭 Inbox is empty", level=level)
            return

        logger(f"📬 Inbox for: {email}", level=level)

        for i, message in enumerate(messages, 1):
            logger(f"📩 Email #{i}", level=level + 1)
            logger(f"ID: {message.mail_id}", level=level + 2)
            logger(f"From: {message.mail_from}", level=level + 2)
            logger(f"Subject: {message.mail_subject}", level=level + 2)
            logger(
                f"Preview: {message.mail_excerpt[:50]}..." if message.mail_excerpt else "Preview: N/A",
                level=level + 2
            )
            logger(f"Read: {message.mail_read}", level=level + 2)


if __name__ == "__main__":
    async def main() -> None:
        async with await GuerrillaMailAPI.create(ClientConfig(verbose=True)) as api:
            email = await api.create_email("myalias")
            print(f"Email: {email}")

            message = await api.wait_for_email(email, timeout=120)
            if message:
                details = await api.fetch_email(email, message.mail_id)
                print(details.mail_body)

            await api.print_inbox(email)
            await api.delete_email(email)

    asyncio.run(main())
