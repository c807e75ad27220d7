"""
Configuration for the GuerrillaMail client.

This module contains the service endpoints, the default browser identity and
the ClientConfig options object passed once when a session is created.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from fake_useragent import UserAgent

from .exceptions import ConfigurationError

# ==============================================================================
# Service Endpoints
# ==============================================================================

# Landing page scraped for the API token
BASE_URL: str = "https://www.guerrillamail.com"

# Internal AJAX endpoint used by the web page
AJAX_URL: str = "https://www.guerrillamail.com/ajax.php"

# Host name pinned on every AJAX request
HOST: str = "www.guerrillamail.com"

# ==============================================================================
# Request Settings
# ==============================================================================

# Site and language sent with form submissions
SITE: str = "guerrillamail.com"
LANG: str = "en"

# Token embedded in the landing page script: api_token : 'xxxxxxxx'
API_TOKEN_PATTERN: str = r"api_token\s*:\s*'(\w+)'"

# User agent string for requests
USER_AGENT: str = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:131.0) "
    "Gecko/20100101 Firefox/131.0"
)

# ==============================================================================
# Environment Variables
# ==============================================================================

ENV_PREFIX: str = "GUERRILLAMAIL_"

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


def load_env() -> None:
    """Load variables from a .env file, current directory first."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
    else:
        load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default

    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False

    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


@dataclass(frozen=True)
class ClientConfig:
    """
    Options for a GuerrillaMail session.

    Attributes:
        proxy: Proxy URL applied to every request (e.g. "socks5://127.0.0.1:9150").
        verify: Validate TLS certificates. Lenient by default.
        user_agent: User-Agent header sent with every AJAX request.
        ajax_url: AJAX endpoint, overridable for tests or endpoint changes.
        base_url: Landing page fetched to bootstrap the session.
        impersonate: curl_cffi browser fingerprint to impersonate (e.g. "firefox").
        verbose: Print progress through the console logger.
        random_user_agent: Pick a random Firefox user agent instead of user_agent.
    """

    proxy: Optional[str] = None
    verify: bool = False
    user_agent: str = USER_AGENT
    ajax_url: str = AJAX_URL
    base_url: str = BASE_URL
    impersonate: Optional[str] = None
    verbose: bool = False
    random_user_agent: bool = False

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """
        Build a config from GUERRILLAMAIL_* environment variables.

        Args:
            **overrides: Field values that take precedence over the environment.

        Returns:
            A new ClientConfig.

        Raises:
            ConfigurationError: If a boolean variable holds an unknown value.
        """
        load_env()

        config = cls(
            proxy=os.getenv(f"{ENV_PREFIX}PROXY") or None,
            verify=_env_bool(f"{ENV_PREFIX}VERIFY_TLS", False),
            user_agent=os.getenv(f"{ENV_PREFIX}USER_AGENT") or USER_AGENT,
            ajax_url=os.getenv(f"{ENV_PREFIX}AJAX_URL") or AJAX_URL,
            base_url=os.getenv(f"{ENV_PREFIX}BASE_URL") or BASE_URL,
            impersonate=os.getenv(f"{ENV_PREFIX}IMPERSONATE") or None,
            verbose=_env_bool(f"{ENV_PREFIX}VERBOSE", False),
        )
        return replace(config, **overrides)

    def resolve_user_agent(self) -> str:
        """Return the user agent this session should send."""
        if self.random_user_agent:
            return UserAgent().firefox
        return self.user_agent
