"""
HTTP client factory for the Cloudflare API.

Clients carry authentication headers only; there is no retry layer, each
command sends exactly one request.
"""

import logging
from typing import Dict
from typing import Optional

import httpx

from kvcli import __version__
from kvcli.config import Config
from kvcli.config import get_config
from kvcli.errors import TargetValidationError
from kvcli.models import GlobalUser


logger = logging.getLogger(__name__)

USER_AGENT = f"kvcli/{__version__}"


def get_auth_headers(user: GlobalUser) -> Dict[str, str]:
    """
    Get HTTP headers with authentication.

    Returns:
        Dict[str, str]: Headers with an API token, or a global API key and email
    """
    if user.api_token:
        return {"Authorization": f"Bearer {user.api_token}"}
    if user.api_key and user.email:
        return {"X-Auth-Key": user.api_key, "X-Auth-Email": user.email}
    raise TargetValidationError("No credentials found: set CF_API_TOKEN, or CF_API_KEY and CF_EMAIL")


def legacy_auth_client(user: GlobalUser, config: Optional[Config] = None) -> httpx.Client:
    """Build a blocking client that authenticates every request as ``user``."""
    config = config or get_config()
    headers = get_auth_headers(user)
    logger.debug(f"Building API client with {'token' if user.api_token else 'global key'} authentication")
    headers["User-Agent"] = USER_AGENT

    return httpx.Client(
        headers=headers,
        timeout=httpx.Timeout(
            config.http_timeout_seconds,
            connect=config.http_connect_timeout_seconds,
        ),
        follow_redirects=True,
    )
