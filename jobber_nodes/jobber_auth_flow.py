"""
OAuth 2.0 credential wiring for Jobber (authorization-code grant).
Token acquisition and refresh belong to the host; this module describes the
credential and hands out whatever valid access token the host stored.
"""
import logging
import secrets
import time
import urllib.parse
from dataclasses import dataclass
from typing import Dict, Optional

from . import jobber_config
from .jobber_config import JOBBER_AUTHORIZATION_URL, JOBBER_TOKEN_URL
from .token_storage import load_token

logger = logging.getLogger(__name__)

EXPIRY_BUFFER_SECONDS = 300


@dataclass(frozen=True)
class JobberOAuth2Credentials:
    client_id: str
    client_secret: str
    redirect_uri: str = ""
    scope: str = ""
    authorization_url_base: str = JOBBER_AUTHORIZATION_URL
    token_url: str = JOBBER_TOKEN_URL

    @classmethod
    def from_env(cls) -> "JobberOAuth2Credentials":
        if not jobber_config.JOBBER_CLIENT_ID or not jobber_config.JOBBER_CLIENT_SECRET:
            raise EnvironmentError(
                "Missing required environment variable: JOBBER_CLIENT_ID or JOBBER_CLIENT_SECRET. "
                "Please set it in your environment or .env file."
            )
        return cls(
            client_id=jobber_config.JOBBER_CLIENT_ID,
            client_secret=jobber_config.JOBBER_CLIENT_SECRET,
            redirect_uri=jobber_config.JOBBER_REDIRECT_URI,
            scope=jobber_config.JOBBER_SCOPES,
        )

    def authorization_url(self, state: Optional[str] = None) -> str:
        """Builds the URL the user is sent to in order to grant access."""
        params: Dict[str, str] = {
            "client_id": self.client_id,
            "response_type": "code",
            "state": state or secrets.token_urlsafe(32),
        }
        if self.redirect_uri:
            params["redirect_uri"] = self.redirect_uri
        if self.scope:
            params["scope"] = self.scope
        return f"{self.authorization_url_base}?{urllib.parse.urlencode(params)}"


def get_valid_access_token() -> Optional[str]:
    """
    Returns the stored access token, or None when there is none or it is about
    to expire (the host is expected to refresh it).
    """
    tokens_data = load_token()
    if not tokens_data or not tokens_data.get("access_token"):
        logger.warning("No Jobber tokens found. Please authorize the application.")
        return None

    expires_at = tokens_data.get("expires_at")
    if expires_at and float(expires_at) < time.time() + EXPIRY_BUFFER_SECONDS:
        logger.warning("Jobber access token expired or nearing expiry; waiting for the host to refresh it.")
        return None

    return tokens_data["access_token"]
