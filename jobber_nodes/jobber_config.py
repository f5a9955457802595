"""
Configuration for the Jobber API, OAuth credentials and the webhook trigger.
Loads settings from environment variables (and a local .env file).
"""
import os
from dotenv import load_dotenv
from typing import Final

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


JOBBER_GRAPHQL_URL: Final[str] = "https://api.getjobber.com/api/graphql"
JOBBER_API_VERSION: Final[str] = "2025-04-16"
JOBBER_AUTHORIZATION_URL: Final[str] = "https://api.getjobber.com/api/oauth/authorize"
JOBBER_TOKEN_URL: Final[str] = "https://api.getjobber.com/api/oauth/token"

# Jobber rejects connection page sizes above this.
MAX_PAGE_SIZE: Final[int] = 100
DEDUP_WINDOW_SIZE: Final[int] = 100
WEBHOOK_SIGNATURE_HEADER: Final[str] = "x-jobber-hmac-sha256"

# --- OAuth client (only required when credentials are built from the environment) ---
JOBBER_CLIENT_ID: str = os.getenv("JOBBER_CLIENT_ID", "")
JOBBER_CLIENT_SECRET: str = os.getenv("JOBBER_CLIENT_SECRET", "")
JOBBER_REDIRECT_URI: str = os.getenv("JOBBER_REDIRECT_URI", "")
JOBBER_SCOPES: str = os.getenv("JOBBER_SCOPES", "")

HTTP_TIMEOUT_SECONDS: int = int(os.getenv("JOBBER_HTTP_TIMEOUT_SECONDS", "30"))
READ_ONLY: bool = _env_flag("JOBBER_READ_ONLY", False)

# --- Webhook trigger ---
WEBHOOK_EVENT: str = os.getenv("JOBBER_WEBHOOK_EVENT", "CLIENT_CREATE")
WEBHOOK_VERIFY_SIGNATURE: bool = _env_flag("JOBBER_WEBHOOK_VERIFY_SIGNATURE", True)
WEBHOOK_DEDUPLICATE: bool = _env_flag("JOBBER_WEBHOOK_DEDUPLICATE", True)
STATIC_DATA_PATH: str = os.getenv("JOBBER_STATIC_DATA_PATH", "")

FLASK_PORT: int = int(os.getenv("FLASK_PORT", "5000"))
