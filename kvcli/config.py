import dataclasses

import dotenv

from kvcli.utils import as_bool
from kvcli.utils import env


dotenv.load_dotenv()


DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4"


@dataclasses.dataclass
class Config:
    """Application configuration settings."""

    # Cloudflare API
    api_base_url: str = env("CF_API_BASE_URL:" + DEFAULT_API_BASE_URL)
    account_id: str = env("CF_ACCOUNT_ID:")

    # Credentials: either an API token, or a global API key plus email
    api_token: str = env("CF_API_TOKEN:")
    api_key: str = env("CF_API_KEY:")
    email: str = env("CF_EMAIL:")

    # Namespace bindings, e.g. "CACHE=0f2ac74b498b48028cb68387c421e279,SESSIONS=..."
    kv_namespaces: str = env("KV_NAMESPACES:")

    # Logging
    log_level: str = env("LOG_LEVEL:WARNING")
    loki_url: str = env("LOKI_URL:", convert=str)
    loki_enabled: bool = env("LOKI_ENABLED:false", convert=as_bool)

    environment: str = env("ENVIRONMENT:production")

    # HTTP client
    http_timeout_seconds: float = env("KV_HTTP_TIMEOUT_SECONDS:60.0", convert=float)
    http_connect_timeout_seconds: float = env("KV_HTTP_CONNECT_TIMEOUT_SECONDS:10.0", convert=float)


def get_config() -> Config:
    """Get application configuration."""
    cfg = Config()

    env_value = getattr(cfg, "environment", None)
    if not env_value or not env_value.strip():
        raise ValueError("ENVIRONMENT variable is required but not set or empty")

    base_url = (cfg.api_base_url or DEFAULT_API_BASE_URL).strip().rstrip("/")
    object.__setattr__(cfg, "api_base_url", base_url or DEFAULT_API_BASE_URL)

    # Strip stray quotes/whitespace copied from dashboards
    object.__setattr__(cfg, "account_id", cfg.account_id.strip().strip("\"'"))

    return cfg
