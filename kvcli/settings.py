"""Build the account target and user credentials from configuration."""

from typing import Optional

from kvcli.config import Config
from kvcli.config import get_config
from kvcli.errors import TargetValidationError
from kvcli.models import GlobalUser
from kvcli.models import KVNamespace
from kvcli.models import Target
from kvcli.utils import parse_pairs


def load_target(config: Optional[Config] = None) -> Target:
    config = config or get_config()
    try:
        bindings = parse_pairs(config.kv_namespaces)
    except ValueError as e:
        raise TargetValidationError(f"Invalid KV_NAMESPACES: {e}") from None

    return Target(
        account_id=config.account_id,
        name=config.environment,
        kv_namespaces=[KVNamespace(binding=binding, id=ns_id) for binding, ns_id in bindings.items()],
    )


def load_user(config: Optional[Config] = None) -> GlobalUser:
    config = config or get_config()
    if config.api_token:
        return GlobalUser(api_token=config.api_token)
    if config.api_key and config.email:
        return GlobalUser(api_key=config.api_key, email=config.email)
    raise TargetValidationError("No credentials found: set CF_API_TOKEN, or CF_API_KEY and CF_EMAIL")
