"""Helpers shared by the KV commands: target checks, key encoding and API error formatting."""

import logging
from typing import Dict
from typing import List
from typing import Optional
from urllib.parse import quote

from kvcli import terminal
from kvcli.errors import TargetValidationError
from kvcli.models import ApiError
from kvcli.models import Target


logger = logging.getLogger(__name__)

_NAMESPACE_HELP = "Run `kvcli namespace list` to see your existing namespaces with IDs"
_PAID_FEATURE_HELP = (
    "Workers KV is a paid feature, please upgrade your account (https://www.cloudflare.com/products/workers-kv/)"
)

KV_ERROR_HELP: Dict[int, str] = {
    7000: 'Your configuration is likely missing the field "account_id", which is required to write to Workers KV.',
    7003: 'Your configuration is likely missing the field "account_id", which is required to write to Workers KV.',
    10009: "Run `kvcli key list` to see your existing keys",
    10010: _NAMESPACE_HELP,
    10011: _NAMESPACE_HELP,
    10012: _NAMESPACE_HELP,
    10013: _NAMESPACE_HELP,
    10014: _NAMESPACE_HELP,
    10018: _NAMESPACE_HELP,
    10021: "Consider moving this namespace",
    10035: "Consider moving this namespace",
    10038: "Consider moving this namespace",
    10022: "See documentation",
    10024: "See documentation",
    10030: "See documentation",
    10017: _PAID_FEATURE_HELP,
    10026: _PAID_FEATURE_HELP,
}

# Gateway failures come back without a KV error code
STATUS_CONTEXT: Dict[int, str] = {
    413: "Returned status code 413, Payload Too Large. Please make sure your upload is less than 100MB in size",
    504: "Returned status code 504, Gateway Timeout. Please try again in a few seconds",
}


def validate_target(target: Target) -> None:
    missing_fields = []
    if not target.account_id:
        missing_fields.append("account_id")

    if missing_fields:
        raise TargetValidationError(f"Your configuration is missing the following field(s): {missing_fields}")


def url_encode_key(key: str) -> str:
    """Percent-encode a key so it occupies exactly one URL path segment."""
    return quote(key, safe="")


def resolve_namespace_id(target: Target, binding: Optional[str] = None, namespace_id: Optional[str] = None) -> str:
    if namespace_id:
        return namespace_id
    if not binding:
        raise TargetValidationError("Either a namespace id or a binding is required")

    for namespace in target.kv_namespaces:
        if namespace.binding == binding:
            logger.debug(f"Resolved binding {binding} to namespace {namespace.id}")
            return namespace.id

    raise TargetValidationError(f"A namespace with binding name {binding!r} was not found in your configuration")


def kv_help(error_code: int) -> str:
    return KV_ERROR_HELP.get(error_code, "")


def format_error(status_code: int, errors: List[ApiError]) -> str:
    """
    Build the report shown to the user for a rejected API call.

    Args:
        status_code: HTTP status of the response
        errors: Parsed API errors, possibly empty

    Returns:
        str: The status context line for gateway failures, if any, then one warning
        line per error, each followed by a help line when one is known
    """
    lines = []
    context = STATUS_CONTEXT.get(status_code)
    if context:
        lines.append(f"{terminal.WARN}  {context}")

    if not errors:
        lines.append(f"{terminal.WARN}  Error: the API responded with status code {status_code}")
        return "\n".join(lines)

    for error in errors:
        lines.append(f"{terminal.WARN}  Error {error.code}: {error.message}")
        suggestion = kv_help(error.code)
        if suggestion:
            lines.append(f"{terminal.SLEUTH}  {suggestion}")

    return "\n".join(lines).rstrip()
