import json
import re
from typing import NoReturn
from typing import Optional

from kvcli.errors import MetadataHintError
from kvcli.errors import MetadataParseError
from kvcli.models import Metadata


# Optional quote, then no quotes or JSON brackets, then optional quote.
_UNQUOTED_STRING_RE = re.compile(r"""['"]?[^"'{}\[\]]*['"]?""")


def looks_like_unquoted_string(value: str) -> bool:
    """Return True when ``value`` reads like a plain string the user forgot to JSON-quote."""
    return _UNQUOTED_STRING_RE.fullmatch(value) is not None


def _reject_constant(name: str) -> NoReturn:
    # NaN and Infinity are Python extensions, not JSON
    raise ValueError(f"{name} is not a valid JSON value")


def parse_metadata(arg: Optional[str]) -> Optional[Metadata]:
    """
    Parse the --metadata argument as JSON.

    Args:
        arg: Raw argument text, or None when the flag was not given

    Returns:
        The decoded JSON value wrapped in ``Metadata`` (JSON ``null`` included),
        or None when no metadata was given

    Raises:
        MetadataHintError: If the text is not JSON but looks like an unquoted string
        MetadataParseError: If the text is not JSON for any other reason
    """
    if arg is None:
        return None

    try:
        return Metadata(value=json.loads(arg, parse_constant=_reject_constant))
    except ValueError as e:
        if looks_like_unquoted_string(arg):
            raise MetadataHintError(
                f"did you remember to double quote strings, like --metadata '\"{arg}\"'"
            ) from None
        raise MetadataParseError(str(e)) from None
