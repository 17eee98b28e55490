"""Error types raised by kvcli.

Every failure surfaced to callers is a ``KVError`` subclass carrying an
``ErrorKind``, so callers can tell fatal local problems apart from a remote
rejection without matching on message text.
"""

import enum
from typing import List
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from kvcli.models import ApiError


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    METADATA_HINT = "metadata_hint"
    METADATA_RAW = "metadata_raw"
    FILESYSTEM = "filesystem"
    TRANSPORT = "transport"
    REMOTE_REJECTION = "remote_rejection"


class KVError(Exception):
    """Base class for all kvcli errors."""

    kind: ErrorKind = ErrorKind.VALIDATION

    @property
    def fatal(self) -> bool:
        return self.kind is not ErrorKind.REMOTE_REJECTION


class TargetValidationError(KVError):
    """Raised when the account/namespace context or the endpoint URL is unusable."""

    kind = ErrorKind.VALIDATION


class MetadataParseError(KVError):
    """Raised when --metadata is not valid JSON. Carries the decoder's message."""

    kind = ErrorKind.METADATA_RAW


class MetadataHintError(MetadataParseError):
    """Raised when --metadata looks like a string the user forgot to JSON-quote."""

    kind = ErrorKind.METADATA_HINT


class PathArgumentError(KVError):
    """Raised when --path does not point at a readable regular file."""

    kind = ErrorKind.FILESYSTEM


class KVTransportError(KVError):
    """Raised when the request could not be delivered or its body could not be streamed."""

    kind = ErrorKind.TRANSPORT


class RemoteRejectionError(KVError):
    """Raised when the API answered with a non-2xx status and the caller asked for a hard failure."""

    kind = ErrorKind.REMOTE_REJECTION

    def __init__(self, status_code: int, errors: "List[ApiError]", report: str) -> None:
        super().__init__(report)
        self.status_code = status_code
        self.errors = errors
        self.report = report
