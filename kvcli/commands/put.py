"""
Write a single key/value pair to a Workers KV namespace.

The value endpoint does not take JSON: without metadata the request body is
the raw value, with metadata it is a multipart form holding ``value`` and
``metadata`` parts.
"""

import contextlib
import json
import logging
import os
import stat
from typing import BinaryIO
from typing import Iterator
from typing import List
from typing import Optional
from typing import Tuple
from typing import Union

import httpx

from kvcli import terminal
from kvcli.api_client import legacy_auth_client
from kvcli.config import get_config
from kvcli.errors import KVTransportError
from kvcli.errors import MetadataParseError
from kvcli.errors import PathArgumentError
from kvcli.errors import RemoteRejectionError
from kvcli.errors import TargetValidationError
from kvcli.kv import format_error
from kvcli.kv import url_encode_key
from kvcli.kv import validate_target
from kvcli.models import ApiError
from kvcli.models import ApiErrors
from kvcli.models import GlobalUser
from kvcli.models import KVMetaData
from kvcli.models import PutResult
from kvcli.models import Target


logger = logging.getLogger(__name__)

RequestBody = Union[bytes, BinaryIO]


def build_url(target: Target, data: KVMetaData, api_base_url: Optional[str] = None) -> httpx.URL:
    """
    Build the value endpoint for ``data.key``, with expiration query parameters when set.

    Raises:
        TargetValidationError: If the endpoint and parameters do not form a valid URL
    """
    base_url = api_base_url or get_config().api_base_url
    api_endpoint = (
        f"{base_url}/accounts/{target.account_id}/storage/kv/namespaces/"
        f"{data.namespace_id}/values/{url_encode_key(data.key)}"
    )

    query_params: List[Tuple[str, str]] = []
    if data.expiration is not None:
        query_params.append(("expiration", data.expiration))
    if data.expiration_ttl is not None:
        query_params.append(("expiration_ttl", data.expiration_ttl))

    try:
        url = httpx.URL(api_endpoint, params=query_params) if query_params else httpx.URL(api_endpoint)
    except httpx.InvalidURL as e:
        raise TargetValidationError(f"Invalid URL {api_endpoint!r}: {e}") from None

    if url.scheme not in ("http", "https") or not url.host:
        raise TargetValidationError(f"Invalid URL {api_endpoint!r}: expected an absolute http(s) URL")
    return url


def check_path(path: str) -> None:
    """Make sure ``path`` names a regular file; symlinks are not followed."""
    try:
        mode = os.lstat(path).st_mode
    except OSError as e:
        raise PathArgumentError(str(e)) from None

    if stat.S_ISREG(mode):
        return
    if stat.S_ISDIR(mode):
        raise PathArgumentError(f"--path argument takes a file, {path} is a directory")
    raise PathArgumentError(f"--path argument takes a file, {path} is a symlink")


@contextlib.contextmanager
def open_value_file(path: str) -> Iterator[BinaryIO]:
    check_path(path)
    try:
        fp = open(path, "rb")
    except OSError as e:
        raise PathArgumentError(str(e)) from None

    with fp:
        yield fp


@contextlib.contextmanager
def get_request_body(data: KVMetaData) -> Iterator[RequestBody]:
    """
    Resolve the raw request body for a put without metadata.

    Yields the value's bytes, or an open handle to the file named by the value
    when ``is_file`` is set. The handle is closed when the block exits.
    """
    if not data.is_file:
        yield data.value.encode("utf-8")
        return

    with open_value_file(data.value) as fp:
        yield fp


def _send(client: httpx.Client, url: httpx.URL, data: KVMetaData) -> httpx.Response:
    if data.metadata is not None:
        try:
            serialized = json.dumps(data.metadata.value, separators=(",", ":"), allow_nan=False)
        except ValueError as e:
            raise MetadataParseError(str(e)) from None
        form = {"metadata": serialized}
        if data.is_file:
            logger.debug(f"Uploading {data.value} as multipart form with metadata")
            with open_value_file(data.value) as fp:
                files = {"value": (os.path.basename(data.value), fp, "application/octet-stream")}
                return client.put(url, data=form, files=files)

        logger.debug("Uploading literal value as multipart form with metadata")
        # No filename, so the value part is sent as a plain form field
        return client.put(url, data=form, files={"value": (None, data.value)})

    with get_request_body(data) as body:
        logger.debug(f"Uploading {'file stream' if data.is_file else 'literal value'} as raw body")
        return client.put(url, content=body, headers={"Content-Type": "application/octet-stream"})


def get_response(client: httpx.Client, url: httpx.URL, data: KVMetaData) -> httpx.Response:
    """Send the put request. Local file problems surface before anything goes on the wire."""
    try:
        return _send(client, url, data)
    except httpx.RequestError as e:
        raise KVTransportError(f"Request to {url.host} failed: {e}") from e
    except OSError as e:
        raise KVTransportError(f"Failed to stream request body: {e}") from e


def parse_api_errors(response: httpx.Response) -> List[ApiError]:
    try:
        return ApiErrors.model_validate(response.json()).errors
    except ValueError:
        return []


def put(
    target: Target,
    user: GlobalUser,
    data: KVMetaData,
    client: Optional[httpx.Client] = None,
    raise_on_rejection: bool = False,
) -> PutResult:
    """
    Write ``data`` to its namespace.

    Args:
        target: Account context holding the account id
        user: Credentials used when no client is injected
        data: The key, value and options to write
        client: Optional pre-authenticated client; left open after the call
        raise_on_rejection: Raise instead of returning when the API rejects the write

    Returns:
        PutResult: Outcome of the call; ``success`` is False when the API rejected the write

    Raises:
        TargetValidationError: If the target or URL is invalid
        PathArgumentError: If ``data.is_file`` is set and the path is not a regular file
        KVTransportError: If the request could not be sent
        RemoteRejectionError: If the API rejected the write and ``raise_on_rejection`` is set
    """
    validate_target(target)

    config = get_config()
    url = build_url(target, data, config.api_base_url)
    logger.info(f"Writing key {data.key!r} to namespace {data.namespace_id}")

    owns_client = client is None
    http_client = legacy_auth_client(user, config) if client is None else client
    try:
        response = get_response(http_client, url, data)
    finally:
        if owns_client:
            http_client.close()

    if response.is_success:
        terminal.success("Success")
        return PutResult(success=True, status_code=response.status_code)

    errors = parse_api_errors(response)
    report = format_error(response.status_code, errors)
    logger.warning(f"Put rejected with status {response.status_code}: {[e.code for e in errors]}")

    if raise_on_rejection:
        raise RemoteRejectionError(response.status_code, errors, report)

    print(report)
    return PutResult(success=False, status_code=response.status_code, errors=errors, report=report)
