from typing import Any
from typing import List
from typing import Optional

from pydantic import BaseModel
from pydantic import Field


class KVNamespace(BaseModel):
    binding: str
    id: str


class Target(BaseModel):
    account_id: str = ""
    name: str = "default"
    kv_namespaces: List[KVNamespace] = Field(default_factory=list)


class GlobalUser(BaseModel):
    api_token: Optional[str] = None
    api_key: Optional[str] = None
    email: Optional[str] = None


class Metadata(BaseModel):
    """A parsed --metadata value. ``value`` may be None for a JSON null."""

    value: Any


class KVMetaData(BaseModel):
    """A single put request. ``value`` is a path when ``is_file`` is set."""

    namespace_id: str = Field(min_length=1)
    key: str
    value: str
    is_file: bool = False
    expiration: Optional[str] = None
    expiration_ttl: Optional[str] = None
    metadata: Optional[Metadata] = None


class ApiError(BaseModel):
    code: int
    message: str = ""


class ApiErrors(BaseModel):
    """Error envelope returned by the Cloudflare v4 API on failure."""

    result: Any = None
    success: bool = False
    errors: List[ApiError] = Field(default_factory=list)
    messages: List[Any] = Field(default_factory=list)


class PutResult(BaseModel):
    success: bool
    status_code: int
    errors: List[ApiError] = Field(default_factory=list)
    report: str = ""
