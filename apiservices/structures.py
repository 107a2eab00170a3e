from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, NamedTuple, Optional

import httpx

from apiservices import settings

DataType = Literal["json", "text", "blob", "formData"]

MIME_TYPES: dict[str, str] = {
    "json": "application/json",
    "text": "text/plain",
    "blob": "application/octet-stream",
    "formData": "multipart/form-data",
}

URLENCODED = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class EndpointDescriptor:
    name: str
    base_url: str = field(default_factory=lambda: settings.AUTH_URL)
    path: str = ""
    method: str = "POST"
    uses_access_token: bool = True
    uses_id_token: bool = True
    accept_type: DataType = "json"
    content_type: DataType = "json"
    prefer: Optional[str] = None
    timeout_s: float = settings.DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        for attr in ("accept_type", "content_type"):
            if getattr(self, attr) not in MIME_TYPES:
                raise ValueError(f"{self.name}: unknown {attr} {getattr(self, attr)!r}")
        object.__setattr__(self, "method", self.method.upper())

    @property
    def accept_mime(self) -> str:
        return MIME_TYPES[self.accept_type]

    @property
    def content_mime(self) -> str:
        return MIME_TYPES[self.content_type]


class PreparedInput(NamedTuple):
    query: Mapping[str, Any]
    body: Any


class ServiceOutput(NamedTuple):
    error: Any
    data: Any
    response: httpx.Response
