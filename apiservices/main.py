from __future__ import annotations
import json
import re
from typing import Any, Callable, Iterable

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from apiservices.endpoints import ENDPOINTS
from apiservices.logConfig import configure_logging
from apiservices.structures import EndpointDescriptor

logger = structlog.get_logger(__name__)

_PREFER_SPLIT = re.compile(r"[,;\s]+")


def parse_prefer(header: str | None) -> dict[str, str]:
    prefs: dict[str, str] = {}
    for item in _PREFER_SPLIT.split(header or ""):
        key, sep, value = item.partition("=")
        if key and sep:
            prefs[key.strip().lower()] = value.strip().strip('"')
    return prefs


def require_bearer_token(request: Request) -> None:
    auth_header = request.headers.get("authorization", "")
    if not auth_header.startswith("Bearer ") or not auth_header[len("Bearer "):].strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def read_body(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="body is not JSON")


def mock_handler(ep: EndpointDescriptor) -> Callable[[Request], Any]:
    async def handler(request: Request) -> Response:
        if ep.uses_access_token:
            require_bearer_token(request)

        prefs = parse_prefer(request.headers.get("prefer"))
        try:
            status_code = int(prefs.get("code", status.HTTP_200_OK))
        except ValueError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="bad Prefer code")

        example = prefs.get("example")
        logger.info("mock request", endpoint=ep.name, example=example, status_code=status_code)

        if ep.accept_type == "text":
            return PlainTextResponse(f"{ep.name}: {example or 'default'}", status_code=status_code)

        return JSONResponse(
            {
                "endpoint": ep.name,
                "example": example,
                "params": dict(request.path_params),
                "query": dict(request.query_params),
                "body": await read_body(request),
            },
            status_code=status_code,
        )

    handler.__name__ = ep.name
    return handler


def build_app(endpoints: Iterable[EndpointDescriptor] = ENDPOINTS) -> FastAPI:
    """Mock API answering every registered endpoint.

    ``Prefer: example=<name>`` is echoed back and ``Prefer: code=<status>``
    sets the response status.
    """
    endpoints = list(endpoints)
    app = FastAPI(title="API Services Mock")

    for ep in endpoints:
        app.add_api_route(ep.path, mock_handler(ep), methods=[ep.method], name=ep.name)

    @app.get("/health")
    async def health() -> JSONResponse:
        return JSONResponse({"ok": True, "count": len(endpoints)})

    return app


configure_logging()
app = build_app()
