from typing import Any, AsyncIterator, Awaitable, Callable, Mapping, Optional

import httpx
import structlog
from starlette.datastructures import Headers, UploadFile
from starlette.formparsers import FormParser, MultiPartException, MultiPartParser

from apiservices import auth
from apiservices.auth import TokenStore
from apiservices.errors import ResponseDecodeError
from apiservices.requestHelpers import create_body, create_headers, create_url, prepare_input
from apiservices.structures import URLENCODED, EndpointDescriptor, ServiceOutput

logger = structlog.get_logger(__name__)

ServiceCall = Callable[..., Awaitable[ServiceOutput]]


def _add_field(fields: dict[str, Any], name: str, value: Any) -> None:
    if name not in fields:
        fields[name] = value
    elif isinstance(fields[name], list):
        fields[name].append(value)
    else:
        fields[name] = [fields[name], value]


async def _body_stream(response: httpx.Response) -> AsyncIterator[bytes]:
    yield response.content


async def parse_form(response: httpx.Response) -> dict[str, Any]:
    """Read a urlencoded or multipart/form-data body into a field dict.

    Text fields come back as str, uploaded files as bytes. A field sent more
    than once maps to a list of its values.
    """
    content_type = response.headers.get("content-type", "")
    headers = Headers(headers={"content-type": content_type})

    if content_type.startswith(URLENCODED):
        parser: Any = FormParser(headers, _body_stream(response))
    elif content_type.startswith("multipart/form-data"):
        parser = MultiPartParser(headers, _body_stream(response))
    else:
        raise ResponseDecodeError(f"cannot read form data from {content_type or 'untyped'} body")

    try:
        form = await parser.parse()
    except MultiPartException as exc:
        raise ResponseDecodeError(f"unreadable multipart body: {exc.message}") from exc

    fields: dict[str, Any] = {}
    try:
        for name, value in form.multi_items():
            if isinstance(value, UploadFile):
                value = await value.read()
            _add_field(fields, name, value)
    finally:
        await form.close()
    return fields


async def _json(response: httpx.Response) -> Any:
    return response.json()


async def _text(response: httpx.Response) -> Any:
    return response.text


async def _blob(response: httpx.Response) -> Any:
    return response.content


async def _form_data(response: httpx.Response) -> Any:
    return await parse_form(response)


DECODERS: dict[str, Callable[[httpx.Response], Awaitable[Any]]] = {
    "json": _json,
    "text": _text,
    "blob": _blob,
    "formData": _form_data,
}


async def decode_response(accept_type: str, response: httpx.Response) -> Any:
    await response.aread()
    return await DECODERS[accept_type](response)


def classify(status_code: int, payload: Any) -> tuple[Any, Any]:
    if status_code >= 400:
        return payload, None
    return None, payload


async def _send(
    client: httpx.AsyncClient,
    ep: EndpointDescriptor,
    url: str,
    headers: dict[str, str],
    body: Optional[str],
    timeout: float,
) -> ServiceOutput:
    resp = await client.request(ep.method, url, headers=headers, content=body, timeout=timeout)
    payload = await decode_response(ep.accept_type, resp)
    error, data = classify(resp.status_code, payload)
    return ServiceOutput(error=error, data=data, response=resp)


def create_service(
    ep: EndpointDescriptor,
    *,
    tokens: Optional[TokenStore] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> ServiceCall:
    """Build the async callable for one endpoint.

    The callable returns a ServiceOutput whose ``error`` holds the decoded
    body for 4xx/5xx answers and whose ``data`` holds it otherwise. Transport
    and decoding failures are raised, not returned.

    ``tokens`` defaults to the process-wide session store, read on every call.
    Without ``client`` each call opens and closes its own AsyncClient.
    """

    async def call(input: Optional[Mapping[str, Any]] = None, *, timeout: Optional[float] = None) -> ServiceOutput:
        store = tokens if tokens is not None else auth.session_tokens
        prepared = prepare_input(ep, input)
        # field names only; bodies carry credentials
        logger.debug(
            "calling service",
            service=ep.name,
            method=ep.method,
            query_keys=sorted(prepared.query),
            body_keys=sorted(prepared.body) if isinstance(prepared.body, Mapping) else None,
        )

        headers = create_headers(ep, prepared, store)
        url = create_url(ep, prepared.query)
        body = create_body(prepared)
        deadline = ep.timeout_s if timeout is None else timeout

        if client is not None:
            result = await _send(client, ep, url, headers, body, deadline)
        else:
            async with httpx.AsyncClient(follow_redirects=True) as own_client:
                result = await _send(own_client, ep, url, headers, body, deadline)

        if result.error is not None:
            logger.warning(
                "service returned error",
                service=ep.name,
                status_code=result.response.status_code,
                error=result.error,
            )
        return result

    call.__name__ = ep.name
    call.__qualname__ = ep.name
    call.descriptor = ep  # type: ignore[attr-defined]
    return call
