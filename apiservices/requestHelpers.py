import json
import math
import re
import urllib.parse
from typing import Any, Mapping, Optional

from apiservices.auth import ACCESS_TOKEN_KEY, ID_TOKEN_KEY, TokenStore
from apiservices.errors import UnresolvedPlaceholderError
from apiservices.structures import URLENCODED, EndpointDescriptor, PreparedInput

PLACEHOLDER = re.compile(r"{(\w+)}")

# characters encodeURIComponent leaves alone
URI_COMPONENT_SAFE = "-_.!~*'()"


def stringify(value: Any) -> str:
    """Render a value the way JavaScript's ``String()`` would.

    Mappings have no useful ``String()`` form and are written as compact JSON.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else stringify(item) for item in value)
    if isinstance(value, Mapping):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def encode_value(value: Any) -> str:
    return urllib.parse.quote(stringify(value), safe=URI_COMPONENT_SAFE)


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (Mapping, list, tuple, set, str, bytes)):
        return len(value) == 0
    return False


def _is_split(raw: Mapping[str, Any]) -> bool:
    if "query" not in raw and "body" not in raw:
        return False
    return all(raw.get(key) is None or isinstance(raw.get(key), Mapping) for key in ("query", "body"))


def prepare_input(ep: EndpointDescriptor, raw: Optional[Mapping[str, Any]]) -> PreparedInput:
    """Split caller input into query and body.

    ``query``/``body`` keys holding mappings are taken as they are. Any other
    input, including a plain ``query`` search term, is treated as one bag of
    parameters: the query string of a GET, the body of anything else.
    """
    raw = raw or {}
    if not _is_split(raw):
        if ep.method == "GET":
            return PreparedInput(query=dict(raw), body={})
        return PreparedInput(query={}, body=dict(raw))

    return PreparedInput(query=raw.get("query") or {}, body=raw.get("body") or {})


def create_url(ep: EndpointDescriptor, query: Mapping[str, Any]) -> str:
    """Fill ``{key}`` placeholders from the query and append the rest.

    Raises UnresolvedPlaceholderError when a placeholder has no query value.
    """
    url = ep.base_url + ep.path

    for key, value in query.items():
        encoded = encode_value(value)
        token = "{%s}" % key
        if token in url:
            url = url.replace(token, encoded)
            continue

        if url.endswith(("?", "&")):
            sep = ""
        else:
            sep = "&" if "?" in url else "?"
        url = f"{url}{sep}{key}={encoded}"

    missing = PLACEHOLDER.findall(url)
    if missing:
        raise UnresolvedPlaceholderError(ep.path, missing)
    return url


def render_prefer(template: str, query: Mapping[str, Any]) -> str:
    missing = [key for key in PLACEHOLDER.findall(template) if key not in query]
    if missing:
        raise UnresolvedPlaceholderError(template, missing)
    return PLACEHOLDER.sub(lambda m: stringify(query[m.group(1)]), template)


def create_headers(ep: EndpointDescriptor, prepared: PreparedInput, tokens: TokenStore) -> dict[str, str]:
    headers = {
        "Content-Type": URLENCODED if ep.method == "GET" else ep.content_mime,
        "Accept": ep.accept_mime,
    }

    # tokens go out whenever the session has them, whatever the descriptor says
    access_token = tokens.get(ACCESS_TOKEN_KEY)
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
        headers["x-id-token"] = tokens.get(ID_TOKEN_KEY) or ""

    if ep.prefer:
        headers["Prefer"] = render_prefer(ep.prefer, prepared.query)

    return headers


def create_body(prepared: PreparedInput) -> Optional[str]:
    if is_empty(prepared.body):
        return None
    return json.dumps(prepared.body, separators=(",", ":"))
