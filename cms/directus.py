# =============================================================================
# cms/directus.py  —  Directus REST client (static token auth)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Issues the six remote calls the tools need against the Directus REST
#   API and unwraps the {"data": ...} envelope of every response:
#
#     read_collections()                   GET    /collections
#     read_items(collection, query)        GET    /items/{collection}
#     read_item(collection, id, query)     GET    /items/{collection}/{id}
#     create_item(collection, data)        POST   /items/{collection}
#     update_item(collection, id, data)    PATCH  /items/{collection}/{id}
#     delete_item(collection, id)          DELETE /items/{collection}/{id}
#
# QUERY ENCODING (Directus convention):
#   filter  → JSON string        ?filter={"title":{"_icontains":"x"}}
#   fields  → comma-joined       ?fields=id,title
#   limit / offset → numbers
#
# ERRORS:
#   Directus reports failures as {"errors": [{"message": ..., "extensions":
#   {"code": ...}}]}.  Any non-2xx answer becomes a RemoteAPIError carrying
#   the first message and code; a 404 becomes NotFoundError.  Network-level
#   failures are wrapped too, so callers only ever see RemoteAPIError.
#
#   There are no retries here.  A failed call is reported immediately.
# =============================================================================

import json
import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from cms.errors import NotFoundError, RemoteAPIError

logger = logging.getLogger(__name__)


def encode_query(query: Optional[dict[str, Any]]) -> dict[str, Any]:
    """Translate a RemoteQuery into Directus query-string parameters."""
    params: dict[str, Any] = {}
    for key, value in (query or {}).items():
        if key == "filter":
            params[key] = json.dumps(value, separators=(",", ":"))
        elif key == "fields":
            params[key] = ",".join(value)
        else:
            params[key] = value
    return params


def _error_from_response(response: httpx.Response) -> RemoteAPIError:
    message = f"HTTP {response.status_code}"
    code = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("errors"):
        first = body["errors"][0]
        message = first.get("message") or message
        code = (first.get("extensions") or {}).get("code")
    elif response.text:
        message = f"{message}: {response.text.strip()[:200]}"

    error_type = NotFoundError if response.status_code == 404 else RemoteAPIError
    return error_type(message, status_code=response.status_code, code=code)


class DirectusClient:
    """Thin synchronous client for the Directus items and collections API."""

    def __init__(
        self,
        base_url: str,
        token: str,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._http = httpx.Client(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {token}", "Accept": "application/json"},
            transport=transport,
            timeout=timeout,
        )

    # ---------- Public API ----------

    def read_collections(self) -> list[dict[str, Any]]:
        return self._request("GET", "/collections")

    def read_items(self, collection: str, query: Optional[dict[str, Any]] = None) -> list[dict[str, Any]]:
        return self._request("GET", self._items_path(collection), params=encode_query(query))

    def read_item(self, collection: str, item_id: str, query: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        return self._request("GET", self._items_path(collection, item_id), params=encode_query(query))

    def create_item(self, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", self._items_path(collection), json=data)

    def update_item(self, collection: str, item_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._request("PATCH", self._items_path(collection, item_id), json=data)

    def delete_item(self, collection: str, item_id: str) -> None:
        self._request("DELETE", self._items_path(collection, item_id))

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "DirectusClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ---------- Internals ----------

    @staticmethod
    def _items_path(collection: str, item_id: Optional[str] = None) -> str:
        path = f"/items/{quote(collection, safe='')}"
        if item_id is not None:
            path += f"/{quote(str(item_id), safe='')}"
        return path

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        logger.debug("Directus %s %s %s", method, path, kwargs.get("params") or "")
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise RemoteAPIError(f"Could not reach Directus at {self.base_url}: {e}") from e

        if response.is_error:
            raise _error_from_response(response)

        # DELETE answers 204 with an empty body.
        if response.status_code == 204 or not response.content:
            return None
        try:
            body = response.json()
        except ValueError as e:
            raise RemoteAPIError(
                f"Invalid JSON in response to {method} {path}", status_code=response.status_code
            ) from e
        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body
