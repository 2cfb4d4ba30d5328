# =============================================================================
# cms/dispatcher.py  —  Dispatcher (tool name + arguments → ToolResult)
# =============================================================================
#
# HOW A CALL FLOWS:
#   1. Exact-match lookup of the tool name.  Unknown names fail before the
#      client is touched.
#   2. Raw JSON arguments are validated into the tool's typed request
#      (cms/models.py).
#   3. The handler builds the remote query/payload and issues ONE call on
#      the injected client.
#   4. The response is rendered as pretty-printed JSON text.
#
# ERROR CHANNEL:
#   Every failure in steps 1-4 is caught here and returned as a normal
#   ToolResult whose text starts with "Error: " and names the operation,
#   the collection and the item id where they are known.  Nothing raised by
#   a handler ever reaches the transport.
# =============================================================================

import json
import logging
from dataclasses import asdict
from typing import Any, Callable, Optional

from cms.errors import CMSError, RemoteAPIError, UnknownToolError
from cms.models import (
    REQUEST_TYPES,
    WILDCARD_FIELD,
    CreateItemRequest,
    DeleteItemRequest,
    GetCollectionItemsRequest,
    GetItemRequest,
    ListCollectionsRequest,
    SearchItemsRequest,
    ToolResult,
    UpdateItemRequest,
    build_query,
)

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error: "

# Context prepended to the underlying error, formatted with the request fields.
_FAILURE_MESSAGES = {
    "list_collections": "Failed to list collections",
    "get_collection_items": "Failed to get items from collection {collection}",
    "get_item": "Failed to get item {id} from collection {collection}",
    "create_item": "Failed to create item in collection {collection}",
    "update_item": "Failed to update item {id} in collection {collection}",
    "delete_item": "Failed to delete item {id} from collection {collection}",
    "search_items": "Failed to search items in collection {collection}",
}

WILDCARD_HINT = (
    f"searching with the '{WILDCARD_FIELD}' wildcard field was rejected by the remote API; "
    "pass explicit field names in 'fields'"
)


def _is_rejected_query(error: RemoteAPIError) -> bool:
    """True when Directus refused the query itself, not the caller's access."""
    return error.status_code == 400 or error.code == "INVALID_QUERY"


def to_json_text(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def build_search_filter(query: str, fields: Optional[list[str]] = None) -> dict[str, Any]:
    """OR together a case-insensitive "contains" predicate per field.

    With no fields the single wildcard field "*" is used.

    >>> build_search_filter("hello", ["title", "body"])
    {'_or': [{'title': {'_icontains': 'hello'}}, {'body': {'_icontains': 'hello'}}]}
    """
    search_fields = fields or [WILDCARD_FIELD]
    return {"_or": [{field: {"_icontains": query}} for field in search_fields]}


class Dispatcher:
    """Executes tool invocations against an already-authenticated client.

    The client is any object with the DirectusClient read/create/update/
    delete methods; the dispatcher keeps no other state.
    """

    def __init__(self, client):
        self.client = client
        self._handlers: dict[str, Callable[[Any], str]] = {
            "list_collections": self._list_collections,
            "get_collection_items": self._get_collection_items,
            "get_item": self._get_item,
            "create_item": self._create_item,
            "update_item": self._update_item,
            "delete_item": self._delete_item,
            "search_items": self._search_items,
        }

    def call(self, name: str, arguments: Optional[dict[str, Any]] = None) -> ToolResult:
        """Run one tool invocation and return its text result (never raises)."""
        handler = self._handlers.get(name)
        if handler is None:
            logger.error("Unknown tool requested: %s", name)
            return self._failure(str(UnknownToolError(name)))

        try:
            request = REQUEST_TYPES[name].from_arguments(arguments)
        except CMSError as e:
            logger.error("Rejected %s call: %s", name, e)
            return self._failure(str(e))

        try:
            return ToolResult(handler(request))
        except Exception as e:
            if isinstance(e, CMSError):
                logger.error("Error in %s: %s", name, e)
            else:
                logger.exception("Unexpected error in %s", name)
            return self._failure(self._describe_failure(request, e))

    # ---------- Handlers ----------

    def _list_collections(self, request: ListCollectionsRequest) -> str:
        return to_json_text(self.client.read_collections())

    def _get_collection_items(self, request: GetCollectionItemsRequest) -> str:
        items = self.client.read_items(request.collection, request.query())
        return to_json_text(items)

    def _get_item(self, request: GetItemRequest) -> str:
        item = self.client.read_item(request.collection, request.id, request.query())
        return to_json_text(item)

    def _create_item(self, request: CreateItemRequest) -> str:
        return to_json_text(self.client.create_item(request.collection, request.data))

    def _update_item(self, request: UpdateItemRequest) -> str:
        return to_json_text(self.client.update_item(request.collection, request.id, request.data))

    def _delete_item(self, request: DeleteItemRequest) -> str:
        self.client.delete_item(request.collection, request.id)
        return f"Item {request.id} deleted successfully from collection {request.collection}"

    def _search_items(self, request: SearchItemsRequest) -> str:
        query = build_query(
            filter=build_search_filter(request.query, request.fields),
            limit=request.limit,
        )
        return to_json_text(self.client.read_items(request.collection, query))

    # ---------- Error rendering ----------

    @staticmethod
    def _describe_failure(request: Any, error: Exception) -> str:
        context = _FAILURE_MESSAGES[request.tool_name].format(**asdict(request))
        message = f"{context}: {error}"
        if (
            isinstance(request, SearchItemsRequest)
            and request.is_wildcard
            and isinstance(error, RemoteAPIError)
            and _is_rejected_query(error)
        ):
            message = f"{message} ({WILDCARD_HINT})"
        return message

    @staticmethod
    def _failure(message: str) -> ToolResult:
        return ToolResult(ERROR_PREFIX + message, is_error=True)
