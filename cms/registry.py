# =============================================================================
# cms/registry.py  —  Tool Registry (the fixed catalog of callable tools)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Declares the seven tools this server exposes and the JSON schema of
#   their arguments.  The catalog is static: it is defined once at import
#   time, never depends on the remote API, and can be listed before the
#   client has authenticated.
#
# TOOL NAMING CONVENTIONS:
#   - list_* / get_*  → Read-only retrieval
#   - search_*        → Read-only query with a generated filter
#   - create_* / update_* / delete_*  → Writes, forwarded verbatim
# =============================================================================

from cms.errors import UnknownToolError
from cms.models import DEFAULT_LIMIT, DEFAULT_OFFSET, ToolDescriptor

_COLLECTION = {"type": "string", "description": "The collection name"}
_ITEM_ID = {"type": "string", "description": "The item ID"}
_FIELDS = {
    "type": "array",
    "items": {"type": "string"},
    "description": "Specific fields to retrieve",
}


def _schema(properties: dict, required: tuple[str, ...] = ()) -> dict:
    schema = {"type": "object", "properties": properties}
    if required:
        schema["required"] = list(required)
    return schema


TOOL_DESCRIPTORS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name="list_collections",
        description="List all collections in Directus",
        input_schema=_schema({}),
    ),
    ToolDescriptor(
        name="get_collection_items",
        description="Get items from a specific collection",
        input_schema=_schema(
            {
                "collection": _COLLECTION,
                "limit": {
                    "type": "number",
                    "description": "Number of items to retrieve (default: 10)",
                    "default": DEFAULT_LIMIT,
                },
                "offset": {
                    "type": "number",
                    "description": "Number of items to skip (default: 0)",
                    "default": DEFAULT_OFFSET,
                },
                "filter": {
                    "type": "object",
                    "description": "Filter object for querying items",
                },
                "fields": _FIELDS,
            },
            required=("collection",),
        ),
    ),
    ToolDescriptor(
        name="get_item",
        description="Get a specific item by ID",
        input_schema=_schema(
            {"collection": _COLLECTION, "id": _ITEM_ID, "fields": _FIELDS},
            required=("collection", "id"),
        ),
    ),
    ToolDescriptor(
        name="create_item",
        description="Create a new item in a collection",
        input_schema=_schema(
            {
                "collection": _COLLECTION,
                "data": {"type": "object", "description": "The item data to create"},
            },
            required=("collection", "data"),
        ),
    ),
    ToolDescriptor(
        name="update_item",
        description="Update an existing item",
        input_schema=_schema(
            {
                "collection": _COLLECTION,
                "id": _ITEM_ID,
                "data": {"type": "object", "description": "The data to update"},
            },
            required=("collection", "id", "data"),
        ),
    ),
    ToolDescriptor(
        name="delete_item",
        description="Delete an item",
        input_schema=_schema(
            {"collection": _COLLECTION, "id": _ITEM_ID},
            required=("collection", "id"),
        ),
    ),
    ToolDescriptor(
        name="search_items",
        description="Search for items across collections",
        input_schema=_schema(
            {
                "collection": _COLLECTION,
                "query": {"type": "string", "description": "Search query"},
                "fields": {**_FIELDS, "description": "Fields to search in"},
                "limit": {
                    "type": "number",
                    "description": "Number of results to return",
                    "default": DEFAULT_LIMIT,
                },
            },
            required=("collection", "query"),
        ),
    ),
)

_BY_NAME = {descriptor.name: descriptor for descriptor in TOOL_DESCRIPTORS}


def list_tools() -> tuple[ToolDescriptor, ...]:
    """Return every tool descriptor, in catalog order."""
    return TOOL_DESCRIPTORS


def get_descriptor(name: str) -> ToolDescriptor:
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UnknownToolError(name) from None
