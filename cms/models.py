# =============================================================================
# cms/models.py  —  Data Models (descriptors, results, typed tool requests)
# =============================================================================
#
# These dataclasses define the shape of everything that crosses the tool
# boundary:
#
#   ToolDescriptor   one entry of the tool catalog (name, description,
#                    JSON input schema).  See cms/registry.py.
#   ToolResult       the outcome of one tool call: a single text block,
#                    plus an optional structured error flag.
#   *Request         one typed request per tool.  Raw JSON arguments are
#                    validated into these before any remote call; a wrong
#                    type raises InvalidArgumentError.
#
# OMISSION RULE:
#   Optional arguments that the caller did not supply stay None and are left
#   out of the remote query entirely (see build_query).  Directus treats an
#   explicit empty filter/fields differently from an absent one.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from cms.errors import InvalidArgumentError

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0

# Directus reads limit=-1 as "no limit".
UNLIMITED = -1

# Literal field name used by search_items when no fields are given.
WILDCARD_FIELD = "*"


# -----------------------------------------------------------------------------
# Catalog & results
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDescriptor:
    """A named, schema-described operation callable through the tool protocol."""

    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=dict)

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(self.input_schema.get("required", ()))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool invocation.

    Success and failure share the same envelope: a single text block.
    Failures are recognizable by the "Error: " prefix of ``text``;
    ``is_error`` carries the same information in structured form.
    """

    text: str
    is_error: bool = False

    def to_content(self) -> dict[str, Any]:
        return {"content": [{"type": "text", "text": self.text}]}


def build_query(**params: Any) -> dict[str, Any]:
    """Assemble a remote query from only the parameters that were supplied."""
    return {key: value for key, value in params.items() if value is not None}


# -----------------------------------------------------------------------------
# Argument validation
# -----------------------------------------------------------------------------
class _Arguments:
    """Typed accessors over one raw argument mapping."""

    def __init__(self, tool_name: str, arguments: Optional[dict[str, Any]]):
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise InvalidArgumentError(tool_name, "arguments", "expected an object")
        self.tool_name = tool_name
        self.raw = arguments

    def _fail(self, name: str, message: str) -> InvalidArgumentError:
        return InvalidArgumentError(self.tool_name, name, message)

    def _get(self, name: str, required: bool) -> Any:
        value = self.raw.get(name)
        if value is None and required:
            raise self._fail(name, "missing required argument")
        return value

    def string(self, name: str, required: bool = True, allow_empty: bool = False) -> Optional[str]:
        value = self._get(name, required)
        if value is None:
            return None
        if not isinstance(value, str):
            raise self._fail(name, "expected a string")
        if required and not value and not allow_empty:
            raise self._fail(name, "must not be empty")
        return value

    def identifier(self, name: str = "id") -> str:
        # Directus primary keys are integers or strings (uuid, slug).
        value = self._get(name, True)
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise self._fail(name, "expected a string or integer")
        value = str(value)
        if not value:
            raise self._fail(name, "must not be empty")
        return value

    def integer(self, name: str, default: int, minimum: int = 0) -> int:
        value = self._get(name, False)
        if value is None:
            return default
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._fail(name, "expected an integer")
        if value < minimum:
            raise self._fail(name, f"must be at least {minimum}")
        return value

    def obj(self, name: str, required: bool = True) -> Optional[dict[str, Any]]:
        value = self._get(name, required)
        if value is None:
            return None
        if not isinstance(value, dict):
            raise self._fail(name, "expected an object")
        return value

    def string_list(self, name: str) -> Optional[list[str]]:
        value = self._get(name, False)
        if value is None:
            return None
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise self._fail(name, "expected an array of strings")
        return value


# -----------------------------------------------------------------------------
# One request type per tool
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ListCollectionsRequest:
    tool_name: ClassVar[str] = "list_collections"

    @classmethod
    def from_arguments(cls, arguments: Optional[dict[str, Any]]) -> "ListCollectionsRequest":
        _Arguments(cls.tool_name, arguments)
        return cls()


@dataclass(frozen=True)
class GetCollectionItemsRequest:
    tool_name: ClassVar[str] = "get_collection_items"

    collection: str
    limit: int = DEFAULT_LIMIT
    offset: int = DEFAULT_OFFSET
    filter: Optional[dict[str, Any]] = None
    fields: Optional[list[str]] = None

    @classmethod
    def from_arguments(cls, arguments: Optional[dict[str, Any]]) -> "GetCollectionItemsRequest":
        args = _Arguments(cls.tool_name, arguments)
        return cls(
            collection=args.string("collection"),
            limit=args.integer("limit", DEFAULT_LIMIT, minimum=UNLIMITED),
            offset=args.integer("offset", DEFAULT_OFFSET),
            filter=args.obj("filter", required=False),
            fields=args.string_list("fields"),
        )

    def query(self) -> dict[str, Any]:
        return build_query(limit=self.limit, offset=self.offset, filter=self.filter, fields=self.fields)


@dataclass(frozen=True)
class GetItemRequest:
    tool_name: ClassVar[str] = "get_item"

    collection: str
    id: str
    fields: Optional[list[str]] = None

    @classmethod
    def from_arguments(cls, arguments: Optional[dict[str, Any]]) -> "GetItemRequest":
        args = _Arguments(cls.tool_name, arguments)
        return cls(
            collection=args.string("collection"),
            id=args.identifier(),
            fields=args.string_list("fields"),
        )

    def query(self) -> dict[str, Any]:
        return build_query(fields=self.fields)


@dataclass(frozen=True)
class CreateItemRequest:
    tool_name: ClassVar[str] = "create_item"

    collection: str
    data: dict[str, Any]

    @classmethod
    def from_arguments(cls, arguments: Optional[dict[str, Any]]) -> "CreateItemRequest":
        args = _Arguments(cls.tool_name, arguments)
        return cls(collection=args.string("collection"), data=args.obj("data"))


@dataclass(frozen=True)
class UpdateItemRequest:
    tool_name: ClassVar[str] = "update_item"

    collection: str
    id: str
    data: dict[str, Any]

    @classmethod
    def from_arguments(cls, arguments: Optional[dict[str, Any]]) -> "UpdateItemRequest":
        args = _Arguments(cls.tool_name, arguments)
        return cls(collection=args.string("collection"), id=args.identifier(), data=args.obj("data"))


@dataclass(frozen=True)
class DeleteItemRequest:
    tool_name: ClassVar[str] = "delete_item"

    collection: str
    id: str

    @classmethod
    def from_arguments(cls, arguments: Optional[dict[str, Any]]) -> "DeleteItemRequest":
        args = _Arguments(cls.tool_name, arguments)
        return cls(collection=args.string("collection"), id=args.identifier())


@dataclass(frozen=True)
class SearchItemsRequest:
    tool_name: ClassVar[str] = "search_items"

    collection: str
    query: str
    fields: Optional[list[str]] = None
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_arguments(cls, arguments: Optional[dict[str, Any]]) -> "SearchItemsRequest":
        args = _Arguments(cls.tool_name, arguments)
        return cls(
            collection=args.string("collection"),
            query=args.string("query", allow_empty=True),
            fields=args.string_list("fields"),
            limit=args.integer("limit", DEFAULT_LIMIT, minimum=UNLIMITED),
        )

    @property
    def is_wildcard(self) -> bool:
        return not self.fields


REQUEST_TYPES = {
    request_type.tool_name: request_type
    for request_type in (
        ListCollectionsRequest,
        GetCollectionItemsRequest,
        GetItemRequest,
        CreateItemRequest,
        UpdateItemRequest,
        DeleteItemRequest,
        SearchItemsRequest,
    )
}
