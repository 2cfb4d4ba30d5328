import pytest

from cms.errors import InvalidArgumentError
from cms.models import (
    REQUEST_TYPES,
    GetCollectionItemsRequest,
    GetItemRequest,
    SearchItemsRequest,
    ToolResult,
    UpdateItemRequest,
    build_query,
)


def test_request_type_per_tool():
    assert set(REQUEST_TYPES) == {
        "list_collections",
        "get_collection_items",
        "get_item",
        "create_item",
        "update_item",
        "delete_item",
        "search_items",
    }


def test_build_query_omits_unset_values():
    assert build_query(limit=5, offset=0, filter=None, fields=None) == {"limit": 5, "offset": 0}


def test_collection_items_defaults():
    request = GetCollectionItemsRequest.from_arguments({"collection": "articles"})
    assert request.limit == 10
    assert request.offset == 0
    assert request.query() == {"limit": 10, "offset": 0}


def test_empty_filter_is_kept():
    request = GetCollectionItemsRequest.from_arguments({"collection": "articles", "filter": {}})
    assert request.query() == {"limit": 10, "offset": 0, "filter": {}}


def test_integral_float_limit_accepted():
    request = GetCollectionItemsRequest.from_arguments({"collection": "articles", "limit": 25.0})
    assert request.limit == 25


def test_unlimited_limit_accepted():
    request = SearchItemsRequest.from_arguments({"collection": "articles", "query": "x", "limit": -1})
    assert request.limit == -1


@pytest.mark.parametrize(
    "arguments,argument",
    [
        ({}, "collection"),
        ({"collection": ""}, "collection"),
        ({"collection": 3}, "collection"),
        ({"collection": "articles", "limit": "ten"}, "limit"),
        ({"collection": "articles", "limit": True}, "limit"),
        ({"collection": "articles", "offset": -5}, "offset"),
        ({"collection": "articles", "filter": "status=draft"}, "filter"),
        ({"collection": "articles", "fields": "title"}, "fields"),
        ({"collection": "articles", "fields": ["title", 2]}, "fields"),
    ],
)
def test_invalid_collection_items_arguments(arguments, argument):
    with pytest.raises(InvalidArgumentError) as info:
        GetCollectionItemsRequest.from_arguments(arguments)
    assert info.value.argument == argument
    assert info.value.tool_name == "get_collection_items"


def test_integer_id_normalized_to_string():
    request = GetItemRequest.from_arguments({"collection": "articles", "id": 42})
    assert request.id == "42"
    assert request.query() == {}


def test_boolean_id_rejected():
    with pytest.raises(InvalidArgumentError, match="'id'"):
        GetItemRequest.from_arguments({"collection": "articles", "id": True})


def test_update_requires_data_object():
    with pytest.raises(InvalidArgumentError, match="'data'"):
        UpdateItemRequest.from_arguments({"collection": "articles", "id": "1", "data": ["x"]})


def test_non_object_arguments_rejected():
    with pytest.raises(InvalidArgumentError, match="arguments"):
        GetItemRequest.from_arguments(["articles", "1"])


def test_search_wildcard_when_no_fields():
    request = SearchItemsRequest.from_arguments({"collection": "articles", "query": "hello"})
    assert request.is_wildcard

    scoped = SearchItemsRequest.from_arguments(
        {"collection": "articles", "query": "hello", "fields": ["title"]}
    )
    assert not scoped.is_wildcard


def test_tool_result_envelope():
    assert ToolResult("[]").to_content() == {"content": [{"type": "text", "text": "[]"}]}
