import pytest

from cms.errors import UnknownToolError
from cms.registry import get_descriptor, list_tools

EXPECTED_REQUIRED = {
    "list_collections": set(),
    "get_collection_items": {"collection"},
    "get_item": {"collection", "id"},
    "create_item": {"collection", "data"},
    "update_item": {"collection", "id", "data"},
    "delete_item": {"collection", "id"},
    "search_items": {"collection", "query"},
}


def test_every_tool_listed_exactly_once():
    names = [descriptor.name for descriptor in list_tools()]
    assert sorted(names) == sorted(EXPECTED_REQUIRED)
    assert len(names) == len(set(names))


@pytest.mark.parametrize("name,required", sorted(EXPECTED_REQUIRED.items()))
def test_required_fields(name, required):
    assert set(get_descriptor(name).required) == required


def test_listing_is_deterministic():
    assert list_tools() == list_tools()
    assert [d.to_dict() for d in list_tools()] == [d.to_dict() for d in list_tools()]


def test_defaults_declared():
    items = get_descriptor("get_collection_items").input_schema["properties"]
    assert items["limit"]["default"] == 10
    assert items["offset"]["default"] == 0
    assert "default" not in items["filter"]
    assert get_descriptor("search_items").input_schema["properties"]["limit"]["default"] == 10


def test_required_properties_are_declared():
    for descriptor in list_tools():
        properties = descriptor.input_schema["properties"]
        assert descriptor.input_schema["type"] == "object"
        assert set(descriptor.required) <= set(properties)


def test_to_dict_uses_protocol_keys():
    rendered = get_descriptor("delete_item").to_dict()
    assert set(rendered) == {"name", "description", "inputSchema"}
    assert rendered["inputSchema"]["required"] == ["collection", "id"]


def test_unknown_descriptor():
    with pytest.raises(UnknownToolError, match="list_collection"):
        get_descriptor("list_collection")
