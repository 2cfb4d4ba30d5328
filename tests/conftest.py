import pytest

from cms.dispatcher import Dispatcher


class SpyClient:
    """Stands in for DirectusClient; records every call and replays canned results."""

    def __init__(self, results=None, error=None):
        self.calls = []
        self.results = results or {}
        self.error = error

    def _record(self, method, *args):
        self.calls.append((method, *args))
        if self.error is not None:
            raise self.error
        return self.results.get(method)

    def read_collections(self):
        return self._record("read_collections")

    def read_items(self, collection, query=None):
        return self._record("read_items", collection, query)

    def read_item(self, collection, item_id, query=None):
        return self._record("read_item", collection, item_id, query)

    def create_item(self, collection, data):
        return self._record("create_item", collection, data)

    def update_item(self, collection, item_id, data):
        return self._record("update_item", collection, item_id, data)

    def delete_item(self, collection, item_id):
        return self._record("delete_item", collection, item_id)


@pytest.fixture
def spy_client():
    return SpyClient()


@pytest.fixture
def dispatcher(spy_client):
    return Dispatcher(spy_client)
