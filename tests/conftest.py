import pytest

from cmsops.errors import WebflowAPIError
from cmsops.reconcile.models import Collection, CollectionRecord, FieldDescriptor


class FakeWebflowClient:
    """In-memory stand-in for WebflowClient. Records every mutating call."""

    def __init__(self, collections=None, items=None, fail_on=None):
        self.collections = collections or []
        self.items = {cid: list(records) for cid, records in (items or {}).items()}
        # (method, item_id) -> status code to raise
        self.fail_on = fail_on or {}
        self.calls = []
        self._next_id = 1

    def _maybe_fail(self, method, key):
        status = self.fail_on.get((method, key))
        if status:
            raise WebflowAPIError(status, f"simulated {status}")

    def list_collections(self, site_id):
        self.calls.append(("list_collections", site_id))
        self._maybe_fail("list_collections", site_id)
        return [Collection(c.id, c.slug, c.display_name) for c in self.collections]

    def get_collection(self, collection_id):
        self.calls.append(("get_collection", collection_id))
        self._maybe_fail("get_collection", collection_id)
        for collection in self.collections:
            if collection.id == collection_id:
                return collection
        raise WebflowAPIError(404, "collection not found")

    def list_items(self, collection_id, limit=None):
        self.calls.append(("list_items", collection_id))
        self._maybe_fail("list_items", collection_id)
        records = [CollectionRecord(r.id, dict(r.field_data)) for r in self.items.get(collection_id, [])]
        return records[:limit] if limit is not None else records

    def create_item(self, collection_id, field_data):
        self.calls.append(("create_item", collection_id, dict(field_data)))
        self._maybe_fail("create_item", field_data.get("name"))
        new_id = f"new-{self._next_id}"
        self._next_id += 1
        self.items.setdefault(collection_id, []).append(CollectionRecord(new_id, dict(field_data)))
        return {"id": new_id, "fieldData": field_data}

    def update_item(self, collection_id, item_id, field_data):
        self.calls.append(("update_item", collection_id, item_id, dict(field_data)))
        self._maybe_fail("update_item", item_id)
        for record in self.items.get(collection_id, []):
            if record.id == item_id:
                record.field_data.update(field_data)
        return {"id": item_id, "fieldData": field_data}

    def delete_item(self, collection_id, item_id):
        self.calls.append(("delete_item", collection_id, item_id))
        self._maybe_fail("delete_item", item_id)
        self.items[collection_id] = [r for r in self.items.get(collection_id, []) if r.id != item_id]
        return {}

    def mutations(self, method):
        return [call for call in self.calls if call[0] == method]


def record(item_id, **field_data):
    return CollectionRecord(item_id, field_data)


@pytest.fixture
def projects_schema():
    return [
        FieldDescriptor("name", "Name", "PlainText"),
        FieldDescriptor("slug", "Slug", "PlainText"),
        FieldDescriptor("location", "Location", "PlainText"),
        FieldDescriptor("size", "Size", "PlainText"),
        FieldDescriptor("type", "Type", "PlainText"),
        FieldDescriptor("item-style", "Item Style", "Option", ["Dark", "Light"]),
        FieldDescriptor("item-align", "Item Align", "Option", ["left", "center", "right"]),
    ]


@pytest.fixture
def old_collection():
    return Collection("old-projects", "project", "Project")


@pytest.fixture
def new_collection(projects_schema):
    return Collection("new-projects", "projects", "Projects", projects_schema)
