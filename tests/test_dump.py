from conftest import FakeWebflowClient, record

from cmsops.dump.debug_collections import debug_collections
from cmsops.dump.inspect_cms import format_value, inspect_cms
from cmsops.reconcile.models import Collection


def test_inspect_prints_fields_and_samples(new_collection, capsys):
    items = [record(f"n{i}", name=f"Villa {i}", location="Berlin") for i in range(5)]
    client = FakeWebflowClient([new_collection], {new_collection.id: items})

    failures = inspect_cms(client, "new-site", limit=3)

    out = capsys.readouterr().out
    assert failures == 0
    assert '"item-style" (Option) - "Item Style"' in out
    assert "First 3 items" in out
    assert "location (PlainText)" in out
    assert "Villa 3" not in out


def test_inspect_continues_after_collection_error(new_collection, capsys):
    broken = Collection("broken", "broken", "Broken")
    client = FakeWebflowClient([broken, new_collection], fail_on={("get_collection", "broken"): 500})

    assert inspect_cms(client, "new-site") == 1
    assert "No items found" in capsys.readouterr().out


def test_long_values_are_truncated():
    assert format_value("x" * 150) == '"' + "x" * 100 + '..."'
    assert format_value("short") == '"short"'


def test_debug_lists_both_sites(old_collection, new_collection, capsys):
    old_client = FakeWebflowClient([old_collection], {old_collection.id: [record("o1", name="Villa A")]})
    new_client = FakeWebflowClient([new_collection])

    debug_collections(old_client, new_client, "old-site", "new-site")

    out = capsys.readouterr().out
    assert '(slug: "project")' in out
    assert '(slug: "projects")' in out
    assert 'name: "Villa A"' in out
