import json

import pytest
from conftest import FakeWebflowClient, record

from cmsops.cleanup import fix_location_field
from cmsops.client import webflow_client
from cmsops.dump import debug_collections
from cmsops.migrate import nuke_and_rebuild
from cmsops.randomize import randomize_options
from cmsops.restore import restore_from_old_site


@pytest.fixture
def no_network(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("network call made")

    monkeypatch.setattr(webflow_client.requests, "request", fail)


@pytest.mark.parametrize("module", [nuke_and_rebuild, restore_from_old_site, randomize_options, fix_location_field])
@pytest.mark.parametrize("argv", [[], ["bogus"]])
def test_missing_or_unknown_command_prints_usage(module, argv, no_network, capsys):
    assert module.main(argv) is None
    assert "preview" in capsys.readouterr().out


def test_nuke_run_waits_for_confirmation_then_writes_results(monkeypatch, tmp_path, old_collection, new_collection):
    old_client = FakeWebflowClient([old_collection], {old_collection.id: [record("o1", name="A", slug="a")]})
    new_client = FakeWebflowClient([new_collection], {new_collection.id: [record("n1", name="Z")]})
    clients = iter([old_client, new_client])
    monkeypatch.setattr(nuke_and_rebuild, "build_client", lambda token: next(clients))
    monkeypatch.setenv("WEBFLOW_RESULTS_DIR", str(tmp_path))
    slept = []

    report = nuke_and_rebuild.main(["run"], sleep=slept.append)

    assert slept == [5]
    assert report.deleted.ratio() == "1/1"
    assert report.created.ratio() == "1/1"
    assert len(list(tmp_path.glob("nuke-and-rebuild-*.results.json"))) == 1


def test_restore_abort_logs_and_returns(monkeypatch, tmp_path, old_collection, new_collection, capsys):
    old_client = FakeWebflowClient([old_collection], fail_on={("list_collections", "old-site"): 401})
    new_client = FakeWebflowClient([new_collection])
    clients = iter([old_client, new_client])
    monkeypatch.setattr(restore_from_old_site, "build_client", lambda token: next(clients))
    monkeypatch.setenv("WEBFLOW_OLD_SITE_ID", "old-site")
    monkeypatch.setenv("WEBFLOW_RESULTS_DIR", str(tmp_path))

    assert restore_from_old_site.main(["run"]) is None

    assert "ABORTED: Could not list collections" in capsys.readouterr().out
    assert new_client.mutations("update_item") == []


def test_nuke_run_writes_deletes_when_old_listing_fails(monkeypatch, tmp_path, old_collection, new_collection):
    old_client = FakeWebflowClient([old_collection], fail_on={("list_items", old_collection.id): 500})
    new_client = FakeWebflowClient([new_collection], {new_collection.id: [record("n1", name="A"), record("n2", name="B")]})
    clients = iter([old_client, new_client])
    monkeypatch.setattr(nuke_and_rebuild, "build_client", lambda token: next(clients))
    monkeypatch.setenv("WEBFLOW_RESULTS_DIR", str(tmp_path))

    report = nuke_and_rebuild.main(["run"], sleep=lambda seconds: None)

    assert report.aborted
    (json_path,) = tmp_path.glob("nuke-and-rebuild-*.results.json")
    written = json.loads(json_path.read_text())
    assert written["aborted"] is True
    assert written["summary"]["deleted"] == "2/2"
    assert written["batches"][0]["succeeded"] == ["n1", "n2"]


def test_debug_collections_main_takes_no_arguments(monkeypatch, old_collection, new_collection, capsys):
    clients = iter([FakeWebflowClient([old_collection]), FakeWebflowClient([new_collection])])
    monkeypatch.setattr(debug_collections, "build_client", lambda token: next(clients))

    debug_collections.main()

    assert '(slug: "projects")' in capsys.readouterr().out
