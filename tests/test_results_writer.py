import json

from cmsops.errors import WebflowAPIError
from cmsops.reconcile.batch import BatchResult
from cmsops.report.results_writer import ResultsWriter, make_run_id


def test_writes_json_and_markdown(tmp_path):
    batch = BatchResult("delete")
    batch.record_success("n1")
    batch.record_failure("n2", "Villa B", WebflowAPIError(500, "server error"))
    results = {"summary": {"deleted": batch.ratio()}, "batches": [batch.to_dict()]}

    json_path, md_path = ResultsWriter("nuke-test", tmp_path).write_results(results)

    written = json.loads(json_path.read_text())
    assert written["summary"] == {"deleted": "1/2"}
    assert written["batches"][0]["failed"][0]["status_code"] == 500

    markdown = md_path.read_text()
    assert "# Run Results: nuke-test" in markdown
    assert "| delete | 1 | 2 |" in markdown
    assert "Villa B" in markdown


def test_aborted_run_is_marked(tmp_path):
    _, md_path = ResultsWriter("x", tmp_path / "runs").write_results(
        {"aborted": True, "abort_reason": "Could not list collections"},
    )

    assert "## ABORTED" in md_path.read_text()


def test_run_id_is_prefixed_with_driver_name():
    assert make_run_id("restore").startswith("restore-")
