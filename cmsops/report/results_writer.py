"""
Results writer: leaves an audit trail of every `run`.

Output:
    <output_dir>/<run_id>.results.json
    <output_dir>/<run_id>.results.md
"""

import json
from datetime import datetime, timezone
from pathlib import Path


def make_run_id(driver_name: str) -> str:
    return f"{driver_name}-{datetime.now(timezone.utc).strftime('%Y-%m-%dT%H%M%SZ')}"


class ResultsWriter:
    """Writes driver results to files."""

    def __init__(self, run_id: str, output_dir: Path):
        self.run_id = run_id
        self.output_dir = Path(output_dir)

    def write_results(self, results: dict):
        """Write results to JSON and markdown files."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

        json_path = self.output_dir / f"{self.run_id}.results.json"
        with open(json_path, "w") as f:
            json.dump(results, f, indent=2, default=str)

        md_path = self.output_dir / f"{self.run_id}.results.md"
        with open(md_path, "w") as f:
            f.write(self._generate_markdown(results))

        return json_path, md_path

    def _generate_markdown(self, results: dict) -> str:
        lines = []
        lines.append(f"# Run Results: {self.run_id}")
        lines.append("")
        lines.append(f"**Generated:** {datetime.now(timezone.utc).isoformat()}")
        lines.append("")

        lines.append("## Summary")
        lines.append("")
        lines.append("| Field | Value |")
        lines.append("|-------|-------|")
        for key, value in results.get("summary", {}).items():
            lines.append(f"| {key} | `{value}` |")
        lines.append("")

        batches = results.get("batches", [])
        if batches:
            lines.append("## Batches")
            lines.append("")
            lines.append("| Operation | Succeeded | Attempted |")
            lines.append("|-----------|-----------|-----------|")
            for batch in batches:
                lines.append(
                    f"| {batch['operation']} | {len(batch['succeeded'])} | {batch['attempted']} |"
                )
            lines.append("")

            failures = [(b["operation"], f) for b in batches for f in b["failed"]]
            if failures:
                lines.append("## Failures")
                lines.append("")
                for operation, failure in failures:
                    lines.append(f"### {operation}: {failure['label']} (`{failure['item_id']}`)")
                    lines.append("")
                    if failure.get("status_code"):
                        lines.append(f"- **Status:** {failure['status_code']}")
                    lines.append(f"- **Error:** {failure['error']}")
                    lines.append("")

        if results.get("aborted"):
            lines.append("## ABORTED")
            lines.append("")
            lines.append(f"**Reason:** {results.get('abort_reason', 'Unknown')}")
            lines.append("")

        return "\n".join(lines)
