"""Helpers shared by the driver entry points."""

import sys
from typing import Optional

from cmsops import config
from cmsops.client.throttle import Throttle
from cmsops.client.webflow_client import WebflowClient
from cmsops.report.results_writer import ResultsWriter, make_run_id


def parse_command(argv: Optional[list], commands) -> Optional[str]:
    """First positional argument if it is a known command, else None."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        return None
    command = args[0]
    if command in commands:
        return command
    return None


def print_banner(title: str):
    print("=" * 70)
    print(title)
    print("=" * 70)
    print()


def build_client(token) -> WebflowClient:
    return WebflowClient(token, throttle=Throttle(config.rate_per_second()))


def write_run_results(driver_name: str, results: dict):
    """Write results files under the runs directory and print their paths."""
    print("\nWriting results...")
    writer = ResultsWriter(make_run_id(driver_name), config.runs_dir())
    json_path, md_path = writer.write_results(results)
    print(f"  JSON: {json_path}")
    print(f"  Markdown: {md_path}")
    return json_path, md_path
