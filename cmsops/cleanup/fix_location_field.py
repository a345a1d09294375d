#!/usr/bin/env python3
"""
Location Field Cleanup

Removes ", Germany" from the location field of every item in the NEW site's
Projects collection.

Usage:
    python -m cmsops.cleanup.fix_location_field preview
    python -m cmsops.cleanup.fix_location_field run
    python -m cmsops.cleanup.fix_location_field run --collection-id <id>
"""

import argparse
import sys
from dataclasses import dataclass, field
from typing import Optional

import requests

from cmsops import config
from cmsops.cli import build_client, print_banner, write_run_results
from cmsops.errors import AbortException, WebflowAPIError
from cmsops.reconcile.batch import BatchResult
from cmsops.reconcile.models import find_collection
from cmsops.reconcile.reconciler import plan_cleanup

COMMANDS = ("run", "preview")


@dataclass
class CleanupReport:
    total: int = 0
    plans: dict = field(default_factory=dict)
    updated: BatchResult = field(default_factory=lambda: BatchResult("cleanup"))

    @property
    def already_clean(self) -> int:
        return self.total - len(self.plans)

    def to_results(self) -> dict:
        return {
            "summary": {
                "total_items": self.total,
                "updated": self.updated.ratio(),
                "errors": len(self.updated.failed),
                "already_clean": self.already_clean,
            },
            "plans": self.plans,
            "batches": [self.updated.to_dict()],
        }


class LocationCleanup:

    def __init__(self, client, site_id: str, collection_id: Optional[str] = None,
                 collection_slug: str = config.NEW_PROJECTS_SLUG,
                 field_slug: str = config.LOCATION_FIELD,
                 needle: str = config.LOCATION_SUFFIX):
        self.client = client
        self.site_id = site_id
        self.collection_id = collection_id
        self.collection_slug = collection_slug
        self.field_slug = field_slug
        self.needle = needle

    def _resolve_collection_id(self) -> Optional[str]:
        if self.collection_id:
            return self.collection_id
        try:
            collections = self.client.list_collections(self.site_id)
        except (WebflowAPIError, requests.RequestException) as e:
            raise AbortException(f"Could not list collections: {e}")
        collection = find_collection(collections, self.collection_slug)
        if collection is None:
            print(f"ERROR: Collection '{self.collection_slug}' not found in site {self.site_id}")
            return None
        return collection.id

    def cleanup(self, apply: bool = False) -> Optional[CleanupReport]:
        collection_id = self._resolve_collection_id()
        if collection_id is None:
            return None

        print(f"Fetching all items from collection {collection_id}...")
        try:
            items = self.client.list_items(collection_id)
        except (WebflowAPIError, requests.RequestException) as e:
            raise AbortException(f"Could not fetch items: {e}")
        print(f"  [OK] Found {len(items)} items")

        report = CleanupReport(total=len(items))
        for item in items:
            plan = plan_cleanup(item, self.field_slug, self.needle)
            if not plan:
                print(f"  [OK] \"{item.label}\": already clean - \"{item.get(self.field_slug, '')}\"")
                continue

            report.plans[item.id] = plan
            print(f"\n  Project: \"{item.label}\"")
            print(f"    BEFORE: \"{item.get(self.field_slug)}\"")
            print(f"    AFTER:  \"{plan[self.field_slug]}\"")

            if not apply:
                continue
            try:
                self.client.update_item(collection_id, item.id, plan)
            except (WebflowAPIError, requests.RequestException) as e:
                print(f"    [FAIL] Error updating \"{item.label}\": {getattr(e, 'body', None) or e}")
                report.updated.record_failure(item.id, item.label, e)
                continue
            print("    [OK] Updated")
            report.updated.record_success(item.id)

        print("\nSUMMARY:")
        print(f"  Total items: {report.total}")
        if apply:
            print(f"  Successfully updated: {len(report.updated.succeeded)}")
            print(f"  Errors: {len(report.updated.failed)}")
        else:
            print(f"  Items that would be updated: {len(report.plans)}")
        print(f"  Already clean: {report.already_clean}")
        return report


# =============================================================================
# CLI
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cms-fix-location",
        description=f"Remove '{config.LOCATION_SUFFIX}' from the {config.LOCATION_FIELD} field",
    )
    parser.add_argument("command", nargs="?", help="preview | run")
    parser.add_argument(
        "--collection-id",
        type=str,
        default=None,
        help="Target collection id (default: look up the projects collection by slug)",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    if args.command not in COMMANDS:
        parser.print_help()
        return None

    print_banner("LOCATION CLEANUP")
    config.load_env()
    print(f"Field: {config.LOCATION_FIELD}")
    print(f"Action: remove \"{config.LOCATION_SUFFIX}\" from all values")
    if args.command == "run":
        print("\nWARNING: APPLY MODE - This will modify your CMS data!\n")
    else:
        print("\nSAFE MODE: Preview only - no changes will be made\n")

    driver = LocationCleanup(
        build_client(config.new_token()),
        config.new_site_id(),
        collection_id=args.collection_id,
    )

    apply = args.command == "run"
    try:
        report = driver.cleanup(apply=apply)
    except AbortException as e:
        print(f"\nABORTED: {e}")
        return None

    if apply and report is not None:
        write_run_results("fix-location", report.to_results())
    return report


if __name__ == "__main__":
    main()
