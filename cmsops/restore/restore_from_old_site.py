#!/usr/bin/env python3
"""
Restore NEW-site Projects items from the OLD site (patch in place).

Safe counterpart to nuke_and_rebuild: nothing is deleted or created. Each
NEW item is matched to the OLD item with the same name (or slug) and only
the fields in RESTORABLE_FIELDS that differ are patched back.

Usage:
    python -m cmsops.restore.restore_from_old_site preview   # show plans only
    python -m cmsops.restore.restore_from_old_site run       # apply patches
"""

from dataclasses import dataclass, field
from typing import Optional

import requests

from cmsops import config
from cmsops.cli import build_client, parse_command, print_banner, write_run_results
from cmsops.errors import AbortException, WebflowAPIError
from cmsops.reconcile.batch import BatchResult
from cmsops.reconcile.models import find_collection
from cmsops.reconcile.reconciler import RESTORABLE_FIELDS, match_records, plan_restore

COMMANDS = ("run", "preview")


@dataclass
class RestoreReport:
    new_count: int = 0
    old_count: int = 0
    matched: int = 0
    unmatched: list = field(default_factory=list)  # labels
    skipped: int = 0  # matched but nothing to change
    plans: dict = field(default_factory=dict)  # item id -> plan
    restored: BatchResult = field(default_factory=lambda: BatchResult("restore"))

    def to_results(self) -> dict:
        return {
            "summary": {
                "items_in_new_site": self.new_count,
                "items_in_old_site": self.old_count,
                "matched": self.matched,
                "unmatched": len(self.unmatched),
                "already_correct": self.skipped,
                "restored": self.restored.ratio(),
            },
            "unmatched": self.unmatched,
            "plans": self.plans,
            "batches": [self.restored.to_dict()],
        }


class RestoreFromOldSite:

    def __init__(self, old_client, new_client, old_site_id: str, new_site_id: str,
                 old_slug: str = config.OLD_PROJECTS_SLUG,
                 new_slug: str = config.NEW_PROJECTS_SLUG,
                 fields=RESTORABLE_FIELDS):
        self.old_client = old_client
        self.new_client = new_client
        self.old_site_id = old_site_id
        self.new_site_id = new_site_id
        self.old_slug = old_slug
        self.new_slug = new_slug
        self.fields = fields

    def _resolve_collections(self):
        try:
            print("Fetching collections from OLD site...")
            old_collections = self.old_client.list_collections(self.old_site_id)
            print(f"  [OK] Found {len(old_collections)} collections in OLD site")
            print("Fetching collections from NEW site...")
            new_collections = self.new_client.list_collections(self.new_site_id)
            print(f"  [OK] Found {len(new_collections)} collections in NEW site")
        except (WebflowAPIError, requests.RequestException) as e:
            raise AbortException(f"Could not list collections: {e}")

        old_collection = find_collection(old_collections, self.old_slug)
        if old_collection is None:
            print(f"ERROR: Could not find Projects collection ('{self.old_slug}') in OLD site")
            return None
        new_collection = find_collection(new_collections, self.new_slug)
        if new_collection is None:
            print(f"ERROR: Could not find Projects collection ('{self.new_slug}') in NEW site")
            return None

        print(f"  OLD: {old_collection.display_name} ({old_collection.id})")
        print(f"  NEW: {new_collection.display_name} ({new_collection.id})")
        return old_collection, new_collection

    def restore(self, apply: bool = True) -> Optional[RestoreReport]:
        """Match and plan; patch each non-empty plan when apply is True."""
        collections = self._resolve_collections()
        if collections is None:
            return None
        old_collection, new_collection = collections

        try:
            schema = self.new_client.get_collection(new_collection.id).fields
            old_items = self.old_client.list_items(old_collection.id)
            new_items = self.new_client.list_items(new_collection.id)
        except (WebflowAPIError, requests.RequestException) as e:
            raise AbortException(f"Could not fetch collection data: {e}")

        report = RestoreReport(new_count=len(new_items), old_count=len(old_items))
        matches = match_records(old_items, new_items)
        report.matched = len(matches.matched)
        report.unmatched = [item.label for item in matches.unmatched]

        print(f"\nMatching {len(new_items)} NEW items by name/slug...")
        for item in matches.unmatched:
            print(f"  [SKIP] No unique match in OLD site for \"{item.label}\"")

        for new_item, old_item in matches.matched:
            plan = plan_restore(new_item, old_item, self.fields, schema=schema)
            if not plan:
                report.skipped += 1
                print(f"  [OK] \"{new_item.label}\": nothing to restore")
                continue

            report.plans[new_item.id] = plan
            print(f"  \"{new_item.label}\" <- \"{old_item.label}\"")
            for slug, value in plan.items():
                print(f"      {slug}: \"{new_item.get(slug)}\" -> \"{value}\"")

            if not apply:
                continue
            try:
                self.new_client.update_item(new_collection.id, new_item.id, plan)
            except (WebflowAPIError, requests.RequestException) as e:
                print(f"    [FAIL] restore \"{new_item.label}\": {getattr(e, 'body', None) or e}")
                report.restored.record_failure(new_item.id, new_item.label, e)
                continue
            print("    [OK] RESTORED")
            report.restored.record_success(new_item.id)

        print("\nRESTORATION COMPLETE" if apply else "\nPREVIEW COMPLETE (no changes made)")
        print(f"  Items in NEW site: {report.new_count}")
        print(f"  Items in OLD site: {report.old_count}")
        print(f"  Matches found: {report.matched}")
        print(f"  Unmatched: {len(report.unmatched)}")
        print(f"  Already correct: {report.skipped}")
        if apply:
            print(f"  Items restored: {report.restored.ratio()}")
        else:
            print(f"  Items that would be restored: {len(report.plans)}")
        return report


# =============================================================================
# CLI
# =============================================================================


def print_usage():
    print(f"""
DATA RESTORATION TOOL

Restores location, size, type and name on NEW site Projects items from the
matching OLD site items (matched by name, or slug when there is no name).

Usage:
  cms-restore preview   Show what would be restored
  cms-restore run       Restore data from OLD site to NEW site

OLD Site: {config.old_site_id()}
NEW Site: {config.new_site_id()}
""")


def main(argv=None):
    command = parse_command(argv, COMMANDS)
    if command is None:
        print_usage()
        return None

    print_banner("DATA RESTORATION FROM OLD SITE")
    config.load_env()
    print(f"OLD Site ID: {config.old_site_id()}")
    print(f"NEW Site ID: {config.new_site_id()}")
    print(f"OLD API Token: {config.mask_token(config.old_token())}")
    print(f"NEW API Token: {config.mask_token(config.new_token())}")
    print()

    driver = RestoreFromOldSite(
        build_client(config.old_token()),
        build_client(config.new_token()),
        config.old_site_id(),
        config.new_site_id(),
    )

    apply = command == "run"
    try:
        report = driver.restore(apply=apply)
    except AbortException as e:
        print(f"\nABORTED: {e}")
        if apply:
            write_run_results("restore", {"aborted": True, "abort_reason": str(e)})
        return None

    if apply and report is not None:
        write_run_results("restore", report.to_results())
    return report


if __name__ == "__main__":
    main()
