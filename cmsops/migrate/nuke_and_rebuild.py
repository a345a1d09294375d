#!/usr/bin/env python3
"""
Nuke and Rebuild: NEW-site Projects collection from the OLD site

################################################################################
# DESTRUCTIVE. ONE-SHOT. NO ROLLBACK.
################################################################################
#
# 1. Delete EVERY item in the NEW Projects collection
# 2. Recreate every OLD Projects item on the NEW site
#
# Not idempotent: re-running after a partial success duplicates items.
# `run` waits CONFIRM_DELAY_SECONDS before the first delete (Ctrl+C cancels).
#
################################################################################

Usage:
    python -m cmsops.migrate.nuke_and_rebuild preview   # read-only
    python -m cmsops.migrate.nuke_and_rebuild run       # DELETE + RECREATE
"""

import time
from dataclasses import dataclass, field
from typing import Optional

import requests

from cmsops import config
from cmsops.cli import build_client, parse_command, print_banner, write_run_results
from cmsops.errors import AbortException, WebflowAPIError
from cmsops.reconcile.batch import BatchResult
from cmsops.reconcile.models import find_collection

COMMANDS = ("run", "preview")


@dataclass
class MigrationReport:
    deleted: BatchResult = field(default_factory=lambda: BatchResult("delete"))
    created: BatchResult = field(default_factory=lambda: BatchResult("create"))
    abort_reason: Optional[str] = None

    @property
    def aborted(self) -> bool:
        return self.abort_reason is not None

    def to_results(self) -> dict:
        results = {
            "summary": {
                "deleted": self.deleted.ratio(),
                "created": self.created.ratio(),
            },
            "batches": [self.deleted.to_dict(), self.created.to_dict()],
        }
        if self.aborted:
            results["aborted"] = True
            results["abort_reason"] = self.abort_reason
        return results


def prepare_field_data(field_data: dict, strip_fields=config.REBUILD_STRIP_FIELDS) -> dict:
    """Copy of an OLD item's fieldData without identity/schema-conflicting fields."""
    prepared = dict(field_data)
    for slug in strip_fields:
        prepared.pop(slug, None)
    return prepared


# =============================================================================
# DRIVER
# =============================================================================


class NukeAndRebuild:
    """Delete-all then recreate-from-OLD over a single NEW collection."""

    def __init__(self, old_client, new_client, old_site_id: str, new_site_id: str,
                 old_slug: str = config.OLD_PROJECTS_SLUG,
                 new_slug: str = config.NEW_PROJECTS_SLUG,
                 strip_fields=config.REBUILD_STRIP_FIELDS):
        self.old_client = old_client
        self.new_client = new_client
        self.old_site_id = old_site_id
        self.new_site_id = new_site_id
        self.old_slug = old_slug
        self.new_slug = new_slug
        self.strip_fields = strip_fields

    def _resolve_collections(self):
        """(old, new) collections, or None when either slug is missing."""
        print("Getting collections...")
        try:
            old_collections = self.old_client.list_collections(self.old_site_id)
            new_collections = self.new_client.list_collections(self.new_site_id)
        except (WebflowAPIError, requests.RequestException) as e:
            raise AbortException(f"Could not list collections: {e}")

        old_collection = find_collection(old_collections, self.old_slug)
        new_collection = find_collection(new_collections, self.new_slug)
        if old_collection is None or new_collection is None:
            print(f"ERROR: Could not find Projects collections in both sites "
                  f"(OLD '{self.old_slug}': {'found' if old_collection else 'missing'}, "
                  f"NEW '{self.new_slug}': {'found' if new_collection else 'missing'})")
            return None

        print("  [OK] Found Projects collections")
        print(f"  OLD: {old_collection.display_name} ({old_collection.id})")
        print(f"  NEW: {new_collection.display_name} ({new_collection.id})")
        return old_collection, new_collection

    def _list_items(self, client, collection_id: str, site_label: str) -> list:
        try:
            items = client.list_items(collection_id)
        except (WebflowAPIError, requests.RequestException) as e:
            raise AbortException(f"Could not fetch {site_label} items: {e}")
        print(f"  [OK] {len(items)} items in {site_label} collection")
        return items

    def preview(self):
        collections = self._resolve_collections()
        if collections is None:
            return None
        old_collection, new_collection = collections

        print("\nItems that would be DELETED:")
        current_items = self._list_items(self.new_client, new_collection.id, "NEW")
        for item in current_items:
            print(f"    - {item.label}")

        print("\nItems that would be IMPORTED:")
        old_items = self._list_items(self.old_client, old_collection.id, "OLD")
        for item in old_items:
            fields = prepare_field_data(item.field_data, self.strip_fields)
            print(f"    - {item.label}: {', '.join(fields.keys())}")

        return {"would_delete": len(current_items), "would_create": len(old_items)}

    def _delete_all(self, new_collection, report: MigrationReport):
        print("\nSTEP 1: DELETING ALL CURRENT ITEMS...")
        current_items = self._list_items(self.new_client, new_collection.id, "NEW")
        for item in current_items:
            try:
                self.new_client.delete_item(new_collection.id, item.id)
            except (WebflowAPIError, requests.RequestException) as e:
                print(f"    [FAIL] delete \"{item.label}\": {getattr(e, 'body', None) or e}")
                report.deleted.record_failure(item.id, item.label, e)
                continue
            print(f"    [OK] DELETED: \"{item.label}\"")
            report.deleted.record_success(item.id)

        print(f"\nDELETE COMPLETE: Deleted {report.deleted.ratio()} items")

    def _recreate_all(self, old_collection, new_collection, report: MigrationReport):
        print("\nSTEP 2: REBUILDING FROM OLD SITE...")
        old_items = self._list_items(self.old_client, old_collection.id, "OLD")
        for item in old_items:
            field_data = prepare_field_data(item.field_data, self.strip_fields)
            print(f"  Importing: \"{item.label}\" ({', '.join(field_data.keys())})")
            try:
                self.new_client.create_item(new_collection.id, field_data)
            except (WebflowAPIError, requests.RequestException) as e:
                print(f"    [FAIL] create \"{item.label}\": {getattr(e, 'body', None) or e}")
                report.created.record_failure(item.id, item.label, e)
                continue
            print(f"    [OK] CREATED: \"{item.label}\"")
            report.created.record_success(item.id)

    def run(self) -> Optional[MigrationReport]:
        """Delete then recreate. The report is returned even when a listing fails midway."""
        collections = self._resolve_collections()
        if collections is None:
            return None
        old_collection, new_collection = collections
        report = MigrationReport()

        try:
            self._delete_all(new_collection, report)
            self._recreate_all(old_collection, new_collection, report)
        except AbortException as e:
            report.abort_reason = str(e)
            print(f"\nABORTED: {e}")

        print("\nREBUILD COMPLETE" if not report.aborted else "\nREBUILD STOPPED")
        print(f"  Items DELETED: {report.deleted.ratio()}")
        print(f"  Items CREATED: {report.created.ratio()}")
        if report.aborted:
            print(f"  Result: aborted ({report.abort_reason})")
        else:
            print(f"  Result: {'all items created' if report.created.ok else 'some items failed'}")
        return report


# =============================================================================
# CLI
# =============================================================================


def print_usage():
    print(f"""
NUKE AND REBUILD CMS TOOL

This will:
  1. DELETE ALL current items from NEW site Projects collection
  2. IMPORT ALL items fresh from OLD site Projects collection

WARNING: This is DESTRUCTIVE! All current data will be lost!

Usage:
  cms-nuke-and-rebuild preview   Show what would be deleted and imported
  cms-nuke-and-rebuild run       Execute the nuke and rebuild

OLD Site: {config.old_site_id()}
NEW Site: {config.new_site_id()}
""")


def confirm_delay(seconds: int, sleep=time.sleep):
    print("WARNING: This will DELETE ALL current items and replace with OLD site data!")
    print(f"WARNING: Press Ctrl+C to cancel, or wait {seconds} seconds to continue...\n")
    sleep(seconds)


def main(argv=None, sleep=time.sleep):
    command = parse_command(argv, COMMANDS)
    if command is None:
        print_usage()
        return None

    print_banner("NUKE AND REBUILD CMS DATA FROM OLD SITE")
    env_path = config.load_env()
    if env_path:
        print(f"Loaded credentials from: {env_path}")
    print(f"OLD Site ID: {config.old_site_id()}")
    print(f"NEW Site ID: {config.new_site_id()}")
    print()

    driver = NukeAndRebuild(
        build_client(config.old_token()),
        build_client(config.new_token()),
        config.old_site_id(),
        config.new_site_id(),
    )

    if command == "preview":
        try:
            return driver.preview()
        except AbortException as e:
            print(f"\nABORTED: {e}")
            return None

    confirm_delay(config.CONFIRM_DELAY_SECONDS, sleep=sleep)
    try:
        report = driver.run()
    except AbortException as e:
        # Only the collection lookup raises here, before any mutation
        print(f"\nABORTED: {e}")
        write_run_results("nuke-and-rebuild", {"aborted": True, "abort_reason": str(e)})
        return None

    if report is not None:
        write_run_results("nuke-and-rebuild", report.to_results())
    return report


if __name__ == "__main__":
    main()
