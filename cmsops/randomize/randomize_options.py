#!/usr/bin/env python3
"""
Dropdown Randomizer (NEW SITE ONLY)

Sets a random legal option on every alignment/style Option field of every
item in every collection of the NEW site. Free-text fields are never
touched.

Usage:
    python -m cmsops.randomize.randomize_options preview
    python -m cmsops.randomize.randomize_options run
"""

import random
from dataclasses import dataclass, field
from typing import Optional

import requests

from cmsops import config
from cmsops.cli import build_client, parse_command, print_banner, write_run_results
from cmsops.errors import AbortException, WebflowAPIError
from cmsops.reconcile.batch import BatchResult
from cmsops.reconcile.reconciler import find_randomizable_fields, plan_randomization

COMMANDS = ("run", "preview")


@dataclass
class RandomizeReport:
    collections_processed: int = 0
    collections_skipped: list = field(default_factory=list)
    collections_failed: list = field(default_factory=list)  # item listing failed
    unchanged: int = 0
    updated: BatchResult = field(default_factory=lambda: BatchResult("randomize"))

    def to_results(self) -> dict:
        return {
            "summary": {
                "collections_processed": self.collections_processed,
                "collections_skipped": len(self.collections_skipped),
                "collections_failed": len(self.collections_failed),
                "items_unchanged": self.unchanged,
                "items_updated": self.updated.ratio(),
            },
            "collections_skipped": self.collections_skipped,
            "collections_failed": self.collections_failed,
            "batches": [self.updated.to_dict()],
        }


class OptionRandomizer:

    def __init__(self, client, site_id: str, rng: Optional[random.Random] = None):
        self.client = client
        self.site_id = site_id
        self.rng = rng or random.Random()

    def _list_collections(self) -> list:
        print("Fetching collections...")
        try:
            collections = self.client.list_collections(self.site_id)
        except (WebflowAPIError, requests.RequestException) as e:
            raise AbortException(f"Could not list collections: {e}")
        print(f"  [OK] Found {len(collections)} collections")
        return collections

    def _get_schema(self, collection):
        try:
            return self.client.get_collection(collection.id)
        except (WebflowAPIError, requests.RequestException) as e:
            print(f"  [FAIL] Could not fetch fields for {collection.display_name}: {e}")
            return None

    def _list_items(self, collection) -> Optional[list]:
        try:
            return self.client.list_items(collection.id)
        except (WebflowAPIError, requests.RequestException) as e:
            print(f"  [FAIL] Could not fetch items for {collection.display_name}: {e}")
            return None

    def preview(self) -> dict:
        """Print every field and the randomization targets. No writes."""
        would_update = {}
        for collection in self._list_collections():
            print(f"\nCollection: {collection.display_name}")
            detail = self._get_schema(collection)
            if detail is None:
                continue

            print("  ALL FIELDS IN COLLECTION:")
            for descriptor in detail.fields:
                print(f"    {descriptor.display_name} ({descriptor.slug}) - Type: {descriptor.type}")

            targets = find_randomizable_fields(detail.fields)
            if not targets:
                print("  [SKIP] No alignment or style dropdown fields found")
                continue

            print("  Fields that would be randomized:")
            for target in targets:
                print(f"    {target.descriptor.display_name} ({target.slug}) - {target.kind}")

            items = self._list_items(collection)
            if items is None:
                continue
            print(f"  Would update {len(items)} items in this collection")
            would_update[collection.id] = len(items)
        return would_update

    def run(self) -> RandomizeReport:
        report = RandomizeReport()
        for collection in self._list_collections():
            print(f"\nProcessing collection: {collection.display_name} ({collection.id})")
            detail = self._get_schema(collection)
            if detail is None:
                report.collections_skipped.append(collection.display_name)
                continue

            targets = find_randomizable_fields(detail.fields)
            if not targets:
                print(f"  [SKIP] No alignment or style dropdown fields in {collection.display_name}")
                report.collections_skipped.append(collection.display_name)
                continue

            print(f"  {len(targets)} dropdown fields to randomize:")
            for target in targets:
                print(f"    - {target.descriptor.display_name} ({target.slug}) - {target.kind}")

            items = self._list_items(collection)
            if items is None:
                report.collections_failed.append(collection.display_name)
                continue
            if not items:
                print(f"  [SKIP] No items found in {collection.display_name}")
                report.collections_skipped.append(collection.display_name)
                continue

            report.collections_processed += 1
            for item in items:
                plan = plan_randomization(item, targets, self.rng)
                if not plan:
                    report.unchanged += 1
                    continue

                print(f"  Randomizing \"{item.label}\": "
                      + ", ".join(f"{slug}={value}" for slug, value in plan.items()))
                try:
                    self.client.update_item(collection.id, item.id, plan)
                except (WebflowAPIError, requests.RequestException) as e:
                    print(f"    [FAIL] {getattr(e, 'body', None) or e}")
                    report.updated.record_failure(item.id, item.label, e)
                    continue
                report.updated.record_success(item.id)

        print("\nDropdown field randomization complete!")
        print(f"  Collections processed: {report.collections_processed}")
        if report.collections_failed:
            print(f"  Collections with item listing errors: {', '.join(report.collections_failed)}")
        print(f"  Items updated: {report.updated.ratio()}")
        print(f"  Items unchanged: {report.unchanged}")
        return report


# =============================================================================
# CLI
# =============================================================================


def print_usage():
    print(f"""
Webflow CMS Dropdown Randomizer (NEW SITE ONLY)

ONLY randomizes dropdown Option fields whose slug or name mentions
"align" or "style". Text fields are never touched.

Usage:
  cms-randomize preview   Show dropdown fields that will be randomized
  cms-randomize run       Randomize ONLY dropdown fields

Site: {config.new_site_id()} (NEW SITE ONLY)
""")


def main(argv=None):
    command = parse_command(argv, COMMANDS)
    if command is None:
        print_usage()
        return None

    print_banner("WEBFLOW CMS DROPDOWN RANDOMIZER (ALIGNMENT & STYLE ONLY)")
    config.load_env()
    print(f"Site ID: {config.new_site_id()} (NEW SITE ONLY)")
    print(f"API Token: {config.mask_token(config.new_token())}")
    print()

    driver = OptionRandomizer(build_client(config.new_token()), config.new_site_id())
    try:
        if command == "preview":
            return driver.preview()
        report = driver.run()
    except AbortException as e:
        print(f"\nABORTED: {e}")
        return None

    write_run_results("randomize", report.to_results())
    return report


if __name__ == "__main__":
    main()
