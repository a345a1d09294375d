#!/usr/bin/env python3
"""
CMS Inspector (READ-ONLY)

Prints every collection of the NEW site with its field schema and a few
sample items, so slugs and option names can be checked before running any
of the mutating tools.

Usage:
    python -m cmsops.dump.inspect_cms
    python -m cmsops.dump.inspect_cms --limit 5
"""

import argparse
import sys

import requests

from cmsops import config
from cmsops.cli import build_client, print_banner
from cmsops.errors import WebflowAPIError

VALUE_PREVIEW_CHARS = 100


def format_value(value) -> str:
    if isinstance(value, str) and len(value) > VALUE_PREVIEW_CHARS:
        return f"\"{value[:VALUE_PREVIEW_CHARS]}...\""
    return f"\"{value}\""


def inspect_collection(client, collection, limit: int):
    detail = client.get_collection(collection.id)
    print(f"  FIELDS: {len(detail.fields)} fields:")
    for index, descriptor in enumerate(detail.fields, start=1):
        print(f"    {index}. \"{descriptor.slug}\" ({descriptor.type}) - \"{descriptor.display_name}\"")

    items = client.list_items(collection.id, limit=limit)
    if not items:
        print("  SAMPLE DATA: No items found in this collection")
        return

    print(f"  SAMPLE DATA: First {len(items)} items:")
    types = {d.slug: d.type for d in detail.fields}
    for index, item in enumerate(items, start=1):
        item_name = item.get("name") or item.get("title") or f"Item {item.id}"
        print(f"    Item {index}: \"{item_name}\"")
        for key, value in item.field_data.items():
            field_type = f"({types[key]})" if key in types else ""
            print(f"      - {key} {field_type}: {format_value(value)}")


def inspect_cms(client, site_id: str, limit: int = config.SAMPLE_ITEM_LIMIT) -> int:
    """Returns the number of collections that could not be inspected."""
    print("Fetching collections...")
    collections = client.list_collections(site_id)
    print(f"\n[OK] Found {len(collections)} collections:")

    failures = 0
    for collection in collections:
        print(f"\nCOLLECTION: {collection.display_name} ({collection.id})")
        try:
            inspect_collection(client, collection, limit)
        except (WebflowAPIError, requests.RequestException) as e:
            print(f"  [FAIL] Could not get details for {collection.display_name}: {e}")
            failures += 1
    return failures


def main(argv=None):
    parser = argparse.ArgumentParser(description="Inspect collections, fields and sample items (read-only)")
    parser.add_argument(
        "--limit",
        type=int,
        default=config.SAMPLE_ITEM_LIMIT,
        help=f"Sample items per collection (default: {config.SAMPLE_ITEM_LIMIT})",
    )
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    print_banner("CMS INSPECTOR")
    config.load_env()

    client = build_client(config.new_token())
    try:
        inspect_cms(client, config.new_site_id(), limit=args.limit)
    except (WebflowAPIError, requests.RequestException) as e:
        print(f"ERROR: {e}")
        return None


if __name__ == "__main__":
    main()
