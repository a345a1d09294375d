#!/usr/bin/env python3
"""
Lists the collections of both sites side by side (READ-ONLY).

Useful when the drivers report "collection not found": the OLD and NEW sites
do not use the same collection slugs.
"""


import requests

from cmsops import config
from cmsops.cli import build_client, print_banner
from cmsops.errors import WebflowAPIError


def print_collections(label: str, collections: list):
    print(f"{label} SITE COLLECTIONS:")
    if not collections:
        print(f"  NO COLLECTIONS FOUND IN {label} SITE")
        return
    for index, collection in enumerate(collections, start=1):
        print(f"  {index}. \"{collection.display_name}\" (slug: \"{collection.slug}\") - ID: {collection.id}")


def debug_collections(old_client, new_client, old_site_id: str, new_site_id: str):
    old_collections = old_client.list_collections(old_site_id)
    print_collections("OLD", old_collections)
    print()
    new_collections = new_client.list_collections(new_site_id)
    print_collections("NEW", new_collections)

    if not old_collections:
        return old_collections, new_collections

    print("\nSAMPLE DATA from OLD SITE:")
    first = old_collections[0]
    try:
        items = old_client.list_items(first.id)
    except (WebflowAPIError, requests.RequestException) as e:
        print(f"  [FAIL] Could not fetch items: {e}")
        return old_collections, new_collections

    print(f"  Collection: {first.display_name} has {len(items)} items")
    if items:
        print("  Field Data:")
        for key, value in items[0].field_data.items():
            print(f"    {key}: \"{value}\"")
    return old_collections, new_collections


def main():
    print_banner("DEBUGGING COLLECTIONS IN BOTH SITES")
    config.load_env()
    try:
        debug_collections(
            build_client(config.old_token()),
            build_client(config.new_token()),
            config.old_site_id(),
            config.new_site_id(),
        )
    except (WebflowAPIError, requests.RequestException) as e:
        print(f"ERROR: {e}")
        return None


if __name__ == "__main__":
    main()
