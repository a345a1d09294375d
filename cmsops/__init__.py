# =============================================================================
# WEBFLOW-CMS-OPS
# =============================================================================
"""
Command-line tooling for moving CMS content between two Webflow sites.

Drivers (each runnable with `run` or `preview`):
- migrate.nuke_and_rebuild: delete every NEW item, recreate from OLD
- restore.restore_from_old_site: patch NEW items from matching OLD items
- randomize.randomize_options: random values for alignment/style dropdowns
- cleanup.fix_location_field: strip a suffix from the location field

Read-only:
- dump.inspect_cms, dump.debug_collections
"""

__version__ = "0.1.0"
