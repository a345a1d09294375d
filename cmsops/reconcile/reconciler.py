"""
Record Reconciler

Matches NEW-site items to OLD-site items by name (or slug when there is no
name) and computes the minimal fieldData patch for each matched pair.

Rules:
    - key(record) = fieldData["name"] if present, else fieldData["slug"]
    - a destination matches only when exactly one source has the same key
      (exact, case-sensitive); zero or several matches -> unmatched
    - a plan holds only allow-listed fields, only fields known to the
      destination schema, only legal options for Option fields, and never a
      value equal to what the destination already has
"""

import random
from dataclasses import dataclass, field
from typing import Any, Optional

from cmsops.reconcile.models import CollectionRecord, FieldDescriptor

RESTORABLE_FIELDS = ("location", "size", "type", "name")

ALIGNMENT_MARKER = "align"
STYLE_MARKER = "style"


@dataclass
class MatchResult:
    matched: list = field(default_factory=list)  # (destination, source) pairs
    unmatched: list = field(default_factory=list)


@dataclass
class RandomizableField:
    descriptor: FieldDescriptor
    kind: str  # "alignment" or "style"

    @property
    def slug(self) -> str:
        return self.descriptor.slug


# =============================================================================
# MATCHING
# =============================================================================


def record_key(record: CollectionRecord) -> Optional[str]:
    name = record.get("name")
    if name:
        return name
    return record.get("slug")


def find_match(destination: CollectionRecord, sources: list) -> Optional[CollectionRecord]:
    """Unique source with the destination's key, or None."""
    key = record_key(destination)
    if key is None:
        return None
    candidates = [s for s in sources if record_key(s) == key]
    if len(candidates) != 1:
        return None
    return candidates[0]


def match_records(sources: list, destinations: list) -> MatchResult:
    result = MatchResult()
    for destination in destinations:
        source = find_match(destination, sources)
        if source is None:
            result.unmatched.append(destination)
        else:
            result.matched.append((destination, source))
    return result


# =============================================================================
# PLANNING
# =============================================================================


def _is_absent(value: Any) -> bool:
    return value is None or value == ""


def _allowed_by_schema(slug: str, value: Any, schema: Optional[dict]) -> bool:
    """True when the schema is unknown, or knows the slug and (for Option) the value."""
    if schema is None:
        return True
    descriptor = schema.get(slug)
    if descriptor is None:
        return False
    if descriptor.is_option:
        return value in descriptor.options
    return True


def schema_index(fields: Optional[list]) -> Optional[dict]:
    """slug -> FieldDescriptor, or None when no schema is known."""
    if fields is None:
        return None
    return {descriptor.slug: descriptor for descriptor in fields}


def plan_restore(destination: CollectionRecord, source: CollectionRecord,
                 fields=RESTORABLE_FIELDS, schema: Optional[list] = None) -> dict:
    """Copy allow-listed fields from source, dropping no-ops and anything the schema rejects."""
    index = schema_index(schema)
    plan = {}
    for slug in fields:
        value = source.get(slug)
        if _is_absent(value):
            continue
        if destination.get(slug) == value:
            continue
        if not _allowed_by_schema(slug, value, index):
            continue
        plan[slug] = value
    return plan


def find_randomizable_fields(schema: list) -> list:
    """Option fields whose slug or display name mentions align or style."""
    targets = []
    for descriptor in schema:
        if not descriptor.is_option:
            continue
        slug = descriptor.slug.lower()
        display_name = (descriptor.display_name or "").lower()
        is_alignment = ALIGNMENT_MARKER in slug or ALIGNMENT_MARKER in display_name
        is_style = STYLE_MARKER in slug or STYLE_MARKER in display_name
        if is_alignment or is_style:
            targets.append(RandomizableField(
                descriptor=descriptor,
                kind="alignment" if is_alignment else "style",
            ))
    return targets


def choose_option(descriptor: FieldDescriptor, rng: Optional[random.Random] = None):
    """Uniform draw over the field's legal options; None if it has none."""
    if not descriptor.options:
        return None
    rng = rng or random
    return rng.choice(descriptor.options)


def plan_randomization(record: CollectionRecord, targets: list,
                       rng: Optional[random.Random] = None) -> dict:
    plan = {}
    for target in targets:
        descriptor = target.descriptor if isinstance(target, RandomizableField) else target
        if not descriptor.is_option:
            continue
        value = choose_option(descriptor, rng)
        if value is None or record.get(descriptor.slug) == value:
            continue
        plan[descriptor.slug] = value
    return plan


def remove_substring(value: str, needle: str) -> str:
    return value.replace(needle, "")


def plan_cleanup(record: CollectionRecord, slug: str, needle: str,
                 schema: Optional[list] = None) -> dict:
    """{slug: cleaned} when the field contains needle, else {}."""
    current = record.get(slug)
    if not isinstance(current, str) or not needle or needle not in current:
        return {}
    cleaned = remove_substring(current, needle)
    if not _allowed_by_schema(slug, cleaned, schema_index(schema)):
        return {}
    return {slug: cleaned}
