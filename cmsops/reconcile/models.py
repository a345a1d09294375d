"""
Typed views over Webflow API payloads.

The API returns items as {"id": ..., "fieldData": {...}} and collections as
{"id", "slug", "displayName", "fields": [...]}. These wrappers keep the raw
shapes out of the reconciler.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

OPTION_TYPE = "Option"


@dataclass
class CollectionRecord:
    """One CMS item. The id is assigned by Webflow, never by us."""

    id: str
    field_data: dict = field(default_factory=dict)

    @classmethod
    def from_api(cls, payload: dict) -> "CollectionRecord":
        return cls(id=payload.get("id", ""), field_data=dict(payload.get("fieldData") or {}))

    def get(self, slug: str, default: Any = None) -> Any:
        return self.field_data.get(slug, default)

    @property
    def label(self) -> str:
        return self.field_data.get("name") or self.field_data.get("slug") or "Unknown"


@dataclass
class FieldDescriptor:
    slug: str
    display_name: str = ""
    type: str = ""
    options: list = field(default_factory=list)

    @classmethod
    def from_api(cls, payload: dict) -> "FieldDescriptor":
        validations = payload.get("validations") or {}
        options = [opt.get("name") for opt in validations.get("options") or [] if opt.get("name") is not None]
        return cls(
            slug=payload.get("slug", ""),
            display_name=payload.get("displayName", ""),
            type=payload.get("type", ""),
            options=options,
        )

    @property
    def is_option(self) -> bool:
        return self.type == OPTION_TYPE


@dataclass
class Collection:
    id: str
    slug: str = ""
    display_name: str = ""
    fields: list = field(default_factory=list)

    @classmethod
    def from_api(cls, payload: dict) -> "Collection":
        return cls(
            id=payload.get("id", ""),
            slug=payload.get("slug", ""),
            display_name=payload.get("displayName", ""),
            fields=[FieldDescriptor.from_api(f) for f in payload.get("fields") or []],
        )

    def field_by_slug(self, slug: str) -> Optional[FieldDescriptor]:
        for descriptor in self.fields:
            if descriptor.slug == slug:
                return descriptor
        return None


def find_collection(collections: list, slug: str) -> Optional[Collection]:
    """First collection with the given slug, or None."""
    for collection in collections:
        if collection.slug == slug:
            return collection
    return None
