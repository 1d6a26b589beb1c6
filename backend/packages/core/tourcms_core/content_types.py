"""
Translatable content type registry.

Describes, for every content type, which ORM model backs it, how it is
addressed, which fields are translated and which columns hold JSON.
"""

import json
from dataclasses import dataclass
from typing import Any

from sqlalchemy import inspect

from tourcms_database.models import (
    Base,
    Blog,
    GalleryItem,
    SectionContent,
    Testimonial,
    TourPackage,
)


@dataclass(frozen=True)
class StructuredField:
    """
    A JSON array field.

    Elements are either plain strings (translated as a whole) or records
    whose ``sub_fields`` are translated; other keys are kept as-is.
    """

    name: str
    sub_fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class ContentTypeSpec:
    """Translation metadata for one content type."""

    name: str
    label: str
    model: type[Base]
    key: str
    text_fields: tuple[str, ...]
    structured_fields: tuple[StructuredField, ...] = ()
    # JSON columns that are deserialized for display but never translated
    json_fields: tuple[str, ...] = ()
    # Status value that makes an item public; None means always public
    published_status: str | None = None
    coverage_section: str = ""
    title_field: str = "title"

    @property
    def translatable_fields(self) -> tuple[str, ...]:
        return self.text_fields + tuple(s.name for s in self.structured_fields)

    def structured(self, name: str) -> StructuredField | None:
        for structured in self.structured_fields:
            if structured.name == name:
                return structured
        return None


CONTENT_TYPES: dict[str, ContentTypeSpec] = {
    "section": ContentTypeSpec(
        name="section",
        label="Section",
        model=SectionContent,
        key="section_id",
        text_fields=("title", "subtitle", "description", "cta_text", "button_text"),
        structured_fields=(
            StructuredField("features", ("title", "description")),
            StructuredField("stats", ("label",)),
            StructuredField(
                "destinations", ("name", "description", "location", "category", "highlights")
            ),
        ),
        coverage_section="sections",
        title_field="section_id",
    ),
    "blog": ContentTypeSpec(
        name="blog",
        label="Blog",
        model=Blog,
        key="id",
        text_fields=("title", "excerpt", "content", "category"),
        json_fields=("tags",),
        published_status="published",
        coverage_section="blogs",
    ),
    "package": ContentTypeSpec(
        name="package",
        label="Package",
        model=TourPackage,
        key="id",
        text_fields=(
            "title",
            "description",
            "long_description",
            "group_size",
            "difficulty",
            "best_for",
            "departure",
            "return_time",
            "location",
        ),
        structured_fields=(
            StructuredField("destinations"),
            StructuredField("includes"),
            StructuredField("excludes"),
            StructuredField("highlights"),
            StructuredField("itinerary", ("title", "description")),
            StructuredField("faqs", ("question", "answer")),
        ),
        published_status="published",
        coverage_section="packages",
    ),
    "testimonial": ContentTypeSpec(
        name="testimonial",
        label="Testimonial",
        model=Testimonial,
        key="id",
        text_fields=("role", "content", "package_name", "location"),
        published_status="approved",
        coverage_section="testimonials",
        title_field="name",
    ),
    "gallery": ContentTypeSpec(
        name="gallery",
        label="Gallery item",
        model=GalleryItem,
        key="id",
        text_fields=("title", "description", "category"),
        json_fields=("tags",),
        coverage_section="gallery",
    ),
}


class ContentNotFoundError(ValueError):
    """No base-language entity exists for the given content type and id."""


# Listing sections whose trigger also translates every published item of a type
SECTION_CASCADES: dict[str, str] = {
    "tourPackages": "package",
    "blog": "blog",
    "testimonials": "testimonial",
    "gallery": "gallery",
}


def get_content_type(name: str) -> ContentTypeSpec:
    """
    Look up a content type by name.

    Raises:
        ValueError: If the content type is unknown.
    """
    spec = CONTENT_TYPES.get(name)
    if spec is None:
        raise ValueError(f"Unknown content type: {name}")
    return spec


def get_content_type_by_section(section: str) -> ContentTypeSpec:
    """Look up a content type by its coverage section name ("packages", "blogs", ...)."""
    for spec in CONTENT_TYPES.values():
        if spec.coverage_section == section:
            return spec
    raise ValueError(f"Unknown section: {section}")


def safe_parse(raw: Any, fallback: Any = None) -> Any:
    """
    Deserialize a JSON column value.

    Non-string input and malformed JSON return ``fallback`` (an empty list
    by default); already-deserialized lists pass through unchanged.
    """
    if fallback is None:
        fallback = []
    if isinstance(raw, list):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        return fallback
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return fallback


def to_record(spec: ContentTypeSpec, entity: Base) -> dict[str, Any]:
    """
    Convert an ORM entity into a plain base-language record.

    Structured and JSON columns are deserialized.
    """
    record: dict[str, Any] = {
        attr.key: getattr(entity, attr.key) for attr in inspect(entity).mapper.column_attrs
    }
    for name in [s.name for s in spec.structured_fields] + list(spec.json_fields):
        record[name] = safe_parse(record.get(name))
    return record


def source_values(spec: ContentTypeSpec, record: dict[str, Any]) -> dict[str, Any]:
    """Pick the translatable fields out of a base record."""
    return {name: record.get(name) for name in spec.translatable_fields}
