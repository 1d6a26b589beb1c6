"""
Translation merge.

Produces the record shown to visitors by laying a stored translation over
the base-language record, field by field.
"""

from collections.abc import Iterable, Mapping
from typing import Any


def is_blank(value: Any) -> bool:
    """Return True for values that mean "not translated yet"."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def merge_translation(
    base: Mapping[str, Any],
    language: str,
    translation: Mapping[str, Any] | None,
    *,
    base_language: str,
    fields: Iterable[str] | None = None,
) -> dict[str, Any]:
    """
    Merge translated values onto a base-language record.

    For the base language the base record is returned unchanged. Otherwise
    each translatable field takes the translated value when it is present
    and non-blank, and the base value otherwise. Structured (list) fields
    are replaced whole; elements are never merged individually.

    Args:
        base: Base-language record with structured fields deserialized.
        language: Requested language code.
        translation: Stored translated fields, or None when no row exists.
        base_language: The entity's own language.
        fields: Translatable field names. Defaults to every key of ``base``.

    Returns:
        A new record with the same keys as ``base``.
    """
    merged = dict(base)
    if language == base_language or not translation:
        return merged

    candidates = base.keys() if fields is None else fields
    for name in candidates:
        if name not in base:
            continue
        value = translation.get(name)
        if not is_blank(value):
            merged[name] = value
    return merged


def has_translated_values(
    translation: Mapping[str, Any] | None, fields: Iterable[str]
) -> bool:
    """Return True if any of ``fields`` carries a non-blank translated value."""
    if not translation:
        return False
    return any(not is_blank(translation.get(name)) for name in fields)
