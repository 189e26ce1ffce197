"""Value checks shared by adapter field declarations."""

from __future__ import annotations

from typing import Any

import pydantic
from pydantic import EmailStr, TypeAdapter

_EMAIL = TypeAdapter(EmailStr)


def non_blank(value: str) -> str:
    """Strip surrounding whitespace and refuse empty strings."""
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("must not be blank")
    return cleaned


def email_address(value: str) -> str:
    try:
        return _EMAIL.validate_python(value.strip())
    except pydantic.ValidationError:
        raise ValueError("not a valid e-mail address") from None


def geography_triple(value: Any) -> dict[str, int | None]:
    """Normalise a `{country_id, region_id, city_id}` mapping.

    Missing keys become None; unknown keys and non-integer ids are refused.
    """
    if not isinstance(value, dict):
        raise ValueError("expected an object with country_id, region_id and city_id")
    allowed = ("country_id", "region_id", "city_id")
    unknown = sorted(set(value) - set(allowed))
    if unknown:
        raise ValueError(f"unexpected keys: {', '.join(unknown)}")
    triple: dict[str, int | None] = {}
    for key in allowed:
        item = value.get(key)
        if item is not None and (isinstance(item, bool) or not isinstance(item, int)):
            raise ValueError(f"{key} must be an integer")
        triple[key] = item
    if triple["country_id"] is None and (triple["region_id"] is not None or triple["city_id"] is not None):
        raise ValueError("country_id is required when region_id or city_id is given")
    return triple


def string_list(value: Any) -> list[str]:
    """Validator for lists of non-empty strings (telephone numbers and the like)."""
    if not isinstance(value, list):
        raise ValueError("expected a list of strings")
    cleaned = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            raise ValueError("every entry must be a non-empty string")
        cleaned.append(item.strip())
    return cleaned


def string_mapping(value: Any) -> dict[str, Any]:
    """Validator for JSON objects keyed by strings."""
    if not isinstance(value, dict):
        raise ValueError("expected an object")
    return value
