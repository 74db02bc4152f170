"""Data sanitizer applied to every FieldSet before staging and storage."""

import re
from collections.abc import Mapping

from printform.extraction.models import COUNT_FIELDS, FIELD_KEYS, TEXT_FIELDS, FieldSet

# Alternate keys produced by the extended vision prompt.
_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "Ricoh": ("For_office_use_RICOH",),
    "Toshiba": ("For_office_use_Toshiba",),
}

_LEADING_INT_RE = re.compile(r"^\s*(\d+)")


def parse_count(value: str) -> int | None:
    """Parse the leading integer of a value; blank, zero and non-numeric give None."""
    match = _LEADING_INT_RE.match(value)
    if match is None:
        return None
    return int(match.group(1)) or None


class FieldSanitizer:
    """Strips forbidden marker characters and coerces count fields."""

    def __init__(self, forbidden_characters: str = "#") -> None:
        self._forbidden_re = (
            re.compile(f"[{re.escape(forbidden_characters)}]")
            if forbidden_characters
            else None
        )

    def clean_text(self, value: object) -> str:
        if value is None or isinstance(value, bool):
            return ""
        text = value if isinstance(value, str) else str(value)
        if self._forbidden_re is not None:
            text = self._forbidden_re.sub("", text)
        return text.strip()

    def coerce_count(self, value: object) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value or None
        if isinstance(value, float):
            if not value.is_integer():
                return None
            return int(value) or None
        if isinstance(value, str):
            return parse_count(self.clean_text(value))
        return None

    def sanitize(self, data: Mapping[str, object] | FieldSet) -> FieldSet:
        """Build a clean FieldSet from a FieldSet or a schema-keyed mapping.

        Missing keys fall back to the schema defaults, so the returned
        FieldSet always carries all 8 fields.
        """
        raw = data.to_dict() if isinstance(data, FieldSet) else data
        values: dict[str, object] = {}
        for attr, key in FIELD_KEYS.items():
            value = self._lookup(raw, key)
            if attr in TEXT_FIELDS:
                values[attr] = self.clean_text(value)
            elif attr in COUNT_FIELDS:
                values[attr] = self.coerce_count(value)
        return FieldSet(**values)  # type: ignore[arg-type]

    @staticmethod
    def _lookup(raw: Mapping[str, object], key: str) -> object:
        if raw.get(key) not in (None, ""):
            return raw[key]
        for alias in _FIELD_ALIASES.get(key, ()):
            if raw.get(alias) not in (None, ""):
                return raw[alias]
        return raw.get(key)
