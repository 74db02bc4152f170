"""Regex/heuristic extraction of the printing form fields from raw OCR text.

Label synonyms live in declarative tables; a single matching routine
consumes them. The parser keeps no state, so identical text always yields
an identical FieldSet.
"""

import re
from dataclasses import dataclass
from typing import Literal

from printform.extraction.models import FieldSet
from printform.parsing.sanitizer import FieldSanitizer, parse_count


@dataclass(frozen=True)
class FieldRule:
    """One extracted field: its attribute, label synonyms, and value shape."""

    attr: str
    labels: tuple[str, ...]
    shape: Literal["text", "count"]


# Labels are regex fragments matched case-insensitively, first match wins.
FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("class_name", ("Class", "Grade"), "text"),
    FieldRule("subject", ("Subject",), "text"),
    FieldRule(
        "teacher_in_charge",
        (r"Teacher[\s-]in[\s-]charge", "Teacher"),
        "text",
    ),
    FieldRule(
        "no_of_pages_original_copy",
        (r"No\.? of pages \(original copy\)", r"No\.? of pages", "Pages original"),
        "count",
    ),
    FieldRule("no_of_copies", (r"No\.? of copies", "Copies"), "count"),
    FieldRule(
        "total_no_of_printed_pages",
        (r"Total No\.? of printed pages", "Total pages", "Total printed"),
        "count",
    ),
)

# (attribute, printer label) pairs derived from circle/check marks.
PRINTER_RULES: tuple[tuple[str, str], ...] = (
    ("ricoh", "Ricoh"),
    ("toshiba", "Toshiba"),
)

_MARK_PATTERNS: tuple[str, ...] = (
    r"\([x✓√]\)\s*{label}",
    r"{label}\s*\([x✓√]\)",
    r"\[{label}\]",
    r"<{label}>",
    r"{label}\s*[*✓√✔✗x]",
)

_default_sanitizer = FieldSanitizer()


def _label_value(text: str, labels: tuple[str, ...]) -> str:
    for label in labels:
        match = re.search(rf"\b{label}\s*:?\s*([^\n\r]+)", text, re.IGNORECASE)
        if match:
            return _default_sanitizer.clean_text(match.group(1))
    return ""


def is_marked(text: str, label: str) -> bool:
    """Return True if a circle/check mark appears next to the label."""
    escaped = re.escape(label)
    return any(
        re.search(pattern.format(label=escaped), text, re.IGNORECASE)
        for pattern in _MARK_PATTERNS
    )


def parse_form_text(text: str) -> FieldSet:
    """Derive a FieldSet from raw OCR text."""
    values: dict[str, object] = {}
    for rule in FIELD_RULES:
        raw = _label_value(text, rule.labels)
        values[rule.attr] = parse_count(raw) if rule.shape == "count" else raw

    total = values["total_no_of_printed_pages"]
    for attr, label in PRINTER_RULES:
        values[attr] = str(total) if total and is_marked(text, label) else ""

    return FieldSet(**values)  # type: ignore[arg-type]
