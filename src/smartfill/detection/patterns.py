"""Coarse form category from the names and labels of its fields."""

from __future__ import annotations

from typing import Iterable, Sequence, Tuple

from ..core.models import FormField

FORM_PATTERNS: Sequence[Tuple[str, Tuple[str, ...]]] = (
    ("login", ("password", "email", "username", "login")),
    ("registration", ("password", "confirm", "email", "register", "signup")),
    ("contact", ("name", "email", "message", "subject", "contact")),
    ("address", ("address", "street", "city", "zip", "state")),
    ("profile", ("firstname", "lastname", "phone", "profile", "about")),
)
GENERIC_PATTERN = "generic"


def detect_form_pattern(fields: Iterable[FormField]) -> str:
    """Coarse form category from field names and labels; the first listed match wins."""

    fields = list(fields)
    words = [item.name.lower() for item in fields] + [(item.label or "").lower() for item in fields]
    haystack = " ".join(words)
    for pattern, keywords in FORM_PATTERNS:
        if any(keyword in haystack for keyword in keywords):
            return pattern
    return GENERIC_PATTERN
