"""Text helpers."""

from __future__ import annotations

import re


def slugify(value: str, max_len: int = 50) -> str:
    """Generate filesystem-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    if not slug:
        slug = "session"
    return slug[:max_len]


def first_sentence(value: str, max_len: int = 80) -> str:
    """Shorten instructional text for table cells."""
    text = " ".join(value.split())
    head = text.split(". ")[0].rstrip(".")
    if len(head) > max_len:
        return head[: max_len - 3].rstrip() + "..."
    return head
