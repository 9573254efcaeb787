from __future__ import annotations

from typing import List


def format_field_content(values: List[str]) -> str:
    """Render values as a 1-indexed list separated by blank lines."""
    return "\n\n".join(f"{i}. {v}" for i, v in enumerate(values, start=1))


def field_title(name: str) -> str:
    return name.replace('_', ' ').upper()


def context_preview(text: str, limit: int = 200) -> str:
    if not text:
        return ""
    return f"{text[:max(0, int(limit))]}..."
