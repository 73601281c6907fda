"""Utility functions for wordtiles."""

import re


def split_meanings(text: str) -> list[str]:
    """Split a comma or semicolon separated meaning list into clean entries."""
    meanings = re.split(r'\s*[,;]\s*', text.strip())
    cleaned = []
    for m in meanings:
        m = re.sub(r'\s+', ' ', m.strip())
        if m and m not in cleaned:
            cleaned.append(m)
    return cleaned


def first_meaning(text: str) -> str:
    """Return the canonical (first) meaning of a meaning list."""
    meanings = split_meanings(text)
    return meanings[0] if meanings else ''
