"""Helpers for ``{variable}`` placeholders in notification content."""

import re

PLACEHOLDER_PATTERN = re.compile(r"\{(\w+)\}")


def extract_variables(*texts: str | None) -> list[str]:
    """Return placeholder names in order of first appearance across ``texts``."""
    seen: list[str] = []
    for text in texts:
        if not text:
            continue
        for name in PLACEHOLDER_PATTERN.findall(text):
            if name not in seen:
                seen.append(name)
    return seen


def render_placeholders(text: str | None, data: dict[str, str]) -> tuple[str | None, list[str]]:
    """Substitute placeholders with values from ``data``.

    Placeholders without a value are left untouched and reported as missing.
    """
    if text is None:
        return None, []

    missing: list[str] = []

    def replace(match: re.Match) -> str:
        name = match.group(1)
        if name in data:
            return str(data[name])
        if name not in missing:
            missing.append(name)
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace, text), missing
