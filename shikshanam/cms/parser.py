"""Parsing of CMS ``key: value`` text blocks."""

import re
from collections.abc import Mapping

from loguru import logger

from ..types import CMSContent

MAX_INPUT_LENGTH = 1000
MAX_KEY_LENGTH = 50

FIELD_ALIASES: dict[str, str] = {
    "main title": "mainTitle",
    "maintitle": "mainTitle",
    "subtitle": "subtitle",
    "question": "question",
    "button text": "buttonText",
    "buttontext": "buttonText",
    "description": "description",
}

_ALLOWED_KEY = re.compile(r"^[a-zA-Z0-9\s-]+$")
_EDGE_QUOTES = re.compile(r"^[\"']|[\"']$")


def sanitize_input(text: str) -> str:
    """Trim, strip angle brackets and cap the length of a CMS string."""
    if not isinstance(text, str):
        return ""
    return re.sub(r"[<>]", "", text.strip())[:MAX_INPUT_LENGTH]


def parse_cms_content(text: str | None) -> CMSContent:
    """Parse a CMS text block into structured content.

    Each non-blank line holding a colon is a ``key: value`` pair. Keys are
    lower-cased and mapped onto the known content fields; unknown keys are
    kept only when they look like plain words.
    """
    content: CMSContent = {}
    if not text or not isinstance(text, str):
        return content

    for line in text.split("\n"):
        line = line.strip()
        if not line or ":" not in line:
            continue

        raw_key, _, raw_value = line.partition(":")
        key = sanitize_input(raw_key.strip().lower())
        value = sanitize_input(_EDGE_QUOTES.sub("", raw_value.strip()))

        field = FIELD_ALIASES.get(key)
        if field:
            content[field] = value
        elif len(key) < MAX_KEY_LENGTH and _ALLOWED_KEY.match(key):
            content[key] = value
        else:
            logger.debug(f"Ignoring CMS key {key[:20]!r}")

    return content


def format_cms_content(content: Mapping[str, str]) -> str:
    """Render content back into the ``key: value`` format the CMS edits."""
    return "\n".join(f"{key}: {value}" for key, value in content.items())


def parse_sync_content(text: str) -> dict[str, str]:
    """Parse ``key: value`` lines pushed back from the CMS.

    Only the first ``": "`` separates key from value, so values may contain
    colons. Keys keep their case.
    """
    parsed: dict[str, str] = {}
    for line in text.split("\n"):
        key, sep, value = line.partition(": ")
        if key and sep:
            parsed[key.strip()] = value.strip()
    return parsed
