# src/cache/normalize.py — v2
"""Normalization of extracted document text.

Volatile substrings (timestamps, dates, page counters, "generated on"
footers, document ids and versions) are masked so that the same documents
re-extracted at a different time produce byte-identical text, keeping the
fingerprint and the provider's prompt cache stable.
"""

from __future__ import annotations

import re

_MONTHS = (
    "January|February|March|April|May|June|July|August|"
    "September|October|November|December"
)

# Applied before whitespace collapsing: some rules are line-anchored.
_LINE_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d{3})?Z"), "[TIMESTAMP]"),
    (re.compile(r"\d{4}-\d{2}-\d{2}\s+\d{2}:\d{2}:\d{2}"), "[TIMESTAMP]"),
    (re.compile(r"\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}"), "[DATE]"),
    (re.compile(rf"\b(?:{_MONTHS})\s+\d{{1,2}},?\s+\d{{4}}"), "[DATE]"),
    (re.compile(r"Page\s+\d+\s+of\s+\d+", re.IGNORECASE), "[PAGE]"),
    (re.compile(r"Generated\s+on\s+.+$", re.IGNORECASE | re.MULTILINE), "[GENERATED_DATE]"),
    (re.compile(r"Last\s+updated\s*:?\s*.+$", re.IGNORECASE | re.MULTILINE), "[UPDATED_DATE]"),
    (re.compile(r"Created\s+on\s+.+$", re.IGNORECASE | re.MULTILINE), "[CREATED_DATE]"),
]

_WHITESPACE = re.compile(r"\s+")

_IDENTIFIER_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\bDocument\s+ID\s*:?\s*(?!\[)\w+", re.IGNORECASE), "[DOCUMENT_ID]"),
    (re.compile(r"\bVersion\s*:?\s*\d[\d.]*", re.IGNORECASE), "[VERSION]"),
]


def normalize_context_text(text: str) -> str:
    """Mask volatile substrings and collapse whitespace.

    The result is a single line; applying the function twice gives the
    same output as applying it once.
    """
    if not text:
        return ""
    for pattern, replacement in _LINE_RULES:
        text = pattern.sub(replacement, text)
    text = _WHITESPACE.sub(" ", text).strip()
    for pattern, replacement in _IDENTIFIER_RULES:
        text = pattern.sub(replacement, text)
    return text
