from __future__ import annotations

"""
Comparison keys for book titles.

The key is never shown to anyone; it only has to make two renderings of the
same title (full-width vs half-width, spaced vs unspaced, with or without
subtitle punctuation) compare equal or substring-related.
"""

import re

# Full-width "！" .. "～" sit exactly 0xFEE0 above their ASCII twins
_FULLWIDTH_RE = re.compile("[！-～]")
_FULLWIDTH_OFFSET = 0xFEE0

_WHITESPACE_RE = re.compile(r"\s+")
_SEPARATOR_RE = re.compile("[・:：~～]")


def fold_fullwidth(text: str) -> str:
    """Map full-width ASCII variants onto their half-width code points."""
    return _FULLWIDTH_RE.sub(lambda m: chr(ord(m.group(0)) - _FULLWIDTH_OFFSET), text)


def normalize_title_key(text: str | None) -> str:
    """
    Canonical comparison key for a title.

    * lowercase
    * fold full-width forms to half-width
    * drop all whitespace
    * drop middle dots, colons and tildes (both widths)
    """
    if not text:
        return ""
    # full lower() so full-width capitals land on lowercase after folding
    key = text.lower()
    key = fold_fullwidth(key)
    key = _WHITESPACE_RE.sub("", key)
    key = _SEPARATOR_RE.sub("", key)
    return key
