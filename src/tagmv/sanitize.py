"""Filename sanitization for artist, album, and title components."""

import unicodedata

from loguru import logger

from .models import RESERVED_NAMES

log = logger.bind(stage="sanitize")

_SEPARATORS = frozenset("/\\")
_FORBIDDEN = frozenset(':*?"<>|')


def sanitize(text: str) -> str:
    """Make a single name component safe on every common filesystem.

    Path separators become '-', characters Windows rejects and control
    characters are dropped, whitespace runs collapse to one space, and
    surrounding spaces and dots are trimmed. Non-ASCII text is kept as is.
    Returns "Unknown" for an empty result and prefixes reserved device
    names (CON, NUL, COM1, ...) with '_'. Idempotent.
    """
    out = []
    for ch in text:
        if ch in _SEPARATORS:
            out.append("-")
        elif ch in _FORBIDDEN or unicodedata.category(ch) == "Cc":
            continue
        else:
            out.append(ch)

    collapsed = " ".join("".join(out).split())
    trimmed = collapsed.strip(". ")

    if not trimmed:
        return "Unknown"

    if trimmed.isascii() and trimmed.upper() in RESERVED_NAMES:
        log.debug(f"Reserved device name guarded: '{trimmed}'")
        return f"_{trimmed}"

    return trimmed
