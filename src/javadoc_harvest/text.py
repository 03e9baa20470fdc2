"""Text cleanup for Javadoc cell contents."""

import re

from loguru import logger

# The HTML parser keeps source newlines and &nbsp; runs inside cells.
_WHITESPACE_RE = re.compile(r"[\s\xa0]+")
# Javadoc emits &#8203; between a method name and its "(".
_ZERO_WIDTH_SPACE = "\u200b"


def normalize(text: str) -> str:
    """Collapse whitespace and non-breaking spaces to single spaces."""
    text = text.replace(_ZERO_WIDTH_SPACE, "")
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_generics(text: str) -> str:
    """Remove angle-bracket generic parameter lists, at any nesting depth.

    ``addAll(Collection<List<A, B>, C> c)`` becomes ``addAll(Collection c)``.
    Text whose brackets do not balance is returned unchanged.
    """
    if "<" not in text and ">" not in text:
        return text

    depth = 0
    kept: list[str] = []
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
            if depth < 0:
                break
        elif depth == 0:
            kept.append(ch)

    if depth != 0:
        # Probably not generics at all, e.g. a comparison in a description.
        logger.warning(f"Angle brackets didn't match up: {text}")
        return text

    return "".join(kept)
