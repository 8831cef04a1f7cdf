"""Text helpers shared by the normalizer and the set metadata resolver."""

import re

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(value: str) -> str:
    """Collapse runs of whitespace to single spaces and trim."""
    return _WHITESPACE.sub(" ", value).strip()


def humanize_label(slug: str) -> str:
    """
    Convert a slug or file stem into a display label.

    Dashes and underscores become spaces and each word gets an upper-case
    first letter; the rest of each word is left as is.

    Examples:
        >>> humanize_label("one-piece_op01")
        'One Piece Op01'
        >>> humanize_label("sv3pt5")
        'Sv3pt5'
    """
    if not slug:
        return ""

    label = collapse_whitespace(slug.replace("-", " ").replace("_", " "))
    return " ".join(word[:1].upper() + word[1:] for word in label.split(" ") if word)
