"""
Image source resolution.

Picks the primary and full-size image for a card and builds a responsive
srcset from the per-card image-size map. Also owns URL sanitizing and the
image-proxy rewrite used when an upstream host refuses to serve an image.
"""

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlsplit

from tcgkiosk.config import IMAGE_SIZES_HINT
from tcgkiosk.models.card import ImageSources

ALLOWED_SCHEMES = frozenset({"http", "https"})

_CONTROL_CHARS = {chr(c) for c in range(0x20)} | {"\x7f"}


@dataclass(frozen=True, slots=True)
class SizeVariant:
    """A recognized image size key."""

    key: str
    descriptor: str
    priority: int


# Declaration order matters: the first non-empty entry becomes the primary image
SIZE_VARIANTS: tuple[SizeVariant, ...] = (
    SizeVariant("small", "1x", 10),
    SizeVariant("normal", "1.5x", 20),
    SizeVariant("large", "2x", 30),
    SizeVariant("image", "3x", 40),
)

FULL_SIZE_KEYS = frozenset({"large", "image"})


def sanitize_url(url: str) -> str:
    """
    Clean a URL for use in an img src/srcset attribute.

    Surrounding whitespace and control characters are stripped and inner
    spaces are percent-encoded. Only http(s) and scheme-less (relative or
    protocol-relative) URLs survive; anything else (javascript:, data:, ...)
    becomes an empty string.
    """
    if not isinstance(url, str):
        return ""

    cleaned = "".join(ch for ch in url.strip() if ch not in _CONTROL_CHARS)
    cleaned = cleaned.strip().replace(" ", "%20")
    if not cleaned:
        return ""

    try:
        parts = urlsplit(cleaned)
    except ValueError:
        return ""

    if parts.scheme and parts.scheme.lower() not in ALLOWED_SCHEMES:
        return ""

    if parts.scheme and not parts.netloc:
        return ""

    return cleaned


def _clean_entry(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def resolve_image_sources(images: dict[str, Any]) -> ImageSources:
    """
    Select image URLs from a card's image-size map.

    Args:
        images: Map of size key -> URL (e.g. {"small": ..., "large": ...})

    Returns:
        ImageSources with primary, full, srcset and sizes. primary is empty
        when no usable URL exists; callers drop such cards.
    """
    if not images:
        return ImageSources()

    primary = ""
    full = ""
    candidates: list[tuple[int, str, str]] = []

    for variant in SIZE_VARIANTS:
        url = _clean_entry(images.get(variant.key))
        if not url:
            continue

        if not primary:
            primary = url

        if variant.key in FULL_SIZE_KEYS:
            full = url

        candidates.append((variant.priority, variant.descriptor, url))

    if not primary:
        # Unrecognized keys: take the first non-empty URL in map order
        for value in images.values():
            url = _clean_entry(value)
            if url:
                primary = url
                break

    if not full:
        full = primary

    srcset = ""
    sizes = ""
    if candidates:
        seen: set[str] = set()
        parts: list[str] = []
        for _priority, descriptor, url in sorted(candidates, key=lambda c: c[0]):
            if descriptor in seen:
                continue
            sanitized = sanitize_url(url)
            if not sanitized:
                continue
            seen.add(descriptor)
            parts.append(f"{sanitized} {descriptor}")

        # A single candidate adds nothing over the plain src
        if len(parts) > 1:
            srcset = ", ".join(parts)
            sizes = IMAGE_SIZES_HINT

    primary = sanitize_url(primary)
    return ImageSources(
        primary=primary,
        full=sanitize_url(full) or primary,
        srcset=srcset,
        sizes=sizes,
    )


def url_host(url: str) -> str:
    """Lowercased host of an absolute or protocol-relative URL, else ""."""
    try:
        return (urlsplit(url).hostname or "").lower()
    except ValueError:
        return ""


def is_proxyable(url: str, allowed_hosts: list[str] | tuple[str, ...]) -> bool:
    """Check whether a URL points at an allow-listed upstream image host."""
    host = url_host(url)
    if not host:
        return False
    return host in {h.lower() for h in allowed_hosts}


def build_proxy_url(url: str, proxy_base_url: str) -> str:
    """Rewrite an image URL through the image proxy service."""
    return f"{proxy_base_url}{quote(url, safe='')}"
