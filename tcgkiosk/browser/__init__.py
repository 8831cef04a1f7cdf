"""
Browsing session boundary.

UI state transitions and the image fallback policy used by renderers.
"""

from tcgkiosk.browser.controller import (
    BrowserController,
    BrowserState,
    FilterOptions,
    FilterState,
    Renderer,
)
from tcgkiosk.browser.image_fallback import ImageFallback

__all__ = [
    "BrowserController",
    "BrowserState",
    "FilterOptions",
    "FilterState",
    "ImageFallback",
    "Renderer",
]
