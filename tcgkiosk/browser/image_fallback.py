"""
Image load fallback policy.

When a card image fails to load the renderer asks ImageFallback for the next
URL to try. URLs are never attempted twice; once every option is exhausted
the image is permanently failed.
"""

from dataclasses import dataclass, field

from tcgkiosk.services.image_sources import build_proxy_url, is_proxyable


@dataclass
class ImageFallback:
    """
    Retry state of one card image.

    Attributes:
        primary: Origin URL the card image is known by
        full: Largest available URL of the card
        proxy_base_url: Prefix of the image proxy service
        proxy_hosts: Upstream hosts allowed through the proxy
        start_proxied: Start on the proxied primary URL (allow-listed hosts only)
    """

    primary: str
    full: str = ""
    proxy_base_url: str = ""
    proxy_hosts: tuple[str, ...] = ()
    start_proxied: bool = False
    current: str = ""
    attempted: list[str] = field(default_factory=list)
    failed: bool = False
    # Origin URL behind the proxied URL currently shown, "" when not proxied
    origin: str = ""

    def __post_init__(self) -> None:
        self.current = self.primary
        if self.start_proxied and self._can_proxy(self.primary):
            self.current = build_proxy_url(self.primary, self.proxy_base_url)
            self.origin = self.primary
        if self.current:
            self.attempted.append(self.current)

    @property
    def proxied(self) -> bool:
        return bool(self.origin)

    def _can_proxy(self, url: str) -> bool:
        return bool(self.proxy_base_url) and is_proxyable(url, self.proxy_hosts)

    def _untried(self, url: str) -> bool:
        return bool(url) and url not in self.attempted

    def _switch(self, url: str, origin: str = "") -> str:
        self.current = url
        self.origin = origin
        self.attempted.append(url)
        return url

    def next_url(self) -> str | None:
        """
        Record a failure of the current URL and pick the next one.

        Order:
            1. the full-size URL, if different and not tried yet
            2. the proxied rewrite, for allow-listed hosts only
            3. the origin URL when the proxied URL itself failed
            4. give up: the image is marked failed and None is returned
        """
        if self.failed:
            return None

        failing = self.current

        if self.full != failing and self._untried(self.full):
            return self._switch(self.full)

        if not self.proxied and self._can_proxy(failing):
            proxied = build_proxy_url(failing, self.proxy_base_url)
            if self._untried(proxied):
                return self._switch(proxied, origin=failing)

        if self.proxied:
            for origin in (self.origin, self.primary):
                if self._untried(origin):
                    return self._switch(origin)

        self.failed = True
        self.origin = ""
        return None
