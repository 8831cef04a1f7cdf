"""
Image proxy endpoint.

Fetches card images from allow-listed upstream hosts on behalf of kiosks
whose network or the upstream host refuses direct hot-linking.

Every hop must stay on the allow-list: redirects are followed by hand and
each Location is re-checked before it is requested.
"""

import logging
from typing import Annotated

import httpx
from fastapi import APIRouter, HTTPException, Query, Response, status

from tcgkiosk.config import settings
from tcgkiosk.services.image_sources import is_proxyable, sanitize_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/images", tags=["images"])

USER_AGENT = "TCGKiosk/1.0"
CACHE_CONTROL = "public, max-age=86400"


def _is_allowed_upstream(url: str) -> bool:
    return url.lower().startswith(("http://", "https://")) and is_proxyable(
        url, settings.image_proxy_hosts
    )


def _bad_gateway(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


async def _fetch_allowed(client: httpx.AsyncClient, url: str) -> httpx.Response:
    """
    Send a streaming GET, following redirects only within the allow-list.

    Raises:
        HTTPException: 502 when a redirect leaves the allow-list or the
            redirect limit is exceeded
        httpx.HTTPError: On transport failures
    """
    request = client.build_request("GET", url)

    for _ in range(settings.proxy_max_redirects + 1):
        response = await client.send(request, stream=True)
        if response.next_request is None:
            return response

        await response.aclose()
        request = response.next_request
        location = str(request.url)
        if not _is_allowed_upstream(location):
            logger.warning("Image proxy refused redirect from %s to %s", url, location)
            raise _bad_gateway("Upstream redirected outside the allowed hosts")

    raise _bad_gateway("Too many upstream redirects")


async def _read_capped(response: httpx.Response, limit: int) -> bytes:
    """Read a streamed body, refusing anything larger than limit bytes."""
    declared = response.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise _bad_gateway("Upstream image too large")

    body = bytearray()
    async for chunk in response.aiter_bytes():
        body.extend(chunk)
        if len(body) > limit:
            raise _bad_gateway("Upstream image too large")

    return bytes(body)


@router.get("/proxy")
async def proxy_image(url: Annotated[str, Query(min_length=1)]) -> Response:
    """
    Relay an upstream card image.

    Returns 400 for URLs outside the allow-list and 502 for any upstream
    problem, including off-list redirects and oversized bodies.
    """
    target = sanitize_url(url)
    if not _is_allowed_upstream(target):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Image host is not allowed",
        )

    try:
        async with httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            follow_redirects=False,
            timeout=settings.proxy_timeout,
        ) as client:
            upstream = await _fetch_allowed(client, target)
            try:
                upstream.raise_for_status()

                content_type = upstream.headers.get("content-type", "")
                if not content_type.startswith("image/"):
                    logger.warning("Image proxy got %r from %s", content_type, target)
                    raise _bad_gateway("Upstream did not return an image")

                content = await _read_capped(upstream, settings.proxy_max_bytes)
            finally:
                await upstream.aclose()
    except httpx.HTTPError as e:
        logger.warning("Image proxy failed for %s: %s", target, e)
        raise _bad_gateway("Upstream image unavailable") from e

    return Response(
        content=content,
        media_type=content_type,
        headers={"Cache-Control": CACHE_CONTROL},
    )
