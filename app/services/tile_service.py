# app/services/tile_service.py
"""
Map tile and font glyph pass-through to TileServer GL.

GET /api/tiles/{style}/{z}/{x}/{y}.{fmt}   → {TILE_SERVER_URL}/styles/{style}/{z}/{x}/{y}.{fmt}
GET /api/fonts/{fontstack}/{range}.pbf      → {TILE_SERVER_URL}/fonts/{fontstack}/{range}.pbf
No caching or rewriting; the upstream body and content type are returned as-is.
"""

import re
from urllib.parse import quote
import httpx
from app.config import settings
from app.services.exceptions import UpstreamFailure, ValidationFailed
from app.utils.logger import get_logger

logger = get_logger(__name__)

TILE_FORMATS = {"png", "jpg", "jpeg", "webp", "pbf"}
_STYLE_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_FONTSTACK_RE = re.compile(r"^[A-Za-z0-9 ,_-]+$")     # e.g. "Open Sans Regular,Arial Unicode MS Regular"
_GLYPH_RANGE_RE = re.compile(r"^(\d+)-(\d+)$")


def tile_url(style: str, z: int, x: int, y: int, fmt: str) -> str:
    if not _STYLE_RE.match(style):
        raise ValidationFailed(f"Invalid tile style: {style}")
    if fmt not in TILE_FORMATS:
        raise ValidationFailed(f"Invalid tile format: {fmt}")
    if z < 0 or x < 0 or y < 0:
        raise ValidationFailed("Tile coordinates must not be negative")
    return f"{settings.TILE_SERVER_URL.rstrip('/')}/styles/{style}/{z}/{x}/{y}.{fmt}"


def glyph_url(fontstack: str, glyph_range: str) -> str:
    if not _FONTSTACK_RE.match(fontstack):
        raise ValidationFailed(f"Invalid font stack: {fontstack}")
    match = _GLYPH_RANGE_RE.match(glyph_range)
    if not match or int(match.group(1)) > int(match.group(2)):
        raise ValidationFailed(f"Invalid glyph range: {glyph_range}")
    return f"{settings.TILE_SERVER_URL.rstrip('/')}/fonts/{quote(fontstack)}/{glyph_range}.pbf"


async def _proxy(url: str, what: str, transport=None):
    """
    GET url upstream. Returns (status_code, content, content_type).
    Upstream 4xx (e.g. tile out of range, unknown font) is passed through;
    5xx and connection errors raise UpstreamFailure.
    """
    try:
        async with httpx.AsyncClient(timeout=settings.TILE_TIMEOUT_SECONDS, transport=transport) as client:
            resp = await client.get(url)
    except httpx.HTTPError as e:
        logger.error(f"{what.capitalize()} proxy error for {url}: {e}")
        raise UpstreamFailure(f"Failed to proxy {what} request") from e

    if resp.status_code >= 500:
        logger.warning(f"Tile server returned HTTP {resp.status_code} for {url}")
        raise UpstreamFailure(f"Tile server returned HTTP {resp.status_code}")

    logger.debug(f"Proxied {url} → {resp.status_code}")
    content_type = resp.headers.get("content-type", "application/octet-stream")
    return resp.status_code, resp.content, content_type


async def fetch_tile(style: str, z: int, x: int, y: int, fmt: str, transport=None):
    return await _proxy(tile_url(style, z, x, y, fmt), "tile", transport)


async def fetch_glyphs(fontstack: str, glyph_range: str, transport=None):
    """Fetch one PBF glyph range for a font stack."""
    return await _proxy(glyph_url(fontstack, glyph_range), "font", transport)
