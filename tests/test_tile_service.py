# tests/test_tile_service.py
"""Unit tests for the map tile pass-through."""

import httpx
import pytest
from app.services.exceptions import UpstreamFailure, ValidationFailed
from app.services.tile_service import fetch_glyphs, fetch_tile, glyph_url, tile_url


def transport(status_code=200, content=b"\x89PNG", raise_error=None, seen=None):
    def handler(request):
        if seen is not None:
            seen.append(str(request.url))
        if raise_error:
            raise raise_error
        return httpx.Response(status_code, content=content, headers={"content-type": "image/png"})
    return httpx.MockTransport(handler)


def test_url_rewritten_to_styles_path():
    assert tile_url("dark", 12, 941, 1682, "png").endswith("/styles/dark/12/941/1682.png")


@pytest.mark.parametrize("style, fmt", [("../etc", "png"), ("dark", "exe")])
def test_url_rejects_bad_input(style, fmt):
    with pytest.raises(ValidationFailed):
        tile_url(style, 1, 1, 1, fmt)


class TestFetchTile:
    @pytest.mark.asyncio
    async def test_passes_body_through(self):
        seen = []
        status, content, content_type = await fetch_tile("basic", 3, 1, 2, "png",
                                                         transport=transport(seen=seen))
        assert (status, content, content_type) == (200, b"\x89PNG", "image/png")
        assert seen[0].endswith("/styles/basic/3/1/2.png")

    @pytest.mark.asyncio
    async def test_upstream_404_passed_through(self):
        status, _, _ = await fetch_tile("basic", 3, 1, 2, "png", transport=transport(status_code=404))
        assert status == 404

    @pytest.mark.asyncio
    async def test_upstream_500_raises(self):
        with pytest.raises(UpstreamFailure):
            await fetch_tile("basic", 3, 1, 2, "png", transport=transport(status_code=503))

    @pytest.mark.asyncio
    async def test_connection_error_raises(self):
        with pytest.raises(UpstreamFailure):
            await fetch_tile("basic", 3, 1, 2, "png",
                             transport=transport(raise_error=httpx.ConnectError("refused")))


def test_glyph_url_quotes_font_stack():
    url = glyph_url("Open Sans Regular,Arial Unicode MS Regular", "0-255")
    assert url.endswith("/fonts/Open%20Sans%20Regular%2CArial%20Unicode%20MS%20Regular/0-255.pbf")


@pytest.mark.parametrize("fontstack, glyph_range", [
    ("..", "0-255"),
    ("Open Sans", "255-0"),
    ("Open Sans", "abc"),
])
def test_glyph_url_rejects_bad_input(fontstack, glyph_range):
    with pytest.raises(ValidationFailed):
        glyph_url(fontstack, glyph_range)


class TestFetchGlyphs:
    @pytest.mark.asyncio
    async def test_passes_body_through(self):
        seen = []
        status, content, _ = await fetch_glyphs("Noto Sans Bold", "256-511",
                                                transport=transport(content=b"glyphs", seen=seen))
        assert (status, content) == (200, b"glyphs")
        assert seen[0].endswith("/fonts/Noto%20Sans%20Bold/256-511.pbf")

    @pytest.mark.asyncio
    async def test_unknown_font_404_passed_through(self):
        status, _, _ = await fetch_glyphs("Nope", "0-255", transport=transport(status_code=404))
        assert status == 404

    @pytest.mark.asyncio
    async def test_connection_error_raises(self):
        with pytest.raises(UpstreamFailure) as exc:
            await fetch_glyphs("Noto Sans Bold", "0-255",
                               transport=transport(raise_error=httpx.ConnectError("refused")))
        assert exc.value.detail == "Failed to proxy font request"
