# app/routers/tiles.py
"""Map tile and font glyph pass-through. Public: the map renders before login."""

from fastapi import APIRouter, Response
from app.services.tile_service import fetch_glyphs, fetch_tile

router = APIRouter()


@router.get("/tiles/{style}/{z}/{x}/{y}.{fmt}", summary="Proxy a map tile from TileServer GL")
async def get_tile(style: str, z: int, x: int, y: int, fmt: str):
    status_code, content, content_type = await fetch_tile(style, z, x, y, fmt)
    return Response(content=content, status_code=status_code, media_type=content_type)


@router.get("/fonts/{fontstack}/{glyph_range}.pbf", summary="Proxy font glyphs for map labels")
async def get_glyphs(fontstack: str, glyph_range: str):
    status_code, content, content_type = await fetch_glyphs(fontstack, glyph_range)
    return Response(content=content, status_code=status_code, media_type=content_type)
