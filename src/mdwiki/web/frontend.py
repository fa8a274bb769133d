"""Search page served at ``/``; the HTML ships as package data."""

from __future__ import annotations

from functools import lru_cache
from importlib.resources import files

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

TEMPLATE_NAME = "index.html"

router = APIRouter()


@lru_cache(maxsize=1)
def _load_template() -> str:
    return files(__package__).joinpath("templates", TEMPLATE_NAME).read_text(encoding="utf-8")


@router.get("/", response_class=HTMLResponse)
async def search_page() -> HTMLResponse:
    # The page calls /search and /suggest on the same origin
    return HTMLResponse(content=_load_template(), headers={"Cache-Control": "no-cache"})
