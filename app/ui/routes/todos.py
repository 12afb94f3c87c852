"""
Single-page todo UI.

The page itself is static; all data is loaded by ``app.js`` through the
REST API under ``settings.API_PREFIX``.
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

UI_ROOT = Path(__file__).resolve().parent.parent

router = APIRouter(tags=["ui"])
templates = Jinja2Templates(directory=str(UI_ROOT / "templates"))


@router.get("/", response_class=HTMLResponse)
async def todo_page(request: Request):
    settings = request.app.state.settings
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "app_name": settings.APP_NAME,
            "api_base": f"{settings.API_PREFIX}/todos",
            "priorities": ["low", "medium", "high"],
        },
    )
