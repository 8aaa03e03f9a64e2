from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from app.utils.templating import templates

router = APIRouter()


@router.get("", response_class=HTMLResponse)
def viewer_page(request: Request):
    return templates.TemplateResponse(request, "viewer.html", {})
