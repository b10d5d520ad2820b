"""
Pages Router

Static pages that need no data source.
"""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from bookbrowser.templating import templates

router = APIRouter(tags=["Pages"])


@router.get("/", response_class=HTMLResponse, summary="Landing page")
def index(request: Request) -> HTMLResponse:
    """Landing page with the title search and review lookup forms."""
    return templates.TemplateResponse(request, "index.html")
