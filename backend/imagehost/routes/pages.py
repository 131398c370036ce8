"""HTML page routes."""
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from jinja2 import TemplateError

from imagehost.errors import RenderError

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Render the landing page. No dynamic data goes into the template."""
    templates = request.app.state.templates
    try:
        return templates.TemplateResponse(request, "index.html")
    except TemplateError as e:
        raise RenderError(f"Could not render index.html: {e}") from e
