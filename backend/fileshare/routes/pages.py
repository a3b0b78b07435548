"""Landing page."""
from fastapi import APIRouter, Request

from fileshare.templating import templates

router = APIRouter(tags=["pages"])


@router.get("/")
async def index(request: Request):
    """Render the upload form with no link yet."""
    return templates.TemplateResponse(request, "index.html", {"file_link": None})
