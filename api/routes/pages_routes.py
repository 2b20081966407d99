"""Page routes: the static landing page."""

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from core.config import get_settings

router = APIRouter(tags=["pages"], include_in_schema=False)


@router.get("/")
async def index() -> FileResponse:
    """Serve the landing page with forms for the write endpoints."""
    index_path = get_settings().views_dir_path / "index.html"
    if not index_path.is_file():
        raise HTTPException(status_code=404, detail="Not found")
    return FileResponse(index_path, media_type="text/html")
