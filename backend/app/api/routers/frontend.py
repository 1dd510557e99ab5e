"""Catch-all route serving the bundled front-end."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse

from ...api.dependencies import get_settings
from ...config import Settings

router = APIRouter(tags=["frontend"])

INDEX_FILE = "index.html"


@router.get("/{full_path:path}", include_in_schema=False)
def serve_frontend(
    full_path: str,
    settings: Settings = Depends(get_settings),
) -> FileResponse:
    """Serve a built asset when it exists, otherwise the entry page."""

    if full_path == "api" or full_path.startswith("api/"):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")

    dist_dir = settings.frontend_dist_dir.resolve()
    if full_path:
        candidate = (dist_dir / full_path).resolve()
        if candidate.is_file() and candidate.is_relative_to(dist_dir):
            return FileResponse(candidate)

    index_path = dist_dir / INDEX_FILE
    if not index_path.is_file():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error_code": "FRONTEND_NOT_BUILT",
                "message": "Front-end bundle not found",
                "details": {"dist_dir": str(dist_dir)},
            },
        )
    return FileResponse(index_path)
