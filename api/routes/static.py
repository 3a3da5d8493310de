"""
Single-page application catch-all

Serves files from the static directory and falls back to index.html for any
path that is not a file, so client-side routing works.
"""

import posixpath
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from core.dependencies import get_settings
from core.settings import Settings

router = APIRouter()

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
INDEX_DOCUMENT = "index.html"


def resolve_static_path(static_dir: str, path: str) -> Path:
    """Map a request path onto a file under ``static_dir``, or its index document."""
    root = Path(static_dir)
    # Rooting at "/" before normalizing keeps ".." from climbing out of root
    cleaned = posixpath.normpath("/" + path).lstrip("/")
    candidate = root / cleaned if cleaned else root
    if candidate.is_file():
        return candidate
    if candidate.is_dir() and (candidate / INDEX_DOCUMENT).is_file():
        return candidate / INDEX_DOCUMENT
    return root / INDEX_DOCUMENT


@router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
async def catch_all(path: str, settings: Settings = Depends(get_settings)):
    file_path = resolve_static_path(settings.STATIC_DIR, path)
    if not file_path.is_file():
        raise HTTPException(status_code=404, detail="Not Found")
    return FileResponse(file_path)
