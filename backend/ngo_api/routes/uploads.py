"""
NGO Site Backend - Uploaded Image Route
=======================================

What:  Serves member images from the asset store at /uploads/{filename}.
How:   LocalAssetStore.path_for() confines lookups to UPLOAD_DIR; unknown or
       deleted assets answer 404.
"""

import mimetypes

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from ngo_api.dependencies import get_asset_store
from ngo_api.exceptions import NotFoundError
from ngo_api.schemas.common import ErrorResponse
from ngo_api.services.asset_store import UPLOADS_PREFIX, LocalAssetStore

router = APIRouter(prefix=UPLOADS_PREFIX, tags=["Uploads"])


@router.get(
    "/{filename}",
    summary="Serve an uploaded image",
    responses={
        200: {"description": "Image file"},
        404: {"description": "Image not found", "model": ErrorResponse},
    },
)
async def serve_upload(
    filename: str,
    assets: LocalAssetStore = Depends(get_asset_store),
) -> FileResponse:
    path = assets.path_for(filename)
    if not path.is_file():
        raise NotFoundError(resource="image", resource_id=filename)

    media_type, _ = mimetypes.guess_type(path.name)
    return FileResponse(
        path=str(path),
        media_type=media_type or "application/octet-stream",
        headers={"Cache-Control": "public, max-age=86400"},
    )
