"""
Travel API Backend — Uploaded Image Serving
=============================================

What:  GET /uploads/{path} serves images stored by FileService.
Why:   Place and agency rows hold "uploads/YYYY/MM/DD/<uuid>.<ext>"; the
       client prefixes the server origin and loads the image from here.

Security:
    - The path is resolved under the upload root; anything escaping it
      (../../etc/passwd) is rejected with 400
    - Missing files are 404
"""

import mimetypes

from fastapi import APIRouter
from fastapi.responses import FileResponse

from travel_api.exceptions import NotFoundError
from travel_api.schemas.common import ErrorResponse
from travel_api.services.file_service import file_service

router = APIRouter(tags=["Uploads"])


@router.get(
    "/uploads/{file_path:path}",
    summary="Serve an uploaded image",
    responses={
        200: {"description": "Image file"},
        400: {"description": "Invalid path", "model": ErrorResponse},
        404: {"description": "File not found", "model": ErrorResponse},
    },
)
async def serve_upload(file_path: str) -> FileResponse:
    full_path = file_service.resolve_reference(file_path)

    if not full_path.is_file():
        raise NotFoundError(resource="File", resource_id=file_path)

    media_type, _ = mimetypes.guess_type(full_path.name)
    return FileResponse(
        path=str(full_path),
        media_type=media_type or "application/octet-stream",
        headers={"Cache-Control": "public, max-age=86400"},  # images never change
    )
