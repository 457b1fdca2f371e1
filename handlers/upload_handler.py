"""
handlers/upload_handler.py
--------------------------
POST /api/upload: store the first file part of a multipart request.
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.datastructures import UploadFile

from handlers.deps import get_upload_service
from handlers.errors import server_error
from services.upload_service import UploadError, UploadService

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload")
async def upload_photo(request: Request, uploads: UploadService = Depends(get_upload_service)):
    """
    Save the first file part under a generated name and return
    `{"filename", "url"}`. Any further parts are ignored.
    """
    async with request.form() as form:
        upload = next(
            (value for _, value in form.multi_items() if isinstance(value, UploadFile)),
            None,
        )
        if upload is None:
            raise HTTPException(status_code=400, detail="No file provided")
        try:
            stored = await uploads.save(upload)
        except UploadError as e:
            raise server_error(e.message, e.cause or e)

    return {"filename": stored.filename, "url": stored.url}
