"""
handlers/photo_handler.py
-------------------------
HTTP handlers for photo metadata.
"""

from fastapi import APIRouter, Depends, Response

from handlers.deps import get_photo_repository
from handlers.errors import server_error
from models.photo import CreatePhoto
from repositories.errors import StorageError
from repositories.photo_repo import PhotoRepository

router = APIRouter(prefix="/api/photos", tags=["photos"])


@router.post("", status_code=201)
def create_photo(new_photo: CreatePhoto, photos: PhotoRepository = Depends(get_photo_repository)):
    """Register a previously uploaded file against a post."""
    try:
        return photos.create(new_photo).to_dict()
    except StorageError as e:
        raise server_error("Failed to create photo record", e)


@router.delete("/{photo_id}", status_code=204)
def delete_photo(photo_id: int, photos: PhotoRepository = Depends(get_photo_repository)):
    try:
        photos.delete(photo_id)
    except StorageError as e:
        raise server_error("Failed to delete photo", e)
    return Response(status_code=204)
