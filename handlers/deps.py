"""
handlers/deps.py
----------------
FastAPI dependencies handing the app-owned resources to handlers.
"""

from fastapi import Depends, Request

from db.connection import Database
from repositories.photo_repo import PhotoRepository
from repositories.post_repo import PostRepository
from services.upload_service import UploadService


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_post_repository(database: Database = Depends(get_database)) -> PostRepository:
    return PostRepository(database)


def get_photo_repository(database: Database = Depends(get_database)) -> PhotoRepository:
    return PhotoRepository(database)


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service
