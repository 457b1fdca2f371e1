"""
repositories/photo_repo.py
--------------------------
Data access layer for photo metadata.
All SQL related to the `photos` table lives here.
"""

from sqlalchemy import delete, insert, select
from sqlalchemy.engine import Row

from db.connection import Database
from db.init_db import photos_table
from models.photo import CreatePhoto, Photo
from repositories.errors import NotFound, storage_errors
from utils.logger import get_logger

logger = get_logger(__name__)


class PhotoRepository:
    """Repository for operations on the photos table. Photos are never updated in place."""

    def __init__(self, database: Database) -> None:
        self._db = database

    def create(self, new_photo: CreatePhoto) -> Photo:
        """
        Register an uploaded file against a post.

        Raises:
            StorageError: Also raised when `post_id` references no post.
        """
        stmt = insert(photos_table).values(
            post_id=new_photo.post_id,
            filename=new_photo.filename,
            caption=new_photo.caption,
            display_order=new_photo.display_order,
        )
        with storage_errors("create photo"), self._db.begin() as conn:
            photo_id = conn.execute(stmt).inserted_primary_key[0]
            row = conn.execute(select(photos_table).where(photos_table.c.id == photo_id)).first()
        if row is None:
            raise NotFound("Photo", photo_id)
        photo = self._row_to_photo(row)
        logger.info(f"Added photo #{photo.id} to post #{photo.post_id}")
        return photo

    def list_by_post(self, post_id: int) -> list[Photo]:
        """Photos of a post ordered by display_order ascending."""
        stmt = (
            select(photos_table)
            .where(photos_table.c.post_id == post_id)
            .order_by(photos_table.c.display_order.asc(), photos_table.c.id.asc())
        )
        with storage_errors("list photos"), self._db.connect() as conn:
            return [self._row_to_photo(r) for r in conn.execute(stmt)]

    def delete(self, photo_id: int) -> bool:
        """
        Delete a photo record. The file on disk is left in place.

        Returns:
            True if a row was deleted, False otherwise.
        """
        stmt = delete(photos_table).where(photos_table.c.id == photo_id)
        with storage_errors("delete photo"), self._db.begin() as conn:
            deleted = conn.execute(stmt).rowcount > 0
        if deleted:
            logger.info(f"Deleted photo #{photo_id}")
        return deleted

    @staticmethod
    def _row_to_photo(row: Row) -> Photo:
        m = row._mapping
        return Photo(
            id=m["id"],
            post_id=m["post_id"],
            filename=m["filename"],
            caption=m["caption"],
            display_order=m["display_order"],
            created_at=m["created_at"],
        )
