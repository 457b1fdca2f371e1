"""
repositories/post_repo.py
-------------------------
Data access layer for blog posts.
All SQL related to the `posts` table lives here.
"""

from typing import Any, Mapping

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import Connection, Row
from sqlalchemy.sql.expression import Update

from db.connection import Database
from db.init_db import posts_table
from models.post import CreatePost, Post, PostWithPhotos
from repositories.errors import NotFound, storage_errors
from repositories.photo_repo import PhotoRepository
from utils.logger import get_logger

logger = get_logger(__name__)

# SET clauses of a partial update are emitted in this order
UPDATABLE_FIELDS: tuple[str, ...] = ("title", "slug", "content", "excerpt", "published")


def build_update(post_id: int, changes: Mapping[str, Any]) -> Update:
    """
    Build a parameterized UPDATE for a partial change set.

    `updated_at` is always refreshed; every other column is written only
    when its name is present in `changes`. Values are bound, never
    interpolated into the SQL text.

    Args:
        post_id: Primary key of the row to update.
        changes: Column name -> new value, for the fields supplied by the caller.

    Raises:
        ValueError: If `changes` names a column that cannot be updated.
    """
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update post fields: {', '.join(sorted(unknown))}")

    assignments = [(posts_table.c.updated_at, func.current_timestamp())]
    for name in UPDATABLE_FIELDS:
        if name in changes:
            value = changes[name]
            if name == "published":
                value = bool(value)
            assignments.append((posts_table.c[name], value))

    return (
        update(posts_table)
        .where(posts_table.c.id == post_id)
        .ordered_values(*assignments)
    )


class PostRepository:
    """Repository for CRUD operations on the posts table."""

    def __init__(self, database: Database) -> None:
        self._db = database
        self._photos = PhotoRepository(database)

    # ── CREATE ────────────────────────────────────────────

    def create(self, new_post: CreatePost) -> Post:
        """
        Insert a new post.

        Returns:
            The stored Post, re-read so it carries the generated id and timestamps.
        """
        stmt = insert(posts_table).values(
            title=new_post.title,
            slug=new_post.slug,
            content=new_post.content,
            excerpt=new_post.excerpt,
            published=new_post.published,
        )
        with storage_errors("create post"), self._db.begin() as conn:
            post_id = conn.execute(stmt).inserted_primary_key[0]
            post = self._fetch_by_id(conn, post_id)
        logger.info(f"Created post #{post.id} ({post.slug!r})")
        return post

    # ── READ ──────────────────────────────────────────────

    def list_all(self, published_only: bool = False) -> list[Post]:
        """
        Fetch all posts, newest first.

        Args:
            published_only: Restrict to published posts.
        """
        stmt = select(posts_table)
        if published_only:
            stmt = stmt.where(posts_table.c.published.is_(True))
        stmt = stmt.order_by(posts_table.c.created_at.desc(), posts_table.c.id.desc())

        with storage_errors("list posts"), self._db.connect() as conn:
            return [self._row_to_post(r) for r in conn.execute(stmt)]

    def get_by_slug(self, slug: str) -> Post:
        """
        Fetch a single post by its public slug.

        Raises:
            NotFound: If no post has this slug.
        """
        stmt = select(posts_table).where(posts_table.c.slug == slug)
        with storage_errors("get post by slug"), self._db.connect() as conn:
            row = conn.execute(stmt).first()
        if row is None:
            raise NotFound("Post", slug)
        return self._row_to_post(row)

    def get_by_id(self, post_id: int) -> Post:
        """
        Fetch a single post by primary key.

        Raises:
            NotFound: If the row does not exist.
        """
        with storage_errors("get post by id"), self._db.connect() as conn:
            return self._fetch_by_id(conn, post_id)

    def get_with_photos(self, slug: str) -> PostWithPhotos:
        """Fetch a post by slug together with its ordered photos."""
        post = self.get_by_slug(slug)
        return PostWithPhotos(post=post, photos=self._photos.list_by_post(post.id))

    # ── UPDATE ────────────────────────────────────────────

    def update(self, post_id: int, changes: Mapping[str, Any]) -> Post:
        """
        Apply a partial update and return the resulting row.

        Args:
            post_id: Primary key.
            changes: Only the fields to change; absent fields are left untouched.

        Raises:
            NotFound: If the row does not exist.
        """
        stmt = build_update(post_id, changes)
        with storage_errors("update post"), self._db.begin() as conn:
            if conn.execute(stmt).rowcount == 0:
                raise NotFound("Post", post_id)
            post = self._fetch_by_id(conn, post_id)
        logger.info(f"Updated post #{post_id} ({', '.join(changes) or 'timestamp only'})")
        return post

    # ── DELETE ────────────────────────────────────────────

    def delete(self, post_id: int) -> bool:
        """
        Delete a post by ID. Its photo rows are removed by the FK cascade.

        Returns:
            True if a row was deleted, False otherwise.
        """
        stmt = delete(posts_table).where(posts_table.c.id == post_id)
        with storage_errors("delete post"), self._db.begin() as conn:
            deleted = conn.execute(stmt).rowcount > 0
        if deleted:
            logger.info(f"Deleted post #{post_id}")
        return deleted

    # ── HELPERS ───────────────────────────────────────────

    def _fetch_by_id(self, conn: Connection, post_id: int) -> Post:
        row = conn.execute(select(posts_table).where(posts_table.c.id == post_id)).first()
        if row is None:
            raise NotFound("Post", post_id)
        return self._row_to_post(row)

    @staticmethod
    def _row_to_post(row: Row) -> Post:
        """Convert a database row to a Post domain object."""
        m = row._mapping
        return Post(
            id=m["id"],
            title=m["title"],
            slug=m["slug"],
            content=m["content"],
            excerpt=m["excerpt"],
            published=bool(m["published"]),
            created_at=m["created_at"],
            updated_at=m["updated_at"],
        )
