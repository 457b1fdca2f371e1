"""
db/init_db.py
-------------
Declares the database schema and creates the tables if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    func,
)
from sqlalchemy.engine import Engine

from utils.logger import get_logger

logger = get_logger(__name__)

metadata = MetaData()

# Posts table: one row per blog entry, looked up publicly by slug
posts_table = Table(
    "posts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("title", Text, nullable=False),
    Column("slug", Text, nullable=False, unique=True),
    Column("content", Text, nullable=False),
    Column("excerpt", Text, nullable=True),
    Column("published", Boolean, nullable=False, server_default="0"),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.current_timestamp()),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=func.current_timestamp()),
    sqlite_autoincrement=True,
)

# Photos table: image metadata; rows go away with their post
photos_table = Table(
    "photos",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "post_id",
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("filename", Text, nullable=False),
    Column("caption", Text, nullable=True),
    Column("display_order", Integer, nullable=False, server_default="0"),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.current_timestamp()),
    sqlite_autoincrement=True,
)

# Indexes for faster queries
Index("idx_posts_published_created", posts_table.c.published, posts_table.c.created_at)
Index("idx_photos_post_order", photos_table.c.post_id, photos_table.c.display_order)


def create_tables(engine: Engine) -> None:
    """
    Create all tables and indexes.
    Safe to call multiple times (only missing objects are created).
    """
    try:
        metadata.create_all(engine, checkfirst=True)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from db.connection import Database
    database = Database()
    database.init_pool()
    database.close_pool()
    print("Database schema created successfully.")
