"""
models/post.py
--------------
Domain model for blog posts, plus the request schemas accepted by the API.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from models.photo import Photo


@dataclass
class Post:
    """
    Represents a single blog entry.

    Attributes:
        id: Database primary key, assigned by the store.
        title: Headline shown to readers.
        slug: Public lookup key used in URLs.
        content: Body text.
        excerpt: Optional short summary for listings.
        published: Whether the post is visible on the public site.
        created_at: Timestamp when the record was created.
        updated_at: Timestamp of the last mutation.
    """
    id: int
    title: str
    slug: str
    content: str
    published: bool
    created_at: datetime
    updated_at: datetime
    excerpt: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class PostWithPhotos:
    """A post together with its photos ordered by display_order."""
    post: Post
    photos: list[Photo] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = self.post.to_dict()
        data["photos"] = [p.to_dict() for p in self.photos]
        return data


class CreatePost(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str
    slug: str
    content: str
    excerpt: Optional[str] = None
    published: bool


class UpdatePost(BaseModel):
    """
    Partial update: only the fields given a value in the request body are
    written. A field sent as ``null`` is treated the same as a missing one.
    """
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    published: Optional[bool] = None

    def changes(self) -> dict[str, Any]:
        """Fields supplied by the caller, keyed by column name."""
        return self.model_dump(exclude_unset=True, exclude_none=True)
