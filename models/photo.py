"""
models/photo.py
---------------
Domain model for photos attached to a post.
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


@dataclass
class Photo:
    """
    Image metadata. The file itself lives in the upload directory.

    Attributes:
        id: Database primary key.
        post_id: The post this photo belongs to.
        filename: Stored (generated) file name.
        caption: Optional caption.
        display_order: Presentation sequence within the post, ascending.
        created_at: Timestamp when the record was created.
    """
    id: int
    post_id: int
    filename: str
    display_order: int
    created_at: datetime
    caption: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class CreatePhoto(BaseModel):
    model_config = ConfigDict(extra="ignore")

    post_id: int
    filename: str
    caption: Optional[str] = None
    display_order: int = 0
