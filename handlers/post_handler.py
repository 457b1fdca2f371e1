"""
handlers/post_handler.py
------------------------
HTTP handlers for blog posts.

    GET    /api/posts?published=true
    GET    /api/posts/{slug}
    POST   /api/posts
    PUT    /api/posts/{id}
    DELETE /api/posts/{id}
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response

from handlers.deps import get_post_repository
from handlers.errors import not_found, server_error
from models.post import CreatePost, UpdatePost
from repositories.errors import NotFound, StorageError
from repositories.post_repo import PostRepository

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.get("")
def list_posts(
    published: Optional[str] = None,
    posts: PostRepository = Depends(get_post_repository),
):
    """List posts, newest first. `?published=true` hides drafts."""
    try:
        result = posts.list_all(published_only=published == "true")
    except StorageError as e:
        raise server_error("Failed to fetch posts", e)
    return [p.to_dict() for p in result]


@router.get("/{slug}")
def get_post(slug: str, posts: PostRepository = Depends(get_post_repository)):
    try:
        return posts.get_with_photos(slug).to_dict()
    except NotFound:
        raise not_found("Post not found")
    except StorageError as e:
        raise server_error("Failed to fetch post", e)


@router.post("", status_code=201)
def create_post(new_post: CreatePost, posts: PostRepository = Depends(get_post_repository)):
    try:
        return posts.create(new_post).to_dict()
    except StorageError as e:
        raise server_error("Failed to create post", e)


@router.put("/{post_id}")
def update_post(
    post_id: int,
    changes: UpdatePost,
    posts: PostRepository = Depends(get_post_repository),
):
    """Partial update: fields missing from the body keep their current value."""
    try:
        return posts.update(post_id, changes.changes()).to_dict()
    except NotFound:
        raise not_found("Post not found")
    except StorageError as e:
        raise server_error("Failed to update post", e)


@router.delete("/{post_id}", status_code=204)
def delete_post(post_id: int, posts: PostRepository = Depends(get_post_repository)):
    # Deleting an id that does not exist is still a 204.
    try:
        posts.delete(post_id)
    except StorageError as e:
        raise server_error("Failed to delete post", e)
    return Response(status_code=204)
