import pytest

from repositories.errors import StorageError
from tests.conftest import make_photo, make_post


def test_create_photo_reads_back_generated_fields(post_repo, photo_repo):
    post = post_repo.create(make_post())

    photo = photo_repo.create(make_photo(post.id, filename="x.png", caption="Sunset", display_order=4))

    assert photo.id > 0
    assert photo.post_id == post.id
    assert photo.filename == "x.png"
    assert photo.caption == "Sunset"
    assert photo.display_order == 4
    assert photo.created_at is not None


def test_create_photo_for_missing_post_is_storage_error(photo_repo):
    with pytest.raises(StorageError):
        photo_repo.create(make_photo(9999))


def test_list_by_post_only_returns_that_posts_photos(post_repo, photo_repo):
    a = post_repo.create(make_post(slug="a"))
    b = post_repo.create(make_post(slug="b"))
    photo_repo.create(make_photo(a.id, filename="a1.jpg"))
    photo_repo.create(make_photo(b.id, filename="b1.jpg"))

    assert [p.filename for p in photo_repo.list_by_post(a.id)] == ["a1.jpg"]


def test_equal_display_order_is_stable(post_repo, photo_repo):
    post = post_repo.create(make_post())
    for name in ("one.jpg", "two.jpg", "three.jpg"):
        photo_repo.create(make_photo(post.id, filename=name, display_order=0))

    first = [p.filename for p in photo_repo.list_by_post(post.id)]
    second = [p.filename for p in photo_repo.list_by_post(post.id)]

    assert first == second == ["one.jpg", "two.jpg", "three.jpg"]


def test_delete_photo(post_repo, photo_repo):
    post = post_repo.create(make_post())
    photo = photo_repo.create(make_photo(post.id))

    assert photo_repo.delete(photo.id) is True
    assert photo_repo.delete(photo.id) is False
    assert photo_repo.list_by_post(post.id) == []
