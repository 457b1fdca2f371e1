import pytest
from fastapi.testclient import TestClient

from db.connection import Database
from main import create_app
from models.photo import CreatePhoto
from models.post import CreatePost
from repositories.photo_repo import PhotoRepository
from repositories.post_repo import PostRepository


def make_post(**overrides) -> CreatePost:
    fields = {
        "title": "Hello",
        "slug": "hello",
        "content": "First post body",
        "excerpt": "First",
        "published": True,
    }
    fields.update(overrides)
    return CreatePost(**fields)


def make_photo(post_id: int, **overrides) -> CreatePhoto:
    fields = {"post_id": post_id, "filename": "a.jpg", "caption": None, "display_order": 0}
    fields.update(overrides)
    return CreatePhoto(**fields)


@pytest.fixture
def database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'blog.db'}")
    db.init_pool()
    yield db
    db.close_pool()


@pytest.fixture
def post_repo(database):
    return PostRepository(database)


@pytest.fixture
def photo_repo(database):
    return PhotoRepository(database)


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads" / "photos"


@pytest.fixture
def client(tmp_path, upload_dir):
    app = create_app(
        database=Database(f"sqlite:///{tmp_path / 'api.db'}"),
        upload_dir=str(upload_dir),
        static_dir=None,
    )
    with TestClient(app) as c:
        yield c
