from tests.test_api_posts import create


def add_photo(client, post_id, **overrides):
    body = {"post_id": post_id, "filename": "a.jpg", "caption": None, "display_order": 0}
    body.update(overrides)
    return client.post("/api/photos", json=body)


def test_create_photo_and_read_through_post(client):
    post = create(client)

    second = add_photo(client, post["id"], filename="2.jpg", caption="later", display_order=2)
    first = add_photo(client, post["id"], filename="1.jpg", display_order=1)

    assert second.status_code == 201
    assert first.status_code == 201
    assert second.json()["caption"] == "later"

    photos = client.get("/api/posts/hi").json()["photos"]
    assert [p["filename"] for p in photos] == ["1.jpg", "2.jpg"]
    assert all(p["post_id"] == post["id"] for p in photos)


def test_photo_for_missing_post_is_500_without_detail(client):
    resp = add_photo(client, 12345)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to create photo record"}


def test_delete_photo(client):
    post = create(client)
    photo = add_photo(client, post["id"]).json()

    assert client.delete(f"/api/photos/{photo['id']}").status_code == 204
    assert client.delete(f"/api/photos/{photo['id']}").status_code == 204
    assert client.get("/api/posts/hi").json()["photos"] == []


def test_deleting_post_removes_its_photos(client):
    post = create(client)
    add_photo(client, post["id"])
    client.delete(f"/api/posts/{post['id']}")

    recreated = create(client)
    assert recreated["id"] != post["id"]
    assert client.get("/api/posts/hi").json()["photos"] == []


def test_create_photo_requires_post_id(client):
    resp = client.post("/api/photos", json={"filename": "a.jpg"})

    assert resp.status_code == 400
    assert "error" in resp.json()
