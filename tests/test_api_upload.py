def test_upload_stores_file_and_serves_it(client, upload_dir):
    resp = client.post("/api/upload", files={"file": ("sunset.png", b"\x89PNGdata", "image/png")})

    assert resp.status_code == 200
    body = resp.json()
    assert body["filename"].endswith(".png")
    assert body["filename"] != "sunset.png"
    assert body["url"] == f"/photos/{body['filename']}"
    assert (upload_dir / body["filename"]).read_bytes() == b"\x89PNGdata"

    served = client.get(body["url"])
    assert served.status_code == 200
    assert served.content == b"\x89PNGdata"


def test_upload_then_register_photo(client):
    post = client.post(
        "/api/posts",
        json={"title": "Trip", "slug": "trip", "content": "c", "excerpt": None, "published": True},
    ).json()
    uploaded = client.post("/api/upload", files={"file": ("a.jpg", b"jpeg", "image/jpeg")}).json()

    resp = client.post(
        "/api/photos",
        json={"post_id": post["id"], "filename": uploaded["filename"], "caption": "Beach", "display_order": 1},
    )

    assert resp.status_code == 201
    assert client.get("/api/posts/trip").json()["photos"][0]["filename"] == uploaded["filename"]


def test_upload_path_traversal_stays_in_upload_dir(client, upload_dir, tmp_path):
    resp = client.post("/api/upload", files={"file": ("../../evil.sh", b"rm -rf /", "text/x-sh")})

    assert resp.status_code == 200
    name = resp.json()["filename"]
    assert name != "../../evil.sh"
    assert "/" not in name
    assert [p.name for p in upload_dir.iterdir()] == [name]
    assert not (tmp_path / "evil.sh").exists()
    assert not (upload_dir.parent / "evil.sh").exists()


def test_only_first_file_part_is_stored(client, upload_dir):
    resp = client.post(
        "/api/upload",
        files=[
            ("file", ("first.gif", b"GIF89a", "image/gif")),
            ("file", ("second.png", b"\x89PNG", "image/png")),
        ],
    )

    assert resp.status_code == 200
    assert resp.json()["filename"].endswith(".gif")
    assert len(list(upload_dir.iterdir())) == 1


def test_upload_without_file_is_400(client):
    resp = client.post("/api/upload", data={"caption": "no file here"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "No file provided"}


def test_upload_with_empty_body_is_400(client):
    resp = client.post("/api/upload")

    assert resp.status_code == 400
    assert resp.json() == {"error": "No file provided"}


def test_malformed_multipart_is_400(client, upload_dir):
    resp = client.post(
        "/api/upload",
        content=b"--xyz\r\ngarbage",
        headers={"content-type": "multipart/form-data; boundary=xyz"},
    )

    assert resp.status_code == 400
    assert set(resp.json()) == {"error"}
    assert not upload_dir.exists() or list(upload_dir.iterdir()) == []


def test_text_fields_before_the_file_are_skipped(client, upload_dir):
    resp = client.post(
        "/api/upload",
        data={"caption": "comes first"},
        files={"file": ("shot.webp", b"RIFFwebp", "image/webp")},
    )

    assert resp.status_code == 200
    assert resp.json()["filename"].endswith(".webp")
    assert (upload_dir / resp.json()["filename"]).read_bytes() == b"RIFFwebp"
