import asyncio
import io

from PIL import Image

from app.config.bootstrap import bootstrap
from app.config.settings import settings
from app.models.admin import Admin

import main


def _create_section(client, title="Sección", icon="Briefcase"):
    r = client.post("/api/sections", json={"title": title, "icon": icon})
    assert r.status_code == 200
    return r.json()["id"]


def _create_system(client, section_id, **fields):
    body = {"section_id": section_id, "title": "ERP Central", "url": "https://erp.example", **fields}
    r = client.post("/api/systems", json=body)
    assert r.status_code == 200
    return r.json()["id"]


# --- login ---

def test_login_with_seeded_admin(client):
    r = client.post("/api/login", json={"username": "admin", "password": "admin123"})
    assert r.status_code == 200
    assert r.json()["user"]["username"] == "admin"
    assert "password" not in r.text


def test_login_failures_look_the_same(client):
    wrong_password = client.post("/api/login", json={"username": "admin", "password": "wrong"})
    unknown_user = client.post("/api/login", json={"username": "nobody", "password": "wrong"})

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()


def test_admin_is_stored_hashed(db):
    admin = db.query(Admin).filter(Admin.username == "admin").one()
    assert admin.password_hash != "admin123"
    assert admin.password_hash.startswith("$2")


def test_bootstrap_is_idempotent(db):
    bootstrap()
    bootstrap()
    assert db.query(Admin).count() == 1


# --- content ---

def test_data_is_ordered_and_nested(client):
    first = _create_section(client, "Uno")
    second = _create_section(client, "Dos", "Server")
    system_id = _create_system(client, second, icon="Users", color="from-purple-500 to-pink-500")

    r = client.get("/api/data")

    assert r.status_code == 200
    data = r.json()
    assert [s["id"] for s in data] == [first, second]
    assert [s["sort_order"] for s in data] == [1, 2]
    assert data[0]["items"] == []
    (item,) = data[1]["items"]
    assert item["id"] == system_id
    assert item["section_id"] == second
    assert item["icon"] == "Users"
    assert item["color"] == "from-purple-500 to-pink-500"
    assert item["image_filename"] is None
    assert item["sort_order"] == 0


def test_section_update_and_delete(client):
    section_id = _create_section(client, "Viejo")
    _create_system(client, section_id)
    _create_system(client, section_id, title="CRM")

    r = client.put(f"/api/sections/{section_id}", json={"title": "Nuevo"})
    assert r.json() == {"changes": 1}
    assert client.get("/api/data").json()[0]["title"] == "Nuevo"
    assert client.get("/api/data").json()[0]["icon"] == "Briefcase"

    r = client.delete(f"/api/sections/{section_id}")
    assert r.json() == {"changes": 1}
    assert client.get("/api/data").json() == []


def test_missing_ids_report_zero_changes(client):
    assert client.put("/api/sections/99", json={"title": "x"}).json() == {"changes": 0}
    assert client.delete("/api/sections/99").json() == {"changes": 0}
    assert client.put("/api/systems/99", json={"title": "x"}).json() == {"changes": 0}
    assert client.delete("/api/systems/99").json() == {"changes": 0}


def test_system_update_and_delete(client):
    section_id = _create_section(client)
    system_id = _create_system(client, section_id)

    r = client.put(f"/api/systems/{system_id}", json={"title": "ERP 2", "description": "Nuevo", "icon": "Server"})
    assert r.json() == {"changes": 1}
    (item,) = client.get("/api/data").json()[0]["items"]
    assert item["title"] == "ERP 2"
    assert item["url"] is None

    assert client.delete(f"/api/systems/{system_id}").json() == {"changes": 1}
    assert client.get("/api/data").json()[0]["items"] == []


def test_system_in_unknown_section_is_storage_error(client):
    r = client.post("/api/systems", json={"section_id": 777, "title": "Huérfano"})
    assert r.status_code == 500
    assert r.json()["code"] == "STORAGE_ERROR"


# --- backgrounds ---

def test_background_upload_list_serve_delete(client, make_image):
    data = make_image(fmt="JPEG")

    r = client.post("/api/backgrounds/upload", files={"background": ("beach.jpg", data, "image/jpeg")})
    assert r.status_code == 200
    filename = r.json()["filename"]
    assert filename.startswith("bg-") and filename.endswith(".jpg")

    assert client.get("/api/backgrounds").json() == [filename]
    served = client.get(f"/backgrounds/{filename}")
    assert served.status_code == 200
    assert served.content == data

    r = client.delete(f"/api/backgrounds/{filename}")
    assert r.status_code == 200
    assert client.get("/api/backgrounds").json() == []


def test_background_upload_without_file(client, make_image):
    r = client.post("/api/backgrounds/upload", files={"other": ("a.png", make_image(), "image/png")})
    assert r.status_code == 400
    assert r.json()["code"] == "NO_FILE"


def test_background_over_cap_is_rejected(client, make_image, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 64)

    r = client.post("/api/backgrounds/upload", files={"background": ("big.png", make_image(300, 300), "image/png")})

    assert r.status_code == 413
    assert client.get("/api/backgrounds").json() == []


def test_concurrent_background_uploads_do_not_collide(client, make_image):
    names = {
        client.post("/api/backgrounds/upload", files={"background": ("same.png", make_image(color=c), "image/png")}).json()["filename"]
        for c in [(1, 1, 1), (2, 2, 2), (3, 3, 3)]
    }
    assert len(names) == 3
    assert sorted(client.get("/api/backgrounds").json()) == sorted(names)


def test_background_delete_traversal_rejected(client, make_image):
    client.post("/api/backgrounds/upload", files={"background": ("a.png", make_image(), "image/png")})
    before = client.get("/api/backgrounds").json()

    r = client.delete("/api/backgrounds/..%2F..%2Fportal.db")

    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"
    assert client.get("/api/backgrounds").json() == before


def test_background_delete_missing_file(client):
    r = client.delete("/api/backgrounds/bg-1-1.png")
    assert r.status_code == 500
    assert r.json()["code"] == "STORAGE_ERROR"


# --- system images ---

def test_system_image_upload_and_attach(client):
    src = Image.new("RGB", (400, 200), (0, 255, 0))
    buf = io.BytesIO()
    src.save(buf, format="JPEG")

    r = client.post("/api/systems/upload-image", files={"system_image": ("logo.jpg", buf.getvalue(), "image/jpeg")})
    assert r.status_code == 200
    filename = r.json()["filename"]
    assert filename.startswith("sys-") and filename.endswith(".png")

    served = client.get(f"/system-images/{filename}")
    assert served.status_code == 200
    with Image.open(io.BytesIO(served.content)) as thumb:
        assert thumb.format == "PNG"
        assert thumb.size == (128, 128)

    section_id = _create_section(client)
    _create_system(client, section_id, icon="Users", image_filename=filename)
    (item,) = client.get("/api/data").json()[0]["items"]
    assert item["image_filename"] == filename
    assert item["icon"] is None


def test_system_image_upload_without_file(client):
    r = client.post("/api/systems/upload-image", files={"image": ("a.png", b"x", "image/png")})
    assert r.status_code == 400
    assert r.json()["code"] == "NO_FILE"


def test_system_image_upload_corrupt(client):
    r = client.post("/api/systems/upload-image", files={"system_image": ("a.png", b"not a png", "image/png")})
    assert r.status_code == 500
    assert r.json()["code"] == "PROCESSING_ERROR"
    assert r.json()["error"] == "Error processing image"


def test_attaching_unknown_image_is_rejected(client):
    section_id = _create_section(client)
    r = client.post("/api/systems", json={"section_id": section_id, "title": "x", "image_filename": "sys-nope.png"})
    assert r.status_code == 400
    assert client.get("/api/data").json()[0]["items"] == []


# --- malformed requests ---

def test_section_without_title_is_400(client):
    r = client.post("/api/sections", json={"icon": "X"})
    assert r.status_code == 400
    body = r.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"]["errors"][0]["loc"] == ["body", "title"]


def test_login_without_password_is_400(client):
    r = client.post("/api/login", json={"username": "admin"})
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"


def test_system_without_section_is_400(client):
    r = client.post("/api/systems", json={"title": "Sin sección"})
    assert r.status_code == 400
    assert r.json()["code"] == "VALIDATION_ERROR"
    assert client.get("/api/data").json() == []


# --- request size ---

def _post_raw(path, declared_length, chunks):
    """Drive the ASGI app directly; returns (status, body, number of receive() calls)."""
    received = []
    sent = []

    async def receive():
        received.append(1)
        more = len(received) < chunks
        return {"type": "http.request", "body": b"x" * 1024, "more_body": more}

    async def send(message):
        sent.append(message)

    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "POST",
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "root_path": "",
        "query_string": b"",
        "headers": [
            (b"host", b"testserver"),
            (b"content-type", b"multipart/form-data; boundary=xyz"),
            (b"content-length", str(declared_length).encode()),
        ],
        "client": ("testclient", 50000),
        "server": ("testserver", 80),
    }
    asyncio.run(main.app(scope, receive, send))
    start = next(m for m in sent if m["type"] == "http.response.start")
    body = b"".join(m.get("body", b"") for m in sent if m["type"] == "http.response.body")
    return start["status"], body, len(received)


def test_oversized_background_rejected_before_body_is_read(monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 1024)

    status, body, reads = _post_raw("/api/backgrounds/upload", 64 * 1024, chunks=64)

    assert status == 413
    assert b"PAYLOAD_TOO_LARGE" in body
    assert reads == 0


def test_oversized_system_image_rejected_before_body_is_read(monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 1024)

    status, _, reads = _post_raw("/api/systems/upload-image", 64 * 1024, chunks=64)

    assert status == 413
    assert reads == 0


def test_size_limit_only_applies_to_upload_routes(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 16)

    r = client.post("/api/sections", json={"title": "Una sección con un título largo", "icon": "Server"})

    assert r.status_code == 200
