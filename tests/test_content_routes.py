import pytest

from tests.payloads import BLOG_POST, PROJECT, TIMELINE_ENTRY

RESOURCES = [
    ("/api/projects", PROJECT),
    ("/api/blog-posts", BLOG_POST),
    ("/api/timeline-entries", TIMELINE_ENTRY),
]


@pytest.mark.parametrize("url,payload", RESOURCES)
def test_empty_list_is_array(client, url, payload):
    resp = client.get(url)
    assert resp.status_code == 200
    assert resp.get_json() == []


@pytest.mark.parametrize("url,payload", RESOURCES)
def test_admin_crud_cycle(admin_client, client, url, payload):
    resp = admin_client.post(url, json=payload)
    assert resp.status_code == 201
    created = resp.get_json()
    assert created["id"] == 1
    for key, value in payload.items():
        assert created[key] == value

    # reads are public
    resp = client.get(f"{url}/{created['id']}")
    assert resp.status_code == 200
    assert resp.get_json() == created

    changed = dict(payload, title="Changed")
    resp = admin_client.put(f"{url}/{created['id']}", json=changed)
    assert resp.status_code == 200
    assert resp.get_json()["title"] == "Changed"
    assert resp.get_json()["id"] == created["id"]

    resp = admin_client.delete(f"{url}/{created['id']}")
    assert resp.status_code == 204
    assert resp.data == b""
    assert client.get(url).get_json() == []


def test_project_timestamp_set_by_server(admin_client):
    resp = admin_client.post("/api/projects", json=dict(PROJECT, createdAt="1999-01-01T00:00:00"))
    created = resp.get_json()
    assert not created["createdAt"].startswith("1999")

    resp = admin_client.put(f"/api/projects/{created['id']}", json=PROJECT)
    assert resp.get_json()["createdAt"] == created["createdAt"]


@pytest.mark.parametrize("url,payload", RESOURCES)
def test_writes_require_login(client, url, payload):
    assert client.post(url, json=payload).status_code == 401
    assert client.put(f"{url}/1", json=payload).status_code == 401
    assert client.delete(f"{url}/1").status_code == 401
    assert client.get(url).get_json() == []


def test_non_admin_cannot_create_project(user_client):
    before = len(user_client.get("/api/projects").get_json())
    resp = user_client.post("/api/projects", json=PROJECT)
    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Unauthorized"}
    assert len(user_client.get("/api/projects").get_json()) == before


def test_non_admin_cannot_delete(admin_client, user_client):
    created = admin_client.post("/api/projects", json=PROJECT).get_json()
    assert user_client.delete(f"/api/projects/{created['id']}").status_code == 401
    assert user_client.get(f"/api/projects/{created['id']}").status_code == 200


@pytest.mark.parametrize("url,payload", RESOURCES)
def test_invalid_payload_rejected_without_side_effect(admin_client, url, payload):
    bad = dict(payload)
    bad.pop("title")
    resp = admin_client.post(url, json=bad)
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["message"].startswith("Invalid")
    assert body["errors"][0]["loc"] == ["title"]
    assert admin_client.get(url).get_json() == []


def test_wrong_type_rejected(admin_client):
    resp = admin_client.post("/api/timeline-entries", json=dict(TIMELINE_ENTRY, order="first"))
    assert resp.status_code == 400


def test_non_json_body_rejected(admin_client):
    resp = admin_client.post("/api/projects", data="title=x", content_type="application/x-www-form-urlencoded")
    assert resp.status_code == 400


@pytest.mark.parametrize("url,payload", RESOURCES)
def test_unknown_id_is_404(admin_client, url, payload):
    assert admin_client.get(f"{url}/99").status_code == 404
    resp = admin_client.put(f"{url}/99", json=payload)
    assert resp.status_code == 404
    assert "not found" in resp.get_json()["message"]
    assert admin_client.delete(f"{url}/99").status_code == 404


def test_timeline_listed_by_order(admin_client, client):
    for order, title in [(3, "c"), (1, "a"), (2, "b")]:
        admin_client.post("/api/timeline-entries", json=dict(TIMELINE_ENTRY, order=order, title=title))
    titles = [e["title"] for e in client.get("/api/timeline-entries").get_json()]
    assert titles == ["a", "b", "c"]


def test_storage_failure_is_generic_500(admin_client, storage, monkeypatch):
    def boom():
        raise RuntimeError("connection string with password=hunter2")

    monkeypatch.setattr(storage, "get_all_projects", boom)
    resp = admin_client.get("/api/projects")
    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Internal server error"}
    assert b"hunter2" not in resp.data


def test_oversized_json_body_rejected(admin_client, client):
    resp = admin_client.post("/api/blog-posts", json=dict(BLOG_POST, content="x" * (7 * 1024 * 1024)))
    assert resp.status_code == 400
    assert resp.get_json() == {"message": "Request body too large"}
    assert client.get("/api/blog-posts").get_json() == []
