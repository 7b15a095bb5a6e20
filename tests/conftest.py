import pytest
from werkzeug.security import generate_password_hash

from app import create_app
from db.memory_storage import MemStorage
from db.sql_storage import SqlStorage
from models.schemas import InsertUser
from tests.payloads import ADMIN, VISITOR


def add_user(storage, username, password, role):
    return storage.create_user(InsertUser(
        username=username,
        password=generate_password_hash(password),
        name=username.title(),
        email=f"{username}@example.com",
        role=role,
    ))


@pytest.fixture(params=["memory", "sql"])
def storage(request, tmp_path):
    if request.param == "memory":
        return MemStorage()
    return SqlStorage(f"sqlite:///{tmp_path / 'portfolio.db'}")


@pytest.fixture
def app(storage, tmp_path):
    app = create_app({
        "TESTING": True,
        "SEED_DATA": False,
        "ADMIN_USERNAME": None,
        "ADMIN_PASSWORD": None,
        "ADMIN_EMAIL": None,
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
    }, storage=storage)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app, storage):
    add_user(storage, ADMIN["username"], ADMIN["password"], "admin")
    client = app.test_client()
    resp = client.post("/api/login", json=ADMIN)
    assert resp.status_code == 200
    return client


@pytest.fixture
def user_client(app, storage):
    add_user(storage, VISITOR["username"], VISITOR["password"], "user")
    client = app.test_client()
    resp = client.post("/api/login", json=VISITOR)
    assert resp.status_code == 200
    return client
