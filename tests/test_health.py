from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def test_root():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json().get("ok") is True


def test_health_db():
    r = client.get("/health/db")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_health_migrations_basic():
    r = client.get("/health/migrations")
    assert r.status_code == 200
    b = r.json()
    assert "code_heads" in b and isinstance(b["code_heads"], list)
    assert "db_version" in b
    # test database is built with create_all(), so it is never stamped
    assert b["db_version"] is None
    assert b["ok"] is False
