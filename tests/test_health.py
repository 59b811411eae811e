# tests/test_health.py
from fastapi import status


def test_health(client) -> None:
    """Verify that the health endpoint responds without authentication."""
    r = client.get("/health")
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"status": "ok"}


def test_root_describes_service(client) -> None:
    r = client.get("/")
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["name"] == "Chat App"


def test_unknown_route_uses_envelope(client) -> None:
    r = client.get("/does-not-exist")
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json() == {"status": "error", "message": "Not Found"}
