# tests/test_health.py
from fastapi import status


def test_health(client) -> None:
    """The health endpoint reports ok."""
    response = client.get("/health")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}


def test_root_describes_service(client) -> None:
    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["docs"] == "/docs"
