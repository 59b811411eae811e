# tests/test_profile_service.py
"""Unit tests for profile service error handling."""

from collections.abc import Iterator
from unittest.mock import MagicMock

import pytest
from fastapi import status

from chat_app.api.dependencies import get_profile_service
from chat_app.services.errors import InvalidUserId, NotFound, PersistenceFailure
from chat_app.services.profile_service import ProfileService

USER_ID = "aaaaaaaaaaaaaaaaaaaaaaaa"


class TestProfileServiceFailures:
    def _service(self) -> tuple[ProfileService, MagicMock]:
        users = MagicMock()
        return ProfileService(users), users

    @pytest.mark.parametrize(
        ("method", "value", "expected"),
        [
            ("change_username", "neo", "Failed to change username"),
            ("change_status", "busy", "Failed to change status"),
        ],
    )
    def test_update_wraps_persistence_failure(self, method, value, expected) -> None:
        service, users = self._service()
        users.set_field.side_effect = PersistenceFailure()

        with pytest.raises(PersistenceFailure) as excinfo:
            getattr(service, method)(USER_ID, value)

        assert excinfo.value.message == expected
        assert isinstance(excinfo.value.__cause__, PersistenceFailure)

    def test_get_profile_wraps_persistence_failure(self) -> None:
        service, users = self._service()
        users.get_by_id.side_effect = PersistenceFailure()

        with pytest.raises(PersistenceFailure) as excinfo:
            service.get_profile(USER_ID)
        assert excinfo.value.message == "Failed to fetch user profile"

    def test_list_online_users_wraps_persistence_failure(self) -> None:
        service, users = self._service()
        users.list_by_presence.side_effect = PersistenceFailure()

        with pytest.raises(PersistenceFailure) as excinfo:
            service.list_online_users()
        assert excinfo.value.message == "Failed to fetch online users"

    def test_update_of_missing_user(self) -> None:
        service, users = self._service()
        users.set_field.return_value = False

        with pytest.raises(NotFound):
            service.change_status(USER_ID, "busy")

    def test_update_normalizes_id(self) -> None:
        service, users = self._service()
        users.set_field.return_value = True

        service.change_username(USER_ID.upper(), "neo")

        users.set_field.assert_called_once_with(USER_ID, "username", "neo")

    def test_invalid_id_never_reaches_repository(self) -> None:
        service, users = self._service()

        with pytest.raises(InvalidUserId):
            service.get_profile("nope")
        users.get_by_id.assert_not_called()


@pytest.fixture()
def failing_profile_service(app) -> Iterator[MagicMock]:
    users = MagicMock()
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(users)
    try:
        yield users
    finally:
        app.dependency_overrides.pop(get_profile_service, None)


def test_change_username_failure_envelope(client, auth_token, failing_profile_service) -> None:
    """Test a failed update surfaces as a 500 envelope with a generic message."""
    failing_profile_service.set_field.side_effect = PersistenceFailure()

    response = client.post("/change_username", json={"username": "neo"}, headers=auth_token)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"status": "error", "message": "Failed to change username"}


def test_online_users_failure_envelope(client, auth_token, failing_profile_service) -> None:
    failing_profile_service.list_by_presence.side_effect = PersistenceFailure()

    response = client.get("/get_online_users", headers=auth_token)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"status": "error", "message": "Failed to fetch online users"}
