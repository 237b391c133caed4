import bcrypt
import pytest

from testhub.api.utils.jwt import verify_jwt
from testhub.app.use_cases.auth import LoginUseCase
from testhub.domain.entities import User, UserRole


@pytest.fixture
def registered_user():
    return User(
        id="U1",
        email="tester@example.com",
        password_hash=bcrypt.hashpw(b"SecurePass123!", bcrypt.gensalt(4)).decode(),
        role=UserRole.MANAGER,
        team_id="T1",
    )


@pytest.mark.asyncio
async def test_successful_login(mock_uow, registered_user):
    mock_uow.users.get_by_email.return_value = registered_user

    result = await LoginUseCase(mock_uow).execute("Tester@Example.com", "SecurePass123!")

    assert result.is_ok()
    assert result.value.user.id == "U1"
    assert result.value.user.role == "MANAGER"
    assert result.value.user.team_id == "T1"
    mock_uow.users.get_by_email.assert_called_once_with("tester@example.com")

    payload = verify_jwt(result.value.access_token)
    assert payload["user_id"] == "U1"
    assert "team_id" not in payload
    assert "role" not in payload


@pytest.mark.asyncio
async def test_wrong_password(mock_uow, registered_user):
    mock_uow.users.get_by_email.return_value = registered_user

    result = await LoginUseCase(mock_uow).execute("tester@example.com", "WrongPass!")

    assert result.error.code == "INVALID_CREDENTIALS"


@pytest.mark.asyncio
async def test_unknown_email_gives_same_error(mock_uow):
    mock_uow.users.get_by_email.return_value = None

    result = await LoginUseCase(mock_uow).execute("nobody@example.com", "SecurePass123!")

    assert result.error.code == "INVALID_CREDENTIALS"
    assert result.error.message == "Invalid email or password"
