"""API tests for registration, login and token refresh.

Tests the HTTP layer of:
- POST /api/v1/users (201, 409 duplicate, body validation)
- POST /api/v1/sessions (201 token pair, 401 invalid credentials)
- POST /api/v1/tokens (201 token pair, 401 expired/invalid)

Architecture:
- FastAPI TestClient with real app + handler dependency overrides
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from src.application.dtos.auth_dtos import AuthTokens, RegisteredUser
from src.core.container import (
    get_login_user_handler,
    get_refresh_access_token_handler,
    get_register_user_handler,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.errors import UserError
from src.main import app

TOKENS = AuthTokens(access_token="access.jwt", refresh_token="refresh.jwt", expires_in=900)


class MockHandler:
    """Handler double returning a preset result and recording requests."""

    def __init__(self, result):
        self.result = result
        self.requests = []

    async def handle(self, request):
        self.requests.append(request)
        return self.result


@pytest.fixture(autouse=True)
def clear_overrides():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


# =============================================================================
# POST /api/v1/users
# =============================================================================


@pytest.mark.api
class TestCreateUser:
    """Registration."""

    def test_register_returns_201(self, client):
        user_id = uuid4()
        handler = MockHandler(
            Success(value=RegisteredUser(user_id=user_id, email="ada@example.com"))
        )
        app.dependency_overrides[get_register_user_handler] = lambda: handler

        response = client.post(
            "/api/v1/users",
            json={"email": "ada@example.com", "password": "SecurePass123!", "firstname": "Ada"},
        )

        assert response.status_code == 201
        assert response.json() == {"id": str(user_id), "email": "ada@example.com"}
        assert handler.requests[0].firstname == "Ada"

    def test_duplicate_email_is_409(self, client):
        app.dependency_overrides[get_register_user_handler] = lambda: MockHandler(
            Failure(
                error=UserError(
                    code=ErrorCode.EMAIL_ALREADY_REGISTERED,
                    message="Email is already registered",
                )
            )
        )

        response = client.post(
            "/api/v1/users",
            json={"email": "ada@example.com", "password": "SecurePass123!"},
        )

        assert response.status_code == 409
        assert response.json()["title"] == "Resource Conflict"

    @pytest.mark.parametrize(
        "body",
        [
            {"email": "not-an-email", "password": "SecurePass123!"},
            {"email": "ada@example.com", "password": "short"},
            {"email": "ada@example.com", "password": "é" * 40},
        ],
    )
    def test_invalid_body_is_422(self, client, body):
        handler = MockHandler(None)
        app.dependency_overrides[get_register_user_handler] = lambda: handler

        response = client.post("/api/v1/users", json=body)

        assert response.status_code == 422
        assert handler.requests == []


# =============================================================================
# POST /api/v1/sessions
# =============================================================================


@pytest.mark.api
class TestCreateSession:
    """Login."""

    def test_login_returns_token_pair(self, client):
        handler = MockHandler(Success(value=TOKENS))
        app.dependency_overrides[get_login_user_handler] = lambda: handler

        response = client.post(
            "/api/v1/sessions",
            json={"email": "ada@example.com", "password": "SecurePass123!"},
        )

        assert response.status_code == 201
        assert response.json() == {
            "access_token": "access.jwt",
            "refresh_token": "refresh.jwt",
            "token_type": "bearer",
            "expires_in": 900,
        }
        assert handler.requests[0].email == "ada@example.com"

    def test_invalid_credentials_is_401(self, client):
        app.dependency_overrides[get_login_user_handler] = lambda: MockHandler(
            Failure(
                error=UserError(
                    code=ErrorCode.INVALID_CREDENTIALS,
                    message="Invalid email or password",
                )
            )
        )

        response = client.post(
            "/api/v1/sessions",
            json={"email": "ada@example.com", "password": "wrong"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid email or password"


# =============================================================================
# POST /api/v1/tokens
# =============================================================================


@pytest.mark.api
class TestCreateTokens:
    """Refresh."""

    def test_refresh_returns_token_pair(self, client):
        handler = MockHandler(Success(value=TOKENS))
        app.dependency_overrides[get_refresh_access_token_handler] = lambda: handler

        response = client.post("/api/v1/tokens", json={"refresh_token": "refresh.jwt"})

        assert response.status_code == 201
        assert response.json()["access_token"] == "access.jwt"
        assert handler.requests[0].refresh_token == "refresh.jwt"

    def test_expired_refresh_token_is_401(self, client):
        app.dependency_overrides[get_refresh_access_token_handler] = lambda: MockHandler(
            Failure(
                error=UserError(
                    code=ErrorCode.TOKEN_EXPIRED,
                    message="Refresh token has expired",
                )
            )
        )

        response = client.post("/api/v1/tokens", json={"refresh_token": "old"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Refresh token has expired"

    def test_empty_refresh_token_is_422(self, client):
        handler = MockHandler(None)
        app.dependency_overrides[get_refresh_access_token_handler] = lambda: handler

        response = client.post("/api/v1/tokens", json={"refresh_token": ""})

        assert response.status_code == 422
        assert handler.requests == []
