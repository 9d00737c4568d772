"""
Unit tests for token issuing, the auth middleware and the route guards.
"""

import pytest
from jose import jwt

from jobly.core.auth_middleware import AuthMiddleware
from jobly.core.deps import ensure_admin, ensure_correct_user_or_admin, ensure_logged_in
from jobly.core.exceptions import UnauthorizedError
from jobly.core.security import create_token, decode_token
from jobly.schemas.user import Identity

SECRET = "unit-test-secret"


class TestCreateToken:
    """Tests for create_token"""

    def test_non_admin(self):
        token = create_token({"username": "test", "isAdmin": False}, SECRET)
        payload = jwt.decode(token, SECRET, algorithms=["HS256"])

        assert payload["username"] == "test"
        assert payload["isAdmin"] is False
        assert isinstance(payload["iat"], int)

    def test_admin(self):
        token = create_token({"username": "test", "isAdmin": True}, SECRET)
        payload = decode_token(token, SECRET)

        assert payload["isAdmin"] is True

    def test_defaults_to_not_admin(self):
        """Missing isAdmin must never yield an admin token"""
        token = create_token({"username": "test"}, SECRET)
        payload = decode_token(token, SECRET)

        assert payload["isAdmin"] is False

    def test_no_expiry_claim(self):
        payload = decode_token(create_token({"username": "test"}, SECRET), SECRET)

        assert set(payload) == {"username", "isAdmin", "iat"}


class TestAuthMiddleware:
    """Tests for AuthMiddleware.authenticate"""

    @pytest.fixture
    def middleware(self):
        return AuthMiddleware(app=None, secret_key=SECRET)

    def test_bearer_token(self, middleware):
        token = create_token({"username": "test", "isAdmin": False}, SECRET)

        identity = middleware.authenticate(f"Bearer {token}")

        assert identity == Identity(username="test", is_admin=False)

    def test_prefix_is_case_insensitive(self, middleware):
        token = create_token({"username": "test", "isAdmin": True}, SECRET)

        identity = middleware.authenticate(f"bEaReR {token}")

        assert identity.username == "test"
        assert identity.is_admin is True

    def test_bare_token(self, middleware):
        token = create_token({"username": "test"}, SECRET)

        assert middleware.authenticate(token).username == "test"

    def test_no_header(self, middleware):
        assert middleware.authenticate(None) is None

    def test_bad_signature(self, middleware):
        token = create_token({"username": "test", "isAdmin": True}, "some-other-secret")

        assert middleware.authenticate(f"Bearer {token}") is None

    def test_garbage_token(self, middleware):
        assert middleware.authenticate("Bearer not.a.token") is None

    def test_payload_without_username(self, middleware):
        token = jwt.encode({"isAdmin": True}, SECRET, algorithm="HS256")

        assert middleware.authenticate(f"Bearer {token}") is None

    def test_missing_admin_flag_defaults_false(self, middleware):
        token = jwt.encode({"username": "test"}, SECRET, algorithm="HS256")

        assert middleware.authenticate(f"Bearer {token}").is_admin is False


class TestGuards:
    """Tests for the guard dependencies"""

    def test_logged_in(self):
        identity = Identity(username="test", is_admin=False)
        assert ensure_logged_in(identity) is identity

    def test_logged_in_anon(self):
        with pytest.raises(UnauthorizedError):
            ensure_logged_in(None)

    def test_admin(self):
        identity = Identity(username="test", is_admin=True)
        assert ensure_admin(identity) is identity

    def test_admin_rejects_non_admin(self):
        with pytest.raises(UnauthorizedError):
            ensure_admin(Identity(username="test", is_admin=False))

    def test_admin_rejects_anon(self):
        with pytest.raises(UnauthorizedError):
            ensure_admin(None)

    def test_correct_user(self):
        identity = Identity(username="test", is_admin=False)
        assert ensure_correct_user_or_admin("test", identity) is identity

    def test_admin_for_other_user(self):
        identity = Identity(username="admin", is_admin=True)
        assert ensure_correct_user_or_admin("test", identity) is identity

    def test_other_user_rejected(self):
        with pytest.raises(UnauthorizedError):
            ensure_correct_user_or_admin("test", Identity(username="wrong", is_admin=False))

    def test_correct_user_anon(self):
        with pytest.raises(UnauthorizedError):
            ensure_correct_user_or_admin("test", None)
