import pytest
from types import SimpleNamespace
from unittest.mock import patch
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from quizmaster.utils.auth_utils import get_current_user, get_current_user_optional, require_author

SUPABASE_USER = SimpleNamespace(id="test-user-id", email="test@example.com", user_metadata={"name": "Test"})

@pytest.fixture
def mock_verify():
    with patch("quizmaster.utils.auth_utils.verify_supabase_token") as mock:
        yield mock

class TestAuthUtils:
    """Test authentication utility functions"""

    async def test_get_current_user_valid_token(self, mock_verify):
        """Test getting current user with valid token"""
        mock_verify.return_value = SUPABASE_USER

        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="valid-token")
        result = await get_current_user(credentials)

        assert result == {"id": "test-user-id", "email": "test@example.com", "metadata": {"name": "Test"}}
        mock_verify.assert_called_once_with("valid-token")

    async def test_get_current_user_invalid_token(self, mock_verify):
        """Test getting current user with invalid token"""
        mock_verify.return_value = None

        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="invalid-token")
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(credentials)

        assert exc_info.value.status_code == 401

    async def test_optional_user_without_credentials(self, mock_verify):
        """Anonymous respondents get None"""
        assert await get_current_user_optional(None) is None
        mock_verify.assert_not_called()

    async def test_optional_user_with_bad_token(self, mock_verify):
        mock_verify.return_value = None
        credentials = HTTPAuthorizationCredentials(scheme="Bearer", credentials="expired")
        assert await get_current_user_optional(credentials) is None

    def test_require_author_allows_author(self, quiz_factory):
        """Test require_author with the quiz author"""
        assert require_author(quiz_factory(), {"id": "author-1"}) is None

    @pytest.mark.parametrize("user", [None, {"id": "student-1"}])
    def test_require_author_rejects_others(self, quiz_factory, user):
        """Test require_author with anyone else"""
        with pytest.raises(HTTPException) as exc_info:
            require_author(quiz_factory(), user)

        assert exc_info.value.status_code == 403
