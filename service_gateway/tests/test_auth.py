"""
Unit tests for BearerAuthenticator.
"""

import pytest

from service_gateway.app.auth.bearer import BearerAuthenticator
from shared.errors import ServerMisconfiguredError, UnauthorizedError


class TestBearerAuthenticator:
    """Test cases for BearerAuthenticator."""

    @pytest.fixture
    def authenticator(self):
        return BearerAuthenticator("s3cret")

    def test_valid_token_admitted(self, authenticator):
        assert authenticator.authenticate("Bearer s3cret") is None

    @pytest.mark.parametrize(
        "header",
        [
            None,
            "",
            "s3cret",
            "bearer s3cret",
            "Bearer",
            "Bearer ",
            "Bearer s3cre",
            "Bearer s3cret ",
            "Bearer  s3cret",
            "Basic s3cret",
        ],
    )
    def test_invalid_credentials_rejected(self, authenticator, header):
        with pytest.raises(UnauthorizedError) as exc_info:
            authenticator.authenticate(header)

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Unauthorized"

    def test_non_ascii_token_rejected(self, authenticator):
        with pytest.raises(UnauthorizedError):
            authenticator.authenticate("Bearer sécret")

    @pytest.mark.parametrize("secret", [None, ""])
    @pytest.mark.parametrize("header", [None, "Bearer ", "Bearer anything"])
    def test_missing_secret_is_misconfiguration(self, secret, header):
        authenticator = BearerAuthenticator(secret)

        assert authenticator.configured is False
        with pytest.raises(ServerMisconfiguredError) as exc_info:
            authenticator.authenticate(header)

        assert exc_info.value.status_code == 500
