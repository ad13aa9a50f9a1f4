"""
Static bearer-token authentication for the gateway.
"""

import secrets
from typing import Optional

from shared.errors import ServerMisconfiguredError, UnauthorizedError
from shared.logging import get_logger

BEARER_PREFIX = "Bearer "


class BearerAuthenticator:
    """Admit requests whose bearer token equals the configured secret."""

    def __init__(self, secret: Optional[str]):
        self._secret = secret or None
        self.logger = get_logger("gateway.auth.bearer")

    @property
    def configured(self) -> bool:
        return self._secret is not None

    def authenticate(self, authorization: Optional[str]) -> None:
        """Validate the raw ``Authorization`` header value.

        Raises ServerMisconfiguredError when no secret is configured, before
        the presented credential is looked at, and UnauthorizedError for a
        missing, malformed or wrong credential.
        """
        if self._secret is None:
            self.logger.error("Bearer secret not configured")
            raise ServerMisconfiguredError()

        if not authorization or not authorization.startswith(BEARER_PREFIX):
            self.logger.warning("Missing or malformed Authorization header")
            raise UnauthorizedError()

        token = authorization[len(BEARER_PREFIX):]
        if not secrets.compare_digest(token.encode("utf-8"), self._secret.encode("utf-8")):
            self.logger.warning("Bearer token rejected")
            raise UnauthorizedError()
