"""Two-state gate in front of catalog administration."""

from __future__ import annotations

from enum import Enum

import structlog

from shopsim.domain.exceptions import AuthorizationError
from shopsim.domain.repository.credentials import CredentialVerifier

logger = structlog.get_logger(__name__)


class SessionState(Enum):
    LOGGED_OUT = "LOGGED_OUT"
    LOGGED_IN = "LOGGED_IN"


class AdminSession:

    def __init__(self, verifier: CredentialVerifier) -> None:
        self._verifier = verifier
        self.state = SessionState.LOGGED_OUT
        self.username: str | None = None

    @property
    def is_logged_in(self) -> bool:
        return self.state == SessionState.LOGGED_IN

    def login(self, username: str, password: str) -> bool:
        """Transition LOGGED_OUT -> LOGGED_IN if the verifier accepts the pair."""
        if not self._verifier.verify(username, password):
            logger.warning("Admin login rejected", username=username)
            return False
        self.state = SessionState.LOGGED_IN
        self.username = username
        logger.info("Admin logged in", username=username)
        return True

    def logout(self) -> None:
        if self.is_logged_in:
            logger.info("Admin logged out", username=self.username)
        self.state = SessionState.LOGGED_OUT
        self.username = None

    def require_admin(self) -> None:
        if not self.is_logged_in:
            raise AuthorizationError(
                "Admin privileges required. Please login as admin first."
            )
