"""Credential verifier backed by a configured username/password table."""

from __future__ import annotations

import hmac
from typing import Mapping

from shopsim.domain.repository.credentials import CredentialVerifier


class StaticCredentialVerifier(CredentialVerifier):

    def __init__(self, credentials: Mapping[str, str]) -> None:
        self._credentials = dict(credentials)

    def verify(self, username: str, password: str) -> bool:
        expected = self._credentials.get(username)
        if expected is None:
            return False
        return hmac.compare_digest(expected.encode(), password.encode())
