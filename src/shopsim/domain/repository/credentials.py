"""Abstract credential check used by the admin session."""

from __future__ import annotations

from abc import ABC, abstractmethod


class CredentialVerifier(ABC):

    @abstractmethod
    def verify(self, username: str, password: str) -> bool:
        """Return True if the pair identifies an administrator."""
