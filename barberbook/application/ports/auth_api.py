from __future__ import annotations

from abc import ABC, abstractmethod

from barberbook.domain.entities.session import Session


class AuthApiPort(ABC):
    @abstractmethod
    def login(self, email: str, password: str) -> Session:
        """Exchange credentials for a session. Raises BookingApiError on rejection."""
        raise NotImplementedError
