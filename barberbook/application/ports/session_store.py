from abc import ABC, abstractmethod

from barberbook.domain.entities.session import Session


class SessionStorePort(ABC):
    @abstractmethod
    def load(self, token: str) -> Session | None:
        raise NotImplementedError

    @abstractmethod
    def save(self, session: Session) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear(self, token: str) -> None:
        raise NotImplementedError
