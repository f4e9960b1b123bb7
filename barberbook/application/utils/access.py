from __future__ import annotations

from barberbook.application.exceptions import ActionNotAllowedError
from barberbook.domain.entities.session import Session
from barberbook.domain.policies.authorization import Resource, is_allowed


def require(session: Session, resource: Resource, action: str) -> None:
    if not is_allowed(session.role, resource, action):
        raise ActionNotAllowedError(f"{session.role.value} cannot {action} {resource.value}")
