from __future__ import annotations

import logging
import time

from barberbook.application.ports.auth_api import AuthApiPort
from barberbook.domain.entities.session import Session
from barberbook.infrastructure.graphql import documents
from barberbook.infrastructure.graphql.client import GraphQLClient
from barberbook.infrastructure.graphql.mappers import session_from_login


class GraphQLAuthApi(AuthApiPort):
    def __init__(self, client: GraphQLClient) -> None:
        self._client = client
        self._logger = logging.getLogger(__name__)

    def login(self, email: str, password: str) -> Session:
        data = self._client.execute(documents.LOGIN, {"email": email, "password": password})
        session = session_from_login(data.get("login"), now_ts=time.time())
        self._logger.info("Logged in", extra={"role": session.role.value})
        return session
