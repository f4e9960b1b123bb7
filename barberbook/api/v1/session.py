from fastapi import APIRouter, Depends, Header, Response

from barberbook.api.v1.errors import http_errors
from barberbook.api.v1.schemas import LoginRequestSchema, SessionSchema
from barberbook.application.use_cases.session import SessionUseCase
from barberbook.domain.entities.session import Session
from barberbook.wiring.dependencies import get_session_use_case

router = APIRouter()


def bearer_token(authorization: str | None = Header(None)) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def current_session(
    token: str | None = Depends(bearer_token),
    uc: SessionUseCase = Depends(get_session_use_case),
) -> Session:
    with http_errors():
        return uc.current(token)


@router.post("/session/login", response_model=SessionSchema)
def login(
    req: LoginRequestSchema,
    uc: SessionUseCase = Depends(get_session_use_case),
):
    with http_errors():
        session = uc.login(req.email, req.password)
    return SessionSchema(
        token=session.token,
        user_id=session.user_id,
        role=session.role,
        email=session.email,
        first_name=session.first_name,
        last_name=session.last_name,
        expires_in=session.expires_in,
    )


@router.delete("/session", status_code=204)
def logout(
    session: Session = Depends(current_session),
    uc: SessionUseCase = Depends(get_session_use_case),
) -> Response:
    uc.logout(session.token)
    return Response(status_code=204)
