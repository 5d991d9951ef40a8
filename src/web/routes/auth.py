"""Sign-up, sign-in and sign-out routes."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from mood.errors import AuthError, DuplicateAccountError
from mood.identity import IdentityBackend
from mood.session import Session
from web.auth import get_current_user
from web.deps import get_identity_backend
from web.models import AuthResponse, Credentials, UserInfo

logger = structlog.get_logger()

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _response(session: Session) -> AuthResponse:
    return AuthResponse(
        token=session.token,
        user=UserInfo(id=session.user_id, email=session.email),
        expires_at=session.expires_at.isoformat() if session.expires_at else None,
    )


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    body: Credentials,
    backend: IdentityBackend = Depends(get_identity_backend),
):
    try:
        user = backend.register(body.email, body.password)
    except DuplicateAccountError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    return _response(backend.issue_token(user))


@router.post("/signin", response_model=AuthResponse)
async def sign_in(
    body: Credentials,
    backend: IdentityBackend = Depends(get_identity_backend),
):
    try:
        user = backend.authenticate(body.email, body.password)
    except AuthError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    return _response(backend.issue_token(user))


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    user: dict = Depends(get_current_user),
    backend: IdentityBackend = Depends(get_identity_backend),
):
    backend.revoke_token(user["token"])


@router.get("/me", response_model=UserInfo)
async def me(user: dict = Depends(get_current_user)):
    return UserInfo(id=user["id"], email=user.get("email"))
