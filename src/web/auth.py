"""Bearer-token validation for FastAPI."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from mood.errors import AuthError
from mood.identity import IdentityBackend
from web.deps import get_identity_backend

security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    backend: IdentityBackend = Depends(get_identity_backend),
) -> dict:
    """Decode the session token and return ``{id, email, token}``."""
    token = credentials.credentials
    try:
        user = backend.verify_token(token)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )
    return {**user, "token": token}
