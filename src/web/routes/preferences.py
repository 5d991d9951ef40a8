"""Per-user display preferences (light/dark theme)."""

from fastapi import APIRouter, Depends

from mood.identity import IdentityBackend
from web.auth import get_current_user
from web.deps import get_identity_backend
from web.models import Preferences

router = APIRouter(prefix="/api/preferences", tags=["preferences"])


@router.get("", response_model=Preferences)
async def get_preferences(
    user: dict = Depends(get_current_user),
    backend: IdentityBackend = Depends(get_identity_backend),
):
    return Preferences(theme=backend.get_theme(user["id"]))


@router.put("", response_model=Preferences)
async def update_preferences(
    body: Preferences,
    user: dict = Depends(get_current_user),
    backend: IdentityBackend = Depends(get_identity_backend),
):
    backend.set_theme(user["id"], body.theme)
    return Preferences(theme=backend.get_theme(user["id"]))
