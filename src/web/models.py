"""Pydantic request/response schemas for the web API."""

from datetime import date as Date
from typing import Optional

from pydantic import BaseModel, Field

from shared_types import Theme

# --- Auth ---


class Credentials(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=1024)


class UserInfo(BaseModel):
    id: str
    email: Optional[str] = None


class AuthResponse(BaseModel):
    token: str
    user: UserInfo
    expires_at: Optional[str] = None


# --- Moods ---


class MoodWrite(BaseModel):
    """Create or overwrite the entry for the date in the URL."""

    mood: int = Field(..., ge=1, le=5)
    note: str = ""


class MoodCreate(MoodWrite):
    """Create or overwrite an entry; date defaults to today."""

    date: Optional[Date] = None


class MoodEntry(BaseModel):
    date: str
    mood: int
    glyph: str
    label: str
    color: str
    note: str = ""
    created_at: str


# --- Views ---


class StreakResponse(BaseModel):
    streak: bool
    length: int
    celebration_seconds: float


# --- Preferences ---


class Preferences(BaseModel):
    theme: Theme = Theme.LIGHT
