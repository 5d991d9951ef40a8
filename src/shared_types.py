"""Shared enums and types for moodflow."""

from enum import StrEnum


class SessionState(StrEnum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


class EditorView(StrEnum):
    ENTRY = "entry"
    CALENDAR = "calendar"


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"
