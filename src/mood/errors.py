"""Exceptions raised by the mood journal."""


class MoodFlowError(Exception):
    """Base exception for mood journal errors."""


class AuthError(MoodFlowError):
    """Sign-in or sign-up rejected by the identity provider."""


class DuplicateAccountError(AuthError):
    """Sign-up for an e-mail that already has an account."""


class FutureDateError(MoodFlowError):
    """Entry date is after today."""


class InvalidMoodError(MoodFlowError):
    """Mood value is not one of the catalog levels."""


class MissingSelectionError(MoodFlowError):
    """No mood level selected."""


class RecordStoreError(MoodFlowError):
    """Record store read or write failed."""
