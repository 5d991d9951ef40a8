"""Local identity provider: SQLite accounts, scrypt hashes, JWT session tokens."""

import base64
import os
import sqlite3
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Optional

import structlog
from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt
from jose import JWTError, jwt

from db import wal_connect
from shared_types import Theme

from .errors import AuthError, DuplicateAccountError
from .session import IdentityProvider, Session

logger = structlog.get_logger()

_SCRYPT_N = 2**14
_SCRYPT_R = 8
_SCRYPT_P = 1
_SALT_BYTES = 16
_KEY_BYTES = 32

INVALID_CREDENTIALS = "Invalid email or password"
BACKEND_UNAVAILABLE = "Identity service unavailable"


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode()


def _unb64(text: str) -> bytes:
    return base64.urlsafe_b64decode(text.encode())


def _kdf(salt: bytes) -> Scrypt:
    return Scrypt(salt=salt, length=_KEY_BYTES, n=_SCRYPT_N, r=_SCRYPT_R, p=_SCRYPT_P)


def hash_password(password: str) -> str:
    """Return ``scrypt$<salt>$<key>`` for storage."""
    salt = os.urandom(_SALT_BYTES)
    key = _kdf(salt).derive(password.encode())
    return f"scrypt${_b64(salt)}${_b64(key)}"


def verify_password(password: str, stored: str) -> bool:
    try:
        scheme, salt, key = stored.split("$")
    except ValueError:
        return False
    if scheme != "scrypt":
        return False
    try:
        _kdf(_unb64(salt)).verify(password.encode(), _unb64(key))
    except InvalidKey:
        return False
    return True


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class IdentityBackend:
    """Server-side account store shared by every user.

    Args:
        db_path: SQLite database file.
        jwt_secret: HMAC secret for session tokens.
        algorithm: JWT algorithm.
        token_ttl: Session token lifetime.
        min_password_length: Shortest password accepted on sign-up.
    """

    def __init__(
        self,
        db_path: Path,
        jwt_secret: str,
        algorithm: str = "HS256",
        token_ttl: timedelta = timedelta(days=7),
        min_password_length: int = 6,
    ):
        if not jwt_secret:
            raise RuntimeError("JWT secret required for session tokens")
        self.db_path = Path(db_path)
        self._secret = jwt_secret
        self.algorithm = algorithm
        self.token_ttl = token_ttl
        self.min_password_length = min_password_length
        self.init_db()

    def _get_conn(self) -> sqlite3.Connection:
        return wal_connect(self.db_path, row_factory=True)

    def init_db(self) -> None:
        """Create tables if they don't exist."""
        conn = self._get_conn()
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    email TEXT NOT NULL UNIQUE,
                    password_hash TEXT NOT NULL,
                    theme TEXT NOT NULL DEFAULT 'light',
                    created_at TIMESTAMP NOT NULL
                );
                CREATE TABLE IF NOT EXISTS revoked_tokens (
                    jti TEXT PRIMARY KEY,
                    expires_at INTEGER NOT NULL
                );
            """)
            conn.commit()
        finally:
            conn.close()

    # --- Accounts ---

    def register(self, email: str, password: str) -> dict[str, Any]:
        """Create an account. Raises AuthError / DuplicateAccountError."""
        email = normalize_email(email)
        if "@" not in email or email.startswith("@") or email.endswith("@"):
            raise AuthError("Invalid email address")
        if len(password or "") < self.min_password_length:
            raise AuthError(f"Password must be at least {self.min_password_length} characters")

        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc).isoformat()
        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    "INSERT INTO users (id, email, password_hash, created_at) VALUES (?, ?, ?, ?)",
                    (user_id, email, hash_password(password), now),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.IntegrityError:
            raise DuplicateAccountError("Email already registered")
        except sqlite3.Error as e:
            logger.error("identity.register_failed", error=str(e))
            raise AuthError(BACKEND_UNAVAILABLE) from e
        logger.info("identity.user_registered", user_id=user_id)
        return {"id": user_id, "email": email, "created_at": now}

    def authenticate(self, email: str, password: str) -> dict[str, Any]:
        """Check credentials. Raises AuthError with one message for both failure cases."""
        email = normalize_email(email)
        try:
            conn = self._get_conn()
            try:
                row = conn.execute(
                    "SELECT id, email, password_hash FROM users WHERE email = ?", (email,)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("identity.sign_in_failed", error=str(e))
            raise AuthError(BACKEND_UNAVAILABLE) from e
        if not row or not verify_password(password or "", row["password_hash"]):
            logger.info("identity.sign_in_rejected")
            raise AuthError(INVALID_CREDENTIALS)
        return {"id": row["id"], "email": row["email"]}

    def get_user(self, user_id: str) -> Optional[dict[str, Any]]:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT id, email, theme, created_at FROM users WHERE id = ?", (user_id,)
            ).fetchone()
            return dict(row) if row else None
        finally:
            conn.close()

    # --- Preferences ---

    def get_theme(self, user_id: str) -> Theme:
        user = self.get_user(user_id)
        return Theme(user["theme"]) if user else Theme.LIGHT

    def set_theme(self, user_id: str, theme: Theme) -> None:
        conn = self._get_conn()
        try:
            conn.execute("UPDATE users SET theme = ? WHERE id = ?", (Theme(theme).value, user_id))
            conn.commit()
        finally:
            conn.close()

    # --- Tokens ---

    def issue_token(self, user: dict[str, Any]) -> Session:
        now = datetime.now(timezone.utc)
        expires = now + self.token_ttl
        payload = {
            "sub": user["id"],
            "email": user["email"],
            "jti": uuid.uuid4().hex,
            "iat": int(now.timestamp()),
            "exp": int(expires.timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=self.algorithm)
        return Session(user_id=user["id"], email=user["email"], token=token, expires_at=expires)

    def _decode(self, token: str) -> dict[str, Any]:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError:
            raise AuthError("Invalid or expired token")
        if not payload.get("sub") or not payload.get("jti"):
            raise AuthError("Invalid token: missing claims")
        return payload

    def verify_token(self, token: str) -> dict[str, Any]:
        """Decode a session token and reject revoked ones."""
        payload = self._decode(token)
        conn = self._get_conn()
        try:
            revoked = conn.execute(
                "SELECT 1 FROM revoked_tokens WHERE jti = ?", (payload["jti"],)
            ).fetchone()
        finally:
            conn.close()
        if revoked:
            raise AuthError("Session has been signed out")
        return {"id": payload["sub"], "email": payload.get("email")}

    def revoke_token(self, token: str) -> None:
        """Sign a token out; expired revocations are pruned on the way."""
        payload = self._decode(token)
        now = int(datetime.now(timezone.utc).timestamp())
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM revoked_tokens WHERE expires_at < ?", (now,))
            conn.execute(
                "INSERT OR IGNORE INTO revoked_tokens (jti, expires_at) VALUES (?, ?)",
                (payload["jti"], int(payload.get("exp", now))),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("identity.token_revoked", user_id=payload["sub"])


class LocalIdentityProvider(IdentityProvider):
    """Single-client session on top of an ``IdentityBackend``."""

    def __init__(self, backend: IdentityBackend):
        super().__init__()
        self.backend = backend

    def sign_in(self, email: str, password: str) -> Session:
        user = self.backend.authenticate(email, password)
        session = self.backend.issue_token(user)
        self._set_session(session)
        return session

    def sign_up(self, email: str, password: str) -> Session:
        user = self.backend.register(email, password)
        session = self.backend.issue_token(user)
        self._set_session(session)
        return session

    def sign_out(self) -> None:
        session = self._session
        if session is None:
            return
        try:
            self.backend.revoke_token(session.token)
        except AuthError as e:
            logger.warning("identity.revoke_failed", error=str(e))
        self._set_session(None)
