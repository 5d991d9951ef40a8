"""Pydantic configuration models for MoodFlow."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

VALID_JWT_ALGORITHMS = {"HS256", "HS384", "HS512"}


def _default_home() -> Path:
    return Path(os.environ.get("MOODFLOW_HOME", "~/moodflow"))


class PathsConfig(BaseModel):
    """File paths configuration."""

    data_dir: Path = Field(default_factory=_default_home)
    db_path: Optional[Path] = None  # None = <data_dir>/moodflow.db

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ and derive unset paths from data_dir."""
        self.data_dir = self.data_dir.expanduser()
        self.db_path = (self.db_path or self.data_dir / "moodflow.db").expanduser()
        return self


class AuthConfig(BaseModel):
    """Session token and credential rules."""

    jwt_secret: Optional[str] = None
    algorithm: str = "HS256"
    token_ttl_minutes: int = 60 * 24 * 7
    min_password_length: int = 6

    @field_validator("algorithm")
    @classmethod
    def validate_algorithm(cls, v: str) -> str:
        if v not in VALID_JWT_ALGORITHMS:
            raise ValueError(f"Invalid JWT algorithm: {v}. Must be one of {VALID_JWT_ALGORITHMS}")
        return v

    @field_validator("token_ttl_minutes", "min_password_length")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Must be positive, got {v}")
        return v


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class WebConfig(BaseModel):
    """HTTP surface configuration."""

    frontend_origin: str = "http://localhost:3000"


class CelebrationConfig(BaseModel):
    """Streak celebration tuning."""

    seconds: float = 8.0
    streak_length: int = 7

    @field_validator("streak_length")
    @classmethod
    def validate_streak_length(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"streak_length must be >= 1, got {v}")
        return v


class MoodFlowConfig(BaseModel):
    """Main configuration model."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    celebration: CelebrationConfig = Field(default_factory=CelebrationConfig)

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand ${VAR} in the JWT secret; MOODFLOW_JWT_SECRET wins over the file."""
        secret = self.auth.jwt_secret
        if secret and secret.startswith("${") and secret.endswith("}"):
            self.auth.jwt_secret = os.getenv(secret[2:-1], "")
        env_secret = os.getenv("MOODFLOW_JWT_SECRET")
        if env_secret:
            self.auth.jwt_secret = env_secret
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "MoodFlowConfig":
        """Create config from a raw YAML dict."""
        if "paths" in data:
            for key in ["data_dir", "db_path"]:
                if isinstance(data["paths"].get(key), str):
                    data["paths"][key] = Path(data["paths"][key])
        return cls.model_validate(data)
