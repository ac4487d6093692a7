"""
Authentication configuration settings.

Dependencies: pydantic_settings
System role: Bearer token verification parameters
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from studybuddy.configs.base import BaseSettings


class AuthSettings(BaseSettings):
    """JWT bearer token configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AUTH_",
        case_sensitive=False,
        extra="ignore",
    )

    jwt_secret: str = Field(default="defaultsecret", description="HMAC secret for tokens")
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    token_ttl_days: int = Field(default=30, gt=0, description="Lifetime of minted tokens")
