"""Connector configuration using Pydantic settings."""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://demodelivery.briefbutler.com"
DEFAULT_CERT_PATH = "certificates/converted/cert.crt"
DEFAULT_KEY_PATH = "certificates/converted/key.key"
TRUTHY_VALUES = {"true", "1", "yes", "on"}


class Settings(BaseSettings):
    """Connector settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
    )

    # Logging
    log_level: str = Field(default="INFO")

    # BriefButler API
    briefbutler_api_url: str = Field(default=DEFAULT_API_URL)
    briefbutler_test_mode: bool = Field(default=False)
    briefbutler_timeout: float = Field(default=30.0, gt=0)
    briefbutler_delivery_profile: str = Field(default="briefbutler-test")

    # Mutual TLS
    briefbutler_certificate_path: Optional[str] = Field(
        default=None, description="PEM client certificate presented to the API"
    )
    briefbutler_key_path: Optional[str] = Field(
        default=None, description="PEM private key matching the client certificate"
    )
    briefbutler_key_password: Optional[str] = Field(default=None)
    briefbutler_insecure_skip_verify: bool = Field(
        default=False,
        description="Disable server certificate verification (testing only, insecure)",
    )

    @field_validator("briefbutler_api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Strip whitespace and trailing slashes from the API URL; blank means default."""
        v = v.strip().rstrip("/")
        if not v:
            return DEFAULT_API_URL
        if not v.startswith(("http://", "https://")):
            raise ValueError("BriefButler API URL must start with http:// or https://")
        return v

    @field_validator("briefbutler_test_mode", "briefbutler_insecure_skip_verify", mode="before")
    @classmethod
    def parse_flag(cls, v: object) -> bool:
        """Only explicit truthy values enable a flag; anything else leaves it off."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.strip().lower() in TRUTHY_VALUES
        return False

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level name to upper case."""
        return v.strip().upper()

    def get_certificate_path(self) -> Path:
        """Get client certificate path, defaulting under the working directory."""
        if self.briefbutler_certificate_path:
            return Path(self.briefbutler_certificate_path)
        return Path.cwd() / DEFAULT_CERT_PATH

    def get_key_path(self) -> Path:
        """Get client key path, defaulting under the working directory."""
        if self.briefbutler_key_path:
            return Path(self.briefbutler_key_path)
        return Path.cwd() / DEFAULT_KEY_PATH


# Global settings instance
settings = Settings()
