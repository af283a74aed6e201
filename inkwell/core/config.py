"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SameSitePolicy = Literal["lax", "strict", "none"]


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./inkwell.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class SecuritySettings(BaseModel):
    secret_key: str = Field(default="change-me", min_length=8)
    algorithm: str = "HS256"
    access_token_expire_days: int = 7
    cookie_name: str = "access_token"
    # Left unset, both are derived from the environment (see Settings below).
    cookie_secure: Optional[bool] = None
    cookie_samesite: Optional[SameSitePolicy] = None


class OAuthSettings(BaseModel):
    google_client_id: Optional[str] = None
    google_client_secret: Optional[str] = None
    google_redirect_uri: str = "http://localhost:8000/api/auth/google/callback"


class StorageSettings(BaseModel):
    blob_dir: Path = Field(default=Path("storage/blobs"))
    blob_base_url: str = "/blobs"
    # Where this process serves blob_dir; falls back to blob_base_url when that is a path.
    blob_mount_path: Optional[str] = None
    max_upload_bytes: int = 50 * 1024 * 1024

    @property
    def served_path(self) -> Optional[str]:
        if self.blob_mount_path:
            return self.blob_mount_path
        if self.blob_base_url.startswith("/"):
            return self.blob_base_url
        return None


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Inkwell"
    api_prefix: str = "/api"
    client_url: str = "http://localhost:5173"
    cors_origins: list[str] = ["http://localhost:5173"]

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    oauth: OAuthSettings = OAuthSettings()
    storage: StorageSettings = StorageSettings()

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def secret_key(self) -> str:
        return self.security.secret_key

    @property
    def algorithm(self) -> str:
        return self.security.algorithm

    @property
    def cookie_secure(self) -> bool:
        if self.security.cookie_secure is not None:
            return self.security.cookie_secure
        return self.is_production

    @property
    def cookie_samesite(self) -> SameSitePolicy:
        if self.security.cookie_samesite is not None:
            return self.security.cookie_samesite
        # Cross-site frontends need "none", which browsers only accept with secure cookies.
        return "none" if self.is_production else "lax"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
