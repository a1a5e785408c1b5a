"""
Application configuration settings.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True
    )

    # Application
    app_name: str = Field("Storage Gateway", alias="APP_NAME")

    # Environment
    environment: str = Field("development", alias="ENVIRONMENT")
    production: bool = Field(False, alias="PRODUCTION")
    debug: bool = Field(False, alias="DEBUG")

    # Server
    host: str = Field("0.0.0.0", alias="SERVER_IP")
    port: int = Field(3000, alias="SERVER_PORT")

    # Credentials
    users_file: str = Field("users.json", alias="USERS_FILE")

    # R2 / S3
    r2_account_id: Optional[str] = Field(None, alias="R2_ACCOUNT_ID")
    r2_access_key_id: Optional[str] = Field(None, alias="R2_ACCESS_KEY_ID")
    r2_secret_access_key: Optional[str] = Field(None, alias="R2_SECRET_ACCESS_KEY")
    r2_bucket_name: Optional[str] = Field(None, alias="R2_BUCKET_NAME")
    r2_endpoint_url: Optional[str] = Field(None, alias="R2_ENDPOINT_URL")
    r2_region: str = Field("auto", alias="R2_REGION")
    storage_base_path: str = Field("content/md", alias="STORAGE_BASE_PATH")

    # Sessions
    session_cookie_name: str = Field("session_id", alias="SESSION_COOKIE_NAME")
    session_max_age: int = Field(60 * 60 * 24 * 30, alias="SESSION_MAX_AGE")
    session_ttl_seconds: Optional[int] = Field(None, alias="SESSION_TTL_SECONDS")
    cookie_domain: str = Field("admin.seemsgood.org", alias="COOKIE_DOMAIN")
    session_backend: str = Field("memory", alias="SESSION_BACKEND")

    # Redis (only used by the redis session backend)
    redis_url: str = Field("redis://localhost:6379/0", alias="REDIS_URL")
    redis_key_prefix: str = Field("gateway:", alias="REDIS_KEY_PREFIX")

    # Frontend
    static_dir: str = Field("static", alias="STATIC_DIR")

    # CORS
    cors_origins: str = Field("", alias="CORS_ORIGINS")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_format: str = Field("json", alias="LOG_FORMAT")

    def get_cors_origins(self) -> list[str]:
        """Parse CORS origins from string."""
        if self.cors_origins == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def r2_endpoint(self) -> Optional[str]:
        """Endpoint for the S3 API, derived from the account id unless overridden."""
        if self.r2_endpoint_url:
            return self.r2_endpoint_url
        if self.r2_account_id:
            return f"https://{self.r2_account_id}.r2.cloudflarestorage.com"
        return None


_settings = None


def get_settings() -> Settings:
    """Get settings instance (useful for dependency injection)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
