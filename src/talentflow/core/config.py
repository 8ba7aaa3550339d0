"""
Configuration management for the TalentFlow assessment service.

This module provides centralized configuration using Pydantic Settings
for environment-based configuration management.
"""

from typing import List, Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    model_config = SettingsConfigDict(env_prefix="MONGO_")

    uri: str = Field(
        default="mongodb://localhost:27017", description="MongoDB connection URI"
    )
    db_name: str = Field(default="talentflow", description="MongoDB database name")
    enabled: bool = Field(
        default=True, description="Initialise the MongoDB store on startup"
    )
    server_selection_timeout_ms: int = Field(
        default=5000, description="Motor server selection timeout"
    )

    @validator("uri")
    def validate_mongo_uri(cls, v: str) -> str:
        """Validate MongoDB URI format."""
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(
                "MongoDB URI must start with 'mongodb://' or 'mongodb+srv://'"
            )
        return v


class CORSSettings(BaseSettings):
    """CORS configuration settings."""

    model_config = SettingsConfigDict(env_prefix="CORS_")

    allowed_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Allowed CORS origins",
    )
    allowed_methods: List[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        description="Allowed HTTP methods",
    )
    allowed_headers: List[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )
    allow_credentials: bool = Field(
        default=True, description="Allow credentials in CORS"
    )

    @validator("allowed_origins", pre=True)
    def parse_allowed_origins(cls, v):
        """Parse allowed origins from string or list."""
        if isinstance(v, str):
            # Handle JSON-like string format
            if v.startswith("[") and v.endswith("]"):
                import json

                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    return [v.strip()]
            return [v.strip()]
        return v


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(default="json", description="Log format (json or text)")
    file_path: Optional[str] = Field(default=None, description="Log file path")

    @validator("level")
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @validator("format")
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()


class FormSettings(BaseSettings):
    """Defaults for assessment-taking sessions."""

    model_config = SettingsConfigDict(env_prefix="FORM_")

    validate_on_change: bool = Field(
        default=False, description="Validate a field on every change"
    )
    validate_on_blur: bool = Field(
        default=True, description="Validate a field when it loses focus"
    )
    enforce_section_completion: bool = Field(
        default=True,
        description="Block forward navigation until the current section is complete",
    )
    auto_save: bool = Field(default=False, description="Periodically save drafts")
    auto_save_interval_seconds: float = Field(
        default=30.0, description="Seconds between auto-save attempts"
    )
    session_idle_timeout_seconds: float = Field(
        default=1800.0, description="Drop sessions untouched for this long"
    )
    session_sweep_interval_seconds: float = Field(
        default=60.0, description="Seconds between sweeps for expired sessions"
    )

    @validator(
        "auto_save_interval_seconds",
        "session_idle_timeout_seconds",
        "session_sweep_interval_seconds",
    )
    def validate_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Intervals and timeouts must be positive")
        return v


class UploadSettings(BaseSettings):
    """Constraints applied to file-upload answers."""

    model_config = SettingsConfigDict(env_prefix="UPLOAD_")

    max_size_bytes: int = Field(
        default=10 * 1024 * 1024, description="Maximum accepted file size"
    )
    allowed_types: List[str] = Field(
        default=["application/pdf", "image/*", "text/plain"],
        description="Accepted MIME types, 'type/*' wildcards allowed",
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Application settings
    app_name: str = Field(default="TalentFlow", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    app_env: str = Field(default="development", description="Application environment")
    debug: bool = Field(default=False, description="Debug mode")
    port: int = Field(default=8000, description="Application port")
    host: str = Field(default="0.0.0.0", description="Application host")

    # Sub-settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    form: FormSettings = Field(default_factory=FormSettings)
    upload: UploadSettings = Field(default_factory=UploadSettings)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Override sub-settings with environment variables
        self.database = DatabaseSettings()
        self.cors = CORSSettings()
        self.logging = LoggingSettings()
        self.form = FormSettings()
        self.upload = UploadSettings()

    @validator("app_env")
    def validate_app_env(cls, v: str) -> str:
        """Validate application environment."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"App environment must be one of: {valid_envs}")
        return v.lower()

    @validator("port")
    def validate_port(cls, v: int) -> int:
        """Validate port number."""
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def is_testing(self) -> bool:
        return self.app_env == "testing"


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance."""
    return settings
