"""
PrivacyWatch Application Configuration
Engine thresholds, rate limit presets and environment configuration
"""

from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
VALID_ENVIRONMENTS = {"development", "testing", "staging", "production"}


class Settings(BaseSettings):
    """Application settings loaded from PRIVACYWATCH_* environment variables"""

    # Application
    app_name: str = "PrivacyWatch"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Audit storage (None keeps records in process memory)
    audit_database_url: Optional[str] = Field(
        default=None,
        description="SQLAlchemy URL for the audit_log table, e.g. sqlite:///./audit.db",
    )

    # Rate limiting
    rate_limiting_enabled: bool = True
    rate_limit_max_operations: int = 50
    rate_limit_window_minutes: int = 60
    rate_limit_cleanup_interval_seconds: int = 300

    # Client addresses: X-Forwarded-For is honored only from these peers
    trusted_proxies: List[str] = Field(default_factory=list)

    # Document uploads
    max_upload_size: int = 10 * 1024 * 1024  # 10MB

    # Security audit report thresholds
    report_high_activity_threshold: int = 50
    report_access_failure_threshold: int = 10
    report_distinct_ip_threshold: int = 5
    report_top_users_limit: int = 10
    report_rate_violation_threshold: int = 100
    report_low_volume_threshold: int = 100
    report_failure_ratio_threshold: float = 0.1

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PRIVACYWATCH_",
        extra="allow",
    )

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(VALID_LOG_LEVELS)}")
        return level

    @field_validator("environment")
    @classmethod
    def environment_must_be_known(cls, v: str) -> str:
        env = v.lower()
        if env not in VALID_ENVIRONMENTS:
            raise ValueError(f"environment must be one of {sorted(VALID_ENVIRONMENTS)}")
        return env

    @field_validator("rate_limit_max_operations", "rate_limit_window_minutes")
    @classmethod
    def rate_limits_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Rate limit values must be at least 1")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings"""
    return Settings()


# Per-operation rate limits: (max_operations, window_minutes)
OPERATION_RATE_LIMITS: Dict[str, tuple] = {
    "list_tasks": (100, 60),
    "upload_document": (20, 60),
    "submit_answers": (30, 60),
    "submit_task": (30, 60),
    "review_task": (200, 60),
    "security_report": (10, 60),
}
