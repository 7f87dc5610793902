"""Configuration management using pydantic-settings."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from typing import Optional
import structlog


class ReseedSettings(BaseSettings):
    """Auto-reseed phase configuration loaded from environment variables.

    All settings prefixed with TAXONOMY_REMAP_AUTO_RESEED_
    (e.g., TAXONOMY_REMAP_AUTO_RESEED_THRESHOLD=100)
    """

    # Phase switch
    enabled: bool = Field(
        default=True,
        description="Enable/disable automatic reseeding of remap proposals"
    )

    # Admission
    threshold: int = Field(
        default=100,
        ge=0,
        description="Runs are skipped while more pending proposals than this exist"
    )
    limit: int = Field(
        default=10000,
        ge=100,
        description="Maximum candidate products scanned per manual run"
    )
    cooldown_minutes: int = Field(
        default=120,
        ge=0,
        description="Minimum minutes between two auto-reseed batches"
    )

    # Recovery
    running_stale_minutes: int = Field(
        default=30,
        ge=1,
        description="Running rows older than this are failed by the watchdog"
    )
    force_recover_minutes: int = Field(
        default=8,
        ge=1,
        description="Forced runs pre-empt running rows older than this"
    )

    # Writes
    chunk_size: int = Field(
        default=400,
        ge=1,
        le=5000,
        description="Products per proposal write transaction"
    )
    error_max_length: int = Field(
        default=1000,
        ge=50,
        description="Run error messages are truncated to this length"
    )

    # Decision policy
    require_name_backed_subcategory: bool = Field(
        default=True,
        description="Only move subcategories that the product name alone supports"
    )

    # Scheduler
    cron_interval_minutes: int = Field(
        default=30,
        ge=1,
        le=1440,
        description="Minutes between scheduled auto-reseed attempts"
    )

    @field_validator("cron_interval_minutes")
    @classmethod
    def validate_cron_interval(cls, v: int) -> int:
        """Interval must evenly divide an hour or, above an hour, a day."""
        if v < 60 and 60 % v == 0:
            return v
        if v % 60 == 0 and 1440 % v == 0:
            return v
        raise ValueError(
            f"cron_interval_minutes must divide 60, or be whole hours dividing 24h, got {v}"
        )

    model_config = SettingsConfigDict(
        env_prefix="TAXONOMY_REMAP_AUTO_RESEED_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    database_url: str

    # Redis Configuration
    redis_host: str = "redis"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_url: Optional[str] = None

    # Queue Configuration
    queue_name: str = "taxonomy-remap-queue"

    # Worker Configuration
    max_workers: int = 2
    job_timeout: int = 900
    log_level: str = "INFO"
    environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, **kwargs):
        """Initialize settings and build derived values."""
        super().__init__(**kwargs)
        if not self.redis_url:
            if self.redis_password:
                self.redis_url = f"redis://:{self.redis_password}@{self.redis_host}:{self.redis_port}/0"
            else:
                self.redis_url = f"redis://{self.redis_host}:{self.redis_port}/0"


# Global settings instances
settings = Settings()
reseed_settings = ReseedSettings()


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog for JSON logging."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


try:
    configure_logging(settings.log_level)
except Exception:
    configure_logging("INFO")
