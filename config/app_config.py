"""
Main Application Configuration.

Composes domain-specific configuration modules:
    - DatabaseConfig (PostgreSQL census database)
    - SmsConfig (submission confirmation SMS)

Exports:
    AppConfig: Main configuration class

Pattern:
    Composition over inheritance - domain configs are composed, not inherited.
"""

import os

from pydantic import BaseModel, Field

from .database_config import DatabaseConfig
from .sms_config import SmsConfig
from .defaults import AppDefaults


# ============================================================================
# APPLICATION CONFIGURATION
# ============================================================================

class AppConfig(BaseModel):
    """Application configuration - composition of domain configs."""

    # ========================================================================
    # Core Application Settings
    # ========================================================================

    debug_mode: bool = Field(
        default=AppDefaults.DEBUG_MODE,
        description="Enable debug mode for verbose diagnostics. "
                    "Includes request payload sizes and pool stats in logs. "
                    "Set DEBUG_MODE=true in environment to enable.",
        examples=[True, False]
    )

    environment: str = Field(
        default=AppDefaults.ENVIRONMENT,
        description="Environment name (dev, qa, prod)",
        examples=["dev", "qa", "prod"]
    )

    log_level: str = Field(
        default=AppDefaults.LOG_LEVEL,
        description="Root log level for all component loggers"
    )

    # ========================================================================
    # Domain Configurations
    # ========================================================================

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    sms: SmsConfig = Field(default_factory=SmsConfig)

    @classmethod
    def from_environment(cls):
        """Load all configuration from environment variables."""
        return cls(
            debug_mode=os.environ.get("DEBUG_MODE", "false").lower() == "true",
            environment=os.environ.get("ENVIRONMENT", AppDefaults.ENVIRONMENT),
            log_level=os.environ.get("LOG_LEVEL", AppDefaults.LOG_LEVEL).upper(),
            database=DatabaseConfig.from_environment(),
            sms=SmsConfig.from_environment(),
        )
