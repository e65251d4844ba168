# ============================================================================
# CONFIG PACKAGE INIT
# ============================================================================
# STATUS: Configuration - package exports and singleton
# PURPOSE: Single entry point for application configuration
# EXPORTS: AppConfig, DatabaseConfig, SmsConfig, get_config, debug_config
# PATTERNS: Singleton, composition, facade
# ENTRY_POINTS: from config import get_config
# ============================================================================

"""
Configuration Package - Domain-Specific Configuration Modules

Structure:
    config/
    ├── __init__.py              # This file - exports and singleton
    ├── app_config.py            # Main config (composes domain configs)
    ├── database_config.py       # PostgreSQL census database
    ├── sms_config.py            # Confirmation SMS provider
    ├── defaults.py              # Default values
    └── env_validation.py        # Startup env var validation

Usage:
    from config import get_config
    config = get_config()
    schema = config.database.db_schema

    from config import debug_config
    info = debug_config()  # Secrets masked
"""

from typing import Optional

from .database_config import DatabaseConfig
from .sms_config import SmsConfig
from .app_config import AppConfig


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get global configuration singleton.

    Returns:
        AppConfig instance loaded from environment
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get sanitized configuration for debugging (masks sensitive values).

    Returns:
        Dictionary with configuration values, secrets masked
    """
    try:
        config = get_config()
        return {
            'database': config.database.debug_dict(),
            'sms': config.sms.debug_dict(),
            'debug_mode': config.debug_mode,
            'environment': config.environment,
            'log_level': config.log_level,
        }
    except Exception as e:
        return {'error': f'Failed to load config: {e}'}


__all__ = [
    'AppConfig',
    'DatabaseConfig',
    'SmsConfig',
    'get_config',
    'reset_config',
    'debug_config',
]
