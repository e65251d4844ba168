"""
Unified Logger System.

JSON-only structured logging for Azure Functions with Application Insights.

Design Principles:
    - Strong typing with dataclasses (stdlib only)
    - Enum safety for categories
    - Component-specific loggers
    - Clean factory pattern

Exports:
    ComponentType: Enum for component types
    LogLevel: Enum for log levels
    LogContext: Logging context dataclass (request / household correlation)
    bind_log_context: Context manager scoping a LogContext to one request
    update_log_context: Add fields to the active LogContext
    LoggerFactory: Factory for creating loggers
    log_exceptions: Exception logging decorator
    log_duration: Context manager logging elapsed milliseconds

Dependencies:
    Standard library only (logging, enum, dataclasses, contextvars, json)
"""

from enum import Enum
from typing import Optional, Dict, Any
from datetime import datetime, timezone
from dataclasses import dataclass, replace
from contextvars import ContextVar
import logging
import sys
import os
import json
import time
import traceback
from functools import wraps
from contextlib import contextmanager


# ============================================================================
# COMPONENT TYPES - Aligned with layered architecture
# ============================================================================

class ComponentType(Enum):
    """
    Component types aligned with the application layers.

    Each layer has specific logging needs and levels.
    """
    TRIGGER = "trigger"        # HTTP entry points
    SERVICE = "service"        # Submission, dashboard and notification services
    REPOSITORY = "repository"  # PostgreSQL access
    VALIDATOR = "validator"    # Household/member validation
    ADAPTER = "adapter"        # External integrations (SMS provider)


# ============================================================================
# LOG LEVELS - Standard Python levels with enum safety
# ============================================================================

class LogLevel(Enum):
    """Standard Python log levels as enum for type safety."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_python_level(self) -> int:
        """Convert to Python logging level constant."""
        return getattr(logging, self.value)

    @classmethod
    def from_string(cls, level: str) -> 'LogLevel':
        """Create from string, case-insensitive."""
        return cls[level.upper()]


# ============================================================================
# LOG CONTEXT - Correlation and tracking
# ============================================================================

@dataclass
class LogContext:
    """
    Context for log correlation across one HTTP request.

    request_id follows the X-Request-ID header; household_id is filled in
    once the household row has been inserted.
    """
    request_id: Optional[str] = None
    household_id: Optional[int] = None
    route: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            k: v for k, v in {
                'request_id': self.request_id,
                'household_id': self.household_id,
                'route': self.route,
            }.items() if v is not None
        }


# Active context of the request running on this thread. Loggers are
# process-wide, so request data never lives on the logger itself.
_active_context: ContextVar[Optional[LogContext]] = ContextVar('census_log_context', default=None)


@contextmanager
def bind_log_context(context: LogContext):
    """
    Attach context to every record logged inside the block.

    Example:
        with bind_log_context(LogContext(request_id="a1b2c3d4", route="submit_household")):
            logger.info("started")
    """
    token = _active_context.set(context)
    try:
        yield context
    finally:
        _active_context.reset(token)


def update_log_context(**fields: Any) -> None:
    """Add fields to the active context; no-op outside bind_log_context."""
    current = _active_context.get()
    if current is not None:
        _active_context.set(replace(current, **fields))


# ============================================================================
# COMPONENT CONFIGURATION - Per-component settings
# ============================================================================

@dataclass
class ComponentConfig:
    """Configuration for component-specific logging."""
    component_type: ComponentType
    log_level: LogLevel = LogLevel.INFO
    enable_performance_logging: bool = False


def _configured_level() -> LogLevel:
    """LOG_LEVEL from the environment, DEBUG when DEBUG_MODE=true."""
    if os.getenv('DEBUG_MODE', '').lower() == 'true':
        return LogLevel.DEBUG
    try:
        return LogLevel.from_string(os.getenv('LOG_LEVEL', 'INFO'))
    except KeyError:
        return LogLevel.INFO


# ============================================================================
# JSON FORMATTER - Structured logging for Azure Functions
# ============================================================================

class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging in Azure Functions.
    Outputs logs in a format that Application Insights can automatically parse.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name,
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if hasattr(record, 'custom_dimensions'):
            log_obj['customDimensions'] = record.custom_dimensions

        if record.exc_info:
            log_obj['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': self.formatException(record.exc_info)
            }

        return json.dumps(log_obj, default=str, ensure_ascii=False)


# ============================================================================
# LOGGER FACTORY - Creates component-specific loggers
# ============================================================================

class LoggerFactory:
    """
    Factory for creating component-specific loggers.

    Example:
        logger = LoggerFactory.create_logger(
            ComponentType.REPOSITORY,
            "HouseholdRepository"
        )
        logger.info("Household inserted")
    """

    @classmethod
    def default_config(cls, component_type: ComponentType) -> ComponentConfig:
        level = _configured_level()
        return ComponentConfig(
            component_type=component_type,
            log_level=level,
            enable_performance_logging=component_type in (
                ComponentType.TRIGGER, ComponentType.SERVICE, ComponentType.REPOSITORY
            ),
        )

    @classmethod
    def create_logger(
        cls,
        component_type: ComponentType,
        name: str,
        config: Optional[ComponentConfig] = None
    ) -> logging.Logger:
        """
        Create a logger for a specific component.

        Args:
            component_type: Type of component
            name: Component name (e.g., "HouseholdRepository")
            config: Optional custom configuration

        Returns:
            Configured Python logger
        """
        if config is None:
            config = cls.default_config(component_type)

        logger_name = f"{component_type.value}.{name}"
        logger = logging.getLogger(logger_name)

        log_level = config.log_level.to_python_level()
        logger.setLevel(log_level)

        # One JSON handler per logger, even when create_logger is called repeatedly
        has_json_handler = any(
            isinstance(h.formatter, JSONFormatter) for h in logger.handlers
        )
        if not has_json_handler:
            handler = logging.StreamHandler(sys.stdout)
            handler.setLevel(log_level)
            handler.setFormatter(JSONFormatter())
            logger.addHandler(handler)

        # Propagate to Azure's root logger for Application Insights
        logger.propagate = True

        logger._census_component = (component_type, name)

        if not hasattr(logger, '_context_wrapped'):
            original_log = logger._log

            def log_with_context(level, msg, args, exc_info=None, extra=None, stack_info=False, stacklevel=1):
                """Inject the active request context as custom dimensions."""
                if extra is None:
                    extra = {}

                ctx = _active_context.get()
                ctype, cname = logger._census_component
                custom_dims = ctx.to_dict() if ctx else {}
                custom_dims['component_type'] = ctype.value
                custom_dims['component_name'] = cname

                if 'custom_dimensions' in extra:
                    custom_dims.update(extra['custom_dimensions'])

                extra['custom_dimensions'] = custom_dims

                # +1 for this wrapper
                original_log(level, msg, args, exc_info=exc_info, extra=extra,
                             stack_info=stack_info, stacklevel=stacklevel + 1)

            logger._log = log_with_context
            logger._context_wrapped = True

        return logger


# ============================================================================
# TIMING - Duration logging for store calls and requests
# ============================================================================

@contextmanager
def log_duration(logger: logging.Logger, operation: str, **dimensions):
    """
    Log how long the wrapped block took, in milliseconds.

    Logged at DEBUG on success. Exceptions propagate unchanged; the
    duration is still logged with outcome=failed.
    """
    start = time.perf_counter()
    outcome = "ok"
    try:
        yield
    except Exception:
        outcome = "failed"
        raise
    finally:
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        level = logging.DEBUG if outcome == "ok" else logging.WARNING
        logger.log(
            level,
            f"{operation} {outcome} in {elapsed_ms} ms",
            extra={'custom_dimensions': {
                'operation': operation,
                'duration_ms': elapsed_ms,
                'outcome': outcome,
                **dimensions,
            }}
        )


# ============================================================================
# EXCEPTION DECORATOR - Automatic exception logging with context
# ============================================================================

def log_exceptions(component_type: Optional[ComponentType] = None,
                   component_name: Optional[str] = None,
                   logger: Optional[logging.Logger] = None):
    """
    Decorator to automatically log exceptions with full context.

    Can be used in three ways:
    1. With existing logger: @log_exceptions(logger=my_logger)
    2. With component info: @log_exceptions(ComponentType.SERVICE, "DashboardService")
    3. Simple: @log_exceptions() - uses function module and name

    The exception is always re-raised.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if logger:
                log = logger
            elif component_type and component_name:
                log = LoggerFactory.create_logger(component_type, component_name)
            else:
                log = LoggerFactory.create_logger(
                    ComponentType.SERVICE,
                    func.__module__ or "unknown"
                )

            try:
                return func(*args, **kwargs)
            except Exception as e:
                log.error(
                    f"Exception in {func.__name__}",
                    exc_info=True,
                    extra={
                        'custom_dimensions': {
                            'function_name': func.__name__,
                            'function_module': func.__module__,
                            'exception_type': type(e).__name__,
                            'exception_message': str(e),
                            'traceback': traceback.format_exc()
                        }
                    }
                )
                raise
        return wrapper
    return decorator
