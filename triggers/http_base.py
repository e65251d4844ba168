"""
HTTP Trigger Base Class.

Abstract base class for all Azure Functions HTTP triggers providing consistent
infrastructure patterns for request/response handling.

Specialized Trigger Types:
    BaseHttpTrigger: Generic HTTP endpoint
    SystemMonitoringTrigger: Health and diagnostics

Error mapping (handle_request):
    BusinessLogicError   -> status from its ErrorCode (400 / 500 / 503)
    ValueError           -> 400
    any other Exception  -> 500

Exports:
    BaseHttpTrigger: Base class for HTTP triggers
    SystemMonitoringTrigger: Base class for monitoring
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, Union, List
import uuid
import json
from datetime import datetime, timezone

import azure.functions as func

from core.errors import ErrorCode, get_http_status_code
from exceptions import BusinessLogicError, InvalidRequestBody
from util_logger import LoggerFactory, ComponentType, LogContext, bind_log_context


ResponseData = Union[Dict[str, Any], List[Any]]


class BaseHttpTrigger(ABC):
    """
    Abstract base class for Azure Functions HTTP triggers.

    Provides consistent infrastructure for HTTP request/response handling,
    body extraction, error handling, and logging patterns.
    """

    # Status for a successful response; creation endpoints override with 201
    success_status_code: int = 200

    # Merge request_id/timestamp into dict responses
    add_envelope: bool = True

    def __init__(self, trigger_name: str):
        """
        Args:
            trigger_name: Name of the trigger for logging (e.g., "submit_household")
        """
        self.trigger_name = trigger_name
        self.logger = LoggerFactory.create_logger(ComponentType.TRIGGER, f"HttpTrigger.{trigger_name}")

    # ========================================================================
    # ABSTRACT METHODS - Must be implemented by concrete triggers
    # ========================================================================

    @abstractmethod
    def process_request(self, req: func.HttpRequest) -> ResponseData:
        """
        Process the HTTP request and return response data.

        Business failures are raised, never returned; the base class turns
        them into error responses.

        Returns:
            Dict (gets request_id/timestamp added) or list (sent as is)
        """
        pass

    @abstractmethod
    def get_allowed_methods(self) -> List[str]:
        """Return list of allowed HTTP methods for this trigger."""
        pass

    def get_status_code(self, data: ResponseData) -> int:
        """Status for a successful process_request result."""
        return self.success_status_code

    # ========================================================================
    # CONCRETE INFRASTRUCTURE METHODS
    # ========================================================================

    def handle_request(self, req: func.HttpRequest) -> func.HttpResponse:
        """
        Main entry point for HTTP request handling.

        Provides consistent error handling, logging, and response formatting.
        The request id is bound to the log context for the duration of the
        request, so every record logged underneath carries it.
        """
        request_id = self._get_request_id(req)

        with bind_log_context(LogContext(request_id=request_id, route=self.trigger_name)):
            return self._handle(req, request_id)

    def _handle(self, req: func.HttpRequest, request_id: str) -> func.HttpResponse:
        self.logger.info(
            f"[{self.trigger_name}] Request {request_id} started: {req.method} {req.url}"
        )

        try:
            if req.method not in self.get_allowed_methods():
                return self._create_error_response(
                    error=f"Method {req.method} not allowed. Allowed: {', '.join(self.get_allowed_methods())}",
                    error_code="METHOD_NOT_ALLOWED",
                    status_code=405,
                    request_id=request_id
                )

            response_data = self.process_request(req)
            response = self._create_success_response(
                response_data, request_id, self.get_status_code(response_data)
            )

            self.logger.info(
                f"[{self.trigger_name}] Request {request_id} completed with {response.status_code}"
            )
            return response

        except BusinessLogicError as e:
            status_code = get_http_status_code(e.error_code)
            if status_code >= 500:
                self.logger.error(
                    f"[{self.trigger_name}] {e.error_code.value}: {e.message}",
                    extra={'custom_dimensions': {'error_code': e.error_code.value, **e.to_response_fields()}}
                )
            else:
                self.logger.warning(f"[{self.trigger_name}] Rejected ({e.error_code.value}): {e.message}")

            return self._create_error_response(
                error=e.message,
                error_code=e.error_code.value,
                status_code=status_code,
                request_id=request_id,
                extra_fields=e.to_response_fields()
            )

        except ValueError as e:
            self.logger.warning(f"[{self.trigger_name}] Client error: {e}")
            return self._create_error_response(
                error=str(e),
                error_code=ErrorCode.VALIDATION_ERROR.value,
                status_code=400,
                request_id=request_id
            )

        except Exception as e:
            self.logger.error(f"[{self.trigger_name}] Internal error: {e}", exc_info=True)
            return self._create_error_response(
                error="Internal server error",
                error_code=ErrorCode.UNEXPECTED_ERROR.value,
                status_code=500,
                request_id=request_id
            )

    # ========================================================================
    # UTILITY METHODS FOR SUBCLASSES
    # ========================================================================

    def extract_json_body(self, req: func.HttpRequest, required: bool = True) -> Optional[Any]:
        """
        Extract and parse JSON request body.

        Raises:
            InvalidRequestBody: If body is required but missing or invalid JSON
        """
        try:
            body = req.get_json()
        except ValueError as e:
            raise InvalidRequestBody(f"Invalid JSON in request body: {e}") from e

        if body is None and required:
            raise InvalidRequestBody("Request body is required")

        return body

    # ========================================================================
    # PRIVATE INFRASTRUCTURE METHODS
    # ========================================================================

    def _get_request_id(self, req: func.HttpRequest) -> str:
        """Caller-supplied X-Request-ID, or a fresh short id."""
        incoming = req.headers.get("X-Request-ID") if req.headers else None
        return incoming or str(uuid.uuid4())[:8]

    def _create_success_response(self, data: ResponseData, request_id: str,
                                 status_code: int = 200) -> func.HttpResponse:
        if isinstance(data, dict) and self.add_envelope:
            data = {
                **data,
                "request_id": request_id,
                "timestamp": datetime.now(timezone.utc).isoformat()
            }

        return func.HttpResponse(
            json.dumps(data, default=str, ensure_ascii=False),
            status_code=status_code,
            mimetype="application/json",
            headers={"X-Request-ID": request_id}
        )

    def _create_error_response(self, error: str, error_code: str, status_code: int,
                               request_id: str,
                               extra_fields: Optional[Dict[str, Any]] = None) -> func.HttpResponse:
        response_data = {
            "success": False,
            "error": error,
            "error_code": error_code,
            **(extra_fields or {}),
            "request_id": request_id,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

        return func.HttpResponse(
            json.dumps(response_data, default=str, ensure_ascii=False),
            status_code=status_code,
            mimetype="application/json",
            headers={"X-Request-ID": request_id}
        )


# ============================================================================
# SPECIALIZED BASE CLASSES FOR COMMON PATTERNS
# ============================================================================

class SystemMonitoringTrigger(BaseHttpTrigger):
    """Base class for system monitoring triggers (health, diagnostics)."""

    def get_system_timestamp(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def check_component_health(
        self,
        component_name: str,
        check_function,
        description: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Standard pattern for checking component health.

        Status determination (in priority order):
        1. If check_function raises exception -> "unhealthy"
        2. If result contains "_status" key -> use that value (explicit override)
        3. If result contains "error" key with truthy value -> "unhealthy"
        4. Otherwise -> "healthy"
        """
        try:
            result = check_function()

            if isinstance(result, dict):
                if "_status" in result:
                    status = result.pop("_status")
                elif result.get("error"):
                    status = "unhealthy"
                else:
                    status = "healthy"
            else:
                status = "healthy"

            return {
                "component": component_name,
                "description": description or f"{component_name} health check",
                "status": status,
                "details": result,
                "checked_at": self.get_system_timestamp()
            }
        except Exception as e:
            self.logger.warning(f"Health check {component_name} failed: {e}")
            return {
                "component": component_name,
                "description": description or f"{component_name} health check",
                "status": "unhealthy",
                "error": str(e),
                "checked_at": self.get_system_timestamp()
            }
