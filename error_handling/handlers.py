"""Error handling for the HTTP surface of the validator."""

import datetime
import json
import logging
import re
import traceback
import uuid
from typing import Any, Callable, Dict, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from models.errors import (
    ConfigurationError,
    ErrorCategory,
    ErrorContext,
    ErrorResult,
    ErrorSeverity,
)

MAX_TECHNICAL_MESSAGE_LENGTH = 500
BASE64_PATTERN = re.compile(r"data:[^;]+;base64,[A-Za-z0-9+/]{50,}={0,2}|[A-Za-z0-9+/]{100,}={0,2}")
LONG_CONTENT_PATTERN = re.compile(r"(?=.*[A-Za-z].*[A-Za-z].*[A-Za-z])\S{200,}")


class ErrorContextCapture:
    """Captures contextual information for error tracking and debugging."""

    def capture(
        self,
        exception: Exception,
        request: Optional[Request] = None,
        additional_data: Optional[Dict[str, Any]] = None,
    ) -> ErrorContext:
        """
        Capture context from an exception and, when available, the request.

        Args:
            exception: The exception that occurred
            request: FastAPI Request object
            additional_data: Additional context data

        Returns:
            ErrorContext: Captured context information
        """
        request_data = dict(additional_data or {})
        endpoint = None
        method = None

        if request is not None:
            endpoint = request.url.path
            method = request.method
            request_data.update({
                "client_host": request.client.host if request.client else None,
                "content_type": request.headers.get("content-type"),
            })

        return ErrorContext(
            error_id=uuid.uuid4().hex,
            timestamp=datetime.datetime.now(),
            endpoint=endpoint,
            method=method,
            stack_trace="".join(traceback.format_exception(type(exception), exception, exception.__traceback__)),
            request_data=request_data,
        )


class ErrorMessageTranslator:
    """Translates technical error messages to user-friendly messages with suggested actions."""

    def __init__(self):
        self._translation_rules = {
            ConfigurationError: {
                "user_message": "There's a configuration issue. Please contact support.",
                "suggested_actions": [
                    "Contact technical support",
                    "Report this error with the error ID",
                ],
                "severity": ErrorSeverity.CRITICAL,
                "category": ErrorCategory.CONFIGURATION,
            },
            Exception: {
                "user_message": "An unexpected error occurred. Please try again.",
                "suggested_actions": [
                    "Try your request again",
                    "Contact support with the error ID if needed",
                ],
                "severity": ErrorSeverity.HIGH,
                "category": ErrorCategory.SYSTEM,
            },
        }

    def translate_error(self, exception: Exception, context: ErrorContext) -> ErrorResult:
        """
        Translate a technical error to a user-friendly error result.

        Args:
            exception: The exception to translate
            context: Error context information

        Returns:
            ErrorResult: User-friendly error result
        """
        rule = self._get_translation_rule(exception)

        return ErrorResult(
            error_code=type(exception).__name__,
            severity=rule["severity"],
            category=rule["category"],
            technical_message=self.sanitize_technical_message(str(exception)),
            user_message=rule["user_message"],
            suggested_actions=list(rule["suggested_actions"]),
            context=context,
        )

    def _get_translation_rule(self, exception: Exception) -> Dict[str, Any]:
        """Get the most specific translation rule for an exception."""
        for exception_type in type(exception).__mro__:
            if exception_type in self._translation_rules:
                return self._translation_rules[exception_type]
        return self._translation_rules[Exception]

    def sanitize_technical_message(self, message: str) -> str:
        """Strip embedded file content from a message before it is logged."""
        message = BASE64_PATTERN.sub("[BASE64_CONTENT_TRUNCATED]", message)
        message = LONG_CONTENT_PATTERN.sub("[LONG_CONTENT_TRUNCATED]", message)

        if len(message) > MAX_TECHNICAL_MESSAGE_LENGTH:
            message = message[:MAX_TECHNICAL_MESSAGE_LENGTH] + "... [TRUNCATED]"

        return message


class ErrorHandler:
    """Main error handler that orchestrates error processing."""

    def __init__(self):
        self.context_capture = ErrorContextCapture()
        self.message_translator = ErrorMessageTranslator()

    def handle_error(
        self,
        exception: Exception,
        request: Optional[Request] = None,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> ErrorResult:
        context = self.context_capture.capture(exception, request, additional_context)
        error_result = self.message_translator.translate_error(exception, context)
        self._log_error(error_result)
        return error_result

    def _log_error(self, error_result: ErrorResult) -> None:
        """Log error with appropriate level based on severity."""
        log_data = {
            "error_id": error_result.context.error_id,
            "error_code": error_result.error_code,
            "category": error_result.category.value,
            "severity": error_result.severity.value,
            "endpoint": error_result.context.endpoint,
            "technical_message": error_result.technical_message,
        }

        if error_result.severity == ErrorSeverity.CRITICAL:
            logging.critical(f"Critical error: {json.dumps(log_data)}")
        elif error_result.severity == ErrorSeverity.HIGH:
            logging.error(f"High severity error: {json.dumps(log_data)}")
        elif error_result.severity == ErrorSeverity.MEDIUM:
            logging.warning(f"Medium severity error: {json.dumps(log_data)}")
        else:
            logging.info(f"Low severity error: {json.dumps(log_data)}")


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """FastAPI middleware for centralized error handling."""

    def __init__(self, app, error_handler: ErrorHandler):
        super().__init__(app)
        self.error_handler = error_handler

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            error_result = self.error_handler.handle_error(e, request)
            return JSONResponse(
                status_code=500,
                content={"error": True, **error_result.to_dict()},
            )
