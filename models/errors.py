"""Error models and exception hierarchy for the schedule file validator."""

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Any


# --- File Validation Exception Hierarchy ---

class FileValidationError(Exception):
    """Base exception for failures inside a validation stage."""
    pass


class ContentDecodingError(FileValidationError):
    """File bytes could not be decoded to text."""
    pass


class StructureProbeError(FileValidationError):
    """A structural probe could not inspect the file."""
    pass


class ConfigurationError(FileValidationError):
    """Validation policy or environment configuration is invalid."""
    pass


# --- Error Handling Enums ---

class ErrorSeverity(Enum):
    """Enumeration for error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Enumeration for error categories."""
    CONFIGURATION = "configuration"
    SYSTEM = "system"


# --- Error Context and Result Models ---

@dataclass
class ErrorContext:
    """Captures contextual information about an error occurrence."""
    error_id: str
    timestamp: datetime.datetime
    endpoint: Optional[str]
    method: Optional[str]
    stack_trace: Optional[str]
    request_data: Dict[str, Any]


@dataclass
class ErrorResult:
    """Complete error processing result with context and user-friendly messages."""
    error_code: str
    severity: ErrorSeverity
    category: ErrorCategory
    technical_message: str
    user_message: str
    suggested_actions: List[str]
    context: ErrorContext

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_id": self.context.error_id,
            "error_code": self.error_code,
            "severity": self.severity.value,
            "category": self.category.value,
            "message": self.user_message,
            "suggested_actions": list(self.suggested_actions),
        }
