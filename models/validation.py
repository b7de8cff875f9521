"""Validation models and enums for schedule file processing."""

import datetime
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Tuple

from models.errors import ErrorSeverity

MB = 1024 * 1024

# Per-extension upload caps in bytes
DEFAULT_FILE_SIZE_LIMITS = {
    "csv": 50 * MB,
    "pdf": 100 * MB,
    "xlsx": 25 * MB,
    "xls": 25 * MB,
    "ics": 10 * MB,
    "json": 10 * MB,
    "txt": 10 * MB,
}

DEFAULT_ALLOWED_MIME_TYPES = {
    "text/csv",
    "application/pdf",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
    "text/calendar",
    "application/json",
    "text/plain",
    "application/octet-stream",  # browsers often fall back to this
}

SUPPORTED_EXTENSIONS = ("csv", "pdf", "xlsx", "xls", "ics", "json", "txt")
TEXT_EXTENSIONS = ("csv", "txt", "json", "ics")


def _to_primitive(value: Any) -> Any:
    """Convert models to JSON-ready primitives."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime.datetime):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_primitive(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, (list, tuple)):
        return [_to_primitive(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _to_primitive(item) for key, item in value.items()}
    return value


class FileFormat(Enum):
    """Structural format of an uploaded schedule file."""
    CSV = "csv"
    PDF = "pdf"
    XLSX = "xlsx"
    XLS = "xls"
    ICS = "ics"
    JSON = "json"
    TXT = "txt"
    UNKNOWN = "unknown"

    @classmethod
    def from_extension(cls, extension: str) -> "FileFormat":
        try:
            return cls((extension or "").lower())
        except ValueError:
            return cls.UNKNOWN


class WarningImpact(Enum):
    """Enumeration for warning impact levels."""
    MINOR = "minor"
    MODERATE = "moderate"
    SIGNIFICANT = "significant"


class ErrorCode(Enum):
    INVALID_FILENAME = "INVALID_FILENAME"
    UNSUPPORTED_FILE_TYPE = "UNSUPPORTED_FILE_TYPE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    EMPTY_FILE = "EMPTY_FILE"
    SUSPICIOUS_FILENAME = "SUSPICIOUS_FILENAME"
    MALICIOUS_CONTENT = "MALICIOUS_CONTENT"
    CORRUPTED_FILE = "CORRUPTED_FILE"
    STRUCTURE_VALIDATION_FAILED = "STRUCTURE_VALIDATION_FAILED"
    VALIDATION_FAILED = "VALIDATION_FAILED"


class WarningCode(Enum):
    UNEXPECTED_MIME_TYPE = "UNEXPECTED_MIME_TYPE"
    SECURITY_SCAN_FAILED = "SECURITY_SCAN_FAILED"
    HIGH_SPECIAL_CHAR_RATIO = "HIGH_SPECIAL_CHAR_RATIO"
    BINARY_IN_TEXT_FILE = "BINARY_IN_TEXT_FILE"
    NO_DATA_ROWS = "NO_DATA_ROWS"
    LOW_CONFIDENCE_SCHEDULE = "LOW_CONFIDENCE_SCHEDULE"
    MISSING_TIME_DATA = "MISSING_TIME_DATA"
    CONTENT_ANALYSIS_FAILED = "CONTENT_ANALYSIS_FAILED"


class PatternType(Enum):
    """Kinds of schedule content a detector can recognise."""
    COURSE_CODE = "course_code"
    TIME_FORMAT = "time_format"
    DAY_FORMAT = "day_format"
    INSTRUCTOR_NAME = "instructor_name"
    LOCATION = "location"
    CREDIT_HOURS = "credit_hours"


class SecurityFlag(Enum):
    """Internal markers raised by the security scan, used only for scoring."""
    MALICIOUS_CONTENT = "malicious_content"
    UNUSUAL_ENCODING = "unusual_encoding"
    BINARY_CONTENT = "binary_content"
    SCAN_FAILED = "scan_failed"


@dataclass(frozen=True)
class ValidationError:
    """A finding that blocks the file from import when high or critical."""
    code: ErrorCode
    message: str
    severity: ErrorSeverity
    recoverable: bool
    field: Optional[str] = None
    suggestion: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _to_primitive(self)


@dataclass(frozen=True)
class ValidationWarning:
    """An advisory finding that never blocks validity."""
    code: WarningCode
    message: str
    impact: WarningImpact
    suggestion: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _to_primitive(self)


# --- Structure descriptors, one variant per format ---

@dataclass(frozen=True)
class FileStructure:
    """Common structure fields; used as-is for unknown formats and failed probes."""
    format: FileFormat = FileFormat.UNKNOWN
    has_header: bool = False
    encoding: str = "utf-8"
    corrupted: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return _to_primitive(self)


@dataclass(frozen=True)
class CsvStructure(FileStructure):
    format: FileFormat = FileFormat.CSV
    row_count: int = 0
    column_count: int = 0
    delimiter: str = ","


@dataclass(frozen=True)
class PdfStructure(FileStructure):
    format: FileFormat = FileFormat.PDF
    encoding: str = "binary"
    page_count: int = 0


@dataclass(frozen=True)
class SheetInfo:
    name: str
    row_count: int
    column_count: int
    has_data: bool
    likely_schedule_sheet: bool


@dataclass(frozen=True)
class SpreadsheetStructure(FileStructure):
    format: FileFormat = FileFormat.XLSX
    encoding: str = "binary"
    sheets: List[SheetInfo] = field(default_factory=list)


@dataclass(frozen=True)
class CalendarStructure(FileStructure):
    format: FileFormat = FileFormat.ICS
    row_count: int = 0


@dataclass(frozen=True)
class JsonStructure(FileStructure):
    format: FileFormat = FileFormat.JSON
    row_count: int = 0


@dataclass(frozen=True)
class TextStructure(FileStructure):
    format: FileFormat = FileFormat.TXT
    row_count: int = 0


# --- Content classification ---

@dataclass(frozen=True)
class DetectedPattern:
    type: PatternType
    pattern: str
    examples: List[str]
    confidence: float
    count: int


@dataclass(frozen=True)
class ContentAnalysis:
    """How strongly the decoded text looks like schedule data."""
    is_empty: bool = False
    has_schedule_data: bool = False
    has_course_data: bool = False
    has_time_data: bool = False
    has_instructor_data: bool = False
    confidence: float = 0.0
    patterns: List[DetectedPattern] = field(default_factory=list)
    sample_data: List[Any] = field(default_factory=list)


@dataclass(frozen=True)
class UniversityDetection:
    """Likely origin system (LMS / SIS) of an exported schedule."""
    confidence: float
    indicators: List[str]
    name: Optional[str] = None
    suggested_format: Optional[str] = None


@dataclass(frozen=True)
class FileMetadata:
    file_name: str
    file_size: int
    file_type: str
    mime_type: str
    structure: FileStructure
    content: ContentAnalysis
    last_modified: Optional[datetime.datetime] = None
    encoding: Optional[str] = None
    university: Optional[UniversityDetection] = None


@dataclass(frozen=True)
class ValidationResult:
    """Result of schedule file validation containing all validation metadata."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[ValidationWarning]
    metadata: FileMetadata
    recommendations: List[str]
    security_score: int

    def has_error(self, code: ErrorCode) -> bool:
        return any(error.code == code for error in self.errors)

    def has_warning(self, code: WarningCode) -> bool:
        return any(warning.code == code for warning in self.warnings)

    def to_dict(self) -> Dict[str, Any]:
        return _to_primitive(self)


# --- Inputs ---

@dataclass(frozen=True)
class ScheduleFile:
    """A user-supplied file as received from the upload surface."""
    name: str
    content: Optional[bytes]
    size_bytes: Optional[int] = None
    declared_mime_type: str = ""
    last_modified: Optional[datetime.datetime] = None

    @property
    def raw_size(self) -> int:
        return len(self.content or b"")

    @property
    def declared_size(self) -> int:
        """Declared size, falling back to the raw byte length when not supplied."""
        return self.size_bytes if self.size_bytes is not None else self.raw_size


@dataclass(frozen=True)
class FileSnapshot:
    """The file read once: bytes plus decoded text shared by every stage."""
    file: ScheduleFile
    extension: str
    text: Optional[str]
    encoding: Optional[str]

    @property
    def content(self) -> bytes:
        return self.file.content or b""


@dataclass
class FileValidationConfig:
    """Configuration for file validation parameters."""
    size_limits: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_FILE_SIZE_LIMITS))
    allowed_mime_types: Set[str] = field(default_factory=lambda: set(DEFAULT_ALLOWED_MIME_TYPES))
    supported_extensions: Tuple[str, ...] = SUPPORTED_EXTENSIONS
    text_extensions: Tuple[str, ...] = TEXT_EXTENSIONS
    special_char_ratio_threshold: float = 0.1
    binary_ratio_threshold: float = 0.01
    large_file_threshold: int = 10 * MB

    def size_limit_for(self, extension: str) -> int:
        """Cap for an extension; unknown extensions share the txt cap."""
        fallback = self.size_limits.get("txt", DEFAULT_FILE_SIZE_LIMITS["txt"])
        return self.size_limits.get((extension or "").lower(), fallback)
