"""Fold stage outputs into the final validation report."""

from typing import List, Optional, Sequence

from models.errors import ErrorSeverity
from models.validation import (
    ContentAnalysis,
    ErrorCode,
    FileMetadata,
    FileValidationConfig,
    SecurityFlag,
    UniversityDetection,
    ValidationError,
    ValidationResult,
    ValidationWarning,
    WarningImpact,
)

ERROR_DEDUCTIONS = {
    ErrorSeverity.CRITICAL: 50,
    ErrorSeverity.HIGH: 25,
    ErrorSeverity.MEDIUM: 10,
    ErrorSeverity.LOW: 5,
}

WARNING_DEDUCTIONS = {
    WarningImpact.SIGNIFICANT: 15,
    WarningImpact.MODERATE: 10,
    WarningImpact.MINOR: 5,
}

SECURITY_FLAG_DEDUCTION = 10
BLOCKING_SEVERITIES = (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL)
RECOMMEND_EXPORT_BELOW_CONFIDENCE = 0.5


def calculate_security_score(
    errors: Sequence[ValidationError], warnings: Sequence[ValidationWarning], security_flags: Sequence[SecurityFlag]
) -> int:
    """Advisory 0-100 score; callers gate on validity, not on this number."""
    score = 100
    score -= sum(ERROR_DEDUCTIONS[error.severity] for error in errors)
    score -= sum(WARNING_DEDUCTIONS[warning.impact] for warning in warnings)
    score -= len(set(security_flags)) * SECURITY_FLAG_DEDUCTION
    return max(0, min(100, score))


def is_valid(errors: Sequence[ValidationError]) -> bool:
    return not any(error.severity in BLOCKING_SEVERITIES for error in errors)


def generate_recommendations(
    file_size: int,
    content: ContentAnalysis,
    university: Optional[UniversityDetection],
    errors: Sequence[ValidationError],
    config: FileValidationConfig,
) -> List[str]:
    recommendations = []

    if content.confidence < RECOMMEND_EXPORT_BELOW_CONFIDENCE:
        recommendations.append(
            "Consider using a CSV export from your student information system for better compatibility"
        )

    if university is not None:
        recommendations.append(f"Detected {university.name} format - using optimized parser")

    if file_size > config.large_file_threshold:
        recommendations.append(
            "Large file detected - consider removing unnecessary columns or splitting into multiple files"
        )

    if not content.has_time_data:
        recommendations.append("Include time information (start/end times) for better schedule integration")

    if not content.has_instructor_data:
        recommendations.append("Include instructor information if available for complete course details")

    if any(error.code == ErrorCode.UNSUPPORTED_FILE_TYPE for error in errors):
        recommendations.append("Export your schedule as CSV, Excel, or PDF for best results")

    return recommendations


class ReportAssembler:
    """Builds the ValidationResult from the metadata and accumulated findings."""

    def __init__(self, config: FileValidationConfig):
        self.config = config

    def assemble(
        self,
        metadata: FileMetadata,
        errors: Sequence[ValidationError],
        warnings: Sequence[ValidationWarning],
        security_flags: Sequence[SecurityFlag],
    ) -> ValidationResult:
        return ValidationResult(
            is_valid=is_valid(errors),
            errors=list(errors),
            warnings=list(warnings),
            metadata=metadata,
            recommendations=generate_recommendations(
                metadata.file_size, metadata.content, metadata.university, errors, self.config
            ),
            security_score=calculate_security_score(errors, warnings, security_flags),
        )
