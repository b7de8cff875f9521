"""Schedule file validation orchestrator."""

import datetime
import logging
from typing import List, Optional

from fastapi import UploadFile

from models.errors import ContentDecodingError, ErrorSeverity
from models.validation import (
    ContentAnalysis,
    ErrorCode,
    FileFormat,
    FileMetadata,
    FileSnapshot,
    FileStructure,
    FileValidationConfig,
    ScheduleFile,
    ValidationError,
    ValidationResult,
    ValidationWarning,
)
from validation.content import ContentClassifier
from validation.decoding import decode_content
from validation.intake import IntakeGate, get_file_extension
from validation.report import ReportAssembler
from validation.security import SecurityScanner
from validation.structure import StructureParser
from validation.university import UniversitySystemDetector


class FileValidator:
    """Main file validation orchestrator."""

    def __init__(self, config: Optional[FileValidationConfig] = None):
        self.config = config or FileValidationConfig()
        self.intake_gate = IntakeGate(self.config)
        self.security_scanner = SecurityScanner(self.config)
        self.structure_parser = StructureParser()
        self.content_classifier = ContentClassifier()
        self.university_detector = UniversitySystemDetector()
        self.report_assembler = ReportAssembler(self.config)

    def take_snapshot(self, file: ScheduleFile) -> FileSnapshot:
        """Decode the file once; an undecodable file yields a snapshot without text."""
        try:
            text, encoding = decode_content(file.content)
        except ContentDecodingError as e:
            logging.warning(f"Could not decode {file.name!r}: {e}")
            text, encoding = None, None

        return FileSnapshot(file=file, extension=get_file_extension(file.name or ""), text=text, encoding=encoding)

    def validate(self, file: ScheduleFile) -> ValidationResult:
        """
        Comprehensive schedule file validation pipeline.

        Args:
            file: The uploaded schedule file

        Returns:
            ValidationResult: Complete validation results. Never raises; every
            failure mode is represented inside the result.
        """
        try:
            return self._run_pipeline(file)
        except Exception as e:
            logging.error(f"File validation error: {e}")
            return self._error_result(file, e)

    async def validate_upload(
        self, file: UploadFile, last_modified: Optional[datetime.datetime] = None
    ) -> ValidationResult:
        """
        Read a FastAPI upload once and validate it.

        Args:
            file: FastAPI UploadFile object
            last_modified: Client-reported modification time, if any

        Returns:
            ValidationResult: Complete validation results
        """
        content: Optional[bytes]
        try:
            content = await file.read()
            await file.seek(0)
        except Exception as e:
            logging.error(f"Failed to read uploaded file {file.filename!r}: {e}")
            content = None

        schedule_file = ScheduleFile(
            name=file.filename or "",
            content=content,
            size_bytes=getattr(file, "size", None),
            declared_mime_type=file.content_type or "",
            last_modified=last_modified,
        )
        return self.validate(schedule_file)

    def _run_pipeline(self, file: ScheduleFile) -> ValidationResult:
        snapshot = self.take_snapshot(file)
        errors: List[ValidationError] = []
        warnings: List[ValidationWarning] = []

        intake = self.intake_gate.check(file)
        errors.extend(intake.errors)
        warnings.extend(intake.warnings)

        security = self.security_scanner.scan(snapshot)
        errors.extend(security.errors)
        warnings.extend(security.warnings)

        structure = self.structure_parser.parse(snapshot)
        errors.extend(structure.errors)
        warnings.extend(structure.warnings)

        content = self.content_classifier.analyze(snapshot)
        warnings.extend(content.warnings)

        university = self.university_detector.detect(snapshot.text)

        metadata = FileMetadata(
            file_name=file.name or "",
            file_size=file.declared_size,
            file_type=snapshot.extension,
            mime_type=file.declared_mime_type or "",
            structure=structure.structure,
            content=content.content,
            last_modified=file.last_modified,
            encoding=snapshot.encoding,
            university=university,
        )

        result = self.report_assembler.assemble(metadata, errors, warnings, security.flags)
        logging.info(
            f"Validated {metadata.file_name!r}: valid={result.is_valid}, score={result.security_score}, "
            f"errors={len(result.errors)}, warnings={len(result.warnings)}"
        )
        return result

    def _error_result(self, file: ScheduleFile, exception: Exception) -> ValidationResult:
        name = getattr(file, "name", "") or ""
        extension = get_file_extension(name) if isinstance(name, str) else ""
        metadata = FileMetadata(
            file_name=str(name),
            file_size=0,
            file_type=extension,
            mime_type="unknown",
            structure=FileStructure(format=FileFormat.from_extension(extension), corrupted=True),
            content=ContentAnalysis(),
        )
        errors = [
            ValidationError(
                code=ErrorCode.VALIDATION_FAILED,
                message=f"Validation error: {exception}",
                severity=ErrorSeverity.HIGH,
                recoverable=True,
                suggestion="Try uploading the file again",
            )
        ]
        return self.report_assembler.assemble(metadata, errors, [], [])


def validate(file: ScheduleFile, config: Optional[FileValidationConfig] = None) -> ValidationResult:
    """Validate one schedule file with the given (or default) policy."""
    return FileValidator(config).validate(file)
