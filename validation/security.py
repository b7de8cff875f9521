"""Heuristic security scanning of decoded file content."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Sequence

from models.errors import ContentDecodingError, ErrorSeverity
from models.validation import (
    ErrorCode,
    FileSnapshot,
    FileValidationConfig,
    SecurityFlag,
    ValidationError,
    ValidationWarning,
    WarningCode,
    WarningImpact,
)
from validation.patterns import BINARY_CHARACTER_PATTERN, DANGEROUS_CONTENT_PATTERNS, SPECIAL_CHARACTER_PATTERN


@dataclass
class SecurityScanResult:
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationWarning] = field(default_factory=list)
    flags: List[SecurityFlag] = field(default_factory=list)

    def add_flag(self, flag: SecurityFlag) -> None:
        if flag not in self.flags:
            self.flags.append(flag)


def special_character_ratio(text: str) -> float:
    if not text:
        return 0.0
    return len(SPECIAL_CHARACTER_PATTERN.findall(text)) / len(text)


def binary_character_ratio(text: str) -> float:
    if not text:
        return 0.0
    return len(BINARY_CHARACTER_PATTERN.findall(text)) / len(text)


def find_dangerous_pattern(text: str, patterns: Sequence[Pattern] = DANGEROUS_CONTENT_PATTERNS) -> Optional[Pattern]:
    """Return the first pattern, in table order, found in the text."""
    for pattern in patterns:
        if pattern.search(text):
            return pattern
    return None


class SecurityScanner:
    """Scans decoded content for scripts, markup injection and encoding anomalies."""

    def __init__(self, config: FileValidationConfig, patterns: Sequence[Pattern] = DANGEROUS_CONTENT_PATTERNS):
        self.config = config
        self.patterns = tuple(patterns)

    def scan(self, snapshot: FileSnapshot) -> SecurityScanResult:
        """
        Scan file content for security threats.

        A failure to read or decode the content is downgraded to a
        SECURITY_SCAN_FAILED warning; this method never raises.

        Args:
            snapshot: The decoded file snapshot

        Returns:
            SecurityScanResult: Errors, warnings and raised security flags
        """
        result = SecurityScanResult()

        try:
            text = snapshot.text
            if text is None:
                raise ContentDecodingError("File content could not be decoded for scanning")

            matched = find_dangerous_pattern(text, self.patterns)
            if matched is not None:
                logging.warning(f"Dangerous content pattern detected in {snapshot.file.name!r}: {matched.pattern}")
                result.errors.append(
                    ValidationError(
                        code=ErrorCode.MALICIOUS_CONTENT,
                        message="File contains potentially malicious content",
                        severity=ErrorSeverity.CRITICAL,
                        recoverable=False,
                        suggestion="Do not upload files with executable code or scripts",
                    )
                )
                result.add_flag(SecurityFlag.MALICIOUS_CONTENT)

            if special_character_ratio(text) > self.config.special_char_ratio_threshold:
                result.warnings.append(
                    ValidationWarning(
                        code=WarningCode.HIGH_SPECIAL_CHAR_RATIO,
                        message="File contains unusually high ratio of special characters",
                        impact=WarningImpact.MODERATE,
                        suggestion="Verify file encoding and content integrity",
                    )
                )
                result.add_flag(SecurityFlag.UNUSUAL_ENCODING)

            if snapshot.extension in self.config.text_extensions:
                if binary_character_ratio(text) > self.config.binary_ratio_threshold:
                    result.warnings.append(
                        ValidationWarning(
                            code=WarningCode.BINARY_IN_TEXT_FILE,
                            message="Text file contains binary data",
                            impact=WarningImpact.MODERATE,
                            suggestion="File may be corrupted or incorrectly formatted",
                        )
                    )
                    result.add_flag(SecurityFlag.BINARY_CONTENT)

        except Exception as e:
            logging.warning(f"Security scan failed: {e}")
            result.warnings.append(
                ValidationWarning(
                    code=WarningCode.SECURITY_SCAN_FAILED,
                    message="Could not complete security scan",
                    impact=WarningImpact.MODERATE,
                    suggestion="Manual review recommended",
                )
            )
            result.add_flag(SecurityFlag.SCAN_FAILED)

        return result
