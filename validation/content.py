"""Schedule content classification over decoded file text.

Each detector is a pure function ``(text) -> Optional[DetectedPattern]`` so
detectors can be added and tested in isolation. Boolean indicators use their
own, broader regex sets and feed the overall confidence score.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Pattern, Sequence

from models.errors import ContentDecodingError
from models.validation import (
    ContentAnalysis,
    DetectedPattern,
    FileSnapshot,
    PatternType,
    ValidationWarning,
    WarningCode,
    WarningImpact,
)
from validation.decoding import load_json, split_lines
from validation.patterns import (
    COURSE_CODE_PATTERN,
    COURSE_INDICATORS,
    DAY_TOKEN_PATTERN,
    INSTRUCTOR_INDICATORS,
    SCHEDULE_INDICATORS,
    TIME_INDICATORS,
    TIME_PATTERN,
)

MAX_EXAMPLES = 3
SAMPLE_LINE_COUNT = 5
SAMPLE_CSV_COLUMNS = 10
SAMPLE_JSON_ITEMS = 3
SAMPLE_JSON_DEPTH = 10
SAMPLE_DEPTH_PLACEHOLDER = "..."
LOW_CONFIDENCE_THRESHOLD = 0.3

# Indicator weights; the remaining 0.1 comes from mean pattern confidence
SCHEDULE_WEIGHT = 0.3
COURSE_WEIGHT = 0.3
TIME_WEIGHT = 0.2
INSTRUCTOR_WEIGHT = 0.1
PATTERN_WEIGHT = 0.1


def _distinct_examples(matches: Sequence[str], limit: int = MAX_EXAMPLES) -> List[str]:
    examples: List[str] = []
    for match in matches:
        if match not in examples:
            examples.append(match)
            if len(examples) == limit:
                break
    return examples


def _detect(
    text: str, regex: Pattern, pattern_type: PatternType, label: str, saturation: int
) -> Optional[DetectedPattern]:
    matches = [match.group(0) for match in regex.finditer(text)]
    if not matches:
        return None
    return DetectedPattern(
        type=pattern_type,
        pattern=label,
        examples=_distinct_examples(matches),
        confidence=min(1.0, len(matches) / saturation),
        count=len(matches),
    )


def detect_course_codes(text: str) -> Optional[DetectedPattern]:
    """Course codes such as ``CS 301`` or ``MATH1010L``; saturates at 5 matches."""
    return _detect(text, COURSE_CODE_PATTERN, PatternType.COURSE_CODE, "DEPT NNN[L]", 5)


def detect_time_formats(text: str) -> Optional[DetectedPattern]:
    """12-hour clock times such as ``9:00 AM``; saturates at 10 matches."""
    return _detect(text, TIME_PATTERN, PatternType.TIME_FORMAT, "HH:MM AM/PM", 10)


def detect_day_tokens(text: str) -> Optional[DetectedPattern]:
    """Day names, abbreviations and single-letter codes; saturates at 20 matches."""
    return _detect(text, DAY_TOKEN_PATTERN, PatternType.DAY_FORMAT, "Day abbreviations", 20)


DEFAULT_DETECTORS: Sequence[Callable[[str], Optional[DetectedPattern]]] = (
    detect_course_codes,
    detect_time_formats,
    detect_day_tokens,
)


def detect_content_patterns(
    text: str, detectors: Sequence[Callable[[str], Optional[DetectedPattern]]] = DEFAULT_DETECTORS
) -> List[DetectedPattern]:
    patterns = []
    for detector in detectors:
        detected = detector(text)
        if detected is not None:
            patterns.append(detected)
    return patterns


def _any_match(text: str, indicators: Sequence[Pattern]) -> bool:
    return any(indicator.search(text) for indicator in indicators)


def has_schedule_indicators(text: str) -> bool:
    return _any_match(text, SCHEDULE_INDICATORS)


def has_course_indicators(text: str) -> bool:
    return _any_match(text, COURSE_INDICATORS)


def has_time_indicators(text: str) -> bool:
    return _any_match(text, TIME_INDICATORS)


def has_instructor_indicators(text: str) -> bool:
    return _any_match(text, INSTRUCTOR_INDICATORS)


def calculate_content_confidence(
    has_schedule_data: bool,
    has_course_data: bool,
    has_time_data: bool,
    has_instructor_data: bool,
    patterns: Sequence[DetectedPattern],
) -> float:
    score = 0.0
    if has_schedule_data:
        score += SCHEDULE_WEIGHT
    if has_course_data:
        score += COURSE_WEIGHT
    if has_time_data:
        score += TIME_WEIGHT
    if has_instructor_data:
        score += INSTRUCTOR_WEIGHT

    if patterns:
        score += PATTERN_WEIGHT * (sum(p.confidence for p in patterns) / len(patterns))

    return min(1.0, score)


def _limit_depth(value: Any, depth: int) -> Any:
    """Replace containers nested deeper than ``depth`` with a placeholder."""
    if isinstance(value, (list, dict)) and depth <= 0:
        return SAMPLE_DEPTH_PLACEHOLDER
    if isinstance(value, list):
        return [_limit_depth(item, depth - 1) for item in value]
    if isinstance(value, dict):
        return {key: _limit_depth(item, depth - 1) for key, item in value.items()}
    return value


def extract_sample_data(text: str, extension: str) -> List[Any]:
    """First few records, shaped for the importer's preview."""
    lines = split_lines(text)[:SAMPLE_LINE_COUNT]

    if extension == "csv":
        return [line.split(",")[:SAMPLE_CSV_COLUMNS] for line in lines]

    if extension == "json":
        try:
            parsed = load_json(text)
        except (ValueError, RecursionError):
            return []
        records = parsed[:SAMPLE_JSON_ITEMS] if isinstance(parsed, list) else [parsed]
        return [_limit_depth(record, SAMPLE_JSON_DEPTH) for record in records]

    return lines


@dataclass
class ContentResult:
    content: ContentAnalysis
    warnings: List[ValidationWarning] = field(default_factory=list)


class ContentClassifier:
    """Estimates whether decoded text contains schedule data."""

    def __init__(self, detectors: Sequence[Callable[[str], Optional[DetectedPattern]]] = DEFAULT_DETECTORS):
        self.detectors = tuple(detectors)

    def classify(self, text: str, extension: str) -> ContentAnalysis:
        if not text or not text.strip():
            return ContentAnalysis(is_empty=True)

        patterns = detect_content_patterns(text, self.detectors)
        has_schedule_data = has_schedule_indicators(text)
        has_course_data = has_course_indicators(text)
        has_time_data = has_time_indicators(text)
        has_instructor_data = has_instructor_indicators(text)

        return ContentAnalysis(
            is_empty=False,
            has_schedule_data=has_schedule_data,
            has_course_data=has_course_data,
            has_time_data=has_time_data,
            has_instructor_data=has_instructor_data,
            confidence=calculate_content_confidence(
                has_schedule_data, has_course_data, has_time_data, has_instructor_data, patterns
            ),
            patterns=patterns,
            sample_data=extract_sample_data(text, extension),
        )

    def analyze(self, snapshot: FileSnapshot) -> ContentResult:
        """
        Classify the snapshot's text and derive content warnings.

        Args:
            snapshot: The decoded file snapshot

        Returns:
            ContentResult: Content analysis and warnings; failures become a
            CONTENT_ANALYSIS_FAILED warning rather than an exception
        """
        try:
            if snapshot.text is None:
                raise ContentDecodingError("File content could not be decoded for analysis")
            content = self.classify(snapshot.text, snapshot.extension)
        except Exception as e:
            logging.error(f"Content analysis failed for {snapshot.file.name!r}: {e}")
            return ContentResult(
                content=ContentAnalysis(),
                warnings=[
                    ValidationWarning(
                        code=WarningCode.CONTENT_ANALYSIS_FAILED,
                        message="Failed to analyze file content",
                        impact=WarningImpact.MODERATE,
                        suggestion="File may be in an unexpected format",
                    )
                ],
            )

        result = ContentResult(content=content)
        if content.is_empty:
            return result

        logging.info(f"Content confidence for {snapshot.file.name!r}: {content.confidence:.2f}")

        if content.confidence < LOW_CONFIDENCE_THRESHOLD:
            result.warnings.append(
                ValidationWarning(
                    code=WarningCode.LOW_CONFIDENCE_SCHEDULE,
                    message="File does not appear to contain schedule data",
                    impact=WarningImpact.SIGNIFICANT,
                    suggestion="Verify this is the correct schedule file",
                )
            )

        if content.has_schedule_data and not content.has_time_data:
            result.warnings.append(
                ValidationWarning(
                    code=WarningCode.MISSING_TIME_DATA,
                    message="Schedule data found but no time information detected",
                    impact=WarningImpact.MODERATE,
                    suggestion="Check if time data is in a different format",
                )
            )

        return result
