"""Shallow structural probes, one per supported file format."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from models.errors import ErrorSeverity, StructureProbeError
from models.validation import (
    CalendarStructure,
    CsvStructure,
    ErrorCode,
    FileFormat,
    FileSnapshot,
    FileStructure,
    JsonStructure,
    PdfStructure,
    SheetInfo,
    SpreadsheetStructure,
    TextStructure,
    ValidationError,
    ValidationWarning,
    WarningCode,
    WarningImpact,
)
from validation.decoding import load_json, split_lines
from validation.patterns import CSV_HEADER_CELL_PATTERN

CSV_DELIMITERS = (",", ";", "\t", "|")
PDF_SIGNATURE = b"%PDF"
TABULAR_FORMATS = (FileFormat.CSV, FileFormat.XLSX, FileFormat.XLS)


@dataclass
class StructureResult:
    structure: FileStructure
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationWarning] = field(default_factory=list)


def _require_text(snapshot: FileSnapshot) -> str:
    if snapshot.text is None:
        raise StructureProbeError("File content could not be decoded as text")
    return snapshot.text


def _non_blank_lines(text: str) -> List[str]:
    return [line for line in split_lines(text) if line.strip()]


def probe_csv(snapshot: FileSnapshot) -> CsvStructure:
    lines = _non_blank_lines(_require_text(snapshot))
    first_line = lines[0] if lines else None

    best_delimiter = CSV_DELIMITERS[0]
    max_columns = 0
    for delimiter in CSV_DELIMITERS:
        columns = len(first_line.split(delimiter)) if first_line is not None else 0
        # strict comparison keeps the earlier delimiter on ties
        if columns > max_columns:
            max_columns = columns
            best_delimiter = delimiter

    first_row = first_line.split(best_delimiter) if first_line is not None else []
    has_header = any(
        CSV_HEADER_CELL_PATTERN.match(cell.strip()) and len(cell.strip()) > 2 for cell in first_row
    )

    return CsvStructure(
        has_header=has_header,
        row_count=len(lines) - 1 if has_header else len(lines),
        column_count=max_columns,
        delimiter=best_delimiter,
        encoding=snapshot.encoding or "utf-8",
        corrupted=not lines or max_columns == 0,
    )


def probe_pdf(snapshot: FileSnapshot) -> PdfStructure:
    # Page counting needs a real PDF parser; a valid header reports one page.
    is_pdf = snapshot.content[:4] == PDF_SIGNATURE
    return PdfStructure(page_count=1 if is_pdf else 0, corrupted=not is_pdf)


def probe_spreadsheet(snapshot: FileSnapshot) -> SpreadsheetStructure:
    # Workbook parsing is left to the importer; assume one populated sheet with a header row.
    return SpreadsheetStructure(
        format=FileFormat.from_extension(snapshot.extension),
        has_header=True,
        sheets=[SheetInfo(name="Sheet1", row_count=0, column_count=0, has_data=True, likely_schedule_sheet=True)],
        corrupted=False,
    )


def probe_calendar(snapshot: FileSnapshot) -> CalendarStructure:
    lines = [line.strip() for line in split_lines(_require_text(snapshot))]
    has_begin = any(line.startswith("BEGIN:VCALENDAR") for line in lines)
    has_end = any(line.startswith("END:VCALENDAR") for line in lines)
    event_count = sum(1 for line in lines if line.startswith("BEGIN:VEVENT"))

    return CalendarStructure(
        has_header=has_begin,
        row_count=event_count,
        encoding=snapshot.encoding or "utf-8",
        corrupted=not has_begin or not has_end,
    )


def probe_json(snapshot: FileSnapshot) -> JsonStructure:
    text = _require_text(snapshot)
    encoding = snapshot.encoding or "utf-8"
    try:
        parsed = load_json(text)
    except (ValueError, RecursionError) as e:
        logging.info(f"JSON probe could not parse {snapshot.file.name!r}: {e}")
        return JsonStructure(row_count=0, encoding=encoding, corrupted=True)

    if isinstance(parsed, list):
        row_count = len(parsed)
    elif parsed is None:
        row_count = 0
    else:
        row_count = 1
    return JsonStructure(row_count=row_count, encoding=encoding, corrupted=False)


def probe_text(snapshot: FileSnapshot) -> TextStructure:
    lines = _non_blank_lines(_require_text(snapshot))
    return TextStructure(row_count=len(lines), encoding=snapshot.encoding or "utf-8", corrupted=False)


DEFAULT_PROBES: Dict[str, Callable[[FileSnapshot], FileStructure]] = {
    "csv": probe_csv,
    "pdf": probe_pdf,
    "xlsx": probe_spreadsheet,
    "xls": probe_spreadsheet,
    "ics": probe_calendar,
    "json": probe_json,
    "txt": probe_text,
}


class StructureParser:
    """Dispatches on file extension to a structural probe and checks the outcome."""

    def __init__(self, probes: Optional[Dict[str, Callable[[FileSnapshot], FileStructure]]] = None):
        self.probes = dict(DEFAULT_PROBES if probes is None else probes)

    def probe(self, snapshot: FileSnapshot) -> FileStructure:
        """Run the probe registered for the snapshot's extension."""
        probe = self.probes.get(snapshot.extension)
        if probe is None:
            return FileStructure(format=FileFormat.UNKNOWN)
        return probe(snapshot)

    def parse(self, snapshot: FileSnapshot) -> StructureResult:
        """
        Probe the file structure and convert problems into findings.

        Args:
            snapshot: The decoded file snapshot

        Returns:
            StructureResult: Structure descriptor with any errors and warnings
        """
        try:
            structure = self.probe(snapshot)
        except Exception as e:
            logging.error(f"Structure validation failed for {snapshot.file.name!r}: {e}")
            return StructureResult(
                structure=FileStructure(format=FileFormat.from_extension(snapshot.extension), corrupted=True),
                errors=[
                    ValidationError(
                        code=ErrorCode.STRUCTURE_VALIDATION_FAILED,
                        message=f"Failed to validate file structure: {e}",
                        severity=ErrorSeverity.HIGH,
                        recoverable=True,
                        suggestion="File may be corrupted or in an unexpected format",
                    )
                ],
            )

        result = StructureResult(structure=structure)

        if structure.corrupted:
            result.errors.append(
                ValidationError(
                    code=ErrorCode.CORRUPTED_FILE,
                    message="File appears to be corrupted or unreadable",
                    severity=ErrorSeverity.CRITICAL,
                    recoverable=False,
                    suggestion="Try re-downloading or re-exporting the file",
                )
            )

        if structure.format in TABULAR_FORMATS and getattr(structure, "row_count", None) == 0:
            result.warnings.append(
                ValidationWarning(
                    code=WarningCode.NO_DATA_ROWS,
                    message="File contains no data rows",
                    impact=WarningImpact.SIGNIFICANT,
                    suggestion="Ensure the file contains actual schedule data",
                )
            )

        return result
