"""
Unit tests for format-specific structure probes and the StructureParser.
"""

import pytest

from models.errors import ErrorSeverity
from models.validation import (
    CalendarStructure,
    CsvStructure,
    ErrorCode,
    FileFormat,
    JsonStructure,
    PdfStructure,
    SpreadsheetStructure,
    TextStructure,
    WarningCode,
    WarningImpact,
)
from tests.utils.fixtures import PDF_HEADER, build_unterminated_calendar, make_snapshot
from validation.structure import StructureParser, probe_csv, probe_json


def _codes(findings):
    return [finding.code for finding in findings]


class TestCsvProbe:
    """Test CSV delimiter, header and row detection."""

    def test_header_and_single_row(self):
        structure = probe_csv(make_snapshot("schedule.csv", "Course,Time,Instructor\nCS 301,9:00 AM,Dr. Smith\n"))

        assert isinstance(structure, CsvStructure)
        assert structure.has_header is True
        assert structure.row_count == 1
        assert structure.column_count == 3
        assert structure.delimiter == ","
        assert structure.corrupted is False

    def test_semicolon_delimiter_without_header(self):
        """Short cells do not count as header labels."""
        structure = probe_csv(make_snapshot("schedule.csv", "a;b;c\n1;2;3\n"))

        assert structure.delimiter == ";"
        assert structure.column_count == 3
        assert structure.has_header is False
        assert structure.row_count == 2

    def test_tab_delimiter(self):
        structure = probe_csv(make_snapshot("schedule.csv", "Course\tTime\nCS 101\t9:00\n"))

        assert structure.delimiter == "\t"
        assert structure.column_count == 2

    def test_tie_keeps_earlier_delimiter(self):
        structure = probe_csv(make_snapshot("schedule.csv", "a,b;c\n"))

        assert structure.delimiter == ","
        assert structure.column_count == 2

    def test_blank_lines_are_ignored(self):
        structure = probe_csv(make_snapshot("schedule.csv", "Course,Time\n\n   \nCS 101,9:00\n\n"))

        assert structure.row_count == 1

    def test_whitespace_only_is_corrupted(self):
        structure = probe_csv(make_snapshot("schedule.csv", "\n \n"))

        assert structure.corrupted is True
        assert structure.row_count == 0


class TestJsonProbe:
    """Test JSON row counting."""

    @pytest.mark.parametrize(
        "text, expected_rows",
        [
            ('[{"course": "CS 101"}, {"course": "CS 102"}]', 2),
            ("[]", 0),
            ('{"course": "CS 101"}', 1),
            ("null", 0),
            ("42", 1),
        ],
    )
    def test_row_count_by_top_level_shape(self, text, expected_rows):
        structure = probe_json(make_snapshot("courses.json", text))

        assert isinstance(structure, JsonStructure)
        assert structure.row_count == expected_rows
        assert structure.corrupted is False

    def test_malformed_json_is_corrupted(self):
        structure = probe_json(make_snapshot("courses.json", '{"course": '))

        assert structure.corrupted is True
        assert structure.row_count == 0

    @pytest.mark.parametrize("text", ["[NaN]", "[1, Infinity]", "-Infinity", '{"start": NaN}'])
    def test_non_standard_constants_are_corrupted(self, text):
        """Only standard JSON is accepted; NaN and Infinity literals are not."""
        structure = probe_json(make_snapshot("courses.json", text))

        assert structure.corrupted is True
        assert structure.row_count == 0

    def test_deeply_nested_array(self):
        depth = 500
        structure = probe_json(make_snapshot("courses.json", "[" * depth + "]" * depth))

        assert structure.corrupted is False
        assert structure.row_count == 1


class TestStructureParser:
    """Test dispatch and the findings derived from each structure."""

    @pytest.fixture
    def parser(self):
        return StructureParser()

    def test_valid_csv_has_no_findings(self, parser):
        result = parser.parse(make_snapshot("schedule.csv", "Course,Time\nCS 101,9:00 AM\n"))

        assert result.errors == []
        assert result.warnings == []

    def test_header_only_csv_has_no_data_rows(self, parser):
        result = parser.parse(make_snapshot("schedule.csv", "Course,Time\n"))

        assert result.structure.corrupted is False
        assert _codes(result.warnings) == [WarningCode.NO_DATA_ROWS]
        assert result.warnings[0].impact == WarningImpact.SIGNIFICANT

    def test_blank_csv_is_corrupted_and_empty(self, parser):
        result = parser.parse(make_snapshot("schedule.csv", "\n\n"))

        assert _codes(result.errors) == [ErrorCode.CORRUPTED_FILE]
        assert result.errors[0].severity == ErrorSeverity.CRITICAL
        assert WarningCode.NO_DATA_ROWS in _codes(result.warnings)

    def test_pdf_with_signature(self, parser):
        result = parser.parse(make_snapshot("slides.pdf", None, content=PDF_HEADER))

        assert isinstance(result.structure, PdfStructure)
        assert result.structure.page_count == 1
        assert result.structure.encoding == "binary"
        assert result.errors == []

    def test_pdf_without_signature_is_corrupted(self, parser):
        result = parser.parse(make_snapshot("slides.pdf", "not a pdf"))

        assert result.structure.corrupted is True
        assert result.structure.page_count == 0
        assert ErrorCode.CORRUPTED_FILE in _codes(result.errors)

    @pytest.mark.parametrize("file_name, expected_format", [("book.xlsx", FileFormat.XLSX), ("book.xls", FileFormat.XLS)])
    def test_spreadsheets_report_one_sheet(self, parser, file_name, expected_format):
        """Spreadsheets carry sheets rather than a row count, so no NO_DATA_ROWS warning."""
        result = parser.parse(make_snapshot(file_name, "PK\x03\x04"))

        assert isinstance(result.structure, SpreadsheetStructure)
        assert result.structure.format == expected_format
        assert result.structure.has_header is True
        assert len(result.structure.sheets) == 1
        assert result.structure.sheets[0].likely_schedule_sheet is True
        assert result.errors == []
        assert result.warnings == []

    def test_complete_calendar(self, parser):
        text = "BEGIN:VCALENDAR\nBEGIN:VEVENT\nSUMMARY:Lecture\nEND:VEVENT\nEND:VCALENDAR\n"

        result = parser.parse(make_snapshot("calendar.ics", text))

        assert isinstance(result.structure, CalendarStructure)
        assert result.structure.row_count == 1
        assert result.structure.has_header is True
        assert result.structure.corrupted is False
        assert result.errors == []

    def test_unterminated_calendar_is_corrupted(self, parser):
        text = build_unterminated_calendar(3).decode("utf-8")

        result = parser.parse(make_snapshot("calendar.ics", text))

        assert result.structure.corrupted is True
        assert result.structure.row_count == 3
        assert ErrorCode.CORRUPTED_FILE in _codes(result.errors)

    def test_calendars_are_not_checked_for_data_rows(self, parser):
        result = parser.parse(make_snapshot("calendar.ics", "BEGIN:VCALENDAR\nEND:VCALENDAR\n"))

        assert result.structure.row_count == 0
        assert result.warnings == []

    def test_text_counts_non_blank_lines(self, parser):
        result = parser.parse(make_snapshot("notes.txt", "first\n\nsecond\n   \n"))

        assert isinstance(result.structure, TextStructure)
        assert result.structure.row_count == 2

    def test_text_splits_on_newlines_only(self, parser):
        """Record and paragraph separators stay inside their line."""
        result = parser.parse(make_snapshot("notes.txt", "first\x1esecond\u2028third\x85\nlast\r\n"))

        assert result.structure.row_count == 2

    def test_csv_rows_split_on_newlines_only(self, parser):
        text = "Course,Time\r\nCS 101,9:00 AM\u2028Lab\r\nCS 102,1:00 PM\x1cRoom 4\r\n"

        result = parser.parse(make_snapshot("schedule.csv", text))

        assert result.structure.has_header is True
        assert result.structure.row_count == 2
        assert result.structure.column_count == 2

    def test_calendar_lines_split_on_newlines_only(self, parser):
        text = "BEGIN:VCALENDAR\r\nBEGIN:VEVENT\r\nSUMMARY:Lab\x1eBEGIN:VEVENT\r\nEND:VEVENT\r\nEND:VCALENDAR\r\n"

        result = parser.parse(make_snapshot("calendar.ics", text))

        assert result.structure.row_count == 1
        assert result.structure.corrupted is False

    def test_unknown_extension_yields_generic_structure(self, parser):
        result = parser.parse(make_snapshot("notes.doc", "whatever"))

        assert result.structure.format == FileFormat.UNKNOWN
        assert result.structure.corrupted is False
        assert result.errors == []

    def test_undecodable_text_fails_structure_validation(self, parser):
        """A probe that cannot run becomes a recoverable error, not an exception."""
        result = parser.parse(make_snapshot("schedule.csv", None))

        assert _codes(result.errors) == [ErrorCode.STRUCTURE_VALIDATION_FAILED]
        assert result.errors[0].severity == ErrorSeverity.HIGH
        assert result.errors[0].recoverable is True
        assert result.structure.format == FileFormat.CSV
        assert result.structure.corrupted is True

    def test_custom_probe_failure_is_contained(self):
        def exploding_probe(snapshot):
            raise RuntimeError("probe crashed")

        parser = StructureParser(probes={"csv": exploding_probe})

        result = parser.parse(make_snapshot("schedule.csv", "Course\n"))

        assert ErrorCode.STRUCTURE_VALIDATION_FAILED in _codes(result.errors)
        assert "probe crashed" in result.errors[0].message
