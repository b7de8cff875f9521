"""
Common test fixtures for the schedule file validator.

This module provides sample schedule payloads, a stand-in for FastAPI's
UploadFile, and builders for the inputs each validation stage consumes.
"""

import datetime
from typing import Optional

from models.validation import FileSnapshot, ScheduleFile
from validation.intake import get_file_extension

SAMPLE_CSV = b"Course,Time,Instructor\nCS 301,9:00 AM,Dr. Smith\n"

SAMPLE_ICS = (
    b"BEGIN:VCALENDAR\n"
    b"VERSION:2.0\n"
    b"BEGIN:VEVENT\n"
    b"SUMMARY:CS 101 Lecture\n"
    b"DTSTART:20240115T090000\n"
    b"END:VEVENT\n"
    b"END:VCALENDAR\n"
)

SAMPLE_JSON = b'[{"course": "CS 101", "time": "9:00 AM"}, {"course": "MATH 200", "time": "1:30 PM"}]'

CANVAS_CSV = b"Course Code,Course Name,Instructor,Start Time\nCS 301,Algorithms,Dr. Smith,9:00 AM\n"

SCRIPT_TXT = b"Meeting notes\n<script>alert(1)</script>\n"

PDF_HEADER = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<< /Type /Catalog >>\nendobj\n"


def build_unterminated_calendar(event_count: int) -> bytes:
    """ICS body with the given number of events and no END:VCALENDAR line."""
    events = b"".join(
        b"BEGIN:VEVENT\nSUMMARY:Lecture %d\nEND:VEVENT\n" % index for index in range(event_count)
    )
    return b"BEGIN:VCALENDAR\nVERSION:2.0\n" + events


class MockFileUpload:
    """Mock file upload data model that mimics FastAPI UploadFile."""

    def __init__(self, filename: str, content: bytes, content_type: Optional[str]):
        self.filename = filename
        self.content = content
        self.content_type = content_type
        self.size = len(content)
        self._position = 0

    async def read(self) -> bytes:
        """Read file content."""
        return self.content

    async def seek(self, position: int) -> None:
        """Seek to position in file."""
        self._position = position


def make_schedule_file(
    name: str,
    content: Optional[bytes],
    mime_type: str = "",
    size_bytes: Optional[int] = None,
    last_modified: Optional[datetime.datetime] = None,
) -> ScheduleFile:
    return ScheduleFile(
        name=name,
        content=content,
        size_bytes=size_bytes,
        declared_mime_type=mime_type,
        last_modified=last_modified,
    )


def make_snapshot(name: str, text: Optional[str], content: Optional[bytes] = None) -> FileSnapshot:
    """
    Build a decoded snapshot directly, bypassing the decoder.

    Args:
        name: File name; the extension is derived from it
        text: Decoded text, or None to simulate a decoding failure
        content: Raw bytes; defaults to the UTF-8 encoding of ``text``

    Returns:
        FileSnapshot: Snapshot for a single stage under test
    """
    if content is None and text is not None:
        content = text.encode("utf-8")
    return FileSnapshot(
        file=ScheduleFile(name=name, content=content),
        extension=get_file_extension(name),
        text=text,
        encoding="utf-8" if text is not None else None,
    )
