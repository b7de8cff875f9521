"""Read-only regex tables used by the validation stages.

Iteration order matters in two tables: the first dangerous pattern that
matches stops the security scan, and the first university system with any
matching signature wins detection.
"""

import re

# Checked in order; the first hit is the only one reported.
DANGEROUS_CONTENT_PATTERNS = (
    re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"vbscript:", re.IGNORECASE),
    re.compile(r"onload\s*=", re.IGNORECASE),
    re.compile(r"onerror\s*=", re.IGNORECASE),
    re.compile(r"onclick\s*=", re.IGNORECASE),
    re.compile(r"<iframe\b", re.IGNORECASE),
    re.compile(r"<object\b", re.IGNORECASE),
    re.compile(r"<embed\b", re.IGNORECASE),
    re.compile(r"data:text/html", re.IGNORECASE),
    re.compile(r"\.exe\b", re.IGNORECASE),
    re.compile(r"\.scr\b", re.IGNORECASE),
    re.compile(r"\.bat\b", re.IGNORECASE),
    re.compile(r"\.cmd\b", re.IGNORECASE),
)

SUSPICIOUS_FILENAME_PATTERNS = (
    re.compile(r"\.(exe|scr|bat|cmd|com|pif|vbs|js)$", re.IGNORECASE),
    re.compile(r'[<>:"|?*\\/]'),
    re.compile(r"[\x00-\x1f]"),
    re.compile(r"^\."),
    re.compile(r"\s+$"),
)

# Anything outside word characters, whitespace and common punctuation
SPECIAL_CHARACTER_PATTERN = re.compile(r"[^\w\s\-.,;:!?()]", re.ASCII)
BINARY_CHARACTER_PATTERN = re.compile(r"[\x00-\x08\x0e-\x1f\x7f-\xff]")

# Ordered by priority: detection returns the first system with any match.
UNIVERSITY_SIGNATURES = (
    (
        "canvas",
        (
            re.compile(r"canvas\.instructure\.com", re.IGNORECASE),
            re.compile(r"course\s+code", re.IGNORECASE),
            re.compile(r"course\s+name", re.IGNORECASE),
            re.compile(r"sis\s+id", re.IGNORECASE),
        ),
    ),
    (
        "blackboard",
        (
            re.compile(r"blackboard\.com", re.IGNORECASE),
            re.compile(r"course\s+id", re.IGNORECASE),
            re.compile(r"primary\s+instructor", re.IGNORECASE),
            re.compile(r"bb\s+learn", re.IGNORECASE),
        ),
    ),
    (
        "moodle",
        (
            re.compile(r"moodle", re.IGNORECASE),
            re.compile(r"shortname", re.IGNORECASE),
            re.compile(r"fullname", re.IGNORECASE),
            re.compile(r"idnumber", re.IGNORECASE),
        ),
    ),
    (
        "brightspace",
        (
            re.compile(r"brightspace", re.IGNORECASE),
            re.compile(r"desire2learn", re.IGNORECASE),
            re.compile(r"d2l", re.IGNORECASE),
        ),
    ),
    (
        "banner",
        (
            re.compile(r"ellucian", re.IGNORECASE),
            re.compile(r"banner", re.IGNORECASE),
            re.compile(r"crn", re.IGNORECASE),
            re.compile(r"course\s+reference\s+number", re.IGNORECASE),
        ),
    ),
)

# --- Content detectors ---

COURSE_CODE_PATTERN = re.compile(r"\b([A-Z]{2,4})\s*(\d{3,4}[A-Z]?)\b")
TIME_PATTERN = re.compile(r"\b(\d{1,2}):(\d{2})\s*(AM|PM)\b", re.IGNORECASE)
DAY_TOKEN_PATTERN = re.compile(
    r"\b(MONDAY|TUESDAY|WEDNESDAY|THURSDAY|FRIDAY|SATURDAY|SUNDAY"
    r"|MON|TUE|WED|THU|FRI|SAT|SUN|M|T|W|R|F|S|U)\b",
    re.IGNORECASE,
)

# --- Content indicators ---

SCHEDULE_INDICATORS = (
    re.compile(r"schedule", re.IGNORECASE),
    re.compile(r"class", re.IGNORECASE),
    re.compile(r"course", re.IGNORECASE),
    re.compile(r"section", re.IGNORECASE),
    re.compile(r"semester", re.IGNORECASE),
    re.compile(r"\b(MON|TUE|WED|THU|FRI)\b", re.IGNORECASE),
    re.compile(r"\d{1,2}:\d{2}\s*(AM|PM)", re.IGNORECASE),
)

COURSE_INDICATORS = (
    re.compile(r"\b[A-Z]{2,4}\s*\d{3,4}\b"),
    re.compile(r"course\s*(code|number|id)", re.IGNORECASE),
    re.compile(r"subject", re.IGNORECASE),
    re.compile(r"department", re.IGNORECASE),
)

TIME_INDICATORS = (
    re.compile(r"\d{1,2}:\d{2}\s*(AM|PM)", re.IGNORECASE),
    re.compile(r"\d{1,2}:\d{2}"),
    re.compile(r"time", re.IGNORECASE),
    re.compile(r"start", re.IGNORECASE),
    re.compile(r"end", re.IGNORECASE),
)

INSTRUCTOR_INDICATORS = (
    re.compile(r"instructor", re.IGNORECASE),
    re.compile(r"professor", re.IGNORECASE),
    re.compile(r"teacher", re.IGNORECASE),
    re.compile(r"prof\.", re.IGNORECASE),
    re.compile(r"dr\.", re.IGNORECASE),
)

CSV_HEADER_CELL_PATTERN = re.compile(r"^[A-Za-z\s]+$")
