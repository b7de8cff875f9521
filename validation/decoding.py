"""Decode uploaded bytes to text once, for every stage to share."""

import json
import logging
from typing import Any, List, Optional, Tuple

from models.errors import ContentDecodingError

# utf-8-sig strips a byte order mark; latin-1 maps every byte so it always succeeds
FALLBACK_ENCODINGS = ("utf-8-sig", "latin-1")

ENCODING_LABELS = {"utf-8-sig": "utf-8"}


def decode_content(content: Optional[bytes]) -> Tuple[str, str]:
    """
    Decode file content with fallback options.

    Args:
        content: Raw file bytes

    Returns:
        Tuple[str, str]: Decoded text and the encoding that worked

    Raises:
        ContentDecodingError: If there is no content to decode or no encoding fits
    """
    if content is None:
        raise ContentDecodingError("No file content available to decode")
    if not isinstance(content, (bytes, bytearray)):
        raise ContentDecodingError(f"Expected bytes, got {type(content).__name__}")

    for encoding in FALLBACK_ENCODINGS:
        try:
            text = bytes(content).decode(encoding)
        except UnicodeDecodeError:
            continue
        label = ENCODING_LABELS.get(encoding, encoding)
        if label != "utf-8":
            logging.info(f"Content is not valid UTF-8, decoded as {label}")
        return text, label

    raise ContentDecodingError("File content contains invalid encoding")


def _reject_constant(name: str) -> None:
    raise ValueError(f"Non-standard JSON constant {name}")


def load_json(text: str) -> Any:
    """
    Parse JSON text, rejecting the ``NaN`` and ``Infinity`` literals.

    Raises:
        ValueError: If the text is not standard JSON
        RecursionError: If the document nests deeper than the parser allows
    """
    return json.loads(text, parse_constant=_reject_constant)


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` only; a trailing ``\\r`` is dropped from each line."""
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
