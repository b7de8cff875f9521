"""Detect which learning management system exported a schedule."""

import logging
from typing import Optional, Pattern, Sequence, Tuple

from models.validation import UniversityDetection
from validation.patterns import UNIVERSITY_SIGNATURES


class UniversitySystemDetector:
    """Matches text against ordered LMS signature sets; table order is the priority."""

    def __init__(self, signatures: Sequence[Tuple[str, Sequence[Pattern]]] = UNIVERSITY_SIGNATURES):
        self.signatures = tuple((name, tuple(patterns)) for name, patterns in signatures)

    def detect(self, text: Optional[str]) -> Optional[UniversityDetection]:
        """
        Return the first system with at least one matching signature.

        Args:
            text: Decoded file content

        Returns:
            Optional[UniversityDetection]: Detection result, or None when nothing matches
        """
        if not text:
            return None

        for name, patterns in self.signatures:
            matched = [pattern for pattern in patterns if pattern.search(text)]
            if matched:
                logging.info(f"Detected {name} export ({len(matched)}/{len(patterns)} signatures)")
                return UniversityDetection(
                    name=name,
                    confidence=len(matched) / len(patterns),
                    indicators=[pattern.pattern for pattern in matched],
                    suggested_format=name,
                )

        return None
