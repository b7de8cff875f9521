"""Schedule file validation pipeline."""

from .content import ContentClassifier
from .intake import IntakeGate
from .report import ReportAssembler
from .security import SecurityScanner
from .structure import StructureParser
from .university import UniversitySystemDetector
from .validators import FileValidator, validate

__all__ = [
    'ContentClassifier',
    'FileValidator',
    'IntakeGate',
    'ReportAssembler',
    'SecurityScanner',
    'StructureParser',
    'UniversitySystemDetector',
    'validate'
]
