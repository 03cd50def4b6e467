"""Form field detection and autofill engine."""

from .core.models import DetectedForm, FieldType, FillOutcome, FormField, ScanResult
from .dom.page import DomPage
from .engine import detect, fill

__all__ = [
    "DetectedForm",
    "DomPage",
    "FieldType",
    "FillOutcome",
    "FormField",
    "ScanResult",
    "detect",
    "fill",
]
