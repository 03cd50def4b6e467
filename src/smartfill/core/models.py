"""Shared data structures used across detection and filling."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

if TYPE_CHECKING:  # pragma: no cover - import-time type checking only
    from ..dom.page import ElementRef


FieldValue = Union[str, bool, List[str]]
ValueBag = Mapping[str, FieldValue]


class FieldType(str, Enum):
    """Closed classification of a field's data shape."""

    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    TEL = "tel"
    URL = "url"
    NUMBER = "number"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    COLOR = "color"
    RANGE = "range"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    SELECT = "select"
    TEXTAREA = "textarea"
    FILE = "file"

    @property
    def is_grouped(self) -> bool:
        return self in (FieldType.RADIO, FieldType.CHECKBOX)

    @property
    def is_text_like(self) -> bool:
        return self in TEXT_LIKE_TYPES


TEXT_LIKE_TYPES = frozenset(
    {
        FieldType.TEXT,
        FieldType.EMAIL,
        FieldType.PASSWORD,
        FieldType.TEL,
        FieldType.URL,
        FieldType.NUMBER,
        FieldType.DATE,
        FieldType.TIME,
        FieldType.DATETIME,
        FieldType.COLOR,
        FieldType.RANGE,
        FieldType.TEXTAREA,
    }
)


class FieldState(str, Enum):
    """Lifecycle of a single field inside a fill batch."""

    PENDING = "pending"
    ATTEMPTING = "attempting"
    RETRYING = "retrying"
    DONE = "done"
    FAILED = "failed"


@dataclass
class FormField:
    """One semantically addressable fillable unit found on the page."""

    id: str
    name: str
    type: FieldType
    element: "ElementRef"
    current_value: str = ""
    label: str = ""
    placeholder: Optional[str] = None
    required: bool = False
    options: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "value": self.current_value,
            "label": self.label,
            "placeholder": self.placeholder,
            "required": self.required,
            "options": list(self.options),
        }


@dataclass
class DetectedForm:
    """A scanning scope (native form or synthetic container) and its fields."""

    element: Optional["ElementRef"]
    fields: List[FormField] = field(default_factory=list)
    synthetic: bool = False

    @property
    def field_count(self) -> int:
        return len(self.fields)

    @property
    def pattern(self) -> str:
        from ..detection.patterns import detect_form_pattern

        return detect_form_pattern(self.fields)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "synthetic": self.synthetic,
            "pattern": self.pattern,
            "field_count": self.field_count,
            "fields": [item.to_dict() for item in self.fields],
        }


@dataclass
class ScanResult:
    """Outcome of one full detection pass."""

    success: bool
    forms: List[DetectedForm] = field(default_factory=list)

    @property
    def form_count(self) -> int:
        return len(self.forms)

    @property
    def fields(self) -> List[FormField]:
        return [item for form in self.forms for item in form.fields]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "form_count": self.form_count,
            "forms": [form.to_dict() for form in self.forms],
        }


@dataclass
class FieldFillResult:
    """Per-field accounting for a fill batch."""

    name: str
    state: FieldState = FieldState.PENDING
    attempts: int = 0
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state is FieldState.DONE


@dataclass
class FillOutcome:
    """Aggregate result of writing a value bag into detected fields."""

    filled: int = 0
    errors: List[str] = field(default_factory=list)
    results: List[FieldFillResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.filled > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "filled": self.filled,
            "errors": list(self.errors),
            "fields": [
                {
                    "name": result.name,
                    "state": result.state.value,
                    "attempts": result.attempts,
                    "error": result.error,
                }
                for result in self.results
            ],
        }
