"""Centralized imports for the smartfill package used in tests."""

from smartfill.core.config import EngineConfig, load_configuration  # type: ignore[import]
from smartfill.core.errors import InvalidArgumentError  # type: ignore[import]
from smartfill.core.models import (  # type: ignore[import]
    DetectedForm,
    FieldState,
    FieldType,
    FillOutcome,
    FormField,
    ScanResult,
)
from smartfill.core.report import RunReport  # type: ignore[import]
from smartfill.detection.scanner import FieldScanner  # type: ignore[import]
from smartfill.detection.watcher import DynamicWatcher, WatcherRegistry  # type: ignore[import]
from smartfill.dom.page import ComputedStyle, DomPage, Rect  # type: ignore[import]
from smartfill.filling.executor import FillExecutor  # type: ignore[import]

__all__ = [
    "ComputedStyle",
    "DetectedForm",
    "DomPage",
    "DynamicWatcher",
    "EngineConfig",
    "FieldScanner",
    "FieldState",
    "FieldType",
    "FillExecutor",
    "FillOutcome",
    "FormField",
    "InvalidArgumentError",
    "Rect",
    "RunReport",
    "ScanResult",
    "WatcherRegistry",
    "load_configuration",
]
