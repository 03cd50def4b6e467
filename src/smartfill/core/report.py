"""JSON artifact describing one detect/fill run."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import FillOutcome, ScanResult


@dataclass
class RunReport:
    """Structured summary of a scan and, optionally, the fill that followed it."""

    source: str = ""
    scan: Dict[str, Any] = field(default_factory=dict)
    fill: Optional[Dict[str, Any]] = None

    @classmethod
    def from_results(
        cls, source: str, scan: ScanResult, outcome: Optional[FillOutcome] = None
    ) -> "RunReport":
        return cls(
            source=source,
            scan=scan.to_dict(),
            fill=outcome.to_dict() if outcome is not None else None,
        )

    @property
    def field_names(self) -> List[str]:
        return [
            item["name"]
            for form in self.scan.get("forms", [])
            for item in form.get("fields", [])
        ]

    def to_json(self) -> str:
        data = {"source": self.source, "scan": self.scan, "fill": self.fill}
        return json.dumps(data, indent=4)

    def save(self, path: Path) -> None:
        path.write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> "RunReport":
        raw = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            source=raw.get("source", ""),
            scan=dict(raw.get("scan") or {}),
            fill=raw.get("fill"),
        )
