import json

from tests.helpers.smartfill_imports import (
    DetectedForm,
    DomPage,
    FieldState,
    FieldType,
    FillOutcome,
    FormField,
    RunReport,
    ScanResult,
)
from smartfill.core.models import FieldFillResult  # type: ignore[import]


def _scan_result():
    page = DomPage.from_html('<form><input name="email"></form>')
    ref = page.ref(page.select_one("input"))
    field = FormField(id="email", name="email", type=FieldType.EMAIL, element=ref, label="Email")
    return ScanResult(success=True, forms=[DetectedForm(element=None, fields=[field], synthetic=True)])


def test_report_to_json_includes_scan_and_fill():
    outcome = FillOutcome(
        filled=1,
        results=[FieldFillResult(name="email", state=FieldState.DONE, attempts=1)],
    )

    data = json.loads(RunReport.from_results("https://app/form", _scan_result(), outcome).to_json())

    assert data["source"] == "https://app/form"
    assert data["scan"]["success"] is True
    assert data["scan"]["form_count"] == 1
    assert data["scan"]["forms"][0]["synthetic"] is True
    assert data["scan"]["forms"][0]["fields"][0]["type"] == "email"
    assert data["fill"]["success"] is True
    assert data["fill"]["fields"] == [
        {"name": "email", "state": "done", "attempts": 1, "error": None}
    ]


def test_report_without_fill():
    report = RunReport.from_results("page.html", _scan_result())

    assert json.loads(report.to_json())["fill"] is None
    assert report.field_names == ["email"]


def test_report_save_and_load(tmp_path):
    report = RunReport.from_results("page.html", _scan_result(), FillOutcome(errors=["boom"]))
    path = tmp_path / "report.json"

    report.save(path)
    loaded = RunReport.load(path)

    assert loaded.source == "page.html"
    assert loaded.scan == report.scan
    assert loaded.fill == report.fill
    assert loaded.fill["success"] is False
    assert loaded.field_names == ["email"]
