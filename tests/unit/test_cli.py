import json

import pytest
from bs4 import BeautifulSoup

import smartfill.cli as cli  # type: ignore[import]
import smartfill.core.config as config_module  # type: ignore[import]

PAGE = """
<html><body>
<form>
  <label for="email">Email</label><input id="email" name="email" type="email">
  <select name="country"><option value="US">United States</option><option value="CA">Canada</option></select>
</form>
</body></html>
"""


@pytest.fixture(autouse=True)
def fast_configuration(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *_args, **_kwargs: False)
    monkeypatch.setenv("SMARTFILL_FRAMEWORK_WAIT", "0")
    monkeypatch.setenv("SMARTFILL_INTERACTION_DELAY", "0")
    monkeypatch.setenv("SMARTFILL_RETRY_DELAY", "0")


def test_detect_prints_fields_and_saves_report(tmp_path, capsys):
    html_path = tmp_path / "page.html"
    html_path.write_text(PAGE, encoding="utf-8")
    report_path = tmp_path / "report.json"

    code = cli.run_cli(["detect", "--html", str(html_path), "--report", str(report_path)])

    output = capsys.readouterr().out
    assert code == 0
    assert "email [email]" in output
    assert "country [select]" in output
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["scan"]["form_count"] == 1
    assert report["fill"] is None


def test_fill_writes_filled_document(tmp_path, capsys):
    html_path = tmp_path / "page.html"
    html_path.write_text(PAGE, encoding="utf-8")
    values_path = tmp_path / "values.json"
    values_path.write_text(json.dumps({"email": "ada@example.com", "country": "Canada"}), encoding="utf-8")
    output_path = tmp_path / "filled.html"

    code = cli.run_cli(
        ["fill", "--html", str(html_path), "--values", str(values_path), "--output", str(output_path)]
    )

    assert code == 0
    assert "[+] Filled 2 field(s)" in capsys.readouterr().out
    soup = BeautifulSoup(output_path.read_text(encoding="utf-8"), "html.parser")
    assert soup.find("input", attrs={"name": "email"})["value"] == "ada@example.com"
    assert soup.find("option", attrs={"value": "CA"}).has_attr("selected")


def test_fill_rejects_non_object_values(tmp_path, capsys):
    html_path = tmp_path / "page.html"
    html_path.write_text(PAGE, encoding="utf-8")
    values_path = tmp_path / "values.json"
    values_path.write_text("[1, 2]", encoding="utf-8")

    code = cli.run_cli(["fill", "--html", str(html_path), "--values", str(values_path)])

    assert code == 2
    assert "[!]" in capsys.readouterr().out


def test_source_is_required():
    with pytest.raises(SystemExit):
        cli.parse_arguments(["detect"])
