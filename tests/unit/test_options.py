from smartfill.detection.options import (  # type: ignore[import]
    COUNTRY_OPTIONS,
    GENDER_OPTIONS,
    extract_options,
    is_placeholder_text,
)
from tests.helpers.smartfill_imports import DomPage, FieldType


def test_native_select_skips_empty_and_placeholder_options():
    page = DomPage.from_html(
        '<select name="country">'
        '<option value="">Select a country</option>'
        '<option value="US">United States</option>'
        '<option value="US">Duplicate</option>'
        '<option value="undefined">Unknown</option>'
        "<option>-- pick one --</option>"
        '<option value="CA">Canada</option>'
        "</select>"
    )

    assert extract_options(page, page.select_one("select")) == ["US", "CA"]


def test_radio_options_come_from_same_named_group():
    page = DomPage.from_html(
        "<form>"
        '<input type="radio" name="size" value="S">'
        '<input type="radio" name="size" value="M">'
        '<input type="radio" name="size" aria-label="Large">'
        '<input type="radio" name="other" value="X">'
        '<input type="checkbox" name="size" value="Z">'
        "</form>"
    )
    form = page.select_one("form")

    assert extract_options(page, page.select_one("input"), form) == ["S", "M", "Large"]


def test_unnamed_radio_falls_back_to_radiogroup():
    page = DomPage.from_html(
        '<div role="radiogroup">'
        '<input type="radio" value="yes"><input type="radio" value="no">'
        "</div>"
    )

    assert extract_options(page, page.select_one("input")) == ["yes", "no"]


def test_checkbox_group_options():
    page = DomPage.from_html(
        '<input type="checkbox" name="tags" value="a">'
        '<input type="checkbox" name="tags" value="b">'
    )

    assert extract_options(page, page.select_one("input"), kind=FieldType.CHECKBOX) == ["a", "b"]


def test_custom_dropdown_reads_aria_controls_target():
    page = DomPage.from_html(
        '<div role="combobox" aria-controls="plans">Choose</div>'
        '<ul id="plans">'
        '<li data-value="basic">Basic</li><li>Premium</li><li>Select one</li>'
        "</ul>"
    )

    assert extract_options(page, page.select_one("[role=combobox]")) == ["basic", "Premium"]


def test_custom_dropdown_reads_nearby_listbox():
    page = DomPage.from_html(
        '<div class="wrap">'
        '<button aria-haspopup="listbox">Size</button>'
        '<ul role="listbox"><li role="option">Small</li><li role="option">Large</li></ul>'
        "</div>"
    )

    assert extract_options(page, page.select_one("button")) == ["Small", "Large"]


def test_custom_dropdown_reads_data_options():
    page = DomPage.from_html(
        '<div role="combobox" data-options=\'["Red", "Green", "Red"]\'></div>'
        '<div role="combobox" data-options=\'[{"value": "r", "label": "Red"}, {"label": "Green"}]\'></div>'
        '<div role="combobox" data-options="one; two|three"></div>'
    )
    first, second, third = page.select("[role=combobox]")

    assert extract_options(page, first) == ["Red", "Green"]
    assert extract_options(page, second) == ["r", "Green"]
    assert extract_options(page, third) == ["one", "two", "three"]


def test_custom_dropdown_falls_back_to_vocabulary():
    page = DomPage.from_html(
        '<button class="gender-select">Gender</button>'
        '<button aria-label="Country" aria-expanded="false">Pick</button>'
    )
    gender, country = page.select("button")

    assert extract_options(page, gender) == GENDER_OPTIONS
    assert extract_options(page, country) == COUNTRY_OPTIONS


def test_text_fields_have_no_options():
    page = DomPage.from_html('<input type="text" name="q">')

    assert extract_options(page, page.select_one("input")) == []


def test_is_placeholder_text():
    assert is_placeholder_text("Select an option")
    assert is_placeholder_text("-- none --")
    assert is_placeholder_text("x" * 51)
    assert not is_placeholder_text("Canada")
