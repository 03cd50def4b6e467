"""Selector vocabularies used to enumerate candidate controls."""

from __future__ import annotations

FIELD_SELECTORS = (
    # Native form controls
    'input[type="text"]', 'input[type="email"]', 'input[type="password"]',
    'input[type="tel"]', 'input[type="url"]', 'input[type="search"]',
    "input:not([type])",
    'input[type="number"]', 'input[type="range"]',
    'input[type="date"]', 'input[type="datetime-local"]', 'input[type="time"]',
    'input[type="month"]', 'input[type="week"]',
    'input[type="checkbox"]', 'input[type="radio"]',
    "select",
    "textarea", 'input[type="color"]', 'input[type="file"]',
    # Date pickers
    'button[class*="date"]', 'button[class*="picker"]', 'button[class*="calendar"]',
    'button[aria-label*="date" i]', 'button[aria-label*="calendar" i]',
    'div[class*="date"][role="button"]', 'div[class*="picker"][role="button"]',
    # Custom dropdowns
    'button[class*="select"]', 'button[class*="dropdown"]', 'button[class*="choose"]',
    "button[aria-expanded]", 'button[aria-haspopup="listbox"]',
    'div[class*="select"][role="button"]', 'div[class*="dropdown"][role="button"]',
    # File uploads
    'button[class*="upload"]', 'button[class*="attach"]', 'button[class*="browse"]',
    'button[aria-label*="upload" i]', 'button[aria-label*="attach" i]',
    'div[class*="upload"][role="button"]', 'div[class*="file"][role="button"]',
    # ARIA widgets
    '[role="combobox"]', '[role="listbox"]', '[role="textbox"]',
    '[role="button"][aria-expanded]', '[contenteditable="true"]',
    '[data-testid*="input"]', '[data-testid*="select"]', '[data-testid*="field"]',
)

FRAMEWORK_SELECTORS = (
    "input[onchange]", "input[oninput]", "input[onblur]",
    "select[onchange]", "textarea[onchange]",
    # Material UI
    ".MuiTextField-root input", ".MuiSelect-select", ".MuiTextarea-root textarea",
    '[data-testid*="input"]', '[data-testid*="select"]', '[data-testid*="field"]',
    # Ant Design
    ".ant-input", ".ant-select", ".ant-checkbox", ".ant-radio",
    # Form libraries
    "[data-hook-form]", '[ref*="register"]',
    "[name][value]",
    '[class*="FormField"]', '[class*="Field"]', '[class*="Input"]',
    "[data-field-name]", "[data-form-field]",
)

NATIVE_CONTROL_SELECTOR = "input, select, textarea"

FRAMEWORK_MOUNT_SELECTOR = '[data-reactroot], [class*="react"], [id*="react"]'

# Added nodes that suggest the form structure changed
WATCHED_NODE_SELECTOR = 'form, input, select, textarea, [class*="form"], [class*="input"]'
WATCHED_DESCENDANT_SELECTOR = "form, input, select, textarea"

DROPDOWN_SCOPE_SELECTOR = "div, section, fieldset"
DROPDOWN_CONTAINER_SELECTOR = (
    '[role="listbox"], [role="menu"], .dropdown-menu, .select-options, .options'
)
SIBLING_DROPDOWN_SELECTOR = '[role="listbox"], .dropdown, .select-options'
OPTION_ITEM_SELECTOR = '[role="option"], li, button, a'

FIELD_SELECTOR = ", ".join(FIELD_SELECTORS)
FRAMEWORK_SELECTOR = ", ".join(FRAMEWORK_SELECTORS)
