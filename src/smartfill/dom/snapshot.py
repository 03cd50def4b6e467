"""Captures a live browser page into a :class:`DomPage` using Playwright."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List

from playwright.sync_api import Page, sync_playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..core.errors import SnapshotError
from .page import ComputedStyle, DomPage, Rect

logger = logging.getLogger(__name__)

STAMP_ATTRIBUTE = "data-smartfill-index"

CAPTURE_SCRIPT = """
(attr) => {
  const entries = [];
  document.querySelectorAll('*').forEach((el, index) => {
    el.setAttribute(attr, String(index));
    const rect = el.getBoundingClientRect();
    const style = window.getComputedStyle(el);
    const entry = {
      index,
      x: rect.left, y: rect.top, width: rect.width, height: rect.height,
      display: style.display, visibility: style.visibility,
    };
    const tag = el.tagName.toLowerCase();
    if (tag === 'input' || tag === 'select' || tag === 'textarea') {
      entry.value = el.value;
      if (el.type === 'checkbox' || el.type === 'radio') entry.checked = el.checked;
    }
    entries.push(entry);
  });
  return entries;
}
"""


def build_page(html: str, entries: Iterable[Dict[str, Any]], *, url: str = "about:blank") -> DomPage:
    """Rebuilds a page from serialized markup and the per-element capture entries."""

    page = DomPage.from_html(html, url=url)
    by_index = {int(entry["index"]): entry for entry in entries if "index" in entry}

    for element in page.select(f"[{STAMP_ATTRIBUTE}]"):
        raw_index = element.attrs.pop(STAMP_ATTRIBUTE, None)
        try:
            entry = by_index.get(int(raw_index))
        except (TypeError, ValueError):
            entry = None
        if entry is None:
            continue

        page.set_rect(
            element,
            Rect(
                x=float(entry.get("x", 0)),
                y=float(entry.get("y", 0)),
                width=float(entry.get("width", 0)),
                height=float(entry.get("height", 0)),
            ),
        )
        page.set_style(
            element,
            ComputedStyle(display=entry.get("display"), visibility=entry.get("visibility")),
        )
        if "value" in entry and entry["value"] is not None:
            page.set_value(element, str(entry["value"]))
        if "checked" in entry:
            page.set_checked(element, bool(entry["checked"]))

    return page


def capture_page(url: str, *, headless: bool = True, timeout_ms: int = 8000) -> DomPage:
    """Navigates to ``url`` and returns a page model with geometry and live state."""

    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(headless=headless)
        try:
            page = browser.new_page()
            try:
                page.goto(url, timeout=timeout_ms)
            except PlaywrightTimeoutError as exc:
                raise SnapshotError(f"Timed out loading {url}") from exc
            except Exception as exc:
                raise SnapshotError(f"Could not load {url}: {exc}") from exc

            _wait_settled(page)
            entries: List[Dict[str, Any]] = page.evaluate(CAPTURE_SCRIPT, STAMP_ATTRIBUTE)
            html = page.content()
            final_url = page.url
        finally:
            browser.close()

    logger.info("Captured %d elements from %s", len(entries), final_url)
    return build_page(html, entries, url=final_url)


def _wait_settled(page: Page) -> None:
    try:
        page.wait_for_load_state("networkidle", timeout=3000)
    except Exception:
        try:
            page.wait_for_load_state("domcontentloaded", timeout=1500)
        except Exception:
            page.wait_for_timeout(300)
