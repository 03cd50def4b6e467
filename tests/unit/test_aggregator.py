import pytest

import smartfill.detection.aggregator as aggregator_module  # type: ignore[import]
from smartfill.engine import detect  # type: ignore[import]

from tests.helpers.scheduler import FakeScheduler
from tests.helpers.smartfill_imports import DomPage, EngineConfig, InvalidArgumentError, WatcherRegistry

MIXED_PAGE = """
<html><body>
  <form id="login">
    <input name="email" type="email">
    <input name="password" type="password">
  </form>
  <div class="MuiTextField-root"><input name="nickname"></div>
  <input name="search" type="search">
  <form id="empty"><input type="hidden" name="csrf"></form>
</body></html>
"""


async def _detect(page, registry=None, scheduler=None):
    return await detect(
        page,
        config=EngineConfig(),
        scheduler=scheduler or FakeScheduler(),
        watchers=registry or WatcherRegistry(),
    )


@pytest.mark.asyncio
async def test_detect_groups_forms_framework_fields_and_standalone_inputs():
    page = DomPage.from_html(MIXED_PAGE)

    result = await _detect(page)

    assert result.success is True
    assert result.form_count == 3
    login, framework, standalone = result.forms
    assert [item.name for item in login.fields] == ["email", "password"]
    assert login.synthetic is False
    assert login.element.resolve() is page.get_element_by_id("login")
    assert login.pattern == "login"
    assert [item.name for item in framework.fields] == ["nickname"]
    assert framework.synthetic is True
    assert framework.element is None
    assert [item.name for item in standalone.fields] == ["search"]
    assert all(form.field_count == len(form.fields) for form in result.forms)


@pytest.mark.asyncio
async def test_detect_never_inserts_nodes():
    page = DomPage.from_html(MIXED_PAGE)
    before = len(page.select("form"))

    await _detect(page)

    assert len(page.select("form")) == before


@pytest.mark.asyncio
async def test_page_without_fields_reports_empty_success():
    page = DomPage.from_html("<html><body><p>Hello</p></body></html>")

    result = await _detect(page)

    assert result.success is True
    assert result.form_count == 0
    assert result.forms == []


@pytest.mark.asyncio
async def test_framework_wait_is_bounded():
    page = DomPage.from_html("<html><body></body></html>")
    scheduler = FakeScheduler()

    await _detect(page, scheduler=scheduler)

    assert scheduler.now >= 2.0
    assert scheduler.now < 2.2
    assert all(delay == pytest.approx(0.1) for delay in scheduler.sleeps)


@pytest.mark.asyncio
async def test_framework_mount_ends_wait_immediately():
    page = DomPage.from_html("<html><body><div data-reactroot></div></body></html>")
    scheduler = FakeScheduler()

    await _detect(page, scheduler=scheduler)

    assert scheduler.sleeps == []


@pytest.mark.asyncio
async def test_detect_registers_a_single_watcher():
    page = DomPage.from_html(MIXED_PAGE)
    registry = WatcherRegistry()

    await _detect(page, registry=registry)
    first = registry.active
    await _detect(page, registry=registry)

    assert registry.active is not None
    assert registry.active is not first
    assert first.active is False


@pytest.mark.asyncio
async def test_detect_limited_to_container():
    page = DomPage.from_html(MIXED_PAGE)

    result = await detect(
        page,
        page.get_element_by_id("login"),
        config=EngineConfig(),
        scheduler=FakeScheduler(),
        watchers=WatcherRegistry(),
    )

    assert result.form_count == 1
    assert [item.name for item in result.fields] == ["email", "password"]


@pytest.mark.asyncio
async def test_detect_reports_failure_instead_of_raising(monkeypatch):
    page = DomPage.from_html(MIXED_PAGE)

    def boom(self, root):
        raise RuntimeError("tree exploded")

    monkeypatch.setattr(aggregator_module.FormDetector, "_collect", boom)

    result = await _detect(page)

    assert result.success is False
    assert result.forms == []


@pytest.mark.asyncio
async def test_detect_rejects_missing_page():
    with pytest.raises(InvalidArgumentError):
        await detect(None)
