from tests.helpers.smartfill_imports import DomPage, DynamicWatcher, WatcherRegistry

PAGE = "<html><body><main id='app'></main></body></html>"


def test_added_form_controls_raise_a_change_signal():
    page = DomPage.from_html(PAGE)
    watcher = DynamicWatcher(page)
    watcher.start()

    page.append_html(page.select_one("#app"), "<div><input name='late'></div>")

    assert watcher.change_count == 1
    assert watcher.consume() is True
    assert watcher.consume() is False


def test_unrelated_nodes_are_ignored():
    page = DomPage.from_html(PAGE)
    watcher = DynamicWatcher(page)
    watcher.start()

    page.append_html(page.body, "<p>Just text</p>")

    assert watcher.change_count == 0


def test_form_like_class_names_count_as_changes():
    page = DomPage.from_html(PAGE)
    watcher = DynamicWatcher(page)
    seen = []
    watcher.subscribe(seen.append)
    watcher.start()

    page.append_html(page.body, "<div class='form-row'></div>")

    assert seen == [watcher]


def test_disposed_watcher_stops_listening():
    page = DomPage.from_html(PAGE)
    watcher = DynamicWatcher(page)
    watcher.start()
    watcher.dispose()

    page.append_html(page.body, "<form></form>")

    assert watcher.active is False
    assert watcher.change_count == 0


def test_registry_keeps_exactly_one_live_watcher():
    page = DomPage.from_html(PAGE)
    registry = WatcherRegistry()
    first = registry.replace(DynamicWatcher(page))
    second = registry.replace(DynamicWatcher(page))

    page.append_html(page.body, "<select name='late'></select>")

    assert registry.active is second
    assert first.active is False
    assert first.change_count == 0
    assert second.change_count == 1


def test_registry_dispose_clears_active_watcher():
    page = DomPage.from_html(PAGE)
    registry = WatcherRegistry()
    watcher = registry.replace(DynamicWatcher(page))

    registry.dispose()

    assert registry.active is None
    assert watcher.active is False
