from __future__ import annotations

import pytest

from sreader.config_actions import CONFIG_ACTIONS, SetOffset, SetPageSize, SetTextPath, get_action
from sreader.errors import InvalidPageSizeError, InvalidValueError, NotConfiguredError
from sreader.session import ReaderSession
from sreader.stores import PAGE_SIZE_KEY, TEXT_PATH_KEY, WORKSPACE_SCOPE
from sreader.tracker import OFFSET_STATE_KEY


def test_actions_are_looked_up_by_key():
    assert [a.key for a in CONFIG_ACTIONS] == ["path", "page-size", "offset"]
    assert isinstance(get_action("offset"), SetOffset)
    assert get_action("volume") is None


def test_validation_predicates():
    assert SetTextPath().validate("  book.txt ") == "book.txt"
    with pytest.raises(NotConfiguredError):
        SetTextPath().validate("  ")
    assert SetPageSize().validate("40") == 40
    with pytest.raises(InvalidPageSizeError):
        SetPageSize().validate("0")
    with pytest.raises(InvalidPageSizeError):
        SetPageSize().validate("ten")
    assert SetOffset().validate("-2") == -2
    with pytest.raises(InvalidValueError):
        SetOffset().validate("1.5")


def test_set_path_switches_document(session, settings, sink, workspace):
    (workspace / "other.txt").write_text("Another story", encoding="utf-8")
    session.show()
    assert session.edit_settings(SetTextPath(), "other.txt")
    assert settings.get(TEXT_PATH_KEY) == "other.txt"
    assert session.document.content == "Another story"
    assert sink.page_text == "Anoth"


def test_bad_path_keeps_old_setting(session, settings, sink):
    session.show()
    assert not session.edit_settings(SetTextPath(), "missing.txt")
    assert settings.get(TEXT_PATH_KEY) == "fox.txt"
    assert session.document.content == "The quick brown fox."


def test_set_page_size_reclamps_and_persists(session, settings, store):
    session.show()
    session.tracker.jump(15)
    assert session.edit_settings(SetPageSize(), "10")
    assert settings.get(PAGE_SIZE_KEY) == 10
    assert list(store.get(OFFSET_STATE_KEY).values()) == [10]


def test_set_page_size_before_open_clamps_saved_offset(session, store, workspace):
    path = str((workspace / "fox.txt").resolve())
    store.set(OFFSET_STATE_KEY, {path: 15})
    assert session.edit_settings(SetPageSize(), "12")
    assert store.get(OFFSET_STATE_KEY) == {path: 8}


def test_invalid_page_size_is_rejected(session, settings, sink):
    assert not session.edit_settings(SetPageSize(), "-1")
    assert settings.get(PAGE_SIZE_KEY) == 5
    assert sink.errors


def test_set_offset_jumps(session, sink, store):
    session.show()
    assert session.edit_settings(SetOffset(), "10")
    assert sink.page_text == "brown"
    assert list(store.get(OFFSET_STATE_KEY).values()) == [10]


def test_set_offset_out_of_range_leaves_store(session, sink, store):
    session.show()
    session.page_forward()
    assert not session.edit_settings(SetOffset(), "16")
    assert list(store.get(OFFSET_STATE_KEY).values()) == [5]
    assert "out of range" in sink.errors[-1]


def test_set_path_in_fresh_session_keeps_saved_offset(settings, store, sink, workspace):
    path = str((workspace / "fox.txt").resolve())
    store.set(OFFSET_STATE_KEY, {path: 15})
    fresh = ReaderSession(settings=settings, store=store, sink=sink, base_dir=workspace)

    assert fresh.edit_settings(SetTextPath(), "fox.txt")
    assert store.get(OFFSET_STATE_KEY) == {path: 15}
    assert fresh.tracker.page_size == 5
    assert fresh.tracker.offset == 15


def test_set_path_in_fresh_session_clamps_with_configured_page_size(settings, store, sink, workspace):
    path = str((workspace / "fox.txt").resolve())
    settings.set(PAGE_SIZE_KEY, 30)
    store.set(OFFSET_STATE_KEY, {path: 15})
    fresh = ReaderSession(settings=settings, store=store, sink=sink, base_dir=workspace)

    assert fresh.edit_settings(SetTextPath(), "fox.txt")
    assert store.get(OFFSET_STATE_KEY) == {path: 0}


def test_set_path_with_unknown_home_reports_error(session, settings, sink):
    assert not session.edit_settings(SetTextPath(), "~nosuchuser_zz/book.txt")
    assert settings.get(TEXT_PATH_KEY) == "fox.txt"
    assert len(sink.errors) == 1


def test_failed_page_size_change_keeps_setting(session, settings, sink, workspace):
    (workspace / "fox.txt").unlink()
    assert not session.edit_settings(SetPageSize(), "9")
    assert settings.get(PAGE_SIZE_KEY) == 5
    assert "Unable to read" in sink.errors[-1]


def test_page_size_edit_updates_shadowing_workspace_value(session, settings):
    settings.set(PAGE_SIZE_KEY, 7, WORKSPACE_SCOPE)
    session.show()
    assert session.edit_settings(SetPageSize(), "4")
    assert settings.get(PAGE_SIZE_KEY) == 4
    assert session.refresh().page_size == 4
