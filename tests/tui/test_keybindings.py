"""Unit tests for the navigation state machine."""

from __future__ import annotations

import pytest

from logtop.tui.keybindings import KeybindingHandler
from logtop.tui.models import AppState, ViewMode
from logtop.tui.views.file_list import FileListWidget


@pytest.fixture
def handler() -> KeybindingHandler:
    """Handler over three files, starting in list view."""
    labels = ["c.log", "b.log", "a.log"]
    return KeybindingHandler(AppState(file_count=len(labels)), FileListWidget(labels))


class TestListView:
    """Keys while the list is shown."""

    def test_initial_state(self, handler: KeybindingHandler) -> None:
        assert handler.app_state.view_mode is ViewMode.LIST
        assert handler.app_state.detail_index is None

    @pytest.mark.parametrize("key", ["down", "j"])
    def test_move_down(self, handler: KeybindingHandler, key: str) -> None:
        assert handler.handle_key(key) == (True, None)
        assert handler.file_list.selected_index == 1
        assert handler.app_state.selected_index == 1

    @pytest.mark.parametrize("key", ["up", "k"])
    def test_move_up(self, handler: KeybindingHandler, key: str) -> None:
        handler.handle_key("down")
        handler.handle_key("down")

        handler.handle_key(key)

        assert handler.app_state.selected_index == 1

    def test_clamped_at_ends(self, handler: KeybindingHandler) -> None:
        """No wraparound in either direction."""
        handler.handle_key("up")
        assert handler.app_state.selected_index == 0

        for _ in range(10):
            handler.handle_key("down")
        assert handler.app_state.selected_index == 2
        assert handler.app_state.view_mode is ViewMode.LIST

    @pytest.mark.parametrize("key", ["enter", "l"])
    def test_open_highlighted_row(self, handler: KeybindingHandler, key: str) -> None:
        handler.handle_key("down")

        assert handler.handle_key(key) == (True, None)

        assert handler.app_state.view_mode is ViewMode.DETAIL
        assert handler.app_state.detail_index == 1

    def test_close_keys_ignored(self, handler: KeybindingHandler) -> None:
        assert handler.handle_key("escape") == (False, None)
        assert handler.app_state.view_mode is ViewMode.LIST

    @pytest.mark.parametrize("key", ["x", "left", "right", "G", "?"])
    def test_other_keys_have_no_effect(self, handler: KeybindingHandler, key: str) -> None:
        assert handler.handle_key(key) == (False, None)
        assert handler.app_state.selected_index == 0
        assert handler.app_state.view_mode is ViewMode.LIST

    def test_open_with_no_files(self) -> None:
        handler = KeybindingHandler(AppState(file_count=0), FileListWidget([]))

        handler.handle_key("enter")

        assert handler.app_state.view_mode is ViewMode.LIST
        assert handler.app_state.detail_index is None


class TestDetailView:
    """Keys while the detail pane is shown."""

    @pytest.fixture
    def detail_handler(self, handler: KeybindingHandler) -> KeybindingHandler:
        handler.handle_key("down")
        handler.handle_key("enter")
        return handler

    @pytest.mark.parametrize("key", ["escape", " ", "h", "backspace"])
    def test_back_to_list(self, detail_handler: KeybindingHandler, key: str) -> None:
        assert detail_handler.handle_key(key) == (True, None)

        assert detail_handler.app_state.view_mode is ViewMode.LIST
        assert detail_handler.app_state.detail_index is None
        assert detail_handler.app_state.selected_index == 1

    @pytest.mark.parametrize("key", ["up", "down", "j", "k", "enter"])
    def test_navigation_ignored(self, detail_handler: KeybindingHandler, key: str) -> None:
        assert detail_handler.handle_key(key) == (False, None)

        assert detail_handler.app_state.view_mode is ViewMode.DETAIL
        assert detail_handler.app_state.detail_index == 1
        assert detail_handler.file_list.selected_index == 1


class TestQuit:
    """Quit works from both states."""

    @pytest.mark.parametrize("key", ["q", "Q"])
    def test_quit_from_list(self, handler: KeybindingHandler, key: str) -> None:
        assert handler.handle_key(key) == (True, "quit")
        assert handler.app_state.should_quit is True

    def test_quit_from_detail(self, handler: KeybindingHandler) -> None:
        handler.handle_key("enter")

        assert handler.handle_key("q") == (True, "quit")
        assert handler.app_state.should_quit is True
