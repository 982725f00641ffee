"""Tests for the file list widget."""

from __future__ import annotations

from rich.text import Text

from logtop.tui.views.file_list import UPDATED_MARKER, FileListWidget


class TestNavigation:
    """Tests for highlight movement."""

    def test_initial_selection(self) -> None:
        widget = FileListWidget(["a.log", "b.log"])
        assert widget.selected_index == 0
        assert len(widget) == 2

    def test_move_down_clamped(self) -> None:
        """Moving past the last row leaves the highlight on it."""
        widget = FileListWidget(["a.log", "b.log", "c.log"])
        for _ in range(5):
            widget.move_down()
        assert widget.selected_index == 2

    def test_move_up_clamped(self) -> None:
        """No wraparound at the top."""
        widget = FileListWidget(["a.log", "b.log"])
        widget.move_up()
        assert widget.selected_index == 0

    def test_empty_list(self) -> None:
        widget = FileListWidget([])
        widget.move_down()
        widget.move_up()
        assert widget.selected_index == 0


class TestRenderRow:
    """Tests for single row rendering."""

    def test_row_padded_to_width(self) -> None:
        """Rows always fill the surface width."""
        widget = FileListWidget(["a.log", "longer.log"])
        widget.set_description(0, "short")

        row = widget.render_row(0, 40)

        assert isinstance(row, Text)
        assert len(row.plain) == 40
        assert row.plain.startswith("  a.log       short")

    def test_row_cropped_to_width(self) -> None:
        widget = FileListWidget(["a.log"])
        widget.set_description(0, "x" * 200)

        assert len(widget.render_row(0, 30).plain) == 30

    def test_marker(self) -> None:
        widget = FileListWidget(["a.log"])
        widget.set_description(0, "hello")

        assert widget.render_row(0, 20, marked=True).plain.startswith(f"{UPDATED_MARKER} a.log")
        assert widget.render_row(0, 20, marked=False).plain.startswith("  a.log")

    def test_control_characters_replaced(self) -> None:
        widget = FileListWidget(["a.log"])
        widget.set_description(0, "tab\there\x1b[31m")

        assert widget.render_row(0, 40).plain.startswith("  a.log  tab here?[31m")

    def test_highlighted_row_styled(self) -> None:
        widget = FileListWidget(["a.log", "b.log"])

        highlighted = widget.render_row(0, 20)
        plain = widget.render_row(1, 20)

        assert any("reverse" in str(span.style) for span in highlighted.spans)
        assert not any("reverse" in str(span.style) for span in plain.spans)


class TestRender:
    """Tests for full list rendering."""

    def test_rows_in_widget_order(self, render_plain) -> None:
        widget = FileListWidget(["b.log", "a.log"])
        widget.set_description(0, "from b")
        widget.set_description(1, "from a")

        lines = render_plain(widget.render(40, 10), width=40).splitlines()

        assert lines[0].startswith("  b.log  from b")
        assert lines[1].startswith("  a.log  from a")

    def test_marked_rows_only(self, render_plain) -> None:
        widget = FileListWidget(["a.log", "b.log", "c.log"])

        lines = render_plain(widget.render(40, 10, marked={1}), width=40).splitlines()

        assert [line[0] for line in lines] == [" ", UPDATED_MARKER, " "]

    def test_viewport_follows_selection(self, render_plain) -> None:
        """The highlighted row is always inside the visible window."""
        widget = FileListWidget([f"f{i}.log" for i in range(10)])
        for _ in range(5):
            widget.move_down()

        lines = render_plain(widget.render(30, 5), width=30).splitlines()

        assert [line.split()[0] for line in lines[1:4]] == ["f3.log", "f4.log", "f5.log"]
        assert widget.offset == 3

        for _ in range(5):
            widget.move_up()
        lines = render_plain(widget.render(30, 5), width=30).splitlines()
        assert lines[1].split()[0] == "f0.log"

    def test_scroll_hints(self, render_plain) -> None:
        """Hidden rows are counted above and below the visible window."""
        widget = FileListWidget([f"f{i}.log" for i in range(10)])
        for _ in range(5):
            widget.move_down()

        lines = render_plain(widget.render(30, 5), width=30).splitlines()

        assert "3 more above" in lines[0]
        assert "4 more below" in lines[-1]

    def test_no_hints_when_everything_fits(self, render_plain) -> None:
        widget = FileListWidget(["a.log", "b.log"])
        assert "more" not in render_plain(widget.render(30, 5), width=30)

    def test_empty_list_message(self, render_plain) -> None:
        widget = FileListWidget([])
        assert "No readable files" in render_plain(widget.render(40, 5), width=40)
