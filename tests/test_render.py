"""Tests for text rendering."""

from itemgroups.core.grouping import GroupHeader, GroupMember
from itemgroups.core.records import Record
from itemgroups.core.state import Failed, Idle, Loading, Success
from itemgroups.render import TerminalRenderer, format_row, format_rows, row_to_dict


ROWS = [
    GroupHeader(1, 2, expanded=True),
    GroupMember(Record(id=3, group_key=1, name="Item 1")),
    GroupMember(Record(id=2, group_key=1, name="Item 3")),
    GroupHeader(2, 1),
]


class TestFormatRow:
    def test_expanded_header(self):
        assert format_row(GroupHeader(1, 2, expanded=True)) == "▾ List ID: 1 (2 items)"

    def test_collapsed_header_singular(self):
        assert format_row(GroupHeader(4, 1)) == "▸ List ID: 4 (1 item)"

    def test_member(self):
        row = GroupMember(Record(id=684, group_key=1, name="Item 684"))
        assert format_row(row) == "    Item 684  (Item ID: 684)"

    def test_format_rows(self):
        assert format_rows(ROWS).splitlines() == [
            "▾ List ID: 1 (2 items)",
            "    Item 1  (Item ID: 3)",
            "    Item 3  (Item ID: 2)",
            "▸ List ID: 2 (1 item)",
        ]


class TestRowToDict:
    def test_header(self):
        assert row_to_dict(GroupHeader(2, 5)) == {
            "type": "header",
            "list_id": 2,
            "count": 5,
            "expanded": False,
        }

    def test_member(self):
        assert row_to_dict(ROWS[1]) == {"type": "item", "id": 3, "list_id": 1, "name": "Item 1"}


class TestTerminalRenderer:
    def test_idle_prints_nothing(self, capsys):
        TerminalRenderer().render([], Idle(), frozenset())
        assert capsys.readouterr().out == ""

    def test_loading(self, capsys):
        TerminalRenderer().render(ROWS, Loading(), frozenset({1}))
        assert capsys.readouterr().out == "Loading...\n"

    def test_success_prints_rows(self, capsys):
        TerminalRenderer().render(ROWS, Success(), frozenset({1}))
        assert "▾ List ID: 1 (2 items)" in capsys.readouterr().out

    def test_success_empty(self, capsys):
        TerminalRenderer(empty_msg="Nothing here.").render([], Success(), frozenset())
        assert capsys.readouterr().out == "Nothing here.\n"

    def test_failure_shows_error_and_retained_rows(self, capsys):
        TerminalRenderer().render(ROWS, Failed("API Error: 500"), frozenset({1}))
        captured = capsys.readouterr()
        assert "Error: API Error: 500" in captured.err
        assert "List ID: 2" in captured.out

    def test_failure_without_rows(self, capsys):
        TerminalRenderer().render([], Failed("offline"), frozenset())
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error: offline" in captured.err
