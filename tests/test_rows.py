"""
Tests for row lifecycle and bulk writes.
"""

import logging

import pytest

from tagtables.config import TableSettings
from tagtables.core import RowLifecycleManager, RowOutcome, TableWriter, open_session, to_dense_row
from tagtables.exceptions import StructuralException, TagNotFoundException, ValidationException


@pytest.fixture
def rows(gateway):
    return RowLifecycleManager(gateway)


@pytest.fixture
def writer(gateway):
    return TableWriter(gateway)


class TestDeleteOrClear:
    """RowLifecycleManager.delete_or_clear tests."""

    def test_single_data_row_is_cleared_not_deleted(self, host, rows, gateway):
        outcome = rows.delete_or_clear("CS", "Notes", 3)

        assert outcome is RowOutcome.CLEARED
        assert host.sheet("CS", "Notes") == [
            ["", "Note"],
            ["header", "Note"],
            ["n1", ""],
        ]
        entry = gateway.get("CS", "Notes")
        assert entry.row_tags["n1"] == 2

    def test_template_row_checkboxes_are_unchecked(self, host, rows):
        outcome = rows.delete_or_clear("CS", "Inventory", 3)

        assert outcome is RowOutcome.CLEARED
        assert host.sheet("CS", "Inventory")[2] == ["", "", "", False]
        assert len(host.sheet("CS", "Inventory")) == 3

    def test_multi_row_table_deletes(self, host, rows):
        before = host.last_row("CS", "Powers")

        outcome = rows.delete_or_clear("CS", "Powers", 3)

        assert outcome is RowOutcome.DELETED
        assert host.last_row("CS", "Powers") == before - 1
        assert [values[2] for values in host.sheet("CS", "Powers")[2:]] == ["Shield", "Blink"]

    def test_deletion_invalidates_cached_entry(self, rows, gateway):
        before = gateway.get("CS", "Powers")

        rows.delete_or_clear("CS", "Powers", 4)

        after = gateway.get("CS", "Powers")
        assert after is not before
        assert after.grid.row_count == 4

    def test_missing_header_falls_back_to_delete(self, host, rows, caplog):
        with caplog.at_level(logging.ERROR, logger="tagtables.core.rows"):
            outcome = rows.delete_or_clear("CS", "Loose", 2)

        assert outcome is RowOutcome.DELETED
        assert host.sheet("CS", "Loose") == [["", "A", "B"], ["y", 3, 4]]
        assert "Falling back" in caplog.text

    @pytest.mark.parametrize("row_number", [1, 2])
    def test_header_and_label_rows_are_refused(self, host, rows, row_number):
        with pytest.raises(ValidationException):
            rows.delete_or_clear("CS", "Powers", row_number)
        assert len(host.sheet("CS", "Powers")) == 5

    @pytest.mark.parametrize("table, row_number", [("Notes", 4), ("Notes", 9), ("Powers", 6)])
    def test_rows_past_the_table_are_refused(self, host, rows, table, row_number):
        before = [list(values) for values in host.sheet("CS", table)]

        with pytest.raises(ValidationException):
            rows.delete_or_clear("CS", table, row_number)
        assert host.sheet("CS", table) == before


class TestDeleteRows:
    """Batch removal."""

    def test_bottom_up_and_last_row_kept(self, host, rows):
        results = rows.delete_rows("CS", "Powers", [3, 5, 4, 4])

        assert results == [
            (5, RowOutcome.DELETED),
            (4, RowOutcome.DELETED),
            (3, RowOutcome.CLEARED),
        ]
        assert host.sheet("CS", "Powers")[2:] == [["", "", "", "", False]]

    def test_unsorted_batch_removes_the_requested_rows(self, host, rows):
        rows.delete_rows("CS", "Powers", [3, 5])

        remaining = [values[2] for values in host.sheet("CS", "Powers")[2:]]
        assert remaining == ["Shield"]


class TestToDenseRow:
    """Record -> positional row."""

    def test_places_values_by_tag(self, gateway):
        col_tags = gateway.get("CS", "Powers").col_tags

        row = to_dense_row({"Effect": "2d6", "tablename": "Core", "selected": None}, col_tags, 5)

        assert row == ["", "Core", "", "2d6", ""]

    def test_grows_to_fit(self, gateway):
        col_tags = gateway.get("CS", "Powers").col_tags
        assert to_dense_row({"selected": True}, col_tags) == ["", "", "", "", True]

    def test_unknown_tag(self, gateway):
        col_tags = gateway.get("CS", "Powers").col_tags
        with pytest.raises(TagNotFoundException):
            to_dense_row({"cost": 3}, col_tags)


class TestClearAndWrite:
    """TableWriter.clear_and_write tests."""

    def test_replaces_data_rows(self, host, writer, gateway):
        written = writer.clear_and_write("CS", "Powers", [
            {"Table Name": "Core", "Ability Name": "Zap", "Effect": "1d4", "Selected": False},
            {"tablename": "Arcane", "abilityname": "Haste"},
        ])

        assert written == 2
        assert host.sheet("CS", "Powers")[2:] == [
            ["", "Core", "Zap", "1d4", False],
            ["", "Arcane", "Haste", "", ""],
        ]
        assert [r["abilityname"] for r in gateway.get("CS", "Powers").records()] == ["Zap", "Haste"]

    def test_grows_from_template_row(self, host, writer):
        writer.clear_and_write("CS", "Notes", [{"note": "a"}, {"note": "b"}, {"note": "c"}])

        assert host.sheet("CS", "Notes")[2:] == [["n1", "a"], ["", "b"], ["", "c"]]

    def test_no_records_leaves_cleared_template(self, host, writer):
        assert writer.clear_and_write("CS", "Powers", []) == 0
        assert host.sheet("CS", "Powers")[2:] == [["", "", "", "", False]]

    def test_bad_tag_leaves_table_untouched(self, host, writer):
        with pytest.raises(TagNotFoundException):
            writer.clear_and_write("CS", "Powers", [{"cost": 1}])
        assert len(host.sheet("CS", "Powers")) == 5

    def test_requires_header(self, writer):
        with pytest.raises(StructuralException):
            writer.clear_and_write("CS", "Loose", [])


class TestOffsetTagColumn:
    """Tables whose tags sit in row 2 and column B."""

    @pytest.fixture
    def offset_gateway(self, host):
        host.put_table("CS", "Offset", [
            ["Sheet title", "", "", ""],
            ["", "", "Name", "Value"],
            ["", "header", "Name", "Value"],
            ["note", "d1", "Strength", 3],
        ])
        with open_session(host, TableSettings(tag_row_index=1, tag_column_index=1)) as gateway:
            yield gateway

    def test_template_row_keeps_its_tag_cell(self, host, offset_gateway):
        outcome = RowLifecycleManager(offset_gateway).delete_or_clear("CS", "Offset", 4)

        assert outcome is RowOutcome.CLEARED
        assert host.sheet("CS", "Offset")[3] == ["", "d1", "", ""]

    def test_clear_and_write_skips_tag_column(self, host, offset_gateway):
        written = TableWriter(offset_gateway).clear_and_write("CS", "Offset", [
            {"name": "Dex", "value": 2},
            {"name": "Con", "value": 1},
        ])

        assert written == 2
        assert host.sheet("CS", "Offset")[3:] == [["", "d1", "Dex", 2], ["", "", "Con", 1]]
