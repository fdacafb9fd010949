"""
Tests for the table cache and gateway.
"""

import pytest

from tagtables.config import TableSettings
from tagtables.core import GridLoader, TableCache, TableDataGateway, open_session
from tagtables.exceptions import DuplicateTagException, NotFoundException, StructuralException


class TestTableCache:
    """TableCache tests."""

    def test_repeated_get_returns_same_entry(self, host):
        cache = TableCache(GridLoader(host))

        first = cache.get("CS", "Game")
        second = cache.get("CS", "Game")

        assert first is second
        assert ("CS", "Game") in cache
        assert len(cache) == 1

    def test_forced_refresh_replaces_entry(self, host):
        cache = TableCache(GridLoader(host))
        before = cache.get("CS", "Game")

        refreshed = cache.get("CS", "Game", force_refresh=True)

        assert refreshed is not before
        assert refreshed.grid == before.grid
        assert cache.get("CS", "Game") is refreshed

    def test_invalidate_then_get_rebuilds(self, host):
        cache = TableCache(GridLoader(host))
        before = cache.get("CS", "Game")

        cache.invalidate("CS", "Game")
        assert ("CS", "Game") not in cache

        assert cache.get("CS", "Game") is not before

    def test_invalidate_missing_entry_is_noop(self, host):
        cache = TableCache(GridLoader(host))
        cache.invalidate("CS", "Nope")
        assert len(cache) == 0

    def test_missing_table_raises_not_found(self, host):
        cache = TableCache(GridLoader(host))

        with pytest.raises(NotFoundException) as exc:
            cache.get("CS", "Nope")
        assert exc.value.status_code == 404
        assert len(cache) == 0

    def test_keys_are_exact_and_case_sensitive(self, host):
        cache = TableCache(GridLoader(host))

        with pytest.raises(NotFoundException):
            cache.get("CS", "game")
        with pytest.raises(NotFoundException):
            cache.get("cs", "Game")

    def test_same_table_name_in_two_sources(self, host):
        cache = TableCache(GridLoader(host))

        cs_game = cache.get("CS", "Game")
        db_game = cache.get("DB", "Game")

        assert cs_game is not db_game
        assert cs_game.col_tags.to_dict() == {"name": 1, "value": 2}
        assert db_game.col_tags.to_dict() == {"edition": 1}

    def test_strict_cache_fails_build(self, host):
        host.put_table("CS", "Broken", [["", "a", "A"]])
        cache = TableCache(GridLoader(host), strict=True)

        with pytest.raises(DuplicateTagException):
            cache.get("CS", "Broken")
        assert ("CS", "Broken") not in cache


class TestTableEntry:
    """TableEntry helpers."""

    def test_header_and_data_rows(self, gateway):
        entry = gateway.get("CS", "Powers")

        assert entry.header_row == 1
        assert [index for index, _ in entry.data_rows()] == [2, 3, 4]

    def test_records_are_keyed_by_tag(self, gateway):
        records = gateway.get("CS", "Powers").records()

        assert records[0]["tablename"] == "Core"
        assert records[0]["tn"] == "Core"
        assert records[1]["abilityname"] == "Shield"
        assert records[1]["selected"] is True

    def test_missing_header(self, gateway):
        entry = gateway.get("CS", "Loose")

        with pytest.raises(StructuralException) as exc:
            entry.header_row
        assert exc.value.code == "MISSING_HEADER"


class TestGateway:
    """TableDataGateway tests."""

    def test_external_edit_is_invisible_until_invalidated(self, host, gateway):
        before = gateway.get("CS", "Game")

        # Edit behind the host API, like another user typing into the sheet
        for values in host.sheet("CS", "Game"):
            values.append("")
        host.sheet("CS", "Game")[0][3] = "Notes"

        stale = gateway.get("CS", "Game")
        assert stale is before
        assert "notes" not in stale.col_tags

        gateway.invalidate("CS", "Game")
        fresh = gateway.get("CS", "Game")
        assert fresh.col_tags["notes"] == 3

    def test_structural_change_through_host_invalidates(self, host, gateway):
        before = gateway.get("CS", "Powers")

        host.delete_rows("CS", "Powers", 5)

        after = gateway.get("CS", "Powers")
        assert after is not before
        assert after.grid.row_count == before.grid.row_count - 1

    def test_change_to_other_table_keeps_entry(self, host, gateway):
        game = gateway.get("CS", "Game")

        host.insert_columns_after("CS", "Powers", 2)

        assert gateway.get("CS", "Game") is game

    def test_content_write_does_not_invalidate(self, host, gateway):
        before = gateway.get("CS", "Game")

        host.write_cell("CS", "Game", 3, 3, 5)

        assert gateway.get("CS", "Game") is before
        assert gateway.get("CS", "Game", force_refresh=True).grid.cell(2, 2) == 5

    def test_closed_gateway_stops_listening(self, host):
        gateway = open_session(host)
        with gateway:
            gateway.get("CS", "Game")
        assert len(gateway.cache) == 0

        gateway.cache.get("CS", "Game")
        host.delete_rows("CS", "Game", 3)
        assert ("CS", "Game") in gateway.cache

    def test_unattached_gateway(self, host):
        gateway = TableDataGateway(host)
        entry = gateway.get("CS", "Game")
        assert gateway.get("CS", "Game") is entry

    def test_open_session_uses_settings(self, host):
        settings = TableSettings(header_tag="data1", strict_tags=True)
        with open_session(host, settings) as gateway:
            entry = gateway.get("CS", "Game")
            assert entry.header_row == 2
            assert gateway.cache.strict is True

    def test_empty_cache_is_kept(self, host):
        cache = TableCache(GridLoader(host), strict=True, header_tag="hdr")
        gateway = TableDataGateway(host, cache)

        assert len(cache) == 0
        assert gateway.cache is cache

    def test_strict_session_rejects_duplicate_tags(self, host):
        host.put_table("CS", "Dup", [["", "a", "A"], ["header", "x", "y"]])

        with open_session(host, TableSettings(strict_tags=True)) as gateway:
            with pytest.raises(DuplicateTagException):
                gateway.get("CS", "Dup")

    def test_tag_row_and_column_from_settings(self, host):
        host.put_table("CS", "Offset", [
            ["Sheet title", "", "", ""],
            ["", "", "Name", "Value"],
            ["", "header", "Name", "Value"],
            ["", "d1", "Strength", 3],
        ])

        with open_session(host, TableSettings(tag_row_index=1, tag_column_index=1)) as gateway:
            entry = gateway.get("CS", "Offset")

        assert entry.col_tags.to_dict() == {"name": 2, "value": 3}
        assert entry.row_tags.to_dict() == {"header": 2, "d1": 3}

    def test_verify(self, host, gateway):
        assert gateway.verify("CS", "Powers") == []

        host.write_cell("CS", "Powers", 1, 4, "Effect, Ability Name")
        conflicts = gateway.verify("CS", "Powers")

        assert len(conflicts) == 1
        assert conflicts[0].tag == "abilityname"
        assert conflicts[0].first_cell == "C1"
        assert conflicts[0].duplicate_cell == "D1"
