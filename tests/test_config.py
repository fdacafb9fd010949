"""
Tests for configuration module.
"""

import pytest


class TestTableSettings:
    """Table convention settings tests."""

    def test_defaults(self, monkeypatch):
        """Test tag row/column and tags default to the sheet conventions."""
        for name in ("TABLES_TAG_ROW_INDEX", "TABLES_TAG_COLUMN_INDEX", "TABLES_HEADER_TAG", "TABLES_STRICT_TAGS"):
            monkeypatch.delenv(name, raising=False)
        from tagtables.config import TableSettings

        settings = TableSettings()
        assert settings.tag_row_index == 0
        assert settings.tag_column_index == 0
        assert settings.header_tag == "header"
        assert settings.selection_tag == "isactive"
        assert settings.strict_tags is False

    def test_env_override(self, monkeypatch):
        """Test TABLES_ prefixed variables are picked up."""
        monkeypatch.setenv("TABLES_STRICT_TAGS", "true")
        monkeypatch.setenv("TABLES_TAG_COLUMN_INDEX", "1")
        from tagtables.config import TableSettings

        settings = TableSettings()
        assert settings.strict_tags is True
        assert settings.tag_column_index == 1

    def test_negative_index_rejected(self):
        """Test tag indexes must be non-negative."""
        from pydantic import ValidationError
        from tagtables.config import TableSettings

        with pytest.raises(ValidationError):
            TableSettings(tag_row_index=-1)


class TestHostSettings:
    """Storage host settings tests."""

    def test_default_backend(self, monkeypatch):
        monkeypatch.delenv("HOST_BACKEND", raising=False)
        from tagtables.config import HostSettings

        assert HostSettings().backend == "memory"

    def test_unknown_backend_rejected(self, monkeypatch):
        monkeypatch.setenv("HOST_BACKEND", "sheets")
        from pydantic import ValidationError
        from tagtables.config import HostSettings

        with pytest.raises(ValidationError):
            HostSettings()

    def test_csv_backend_selects_csv_host(self, monkeypatch, tmp_path):
        """Test get_host honours HOST_BACKEND."""
        monkeypatch.setenv("HOST_BACKEND", "csv")
        monkeypatch.setenv("HOST_DATA_DIR", str(tmp_path))
        from tagtables.config import get_settings
        from tagtables.hosts import CsvHost, get_host

        get_settings.cache_clear()
        get_host.cache_clear()
        try:
            host = get_host()
            assert isinstance(host, CsvHost)
            assert host.data_dir == tmp_path
        finally:
            get_settings.cache_clear()
            get_host.cache_clear()


class TestExceptions:
    """Exception tests."""

    def test_not_found_exception(self):
        """Test NotFoundException."""
        from tagtables.exceptions import NotFoundException

        exc = NotFoundException("table", "CS/Spells")
        assert exc.status_code == 404
        assert exc.code == "NOT_FOUND"
        assert "CS/Spells" in exc.message

    def test_validation_exception(self):
        """Test ValidationException."""
        from tagtables.exceptions import ValidationException

        exc = ValidationException("Invalid row", errors=[{"field": "row_number"}])
        assert exc.status_code == 400
        assert exc.code == "VALIDATION_ERROR"
        assert exc.details["errors"][0]["field"] == "row_number"

    def test_duplicate_tag_exception(self):
        """Test DuplicateTagException names the cells."""
        from tagtables.exceptions import DuplicateTagException

        conflicts = [
            {"axis": "column", "tag": "name", "first_cell": "B1", "duplicate_cell": "D1"},
            {"axis": "column", "tag": "qty", "first_cell": "C1", "duplicate_cell": "E1"},
        ]
        exc = DuplicateTagException("Inventory", conflicts)
        assert exc.status_code == 409
        assert exc.code == "DUPLICATE_TAG"
        assert "B1" in exc.message and "D1" in exc.message
        assert exc.message.endswith("and 1 more")
        assert exc.conflicts == conflicts

    def test_structural_exception(self):
        """Test StructuralException."""
        from tagtables.exceptions import StructuralException

        exc = StructuralException("Loose")
        assert exc.status_code == 422
        assert exc.code == "MISSING_HEADER"
        assert exc.message == 'Could not find a "header" tag in <Loose>.'

    def test_tag_not_found_exception(self):
        """Test TagNotFoundException."""
        from tagtables.exceptions import TagNotFoundException

        exc = TagNotFoundException("cost", "column", ["name", "qty"])
        assert exc.status_code == 422
        assert exc.details == {"tag": "cost", "axis": "column", "available": ["name", "qty"]}
