"""
TagTables Hosts

Storage collaborators the table engine reads from and writes through.
"""

from functools import lru_cache

from tagtables.config import get_settings
from tagtables.hosts.base import GridSheetHost, SheetHost, StructuralChange, is_blank
from tagtables.hosts.csv_host import CsvHost
from tagtables.hosts.memory import InMemoryHost


@lru_cache
def get_host() -> SheetHost:
    """Get the process-level storage host selected by settings."""
    settings = get_settings()
    if settings.host.backend == "csv":
        return CsvHost(settings.host.data_dir)
    return InMemoryHost()


__all__ = [
    "CsvHost",
    "GridSheetHost",
    "InMemoryHost",
    "SheetHost",
    "StructuralChange",
    "get_host",
    "is_blank",
]
