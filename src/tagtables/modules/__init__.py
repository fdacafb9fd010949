"""TagTables Modules - All application modules."""

from tagtables.modules.tables import router as tables_router

__all__ = [
    "tables_router",
]
