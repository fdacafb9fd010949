"""
TagTables - Dependency Injection.

FastAPI dependencies for settings, the storage host and the per-request
table gateway.
"""

from typing import Annotated, Iterator

from fastapi import Depends

from tagtables.config import Settings, get_settings
from tagtables.core.gateway import TableDataGateway, open_session
from tagtables.hosts import SheetHost, get_host


def get_storage_host() -> SheetHost:
    """Get the process-level storage host."""
    return get_host()


def get_gateway(
    settings: Annotated[Settings, Depends(get_settings)],
    host: Annotated[SheetHost, Depends(get_storage_host)],
) -> Iterator[TableDataGateway]:
    """One gateway, and so one table cache, per request."""
    with open_session(host, settings.tables) as gateway:
        yield gateway
