"""
TagTables - Custom Exceptions.

Centralized exception handling with standardized error responses.
"""

from typing import Any


class TagTablesException(Exception):
    """Base exception for TagTables."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class NotFoundException(TagTablesException):
    """Raised when a table (or source) does not exist in the storage host."""

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            code="NOT_FOUND",
            message=f"{resource_type} not found: {resource_id}",
            status_code=404,
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class ValidationException(TagTablesException):
    """Raised for validation errors."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=400,
            details={"errors": errors} if errors else None,
        )


class DuplicateTagException(TagTablesException):
    """Raised when two columns or two rows claim the same normalized tag."""

    def __init__(self, table_name: str, conflicts: list[dict[str, Any]]):
        first = conflicts[0] if conflicts else {}
        message = f"Duplicate {first.get('axis', '')} tag in <{table_name}>: \"{first.get('tag', '')}\""
        if first.get("first_cell") and first.get("duplicate_cell"):
            message += f" (original in {first['first_cell']}, duplicate in {first['duplicate_cell']})"
        if len(conflicts) > 1:
            message += f" and {len(conflicts) - 1} more"
        super().__init__(
            code="DUPLICATE_TAG",
            message=message,
            status_code=409,
            details={"table": table_name, "conflicts": conflicts},
        )
        self.conflicts = conflicts


class StructuralException(TagTablesException):
    """Raised when a table lacks the header row tag needed to find its data rows."""

    def __init__(self, table_name: str, missing_tag: str = "header"):
        super().__init__(
            code="MISSING_HEADER",
            message=f"Could not find a \"{missing_tag}\" tag in <{table_name}>.",
            status_code=422,
            details={"table": table_name, "tag": missing_tag},
        )


class TagNotFoundException(TagTablesException):
    """Raised when a required row or column tag is absent from a tag map."""

    def __init__(self, tag: str, axis: str, available: list[str] | None = None):
        super().__init__(
            code="TAG_NOT_FOUND",
            message=f"No {axis} is tagged \"{tag}\"",
            status_code=422,
            details={"tag": tag, "axis": axis, "available": available or []},
        )
