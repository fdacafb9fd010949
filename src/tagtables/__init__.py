"""
TagTables - tag-addressed table engine for spreadsheet-hosted character sheets.
"""

__version__ = "0.4.0"
