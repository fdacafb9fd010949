"""Shared fixtures: a small character-sheet workbook held in memory."""

import pytest

from tagtables.core import open_session
from tagtables.hosts import InMemoryHost


def sample_tables():
    return {
        "CS": {
            "Game": [
                ["", "Name", "Value"],
                ["header", "Name", "Value"],
                ["data1", "Strength", 3],
            ],
            "Powers": [
                ["", "Table Name, TN", "Ability Name", "Effect", "Selected"],
                ["Header", "Table", "Ability", "Effect", "Select"],
                ["", "Core", "Blast", "2d6", False],
                ["", "Core", "Shield", "+2 AC", True],
                ["", "Arcane", "Blink", "teleport", False],
            ],
            "Filter Powers": [
                ["", "IsActive", "TableName", "Source"],
                ["header", "Use", "Table", "Source"],
                ["", True, "Core", "DB"],
                ["", False, "Arcane", "DB"],
                ["", True, "Cust - Homebrew", "Homebrew"],
            ],
            "Inventory": [
                ["", "Item", "Qty", "Equipped"],
                ["header", "Item", "Qty", "Equipped"],
                ["", "Rope", 1, True],
            ],
            "Notes": [
                ["", "Note"],
                ["header", "Note"],
                ["n1", "remember the dragon"],
            ],
            "Loose": [
                ["", "A", "B"],
                ["x", 1, 2],
                ["y", 3, 4],
            ],
        },
        "DB": {
            "Game": [
                ["", "Edition"],
                ["header", "Edition"],
                ["", "4"],
            ],
        },
    }


@pytest.fixture
def host():
    return InMemoryHost(sample_tables())


@pytest.fixture
def gateway(host):
    with open_session(host) as gateway:
        yield gateway
