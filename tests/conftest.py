"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the D&D Character Tracker test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import uuid4

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from dnd_tracker.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "DND_TRACKER_DEBUG": "true",
        "DND_TRACKER_LOG_LEVEL": "DEBUG",
        "DND_TRACKER_RULES_RECLAMP_USED_COUNTERS": "false",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Record Fixtures
# =============================================================================


@pytest.fixture
def sample_abilities() -> list[dict[str, Any]]:
    """Provide ability data in the list-of-entries shape.

    Returns:
        Ability entries with scores and modifiers.
    """
    return [
        {"name": "Force", "score": 16, "modifier": 3},
        {"name": "Dextérité", "score": 14, "modifier": 2},
        {"name": "Constitution", "score": 15, "modifier": 2},
        {"name": "Intelligence", "score": 10, "modifier": 0},
        {"name": "Sagesse", "score": 12, "modifier": 1},
        {"name": "Charisme", "score": 8, "modifier": -1},
    ]


@pytest.fixture
def barbarian_record(sample_abilities: list[dict[str, Any]]) -> dict[str, Any]:
    """Provide a persisted level 2 Barbare record without a subclass.

    Args:
        sample_abilities: Ability entries (CON +2).

    Returns:
        Character record.
    """
    return {
        "id": str(uuid4()),
        "name": "Grog",
        "class": "Barbare",
        "level": 2,
        "subclass": None,
        "abilities": sample_abilities,
        "max_hp": 27,
        "current_hp": 20,
        "temporary_hp": 0,
        "hit_dice": {"total": 2, "used": 1},
        "spell_slots": {},
        "class_resources": {"rage": 3, "used_rage": 1},
    }


@pytest.fixture
def wizard_record() -> dict[str, Any]:
    """Provide a persisted level 6 Magicien record with spent slots.

    Returns:
        Character record.
    """
    return {
        "id": str(uuid4()),
        "name": "Elminster",
        "class": "Magicien",
        "level": 6,
        "subclass": "Évocateur",
        "abilities": {"intelligence": 18, "constitution": 12},
        "max_hp": 32,
        "current_hp": 32,
        "hit_dice": {"total": 6, "used": 0},
        "spell_slots": {
            "level1": 4, "level2": 3, "level3": 3,
            "used1": 1, "used2": 1, "used3": 0,
            "used4": 0, "used5": 0, "used6": 0, "used7": 0, "used8": 0, "used9": 0,
        },
        "class_resources": {
            "arcane_recovery": True,
            "used_arcane_recovery": False,
            "arcane_recovery_slots_used": 0,
        },
    }


@pytest.fixture
def warlock_record() -> dict[str, Any]:
    """Provide a persisted level 5 Occultiste record.

    Returns:
        Character record.
    """
    return {
        "id": str(uuid4()),
        "name": "Hexblade",
        "class": "Occultiste",
        "level": 5,
        "abilities": {"charisma": 18},
        "max_hp": 38,
        "current_hp": 30,
        "hit_dice": {"total": 5, "used": 0},
        "spell_slots": {"pact_slots": 2, "pact_level": 3, "used_pact_slots": 1},
        "class_resources": {},
    }


@pytest.fixture
def barbarian(barbarian_record: dict[str, Any]) -> Any:
    """Create a Character from the Barbare record."""
    from dnd_tracker.models import Character

    return Character.from_record(barbarian_record)


@pytest.fixture
def wizard(wizard_record: dict[str, Any]) -> Any:
    """Create a Character from the Magicien record."""
    from dnd_tracker.models import Character

    return Character.from_record(wizard_record)


@pytest.fixture
def warlock(warlock_record: dict[str, Any]) -> Any:
    """Create a Character from the Occultiste record."""
    from dnd_tracker.models import Character

    return Character.from_record(warlock_record)
