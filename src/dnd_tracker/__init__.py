"""D&D Character Tracker - character progression and resource engine.

Computes what a D&D 5E (2024 rules) character is entitled to at each
level and keeps track of what has been spent.

RULES ENGINE:
- Tables own the maxima (spell slots, spell counts, class resources)
- The ledger owns the "used" counters and re-checks bounds on every call
- Snapshots are never mutated; every operation returns an updated copy

Example:
    >>> from dnd_tracker import Character, level_up, consume, ResourcePool
    >>>
    >>> hero = Character.from_record({"class": "Barbare", "level": 2, "max_hp": 25, "current_hp": 25})
    >>> hero = level_up(hero, hp_gain=7, chosen_subclass="Voie du Berserker")
    >>> result = consume(hero, ResourcePool.RAGE)
    >>> hero = result.character

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas, rules tables, and the record translation layer.
    engine: Table resolution, ledger, level-up and rests.
"""

from __future__ import annotations

# Core
from dnd_tracker.core.config import Settings, get_settings
from dnd_tracker.core.exceptions import DndTrackerError, LevelUpRejectedError
from dnd_tracker.core.logging import configure_logging, get_logger

# Models
from dnd_tracker.models import (
    Ability,
    Character,
    DndClass,
    HitDice,
    ResourcePool,
    SpellSlots,
)

# Engine
from dnd_tracker.engine import (
    SpellSlot,
    consume,
    exchange_arcane_recovery,
    get_ability_modifier,
    level_up,
    long_rest,
    preview_level_up,
    recover,
    resolve_class_resources,
    resolve_spell_knowledge,
    resolve_spell_slots,
    short_rest,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "DndTrackerError",
    "LevelUpRejectedError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Ability",
    "Character",
    "DndClass",
    "HitDice",
    "ResourcePool",
    "SpellSlots",
    # Engine
    "get_ability_modifier",
    "resolve_spell_slots",
    "resolve_spell_knowledge",
    "resolve_class_resources",
    "SpellSlot",
    "consume",
    "recover",
    "exchange_arcane_recovery",
    "preview_level_up",
    "level_up",
    "short_rest",
    "long_rest",
]
