"""Level progression data.

This module contains the static tables that drive character progression:
- Hit dice by class
- Proficiency bonus by level and primary abilities by class
- Spell slots by caster archetype and level (including pact magic)
- Cantrips and prepared spells by class and level

All tables are keyed by character level 1-20. Callers clamp the level
before lookup.
"""

from __future__ import annotations

from dnd_tracker.core.constants import DEFAULT_HIT_DIE
from dnd_tracker.models.enums import Ability, CasterType, DndClass, canonical_class


# =============================================================================
# Hit Dice by Class
# =============================================================================

CLASS_HIT_DIE: dict[DndClass, int] = {
    DndClass.BARBARIAN: 12,
    DndClass.FIGHTER: 10,
    DndClass.PALADIN: 10,
    DndClass.RANGER: 10,
    DndClass.BARD: 8,
    DndClass.CLERIC: 8,
    DndClass.DRUID: 8,
    DndClass.MONK: 8,
    DndClass.ROGUE: 8,
    DndClass.WARLOCK: 8,
    DndClass.SORCERER: 6,
    DndClass.WIZARD: 6,
}


def get_hit_die(dnd_class: DndClass | str | None) -> int:
    """Get hit die size for a class (8 for unrecognized classes)."""
    resolved = canonical_class(dnd_class)
    if resolved is None:
        return DEFAULT_HIT_DIE
    return CLASS_HIT_DIE[resolved]


def get_average_hp_gain(hit_die: int) -> int:
    """Fixed hit point gain per level (half the die, rounded up, plus one)."""
    return hit_die // 2 + 1


# =============================================================================
# Proficiency Bonus by Level (PHB p.15)
# =============================================================================

def get_proficiency_bonus(level: int) -> int:
    """Get proficiency bonus for a given (total) character level."""
    if level <= 4:
        return 2
    if level <= 8:
        return 3
    if level <= 12:
        return 4
    if level <= 16:
        return 5
    return 6  # Levels 17+


# =============================================================================
# Primary Abilities (multiclass prerequisites)
# =============================================================================

CLASS_PRIMARY_ABILITIES: dict[DndClass, tuple[Ability, ...]] = {
    DndClass.BARBARIAN: (Ability.STR,),
    DndClass.BARD: (Ability.CHA,),
    DndClass.CLERIC: (Ability.WIS,),
    DndClass.DRUID: (Ability.WIS,),
    DndClass.SORCERER: (Ability.CHA,),
    DndClass.FIGHTER: (Ability.STR, Ability.DEX),
    DndClass.WIZARD: (Ability.INT,),
    DndClass.MONK: (Ability.DEX, Ability.WIS),
    DndClass.PALADIN: (Ability.STR, Ability.CHA),
    DndClass.RANGER: (Ability.DEX, Ability.WIS),
    DndClass.ROGUE: (Ability.DEX,),
    DndClass.WARLOCK: (Ability.CHA,),
}


def get_primary_abilities(dnd_class: DndClass | str | None) -> tuple[Ability, ...]:
    """Get the primary abilities of a class (empty for unrecognized classes)."""
    resolved = canonical_class(dnd_class)
    if resolved is None:
        return ()
    return CLASS_PRIMARY_ABILITIES[resolved]



# =============================================================================
# Caster Archetypes
# =============================================================================

NON_CASTERS = frozenset({DndClass.MONK, DndClass.FIGHTER, DndClass.BARBARIAN, DndClass.ROGUE})
PACT_CASTERS = frozenset({DndClass.WARLOCK})
FULL_CASTERS = frozenset(
    {DndClass.WIZARD, DndClass.SORCERER, DndClass.BARD, DndClass.CLERIC, DndClass.DRUID}
)
HALF_CASTERS = frozenset({DndClass.PALADIN, DndClass.RANGER})


def get_caster_type(dnd_class: DndClass | str | None) -> CasterType | None:
    """Classify a class by spell slot progression.

    Returns:
        The CasterType, CasterType.NONE for the martial classes and for
        "no class selected", or None for an unrecognized class name.
    """
    if dnd_class is None or dnd_class == "":
        return CasterType.NONE
    resolved = canonical_class(dnd_class)
    if resolved is None:
        return None
    if resolved in NON_CASTERS:
        return CasterType.NONE
    if resolved in PACT_CASTERS:
        return CasterType.PACT
    if resolved in FULL_CASTERS:
        return CasterType.FULL
    return CasterType.HALF


# =============================================================================
# Spell Slots by Level
# =============================================================================

# Full casters: Barde, Clerc, Druide, Ensorceleur, Magicien
FULL_CASTER_SLOTS: dict[int, dict[int, int]] = {
    1:  {1: 2},
    2:  {1: 3},
    3:  {1: 4, 2: 2},
    4:  {1: 4, 2: 3},
    5:  {1: 4, 2: 3, 3: 2},
    6:  {1: 4, 2: 3, 3: 3},
    7:  {1: 4, 2: 3, 3: 3, 4: 1},
    8:  {1: 4, 2: 3, 3: 3, 4: 2},
    9:  {1: 4, 2: 3, 3: 3, 4: 3, 5: 1},
    10: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2},
    11: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1},
    12: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1},
    13: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1},
    14: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1},
    15: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1, 8: 1},
    16: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1, 8: 1},
    17: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2, 6: 1, 7: 1, 8: 1, 9: 1},
    18: {1: 4, 2: 3, 3: 3, 4: 3, 5: 3, 6: 1, 7: 1, 8: 1, 9: 1},
    19: {1: 4, 2: 3, 3: 3, 4: 3, 5: 3, 6: 2, 7: 1, 8: 1, 9: 1},
    20: {1: 4, 2: 3, 3: 3, 4: 3, 5: 3, 6: 2, 7: 2, 8: 1, 9: 1},
}

# Half casters: Paladin, Rôdeur (start at level 2)
HALF_CASTER_SLOTS: dict[int, dict[int, int]] = {
    1:  {},
    2:  {1: 2},
    3:  {1: 3},
    4:  {1: 3},
    5:  {1: 4, 2: 2},
    6:  {1: 4, 2: 2},
    7:  {1: 4, 2: 3},
    8:  {1: 4, 2: 3},
    9:  {1: 4, 2: 3, 3: 2},
    10: {1: 4, 2: 3, 3: 2},
    11: {1: 4, 2: 3, 3: 3},
    12: {1: 4, 2: 3, 3: 3},
    13: {1: 4, 2: 3, 3: 3, 4: 1},
    14: {1: 4, 2: 3, 3: 3, 4: 1},
    15: {1: 4, 2: 3, 3: 3, 4: 2},
    16: {1: 4, 2: 3, 3: 3, 4: 2},
    17: {1: 4, 2: 3, 3: 3, 4: 3, 5: 1},
    18: {1: 4, 2: 3, 3: 3, 4: 3, 5: 1},
    19: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2},
    20: {1: 4, 2: 3, 3: 3, 4: 3, 5: 2},
}

# Occultiste pact magic
PACT_MAGIC_SLOTS: dict[int, tuple[int, int]] = {
    # level: (pact_slots, pact_level)
    1:  (1, 1),
    2:  (2, 1),
    3:  (2, 2),
    4:  (2, 2),
    5:  (2, 3),
    6:  (2, 3),
    7:  (2, 4),
    8:  (2, 4),
    9:  (2, 5),
    10: (2, 5),
    11: (3, 5),
    12: (3, 5),
    13: (3, 5),
    14: (3, 5),
    15: (3, 5),
    16: (3, 5),
    17: (4, 5),
    18: (4, 5),
    19: (4, 5),
    20: (4, 5),
}


# =============================================================================
# Cantrips and Prepared Spells by Level
# =============================================================================
# Index 0 is unused so that tables can be indexed by character level.

BARD_CANTRIPS = (0, 2, 2, 2, 3, 3, 3, 3, 3, 3, 4, 4, 4, 4, 4, 4, 4, 4, 4, 4, 4)
SORCERER_CANTRIPS = (0, 4, 4, 4, 5, 5, 5, 5, 5, 5, 6, 6, 6, 6, 6, 6, 6, 6, 6, 6, 6)
WARLOCK_CANTRIPS = (0, 2, 2, 2, 3, 3, 3, 3, 3, 3, 4, 4, 4, 4, 4, 4, 4, 4, 4, 4, 4)
CLERIC_CANTRIPS = (0, 3, 3, 3, 4, 4, 4, 4, 4, 4, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5)
DRUID_CANTRIPS = (0, 2, 2, 2, 3, 3, 3, 3, 3, 3, 4, 4, 4, 4, 4, 4, 4, 4, 4, 4, 4)
WIZARD_CANTRIPS = (0, 3, 3, 3, 4, 4, 4, 4, 4, 4, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5, 5)

BARD_PREPARED = (0, 4, 5, 6, 7, 9, 10, 11, 12, 14, 15, 16, 16, 17, 17, 18, 18, 19, 20, 21, 22)
SORCERER_PREPARED = (0, 2, 4, 6, 7, 9, 10, 11, 12, 14, 15, 16, 16, 17, 17, 18, 18, 19, 20, 21, 22)
WARLOCK_PREPARED = (0, 2, 3, 4, 5, 6, 7, 8, 9, 10, 10, 11, 11, 12, 12, 13, 13, 14, 14, 15, 15)
CLERIC_PREPARED = (0, 4, 5, 6, 7, 9, 10, 11, 12, 14, 15, 16, 16, 17, 17, 18, 18, 19, 20, 21, 22)
DRUID_PREPARED = (0, 4, 5, 6, 7, 9, 10, 11, 12, 14, 15, 16, 16, 17, 17, 18, 18, 19, 20, 21, 22)
WIZARD_PREPARED = (0, 4, 5, 6, 7, 9, 10, 11, 12, 14, 15, 16, 16, 17, 18, 19, 21, 22, 23, 24, 25)
PALADIN_PREPARED = (0, 2, 3, 4, 5, 6, 6, 7, 7, 9, 9, 10, 10, 11, 11, 12, 12, 14, 14, 15, 15)
RANGER_PREPARED = (0, 2, 3, 4, 5, 6, 6, 7, 7, 9, 9, 10, 10, 11, 11, 12, 12, 14, 14, 15, 15)

# class -> (cantrip table or None, prepared table)
SPELL_KNOWLEDGE_TABLES: dict[DndClass, tuple[tuple[int, ...] | None, tuple[int, ...]]] = {
    DndClass.BARD: (BARD_CANTRIPS, BARD_PREPARED),
    DndClass.SORCERER: (SORCERER_CANTRIPS, SORCERER_PREPARED),
    DndClass.WARLOCK: (WARLOCK_CANTRIPS, WARLOCK_PREPARED),
    DndClass.CLERIC: (CLERIC_CANTRIPS, CLERIC_PREPARED),
    DndClass.DRUID: (DRUID_CANTRIPS, DRUID_PREPARED),
    DndClass.WIZARD: (WIZARD_CANTRIPS, WIZARD_PREPARED),
    DndClass.PALADIN: (None, PALADIN_PREPARED),
    DndClass.RANGER: (None, RANGER_PREPARED),
}


__all__ = [
    "CLASS_HIT_DIE",
    "get_hit_die",
    "get_average_hp_gain",
    "get_proficiency_bonus",
    "CLASS_PRIMARY_ABILITIES",
    "get_primary_abilities",
    "NON_CASTERS",
    "PACT_CASTERS",
    "FULL_CASTERS",
    "HALF_CASTERS",
    "get_caster_type",
    "FULL_CASTER_SLOTS",
    "HALF_CASTER_SLOTS",
    "PACT_MAGIC_SLOTS",
    "SPELL_KNOWLEDGE_TABLES",
]
