"""Pydantic V2 schemas and static rules data for the character tracker.

Submodules:
    enums: Enumeration types (DndClass, Ability, ResourcePool, ...)
    progression: Hit dice, spell slot and spell knowledge tables
    subclasses: Subclass catalog
    resources: Per-class resource models and the record translation layer
    character: The Character snapshot, SpellSlots and HitDice
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from dnd_tracker.models.enums import (
    Ability,
    CasterType,
    DndClass,
    LevelUpRejection,
    ResourcePool,
    RestType,
    canonical_class,
    normalize_label,
)

# =============================================================================
# Progression Data
# =============================================================================
from dnd_tracker.models.progression import (
    CLASS_HIT_DIE,
    CLASS_PRIMARY_ABILITIES,
    get_average_hp_gain,
    get_caster_type,
    get_hit_die,
    get_primary_abilities,
    get_proficiency_bonus,
)
from dnd_tracker.models.subclasses import (
    SUBCLASSES,
    canonical_subclass,
    get_subclass_options,
)

# =============================================================================
# Resources & Character
# =============================================================================
from dnd_tracker.models.resources import (
    BarbarianResources,
    BardResources,
    ChannelDivinity,
    ClassResources,
    ClericResources,
    DruidResources,
    FighterResources,
    MonkResources,
    PaladinResources,
    RangerResources,
    RogueResources,
    SorcererResources,
    UntrackedResources,
    WizardResources,
    resources_from_record,
)
from dnd_tracker.models.character import (
    Character,
    HitDice,
    SpellSlots,
    check_spell_level,
)


__all__ = [
    # Enums
    "Ability",
    "CasterType",
    "DndClass",
    "LevelUpRejection",
    "ResourcePool",
    "RestType",
    "canonical_class",
    "normalize_label",
    # Progression
    "CLASS_HIT_DIE",
    "CLASS_PRIMARY_ABILITIES",
    "get_average_hp_gain",
    "get_caster_type",
    "get_hit_die",
    "get_primary_abilities",
    "get_proficiency_bonus",
    "SUBCLASSES",
    "canonical_subclass",
    "get_subclass_options",
    # Resources
    "BarbarianResources",
    "BardResources",
    "ChannelDivinity",
    "ClassResources",
    "ClericResources",
    "DruidResources",
    "FighterResources",
    "MonkResources",
    "PaladinResources",
    "RangerResources",
    "RogueResources",
    "SorcererResources",
    "UntrackedResources",
    "WizardResources",
    "resources_from_record",
    # Character
    "Character",
    "HitDice",
    "SpellSlots",
    "check_spell_level",
]
