"""Enumeration types for the D&D character tracker.

Class names are stored in the French spelling used by the persisted
character records; English and accent-free spellings are accepted on
input through :func:`canonical_class`.
"""

from __future__ import annotations

import re
import unicodedata
from enum import StrEnum


def normalize_label(text: str) -> str:
    """Normalize a free-text label for alias matching.

    Lowercases, strips accents and parenthesised suffixes, and collapses
    any run of non-alphanumeric characters into a single space.

    Example:
        >>> normalize_label("  Rôdeur (Chasseur) ")
        'rodeur'
    """
    decomposed = unicodedata.normalize("NFD", (text or "").strip().lower())
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    stripped = re.sub(r"\s*\([^)]*\)\s*", " ", stripped)
    stripped = re.sub(r"[^a-z0-9]+", " ", stripped)
    return re.sub(r"\s{2,}", " ", stripped).strip()


class DndClass(StrEnum):
    """The twelve character classes."""

    BARBARIAN = "Barbare"
    BARD = "Barde"
    CLERIC = "Clerc"
    DRUID = "Druide"
    SORCERER = "Ensorceleur"
    FIGHTER = "Guerrier"
    WIZARD = "Magicien"
    MONK = "Moine"
    PALADIN = "Paladin"
    RANGER = "Rôdeur"
    ROGUE = "Roublard"
    WARLOCK = "Occultiste"


_CLASS_ALIASES: dict[DndClass, tuple[str, ...]] = {
    DndClass.BARBARIAN: ("barbare", "barbarian"),
    DndClass.BARD: ("barde", "bard"),
    DndClass.CLERIC: ("clerc", "cleric", "pretre", "pretres"),
    DndClass.DRUID: ("druide", "druid"),
    DndClass.SORCERER: ("ensorceleur", "sorcerer", "sorceror"),
    DndClass.FIGHTER: ("guerrier", "fighter"),
    DndClass.WIZARD: ("magicien", "wizard", "mage"),
    DndClass.MONK: ("moine", "monk"),
    DndClass.PALADIN: ("paladin",),
    DndClass.RANGER: ("rodeur", "ranger"),
    DndClass.ROGUE: ("roublard", "rogue", "voleur", "thief"),
    DndClass.WARLOCK: ("occultiste", "warlock", "sorcier"),
}

_ALIAS_TO_CLASS: dict[str, DndClass] = {
    alias: dnd_class
    for dnd_class, aliases in _CLASS_ALIASES.items()
    for alias in aliases
}


def canonical_class(name: str | DndClass | None) -> DndClass | None:
    """Resolve any recognized spelling of a class name.

    Args:
        name: Class name in French or English, any case, with or without
            accents or a parenthesised suffix.

    Returns:
        The matching DndClass, or None when the name is empty or unknown.
    """
    if name is None:
        return None
    if isinstance(name, DndClass):
        return name
    return _ALIAS_TO_CLASS.get(normalize_label(str(name)))


class CasterType(StrEnum):
    """Spell slot progression archetype."""

    NONE = "none"
    FULL = "full"
    HALF = "half"
    PACT = "pact"


class Ability(StrEnum):
    """The six ability scores.

    Values are the English names; :attr:`aliases` lists every spelling the
    ability resolver recognizes.
    """

    STR = "strength"
    DEX = "dexterity"
    CON = "constitution"
    INT = "intelligence"
    WIS = "wisdom"
    CHA = "charisma"

    @property
    def aliases(self) -> tuple[str, ...]:
        """Recognized lowercase spellings and abbreviations."""
        return _ABILITY_ALIASES[self]

    @classmethod
    def parse(cls, name: str | Ability) -> Ability | None:
        """Resolve an ability from any recognized spelling (case-insensitive)."""
        if isinstance(name, Ability):
            return name
        key = normalize_label(str(name))
        for ability, aliases in _ABILITY_ALIASES.items():
            if key in aliases:
                return ability
        return None


_ABILITY_ALIASES: dict[Ability, tuple[str, ...]] = {
    Ability.STR: ("strength", "force", "str", "for"),
    Ability.DEX: ("dexterity", "dexterite", "dex"),
    Ability.CON: ("constitution", "con"),
    Ability.INT: ("intelligence", "int"),
    Ability.WIS: ("wisdom", "sagesse", "wis", "sag"),
    Ability.CHA: ("charisma", "charisme", "cha", "car"),
}


class ResourcePool(StrEnum):
    """Consumable class resource pools tracked by the ledger."""

    RAGE = "rage"
    BARDIC_INSPIRATION = "bardic_inspiration"
    CHANNEL_DIVINITY = "channel_divinity"
    WILD_SHAPE = "wild_shape"
    SORCERY_POINTS = "sorcery_points"
    ACTION_SURGE = "action_surge"
    KI_POINTS = "ki_points"
    LAY_ON_HANDS = "lay_on_hands"
    FAVORED_FOE = "favored_foe"

    @property
    def used_key(self) -> str:
        """Record key of this pool's consumed counter."""
        return f"used_{self.value}"


class RestType(StrEnum):
    """Rest durations."""

    SHORT = "short_rest"
    LONG = "long_rest"


class LevelUpRejection(StrEnum):
    """Reasons a level-up transition can be rejected."""

    MAX_LEVEL_REACHED = "max_level_reached"
    HP_GAIN_TOO_LOW = "hp_gain_too_low"
    HP_GAIN_TOO_HIGH = "hp_gain_too_high"
    SUBCLASS_REQUIRED = "subclass_required"


__all__ = [
    "normalize_label",
    "DndClass",
    "canonical_class",
    "CasterType",
    "Ability",
    "ResourcePool",
    "RestType",
    "LevelUpRejection",
]
