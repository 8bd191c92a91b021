"""Ability modifier resolution from loosely-shaped ability data.

Character records store abilities in several shapes depending on which
screen last wrote them:

- a list of entries such as ``{"name": "Charisme", "modifier": 2}`` or
  ``{"abbr": "CHA", "score": "14"}``;
- a mapping keyed by ability name or abbreviation, whose values are either
  a bare score or an object exposing ``score``/``total``/``base``.

Resolution never fails: when nothing matches, the modifier is 0.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from dnd_tracker.core.constants import DEFAULT_ABILITY_SCORE
from dnd_tracker.core.logging import get_logger
from dnd_tracker.models.enums import Ability, normalize_label


logger = get_logger(__name__)

_NAME_FIELDS = ("name", "abbr", "key", "code")
_MODIFIER_FIELDS = ("modifier", "mod", "modValue", "value")
_SCORE_FIELDS = ("score", "total", "base")


def calculate_modifier(score: int) -> int:
    """Calculate the ability modifier for a score: floor((score - 10) / 2)."""
    return (score - 10) // 2


def _to_number(value: Any) -> int | None:
    """Read an integer from a number or a decorated string such as "+2"."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return math.floor(value) if math.isfinite(value) else None
    if isinstance(value, str):
        cleaned = re.sub(r"[^\d+-]", "", value)
        try:
            return int(cleaned)
        except ValueError:
            return None
    return None


def _field(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def _modifier_from_entry(entry: Any) -> int | None:
    """Modifier from an ability entry: direct modifier first, then score."""
    for name in _MODIFIER_FIELDS:
        number = _to_number(_field(entry, name))
        if number is not None:
            return number
    for name in _SCORE_FIELDS:
        number = _to_number(_field(entry, name))
        if number is not None:
            return calculate_modifier(number)
    return None


def _find_in_sequence(abilities: Sequence[Any], ability: Ability) -> Any | None:
    for entry in abilities:
        for name in _NAME_FIELDS:
            label = _field(entry, name)
            if label and normalize_label(str(label)) in ability.aliases:
                return entry
    return None


def _find_in_mapping(abilities: Mapping[str, Any], ability: Ability) -> Any | None:
    for key, value in abilities.items():
        if normalize_label(str(key)) in ability.aliases:
            return value
    # Looser match for keys such as "charisma_score"
    long_names = [alias for alias in ability.aliases if len(alias) > 3]
    for key, value in abilities.items():
        normalized = normalize_label(str(key))
        if any(alias in normalized for alias in long_names):
            return value
    return None


def _find_ability(abilities: Any, ability: Ability) -> Any | None:
    """Locate the raw value or entry stored for an ability."""
    if abilities is None:
        return None
    if isinstance(abilities, BaseModel):
        abilities = abilities.model_dump()
    if isinstance(abilities, Mapping):
        return _find_in_mapping(abilities, ability)
    if isinstance(abilities, Sequence) and not isinstance(abilities, str):
        return _find_in_sequence(abilities, ability)
    return None


def get_ability_modifier(abilities: Any, ability: Ability | str) -> int:
    """Resolve the modifier of one ability from loosely-shaped data.

    Args:
        abilities: Ability data as a list of entries or a mapping.
        ability: The ability, in any recognized spelling (e.g. "CHA",
            "charisme", Ability.CHA).

    Returns:
        The modifier, or 0 when the ability cannot be found.
    """
    target = Ability.parse(ability)
    if target is None:
        return 0

    value = _find_ability(abilities, target)
    if value is None:
        logger.debug("Ability not found, using modifier 0", ability=target.value)
        return 0
    number = _to_number(value)
    if number is not None:
        return calculate_modifier(number)
    return _modifier_from_entry(value) or 0


def get_ability_score(abilities: Any, ability: Ability | str) -> int:
    """Resolve the score of one ability from loosely-shaped data.

    Only scores are read; an entry holding nothing but a modifier counts
    as missing.

    Returns:
        The score, or 10 when the ability or its score cannot be found.
    """
    target = Ability.parse(ability)
    if target is None:
        return DEFAULT_ABILITY_SCORE

    value = _find_ability(abilities, target)
    number = _to_number(value)
    if number is not None:
        return number
    for name in _SCORE_FIELDS:
        number = _to_number(_field(value, name))
        if number is not None:
            return number
    return DEFAULT_ABILITY_SCORE


def get_ability_modifiers(abilities: Any) -> dict[Ability, int]:
    """Resolve all six modifiers at once."""
    return {ability: get_ability_modifier(abilities, ability) for ability in Ability}


__all__ = [
    "calculate_modifier",
    "get_ability_modifier",
    "get_ability_modifiers",
    "get_ability_score",
]
