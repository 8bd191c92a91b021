"""Spell slot resolution by caster archetype and level.

Maxima are refreshed from the progression tables while consumed counters
are carried over. Pact magic (Occultiste) and per-level slots are mutually
exclusive: resolving one archetype clears the other's fields.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dnd_tracker.core.config import get_settings
from dnd_tracker.core.constants import HALF_CASTER_MAX_SPELL_LEVEL, MAX_SPELL_LEVEL, clamp_level
from dnd_tracker.core.logging import get_logger
from dnd_tracker.models.character import SpellSlots
from dnd_tracker.models.enums import CasterType, DndClass
from dnd_tracker.models.progression import (
    FULL_CASTER_SLOTS,
    HALF_CASTER_SLOTS,
    PACT_MAGIC_SLOTS,
    get_caster_type,
)


logger = get_logger(__name__)

_PACT_FIELDS = ("pact_slots", "pact_level", "used_pact_slots")


def _as_slots(current: SpellSlots | Mapping[str, Any] | None) -> SpellSlots:
    if current is None:
        return SpellSlots()
    if isinstance(current, SpellSlots):
        return current
    return SpellSlots.model_validate(dict(current))


def _resolve_pact_magic(current: SpellSlots, level: int, reclamp: bool) -> SpellSlots:
    pact_slots, pact_level = PACT_MAGIC_SLOTS[level]
    used = current.used_pact_slots or 0
    if reclamp:
        used = min(max(used, 0), pact_slots)

    update: dict[str, Any] = {
        "pact_slots": pact_slots,
        "pact_level": pact_level,
        "used_pact_slots": used,
    }
    for spell_level in range(1, MAX_SPELL_LEVEL + 1):
        update[f"level{spell_level}"] = None
        update[f"used{spell_level}"] = None
    return current.model_copy(update=update)


def _resolve_slot_table(
    current: SpellSlots,
    granted: dict[int, int],
    tracked_levels: int,
    reclamp: bool,
) -> SpellSlots:
    update: dict[str, Any] = dict.fromkeys(_PACT_FIELDS)
    for spell_level in range(1, MAX_SPELL_LEVEL + 1):
        maximum = granted.get(spell_level)
        if maximum is not None:
            update[f"level{spell_level}"] = maximum
        elif reclamp:
            update[f"level{spell_level}"] = None

        used = getattr(current, f"used{spell_level}")
        if used is None and spell_level <= tracked_levels:
            used = 0
        if used is not None and reclamp:
            used = min(max(used, 0), maximum or 0)
        update[f"used{spell_level}"] = used
    return current.model_copy(update=update)


def resolve_spell_slots(
    dnd_class: DndClass | str | None,
    level: int,
    current_slots: SpellSlots | Mapping[str, Any] | None = None,
    *,
    reclamp: bool | None = None,
) -> SpellSlots:
    """Compute the spell slots of a class at a level.

    Args:
        dnd_class: The character's class (any recognized spelling).
        level: Character level; clamped into 1-20.
        current_slots: Existing slots whose consumed counters are kept.
        reclamp: Clamp consumed counters to the new maxima. Defaults to
            the ``rules.reclamp_used_counters`` setting.

    Returns:
        Updated slots. Non-casters and unrecognized classes get
        ``current_slots`` back unchanged.
    """
    current = _as_slots(current_slots)
    caster_type = get_caster_type(dnd_class)
    if caster_type is None or caster_type is CasterType.NONE:
        return current

    lvl = clamp_level(level)
    if reclamp is None:
        reclamp = get_settings().rules.reclamp_used_counters

    if caster_type is CasterType.PACT:
        resolved = _resolve_pact_magic(current, lvl, reclamp)
    elif caster_type is CasterType.FULL:
        resolved = _resolve_slot_table(current, FULL_CASTER_SLOTS[lvl], MAX_SPELL_LEVEL, reclamp)
    else:
        resolved = _resolve_slot_table(
            current, HALF_CASTER_SLOTS[lvl], HALF_CASTER_MAX_SPELL_LEVEL, reclamp
        )

    logger.debug(
        "Spell slots resolved",
        dnd_class=str(dnd_class),
        level=lvl,
        caster_type=caster_type.value,
    )
    return resolved


__all__ = ["resolve_spell_slots"]
