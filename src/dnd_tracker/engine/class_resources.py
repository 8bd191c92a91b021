"""Per-class resource policy.

Each rule recomputes the maxima of a class's resource pools from the
character level (and, for the Barde, the live charisma modifier). Rules
run on class or level changes and on level-up; they reset consumed
counters, except where noted. Classes without a rule keep their resources
unchanged.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

from dnd_tracker.core.constants import SNEAK_ATTACK_DIE, SUBCLASS_MILESTONE_LEVEL, clamp_level
from dnd_tracker.core.logging import get_logger
from dnd_tracker.engine.abilities import get_ability_modifier
from dnd_tracker.models.enums import Ability, DndClass, canonical_class
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
    WizardResources,
    resources_from_record,
)


logger = get_logger(__name__)

R = TypeVar("R", bound=BaseModel)
ResourceRule = Callable[[Any, int, Any], ClassResources]

_resource_rules: dict[DndClass, ResourceRule] = {}


def resource_rule(dnd_class: DndClass) -> Callable[[Callable[[R, int, Any], R]], Callable[[R, int, Any], R]]:
    """Register the resource rule of a class.

    A rule receives the class's current resources, the clamped level and
    the raw ability data, and returns the recomputed resources.
    """

    def decorator(func: Callable[[R, int, Any], R]) -> Callable[[R, int, Any], R]:
        _resource_rules[dnd_class] = func
        return func

    return decorator


# =============================================================================
# Formulas
# =============================================================================


def rage_uses(level: int) -> int:
    return min(6, (level + 3) // 4 + 2)


def bardic_inspiration_cap(abilities: Any) -> int:
    """Bardic inspiration uses: the charisma modifier, never negative."""
    return max(0, get_ability_modifier(abilities, Ability.CHA))


def cleric_channel_divinity_uses(level: int) -> int:
    return 2 if level >= 6 else 1


def action_surge_uses(level: int) -> int:
    return 2 if level >= 17 else 1


def lay_on_hands_pool(level: int) -> int:
    return level * 5


def paladin_channel_divinity_uses(level: int) -> int | None:
    """Paladin channel divinity uses, None below the subclass milestone."""
    if level < SUBCLASS_MILESTONE_LEVEL:
        return None
    return 3 if level >= 11 else 2


def favored_foe_uses(level: int) -> int:
    return max(1, (level + 3) // 4)


def sneak_attack_dice(level: int) -> str:
    return f"{math.ceil(level / 2)}{SNEAK_ATTACK_DIE}"


# =============================================================================
# Rules
# =============================================================================


@resource_rule(DndClass.BARBARIAN)
def _barbarian(resources: BarbarianResources, level: int, abilities: Any) -> BarbarianResources:
    return resources.model_copy(update={"rage": rage_uses(level), "used_rage": 0})


@resource_rule(DndClass.BARD)
def _bard(resources: BardResources, level: int, abilities: Any) -> BardResources:
    cap = bardic_inspiration_cap(abilities)
    clamped = min(max(resources.used_bardic_inspiration, 0), cap)
    if clamped == resources.used_bardic_inspiration:
        return resources
    return resources.model_copy(update={"used_bardic_inspiration": clamped})


@resource_rule(DndClass.CLERIC)
def _cleric(resources: ClericResources, level: int, abilities: Any) -> ClericResources:
    return resources.model_copy(
        update={"channel_divinity": cleric_channel_divinity_uses(level), "used_channel_divinity": 0}
    )


@resource_rule(DndClass.DRUID)
def _druid(resources: DruidResources, level: int, abilities: Any) -> DruidResources:
    return resources.model_copy(update={"wild_shape": 2, "used_wild_shape": 0})


@resource_rule(DndClass.SORCERER)
def _sorcerer(resources: SorcererResources, level: int, abilities: Any) -> SorcererResources:
    return resources.model_copy(update={"sorcery_points": level, "used_sorcery_points": 0})


@resource_rule(DndClass.FIGHTER)
def _fighter(resources: FighterResources, level: int, abilities: Any) -> FighterResources:
    return resources.model_copy(
        update={"action_surge": action_surge_uses(level), "used_action_surge": 0}
    )


@resource_rule(DndClass.WIZARD)
def _wizard(resources: WizardResources, level: int, abilities: Any) -> WizardResources:
    return resources.model_copy(
        update={
            "arcane_recovery": True,
            "used_arcane_recovery": False,
            "arcane_recovery_slots_used": 0,
        }
    )


@resource_rule(DndClass.MONK)
def _monk(resources: MonkResources, level: int, abilities: Any) -> MonkResources:
    return resources.model_copy(update={"ki_points": level, "used_ki_points": 0})


@resource_rule(DndClass.PALADIN)
def _paladin(resources: PaladinResources, level: int, abilities: Any) -> PaladinResources:
    cap = paladin_channel_divinity_uses(level)
    channel_divinity: ChannelDivinity | None = None
    if cap is not None:
        # An existing pool keeps its used counter, clamped to the new cap
        previous_used = resources.channel_divinity.used if resources.channel_divinity else 0
        channel_divinity = ChannelDivinity(maximum=cap, used=min(max(previous_used, 0), cap))
    return resources.model_copy(
        update={
            "lay_on_hands": lay_on_hands_pool(level),
            "used_lay_on_hands": 0,
            "channel_divinity": channel_divinity,
        }
    )


@resource_rule(DndClass.RANGER)
def _ranger(resources: RangerResources, level: int, abilities: Any) -> RangerResources:
    return resources.model_copy(
        update={"favored_foe": favored_foe_uses(level), "used_favored_foe": 0}
    )


@resource_rule(DndClass.ROGUE)
def _rogue(resources: RogueResources, level: int, abilities: Any) -> RogueResources:
    return resources.model_copy(update={"sneak_attack": sneak_attack_dice(level)})


def resolve_class_resources(
    dnd_class: DndClass | str | None,
    level: int,
    existing: ClassResources | Mapping[str, Any] | None = None,
    abilities: Any = None,
) -> ClassResources:
    """Recompute class resources for a class at a level.

    Args:
        dnd_class: The character's class (any recognized spelling).
        level: Character level; clamped into 1-20.
        existing: Current resources, as a model of any class or an open
            record. Keys foreign to the class are kept.
        abilities: Raw ability data, read for the charisma modifier.

    Returns:
        The resources model of the class. Classes without a rule get their
        existing resources back unchanged.
    """
    resolved = canonical_class(dnd_class)
    current = resources_from_record(dnd_class, existing)
    rule = _resource_rules.get(resolved) if resolved is not None else None
    if rule is None:
        return current

    lvl = clamp_level(level)
    updated = rule(current, lvl, abilities)
    logger.debug("Class resources resolved", dnd_class=resolved.value, level=lvl)
    return updated


__all__ = [
    "resource_rule",
    "rage_uses",
    "bardic_inspiration_cap",
    "cleric_channel_divinity_uses",
    "action_surge_uses",
    "lay_on_hands_pool",
    "paladin_channel_divinity_uses",
    "favored_foe_uses",
    "sneak_attack_dice",
    "resolve_class_resources",
]
