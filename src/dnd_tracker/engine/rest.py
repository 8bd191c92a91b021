"""Short and long rests.

Rests are the only operations that reset consumed counters without a
full recomputation of the maxima.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from dnd_tracker.core.constants import MAX_SPELL_LEVEL
from dnd_tracker.core.exceptions import RestUnavailableError
from dnd_tracker.core.logging import character_context, get_logger
from dnd_tracker.engine.abilities import get_ability_modifier
from dnd_tracker.engine.dice import roll_hit_die
from dnd_tracker.models.character import Character, HitDice, SpellSlots
from dnd_tracker.models.enums import Ability, DndClass, ResourcePool, RestType
from dnd_tracker.models.progression import get_hit_die
from dnd_tracker.models.resources import PaladinResources, WizardResources, resources_from_record


logger = get_logger(__name__)


class RestResult(BaseModel):
    """Outcome of a rest.

    Attributes:
        rest_type: Short or long rest.
        character: The rested character.
        hp_restored: Hit points actually regained.
        recovered: Names of the pools that were restored.
    """

    model_config = ConfigDict(frozen=True)

    rest_type: RestType
    character: Character
    hp_restored: int
    recovered: list[str]


def short_rest(character: Character, roll: int | None = None) -> RestResult:
    """Spend one hit die and recover short-rest features.

    Args:
        character: Current character snapshot.
        roll: Face rolled on the hit die. Rolled with the class's die when
            omitted.

    Returns:
        RestResult with the healed character.

    Raises:
        RestUnavailableError: If no hit die is left to spend.
    """
    if character.hit_dice.available < 1:
        raise RestUnavailableError(
            "No hit dice remaining for a short rest",
            details={"hit_dice_used": character.hit_dice.used, "hit_dice_total": character.hit_dice.total},
        )

    if roll is None:
        roll = roll_hit_die(get_hit_die(character.dnd_class))
    healing = max(1, roll + get_ability_modifier(character.abilities, Ability.CON))
    new_hp = min(character.max_hp, character.current_hp + healing)
    hp_restored = max(0, new_hp - character.current_hp)

    recovered: list[str] = []
    resources = character.class_resources
    if isinstance(resources, WizardResources) and (
        resources.used_arcane_recovery or resources.arcane_recovery_slots_used
    ):
        resources = resources.model_copy(
            update={"used_arcane_recovery": False, "arcane_recovery_slots_used": 0}
        )
        recovered.append("arcane_recovery")
    elif isinstance(resources, PaladinResources) and resources.channel_divinity is not None:
        if resources.channel_divinity.used > 0:
            resources = resources.with_used(
                ResourcePool.CHANNEL_DIVINITY, resources.channel_divinity.used - 1
            )
            recovered.append("channel_divinity")

    slots = character.spell_slots
    if character.canonical_class is DndClass.WARLOCK and (slots.used_pact_slots or 0) > 0:
        slots = slots.model_copy(update={"used_pact_slots": 0})
        recovered.append("pact_slots")

    rested = character.model_copy(
        update={
            "current_hp": max(character.current_hp, new_hp),
            "hit_dice": character.hit_dice.model_copy(update={"used": character.hit_dice.used + 1}),
            "class_resources": resources,
            "spell_slots": slots,
        }
    )
    with character_context(character):
        logger.info("Short rest taken", hp_restored=hp_restored, recovered=recovered)
    return RestResult(
        rest_type=RestType.SHORT,
        character=rested,
        hp_restored=hp_restored,
        recovered=recovered,
    )


def _reset_resource_record(record: dict[str, Any]) -> dict[str, Any]:
    reset: dict[str, Any] = {}
    for key, value in record.items():
        if key.startswith("used_"):
            value = False if isinstance(value, bool) else 0
        elif key == "arcane_recovery_slots_used":
            value = 0
        reset[key] = value
    return reset


def _reset_spell_slots(slots: SpellSlots) -> SpellSlots:
    update: dict[str, Any] = {}
    for spell_level in range(1, MAX_SPELL_LEVEL + 1):
        if getattr(slots, f"used{spell_level}") is not None:
            update[f"used{spell_level}"] = 0
    if slots.used_pact_slots is not None:
        update["used_pact_slots"] = 0
    return slots.model_copy(update=update)


def long_rest(character: Character) -> RestResult:
    """Restore hit points, every consumed counter and half the hit dice.

    Returns:
        RestResult with the rested character.
    """
    record = character.class_resources.to_record()
    resources = resources_from_record(character.dnd_class, _reset_resource_record(record))
    recovered = sorted(
        key.removeprefix("used_")
        for key, value in record.items()
        if key.startswith("used_") and value
    )
    slots = character.spell_slots
    if any(slots.used(spell_level) for spell_level in range(1, MAX_SPELL_LEVEL + 1)):
        recovered.append("spell_slots")
    if slots.used_pact_slots:
        recovered.append("pact_slots")

    recovered_dice = character.level // 2
    hit_dice = HitDice(
        total=character.level,
        used=max(0, character.hit_dice.used - recovered_dice),
    )
    hp_restored = max(0, character.max_hp - character.current_hp)

    rested = character.model_copy(
        update={
            "current_hp": max(character.current_hp, character.max_hp),
            "temporary_hp": 0,
            "hit_dice": hit_dice,
            "spell_slots": _reset_spell_slots(character.spell_slots),
            "class_resources": resources,
        }
    )
    with character_context(character):
        logger.info(
            "Long rest taken",
            hp_restored=hp_restored,
            hit_dice_recovered=character.hit_dice.used - hit_dice.used,
        )
    return RestResult(
        rest_type=RestType.LONG,
        character=rested,
        hp_restored=hp_restored,
        recovered=recovered,
    )


__all__ = [
    "RestResult",
    "short_rest",
    "long_rest",
]
