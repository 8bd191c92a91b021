"""Resource consumption ledger.

Increments and decrements the consumed counters of class resource pools
and spell slots, always re-checking the bounds against the current
maxima. A call that would push a counter outside ``[0, maximum]`` is not
an error: it returns the character unchanged with a reason the caller can
show to the player.

Example:
    >>> result = consume(character, ResourcePool.RAGE)
    >>> if not result.applied:
    ...     print(result.reason)
    >>> result = consume(character, SpellSlot(2))
"""

from __future__ import annotations

import math
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict

from dnd_tracker.core.exceptions import ValidationError
from dnd_tracker.core.logging import get_logger
from dnd_tracker.engine.abilities import get_ability_modifier
from dnd_tracker.models.character import Character, check_spell_level
from dnd_tracker.models.enums import Ability, DndClass, ResourcePool
from dnd_tracker.models.resources import WizardResources


logger = get_logger(__name__)


class SpellSlot(NamedTuple):
    """Address of the spell slot pool of one spell level."""

    level: int


Pool = ResourcePool | SpellSlot | str


class LedgerResult(BaseModel):
    """Outcome of a ledger operation.

    Attributes:
        applied: Whether the counter was changed.
        character: The updated character, or the input one when rejected.
        reason: Why the operation was rejected (None when applied).
    """

    model_config = ConfigDict(frozen=True)

    applied: bool
    character: Character
    reason: str | None = None


class ArcaneRecoveryInfo(BaseModel):
    """Arcane recovery budget for the current rest cycle.

    Attributes:
        budget: Spell levels recoverable per cycle.
        spent: Spell levels already recovered.
        remaining: Spell levels still recoverable.
        available: An exchange can currently be attempted.
    """

    model_config = ConfigDict(frozen=True)

    budget: int
    spent: int
    remaining: int
    available: bool


# =============================================================================
# Pool Addressing
# =============================================================================


def _coerce_pool(pool: Pool) -> ResourcePool | SpellSlot:
    if isinstance(pool, SpellSlot):
        check_spell_level(pool.level)
        return pool
    if isinstance(pool, ResourcePool):
        return pool
    try:
        return ResourcePool(str(pool).strip().lower())
    except ValueError:
        raise ValidationError(
            f"Unknown resource pool: {pool}",
            field_name="pool",
            invalid_value=pool,
        ) from None


def _check_amount(amount: int) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 1:
        raise ValidationError(
            "Amount must be a positive integer",
            field_name="amount",
            invalid_value=amount,
        )
    return amount


def _slot_fields(character: Character, spell_level: int) -> tuple[str, int, int] | None:
    """Find the ``(used_field, used, maximum)`` of a spell slot pool."""
    slots = character.spell_slots
    if (
        character.canonical_class is DndClass.WARLOCK
        and slots.has_pact_magic
        and slots.pact_level == spell_level
    ):
        return "used_pact_slots", slots.used_pact_slots or 0, slots.pact_slots or 0
    maximum = slots.maximum(spell_level)
    if maximum is None:
        return None
    return f"used{spell_level}", slots.used(spell_level), maximum


def _pool_label(pool: ResourcePool | SpellSlot) -> str:
    if isinstance(pool, SpellSlot):
        return f"level {pool.level} spell slot"
    return pool.value.replace("_", " ")


def _rejected(character: Character, pool: ResourcePool | SpellSlot, reason: str) -> LedgerResult:
    logger.info(
        "Ledger operation rejected",
        character_id=character.id,
        pool=_pool_label(pool),
        reason=reason,
    )
    return LedgerResult(applied=False, character=character, reason=reason)


def _pool_state(character: Character, pool: ResourcePool | SpellSlot) -> tuple[int, int] | None:
    if isinstance(pool, SpellSlot):
        fields = _slot_fields(character, pool.level)
        return None if fields is None else (fields[1], fields[2])
    charisma = 0
    if pool is ResourcePool.BARDIC_INSPIRATION:
        charisma = get_ability_modifier(character.abilities, Ability.CHA)
    return character.class_resources.pool_state(pool, charisma_modifier=charisma)


def _with_used(character: Character, pool: ResourcePool | SpellSlot, used: int) -> Character:
    if isinstance(pool, SpellSlot):
        used_field, _, _ = _slot_fields(character, pool.level)  # type: ignore[misc]
        slots = character.spell_slots.model_copy(update={used_field: used})
        return character.model_copy(update={"spell_slots": slots})
    resources = character.class_resources.with_used(pool, used)
    return character.model_copy(update={"class_resources": resources})


def remaining_uses(character: Character, pool: Pool) -> int | None:
    """Get the unspent uses of a pool, None if the character lacks it."""
    state = _pool_state(character, _coerce_pool(pool))
    if state is None:
        return None
    used, maximum = state
    return max(0, maximum - used)


# =============================================================================
# Consume / Recover
# =============================================================================


def consume(character: Character, pool: Pool, amount: int = 1) -> LedgerResult:
    """Spend uses from a resource pool or spell slot.

    Args:
        character: Current character snapshot.
        pool: A ResourcePool (or its name) or a SpellSlot.
        amount: Uses to spend, at least 1.

    Returns:
        LedgerResult; rejected if ``used + amount`` would exceed the maximum.

    Raises:
        ValidationError: If the pool name or amount is invalid.
    """
    target = _coerce_pool(pool)
    _check_amount(amount)

    state = _pool_state(character, target)
    if state is None:
        return _rejected(character, target, f"No {_pool_label(target)} available")
    used, maximum = state
    if used + amount > maximum:
        return _rejected(character, target, f"Not enough {_pool_label(target)} uses remaining")

    return LedgerResult(applied=True, character=_with_used(character, target, used + amount))


def recover(character: Character, pool: Pool, amount: int = 1) -> LedgerResult:
    """Give back spent uses to a resource pool or spell slot.

    Returns:
        LedgerResult; rejected if ``used - amount`` would go below zero.

    Raises:
        ValidationError: If the pool name or amount is invalid.
    """
    target = _coerce_pool(pool)
    _check_amount(amount)

    state = _pool_state(character, target)
    if state is None:
        return _rejected(character, target, f"No {_pool_label(target)} available")
    used, _ = state
    if used - amount < 0:
        return _rejected(character, target, f"No spent {_pool_label(target)} uses to recover")

    return LedgerResult(applied=True, character=_with_used(character, target, max(0, used - amount)))


def consume_spell_slot(character: Character, spell_level: int) -> LedgerResult:
    """Spend one spell slot of a level (the pact slot when it matches)."""
    return consume(character, SpellSlot(spell_level))


def recover_spell_slot(character: Character, spell_level: int) -> LedgerResult:
    """Restore one spell slot of a level."""
    return recover(character, SpellSlot(spell_level))


# =============================================================================
# Arcane Recovery
# =============================================================================


def arcane_recovery_budget(level: int) -> int:
    """Spell levels a wizard may recover per rest cycle."""
    return max(1, math.ceil(level / 2))


def arcane_recovery_info(character: Character) -> ArcaneRecoveryInfo | None:
    """Report the arcane recovery budget, None for non-wizards."""
    resources = character.class_resources
    if not isinstance(resources, WizardResources):
        return None
    budget = arcane_recovery_budget(character.level)
    spent = resources.arcane_recovery_slots_used
    remaining = max(0, budget - spent)
    return ArcaneRecoveryInfo(
        budget=budget,
        spent=spent,
        remaining=remaining,
        available=(
            resources.arcane_recovery and not resources.used_arcane_recovery and remaining > 0
        ),
    )


def exchange_arcane_recovery(character: Character, spell_level: int) -> LedgerResult:
    """Restore one spent spell slot using the arcane recovery budget.

    The budget is counted in spell levels, not in slots: restoring a
    level 3 slot spends 3 units.

    Args:
        character: Current character snapshot.
        spell_level: Level of the slot to restore (1-9).

    Returns:
        LedgerResult; rejected for non-wizards, an exhausted budget, a level
        with no spent slot, or a level above the remaining budget.

    Raises:
        ValidationError: If the spell level is outside 1-9.
    """
    check_spell_level(spell_level)
    target = SpellSlot(spell_level)
    resources = character.class_resources
    if character.canonical_class is not DndClass.WIZARD or not isinstance(resources, WizardResources):
        return _rejected(character, target, "Only a Magicien can use arcane recovery")
    if not resources.arcane_recovery:
        return _rejected(character, target, "Arcane recovery is not available")
    if resources.used_arcane_recovery:
        return _rejected(character, target, "Arcane recovery already used this rest")

    budget = arcane_recovery_budget(character.level)
    spent = resources.arcane_recovery_slots_used
    if spent >= budget:
        return _rejected(character, target, "Arcane recovery budget exhausted")

    slots = character.spell_slots
    if slots.used(spell_level) < 1:
        return _rejected(character, target, f"No spent level {spell_level} slot to recover")
    if spell_level > budget - spent:
        return _rejected(
            character,
            target,
            f"Level {spell_level} exceeds the remaining arcane recovery budget ({budget - spent})",
        )

    spent += spell_level
    new_slots = slots.model_copy(
        update={f"used{spell_level}": max(0, slots.used(spell_level) - 1)}
    )
    new_resources = resources.model_copy(
        update={
            "arcane_recovery_slots_used": spent,
            "used_arcane_recovery": spent >= budget,
        }
    )
    logger.info(
        "Arcane recovery exchanged",
        character_id=character.id,
        spell_level=spell_level,
        spent=spent,
        budget=budget,
    )
    return LedgerResult(
        applied=True,
        character=character.model_copy(
            update={"spell_slots": new_slots, "class_resources": new_resources}
        ),
    )


__all__ = [
    "SpellSlot",
    "LedgerResult",
    "ArcaneRecoveryInfo",
    "remaining_uses",
    "consume",
    "recover",
    "consume_spell_slot",
    "recover_spell_slot",
    "arcane_recovery_budget",
    "arcane_recovery_info",
    "exchange_arcane_recovery",
]
