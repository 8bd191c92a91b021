"""Rules engine for the D&D character tracker.

Every operation takes a character snapshot (or the fields it needs) and
returns an updated copy. Nothing here persists state.

Submodules:
    abilities: Ability modifier resolution from loosely-shaped data
    spell_slots: Spell slot tables by caster archetype
    spell_knowledge: Cantrip and prepared spell counts
    class_resources: Per-class resource policy
    ledger: Consumption and recovery of pools, arcane recovery
    level_up: The level-up transition and its preview
    rest: Short and long rests
    dice: Dice rolls (d20 library)
    multiclass: Multiclass prerequisites and proficiency bonus

Example:
    >>> from dnd_tracker.engine import level_up, consume, ResourcePool
    >>>
    >>> character = level_up(character, hp_gain=7, chosen_subclass="Voie du Berserker")
    >>> result = consume(character, ResourcePool.RAGE)
    >>> if result.applied:
    ...     character = result.character
"""

from __future__ import annotations

# =============================================================================
# Table Resolution
# =============================================================================
from dnd_tracker.engine.abilities import (
    calculate_modifier,
    get_ability_modifier,
    get_ability_modifiers,
    get_ability_score,
)
from dnd_tracker.engine.class_resources import (
    bardic_inspiration_cap,
    resolve_class_resources,
)
from dnd_tracker.engine.spell_knowledge import (
    NoSpellKnowledge,
    PreparedSpellKnowledge,
    SpellKnowledge,
    resolve_spell_knowledge,
)
from dnd_tracker.engine.spell_slots import resolve_spell_slots

# =============================================================================
# Dice
# =============================================================================
from dnd_tracker.engine.dice import (
    DiceRoll,
    roll,
    roll_hit_die,
    roll_hp_gain,
)

# =============================================================================
# Ledger
# =============================================================================
from dnd_tracker.engine.ledger import (
    ArcaneRecoveryInfo,
    LedgerResult,
    SpellSlot,
    arcane_recovery_budget,
    arcane_recovery_info,
    consume,
    consume_spell_slot,
    exchange_arcane_recovery,
    recover,
    recover_spell_slot,
    remaining_uses,
)

# =============================================================================
# Transitions
# =============================================================================
from dnd_tracker.engine.level_up import (
    LevelUpPreview,
    level_up,
    preview_level_up,
    requires_subclass_choice,
)
from dnd_tracker.engine.multiclass import (
    AbilityShortfall,
    MulticlassCheck,
    get_character_proficiency_bonus,
    get_total_level,
    validate_multiclass_prerequisites,
)
from dnd_tracker.engine.rest import (
    RestResult,
    long_rest,
    short_rest,
)
from dnd_tracker.models.enums import ResourcePool


__all__ = [
    # Table resolution
    "calculate_modifier",
    "get_ability_modifier",
    "get_ability_modifiers",
    "get_ability_score",
    "resolve_spell_slots",
    "NoSpellKnowledge",
    "PreparedSpellKnowledge",
    "SpellKnowledge",
    "resolve_spell_knowledge",
    "bardic_inspiration_cap",
    "resolve_class_resources",
    # Dice
    "DiceRoll",
    "roll",
    "roll_hit_die",
    "roll_hp_gain",
    # Ledger
    "ResourcePool",
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
    # Transitions
    "LevelUpPreview",
    "requires_subclass_choice",
    "preview_level_up",
    "level_up",
    "RestResult",
    "short_rest",
    "long_rest",
    # Multiclassing
    "AbilityShortfall",
    "MulticlassCheck",
    "get_total_level",
    "get_character_proficiency_bonus",
    "validate_multiclass_prerequisites",
]
