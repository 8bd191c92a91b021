"""Level-up transition.

A level-up is a single ``N -> N+1`` step committed by the player. Every
precondition is checked before anything is computed, so a rejected
level-up never leaves a partially updated character behind.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import NoReturn

from pydantic import BaseModel, ConfigDict

from dnd_tracker.core.constants import MAX_CHARACTER_LEVEL, SUBCLASS_MILESTONE_LEVEL
from dnd_tracker.core.exceptions import LevelUpRejectedError
from dnd_tracker.core.logging import character_context, get_logger
from dnd_tracker.engine.abilities import get_ability_modifier
from dnd_tracker.engine.class_resources import resolve_class_resources
from dnd_tracker.engine.spell_knowledge import SpellKnowledge, resolve_spell_knowledge
from dnd_tracker.engine.spell_slots import resolve_spell_slots
from dnd_tracker.models.character import Character, HitDice, SpellSlots
from dnd_tracker.models.enums import Ability, LevelUpRejection
from dnd_tracker.models.progression import get_average_hp_gain, get_hit_die
from dnd_tracker.models.subclasses import canonical_subclass, get_subclass_options


logger = get_logger(__name__)


class LevelUpPreview(BaseModel):
    """What the level-up dialog shows before the player commits.

    Attributes:
        current_level: Level before the transition.
        new_level: Level after the transition.
        hit_die: Hit die size of the class.
        average_hp_gain: Fixed average gain (half the die plus one).
        theoretical_hp_gain: Average gain plus the constitution modifier.
        max_hp_gain: Largest hit point gain the transition accepts.
        requires_subclass: A subclass must be chosen to commit.
        subclass_options: Subclasses the player can choose from.
        spell_slots: Spell slots at the new level.
        spell_knowledge: Cantrip and prepared counts at the new level.
    """

    model_config = ConfigDict(frozen=True)

    current_level: int
    new_level: int
    hit_die: int
    average_hp_gain: int
    theoretical_hp_gain: int
    max_hp_gain: int
    requires_subclass: bool
    subclass_options: list[str]
    spell_slots: SpellSlots
    spell_knowledge: SpellKnowledge


def _options_for(character: Character, subclass_options: Sequence[str] | None) -> list[str]:
    if subclass_options is not None:
        return list(subclass_options)
    return get_subclass_options(character.dnd_class)


def requires_subclass_choice(
    character: Character,
    subclass_options: Sequence[str] | None = None,
) -> bool:
    """Check whether the next level-up must come with a subclass choice."""
    return (
        character.level + 1 == SUBCLASS_MILESTONE_LEVEL
        and not character.subclass
        and len(_options_for(character, subclass_options)) > 0
    )


def preview_level_up(
    character: Character,
    subclass_options: Sequence[str] | None = None,
) -> LevelUpPreview:
    """Describe the next level-up without committing it.

    Raises:
        LevelUpRejectedError: If the character is already at the maximum level.
    """
    _check_max_level(character)
    new_level = character.level + 1
    hit_die = get_hit_die(character.dnd_class)
    con_modifier = get_ability_modifier(character.abilities, Ability.CON)
    average = get_average_hp_gain(hit_die)
    return LevelUpPreview(
        current_level=character.level,
        new_level=new_level,
        hit_die=hit_die,
        average_hp_gain=average,
        theoretical_hp_gain=average + con_modifier,
        max_hp_gain=hit_die + con_modifier,
        requires_subclass=requires_subclass_choice(character, subclass_options),
        subclass_options=_options_for(character, subclass_options),
        spell_slots=resolve_spell_slots(character.dnd_class, new_level, character.spell_slots),
        spell_knowledge=resolve_spell_knowledge(character.dnd_class, new_level),
    )


def _reject(character: Character, message: str, reason: LevelUpRejection, **details: object) -> NoReturn:
    logger.info("Level-up rejected", reason=reason.value)
    raise LevelUpRejectedError(
        message,
        reason=reason,
        current_level=character.level,
        details=dict(details),
    )


def _check_max_level(character: Character) -> None:
    if character.level >= MAX_CHARACTER_LEVEL:
        _reject(
            character,
            f"Already at the maximum level ({MAX_CHARACTER_LEVEL})",
            LevelUpRejection.MAX_LEVEL_REACHED,
        )


def level_up(
    character: Character,
    hp_gain: int,
    chosen_subclass: str | None = None,
    *,
    subclass_options: Sequence[str] | None = None,
) -> Character:
    """Advance a character by one level.

    Args:
        character: Current character snapshot.
        hp_gain: Hit points gained (rolled or average, plus constitution).
        chosen_subclass: Subclass picked in the dialog. Only used when the
            new level is the subclass milestone and none is set yet.
        subclass_options: Overrides the built-in subclass catalog.

    Returns:
        The leveled-up character. Current and maximum HP both grow by
        ``hp_gain``; spell slots and class resources are recomputed.

    Raises:
        LevelUpRejectedError: If a precondition fails. The ``reason``
            attribute carries the LevelUpRejection code.
    """
    with character_context(character):
        _check_max_level(character)

        hit_die = get_hit_die(character.dnd_class)
        con_modifier = get_ability_modifier(character.abilities, Ability.CON)
        max_gain = hit_die + con_modifier

        if hp_gain < 1:
            _reject(
                character,
                "Hit point gain must be at least 1",
                LevelUpRejection.HP_GAIN_TOO_LOW,
                hp_gain=hp_gain,
            )
        if hp_gain > max_gain:
            _reject(
                character,
                f"Hit point gain cannot exceed {max_gain} (d{hit_die} + constitution modifier)",
                LevelUpRejection.HP_GAIN_TOO_HIGH,
                hp_gain=hp_gain,
                max_hp_gain=max_gain,
            )

        milestone = requires_subclass_choice(character, subclass_options)
        choice = chosen_subclass.strip() if chosen_subclass else ""
        if milestone and not choice:
            _reject(
                character,
                f"A subclass must be chosen at level {SUBCLASS_MILESTONE_LEVEL}",
                LevelUpRejection.SUBCLASS_REQUIRED,
            )

        new_level = character.level + 1
        subclass = character.subclass
        if milestone:
            subclass = canonical_subclass(character.dnd_class, choice) or choice

        updated = character.model_copy(
            update={
                "level": new_level,
                "max_hp": character.max_hp + hp_gain,
                "current_hp": character.current_hp + hp_gain,
                "hit_dice": HitDice(total=new_level, used=character.hit_dice.used),
                "subclass": subclass,
                "spell_slots": resolve_spell_slots(character.dnd_class, new_level, character.spell_slots),
                "class_resources": resolve_class_resources(
                    character.dnd_class,
                    new_level,
                    character.class_resources,
                    character.abilities,
                ),
            }
        )
        logger.info("Level-up committed", new_level=new_level, hp_gain=hp_gain, subclass=subclass)
        return updated


__all__ = [
    "LevelUpPreview",
    "requires_subclass_choice",
    "preview_level_up",
    "level_up",
]
