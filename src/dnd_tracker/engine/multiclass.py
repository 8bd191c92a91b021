"""Multiclass prerequisites and total-level derived values.

A secondary class is stored on the character record as the extra columns
``secondary_class`` and ``secondary_level``. The proficiency bonus follows
the total of both levels.

The prerequisite check is advisory: a failed check still lets the player
add the class, so it returns a result with a message instead of raising.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from dnd_tracker.core.constants import MULTICLASS_MIN_SCORE
from dnd_tracker.core.logging import get_logger
from dnd_tracker.engine.abilities import get_ability_score
from dnd_tracker.models.character import Character
from dnd_tracker.models.enums import Ability, DndClass
from dnd_tracker.models.progression import get_primary_abilities, get_proficiency_bonus


logger = get_logger(__name__)


class AbilityShortfall(BaseModel):
    """A primary ability below the multiclass minimum.

    Attributes:
        ability: The ability that falls short.
        score: The character's score.
        current_class: True for the current class, False for the new one.
    """

    model_config = ConfigDict(frozen=True)

    ability: Ability
    score: int
    current_class: bool

    def describe(self) -> str:
        side = "current class" if self.current_class else "new class"
        return f"{self.ability.value.capitalize()} {self.score}/{MULTICLASS_MIN_SCORE} ({side})"


class MulticlassCheck(BaseModel):
    """Outcome of a multiclass prerequisite check.

    Attributes:
        valid: Whether every prerequisite is met.
        message: Text to show to the player.
        shortfalls: The primary abilities below the minimum.
    """

    model_config = ConfigDict(frozen=True)

    valid: bool
    message: str
    shortfalls: list[AbilityShortfall] = Field(default_factory=list)


def _to_level(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


def get_secondary_level(character: Character) -> int:
    """Get the level of the secondary class (0 without one)."""
    return _to_level((character.model_extra or {}).get("secondary_level"))


def get_total_level(character: Character) -> int:
    """Get the character level summed over both classes."""
    return character.level + get_secondary_level(character)


def get_character_proficiency_bonus(character: Character) -> int:
    """Get the proficiency bonus for the character's total level."""
    return get_proficiency_bonus(get_total_level(character))


def validate_multiclass_prerequisites(
    character: Character,
    new_class: DndClass | str,
) -> MulticlassCheck:
    """Check the primary ability scores needed to add a class.

    Every primary ability of both the current and the new class needs a
    score of at least 13. Missing scores count as 10.

    Args:
        character: Current character snapshot.
        new_class: The class to add (any recognized spelling).

    Returns:
        The check result. ``valid`` is False when the character has no
        class yet or when any primary ability falls short.
    """
    if character.dnd_class is None:
        return MulticlassCheck(
            valid=False,
            message="The character needs a primary class before multiclassing.",
        )

    shortfalls: list[AbilityShortfall] = []
    for current, dnd_class in ((True, character.dnd_class), (False, new_class)):
        for ability in get_primary_abilities(dnd_class):
            score = get_ability_score(character.abilities, ability)
            if score < MULTICLASS_MIN_SCORE:
                shortfalls.append(
                    AbilityShortfall(ability=ability, score=score, current_class=current)
                )

    if shortfalls:
        details = ", ".join(shortfall.describe() for shortfall in shortfalls)
        logger.info(
            "Multiclass prerequisites not met",
            new_class=str(new_class),
            shortfalls=len(shortfalls),
        )
        return MulticlassCheck(
            valid=False,
            message=(
                f"Prerequisites not met: {details}. "
                "You can continue, but this breaks the D&D 5E multiclassing rules."
            ),
            shortfalls=shortfalls,
        )

    return MulticlassCheck(valid=True, message="All prerequisites are met.")


__all__ = [
    "AbilityShortfall",
    "MulticlassCheck",
    "get_secondary_level",
    "get_total_level",
    "get_character_proficiency_bonus",
    "validate_multiclass_prerequisites",
]
