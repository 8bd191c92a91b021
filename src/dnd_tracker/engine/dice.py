"""Dice rolls used by rests and level-ups.

Rolling goes through the d20 library so any standard dice notation
(``1d10+2``, ``3d6``) is accepted. Callers that need a deterministic
result pass their own roll to the rules functions instead.
"""

from __future__ import annotations

import d20
from pydantic import BaseModel, ConfigDict

from dnd_tracker.core.exceptions import DiceRollError
from dnd_tracker.core.logging import get_logger


logger = get_logger(__name__)


class DiceRoll(BaseModel):
    """Result of a dice roll.

    Attributes:
        expression: The rolled expression.
        total: Total including modifiers.
        dice: Kept die faces.
    """

    model_config = ConfigDict(frozen=True)

    expression: str
    total: int
    dice: list[int]


def _kept_faces(node: d20.Expression | d20.Number) -> list[int]:
    faces: list[int] = []

    def traverse(current: object) -> None:
        if isinstance(current, d20.Dice):
            faces.extend(die.number for die in current.values if die.kept)
        else:
            for child in getattr(current, "children", ()):
                traverse(child)

    traverse(node)
    return faces


def roll(expression: str) -> DiceRoll:
    """Roll a dice expression.

    Raises:
        DiceRollError: If the expression is empty or not valid dice notation.
    """
    if not expression or not expression.strip():
        raise DiceRollError("Empty dice expression", expression=expression)
    try:
        result = d20.roll(expression)
    except d20.RollError as exc:
        raise DiceRollError(f"Invalid dice expression: {exc}", expression=expression) from exc

    logger.debug("Dice rolled", expression=expression, total=result.total)
    return DiceRoll(expression=expression, total=result.total, dice=_kept_faces(result.expr))


def roll_hit_die(hit_die: int) -> int:
    """Roll one hit die of the given size."""
    return roll(f"1d{hit_die}").total


def roll_hp_gain(hit_die: int, con_modifier: int) -> int:
    """Roll the hit points gained on a level-up (at least 1)."""
    return max(1, roll_hit_die(hit_die) + con_modifier)


__all__ = [
    "DiceRoll",
    "roll",
    "roll_hit_die",
    "roll_hp_gain",
]
