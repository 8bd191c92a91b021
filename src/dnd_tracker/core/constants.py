"""Rules constants shared across the character tracker."""

from __future__ import annotations

MIN_CHARACTER_LEVEL = 1
"""Minimum character level."""

MAX_CHARACTER_LEVEL = 20
"""Maximum character level."""

SUBCLASS_MILESTONE_LEVEL = 3
"""Level at which the subclass choice becomes mandatory and permanent."""

MAX_SPELL_LEVEL = 9
"""Highest spell slot level."""

HALF_CASTER_MAX_SPELL_LEVEL = 5
"""Highest spell slot level a half caster tracks."""

DEFAULT_HIT_DIE = 8
"""Hit die size used for unrecognized classes."""

SNEAK_ATTACK_DIE = "d6"
"""Die rolled for each sneak attack die."""

MULTICLASS_MIN_SCORE = 13
"""Score required in each primary ability to multiclass."""

DEFAULT_ABILITY_SCORE = 10
"""Score assumed for an ability missing from the record."""


def clamp_level(level: int) -> int:
    """Clamp a character level into the 1-20 range."""
    return max(MIN_CHARACTER_LEVEL, min(MAX_CHARACTER_LEVEL, int(level)))


__all__ = [
    "MIN_CHARACTER_LEVEL",
    "MAX_CHARACTER_LEVEL",
    "SUBCLASS_MILESTONE_LEVEL",
    "MAX_SPELL_LEVEL",
    "HALF_CASTER_MAX_SPELL_LEVEL",
    "DEFAULT_HIT_DIE",
    "SNEAK_ATTACK_DIE",
    "MULTICLASS_MIN_SCORE",
    "DEFAULT_ABILITY_SCORE",
    "clamp_level",
]
