"""Cantrip and prepared spell counts by class and level.

These counts are the authoritative bounds for how many spells of each
tier a character may pick or prepare.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from dnd_tracker.core.constants import clamp_level
from dnd_tracker.models.enums import DndClass, canonical_class
from dnd_tracker.models.progression import SPELL_KNOWLEDGE_TABLES


class NoSpellKnowledge(BaseModel):
    """The class prepares no spells."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"


class PreparedSpellKnowledge(BaseModel):
    """Spell counts for a spellcasting class.

    Attributes:
        cantrips: Known cantrips; None for classes without cantrips.
        prepared: Prepared spells.
        label: Class label.
        note: Short description for display.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["prepared"] = "prepared"
    cantrips: int | None = None
    prepared: int
    label: str
    note: str


SpellKnowledge = Annotated[
    Union[NoSpellKnowledge, PreparedSpellKnowledge],
    Field(discriminator="kind"),
]


def resolve_spell_knowledge(dnd_class: DndClass | str | None, level: int) -> SpellKnowledge:
    """Look up cantrip and prepared spell counts.

    Args:
        dnd_class: The character's class (any recognized spelling).
        level: Character level; clamped into 1-20.

    Returns:
        PreparedSpellKnowledge for the eight spellcasting classes,
        NoSpellKnowledge otherwise.
    """
    resolved = canonical_class(dnd_class)
    tables = SPELL_KNOWLEDGE_TABLES.get(resolved) if resolved is not None else None
    if tables is None:
        return NoSpellKnowledge()

    lvl = clamp_level(level)
    cantrip_table, prepared_table = tables
    return PreparedSpellKnowledge(
        cantrips=cantrip_table[lvl] if cantrip_table is not None else None,
        prepared=prepared_table[lvl],
        label=resolved.value,
        note=f"Prepared spells at level {lvl}",
    )


__all__ = [
    "NoSpellKnowledge",
    "PreparedSpellKnowledge",
    "SpellKnowledge",
    "resolve_spell_knowledge",
]
