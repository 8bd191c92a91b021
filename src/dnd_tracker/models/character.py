"""Pydantic V2 schemas for the character snapshot.

The Character model mirrors the persisted character record. Engine
operations never mutate a Character; they return an updated copy for the
caller to persist.

Example:
    >>> character = Character.from_record({"class": "Magicien", "level": 3})
    >>> character.class_resources.kind
    'Magicien'
    >>> record = character.to_record()
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from dnd_tracker.core.constants import MAX_SPELL_LEVEL, clamp_level
from dnd_tracker.core.exceptions import ValidationError
from dnd_tracker.models.enums import DndClass, canonical_class
from dnd_tracker.models.resources import (
    RESOURCE_MODELS,
    ClassResources,
    UntrackedResources,
    resources_from_record,
)


def check_spell_level(spell_level: int) -> int:
    """Validate a spell slot level (1-9).

    Raises:
        ValidationError: If the level is outside 1-9.
    """
    if isinstance(spell_level, bool) or not isinstance(spell_level, int):
        raise ValidationError(
            "Spell level must be an integer",
            field_name="spell_level",
            invalid_value=spell_level,
        )
    if not 1 <= spell_level <= MAX_SPELL_LEVEL:
        raise ValidationError(
            f"Spell level must be between 1 and {MAX_SPELL_LEVEL}",
            field_name="spell_level",
            invalid_value=spell_level,
        )
    return spell_level


class SpellSlots(BaseModel):
    """Spell slot maxima and consumed counters.

    ``levelN`` is the maximum number of slots of spell level N and ``usedN``
    the number already spent. Pact magic uses the separate ``pact_*`` fields.
    A None field is absent from the persisted record.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    level1: int | None = None
    level2: int | None = None
    level3: int | None = None
    level4: int | None = None
    level5: int | None = None
    level6: int | None = None
    level7: int | None = None
    level8: int | None = None
    level9: int | None = None

    used1: int | None = None
    used2: int | None = None
    used3: int | None = None
    used4: int | None = None
    used5: int | None = None
    used6: int | None = None
    used7: int | None = None
    used8: int | None = None
    used9: int | None = None

    pact_slots: int | None = None
    pact_level: int | None = None
    used_pact_slots: int | None = None

    def maximum(self, spell_level: int) -> int | None:
        """Get the slot maximum for a spell level, None if not granted."""
        return getattr(self, f"level{check_spell_level(spell_level)}")

    def used(self, spell_level: int) -> int:
        """Get the consumed counter for a spell level (0 if absent)."""
        return getattr(self, f"used{check_spell_level(spell_level)}") or 0

    def remaining(self, spell_level: int) -> int:
        """Get the unspent slots for a spell level."""
        return max(0, (self.maximum(spell_level) or 0) - self.used(spell_level))

    @property
    def has_pact_magic(self) -> bool:
        """Check if pact magic fields are populated."""
        return self.pact_slots is not None

    def to_record(self) -> dict[str, Any]:
        """Serialize to the persisted record (absent fields omitted)."""
        return self.model_dump(mode="json", exclude_none=True)


class HitDice(BaseModel):
    """Hit dice tracker: total equals character level."""

    model_config = ConfigDict(frozen=True)

    total: int = Field(default=1, ge=0)
    used: int = Field(default=0, ge=0)

    @property
    def available(self) -> int:
        """Number of unspent hit dice."""
        return max(0, self.total - self.used)


class Character(BaseModel):
    """Character snapshot as seen by the rules engine.

    Attributes:
        id: Identifier of the persisted record.
        name: Character name.
        dnd_class: Canonical class, the raw string for an unrecognized class,
            or None when no class is selected. Serialized as ``class``.
        level: Character level, clamped into 1-20.
        subclass: Subclass label, fixed from level 3.
        abilities: Ability data in any shape the ability resolver reads.
        max_hp: Maximum hit points.
        current_hp: Current hit points.
        temporary_hp: Temporary hit points.
        hit_dice: Hit dice tracker.
        spell_slots: Spell slot maxima and consumed counters.
        class_resources: Typed class resources for the current class.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
    )

    id: str | None = Field(default=None, description="Record identifier")
    name: str = Field(default="", description="Character name")
    dnd_class: DndClass | str | None = Field(default=None, alias="class")
    level: int = Field(default=1, ge=1, le=20, description="Character level")
    subclass: str | None = Field(default=None, description="Subclass label")
    abilities: Any = Field(default=None, description="Loosely-shaped ability data")
    max_hp: int = Field(default=0, description="Maximum HP")
    current_hp: int = Field(default=0, description="Current HP")
    temporary_hp: int = Field(default=0, description="Temporary HP")
    hit_dice: HitDice = Field(default_factory=HitDice)
    spell_slots: SpellSlots = Field(default_factory=SpellSlots)
    class_resources: ClassResources = Field(default_factory=UntrackedResources)

    @model_validator(mode="before")
    @classmethod
    def translate_record(cls, data: Any) -> Any:
        """Convert open record fields into their typed models."""
        if not isinstance(data, Mapping):
            return data
        data = dict(data)
        for key in ("hit_dice", "spell_slots", "class_resources", "subclass"):
            if key in data and data[key] is None:
                del data[key]
        raw_class = data.get("class", data.get("dnd_class"))
        resources = data.get("class_resources")
        if not isinstance(resources, BaseModel) or getattr(resources, "kind", None) != _kind_for(raw_class):
            data["class_resources"] = resources_from_record(raw_class, resources)
        return data

    @field_validator("dnd_class", mode="before")
    @classmethod
    def canonicalize_class(cls, value: Any) -> Any:
        """Resolve class spellings; keep unknown names, blank means no class."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return canonical_class(value) or str(value)

    @field_validator("level", mode="before")
    @classmethod
    def clamp_level_value(cls, value: Any) -> int:
        """Clamp the level into 1-20 instead of rejecting it."""
        if value is None or value == "":
            return 1
        return clamp_level(int(value))

    @field_validator("subclass", mode="before")
    @classmethod
    def blank_subclass_is_none(cls, value: Any) -> Any:
        """Treat an empty subclass string as no subclass."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_serializer("spell_slots")
    def serialize_spell_slots(self, value: SpellSlots) -> dict[str, Any]:
        return value.to_record()

    @field_serializer("class_resources")
    def serialize_class_resources(self, value: Any) -> dict[str, Any]:
        return value.to_record()

    @property
    def canonical_class(self) -> DndClass | None:
        """The class as a DndClass, None if absent or unrecognized."""
        return self.dnd_class if isinstance(self.dnd_class, DndClass) else None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Character:
        """Build a Character from a persisted record."""
        return cls.model_validate(record)

    def to_record(self) -> dict[str, Any]:
        """Serialize to the persisted record format."""
        return self.model_dump(mode="json", by_alias=True)


def _kind_for(dnd_class: Any) -> str:
    resolved = canonical_class(dnd_class) if dnd_class else None
    return str(resolved) if resolved in RESOURCE_MODELS else "untracked"


__all__ = [
    "check_spell_level",
    "SpellSlots",
    "HitDice",
    "Character",
]
