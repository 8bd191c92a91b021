"""Class-specific resource pools as a closed set of per-class models.

Persisted character records keep class resources as an open key/value
mapping (``{"rage": 3, "used_rage": 1}``). Inside the engine each class
gets its own typed model; :func:`resources_from_record` and
:meth:`to_record` are the only places that know about the open format.

Keys that do not belong to the current class (for instance ``rage`` left
over after a reclassification) are kept as pydantic extras and written
back unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, ClassVar, Literal, Self, Union

from pydantic import BaseModel, ConfigDict, Field

from dnd_tracker.models.enums import DndClass, ResourcePool, canonical_class


class _ResourcesBase(BaseModel):
    """Shared behavior of every class resource model.

    Subclasses declare ``pools``: the consumable pools they own, mapped to
    the names of their (maximum, used) fields.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    pools: ClassVar[dict[ResourcePool, tuple[str, str]]] = {}

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Self:
        """Build the model from an open resource record."""
        return cls.model_validate(dict(record))

    def to_record(self) -> dict[str, Any]:
        """Serialize back to the open resource record."""
        return self.model_dump(mode="json", exclude={"kind"}, exclude_none=True)

    def pool_state(
        self,
        pool: ResourcePool,
        *,
        charisma_modifier: int = 0,
    ) -> tuple[int, int] | None:
        """Get ``(used, maximum)`` for a pool, or None if the pool is absent."""
        fields = self.pools.get(pool)
        if fields is None:
            return None
        max_field, used_field = fields
        return int(getattr(self, used_field) or 0), int(getattr(self, max_field) or 0)

    def with_used(self, pool: ResourcePool, used: int) -> Self:
        """Return a copy with the pool's used counter replaced."""
        _, used_field = self.pools[pool]
        return self.model_copy(update={used_field: used})


class BarbarianResources(_ResourcesBase):
    """Rage uses."""

    kind: Literal["Barbare"] = "Barbare"
    rage: int = 0
    used_rage: int = 0

    pools: ClassVar[dict[ResourcePool, tuple[str, str]]] = {
        ResourcePool.RAGE: ("rage", "used_rage"),
    }


class BardResources(_ResourcesBase):
    """Bardic inspiration.

    Only the used counter is stored. The maximum is the live charisma
    modifier, so it is supplied by the caller on every check.
    """

    kind: Literal["Barde"] = "Barde"
    used_bardic_inspiration: int = 0

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Self:
        data = dict(record)
        data.pop("bardic_inspiration", None)
        return cls.model_validate(data)

    def pool_state(
        self,
        pool: ResourcePool,
        *,
        charisma_modifier: int = 0,
    ) -> tuple[int, int] | None:
        if pool is not ResourcePool.BARDIC_INSPIRATION:
            return None
        return self.used_bardic_inspiration, max(0, charisma_modifier)

    def with_used(self, pool: ResourcePool, used: int) -> Self:
        return self.model_copy(update={"used_bardic_inspiration": used})


class ClericResources(_ResourcesBase):
    """Channel divinity uses."""

    kind: Literal["Clerc"] = "Clerc"
    channel_divinity: int = 0
    used_channel_divinity: int = 0

    pools: ClassVar[dict[ResourcePool, tuple[str, str]]] = {
        ResourcePool.CHANNEL_DIVINITY: ("channel_divinity", "used_channel_divinity"),
    }


class DruidResources(_ResourcesBase):
    """Wild shape uses."""

    kind: Literal["Druide"] = "Druide"
    wild_shape: int = 0
    used_wild_shape: int = 0

    pools: ClassVar[dict[ResourcePool, tuple[str, str]]] = {
        ResourcePool.WILD_SHAPE: ("wild_shape", "used_wild_shape"),
    }


class SorcererResources(_ResourcesBase):
    """Sorcery points."""

    kind: Literal["Ensorceleur"] = "Ensorceleur"
    sorcery_points: int = 0
    used_sorcery_points: int = 0

    pools: ClassVar[dict[ResourcePool, tuple[str, str]]] = {
        ResourcePool.SORCERY_POINTS: ("sorcery_points", "used_sorcery_points"),
    }


class FighterResources(_ResourcesBase):
    """Action surge uses."""

    kind: Literal["Guerrier"] = "Guerrier"
    action_surge: int = 0
    used_action_surge: int = 0

    pools: ClassVar[dict[ResourcePool, tuple[str, str]]] = {
        ResourcePool.ACTION_SURGE: ("action_surge", "used_action_surge"),
    }


class WizardResources(_ResourcesBase):
    """Arcane recovery state for the current rest cycle.

    Attributes:
        arcane_recovery: The feature is available to this character.
        used_arcane_recovery: The budget is exhausted until the next rest.
        arcane_recovery_slots_used: Spell levels already recovered this cycle.
    """

    kind: Literal["Magicien"] = "Magicien"
    arcane_recovery: bool = True
    used_arcane_recovery: bool = False
    arcane_recovery_slots_used: int = 0


class MonkResources(_ResourcesBase):
    """Ki points."""

    kind: Literal["Moine"] = "Moine"
    ki_points: int = 0
    used_ki_points: int = 0

    pools: ClassVar[dict[ResourcePool, tuple[str, str]]] = {
        ResourcePool.KI_POINTS: ("ki_points", "used_ki_points"),
    }


class ChannelDivinity(BaseModel):
    """An available channel divinity pool."""

    model_config = ConfigDict(frozen=True)

    maximum: int = Field(ge=0)
    used: int = 0


class PaladinResources(_ResourcesBase):
    """Lay on hands pool and, from level 3, channel divinity.

    ``channel_divinity`` is None until the feature is gained. None and a
    pool with ``maximum=0`` are different states: the former is written as
    absent keys, the latter as zeros.
    """

    kind: Literal["Paladin"] = "Paladin"
    lay_on_hands: int = 0
    used_lay_on_hands: int = 0
    channel_divinity: ChannelDivinity | None = None

    pools: ClassVar[dict[ResourcePool, tuple[str, str]]] = {
        ResourcePool.LAY_ON_HANDS: ("lay_on_hands", "used_lay_on_hands"),
    }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Self:
        data = dict(record)
        maximum = data.pop("channel_divinity", None)
        used = data.pop("used_channel_divinity", None)
        if maximum is not None:
            data["channel_divinity"] = ChannelDivinity(maximum=int(maximum), used=int(used or 0))
        return cls.model_validate(data)

    def to_record(self) -> dict[str, Any]:
        record = self.model_dump(
            mode="json",
            exclude={"kind", "channel_divinity"},
            exclude_none=True,
        )
        if self.channel_divinity is not None:
            record["channel_divinity"] = self.channel_divinity.maximum
            record["used_channel_divinity"] = self.channel_divinity.used
        return record

    def pool_state(
        self,
        pool: ResourcePool,
        *,
        charisma_modifier: int = 0,
    ) -> tuple[int, int] | None:
        if pool is ResourcePool.CHANNEL_DIVINITY:
            if self.channel_divinity is None:
                return None
            return self.channel_divinity.used, self.channel_divinity.maximum
        return super().pool_state(pool, charisma_modifier=charisma_modifier)

    def with_used(self, pool: ResourcePool, used: int) -> Self:
        if pool is ResourcePool.CHANNEL_DIVINITY and self.channel_divinity is not None:
            return self.model_copy(
                update={"channel_divinity": self.channel_divinity.model_copy(update={"used": used})}
            )
        return super().with_used(pool, used)


class RangerResources(_ResourcesBase):
    """Favored foe uses."""

    kind: Literal["Rôdeur"] = "Rôdeur"
    favored_foe: int = 0
    used_favored_foe: int = 0

    pools: ClassVar[dict[ResourcePool, tuple[str, str]]] = {
        ResourcePool.FAVORED_FOE: ("favored_foe", "used_favored_foe"),
    }


class RogueResources(_ResourcesBase):
    """Sneak attack dice (not consumable)."""

    kind: Literal["Roublard"] = "Roublard"
    sneak_attack: str | None = None


class UntrackedResources(_ResourcesBase):
    """Resources of a class without a resource policy.

    Every key of the record is carried as an extra, untouched.
    """

    kind: Literal["untracked"] = "untracked"


ClassResources = Annotated[
    Union[
        BarbarianResources,
        BardResources,
        ClericResources,
        DruidResources,
        SorcererResources,
        FighterResources,
        WizardResources,
        MonkResources,
        PaladinResources,
        RangerResources,
        RogueResources,
        UntrackedResources,
    ],
    Field(discriminator="kind"),
]


RESOURCE_MODELS: dict[DndClass, type[_ResourcesBase]] = {
    DndClass.BARBARIAN: BarbarianResources,
    DndClass.BARD: BardResources,
    DndClass.CLERIC: ClericResources,
    DndClass.DRUID: DruidResources,
    DndClass.SORCERER: SorcererResources,
    DndClass.FIGHTER: FighterResources,
    DndClass.WIZARD: WizardResources,
    DndClass.MONK: MonkResources,
    DndClass.PALADIN: PaladinResources,
    DndClass.RANGER: RangerResources,
    DndClass.ROGUE: RogueResources,
}


def resources_from_record(
    dnd_class: DndClass | str | None,
    record: Mapping[str, Any] | BaseModel | None,
) -> ClassResources:
    """Translate an open resource record into the model for a class.

    Args:
        dnd_class: The character's class; selects the model.
        record: The open record, or a resource model of any class (its
            record form is re-read, so reclassification keeps foreign keys).
            A model that already belongs to the class is returned as is.

    Returns:
        The typed resources. Classes without a policy get UntrackedResources.
    """
    model = RESOURCE_MODELS.get(canonical_class(dnd_class), UntrackedResources)  # type: ignore[arg-type]
    if isinstance(record, model):
        return record  # type: ignore[return-value]
    if isinstance(record, _ResourcesBase):
        record = record.to_record()
    elif isinstance(record, BaseModel):
        record = record.model_dump(exclude_none=True)
    data = {k: v for k, v in (record or {}).items() if v is not None and k != "kind"}
    return model.from_record(data)  # type: ignore[return-value]


__all__ = [
    "BarbarianResources",
    "BardResources",
    "ClericResources",
    "DruidResources",
    "SorcererResources",
    "FighterResources",
    "WizardResources",
    "MonkResources",
    "ChannelDivinity",
    "PaladinResources",
    "RangerResources",
    "RogueResources",
    "UntrackedResources",
    "ClassResources",
    "RESOURCE_MODELS",
    "resources_from_record",
]
