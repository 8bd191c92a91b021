"""Tests for the Character snapshot and its record translation."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError as PydanticValidationError

from dnd_tracker.core.exceptions import ValidationError
from dnd_tracker.models import (
    BarbarianResources,
    Character,
    DndClass,
    HitDice,
    PaladinResources,
    RangerResources,
    SpellSlots,
    UntrackedResources,
    check_spell_level,
)


class TestCharacterFromRecord:
    """Tests for reading persisted records."""

    def test_typed_fields(self, barbarian_record: dict[str, Any]) -> None:
        """Test open record fields become typed models."""
        character = Character.from_record(barbarian_record)

        assert character.dnd_class is DndClass.BARBARIAN
        assert character.level == 2
        assert character.hit_dice == HitDice(total=2, used=1)
        assert isinstance(character.class_resources, BarbarianResources)
        assert character.class_resources.used_rage == 1

    def test_accent_free_class_name(self) -> None:
        """Test class spellings are canonicalized."""
        character = Character.from_record({"class": "Rodeur", "level": 4})

        assert character.dnd_class is DndClass.RANGER
        assert isinstance(character.class_resources, RangerResources)

    def test_unknown_class_kept_verbatim(self) -> None:
        """Test unknown classes are kept as plain strings."""
        character = Character.from_record(
            {"class": "Artificier", "class_resources": {"infusions": 2}}
        )

        assert character.dnd_class == "Artificier"
        assert character.canonical_class is None
        assert isinstance(character.class_resources, UntrackedResources)
        assert character.to_record()["class_resources"] == {"infusions": 2}

    @pytest.mark.parametrize("raw,expected", [(0, 1), (25, 20), ("7", 7), (None, 1)])
    def test_level_clamped(self, raw: Any, expected: int) -> None:
        """Test out-of-range levels are clamped into 1-20."""
        assert Character.from_record({"class": "Moine", "level": raw}).level == expected

    def test_blank_subclass(self) -> None:
        """Test an empty subclass string means no subclass."""
        assert Character.from_record({"subclass": "  "}).subclass is None

    def test_null_sub_records(self) -> None:
        """Test null sub-records fall back to defaults."""
        character = Character.from_record(
            {"class": "Clerc", "hit_dice": None, "spell_slots": None, "class_resources": None}
        )

        assert character.hit_dice == HitDice()
        assert character.spell_slots == SpellSlots()

    def test_unknown_columns_preserved(self) -> None:
        """Test record columns unknown to the engine survive a round trip."""
        character = Character.from_record({"class": "Druide", "portrait_url": "x.png"})

        assert character.to_record()["portrait_url"] == "x.png"


class TestCharacterToRecord:
    """Tests for writing persisted records."""

    def test_class_alias(self, barbarian: Character) -> None:
        """Test the class is written under the record's column name."""
        record = barbarian.to_record()

        assert record["class"] == "Barbare"
        assert "dnd_class" not in record

    def test_absent_slots_omitted(self, warlock: Character) -> None:
        """Test absent slot fields are not written."""
        record = warlock.to_record()

        assert record["spell_slots"] == {"pact_slots": 2, "pact_level": 3, "used_pact_slots": 1}

    def test_paladin_channel_divinity_absent(self) -> None:
        """Test a paladin without channel divinity writes no such keys."""
        character = Character.from_record(
            {"class": "Paladin", "level": 2, "class_resources": {"lay_on_hands": 10}}
        )

        assert isinstance(character.class_resources, PaladinResources)
        assert "channel_divinity" not in character.to_record()["class_resources"]

    def test_record_is_readable_again(self, wizard: Character) -> None:
        """Test a written record reads back to an equal character."""
        assert Character.from_record(wizard.to_record()) == wizard


class TestSpellSlots:
    """Tests for spell slot accessors."""

    def test_accessors(self) -> None:
        """Test maximum, used and remaining."""
        slots = SpellSlots(level1=4, used1=1, level2=3)

        assert slots.maximum(1) == 4
        assert slots.used(1) == 1
        assert slots.used(2) == 0
        assert slots.remaining(1) == 3
        assert slots.maximum(3) is None
        assert slots.remaining(3) == 0

    def test_pact_magic_flag(self) -> None:
        """Test pact magic detection."""
        assert SpellSlots(pact_slots=1, pact_level=1).has_pact_magic
        assert not SpellSlots(level1=2).has_pact_magic

    @pytest.mark.parametrize("spell_level", [0, 10, True, "2"])
    def test_invalid_spell_level(self, spell_level: Any) -> None:
        """Test spell levels outside 1-9 are rejected."""
        with pytest.raises(ValidationError):
            check_spell_level(spell_level)

    def test_frozen(self) -> None:
        """Test slots cannot be mutated in place."""
        slots = SpellSlots(level1=2)

        with pytest.raises(PydanticValidationError):
            slots.level1 = 3  # type: ignore[misc]


class TestHitDice:
    """Tests for the hit dice tracker."""

    def test_available(self) -> None:
        """Test available dice."""
        assert HitDice(total=5, used=2).available == 3
        assert HitDice(total=2, used=3).available == 0
