"""Tests for multiclass prerequisites and the total-level proficiency bonus."""

from __future__ import annotations

from typing import Any

from dnd_tracker.engine.multiclass import (
    get_character_proficiency_bonus,
    get_secondary_level,
    get_total_level,
    validate_multiclass_prerequisites,
)
from dnd_tracker.models import Ability, Character


class TestTotalLevel:
    """Tests for the level summed over both classes."""

    def test_single_class(self, barbarian: Character) -> None:
        """Test a single-class character's total is its level."""
        assert get_secondary_level(barbarian) == 0
        assert get_total_level(barbarian) == 2

    def test_secondary_level_added(self, barbarian_record: dict[str, Any]) -> None:
        """Test the secondary class level is read from the record."""
        record = {**barbarian_record, "secondary_class": "Guerrier", "secondary_level": 3}
        character = Character.from_record(record)

        assert get_total_level(character) == 5
        assert get_character_proficiency_bonus(character) == 3

    def test_unreadable_secondary_level(self, barbarian_record: dict[str, Any]) -> None:
        """Test a malformed secondary level counts as 0."""
        character = Character.from_record({**barbarian_record, "secondary_level": "n/a"})

        assert get_total_level(character) == 2
        assert get_character_proficiency_bonus(character) == 2


class TestMulticlassPrerequisites:
    """Tests for the primary ability score check."""

    def test_all_met(self, barbarian: Character) -> None:
        """Test STR 16 and DEX 14 allow a Barbare to add Guerrier."""
        check = validate_multiclass_prerequisites(barbarian, "Guerrier")

        assert check.valid
        assert check.shortfalls == []
        assert check.message == "All prerequisites are met."

    def test_new_class_shortfall(self, barbarian: Character) -> None:
        """Test CHA 8 blocks Paladin, reported against the new class."""
        check = validate_multiclass_prerequisites(barbarian, "Paladin")

        assert not check.valid
        assert len(check.shortfalls) == 1
        shortfall = check.shortfalls[0]
        assert shortfall.ability == Ability.CHA
        assert shortfall.score == 8
        assert not shortfall.current_class
        assert "Charisma 8/13 (new class)" in check.message

    def test_current_class_shortfall(self, barbarian_record: dict[str, Any]) -> None:
        """Test the current class's primary ability is checked too."""
        record = {**barbarian_record, "abilities": {"strength": 12, "charisma": 15}}
        character = Character.from_record(record)

        check = validate_multiclass_prerequisites(character, "Barde")

        assert not check.valid
        assert [(s.ability, s.current_class) for s in check.shortfalls] == [(Ability.STR, True)]
        assert "Strength 12/13 (current class)" in check.message

    def test_missing_score_counts_as_ten(self, wizard: Character) -> None:
        """Test an ability absent from the record fails the minimum."""
        check = validate_multiclass_prerequisites(wizard, "Clerc")

        assert not check.valid
        assert check.shortfalls[0].ability == Ability.WIS
        assert check.shortfalls[0].score == 10

    def test_requires_primary_class(self) -> None:
        """Test a character without a class cannot multiclass."""
        character = Character.from_record({"class": None, "level": 1})

        check = validate_multiclass_prerequisites(character, "Guerrier")

        assert not check.valid
        assert "primary class" in check.message

    def test_does_not_modify_character(self, barbarian: Character) -> None:
        """Test the check leaves the character untouched."""
        before = barbarian.to_record()

        validate_multiclass_prerequisites(barbarian, "Paladin")

        assert barbarian.to_record() == before
