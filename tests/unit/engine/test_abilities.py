"""Tests for ability modifier resolution."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import BaseModel

from dnd_tracker.engine.abilities import (
    calculate_modifier,
    get_ability_modifier,
    get_ability_modifiers,
    get_ability_score,
)
from dnd_tracker.models import Ability


class TestCalculateModifier:
    """Tests for the score to modifier formula."""

    @pytest.mark.parametrize(
        "score,expected",
        [(1, -5), (8, -1), (9, -1), (10, 0), (11, 0), (14, 2), (15, 2), (20, 5), (30, 10)],
    )
    def test_formula(self, score: int, expected: int) -> None:
        """Test modifiers round down, including for odd low scores."""
        assert calculate_modifier(score) == expected


class TestListShape:
    """Tests for abilities stored as a list of entries."""

    def test_named_entry_with_modifier(self, sample_abilities: list[dict[str, Any]]) -> None:
        """Test the direct modifier is used."""
        assert get_ability_modifier(sample_abilities, Ability.CHA) == -1
        assert get_ability_modifier(sample_abilities, "constitution") == 2

    def test_abbreviation_and_string_score(self) -> None:
        """Test abbreviations and decorated string scores."""
        abilities = [{"abbr": "CHA", "score": "16"}]

        assert get_ability_modifier(abilities, "charisme") == 3

    def test_signed_string_modifier(self) -> None:
        """Test a "+2" style modifier string."""
        abilities = [{"key": "dex", "mod": "+2"}]

        assert get_ability_modifier(abilities, Ability.DEX) == 2

    def test_missing_ability(self) -> None:
        """Test an absent ability resolves to 0."""
        assert get_ability_modifier([{"name": "Force", "score": 18}], Ability.CHA) == 0


class TestMappingShape:
    """Tests for abilities stored as a mapping."""

    def test_bare_scores(self) -> None:
        """Test bare numbers are scores."""
        abilities = {"charisma": 18, "CON": 9}

        assert get_ability_modifier(abilities, Ability.CHA) == 4
        assert get_ability_modifier(abilities, Ability.CON) == -1

    def test_nested_score_objects(self) -> None:
        """Test values exposing a total or base score."""
        abilities = {"Sagesse": {"total": 14}, "force": {"base": 12}}

        assert get_ability_modifier(abilities, Ability.WIS) == 2
        assert get_ability_modifier(abilities, Ability.STR) == 1

    def test_loose_key_match(self) -> None:
        """Test keys that merely contain the ability name."""
        assert get_ability_modifier({"charisma_score": 12}, Ability.CHA) == 1

    def test_pydantic_model(self) -> None:
        """Test a model is read through its fields."""

        class Scores(BaseModel):
            strength: int = 10
            charisma: int = 17

        assert get_ability_modifier(Scores(), Ability.CHA) == 3


class TestUnreadableData:
    """Tests for data the resolver cannot read."""

    @pytest.mark.parametrize("abilities", [None, "", "charisma 18", 42, []])
    def test_defaults_to_zero(self, abilities: Any) -> None:
        """Test unreadable data resolves to 0 instead of failing."""
        assert get_ability_modifier(abilities, Ability.CHA) == 0

    def test_unknown_ability_name(self) -> None:
        """Test an unknown ability name resolves to 0."""
        assert get_ability_modifier({"charisma": 18}, "luck") == 0

    def test_all_modifiers(self, sample_abilities: list[dict[str, Any]]) -> None:
        """Test resolving the six abilities at once."""
        modifiers = get_ability_modifiers(sample_abilities)

        assert modifiers[Ability.STR] == 3
        assert modifiers[Ability.WIS] == 1
        assert len(modifiers) == 6


class TestAbilityScore:
    """Tests for reading raw ability scores."""

    def test_list_entry_score(self, sample_abilities: list[dict[str, Any]]) -> None:
        """Test the score field of a list entry is read."""
        assert get_ability_score(sample_abilities, Ability.STR) == 16
        assert get_ability_score(sample_abilities, "dex") == 14

    def test_mapping_shapes(self) -> None:
        """Test bare scores and nested score objects in a mapping."""
        abilities = {"intelligence": 18, "sagesse": {"score": "13"}}

        assert get_ability_score(abilities, Ability.INT) == 18
        assert get_ability_score(abilities, Ability.WIS) == 13

    def test_modifier_only_entry_defaults(self) -> None:
        """Test an entry without a score counts as the default score."""
        abilities = [{"name": "Charisme", "modifier": 3}]

        assert get_ability_score(abilities, Ability.CHA) == 10

    @pytest.mark.parametrize("abilities", [None, {}, [], "garbage"])
    def test_missing_defaults_to_ten(self, abilities: Any) -> None:
        """Test unreadable data gives a score of 10."""
        assert get_ability_score(abilities, Ability.STR) == 10

    def test_empty_modifier_falls_back_to_score(self) -> None:
        """Test an empty modifier string is skipped in favor of the score."""
        abilities = [{"name": "Charisme", "modifier": "", "score": 14}]

        assert get_ability_modifier(abilities, Ability.CHA) == 2
        assert get_ability_score(abilities, Ability.CHA) == 14
