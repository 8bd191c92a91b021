"""Tests for the resource consumption ledger."""

from __future__ import annotations

import pytest

from dnd_tracker.core.exceptions import ValidationError
from dnd_tracker.engine.ledger import (
    LedgerResult,
    SpellSlot,
    arcane_recovery_budget,
    arcane_recovery_info,
    consume,
    consume_spell_slot,
    exchange_arcane_recovery,
    recover,
    recover_spell_slot,
    remaining_uses,
)
from dnd_tracker.models import Character, ResourcePool


def _character(dnd_class: str, level: int, **fields: object) -> Character:
    return Character.from_record({"class": dnd_class, "level": level, **fields})


class TestConsume:
    """Tests for spending class resources."""

    def test_consume_increments_used(self, barbarian: Character) -> None:
        """Test a successful consume."""
        result = consume(barbarian, ResourcePool.RAGE)

        assert isinstance(result, LedgerResult)
        assert result.applied is True
        assert result.reason is None
        assert result.character.class_resources.used_rage == 2

    def test_input_not_mutated(self, barbarian: Character) -> None:
        """Test the input snapshot is left untouched."""
        consume(barbarian, ResourcePool.RAGE, 2)

        assert barbarian.class_resources.used_rage == 1

    def test_consume_up_to_maximum(self, barbarian: Character) -> None:
        """Test spending every remaining use at once."""
        result = consume(barbarian, "rage", 2)

        assert result.applied is True
        assert result.character.class_resources.used_rage == 3

    def test_consume_beyond_maximum_rejected(self, barbarian: Character) -> None:
        """Test overspending is a no-op with a reason."""
        result = consume(barbarian, ResourcePool.RAGE, 3)

        assert result.applied is False
        assert result.character is barbarian
        assert "rage" in (result.reason or "")

    def test_pool_not_owned(self, barbarian: Character) -> None:
        """Test a pool of another class is rejected, not an error."""
        result = consume(barbarian, ResourcePool.KI_POINTS)

        assert result.applied is False
        assert result.reason == "No ki points available"

    def test_unknown_pool_name(self, barbarian: Character) -> None:
        """Test an unknown pool name is a programming error."""
        with pytest.raises(ValidationError) as exc_info:
            consume(barbarian, "mana")

        assert exc_info.value.details["field_name"] == "pool"

    @pytest.mark.parametrize("amount", [0, -1, True])
    def test_invalid_amount(self, barbarian: Character, amount: int) -> None:
        """Test amounts below 1 are rejected as invalid input."""
        with pytest.raises(ValidationError):
            consume(barbarian, ResourcePool.RAGE, amount)


class TestRecover:
    """Tests for giving back spent uses."""

    def test_recover_decrements_used(self, barbarian: Character) -> None:
        """Test a successful recover."""
        result = recover(barbarian, ResourcePool.RAGE)

        assert result.applied is True
        assert result.character.class_resources.used_rage == 0

    def test_recover_below_zero_rejected(self, barbarian: Character) -> None:
        """Test recovering more than was spent is a no-op."""
        result = recover(barbarian, ResourcePool.RAGE, 2)

        assert result.applied is False
        assert result.character is barbarian

    def test_bounds_hold_over_a_sequence(self, barbarian: Character) -> None:
        """Test used stays within [0, max] over mixed calls."""
        character = barbarian
        operations = [consume, consume, consume, consume, recover, recover, recover, recover, recover]
        for operation in operations:
            character = operation(character, ResourcePool.RAGE).character
            used = character.class_resources.used_rage
            assert 0 <= used <= character.class_resources.rage

        assert character.class_resources.used_rage == 0


class TestBardicInspiration:
    """Tests for the charisma-capped pool."""

    def test_cap_follows_charisma(self) -> None:
        """Test uses are bounded by the live charisma modifier."""
        bard = _character("Barde", 3, abilities={"charisma": 14})

        spent = consume(bard, ResourcePool.BARDIC_INSPIRATION, 2)
        assert spent.applied is True

        again = consume(spent.character, ResourcePool.BARDIC_INSPIRATION)
        assert again.applied is False

    def test_low_charisma_allows_nothing(self) -> None:
        """Test a negative modifier caps the pool at zero."""
        bard = _character("Barde", 3, abilities={"charisma": 8})

        assert consume(bard, ResourcePool.BARDIC_INSPIRATION).applied is False
        assert remaining_uses(bard, ResourcePool.BARDIC_INSPIRATION) == 0


class TestPaladinChannelDivinity:
    """Tests for the conditionally present pool."""

    def test_absent_pool_rejected(self) -> None:
        """Test a paladin below level 3 has no channel divinity to spend."""
        paladin = _character("Paladin", 2, class_resources={"lay_on_hands": 10})

        result = consume(paladin, ResourcePool.CHANNEL_DIVINITY)

        assert result.applied is False
        assert remaining_uses(paladin, ResourcePool.CHANNEL_DIVINITY) is None

    def test_present_pool(self) -> None:
        """Test spending a present pool."""
        paladin = _character(
            "Paladin", 3, class_resources={"channel_divinity": 2, "used_channel_divinity": 0}
        )

        result = consume(paladin, ResourcePool.CHANNEL_DIVINITY)

        assert result.applied is True
        record = result.character.to_record()["class_resources"]
        assert record["used_channel_divinity"] == 1


class TestSpellSlots:
    """Tests for spell slot pools."""

    def test_consume_slot(self, wizard: Character) -> None:
        """Test spending a slot of a level."""
        result = consume(wizard, SpellSlot(3))

        assert result.applied is True
        assert result.character.spell_slots.used3 == 1

    def test_level_without_slots(self, wizard: Character) -> None:
        """Test a level with no maximum is rejected."""
        result = consume_spell_slot(wizard, 4)

        assert result.applied is False
        assert result.reason == "No level 4 spell slot available"

    def test_recover_slot(self, wizard: Character) -> None:
        """Test restoring a spent slot."""
        result = recover_spell_slot(wizard, 2)

        assert result.applied is True
        assert result.character.spell_slots.used2 == 0

    @pytest.mark.parametrize("spell_level", [0, 10])
    def test_invalid_level(self, wizard: Character, spell_level: int) -> None:
        """Test spell levels outside 1-9 are invalid input."""
        with pytest.raises(ValidationError):
            consume(wizard, SpellSlot(spell_level))

    def test_pact_slot_targeted(self, warlock: Character) -> None:
        """Test the Occultiste's pact level addresses the pact pool."""
        result = consume_spell_slot(warlock, 3)

        assert result.applied is True
        assert result.character.spell_slots.used_pact_slots == 2
        assert result.character.spell_slots.used3 is None

        exhausted = consume_spell_slot(result.character, 3)
        assert exhausted.applied is False

    def test_other_level_for_pact_caster(self, warlock: Character) -> None:
        """Test levels other than the pact level have no slots."""
        assert consume_spell_slot(warlock, 1).applied is False


class TestArcaneRecovery:
    """Tests for the arcane recovery exchange.

    The budget is spent in spell levels: restoring a level 2 slot costs 2.
    """

    @pytest.mark.parametrize("level,expected", [(1, 1), (2, 1), (3, 2), (6, 3), (7, 4), (20, 10)])
    def test_budget(self, level: int, expected: int) -> None:
        """Test the budget is half the level rounded up, at least 1."""
        assert arcane_recovery_budget(level) == expected

    def test_budget_spent_in_spell_levels(self, wizard: Character) -> None:
        """Test a level 6 wizard recovers a level 2 then a level 1 slot."""
        first = exchange_arcane_recovery(wizard, 2)
        assert first.applied is True
        assert first.character.spell_slots.used2 == 0
        assert first.character.class_resources.arcane_recovery_slots_used == 2
        assert first.character.class_resources.used_arcane_recovery is False

        second = exchange_arcane_recovery(first.character, 1)
        assert second.applied is True
        assert second.character.spell_slots.used1 == 0
        assert second.character.class_resources.arcane_recovery_slots_used == 3
        assert second.character.class_resources.used_arcane_recovery is True

        slots = second.character.spell_slots.model_copy(update={"used1": 1})
        third = exchange_arcane_recovery(second.character.model_copy(update={"spell_slots": slots}), 1)
        assert third.applied is False

    def test_level_above_remaining_budget(self, wizard: Character) -> None:
        """Test a slot costing more than the remaining budget is rejected."""
        resources = wizard.class_resources.model_copy(update={"arcane_recovery_slots_used": 2})
        slots = wizard.spell_slots.model_copy(update={"used3": 1})
        character = wizard.model_copy(update={"class_resources": resources, "spell_slots": slots})

        result = exchange_arcane_recovery(character, 2)

        assert result.applied is False
        assert "remaining arcane recovery budget" in (result.reason or "")

    def test_no_spent_slot(self, wizard: Character) -> None:
        """Test a level without a spent slot is rejected."""
        result = exchange_arcane_recovery(wizard, 3)

        assert result.applied is False
        assert result.character is wizard

    def test_already_used(self, wizard: Character) -> None:
        """Test the flag blocks any further exchange this cycle."""
        resources = wizard.class_resources.model_copy(update={"used_arcane_recovery": True})
        character = wizard.model_copy(update={"class_resources": resources})

        result = exchange_arcane_recovery(character, 1)

        assert result.applied is False
        assert result.reason == "Arcane recovery already used this rest"

    def test_other_classes_rejected(self, barbarian: Character) -> None:
        """Test only a Magicien can exchange."""
        result = exchange_arcane_recovery(barbarian, 1)

        assert result.applied is False
        assert result.reason == "Only a Magicien can use arcane recovery"

    def test_invalid_spell_level(self, wizard: Character) -> None:
        """Test an invalid spell level is invalid input."""
        with pytest.raises(ValidationError):
            exchange_arcane_recovery(wizard, 0)

    def test_info(self, wizard: Character) -> None:
        """Test the budget report."""
        info = arcane_recovery_info(wizard)

        assert info is not None
        assert (info.budget, info.spent, info.remaining, info.available) == (3, 0, 3, True)

        spent = exchange_arcane_recovery(wizard, 2).character
        info = arcane_recovery_info(spent)
        assert info is not None
        assert (info.spent, info.remaining) == (2, 1)

    def test_info_for_non_wizard(self, barbarian: Character) -> None:
        """Test non-wizards have no arcane recovery."""
        assert arcane_recovery_info(barbarian) is None
