"""Tests for the economy ledger."""

from __future__ import annotations

import pytest

from idlequest.core.exceptions import InsufficientFundsError, ValidationError
from idlequest.engine.economy import EconomyLedger
from idlequest.models import Cost, Equipment, EquipmentSlot, InventoryItem, ItemType, Ledger


@pytest.fixture
def ledger() -> EconomyLedger:
    """Create a ledger holding 100 gold, 10 wood and 4 iron."""
    return EconomyLedger(Ledger(gold=100, materials={"wood": 10, "iron": 4}))


class TestBalances:
    """Tests for read accessors."""

    def test_balance(self, ledger: EconomyLedger) -> None:
        """Gold and materials are addressed by resource id."""
        assert ledger.balance("gold") == 100
        assert ledger.balance("wood") == 10
        assert ledger.balance("crystal") == 0

    def test_total_materials(self, ledger: EconomyLedger) -> None:
        """Every material counts toward the total."""
        assert ledger.total_materials() == 14

    def test_copies_returned(self, ledger: EconomyLedger) -> None:
        """Callers cannot mutate balances through the accessors."""
        ledger.materials["wood"] = 999

        assert ledger.quantity("wood") == 10

    def test_operates_on_given_record(self) -> None:
        """The ledger writes through to the record it was given."""
        record = Ledger()
        ledger = EconomyLedger(record)

        ledger.credit("gold", 5)

        assert record.gold == 5
        assert ledger.record is record


class TestCreditDebit:
    """Tests for single-resource mutations."""

    def test_credit(self, ledger: EconomyLedger) -> None:
        """Credits add to gold and materials."""
        ledger.credit("gold", 50)
        ledger.credit("stone", 3)

        assert ledger.gold == 150
        assert ledger.quantity("stone") == 3

    def test_negative_amount_rejected(self, ledger: EconomyLedger) -> None:
        """Negative amounts are caller errors."""
        with pytest.raises(ValidationError):
            ledger.credit("gold", -1)
        with pytest.raises(ValidationError):
            ledger.debit("wood", -1)

    def test_debit(self, ledger: EconomyLedger) -> None:
        """Debits remove from the balance."""
        ledger.debit("wood", 4)

        assert ledger.quantity("wood") == 6

    def test_short_debit_rejected(self, ledger: EconomyLedger) -> None:
        """A short debit raises and changes nothing."""
        with pytest.raises(InsufficientFundsError) as exc_info:
            ledger.debit("iron", 5)

        assert exc_info.value.required == 5
        assert exc_info.value.available == 4
        assert ledger.quantity("iron") == 4

    def test_debit_to_zero(self, ledger: EconomyLedger) -> None:
        """Balances may reach exactly zero."""
        ledger.debit("gold", 100)

        assert ledger.gold == 0


class TestSpend:
    """Tests for multi-resource costs."""

    def test_spend(self, ledger: EconomyLedger) -> None:
        """Gold and materials are debited together."""
        ledger.spend(Cost(gold=60, materials={"wood": 8}))

        assert ledger.gold == 40
        assert ledger.quantity("wood") == 2

    def test_spend_all_or_nothing(self, ledger: EconomyLedger) -> None:
        """One short material aborts the whole spend."""
        before = ledger.record.model_copy(deep=True)

        with pytest.raises(InsufficientFundsError) as exc_info:
            ledger.spend(Cost(gold=10, materials={"wood": 1, "iron": 9}))

        assert exc_info.value.resource_id == "iron"
        assert ledger.record == before

    def test_can_afford(self, ledger: EconomyLedger) -> None:
        """Affordability checks every resource."""
        assert ledger.can_afford(Cost(gold=100, materials={"iron": 4}))
        assert not ledger.can_afford(Cost(gold=101))
        assert not ledger.can_afford(Cost(materials={"crystal": 1}))

    def test_free_cost(self) -> None:
        """An empty ledger can pay a free cost."""
        ledger = EconomyLedger()

        ledger.spend(Cost())

        assert ledger.gold == 0


class TestInventory:
    """Tests for inventory operations."""

    def test_items_stack(self) -> None:
        """Stackable items with the same id merge."""
        ledger = EconomyLedger()
        ledger.add_items([InventoryItem(item_id="potion", quantity=2)])
        ledger.add_items([InventoryItem(item_id="potion", quantity=3)])

        assert len(ledger.inventory) == 1
        assert ledger.inventory[0].quantity == 5

    def test_remove_partial_stack(self) -> None:
        """Removing part of a stack leaves the rest."""
        ledger = EconomyLedger()
        ledger.add_items([InventoryItem(item_id="potion", quantity=5)])

        removed = ledger.remove_item("potion", 2)

        assert removed.quantity == 2
        assert ledger.inventory[0].quantity == 3

    def test_remove_too_many(self) -> None:
        """Removing more than is held raises and changes nothing."""
        ledger = EconomyLedger()
        ledger.add_items([InventoryItem(item_id="potion", quantity=1)])

        with pytest.raises(InsufficientFundsError):
            ledger.remove_item("potion", 2)

        assert ledger.inventory[0].quantity == 1

    def test_equipment_never_stacks(self) -> None:
        """Each equipment piece is its own entry."""
        ledger = EconomyLedger()
        sword = Equipment(id="sword", name="Sword", slot=EquipmentSlot.WEAPON)

        ledger.store_equipment(sword)
        ledger.store_equipment(sword)

        assert len(ledger.inventory) == 2
        assert all(item.item_type == ItemType.EQUIPMENT for item in ledger.inventory)

    def test_take_equipment(self) -> None:
        """Taking equipment hands over the record and removes the entry."""
        ledger = EconomyLedger()
        sword = Equipment(id="sword", name="Sword", slot=EquipmentSlot.WEAPON)
        ledger.store_equipment(sword)

        assert ledger.take_equipment("sword") == sword
        assert ledger.inventory == []

        with pytest.raises(InsufficientFundsError):
            ledger.take_equipment("sword")

    def test_take_equipment_skips_same_id_stack(self) -> None:
        """A consumable stack sharing the equipment's id stays in the inventory."""
        ledger = EconomyLedger()
        ledger.add_items([InventoryItem(item_id="sword", name="Sword Polish", quantity=3)])
        sword = Equipment(id="sword", name="Sword", slot=EquipmentSlot.WEAPON)
        ledger.store_equipment(sword)

        assert ledger.take_equipment("sword") == sword

        assert len(ledger.inventory) == 1
        assert ledger.inventory[0].item_type == ItemType.CONSUMABLE
        assert ledger.inventory[0].quantity == 3

    def test_reset(self, ledger: EconomyLedger) -> None:
        """Reset empties every balance."""
        ledger.add_items([InventoryItem(item_id="potion")])

        ledger.reset()

        assert ledger.gold == 0
        assert ledger.materials == {}
        assert ledger.inventory == []
