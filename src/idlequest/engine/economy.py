"""Economy ledger operations.

EconomyLedger owns a Ledger record and is the only writer of gold,
material and inventory balances. Debits are all-or-nothing: a short
balance raises InsufficientFundsError before anything is touched.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from idlequest.core.constants import GOLD_RESOURCE_ID
from idlequest.core.exceptions import InsufficientFundsError, ValidationError
from idlequest.core.logging import get_logger
from idlequest.models.character import Equipment
from idlequest.models.economy import Cost, InventoryItem, Ledger
from idlequest.models.enums import ItemType


logger = get_logger(__name__)


class LedgerView(Protocol):
    """Read-only access to material balances."""

    def quantity(self, material_id: str) -> int: ...

    def total_materials(self) -> int: ...


class EconomyLedger:
    """Atomic credit and debit operations over a Ledger record.

    Example:
        >>> ledger = EconomyLedger()
        >>> ledger.credit("gold", 100)
        >>> ledger.spend(Cost(gold=40))
        >>> ledger.gold
        60
    """

    def __init__(self, ledger: Ledger | None = None) -> None:
        """Initialize the ledger.

        Args:
            ledger: Existing record to operate on. A fresh one is created if None.
        """
        self._ledger = ledger if ledger is not None else Ledger()

    # =========================================================================
    # Read Accessors
    # =========================================================================

    @property
    def record(self) -> Ledger:
        """The underlying durable record."""
        return self._ledger

    @property
    def gold(self) -> int:
        """Current gold balance."""
        return self._ledger.gold

    @property
    def materials(self) -> dict[str, int]:
        """Copy of the material balances."""
        return dict(self._ledger.materials)

    @property
    def inventory(self) -> list[InventoryItem]:
        """Copy of the inventory list."""
        return list(self._ledger.inventory)

    def balance(self, resource_id: str) -> int:
        """Get the balance of gold or of a material.

        Args:
            resource_id: "gold" or a material id.

        Returns:
            Current balance, 0 for unknown materials.
        """
        if resource_id == GOLD_RESOURCE_ID:
            return self._ledger.gold
        return self._ledger.materials.get(resource_id, 0)

    def quantity(self, material_id: str) -> int:
        """Get the held quantity of a material."""
        return self._ledger.materials.get(material_id, 0)

    def total_materials(self) -> int:
        """Get the summed quantity of every material."""
        return sum(self._ledger.materials.values())

    def can_afford(self, cost: Cost) -> bool:
        """Check gold and every material of a cost against current balances."""
        if self._ledger.gold < cost.gold:
            return False
        return all(
            self.quantity(material_id) >= amount
            for material_id, amount in cost.materials.items()
        )

    # =========================================================================
    # Mutations
    # =========================================================================

    def credit(self, resource_id: str, amount: int) -> None:
        """Increase a balance.

        Args:
            resource_id: "gold" or a material id.
            amount: Non-negative amount to add.

        Raises:
            ValidationError: If amount is negative.
        """
        self._check_amount(resource_id, amount)
        if amount == 0:
            return
        if resource_id == GOLD_RESOURCE_ID:
            self._ledger.gold = self._ledger.gold + amount
        else:
            materials = dict(self._ledger.materials)
            materials[resource_id] = materials.get(resource_id, 0) + amount
            self._ledger.materials = materials
        logger.debug("Credited", resource_id=resource_id, amount=amount)

    def debit(self, resource_id: str, amount: int) -> None:
        """Decrease a balance, rejecting the call if it is short.

        Args:
            resource_id: "gold" or a material id.
            amount: Non-negative amount to remove.

        Raises:
            ValidationError: If amount is negative.
            InsufficientFundsError: If the balance is below amount.
        """
        self._check_amount(resource_id, amount)
        available = self.balance(resource_id)
        if available < amount:
            logger.debug(
                "Debit rejected",
                resource_id=resource_id,
                required=amount,
                available=available,
            )
            raise InsufficientFundsError(
                f"Not enough {resource_id}",
                resource_id=resource_id,
                required=amount,
                available=available,
            )
        if amount == 0:
            return
        if resource_id == GOLD_RESOURCE_ID:
            self._ledger.gold = available - amount
        else:
            materials = dict(self._ledger.materials)
            materials[resource_id] = available - amount
            self._ledger.materials = materials
        logger.debug("Debited", resource_id=resource_id, amount=amount)

    def spend(self, cost: Cost) -> None:
        """Debit gold and all materials of a cost as one unit.

        Balances are re-validated here, at the point of spend, so a prior
        can_afford() result is never trusted.

        Raises:
            InsufficientFundsError: On the first short resource. Nothing is debited.
        """
        shortfall = self._first_shortfall(cost)
        if shortfall is not None:
            resource_id, required = shortfall
            available = self.balance(resource_id)
            logger.debug(
                "Spend rejected",
                resource_id=resource_id,
                required=required,
                available=available,
            )
            raise InsufficientFundsError(
                f"Cannot afford cost: not enough {resource_id}",
                resource_id=resource_id,
                required=required,
                available=available,
            )

        materials = dict(self._ledger.materials)
        for material_id, amount in cost.materials.items():
            materials[material_id] = materials.get(material_id, 0) - amount
        self._ledger.gold = self._ledger.gold - cost.gold
        self._ledger.materials = materials
        logger.debug("Cost paid", gold=cost.gold, materials=cost.materials)

    def add_items(self, items: Iterable[InventoryItem]) -> None:
        """Add items to the inventory.

        Equipment never stacks. Other items stack onto an existing entry
        with the same id.
        """
        inventory = list(self._ledger.inventory)
        for new_item in items:
            if new_item.item_type == ItemType.EQUIPMENT:
                inventory.append(new_item)
                continue
            for index, existing in enumerate(inventory):
                if existing.item_id == new_item.item_id and existing.item_type != ItemType.EQUIPMENT:
                    inventory[index] = existing.model_copy(
                        update={"quantity": existing.quantity + new_item.quantity}
                    )
                    break
            else:
                inventory.append(new_item)
        self._ledger.inventory = inventory

    def remove_item(self, item_id: str, quantity: int = 1) -> InventoryItem:
        """Remove items from the inventory.

        Args:
            item_id: Inventory item id.
            quantity: How many to remove from the stack.

        Returns:
            An entry describing what was removed.

        Raises:
            InsufficientFundsError: If fewer than ``quantity`` are held.
        """
        inventory = list(self._ledger.inventory)
        for index, existing in enumerate(inventory):
            if existing.item_id != item_id:
                continue
            if existing.quantity < quantity:
                break
            if existing.quantity == quantity:
                inventory.pop(index)
                removed = existing
            else:
                inventory[index] = existing.model_copy(
                    update={"quantity": existing.quantity - quantity}
                )
                removed = existing.model_copy(update={"quantity": quantity})
            self._ledger.inventory = inventory
            return removed

        held = sum(item.quantity for item in inventory if item.item_id == item_id)
        raise InsufficientFundsError(
            f"Not enough {item_id} in inventory",
            resource_id=item_id,
            required=quantity,
            available=held,
        )

    def store_equipment(self, item: Equipment) -> None:
        """Take ownership of an unequipped item."""
        self.add_items([InventoryItem.from_equipment(item)])

    def take_equipment(self, item_id: str) -> Equipment:
        """Remove an equipment piece from the inventory and hand it over.

        Raises:
            InsufficientFundsError: If no such equipment is held.
        """
        inventory = list(self._ledger.inventory)
        for index, existing in enumerate(inventory):
            if existing.item_id == item_id and existing.equipment is not None:
                # Equipment entries never stack; pop this entry, not the first id match.
                inventory.pop(index)
                self._ledger.inventory = inventory
                return existing.equipment
        raise InsufficientFundsError(
            f"No equipment {item_id!r} in inventory",
            resource_id=item_id,
            required=1,
            available=0,
        )

    def reset(self) -> None:
        """Empty every balance and the inventory."""
        self._ledger.gold = 0
        self._ledger.materials = {}
        self._ledger.inventory = []
        logger.info("Ledger reset")

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _check_amount(resource_id: str, amount: int) -> None:
        if amount < 0:
            raise ValidationError(
                f"Amount for {resource_id} cannot be negative",
                field_name="amount",
                invalid_value=amount,
            )

    def _first_shortfall(self, cost: Cost) -> tuple[str, int] | None:
        if self._ledger.gold < cost.gold:
            return GOLD_RESOURCE_ID, cost.gold
        for material_id, amount in cost.materials.items():
            if self.quantity(material_id) < amount:
                return material_id, amount
        return None


__all__ = [
    "LedgerView",
    "EconomyLedger",
]
