"""Economy data: the ledger record, costs and inventory items."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from idlequest.models.character import Equipment
from idlequest.models.enums import ItemType


class Cost(BaseModel):
    """A price in gold and materials.

    Attributes:
        gold: Gold required.
        materials: Material id to quantity required.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    gold: int = Field(default=0, ge=0)
    materials: dict[str, int] = Field(default_factory=dict)

    @field_validator("materials")
    @classmethod
    def validate_material_quantities(cls, value: dict[str, int]) -> dict[str, int]:
        """Reject negative material quantities and drop zero entries."""
        for material_id, quantity in value.items():
            if quantity < 0:
                raise ValueError(f"Material cost for {material_id!r} cannot be negative")
        return {material_id: quantity for material_id, quantity in value.items() if quantity > 0}

    @property
    def is_free(self) -> bool:
        """Check whether the cost requires nothing."""
        return self.gold == 0 and not self.materials


class InventoryItem(BaseModel):
    """A stack of items in the player's inventory.

    Equipment never stacks: each equipment piece is its own entry with
    quantity 1 and carries the equipment record.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    item_id: str = Field(min_length=1)
    name: str = ""
    item_type: ItemType = ItemType.CONSUMABLE
    quantity: int = Field(default=1, ge=1)
    equipment: Equipment | None = None

    @model_validator(mode="after")
    def validate_equipment_stack(self) -> "InventoryItem":
        """Keep equipment entries consistent with their payload.

        Returns:
            Self if validation passes.
        """
        if self.item_type == ItemType.EQUIPMENT:
            if self.equipment is None:
                raise ValueError("Equipment inventory entries need an equipment record")
            if self.quantity != 1:
                raise ValueError("Equipment does not stack")
        return self

    @classmethod
    def from_equipment(cls, item: Equipment) -> "InventoryItem":
        """Wrap an equipment piece as an inventory entry."""
        return cls(
            item_id=item.id,
            name=item.name,
            item_type=ItemType.EQUIPMENT,
            quantity=1,
            equipment=item,
        )


class Ledger(BaseModel):
    """Durable balances: gold, materials and inventory.

    Quantities never go negative. The engine mutates a ledger only through
    EconomyLedger, which rejects short debits instead of clamping.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    gold: int = Field(default=0, ge=0)
    materials: dict[str, int] = Field(default_factory=dict)
    inventory: list[InventoryItem] = Field(default_factory=list)

    @field_validator("materials")
    @classmethod
    def validate_non_negative(cls, value: dict[str, int]) -> dict[str, int]:
        """Ensure no material balance is negative."""
        for material_id, quantity in value.items():
            if quantity < 0:
                raise ValueError(f"Material balance for {material_id!r} cannot be negative")
        return value


__all__ = [
    "Cost",
    "InventoryItem",
    "Ledger",
]
