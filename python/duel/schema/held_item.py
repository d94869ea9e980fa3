"""Held item state of one combatant."""

from typing import TYPE_CHECKING, Any, Optional

from python.duel.data.items import FLING_POWER, UNREMOVABLE_ITEMS
from python.duel.exceptions import ItemNotRemovableError
from python.duel.schema.object_name_normalizer import normalize_name

if TYPE_CHECKING:
    from python.duel.schema.combatant import Combatant


class HeldItem:
    """The item a combatant is holding, plus the memory of items it used.

    `name` is the item physically held. `get()` is the item that is currently
    active: Embargo, Magic Room, Klutz and Corrosive Gas switch a removable
    item off without taking it away.

    Attributes:
        name: Normalized name of the held item, or None
        owner: The combatant holding the item
        last_used: Name of the last item this holder consumed
        ever_had_item: Whether the holder has held anything this battle
        battle: Battle the holder takes part in, used for Magic Room
    """

    def __init__(
        self,
        name: Optional[str],
        owner: "Combatant",
        fling_power: Optional[int] = None,
    ):
        self.name = normalize_name(name) if name else None
        self.owner = owner
        self._fling_power = fling_power
        self.last_used: Optional[str] = None
        self.ever_had_item = self.name is not None
        self.battle: Any = None

    @property
    def fling_power(self) -> Optional[int]:
        if self.name is None:
            return None
        if self._fling_power is not None:
            return self._fling_power
        return FLING_POWER.get(self.name)

    def get(self) -> Optional[str]:
        """The active item, or None when it is missing or switched off."""
        if self.name is None:
            return None
        if not self.can_remove():
            return self.name
        if self.owner.embargo.active():
            return None
        if self.battle is not None and self.battle.magic_room.active():
            return None
        if self.owner.ability == "klutz":
            return None
        if self.owner.corrosive_gas:
            return None
        return self.name

    def holds(self, *names: str) -> bool:
        """Whether the active item is one of `names`."""
        return self.get() in names

    def has_item(self) -> bool:
        return self.name is not None

    def can_remove(self) -> bool:
        return self.name is None or self.name not in UNREMOVABLE_ITEMS

    def is_berry(self, only_active: bool = True) -> bool:
        item = self.get() if only_active else self.name
        return bool(item) and item.endswith("berry")

    def _check_removable(self) -> None:
        if not self.can_remove():
            raise ItemNotRemovableError(self.name)

    def remove(self) -> None:
        """Take the item away for good.

        Raises:
            ItemNotRemovableError: If the item can never leave its holder
        """
        self._check_removable()
        self.name = None
        self._fling_power = None

    def use(self) -> None:
        """Consume the item, remembering it for Recycle-style recovery.

        Raises:
            ItemNotRemovableError: If the item can never leave its holder
        """
        self._check_removable()
        self.last_used = self.name
        self.owner.choice_move = None
        self.remove()

    def transfer(self, other: "HeldItem") -> None:
        """Move this item onto `other`, which is expected to be empty.

        Raises:
            ItemNotRemovableError: If either item can never leave its holder
        """
        self._check_removable()
        other._check_removable()
        other.name = self.name
        other._fling_power = self._fling_power
        other.ever_had_item = other.ever_had_item or other.name is not None
        self.remove()

    def swap(self, other: "HeldItem") -> None:
        """Exchange items with `other`.

        Raises:
            ItemNotRemovableError: If either item can never leave its holder
        """
        self._check_removable()
        other._check_removable()
        self.name, other.name = other.name, self.name
        self._fling_power, other._fling_power = other._fling_power, self._fling_power
        self.owner.choice_move = None
        other.owner.choice_move = None
        self.ever_had_item = self.ever_had_item or self.name is not None
        other.ever_had_item = other.ever_had_item or other.name is not None

    def recover(self, other: "HeldItem") -> None:
        """Take back the item `other` last consumed."""
        self.name = other.last_used
        other.last_used = None
        self.ever_had_item = self.ever_had_item or self.name is not None

    def __repr__(self) -> str:
        return f"HeldItem({self.name})"
