"""Unit tests for HeldItem."""

import unittest

from python.duel.exceptions import ItemNotRemovableError
from python.duel.testing.fakes import make_battle, make_combatant


class HeldItemTest(unittest.TestCase):
    def setUp(self) -> None:
        self.holder = make_combatant("Holder", item="Choice Band")
        self.other = make_combatant("Other")
        self.battle = make_battle(self.holder, self.other)

    def test_names_are_normalized(self) -> None:
        self.assertEqual(self.holder.held_item.name, "choiceband")
        self.assertTrue(self.holder.held_item.holds("choiceband", "choicespecs"))

    def test_switched_off_items(self) -> None:
        """Test that Klutz, Embargo and Magic Room hide the item without removing it."""
        item = self.holder.held_item
        self.holder.ability = "klutz"
        self.assertIsNone(item.get())
        self.holder.ability = ""
        self.holder.embargo.set_turns(2)
        self.assertIsNone(item.get())
        self.holder.embargo.set_turns(0)
        self.battle.magic_room.set_turns(3)
        self.assertIsNone(item.get())
        self.assertTrue(item.has_item())

    def test_use_remembers_the_item(self) -> None:
        self.holder.choice_move = self.holder.moves[0]
        self.holder.held_item.use()
        self.assertFalse(self.holder.held_item.has_item())
        self.assertEqual(self.holder.held_item.last_used, "choiceband")
        self.assertIsNone(self.holder.choice_move)

    def test_transfer(self) -> None:
        self.holder.held_item.transfer(self.other.held_item)
        self.assertEqual(self.other.held_item.name, "choiceband")
        self.assertIsNone(self.holder.held_item.name)
        self.assertTrue(self.other.held_item.ever_had_item)

    def test_swap(self) -> None:
        other = make_combatant("Other", item="Leftovers")
        self.holder.held_item.swap(other.held_item)
        self.assertEqual(self.holder.held_item.name, "leftovers")
        self.assertEqual(other.held_item.name, "choiceband")

    def test_recover(self) -> None:
        self.holder.held_item.use()
        self.holder.held_item.recover(self.holder.held_item)
        self.assertEqual(self.holder.held_item.name, "choiceband")
        self.assertIsNone(self.holder.held_item.last_used)

    def test_unremovable_item(self) -> None:
        plate = make_combatant("Arceus", item="Flame Plate").held_item
        self.assertFalse(plate.can_remove())
        with self.assertRaises(ItemNotRemovableError) as raised:
            plate.remove()
        self.assertEqual(raised.exception.item_name, "flameplate")
        with self.assertRaises(ItemNotRemovableError):
            self.holder.held_item.swap(plate)


if __name__ == "__main__":
    unittest.main()
