"""Unit tests for TurnContext."""

import unittest

from python.duel.schema.enums import DamageClass
from python.duel.schema.turn_context import PROTECTION_FLAGS, TurnContext


class TurnContextTest(unittest.TestCase):
    def test_end_turn_keeps_the_last_move(self) -> None:
        """Test that only the last-move memory survives the end of a turn."""
        ctx = TurnContext(
            has_moved=True,
            flinched=True,
            protect=True,
            last_move="tackle",
            last_move_failed=True,
            last_move_damage=(40, DamageClass.PHYSICAL),
        )

        ctx.end_turn()

        self.assertFalse(ctx.has_moved)
        self.assertFalse(ctx.flinched)
        self.assertFalse(ctx.protect)
        self.assertIsNone(ctx.last_move_damage)
        self.assertEqual(ctx.last_move, "tackle")
        self.assertTrue(ctx.last_move_failed)

    def test_any_protection(self) -> None:
        """Test every barrier counts as protection but Endure does not."""
        self.assertFalse(TurnContext(endure=True).any_protection())
        for name in PROTECTION_FLAGS:
            self.assertTrue(TurnContext(**{name: True}).any_protection(), name)

    def test_clear_protection(self) -> None:
        ctx = TurnContext(kings_shield=True, endure=True, magic_coat=True)
        ctx.clear_protection()
        self.assertFalse(ctx.any_protection())
        self.assertFalse(ctx.endure)
        self.assertTrue(ctx.magic_coat)


if __name__ == "__main__":
    unittest.main()
