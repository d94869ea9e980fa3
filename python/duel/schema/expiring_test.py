"""Unit tests for turn-limited effects."""

import unittest

from absl.testing import parameterized

from python.duel.schema.expiring import (
    ExpiringEffect,
    ExpiringItem,
    ExpiringWish,
    LockedMove,
)


class ExpiringEffectTest(parameterized.TestCase):
    @parameterized.parameters((0, False), (1, True), (None, True))
    def test_active(self, remaining, active: bool) -> None:
        self.assertEqual(ExpiringEffect(remaining).active(), active)

    def test_runs_out(self) -> None:
        effect = ExpiringEffect(2)
        self.assertFalse(effect.next_turn())
        self.assertTrue(effect.next_turn())
        self.assertFalse(effect.active())
        self.assertFalse(effect.next_turn())
        self.assertEqual(effect.remaining, 0)

    def test_unbounded_effect_never_ticks(self) -> None:
        effect = ExpiringEffect(None)
        self.assertFalse(effect.next_turn())
        self.assertTrue(effect.active())


class ExpiringItemTest(unittest.TestCase):
    def test_item_is_forgotten_on_expiry(self) -> None:
        effect = ExpiringItem()
        effect.set("target", 1)
        self.assertEqual(effect.item, "target")
        self.assertTrue(effect.next_turn())
        self.assertIsNone(effect.item)

    def test_end(self) -> None:
        effect = ExpiringItem()
        effect.set("target", 3)
        effect.end()
        self.assertFalse(effect.active())
        self.assertIsNone(effect.item)


class ExpiringWishTest(unittest.TestCase):
    def test_wish_lands_on_the_second_tick(self) -> None:
        wish = ExpiringWish()
        wish.set(60)
        self.assertEqual(wish.next_turn(), 0)
        self.assertEqual(wish.next_turn(), 60)
        self.assertIsNone(wish.hp)
        self.assertEqual(wish.next_turn(), 0)


class LockedMoveTest(unittest.TestCase):
    def test_counts_completed_turns(self) -> None:
        lock = LockedMove(move="solar-beam", remaining=2)
        self.assertFalse(lock.is_last_turn())
        self.assertFalse(lock.next_turn())
        self.assertEqual(lock.turn, 1)
        self.assertTrue(lock.is_last_turn())
        self.assertTrue(lock.next_turn())
        self.assertEqual(lock.turn, 2)

    def test_locks_compare_by_identity(self) -> None:
        self.assertNotEqual(
            LockedMove(move="a", remaining=1), LockedMove(move="a", remaining=1)
        )

    def test_membership_matches_the_same_lock_only(self) -> None:
        held = LockedMove(move="outrage", remaining=2)
        twin = LockedMove(move="outrage", remaining=2)
        self.assertIn(held, [held])
        self.assertNotIn(twin, [held])
        self.assertEqual(len({held, twin}), 2)


if __name__ == "__main__":
    unittest.main()
