"""Tests for the status gates a combatant passes before acting."""

import unittest

from absl.testing import parameterized

from python.duel.engine import gates
from python.duel.engine import move_engine
from python.duel.schema.enums import Status
from python.duel.schema.expiring import LockedMove
from python.duel.testing.fakes import (
    ScriptedRandom,
    make_battle,
    make_combatant,
    make_move,
)


class StatusGateTest(parameterized.TestCase):
    def setUp(self) -> None:
        self.attacker = make_combatant(
            "Attacker", moves=("tackle", "ember", "sleep-talk")
        )
        self.defender = make_combatant("Defender")
        self.rng = ScriptedRandom()
        self.battle = make_battle(self.attacker, self.defender, rng=self.rng)
        self.tackle = self.attacker.moves[0]

    def _gate(self, move=None, use_pp: bool = True) -> gates.GateResult:
        return gates.check_status_gates(
            move or self.tackle, self.attacker, self.defender, self.battle, use_pp
        )

    def test_healthy_attacker_passes(self) -> None:
        self.assertEqual(self._gate(), gates.GateResult(""))

    @parameterized.parameters((0, True), (1, False), (3, False))
    def test_paralysis(self, draw: int, blocked: bool) -> None:
        self.attacker.status.current = Status.PARALYSIS
        self.rng.queue("randrange", draw)
        self.assertEqual(self._gate().blocked, blocked)

    def test_frozen_attacker_stays_frozen(self) -> None:
        self.attacker.status.current = Status.FREEZE
        result = self._gate()
        self.assertTrue(result.blocked)
        self.assertEqual(result.msg, "Attacker is frozen solid!\n")

    def test_frozen_attacker_can_thaw(self) -> None:
        self.attacker.status.current = Status.FREEZE
        self.rng.queue("randrange", 0)
        result = self._gate()
        self.assertFalse(result.blocked)
        self.assertFalse(self.attacker.status.freeze())

    def test_fire_moves_thaw_their_user(self) -> None:
        self.attacker.status.current = Status.FREEZE
        result = self._gate(self.attacker.moves[1])
        self.assertFalse(result.blocked)
        self.assertIn("Attacker thawed out!", result.msg)

    def test_called_moves_never_thaw(self) -> None:
        self.attacker.status.current = Status.FREEZE
        self.rng.queue("randrange", 0)
        self.assertTrue(self._gate(use_pp=False).blocked)

    def test_sleep(self) -> None:
        self.attacker.status.current = Status.SLEEP
        self.attacker.status.sleep_timer.set_turns(3)
        result = self._gate()
        self.assertTrue(result.blocked)
        self.assertEqual(result.msg, "Attacker is fast asleep!\n")
        self.assertEqual(self.attacker.status.sleep_timer.remaining, 2)

    def test_sleep_talk_works_while_asleep(self) -> None:
        self.attacker.status.current = Status.SLEEP
        self.attacker.status.sleep_timer.set_turns(3)
        self.assertFalse(self._gate(self.attacker.moves[2]).blocked)

    def test_waking_up(self) -> None:
        self.attacker.status.current = Status.SLEEP
        self.attacker.status.sleep_timer.set_turns(1)
        result = self._gate()
        self.assertFalse(result.blocked)
        self.assertEqual(result.msg, "Attacker woke up!\n")
        self.assertFalse(self.attacker.status.sleep())

    def test_called_moves_do_not_tick_sleep(self) -> None:
        self.attacker.status.current = Status.SLEEP
        self.attacker.status.sleep_timer.set_turns(1)
        self.assertTrue(self._gate(use_pp=False).blocked)
        self.assertEqual(self.attacker.status.sleep_timer.remaining, 1)

    def test_flinch(self) -> None:
        self.attacker.ctx.flinched = True
        self.assertEqual(self._gate().msg, "Attacker flinched! It can't move!\n")

    @parameterized.parameters((0, True), (1, False))
    def test_infatuation(self, draw: int, blocked: bool) -> None:
        self.attacker.infatuated = self.defender
        self.rng.queue("randrange", draw)
        self.assertEqual(self._gate().blocked, blocked)

    def test_confusion_self_hit(self) -> None:
        self.attacker.confusion.set_turns(3)
        self.rng.queue("randrange", 0)
        result = self._gate()
        self.assertTrue(result.blocked)
        self.assertIn("Attacker hurt itself in its confusion!", result.msg)
        self.assertLess(self.attacker.hp, self.attacker.max_hp)

    def test_confusion_wears_off(self) -> None:
        self.attacker.confusion.set_turns(1)
        result = self._gate()
        self.assertFalse(result.blocked)
        self.assertEqual(result.msg, "Attacker is no longer confused!\n")

    def test_truant_loafs_every_other_turn(self) -> None:
        self.attacker.ability = "truant"
        self.attacker.truant_turn = 1
        self.assertTrue(self._gate().blocked)
        self.attacker.truant_turn = 2
        self.assertFalse(self._gate().blocked)

    def test_blocked_rampage_ends_its_lock(self) -> None:
        rampage = make_move("tackle", power=120, effect=28)
        self.attacker.locked_move = LockedMove(move=rampage, remaining=2, turn=1)
        self.attacker.ctx.flinched = True
        self.assertTrue(self._gate(rampage).blocked)
        self.assertIsNone(self.attacker.locked_move)


class GatedUseTest(unittest.TestCase):
    def test_gated_move_only_touches_bookkeeping(self) -> None:
        attacker = make_combatant("Attacker")
        defender = make_combatant("Defender")
        rng = ScriptedRandom().queue("randrange", 0)
        battle = make_battle(attacker, defender, rng=rng)
        attacker.status.current = Status.PARALYSIS
        move = attacker.moves[0]

        result = move_engine.use_move(move, attacker, defender, battle)

        self.assertEqual(result.msg, "Attacker is paralyzed! It can't move!\n")
        self.assertEqual(result.hits, 0)
        self.assertEqual(defender.hp, defender.max_hp)
        self.assertEqual(move.pp, move.starting_pp)
        self.assertTrue(attacker.has_moved)
        self.assertIs(attacker.ctx.last_move, move)
        self.assertTrue(attacker.status.paralysis())


if __name__ == "__main__":
    unittest.main()
