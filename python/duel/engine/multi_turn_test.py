"""Tests for charge moves, recharges and other multi-turn commitments."""

import unittest

from absl.testing import parameterized

from python.duel.engine import move_engine
from python.duel.engine import multi_turn
from python.duel.engine.fixed_damage import BIDE_EFFECT
from python.duel.schema.enums import DamageClass, ElementType, Weather
from python.duel.schema.expiring import LockedMove
from python.duel.testing.fakes import make_battle, make_combatant, make_move


class ChargeMoveTest(unittest.TestCase):
    def setUp(self) -> None:
        self.attacker = make_combatant("Attacker", moves=("solar-beam",))
        self.defender = make_combatant("Defender", hp=400)
        self.battle = make_battle(self.attacker, self.defender)
        self.move = self.attacker.moves[0]

    def _use(self):
        return move_engine.use_move(
            self.move, self.attacker, self.defender, self.battle
        )

    def test_committed_turn_strikes_without_charging(self) -> None:
        self.attacker.locked_move = LockedMove(move=self.move, remaining=1, turn=1)

        result = self._use()

        self.assertEqual(result.hits, 1)
        self.assertLess(self.defender.hp, self.defender.max_hp)
        self.assertNotIn("charging", result.msg)
        self.assertIsNone(self.attacker.locked_move)
        self.assertEqual(self.move.pp, self.move.starting_pp)

    def test_charges_then_strikes_on_the_next_turn(self) -> None:
        first = self._use()
        self.assertIn("It's charging up!", first.msg)
        self.assertEqual(first.hits, 0)
        self.assertEqual(self.defender.hp, self.defender.max_hp)
        self.assertIsNotNone(self.attacker.locked_move)
        self.assertEqual(self.move.pp, self.move.starting_pp - 1)

        self.attacker.end_turn()
        self.assertEqual(self.attacker.locked_move.turn, 1)

        second = self._use()
        self.assertNotIn("charging", second.msg)
        self.assertEqual(second.hits, 1)
        self.assertLess(self.defender.hp, self.defender.max_hp)
        self.assertIsNone(self.attacker.locked_move)
        self.assertEqual(self.move.pp, self.move.starting_pp - 1)

    def test_sun_skips_the_charge(self) -> None:
        self.battle.weather.set(Weather.SUN, self.attacker)
        result = self._use()
        self.assertNotIn("charging", result.msg)
        self.assertEqual(result.hits, 1)
        self.assertIsNone(self.attacker.locked_move)


class PhaseTest(parameterized.TestCase):
    def test_idle_without_lock(self) -> None:
        poke = make_combatant("Poke", moves=("solar-beam",))
        self.assertEqual(
            multi_turn.phase(poke.moves[0], poke), multi_turn.CommitmentPhase.IDLE
        )

    @parameterized.parameters(
        (0, multi_turn.CommitmentPhase.CHARGING),
        (1, multi_turn.CommitmentPhase.EXECUTING),
    )
    def test_charge_move_phases(self, turn: int, expected) -> None:
        poke = make_combatant("Poke", moves=("solar-beam",))
        poke.locked_move = LockedMove(move=poke.moves[0], remaining=2 - turn, turn=turn)
        self.assertEqual(multi_turn.phase(poke.moves[0], poke), expected)

    def test_rampage_executes_on_every_turn(self) -> None:
        poke = make_combatant("Poke")
        rampage = make_move("tackle", power=120, effect=28)
        poke.locked_move = LockedMove(move=rampage, remaining=1, turn=2)
        self.assertEqual(
            multi_turn.phase(rampage, poke), multi_turn.CommitmentPhase.EXECUTING
        )

    def test_bide_stores_until_its_strike_turn(self) -> None:
        attacker = make_combatant("Attacker")
        defender = make_combatant("Defender")
        battle = make_battle(attacker, defender)
        bide = make_move(
            "bide",
            id=117,
            power=None,
            pp=10,
            accuracy=None,
            priority=1,
            type=ElementType.NORMAL,
            damage_class=DamageClass.PHYSICAL,
            effect=BIDE_EFFECT,
        )

        for _ in range(2):
            result = multi_turn.setup_commitment(bide, attacker, defender, battle)
            self.assertTrue(result.blocked)
            self.assertEqual(result.msg, "It's storing energy!\n")
            self.assertEqual(
                multi_turn.phase(bide, attacker), multi_turn.CommitmentPhase.CHARGING
            )
            attacker.end_turn()

        result = multi_turn.setup_commitment(bide, attacker, defender, battle)
        self.assertFalse(result.blocked)
        self.assertEqual(
            multi_turn.phase(bide, attacker), multi_turn.CommitmentPhase.EXECUTING
        )
        multi_turn.finish_commitment(bide, attacker)
        self.assertIsNone(attacker.locked_move)
        self.assertEqual(
            multi_turn.phase(bide, attacker), multi_turn.CommitmentPhase.IDLE
        )


class RechargeTest(unittest.TestCase):
    def test_strikes_then_recharges(self) -> None:
        attacker = make_combatant("Attacker")
        defender = make_combatant("Defender", hp=500)
        battle = make_battle(attacker, defender)
        hyper_beam = make_move("tackle", id=63, power=150, effect=81)

        first = move_engine.use_move(hyper_beam, attacker, defender, battle)
        self.assertEqual(first.hits, 1)
        dealt = defender.max_hp - defender.hp

        attacker.end_turn()
        second = move_engine.use_move(hyper_beam, attacker, defender, battle)
        self.assertIn("It's recharging!", second.msg)
        self.assertEqual(second.hits, 0)
        self.assertEqual(defender.max_hp - defender.hp, dealt)

        attacker.end_turn()
        self.assertIsNone(attacker.locked_move)


class SemiInvulnerableChargeTest(unittest.TestCase):
    def test_fly_hides_the_user_while_charging(self) -> None:
        attacker = make_combatant("Attacker")
        battle = make_battle(attacker, make_combatant("Defender"))
        fly = make_move("tackle", id=19, power=90, accuracy=95, effect=156)
        gate = multi_turn.setup_commitment(fly, attacker, battle.side2.current, battle)
        self.assertTrue(gate.blocked)
        self.assertTrue(attacker.fly)
        self.assertTrue(attacker.semi_invulnerable())


if __name__ == "__main__":
    unittest.main()
