"""Tests for the hit or miss decision."""

import unittest

from absl.testing import parameterized

from python.duel.engine import accuracy
from python.duel.engine import queries
from python.duel.schema.enums import DamageClass, ElementType, Stat, Weather
from python.duel.testing.fakes import (
    ScriptedRandom,
    make_battle,
    make_combatant,
    make_move,
)


class AccuracyStageTest(parameterized.TestCase):
    def test_table_is_monotonic(self) -> None:
        values = [accuracy.accuracy_stage_multiplier(stage) for stage in range(-6, 7)]
        self.assertEqual(values, sorted(values))
        self.assertEqual(len(set(values)), len(values))

    def test_neutral_stage(self) -> None:
        self.assertEqual(accuracy.accuracy_stage_multiplier(0), 1.0)

    @parameterized.parameters((-9, 3 / 9), (9, 3.0))
    def test_out_of_range_stage_is_clamped(self, stage: int, expected: float) -> None:
        self.assertAlmostEqual(accuracy.accuracy_stage_multiplier(stage), expected)

    def test_net_stage_subtracts_evasion(self) -> None:
        attacker = make_combatant("Attacker")
        defender = make_combatant("Defender")
        attacker.stages[Stat.ACCURACY] = 2
        defender.stages[Stat.EVASION] = 5
        move = make_move("tackle")
        self.assertEqual(accuracy.net_accuracy_stage(move, attacker, defender), -3)

    def test_foresight_ignores_evasion(self) -> None:
        attacker = make_combatant("Attacker")
        defender = make_combatant("Defender")
        defender.stages[Stat.EVASION] = 4
        defender.foresight = True
        move = make_move("tackle")
        self.assertEqual(accuracy.net_accuracy_stage(move, attacker, defender), 0)


class CheckHitTest(parameterized.TestCase):
    def setUp(self) -> None:
        self.attacker = make_combatant("Attacker")
        self.defender = make_combatant("Defender")
        self.rng = ScriptedRandom()
        self.battle = make_battle(self.attacker, self.defender, rng=self.rng)

    def _hits(self, move) -> bool:
        return accuracy.check_hit(move, self.attacker, self.defender, self.battle)

    @parameterized.parameters(0.0, 0.5, 0.99999)
    def test_full_accuracy_hits_for_any_draw(self, draw: float) -> None:
        self.rng.queue("random", draw)
        self.assertTrue(self._hits(make_move("tackle")))

    @parameterized.parameters((0.89, True), (0.895, True), (0.91, False))
    def test_draw_against_accuracy(self, draw: float, hits: bool) -> None:
        self.rng.queue("random", draw)
        self.assertEqual(self._hits(make_move("thunder-wave")), hits)

    def test_evasion_lowers_the_odds(self) -> None:
        self.defender.stages[Stat.EVASION] = 1
        self.rng.queue("random", 0.8)
        self.assertFalse(self._hits(make_move("tackle")))

    def test_no_accuracy_never_misses(self) -> None:
        self.rng.queue("random", 0.99999)
        self.defender.stages[Stat.EVASION] = 6
        move = make_move("tackle", accuracy=None)
        self.assertTrue(self._hits(move))

    def test_no_guard_always_hits(self) -> None:
        self.attacker.ability = "noguard"
        self.defender.stages[Stat.EVASION] = 6
        self.rng.queue("random", 0.99)
        self.assertTrue(self._hits(make_move("tackle")))

    def test_rain_sure_hit(self) -> None:
        self.battle.weather.set(Weather.RAIN, self.attacker)
        self.rng.queue("random", 0.99)
        thunder = make_move(
            "thunder",
            id=87,
            power=110,
            pp=10,
            accuracy=70,
            type=ElementType.ELECTRIC,
            damage_class=DamageClass.SPECIAL,
            effect=153,
            effect_chance=30,
        )
        self.assertTrue(self._hits(thunder))

    def test_micle_berry_is_spent_on_the_check(self) -> None:
        self.attacker.micle_berry_ate = True
        self._hits(make_move("tackle"))
        self.assertFalse(self.attacker.micle_berry_ate)

    @parameterized.named_parameters(
        ("compound_eyes", "compoundeyes", "thunder-wave", 0.95, True),
        ("victory_star", "victorystar", "thunder-wave", 0.95, True),
        ("hustle_physical", "hustle", "tackle", 0.85, False),
        ("hustle_status", "hustle", "thunder-wave", 0.89, True),
    )
    def test_attacker_accuracy_abilities(
        self, ability: str, name: str, draw: float, hits: bool
    ) -> None:
        self.attacker.ability = ability
        self.rng.queue("random", draw)
        self.assertEqual(self._hits(make_move(name)), hits)

    @parameterized.named_parameters(
        ("aimed_move", make_move("tackle")),
        ("field_move", make_move("spikes", accuracy=100)),
    )
    def test_bright_powder_lowers_accuracy(self, move) -> None:
        holder = make_combatant("Holder", item="Bright Powder")
        user = make_combatant("User")
        battle = make_battle(user, holder, rng=self.rng)
        self.rng.queue("random", 0.95, 0.95)
        self.assertTrue(self._hits(move))
        self.assertFalse(accuracy.check_hit(move, user, holder, battle))


class OneHitKnockoutTest(parameterized.TestCase):
    @parameterized.parameters((0.19, True), (0.21, False))
    def test_level_formula(self, draw: float, hits: bool) -> None:
        attacker = make_combatant("Attacker", level=60)
        defender = make_combatant("Defender", level=70)
        rng = ScriptedRandom().queue("random", draw)
        battle = make_battle(attacker, defender, rng=rng)
        self.assertEqual(accuracy.ohko_hits(attacker, defender, battle), hits)

    def test_higher_level_defender_cannot_be_targeted(self) -> None:
        attacker = make_combatant("Attacker", level=50)
        defender = make_combatant("Defender", level=60)
        battle = make_battle(attacker, defender)
        self.assertFalse(
            queries.check_executable(make_move("fissure"), attacker, defender, battle)
        )

    def test_ohko_ignores_accuracy_stages(self) -> None:
        attacker = make_combatant("Attacker", level=100)
        defender = make_combatant("Defender", level=50)
        defender.stages[Stat.EVASION] = 6
        rng = ScriptedRandom().queue("random", 0.79)
        battle = make_battle(attacker, defender, rng=rng)
        fissure = make_move("fissure")
        self.assertTrue(accuracy.check_hit(fissure, attacker, defender, battle))


if __name__ == "__main__":
    unittest.main()
