"""Tests for the test builders themselves."""

import unittest

from absl.testing import parameterized

from python.duel.schema.enums import Stat
from python.duel.testing import fakes


class ScriptedRandomTest(parameterized.TestCase):
    def test_queued_values_come_first(self) -> None:
        rng = fakes.ScriptedRandom().queue("randint", 1, 100)
        self.assertEqual(rng.randint(1, 100), 1)
        self.assertEqual(rng.randint(1, 100), 100)
        self.assertEqual(rng.randint(1, 100), 51)

    @parameterized.parameters(
        (0.0, 1, 0, 0.0), (0.5, 51, 12, 0.5), (0.99, 100, 23, 0.99)
    )
    def test_fallback_roll(
        self, roll: float, randint: int, randrange: int, random: float
    ) -> None:
        rng = fakes.ScriptedRandom(roll=roll)
        self.assertEqual(rng.randint(1, 100), randint)
        self.assertEqual(rng.randrange(24), randrange)
        self.assertEqual(rng.random(), random)

    def test_choice(self) -> None:
        rng = fakes.ScriptedRandom().queue("choice", "z")
        self.assertEqual(rng.choice(["a", "b", "c"]), "z")
        self.assertEqual(rng.choice(["a", "b", "c"]), "b")

    def test_randrange_with_bounds(self) -> None:
        rng = fakes.ScriptedRandom(roll=0.0)
        self.assertEqual(rng.randrange(5, 10), 5)


class BuilderTest(unittest.TestCase):
    def test_make_move_overrides(self) -> None:
        move = fakes.make_move("tackle", power=120)
        self.assertEqual(move.power, 120)
        self.assertEqual(move.pp, move.starting_pp)

    def test_make_combatant(self) -> None:
        poke = fakes.make_combatant("Poke", hp=150, atk=80, moves=("tackle", "growl"))
        self.assertEqual(poke.hp, 150)
        self.assertEqual(poke.stats[Stat.ATK], 80)
        self.assertEqual([move.name for move in poke.moves], ["tackle", "growl"])

    def test_make_battle_places_the_combatants(self) -> None:
        attacker = fakes.make_combatant("Attacker")
        defender = fakes.make_combatant("Defender")
        bench = fakes.make_combatant("Bench")
        battle = fakes.make_battle(attacker, defender, defender_bench=[bench])
        self.assertIs(battle.side1.current, attacker)
        self.assertIs(battle.side2.current, defender)
        self.assertIn(bench, battle.side2.party)


if __name__ == "__main__":
    unittest.main()
