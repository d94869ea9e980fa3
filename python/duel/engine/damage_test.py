"""Tests for the damage formula and the hit loop."""

import unittest

from absl.testing import parameterized

from python.duel.engine import damage
from python.duel.engine.hooks import HitContext
from python.duel.exceptions import DataIntegrityError
from python.duel.schema.enums import DamageClass, ElementType, Stat, Weather
from python.duel.testing.fakes import (
    ScriptedRandom,
    make_battle,
    make_combatant,
    make_move,
)


class BaseDamageTest(parameterized.TestCase):
    @parameterized.named_parameters(
        ("level_fifty", 50, 50, 100, 100, 24),
        ("level_fifty_forty_power", 50, 40, 100, 50, 37),
        ("level_fifty_one", 51, 40, 100, 50, 37),
        ("level_fifty_three", 53, 60, 120, 90, 38),
        ("low_level", 7, 10, 50, 100, 2),
    )
    def test_floors_each_step(
        self, level: int, power: int, attack: int, defense: int, expected: int
    ) -> None:
        self.assertEqual(damage.base_damage(level, power, attack, defense), expected)


class AttackTest(parameterized.TestCase):
    def setUp(self) -> None:
        self.attacker = make_combatant("Attacker", level=50, atk=100)
        self.defender = make_combatant("Defender", level=50, defense=50, hp=300)
        self.rng = ScriptedRandom()
        self.battle = make_battle(self.attacker, self.defender, rng=self.rng)

    @parameterized.named_parameters(
        ("lowest_roll", 0.0, 47),
        ("highest_roll", 0.99999, 55),
    )
    def test_same_type_physical_hit(self, draw: float, expected: int) -> None:
        self.rng.queue("random", draw)
        msg, hits = damage.attack(
            make_move("tackle"), self.attacker, self.defender, self.battle
        )
        self.assertEqual(hits, 1)
        self.assertEqual(self.defender.hp, 300 - expected)
        self.assertIn(f"Defender took {expected} damage!", msg)
        self.assertNotIn("critical", msg)

    @parameterized.named_parameters(
        ("one_hp", 1, 1),
        ("two_hp", 2, 1),
        ("would_faint", 40, 1),
        ("plenty_of_hp", 60, 13),
    )
    def test_false_swipe_leaves_one_hp(self, start_hp: int, expected_hp: int) -> None:
        false_swipe = make_move(
            "false-swipe",
            id=206,
            power=40,
            pp=40,
            accuracy=100,
            type=ElementType.NORMAL,
            damage_class=DamageClass.PHYSICAL,
            effect=102,
        )
        self.defender.hp = start_hp
        self.rng.queue("random", 0.0)
        damage.attack(false_swipe, self.attacker, self.defender, self.battle)
        self.assertEqual(self.defender.hp, expected_hp)

    @parameterized.named_parameters(
        ("clear", Weather.NONE, 16),
        ("sun", Weather.SUN, 24),
        ("harsh_sun", Weather.HARSH_SUN, 16),
    )
    def test_only_plain_sun_boosts_fire(self, weather: Weather, expected: int) -> None:
        self.battle.weather.set(weather, self.attacker)
        self.rng.queue("random", 0.0)
        damage.attack(make_move("ember"), self.attacker, self.defender, self.battle)
        self.assertEqual(self.defender.max_hp - self.defender.hp, expected)

    def test_immune_target_takes_nothing(self) -> None:
        ghost = make_combatant("Ghost", types=(ElementType.GHOST,))
        battle = make_battle(self.attacker, ghost)
        move = make_move("tackle", power=250)
        msg, hits = damage.attack(move, self.attacker, ghost, battle)
        self.assertEqual(hits, 0)
        self.assertEqual(ghost.hp, ghost.max_hp)
        self.assertEqual(msg, "The attack had no effect!\n")

    def test_damage_is_at_least_one(self) -> None:
        weak = make_combatant("Weak", level=1, atk=1)
        wall = make_combatant("Wall", types=(ElementType.ROCK,), defense=999)
        battle = make_battle(weak, wall, rng=ScriptedRandom(roll=0.0))
        move = make_move("tackle", power=10)
        battle.rng.queue("randrange", 5)
        msg, hits = damage.attack(move, weak, wall, battle)
        self.assertEqual(hits, 1)
        self.assertEqual(wall.hp, wall.max_hp - 1)
        self.assertIn("It's not very effective...", msg)

    def test_super_effective_is_announced(self) -> None:
        fighter = make_combatant("Fighter")
        battle = make_battle(fighter, self.defender)
        move = make_move(
            "karate-chop",
            id=2,
            power=50,
            pp=25,
            accuracy=100,
            type=ElementType.FIGHTING,
            damage_class=DamageClass.PHYSICAL,
            effect=44,
        )
        msg, _ = damage.attack(move, fighter, self.defender, battle)
        self.assertTrue(msg.startswith("It's super effective!\n"))

    def test_multi_hit(self) -> None:
        self.rng.queue("randint", 3)
        move = make_move("tackle", power=15, min_hits=2, max_hits=4)
        _, hits = damage.attack(move, self.attacker, self.defender, self.battle)
        self.assertEqual(hits, 3)
        self.assertEqual(self.defender.num_hits, 3)

    def test_missing_power_raises(self) -> None:
        with self.assertRaises(DataIntegrityError):
            damage.attack(
                make_move("tackle", power=None),
                self.attacker,
                self.defender,
                self.battle,
            )

    def test_reflect_halves_physical_damage(self) -> None:
        self.rng.queue("random", 0.0)
        damage.attack(make_move("tackle"), self.attacker, self.defender, self.battle)
        unscreened = self.defender.max_hp - self.defender.hp

        self.defender.hp = self.defender.max_hp
        self.battle.side2.reflect.set_turns(5)
        self.rng.queue("random", 0.0)
        damage.attack(make_move("tackle"), self.attacker, self.defender, self.battle)
        self.assertEqual(self.defender.max_hp - self.defender.hp, int(unscreened / 2))

    def test_weakness_policy(self) -> None:
        target = make_combatant(
            "Target", types=(ElementType.FIRE,), item="Weakness Policy"
        )
        battle = make_battle(self.attacker, target)
        water = make_move(
            "water-gun",
            id=55,
            power=40,
            pp=25,
            accuracy=100,
            type=ElementType.WATER,
            damage_class=DamageClass.SPECIAL,
            effect=1,
        )
        damage.attack(water, self.attacker, target, battle)
        self.assertEqual(target.stages[Stat.ATK], 2)
        self.assertEqual(target.stages[Stat.SPA], 2)
        self.assertFalse(target.held_item.has_item())


class CriticalHitTest(parameterized.TestCase):
    def _ctx(self, crit_rate: int, roll: float) -> HitContext:
        attacker = make_combatant("Attacker")
        defender = make_combatant("Defender")
        battle = make_battle(attacker, defender, rng=ScriptedRandom(roll=roll))
        return HitContext(
            move=make_move("tackle", crit_rate=crit_rate),
            move_type=ElementType.NORMAL,
            attacker=attacker,
            defender=defender,
            battle=battle,
        )

    def test_odds_shrink_with_stage(self) -> None:
        odds = list(damage.CRIT_ODDS)
        self.assertEqual(odds, sorted(odds, reverse=True))
        self.assertEqual(len(set(odds)), len(odds))
        self.assertEqual(odds[-1], 1)

    @parameterized.parameters(0.0, 0.5, 0.99)
    def test_guaranteed_at_stage_three(self, roll: float) -> None:
        ctx = self._ctx(3, roll)
        self.assertTrue(damage.roll_critical(ctx.move, ctx))

    def test_stage_is_capped(self) -> None:
        ctx = self._ctx(2, 0.5)
        ctx.attacker.focus_energy = True
        self.assertEqual(damage.crit_stage(ctx.move, ctx), 3)

    def test_shell_armor_prevents_crits(self) -> None:
        ctx = self._ctx(3, 0.0)
        ctx.defender.ability = "shellarmor"
        self.assertFalse(damage.roll_critical(ctx.move, ctx))


if __name__ == "__main__":
    unittest.main()
