"""Tests for the power of a move at the moment it is used."""

import unittest

from absl.testing import parameterized

from python.duel.engine import power
from python.duel.schema.enums import DamageClass, ElementType, Status, Terrain, Weather
from python.duel.schema.expiring import LockedMove
from python.duel.testing.fakes import make_battle, make_combatant, make_move


class GetPowerTest(parameterized.TestCase):
    def setUp(self) -> None:
        self.attacker = make_combatant("Attacker")
        self.defender = make_combatant("Defender")
        self.battle = make_battle(self.attacker, self.defender)

    def _power(self, move):
        return power.get_power(move, self.attacker, self.defender, self.battle)

    def test_fixed_power(self) -> None:
        self.assertEqual(self._power(make_move("tackle")), 40)

    def test_status_move_has_no_power(self) -> None:
        self.assertIsNone(self._power(make_move("growl")))

    def test_level_power(self) -> None:
        night_shade = make_move("tackle", power=None, effect=88)
        self.assertEqual(self._power(night_shade), 50)

    @parameterized.parameters((200, 20), (60, 80), (10, 150), (1, 200))
    def test_flail(self, hp: int, expected: int) -> None:
        self.attacker.hp = hp
        flail = make_move("tackle", power=None, effect=100)
        self.assertEqual(self._power(flail), expected)

    def test_eruption_scales_with_hp(self) -> None:
        self.attacker.hp = 100
        self.assertEqual(self._power(make_move("tackle", power=150, effect=191)), 75)

    def test_facade_doubles_with_status(self) -> None:
        facade = make_move("tackle", power=70, effect=170)
        self.assertEqual(self._power(facade), 70)
        self.attacker.status.current = Status.BURN
        self.assertEqual(self._power(facade), 140)

    def test_wake_up_slap_wakes_the_target(self) -> None:
        self.defender.status.current = Status.SLEEP
        self.defender.status.sleep_timer.set_turns(2)
        self.assertEqual(self._power(make_move("tackle", power=70, effect=218)), 140)
        self.assertFalse(self.defender.status.sleep())

    def test_rollout_doubles_each_turn(self) -> None:
        rollout = make_move("tackle", power=30, effect=118)
        self.attacker.locked_move = LockedMove(move=rollout, remaining=3, turn=2)
        self.assertEqual(self._power(rollout), 120)

    def test_solar_beam_in_rain(self) -> None:
        self.battle.weather.set(Weather.RAIN, self.attacker)
        self.assertEqual(self._power(make_move("solar-beam")), 60)

    def test_terrain_boost(self) -> None:
        self.battle.terrain.set(Terrain.ELECTRIC, self.attacker)
        self.assertEqual(self._power(make_move("thunderbolt")), 117)

    def test_grassy_terrain_weakens_earthquake(self) -> None:
        self.battle.terrain.set(Terrain.GRASSY, self.attacker)
        self.assertEqual(self._power(make_move("earthquake")), 50)

    def test_charge(self) -> None:
        self.attacker.charge.set_turns(2)
        self.assertEqual(self._power(make_move("thunderbolt")), 180)
        self.assertEqual(self._power(make_move("tackle")), 40)

    def test_water_sport_weakens_fire(self) -> None:
        self.battle.side2.water_sport.set_turns(5)
        ember = make_move("ember", power=60)
        self.assertEqual(self._power(ember), 20)

    def test_knock_off_boost_needs_a_removable_item(self) -> None:
        knock_off = make_move(
            "knock-off",
            id=282,
            power=65,
            pp=20,
            accuracy=100,
            type=ElementType.DARK,
            damage_class=DamageClass.PHYSICAL,
            effect=189,
        )
        self.assertEqual(self._power(knock_off), 65)
        holder = make_combatant("Holder", item="Leftovers")
        battle = make_battle(self.attacker, holder)
        self.assertEqual(power.get_power(knock_off, self.attacker, holder, battle), 97)


if __name__ == "__main__":
    unittest.main()
