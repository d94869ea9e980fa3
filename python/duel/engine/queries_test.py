"""Tests for the resolution-time move queries."""

import unittest

from absl.testing import parameterized

from python.duel.engine import queries
from python.duel.schema.enums import ElementType, Terrain, Weather
from python.duel.testing.fakes import (
    ScriptedRandom,
    make_battle,
    make_combatant,
    make_move,
)


class QueryTestCase(parameterized.TestCase):
    def setUp(self) -> None:
        self.attacker = make_combatant("Attacker")
        self.defender = make_combatant("Defender")
        self.rng = ScriptedRandom()
        self.battle = make_battle(self.attacker, self.defender, rng=self.rng)

    def _args(self, move):
        return move, self.attacker, self.defender, self.battle


class GetTypeTest(QueryTestCase):
    def test_declared_type(self) -> None:
        move = make_move("ember")
        self.assertIs(queries.get_type(*self._args(move)), ElementType.FIRE)

    def test_ion_deluge_electrifies_normal_moves(self) -> None:
        self.defender.ctx.ion_deluge = True
        tackle, ember = make_move("tackle"), make_move("ember")
        self.assertIs(queries.get_type(*self._args(tackle)), ElementType.ELECTRIC)
        self.assertIs(queries.get_type(*self._args(ember)), ElementType.FIRE)

    def test_electrify(self) -> None:
        self.attacker.ctx.electrify = True
        move = make_move("ember")
        self.assertIs(queries.get_type(*self._args(move)), ElementType.ELECTRIC)

    @parameterized.parameters(
        (Weather.NONE, ElementType.NORMAL),
        (Weather.RAIN, ElementType.WATER),
        (Weather.SUN, ElementType.FIRE),
        (Weather.SANDSTORM, ElementType.ROCK),
    )
    def test_weather_ball(self, weather: Weather, expected: ElementType) -> None:
        self.battle.weather.set(weather, self.attacker)
        weather_ball = make_move("tackle", power=50, effect=204)
        self.assertIs(queries.get_type(*self._args(weather_ball)), expected)

    def test_revelation_dance_takes_the_primary_type(self) -> None:
        self.attacker.types = [ElementType.FIRE, ElementType.FLYING]
        move = make_move("tackle", power=90, effect=401)
        self.assertIs(queries.get_type(*self._args(move)), ElementType.FIRE)

    def test_type_converting_ability(self) -> None:
        self.attacker.ability = "pixilate"
        move = make_move("tackle")
        self.assertIs(queries.get_type(*self._args(move)), ElementType.FAIRY)


class GetPriorityTest(QueryTestCase):
    def test_declared_priority(self) -> None:
        self.assertEqual(queries.get_priority(*self._args(make_move("protect"))), 4)
        self.assertEqual(queries.get_priority(*self._args(make_move("tackle"))), 0)

    def test_prankster_boosts_status_moves(self) -> None:
        self.attacker.ability = "prankster"
        thunder_wave, tackle = make_move("thunder-wave"), make_move("tackle")
        self.assertEqual(queries.get_priority(*self._args(thunder_wave)), 1)
        self.assertEqual(queries.get_priority(*self._args(tackle)), 0)

    def test_grassy_glide(self) -> None:
        grassy_glide = make_move("tackle", type=ElementType.GRASS, power=55, effect=437)
        self.assertEqual(queries.get_priority(*self._args(grassy_glide)), 0)
        self.battle.terrain.set(Terrain.GRASSY, self.attacker)
        self.assertEqual(queries.get_priority(*self._args(grassy_glide)), 1)


class GetEffectChanceTest(QueryTestCase):
    def test_no_chance_always_applies(self) -> None:
        move = make_move("growl")
        self.assertEqual(queries.get_effect_chance(*self._args(move)), 100)

    def test_declared_chance(self) -> None:
        move = make_move("thunderbolt")
        self.assertEqual(queries.get_effect_chance(*self._args(move)), 10)

    def test_serene_grace_doubles(self) -> None:
        self.attacker.ability = "serenegrace"
        move = make_move("thunderbolt")
        self.assertEqual(queries.get_effect_chance(*self._args(move)), 20)

    @parameterized.parameters("sheerforce", "shielddust")
    def test_secondary_effects_switched_off(self, ability: str) -> None:
        if ability == "sheerforce":
            self.attacker.ability = ability
        else:
            self.defender.ability = ability
        move = make_move("thunderbolt")
        self.assertEqual(queries.get_effect_chance(*self._args(move)), 0)


class CheckEffectiveTest(QueryTestCase):
    def test_type_immunity(self) -> None:
        self.defender.types = [ElementType.GHOST]
        self.assertFalse(queries.check_effective(*self._args(make_move("tackle"))))

    def test_status_moves_ignore_type_immunities(self) -> None:
        self.defender.types = [ElementType.GHOST]
        self.assertTrue(queries.check_effective(*self._args(make_move("growl"))))

    def test_thunder_wave_respects_ground_immunity(self) -> None:
        self.defender.types = [ElementType.GROUND]
        move = make_move("thunder-wave")
        self.assertFalse(queries.check_effective(*self._args(move)))

    def test_levitate_avoids_ground_moves(self) -> None:
        self.defender.ability = "levitate"
        move = make_move("earthquake")
        self.assertFalse(queries.check_effective(*self._args(move)))

    def test_soundproof(self) -> None:
        self.defender.ability = "soundproof"
        self.assertFalse(queries.check_effective(*self._args(make_move("growl"))))

    def test_wonder_guard(self) -> None:
        self.defender.ability = "wonderguard"
        self.assertFalse(queries.check_effective(*self._args(make_move("tackle"))))
        karate_chop = make_move("tackle", type=ElementType.FIGHTING)
        self.assertTrue(queries.check_effective(*self._args(karate_chop)))

    def test_self_targeting_moves_always_affect(self) -> None:
        self.defender.types = [ElementType.GHOST]
        move = make_move("swords-dance")
        self.assertTrue(queries.check_effective(*self._args(move)))


class CheckExecutableTest(QueryTestCase):
    def test_plain_move(self) -> None:
        self.assertTrue(queries.check_executable(*self._args(make_move("tackle"))))

    def test_taunt_blocks_status_moves(self) -> None:
        self.attacker.taunt.set_turns(3)
        self.assertFalse(queries.check_executable(*self._args(make_move("growl"))))
        self.assertTrue(queries.check_executable(*self._args(make_move("tackle"))))

    def test_fake_out_only_on_the_first_turn(self) -> None:
        fake_out = make_move("fake-out")
        self.assertTrue(queries.check_executable(*self._args(fake_out)))
        self.attacker.active_turns = 1
        self.assertFalse(queries.check_executable(*self._args(fake_out)))

    def test_ohko_fails_against_a_higher_level(self) -> None:
        attacker = make_combatant("Attacker", level=40)
        battle = make_battle(attacker, self.defender)
        fissure = make_move("fissure")
        self.assertFalse(
            queries.check_executable(fissure, attacker, self.defender, battle)
        )

    def test_spikes_stop_at_three_layers(self) -> None:
        self.battle.side2.spikes = 3
        self.assertFalse(queries.check_executable(*self._args(make_move("spikes"))))

    def test_primordial_sea_washes_out_fire(self) -> None:
        self.battle.weather.set(Weather.HEAVY_RAIN, self.attacker)
        self.assertFalse(queries.check_executable(*self._args(make_move("ember"))))


class GetConversion2Test(QueryTestCase):
    def test_without_a_last_move(self) -> None:
        self.assertIsNone(
            queries.get_conversion2(self.attacker, self.defender, self.battle)
        )

    def test_picks_a_resisting_type(self) -> None:
        self.defender.ctx.last_move = make_move("tackle")
        self.rng.queue("choice", ElementType.STEEL)
        self.assertIs(
            queries.get_conversion2(self.attacker, self.defender, self.battle),
            ElementType.STEEL,
        )

    def test_default_pick_comes_from_the_resisting_types(self) -> None:
        self.defender.ctx.last_move = make_move("tackle")
        self.assertIn(
            queries.get_conversion2(self.attacker, self.defender, self.battle),
            (ElementType.ROCK, ElementType.GHOST, ElementType.STEEL),
        )


if __name__ == "__main__":
    unittest.main()
