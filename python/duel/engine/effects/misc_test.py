"""Tests for the miscellaneous move effects."""

import unittest

from absl.testing import parameterized

from python.duel.engine import accuracy
from python.duel.engine import move_engine
from python.duel.engine.effects import dispatcher
from python.duel.engine.effects.outcome import EffectContext
from python.duel.schema.enums import DamageClass, ElementType, Stat, Status
from python.duel.testing.fakes import (
    ScriptedRandom,
    make_battle,
    make_combatant,
    make_move,
)


def _status_move(name: str, move_id: int, effect: int, **overrides):
    fields = dict(
        id=move_id,
        power=None,
        pp=10,
        accuracy=None,
        type=ElementType.NORMAL,
        damage_class=DamageClass.STATUS,
        effect=effect,
    )
    fields.update(overrides)
    return make_move(name, **fields)


class MiscEffectTest(parameterized.TestCase):
    def setUp(self) -> None:
        self.attacker = make_combatant("Attacker")
        self.defender = make_combatant("Defender")
        self.rng = ScriptedRandom()
        self.battle = make_battle(self.attacker, self.defender, rng=self.rng)

    def _apply(self, move) -> str:
        ctx = EffectContext(
            move,
            self.attacker,
            self.defender,
            self.battle,
            move.type,
            move.effect_chance,
        )
        return dispatcher.resolve_post_hit(ctx).msg

    def test_spikes_stack_up_to_three_layers(self) -> None:
        attacker = make_combatant("Attacker", moves=("spikes",))
        battle = make_battle(attacker, self.defender)
        spikes = attacker.moves[0]
        for layer in range(1, 4):
            attacker.has_moved = False
            result = move_engine.use_move(spikes, attacker, self.defender, battle)
            self.assertIn(
                "Spikes were scattered around the feet of Player 2's team!",
                result.msg,
            )
            self.assertEqual(battle.side2.spikes, layer)

        attacker.has_moved = False
        result = move_engine.use_move(spikes, attacker, self.defender, battle)
        self.assertIn("But it failed!", result.msg)
        self.assertEqual(battle.side2.spikes, 3)

    def test_substitute(self) -> None:
        msg = self._apply(_status_move("substitute", 164, 80))
        self.assertEqual(self.attacker.hp, 150)
        self.assertEqual(self.attacker.substitute, 50)
        self.assertIn("Attacker made a substitute!", msg)

    def test_substitute_needs_enough_hp(self) -> None:
        attacker = make_combatant("Attacker", hp=200)
        attacker.hp = 50
        attacker.moves = [_status_move("substitute", 164, 80)]
        battle = make_battle(attacker, self.defender)
        result = move_engine.use_move(
            attacker.moves[0], attacker, self.defender, battle
        )
        self.assertIn("But it failed!", result.msg)
        self.assertEqual(attacker.substitute, 0)

    def test_mind_reader_guarantees_the_next_hit(self) -> None:
        self._apply(_status_move("mind-reader", 170, 95))
        self.assertIs(self.defender.mind_reader.item, self.attacker)
        self.defender.stages[Stat.EVASION] = 6
        self.rng.queue("random", 0.99)
        self.assertTrue(
            accuracy.check_hit(
                make_move("tackle"), self.attacker, self.defender, self.battle
            )
        )

    def test_psycho_shift(self) -> None:
        self.attacker.status.current = Status.BURN
        msg = self._apply(_status_move("psycho-shift", 375, 235, accuracy=100))
        self.assertTrue(self.defender.status.burn())
        self.assertFalse(self.attacker.status.has_status())
        self.assertIn("Attacker's burn was transfered to Defender!", msg)

    def test_psycho_shift_into_an_immune_target(self) -> None:
        self.attacker.status.current = Status.BURN
        self.defender.types = [ElementType.FIRE]
        msg = self._apply(_status_move("psycho-shift", 375, 235, accuracy=100))
        self.assertTrue(self.attacker.status.burn())
        self.assertTrue(msg.endswith("But it failed!\n"))

    def test_pain_split(self) -> None:
        self.attacker.hp = 50
        self._apply(_status_move("pain-split", 220, 92))
        self.assertEqual(self.attacker.hp, 125)
        self.assertEqual(self.defender.hp, 125)

    def test_knock_off(self) -> None:
        defender = make_combatant("Defender", item="Leftovers")
        battle = make_battle(self.attacker, defender)
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
        ctx = EffectContext(
            knock_off, self.attacker, defender, battle, ElementType.DARK, hits=1
        )
        msg = dispatcher.resolve_post_hit(ctx).msg
        self.assertIn("Defender lost its leftovers!", msg)
        self.assertFalse(defender.held_item.has_item())

    def test_curse_without_ghost_type(self) -> None:
        self._apply(_status_move("curse", 174, 110, type=ElementType.GHOST))
        self.assertEqual(self.attacker.stages[Stat.SPE], -1)
        self.assertEqual(self.attacker.stages[Stat.ATK], 1)
        self.assertEqual(self.attacker.stages[Stat.DEF], 1)
        self.assertFalse(self.defender.curse)

    def test_ghost_curse(self) -> None:
        self.attacker.types = [ElementType.GHOST]
        self._apply(_status_move("curse", 174, 110, type=ElementType.GHOST))
        self.assertEqual(self.attacker.hp, 100)
        self.assertTrue(self.defender.curse)


if __name__ == "__main__":
    unittest.main()
