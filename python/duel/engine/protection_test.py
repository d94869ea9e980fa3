"""Tests for protection moves and semi-invulnerable states."""

import unittest

from absl.testing import parameterized

from python.duel.engine import move_engine
from python.duel.engine import protection
from python.duel.schema.enums import Stat
from python.duel.testing.fakes import (
    ScriptedRandom,
    make_battle,
    make_combatant,
    make_move,
)


class CheckProtectTest(parameterized.TestCase):
    def setUp(self) -> None:
        self.attacker = make_combatant("Attacker")
        self.defender = make_combatant("Defender")
        self.battle = make_battle(self.attacker, self.defender)

    def test_unprotected_target(self) -> None:
        self.assertEqual(
            protection.check_protect(
                make_move("tackle"), self.attacker, self.defender, self.battle
            ),
            (True, ""),
        )

    def test_protect_blocks(self) -> None:
        self.defender.ctx.protect = True
        self.assertEqual(
            protection.check_protect(
                make_move("tackle"), self.attacker, self.defender, self.battle
            ),
            (False, ""),
        )

    def test_self_targeting_moves_ignore_protection(self) -> None:
        self.defender.ctx.protect = True
        hits, _ = protection.check_protect(
            make_move("swords-dance"), self.attacker, self.defender, self.battle
        )
        self.assertTrue(hits)

    def test_feint_breaks_through(self) -> None:
        self.defender.ctx.protect = True
        feint = make_move("tackle", id=364, power=30, effect=224)
        hits, _ = protection.check_protect(
            feint, self.attacker, self.defender, self.battle
        )
        self.assertTrue(hits)

    def test_spiky_shield_hurts_on_contact(self) -> None:
        self.defender.ctx.spiky_shield = True
        hits, msg = protection.check_protect(
            make_move("tackle"), self.attacker, self.defender, self.battle
        )
        self.assertFalse(hits)
        self.assertEqual(
            self.attacker.hp, self.attacker.max_hp - self.attacker.max_hp // 8
        )
        self.assertIn("Defender's spiky shield", msg)

    def test_kings_shield_only_stops_damaging_moves(self) -> None:
        self.defender.ctx.kings_shield = True
        growl_hits, _ = protection.check_protect(
            make_move("growl"), self.attacker, self.defender, self.battle
        )
        tackle_hits, _ = protection.check_protect(
            make_move("tackle"), self.attacker, self.defender, self.battle
        )
        self.assertTrue(growl_hits)
        self.assertFalse(tackle_hits)
        self.assertEqual(self.attacker.stages[Stat.ATK], -1)


class ProtectedUseTest(unittest.TestCase):
    def test_protected_target_takes_no_damage(self) -> None:
        attacker = make_combatant("Attacker")
        defender = make_combatant("Defender")
        battle = make_battle(attacker, defender)
        defender.ctx.protect = True

        result = move_engine.use_move(attacker.moves[0], attacker, defender, battle)

        self.assertEqual(result.hits, 0)
        self.assertEqual(defender.hp, defender.max_hp)
        self.assertEqual(attacker.hp, attacker.max_hp)
        self.assertEqual(
            result.msg,
            "Attacker used Tackle!\nDefender was protected against the attack!\n",
        )

    def test_protect_raises_the_flag_and_stacks(self) -> None:
        user = make_combatant("User", moves=("protect",))
        battle = make_battle(user, make_combatant("Other"))
        move_engine.use_move(user.moves[0], user, battle.side2.current, battle)
        self.assertTrue(user.ctx.protect)
        self.assertEqual(user.protection_chance, 3)

    def test_consecutive_protect_can_fail(self) -> None:
        user = make_combatant("User", moves=("protect",))
        rng = ScriptedRandom()
        battle = make_battle(user, make_combatant("Other"), rng=rng)
        user.protection_chance = 3
        rng.queue("randint", 2)
        result = move_engine.use_move(user.moves[0], user, battle.side2.current, battle)
        self.assertIn("But it failed!", result.msg)
        self.assertFalse(user.ctx.protect)
        self.assertTrue(user.ctx.last_move_failed)


class SemiInvulnerableTest(parameterized.TestCase):
    def setUp(self) -> None:
        self.attacker = make_combatant("Attacker")
        self.defender = make_combatant("Defender")
        self.battle = make_battle(self.attacker, self.defender)

    def test_visible_target(self) -> None:
        self.assertTrue(
            protection.check_semi_invulnerable(
                make_move("tackle"), self.attacker, self.defender, self.battle
            )
        )

    def test_digging_target_only_hit_by_earthquake_style_moves(self) -> None:
        self.defender.dig = True
        self.assertFalse(
            protection.check_semi_invulnerable(
                make_move("tackle"), self.attacker, self.defender, self.battle
            )
        )
        earthquake = make_move("earthquake", effect=148)
        self.assertTrue(
            protection.check_semi_invulnerable(
                earthquake, self.attacker, self.defender, self.battle
            )
        )

    def test_no_guard_reaches_everything(self) -> None:
        self.defender.shadow_force = True
        self.attacker.ability = "noguard"
        self.assertTrue(
            protection.check_semi_invulnerable(
                make_move("tackle"), self.attacker, self.defender, self.battle
            )
        )

    def test_flying_target_avoids_through_use_move(self) -> None:
        self.defender.fly = True
        result = move_engine.use_move(
            self.attacker.moves[0], self.attacker, self.defender, self.battle
        )
        self.assertIn("Defender avoided the attack!", result.msg)
        self.assertEqual(self.defender.hp, self.defender.max_hp)


if __name__ == "__main__":
    unittest.main()
