"""Tests for resolving whole move uses, redirects included."""

import random
import unittest

from absl.testing import parameterized

from python.duel.config import EngineConfig
from python.duel.engine import move_engine
from python.duel.exceptions import RedirectDepthExceededError
from python.duel.schema.enums import DamageClass, ElementType, Stat, Status
from python.duel.testing.fakes import (
    ScriptedRandom,
    make_battle,
    make_combatant,
    make_move,
    make_template,
)


def _fiery_dance():
    return make_move(
        "fiery-dance",
        id=552,
        power=80,
        pp=10,
        accuracy=100,
        type=ElementType.FIRE,
        damage_class=DamageClass.SPECIAL,
        effect=277,
        effect_chance=50,
    )


class BasicUseTest(parameterized.TestCase):
    def setUp(self) -> None:
        self.attacker = make_combatant("Attacker", moves=("tackle", "thunder-wave"))
        self.defender = make_combatant("Defender", defense=50)
        self.rng = ScriptedRandom()
        self.battle = make_battle(self.attacker, self.defender, rng=self.rng)

    def _use(self, move):
        return move_engine.use_move(move, self.attacker, self.defender, self.battle)

    def test_damaging_move(self) -> None:
        self.rng.queue("random", 0.5, 0.0)
        result = self._use(self.attacker.moves[0])
        self.assertEqual(
            result.msg, "Attacker used Tackle!\nDefender took 47 damage!\n"
        )
        self.assertEqual(result.hits, 1)
        self.assertEqual(result.redirects, 0)
        self.assertEqual(self.defender.hp, self.defender.max_hp - 47)

    def test_bookkeeping(self) -> None:
        move = self.attacker.moves[0]
        self._use(move)
        self.assertTrue(move.used)
        self.assertTrue(self.attacker.has_moved)
        self.assertIs(self.attacker.ctx.last_move, move)
        self.assertFalse(self.attacker.ctx.last_move_failed)
        self.assertEqual(move.pp, move.starting_pp - 1)
        self.assertEqual(self.battle.last_move_effect, move.effect)

    def test_already_moved_does_nothing(self) -> None:
        self.attacker.has_moved = True
        result = self._use(self.attacker.moves[0])
        self.assertEqual(result.msg, "")
        self.assertEqual(self.defender.hp, self.defender.max_hp)

    def test_status_move(self) -> None:
        result = self._use(self.attacker.moves[1])
        self.assertEqual(
            result.msg, "Attacker used Thunder wave!\nDefender was paralyzed!\n"
        )
        self.assertEqual(result.hits, 0)
        self.assertTrue(self.defender.status.paralysis())

    def test_miss(self) -> None:
        self.rng.queue("random", 0.95)
        result = self._use(self.attacker.moves[1])
        self.assertEqual(result.msg, "Attacker used Thunder wave!\nBut it missed!\n")
        self.assertFalse(self.defender.status.has_status())

    def test_type_immunity_marks_the_move_failed(self) -> None:
        self.defender.types = [ElementType.GROUND]
        result = self._use(self.attacker.moves[1])
        self.assertIn("It had no effect...", result.msg)
        self.assertTrue(self.attacker.ctx.last_move_failed)

    def test_pressure_spends_an_extra_pp(self) -> None:
        self.defender.ability = "pressure"
        move = self.attacker.moves[0]
        self._use(move)
        self.assertEqual(move.pp, move.starting_pp - 2)

    def test_last_pp(self) -> None:
        move = make_move("tackle", pp=1)
        result = self._use(move)
        self.assertIn("It ran out of PP!", result.msg)
        self.assertEqual(move.pp, 0)

    def test_choice_item_locks_the_move(self) -> None:
        attacker = make_combatant("Attacker", item="Choice Band")
        battle = make_battle(attacker, self.defender)
        move_engine.use_move(attacker.moves[0], attacker, self.defender, battle)
        self.assertIs(attacker.choice_move, attacker.moves[0])

    def test_protean_changes_type(self) -> None:
        attacker = make_combatant("Attacker", ability="protean", moves=("ember",))
        battle = make_battle(attacker, self.defender)
        result = move_engine.use_move(
            attacker.moves[0], attacker, self.defender, battle
        )
        self.assertEqual(attacker.types, [ElementType.FIRE])
        self.assertIn("transformed into a fire type", result.msg)

    def test_one_hit_knockout_against_higher_level_fails(self) -> None:
        attacker = make_combatant("Attacker", level=50, moves=("fissure",))
        defender = make_combatant("Defender", level=60)
        battle = make_battle(attacker, defender)
        result = move_engine.use_move(attacker.moves[0], attacker, defender, battle)
        self.assertEqual(result.msg, "Attacker used Fissure!\nBut it failed!\n")
        self.assertEqual(result.hits, 0)
        self.assertEqual(defender.hp, defender.max_hp)
        self.assertTrue(attacker.ctx.last_move_failed)

    def test_one_hit_knockout_faints_the_target(self) -> None:
        attacker = make_combatant("Attacker", level=100, moves=("fissure",))
        defender = make_combatant("Defender", level=50)
        rng = ScriptedRandom().queue("random", 0.1)
        battle = make_battle(attacker, defender, rng=rng)
        move_engine.use_move(attacker.moves[0], attacker, defender, battle)
        self.assertEqual(defender.hp, 0)


class AbsorbTest(unittest.TestCase):
    def setUp(self) -> None:
        self.attacker = make_combatant("Attacker", moves=("thunderbolt",))
        self.defender = make_combatant("Defender", ability="voltabsorb")
        self.battle = make_battle(self.attacker, self.defender)

    def test_heals_instead_of_taking_damage(self) -> None:
        self.defender.hp = 100
        result = move_engine.use_move(
            self.attacker.moves[0], self.attacker, self.defender, self.battle
        )
        self.assertIn("Defender's volt absorb absorbed the move!", result.msg)
        self.assertEqual(self.defender.hp, 150)
        self.assertEqual(result.hits, 0)

    def test_full_hp_absorber_is_unaffected(self) -> None:
        result = move_engine.use_move(
            self.attacker.moves[0], self.attacker, self.defender, self.battle
        )
        self.assertIn("It had no effect...", result.msg)
        self.assertEqual(self.defender.hp, self.defender.max_hp)


class CalledMoveTest(unittest.TestCase):
    def test_metronome(self) -> None:
        attacker = make_combatant("Attacker", moves=("metronome",))
        defender = make_combatant("Defender")
        battle = make_battle(attacker, defender)
        battle.metronome_moves = [make_template("tackle")]

        result = move_engine.use_move(attacker.moves[0], attacker, defender, battle)

        self.assertTrue(
            result.msg.startswith("Attacker used Metronome!\nAttacker used Tackle!\n")
        )
        self.assertEqual(result.hits, 1)
        self.assertEqual(result.redirects, 1)
        self.assertLess(defender.hp, defender.max_hp)
        self.assertEqual(attacker.moves[0].pp, attacker.moves[0].starting_pp - 1)

    def test_metronome_without_a_pool_fails(self) -> None:
        attacker = make_combatant("Attacker", moves=("metronome",))
        battle = make_battle(attacker, make_combatant("Defender"))
        result = move_engine.use_move(
            attacker.moves[0], attacker, battle.side2.current, battle
        )
        self.assertEqual(result.msg, "Attacker used Metronome!\nBut it failed!\n")
        self.assertEqual(result.redirects, 0)

    def test_sleep_talk(self) -> None:
        attacker = make_combatant("Attacker", moves=("sleep-talk", "tackle"))
        defender = make_combatant("Defender")
        battle = make_battle(attacker, defender)
        attacker.status.current = Status.SLEEP
        attacker.status.sleep_timer.set_turns(3)
        battle.rng.queue("choice", attacker.moves[1])

        result = move_engine.use_move(attacker.moves[0], attacker, defender, battle)

        self.assertIn("Attacker used Tackle!", result.msg)
        self.assertEqual(result.hits, 1)
        self.assertTrue(attacker.status.sleep())
        self.assertEqual(attacker.moves[1].pp, attacker.moves[1].starting_pp)

    def test_sleep_talk_while_awake_fails(self) -> None:
        attacker = make_combatant("Attacker", moves=("sleep-talk", "tackle"))
        battle = make_battle(attacker, make_combatant("Defender"))
        result = move_engine.use_move(
            attacker.moves[0], attacker, battle.side2.current, battle
        )
        self.assertIn("But it failed!", result.msg)


class RedirectDepthTest(parameterized.TestCase):
    def _battle(self, depth: int, strict: bool):
        attacker = make_combatant("Attacker", moves=("metronome",))
        defender = make_combatant("Defender")
        config = EngineConfig(max_redirect_depth=depth, strict_redirects=strict)
        battle = make_battle(attacker, defender, config=config)
        battle.metronome_moves = [make_template("metronome")]
        return attacker, defender, battle

    @parameterized.parameters(0, 2)
    def test_strict_raises(self, depth: int) -> None:
        attacker, defender, battle = self._battle(depth, strict=True)
        with self.assertRaises(RedirectDepthExceededError) as raised:
            move_engine.use_move(attacker.moves[0], attacker, defender, battle)
        self.assertEqual(raised.exception.depth, depth)
        self.assertEqual(raised.exception.move_name, "metronome")

    def test_lenient_fails_the_move(self) -> None:
        attacker, defender, battle = self._battle(2, strict=False)
        result = move_engine.use_move(attacker.moves[0], attacker, defender, battle)
        self.assertEqual(result.msg.count("Attacker used Metronome!"), 3)
        self.assertTrue(result.msg.endswith("But it failed!\n"))
        self.assertEqual(result.redirects, 3)


class ReflectAndStealTest(unittest.TestCase):
    def setUp(self) -> None:
        self.attacker = make_combatant(
            "Attacker", moves=("thunder-wave", "swords-dance")
        )
        self.defender = make_combatant("Defender")
        self.battle = make_battle(self.attacker, self.defender)

    def test_magic_coat_reflects_status_moves(self) -> None:
        self.defender.ctx.magic_coat = True
        result = move_engine.use_move(
            self.attacker.moves[0], self.attacker, self.defender, self.battle
        )
        self.assertIn("It was reflected", result.msg)
        self.assertTrue(self.attacker.status.paralysis())
        self.assertFalse(self.defender.status.has_status())
        self.assertEqual(result.msg.count("used Thunder wave!"), 1)
        self.assertEqual(result.redirects, 1)

    def test_reflection_keeps_the_target_turn(self) -> None:
        self.defender.ability = "magicbounce"
        move_engine.use_move(
            self.attacker.moves[0], self.attacker, self.defender, self.battle
        )
        self.assertFalse(self.defender.has_moved)
        self.assertTrue(self.attacker.status.paralysis())

    def test_snatch_steals_self_boosts(self) -> None:
        self.defender.ctx.snatching = True
        result = move_engine.use_move(
            self.attacker.moves[1], self.attacker, self.defender, self.battle
        )
        self.assertIn("Defender snatched the move!", result.msg)
        self.assertEqual(self.defender.stages[Stat.ATK], 2)
        self.assertEqual(self.attacker.stages[Stat.ATK], 0)


class FollowUpTest(unittest.TestCase):
    def test_instruct_repeats_the_target_move(self) -> None:
        attacker = make_combatant("Attacker", moves=("instruct",))
        defender = make_combatant("Defender")
        battle = make_battle(attacker, defender)
        defender.ctx.last_move = defender.moves[0]
        defender.has_moved = True

        result = move_engine.use_move(attacker.moves[0], attacker, defender, battle)

        self.assertIn("Defender used Tackle!", result.msg)
        self.assertLess(attacker.hp, attacker.max_hp)
        self.assertEqual(result.hits, 0)
        self.assertEqual(result.redirects, 1)
        self.assertTrue(defender.has_moved)

    def test_instruct_without_a_last_move_fails(self) -> None:
        attacker = make_combatant("Attacker", moves=("instruct",))
        defender = make_combatant("Defender")
        battle = make_battle(attacker, defender)
        result = move_engine.use_move(attacker.moves[0], attacker, defender, battle)
        self.assertEqual(result.msg, "Attacker used Instruct!\nBut it failed!\n")
        self.assertTrue(attacker.ctx.last_move_failed)

    def test_dancer_copies_a_dance(self) -> None:
        attacker = make_combatant("Attacker", moves=("feather-dance",))
        defender = make_combatant("Defender", ability="dancer")
        battle = make_battle(attacker, defender)

        result = move_engine.use_move(attacker.moves[0], attacker, defender, battle)

        self.assertIn("Defender used Feather dance!", result.msg)
        self.assertEqual(defender.stages[Stat.ATK], -2)
        self.assertEqual(attacker.stages[Stat.ATK], -2)
        self.assertFalse(defender.has_moved)
        self.assertEqual(result.redirects, 1)

    def test_dancer_copy_does_not_replace_the_hits(self) -> None:
        attacker = make_combatant("Attacker", ability="flashfire")
        attacker.moves = [_fiery_dance()]
        defender = make_combatant("Defender", ability="dancer", hp=400)
        battle = make_battle(attacker, defender)

        result = move_engine.use_move(attacker.moves[0], attacker, defender, battle)

        self.assertTrue(attacker.flash_fire)
        self.assertEqual(attacker.hp, attacker.max_hp)
        self.assertEqual(result.hits, 1)

    def test_fainted_dancer_does_not_dance(self) -> None:
        attacker = make_combatant("Attacker", spa=400)
        attacker.moves = [_fiery_dance()]
        defender = make_combatant("Defender", ability="dancer", hp=10)
        battle = make_battle(attacker, defender)

        result = move_engine.use_move(attacker.moves[0], attacker, defender, battle)

        self.assertEqual(defender.hp, 0)
        self.assertEqual(result.redirects, 0)


class DeterminismTest(unittest.TestCase):
    def _run(self, seed: int) -> str:
        attacker = make_combatant("Attacker", moves=("thunderbolt", "thunder-wave"))
        defender = make_combatant("Defender", hp=400)
        battle = make_battle(attacker, defender, rng=random.Random(seed))
        msg = ""
        for move in attacker.moves:
            msg += move_engine.use_move(move, attacker, defender, battle).msg
            attacker.end_turn()
        return msg

    def test_same_seed_same_transcript(self) -> None:
        self.assertEqual(self._run(7), self._run(7))

    def test_replaying_from_a_checkpoint(self) -> None:
        attacker = make_combatant("Attacker", moves=("solar-beam",))
        defender = make_combatant("Defender", hp=400)
        battle = make_battle(attacker, defender, rng=ScriptedRandom(roll=0.3))
        move = attacker.moves[0]
        move_engine.use_move(move, attacker, defender, battle)
        attacker.end_turn()

        pp, lock, hp = move.pp, attacker.locked_move, defender.hp
        first = move_engine.use_move(move, attacker, defender, battle)
        attacker.end_turn()

        move.pp, attacker.locked_move, defender.hp = pp, lock, hp
        lock.turn, lock.remaining = 1, 1
        second = move_engine.use_move(move, attacker, defender, battle)

        self.assertEqual(first.msg, second.msg)
        self.assertEqual(first.hits, second.hits)


if __name__ == "__main__":
    unittest.main()
