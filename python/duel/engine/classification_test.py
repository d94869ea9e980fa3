"""Tests for the move classification predicates."""

import unittest

from absl.testing import parameterized

from python.duel.engine import classification
from python.duel.schema.enums import DamageClass, MoveTarget
from python.duel.testing.fakes import make_combatant, make_move, make_template


class MoveFamilyTest(parameterized.TestCase):
    @parameterized.named_parameters(
        ("growl_is_sound", classification.is_sound_based, "growl", True),
        ("tackle_is_not_sound", classification.is_sound_based, "tackle", False),
        ("swords_dance", classification.is_dance, "swords-dance", True),
        ("feather_dance", classification.is_dance, "feather-dance", True),
        ("tackle_is_not_a_dance", classification.is_dance, "tackle", False),
        (
            "thunder_wave_bounces",
            classification.is_affected_by_magic_coat,
            "thunder-wave",
            True,
        ),
        (
            "tackle_does_not_bounce",
            classification.is_affected_by_magic_coat,
            "tackle",
            False,
        ),
        ("swords_dance_snatchable", classification.is_snatchable, "swords-dance", True),
        (
            "growl_bypasses_substitute",
            classification.is_affected_by_substitute,
            "growl",
            False,
        ),
        (
            "tackle_hits_substitute",
            classification.is_affected_by_substitute,
            "tackle",
            True,
        ),
    )
    def test_family(self, predicate, name: str, expected: bool) -> None:
        self.assertEqual(predicate(make_move(name)), expected)

    def test_templates_are_accepted(self) -> None:
        self.assertTrue(classification.makes_contact(make_template("tackle")))

    def test_long_reach_turns_contact_off(self) -> None:
        tackle = make_move("tackle")
        attacker = make_combatant("Attacker")
        self.assertTrue(classification.makes_contact(tackle, attacker))
        reacher = make_combatant("Reacher", ability="Long Reach")
        self.assertFalse(classification.makes_contact(tackle, reacher))
        self.assertFalse(classification.makes_contact(make_move("thunderbolt")))


class TargetingTest(parameterized.TestCase):
    @parameterized.parameters(
        ("tackle", True),
        ("growl", True),
        ("earthquake", True),
        ("swords-dance", False),
        ("spikes", False),
    )
    def test_targets_opponent(self, name: str, expected: bool) -> None:
        self.assertEqual(classification.targets_opponent(make_move(name)), expected)

    def test_counter_style_status_moves_are_not_aimed(self) -> None:
        move = make_move(
            "tackle",
            damage_class=DamageClass.STATUS,
            power=None,
            target=MoveTarget.SPECIFIC_MOVE,
        )
        self.assertFalse(classification.targets_opponent(move))

    @parameterized.parameters(("earthquake", True), ("growl", True), ("tackle", False))
    def test_targets_multiple(self, name: str, expected: bool) -> None:
        self.assertEqual(classification.targets_multiple(make_move(name)), expected)


class CalledMoveExclusionTest(unittest.TestCase):
    def test_sleep_talk(self) -> None:
        selectable = classification.selectable_by_sleep_talk
        self.assertTrue(selectable(make_move("tackle")))
        self.assertFalse(selectable(make_move("solar-beam")))
        self.assertTrue(selectable(make_move("sleep-talk")))

    def test_assist(self) -> None:
        self.assertFalse(classification.selectable_by_assist(make_move("protect")))
        self.assertFalse(classification.selectable_by_assist(make_move("sleep-talk")))
        self.assertTrue(classification.selectable_by_assist(make_move("tackle")))

    def test_instruct(self) -> None:
        self.assertFalse(classification.selectable_by_instruct(make_move("instruct")))
        self.assertFalse(classification.selectable_by_instruct(make_move("sleep-talk")))
        self.assertTrue(classification.selectable_by_instruct(make_move("thunderbolt")))

    def test_mirror_move_needs_an_aimed_move(self) -> None:
        self.assertTrue(classification.selectable_by_mirror_move(make_move("tackle")))
        self.assertFalse(classification.selectable_by_mirror_move(make_move("protect")))


if __name__ == "__main__":
    unittest.main()
