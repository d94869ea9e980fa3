"""Tests for move templates and move slots."""

import unittest

from absl.testing import parameterized

from python.duel.data.move import (
    CONFUSION_MOVE_ID,
    MoveInstance,
    MoveTemplate,
    beat_up_strike,
    confusion,
    present,
    struggle,
)
from python.duel.schema.enums import DamageClass, ElementType, MoveTarget
from python.duel.testing.fakes import make_move, make_template


class MoveTemplateTest(unittest.TestCase):
    def test_from_dict_raw_layout(self) -> None:
        template = MoveTemplate.from_dict(
            {
                "id": 33,
                "identifier": "tackle",
                "power": 40,
                "pp": 35,
                "accuracy": 100,
                "priority": 0,
                "type_id": 1,
                "damage_class_id": 2,
                "effect_id": 1,
                "target_id": 10,
                "generation_id": 1,
            }
        )
        self.assertEqual(template.name, "tackle")
        self.assertEqual(template.type, ElementType.NORMAL)
        self.assertEqual(template.damage_class, DamageClass.PHYSICAL)
        self.assertEqual(template.effect, 1)
        self.assertEqual(template.target, MoveTarget.SELECTED_POKEMON)
        self.assertEqual(template.crit_rate, 0)

    def test_from_dict_enum_values(self) -> None:
        template = MoveTemplate.from_dict(
            {
                "id": 85,
                "name": "thunderbolt",
                "power": 90,
                "pp": 15,
                "accuracy": 100,
                "priority": 0,
                "type": "electric",
                "damage_class": "special",
                "effect": 7,
                "effect_chance": 10,
                "target": "selected-pokemon",
                "crit_rate": None,
            }
        )
        self.assertEqual(template.type, ElementType.ELECTRIC)
        self.assertEqual(template.damage_class, DamageClass.SPECIAL)
        self.assertEqual(template.effect_chance, 10)
        self.assertEqual(template.crit_rate, 0)

    def test_from_dict_unknown_type_id(self) -> None:
        with self.assertRaises(ValueError):
            MoveTemplate.from_dict({"id": 1, "identifier": "x", "type_id": 42})

    def test_pretty_name(self) -> None:
        self.assertEqual(make_template("thunder-wave").pretty_name, "Thunder wave")


class MoveInstanceTest(parameterized.TestCase):
    def test_starts_with_full_pp(self) -> None:
        move = make_move("tackle")
        self.assertEqual(move.pp, 35)
        self.assertEqual(move.starting_pp, 35)
        self.assertFalse(move.used)

    @parameterized.parameters((1, 34), (5, 30), (35, 0), (100, 0))
    def test_consume_pp_never_negative(self, amount: int, expected: int) -> None:
        move = make_move("tackle")
        self.assertEqual(move.consume_pp(amount), expected)
        self.assertGreaterEqual(move.pp, 0)

    def test_restore_pp_never_exceeds_start(self) -> None:
        move = make_move("tackle")
        move.consume_pp(3)
        self.assertEqual(move.restore_pp(2), 34)
        self.assertEqual(move.restore_pp(50), 35)

    def test_replace_template_overwrites_slot(self) -> None:
        move = make_move("tackle")
        move.consume_pp(10)
        move.used = True
        move.replace_template(make_template("ember"), pp=5)
        self.assertEqual(move.name, "ember")
        self.assertEqual(move.pp, 5)
        self.assertEqual(move.starting_pp, 5)
        self.assertFalse(move.used)

    def test_copy_is_independent(self) -> None:
        move = make_move("tackle")
        copied = move.copy()
        copied.consume_pp(5)
        self.assertEqual(move.pp, 35)
        self.assertEqual(copied.pp, 30)
        self.assertIsNot(copied, move)
        self.assertNotEqual(copied, move)

    def test_from_template(self) -> None:
        move = MoveInstance.from_template(make_template("ember"))
        self.assertEqual(move.effect_chance, 10)
        self.assertEqual(move.type, ElementType.FIRE)


class BuiltInMovesTest(unittest.TestCase):
    def test_struggle(self) -> None:
        move = struggle()
        self.assertEqual(move.id, 165)
        self.assertEqual(move.power, 50)
        self.assertIsNone(move.accuracy)
        self.assertEqual(move.type, ElementType.TYPELESS)
        self.assertEqual(move.effect, 255)

    def test_confusion_targets_user(self) -> None:
        move = confusion()
        self.assertEqual(move.id, CONFUSION_MOVE_ID)
        self.assertEqual(move.power, 40)
        self.assertEqual(move.target, MoveTarget.USER)

    def test_present(self) -> None:
        move = present(80)
        self.assertEqual(move.power, 80)
        self.assertEqual(move.accuracy, 90)
        self.assertEqual(move.effect, 123)

    def test_beat_up_strike_power(self) -> None:
        self.assertEqual(beat_up_strike(120).power, 17)
        self.assertEqual(beat_up_strike(120).type, ElementType.DARK)


if __name__ == "__main__":
    unittest.main()
