import unittest

from pydantic import ValidationError

from python.scripts.scenario_schema import CombatantSpec, Scenario

_BASE_STATS = {"hp": 55, "atk": 55, "def": 50, "spa": 45, "spd": 65, "spe": 55}


class ScenarioSchemaTest(unittest.TestCase):
    def test_defaults(self) -> None:
        spec = CombatantSpec(
            name="Eevee", types=["normal"], moves=["tackle"], base_stats=_BASE_STATS
        )
        self.assertEqual(spec.level, 50)
        self.assertEqual(spec.nature, "hardy")
        self.assertIsNone(spec.item)

    def test_stats_need_max_hp(self) -> None:
        with self.assertRaises(ValidationError):
            CombatantSpec(
                name="Eevee",
                types=["normal"],
                moves=["tackle"],
                stats={"atk": 1, "def": 1, "spa": 1, "spd": 1, "spe": 1},
            )

    def test_level_out_of_range(self) -> None:
        with self.assertRaises(ValidationError):
            CombatantSpec(
                name="Eevee",
                level=101,
                types=["normal"],
                moves=["tackle"],
                base_stats=_BASE_STATS,
            )

    def test_used_move_must_be_known(self) -> None:
        combatant = {
            "name": "Eevee",
            "types": ["normal"],
            "moves": ["tackle"],
            "base_stats": _BASE_STATS,
        }
        with self.assertRaises(ValidationError):
            Scenario(moves=[], attacker=combatant, defender=combatant, use="growl")


if __name__ == "__main__":
    unittest.main()
