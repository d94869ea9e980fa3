"""Resolve one move use from a JSON scenario and print the battle transcript.

The scenario file holds the move data and both combatants:

    {
      "moves": [{"id": 33, "name": "tackle", "power": 40, "pp": 35,
                 "accuracy": 100, "priority": 0, "type": "normal",
                 "damage_class": "physical", "effect": 1}],
      "attacker": {"name": "Eevee", "level": 50, "types": ["normal"],
                   "base_stats": {"hp": 55, "atk": 55, "def": 50, "spa": 45,
                                  "spd": 65, "spe": 55},
                   "moves": ["tackle"]},
      "defender": {...},
      "use": "tackle"
    }

The file is validated against `scenario_schema.Scenario`. Move records may also
use the raw data dump layout accepted by MoveTemplate.from_dict.
"""

import json
import random
from typing import Dict, List

from absl import app, flags, logging
from pydantic import ValidationError

from python.duel.config import EngineConfig
from python.duel.data.move import MoveInstance, MoveTemplate
from python.duel.engine import move_engine
from python.duel.exceptions import DuelEngineError
from python.duel.schema.battle_state import Battle
from python.duel.schema.combatant import Combatant
from python.duel.schema.enums import ElementType, Stat
from python.duel.schema.side_state import Side
from python.scripts.scenario_schema import CombatantSpec, Scenario

FLAGS = flags.FLAGS

flags.DEFINE_string("scenario", None, "Path to the JSON scenario file")
flags.DEFINE_integer(
    "seed", None, "Seed for the battle's random source (default: OS entropy)"
)
flags.DEFINE_integer(
    "turns",
    1,
    "Number of consecutive turns the attacker uses the move, "
    "for charge and rampage moves",
)
flags.DEFINE_integer(
    "max_redirect_depth",
    EngineConfig.max_redirect_depth,
    "Maximum number of chained called, reflected or copied moves",
)
flags.DEFINE_bool(
    "strict_redirects",
    False,
    "Raise instead of failing the move when the redirect bound is hit",
)
flags.mark_flag_as_required("scenario")


def _build_combatant(
    spec: CombatantSpec, templates: Dict[str, MoveTemplate]
) -> Combatant:
    moves = [MoveInstance.from_template(templates[name]) for name in spec.moves]
    types = [ElementType.from_name(name) for name in spec.types]
    extra = dict(ability=spec.ability, item=spec.item, moves=moves)
    if spec.base_stats is not None:
        return Combatant.from_base_stats(
            spec.name, spec.level, types, spec.base_stats, nature=spec.nature, **extra
        )
    return Combatant(
        name=spec.name,
        level=spec.level,
        types=types,
        stats={Stat(key): value for key, value in spec.stats.items()},
        max_hp=spec.max_hp,
        nature=spec.nature,
        **extra,
    )


def load_battle(scenario: Scenario, config: EngineConfig) -> Battle:
    """Build a battle with both combatants active from a validated scenario.

    Raises:
        KeyError: If a combatant knows a move with no record in the scenario
    """
    templates = {}
    for record in scenario.moves:
        template = MoveTemplate.from_dict(record)
        templates[template.name] = template
    attacker = _build_combatant(scenario.attacker, templates)
    defender = _build_combatant(scenario.defender, templates)
    return Battle(
        side1=Side(name="Player 1", party=[attacker]),
        side2=Side(name="Player 2", party=[defender]),
        config=config,
        metronome_moves=list(templates.values()),
        rng=random.Random(config.random_seed),
    )


def resolve(scenario: Scenario, config: EngineConfig, turns: int) -> List[str]:
    """Use the scenario's move for `turns` turns.

    Returns:
        One transcript per turn
    """
    battle = load_battle(scenario, config)
    attacker, defender = battle.side1.current, battle.side2.current
    move = next(slot for slot in attacker.moves if slot.name == scenario.use)
    transcripts = []
    for turn in range(turns):
        result = move_engine.use_move(move, attacker, defender, battle)
        logging.info(
            "Turn %d: %d hit(s), %d redirect(s)",
            turn + 1,
            result.hits,
            result.redirects,
        )
        transcripts.append(result.msg)
        if not defender.alive():
            break
        attacker.end_turn()
        defender.end_turn()
    return transcripts


def main(argv: List[str]) -> None:
    """Entry point for the script."""
    del argv
    logging.set_verbosity(logging.INFO)

    config = EngineConfig(
        max_redirect_depth=FLAGS.max_redirect_depth,
        strict_redirects=FLAGS.strict_redirects,
        random_seed=FLAGS.seed,
    )
    with open(FLAGS.scenario) as f:
        try:
            scenario = Scenario(**json.load(f))
        except (json.JSONDecodeError, ValidationError) as e:
            logging.error("Invalid scenario %s: %s", FLAGS.scenario, e)
            raise

    try:
        transcripts = resolve(scenario, config, FLAGS.turns)
    except DuelEngineError as e:
        logging.error("Move resolution failed: %s", e)
        raise

    for turn, msg in enumerate(transcripts, start=1):
        print(f"--- Turn {turn} ---")
        print(msg, end="")


if __name__ == "__main__":
    app.run(main)
