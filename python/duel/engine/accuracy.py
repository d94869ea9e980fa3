"""Hit or miss decision for a move that reached its target."""

from typing import TYPE_CHECKING

from absl import logging

from python.duel.data.abilities import EVASION_IGNORING_ABILITIES
from python.duel.engine import classification
from python.duel.engine import queries
from python.duel.engine.hooks import HitContext, ability_hook, item_hook
from python.duel.schema.enums import DamageClass, ElementType, Stat, Weather

if TYPE_CHECKING:
    from python.duel.data.move import MoveInstance
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant

# Net accuracy stage -6 through +6.
ACCURACY_STAGE_MULTIPLIERS = (
    3 / 9,
    3 / 8,
    3 / 7,
    3 / 6,
    3 / 5,
    3 / 4,
    1.0,
    4 / 3,
    5 / 3,
    2.0,
    7 / 3,
    8 / 3,
    3.0,
)

_RAIN_SURE_HIT_EFFECTS = frozenset({153, 334, 357, 365, 396})
_SUN_HALVED_EFFECTS = frozenset({153, 334})
_OHKO_EFFECT = 39


def accuracy_stage_multiplier(stage: int) -> float:
    stage = max(-6, min(6, stage))
    return ACCURACY_STAGE_MULTIPLIERS[stage + 6]


def ohko_hits(attacker: "Combatant", defender: "Combatant", battle: "Battle") -> bool:
    """Level-based roll for one-hit knockout moves."""
    return battle.rng.random() * 100 <= 30 + attacker.level - defender.level


def net_accuracy_stage(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant"
) -> int:
    """Attacker accuracy minus defender evasion, clamped to [-6, 6]."""
    if defender.ability_for(attacker, move) == "unaware":
        stage = 0
    else:
        stage = attacker.stages[Stat.ACCURACY]
    ignores_evasion = (
        move.effect == 304
        or defender.foresight
        or defender.miracle_eye
        or attacker.ability in EVASION_IGNORING_ABILITIES
    )
    if not ignores_evasion:
        stage -= defender.stages[Stat.EVASION]
    return max(-6, min(6, stage))


def check_hit(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> bool:
    """Whether `move` hits `defender`.

    Sure-hit conditions are checked first. One-hit knockout moves then roll on
    the level difference. Everything else goes through base accuracy, the
    accuracy and evasion stages, and the ability, field and item modifiers.

    Args:
        move: Move being used
        attacker: User of the move
        defender: Target of the move
        battle: Battle the move is used in

    Returns:
        True if the move hits
    """
    micle = attacker.micle_berry_ate
    attacker.micle_berry_ate = False

    if move.accuracy is None:
        return True
    weather = battle.weather.get()
    effect = move.effect
    if effect == 261 and weather is Weather.HAIL:
        return True
    if effect in _RAIN_SURE_HIT_EFFECTS and weather.is_rainy:
        return True
    if effect == 34 and ElementType.POISON in attacker.types:
        return True
    if effect == 338 and defender.minimized:
        return True

    opponent_targeting = classification.targets_opponent(move)
    if opponent_targeting:
        if defender.mind_reader.active() and defender.mind_reader.item is attacker:
            return True
        if "noguard" in (attacker.ability, defender.ability_for(attacker, move)):
            return True

    if effect == _OHKO_EFFECT:
        return ohko_hits(attacker, defender, battle)
    if attacker.telekinesis.active():
        return True

    accuracy = float(move.accuracy)
    defender_ability = defender.ability_for(attacker, move)
    if effect in _SUN_HALVED_EFFECTS and weather.is_sunny:
        accuracy = 50.0
    if (
        opponent_targeting
        and defender_ability == "wonderskin"
        and move.damage_class is DamageClass.STATUS
    ):
        accuracy = 50.0

    accuracy *= accuracy_stage_multiplier(net_accuracy_stage(move, attacker, defender))

    ctx = HitContext(
        move=move,
        move_type=queries.get_type(move, attacker, defender, battle),
        attacker=attacker,
        defender=defender,
        battle=battle,
    )
    if opponent_targeting:
        defender_hook = ability_hook(defender_ability)
        accuracy = defender_hook.modify_incoming_accuracy(accuracy, ctx)
    accuracy = ability_hook(attacker.ability).modify_accuracy(accuracy, ctx)
    if battle.gravity.active():
        accuracy *= 5 / 3
    accuracy = item_hook(attacker.held_item.get()).modify_accuracy(accuracy, ctx)
    defender_item = item_hook(defender.held_item.get())
    accuracy = defender_item.modify_incoming_accuracy(accuracy, ctx)
    if micle:
        accuracy *= 1.2

    roll = battle.rng.random() * 100
    hit = roll <= accuracy
    if not hit:
        logging.debug(
            "%s missed %s: rolled %.2f against %.2f",
            move.name,
            defender.name,
            roll,
            accuracy,
        )
    return hit
