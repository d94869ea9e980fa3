"""Multi-turn commitments: charge moves, recharges, rampages, Bide and Uproar.

A commitment is stored as the attacker's `LockedMove`. It starts the first
time the move is used without one, and `turn` counts how many turns of it
have already passed.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional

from absl import logging

from python.duel.engine import stat_stages
from python.duel.engine.fixed_damage import (
    BIDE_EFFECT,
    RECHARGE_EFFECT,
    SECOND_TURN_STRIKE_EFFECTS,
)
from python.duel.engine.gates import GateResult, RAMPAGE_EFFECT
from python.duel.schema.enums import Stat
from python.duel.schema.expiring import LockedMove

if TYPE_CHECKING:
    from python.duel.data.move import MoveInstance
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant

SOLAR_EFFECT = 152
ELECTRO_SHOT_EFFECT = 502
UPROAR_EFFECT = 160
ROLLOUT_EFFECT = 118
DIVE_EFFECT = 256

# Effects that charge for one turn and strike on the next.
TWO_TURN_EFFECTS = frozenset(
    {40, 76, 81, 146, 156, 256, 257, 264, 273, 332, 333, 366, 451}
)

_SEMI_INVULNERABLE_FLAGS = {
    256: "dive",
    257: "dig",
    156: "fly",
    264: "fly",
    273: "shadow_force",
}

# Charge turns that boost a stat instead of announcing the charge.
_CHARGE_TURN_BOOSTS = {146: (Stat.DEF, 1), 451: (Stat.SPA, 1), 502: (Stat.SPA, 1)}


class CommitmentPhase(Enum):
    """Where a combatant stands in the commitment of the move it is using."""

    IDLE = "idle"
    CHARGING = "charging"
    EXECUTING = "executing"


def _strike_turn(effect: int) -> Optional[int]:
    if effect == RECHARGE_EFFECT:
        return 0
    if effect in SECOND_TURN_STRIKE_EFFECTS:
        return 1
    if effect == BIDE_EFFECT:
        return 2
    return None


def phase(move: "MoveInstance", attacker: "Combatant") -> CommitmentPhase:
    """The commitment phase `attacker` is in for `move`.

    Rampages and rolling moves execute on every turn of their lock. A
    recharge move executes on the first turn and recharges on the next.
    """
    lock = attacker.locked_move
    if lock is None:
        return CommitmentPhase.IDLE
    strike = _strike_turn(move.effect)
    if strike is None or lock.turn == strike:
        return CommitmentPhase.EXECUTING
    return CommitmentPhase.CHARGING


def _lock(attacker: "Combatant", move: "MoveInstance", turns: int) -> None:
    attacker.locked_move = LockedMove(move=move, remaining=turns)


def _start(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> str:
    msg = ""
    effect = move.effect
    weather = battle.weather.get()
    if effect == SOLAR_EFFECT and not weather.is_sunny:
        _lock(attacker, move, 2)
    elif effect == ELECTRO_SHOT_EFFECT:
        if weather.is_rainy:
            msg += stat_stages.append_stat(
                attacker, Stat.SPA, 1, battle, attacker, move
            )
        else:
            _lock(attacker, move, 2)

    if effect in TWO_TURN_EFFECTS:
        _lock(attacker, move, 2)

    if effect == BIDE_EFFECT:
        _lock(attacker, move, 3)
        attacker.bide = 0
    elif effect == UPROAR_EFFECT:
        attacker.uproar.set_turns(3)
        for poke in (attacker, defender):
            if poke.status.sleep():
                poke.status.reset()
                msg += f"{poke.name} woke up!\n"
        _lock(attacker, move, battle.rng.randint(2, 5))
    elif effect == ROLLOUT_EFFECT:
        _lock(attacker, move, 5)
    elif effect == RAMPAGE_EFFECT:
        _lock(attacker, move, battle.rng.randint(2, 3))

    flag = _SEMI_INVULNERABLE_FLAGS.get(effect)
    if flag is not None:
        setattr(attacker, flag, True)
    if attacker.locked_move is not None:
        logging.debug(
            "%s committed to %s for %s turns",
            attacker.name,
            move.name,
            attacker.locked_move.remaining,
        )
    return msg


def gulp_missile(attacker: "Combatant") -> str:
    """Cramorant catches prey while diving or surfing."""
    if attacker.ability != "gulpmissile" or attacker.species != "Cramorant":
        return ""
    if attacker.hp > attacker.max_hp // 2:
        attacker.species = "Cramorant-gulping"
        return f"{attacker.name} gulped up an arrokuda!\n"
    attacker.species = "Cramorant-gorging"
    return f"{attacker.name} gulped up a pikachu!\n"


def setup_commitment(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> GateResult:
    """Start a commitment if needed and stop turns on which the move does not strike.

    Solar moves skip the charge in sun and Electro Shot in rain. A recharge
    move stops on its second turn, a charge move on its first and Bide on
    both of its storing turns. Some charge turns raise a stat instead of
    announcing the charge.

    Returns:
        The transcript and whether resolution stops for this turn
    """
    msg = ""
    if attacker.locked_move is None:
        msg += _start(move, attacker, defender, battle)
    if phase(move, attacker) is not CommitmentPhase.CHARGING:
        return GateResult(msg)

    effect = move.effect
    if effect == RECHARGE_EFFECT:
        return GateResult(msg + "It's recharging!\n", blocked=True)
    if effect == BIDE_EFFECT:
        return GateResult(msg + "It's storing energy!\n", blocked=True)
    boost = _CHARGE_TURN_BOOSTS.get(effect)
    if boost is not None:
        stat, delta = boost
        msg += stat_stages.append_stat(attacker, stat, delta, battle, attacker, move)
    else:
        msg += "It's charging up!\n"
        if effect == DIVE_EFFECT:
            msg += gulp_missile(attacker)
    return GateResult(msg, blocked=True)


def finish_commitment(move: "MoveInstance", attacker: "Combatant") -> None:
    """Clear a charge or Bide commitment once its strike has resolved."""
    lock = attacker.locked_move
    if lock is None or lock.move is None or lock.move.id != move.id:
        return
    if phase(move, attacker) is not CommitmentPhase.EXECUTING:
        return
    if move.effect in SECOND_TURN_STRIKE_EFFECTS:
        attacker.locked_move = None
        attacker.clear_semi_invulnerable()
    elif move.effect == BIDE_EFFECT:
        attacker.locked_move = None
