"""Conditions that stop a combatant from acting before its move starts."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from absl import logging

from python.duel.data.move import confusion
from python.duel.engine import damage
from python.duel.engine import hp
from python.duel.schema.enums import ElementType, Stat, Weather

if TYPE_CHECKING:
    from python.duel.data.move import MoveInstance
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant

# Moves that thaw their frozen user.
THAWING_EFFECTS = frozenset({5, 126, 168, 254, 336, 398, 458, 500})

# Moves usable while asleep.
SLEEP_USABLE_EFFECTS = frozenset({93, 98})

RAMPAGE_EFFECT = 28
STANCE_SHIELD_EFFECT = 356


@dataclass(frozen=True)
class GateResult:
    """Outcome of the status gates.

    Attributes:
        msg: Transcript produced while checking
        blocked: Whether the combatant lost its turn
    """

    msg: str
    blocked: bool = False


def _lose_turn(
    move: "MoveInstance", attacker: "Combatant", msg: str, reason: str
) -> GateResult:
    if move.effect == RAMPAGE_EFFECT:
        attacker.locked_move = None
    logging.debug("%s lost its turn: %s", attacker.name, reason)
    return GateResult(msg, blocked=True)


def check_status_gates(
    move: "MoveInstance",
    attacker: "Combatant",
    defender: "Combatant",
    battle: "Battle",
    use_pp: bool = True,
    override_sleep: bool = False,
) -> GateResult:
    """Run the status, infatuation, flinch, confusion and Truant checks.

    Timers only tick down on a real use of a move, so a move called by another
    move (`use_pp` False) never wakes or thaws its user. A blocked rampage
    ends its lock.

    Args:
        move: Move the attacker is trying to use
        attacker: Combatant trying to act
        defender: Its opponent
        battle: Battle the move is used in
        use_pp: Whether this is a real use of the move
        override_sleep: Let a sleeping attacker act anyway

    Returns:
        The gate transcript and whether the attacker lost its turn
    """
    msg = ""
    rng = battle.rng
    nv = attacker.status

    if move.effect in THAWING_EFFECTS and nv.freeze():
        nv.reset()
        msg += f"{attacker.name} thawed out!\n"
    if nv.freeze():
        if use_pp and rng.randrange(5) == 0:
            nv.reset()
            msg += f"{attacker.name} is no longer frozen!\n"
        else:
            msg += f"{attacker.name} is frozen solid!\n"
            return _lose_turn(move, attacker, msg, "frozen")

    if nv.paralysis() and rng.randrange(4) == 0:
        msg += f"{attacker.name} is paralyzed! It can't move!\n"
        return _lose_turn(move, attacker, msg, "paralysis")
    if attacker.infatuated is defender and rng.randrange(2) == 0:
        msg += (
            f"{attacker.name} is in love with {defender.name} "
            "and can't bear to hurt them!\n"
        )
        return _lose_turn(move, attacker, msg, "infatuation")
    if attacker.ctx.flinched:
        msg += f"{attacker.name} flinched! It can't move!\n"
        return _lose_turn(move, attacker, msg, "flinch")

    if nv.sleep():
        if use_pp and nv.sleep_timer.next_turn():
            nv.reset()
            msg += f"{attacker.name} woke up!\n"
        elif (
            move.effect not in SLEEP_USABLE_EFFECTS
            and attacker.ability != "comatose"
            and not override_sleep
        ):
            msg += f"{attacker.name} is fast asleep!\n"
            return _lose_turn(move, attacker, msg, "sleep")

    if attacker.confusion.next_turn():
        msg += f"{attacker.name} is no longer confused!\n"
    if attacker.confusion.active() and rng.randrange(3) == 0:
        msg += f"{attacker.name} hurt itself in its confusion!\n"
        self_hit, _ = damage.attack(confusion(), attacker, attacker, battle)
        msg += self_hit
        return _lose_turn(move, attacker, msg, "confusion")

    if attacker.ability == "truant" and attacker.truant_turn % 2 == 1:
        msg += f"{attacker.name} is loafing around!\n"
        return _lose_turn(move, attacker, msg, "truant")
    return GateResult(msg)


def _swap_aegislash_stats(poke: "Combatant") -> None:
    stats = poke.stats
    stats[Stat.ATK], stats[Stat.DEF] = stats[Stat.DEF], stats[Stat.ATK]
    stats[Stat.SPA], stats[Stat.SPD] = stats[Stat.SPD], stats[Stat.SPA]


def stance_change(move: "MoveInstance", attacker: "Combatant") -> str:
    """Switch Aegislash between its forms for attacking and shielding moves."""
    if attacker.ability != "stancechange":
        return ""
    if attacker.species == "Aegislash" and move.damage_class.is_damaging:
        attacker.species = "Aegislash-blade"
        _swap_aegislash_stats(attacker)
        return f"{attacker.name} draws its blade!\n"
    if attacker.species == "Aegislash-blade" and move.effect == STANCE_SHIELD_EFFECT:
        attacker.species = "Aegislash"
        _swap_aegislash_stats(attacker)
        return f"{attacker.name} readies its shield!\n"
    return ""


def powder_explosion(
    move_type: ElementType, attacker: "Combatant", battle: "Battle"
) -> GateResult:
    """A powdered combatant using a fire move takes 1/4 max HP and loses its turn."""
    if (
        attacker.ctx.powdered
        and move_type is ElementType.FIRE
        and battle.weather.get() is not Weather.HEAVY_RAIN
    ):
        msg = hp.damage(
            attacker, attacker.max_hp // 4, battle, source="its powder exploding"
        )
        return GateResult(msg, blocked=True)
    return GateResult("")
