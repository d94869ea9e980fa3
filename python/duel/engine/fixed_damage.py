"""Routes a damaging move to the formula, to fixed damage or to stored damage."""

from typing import TYPE_CHECKING, Callable, Dict, Tuple

from python.duel.data.move import beat_up_strike
from python.duel.engine import damage
from python.duel.engine import hp
from python.duel.schema.enums import ElementType, Stat

if TYPE_CHECKING:
    from python.duel.data.move import MoveInstance
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant

RECHARGE_EFFECT = 81
BIDE_EFFECT = 27
BEAT_UP_EFFECT = 155

# Charge moves that strike on the second turn of their lock.
SECOND_TURN_STRIKE_EFFECTS = frozenset(
    {40, 76, 146, 152, 156, 256, 257, 264, 273, 332, 333, 366, 451, 502}
)

# Counter family: effect -> multiplier applied to the damage last taken.
COUNTER_MULTIPLIERS = {228: 1.5, 145: 2, 90: 2}

_FixedAmount = Callable[["MoveInstance", "Combatant", "Combatant", "Battle"], int]

# Effect -> damage dealt regardless of stats.
FIXED_DAMAGE: Dict[int, _FixedAmount] = {
    41: lambda move, attacker, defender, battle: defender.hp // 2,
    42: lambda move, attacker, defender, battle: 40,
    88: lambda move, attacker, defender, battle: attacker.level,
    # Psywave: 50% to 150% of the user's level in 10% steps.
    89: lambda move, attacker, defender, battle: int(
        attacker.level * (battle.rng.randint(0, 10) / 10 + 0.5)
    ),
    131: lambda move, attacker, defender, battle: 20,
    190: lambda move, attacker, defender, battle: max(0, defender.hp - attacker.hp),
    39: lambda move, attacker, defender, battle: defender.hp,
    321: lambda move, attacker, defender, battle: attacker.hp,
    413: lambda move, attacker, defender, battle: 3 * (defender.hp // 4),
}


def _beat_up(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> Tuple[str, int]:
    """One strike per healthy party member, the user striking with the move itself."""
    msg = ""
    hits = 0
    for member in battle.side_of(attacker).party:
        if defender.hp == 0:
            break
        if member.hp == 0:
            continue
        if member is attacker:
            strike_msg, strike_hits = damage.attack(move, attacker, defender, battle)
        else:
            if member.status.has_status():
                continue
            strike = beat_up_strike(member.raw_stat(Stat.ATK))
            strike_msg, strike_hits = damage.attack(strike, attacker, defender, battle)
        msg += strike_msg
        hits += strike_hits
    return msg, hits


def calculate_damage(
    move: "MoveInstance",
    attacker: "Combatant",
    defender: "Combatant",
    battle: "Battle",
    move_type: ElementType,
) -> Tuple[str, int]:
    """Deal whatever damage `move` deals on this turn of its use.

    Recharge moves strike on the first turn of their lock and charge moves on
    the second. Bide releases twice the stored damage on its third turn.
    Counter moves return a multiple of the damage taken, fixed damage moves
    ignore the formula and Beat Up strikes once per healthy party member.
    Every other physical or special move goes through the damage formula.

    Returns:
        (transcript, hits). hits is 0 when nothing was dealt this turn.
    """
    effect = move.effect
    lock = attacker.locked_move
    if effect == RECHARGE_EFFECT and lock is not None:
        if lock.turn == 0:
            return damage.attack(move, attacker, defender, battle)
        return "", 0
    if effect in SECOND_TURN_STRIKE_EFFECTS and lock is not None:
        if lock.turn == 1 and move.damage_class.is_damaging:
            return damage.attack(move, attacker, defender, battle)
        return "", 0

    if effect == BIDE_EFFECT:
        if lock is None or lock.turn != 2:
            return "", 0
        stored = attacker.bide or 0
        attacker.bide = None
        return hp.damage(defender, stored * 2, battle, move, move_type, attacker), 1
    if effect in COUNTER_MULTIPLIERS:
        taken = attacker.ctx.last_move_damage[0]
        amount = int(COUNTER_MULTIPLIERS[effect] * taken)
        return hp.damage(defender, amount, battle, move, move_type, attacker), 1
    if effect in FIXED_DAMAGE:
        amount = FIXED_DAMAGE[effect](move, attacker, defender, battle)
        return hp.damage(defender, amount, battle, move, move_type, attacker), 1
    if effect == BEAT_UP_EFFECT:
        return _beat_up(move, attacker, defender, battle)
    if move.damage_class.is_damaging:
        return damage.attack(move, attacker, defender, battle)
    return "", 0
