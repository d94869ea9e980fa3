"""Protection moves and semi-invulnerable states that stop a move from landing."""

from typing import TYPE_CHECKING, Tuple

from python.duel.engine import classification
from python.duel.engine import hp
from python.duel.engine import queries
from python.duel.engine import stat_stages
from python.duel.engine import status as status_effects
from python.duel.engine.stats import is_grounded
from python.duel.schema.enums import DamageClass, Stat, Status, Terrain

if TYPE_CHECKING:
    from python.duel.data.move import MoveInstance
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant

# Effects that go through every protection move.
_BYPASSES_PROTECTION = frozenset({149, 224, 273, 360, 438, 489})

# Effects that go through every protection move except Crafty Shield.
_BYPASSES_ALL_BUT_CRAFTY_SHIELD = frozenset({29, 107, 179, 412})

_HITS_DIVING = frozenset({258, 262})
_HITS_DIGGING = frozenset({127, 148})
_HITS_FLYING = frozenset({147, 150, 153, 208, 288, 334, 373})


def _punishes_contact(move: "MoveInstance", attacker: "Combatant") -> bool:
    if not classification.makes_contact(move, attacker):
        return False
    return not attacker.held_item.holds("protectivepads")


def _stage_punishment(
    move: "MoveInstance",
    attacker: "Combatant",
    defender: "Combatant",
    battle: "Battle",
    stat: Stat,
    delta: int,
    label: str,
) -> str:
    if not _punishes_contact(move, attacker):
        return ""
    return stat_stages.append_stat(
        attacker, stat, delta, battle, defender, move, f"{defender.name}'s {label}"
    )


def _status_punishment(
    move: "MoveInstance",
    attacker: "Combatant",
    defender: "Combatant",
    battle: "Battle",
    status: Status,
    label: str,
) -> str:
    if not _punishes_contact(move, attacker):
        return ""
    return status_effects.apply_status(
        attacker, status, battle, defender, source=f"{defender.name}'s {label}"
    )


def check_protect(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> Tuple[bool, str]:
    """Whether `move` gets past the protection `defender` raised this turn.

    A blocking protection move still punishes contact: Spiky Shield hurts the
    attacker, Baneful Bunker poisons it, King's Shield, Obstruct and Silk Trap
    drop one of its stats and Burning Bulwark burns it. Protective Pads avoid
    every contact punishment.

    Returns:
        (hits, transcript). hits is False when the move was blocked.
    """
    ctx = defender.ctx
    if not classification.targets_opponent(move):
        return True, ""
    if move.effect in _BYPASSES_PROTECTION:
        return True, ""
    if attacker.ability == "unseenfist" and classification.makes_contact(
        move, attacker
    ):
        return True, ""
    if ctx.crafty_shield and move.damage_class is DamageClass.STATUS:
        return False, ""
    if move.effect in _BYPASSES_ALL_BUT_CRAFTY_SHIELD:
        return True, ""
    if ctx.protect:
        return False, ""
    if ctx.spiky_shield:
        msg = ""
        if _punishes_contact(move, attacker):
            msg = hp.damage(
                attacker,
                attacker.max_hp // 8,
                battle,
                source=f"{defender.name}'s spiky shield",
            )
        return False, msg
    if ctx.baneful_bunker:
        return False, _status_punishment(
            move, attacker, defender, battle, Status.POISON, "baneful bunker"
        )
    if ctx.wide_guard and classification.targets_multiple(move):
        return False, ""
    if (
        battle.terrain.get() is Terrain.PSYCHIC
        and queries.get_priority(move, attacker, defender, battle) > 0
        and is_grounded(defender, battle, attacker, move)
    ):
        return False, ""

    damaging = move.damage_class is not DamageClass.STATUS
    if ctx.mat_block and damaging:
        return False, ""
    if ctx.kings_shield and damaging:
        return False, _stage_punishment(
            move, attacker, defender, battle, Stat.ATK, -1, "king shield"
        )
    if ctx.obstruct and damaging:
        return False, _stage_punishment(
            move, attacker, defender, battle, Stat.DEF, -2, "obstruct"
        )
    if ctx.silk_trap and damaging:
        return False, _stage_punishment(
            move, attacker, defender, battle, Stat.SPE, -1, "silk trap"
        )
    if ctx.burning_bulwark and damaging:
        return False, _status_punishment(
            move, attacker, defender, battle, Status.BURN, "burning bulwark"
        )
    if ctx.quick_guard and queries.get_priority(move, attacker, defender, battle) > 0:
        return False, ""
    return True, ""


def check_semi_invulnerable(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> bool:
    """Whether `move` can reach a defender in a semi-invulnerable state.

    Only a few moves reach each semi-invulnerable state and nothing reaches a
    combatant vanished by Shadow Force.
    """
    if not classification.targets_opponent(move):
        return True
    if "noguard" in (attacker.ability, defender.ability_for(attacker, move)):
        return True
    if defender.mind_reader.active() and defender.mind_reader.item is attacker:
        return True
    if defender.dive:
        return move.effect in _HITS_DIVING
    if defender.dig:
        return move.effect in _HITS_DIGGING
    if defender.fly:
        return move.effect in _HITS_FLYING
    if defender.shadow_force:
        return False
    return True
