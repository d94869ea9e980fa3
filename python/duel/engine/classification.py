"""Pure move classification predicates.

Every predicate keys on the move id, except the targeting predicates which key
on the target pattern. They accept a MoveInstance or a MoveTemplate.
"""

from typing import TYPE_CHECKING, Any, Optional

from python.duel.data import move_ids
from python.duel.schema.enums import DamageClass, MoveTarget

if TYPE_CHECKING:
    from python.duel.schema.combatant import Combatant

_NON_OPPONENT_TARGETS = frozenset(
    {
        MoveTarget.SELECTED_POKEMON_ME_FIRST,
        MoveTarget.ALLY,
        MoveTarget.USERS_FIELD,
        MoveTarget.USER_OR_ALLY,
        MoveTarget.OPPONENTS_FIELD,
        MoveTarget.USER,
        MoveTarget.ENTIRE_FIELD,
        MoveTarget.USER_AND_ALLIES,
        MoveTarget.ALL_ALLIES,
    }
)

_MULTI_TARGETS = frozenset(
    {
        MoveTarget.ALL_OTHER_POKEMON,
        MoveTarget.ALL_OPPONENTS,
        MoveTarget.USER_AND_ALLIES,
        MoveTarget.ALL_POKEMON,
        MoveTarget.ALL_ALLIES,
    }
)


def is_sound_based(move: Any) -> bool:
    return move.id in move_ids.SOUND_MOVES


def is_punching(move: Any) -> bool:
    return move.id in move_ids.PUNCHING_MOVES


def is_biting(move: Any) -> bool:
    return move.id in move_ids.BITING_MOVES


def is_ball_or_bomb(move: Any) -> bool:
    return move.id in move_ids.BALL_AND_BOMB_MOVES


def is_aura_or_pulse(move: Any) -> bool:
    return move.id in move_ids.AURA_AND_PULSE_MOVES


def is_powder_or_spore(move: Any) -> bool:
    return move.id in move_ids.POWDER_MOVES


def is_dance(move: Any) -> bool:
    return move.id in move_ids.DANCE_MOVES


def is_slicing(move: Any) -> bool:
    return move.id in move_ids.SLICING_MOVES


def is_wind(move: Any) -> bool:
    return move.id in move_ids.WIND_MOVES


def is_affected_by_magic_coat(move: Any) -> bool:
    """Whether Magic Coat and Magic Bounce reflect the move."""
    return move.id in move_ids.MAGIC_COAT_MOVES


def is_affected_by_heal_block(move: Any) -> bool:
    return move.id in move_ids.HEAL_BLOCK_MOVES


def is_affected_by_substitute(move: Any) -> bool:
    """Whether a substitute absorbs the move instead of its owner."""
    return move.id not in move_ids.SUBSTITUTE_BYPASS_MOVES


def is_snatchable(move: Any) -> bool:
    return move.id in move_ids.SNATCHABLE_MOVES


def targets_opponent(move: Any) -> bool:
    """Whether the move is aimed at the opposing combatant.

    Status moves with a move-specific target pattern (Counter style moves that
    pick their target at resolution) do not count as aimed at the opponent.
    """
    if (
        move.target is MoveTarget.SPECIFIC_MOVE
        and move.damage_class is DamageClass.STATUS
    ):
        return False
    return move.target not in _NON_OPPONENT_TARGETS


def targets_multiple(move: Any) -> bool:
    return move.target in _MULTI_TARGETS


def makes_contact(move: Any, attacker: Optional["Combatant"] = None) -> bool:
    """Whether the move touches its target.

    Args:
        move: Move being used
        attacker: User of the move, Long Reach turns contact off

    Returns:
        True if contact-triggered effects apply
    """
    if move.id not in move_ids.CONTACT_MOVES:
        return False
    return attacker is None or attacker.ability != "longreach"


def selectable_by_mirror_move(move: Any) -> bool:
    return targets_opponent(move)


def selectable_by_sleep_talk(move: Any) -> bool:
    return move.id not in move_ids.SLEEP_TALK_EXCLUDED


def selectable_by_assist(move: Any) -> bool:
    return move.id not in move_ids.ASSIST_EXCLUDED


def selectable_by_mimic(move: Any) -> bool:
    return move.id not in move_ids.MIMIC_EXCLUDED


def selectable_by_instruct(move: Any) -> bool:
    return move.id not in move_ids.INSTRUCT_EXCLUDED
