"""Stat stage changes and the abilities and items that react to them."""

from typing import TYPE_CHECKING, Any, Optional

from absl import logging

from python.duel.data import abilities
from python.duel.engine import classification
from python.duel.engine import switching
from python.duel.schema.enums import ElementType, Stat

if TYPE_CHECKING:
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant

_RISE_WORDS = {1: "rose", 2: "rose sharply", 3: "rose drastically"}
_FALL_WORDS = {1: "fell", 2: "harshly fell", 3: "severely fell"}

# Abilities that block every stat drop caused by someone else.
_CLEAR_BODY_ABILITIES = frozenset({"clearbody", "whitesmoke", "fullmetalbody"})

# (ability, stat) -> message suffix for stat-specific drop protection.
_STAT_GUARDS = {
    ("hypercutter", Stat.ATK): "claws stayed sharp because of its hyper cutter",
    ("keeneye", Stat.ACCURACY): "aim stayed true because of its keen eye",
    ("mindseye", Stat.ACCURACY): "aim stayed true because of its mind's eye",
    ("bigpecks", Stat.DEF): "defense stayed strong because of its big pecks",
}


def append_stat(
    poke: "Combatant",
    stat: Stat,
    delta: int,
    battle: "Battle",
    attacker: Optional["Combatant"] = None,
    move: Any = None,
    source: str = "",
    check_looping: bool = True,
) -> str:
    """Change one stat stage of `poke`.

    Simple doubles and Contrary inverts the change. The stage is capped to
    [-6, 6]. Drops caused by another combatant can be blocked by abilities or
    Mist, and Mirror Armor bounces them back. Defiant, Competitive, Eject Pack
    and Opportunist react after the change lands.

    Args:
        poke: Combatant whose stage changes
        stat: Stat to change
        delta: Requested change in stages
        battle: Battle the change happens in
        attacker: Combatant causing the change, `poke` itself for self boosts
        move: Move causing the change
        source: Cause appended to the message as " from {source}"
        check_looping: False for the reflected or copied change, which must not
            trigger Mirror Armor or Opportunist again

    Returns:
        Transcript of the change
    """
    if (
        poke.substitute > 0
        and attacker is not None
        and attacker is not poke
        and (move is None or classification.is_affected_by_substitute(move))
    ):
        return ""
    suffix = f" from {source}" if source else ""
    name = stat.display_name
    ability = poke.ability_for(attacker, move)
    if ability == "simple":
        delta *= 2
    if ability == "contrary":
        delta *= -1

    current = poke.stages[stat]
    if delta < 0:
        delta = max(delta, -6 - current)
        if delta == 0:
            return f"{poke.name}'s {name} won't go any lower!\n"
    else:
        delta = min(delta, 6 - current)
        if delta == 0:
            return f"{poke.name}'s {name} won't go any higher!\n"

    msg = ""
    if delta < 0 and attacker is not poke:
        if ability in _CLEAR_BODY_ABILITIES:
            return (
                f"{poke.name}'s {abilities.display_name(ability)} prevented its {name} "
                "from being lowered!\n"
            )
        guard = _STAT_GUARDS.get((ability, stat))
        if guard is not None:
            return f"{poke.name}'s {guard}!\n"
        if (
            poke.side is not None
            and poke.side.mist.active()
            and (attacker is None or attacker.ability != "infiltrator")
        ):
            return (
                f"The mist around {poke.name}'s feet prevented its {name} "
                "from being lowered!\n"
            )
        if ability == "flowerveil" and ElementType.GRASS in poke.types:
            return ""
        if ability == "mirrorarmor" and attacker is not None and check_looping:
            msg += f"{poke.name} reflected the stat change with its mirror armor!\n"
            msg += append_stat(attacker, stat, delta, battle, poke, check_looping=False)
            return msg

    if delta > 0:
        poke.ctx.stat_increased = True
    else:
        poke.ctx.stat_decreased = True
    poke.stages[stat] += delta
    logging.debug(
        "%s %s stage %+d -> %d", poke.name, stat.value, delta, poke.stages[stat]
    )

    capped = max(-3, min(3, delta))
    if capped > 0:
        msg += f"{poke.name}'s {name} {_RISE_WORDS[capped]}{suffix}!\n"
    else:
        msg += f"{poke.name}'s {name} {_FALL_WORDS[-capped]}{suffix}!\n"

    if delta < 0:
        if attacker is not poke:
            if ability == "defiant":
                msg += append_stat(
                    poke, Stat.ATK, 2, battle, poke, source="its defiance"
                )
            if ability == "competitive":
                msg += append_stat(
                    poke, Stat.SPA, 2, battle, poke, source="its competitiveness"
                )
        if poke.held_item.holds("ejectpack") and poke.side is not None:
            if switching.valid_swaps(poke.side, battle, check_trap=False):
                msg += f"{poke.name} is switched out by its eject pack!\n"
                poke.held_item.use()
                msg += switching.remove(poke, battle)
                poke.side.mid_turn_remove = True
    else:
        for other in battle.active_combatants():
            if other is not poke and other.ability == "opportunist" and check_looping:
                msg += (
                    f"{other.name} seizes the opportunity to boost its stat "
                    "with its opportunist!\n"
                )
                msg += append_stat(
                    other, stat, delta, battle, other, check_looping=False
                )
    return msg


def reset_stages(poke: "Combatant") -> None:
    for stat in poke.stages:
        poke.stages[stat] = 0


def positive_stage_total(poke: "Combatant") -> int:
    """Sum of the positive stages, used by Stored Power and Punishment."""
    return sum(stage for stage in poke.stages.values() if stage > 0)
