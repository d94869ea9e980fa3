"""Battle-dependent numbers of a combatant: stats, weight, grounding, matchups."""

from typing import TYPE_CHECKING, Any, Optional

from python.duel.engine.hooks import ability_hook, item_hook
from python.duel.schema.enums import ElementType, Stat, Weather

if TYPE_CHECKING:
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant

# Stage -6 through +6 for the five battle stats.
STAT_STAGE_MULTIPLIERS = (
    2 / 8,
    2 / 7,
    2 / 6,
    2 / 5,
    2 / 4,
    2 / 3,
    1.0,
    1.5,
    2.0,
    2.5,
    3.0,
    3.5,
    4.0,
)


def stage_multiplier(stage: int, crop: Optional[str] = None) -> float:
    """Multiplier for a stat stage.

    Args:
        stage: Stage in [-6, 6]
        crop: "bottom" ignores negative stages, "top" ignores positive ones.
            Critical hits crop the attacker's stat from the bottom and the
            defender's from the top.

    Returns:
        Multiplier applied to the raw stat
    """
    if crop == "bottom":
        stage = max(stage, 0)
    elif crop == "top":
        stage = min(stage, 0)
    stage = max(-6, min(6, stage))
    return STAT_STAGE_MULTIPLIERS[stage + 6]


def _apply_modifiers(
    stat: Stat,
    value: float,
    poke: "Combatant",
    battle: "Battle",
    ability: str,
) -> int:
    value = ability_hook(ability).modify_stat(stat, value, poke, battle)
    value = item_hook(poke.held_item.get()).modify_stat(stat, value, poke, battle)
    for other in battle.active_combatants():
        if other is not poke:
            hook = ability_hook(other.ability)
            value = hook.modify_opponent_stat(stat, value, poke, battle)
    return int(value)


def get_attack(
    poke: "Combatant",
    battle: "Battle",
    critical: bool = False,
    ignore_stages: bool = False,
) -> int:
    value: float = poke.raw_stat(Stat.ATK)
    if not ignore_stages:
        value *= stage_multiplier(poke.stages[Stat.ATK], "bottom" if critical else None)
    return _apply_modifiers(Stat.ATK, value, poke, battle, poke.ability)


def get_spatk(
    poke: "Combatant",
    battle: "Battle",
    critical: bool = False,
    ignore_stages: bool = False,
) -> int:
    value: float = poke.raw_stat(Stat.SPA)
    if not ignore_stages:
        value *= stage_multiplier(poke.stages[Stat.SPA], "bottom" if critical else None)
    return _apply_modifiers(Stat.SPA, value, poke, battle, poke.ability)


def get_defense(
    poke: "Combatant",
    battle: "Battle",
    critical: bool = False,
    ignore_stages: bool = False,
    attacker: Optional["Combatant"] = None,
    move: Any = None,
) -> int:
    """Defense as seen by `attacker` using `move`.

    Wonder Room swaps the raw defense and special defense.
    """
    raw = Stat.SPD if battle.wonder_room.active() else Stat.DEF
    value: float = poke.raw_stat(raw)
    if not ignore_stages:
        value *= stage_multiplier(poke.stages[Stat.DEF], "top" if critical else None)
    ability = poke.ability_for(attacker, move)
    return _apply_modifiers(Stat.DEF, value, poke, battle, ability)


def get_spdef(
    poke: "Combatant",
    battle: "Battle",
    critical: bool = False,
    ignore_stages: bool = False,
    attacker: Optional["Combatant"] = None,
    move: Any = None,
) -> int:
    raw = Stat.DEF if battle.wonder_room.active() else Stat.SPD
    value: float = poke.raw_stat(raw)
    if not ignore_stages:
        value *= stage_multiplier(poke.stages[Stat.SPD], "top" if critical else None)
    if battle.weather.get() is Weather.SANDSTORM and ElementType.ROCK in poke.types:
        value *= 1.5
    ability = poke.ability_for(attacker, move)
    return _apply_modifiers(Stat.SPD, value, poke, battle, ability)


def get_speed(poke: "Combatant", battle: "Battle") -> int:
    value = poke.raw_stat(Stat.SPE) * stage_multiplier(poke.stages[Stat.SPE])
    if poke.status.paralysis() and poke.ability != "quickfeet":
        value /= 2
    if poke.side is not None and poke.side.tailwind.active():
        value *= 2
    return _apply_modifiers(Stat.SPE, value, poke, battle, poke.ability)


def get_stat(
    poke: "Combatant",
    stat: Stat,
    battle: "Battle",
    critical: bool = False,
    ignore_stages: bool = False,
) -> int:
    """Any battle stat by enum, with stages and modifiers applied."""
    if stat is Stat.ATK:
        return get_attack(poke, battle, critical, ignore_stages)
    if stat is Stat.DEF:
        return get_defense(poke, battle, critical, ignore_stages)
    if stat is Stat.SPA:
        return get_spatk(poke, battle, critical, ignore_stages)
    if stat is Stat.SPD:
        return get_spdef(poke, battle, critical, ignore_stages)
    if stat is Stat.SPE:
        return get_speed(poke, battle)
    raise ValueError(f"{stat} has no stat value")


def get_weight(
    poke: "Combatant", attacker: Optional["Combatant"] = None, move: Any = None
) -> int:
    """Weight in hectograms, never below 1."""
    weight = poke.weight
    ability = poke.ability_for(attacker, move)
    if ability == "heavymetal":
        weight *= 2
    if ability == "lightmetal":
        weight = max(1, weight // 2)
    weight -= poke.autotomize * 1000
    return max(1, weight)


def is_grounded(
    poke: "Combatant",
    battle: "Battle",
    attacker: Optional["Combatant"] = None,
    move: Any = None,
) -> bool:
    """Whether ground moves, terrains and hazards reach the combatant."""
    if battle.gravity.active():
        return True
    if poke.held_item.holds("ironball"):
        return True
    if poke.grounded_by_move:
        return True
    if ElementType.FLYING in poke.types and not poke.ctx.roost:
        return False
    if poke.ability_for(attacker, move) == "levitate":
        return False
    if poke.held_item.holds("airballoon"):
        return False
    if poke.magnet_rise.active():
        return False
    return not poke.telekinesis.active()


def get_effectiveness(
    poke: "Combatant",
    attacking_type: ElementType,
    battle: "Battle",
    attacker: Optional["Combatant"] = None,
    move: Any = None,
) -> float:
    """Type effectiveness of `attacking_type` into `poke`.

    Args:
        poke: Defending combatant
        attacking_type: Effective type of the incoming move
        battle: Battle for weather, the chart and inverse rules
        attacker: User of the move, for Scrappy style abilities
        move: Move being used, for Freeze-Dry and Thousand Arrows style effects

    Returns:
        Product of the per-type multipliers, 0 for immunity
    """
    if attacking_type is ElementType.TYPELESS:
        return 1.0
    effectiveness = 1.0
    for defending_type in poke.types:
        if defending_type is ElementType.TYPELESS:
            continue
        if move is not None:
            if move.effect == 380 and defending_type is ElementType.WATER:
                effectiveness *= 2
                continue
            if (
                move.effect == 373
                and defending_type is ElementType.FLYING
                and not is_grounded(poke, battle, attacker, move)
            ):
                return 1.0
        if poke.ctx.roost and defending_type is ElementType.FLYING:
            continue
        if (
            poke.foresight
            and attacking_type in (ElementType.FIGHTING, ElementType.NORMAL)
            and defending_type is ElementType.GHOST
        ):
            continue
        if (
            poke.miracle_eye
            and attacking_type is ElementType.PSYCHIC
            and defending_type is ElementType.DARK
        ):
            continue
        if (
            attacking_type in (ElementType.FIGHTING, ElementType.NORMAL)
            and defending_type is ElementType.GHOST
            and attacker is not None
            and attacker.ability in ("scrappy", "mindseye")
        ):
            continue
        if (
            attacking_type is ElementType.GROUND
            and defending_type is ElementType.FLYING
            and is_grounded(poke, battle, attacker, move)
        ):
            continue
        value = battle.type_chart.get_effectiveness(attacking_type, defending_type)
        if (
            defending_type is ElementType.FLYING
            and value > 1
            and move is not None
            and battle.weather.get() is Weather.STRONG_WINDS
        ):
            value = 1.0
        if battle.inverse_battle:
            if value < 1:
                value = 2.0
            elif value > 1:
                value = 0.5
        effectiveness *= value
    if attacking_type is ElementType.FIRE and poke.tar_shot:
        effectiveness *= 2
    if (
        effectiveness >= 1
        and poke.hp == poke.max_hp
        and poke.ability_for(attacker, move) == "terashell"
    ):
        effectiveness = 0.5
    return effectiveness
