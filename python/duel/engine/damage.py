"""Damage formula and the hit loop of damaging moves."""

from typing import TYPE_CHECKING, Optional, Tuple

from absl import logging

from python.duel.data.move import CONFUSION_MOVE_ID
from python.duel.engine import accuracy
from python.duel.engine import hp
from python.duel.engine import power as move_power
from python.duel.engine import queries
from python.duel.engine import stat_stages
from python.duel.engine.hooks import HitContext, ability_hook, item_hook
from python.duel.engine.stats import (
    get_attack,
    get_defense,
    get_effectiveness,
    get_spatk,
    get_spdef,
)
from python.duel.exceptions import DataIntegrityError
from python.duel.schema.enums import DamageClass, ElementType, Stat, Weather

if TYPE_CHECKING:
    from python.duel.data.move import MoveInstance
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant

# Odds of a critical hit are 1 in N for crit stage 0 through 3.
CRIT_ODDS = (24, 8, 2, 1)

# Effects whose user may already have fainted when the hits land.
_HITS_AFTER_USER_FAINTS = frozenset({8, 149, 420, 444})

# Two to five hits: 35% two, 35% three, 15% four, 15% five.
_TWO_TO_FIVE_HITS = [2] * 7 + [3] * 7 + [4] * 3 + [5] * 3

_HALF_DRAIN_EFFECTS = frozenset({4, 9, 346, 500})
_THIRD_RECOIL_EFFECTS = frozenset({199, 254, 263, 469})


def effectiveness_for(
    move: "MoveInstance",
    move_type: ElementType,
    attacker: "Combatant",
    defender: "Combatant",
    battle: "Battle",
) -> float:
    """Type effectiveness of this use, Flying Press counting both of its types."""
    effectiveness = get_effectiveness(defender, move_type, battle, attacker, move)
    if move.effect == 338:
        effectiveness *= get_effectiveness(
            defender, ElementType.FLYING, battle, attacker, move
        )
    return effectiveness


def roll_hit_count(
    move: "MoveInstance", attacker: "Combatant", battle: "Battle"
) -> Tuple[int, bool]:
    """How many times the move strikes.

    Returns:
        (hits, parental_bond). parental_bond is True when the second strike
        comes from Parental Bond and deals a quarter of the damage.
    """
    min_hits, max_hits = move.min_hits, move.max_hits
    if move.effect == 361 and attacker.species == "Greninja-ash":
        return 3, False
    if min_hits is not None and max_hits is not None:
        if attacker.ability == "skilllink":
            min_hits = max_hits
        elif (
            attacker.held_item.holds("loadeddice")
            and max_hits >= 4
            and (min_hits < 4 or move.effect == 484)
        ):
            min_hits = 4
        if min_hits == 2 and max_hits == 5:
            return battle.rng.choice(_TWO_TO_FIVE_HITS), False
        return battle.rng.randint(min_hits, max_hits), False
    if attacker.ability == "parentalbond":
        return 2, True
    return 1, False


def crit_stage(move: "MoveInstance", ctx: HitContext) -> int:
    attacker = ctx.attacker
    stage = move.crit_rate
    stage += ability_hook(attacker.ability).crit_stage_bonus(ctx)
    stage += item_hook(attacker.held_item.get()).crit_stage_bonus(ctx)
    if attacker.focus_energy:
        stage += 2
    if attacker.lansat_berry_ate:
        stage += 2
    return min(stage, 3)


def roll_critical(move: "MoveInstance", ctx: HitContext) -> bool:
    """Roll for a critical hit, then apply the abilities that force or forbid one."""
    attacker, defender = ctx.attacker, ctx.defender
    critical = ctx.battle.rng.randrange(CRIT_ODDS[crit_stage(move, ctx)]) == 0
    if attacker.ability == "merciless" and defender.status.poison():
        critical = True
    if move.effect == 289 or attacker.laser_focus.active():
        critical = True
    if defender.ability_for(attacker, move) in ("shellarmor", "battlearmor"):
        critical = False
    if defender.lucky_chant.active():
        critical = False
    if move.id == CONFUSION_MOVE_ID:
        critical = False
    return critical


def select_stats(
    move: "MoveInstance",
    move_type: ElementType,
    attacker: "Combatant",
    defender: "Combatant",
    battle: "Battle",
    critical: bool,
) -> Tuple[int, int, DamageClass]:
    """The offensive and defensive stats the formula uses for this hit.

    Returns:
        (attack, defense, damage_class). damage_class is PHYSICAL or SPECIAL.
    """
    target_unaware = defender.ability_for(attacker, move) == "unaware"
    user_unaware = attacker.ability == "unaware"
    if move.damage_class is DamageClass.PHYSICAL:
        damage_class = DamageClass.PHYSICAL
        attack = get_attack(attacker, battle, critical, target_unaware)
        if move.effect == 304:
            defense = defender.raw_stat(Stat.DEF)
        else:
            defense = get_defense(
                defender, battle, critical, user_unaware, attacker, move
            )
    else:
        damage_class = DamageClass.SPECIAL
        attack = get_spatk(attacker, battle, critical, target_unaware)
        if move.effect == 304:
            defense = defender.raw_stat(Stat.SPD)
        else:
            defense = get_spdef(
                defender, battle, critical, user_unaware, attacker, move
            )

    effect = move.effect
    if effect == 283:
        defense = get_defense(defender, battle, critical, user_unaware, attacker, move)
    elif effect == 426:
        # Own defense, without critical hit stage cropping.
        attack = get_defense(attacker, battle, ignore_stages=target_unaware)
    elif effect == 298:
        if move.damage_class is DamageClass.PHYSICAL:
            attack = get_attack(defender, battle, critical, target_unaware)
        else:
            attack = get_spatk(defender, battle, critical, target_unaware)
    elif effect == 416:
        attack = max(
            get_attack(attacker, battle, critical, target_unaware),
            get_spatk(attacker, battle, critical, target_unaware),
        )

    if attacker.flash_fire and move_type is ElementType.FIRE:
        attack = int(attack * 1.5)
    if defender.ability_for(attacker, move) == "thickfat" and move_type in (
        ElementType.FIRE,
        ElementType.ICE,
    ):
        attack = int(attack * 0.5)
    return attack, max(1, defense), damage_class


def base_damage(level: int, power: int, attack: int, defense: int) -> int:
    """The level, power and stat part of the formula, before any multiplier.

    Each step is floored.

    Example:
        >>> base_damage(51, 40, 100, 50)
        37
    """
    damage = 2 * level // 5 + 2
    damage = int(damage * power * (attack / defense))
    return damage // 50 + 2


def _aura_multiplier(
    move_type: ElementType, attacker_ability: str, defender_ability: str
) -> float:
    abilities = (attacker_ability, defender_ability)
    aura = {ElementType.DARK: "darkaura", ElementType.FAIRY: "fairyaura"}.get(move_type)
    if aura is None or aura not in abilities:
        return 1.0
    if "aurabreak" in abilities:
        return 0.75
    return 4.0 / 3.0


def _recoil(
    move: "MoveInstance", attacker: "Combatant", battle: "Battle", dealt: int
) -> str:
    effect = move.effect
    if effect == 49:
        amount = dealt // 4
    elif effect in _THIRD_RECOIL_EFFECTS:
        amount = dealt // 3
    elif effect == 270:
        amount = dealt // 2
    elif effect == 463:
        amount = attacker.max_hp // 2
    else:
        return ""
    return hp.damage(attacker, amount, battle, source="recoil")


def attack(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> Tuple[str, int]:
    """Resolve every strike of a damaging move.

    Announces effectiveness, rolls the hit count, then for each strike rolls
    for a critical hit, picks the stats, computes the damage, deals it and
    applies drain and recoil. Weakness Policy triggers once after the last
    strike.

    Args:
        move: Damaging move being used
        attacker: User of the move
        defender: Target of the move
        battle: Battle the move is used in

    Returns:
        (transcript, hits). hits counts the strikes that landed, 0 when the
        move had no effect.

    Raises:
        DataIntegrityError: If the move has no power to compute damage from
    """
    msg = ""
    move_type = queries.get_type(move, attacker, defender, battle)
    effectiveness = effectiveness_for(move, move_type, attacker, defender, battle)
    if effectiveness <= 0:
        return "The attack had no effect!\n", 0
    if effectiveness <= 0.5:
        msg += "It's not very effective...\n"
    elif effectiveness >= 2:
        msg += "It's super effective!\n"

    hits, parental_bond = roll_hit_count(move, attacker, battle)
    attacker_ability = attacker.ability
    defender_ability = defender.ability_for(attacker, move)
    defender_side = battle.side_of(defender)

    for hit in range(hits):
        if defender.hp == 0:
            break
        if attacker.hp == 0 and move.effect not in _HITS_AFTER_USER_FAINTS:
            break

        ctx = HitContext(
            move=move,
            move_type=move_type,
            attacker=attacker,
            defender=defender,
            battle=battle,
            effectiveness=effectiveness,
        )
        critical = roll_critical(move, ctx)
        ctx = HitContext(
            move=move,
            move_type=move_type,
            attacker=attacker,
            defender=defender,
            battle=battle,
            effectiveness=effectiveness,
            critical=critical,
        )
        attack_stat, defense_stat, damage_class = select_stats(
            move, move_type, attacker, defender, battle, critical
        )

        power: Optional[int] = move_power.get_power(move, attacker, defender, battle)
        if power is None:
            raise DataIntegrityError(move.name, move.effect)

        # Nothing may be added to the transcript before this re-check, or it
        # would show up for strikes that missed.
        if hit > 0 and attacker_ability != "skilllink":
            if move.effect == 105:
                if not accuracy.check_hit(move, attacker, defender, battle):
                    hits = hit
                    break
                power *= 1 + hit
            if move.effect == 484 and not attacker.held_item.holds("loadeddice"):
                if not accuracy.check_hit(move, attacker, defender, battle):
                    hits = hit
                    break

        damage: float = base_damage(attacker.level, power, attack_stat, defense_stat)
        if critical:
            msg += "A critical hit!\n"
            damage *= 1.5

        weather = battle.weather.get()
        if weather.is_rainy:
            if move_type is ElementType.WATER:
                damage *= 1.5
            elif move_type is ElementType.FIRE:
                damage *= 0.5
        elif weather is Weather.SUN:
            if move_type is ElementType.FIRE:
                damage *= 1.5
            elif move_type is ElementType.WATER:
                damage *= 0.5

        if move_type in attacker.types:
            damage *= 2 if attacker_ability == "adaptability" else 1.5
        damage *= effectiveness

        if (
            attacker.status.burn()
            and damage_class is DamageClass.PHYSICAL
            and attacker_ability != "guts"
            and move.effect != 170
        ):
            damage *= 0.5
        if not critical and attacker_ability != "infiltrator":
            if defender_side.aurora_veil.active():
                damage *= 0.5
            elif (
                defender_side.light_screen.active()
                and damage_class is DamageClass.SPECIAL
            ):
                damage *= 0.5
            elif (
                defender_side.reflect.active()
                and damage_class is DamageClass.PHYSICAL
            ):
                damage *= 0.5
        if defender.minimized and move.effect == 338:
            damage *= 2

        damage *= ability_hook(attacker_ability).damage_multiplier(ctx)
        damage *= ability_hook(defender_ability).incoming_damage_multiplier(ctx)
        damage *= item_hook(attacker.held_item.get()).damage_multiplier(ctx)
        damage *= item_hook(defender.held_item.get()).incoming_damage_multiplier(ctx)
        damage *= _aura_multiplier(move_type, attacker_ability, defender_ability)
        if parental_bond and hit > 0:
            damage *= 0.25

        damage *= battle.rng.random() * 0.15 + 0.85
        damage = max(1, int(damage))
        if move.effect == 102 and damage >= defender.hp:
            damage = defender.hp - 1
            if damage == 0:
                continue
        logging.debug(
            "%s hit %d on %s: power %d, %d/%d, damage %d",
            move.name,
            hit + 1,
            defender.name,
            power,
            attack_stat,
            defense_stat,
            damage,
        )

        drain_ratio = None
        if move.effect in _HALF_DRAIN_EFFECTS:
            drain_ratio = 1 / 2
        elif move.effect == 349:
            drain_ratio = 3 / 4
        dealt_msg, dealt = hp.damage_from_move(
            defender, damage, battle, move, move_type, attacker, critical, drain_ratio
        )
        msg += dealt_msg

        if attacker_ability != "rockhead" and defender_side.has_alive():
            msg += _recoil(move, attacker, battle, dealt)

    if (
        effectiveness > 1
        and defender.held_item.holds("weaknesspolicy")
        and defender.substitute == 0
    ):
        msg += stat_stages.append_stat(
            defender, Stat.ATK, 2, battle, defender, move, "its weakness policy"
        )
        msg += stat_stages.append_stat(
            defender, Stat.SPA, 2, battle, defender, move, "its weakness policy"
        )
        defender.held_item.use()
    return msg, hits
