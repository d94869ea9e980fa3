"""Base power of a move at the moment it is used."""

from typing import TYPE_CHECKING, Optional

from python.duel.data.items import natural_gift_power
from python.duel.engine import queries
from python.duel.engine.hooks import HitContext, ability_hook, item_hook
from python.duel.engine.stats import (
    get_effectiveness,
    get_speed,
    get_weight,
    is_grounded,
)
from python.duel.schema.enums import ElementType, Stat, Terrain, Weather

if TYPE_CHECKING:
    from python.duel.data.move import MoveInstance
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant

# (upper bound inclusive, power) pairs, checked in order.
_LOW_KICK_POWER = ((100, 20), (250, 40), (500, 60), (1000, 80), (2000, 100))
_HEAVY_SLAM_POWER = ((2, 40), (3, 60), (4, 80), (5, 100))
_FLAIL_POWER = ((1, 200), (5, 150), (12, 100), (21, 80), (42, 40))
_ELECTRO_BALL_POWER = ((0, 40), (1, 60), (2, 80), (3, 120))
_MAGNITUDE_POWER = ((5, 10), (15, 30), (35, 50), (65, 70), (85, 90), (95, 110))
_TRUMP_CARD_POWER = {0: 200, 1: 80, 2: 60, 3: 50}

_WEATHER_BALL_WEATHERS = frozenset(
    {
        Weather.HAIL,
        Weather.SANDSTORM,
        Weather.RAIN,
        Weather.HEAVY_RAIN,
        Weather.SUN,
        Weather.HARSH_SUN,
    }
)

# Effect -> condition under which the move's power doubles.
_DOUBLING_CONDITIONS = {
    222: lambda move, attacker, defender, battle: defender.hp < defender.max_hp // 2,
    231: lambda move, attacker, defender, battle: defender.has_moved,
    311: lambda move, attacker, defender, battle: defender.status.has_status(),
    409: lambda move, attacker, defender, battle: attacker.ctx.last_move_failed,
    186: lambda move, attacker, defender, battle: (
        attacker.ctx.last_move_damage is not None
    ),
    318: lambda move, attacker, defender, battle: not attacker.held_item.has_item(),
    320: lambda move, attacker, defender, battle: (
        battle.side_of(attacker).retaliate.active()
    ),
    232: lambda move, attacker, defender, battle: defender.ctx.damaged_this_turn,
    151: lambda move, attacker, defender, battle: defender.minimized,
    336: lambda move, attacker, defender, battle: battle.last_move_effect == 337,
    337: lambda move, attacker, defender, battle: battle.last_move_effect == 336,
    450: lambda move, attacker, defender, battle: attacker.ctx.stat_decreased,
    465: lambda move, attacker, defender, battle: defender.status.has_status(),
    436: lambda move, attacker, defender, battle: (
        not defender.has_moved or defender.ctx.swapped_in
    ),
}


def _tiered(value: float, tiers, default: int) -> int:
    for bound, power in tiers:
        if value <= bound:
            return power
    return default


def _base_power(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> Optional[int]:
    """Power before any modifier, computed for moves whose power varies."""
    effect = move.effect
    rng = battle.rng
    if effect == 88:
        return attacker.level
    if effect == 89:
        return rng.randint(int(attacker.level * 0.5), int(attacker.level * 1.5))
    if effect == 197:
        return _tiered(get_weight(defender, attacker, move), _LOW_KICK_POWER, 120)
    if effect == 292:
        ratio = get_weight(attacker) / get_weight(defender, attacker, move)
        return _tiered(ratio, _HEAVY_SLAM_POWER, 120)
    if effect == 122:
        return max(1, min(102, int(attacker.happiness / 2.5)))
    if effect == 124:
        return max(1, min(102, int((255 - attacker.happiness) / 2.5)))
    if effect == 220:
        return min(
            150, 1 + 25 * get_speed(defender, battle) // get_speed(attacker, battle)
        )
    if effect == 191:
        return int(150 * attacker.hp / attacker.max_hp)
    if effect == 162:
        return 100 * attacker.stockpile
    if effect == 100:
        return _tiered(int(64 * attacker.hp / attacker.max_hp), _FLAIL_POWER, 20)
    if effect == 236:
        return _TRUMP_CARD_POWER.get(move.pp, 40)
    if effect == 238:
        return max(1, int(120 * defender.hp / defender.max_hp))
    if effect == 495:
        return max(1, int(100 * defender.hp / defender.max_hp))
    if effect == 246:
        raised = sum(
            max(0, defender.stages[stat])
            for stat in (Stat.ATK, Stat.DEF, Stat.SPA, Stat.SPD, Stat.SPE)
        )
        return min(200, 60 + raised * 20)
    if effect == 294:
        ratio = get_speed(attacker, battle) // get_speed(defender, battle)
        return _tiered(ratio, _ELECTRO_BALL_POWER, 150)
    if effect == 306:
        return 20 * (1 + sum(max(0, stage) for stage in attacker.stages.values()))
    if effect == 120:
        power = 2 ** attacker.fury_cutter * 10
        attacker.fury_cutter = min(4, attacker.fury_cutter + 1)
        return power
    if effect == 118 and move.power is not None:
        turn = attacker.locked_move.turn if attacker.locked_move is not None else 0
        return 2 ** turn * move.power
    if effect == 127:
        return _tiered(rng.randint(0, 100), _MAGNITUDE_POWER, 150)
    if effect == 234:
        return attacker.held_item.fling_power
    if effect == 303:
        return attacker.echoed_voice_power
    if effect == 223:
        return natural_gift_power(attacker.held_item.get())
    if effect == 361 and attacker.species == "Greninja-ash":
        return 20
    if effect == 155 and move.power is None:
        return attacker.raw_stat(Stat.ATK) // 10 + 5
    return move.power


def get_power(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> Optional[int]:
    """The move's power for this use, or None for moves without power.

    Starts from the effect-specific base power, then applies the attacker's
    ability, the defender's ability, the attacker's item, the effect-specific
    conditions, terrain, Charge, Mud Sport and Water Sport. Some conditions
    consume state: Wake-Up Slap wakes its target and Smelling Salts cures
    paralysis.

    Args:
        move: Move being used
        attacker: User of the move
        defender: Target of the move
        battle: Battle the move is used in

    Returns:
        Power as an integer, None when the move has no power at all
    """
    power = _base_power(move, attacker, defender, battle)
    if power is None:
        return None

    move_type = queries.get_type(move, attacker, defender, battle)
    ctx = HitContext(
        move=move,
        move_type=move_type,
        attacker=attacker,
        defender=defender,
        battle=battle,
    )
    power = ability_hook(attacker.ability).modify_power(power, ctx)
    defender_ability = defender.ability_for(attacker, move)
    power = ability_hook(defender_ability).modify_incoming_power(power, ctx)
    power = item_hook(attacker.held_item.get()).modify_power(power, ctx)

    effect = move.effect
    weather = battle.weather.get()
    if effect == 204 and weather in _WEATHER_BALL_WEATHERS:
        power *= 2
    elif effect == 152 and weather in (Weather.RAIN, Weather.HAIL):
        power = int(power * 0.5)
    elif effect == 170 and (
        attacker.status.burn()
        or attacker.status.poison()
        or attacker.status.paralysis()
    ):
        power *= 2
    elif effect == 172 and defender.status.paralysis():
        power *= 2
        defender.status.reset()

    if effect in (284, 461) and defender.status.poison():
        power *= 2
    if effect == 218 and defender.status.sleep():
        power *= 2
        defender.status.reset()
    if effect == 118 and attacker.defense_curl:
        power *= 2
    condition = _DOUBLING_CONDITIONS.get(effect)
    if condition is not None and condition(move, attacker, defender, battle):
        power *= 2

    if effect in (258, 262) and defender.dive:
        power *= 2
    if effect in (127, 148) and defender.dig:
        power *= 2
    if effect in (147, 150) and defender.fly:
        power *= 2
    if effect == 129 and queries.is_fleeing(defender):
        power *= 2

    chosen = queries.selected_move(attacker)
    if chosen is not None and chosen.effect == 242:
        power = int(power * 1.5)

    terrain = battle.terrain.get()
    attacker_grounded = is_grounded(attacker, battle)
    if effect == 435 and battle.gravity.active():
        power = int(power * 1.5)
    elif effect == 440 and terrain is Terrain.PSYCHIC and attacker_grounded:
        power = int(power * 1.5)
    elif effect == 441 and terrain is not Terrain.NONE and attacker_grounded:
        power *= 2
    elif (
        effect == 189
        and defender.held_item.has_item()
        and defender.held_item.can_remove()
    ):
        power = int(power * 1.5)
    elif (
        effect == 443
        and terrain is Terrain.ELECTRIC
        and is_grounded(defender, battle, attacker, move)
    ):
        power *= 2
    elif effect == 444 and terrain is Terrain.MISTY and attacker_grounded:
        power = int(power * 1.5)
    elif (
        effect == 482
        and get_effectiveness(defender, move_type, battle, attacker, move) > 1
    ):
        power = int(power * 4.0 / 3.0)
    elif effect == 490:
        power *= 1 + min(battle.side_of(attacker).num_fainted, 100)
    elif effect == 491:
        power *= 1 + min(attacker.num_hits, 6)
    elif effect == 498 and battle.rng.random() <= 0.3:
        power *= 2

    if attacker_grounded and (
        (terrain is Terrain.PSYCHIC and move_type is ElementType.PSYCHIC)
        or (terrain is Terrain.GRASSY and move_type is ElementType.GRASS)
        or (terrain is Terrain.ELECTRIC and move_type is ElementType.ELECTRIC)
    ):
        power = int(power * 1.3)
    defender_grounded = is_grounded(defender, battle, attacker, move)
    if terrain is Terrain.GRASSY and defender_grounded and move.id in (89, 222, 523):
        power = int(power * 0.5)
    if (
        terrain is Terrain.MISTY
        and defender_grounded
        and move_type is ElementType.DRAGON
    ):
        power = int(power * 0.5)

    if attacker.charge.active() and move_type is ElementType.ELECTRIC:
        power *= 2
    attacker_side = battle.side_of(attacker)
    defender_side = battle.side_of(defender)
    if move_type is ElementType.ELECTRIC and (
        attacker_side.mud_sport.active() or defender_side.mud_sport.active()
    ):
        power //= 3
    if move_type is ElementType.FIRE and (
        attacker_side.water_sport.active() or defender_side.water_sport.active()
    ):
        power //= 3
    return power
