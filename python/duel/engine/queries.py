"""Resolution-time queries about a move.

Everything here is recomputed from the move, both combatants and the field on
every call. Schedulers and AIs may call these before a move resolves; the move
engine calls them again while it resolves.
"""

from typing import TYPE_CHECKING, List, Optional

from python.duel.data.items import NATURAL_GIFT_TYPES, TYPE_SETTING_ITEMS
from python.duel.engine import classification
from python.duel.engine import field
from python.duel.engine import switching
from python.duel.engine.hooks import ability_hook
from python.duel.engine.stats import get_effectiveness, is_grounded
from python.duel.schema.enums import (
    HIDDEN_POWER_TYPES,
    DamageClass,
    ElementType,
    Gender,
    Stat,
    Terrain,
    Weather,
)

if TYPE_CHECKING:
    from python.duel.data.move import MoveInstance
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant

_WEATHER_BALL_TYPES = {
    Weather.HAIL: ElementType.ICE,
    Weather.SANDSTORM: ElementType.ROCK,
    Weather.SUN: ElementType.FIRE,
    Weather.HARSH_SUN: ElementType.FIRE,
    Weather.RAIN: ElementType.WATER,
    Weather.HEAVY_RAIN: ElementType.WATER,
}

_RAGING_BULL_TYPES = {
    "Tauros-paldea": ElementType.FIGHTING,
    "Tauros-aqua-paldea": ElementType.WATER,
    "Tauros-blaze-paldea": ElementType.FIRE,
}

_RAGING_BULL_ID = 873

# Effects that can never work in a single battle.
_DOUBLES_ONLY_EFFECTS = frozenset({173, 301, 308, 316, 363, 445, 494})

# Protection moves that get less reliable with consecutive use.
_STACKING_PROTECTION_EFFECTS = frozenset({112, 117, 356, 362, 384, 454, 488, 499})

# Effects that fail once the target has already acted this turn.
_MUST_MOVE_FIRST_EFFECTS = _STACKING_PROTECTION_EFFECTS | frozenset(
    {184, 195, 196, 279, 307, 345, 350, 354, 378}
)

_SWITCHING_MOVE_EFFECTS = frozenset({128, 154, 229, 347, 493})

_TERRAIN_SETTING_EFFECTS = {
    369: Terrain.ELECTRIC,
    352: Terrain.GRASSY,
    353: Terrain.MISTY,
    395: Terrain.PSYCHIC,
}


def hidden_power_type(poke: "Combatant") -> ElementType:
    """Hidden Power's type, from the combatant's own IVs."""
    ivs = poke.ivs
    index = 0
    for bit, key in enumerate(("hp", "atk", "def", "spe", "spa", "spd")):
        index += (ivs.get(key, 31) % 2) << bit
    return HIDDEN_POWER_TYPES[index * 15 // 63]


def get_type(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> ElementType:
    """The type `move` has when `attacker` uses it right now.

    Ability conversions apply first, then Ion Deluge, Plasma Fists and
    Electrify, then move-specific rules (Weather Ball, Hidden Power, Revelation
    Dance, Judgment, Natural Gift, Aura Wheel, Terrain Pulse, Raging Bull).
    """
    forced = ability_hook(attacker.ability).modify_type(move, attacker, battle)
    if forced is not None:
        return forced
    if move.type is ElementType.NORMAL and (
        attacker.ctx.ion_deluge or defender.ctx.ion_deluge or battle.plasma_fists
    ):
        return ElementType.ELECTRIC
    if attacker.ctx.electrify:
        return ElementType.ELECTRIC

    effect = move.effect
    if effect == 204:
        element = _WEATHER_BALL_TYPES.get(battle.weather.get())
        if element is not None:
            return element
    elif effect == 136:
        return hidden_power_type(attacker)
    elif effect == 401:
        return attacker.types[0] if attacker.types else ElementType.TYPELESS
    elif effect == 269:
        element = TYPE_SETTING_ITEMS.get(attacker.held_item.get())
        if element is not None:
            return element
    elif effect == 223:
        element = NATURAL_GIFT_TYPES.get(attacker.held_item.get())
        if element is not None:
            return element
    elif effect == 433 and attacker.species == "Morpeko-hangry":
        return ElementType.DARK
    elif effect == 441 and is_grounded(attacker, battle):
        element = field.mimicry_type(battle.terrain.get())
        if element is not None:
            return element

    if move.id == _RAGING_BULL_ID and attacker.species in _RAGING_BULL_TYPES:
        return _RAGING_BULL_TYPES[attacker.species]
    return move.type


def get_priority(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> int:
    priority = move.priority
    move_type = get_type(move, attacker, defender, battle)
    if (
        move.effect == 437
        and battle.terrain.get() is Terrain.GRASSY
        and is_grounded(attacker, battle)
    ):
        priority += 1
    return ability_hook(attacker.ability).modify_priority(
        priority, move, move_type, attacker
    )


def get_effect_chance(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> int:
    """Percent chance the move's secondary effect applies.

    Moves without an effect chance always apply their effect. Shield Dust,
    Covert Cloak and Sheer Force switch secondary effects off; Serene Grace
    doubles the chance.
    """
    if move.effect_chance is None:
        return 100
    if defender.ability_for(attacker, move) == "shielddust":
        return 0
    if defender.held_item.holds("covertcloak"):
        return 0
    if attacker.ability == "sheerforce":
        return 0
    if attacker.ability == "serenegrace":
        return min(100, move.effect_chance * 2)
    return move.effect_chance


def get_conversion2(
    attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> Optional[ElementType]:
    """A random type resisting the defender's last move, or None.

    Types the attacker already has are never chosen.
    """
    last_move = defender.ctx.last_move
    if last_move is None:
        return None
    move_type = get_type(last_move, attacker, defender, battle)
    candidates: List[ElementType] = []
    for element in ElementType:
        if element is ElementType.TYPELESS or element in attacker.types:
            continue
        value = battle.type_chart.get_effectiveness(move_type, element)
        resists = value > 1 if battle.inverse_battle else value < 1
        if resists:
            candidates.append(element)
    if not candidates:
        return None
    return battle.rng.choice(candidates)


def get_assist_move(poke: "Combatant", battle: "Battle") -> Optional["MoveInstance"]:
    """A random Assist-callable move known by another party member."""
    side = poke.side
    if side is None:
        return None
    moves = [
        move
        for idx, member in enumerate(side.party)
        if idx != side.last_idx
        for move in member.moves
        if classification.selectable_by_assist(move)
    ]
    if not moves:
        return None
    return battle.rng.choice(moves)


def selected_move(poke: "Combatant") -> Optional["MoveInstance"]:
    """The move `poke`'s side chose this turn, None when it is switching."""
    side = poke.side
    if side is None or side.selected_switch:
        return None
    return side.selected_action


def is_switching(poke: "Combatant") -> bool:
    side = poke.side
    return side is not None and side.selected_switch


def is_fleeing(defender: "Combatant") -> bool:
    """Whether `defender` is switching out this turn, by choice or by move."""
    if is_switching(defender):
        return True
    chosen = selected_move(defender)
    return chosen is not None and chosen.effect in _SWITCHING_MOVE_EFFECTS


def check_effective(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> bool:
    """Whether the move can affect the defender at all.

    Covers doubles-only moves, ability immunities (Soundproof, Bulletproof,
    Good as Gold, absorbing abilities, Wonder Guard), Prankster into dark
    types and type immunities.
    """
    effect = move.effect
    if effect in (86, 174, 368, 370, 371, 389):
        return False
    if not classification.targets_opponent(move):
        return True
    ability = defender.ability_for(attacker, move)
    if effect == 266 and ability == "oblivious":
        return False
    if effect == 39 and ability == "sturdy":
        return False
    if effect == 39 and move.id == 329 and ElementType.ICE in defender.types:
        return False
    if effect == 400 and not defender.status.has_status():
        return False
    if classification.is_sound_based(move) and ability == "soundproof":
        return False
    if classification.is_ball_or_bomb(move) and ability == "bulletproof":
        return False
    if attacker.ability == "prankster" and ElementType.DARK in defender.types:
        if move.damage_class is DamageClass.STATUS:
            return False
        chosen = selected_move(attacker)
        # Moves called by a status move count as status moves for Prankster.
        if chosen is not None and chosen.damage_class is DamageClass.STATUS:
            return False
    if ability == "goodasgold" and move.damage_class is DamageClass.STATUS:
        return False
    # Thunder Wave is the one status move that respects type immunities.
    if move.damage_class is DamageClass.STATUS and move.id != 86:
        return True

    move_type = get_type(move, attacker, defender, battle)
    if move_type is ElementType.TYPELESS:
        return True
    effectiveness = get_effectiveness(defender, move_type, battle, attacker, move)
    if effect == 338:
        effectiveness *= get_effectiveness(
            defender, ElementType.FLYING, battle, attacker, move
        )
    if effectiveness == 0:
        return False
    if (
        move_type is ElementType.GROUND
        and not is_grounded(defender, battle, attacker, move)
        and effect != 373
        and not battle.inverse_battle
    ):
        return False
    full_hp = defender.hp == defender.max_hp
    if effect != 459 and full_hp:
        if move_type is ElementType.ELECTRIC and ability == "voltabsorb":
            return False
        if move_type is ElementType.WATER and ability in ("waterabsorb", "dryskin"):
            return False
    if move_type is ElementType.FIRE and ability == "flashfire" and defender.flash_fire:
        return False
    if effectiveness <= 1 and ability == "wonderguard":
        return False
    return True


def check_executable(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> bool:
    """Whether the move can be executed at all this turn.

    A False result makes the move fail with "But it failed!" after PP was
    spent. Checks the attacker's own restrictions (Taunt, Heal Block, Disable,
    Imprison, Gravity) and every effect-specific precondition.
    """
    effect = move.effect
    defender_ability = defender.ability_for(attacker, move)
    move_type = get_type(move, attacker, defender, battle)
    weather = battle.weather.get()
    terrain = battle.terrain.get()
    side = battle.side_of(attacker)
    other_side = battle.side_of(defender)
    target_last = defender.ctx.last_move

    if attacker.taunt.active() and move.damage_class is DamageClass.STATUS:
        return False
    if attacker.silenced.active() and classification.is_sound_based(move):
        return False
    if classification.is_affected_by_heal_block(move) and attacker.heal_block.active():
        return False
    if classification.is_powder_or_spore(move) and (
        ElementType.GRASS in defender.types
        or defender_ability == "overcoat"
        or defender.held_item.holds("safetygoggles")
    ):
        return False
    if move.damage_class.is_damaging:
        if weather is Weather.HARSH_SUN and move_type is ElementType.WATER:
            return False
        if weather is Weather.HEAVY_RAIN and move_type is ElementType.FIRE:
            return False
    if attacker.disable.active() and attacker.disable.item is move:
        return False
    if (
        attacker is not defender
        and defender.imprison
        and any(known.id == move.id for known in defender.moves)
    ):
        return False
    if effect in _DOUBLES_ONLY_EFFECTS:
        return False

    if effect in (93, 98) and not attacker.asleep():
        return False
    if effect in (9, 108) and not defender.asleep():
        return False
    if effect == 364 and not defender.status.poison():
        return False
    if effect in (162, 163) and attacker.stockpile == 0:
        return False
    if effect == 85 and (ElementType.GRASS in defender.types or defender.leech_seed):
        return False
    if effect == 193 and attacker.imprison:
        return False
    if effect == 166 and defender.torment:
        return False
    no_last_move = target_last is None or target_last.pp == 0
    if effect == 91 and (defender.encore.active() or no_last_move):
        return False
    if effect == 87 and (defender.disable.active() or no_last_move):
        return False
    if effect in (96, 101) and no_last_move:
        return False
    if effect == 176 and defender.taunt.active():
        return False
    if effect == 29 and not switching.valid_swaps(
        other_side, battle, attacker, check_trap=False
    ):
        return False
    if effect in (128, 154, 493) and not switching.valid_swaps(
        side, battle, defender, check_trap=False
    ):
        return False
    if effect == 161 and attacker.stockpile >= 3:
        return False

    taken = attacker.ctx.last_move_damage
    if effect in (90, 145, 228, 408) and taken is None:
        return False
    if effect == 145 and taken[1] is not DamageClass.SPECIAL:
        return False
    if effect in (90, 408) and taken[1] is not DamageClass.PHYSICAL:
        return False

    if effect in (10, 243) and (
        target_last is None or not classification.selectable_by_mirror_move(target_last)
    ):
        return False
    if effect == 83 and (
        target_last is None or not classification.selectable_by_mimic(target_last)
    ):
        return False
    if effect == 180 and side.wish.active():
        return False
    if effect == 388 and defender.stages[Stat.ATK] == -6:
        return False
    if effect in (143, 485, 493) and attacker.hp <= attacker.max_hp // 2:
        return False
    if effect == 414 and attacker.hp < attacker.max_hp // 3:
        return False
    if effect == 80 and attacker.hp <= attacker.max_hp // 4:
        return False
    if effect == 48 and attacker.focus_energy:
        return False
    if effect == 190 and attacker.hp >= defender.hp:
        return False
    if effect == 194 and not (
        attacker.status.burn()
        or attacker.status.paralysis()
        or attacker.status.poison()
    ):
        return False
    if effect == 235 and (
        not attacker.status.has_status() or defender.status.has_status()
    ):
        return False
    if effect in (121, 266) and (
        Gender.GENDERLESS in (attacker.gender, defender.gender)
        or attacker.gender is defender.gender
        or defender_ability == "oblivious"
    ):
        return False
    if effect in (367, 392) and attacker.ability not in ("plus", "minus"):
        return False
    if effect == 39 and attacker.level < defender.level:
        return False
    if effect in (46, 86, 156, 264, 286) and battle.gravity.active():
        return False
    if effect == 113 and other_side.spikes == 3:
        return False
    if effect == 250 and other_side.toxic_spikes == 2:
        return False
    if effect in (159, 377, 383) and attacker.active_turns != 0:
        return False
    if effect == 98 and not any(
        classification.selectable_by_sleep_talk(known) for known in attacker.moves
    ):
        return False
    if effect == 407 and (weather is not Weather.HAIL or side.aurora_veil.active()):
        return False
    if effect == 47 and side.mist.active():
        return False
    if effect in (80, 493) and attacker.substitute > 0:
        return False
    if effect == 398 and ElementType.FIRE not in attacker.types:
        return False
    if effect == 481 and ElementType.ELECTRIC not in attacker.types:
        return False
    if effect == 376 and ElementType.GRASS in defender.types:
        return False
    if effect == 343 and ElementType.GHOST in defender.types:
        return False
    if effect == 107 and defender.trapping:
        return False
    if effect == 182 and attacker.ingrain:
        return False
    if effect == 94 and get_conversion2(attacker, defender, battle) is None:
        return False
    if effect == 121 and defender.infatuated is attacker:
        return False
    if effect == 248 and defender_ability == "insomnia":
        return False
    if effect in (242, 249) and (
        defender.has_moved
        or is_switching(defender)
        or (
            selected_move(defender) is not None
            and selected_move(defender).damage_class is DamageClass.STATUS
        )
    ):
        return False
    if effect == 252 and attacker.aqua_ring:
        return False
    if effect == 253 and attacker.magnet_rise.active():
        return False
    if effect == 221 and side.healing_wish:
        return False
    if effect == 271 and side.lunar_dance:
        return False
    if effect in (240, 248, 299, 300) and not defender.ability_changeable():
        return False
    if effect == 300 and not attacker.ability_giveable():
        return False
    if effect == 241 and attacker.lucky_chant.active():
        return False
    if effect == 125 and side.safeguard.active():
        return False
    if effect == 293 and not set(attacker.types) & set(defender.types):
        return False
    if effect == 295 and defender_ability == "multitype":
        return False
    if effect == 319 and not defender.types:
        return False
    if effect == 171 and taken is not None:
        return False
    if effect == 179 and not (
        attacker.ability_changeable() and defender.ability_giveable()
    ):
        return False
    if effect == 181 and not any(
        classification.selectable_by_assist(known)
        for idx, member in enumerate(side.party)
        if idx != side.last_idx
        for known in member.moves
    ):
        return False
    if effect in _MUST_MOVE_FIRST_EFFECTS and defender.has_moved:
        return False
    if effect == 192 and not (
        attacker.ability_changeable()
        and attacker.ability_giveable()
        and defender.ability_changeable()
        and defender.ability_giveable()
    ):
        return False
    if effect == 226 and side.tailwind.active():
        return False
    if effect in (90, 92, 145) and attacker.substitute > 0:
        return False
    if effect in (85, 92, 169, 178, 188, 206, 388) and defender.substitute > 0:
        return False
    if effect == 234 and (
        attacker.held_item.fling_power is None or attacker.ability == "stickyhold"
    ):
        return False
    if effect == 178 and (
        attacker.ability == "stickyhold"
        or defender_ability == "stickyhold"
        or not attacker.held_item.can_remove()
        or not defender.held_item.can_remove()
    ):
        return False
    if effect == 202 and side.mud_sport.active():
        return False
    if effect == 211 and side.water_sport.active():
        return False
    if effect == 149 and other_side.future_sight.active():
        return False
    if effect == 188 and (
        defender.status.has_status()
        or defender_ability in ("insomnia", "vitalspirit", "sweetveil")
        or defender.yawn.active()
        or (terrain is Terrain.ELECTRIC and is_grounded(attacker, battle))
    ):
        return False
    if effect in (340, 351) and not any(
        ElementType.GRASS in poke.types
        and is_grounded(poke, battle)
        and not poke.semi_invulnerable()
        for poke in (attacker, defender)
    ):
        return False
    if effect == 341 and other_side.sticky_web:
        return False
    if (
        effect in _STACKING_PROTECTION_EFFECTS
        and battle.rng.randint(1, attacker.protection_chance) != 1
    ):
        return False
    if effect == 403 and (
        no_last_move
        or not classification.selectable_by_instruct(target_last)
        or defender.locked_move is not None
    ):
        return False
    if effect == 378 and (
        ElementType.GRASS in defender.types
        or defender_ability == "overcoat"
        or defender.held_item.holds("safetygoggles")
    ):
        return False
    if effect == 233 and defender.embargo.active():
        return False
    if effect == 324 and (
        not attacker.held_item.has_item()
        or defender.held_item.has_item()
        or not attacker.held_item.can_remove()
    ):
        return False
    if effect == 185 and (
        attacker.held_item.has_item() or attacker.held_item.last_used is None
    ):
        return False
    if effect == 430 and (
        not defender.held_item.has_item()
        or not defender.held_item.can_remove()
        or defender.corrosive_gas
    ):
        return False
    if effect == 114 and defender.foresight:
        return False
    if effect == 217 and defender.miracle_eye:
        return False
    if effect == 38 and (
        attacker.status.sleep()
        or attacker.hp == attacker.max_hp
        or attacker.species == "Minior"
    ):
        return False
    if effect == 427 and attacker.no_retreat:
        return False
    if effect == 99 and attacker.destiny_bond_cooldown.active():
        return False
    if effect in (116, 137, 138, 165) and weather.is_primal:
        return False
    if effect in (8, 420, 444) and "damp" in (attacker.ability, defender_ability):
        return False
    if effect in (223, 453) and not attacker.held_item.is_berry():
        return False
    if (
        effect in _TERRAIN_SETTING_EFFECTS
        and terrain is _TERRAIN_SETTING_EFFECTS[effect]
    ):
        return False
    if effect == 66 and side.reflect.active():
        return False
    if effect == 36 and side.light_screen.active():
        return False
    if effect == 110 and ElementType.GHOST in attacker.types and defender.curse:
        return False
    if effect == 58 and defender.substitute > 0:
        return False
    if effect == 446 and defender.held_item.get() is None:
        return False
    if effect == 448 and terrain is Terrain.NONE:
        return False
    if effect == 452 and defender.octolock:
        return False
    if effect == 280 and any(
        stat in poke.stat_splits
        for poke in (attacker, defender)
        for stat in (Stat.DEF, Stat.SPD)
    ):
        return False
    if effect == 281 and any(
        stat in poke.stat_splits
        for poke in (attacker, defender)
        for stat in (Stat.ATK, Stat.SPA)
    ):
        return False
    if effect == 456 and (
        defender.types == [ElementType.PSYCHIC] or defender_ability == "rkssystem"
    ):
        return False
    if effect == 83 and move not in attacker.moves:
        return False
    if effect == 501:
        chosen = selected_move(defender)
        if (
            defender.has_moved
            or chosen is None
            or get_priority(chosen, defender, attacker, battle) <= 0
        ):
            return False
    if (
        defender_ability in ("queenlymajesty", "dazzling", "armortail")
        and get_priority(move, attacker, defender, battle) > 0
    ):
        return False
    return True


def setup(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant", battle: "Battle"
) -> bool:
    """Prepare a move chosen this turn before anyone acts.

    Raises Beak Blast's burning heat, and reports whether the move is Pursuit
    catching a fleeing target. The turn driver announces "{name} is focusing on
    its attack!" for Focus Punch itself via `setup_message`.

    Returns:
        True if Pursuit should resolve immediately, before the target leaves
    """
    if move.effect == 404:
        attacker.ctx.beak_blast = True
    return move.effect == 129 and is_fleeing(defender)


def setup_message(move: "MoveInstance", attacker: "Combatant") -> str:
    if move.effect == 171:
        return f"{attacker.name} is focusing on its attack!\n"
    return ""
