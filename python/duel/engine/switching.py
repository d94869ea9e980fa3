"""Leaving and entering the field: removal, send-out, entry hazards and abilities."""

from typing import TYPE_CHECKING, List, Optional

from absl import logging

from python.duel.data.items import MEMORIES, PLATES
from python.duel.engine import field
from python.duel.engine import hp
from python.duel.engine import stat_stages
from python.duel.engine import status as status_effects
from python.duel.engine.stats import (
    get_defense,
    get_effectiveness,
    get_spdef,
    is_grounded,
)
from python.duel.schema.enums import (
    DamageClass,
    ElementType,
    Stat,
    Status,
    Terrain,
    Weather,
)
from python.duel.schema.side_state import BatonPassState

if TYPE_CHECKING:
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant
    from python.duel.schema.side_state import Side

_WEATHER_ABILITIES = {
    "drizzle": Weather.RAIN,
    "primordialsea": Weather.HEAVY_RAIN,
    "sandstream": Weather.SANDSTORM,
    "snowwarning": Weather.HAIL,
    "drought": Weather.SUN,
    "orichalcumpulse": Weather.SUN,
    "desolateland": Weather.HARSH_SUN,
    "deltastream": Weather.STRONG_WINDS,
}

_TERRAIN_ABILITIES = {
    "grassysurge": Terrain.GRASSY,
    "mistysurge": Terrain.MISTY,
    "electricsurge": Terrain.ELECTRIC,
    "hadronengine": Terrain.ELECTRIC,
    "psychicsurge": Terrain.PSYCHIC,
}

_ANNOUNCEMENTS = {
    "moldbreaker": "breaks the mold",
    "turboblaze": "is radiating a blazing aura",
    "teravolt": "is radiating a bursting aura",
}

# Abilities that shrug off Intimidate, with their message template.
_INTIMIDATE_IMMUNITIES = {
    "oblivious": "{name} is too oblivious to be intimidated!\n",
    "owntempo": "{name} keeps walking on its own tempo, and is not intimidated!\n",
    "innerfocus": "{name} is too focused to be intimidated!\n",
    "scrappy": "{name} is too scrappy to be intimidated!\n",
}


def valid_swaps(
    side: "Side",
    battle: "Battle",
    defender: Optional["Combatant"] = None,
    check_trap: bool = True,
) -> List[int]:
    """Party slots the side could switch into right now.

    Args:
        side: Side that wants to switch
        battle: Battle the switch happens in
        defender: The opposing active combatant, for trapping abilities
        check_trap: Whether trapping effects can prevent the switch

    Returns:
        Alive party indices other than the active slot, empty when trapped
    """
    current = side.current
    if current is not None:
        if ElementType.GHOST in current.types or current.held_item.holds("shedshell"):
            check_trap = False
        if check_trap and _is_trapped(current, battle, defender):
            return []
    return [idx for idx in side.alive_indices() if idx != side.last_idx]


def _is_trapped(
    current: "Combatant", battle: "Battle", defender: Optional["Combatant"]
) -> bool:
    if current.trapping or current.ingrain or current.no_retreat:
        return True
    if current.fairy_lock.active():
        return True
    if current.bind.active() and current.substitute == 0:
        return True
    if defender is None:
        return False
    if defender.fairy_lock.active():
        return True
    if defender.ability == "shadowtag" and current.ability != "shadowtag":
        return True
    if defender.ability == "magnetpull" and ElementType.STEEL in current.types:
        return True
    return defender.ability == "arenatrap" and is_grounded(current, battle)


def remove(poke: "Combatant", battle: "Battle", fainted: bool = False) -> str:
    """Take `poke` off the field and clear its volatile state.

    Natural Cure, Regenerator and Zero to Hero trigger unless it fainted.
    """
    msg = ""
    if not fainted:
        if poke.ability == "naturalcure" and poke.status.has_status():
            msg += (
                f"{poke.name}'s {poke.status.current.display_name} was cured "
                "by its natural cure!\n"
            )
            poke.status.reset()
        if poke.ability == "regenerator":
            msg += hp.heal(poke, poke.max_hp // 3, "its regenerator")
        if poke.ability == "zerotohero" and poke.species == "Palafin":
            poke.starting_species = "Palafin-hero"
            msg += f"{poke.name} is ready to be a hero!\n"
    side = poke.side
    if side is not None and side.current is poke:
        side.current = None
    poke.reset_volatile()
    if battle.weather.recheck_primal():
        msg += "The weather cleared!\n"
    logging.debug("%s left the field", poke.name)
    return msg


def send_out(poke: "Combatant", battle: "Battle") -> str:
    """Bring `poke` onto the field as its side's active combatant.

    Applies Baton Pass, Shed Tail, entry hazards, entry abilities, Healing
    Wish, Lunar Dance and the terrain seeds, in that order. The caller is
    responsible for making `poke` the side's current combatant first.
    """
    side = poke.side
    other = battle.opponent_of(poke)
    poke.ever_sent_out = True
    poke.ctx.flinched = False
    msg = f"{side.name} sent out {poke.name}!\n"

    if other is not None:
        other.trapping = False
        other.octolock = False
        other.bind.set_turns(0)

    if side.baton_pass is not None:
        msg += f"{poke.name} carries on the baton!\n"
        side.baton_pass.apply(poke)
        side.baton_pass = None
    if side.next_substitute > 0:
        poke.substitute = side.next_substitute
        side.next_substitute = 0

    msg += apply_entry_hazards(poke, battle)
    if poke.hp > 0:
        msg += send_out_ability(poke, other, battle)

    if side.healing_wish and _restore(poke, restore_pp=False):
        side.healing_wish = False
        msg += f"{poke.name} was restored by healing wish!\n"
    if side.lunar_dance and _restore(poke, restore_pp=True):
        side.lunar_dance = False
        msg += f"{poke.name} was restored by lunar dance\n"

    if poke.held_item.holds("airballoon") and not is_grounded(poke, battle):
        msg += f"{poke.name} floats in the air with its air balloon!\n"
    msg += field.apply_terrain_seed(poke, battle)
    return msg


def _restore(poke: "Combatant", restore_pp: bool) -> bool:
    used = False
    if poke.hp != poke.max_hp:
        used = True
        poke.hp = poke.max_hp
    if poke.status.has_status():
        used = True
        poke.status.reset()
    if restore_pp:
        for move in poke.moves:
            if move.pp != move.starting_pp:
                used = True
                move.pp = move.starting_pp
    return used


def apply_entry_hazards(poke: "Combatant", battle: "Battle") -> str:
    """Spikes, Toxic Spikes, Sticky Web and Stealth Rock on the entering combatant."""
    side = poke.side
    msg = ""
    grounded = is_grounded(poke, battle)
    if side.toxic_spikes > 0 and grounded and ElementType.POISON in poke.types:
        side.toxic_spikes = 0
        msg += f"{poke.name} absorbed the toxic spikes!\n"
    if poke.held_item.holds("heavydutyboots"):
        return msg
    if grounded:
        if side.spikes > 0:
            msg += hp.damage(
                poke, poke.max_hp // (10 - 2 * side.spikes), battle, source="spikes"
            )
        if side.toxic_spikes == 1:
            msg += status_effects.apply_status(
                poke, Status.POISON, battle, source="toxic spikes"
            )
        elif side.toxic_spikes == 2:
            msg += status_effects.apply_status(
                poke, Status.TOXIC, battle, source="toxic spikes"
            )
        if side.sticky_web:
            msg += stat_stages.append_stat(
                poke, Stat.SPE, -1, battle, source="the sticky web"
            )
    if side.stealth_rock:
        effectiveness = get_effectiveness(poke, ElementType.ROCK, battle)
        if effectiveness > 0:
            amount = poke.max_hp // (32 // max(1, int(4 * effectiveness)))
            msg += hp.damage(poke, amount, battle, source="stealth rock")
    return msg


def send_out_ability(
    poke: "Combatant", other: Optional["Combatant"], battle: "Battle"
) -> str:
    """Run the entry effect of `poke`'s ability.

    Also used when a combatant gains a new ability mid-battle (Trace, Mummy,
    Skill Swap).
    """
    msg = ""
    ability = poke.ability

    if ability == "imposter" and other is not None and other.substitute == 0:
        msg += f"{poke.name} transformed into {other.species}!\n"
        poke.transform_into(other)
        ability = poke.ability

    if ability in _WEATHER_ABILITIES:
        msg += field.set_weather(battle, _WEATHER_ABILITIES[ability], poke)
    if ability in _TERRAIN_ABILITIES:
        msg += field.set_terrain(battle, _TERRAIN_ABILITIES[ability], poke)
    if ability in _ANNOUNCEMENTS:
        msg += f"{poke.name} {_ANNOUNCEMENTS[ability]}!\n"

    if ability == "intimidate" and other is not None:
        msg += _intimidate(poke, other, battle)

    if ability == "screencleaner":
        for side in battle.sides:
            side.aurora_veil.set_turns(0)
            side.light_screen.set_turns(0)
            side.reflect.set_turns(0)
        msg += (
            f"{poke.name}'s screen cleaner removed barriers from both sides "
            "of the field!\n"
        )
    if ability == "intrepidsword":
        msg += stat_stages.append_stat(
            poke, Stat.ATK, 1, battle, poke, source="its intrepid sword"
        )
    if ability == "dauntlessshield":
        msg += stat_stages.append_stat(
            poke, Stat.DEF, 1, battle, poke, source="its dauntless shield"
        )
    if ability == "trace" and other is not None and other.ability_giveable():
        poke.ability = other.ability
        msg += f"{poke.name} traced {other.name}'s ability!\n"
        msg += send_out_ability(poke, other, battle)
        return msg
    if ability == "download" and other is not None:
        if get_spdef(other, battle) > get_defense(other, battle):
            msg += stat_stages.append_stat(
                poke, Stat.ATK, 1, battle, poke, source="its download"
            )
        else:
            msg += stat_stages.append_stat(
                poke, Stat.SPA, 1, battle, poke, source="its download"
            )
    if ability == "anticipation" and other is not None:
        for move in other.moves:
            if move.effect == 39 or get_effectiveness(poke, move.type, battle) > 1:
                msg += f"{poke.name} shuddered in anticipation!\n"
                break
    if ability == "forewarn" and other is not None:
        msg += _forewarn(poke, other, battle)
    if ability == "frisk" and other is not None and other.held_item.has_item():
        msg += (
            f"{poke.name} senses that {other.name} is holding a "
            f"{other.held_item.name} using its frisk!\n"
        )
    if ability == "multitype" and poke.species.startswith("Arceus"):
        element = PLATES.get(poke.held_item.get())
        if element is not None:
            poke.species = f"Arceus-{element.value}"
            poke.types = [element]
            msg += (
                f"{poke.name} transformed into a {element.value} type "
                "using its multitype!\n"
            )
    if ability == "rkssystem" and poke.species.startswith("Silvally"):
        element = MEMORIES.get(poke.held_item.get())
        if element is not None:
            poke.species = f"Silvally-{element.value}"
            poke.types = [element]
            msg += (
                f"{poke.name} transformed into a {element.value} type "
                "using its rks system!\n"
            )
    if ability == "truant":
        poke.truant_turn = 0
    if ability == "forecast":
        msg += field.apply_forecast(poke, battle.weather.get())
    if ability == "mimicry":
        element = field.mimicry_type(battle.terrain.get())
        if element is not None:
            poke.types = [element]
            msg += (
                f"{poke.name} transformed into a {element.value} type "
                "using its mimicry!\n"
            )
    if ability == "windrider" and poke.side is not None and poke.side.tailwind.active():
        msg += stat_stages.append_stat(
            poke, Stat.ATK, 1, battle, poke, source="its wind rider"
        )
    if ability == "supersweetsyrup" and other is not None:
        msg += stat_stages.append_stat(
            other,
            Stat.EVASION,
            -1,
            battle,
            poke,
            source=f"{poke.name}'s supersweet syrup",
        )
    return msg


def _intimidate(poke: "Combatant", other: "Combatant", battle: "Battle") -> str:
    immunity = _INTIMIDATE_IMMUNITIES.get(other.ability)
    if immunity is not None:
        return immunity.format(name=other.name)
    if other.ability == "guarddog":
        msg = f"{other.name}'s guard dog keeps it from being intimidated!\n"
        return msg + stat_stages.append_stat(
            other, Stat.ATK, 1, battle, other, source="its guard dog"
        )
    msg = stat_stages.append_stat(
        other, Stat.ATK, -1, battle, poke, source=f"{poke.name}'s Intimidate"
    )
    if other.held_item.holds("adrenalineorb"):
        msg += stat_stages.append_stat(
            other, Stat.SPE, 1, battle, other, source="its adrenaline orb"
        )
    if other.ability == "rattled":
        msg += stat_stages.append_stat(
            other, Stat.SPE, 1, battle, other, source="its rattled"
        )
    return msg


def _forewarn(poke: "Combatant", other: "Combatant", battle: "Battle") -> str:
    best_moves = []
    best_power = 0
    for move in other.moves:
        if move.damage_class is DamageClass.STATUS:
            power = 0
        elif move.effect == 39:
            power = 150
        elif move.power is None:
            power = 80
        else:
            power = move.power
        if power > best_power:
            best_power = power
            best_moves = [move]
        elif power == best_power:
            best_moves.append(move)
    if not best_moves:
        return ""
    move = battle.rng.choice(best_moves)
    return f"{poke.name} is forewarned about {other.name}'s {move.pretty_name}!\n"


def switch_out(
    poke: "Combatant",
    battle: "Battle",
    slot: Optional[int] = None,
    baton_pass: bool = False,
) -> str:
    """Replace the active `poke` with a party member mid-turn.

    Args:
        poke: Active combatant leaving the field
        battle: Battle the switch happens in
        slot: Party index to bring in, a random valid one when omitted
        baton_pass: Hand stages and volatile effects to the replacement

    Returns:
        Transcript of the removal and the send-out, empty when nobody can
        replace `poke`
    """
    side = poke.side
    swaps = valid_swaps(side, battle, check_trap=False)
    if not swaps:
        return ""
    if slot is None or slot not in swaps:
        slot = battle.rng.choice(swaps)
    if baton_pass:
        side.baton_pass = BatonPassState.capture(poke)
    msg = remove(poke, battle)
    side.switch_in(slot, mid_turn=True)
    msg += send_out(side.current, battle)
    return msg
