"""HP changes: taking damage, healing and fainting.

Everything that reacts to a combatant losing HP runs from here: substitutes,
endure-style survival, drain, on-faint abilities, on-hit abilities, berries
and contact punishments.
"""

from typing import TYPE_CHECKING, Any, Optional, Tuple

from absl import logging

from python.duel.engine import berries
from python.duel.engine import classification
from python.duel.engine import field
from python.duel.engine import stat_stages
from python.duel.engine import status as status_effects
from python.duel.engine import switching
from python.duel.schema.enums import (
    DamageClass,
    ElementType,
    Stat,
    Status,
    Terrain,
    Weather,
)

if TYPE_CHECKING:
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant

# Abilities whose holder boosts a stat after knocking something out.
_KO_BOOSTS = {
    "chillingneigh": (Stat.ATK, "its chilling neigh"),
    "asoneice": (Stat.ATK, "its chilling neigh"),
    "grimneigh": (Stat.SPA, "its grim neigh"),
    "asoneshadow": (Stat.SPA, "its grim neigh"),
}

# Contact abilities with a 30% chance to inflict a status on the attacker.
_CONTACT_STATUS = {
    "static": (Status.PARALYSIS, "static"),
    "poisonpoint": (Status.POISON, "poison point"),
    "flamebody": (Status.BURN, "flame body"),
}

_EFFECT_SPORE_STATUSES = (Status.PARALYSIS, Status.POISON, Status.SLEEP)


def _chance(battle: "Battle", percent: int) -> bool:
    return battle.rng.randint(1, 100) <= percent


def _side_has_alive(poke: "Combatant") -> bool:
    return poke.side is not None and poke.side.has_alive()


def heal(poke: "Combatant", amount: int, source: str = "") -> str:
    """Restore HP, never past max HP.

    Fainted combatants, combatants at full HP and combatants under Heal Block
    are not healed.

    Returns:
        Transcript, empty when nothing was healed
    """
    amount = max(1, amount)
    if poke.hp >= poke.max_hp or poke.hp == 0:
        return ""
    if poke.heal_block.active():
        return ""
    amount = min(poke.max_hp - poke.hp, amount)
    poke.hp += amount
    suffix = f" from {source}" if source else ""
    return f"{poke.name} healed {amount} hp{suffix}!\n"


def faint(
    poke: "Combatant",
    battle: "Battle",
    move: Any = None,
    attacker: Optional["Combatant"] = None,
    source: str = "",
) -> str:
    """Knock `poke` out and run everything that reacts to it fainting."""
    poke.hp = 0
    suffix = f" from {source}" if source else ""
    msg = f"{poke.name} fainted{suffix}!\n"
    logging.debug("%s fainted", poke.name)
    if (
        move is not None
        and attacker is not None
        and poke.destiny_bond
        and _side_has_alive(poke)
    ):
        msg += faint(attacker, battle, source=f"{poke.name}'s destiny bond")
    if (
        move is not None
        and attacker is not None
        and attacker.species == "Greninja"
        and attacker.ability == "battlebond"
    ):
        attacker.species = "Greninja-ash"
        msg += f"{attacker.name}'s bond with its trainer has strengthened it!\n"
    if move is not None and poke.ctx.grudge:
        move.pp = 0
        msg += f"{move.pretty_name}'s pp was depleted!\n"
    if attacker is not None and attacker.ability in _KO_BOOSTS:
        stat, boost_source = _KO_BOOSTS[attacker.ability]
        msg += stat_stages.append_stat(
            attacker, stat, 1, battle, attacker, source=boost_source
        )
    for other in battle.active_combatants():
        if other is not poke and other.ability == "soulheart":
            msg += stat_stages.append_stat(
                other, Stat.SPA, 1, battle, other, source="its soul heart"
            )
    if poke.side is not None:
        poke.side.retaliate.set_turns(2)
        poke.side.num_fainted += 1
    msg += switching.remove(poke, battle, fainted=True)
    return msg


def damage(
    poke: "Combatant",
    amount: int,
    battle: "Battle",
    move: Any = None,
    move_type: Optional[ElementType] = None,
    attacker: Optional["Combatant"] = None,
    critical: bool = False,
    drain_ratio: Optional[float] = None,
    source: str = "",
) -> str:
    """Deal damage and return only the transcript. See `damage_from_move`."""
    msg, _ = damage_from_move(
        poke, amount, battle, move, move_type, attacker, critical, drain_ratio, source
    )
    return msg


def damage_from_move(
    poke: "Combatant",
    amount: int,
    battle: "Battle",
    move: Any = None,
    move_type: Optional[ElementType] = None,
    attacker: Optional["Combatant"] = None,
    critical: bool = False,
    drain_ratio: Optional[float] = None,
    source: str = "",
) -> Tuple[str, int]:
    """Deal `amount` damage to `poke`.

    Args:
        poke: Combatant taking the damage
        amount: Damage before survival effects, raised to at least 1
        battle: Battle the damage happens in
        move: Move dealing the damage, None for indirect damage
        move_type: Effective type of `move`
        attacker: Combatant dealing the damage
        critical: Whether the hit was critical, for Anger Point
        drain_ratio: Share of the HP removed that the attacker recovers
        source: Cause appended to the message as " from {source}"

    Returns:
        Transcript and the HP actually removed. A substitute taking the hit
        reports what the substitute lost.
    """
    if poke.hp <= 0:
        return "", 0
    previous_hp = poke.hp
    amount = max(1, amount)
    suffix = f" from {source}" if source else ""

    if (
        poke.ability_for(attacker, move) == "magicguard"
        and move is None
        and attacker is not poke
    ):
        return f"{poke.name}'s magic guard protected it from damage!\n", 0

    if (
        poke.substitute > 0
        and move is not None
        and classification.is_affected_by_substitute(move)
        and not classification.is_sound_based(move)
        and (attacker is None or attacker.ability != "infiltrator")
    ):
        msg = f"{poke.name}'s substitute took {amount} damage{suffix}!\n"
        left = max(0, poke.substitute - amount)
        absorbed = poke.substitute - left
        poke.substitute = left
        if left == 0:
            msg += f"{poke.name}'s substitute broke!\n"
        return msg, absorbed

    msg = ""
    if move is not None:
        ability = poke.ability_for(attacker, move)
        if ability == "disguise" and poke.species == "Mimikyu":
            poke.species = "Mimikyu-busted"
            msg += f"{poke.name}'s disguise was busted!\n"
            msg += damage(poke, poke.max_hp // 8, battle, source="losing its disguise")
            return msg, 0
        if (
            ability == "iceface"
            and poke.species == "Eiscue"
            and move.damage_class is DamageClass.PHYSICAL
        ):
            poke.species = "Eiscue-noice"
            return msg + f"{poke.name}'s ice face was busted!\n", 0

    poke.ctx.damaged_this_turn = True
    if amount >= poke.hp and move is not None:
        if poke.ctx.endure:
            msg += f"{poke.name} endured the hit!\n"
            amount = poke.hp - 1
        elif poke.hp == poke.max_hp and poke.ability_for(attacker, move) == "sturdy":
            msg += f"{poke.name} endured the hit with its Sturdy!\n"
            amount = poke.hp - 1
        elif poke.hp == poke.max_hp and poke.held_item.holds("focussash"):
            msg += f"{poke.name} held on using its focus sash!\n"
            amount = poke.hp - 1
            poke.held_item.use()
        elif poke.held_item.holds("focusband") and battle.rng.randrange(10) == 0:
            msg += f"{poke.name} held on using its focus band!\n"
            amount = poke.hp - 1

    above_half = poke.hp > poke.max_hp // 2
    new_hp = max(0, poke.hp - amount)
    true_damage = poke.hp - new_hp
    poke.hp = new_hp
    dropped_below_half = above_half and poke.hp <= poke.max_hp // 2
    msg += f"{poke.name} took {amount} damage{suffix}!\n"
    poke.num_hits += 1
    logging.debug(
        "%s took %d damage (%d/%d)", poke.name, true_damage, poke.hp, poke.max_hp
    )

    if drain_ratio is not None and attacker is not None:
        drained = int(true_damage * drain_ratio)
        if attacker.held_item.holds("bigroot"):
            drained = int(drained * 1.3)
        if poke.ability == "liquidooze":
            msg += damage(
                attacker, drained, battle, source=f"{poke.name}'s liquid ooze"
            )
        elif not attacker.heal_block.active():
            msg += heal(attacker, drained, source)

    if poke.hp == 0:
        msg += faint(poke, battle, move, attacker)
        msg += _on_knockout(poke, battle, move, attacker, previous_hp)
    elif move is not None and move_type is not None:
        msg += _on_hit(
            poke, battle, move, move_type, attacker, critical, dropped_below_half
        )

    if move is not None:
        poke.ctx.last_move_damage = (max(1, amount), move.damage_class)
        if poke.bide is not None:
            poke.bide += amount
        if poke.ctx.rage:
            msg += stat_stages.append_stat(
                poke, Stat.ATK, 1, battle, poke, source="its rage"
            )
        if attacker is not None:
            msg += _attacker_after_hit(poke, battle, move, attacker, amount)

    if (
        dropped_below_half
        and poke.hp > 0
        and poke.side is not None
        and len(poke.side.alive_indices()) > 1
    ):
        if poke.ability == "wimpout":
            msg += f"{poke.name} wimped out and retreated!\n"
            msg += switching.remove(poke, battle)
        elif poke.ability == "emergencyexit":
            msg += f"{poke.name} used the emergency exit and retreated!\n"
            msg += switching.remove(poke, battle)

    if attacker is not None and poke.species in (
        "Cramorant-gulping",
        "Cramorant-gorging",
    ):
        if _side_has_alive(poke):
            msg += _spit_out_prey(poke, battle, attacker)

    if berries.should_eat_for_damage(poke, attacker):
        msg += berries.eat_berry(poke, battle, attacker=attacker, move=move)

    if (
        move is not None
        and attacker is not None
        and classification.makes_contact(move, attacker)
    ):
        msg += _on_contact(poke, battle, move, attacker)
    return msg, true_damage


def _on_knockout(
    poke: "Combatant",
    battle: "Battle",
    move: Any,
    attacker: Optional["Combatant"],
    previous_hp: int,
) -> str:
    msg = ""
    if attacker is None:
        return msg
    if (
        poke.ability == "aftermath"
        and attacker is not poke
        and attacker.ability != "damp"
        and move is not None
        and classification.makes_contact(move, attacker)
    ):
        msg += damage(
            attacker, attacker.max_hp // 4, battle, source=f"{poke.name}'s aftermath"
        )
    if attacker.ability == "moxie":
        msg += stat_stages.append_stat(
            attacker, Stat.ATK, 1, battle, attacker, source="its moxie"
        )
    if attacker.ability == "beastboost":
        msg += stat_stages.append_stat(
            attacker,
            attacker.highest_raw_stat(),
            1,
            battle,
            attacker,
            source="its beast boost",
            check_looping=False,
        )
    if poke.ability == "innardsout":
        msg += damage(
            attacker,
            previous_hp,
            battle,
            attacker=poke,
            source=f"{poke.name}'s innards out",
        )
    return msg


def _on_hit(
    poke: "Combatant",
    battle: "Battle",
    move: Any,
    move_type: ElementType,
    attacker: Optional["Combatant"],
    critical: bool,
    dropped_below_half: bool,
) -> str:
    """Reactions of a combatant that survived a damaging move."""
    msg = ""
    if poke.status.freeze() and (
        move_type is ElementType.FIRE or move.effect in (458, 500)
    ):
        poke.status.reset()
        msg += f"{poke.name} thawed out!\n"
    ability = poke.ability

    def boost(stat: Stat, delta: int, source: str) -> str:
        return stat_stages.append_stat(poke, stat, delta, battle, poke, source=source)

    if ability == "colorchange" and move_type not in poke.types:
        poke.types = [move_type]
        msg += (
            f"{poke.name} changed its color, "
            f"transforming into a {move_type.value} type!\n"
        )
    if ability == "angerpoint" and critical:
        msg += boost(Stat.ATK, 6, "its anger point")
    if (
        ability == "weakarmor"
        and move.damage_class is DamageClass.PHYSICAL
        and attacker is not poke
    ):
        msg += boost(Stat.DEF, -1, "its weak armor")
        msg += boost(Stat.SPE, 2, "its weak armor")
    if ability == "justified" and move_type is ElementType.DARK:
        msg += boost(Stat.ATK, 1, "justified")
    if ability == "rattled" and move_type in (
        ElementType.BUG,
        ElementType.DARK,
        ElementType.GHOST,
    ):
        msg += boost(Stat.SPE, 1, "its rattled")
    if ability == "stamina":
        msg += boost(Stat.DEF, 1, "its stamina")
    if ability == "watercompaction" and move_type is ElementType.WATER:
        msg += boost(Stat.DEF, 2, "its water compaction")
    if ability == "berserk" and dropped_below_half:
        msg += boost(Stat.SPA, 1, "its berserk")
    if ability == "angershell" and dropped_below_half:
        for stat, delta in (
            (Stat.ATK, 1),
            (Stat.SPA, 1),
            (Stat.SPE, 1),
            (Stat.DEF, -1),
            (Stat.SPD, -1),
        ):
            msg += boost(stat, delta, "its anger shell")
    if ability == "steamengine" and move_type in (ElementType.FIRE, ElementType.WATER):
        msg += boost(Stat.SPE, 6, "its steam engine")
    if ability == "thermalexchange" and move_type is ElementType.FIRE:
        msg += boost(Stat.ATK, 1, "its thermal exchange")
    if ability == "windrider" and classification.is_wind(move):
        msg += boost(Stat.ATK, 1, "its wind rider")
    if ability == "cottondown" and attacker is not None:
        msg += stat_stages.append_stat(
            attacker, Stat.SPE, -1, battle, poke, source=f"{poke.name}'s cotton down"
        )
    if ability == "sandspit":
        msg += field.set_weather(battle, Weather.SANDSTORM, poke)
    if ability == "seedsower" and battle.terrain.get() is Terrain.NONE:
        msg += field.set_terrain(battle, Terrain.GRASSY, poke)
    if ability == "electromorphosis":
        poke.charge.set_turns(2)
        msg += f"{poke.name} became charged by its electromorphosis!\n"
    if ability == "windpower" and classification.is_wind(move):
        poke.charge.set_turns(2)
        msg += f"{poke.name} became charged by its wind power!\n"
    if (
        ability == "toxicdebris"
        and move.damage_class is DamageClass.PHYSICAL
        and attacker is not None
        and attacker is not poke
        and attacker.side is not None
        and attacker.side.toxic_spikes < 2
    ):
        attacker.side.toxic_spikes += 1
        msg += (
            f"Toxic spikes were scattered around the feet of {attacker.side.name}'s "
            f"team because of {poke.name}'s toxic debris!\n"
        )
    if poke.held_item.holds("airballoon"):
        poke.held_item.remove()
        msg += f"{poke.name}'s air balloon popped!\n"
    return msg


def _attacker_after_hit(
    poke: "Combatant",
    battle: "Battle",
    move: Any,
    attacker: "Combatant",
    amount: int,
) -> str:
    msg = ""
    if (
        poke.ability == "cursedbody"
        and not attacker.disable.active()
        and move in attacker.moves
        and _chance(battle, 30)
    ):
        if attacker.ability == "aromaveil":
            msg += (
                f"{attacker.name}'s aroma veil protects its move from being disabled!\n"
            )
        else:
            attacker.disable.set(move, 4)
            msg += (
                f"{attacker.name}'s {move.pretty_name} was disabled by "
                f"{poke.name}'s cursed body!\n"
            )
    if (
        attacker.ability == "magician"
        and not attacker.held_item.has_item()
        and poke.held_item.has_item()
        and poke.held_item.can_remove()
    ):
        poke.held_item.transfer(attacker.held_item)
        msg += f"{attacker.name} stole {attacker.held_item.name} using its magician!\n"
    if attacker.ability == "toxicchain" and _chance(battle, 30):
        msg += status_effects.apply_status(
            poke,
            Status.TOXIC,
            battle,
            attacker,
            source=f"{attacker.name}'s toxic chain",
        )
    if attacker.held_item.holds("shellbell"):
        if attacker.ability != "sheerforce" or move.effect_chance is None:
            msg += heal(attacker, amount // 8, "its shell bell")
    return msg


def _spit_out_prey(poke: "Combatant", battle: "Battle", attacker: "Combatant") -> str:
    prey = "pikachu" if poke.species == "Cramorant-gorging" else "arrokuda"
    poke.species = "Cramorant"
    source = f"{poke.name} spitting out its {prey}"
    msg = damage(attacker, attacker.max_hp // 4, battle, source=source)
    if prey == "arrokuda":
        msg += stat_stages.append_stat(
            attacker, Stat.DEF, -1, battle, poke, source=source
        )
    else:
        msg += status_effects.apply_status(
            attacker, Status.PARALYSIS, battle, poke, source=source
        )
    return msg


def _on_contact(
    poke: "Combatant", battle: "Battle", move: Any, attacker: "Combatant"
) -> str:
    """Abilities and items triggered by a contact move landing on `poke`."""
    msg = ""
    ability = poke.ability
    padded = attacker.held_item.holds("protectivepads")
    if not padded:
        if poke.ctx.beak_blast:
            msg += status_effects.apply_status(
                attacker, Status.BURN, battle, attacker,
                source=f"{poke.name}'s charging beak blast",
            )
        contact_status = _CONTACT_STATUS.get(ability)
        if contact_status is not None and _chance(battle, 30):
            inflicted, label = contact_status
            msg += status_effects.apply_status(
                attacker, inflicted, battle, attacker, source=f"{poke.name}'s {label}"
            )
        if ability in ("roughskin", "ironbarbs") and _side_has_alive(poke):
            label = "rough skin" if ability == "roughskin" else "iron barbs"
            msg += damage(
                attacker, attacker.max_hp // 8, battle, source=f"{poke.name}'s {label}"
            )
        if (
            ability == "effectspore"
            and attacker.ability != "overcoat"
            and ElementType.GRASS not in attacker.types
            and not attacker.held_item.holds("safetygoggles")
            and _chance(battle, 30)
        ):
            inflicted = battle.rng.choice(_EFFECT_SPORE_STATUSES)
            msg += status_effects.apply_status(attacker, inflicted, battle, attacker)
        if ability == "cutecharm" and _chance(battle, 30):
            msg += status_effects.infatuate(
                attacker, poke, battle, source=f"{poke.name}'s cute charm"
            )
        for spreading in ("mummy", "lingeringaroma"):
            if (
                ability == spreading
                and attacker.ability != spreading
                and attacker.ability_changeable()
            ):
                attacker.ability = spreading
                label = "mummy" if spreading == "mummy" else "lingering aroma"
                msg += f"{attacker.name} gained {label} from {poke.name}!\n"
                msg += switching.send_out_ability(attacker, poke, battle)
        if ability == "gooey":
            msg += stat_stages.append_stat(
                attacker,
                Stat.SPE,
                -1,
                battle,
                poke,
                source=f"touching {poke.name}'s gooey body",
            )
        if ability == "tanglinghair":
            msg += stat_stages.append_stat(
                attacker,
                Stat.SPE,
                -1,
                battle,
                poke,
                source=f"touching {poke.name}'s tangled hair",
            )
        if poke.held_item.holds("rockyhelmet") and _side_has_alive(poke):
            msg += damage(
                attacker,
                attacker.max_hp // 6,
                battle,
                source=f"{poke.name}'s rocky helmet",
            )

    if (
        ability == "pickpocket"
        and not poke.held_item.has_item()
        and attacker.held_item.has_item()
        and attacker.held_item.can_remove()
    ):
        if attacker.ability == "stickyhold":
            msg += f"{attacker.name}'s sticky hand kept hold of its item!\n"
        else:
            attacker.held_item.transfer(poke.held_item)
            msg += f"{attacker.name}'s {poke.held_item.name} was stolen!\n"

    if attacker.ability == "poisontouch" and _chance(battle, 30):
        msg += status_effects.apply_status(
            poke, Status.POISON, battle, attacker, move,
            source=f"{attacker.name}'s poison touch",
        )

    if not padded and ability == "perishbody" and not attacker.perish_song.active():
        attacker.perish_song.set_turns(4)
        poke.perish_song.set_turns(4)
        msg += f"All pokemon will faint after 3 turns from {poke.name}'s perish body!\n"

    if (
        ability == "wanderingspirit"
        and attacker.ability_changeable()
        and attacker.ability_giveable()
    ):
        msg += (
            f"{attacker.name} swapped abilities with {poke.name} because of "
            f"{poke.name}'s wandering spirit!\n"
        )
        poke.ability, attacker.ability = attacker.ability, poke.ability
        msg += f"{poke.name} acquired {poke.ability}!\n"
        msg += switching.send_out_ability(poke, attacker, battle)
        msg += f"{attacker.name} acquired {attacker.ability}!\n"
        msg += switching.send_out_ability(attacker, poke, battle)
    return msg
