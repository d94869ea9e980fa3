"""Handlers for the miscellaneous effects that run after a hit.

Anything that is not healing, status, stat stages, restrictions, field
changes, protection or switching ends up here: rooms, hazards, type and
ability changes, item interactions and the like.
"""

from typing import TYPE_CHECKING, Dict, Tuple

from absl import logging

from python.duel.data import abilities
from python.duel.engine import berries
from python.duel.engine import hp
from python.duel.engine import multi_turn
from python.duel.engine import queries
from python.duel.engine import stat_stages
from python.duel.engine import status as status_effects
from python.duel.engine import switching
from python.duel.engine.effects.outcome import EffectContext, EffectOutcome
from python.duel.engine.effects.variants import (
    AddType,
    Attract,
    Autotomize,
    Bestow,
    Bind,
    BoostGroundedGrass,
    Camouflage,
    ClearTerrain,
    ConsumeItem,
    Conversion,
    ConversionToResist,
    CopyAbility,
    CopyMoveSlot,
    CorrodeItem,
    CourtChange,
    Curse,
    Defog,
    DestinyBond,
    DrainPP,
    EatOwnBerry,
    EatTargetBerry,
    EchoedVoice,
    Fling,
    GiveAbility,
    Gravity,
    GulpMissile,
    HealBell,
    Identify,
    Instruct,
    InvertStages,
    KnockOff,
    LoseType,
    MindReader,
    MiscEffect,
    PainSplit,
    PerishSong,
    PlasmaFists,
    PsychUp,
    RaiseOnKnockout,
    RapidSpin,
    Recycle,
    ReflectType,
    ReplacementBlessing,
    Roost,
    SecretPower,
    SelfDamage,
    SetFlag,
    SetHazard,
    SetTargetAbility,
    SetTargetType,
    ShedTail,
    ShiftStatus,
    SideBarrier,
    Silence,
    SmackDown,
    SpeedSwap,
    SplitStats,
    Sport,
    StartTimer,
    StealItem,
    StruggleRecoil,
    Substitute,
    SuppressAbility,
    SwapAbilities,
    SwapItems,
    SwapStages,
    Tailwind,
    Teatime,
    TidyUp,
    ToggleRoom,
    TogglePowerShift,
    TogglePowerTrick,
    TransformInto,
    Yawn,
)
from python.duel.engine.requests import MoveRequest, Redirect
from python.duel.engine.stats import is_grounded
from python.duel.schema.enums import (
    ALL_STAGED_STATS,
    ElementType,
    Stat,
    Status,
    Terrain,
)
from python.duel.schema.expiring import ExpiringEffect, ExpiringItem

if TYPE_CHECKING:
    from python.duel.schema.combatant import Combatant
    from python.duel.schema.side_state import Side

_ROOM_MESSAGES: Dict[str, Tuple[str, str]] = {
    "trick_room": (
        "The Dimensions returned back to normal!\n",
        "{user} twisted the dimensions!\n",
    ),
    "magic_room": (
        "The room returns to normal, and held items regain their effect!\n",
        "A bizzare area was created, and pokemon's held items lost their effect!\n",
    ),
    "wonder_room": (
        "The room returns to normal, and stats swap back to what they were before!\n",
        "A bizzare area was created, "
        "and pokemon's defense and special defense were swapped!\n",
    ),
}

_HAZARD_MESSAGES = {
    "spikes": "Spikes were scattered around the feet of {side}'s team!\n",
    "toxic_spikes": "Toxic spikes were scattered around the feet of {side}'s team!\n",
    "stealth_rock": "Pointed stones float in the air around {side}'s team!\n",
    "sticky_web": "A sticky web is shot around the feet of {side}'s team!\n",
}

_BARRIER_MESSAGES = {
    "mist": "{user} gained the protection of mist!\n",
    "safeguard": "{user} is protected from status effects!\n",
}

_DEFOG_BARRIERS = ("aurora_veil", "light_screen", "reflect", "mist", "safeguard")

_CURSE_CHANGES = ((Stat.SPE, -1), (Stat.ATK, 1), (Stat.DEF, 1))

_CAMOUFLAGE_TYPES = {
    Terrain.GRASSY: (ElementType.GRASS, "a grass"),
    Terrain.MISTY: (ElementType.FAIRY, "a fairy"),
    Terrain.ELECTRIC: (ElementType.ELECTRIC, "an electric"),
    Terrain.PSYCHIC: (ElementType.PSYCHIC, "a psychic"),
}

# Side conditions Court Change moves across.
_COURT_FIELDS = (
    "spikes",
    "toxic_spikes",
    "stealth_rock",
    "sticky_web",
    "aurora_veil",
    "light_screen",
    "reflect",
    "mist",
    "safeguard",
    "tailwind",
)

_FLING_STATUSES = {
    "flameorb": Status.BURN,
    "lightball": Status.PARALYSIS,
    "poisonbarb": Status.POISON,
    "toxicorb": Status.TOXIC,
}

_STICKY_HOLD = "{target}'s sticky hand kept hold of its item!\n"


def _clear_hazards(side: "Side") -> None:
    side.spikes = 0
    side.toxic_spikes = 0
    side.stealth_rock = False
    side.sticky_web = False


def _acquire(poke: "Combatant", other: "Combatant", battle) -> str:
    name = (
        abilities.display_name(poke.ability).lower() if poke.ability else "no ability"
    )
    msg = f"{poke.name} acquired {name}!\n"
    return msg + switching.send_out_ability(poke, other, battle)


def _sticky_hold(ctx: EffectContext) -> bool:
    return ctx.defender.ability_for(ctx.attacker, ctx.move) == "stickyhold"


class MiscEffects:
    """Applies MiscEffect variants, one isinstance branch per variant."""

    @staticmethod
    def apply(variant: MiscEffect, ctx: EffectContext) -> EffectOutcome:
        if isinstance(variant, Instruct):
            return MiscEffects._instruct(ctx)
        return EffectOutcome(MiscEffects._apply(variant, ctx))

    @staticmethod
    def _instruct(ctx: EffectContext) -> EffectOutcome:
        """Make the target repeat its last move right after this one resolves."""
        last_move = ctx.defender.ctx.last_move
        if last_move is None:
            return EffectOutcome("But it failed!\n")
        request = MoveRequest(
            move=last_move,
            attacker=ctx.defender,
            defender=ctx.attacker,
            reset_has_moved=True,
            restore_has_moved=True,
        )
        return EffectOutcome(redirect=Redirect(request, "instruct", replaces=False))

    @staticmethod
    def _apply(variant: MiscEffect, ctx: EffectContext) -> str:
        attacker, defender = ctx.attacker, ctx.defender
        battle, move = ctx.battle, ctx.move
        if isinstance(variant, SetFlag):
            target = attacker if variant.on_user else defender
            holder = target.ctx if variant.on_context else target
            if variant.once and getattr(holder, variant.attr):
                return ""
            setattr(holder, variant.attr, True)
            if not variant.message:
                return ""
            message = variant.message.format(user=attacker.name, target=defender.name)
            return message + "\n"
        elif isinstance(variant, StartTimer):
            target = attacker if variant.on_user else defender
            getattr(target, variant.attr).set_turns(variant.turns)
            message = variant.message.format(user=attacker.name, target=defender.name)
            return message + "\n"
        elif isinstance(variant, StruggleRecoil):
            return hp.damage(attacker, attacker.max_hp // 4, battle, attacker=attacker)
        elif isinstance(variant, PainSplit):
            shared = (attacker.hp + defender.hp) // 2
            attacker.hp = min(attacker.max_hp, shared)
            defender.hp = min(defender.max_hp, shared)
            return "The battlers share their pain!\n"
        elif isinstance(variant, DrainPP):
            last_move = defender.ctx.last_move
            if last_move is None:
                return ""
            last_move.pp = max(0, last_move.pp - variant.amount)
            return f"{defender.name}'s {last_move.pretty_name} was reduced!\n"
        elif isinstance(variant, HealBell):
            side = battle.side_of(attacker)
            for poke in side.party:
                poke.status.reset()
            return (
                f"A bell chimed, and all of {side.name}'s pokemon "
                "had status conditions removed!\n"
            )
        elif isinstance(variant, ShiftStatus):
            return MiscEffects._psycho_shift(ctx)
        elif isinstance(variant, Defog):
            defender_side = battle.side_of(defender)
            _clear_hazards(defender_side)
            for barrier in _DEFOG_BARRIERS:
                getattr(defender_side, barrier).set_turns(0)
            _clear_hazards(battle.side_of(attacker))
            battle.terrain.end()
            return f"{attacker.name} blew away the fog!\n"
        elif isinstance(variant, ToggleRoom):
            room = getattr(battle, variant.room)
            ended, started = _ROOM_MESSAGES[variant.room]
            if room.active():
                room.set_turns(0)
                return ended
            room.set_turns(variant.turns)
            return started.format(user=attacker.name)
        elif isinstance(variant, PerishSong):
            return MiscEffects._perish_song(ctx)
        elif isinstance(variant, Gravity):
            battle.gravity.set_turns(variant.turns)
            msg = "Gravity intensified!\n"
            defender.telekinesis.set_turns(0)
            if defender.fly:
                defender.fly = False
                defender.locked_move = None
                msg += f"{defender.name} fell from the sky!\n"
            return msg
        elif isinstance(variant, SetHazard):
            side = battle.side_of(defender)
            current = getattr(side, variant.hazard)
            if isinstance(current, bool):
                setattr(side, variant.hazard, True)
            else:
                setattr(side, variant.hazard, current + 1)
            return _HAZARD_MESSAGES[variant.hazard].format(side=side.name)
        elif isinstance(variant, PsychUp):
            attacker.stages = dict(defender.stages)
            attacker.focus_energy = defender.focus_energy
            return "It psyched itself up!\n"
        elif isinstance(variant, Conversion):
            element = attacker.moves[0].type if attacker.moves else ElementType.NORMAL
            attacker.types = [element]
            return f"{attacker.name} transformed into a {element.value} type!\n"
        elif isinstance(variant, ConversionToResist):
            element = queries.get_conversion2(attacker, defender, battle)
            if element is None:
                return ""
            attacker.types = [element]
            return f"{attacker.name} transformed into a {element.value} type!\n"
        elif isinstance(variant, LoseType):
            if variant.element in attacker.types:
                attacker.types.remove(variant.element)
            return f"{attacker.name} lost its {variant.element.value} type!\n"
        elif isinstance(variant, AddType):
            defender.types.append(variant.element)
            return f"{defender.name} added {variant.element.value} type!\n"
        elif isinstance(variant, SetTargetType):
            defender.types = [variant.element]
            return (
                f"{defender.name} was transformed into a "
                f"{variant.element.value} type!\n"
            )
        elif isinstance(variant, Camouflage):
            element, label = _CAMOUFLAGE_TYPES.get(
                battle.terrain.get(), (ElementType.NORMAL, "a normal")
            )
            attacker.types = [element]
            return f"{attacker.name} was transformed into {label} type!\n"
        elif isinstance(variant, ReflectType):
            attacker.types = list(defender.types)
            return f"{attacker.name}'s type changed to match {defender.name}!\n"
        elif isinstance(variant, CopyAbility):
            attacker.ability = defender.ability
            return _acquire(attacker, defender, battle)
        elif isinstance(variant, SetTargetAbility):
            defender.ability = variant.ability
            if variant.wakes and defender.status.sleep():
                defender.status.reset()
            return _acquire(defender, attacker, battle)
        elif isinstance(variant, GiveAbility):
            defender.ability = attacker.ability
            return _acquire(defender, attacker, battle)
        elif isinstance(variant, SwapAbilities):
            attacker.ability, defender.ability = defender.ability, attacker.ability
            msg = _acquire(defender, attacker, battle)
            return msg + _acquire(attacker, defender, battle)
        elif isinstance(variant, SuppressAbility):
            if variant.after_target_moved:
                if not defender.has_moved or not defender.ability_changeable():
                    return ""
                defender.ability = ""
                return f"{defender.name}'s ability was nullified!\n"
            defender.ability = ""
            return f"{defender.name}'s ability was disabled!\n"
        elif isinstance(variant, SideBarrier):
            side = battle.side_of(attacker)
            turns = variant.turns
            if variant.light_clay and attacker.held_item.holds("lightclay"):
                turns = 8
            getattr(side, variant.barrier).set_turns(turns)
            message = _BARRIER_MESSAGES.get(
                variant.barrier, "{user} put up its {label}!\n"
            )
            return message.format(user=attacker.name, label=variant.label)
        elif isinstance(variant, Sport):
            getattr(battle.side_of(attacker), variant.barrier).set_turns(variant.turns)
            return variant.message + "\n"
        elif isinstance(variant, Tailwind):
            side = battle.side_of(attacker)
            side.tailwind.set_turns(variant.turns)
            msg = f"{side.name}'s team gets a tailwind!\n"
            if attacker.ability == "windrider":
                msg += stat_stages.append_stat(
                    attacker, Stat.ATK, 1, battle, attacker, source="its wind rider"
                )
            return msg
        elif isinstance(variant, Bind):
            if variant.only_if_free and (
                defender.substitute > 0 or defender.bind.active()
            ):
                return ""
            if attacker.held_item.holds("gripclaw"):
                defender.bind.set_turns(7)
            else:
                defender.bind.set_turns(battle.rng.randint(4, 5))
            return f"{defender.name} was squeezed!\n"
        elif isinstance(variant, CopyMoveSlot):
            return MiscEffects._copy_move_slot(variant, ctx)
        elif isinstance(variant, TransformInto):
            msg = f"{attacker.name} transformed into {defender.name}!\n"
            attacker.transform_into(defender)
            return msg
        elif isinstance(variant, Substitute):
            cost = attacker.max_hp // 4
            msg = hp.damage(
                attacker,
                cost,
                battle,
                attacker=attacker,
                source="building a substitute",
            )
            attacker.substitute = cost
            attacker.bind = ExpiringEffect()
            return msg + f"{attacker.name} made a substitute!\n"
        elif isinstance(variant, ShedTail):
            side = battle.side_of(attacker)
            msg = hp.damage(
                attacker, attacker.max_hp // 2, battle, attacker=attacker,
                source="building a substitute",
            )
            side.next_substitute = attacker.max_hp // 4
            attacker.bind = ExpiringEffect()
            msg += f"{attacker.name} left behind a substitute!\n"
            msg += switching.remove(attacker, battle)
            side.mid_turn_remove = True
            return msg
        elif isinstance(variant, Silence):
            if defender.silenced.active() or not ctx.chance():
                return ""
            defender.silenced.set_turns(variant.turns)
            return f"{defender.name} was silenced!\n"
        elif isinstance(variant, SpeedSwap):
            attacker.stats[Stat.SPE], defender.stats[Stat.SPE] = (
                defender.stats[Stat.SPE],
                attacker.stats[Stat.SPE],
            )
            return "Both pokemon exchange speed!\n"
        elif isinstance(variant, MindReader):
            defender.mind_reader.set(attacker, 2)
            return f"{attacker.name} took aim at {defender.name}!\n"
        elif isinstance(variant, DestinyBond):
            attacker.destiny_bond = True
            attacker.destiny_bond_cooldown.set_turns(2)
            return f"{attacker.name} is trying to take its foe with it!\n"
        elif isinstance(variant, Attract):
            return status_effects.infatuate(defender, attacker, battle, move)
        elif isinstance(variant, SwapStages):
            for stat in variant.stats:
                attacker.stages[stat], defender.stages[stat] = (
                    defender.stages[stat],
                    attacker.stages[stat],
                )
            return (
                f"{attacker.name} switched {variant.label}stat changes "
                f"with {defender.name}!\n"
            )
        elif isinstance(variant, SplitStats):
            mine = {stat: attacker.raw_stat(stat) for stat in variant.stats}
            theirs = {stat: defender.raw_stat(stat) for stat in variant.stats}
            for stat in variant.stats:
                attacker.stat_splits[stat] = theirs[stat]
                defender.stat_splits[stat] = mine[stat]
            return (
                f"{attacker.name} and {defender.name} shared their {variant.label}!\n"
            )
        elif isinstance(variant, ReplacementBlessing):
            setattr(battle.side_of(attacker), variant.attr, True)
            return f"{attacker.name}'s replacement will be restored!\n"
        elif isinstance(variant, SmackDown):
            msg = ""
            defender.telekinesis.set_turns(0)
            if defender.fly:
                defender.fly = False
                defender.locked_move = None
                defender.has_moved = True
                msg += f"{defender.name} was shot out of the air!\n"
            if not is_grounded(defender, battle, attacker, move):
                defender.grounded_by_move = True
                msg += f"{defender.name} was grounded!\n"
            return msg
        elif isinstance(variant, Fling):
            return MiscEffects._fling(ctx)
        elif isinstance(variant, StealItem):
            if (
                not defender.held_item.has_item()
                or not defender.held_item.can_remove()
                or defender.substitute > 0
                or attacker.held_item.has_item()
            ):
                return ""
            if _sticky_hold(ctx):
                return _STICKY_HOLD.format(target=defender.name)
            defender.held_item.transfer(attacker.held_item)
            return f"{defender.name}'s {attacker.held_item.name} was stolen!\n"
        elif isinstance(variant, SwapItems):
            attacker.held_item.swap(defender.held_item)
            msg = f"{attacker.name} and {defender.name} swapped their items!\n"
            for poke in (attacker, defender):
                if poke.held_item.name is not None:
                    msg += f"{poke.name} gained {poke.held_item.name}!\n"
            return msg
        elif isinstance(variant, KnockOff):
            if (
                not defender.held_item.has_item()
                or not defender.held_item.can_remove()
                or defender.substitute > 0
                or attacker.hp <= 0
            ):
                return ""
            if _sticky_hold(ctx):
                return _STICKY_HOLD.format(target=defender.name)
            msg = f"{defender.name} lost its {defender.held_item.name}!\n"
            defender.held_item.remove()
            return msg
        elif isinstance(variant, Teatime):
            msg = ""
            for poke in (attacker, defender):
                msg += berries.eat_berry(poke, battle, attacker=attacker, move=move)
            return msg or "But nothing happened...\n"
        elif isinstance(variant, CorrodeItem):
            if _sticky_hold(ctx):
                return _STICKY_HOLD.format(target=defender.name)
            msg = f"{defender.name}'s {defender.held_item.name} was corroded!\n"
            defender.corrosive_gas = True
            return msg
        elif isinstance(variant, TogglePowerTrick):
            attacker.power_trick = not attacker.power_trick
            return f"{attacker.name} switched its Attack and Defense!\n"
        elif isinstance(variant, TogglePowerShift):
            attacker.power_shift = not attacker.power_shift
            return f"{attacker.name} switched its offensive and defensive stats!\n"
        elif isinstance(variant, Yawn):
            if battle.terrain.get() is Terrain.ELECTRIC and is_grounded(
                defender, battle, attacker, move
            ):
                return (
                    f"{defender.name} keeps alert from being shocked "
                    "by the electric terrain!\n"
                )
            defender.yawn.set_turns(2)
            return f"{defender.name} is drowsy!\n"
        elif isinstance(variant, BoostGroundedGrass):
            msg = ""
            for poke in (attacker, defender):
                if ElementType.GRASS not in poke.types:
                    continue
                if not is_grounded(poke, battle) or poke.semi_invulnerable():
                    continue
                for stat, delta in variant.changes:
                    msg += stat_stages.append_stat(
                        poke, stat, delta, battle, attacker, move
                    )
            return msg
        elif isinstance(variant, InvertStages):
            for stat in ALL_STAGED_STATS:
                defender.stages[stat] = -defender.stages[stat]
            return f"{defender.name}'s stat stages were inverted!\n"
        elif isinstance(variant, RapidSpin):
            attacker.bind.set_turns(0)
            attacker.trapping = False
            attacker.leech_seed = False
            _clear_hazards(battle.side_of(attacker))
            return f"{attacker.name} was released!\n"
        elif isinstance(variant, EchoedVoice):
            attacker.echoed_voice_power = min(
                attacker.echoed_voice_power + variant.step, variant.cap
            )
            attacker.echoed_voice_used = True
            return f"{attacker.name}'s voice echos!\n"
        elif isinstance(variant, Bestow):
            if not attacker.held_item.has_item() or defender.held_item.has_item():
                return ""
            attacker.held_item.transfer(defender.held_item)
            return (
                f"{attacker.name} gave its {defender.held_item.name} "
                f"to {defender.name}!\n"
            )
        elif isinstance(variant, Curse):
            if ElementType.GHOST in attacker.types:
                msg = hp.damage(
                    attacker,
                    attacker.max_hp // 2,
                    battle,
                    source="inflicting the curse",
                )
                defender.curse = True
                return msg + f"{defender.name} was cursed!\n"
            msg = ""
            for stat, delta in _CURSE_CHANGES:
                msg += stat_stages.append_stat(
                    attacker, stat, delta, battle, attacker, move
                )
            return msg
        elif isinstance(variant, Autotomize):
            attacker.autotomize += 1
            return f"{attacker.name} became nimble!\n"
        elif isinstance(variant, RaiseOnKnockout):
            if defender.hp != 0:
                return ""
            return stat_stages.append_stat(
                attacker, variant.stat, variant.delta, battle, attacker, move
            )
        elif isinstance(variant, Identify):
            setattr(defender, variant.attr, True)
            return f"{attacker.name} identified {defender.name}!\n"
        elif isinstance(variant, SelfDamage):
            return hp.damage(attacker, attacker.max_hp // variant.denominator, battle)
        elif isinstance(variant, Recycle):
            attacker.held_item.recover(attacker.held_item)
            msg = f"{attacker.name} recovered their {attacker.held_item.name}!\n"
            if berries.should_eat(attacker, defender):
                msg += berries.eat_berry(attacker, battle, attacker=defender, move=move)
            return msg
        elif isinstance(variant, CourtChange):
            mine, theirs = battle.side_of(attacker), battle.side_of(defender)
            for name in _COURT_FIELDS:
                first, second = getattr(mine, name), getattr(theirs, name)
                setattr(mine, name, second)
                setattr(theirs, name, first)
            return "Active battle effects swapped sides!\n"
        elif isinstance(variant, Roost):
            attacker.ctx.roost = True
            if ElementType.FLYING in attacker.types:
                return f"{attacker.name}'s flying type is suppressed!\n"
            return ""
        elif isinstance(variant, EatTargetBerry):
            if _sticky_hold(ctx):
                return ""
            return berries.eat_berry(defender, battle, consumer=attacker)
        elif isinstance(variant, EatOwnBerry):
            return berries.eat_berry(attacker, battle)
        elif isinstance(variant, ConsumeItem):
            if not attacker.held_item.has_item():
                return ""
            msg = f"{attacker.name}'s {attacker.held_item.name} was consumed!\n"
            attacker.held_item.use()
            return msg
        elif isinstance(variant, GulpMissile):
            return multi_turn.gulp_missile(attacker)
        elif isinstance(variant, ClearTerrain):
            if variant.only_if_set and battle.terrain.get() is Terrain.NONE:
                return ""
            battle.terrain.end()
            return "The terrain was cleared!\n"
        elif isinstance(variant, PlasmaFists):
            if battle.plasma_fists:
                return ""
            battle.plasma_fists = True
            return (
                f"{attacker.name} electrifies the battlefield, "
                "energizing normal type moves!\n"
            )
        elif isinstance(variant, SecretPower):
            return MiscEffects._secret_power(ctx)
        elif isinstance(variant, TidyUp):
            for poke in (defender, attacker):
                _clear_hazards(battle.side_of(poke))
                poke.substitute = 0
            return f"{attacker.name} tidied up!\n"
        logging.warning("Unhandled misc variant %s", type(variant).__name__)
        return ""

    @staticmethod
    def _psycho_shift(ctx: EffectContext) -> str:
        attacker, defender = ctx.attacker, ctx.defender
        shifted = attacker.status.current
        if shifted is Status.NONE:
            return "But it failed!\n"
        msg = status_effects.apply_status(
            defender, shifted, ctx.battle, attacker, ctx.move
        )
        if defender.status.current is not shifted:
            return msg + "But it failed!\n"
        attacker.status.reset()
        return msg + (
            f"{attacker.name}'s {shifted.display_name} "
            f"was transfered to {defender.name}!\n"
        )

    @staticmethod
    def _perish_song(ctx: EffectContext) -> str:
        attacker, defender = ctx.attacker, ctx.defender
        msg = "All pokemon hearing the song will faint after 3 turns!\n"
        if attacker.perish_song.active():
            msg += f"{attacker.name} is already under the effect of perish song!\n"
        else:
            attacker.perish_song.set_turns(4)
        if defender.perish_song.active():
            msg += f"{defender.name} is already under the effect of perish song!\n"
        elif defender.ability_for(attacker, ctx.move) == "soundproof":
            msg += f"{defender.name}'s soundproof protects it from hearing the song!\n"
        else:
            defender.perish_song.set_turns(4)
        return msg

    @staticmethod
    def _copy_move_slot(variant: CopyMoveSlot, ctx: EffectContext) -> str:
        """Sketch and Mimic. The slot is replaced in place of the move being used."""
        attacker, move = ctx.attacker, ctx.move
        last_move = ctx.defender.ctx.last_move
        if last_move is None or move not in attacker.moves:
            return "But it failed!\n"
        copied = last_move.copy()
        if not variant.keep_pp:
            copied.pp = copied.starting_pp
        attacker.moves[attacker.moves.index(move)] = copied
        if variant.keep_pp:
            return f"The move {copied.pretty_name} was sketched!\n"
        return f"{attacker.name} mimicked {copied.pretty_name}!\n"

    @staticmethod
    def _fling(ctx: EffectContext) -> str:
        attacker, defender = ctx.attacker, ctx.defender
        battle, move = ctx.battle, ctx.move
        item = attacker.held_item.name
        if item is None or not attacker.held_item.can_remove():
            return ""
        msg = f"{attacker.name}'s {item} was flung away!\n"
        if attacker.held_item.is_berry():
            return msg + berries.eat_berry(
                attacker, battle, consumer=defender, attacker=attacker, move=move
            )
        attacker.held_item.use()
        if item in _FLING_STATUSES:
            msg += status_effects.apply_status(
                defender, _FLING_STATUSES[item], battle, attacker, move
            )
        elif item in ("kingsrock", "razorfang"):
            msg += status_effects.flinch(defender, battle, attacker, move)
        elif item == "mentalherb":
            defender.infatuated = None
            defender.taunt = ExpiringEffect()
            defender.encore = ExpiringItem()
            defender.torment = False
            defender.disable = ExpiringItem()
            defender.heal_block = ExpiringEffect()
            msg += f"{defender.name} feels refreshed!\n"
        elif item == "whiteherb":
            for stat in ALL_STAGED_STATS:
                defender.stages[stat] = max(0, defender.stages[stat])
            msg += f"{defender.name} feels refreshed!\n"
        return msg

    @staticmethod
    def _secret_power(ctx: EffectContext) -> str:
        if not ctx.chance():
            return ""
        attacker, defender = ctx.attacker, ctx.defender
        battle, move = ctx.battle, ctx.move
        terrain = battle.terrain.get()
        if terrain is Terrain.GRASSY:
            return status_effects.apply_status(
                defender, Status.SLEEP, battle, attacker, move
            )
        if terrain is Terrain.MISTY:
            return stat_stages.append_stat(
                defender, Stat.SPA, -1, battle, attacker, move
            )
        if terrain is Terrain.PSYCHIC:
            return stat_stages.append_stat(
                defender, Stat.SPE, -1, battle, attacker, move
            )
        return status_effects.apply_status(
            defender, Status.PARALYSIS, battle, attacker, move
        )
