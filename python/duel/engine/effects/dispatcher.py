"""Interprets effect variants at each stage of a move's resolution.

The move engine calls three entry points: `apply_miss` when the move fails to
land, `apply_pre_damage` before damage is dealt and `resolve_post_hit` once
damage is done. Each looks the move's effect up in the catalog and hands the
variants of its stage to `EffectDispatcher.apply`.
"""

from typing import TYPE_CHECKING, Optional, Tuple

from absl import logging

from python.duel.data.move import MoveInstance, present
from python.duel.engine import classification
from python.duel.engine import damage
from python.duel.engine import field
from python.duel.engine import hp
from python.duel.engine import queries
from python.duel.engine import stat_stages
from python.duel.engine import status as status_effects
from python.duel.engine import switching
from python.duel.engine.effects import catalog
from python.duel.engine.effects.misc import MiscEffects
from python.duel.engine.effects.outcome import EffectContext, EffectOutcome
from python.duel.engine.effects.variants import (
    AnnounceItemStrike,
    BalancedRaise,
    BreakScreens,
    BurnBerry,
    CallPartyMove,
    CallRandomMove,
    CallSleepingMove,
    ClearUserStatus,
    Confuse,
    CopyTargetChoice,
    CopyTargetLastMove,
    CrashDamage,
    CureTargetBurn,
    CureTargetHealUser,
    DisableMove,
    DropCommitment,
    EffectVariant,
    Encore,
    FieldEffect,
    FlinchEffect,
    ForceTargetOut,
    ForeseeAttack,
    GiftRoll,
    HealBlock,
    HealByTargetAttack,
    HealTarget,
    HealUser,
    HealUserBoosted,
    HealUserByWeather,
    Imprison,
    InflictRandomStatus,
    InflictStatus,
    MakeWish,
    MiscEffect,
    MissEffect,
    PlantSeed,
    PreDamageEffect,
    ProtectionEffect,
    PutToSleep,
    RaiseProtection,
    RampageFatigue,
    RandomSharpRaise,
    RecoveryEffect,
    ReleaseStockpile,
    ResetFuryCutter,
    ResetStages,
    Rest,
    SacrificeBoost,
    SelfFaintEffect,
    SetTerrain,
    SetWeather,
    StageEffect,
    StatChange,
    StatusClearEffect,
    StatusEffect,
    StealBoosts,
    Stockpile,
    SunBoost,
    SwitchEffect,
    SwitchUserOut,
    Taunt,
    Torment,
    TrapEffect,
    TrapTarget,
    UserFaints,
    VolatileEffect,
)
from python.duel.engine.requests import MoveRequest, Redirect
from python.duel.engine.stats import get_attack
from python.duel.schema.enums import DamageClass, Stat, Status, Weather
from python.duel.schema.side_state import BatonPassState

if TYPE_CHECKING:
    from python.duel.schema.combatant import Combatant

# Order Spectral Thief steals boosts in.
_STEAL_ORDER = (
    Stat.ATK,
    Stat.DEF,
    Stat.SPA,
    Stat.SPD,
    Stat.SPE,
    Stat.EVASION,
    Stat.ACCURACY,
)

# Order Acupressure considers stats in.
_ACUPRESSURE_ORDER = _STEAL_ORDER

_SCREENS = (
    ("aurora_veil", "aurora veil"),
    ("light_screen", "light screen"),
    ("reflect", "reflect"),
)

_STOCKPILE_HEAL_DENOMINATORS = {1: 4, 2: 2, 3: 1}

_PRESENT_POWERS = {2: 40, 3: 80, 4: 120}

# Held items and abilities that give any damaging move a chance to flinch.
_FLINCH_FALLBACKS = (
    ("stench", None, "its stench"),
    (None, "kingsrock", "its kings rock"),
    (None, "razorfang", "its razor fang"),
)

_FUTURE_SIGHT_EFFECT = 149
_FAILED = "But it failed!\n"


def _redirect(
    ctx: EffectContext, move: MoveInstance, reason: str, **flags: bool
) -> EffectOutcome:
    request = MoveRequest(
        move=move, attacker=ctx.attacker, defender=ctx.defender, **flags
    )
    logging.debug("%s redirects %s to %s", reason, ctx.move.name, move.name)
    return EffectOutcome(redirect=Redirect(request, reason), terminal=True)


class EffectDispatcher:
    """Applies single effect variants.

    All methods are static. `apply` picks the stage handler from the variant's
    base class, and each handler matches the concrete variant with an
    isinstance chain.
    """

    @staticmethod
    def apply(variant: EffectVariant, ctx: EffectContext) -> EffectOutcome:
        """Apply one variant.

        Args:
            variant: Variant to apply
            ctx: The move use it belongs to

        Returns:
            Transcript, plus a redirect or terminal flag where the variant
            replaces the rest of the move
        """
        if isinstance(variant, MissEffect):
            return EffectOutcome(EffectDispatcher._apply_miss(variant, ctx))
        elif isinstance(variant, PreDamageEffect):
            return EffectDispatcher._apply_pre_damage(variant, ctx)
        elif isinstance(variant, RecoveryEffect):
            return EffectOutcome(EffectDispatcher._apply_recovery(variant, ctx))
        elif isinstance(variant, StatusEffect):
            return EffectOutcome(EffectDispatcher._apply_status(variant, ctx))
        elif isinstance(variant, StatusClearEffect):
            return EffectOutcome(EffectDispatcher._apply_status_clear(variant, ctx))
        elif isinstance(variant, StageEffect):
            return EffectOutcome(EffectDispatcher._apply_stage(variant, ctx))
        elif isinstance(variant, FlinchEffect):
            return EffectOutcome(EffectDispatcher._apply_flinch(ctx))
        elif isinstance(variant, VolatileEffect):
            return EffectOutcome(EffectDispatcher._apply_volatile(variant, ctx))
        elif isinstance(variant, FieldEffect):
            return EffectOutcome(EffectDispatcher._apply_field(variant, ctx))
        elif isinstance(variant, ProtectionEffect):
            return EffectOutcome(EffectDispatcher._apply_protection(variant, ctx))
        elif isinstance(variant, MiscEffect):
            return MiscEffects.apply(variant, ctx)
        elif isinstance(variant, SwitchEffect):
            return EffectOutcome(EffectDispatcher._apply_switch(variant, ctx))
        elif isinstance(variant, TrapEffect):
            return EffectOutcome(EffectDispatcher._apply_trap(variant, ctx))
        elif isinstance(variant, SelfFaintEffect):
            return EffectOutcome(EffectDispatcher._apply_self_faint(variant, ctx))
        logging.warning(
            "Unknown effect variant %s for %s", type(variant).__name__, ctx.move.name
        )
        return EffectOutcome()

    @staticmethod
    def _apply_miss(variant: MissEffect, ctx: EffectContext) -> str:
        attacker = ctx.attacker
        if isinstance(variant, ResetFuryCutter):
            attacker.fury_cutter = 0
        elif isinstance(variant, CrashDamage):
            return hp.damage(
                attacker,
                attacker.max_hp // variant.denominator,
                ctx.battle,
                source="recoil",
            )
        elif isinstance(variant, DropCommitment):
            attacker.locked_move = None
        return ""

    @staticmethod
    def _apply_pre_damage(
        variant: PreDamageEffect, ctx: EffectContext
    ) -> EffectOutcome:
        attacker, defender, battle = ctx.attacker, ctx.defender, ctx.battle
        if isinstance(variant, CallRandomMove):
            if not battle.metronome_moves:
                return EffectOutcome(_FAILED, terminal=True)
            template = battle.rng.choice(battle.metronome_moves)
            return _redirect(
                ctx,
                MoveInstance.from_template(template),
                "metronome",
                reset_has_moved=True,
            )
        elif isinstance(variant, CallSleepingMove):
            eligible = [
                move
                for move in attacker.moves
                if classification.selectable_by_sleep_talk(move)
            ]
            if not eligible:
                return EffectOutcome(_FAILED, terminal=True)
            return _redirect(
                ctx,
                battle.rng.choice(eligible),
                "sleep talk",
                use_pp=False,
                override_sleep=True,
            )
        elif isinstance(variant, CopyTargetLastMove):
            last_move = defender.ctx.last_move
            if last_move is None:
                return EffectOutcome(_FAILED, terminal=True)
            return _redirect(ctx, last_move, "copied move", use_pp=False)
        elif isinstance(variant, CopyTargetChoice):
            chosen = queries.selected_move(defender)
            if chosen is None:
                return EffectOutcome(_FAILED, terminal=True)
            return _redirect(ctx, chosen, "me first", use_pp=False)
        elif isinstance(variant, CallPartyMove):
            assist = queries.get_assist_move(attacker, battle)
            if assist is None:
                return EffectOutcome(_FAILED, terminal=True)
            return _redirect(ctx, assist, "assist", use_pp=False)
        elif isinstance(variant, BreakScreens):
            return EffectOutcome(EffectDispatcher._break_screens(ctx))
        elif isinstance(variant, StealBoosts):
            return EffectOutcome(EffectDispatcher._steal_boosts(ctx))
        elif isinstance(variant, ForeseeAttack):
            battle.side_of(defender).future_sight.set(
                (attacker, ctx.move), variant.turns
            )
            return EffectOutcome(f"{attacker.name} foresaw an attack!\n", terminal=True)
        elif isinstance(variant, GiftRoll):
            return EffectDispatcher._present(ctx)
        elif isinstance(variant, BurnBerry):
            if not defender.held_item.is_berry(only_active=False):
                return EffectOutcome()
            if defender.ability_for(attacker, ctx.move) == "stickyhold":
                return EffectOutcome(
                    f"{defender.name}'s sticky hand kept hold of its item!\n"
                )
            defender.held_item.remove()
            return EffectOutcome(f"{defender.name}'s berry was incinerated!\n")
        elif isinstance(variant, AnnounceItemStrike):
            return EffectOutcome(
                f"{defender.name} is about to be attacked "
                f"by its {defender.held_item.get()}!\n"
            )
        logging.warning("Unhandled pre-damage variant %s", type(variant).__name__)
        return EffectOutcome()

    @staticmethod
    def _break_screens(ctx: EffectContext) -> str:
        msg = ""
        side = ctx.battle.side_of(ctx.defender)
        for attr, label in _SCREENS:
            screen = getattr(side, attr)
            if screen.active():
                screen.set_turns(0)
                msg += f"{ctx.defender.name}'s {label} wore off!\n"
        return msg

    @staticmethod
    def _steal_boosts(ctx: EffectContext) -> str:
        msg = ""
        attacker, defender = ctx.attacker, ctx.defender
        for stat in _STEAL_ORDER:
            stage = defender.stages[stat]
            if stage <= 0:
                continue
            defender.stages[stat] = 0
            msg += f"{defender.name}'s {stat.display_name} stage was reset!\n"
            msg += stat_stages.append_stat(
                attacker, stat, stage, ctx.battle, attacker, ctx.move
            )
        return msg

    @staticmethod
    def _present(ctx: EffectContext) -> EffectOutcome:
        attacker, defender = ctx.attacker, ctx.defender
        roll = ctx.battle.rng.randint(1, 4)
        if roll == 1:
            if defender.hp == defender.max_hp:
                return EffectOutcome("It had no effect!\n", terminal=True)
            msg = hp.heal(defender, defender.max_hp // 4, f"{attacker.name}'s present")
            return EffectOutcome(msg, terminal=True)
        msg, hits = damage.attack(
            present(_PRESENT_POWERS[roll]), attacker, defender, ctx.battle
        )
        return EffectOutcome(msg, terminal=True, hits=hits)

    @staticmethod
    def _apply_recovery(variant: RecoveryEffect, ctx: EffectContext) -> str:
        attacker, defender, battle = ctx.attacker, ctx.defender, ctx.battle
        if isinstance(variant, Stockpile):
            attacker.stockpile += 1
            return f"{attacker.name} stores energy!\n"
        elif isinstance(variant, ReleaseStockpile):
            msg = ""
            if variant.heal:
                denominator = _STOCKPILE_HEAL_DENOMINATORS.get(attacker.stockpile, 4)
                msg += hp.heal(
                    attacker, attacker.max_hp // denominator, "stockpiled energy"
                )
            for stat in (Stat.DEF, Stat.SPD):
                msg += stat_stages.append_stat(
                    attacker, stat, -attacker.stockpile, battle, attacker, ctx.move
                )
            attacker.stockpile = 0
            return msg
        elif isinstance(variant, HealUser):
            return hp.heal(
                attacker, attacker.max_hp * variant.numerator // variant.denominator
            )
        elif isinstance(variant, HealUserByWeather):
            weather = battle.weather.get()
            if weather.is_sunny:
                return hp.heal(attacker, attacker.max_hp * 2 // 3)
            if weather is Weather.STRONG_WINDS:
                return hp.heal(attacker, attacker.max_hp // 2)
            if weather is not Weather.NONE:
                return hp.heal(attacker, attacker.max_hp // 4)
            return hp.heal(attacker, attacker.max_hp // 2)
        elif isinstance(variant, HealUserBoosted):
            boosted = (
                battle.weather.get() is variant.weather
                or battle.terrain.get() is variant.terrain
            )
            if boosted:
                return hp.heal(attacker, attacker.max_hp * 2 // 3)
            return hp.heal(attacker, attacker.max_hp // 2)
        elif isinstance(variant, HealTarget):
            if attacker.ability == "megalauncher":
                return hp.heal(defender, defender.max_hp * 3 // 4)
            return hp.heal(defender, defender.max_hp // 2)
        elif isinstance(variant, HealByTargetAttack):
            return hp.heal(attacker, get_attack(defender, battle))
        elif isinstance(variant, CureTargetHealUser):
            removed = defender.status.current.display_name
            defender.status.reset()
            msg = f"{defender.name}'s {removed} was healed!\n"
            return msg + hp.heal(attacker, attacker.max_hp // 2)
        elif isinstance(variant, PlantSeed):
            defender.leech_seed = True
            return f"{defender.name} was seeded!\n"
        elif isinstance(variant, MakeWish):
            battle.side_of(attacker).wish.set(attacker.max_hp // 2)
            return f"{attacker.name} makes a wish!\n"
        logging.warning("Unhandled recovery variant %s", type(variant).__name__)
        return ""

    @staticmethod
    def _apply_status(variant: StatusEffect, ctx: EffectContext) -> str:
        attacker, defender = ctx.attacker, ctx.defender
        battle, move = ctx.battle, ctx.move
        if isinstance(variant, InflictStatus):
            if variant.requires_stat_raised and not defender.ctx.stat_increased:
                return ""
            if variant.chance and not ctx.chance():
                return ""
            return status_effects.apply_status(
                defender, variant.status, battle, attacker, move
            )
        elif isinstance(variant, InflictRandomStatus):
            if ctx.effect_chance is None:
                return ""
            chosen = battle.rng.choice(variant.choices)
            if not ctx.chance():
                return ""
            return status_effects.apply_status(defender, chosen, battle, attacker, move)
        elif isinstance(variant, PutToSleep):
            if (
                variant.signature_move == move.id
                and attacker.species != variant.signature_species
            ):
                return f"{attacker.name} can't use the move!\n"
            if variant.chance and not ctx.chance():
                return ""
            return status_effects.apply_status(
                defender, Status.SLEEP, battle, attacker, move
            )
        elif isinstance(variant, Rest):
            msg = status_effects.apply_status(
                attacker,
                Status.SLEEP,
                battle,
                attacker,
                move,
                turns=variant.turns,
                force=True,
            )
            if attacker.status.sleep():
                msg += f"{attacker.name}'s slumber restores its health back to full!\n"
                attacker.hp = attacker.max_hp
            return msg
        elif isinstance(variant, Confuse):
            if variant.requires_stat_raised and not defender.ctx.stat_increased:
                return ""
            if variant.chance and not ctx.chance():
                return ""
            return status_effects.confuse(defender, battle, attacker, move)
        elif isinstance(variant, RampageFatigue):
            # The lock is gone when the user fainted to a contact punishment.
            lock = attacker.locked_move
            if lock is not None and lock.is_last_turn():
                return status_effects.confuse(attacker, battle)
            return ""
        logging.warning("Unhandled status variant %s", type(variant).__name__)
        return ""

    @staticmethod
    def _apply_status_clear(variant: StatusClearEffect, ctx: EffectContext) -> str:
        if isinstance(variant, ClearUserStatus):
            ctx.attacker.status.reset()
            return f"{ctx.attacker.name}'s status was cleared!\n"
        elif isinstance(variant, CureTargetBurn):
            if not ctx.defender.status.burn():
                return ""
            ctx.defender.status.reset()
            return f"{ctx.defender.name}'s burn was healed!\n"
        logging.warning("Unhandled status clear variant %s", type(variant).__name__)
        return ""

    @staticmethod
    def _apply_stage(variant: StageEffect, ctx: EffectContext) -> str:
        attacker, defender = ctx.attacker, ctx.defender
        battle, move = ctx.battle, ctx.move
        if isinstance(variant, StatChange):
            if variant.requires_target_poisoned and not defender.status.poison():
                return ""
            if variant.fixed_chance is not None:
                if not ctx.roll(variant.fixed_chance):
                    return ""
            elif variant.chance and not ctx.chance():
                return ""
            target = attacker if variant.on_user else defender
            return _append_all(target, variant.changes, ctx)
        elif isinstance(variant, ResetStages):
            stat_stages.reset_stages(defender)
            if not variant.include_user:
                return f"{defender.name} had their stat stages reset!\n"
            stat_stages.reset_stages(attacker)
            return "All pokemon had their stat stages reset!\n"
        elif isinstance(variant, SacrificeBoost):
            msg = hp.damage(attacker, attacker.max_hp // variant.denominator, battle)
            return msg + _append_all(attacker, variant.changes, ctx)
        elif isinstance(variant, SunBoost):
            amount = 2 if battle.weather.get().is_sunny else 1
            changes = tuple((stat, amount) for stat in variant.stats)
            return _append_all(attacker, changes, ctx)
        elif isinstance(variant, RandomSharpRaise):
            candidates = [
                stat for stat in _ACUPRESSURE_ORDER if attacker.stages[stat] < 6
            ]
            if not candidates:
                return f"None of {attacker.name}'s stats can go any higher!\n"
            stat = battle.rng.choice(candidates)
            return stat_stages.append_stat(
                attacker,
                stat,
                variant.delta,
                battle,
                attacker,
                move,
                check_looping=False,
            )
        elif isinstance(variant, BalancedRaise):
            offense = attacker.raw_stat(Stat.ATK) + attacker.raw_stat(Stat.SPA)
            defense = attacker.raw_stat(Stat.DEF) + attacker.raw_stat(Stat.SPD)
            if offense > defense:
                return _append_all(attacker, ((Stat.ATK, 1), (Stat.SPA, 1)), ctx)
            return _append_all(attacker, ((Stat.DEF, 1), (Stat.SPD, 1)), ctx)
        logging.warning("Unhandled stage variant %s", type(variant).__name__)
        return ""

    @staticmethod
    def _apply_flinch(ctx: EffectContext) -> str:
        if not ctx.chance():
            return ""
        return status_effects.flinch(ctx.defender, ctx.battle, ctx.attacker, ctx.move)

    @staticmethod
    def _apply_volatile(variant: VolatileEffect, ctx: EffectContext) -> str:
        attacker, defender = ctx.attacker, ctx.defender
        battle, move = ctx.battle, ctx.move
        name = defender.name
        if isinstance(variant, Imprison):
            attacker.imprison = True
            return f"{attacker.name} imprisons!\n"
        ability = defender.ability_for(attacker, move)
        if isinstance(variant, DisableMove):
            if ability == "aromaveil":
                return f"{name}'s aroma veil protects its move from being disabled!\n"
            last_move = defender.ctx.last_move
            if last_move is None:
                return ""
            defender.disable.set(last_move, battle.rng.randint(4, 7))
            return f"{name}'s {last_move.pretty_name} was disabled!\n"
        elif isinstance(variant, Taunt):
            if ability == "oblivious":
                return f"{name} is too oblivious to be taunted!\n"
            if ability == "aromaveil":
                return f"{name}'s aroma veil protects it from being taunted!\n"
            defender.taunt.set_turns(4 if defender.has_moved else 3)
            return f"{name} is being taunted!\n"
        elif isinstance(variant, Encore):
            if ability == "aromaveil":
                return f"{name}'s aroma veil protects it from being encored!\n"
            last_move = defender.ctx.last_move
            defender.encore.set(last_move, variant.turns)
            if not defender.has_moved:
                battle.side_of(defender).selected_action = last_move
            return f"{name} is giving an encore!\n"
        elif isinstance(variant, Torment):
            if ability == "aromaveil":
                return f"{name}'s aroma veil protects it from being tormented!\n"
            defender.torment = True
            return f"{name} is tormented!\n"
        elif isinstance(variant, HealBlock):
            if ability == "aromaveil":
                return f"{name}'s aroma veil protects it from being heal blocked!\n"
            defender.heal_block.set_turns(variant.turns)
            return f"{name} is blocked from healing!\n"
        logging.warning("Unhandled volatile variant %s", type(variant).__name__)
        return ""

    @staticmethod
    def _apply_field(variant: FieldEffect, ctx: EffectContext) -> str:
        if isinstance(variant, SetWeather):
            return field.set_weather(ctx.battle, variant.weather, ctx.attacker)
        elif isinstance(variant, SetTerrain):
            return field.set_terrain(ctx.battle, variant.terrain, ctx.attacker)
        logging.warning("Unhandled field variant %s", type(variant).__name__)
        return ""

    @staticmethod
    def _apply_protection(variant: ProtectionEffect, ctx: EffectContext) -> str:
        attacker = ctx.attacker
        if isinstance(variant, RaiseProtection):
            if variant.stacking:
                attacker.ctx.protection_used = True
                attacker.protection_chance *= 3
            setattr(attacker.ctx, variant.flag, True)
            return variant.message.format(user=attacker.name) + "\n"
        logging.warning("Unhandled protection variant %s", type(variant).__name__)
        return ""

    @staticmethod
    def _apply_switch(variant: SwitchEffect, ctx: EffectContext) -> str:
        if isinstance(variant, ForceTargetOut):
            return _force_out(ctx.defender, ctx.attacker, ctx)
        elif isinstance(variant, SwitchUserOut):
            attacker, battle = ctx.attacker, ctx.battle
            side = battle.side_of(attacker)
            if not switching.valid_swaps(side, battle, ctx.defender, check_trap=False):
                return ""
            msg = f"{attacker.name} went back!\n"
            if variant.baton_pass:
                side.baton_pass = BatonPassState.capture(attacker)
            msg += switching.remove(attacker, battle)
            side.mid_turn_remove = True
            return msg
        logging.warning("Unhandled switch variant %s", type(variant).__name__)
        return ""

    @staticmethod
    def _apply_trap(variant: TrapEffect, ctx: EffectContext) -> str:
        if isinstance(variant, TrapTarget):
            msg = ""
            targets = (ctx.defender, ctx.attacker) if variant.both else (ctx.defender,)
            for poke in targets:
                if not poke.trapping:
                    poke.trapping = True
                    msg += f"{poke.name} can't escape!\n"
            return msg
        logging.warning("Unhandled trap variant %s", type(variant).__name__)
        return ""

    @staticmethod
    def _apply_self_faint(variant: SelfFaintEffect, ctx: EffectContext) -> str:
        if isinstance(variant, UserFaints):
            return hp.faint(ctx.attacker, ctx.battle)
        logging.warning("Unhandled self faint variant %s", type(variant).__name__)
        return ""


def _append_all(
    target: "Combatant", changes: Tuple[Tuple[Stat, int], ...], ctx: EffectContext
) -> str:
    msg = ""
    for stat, delta in changes:
        msg += stat_stages.append_stat(
            target, stat, delta, ctx.battle, ctx.attacker, ctx.move
        )
    return msg


def _force_out(
    poke: "Combatant", other: "Combatant", ctx: EffectContext, red_card: bool = False
) -> str:
    """Drag `poke` out and bring a random replacement in.

    Suction Cups, Guard Dog and Ingrain keep it in place. A red card is used up
    even when it fails to move its target.
    """
    battle = ctx.battle
    side = battle.side_of(poke)
    swaps = switching.valid_swaps(side, battle, other, check_trap=False)
    if not swaps:
        return ""
    ability = poke.ability_for(other, ctx.move)
    suffix = f" from {other.name}'s red card" if red_card else ""
    blocked = ""
    if ability == "suctioncups":
        blocked = f"{poke.name}'s suction cups kept it in place{suffix}!\n"
    elif ability == "guarddog":
        blocked = f"{poke.name}'s guard dog kept it in place{suffix}!\n"
    elif poke.ingrain:
        blocked = f"{poke.name} is ingrained in the ground{suffix}!\n"
    if red_card:
        other.held_item.use()
    if blocked:
        return blocked

    if red_card:
        msg = f"{other.name} held up its red card against {poke.name}!\n"
    else:
        msg = f"{poke.name} fled in fear!\n"
    msg += switching.remove(poke, battle)
    side.switch_in(battle.rng.choice(swaps), mid_turn=True)
    msg += switching.send_out(side.current, battle)
    # The replacement can faint to entry hazards.
    if side.current is not None:
        side.current.has_moved = True
    return msg


def _red_card_applies(ctx: EffectContext) -> bool:
    defender = ctx.defender
    return (
        defender.held_item.holds("redcard")
        and defender.hp > 0
        and ctx.move.damage_class is not DamageClass.STATUS
    )


def _flinch_stage(ctx: EffectContext) -> str:
    """Roll for a flinch once per landed hit.

    Moves with their own flinch chance use it. Any other damaging move can
    flinch through Stench, King's Rock or Razor Fang.
    """
    defender, attacker = ctx.defender, ctx.attacker
    if defender.has_moved:
        return ""
    own_flinch = catalog.variants_of(ctx.move.effect, FlinchEffect)
    msg = ""
    for _ in range(ctx.hits):
        if defender.ctx.flinched:
            break
        if own_flinch and ctx.effect_chance is not None:
            for variant in own_flinch:
                msg += EffectDispatcher.apply(variant, ctx).msg
        elif ctx.move.damage_class.is_damaging:
            for ability, item, source in _FLINCH_FALLBACKS:
                if ability is not None and attacker.ability != ability:
                    continue
                if item is not None and not attacker.held_item.holds(item):
                    continue
                if ctx.roll(10):
                    msg += status_effects.flinch(
                        defender, ctx.battle, attacker, ctx.move, source=source
                    )
                break
    return msg


def _throat_spray(ctx: EffectContext) -> str:
    attacker = ctx.attacker
    if not classification.is_sound_based(ctx.move):
        return ""
    if not attacker.held_item.holds("throatspray"):
        return ""
    msg = stat_stages.append_stat(
        attacker, Stat.SPA, 1, ctx.battle, attacker, source="its throat spray"
    )
    attacker.held_item.use()
    return msg


def _switching_stage(ctx: EffectContext) -> str:
    """Forced switches first, then a red card, then the user's own switch."""
    variants = catalog.variants_of(ctx.move.effect, SwitchEffect)
    forcing = [variant for variant in variants if isinstance(variant, ForceTargetOut)]
    if forcing:
        return EffectDispatcher.apply(forcing[0], ctx).msg
    if _red_card_applies(ctx):
        return _force_out(ctx.attacker, ctx.defender, ctx, red_card=True)
    msg = ""
    for variant in variants:
        msg += EffectDispatcher.apply(variant, ctx).msg
    return msg


def _life_orb(ctx: EffectContext) -> str:
    attacker, move = ctx.attacker, ctx.move
    if not attacker.held_item.holds("lifeorb"):
        return ""
    if not ctx.battle.side_of(ctx.defender).has_alive():
        return ""
    if move.damage_class is DamageClass.STATUS or move.effect == _FUTURE_SIGHT_EFFECT:
        return ""
    if attacker.ability == "sheerforce" and move.effect_chance is not None:
        return ""
    return hp.damage(attacker, attacker.max_hp // 10, ctx.battle, source="its life orb")


def apply_miss(ctx: EffectContext) -> str:
    """The consequences of the move failing to land, for the moves that have any."""
    msg = ""
    for variant in catalog.variants_of(ctx.move.effect, MissEffect):
        msg += EffectDispatcher.apply(variant, ctx).msg
    return msg


def apply_pre_damage(ctx: EffectContext) -> EffectOutcome:
    """Run the effects that happen before damage.

    Calling moves end here with a redirect, and a few effects replace the
    rest of the move entirely.

    Returns:
        The collected transcript. `terminal` is set when damage and the post-hit
        effects must be skipped.
    """
    msg = ""
    for variant in catalog.variants_of(ctx.move.effect, PreDamageEffect):
        outcome = EffectDispatcher.apply(variant, ctx)
        msg += outcome.msg
        if outcome.terminal or outcome.redirect is not None:
            return EffectOutcome(msg, outcome.redirect, True, outcome.hits)
    return EffectOutcome(msg)


def _apply_stage_variants(
    ctx: EffectContext, stage: type
) -> Tuple[str, Optional[Redirect]]:
    msg = ""
    pending: Optional[Redirect] = None
    for variant in catalog.variants_of(ctx.move.effect, stage):
        outcome = EffectDispatcher.apply(variant, ctx)
        msg += outcome.msg
        if outcome.redirect is not None:
            pending = outcome.redirect
    return msg, pending


def resolve_post_hit(ctx: EffectContext) -> EffectOutcome:
    """Run every effect that follows the damage step, in stage order.

    Recovery, status, status removal and stat stages come first, then the
    per-hit flinch rolls, restrictions, field changes, protection, Throat
    Spray and the miscellaneous effects. Switching, trapping, self-fainting and
    Life Orb recoil close the move.

    Returns:
        The transcript, and the redirect an Instruct-style effect asked for.
        Such a redirect resolves after everything here has finished. A damaging
        move that landed no hits has no follow-up effects at all.
    """
    if ctx.move.damage_class.is_damaging and ctx.hits == 0:
        return EffectOutcome()
    msg = ""
    pending: Optional[Redirect] = None
    for stage in (RecoveryEffect, StatusEffect, StatusClearEffect, StageEffect):
        stage_msg, _ = _apply_stage_variants(ctx, stage)
        msg += stage_msg
    msg += _flinch_stage(ctx)
    for stage in (VolatileEffect, FieldEffect, ProtectionEffect):
        stage_msg, _ = _apply_stage_variants(ctx, stage)
        msg += stage_msg
    msg += _throat_spray(ctx)
    misc_msg, pending = _apply_stage_variants(ctx, MiscEffect)
    msg += misc_msg
    msg += _switching_stage(ctx)
    for stage in (TrapEffect, SelfFaintEffect):
        stage_msg, _ = _apply_stage_variants(ctx, stage)
        msg += stage_msg
    msg += _life_orb(ctx)
    return EffectOutcome(msg, pending)
