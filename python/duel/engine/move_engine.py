"""Resolves one use of a move from start to finish.

`use_move` is the entry point. Moves that call, copy, reflect or repeat other
moves do not recurse: they hand back a `Redirect`, and the driver loop here
resolves the redirected request next, up to `EngineConfig.max_redirect_depth`
redirects.
"""

import dataclasses
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Tuple

from absl import logging

from python.duel.engine import accuracy
from python.duel.engine import classification
from python.duel.engine import fixed_damage
from python.duel.engine import gates
from python.duel.engine import hp
from python.duel.engine import multi_turn
from python.duel.engine import protection
from python.duel.engine import queries
from python.duel.engine import stat_stages
from python.duel.engine.effects import dispatcher
from python.duel.engine.effects.outcome import EffectContext
from python.duel.engine.requests import MoveRequest, MoveResult, Redirect
from python.duel.exceptions import RedirectDepthExceededError
from python.duel.schema.enums import ElementType, Stat

if TYPE_CHECKING:
    from python.duel.data.move import MoveInstance
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant

# Effects that spend an extra PP against Pressure even without targeting the opponent.
_PRESSURE_EFFECTS = frozenset({113, 193, 196, 250, 267})

_CHOICE_ITEMS = ("choicescarf", "choiceband", "choicespecs")

# Effects whose failed use ends a rampage or rolling lock.
_LOCK_ENDING_FAILURES = frozenset({28, 118})

_SELF_KO_EFFECTS = frozenset({8, 444})
_MIND_BLOWN_EFFECT = 420

# Moves that pass through absorbing abilities.
_IGNORES_ABSORB_EFFECT = 459

# (ability, type) -> label. The defender heals 1/4 of its max HP.
_HEALING_ABSORBS = {
    ("voltabsorb", ElementType.ELECTRIC): "volt absorb",
    ("waterabsorb", ElementType.WATER): "water absorb",
    ("dryskin", ElementType.WATER): "dry skin",
    ("eartheater", ElementType.GROUND): "earth eater",
}

# (ability, type) -> (label, stat, delta).
_BOOSTING_ABSORBS = {
    ("lightningrod", ElementType.ELECTRIC): ("lightning rod", Stat.SPA, 1),
    ("motordrive", ElementType.ELECTRIC): ("motor drive", Stat.SPE, 1),
    ("stormdrain", ElementType.WATER): ("storm drain", Stat.SPA, 1),
    ("sapsipper", ElementType.GRASS): ("sap sipper", Stat.ATK, 1),
    ("wellbakedbody", ElementType.FIRE): ("well baked body", Stat.DEF, 2),
}

# (item, type) -> (stat, source). Consumed when a move of that type is about to hit.
_REACTIVE_ITEMS = {
    ("absorbbulb", ElementType.WATER): (Stat.SPA, "its absorb bulb"),
    ("cellbattery", ElementType.ELECTRIC): (Stat.ATK, "its cell battery"),
    ("luminousmoss", ElementType.WATER): (Stat.SPD, "its luminous moss"),
    ("snowball", ElementType.ICE): (Stat.ATK, "its snowball"),
}


@dataclass
class _Resolution:
    """What resolving a single request produced."""

    msg: str = ""
    hits: int = 0
    failed: bool = False
    redirect: Optional[Redirect] = None


def use_move(
    move: "MoveInstance",
    attacker: "Combatant",
    defender: "Combatant",
    battle: "Battle",
    use_pp: bool = True,
    override_sleep: bool = False,
    bounced: bool = False,
) -> MoveResult:
    """Use `move` as `attacker` against `defender`.

    Args:
        move: Move slot being used
        attacker: Combatant using it
        defender: Its target
        battle: Battle it happens in
        use_pp: Whether this is a real use. Called, copied and reflected moves
            pass False: they spend no PP and tick no sleep or freeze timers.
        override_sleep: Let a sleeping attacker act anyway
        bounced: The move was already reflected and cannot be reflected again

    Returns:
        The transcript of everything that happened, with the number of hits the
        move landed and how many redirects were followed

    Raises:
        RedirectDepthExceededError: If the redirect chain exceeds the configured
            depth while strict redirects are enabled
        DataIntegrityError: If a damaging move has no resolvable power
    """
    config = battle.config
    request = MoveRequest(
        move=move,
        attacker=attacker,
        defender=defender,
        use_pp=use_pp,
        override_sleep=override_sleep,
        bounced=bounced,
    )
    msg = ""
    hits = 0
    redirects = 0
    follow_up = False
    saved_has_moved: List[Tuple["Combatant", bool]] = []

    while True:
        if request.restore_has_moved:
            saved_has_moved.append((request.attacker, request.attacker.has_moved))
        if request.reset_has_moved:
            request.attacker.has_moved = False

        step = _resolve(request, battle)
        msg += step.msg
        if not follow_up:
            hits = step.hits
        if request.use_pp:
            request.attacker.ctx.last_move_failed = step.failed

        if step.redirect is None:
            break
        redirects += 1
        if redirects > config.max_redirect_depth:
            next_move = step.redirect.request.move
            if config.strict_redirects:
                raise RedirectDepthExceededError(
                    next_move.name, config.max_redirect_depth
                )
            logging.warning(
                "Redirect chain from %s exceeded depth %s at %s",
                move.name,
                config.max_redirect_depth,
                next_move.name,
            )
            msg += "But it failed!\n"
            break
        logging.debug(
            "Following %s redirect to %s (%s of %s)",
            step.redirect.reason,
            step.redirect.request.move.name,
            redirects,
            config.max_redirect_depth,
        )
        follow_up = follow_up or not step.redirect.replaces
        request = step.redirect.request

    for poke, has_moved in reversed(saved_has_moved):
        poke.has_moved = has_moved

    if config.log_resolutions:
        logging.info(
            "%s used %s on %s: %s hits, %s redirects",
            attacker.name,
            move.name,
            defender.name,
            hits,
            redirects,
        )
    return MoveResult(msg, hits, redirects)


def _spend_pp(
    move: "MoveInstance", attacker: "Combatant", defender: "Combatant"
) -> str:
    move.consume_pp()
    if move.pp != 0 and defender.ability_for(attacker, move) == "pressure":
        if classification.targets_opponent(move) or move.effect in _PRESSURE_EFFECTS:
            move.consume_pp()
    if move.pp == 0:
        return "It ran out of PP!\n"
    return ""


def _lock_choice(move: "MoveInstance", attacker: "Combatant") -> None:
    if attacker.choice_move is not None:
        return
    if attacker.held_item.holds(*_CHOICE_ITEMS) or attacker.ability == "gorillatactics":
        attacker.choice_move = move


def _self_ko(move: "MoveInstance", attacker: "Combatant", battle: "Battle") -> str:
    if move.effect in _SELF_KO_EFFECTS:
        return hp.faint(attacker, battle)
    if move.effect == _MIND_BLOWN_EFFECT:
        return hp.damage(
            attacker, attacker.max_hp // 2, battle, source="its head exploding (tragic)"
        )
    return ""


def _protean(move_type: ElementType, attacker: "Combatant") -> str:
    if move_type is ElementType.TYPELESS:
        return ""
    if attacker.ability not in ("protean", "libero"):
        return ""
    attacker.types = [move_type]
    return (
        f"{attacker.name} transformed into a {move_type.value} type "
        f"using its {attacker.ability}!\n"
    )


def _reflects(request: MoveRequest) -> bool:
    move, attacker, defender = request.move, request.attacker, request.defender
    if request.bounced or not classification.is_affected_by_magic_coat(move):
        return False
    return (
        defender.ability_for(attacker, move) == "magicbounce"
        or defender.ctx.magic_coat
    )


def _absorb(
    move: "MoveInstance",
    move_type: ElementType,
    attacker: "Combatant",
    defender: "Combatant",
    battle: "Battle",
) -> Optional[str]:
    """Let an absorbing ability swallow the move.

    Returns:
        The transcript when the move was absorbed, None otherwise
    """
    if (
        not classification.targets_opponent(move)
        or move.effect == _IGNORES_ABSORB_EFFECT
    ):
        return None
    ability = defender.ability_for(attacker, move)
    label = _HEALING_ABSORBS.get((ability, move_type))
    if label is not None:
        msg = f"{defender.name}'s {label} absorbed the move!\n"
        return msg + hp.heal(defender, defender.max_hp // 4, "absorbing the move")
    boost = _BOOSTING_ABSORBS.get((ability, move_type))
    if boost is not None:
        label, stat, delta = boost
        msg = f"{defender.name}'s {label} absorbed the move!\n"
        return msg + stat_stages.append_stat(
            defender, stat, delta, battle, defender, move
        )
    if ability == "flashfire" and move_type is ElementType.FIRE:
        defender.flash_fire = True
        return f"{defender.name} used its flash fire to buff its fire type moves!\n"
    return None


def _reactive_item(
    move: "MoveInstance",
    move_type: ElementType,
    defender: "Combatant",
    battle: "Battle",
) -> str:
    if defender.substitute > 0:
        return ""
    reaction = _REACTIVE_ITEMS.get((defender.held_item.get(), move_type))
    if reaction is None:
        return ""
    stat, source = reaction
    msg = stat_stages.append_stat(
        defender, stat, 1, battle, defender, move, source=source
    )
    defender.held_item.use()
    return msg


def _miss(reason: str, ctx: EffectContext, msg: str) -> _Resolution:
    logging.debug("%s did not land: %s", ctx.move.name, reason)
    return _Resolution(msg + dispatcher.apply_miss(ctx))


def _dancer(request: MoveRequest) -> Optional[Redirect]:
    move, attacker, defender = request.move, request.attacker, request.defender
    if not request.use_pp or not classification.is_dance(move) or defender.hp <= 0:
        return None
    if defender.ability_for(attacker, move) != "dancer":
        return None
    follow = MoveRequest(
        move=move,
        attacker=defender,
        defender=attacker,
        use_pp=False,
        restore_has_moved=True,
    )
    return Redirect(follow, "dancer", replaces=False)


def _resolve(request: MoveRequest, battle: "Battle") -> _Resolution:
    """Resolve a single request, stopping at the first redirect it produces."""
    move, attacker, defender = request.move, request.attacker, request.defender
    use_pp = request.use_pp
    if attacker.has_moved and use_pp:
        return _Resolution()

    move.used = True
    if use_pp:
        attacker.has_moved = True
        attacker.ctx.last_move = move
        attacker.ctx.beak_blast = False
        attacker.destiny_bond = False
        attacker.clear_semi_invulnerable()

    move_type = queries.get_type(move, attacker, defender, battle)
    effect_chance = queries.get_effect_chance(move, attacker, defender, battle)

    gate = gates.check_status_gates(
        move, attacker, defender, battle, use_pp, request.override_sleep
    )
    msg = gate.msg
    if gate.blocked:
        return _Resolution(msg)

    if not request.bounced:
        msg += f"{attacker.name} used {move.pretty_name}!\n"
        attacker.metronome.use(move.name)
    if attacker.locked_move is None and use_pp:
        msg += _spend_pp(move, attacker, defender)
    if use_pp:
        _lock_choice(move, attacker)

    msg += gates.stance_change(move, attacker)
    powder = gates.powder_explosion(move_type, attacker, battle)
    msg += powder.msg
    if powder.blocked:
        return _Resolution(msg)

    if defender.ctx.snatching and classification.is_snatchable(move):
        msg += f"{defender.name} snatched the move!\n"
        stolen = MoveRequest(
            move=move, attacker=defender, defender=attacker, use_pp=False
        )
        return _Resolution(msg, redirect=Redirect(stolen, "snatch"))

    if not queries.check_executable(move, attacker, defender, battle):
        if move.effect in _LOCK_ENDING_FAILURES:
            attacker.locked_move = None
        logging.debug("%s cannot execute %s", attacker.name, move.name)
        return _Resolution(msg + "But it failed!\n", failed=True)

    commitment = multi_turn.setup_commitment(move, attacker, defender, battle)
    msg += commitment.msg
    if commitment.blocked:
        return _Resolution(msg)

    msg += _self_ko(move, attacker, battle)
    msg += _protean(move_type, attacker)

    if _reflects(request):
        msg += f"It was reflected by {defender.name}'s magic bounce!\n"
        reflected = MoveRequest(
            move=move,
            attacker=defender,
            defender=attacker,
            use_pp=False,
            bounced=True,
            restore_has_moved=True,
        )
        return _Resolution(msg, redirect=Redirect(reflected, "magic bounce"))

    ctx = EffectContext(
        move, attacker, defender, battle, move_type, effect_chance, 0, use_pp
    )
    if not request.bounced and not queries.check_effective(
        move, attacker, defender, battle
    ):
        missed = _miss("no effect", ctx, msg + "It had no effect...\n")
        return dataclasses.replace(missed, failed=True)
    if not protection.check_semi_invulnerable(move, attacker, defender, battle):
        return _miss(
            "semi-invulnerable", ctx, msg + f"{defender.name} avoided the attack!\n"
        )
    gets_through, protect_msg = protection.check_protect(
        move, attacker, defender, battle
    )
    if not gets_through:
        msg += f"{defender.name} was protected against the attack!\n" + protect_msg
        return _miss("protected", ctx, msg)
    if not accuracy.check_hit(move, attacker, defender, battle):
        return _miss("accuracy", ctx, msg + "But it missed!\n")

    absorbed = _absorb(move, move_type, attacker, defender, battle)
    if absorbed is not None:
        return _Resolution(msg + absorbed)
    msg += _reactive_item(move, move_type, defender, battle)

    pre = dispatcher.apply_pre_damage(ctx)
    msg += pre.msg
    if pre.terminal:
        return _Resolution(msg, pre.hits, redirect=pre.redirect)

    damage_msg, hits = fixed_damage.calculate_damage(
        move, attacker, defender, battle, move_type
    )
    msg += damage_msg
    battle.last_move_effect = move.effect

    post = dispatcher.resolve_post_hit(dataclasses.replace(ctx, hits=hits))
    msg += post.msg
    multi_turn.finish_commitment(move, attacker)

    redirect = post.redirect or _dancer(request)
    return _Resolution(msg, hits, redirect=redirect)
