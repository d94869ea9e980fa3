"""Non-volatile status infliction and the volatile statuses inflicted by moves."""

from typing import TYPE_CHECKING, Any, Optional

from absl import logging

from python.duel.data import abilities
from python.duel.engine import berries
from python.duel.engine import classification
from python.duel.engine import stat_stages
from python.duel.engine.stats import is_grounded
from python.duel.schema.enums import ElementType, Gender, Stat, Status, Terrain

if TYPE_CHECKING:
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant

_SLEEP_IMMUNITIES = frozenset({"insomnia", "vitalspirit", "sweetveil"})


def apply_status(
    poke: "Combatant",
    status: Status,
    battle: "Battle",
    attacker: Optional["Combatant"] = None,
    move: Any = None,
    turns: Optional[int] = None,
    force: bool = False,
    source: str = "",
) -> str:
    """Try to inflict a non-volatile status on `poke`.

    Every immunity is checked in one place: an existing status, Comatose,
    Purifying Salt, Leaf Guard in sun, a substitute, Safeguard, Misty Terrain,
    Flower Veil, type immunities and the status-specific abilities. Synchronize
    passes the status back and a matching berry is eaten at once.

    Args:
        poke: Combatant receiving the status
        status: Status to inflict, never Status.NONE
        battle: Battle the status is inflicted in
        attacker: Combatant causing the status, `poke` itself for self-inflicted
        move: Move causing the status
        turns: Sleep duration, rolled 2 to 4 when omitted
        force: Replace an existing status instead of failing
        source: Cause appended to the message as " from {source}"

    Returns:
        Transcript of the attempt
    """
    label = status.display_name
    suffix = f" from {source}" if source else ""
    ability = poke.ability_for(attacker, move)

    if poke.status.has_status() and not force:
        return f"{poke.name} already has a status, it can't get {label} too!\n"
    if ability == "comatose":
        return f"{poke.name} already has a status, it can't get {label} too!\n"
    if ability == "purifyingsalt":
        return (
            f"{poke.name}'s purifying salt protects it from being inflicted "
            f"with {label}!\n"
        )
    if ability == "leafguard" and battle.weather.get().is_sunny:
        return (
            f"{poke.name}'s leaf guard protects it from being inflicted "
            f"with {label}!\n"
        )
    if (
        poke.substitute > 0
        and attacker is not poke
        and (move is None or classification.is_affected_by_substitute(move))
    ):
        return (
            f"{poke.name}'s substitute protects it from being inflicted "
            f"with {label}!\n"
        )
    if (
        poke.side is not None
        and poke.side.safeguard.active()
        and attacker is not poke
        and (attacker is None or attacker.ability != "infiltrator")
    ):
        return (
            f"{poke.name}'s safeguard protects it from being inflicted "
            f"with {label}!\n"
        )
    if battle.terrain.get() is Terrain.MISTY and is_grounded(
        poke, battle, attacker, move
    ):
        return (
            f"The misty terrain protects {poke.name} from being inflicted "
            f"with {label}!\n"
        )
    if ability == "flowerveil" and ElementType.GRASS in poke.types:
        return (
            f"{poke.name}'s flower veil protects it from being inflicted "
            f"with {label}!\n"
        )
    if poke.species == "Minior":
        return "Minior's hard shell protects it from status effects!\n"

    msg = ""
    if status is Status.BURN:
        if ElementType.FIRE in poke.types:
            return f"{poke.name} is a fire type and can't be burned!\n"
        if ability in ("waterveil", "waterbubble"):
            return (
                f"{poke.name}'s {abilities.display_name(ability)} prevents it "
                "from getting burned!\n"
            )
        poke.status.current = status
        msg += f"{poke.name} was burned{suffix}!\n"
    elif status is Status.SLEEP:
        if ability in _SLEEP_IMMUNITIES:
            return f"{poke.name}'s {abilities.display_name(ability)} keeps it awake!\n"
        if battle.terrain.get() is Terrain.ELECTRIC and is_grounded(
            poke, battle, attacker, move
        ):
            return f"The terrain is too electric for {poke.name} to fall asleep!\n"
        if any(active.uproar.active() for active in battle.active_combatants()):
            return f"An uproar keeps {poke.name} from falling asleep!\n"
        if turns is None:
            turns = battle.rng.randint(2, 4)
        if ability == "earlybird":
            turns //= 2
        poke.status.current = status
        poke.status.sleep_timer.set_turns(turns)
        msg += f"{poke.name} fell asleep{suffix}!\n"
    elif status in (Status.POISON, Status.TOXIC):
        if attacker is None or attacker.ability != "corrosion":
            if ElementType.STEEL in poke.types:
                return f"{poke.name} is a steel type and can't be poisoned!\n"
            if ElementType.POISON in poke.types:
                return f"{poke.name} is a poison type and can't be poisoned!\n"
        if ability in ("immunity", "pastelveil"):
            return (
                f"{poke.name}'s {abilities.display_name(ability)} keeps it from "
                "being poisoned!\n"
            )
        poke.status.current = status
        badly = " badly" if status is Status.TOXIC else ""
        msg += f"{poke.name} was{badly} poisoned{suffix}!\n"
        if (
            move is not None
            and attacker is not None
            and attacker.ability == "poisonpuppeteer"
        ):
            msg += confuse(
                poke, battle, attacker, source=f"{attacker.name}'s poison puppeteer"
            )
    elif status is Status.PARALYSIS:
        if ElementType.ELECTRIC in poke.types:
            return f"{poke.name} is an electric type and can't be paralyzed!\n"
        if ability == "limber":
            return f"{poke.name}'s limber keeps it from being paralyzed!\n"
        poke.status.current = status
        msg += f"{poke.name} was paralyzed{suffix}!\n"
    elif status is Status.FREEZE:
        if ElementType.ICE in poke.types:
            return f"{poke.name} is an ice type and can't be frozen!\n"
        if ability == "magmaarmor":
            return f"{poke.name}'s magma armor keeps it from being frozen!\n"
        if battle.weather.get().is_sunny:
            return f"It's too sunny to freeze {poke.name}!\n"
        poke.status.current = status
        msg += f"{poke.name} was frozen solid{suffix}!\n"
    else:
        raise ValueError(f"Cannot inflict {status}")

    logging.debug("%s is now %s", poke.name, status.value)
    if ability == "synchronize" and attacker is not None and attacker is not poke:
        msg += apply_status(
            attacker, status, battle, poke, source=f"{poke.name}'s synchronize"
        )
    if berries.should_eat_for_status(poke, attacker):
        msg += berries.eat_berry(poke, battle, attacker=attacker, move=move)
    return msg


def confuse(
    poke: "Combatant",
    battle: "Battle",
    attacker: Optional["Combatant"] = None,
    move: Any = None,
    source: str = "",
) -> str:
    """Confuse `poke` for 2 to 5 turns."""
    if poke.substitute > 0 and (
        move is None or classification.is_affected_by_substitute(move)
    ):
        return ""
    if poke.confusion.active():
        return ""
    if poke.ability_for(attacker, move) == "owntempo":
        return ""
    poke.confusion.set_turns(battle.rng.randint(2, 5))
    suffix = f" from {source}" if source else ""
    msg = f"{poke.name} is confused{suffix}!\n"
    if berries.should_eat_for_status(poke, attacker):
        msg += berries.eat_berry(poke, battle, attacker=attacker, move=move)
    return msg


def flinch(
    poke: "Combatant",
    battle: "Battle",
    attacker: Optional["Combatant"] = None,
    move: Any = None,
    source: str = "",
) -> str:
    if poke.substitute > 0 and (
        move is None or classification.is_affected_by_substitute(move)
    ):
        return ""
    if poke.ability_for(attacker, move) == "innerfocus":
        return f"{poke.name} resisted the urge to flinch with its inner focus!\n"
    poke.ctx.flinched = True
    suffix = f" from {source}" if source else ""
    msg = f"{poke.name} flinched{suffix}!\n"
    if poke.ability == "steadfast":
        msg += stat_stages.append_stat(
            poke, Stat.SPE, 1, battle, poke, source="its steadfast"
        )
    return msg


def infatuate(
    poke: "Combatant",
    attacker: "Combatant",
    battle: "Battle",
    move: Any = None,
    source: str = "",
) -> str:
    """Make `poke` fall for `attacker`.

    Fails silently between combatants of the same gender, or when either of
    them is genderless.
    """
    if poke.infatuated is attacker:
        return ""
    if Gender.GENDERLESS in (poke.gender, attacker.gender):
        return ""
    if poke.gender is attacker.gender:
        return ""
    ability = poke.ability_for(attacker, move)
    if ability == "oblivious":
        return f"{poke.name} is too oblivious to fall in love!\n"
    if ability == "aromaveil":
        return f"{poke.name}'s aroma veil protects it from being infatuated!\n"
    poke.infatuated = attacker
    suffix = f" from {source}" if source else ""
    msg = f"{poke.name} fell in love{suffix}!\n"
    if poke.held_item.holds("destinyknot"):
        msg += infatuate(attacker, poke, battle, source=f"{poke.name}'s destiny knot")
    return msg


def cure(poke: "Combatant") -> str:
    """Clear the non-volatile status, returning a message when there was one."""
    if not poke.status.has_status():
        return ""
    removed = poke.status.current.display_name
    poke.status.reset()
    return f"{poke.name}'s {removed} was cured!\n"
