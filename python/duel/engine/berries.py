"""When berries get eaten and what eating them does."""

from typing import TYPE_CHECKING, Any, Optional

from python.duel.data.abilities import BERRY_BLOCKING_ABILITIES
from python.duel.data.items import (
    CONFUSION_CURE_BERRIES,
    FLAVOR_BERRIES,
    PINCH_BERRIES,
    STAT_BERRIES,
    STATUS_CURE_BERRIES,
)
from python.duel.engine import hp
from python.duel.engine import stat_stages
from python.duel.engine import status as status_effects
from python.duel.schema.enums import BATTLE_STATS

if TYPE_CHECKING:
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant

_CURE_MESSAGES = {
    "aspearberry": "is no longer frozen",
    "cheriberry": "is no longer paralyzed",
    "chestoberry": "woke up",
    "pechaberry": "is no longer poisoned",
    "rawstberry": "is no longer burned",
}


def _can_eat(poke: "Combatant", other: Optional["Combatant"]) -> bool:
    if poke.hp == 0:
        return False
    if other is not None and other.ability in BERRY_BLOCKING_ABILITIES:
        return False
    return poke.held_item.is_berry()


def should_eat_for_damage(
    poke: "Combatant", other: Optional["Combatant"] = None
) -> bool:
    """Whether HP loss has brought `poke` low enough to eat its berry.

    Pinch berries trigger at a quarter of max HP, Sitrus Berry at half. Gluttony
    moves every berry up to half.
    """
    if not _can_eat(poke, other):
        return False
    item = poke.held_item.get()
    if poke.hp <= poke.max_hp // 4 and item in PINCH_BERRIES:
        return True
    if poke.hp <= poke.max_hp // 2:
        if poke.ability == "gluttony":
            return True
        if item == "sitrusberry":
            return True
    return False


def should_eat_for_status(
    poke: "Combatant", other: Optional["Combatant"] = None
) -> bool:
    if not _can_eat(poke, other):
        return False
    item = poke.held_item.get()
    if item == "lumberry" and poke.status.has_status():
        return True
    cures = STATUS_CURE_BERRIES.get(item)
    if cures is not None and poke.status.current in cures:
        return True
    return item in CONFUSION_CURE_BERRIES and poke.confusion.active()


def should_eat(poke: "Combatant", other: Optional["Combatant"] = None) -> bool:
    return should_eat_for_damage(poke, other) or should_eat_for_status(poke, other)


def eat_berry(
    owner: "Combatant",
    battle: "Battle",
    consumer: Optional["Combatant"] = None,
    attacker: Optional["Combatant"] = None,
    move: Any = None,
) -> str:
    """Eat the berry `owner` is holding.

    Args:
        owner: Combatant holding the berry
        battle: Battle the berry is eaten in
        consumer: Combatant eating it, when it is not the holder (Bug Bite)
        attacker: Combatant whose move triggered the berry
        move: Move that triggered the berry

    Returns:
        Transcript of the berry's effect
    """
    if not owner.held_item.is_berry():
        return ""
    msg = ""
    if consumer is None:
        consumer = owner
    else:
        msg += f"{consumer.name} eats {owner.name}'s berry!\n"

    ability = consumer.ability_for(attacker, move)
    ripe = 2 if ability == "ripen" else 1
    item = owner.held_item.get()
    flavor = FLAVOR_BERRIES.get(item)

    if item == "sitrusberry":
        msg += hp.heal(consumer, ripe * consumer.max_hp // 4, "eating its berry")
    elif flavor is not None:
        msg += hp.heal(consumer, ripe * consumer.max_hp // 3, "eating its berry")
    elif item in STAT_BERRIES:
        msg += stat_stages.append_stat(
            consumer,
            STAT_BERRIES[item],
            ripe,
            battle,
            attacker,
            move,
            "eating its berry",
        )
    elif item == "lansatberry":
        consumer.lansat_berry_ate = True
        msg += f"{consumer.name} is powered up by eating its berry.\n"
    elif item == "micleberry":
        consumer.micle_berry_ate = True
        msg += f"{consumer.name} is powered up by eating its berry.\n"
    elif item == "starfberry":
        stat = battle.rng.choice(BATTLE_STATS)
        msg += stat_stages.append_stat(
            consumer, stat, ripe * 2, battle, attacker, move, "eating its berry", False
        )
    elif item in STATUS_CURE_BERRIES:
        if consumer.status.current in STATUS_CURE_BERRIES[item]:
            consumer.status.reset()
            msg += f"{consumer.name} {_CURE_MESSAGES[item]} after eating its berry!\n"
        else:
            msg += f"{consumer.name}'s berry had no effect!\n"
    elif item == "persimberry":
        if consumer.confusion.active():
            consumer.confusion.set_turns(0)
            msg += f"{consumer.name} is no longer confused after eating its berry!\n"
        else:
            msg += f"{consumer.name}'s berry had no effect!\n"
    elif item == "lumberry":
        consumer.status.reset()
        consumer.confusion.set_turns(0)
        msg += f"{consumer.name}'s statuses were cleared from eating its berry!\n"

    if flavor is not None and consumer.disliked_flavor == flavor:
        msg += status_effects.confuse(
            consumer, battle, attacker, move, "disliking its berry's flavor"
        )
    if ability == "cheekpouch":
        msg += hp.heal(consumer, consumer.max_hp // 3, "its cheek pouch")

    consumer.last_berry = item
    consumer.ate_berry = True
    if ability == "cudchew":
        consumer.cud_chew.set_turns(2)
    if consumer is owner:
        owner.held_item.use()
    else:
        owner.held_item.remove()
    return msg

