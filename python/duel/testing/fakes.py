"""Builders and a scripted random source for duel engine tests."""

import random
from collections import defaultdict, deque
from typing import Any, Deque, Dict, Iterable, Optional, Sequence

from python.duel.config import DEFAULT_CONFIG, EngineConfig
from python.duel.data.move import MoveInstance, MoveTemplate
from python.duel.schema.battle_state import Battle
from python.duel.schema.combatant import Combatant
from python.duel.schema.enums import DamageClass, ElementType, MoveTarget, Stat
from python.duel.schema.side_state import Side

T = ElementType
STATUS = DamageClass.STATUS
PHYSICAL = DamageClass.PHYSICAL
SPECIAL = DamageClass.SPECIAL


class ScriptedRandom(random.Random):
    """A random source whose draws are decided by the test.

    Values queued with `queue` are returned first, per method. Once a method's
    queue is empty its draws fall back to `roll`, a fraction in [0, 1) mapped
    onto the requested range: 0.0 always picks the lowest value, 0.99 the
    highest.

    With the default roll of 0.5 moves of 50 accuracy or more hit, nothing
    crits, no secondary effect below 51% triggers and status gates never
    stop a move.

    Example:
        >>> rng = ScriptedRandom().queue("randint", 1)
        >>> rng.randint(1, 100), rng.randint(1, 100)
        (1, 51)
    """

    def __init__(self, roll: float = 0.5):
        super().__init__(0)
        self.roll = roll
        self._queued: Dict[str, Deque[Any]] = defaultdict(deque)

    def queue(self, method: str, *values: Any) -> "ScriptedRandom":
        self._queued[method].extend(values)
        return self

    def _pop(self, method: str) -> Optional[Deque[Any]]:
        queued = self._queued[method]
        return queued if queued else None

    def _scaled(self, count: int) -> int:
        return min(count - 1, int(self.roll * count))

    def random(self) -> float:
        queued = self._pop("random")
        return queued.popleft() if queued else self.roll

    def randrange(self, start: int, stop: Optional[int] = None, step: int = 1) -> int:
        queued = self._pop("randrange")
        if queued:
            return queued.popleft()
        if stop is None:
            start, stop = 0, start
        count = (stop - start + step - 1) // step
        return start + step * self._scaled(count)

    def randint(self, a: int, b: int) -> int:
        queued = self._pop("randint")
        if queued:
            return queued.popleft()
        return a + self._scaled(b - a + 1)

    def choice(self, seq: Sequence[Any]) -> Any:
        queued = self._pop("choice")
        if queued:
            return queued.popleft()
        return seq[self._scaled(len(seq))]


# name -> keyword arguments for MoveTemplate.
_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "tackle": dict(
        id=33,
        power=40,
        pp=35,
        accuracy=100,
        type=T.NORMAL,
        damage_class=PHYSICAL,
        effect=1,
    ),
    "ember": dict(
        id=52,
        power=40,
        pp=25,
        accuracy=100,
        type=T.FIRE,
        damage_class=SPECIAL,
        effect=5,
        effect_chance=10,
    ),
    "thunderbolt": dict(
        id=85,
        power=90,
        pp=15,
        accuracy=100,
        type=T.ELECTRIC,
        damage_class=SPECIAL,
        effect=7,
        effect_chance=10,
    ),
    "thunder-wave": dict(
        id=86,
        power=None,
        pp=20,
        accuracy=90,
        type=T.ELECTRIC,
        damage_class=STATUS,
        effect=68,
    ),
    "earthquake": dict(
        id=89,
        power=100,
        pp=10,
        accuracy=100,
        type=T.GROUND,
        damage_class=PHYSICAL,
        effect=1,
        target=MoveTarget.ALL_OTHER_POKEMON,
    ),
    "fissure": dict(
        id=90,
        power=None,
        pp=5,
        accuracy=30,
        type=T.GROUND,
        damage_class=PHYSICAL,
        effect=39,
    ),
    "growl": dict(
        id=45,
        power=None,
        pp=40,
        accuracy=100,
        type=T.NORMAL,
        damage_class=STATUS,
        effect=19,
        target=MoveTarget.ALL_OPPONENTS,
    ),
    "swords-dance": dict(
        id=14,
        power=None,
        pp=20,
        accuracy=None,
        type=T.NORMAL,
        damage_class=STATUS,
        effect=51,
        target=MoveTarget.USER,
    ),
    "protect": dict(
        id=182,
        power=None,
        pp=10,
        accuracy=None,
        priority=4,
        type=T.NORMAL,
        damage_class=STATUS,
        effect=112,
        target=MoveTarget.USER,
    ),
    "metronome": dict(
        id=118,
        power=None,
        pp=10,
        accuracy=None,
        type=T.NORMAL,
        damage_class=STATUS,
        effect=84,
        target=MoveTarget.USER,
    ),
    "sleep-talk": dict(
        id=214,
        power=None,
        pp=10,
        accuracy=None,
        type=T.NORMAL,
        damage_class=STATUS,
        effect=98,
        target=MoveTarget.USER,
    ),
    "instruct": dict(
        id=689,
        power=None,
        pp=15,
        accuracy=None,
        type=T.PSYCHIC,
        damage_class=STATUS,
        effect=403,
    ),
    "magic-coat": dict(
        id=277,
        power=None,
        pp=15,
        accuracy=None,
        priority=4,
        type=T.PSYCHIC,
        damage_class=STATUS,
        effect=184,
        target=MoveTarget.USER,
    ),
    "snatch": dict(
        id=289,
        power=None,
        pp=10,
        accuracy=None,
        priority=4,
        type=T.DARK,
        damage_class=STATUS,
        effect=196,
        target=MoveTarget.USER,
    ),
    "solar-beam": dict(
        id=76,
        power=120,
        pp=10,
        accuracy=100,
        type=T.GRASS,
        damage_class=SPECIAL,
        effect=152,
    ),
    "feather-dance": dict(
        id=297,
        power=None,
        pp=15,
        accuracy=100,
        type=T.FLYING,
        damage_class=STATUS,
        effect=59,
    ),
    "spikes": dict(
        id=191,
        power=None,
        pp=20,
        accuracy=None,
        type=T.GROUND,
        damage_class=STATUS,
        effect=113,
        target=MoveTarget.OPPONENTS_FIELD,
    ),
    "fake-out": dict(
        id=252,
        power=40,
        pp=10,
        accuracy=100,
        priority=3,
        type=T.NORMAL,
        damage_class=PHYSICAL,
        effect=159,
        effect_chance=100,
    ),
    "roar": dict(
        id=46,
        power=None,
        pp=20,
        accuracy=None,
        priority=-6,
        type=T.NORMAL,
        damage_class=STATUS,
        effect=29,
    ),
}


def make_template(name: str, **overrides: Any) -> MoveTemplate:
    """A move template by name, with any field overridden.

    Names outside the built-in table need every required field in
    `overrides`.
    """
    fields = dict(_TEMPLATES.get(name, {}))
    fields.update(overrides)
    fields.setdefault("priority", 0)
    return MoveTemplate(name=name, **fields)


def make_move(name: str, **overrides: Any) -> MoveInstance:
    return MoveInstance.from_template(make_template(name, **overrides))


def make_combatant(
    name: str = "Testmon",
    level: int = 50,
    types: Iterable[ElementType] = (ElementType.NORMAL,),
    hp: int = 200,
    atk: int = 100,
    defense: int = 100,
    spa: int = 100,
    spd: int = 100,
    spe: int = 100,
    moves: Iterable[str] = ("tackle",),
    **kwargs: Any,
) -> Combatant:
    """A combatant with flat stats and the named moves from the template table."""
    return Combatant(
        name=name,
        level=level,
        types=list(types),
        stats={
            Stat.ATK: atk,
            Stat.DEF: defense,
            Stat.SPA: spa,
            Stat.SPD: spd,
            Stat.SPE: spe,
        },
        max_hp=hp,
        moves=[make_move(move) for move in moves],
        **kwargs,
    )


def make_battle(
    attacker: Combatant,
    defender: Combatant,
    rng: Optional[random.Random] = None,
    config: EngineConfig = DEFAULT_CONFIG,
    attacker_bench: Iterable[Combatant] = (),
    defender_bench: Iterable[Combatant] = (),
) -> Battle:
    """A battle with `attacker` and `defender` active on opposite sides."""
    return Battle(
        side1=Side(name="Player 1", party=[attacker, *attacker_bench]),
        side2=Side(name="Player 2", party=[defender, *defender_bench]),
        config=config,
        rng=rng if rng is not None else ScriptedRandom(),
    )
