"""Mutable state of a whole duel."""

import random
from dataclasses import dataclass, field
from typing import List, Optional

from python.duel.config import DEFAULT_CONFIG, EngineConfig
from python.duel.data.move import MoveTemplate
from python.duel.data.type_chart import TypeChart
from python.duel.schema.combatant import Combatant
from python.duel.schema.expiring import ExpiringEffect
from python.duel.schema.field_state import TerrainState, WeatherState
from python.duel.schema.side_state import Side


@dataclass(eq=False)
class Battle:
    """Both sides of a duel plus everything shared between them.

    All randomness used while resolving moves is drawn from `rng`. Tests swap
    it for a seeded or scripted `random.Random`.

    Attributes:
        side1: First side
        side2: Second side
        config: Engine settings
        type_chart: Type matchup table
        metronome_moves: Pool Metronome draws from
        rng: Random source for every probabilistic check
        weather: Weather state
        terrain: Terrain state
        last_move_effect: Effect id of the last move that resolved, read by
            Echoed Voice style combos
    """

    side1: Side
    side2: Side
    config: EngineConfig = DEFAULT_CONFIG
    type_chart: TypeChart = field(default_factory=TypeChart)
    metronome_moves: List[MoveTemplate] = field(default_factory=list)
    inverse_battle: bool = False
    rng: Optional[random.Random] = None

    def __post_init__(self) -> None:
        if self.rng is None:
            self.rng = random.Random(self.config.random_seed)
        self.weather = WeatherState(self)
        self.terrain = TerrainState()

        # Field-wide timers
        self.gravity = ExpiringEffect()
        self.trick_room = ExpiringEffect()
        self.magic_room = ExpiringEffect()
        self.wonder_room = ExpiringEffect()

        self.plasma_fists = False
        self.last_move_effect: Optional[int] = None
        self.turn = 1
        for side in (self.side1, self.side2):
            for poke in side.party:
                poke.side = side
                poke.held_item.battle = self

    @property
    def sides(self) -> List[Side]:
        return [self.side1, self.side2]

    def active_combatants(self) -> List[Combatant]:
        return [side.current for side in self.sides if side.current is not None]

    def side_of(self, poke: Combatant) -> Side:
        """The side `poke` belongs to.

        Raises:
            ValueError: If the combatant is on neither side
        """
        if poke.side is self.side1 or poke in self.side1.party:
            return self.side1
        if poke.side is self.side2 or poke in self.side2.party:
            return self.side2
        raise ValueError(f"{poke.name} is not part of this battle")

    def opponent_side_of(self, poke: Combatant) -> Side:
        return self.side2 if self.side_of(poke) is self.side1 else self.side1

    def opponent_of(self, poke: Combatant) -> Optional[Combatant]:
        return self.opponent_side_of(poke).current

    def end_turn(self) -> str:
        """Advance every turn-limited effect by one turn.

        Only timer bookkeeping happens here. Residual damage and healing belong
        to the caller driving the turn order.

        Returns:
            Transcript of effects that wore off
        """
        msg = ""
        if self.weather.next_turn():
            msg += "The weather cleared!\n"
        if self.terrain.next_turn():
            msg += "The terrain cleared!\n"
        if self.gravity.next_turn():
            msg += "Gravity returns to normal!\n"
        if self.trick_room.next_turn():
            msg += "The twisted dimensions returned to normal!\n"
        if self.magic_room.next_turn():
            msg += "Items are no longer suppressed!\n"
        if self.wonder_room.next_turn():
            msg += "Defense and special defense are no longer swapped!\n"
        for side in self.sides:
            msg += side.end_turn()
            if side.current is not None:
                side.current.end_turn()
        self.turn += 1
        return msg
