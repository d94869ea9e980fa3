"""Turn-limited effects shared by combatants, sides and the field."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ExpiringEffect:
    """An effect that lasts a number of turns.

    Attributes:
        remaining: Turns left, or None for an effect that never runs out
    """

    remaining: Optional[int] = 0

    def active(self) -> bool:
        if self.remaining is None:
            return True
        return self.remaining > 0

    def next_turn(self) -> bool:
        """Tick the effect down by one turn.

        Returns:
            True if the effect ran out on this tick
        """
        if self.remaining is None or not self.active():
            return False
        self.remaining -= 1
        return not self.active()

    def set_turns(self, turns: Optional[int]) -> None:
        self.remaining = turns


@dataclass
class ExpiringItem(ExpiringEffect):
    """An expiring effect that remembers what it is attached to.

    Disable remembers the disabled move slot, Mind Reader the combatant it
    locked onto, Future Sight the pending attack.
    """

    item: Any = None

    def next_turn(self) -> bool:
        expired = super().next_turn()
        if expired:
            self.item = None
        return expired

    def set(self, item: Any, turns: Optional[int]) -> None:
        self.item = item
        self.set_turns(turns)

    def end(self) -> None:
        self.item = None
        self.set_turns(0)


@dataclass
class ExpiringWish(ExpiringEffect):
    """A delayed heal that lands when its timer runs out."""

    hp: Optional[int] = None

    def next_turn(self) -> int:  # type: ignore[override]
        """Tick the wish down.

        Returns:
            HP to restore this turn, 0 when the wish has not landed yet
        """
        expired = super().next_turn()
        if not expired:
            return 0
        hp, self.hp = self.hp or 0, None
        return hp

    def set(self, hp: int) -> None:
        self.hp = hp
        self.set_turns(2)


@dataclass(eq=False)
class LockedMove(ExpiringEffect):
    """A commitment that forces a combatant to keep using one move.

    Charging moves, rampages and recharge turns are all modelled as a locked
    move. `turn` counts the turns already spent inside the commitment, so a
    two-turn charge move is on its committed turn when `turn == 1`.

    Attributes:
        move: The move slot the combatant is locked into
        turn: Number of turns already completed

    Example:
        >>> lock = LockedMove(move=slot, remaining=2)
        >>> lock.next_turn()
        False
        >>> lock.is_last_turn()
        True
    """

    move: Any = None
    turn: int = 0

    # Locks compare by identity.
    __eq__ = object.__eq__
    __hash__ = object.__hash__

    def next_turn(self) -> bool:
        expired = super().next_turn()
        self.turn += 1
        return expired

    def is_last_turn(self) -> bool:
        return self.remaining == 1
