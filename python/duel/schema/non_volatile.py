"""Non-volatile status container."""

from dataclasses import dataclass, field

from python.duel.schema.enums import Status
from python.duel.schema.expiring import ExpiringEffect


@dataclass
class NonVolatileEffect:
    """The single non-volatile status a combatant can carry.

    Attributes:
        current: The active status, Status.NONE when healthy
        sleep_timer: Turns left before a sleeping combatant wakes
        badly_poisoned_turn: Turns spent badly poisoned, scales toxic damage
    """

    current: Status = Status.NONE
    sleep_timer: ExpiringEffect = field(default_factory=ExpiringEffect)
    badly_poisoned_turn: int = 0

    def burn(self) -> bool:
        return self.current is Status.BURN

    def sleep(self) -> bool:
        return self.current is Status.SLEEP

    def poison(self) -> bool:
        return self.current in (Status.POISON, Status.TOXIC)

    def paralysis(self) -> bool:
        return self.current is Status.PARALYSIS

    def freeze(self) -> bool:
        return self.current is Status.FREEZE

    def has_status(self) -> bool:
        return self.current is not Status.NONE

    def reset(self) -> None:
        self.current = Status.NONE
        self.badly_poisoned_turn = 0
        self.sleep_timer.set_turns(0)
