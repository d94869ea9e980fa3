"""Inputs and outputs shared by every effect handler."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from python.duel.engine.requests import Redirect
from python.duel.schema.enums import ElementType

if TYPE_CHECKING:
    from python.duel.data.move import MoveInstance
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant


@dataclass(frozen=True)
class EffectContext:
    """One move use as seen by the effect handlers.

    Attributes:
        move: Move slot being used
        attacker: Combatant using it
        defender: Its target
        battle: Battle it happens in
        move_type: Type the move resolved to
        effect_chance: Chance of the secondary effect, None when it never
            triggers
        hits: Number of hits that landed
        use_pp: Whether this is a real use rather than a called or bounced one
    """

    move: "MoveInstance"
    attacker: "Combatant"
    defender: "Combatant"
    battle: "Battle"
    move_type: ElementType
    effect_chance: Optional[int] = None
    hits: int = 0
    use_pp: bool = True

    def roll(self, percent: int) -> bool:
        return self.battle.rng.randint(1, 100) <= percent

    def chance(self) -> bool:
        """Roll for the secondary effect."""
        if self.effect_chance is None:
            return False
        return self.roll(self.effect_chance)


@dataclass(frozen=True)
class EffectOutcome:
    """What applying one or more effect variants produced.

    Attributes:
        msg: Transcript
        redirect: Another move use to resolve
        terminal: The rest of the current move is skipped
        hits: Hits landed by damage the effect dealt itself
    """

    msg: str = ""
    redirect: Optional[Redirect] = None
    terminal: bool = False
    hits: int = 0
