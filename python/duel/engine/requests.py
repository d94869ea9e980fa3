"""Requests passed between the move engine and the effects that call other moves."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from python.duel.data.move import MoveInstance
    from python.duel.schema.combatant import Combatant


@dataclass(frozen=True)
class MoveRequest:
    """One use of a move, as the move engine resolves it.

    Attributes:
        move: Move slot being used
        attacker: Combatant using it
        defender: Its target
        use_pp: Whether this is a real use that spends PP and ticks timers
        override_sleep: Let a sleeping attacker act anyway
        bounced: The move was already reflected once and cannot bounce again
        reset_has_moved: Clear the attacker's has_moved before resolving
        restore_has_moved: Put the attacker's has_moved back afterwards
    """

    move: "MoveInstance"
    attacker: "Combatant"
    defender: "Combatant"
    use_pp: bool = True
    override_sleep: bool = False
    bounced: bool = False
    reset_has_moved: bool = False
    restore_has_moved: bool = False


@dataclass(frozen=True)
class Redirect:
    """An instruction to resolve another move in place of the current one.

    Attributes:
        request: The move use to resolve next
        reason: Short label of what caused the redirect, for logs
        replaces: Whether the redirected move stands in for the current one.
            Follow-ups such as Instruct and Dancer run after it instead, and
            their hits are not reported as the move's own.
    """

    request: MoveRequest
    reason: str = ""
    replaces: bool = True


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a complete move use.

    Attributes:
        msg: Transcript of everything that happened
        hits: Number of hits the last resolved move landed
        redirects: Number of redirects followed to get there
    """

    msg: str
    hits: int = 0
    redirects: int = 0
