"""Per-turn flags of one combatant."""

from dataclasses import dataclass, fields
from typing import Any, Optional, Tuple

from python.duel.schema.enums import DamageClass

# Flags that persist through end_turn().
_PERSISTENT_FLAGS = frozenset({"last_move", "last_move_failed"})

# Barriers that block an incoming move. Endure only prevents fainting.
PROTECTION_FLAGS = (
    "protect",
    "wide_guard",
    "crafty_shield",
    "kings_shield",
    "spiky_shield",
    "mat_block",
    "baneful_bunker",
    "quick_guard",
    "obstruct",
    "silk_trap",
    "burning_bulwark",
)


@dataclass
class TurnContext:
    """Mutable flags describing what a combatant did and suffered this turn.

    The move engine reads and writes these instead of scattering loose booleans
    over the combatant. Everything except `last_move` and `last_move_failed`
    is cleared by `end_turn()`.

    Attributes:
        has_moved: Whether the combatant already acted this turn
        flinched: Whether the combatant flinched before acting
        swapped_in: Whether the combatant entered the field mid-turn
        damaged_this_turn: Whether the combatant took damage this turn
        stat_increased: Whether any of its stages rose this turn
        stat_decreased: Whether any of its stages fell this turn
        last_move: The last move slot the combatant used
        last_move_failed: Whether the last used move failed
        last_move_damage: Damage taken from the last hit this turn and the
            damage class of the move that dealt it
        protect: Protect or Detect raised this turn
        endure: Endure raised this turn
        wide_guard: Wide Guard raised this turn
        crafty_shield: Crafty Shield raised this turn
        kings_shield: King's Shield raised this turn
        spiky_shield: Spiky Shield raised this turn
        mat_block: Mat Block raised this turn
        baneful_bunker: Baneful Bunker raised this turn
        quick_guard: Quick Guard raised this turn
        obstruct: Obstruct raised this turn
        silk_trap: Silk Trap raised this turn
        burning_bulwark: Burning Bulwark raised this turn
        protection_used: A protection move succeeded this turn
        magic_coat: Magic Coat is reflecting status moves this turn
        snatching: Snatch is waiting to steal a move this turn
        roost: The combatant roosted and lost its flying type this turn
        beak_blast: Beak Blast is charging and burns on contact
        powdered: Powder will ignite the next fire move this turn
        grudge: Grudge will drain the PP of a finishing move
        electrify: The next move becomes electric
        ion_deluge: Normal moves become electric this turn
        rage: Rage raises attack whenever the combatant is hit
    """

    has_moved: bool = False
    flinched: bool = False
    swapped_in: bool = False
    damaged_this_turn: bool = False
    stat_increased: bool = False
    stat_decreased: bool = False

    last_move: Optional[Any] = None
    last_move_failed: bool = False
    last_move_damage: Optional[Tuple[int, DamageClass]] = None

    protect: bool = False
    endure: bool = False
    wide_guard: bool = False
    crafty_shield: bool = False
    kings_shield: bool = False
    spiky_shield: bool = False
    mat_block: bool = False
    baneful_bunker: bool = False
    quick_guard: bool = False
    obstruct: bool = False
    silk_trap: bool = False
    burning_bulwark: bool = False
    protection_used: bool = False

    magic_coat: bool = False
    snatching: bool = False
    roost: bool = False
    beak_blast: bool = False
    powdered: bool = False
    grudge: bool = False
    electrify: bool = False
    ion_deluge: bool = False
    rage: bool = False

    def end_turn(self) -> None:
        """Clear every transient flag, keeping the last-move memory."""
        for f in fields(self):
            if f.name in _PERSISTENT_FLAGS:
                continue
            setattr(self, f.name, f.default)

    def clear_protection(self) -> None:
        """Drop every protection flag raised this turn."""
        for name in PROTECTION_FLAGS:
            setattr(self, name, False)
        self.endure = False

    def any_protection(self) -> bool:
        return any(getattr(self, name) for name in PROTECTION_FLAGS)
