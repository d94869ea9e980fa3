"""State of one side of a duel."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from python.duel.schema.enums import ALL_STAGED_STATS, Stat
from python.duel.schema.expiring import ExpiringEffect, ExpiringItem, ExpiringWish

if TYPE_CHECKING:
    from python.duel.schema.combatant import Combatant

# Volatile state Baton Pass hands over to the replacement.
_BATON_PASS_FIELDS = (
    "confusion",
    "focus_energy",
    "mind_reader",
    "leech_seed",
    "curse",
    "substitute",
    "ingrain",
    "power_trick",
    "power_shift",
    "heal_block",
    "embargo",
    "perish_song",
    "magnet_rise",
    "aqua_ring",
    "telekinesis",
)


@dataclass
class BatonPassState:
    """Stages and volatile effects carried over by Baton Pass."""

    stages: Dict[Stat, int]
    volatile: Dict[str, Any]

    @classmethod
    def capture(cls, poke: "Combatant") -> "BatonPassState":
        return cls(
            stages=dict(poke.stages),
            volatile={name: getattr(poke, name) for name in _BATON_PASS_FIELDS},
        )

    def apply(self, poke: "Combatant") -> None:
        if poke.ability != "curiousmedicine":
            for stat in ALL_STAGED_STATS:
                poke.stages[stat] = self.stages[stat]
        for name, value in self.volatile.items():
            setattr(poke, name, value)


@dataclass(eq=False)
class Side:
    """One trainer's side: the party, the active slot and side conditions.

    Attributes:
        name: Trainer name used in transcripts
        party: Every combatant the trainer brought
        current: The combatant on the field, None between a faint or a
            mid-turn removal and the next send-out
        selected_action: The move slot the active combatant chose this turn, or
            None when it is switching
        mid_turn_remove: The active combatant left the field this turn and is
            waiting for a replacement
        baton_pass: State handed to the next combatant sent out
        last_idx: Party index of the active (or last active) combatant
    """

    name: str
    party: List["Combatant"] = field(default_factory=list)
    current: Optional["Combatant"] = None
    selected_action: Any = None
    selected_switch: bool = False
    mid_turn_remove: bool = False
    baton_pass: Optional[BatonPassState] = None
    last_idx: int = 0

    # Hazards
    spikes: int = 0
    toxic_spikes: int = 0
    stealth_rock: bool = False
    sticky_web: bool = False

    # Barriers and timers
    wish: ExpiringWish = field(default_factory=ExpiringWish)
    aurora_veil: ExpiringEffect = field(default_factory=ExpiringEffect)
    light_screen: ExpiringEffect = field(default_factory=ExpiringEffect)
    reflect: ExpiringEffect = field(default_factory=ExpiringEffect)
    mist: ExpiringEffect = field(default_factory=ExpiringEffect)
    safeguard: ExpiringEffect = field(default_factory=ExpiringEffect)
    tailwind: ExpiringEffect = field(default_factory=ExpiringEffect)
    mud_sport: ExpiringEffect = field(default_factory=ExpiringEffect)
    water_sport: ExpiringEffect = field(default_factory=ExpiringEffect)
    retaliate: ExpiringEffect = field(default_factory=ExpiringEffect)
    future_sight: ExpiringItem = field(default_factory=ExpiringItem)

    healing_wish: bool = False
    lunar_dance: bool = False
    num_fainted: int = 0
    next_substitute: int = 0

    def __post_init__(self) -> None:
        for poke in self.party:
            poke.side = self
        if self.current is None and self.party:
            self.current = self.party[self.last_idx]

    def has_alive(self) -> bool:
        return any(poke.hp > 0 for poke in self.party)

    def alive_indices(self) -> List[int]:
        return [idx for idx, poke in enumerate(self.party) if poke.hp > 0]

    def switch_in(self, slot: int, mid_turn: bool = False) -> "Combatant":
        """Make the combatant at `slot` the active one.

        Args:
            slot: Party index to send out
            mid_turn: Whether the combatant enters in the middle of a turn

        Returns:
            The new active combatant

        Raises:
            ValueError: If the slot is out of range or has fainted
        """
        if not 0 <= slot < len(self.party):
            raise ValueError(f"Party slot {slot} is out of bounds")
        if self.party[slot].hp <= 0:
            raise ValueError(f"Party slot {slot} has no HP left")
        self.current = self.party[slot]
        self.mid_turn_remove = False
        self.last_idx = slot
        if mid_turn:
            self.current.ctx.swapped_in = True
        return self.current

    def end_turn(self) -> str:
        """Tick side barriers, returning the wear-off messages."""
        self.selected_action = None
        self.selected_switch = False
        self.mid_turn_remove = False
        msg = ""
        for barrier, label in (
            (self.aurora_veil, "aurora veil wore off"),
            (self.light_screen, "light screen wore off"),
            (self.reflect, "reflect wore off"),
            (self.mist, "mist wore off"),
            (self.safeguard, "safeguard wore off"),
            (self.tailwind, "tailwind died down"),
            (self.mud_sport, "mud sport wore off"),
            (self.water_sport, "water sport evaporated"),
        ):
            if barrier.next_turn():
                msg += f"{self.name}'s {label}!\n"
        self.retaliate.next_turn()
        return msg
