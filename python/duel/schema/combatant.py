"""Mutable state of one combatant during a duel."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from python.duel.data.abilities import (
    ABILITY_IGNORING_ABILITIES,
    IGNORABLE_ABILITIES,
    UNCHANGEABLE_ABILITIES,
    UNGIVEABLE_ABILITIES,
)
from python.duel.data.items import DISLIKED_FLAVOR_BY_NATURE
from python.duel.data.move import MoveInstance
from python.duel.schema.enums import (
    ALL_STAGED_STATS,
    DamageClass,
    ElementType,
    Gender,
    Stat,
)
from python.duel.schema.expiring import ExpiringEffect, ExpiringItem, LockedMove
from python.duel.schema.held_item import HeldItem
from python.duel.schema.non_volatile import NonVolatileEffect
from python.duel.schema.object_name_normalizer import normalize_name
from python.duel.schema.turn_context import TurnContext

if TYPE_CHECKING:
    from python.duel.schema.side_state import Side

_NATURE_UP = {
    "lonely": Stat.ATK, "brave": Stat.ATK, "adamant": Stat.ATK, "naughty": Stat.ATK,
    "bold": Stat.DEF, "relaxed": Stat.DEF, "impish": Stat.DEF, "lax": Stat.DEF,
    "timid": Stat.SPE, "hasty": Stat.SPE, "jolly": Stat.SPE, "naive": Stat.SPE,
    "modest": Stat.SPA, "mild": Stat.SPA, "quiet": Stat.SPA, "rash": Stat.SPA,
    "calm": Stat.SPD, "gentle": Stat.SPD, "sassy": Stat.SPD, "careful": Stat.SPD,
}
_NATURE_DOWN = {
    "lonely": Stat.DEF, "brave": Stat.SPE, "adamant": Stat.SPA, "naughty": Stat.SPD,
    "bold": Stat.ATK, "relaxed": Stat.SPE, "impish": Stat.SPA, "lax": Stat.SPD,
    "timid": Stat.ATK, "hasty": Stat.DEF, "jolly": Stat.SPA, "naive": Stat.SPD,
    "modest": Stat.ATK, "mild": Stat.DEF, "quiet": Stat.SPE, "rash": Stat.SPD,
    "calm": Stat.ATK, "gentle": Stat.DEF, "sassy": Stat.SPE, "careful": Stat.SPA,
}

_TRICK_PARTNER = {Stat.ATK: Stat.DEF, Stat.DEF: Stat.ATK}
_SHIFT_PARTNER = {
    Stat.ATK: Stat.DEF,
    Stat.DEF: Stat.ATK,
    Stat.SPA: Stat.SPD,
    Stat.SPD: Stat.SPA,
}


def calculate_raw_stat(
    base: int, iv: int, ev: int, level: int, nature: float = 1.0
) -> int:
    """Compute a non-HP stat from its base value.

    Example:
        >>> calculate_raw_stat(100, 31, 0, 50)
        120
    """
    return int(int(round((2 * base + iv + ev / 4) * level / 100 + 5)) * nature)


def calculate_max_hp(base: int, iv: int, ev: int, level: int) -> int:
    return int((2 * base + iv + ev // 4) * level / 100) + level + 10


def nature_multiplier(nature: str, stat: Stat) -> float:
    nature = nature.lower()
    if _NATURE_UP.get(nature) is stat:
        return 1.1
    if _NATURE_DOWN.get(nature) is stat:
        return 0.9
    return 1.0


@dataclass
class MetronomeCounter:
    """Consecutive-use counter for the Metronome held item."""

    move_name: str = ""
    count: int = 0

    def reset(self) -> None:
        self.move_name = ""
        self.count = 0

    def use(self, move_name: str) -> None:
        if self.move_name == move_name:
            self.count += 1
        else:
            self.move_name = move_name
            self.count = 1

    def get_buff(self, move_name: str) -> float:
        if self.move_name != move_name:
            return 1.0
        return min(2.0, 1 + 0.2 * self.count)


@dataclass(eq=False)
class Combatant:
    """A combatant taking part in a duel.

    Stats are stored already computed from base stats, IVs, EVs and nature.
    Use `from_base_stats` to build one from species data. Combatants compare by
    identity, so two copies of the same species are never confused with each
    other.

    Attributes:
        name: Display name used in transcripts
        level: Level, 1 through 100
        types: Current element types, mutable by type-changing effects
        stats: Computed attack, defense, special attack, special defense and
            speed before stages
        max_hp: Maximum HP
        hp: Current HP
        moves: Move slots
        ability: Normalized ability name
        species: Species or form name, used by form-dependent effects
        gender: Gender, GENDERLESS for combatants without one
        nature: Nature name, decides which berry flavor it dislikes
        happiness: Friendship value, 0 through 255
        weight: Weight in hectograms
        ivs: Individual values keyed "hp", "atk", "def", "spa", "spd", "spe"
        can_still_evolve: Whether Eviolite applies
        item: Held item name, turned into `held_item` on construction
        ctx: Flags for the current turn
    """

    name: str
    level: int
    types: List[ElementType]
    stats: Dict[Stat, int]
    max_hp: int
    moves: List[MoveInstance] = field(default_factory=list)
    ability: str = ""
    species: str = ""
    gender: Gender = Gender.GENDERLESS
    nature: str = "hardy"
    happiness: int = 255
    weight: int = 100
    ivs: Dict[str, int] = field(default_factory=dict)
    can_still_evolve: bool = False
    item: Optional[str] = None
    hp: int = -1

    ctx: TurnContext = field(default_factory=TurnContext)
    side: Optional["Side"] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.ability = normalize_name(self.ability) if self.ability else ""
        if not self.species:
            self.species = self.name
        if self.hp < 0:
            self.hp = self.max_hp
        self.starting_types: List[ElementType] = list(self.types)
        self.starting_ability = self.ability
        self.starting_moves: List[MoveInstance] = list(self.moves)
        self.starting_stats: Dict[Stat, int] = dict(self.stats)
        self.starting_species = self.species
        self.held_item = HeldItem(self.item, self)
        self.status = NonVolatileEffect()
        self.stages: Dict[Stat, int] = {stat: 0 for stat in ALL_STAGED_STATS}
        self.metronome = MetronomeCounter()
        self.reset_volatile()
        self.ever_sent_out = False
        self.num_hits = 0
        self.last_berry: Optional[str] = None
        self.ate_berry = False
        self.disliked_flavor: Optional[str] = None
        for flavor, natures in DISLIKED_FLAVOR_BY_NATURE.items():
            if self.nature.lower() in natures:
                self.disliked_flavor = flavor

    @classmethod
    def from_base_stats(
        cls,
        name: str,
        level: int,
        types: List[ElementType],
        base_stats: Dict[str, int],
        ivs: Optional[Dict[str, int]] = None,
        evs: Optional[Dict[str, int]] = None,
        nature: str = "hardy",
        **kwargs: Any,
    ) -> "Combatant":
        """Build a combatant from species base stats.

        Args:
            name: Display name
            level: Level
            types: Element types
            base_stats: Base stats keyed "hp", "atk", "def", "spa", "spd", "spe"
            ivs: Individual values with the same keys, 31 when omitted
            evs: Effort values with the same keys, 0 when omitted
            nature: Nature name
            **kwargs: Any other Combatant field

        Returns:
            Combatant with computed stats and full HP
        """
        ivs = dict(ivs or {})
        evs = dict(evs or {})
        for key in ("hp", "atk", "def", "spa", "spd", "spe"):
            ivs.setdefault(key, 31)
            evs.setdefault(key, 0)
        stats = {
            stat: calculate_raw_stat(
                base_stats[stat.value],
                ivs[stat.value],
                evs[stat.value],
                level,
                nature_multiplier(nature, stat),
            )
            for stat in (Stat.ATK, Stat.DEF, Stat.SPA, Stat.SPD, Stat.SPE)
        }
        max_hp = calculate_max_hp(base_stats["hp"], ivs["hp"], evs["hp"], level)
        return cls(
            name=name,
            level=level,
            types=list(types),
            stats=stats,
            max_hp=max_hp,
            ivs=ivs,
            nature=nature,
            **kwargs,
        )

    def reset_volatile(self) -> None:
        """Clear everything that does not survive leaving the field."""
        self.ctx = TurnContext()
        self.status.badly_poisoned_turn = 0
        self.types = list(self.starting_types)
        self.ability = self.starting_ability
        self.moves = list(self.starting_moves)
        self.stats = dict(self.starting_stats)
        self.species = self.starting_species
        for stat in self.stages:
            self.stages[stat] = 0
        self.active_turns = 0
        self.held_item.ever_had_item = self.held_item.has_item()
        self.metronome = MetronomeCounter()
        self.stat_splits: Dict[Stat, int] = {}

        self.minimized = False
        self.choice_move: Optional[MoveInstance] = None
        self.locked_move: Optional[LockedMove] = None
        self.leech_seed = False
        self.stockpile = 0
        self.confusion = ExpiringEffect()
        self.bide: Optional[int] = None
        self.torment = False
        self.imprison = False
        self.disable = ExpiringItem()
        self.taunt = ExpiringEffect()
        self.encore = ExpiringItem()
        self.heal_block = ExpiringEffect()
        self.focus_energy = False
        self.perish_song = ExpiringEffect()
        self.nightmare = False
        self.defense_curl = False
        self.fury_cutter = 0
        self.bind = ExpiringEffect()
        self.substitute = 0
        self.silenced = ExpiringEffect()
        self.mind_reader = ExpiringItem()
        self.destiny_bond = False
        self.destiny_bond_cooldown = ExpiringEffect()
        self.trapping = False
        self.ingrain = False
        self.infatuated: Optional["Combatant"] = None
        self.aqua_ring = False
        self.magnet_rise = ExpiringEffect()
        self.dive = False
        self.dig = False
        self.fly = False
        self.shadow_force = False
        self.lucky_chant = ExpiringEffect()
        self.grounded_by_move = False
        self.charge = ExpiringEffect()
        self.uproar = ExpiringEffect()
        self.power_trick = False
        self.power_shift = False
        self.yawn = ExpiringEffect()
        self.protection_chance = 1
        self.laser_focus = ExpiringEffect()
        self.telekinesis = ExpiringEffect()
        self.embargo = ExpiringEffect()
        self.echoed_voice_power = 40
        self.echoed_voice_used = False
        self.curse = False
        self.fairy_lock = ExpiringEffect()
        self.foresight = False
        self.miracle_eye = False
        self.no_retreat = False
        self.corrosive_gas = False
        self.octolock = False
        self.autotomize = 0
        self.lansat_berry_ate = False
        self.micle_berry_ate = False
        self.tar_shot = False
        self.syrup_bomb = ExpiringEffect()
        self.flash_fire = False
        self.truant_turn = 0
        self.cud_chew = ExpiringEffect()
        self.booster_energy = False
        self.conversion2: Optional[ElementType] = None

    def end_turn(self) -> None:
        """Tick the turn-scoped state forward at the end of a turn."""
        if not self.ctx.protection_used:
            self.protection_chance = 1
        if not self.ctx.swapped_in:
            self.active_turns += 1
        self.ctx.end_turn()
        self.mind_reader.next_turn()
        self.charge.next_turn()
        self.destiny_bond_cooldown.next_turn()
        self.laser_focus.next_turn()
        if not self.echoed_voice_used:
            self.echoed_voice_power = 40
        self.echoed_voice_used = False
        if self.locked_move is not None and self.locked_move.next_turn():
            self.locked_move = None
            self.clear_semi_invulnerable()
        self.fairy_lock.next_turn()
        self.truant_turn += 1
        self.syrup_bomb.next_turn()

    @property
    def has_moved(self) -> bool:
        return self.ctx.has_moved

    @has_moved.setter
    def has_moved(self, value: bool) -> None:
        self.ctx.has_moved = value

    def alive(self) -> bool:
        return self.hp > 0

    def asleep(self) -> bool:
        """Whether the combatant counts as asleep, Comatose included."""
        return self.ability == "comatose" or self.status.sleep()

    def semi_invulnerable(self) -> bool:
        return self.dive or self.dig or self.fly or self.shadow_force

    def clear_semi_invulnerable(self) -> None:
        self.dive = False
        self.dig = False
        self.fly = False
        self.shadow_force = False

    def ability_for(
        self, attacker: Optional["Combatant"] = None, move: Any = None
    ) -> str:
        """The ability that applies against `attacker` using `move`.

        Mold Breaker style abilities, and moves that ignore abilities, switch
        off ignorable abilities of their target. Without both an attacker and a
        move, or when the attacker is this combatant, the ability applies as is.

        Args:
            attacker: The combatant using the move
            move: The move being used

        Returns:
            Normalized ability name, or "" when it is being ignored
        """
        if move is None or attacker is None or attacker is self:
            return self.ability
        if self.ability not in IGNORABLE_ABILITIES:
            return self.ability
        if move.effect in (411, 460):
            return ""
        if attacker.ability in ABILITY_IGNORING_ABILITIES:
            return ""
        if (
            attacker.ability == "myceliummight"
            and move.damage_class is DamageClass.STATUS
        ):
            return ""
        return self.ability

    def ability_changeable(self) -> bool:
        return self.ability not in UNCHANGEABLE_ABILITIES

    def ability_giveable(self) -> bool:
        return self.ability not in UNGIVEABLE_ABILITIES

    def ability_ignorable(self) -> bool:
        return self.ability in IGNORABLE_ABILITIES

    def raw_stat(
        self, stat: Stat, power_trick: bool = True, power_shift: bool = True
    ) -> int:
        """A stat before stages, after Power Trick, Power Shift and splits."""
        if power_trick and self.power_trick and stat in _TRICK_PARTNER:
            return self.raw_stat(_TRICK_PARTNER[stat], False, power_shift)
        if power_shift and self.power_shift and stat in _SHIFT_PARTNER:
            return self.raw_stat(_SHIFT_PARTNER[stat], power_trick, False)
        value = self.stats[stat]
        split = self.stat_splits.get(stat)
        if split is not None:
            value = (value + split) // 2
        return value

    def transform_into(self, other: "Combatant") -> None:
        """Copy the species, stats, moves, ability, types and stages of `other`.

        Copied move slots start with 5 PP. Leaving the field undoes all of it.
        """
        self.choice_move = None
        self.species = other.species
        self.stats = dict(other.stats)
        self.moves = [move.copy() for move in other.moves]
        for move in self.moves:
            move.pp = 5
        self.ability = other.ability
        self.types = list(other.types)
        self.stages = dict(other.stages)

    def highest_raw_stat(self) -> Stat:
        """The battle stat Beast Boost, Protosynthesis and Quark Drive act on."""
        order = (Stat.ATK, Stat.DEF, Stat.SPA, Stat.SPD, Stat.SPE)
        return max(order, key=lambda stat: (self.raw_stat(stat), -order.index(stat)))

    def __repr__(self) -> str:
        return f"Combatant({self.name}, hp={self.hp}/{self.max_hp})"
