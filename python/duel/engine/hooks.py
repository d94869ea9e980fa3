"""Ability and item capabilities consulted while a move resolves.

Each ability or item that changes a number the engine computes (type,
priority, power, accuracy, crit stage, damage, stats) registers a hook object
under its normalized name. The engine asks the attacker's ability first, then
the defender's ability (after Mold Breaker style suppression), then the
attacker's item, then the defender's item. Unregistered names get a hook that
changes nothing.

Behaviour that is not a number (status immunities, contact punishments, stage
drop prevention) stays inline with the mechanic it belongs to.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, FrozenSet, Optional, Tuple

from python.duel.data.items import SIGNATURE_ORBS, TYPE_BOOST_ITEMS
from python.duel.engine import classification
from python.duel.schema.enums import (
    DamageClass,
    ElementType,
    Gender,
    Stat,
    Terrain,
    Weather,
)

if TYPE_CHECKING:
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant


@dataclass(frozen=True)
class HitContext:
    """Everything a hook may look at for one use of a move.

    Attributes:
        move: Move being used
        move_type: Effective type of the move for this use
        attacker: User of the move
        defender: Target of the move
        battle: Battle the move is used in
        effectiveness: Type effectiveness of this hit
        critical: Whether this hit is a critical hit
    """

    move: Any
    move_type: ElementType
    attacker: "Combatant"
    defender: "Combatant"
    battle: "Battle"
    effectiveness: float = 1.0
    critical: bool = False

    @property
    def damage_class(self) -> DamageClass:
        return self.move.damage_class


class AbilityHook:
    """Numeric behaviour of one ability. Every method defaults to no change."""

    def modify_type(
        self, move: Any, attacker: "Combatant", battle: "Battle"
    ) -> Optional[ElementType]:
        """Type the ability forces the move into, or None to leave it alone."""
        return None

    def modify_priority(
        self, priority: int, move: Any, move_type: ElementType, attacker: "Combatant"
    ) -> int:
        return priority

    def modify_power(self, power: int, ctx: HitContext) -> int:
        return power

    def modify_incoming_power(self, power: int, ctx: HitContext) -> int:
        return power

    def modify_accuracy(self, accuracy: float, ctx: HitContext) -> float:
        return accuracy

    def modify_incoming_accuracy(self, accuracy: float, ctx: HitContext) -> float:
        return accuracy

    def crit_stage_bonus(self, ctx: HitContext) -> int:
        return 0

    def damage_multiplier(self, ctx: HitContext) -> float:
        return 1.0

    def incoming_damage_multiplier(self, ctx: HitContext) -> float:
        return 1.0

    def modify_stat(
        self, stat: Stat, value: float, owner: "Combatant", battle: "Battle"
    ) -> float:
        return value

    def modify_opponent_stat(
        self, stat: Stat, value: float, owner: "Combatant", battle: "Battle"
    ) -> float:
        """Change a stat of another active combatant, as the ruin abilities do."""
        return value


class ItemHook:
    """Numeric behaviour of one held item. Every method defaults to no change."""

    def modify_power(self, power: int, ctx: HitContext) -> int:
        return power

    def modify_accuracy(self, accuracy: float, ctx: HitContext) -> float:
        return accuracy

    def modify_incoming_accuracy(self, accuracy: float, ctx: HitContext) -> float:
        return accuracy

    def crit_stage_bonus(self, ctx: HitContext) -> int:
        return 0

    def damage_multiplier(self, ctx: HitContext) -> float:
        return 1.0

    def incoming_damage_multiplier(self, ctx: HitContext) -> float:
        return 1.0

    def modify_stat(
        self, stat: Stat, value: float, owner: "Combatant", battle: "Battle"
    ) -> float:
        return value


_NO_ABILITY = AbilityHook()
_NO_ITEM = ItemHook()


def _is_sunny(battle: "Battle") -> bool:
    return battle.weather.get().is_sunny


def _pinch(poke: "Combatant") -> bool:
    return poke.hp <= poke.max_hp // 3


# Abilities


@dataclass(frozen=True)
class TypeConversion(AbilityHook):
    """Refrigerate, Pixilate, Aerilate and Galvanize: normal moves change type."""

    element: ElementType

    def modify_type(self, move, attacker, battle):
        if move.type is ElementType.NORMAL:
            return self.element
        return None

    def modify_power(self, power, ctx):
        if ctx.move.type is ElementType.NORMAL:
            return int(power * 1.2)
        return power


class Normalize(AbilityHook):
    def modify_type(self, move, attacker, battle):
        return ElementType.NORMAL

    def modify_power(self, power, ctx):
        if ctx.move_type is ElementType.NORMAL:
            return int(power * 1.2)
        return power


class LiquidVoice(AbilityHook):
    def modify_type(self, move, attacker, battle):
        if classification.is_sound_based(move):
            return ElementType.WATER
        return None


@dataclass(frozen=True)
class MovePowerBoost(AbilityHook):
    """Boosts moves matching a predicate: Iron Fist, Strong Jaw and the like."""

    predicate: Callable[[HitContext], bool]
    multiplier: float

    def modify_power(self, power, ctx):
        if self.predicate(ctx):
            return int(power * self.multiplier)
        return power


@dataclass(frozen=True)
class TypePowerBoost(AbilityHook):
    """Boosts moves of some types, optionally only in a pinch or a weather."""

    types: FrozenSet[ElementType]
    multiplier: float
    pinch: bool = False
    weather: Optional[Weather] = None

    def modify_power(self, power, ctx):
        if ctx.move_type not in self.types:
            return power
        if self.pinch and not _pinch(ctx.attacker):
            return power
        if self.weather is not None and ctx.battle.weather.get() is not self.weather:
            return power
        return int(power * self.multiplier)


class Rivalry(AbilityHook):
    def modify_power(self, power, ctx):
        genders = (ctx.attacker.gender, ctx.defender.gender)
        if Gender.GENDERLESS in genders:
            return power
        if genders[0] is genders[1]:
            return int(power * 1.25)
        return int(power * 0.75)


class SupremeOverlord(AbilityHook):
    def modify_power(self, power, ctx):
        side = ctx.attacker.side
        if side is None:
            return power
        fainted = sum(1 for poke in side.party if poke.hp == 0)
        if fainted > 0:
            return int(power * (10 + fainted) / 10.0)
        return power


class WaterBubble(AbilityHook):
    def modify_power(self, power, ctx):
        if ctx.move_type is ElementType.WATER:
            return int(power * 2)
        return power

    def modify_incoming_power(self, power, ctx):
        if ctx.move_type is ElementType.FIRE:
            return int(power * 0.5)
        return power


@dataclass(frozen=True)
class PriorityBoost(AbilityHook):
    """Gale Wings, Prankster and Triage."""

    predicate: Callable[[Any, ElementType, "Combatant"], bool]
    amount: int

    def modify_priority(self, priority, move, move_type, attacker):
        if self.predicate(move, move_type, attacker):
            return priority + self.amount
        return priority


@dataclass(frozen=True)
class AccuracyModifier(AbilityHook):
    """Compound Eyes and Victory Star on the attacker."""

    multiplier: float

    def modify_accuracy(self, accuracy, ctx):
        return accuracy * self.multiplier


class Technician(AbilityHook):
    def modify_power(self, power, ctx):
        if power <= 60:
            return int(power * 1.5)
        return power


class Hustle(AbilityHook):
    def modify_accuracy(self, accuracy, ctx):
        if ctx.damage_class is DamageClass.PHYSICAL:
            return accuracy * 0.8
        return accuracy

    def modify_stat(self, stat, value, owner, battle):
        if stat is Stat.ATK:
            return value * 1.5
        return value


@dataclass(frozen=True)
class EvasionInWeather(AbilityHook):
    """Sand Veil and Snow Cloak."""

    weather: Weather

    def modify_incoming_accuracy(self, accuracy, ctx):
        if ctx.battle.weather.get() is self.weather:
            return accuracy * 0.8
        return accuracy


class TangledFeet(AbilityHook):
    def modify_incoming_accuracy(self, accuracy, ctx):
        if ctx.defender.confusion.active():
            return accuracy * 0.5
        return accuracy


class SuperLuck(AbilityHook):
    def crit_stage_bonus(self, ctx):
        return 1


@dataclass(frozen=True)
class DamageModifier(AbilityHook):
    """Damage multipliers of the attacker's ability."""

    predicate: Callable[[HitContext], bool]
    multiplier: float

    def damage_multiplier(self, ctx):
        return self.multiplier if self.predicate(ctx) else 1.0


@dataclass(frozen=True)
class IncomingDamageModifier(AbilityHook):
    """Damage multipliers of the defender's ability."""

    predicate: Callable[[HitContext], bool]
    multiplier: float

    def incoming_damage_multiplier(self, ctx):
        return self.multiplier if self.predicate(ctx) else 1.0


class Fluffy(AbilityHook):
    def incoming_damage_multiplier(self, ctx):
        multiplier = 1.0
        if classification.makes_contact(ctx.move, ctx.attacker):
            multiplier *= 0.5
        if ctx.move_type is ElementType.FIRE:
            multiplier *= 2
        return multiplier


class PunkRock(AbilityHook):
    def damage_multiplier(self, ctx):
        return 1.3 if classification.is_sound_based(ctx.move) else 1.0

    def incoming_damage_multiplier(self, ctx):
        return 0.5 if classification.is_sound_based(ctx.move) else 1.0


@dataclass(frozen=True)
class StatModifier(AbilityHook):
    """Multiplies some of the owner's stats while a condition holds."""

    stats: FrozenSet[Stat]
    multiplier: float
    condition: Callable[["Combatant", "Battle"], bool] = lambda owner, battle: True

    def modify_stat(self, stat, value, owner, battle):
        if stat in self.stats and self.condition(owner, battle):
            return value * self.multiplier
        return value


@dataclass(frozen=True)
class Ruin(AbilityHook):
    """Tablets, Sword, Vessel and Beads of Ruin."""

    stat: Stat

    def modify_opponent_stat(self, stat, value, owner, battle):
        if stat is self.stat:
            return value * 0.75
        return value


@dataclass(frozen=True)
class BoosterAbility(AbilityHook):
    """Protosynthesis and Quark Drive boost the highest stat.

    The boost applies in their field condition, or after Booster Energy was
    consumed. The first stat read outside the condition consumes a held
    Booster Energy.
    """

    condition: Callable[["Battle"], bool]

    def modify_stat(self, stat, value, owner, battle):
        if stat is not owner.highest_raw_stat():
            return value
        multiplier = 1.5 if stat is Stat.SPE else 1.3
        if self.condition(battle) or owner.booster_energy:
            return value * multiplier
        if owner.held_item.holds("boosterenergy"):
            owner.held_item.use()
            owner.booster_energy = True
            return value * multiplier
        return value


_ATK = frozenset({Stat.ATK})
_DEF = frozenset({Stat.DEF})
_SPA = frozenset({Stat.SPA})
_SPD = frozenset({Stat.SPD})
_SPE = frozenset({Stat.SPE})


def _types(*types: ElementType) -> FrozenSet[ElementType]:
    return frozenset(types)


def _full_hp_flying(move, move_type, attacker) -> bool:
    return move_type is ElementType.FLYING and attacker.hp == attacker.max_hp


def _heals(move, move_type, attacker) -> bool:
    return classification.is_affected_by_heal_block(move)


def _poisoned_physical(ctx: HitContext) -> bool:
    return ctx.damage_class is DamageClass.PHYSICAL and ctx.attacker.status.poison()


def _burned_special(ctx: HitContext) -> bool:
    return ctx.damage_class is DamageClass.SPECIAL and ctx.attacker.status.burn()


def _lost_item(owner: "Combatant", battle: "Battle") -> bool:
    return not owner.held_item.has_item() and owner.held_item.ever_had_item


ABILITY_HOOKS: Dict[str, AbilityHook] = {
    # Type changes
    "refrigerate": TypeConversion(ElementType.ICE),
    "pixilate": TypeConversion(ElementType.FAIRY),
    "aerilate": TypeConversion(ElementType.FLYING),
    "galvanize": TypeConversion(ElementType.ELECTRIC),
    "normalize": Normalize(),
    "liquidvoice": LiquidVoice(),
    # Priority
    "galewings": PriorityBoost(_full_hp_flying, 1),
    "prankster": PriorityBoost(
        lambda move, move_type, attacker: move.damage_class is DamageClass.STATUS, 1
    ),
    "triage": PriorityBoost(_heals, 3),
    # Power
    "technician": Technician(),
    "toughclaws": MovePowerBoost(
        lambda ctx: classification.makes_contact(ctx.move, ctx.attacker), 1.3
    ),
    "rivalry": Rivalry(),
    "ironfist": MovePowerBoost(lambda ctx: classification.is_punching(ctx.move), 1.2),
    "strongjaw": MovePowerBoost(lambda ctx: classification.is_biting(ctx.move), 1.5),
    "megalauncher": MovePowerBoost(
        lambda ctx: classification.is_aura_or_pulse(ctx.move), 1.5
    ),
    "sharpness": MovePowerBoost(lambda ctx: classification.is_slicing(ctx.move), 1.5),
    "reckless": MovePowerBoost(
        lambda ctx: ctx.move.effect in (46, 49, 199, 254, 263, 270), 1.2
    ),
    "toxicboost": MovePowerBoost(_poisoned_physical, 1.5),
    "flareboost": MovePowerBoost(_burned_special, 1.5),
    "analytic": MovePowerBoost(lambda ctx: ctx.defender.has_moved, 1.3),
    "battery": MovePowerBoost(lambda ctx: ctx.damage_class is DamageClass.SPECIAL, 1.3),
    "sheerforce": MovePowerBoost(lambda ctx: ctx.move.effect_chance is not None, 1.3),
    "stakeout": MovePowerBoost(lambda ctx: ctx.defender.ctx.swapped_in, 2),
    "supremeoverlord": SupremeOverlord(),
    "dragonsmaw": TypePowerBoost(_types(ElementType.DRAGON), 1.5),
    "transistor": TypePowerBoost(_types(ElementType.ELECTRIC), 1.5),
    "waterbubble": WaterBubble(),
    "overgrow": TypePowerBoost(_types(ElementType.GRASS), 1.5, pinch=True),
    "blaze": TypePowerBoost(_types(ElementType.FIRE), 1.5, pinch=True),
    "torrent": TypePowerBoost(_types(ElementType.WATER), 1.5, pinch=True),
    "swarm": TypePowerBoost(_types(ElementType.BUG), 1.5, pinch=True),
    "sandforce": TypePowerBoost(
        _types(ElementType.ROCK, ElementType.GROUND, ElementType.STEEL),
        1.3,
        weather=Weather.SANDSTORM,
    ),
    "steelworker": TypePowerBoost(_types(ElementType.STEEL), 1.5),
    "steelyspirit": TypePowerBoost(_types(ElementType.STEEL), 1.5),
    "rockypayload": TypePowerBoost(_types(ElementType.ROCK), 1.5),
    # Accuracy and evasion
    "compoundeyes": AccuracyModifier(1.3),
    "hustle": Hustle(),
    "victorystar": AccuracyModifier(1.1),
    "tangledfeet": TangledFeet(),
    "sandveil": EvasionInWeather(Weather.SANDSTORM),
    "snowcloak": EvasionInWeather(Weather.HAIL),
    # Critical hits
    "superluck": SuperLuck(),
    # Damage
    "neuroforce": DamageModifier(lambda ctx: ctx.effectiveness > 1, 1.25),
    "sniper": DamageModifier(lambda ctx: ctx.critical, 1.5),
    "tintedlens": DamageModifier(lambda ctx: ctx.effectiveness < 1, 2),
    "punkrock": PunkRock(),
    "fluffy": Fluffy(),
    "filter": IncomingDamageModifier(lambda ctx: ctx.effectiveness > 1, 0.75),
    "prismarmor": IncomingDamageModifier(lambda ctx: ctx.effectiveness > 1, 0.75),
    "solidrock": IncomingDamageModifier(lambda ctx: ctx.effectiveness > 1, 0.75),
    "icescales": IncomingDamageModifier(
        lambda ctx: ctx.damage_class is DamageClass.SPECIAL, 0.5
    ),
    "heatproof": IncomingDamageModifier(
        lambda ctx: ctx.move_type is ElementType.FIRE, 0.5
    ),
    "purifyingsalt": IncomingDamageModifier(
        lambda ctx: ctx.move_type is ElementType.GHOST, 0.5
    ),
    "dryskin": IncomingDamageModifier(
        lambda ctx: ctx.move_type is ElementType.FIRE, 1.25
    ),
    "multiscale": IncomingDamageModifier(
        lambda ctx: ctx.defender.hp == ctx.defender.max_hp, 0.5
    ),
    "shadowshield": IncomingDamageModifier(
        lambda ctx: ctx.defender.hp == ctx.defender.max_hp, 0.5
    ),
    # Stats
    "guts": StatModifier(_ATK, 1.5, lambda owner, battle: owner.status.has_status()),
    "slowstart": StatModifier(
        frozenset({Stat.ATK, Stat.SPE}),
        0.5,
        lambda owner, battle: owner.active_turns < 5,
    ),
    "hugepower": StatModifier(_ATK, 2),
    "purepower": StatModifier(_ATK, 2),
    "defeatist": StatModifier(
        frozenset({Stat.ATK, Stat.SPA}),
        0.5,
        lambda owner, battle: owner.hp <= owner.max_hp // 2,
    ),
    "gorillatactics": StatModifier(_ATK, 1.5),
    "flowergift": StatModifier(
        frozenset({Stat.ATK, Stat.SPD}), 1.5, lambda owner, battle: _is_sunny(battle)
    ),
    "orichalcumpulse": StatModifier(
        _ATK, 4.0 / 3, lambda owner, battle: _is_sunny(battle)
    ),
    "marvelscale": StatModifier(
        _DEF, 1.5, lambda owner, battle: owner.status.has_status()
    ),
    "furcoat": StatModifier(_DEF, 2),
    "grasspelt": StatModifier(
        _DEF, 1.5, lambda owner, battle: battle.terrain.get() is Terrain.GRASSY
    ),
    "solarpower": StatModifier(_SPA, 1.5, lambda owner, battle: _is_sunny(battle)),
    "hadronengine": StatModifier(
        _SPA, 4.0 / 3, lambda owner, battle: battle.terrain.get() is Terrain.GRASSY
    ),
    "slushrush": StatModifier(
        _SPE, 2, lambda owner, battle: battle.weather.get() is Weather.HAIL
    ),
    "sandrush": StatModifier(
        _SPE, 2, lambda owner, battle: battle.weather.get() is Weather.SANDSTORM
    ),
    "swiftswim": StatModifier(
        _SPE, 2, lambda owner, battle: battle.weather.get().is_rainy
    ),
    "chlorophyll": StatModifier(_SPE, 2, lambda owner, battle: _is_sunny(battle)),
    "unburden": StatModifier(_SPE, 2, _lost_item),
    "quickfeet": StatModifier(
        _SPE, 1.5, lambda owner, battle: owner.status.has_status()
    ),
    "surgesurfer": StatModifier(
        _SPE, 2, lambda owner, battle: battle.terrain.get() is Terrain.ELECTRIC
    ),
    "protosynthesis": BoosterAbility(_is_sunny),
    "quarkdrive": BoosterAbility(
        lambda battle: battle.terrain.get() is Terrain.ELECTRIC
    ),
    "tabletsofruin": Ruin(Stat.ATK),
    "swordofruin": Ruin(Stat.DEF),
    "vesselofruin": Ruin(Stat.SPA),
    "beadsofruin": Ruin(Stat.SPD),
}


# Items


@dataclass(frozen=True)
class TypeBoostItem(ItemHook):
    """Charcoal, Mystic Water, the plates and the like."""

    element: ElementType

    def modify_power(self, power, ctx):
        if ctx.move_type is self.element:
            return int(power * 1.2)
        return power


@dataclass(frozen=True)
class SignatureOrb(ItemHook):
    """Adamant Orb, Griseous Orb, Soul Dew and Lustrous Orb."""

    types: Tuple[ElementType, ...]
    species: FrozenSet[str]

    def modify_power(self, power, ctx):
        if ctx.move_type in self.types and ctx.attacker.species in self.species:
            return int(power * 1.2)
        return power


@dataclass(frozen=True)
class ClassBoostItem(ItemHook):
    """Wise Glasses and Muscle Band."""

    damage_class: DamageClass

    def modify_power(self, power, ctx):
        if ctx.damage_class is self.damage_class:
            return int(power * 1.1)
        return power


class WideLens(ItemHook):
    def modify_accuracy(self, accuracy, ctx):
        return accuracy * 1.1


class ZoomLens(ItemHook):
    def modify_accuracy(self, accuracy, ctx):
        if ctx.defender.has_moved:
            return accuracy * 1.2
        return accuracy


class BrightPowder(ItemHook):
    def modify_incoming_accuracy(self, accuracy, ctx):
        return accuracy * 0.9


class CritItem(ItemHook):
    def crit_stage_bonus(self, ctx):
        return 1


class ExpertBelt(ItemHook):
    def damage_multiplier(self, ctx):
        return 1.2 if ctx.effectiveness > 1 else 1.0


class LifeOrb(ItemHook):
    def damage_multiplier(self, ctx):
        if ctx.damage_class is not DamageClass.STATUS and ctx.move.effect != 149:
            return 1.3
        return 1.0


class MetronomeItem(ItemHook):
    def damage_multiplier(self, ctx):
        return ctx.attacker.metronome.get_buff(ctx.move.name)


class ChilanBerry(ItemHook):
    def incoming_damage_multiplier(self, ctx):
        return 0.5 if ctx.move_type is ElementType.NORMAL else 1.0


@dataclass(frozen=True)
class StatItem(ItemHook):
    """Multiplies some of the holder's stats, optionally for some species only."""

    stats: FrozenSet[Stat]
    multiplier: float
    species: Optional[FrozenSet[str]] = None
    needs_evolution: bool = False

    def modify_stat(self, stat, value, owner, battle):
        if stat not in self.stats:
            return value
        if self.species is not None and owner.species not in self.species:
            return value
        if self.needs_evolution and not owner.can_still_evolve:
            return value
        return value * self.multiplier


ITEM_HOOKS: Dict[str, ItemHook] = {
    "widelens": WideLens(),
    "zoomlens": ZoomLens(),
    "brightpowder": BrightPowder(),
    "scopelens": CritItem(),
    "razorclaw": CritItem(),
    "expertbelt": ExpertBelt(),
    "lifeorb": LifeOrb(),
    "metronome": MetronomeItem(),
    "chilanberry": ChilanBerry(),
    "wiseglasses": ClassBoostItem(DamageClass.SPECIAL),
    "muscleband": ClassBoostItem(DamageClass.PHYSICAL),
    "choiceband": StatItem(_ATK, 1.5),
    "choicespecs": StatItem(_SPA, 1.5),
    "choicescarf": StatItem(_SPE, 1.5),
    "ironball": StatItem(_SPE, 0.5),
    "assaultvest": StatItem(_SPD, 1.5),
    "eviolite": StatItem(frozenset({Stat.DEF, Stat.SPD}), 1.5, needs_evolution=True),
    "lightball": StatItem(frozenset({Stat.ATK, Stat.SPA}), 2, frozenset({"Pikachu"})),
    "thickclub": StatItem(_ATK, 2, frozenset({"Cubone", "Marowak", "Marowak-alola"})),
    "deepseatooth": StatItem(_SPA, 2, frozenset({"Clamperl"})),
    "deepseascale": StatItem(_SPD, 2, frozenset({"Clamperl"})),
}
ITEM_HOOKS.update(
    {name: TypeBoostItem(element) for name, element in TYPE_BOOST_ITEMS.items()}
)
ITEM_HOOKS.update(
    {
        name: SignatureOrb(types, species)
        for name, (types, species) in SIGNATURE_ORBS.items()
    }
)


def ability_hook(name: Optional[str]) -> AbilityHook:
    """The hook registered for an ability, or one that changes nothing."""
    if not name:
        return _NO_ABILITY
    return ABILITY_HOOKS.get(name, _NO_ABILITY)


def item_hook(name: Optional[str]) -> ItemHook:
    """The hook registered for an item, or one that changes nothing."""
    if not name:
        return _NO_ITEM
    return ITEM_HOOKS.get(name, _NO_ITEM)
