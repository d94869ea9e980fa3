"""Tagged variants describing what a move effect does.

Every move effect id maps to an ordered tuple of these variants in
`catalog.py`. The base class a variant derives from decides the stage it runs
in, and `dispatcher.py` interprets each one.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from python.duel.schema.enums import ElementType, Stat, Status, Terrain, Weather

StatDeltas = Tuple[Tuple[Stat, int], ...]


class EffectVariant:
    """Base class of every effect variant."""


# Stage base classes, in the order `dispatcher.resolve_post_hit` runs them.


class MissEffect(EffectVariant):
    """Consequence of the move failing to land."""


class PreDamageEffect(EffectVariant):
    """Runs before damage is dealt, and may replace the move entirely."""


class RecoveryEffect(EffectVariant):
    """Healing and stored-energy effects."""


class StatusEffect(EffectVariant):
    """Non-volatile status and confusion."""


class StatusClearEffect(EffectVariant):
    """Status removal."""


class StageEffect(EffectVariant):
    """Stat stage changes."""


class FlinchEffect(EffectVariant):
    """Flinching the target."""


class VolatileEffect(EffectVariant):
    """Move restrictions placed on the target."""


class FieldEffect(EffectVariant):
    """Weather and terrain."""


class ProtectionEffect(EffectVariant):
    """Protection moves raised by the user."""


class MiscEffect(EffectVariant):
    """Everything else that runs after a hit."""


class SwitchEffect(EffectVariant):
    """Forced or voluntary switching."""


class TrapEffect(EffectVariant):
    """Preventing escape."""


class SelfFaintEffect(EffectVariant):
    """The user faints after using the move."""


# Miss consequences


@dataclass(frozen=True)
class ResetFuryCutter(MissEffect):
    pass


@dataclass(frozen=True)
class CrashDamage(MissEffect):
    """The user takes a share of its max HP when the move misses."""

    denominator: int = 2


@dataclass(frozen=True)
class DropCommitment(MissEffect):
    """A rampage or rolling move ends its lock when it misses."""


# Pre-damage


@dataclass(frozen=True)
class CallRandomMove(PreDamageEffect):
    pass


@dataclass(frozen=True)
class BreakScreens(PreDamageEffect):
    pass


@dataclass(frozen=True)
class CallSleepingMove(PreDamageEffect):
    pass


@dataclass(frozen=True)
class CopyTargetLastMove(PreDamageEffect):
    pass


@dataclass(frozen=True)
class CopyTargetChoice(PreDamageEffect):
    pass


@dataclass(frozen=True)
class CallPartyMove(PreDamageEffect):
    pass


@dataclass(frozen=True)
class StealBoosts(PreDamageEffect):
    pass


@dataclass(frozen=True)
class ForeseeAttack(PreDamageEffect):
    turns: int = 3


@dataclass(frozen=True)
class GiftRoll(PreDamageEffect):
    pass


@dataclass(frozen=True)
class BurnBerry(PreDamageEffect):
    pass


@dataclass(frozen=True)
class AnnounceItemStrike(PreDamageEffect):
    pass


# Recovery


@dataclass(frozen=True)
class Stockpile(RecoveryEffect):
    pass


@dataclass(frozen=True)
class ReleaseStockpile(RecoveryEffect):
    """Spend the stockpile, healing when `heal` is set."""

    heal: bool = False


@dataclass(frozen=True)
class HealUser(RecoveryEffect):
    numerator: int = 1
    denominator: int = 2


@dataclass(frozen=True)
class HealUserByWeather(RecoveryEffect):
    pass


@dataclass(frozen=True)
class HealUserBoosted(RecoveryEffect):
    """Heal 1/2, or 2/3 under the given weather or terrain."""

    weather: Optional[Weather] = None
    terrain: Optional[Terrain] = None


@dataclass(frozen=True)
class HealTarget(RecoveryEffect):
    pass


@dataclass(frozen=True)
class HealByTargetAttack(RecoveryEffect):
    pass


@dataclass(frozen=True)
class CureTargetHealUser(RecoveryEffect):
    pass


@dataclass(frozen=True)
class PlantSeed(RecoveryEffect):
    pass


@dataclass(frozen=True)
class MakeWish(RecoveryEffect):
    pass


# Status


@dataclass(frozen=True)
class InflictStatus(StatusEffect):
    """Inflict `status` on the target.

    Attributes:
        status: Status to inflict
        chance: Roll against the effect chance first
        requires_stat_raised: Only when the target's stats rose this turn
    """

    status: Status
    chance: bool = False
    requires_stat_raised: bool = False


@dataclass(frozen=True)
class InflictRandomStatus(StatusEffect):
    choices: Tuple[Status, ...]


@dataclass(frozen=True)
class PutToSleep(StatusEffect):
    """Put the target to sleep. A signature move only works for its owner."""

    chance: bool = False
    signature_move: Optional[int] = None
    signature_species: str = ""


@dataclass(frozen=True)
class Rest(StatusEffect):
    turns: int = 3


@dataclass(frozen=True)
class Confuse(StatusEffect):
    chance: bool = False
    requires_stat_raised: bool = False


@dataclass(frozen=True)
class RampageFatigue(StatusEffect):
    pass


# Status clear


@dataclass(frozen=True)
class ClearUserStatus(StatusClearEffect):
    pass


@dataclass(frozen=True)
class CureTargetBurn(StatusClearEffect):
    pass


# Stat stages


@dataclass(frozen=True)
class StatChange(StageEffect):
    """Change stat stages of the user or the target.

    Attributes:
        changes: (stat, delta) pairs applied in order
        on_user: Whether the user's stages change rather than the target's
        chance: Roll once against the effect chance first
        fixed_chance: Roll against this percentage instead
        requires_target_poisoned: Only when the target is poisoned
    """

    changes: StatDeltas
    on_user: bool = True
    chance: bool = False
    fixed_chance: Optional[int] = None
    requires_target_poisoned: bool = False


@dataclass(frozen=True)
class ResetStages(StageEffect):
    include_user: bool = True


@dataclass(frozen=True)
class SacrificeBoost(StageEffect):
    """Pay a share of max HP to change the user's stages."""

    denominator: int
    changes: StatDeltas


@dataclass(frozen=True)
class SunBoost(StageEffect):
    stats: Tuple[Stat, ...]


@dataclass(frozen=True)
class RandomSharpRaise(StageEffect):
    delta: int = 2


@dataclass(frozen=True)
class BalancedRaise(StageEffect):
    pass


# Flinch


@dataclass(frozen=True)
class Flinch(FlinchEffect):
    pass


# Volatile restrictions


@dataclass(frozen=True)
class DisableMove(VolatileEffect):
    pass


@dataclass(frozen=True)
class Taunt(VolatileEffect):
    pass


@dataclass(frozen=True)
class Encore(VolatileEffect):
    turns: int = 4


@dataclass(frozen=True)
class Torment(VolatileEffect):
    pass


@dataclass(frozen=True)
class Imprison(VolatileEffect):
    pass


@dataclass(frozen=True)
class HealBlock(VolatileEffect):
    turns: int = 5


# Field


@dataclass(frozen=True)
class SetWeather(FieldEffect):
    weather: Weather


@dataclass(frozen=True)
class SetTerrain(FieldEffect):
    terrain: Terrain


# Protection


@dataclass(frozen=True)
class RaiseProtection(ProtectionEffect):
    """Raise a protection flag on the user's turn context.

    Attributes:
        flag: TurnContext attribute to set
        message: Transcript line, formatted with `user`
        stacking: Whether consecutive uses get less likely to succeed
    """

    flag: str
    message: str
    stacking: bool = True


# Miscellaneous


@dataclass(frozen=True)
class SetFlag(MiscEffect):
    """Set a boolean attribute on a combatant or on its turn context.

    Attributes:
        attr: Attribute name
        message: Transcript line, formatted with `user` and `target`
        on_user: Whether the user is affected rather than the target
        on_context: Whether the attribute lives on the turn context
        once: Do nothing when the attribute is already set
    """

    attr: str
    message: str = ""
    on_user: bool = True
    on_context: bool = False
    once: bool = False


@dataclass(frozen=True)
class StartTimer(MiscEffect):
    """Start an expiring effect on a combatant."""

    attr: str
    turns: int
    message: str
    on_user: bool = True


@dataclass(frozen=True)
class StruggleRecoil(MiscEffect):
    pass


@dataclass(frozen=True)
class PainSplit(MiscEffect):
    pass


@dataclass(frozen=True)
class DrainPP(MiscEffect):
    amount: int


@dataclass(frozen=True)
class HealBell(MiscEffect):
    pass


@dataclass(frozen=True)
class ShiftStatus(MiscEffect):
    pass


@dataclass(frozen=True)
class Defog(MiscEffect):
    pass


@dataclass(frozen=True)
class ToggleRoom(MiscEffect):
    """Start or end a field room. `room` names the Battle attribute."""

    room: str
    turns: int = 5


@dataclass(frozen=True)
class PerishSong(MiscEffect):
    pass


@dataclass(frozen=True)
class Gravity(MiscEffect):
    turns: int = 5


@dataclass(frozen=True)
class SetHazard(MiscEffect):
    """Lay a hazard on the target's side. `hazard` names the Side attribute."""

    hazard: str


@dataclass(frozen=True)
class PsychUp(MiscEffect):
    pass


@dataclass(frozen=True)
class Conversion(MiscEffect):
    pass


@dataclass(frozen=True)
class ConversionToResist(MiscEffect):
    pass


@dataclass(frozen=True)
class LoseType(MiscEffect):
    element: ElementType


@dataclass(frozen=True)
class AddType(MiscEffect):
    element: ElementType


@dataclass(frozen=True)
class SetTargetType(MiscEffect):
    element: ElementType


@dataclass(frozen=True)
class Camouflage(MiscEffect):
    pass


@dataclass(frozen=True)
class ReflectType(MiscEffect):
    pass


@dataclass(frozen=True)
class CopyAbility(MiscEffect):
    pass


@dataclass(frozen=True)
class SetTargetAbility(MiscEffect):
    """Overwrite the target's ability, waking it when `wakes` is set."""

    ability: str
    wakes: bool = False


@dataclass(frozen=True)
class GiveAbility(MiscEffect):
    pass


@dataclass(frozen=True)
class SwapAbilities(MiscEffect):
    pass


@dataclass(frozen=True)
class SuppressAbility(MiscEffect):
    """Remove the target's ability; `after_target_moved` for Core Enforcer."""

    after_target_moved: bool = False


@dataclass(frozen=True)
class SideBarrier(MiscEffect):
    """Raise a barrier on the user's side. `barrier` names the Side attribute.

    Attributes:
        barrier: Side attribute holding the barrier's timer
        label: How the barrier is called in the transcript
        turns: Duration
        light_clay: Whether Light Clay extends it to 8 turns
    """

    barrier: str
    label: str
    turns: int = 5
    light_clay: bool = False


@dataclass(frozen=True)
class Sport(MiscEffect):
    barrier: str
    message: str
    turns: int = 6


@dataclass(frozen=True)
class Tailwind(MiscEffect):
    turns: int = 4


@dataclass(frozen=True)
class Bind(MiscEffect):
    """Bind the target. `only_if_free` skips already bound or substituted targets."""

    only_if_free: bool = False


@dataclass(frozen=True)
class CopyMoveSlot(MiscEffect):
    """Overwrite this move slot with the target's last move.

    Sketch keeps the PP the copied slot had left, Mimic starts it full.
    """

    keep_pp: bool = False


@dataclass(frozen=True)
class TransformInto(MiscEffect):
    pass


@dataclass(frozen=True)
class Substitute(MiscEffect):
    pass


@dataclass(frozen=True)
class ShedTail(MiscEffect):
    pass


@dataclass(frozen=True)
class Silence(MiscEffect):
    turns: int = 3


@dataclass(frozen=True)
class SpeedSwap(MiscEffect):
    pass


@dataclass(frozen=True)
class MindReader(MiscEffect):
    pass


@dataclass(frozen=True)
class DestinyBond(MiscEffect):
    pass


@dataclass(frozen=True)
class Attract(MiscEffect):
    pass


@dataclass(frozen=True)
class SwapStages(MiscEffect):
    """Exchange stages of `stats` with the target. `label` names them."""

    stats: Tuple[Stat, ...]
    label: str = ""


@dataclass(frozen=True)
class SplitStats(MiscEffect):
    stats: Tuple[Stat, ...]
    label: str


@dataclass(frozen=True)
class ReplacementBlessing(MiscEffect):
    """Heal whoever replaces the fainting user. `attr` names the Side flag."""

    attr: str


@dataclass(frozen=True)
class SmackDown(MiscEffect):
    pass


@dataclass(frozen=True)
class Fling(MiscEffect):
    pass


@dataclass(frozen=True)
class StealItem(MiscEffect):
    pass


@dataclass(frozen=True)
class SwapItems(MiscEffect):
    pass


@dataclass(frozen=True)
class KnockOff(MiscEffect):
    pass


@dataclass(frozen=True)
class Teatime(MiscEffect):
    pass


@dataclass(frozen=True)
class CorrodeItem(MiscEffect):
    pass


@dataclass(frozen=True)
class TogglePowerTrick(MiscEffect):
    pass


@dataclass(frozen=True)
class TogglePowerShift(MiscEffect):
    pass


@dataclass(frozen=True)
class Yawn(MiscEffect):
    pass


@dataclass(frozen=True)
class BoostGroundedGrass(MiscEffect):
    changes: StatDeltas


@dataclass(frozen=True)
class InvertStages(MiscEffect):
    pass


@dataclass(frozen=True)
class Instruct(MiscEffect):
    pass


@dataclass(frozen=True)
class RapidSpin(MiscEffect):
    pass


@dataclass(frozen=True)
class EchoedVoice(MiscEffect):
    step: int = 40
    cap: int = 200


@dataclass(frozen=True)
class Bestow(MiscEffect):
    pass


@dataclass(frozen=True)
class Curse(MiscEffect):
    pass


@dataclass(frozen=True)
class Autotomize(MiscEffect):
    pass


@dataclass(frozen=True)
class RaiseOnKnockout(MiscEffect):
    stat: Stat
    delta: int


@dataclass(frozen=True)
class Identify(MiscEffect):
    """Foresight and Miracle Eye. `attr` names the flag set on the target."""

    attr: str


@dataclass(frozen=True)
class SelfDamage(MiscEffect):
    denominator: int


@dataclass(frozen=True)
class Recycle(MiscEffect):
    pass


@dataclass(frozen=True)
class CourtChange(MiscEffect):
    pass


@dataclass(frozen=True)
class Roost(MiscEffect):
    pass


@dataclass(frozen=True)
class EatTargetBerry(MiscEffect):
    pass


@dataclass(frozen=True)
class EatOwnBerry(MiscEffect):
    pass


@dataclass(frozen=True)
class ConsumeItem(MiscEffect):
    pass


@dataclass(frozen=True)
class GulpMissile(MiscEffect):
    pass


@dataclass(frozen=True)
class ClearTerrain(MiscEffect):
    only_if_set: bool = False


@dataclass(frozen=True)
class PlasmaFists(MiscEffect):
    pass


@dataclass(frozen=True)
class SecretPower(MiscEffect):
    pass


@dataclass(frozen=True)
class TidyUp(MiscEffect):
    pass


# Switching


@dataclass(frozen=True)
class ForceTargetOut(SwitchEffect):
    pass


@dataclass(frozen=True)
class SwitchUserOut(SwitchEffect):
    baton_pass: bool = False


# Trapping


@dataclass(frozen=True)
class TrapTarget(TrapEffect):
    both: bool = False


# Self faint


@dataclass(frozen=True)
class UserFaints(SelfFaintEffect):
    pass
