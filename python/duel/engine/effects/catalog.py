"""Move effect id -> the variants it runs, in evaluation order.

Entries are registered line by line. An effect appearing on several lines
collects the variants of each, in registration order, so a move that raises
attack and then speed is registered once for each stat.
"""

from typing import Dict, Iterable, List, Tuple, Type

from python.duel.engine.effects.variants import (
    AddType,
    AnnounceItemStrike,
    Attract,
    Autotomize,
    BalancedRaise,
    Bestow,
    Bind,
    BoostGroundedGrass,
    BreakScreens,
    BurnBerry,
    CallPartyMove,
    CallRandomMove,
    CallSleepingMove,
    Camouflage,
    ClearTerrain,
    ClearUserStatus,
    Confuse,
    ConsumeItem,
    Conversion,
    ConversionToResist,
    CopyAbility,
    CopyMoveSlot,
    CopyTargetChoice,
    CopyTargetLastMove,
    CorrodeItem,
    CourtChange,
    CrashDamage,
    CureTargetBurn,
    CureTargetHealUser,
    Curse,
    Defog,
    DestinyBond,
    DisableMove,
    DrainPP,
    DropCommitment,
    EatOwnBerry,
    EatTargetBerry,
    EchoedVoice,
    EffectVariant,
    Encore,
    Flinch,
    Fling,
    ForceTargetOut,
    ForeseeAttack,
    GiftRoll,
    GiveAbility,
    Gravity,
    GulpMissile,
    HealBell,
    HealBlock,
    HealByTargetAttack,
    HealTarget,
    HealUser,
    HealUserBoosted,
    HealUserByWeather,
    Identify,
    Imprison,
    InflictRandomStatus,
    InflictStatus,
    Instruct,
    InvertStages,
    KnockOff,
    LoseType,
    MakeWish,
    MindReader,
    PainSplit,
    PerishSong,
    PlantSeed,
    PlasmaFists,
    PsychUp,
    PutToSleep,
    RaiseOnKnockout,
    RaiseProtection,
    RampageFatigue,
    RandomSharpRaise,
    RapidSpin,
    Recycle,
    ReflectType,
    ReleaseStockpile,
    ReplacementBlessing,
    ResetFuryCutter,
    ResetStages,
    Rest,
    Roost,
    SacrificeBoost,
    SecretPower,
    SelfDamage,
    SetFlag,
    SetHazard,
    SetTargetAbility,
    SetTargetType,
    SetTerrain,
    SetWeather,
    ShedTail,
    ShiftStatus,
    SideBarrier,
    Silence,
    SmackDown,
    SpeedSwap,
    SplitStats,
    Sport,
    StartTimer,
    StatChange,
    StealBoosts,
    StealItem,
    Stockpile,
    StruggleRecoil,
    Substitute,
    SunBoost,
    SuppressAbility,
    SwapAbilities,
    SwapItems,
    SwapStages,
    SwitchUserOut,
    Tailwind,
    Taunt,
    Teatime,
    TidyUp,
    ToggleRoom,
    TogglePowerShift,
    TogglePowerTrick,
    Torment,
    TransformInto,
    TrapTarget,
    UserFaints,
    Yawn,
)
from python.duel.schema.enums import ElementType, Stat, Status, Terrain, Weather

_ENTRIES: Dict[int, List[EffectVariant]] = {}


def _add(effects: Iterable[int], *variants: EffectVariant) -> None:
    for effect in effects:
        _ENTRIES.setdefault(effect, []).extend(variants)


def _user(*changes: Tuple[Stat, int], **kwargs) -> StatChange:
    return StatChange(changes=tuple(changes), on_user=True, **kwargs)


def _target(*changes: Tuple[Stat, int], **kwargs) -> StatChange:
    return StatChange(changes=tuple(changes), on_user=False, **kwargs)


ATK, DEF, SPA, SPD, SPE = Stat.ATK, Stat.DEF, Stat.SPA, Stat.SPD, Stat.SPE
ACC, EVA = Stat.ACCURACY, Stat.EVASION

# Miss consequences
_add((120,), ResetFuryCutter())
_add((46, 478), CrashDamage())
_add((28, 81, 118), DropCommitment())

# Pre-damage
_add((84,), CallRandomMove())
_add((187,), BreakScreens())
_add((98,), CallSleepingMove())
_add((10, 243), CopyTargetLastMove())
_add((242,), CopyTargetChoice())
_add((181,), CallPartyMove())
_add((410,), StealBoosts())
_add((149,), ForeseeAttack())
_add((123,), GiftRoll())
_add((315,), BurnBerry())
_add((446,), AnnounceItemStrike())

# Recovery
_add((161,), Stockpile())
_add((162,), ReleaseStockpile())
_add((33, 215), HealUser(1, 2))
_add((434, 457), HealUser(1, 4))
_add((310,), HealTarget())
_add((133,), HealUserByWeather())
_add((85,), PlantSeed())
_add((163,), ReleaseStockpile(heal=True))
_add((180,), MakeWish())
_add((382,), HealUserBoosted(weather=Weather.SANDSTORM))
_add((387,), HealUserBoosted(terrain=Terrain.GRASSY))
_add((388,), HealByTargetAttack())
_add((400,), CureTargetHealUser())

# Status
_add(
    (5, 126, 201, 254, 274, 333, 365, 458, 465, 500),
    InflictStatus(Status.BURN, chance=True),
)
_add((168,), InflictStatus(Status.BURN))
_add((429,), InflictStatus(Status.BURN, requires_stat_raised=True))
_add((37,), InflictRandomStatus((Status.BURN, Status.FREEZE, Status.PARALYSIS)))
_add((464,), InflictRandomStatus((Status.POISON, Status.PARALYSIS, Status.SLEEP)))
_add((6, 261, 275, 380), InflictStatus(Status.FREEZE, chance=True))
_add(
    (7, 153, 263, 264, 276, 332, 372, 396),
    InflictStatus(Status.PARALYSIS, chance=True),
)
_add((68,), InflictStatus(Status.PARALYSIS))
_add((3, 78, 210, 447, 461), InflictStatus(Status.POISON, chance=True))
_add((67, 390, 486), InflictStatus(Status.POISON))
_add((203,), InflictStatus(Status.TOXIC, chance=True))
_add((34,), InflictStatus(Status.TOXIC))
_add((2,), PutToSleep(signature_move=464, signature_species="Darkrai"))
_add((330,), PutToSleep(chance=True))
_add((38,), Rest())
_add((50, 119, 167, 200), Confuse())
_add((28,), RampageFatigue())
_add((77, 268, 334, 478), Confuse(chance=True))
_add((497,), Confuse(requires_stat_raised=True))

# Status clear
_add((194, 457, 472), ClearUserStatus())
_add((386,), CureTargetBurn())

# Stat stages: +1 on the user
_add((11, 209, 213, 278, 313, 323, 328, 392, 414, 427, 468, 472, 487), _user((ATK, 1)))
_add((12, 157, 161, 207, 209, 323, 367, 414, 427, 467, 468, 472), _user((DEF, 1)))
_add((14, 212, 291, 328, 392, 414, 427, 472), _user((SPA, 1)))
_add((161, 175, 207, 212, 291, 367, 414, 427, 472), _user((SPD, 1)))
_add((130, 213, 291, 296, 414, 427, 442, 468, 469, 487), _user((SPE, 1)))
_add((17, 467), _user((EVA, 1)))
_add((278, 323), _user((ACC, 1)))
_add((139,), _user((DEF, 1), chance=True))
_add((140, 375), _user((ATK, 1), chance=True))
_add((277,), _user((SPA, 1), chance=True))
_add((433,), _user((SPE, 1), chance=True))
_add((167,), _target((SPA, 1)))

# +2
_add((51, 309), _user((ATK, 2)))
_add((52, 453), _user((DEF, 2)))
_add((53, 285, 309, 313, 366), _user((SPE, 2)))
_add((54, 309, 366), _user((SPA, 2)))
_add((55, 366), _user((SPD, 2)))
_add((109,), _user((EVA, 2)))
_add((119, 432, 483), _target((ATK, 2)))
_add((432,), _target((SPA, 2)))
_add((359,), _user((DEF, 2), chance=True))

# -1
_add((19, 206, 344, 347, 357, 365, 388, 412), _target((ATK, -1)))
_add((20, 206), _target((DEF, -1)))
_add((344, 347, 358, 412), _target((SPA, -1)))
_add((428,), _target((SPD, -1)))
_add((331, 390), _target((SPE, -1)))
_add((24,), _target((ACC, -1)))
_add((25, 259), _target((EVA, -1)))
_add((69, 396), _target((ATK, -1), chance=True))
_add((70, 397, 435), _target((DEF, -1), chance=True))
_add((475,), _target((DEF, -1), fixed_chance=50))
_add((21, 71, 357, 477), _target((SPE, -1), chance=True))
_add((72,), _target((SPA, -1), chance=True))
_add((73,), _target((SPD, -1), chance=True))
_add((74,), _target((ACC, -1), chance=True))
_add((183,), _user((ATK, -1)))
_add((183, 230, 309, 335, 405, 438, 442), _user((DEF, -1)))
_add((480,), _user((SPA, -1)))
_add((230, 309, 335), _user((SPD, -1)))
_add((219, 335), _user((SPE, -1)))

# -2
_add((59, 169), _target((ATK, -2)))
_add((60, 483), _target((DEF, -2)))
_add((61,), _target((SPE, -2)))
_add((62, 169, 266), _target((SPA, -2)))
_add((63,), _target((SPD, -2)))
_add((272, 297), _target((SPD, -2), chance=True))
_add((205,), _user((SPA, -2)))
_add((479,), _user((SPE, -2)))

# Other stage effects
_add((26,), ResetStages(include_user=True))
_add((305,), ResetStages(include_user=False))
_add((141,), _user((ATK, 1), (DEF, 1), (SPA, 1), (SPD, 1), (SPE, 1), chance=True))
_add((143,), SacrificeBoost(2, ((ATK, 12),)))
_add((317,), SunBoost((ATK, SPA)))
_add((364,), _target((ATK, -1), (SPA, -1), (SPE, -1), requires_target_poisoned=True))
_add((329,), _user((DEF, 3)))
_add((322,), _user((SPA, 3)))
_add((227,), RandomSharpRaise())
_add((473,), BalancedRaise())
_add((485,), SacrificeBoost(2, ((ATK, 2), (SPA, 2), (SPE, 2))))

# Flinch
_add((32, 76, 93, 147, 151, 159, 274, 275, 276, 425, 475, 501), Flinch())

# Volatile restrictions
_add((87,), DisableMove())
_add((176,), Taunt())
_add((91,), Encore())
_add((166,), Torment())
_add((193,), Imprison())
_add((237,), HealBlock(5))
_add((496,), HealBlock(2))

# Field
_add((116,), SetWeather(Weather.SANDSTORM))
_add((137,), SetWeather(Weather.RAIN))
_add((138,), SetWeather(Weather.SUN))
_add((165,), SetWeather(Weather.HAIL))
_add((352,), SetTerrain(Terrain.GRASSY))
_add((353,), SetTerrain(Terrain.MISTY))
_add((369,), SetTerrain(Terrain.ELECTRIC))
_add((395,), SetTerrain(Terrain.PSYCHIC))

# Protection
_add((112,), RaiseProtection("protect", "{user} protected itself!"))
_add((117,), RaiseProtection("endure", "{user} braced itself!"))
_add((279,), RaiseProtection("wide_guard", "Wide guard protects {user}!"))
_add(
    (350,),
    RaiseProtection(
        "crafty_shield",
        "A crafty shield protects {user} from status moves!",
        stacking=False,
    ),
)
_add((356,), RaiseProtection("kings_shield", "{user} shields itself!"))
_add((362,), RaiseProtection("spiky_shield", "{user} shields itself!"))
_add((377,), RaiseProtection("mat_block", "{user} shields itself!", stacking=False))
_add((384,), RaiseProtection("baneful_bunker", "{user} bunkers down!"))
_add((307,), RaiseProtection("quick_guard", "{user} guards itself!", stacking=False))
_add((454,), RaiseProtection("obstruct", "{user} protected itself!"))
_add((488,), RaiseProtection("silk_trap", "{user} protected itself!"))
_add((499,), RaiseProtection("burning_bulwark", "{user} protected itself!"))

# Miscellaneous
_add((255,), StruggleRecoil())
_add((92,), PainSplit())
_add((101,), DrainPP(4))
_add((439,), DrainPP(3))
_add((103,), HealBell())
_add((235,), ShiftStatus())
_add((259,), Defog())
_add((260,), ToggleRoom("trick_room"))
_add((287,), ToggleRoom("magic_room"))
_add((282,), ToggleRoom("wonder_room"))
_add((115,), PerishSong())
_add((108,), SetFlag("nightmare", "{target} fell into a nightmare!", on_user=False))
_add((216,), Gravity())
_add((113,), SetHazard("spikes"))
_add((250,), SetHazard("toxic_spikes"))
_add((267,), SetHazard("stealth_rock"))
_add((341,), SetHazard("sticky_web"))
_add((157,), SetFlag("defense_curl", once=True))
_add((144,), PsychUp())
_add((31,), Conversion())
_add((94,), ConversionToResist())
_add((398,), LoseType(ElementType.FIRE))
_add((481,), LoseType(ElementType.ELECTRIC))
_add((376,), AddType(ElementType.GRASS))
_add((343,), AddType(ElementType.GHOST))
_add((295,), SetTargetType(ElementType.WATER))
_add((456,), SetTargetType(ElementType.PSYCHIC))
_add((214,), Camouflage())
_add((179,), CopyAbility())
_add((299,), SetTargetAbility("simple"))
_add((300,), GiveAbility())
_add((248,), SetTargetAbility("insomnia", wakes=True))
_add((192,), SwapAbilities())
_add((407,), SideBarrier("aurora_veil", "aurora veil", light_clay=True))
_add((36, 421), SideBarrier("light_screen", "light screen", light_clay=True))
_add((66, 422), SideBarrier("reflect", "reflect", light_clay=True))
_add((47,), SideBarrier("mist", "mist"))
_add((125,), SideBarrier("safeguard", "safeguard"))
_add((43,), Bind())
_add((262,), Bind(only_if_free=True))
_add((96,), CopyMoveSlot(keep_pp=True))
_add((83,), CopyMoveSlot())
_add((58,), TransformInto())
_add((80,), Substitute())
_add((493,), ShedTail())
_add((393,), Silence())
_add((399,), SpeedSwap())
_add((82,), SetFlag("rage", "{user}'s rage is building!", on_context=True))
_add((95,), MindReader())
_add((99,), DestinyBond())
_add((182,), SetFlag("ingrain", "{user} planted its roots!"))
_add((121,), Attract())
_add((251,), SwapStages((ATK, DEF, SPA, SPD, SPE, ACC, EVA)))
_add((244,), SwapStages((ATK, SPA), "attack and special attack "))
_add((245,), SwapStages((DEF, SPD), "defense and special defense "))
_add((252,), SetFlag("aqua_ring", "{user} surrounded itself with a veil of water!"))
_add((253,), StartTimer("magnet_rise", 5, "{user} levitated with electromagnetism!"))
_add((221,), ReplacementBlessing("healing_wish"))
_add((271,), ReplacementBlessing("lunar_dance"))
_add((240,), SuppressAbility())
_add((241,), StartTimer("lucky_chant", 5, "{user} is shielded from critical hits!"))
_add((280,), SplitStats((DEF, SPD), "guard"))
_add((281,), SplitStats((ATK, SPA), "power"))
_add((288, 373), SmackDown())
_add((319,), ReflectType())
_add((175,), StartTimer("charge", 2, "{user} charges up electric type moves!"))
_add(
    (184,),
    SetFlag("magic_coat", "{user} shrouded itself with a magic coat!", on_context=True),
)
_add((226,), Tailwind())
_add((234,), Fling())
_add((106,), StealItem())
_add((178,), SwapItems())
_add((189,), KnockOff())
_add((476,), Teatime())
_add((430,), CorrodeItem())
_add((202,), Sport("mud_sport", "Electricity's power was weakened!"))
_add((211,), Sport("water_sport", "Fire's power was weakened!"))
_add((239,), TogglePowerTrick())
_add((466,), TogglePowerShift())
_add((188,), Yawn())
_add((340,), BoostGroundedGrass(((ATK, 1), (SPA, 1))))
_add((351,), BoostGroundedGrass(((DEF, 1),)))
_add((345,), SetFlag("ion_deluge", "{user} charges up the air!", on_context=True))
_add((348,), InvertStages())
_add(
    (354,),
    SetFlag(
        "electrify",
        "{target}'s move was charged with electricity!",
        on_user=False,
        on_context=True,
    ),
)
_add((403,), Instruct())
_add((402,), SuppressAbility(after_target_moved=True))
_add((391,), StartTimer("laser_focus", 2, "{user} focuses!"))
_add(
    (378,),
    SetFlag(
        "powdered", "{target} was coated in powder!", on_user=False, on_context=True
    ),
)
_add((130, 486), RapidSpin())
_add(
    (196,),
    SetFlag("snatching", "{user} waits for a target to make a move!", on_context=True),
)
_add(
    (286,),
    StartTimer("telekinesis", 5, "{target} was hurled into the air!", on_user=False),
)
_add(
    (233,),
    StartTimer("embargo", 6, "{target} can't use items anymore!", on_user=False),
)
_add((303,), EchoedVoice())
_add((324,), Bestow())
_add((110,), Curse())
_add((285,), Autotomize())
_add((342,), RaiseOnKnockout(ATK, 3))
_add((355,), StartTimer("fairy_lock", 2, "{user} prevents escape next turn!"))
_add((195,), SetFlag("grudge", "{user} has a grudge!", on_context=True))
_add((114,), Identify("foresight"))
_add((217,), Identify("miracle_eye"))
_add((414,), SelfDamage(3))
_add((427,), SetFlag("no_retreat", "{user} takes its last stand!"))
_add((185,), Recycle())
_add((431,), CourtChange())
_add((215,), Roost())
_add((225,), EatTargetBerry())
_add((48,), SetFlag("focus_energy", "{user} focuses on its target!"))
_add((223,), ConsumeItem())
_add((258,), GulpMissile())
_add((418,), ClearTerrain())
_add((448,), ClearTerrain(only_if_set=True))
_add((452,), SetFlag("octolock", "{target} is octolocked!", on_user=False))
_add((453,), EatOwnBerry())
_add((455,), PlasmaFists())
_add((198,), SecretPower())
_add(
    (477,),
    SetFlag("tar_shot", "{target} is covered in sticky tar!", on_user=False, once=True),
)
_add((487,), TidyUp())
_add(
    (503,),
    StartTimer(
        "syrup_bomb",
        4,
        "{target} got covered in sticky candy syrup!",
        on_user=False,
    ),
)

# Switching
_add((29, 314), ForceTargetOut())
_add((128,), SwitchUserOut(baton_pass=True))
_add((154, 229, 347), SwitchUserOut())

# Trapping
_add((107, 374, 385, 452), TrapTarget())
_add((449,), TrapTarget(both=True))

# Self faint
_add((169, 221, 271, 321), UserFaints())

EFFECTS: Dict[int, Tuple[EffectVariant, ...]] = {
    effect: tuple(variants) for effect, variants in _ENTRIES.items()
}


def variants_for(effect: int) -> Tuple[EffectVariant, ...]:
    """Every variant registered for `effect`, in evaluation order."""
    return EFFECTS.get(effect, ())


def variants_of(effect: int, stage: Type[EffectVariant]) -> Tuple[EffectVariant, ...]:
    """The variants of `effect` that run in `stage`, in evaluation order."""
    return tuple(
        variant for variant in variants_for(effect) if isinstance(variant, stage)
    )
