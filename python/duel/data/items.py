"""Held item tables.

Every key is a normalized item name (see object_name_normalizer.normalize_name).
"""

from typing import Dict, FrozenSet, Tuple

from python.duel.schema.enums import ElementType, Stat, Status

T = ElementType

PLATES: Dict[str, ElementType] = {
    "dracoplate": T.DRAGON,
    "dreadplate": T.DARK,
    "earthplate": T.GROUND,
    "fistplate": T.FIGHTING,
    "flameplate": T.FIRE,
    "icicleplate": T.ICE,
    "insectplate": T.BUG,
    "ironplate": T.STEEL,
    "meadowplate": T.GRASS,
    "mindplate": T.PSYCHIC,
    "pixieplate": T.FAIRY,
    "skyplate": T.FLYING,
    "splashplate": T.WATER,
    "spookyplate": T.GHOST,
    "stoneplate": T.ROCK,
    "toxicplate": T.POISON,
    "zapplate": T.ELECTRIC,
}

MEMORIES: Dict[str, ElementType] = {
    "dragonmemory": T.DRAGON,
    "darkmemory": T.DARK,
    "groundmemory": T.GROUND,
    "fightingmemory": T.FIGHTING,
    "firememory": T.FIRE,
    "icememory": T.ICE,
    "bugmemory": T.BUG,
    "steelmemory": T.STEEL,
    "grassmemory": T.GRASS,
    "psychicmemory": T.PSYCHIC,
    "fairymemory": T.FAIRY,
    "flyingmemory": T.FLYING,
    "watermemory": T.WATER,
    "ghostmemory": T.GHOST,
    "rockmemory": T.ROCK,
    "poisonmemory": T.POISON,
    "electricmemory": T.ELECTRIC,
}

DRIVES: Dict[str, ElementType] = {
    "burndrive": T.FIRE,
    "chilldrive": T.ICE,
    "dousedrive": T.WATER,
    "shockdrive": T.ELECTRIC,
}

# Items that set the type of Judgment, Multi-Attack and Techno Blast.
TYPE_SETTING_ITEMS: Dict[str, ElementType] = {**PLATES, **MEMORIES, **DRIVES}

UNREMOVABLE_ITEMS: FrozenSet[str] = frozenset(
    set(PLATES)
    | set(MEMORIES)
    | {
        "primalorb",
        "griseousorb",
        "blueorb",
        "redorb",
        "rustysword",
        "rustyshield",
        "megastone",
        "megastonex",
        "megastoney",
    }
)

# Items that multiply the power of moves of one type by 1.2.
TYPE_BOOST_ITEMS: Dict[str, ElementType] = {
    "blackglasses": T.DARK,
    "blackbelt": T.FIGHTING,
    "hardstone": T.ROCK,
    "magnet": T.ELECTRIC,
    "mysticwater": T.WATER,
    "nevermeltice": T.ICE,
    "dragonfang": T.DRAGON,
    "poisonbarb": T.POISON,
    "charcoal": T.FIRE,
    "silkscarf": T.NORMAL,
    "metalcoat": T.STEEL,
    "sharpbeak": T.FLYING,
    **PLATES,
}

# Orbs that boost two types, only in the hands of the matching species.
SIGNATURE_ORBS: Dict[str, Tuple[Tuple[ElementType, ...], FrozenSet[str]]] = {
    "adamantorb": ((T.DRAGON, T.STEEL), frozenset({"Dialga"})),
    "griseousorb": ((T.DRAGON, T.GHOST), frozenset({"Giratina"})),
    "souldew": ((T.DRAGON, T.PSYCHIC), frozenset({"Latios", "Latias"})),
    "lustrousorb": ((T.DRAGON, T.WATER), frozenset({"Palkia"})),
}

NATURAL_GIFT_TYPES: Dict[str, ElementType] = {}
for _type, _berries in (
    (T.BUG, ("figy", "tanga", "cornn", "enigma")),
    (T.DARK, ("iapapa", "colbur", "spelon", "rowap", "maranga")),
    (T.DRAGON, ("aguav", "haban", "nomel", "jaboca")),
    (T.ELECTRIC, ("pecha", "wacan", "wepear", "belue")),
    (T.FAIRY, ("roseli", "kee")),
    (T.FIGHTING, ("leppa", "chople", "kelpsy", "salac")),
    (T.FIRE, ("cheri", "occa", "bluk", "watmel")),
    (T.FLYING, ("lum", "coba", "grepa", "lansat")),
    (T.GHOST, ("mago", "kasib", "rabuta", "custap")),
    (T.GRASS, ("rawst", "rindo", "pinap", "liechi")),
    (T.GROUND, ("persim", "shuca", "hondew", "apicot")),
    (T.ICE, ("aspear", "yache", "pomeg", "ganlon")),
    (T.POISON, ("oran", "kebia", "qualot", "petaya")),
    (T.PSYCHIC, ("sitrus", "payapa", "tamato", "starf")),
    (T.ROCK, ("wiki", "charti", "magost", "micle")),
    (T.STEEL, ("razz", "babiri", "pamtre")),
    (T.WATER, ("chesto", "passho", "nanab", "durin")),
    (T.NORMAL, ("chilan",)),
):
    for _berry in _berries:
        NATURAL_GIFT_TYPES[_berry + "berry"] = _type

NATURAL_GIFT_100: FrozenSet[str] = frozenset(
    name + "berry"
    for name in (
        "enigma", "rowap", "maranga", "jaboca", "belue", "kee", "salac", "watmel",
        "lansat", "custap", "liechi", "apicot", "ganlon", "petaya", "starf", "micle",
        "durin",
    )
)

NATURAL_GIFT_90: FrozenSet[str] = frozenset(
    name + "berry"
    for name in (
        "cornn", "spelon", "nomel", "wepear", "kelpsy", "bluk", "grepa", "rabuta",
        "pinap", "hondew", "pomeg", "qualot", "tamato", "magost", "pamtre", "nanab",
    )
)


def natural_gift_power(item: str) -> int:
    """Base power of Natural Gift for a held berry."""
    if item in NATURAL_GIFT_100:
        return 100
    if item in NATURAL_GIFT_90:
        return 90
    return 80


# Berries eaten at a quarter of max HP or less.
PINCH_BERRIES: FrozenSet[str] = frozenset(
    name + "berry"
    for name in (
        "figy", "wiki", "mago", "aguav", "iapapa", "apicot", "ganlon", "lansat",
        "liechi", "micle", "petaya", "salac", "starf",
    )
)

# Heal a third of max HP; a disliked flavor confuses.
FLAVOR_BERRIES: Dict[str, str] = {
    "figyberry": "spicy",
    "wikiberry": "dry",
    "magoberry": "sweet",
    "aguavberry": "bitter",
    "iapapaberry": "sour",
}

DISLIKED_FLAVOR_BY_NATURE: Dict[str, FrozenSet[str]] = {
    "spicy": frozenset({"modest", "timid", "calm", "bold"}),
    "dry": frozenset({"adamant", "impish", "careful", "jolly"}),
    "sweet": frozenset({"lonely", "mild", "gentle", "hasty"}),
    "bitter": frozenset({"naughty", "rash", "naive", "lax"}),
    "sour": frozenset({"brave", "quiet", "sassy", "relaxed"}),
}

STAT_BERRIES: Dict[str, Stat] = {
    "apicotberry": Stat.SPD,
    "ganlonberry": Stat.DEF,
    "liechiberry": Stat.ATK,
    "petayaberry": Stat.SPA,
    "salacberry": Stat.SPE,
}

# Berries that cure a non-volatile status. Lum cures all of them.
STATUS_CURE_BERRIES: Dict[str, FrozenSet[Status]] = {
    "aspearberry": frozenset({Status.FREEZE}),
    "cheriberry": frozenset({Status.PARALYSIS}),
    "chestoberry": frozenset({Status.SLEEP}),
    "pechaberry": frozenset({Status.POISON, Status.TOXIC}),
    "rawstberry": frozenset({Status.BURN}),
}

CONFUSION_CURE_BERRIES: FrozenSet[str] = frozenset({"persimberry", "lumberry"})

# Berries that halve a super effective hit of one type.
RESIST_BERRIES: Dict[str, ElementType] = {
    "occaberry": T.FIRE,
    "passhoberry": T.WATER,
    "wacanberry": T.ELECTRIC,
    "rindoberry": T.GRASS,
    "yacheberry": T.ICE,
    "chopleberry": T.FIGHTING,
    "kebiaberry": T.POISON,
    "shucaberry": T.GROUND,
    "cobaberry": T.FLYING,
    "payapaberry": T.PSYCHIC,
    "tangaberry": T.BUG,
    "chartiberry": T.ROCK,
    "kasibberry": T.GHOST,
    "habanberry": T.DRAGON,
    "colburberry": T.DARK,
    "babiriberry": T.STEEL,
    "roseliberry": T.FAIRY,
}

CHOICE_ITEMS: FrozenSet[str] = frozenset({"choiceband", "choicescarf", "choicespecs"})

# Fling base power for the items the engine knows about. Items absent here
# cannot be flung unless the item data supplies a power.
FLING_POWER: Dict[str, int] = {
    "ironball": 130,
    "hardstone": 100,
    "rarebone": 100,
    "thickclub": 90,
    "assaultvest": 80,
    "heavydutyboots": 80,
    "quickclaw": 80,
    "stickybarb": 80,
    "weaknesspolicy": 80,
    "flameorb": 30,
    "toxicorb": 30,
    "lightball": 30,
    "poisonbarb": 70,
    "kingsrock": 30,
    "razorfang": 30,
    "blackbelt": 30,
    "blackglasses": 30,
    "charcoal": 30,
    "dragonfang": 70,
    "expertbelt": 10,
    "lifeorb": 30,
    "lightclay": 30,
    "magnet": 30,
    "metalcoat": 30,
    "mysticwater": 30,
    "nevermeltice": 30,
    "rockyhelmet": 60,
    "sharpbeak": 50,
    "silkscarf": 10,
    "choiceband": 10,
    "choicescarf": 10,
    "choicespecs": 10,
    "focussash": 10,
    "leftovers": 10,
    "mentalherb": 10,
    "whiteherb": 10,
    "widelens": 10,
    "zoomlens": 10,
    "brightpowder": 10,
    "scopelens": 30,
    "razorclaw": 80,
    **{plate: 90 for plate in PLATES},
    **{berry: 10 for berry in NATURAL_GIFT_TYPES},
}

# Fling side effects applied to the target.
FLING_STATUS: Dict[str, Status] = {
    "flameorb": Status.BURN,
    "toxicorb": Status.TOXIC,
    "lightball": Status.PARALYSIS,
    "poisonbarb": Status.POISON,
}

FLING_FLINCH: FrozenSet[str] = frozenset({"kingsrock", "razorfang"})
