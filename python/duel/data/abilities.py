"""Ability classification tables, keyed by normalized ability name."""

from typing import FrozenSet

# Abilities that Mold Breaker and similar abilities or moves skip over.
IGNORABLE_ABILITIES: FrozenSet[str] = frozenset({
    "aromaveil", "battlearmor", "bigpecks", "bulletproof", "clearbody", "contrary",
    "damp", "dazzling", "disguise", "dryskin", "filter", "flashfire", "flowergift",
    "flowerveil", "fluffy", "friendguard", "furcoat", "heatproof", "heavymetal",
    "hypercutter", "iceface", "icescales", "immunity", "innerfocus", "insomnia",
    "keeneye", "leafguard", "levitate", "lightmetal", "lightningrod", "limber",
    "magicbounce", "magmaarmor", "marvelscale", "mirrorarmor", "motordrive",
    "multiscale", "oblivious", "overcoat", "owntempo", "pastelveil", "punkrock",
    "queenlymajesty", "sandveil", "sapsipper", "shellarmor", "shielddust", "simple",
    "snowcloak", "solidrock", "soundproof", "stickyhold", "stormdrain", "sturdy",
    "suctioncups", "sweetveil", "tangledfeet", "telepathy", "thickfat", "unaware",
    "vitalspirit", "voltabsorb", "waterabsorb", "waterbubble", "waterveil",
    "whitesmoke", "wonderguard", "wonderskin", "armortail", "eartheater", "goodasgold",
    "purifyingsalt", "wellbakedbody",
})

# Attacker abilities that ignore the ignorable abilities of their targets.
ABILITY_IGNORING_ABILITIES: FrozenSet[str] = frozenset({
    "moldbreaker", "turboblaze", "teravolt", "neutralizinggas",
})

# Abilities that cannot be replaced, suppressed or swapped away.
UNCHANGEABLE_ABILITIES: FrozenSet[str] = frozenset({
    "multitype", "stancechange", "schooling", "comatose", "shieldsdown", "disguise",
    "rkssystem", "battlebond", "powerconstruct", "iceface", "gulpmissile", "zerotohero",
})

# Abilities that cannot be copied or handed to another combatant.
UNGIVEABLE_ABILITIES: FrozenSet[str] = frozenset({
    "trace", "forecast", "flowergift", "zenmode", "illusion", "imposter",
    "powerofalchemy", "receiver", "disguise", "stancechange", "powerconstruct",
    "iceface", "hungerswitch", "gulpmissile", "zerotohero",
})

# Opposing abilities that stop berries from being eaten.
BERRY_BLOCKING_ABILITIES: FrozenSet[str] = frozenset({
    "unnerve", "asoneshadow", "asoneice",
})

# Abilities that ignore the target's evasion stage.
EVASION_IGNORING_ABILITIES: FrozenSet[str] = frozenset({
    "unaware", "keeneye", "mindseye",
})

# Defender abilities that block positive priority moves.
PRIORITY_BLOCKING_ABILITIES: FrozenSet[str] = frozenset({
    "queenlymajesty", "dazzling", "armortail",
})

# Transcript names for abilities quoted by immunity messages.
_DISPLAY_NAMES = {
    "clearbody": "Clear Body",
    "whitesmoke": "White Smoke",
    "fullmetalbody": "Full Metal Body",
    "waterveil": "Water Veil",
    "waterbubble": "Water Bubble",
    "insomnia": "Insomnia",
    "vitalspirit": "Vital Spirit",
    "sweetveil": "Sweet Veil",
    "immunity": "Immunity",
    "pastelveil": "Pastel Veil",
    "voltabsorb": "Volt Absorb",
    "waterabsorb": "Water Absorb",
    "dryskin": "Dry Skin",
    "motordrive": "Motor Drive",
    "lightningrod": "Lightning Rod",
    "stormdrain": "Storm Drain",
    "sapsipper": "Sap Sipper",
    "eartheater": "Earth Eater",
    "wellbakedbody": "Well Baked Body",
    "windrider": "Wind Rider",
}


def display_name(ability: str) -> str:
    """Transcript name of a normalized ability identifier.

    Example:
        >>> display_name("clearbody")
        'Clear Body'
    """
    return _DISPLAY_NAMES.get(ability, ability.capitalize())
