"""Enums for duel state representation."""

from enum import Enum


class ElementType(Enum):
    """Elemental types of moves and combatants."""

    NORMAL = "normal"
    FIGHTING = "fighting"
    FLYING = "flying"
    POISON = "poison"
    GROUND = "ground"
    ROCK = "rock"
    BUG = "bug"
    GHOST = "ghost"
    STEEL = "steel"
    FIRE = "fire"
    WATER = "water"
    GRASS = "grass"
    ELECTRIC = "electric"
    PSYCHIC = "psychic"
    ICE = "ice"
    DRAGON = "dragon"
    DARK = "dark"
    FAIRY = "fairy"
    TYPELESS = "typeless"

    @classmethod
    def from_id(cls, type_id: int) -> "ElementType":
        """Parse a type from its numeric id in move data dumps.

        Args:
            type_id: Numeric type id, 1 (normal) through 19 (typeless)

        Returns:
            ElementType enum value

        Raises:
            ValueError: If the id is out of range

        Examples:
            >>> ElementType.from_id(10)
            ElementType.FIRE
        """
        members = list(cls)
        if not 1 <= type_id <= len(members):
            raise ValueError(f"Unknown type id: {type_id}")
        return members[type_id - 1]

    @classmethod
    def from_name(cls, name: str) -> "ElementType":
        """Parse a type from a case-insensitive name."""
        try:
            return cls(name.lower().strip())
        except ValueError:
            raise ValueError(f"Unknown type name: {name}") from None


# Hidden power maps its 0..15 index into this ordering.
HIDDEN_POWER_TYPES = (
    ElementType.FIGHTING,
    ElementType.FLYING,
    ElementType.POISON,
    ElementType.GROUND,
    ElementType.ROCK,
    ElementType.BUG,
    ElementType.GHOST,
    ElementType.STEEL,
    ElementType.FIRE,
    ElementType.WATER,
    ElementType.GRASS,
    ElementType.ELECTRIC,
    ElementType.PSYCHIC,
    ElementType.ICE,
    ElementType.DRAGON,
    ElementType.DARK,
)


class DamageClass(Enum):
    """Damage category of a move."""

    STATUS = "status"
    PHYSICAL = "physical"
    SPECIAL = "special"

    @classmethod
    def from_id(cls, class_id: int) -> "DamageClass":
        mapping = {1: cls.STATUS, 2: cls.PHYSICAL, 3: cls.SPECIAL}
        if class_id not in mapping:
            raise ValueError(f"Unknown damage class id: {class_id}")
        return mapping[class_id]

    @property
    def is_damaging(self) -> bool:
        return self is not DamageClass.STATUS


class MoveTarget(Enum):
    """Target pattern of a move.

    Values follow the move data identifiers; ids 1 through 15 map onto the
    declaration order.
    """

    SPECIFIC_MOVE = "specific-move"
    SELECTED_POKEMON_ME_FIRST = "selected-pokemon-me-first"
    ALLY = "ally"
    USERS_FIELD = "users-field"
    USER_OR_ALLY = "user-or-ally"
    OPPONENTS_FIELD = "opponents-field"
    USER = "user"
    RANDOM_OPPONENT = "random-opponent"
    ALL_OTHER_POKEMON = "all-other-pokemon"
    SELECTED_POKEMON = "selected-pokemon"
    ALL_OPPONENTS = "all-opponents"
    ENTIRE_FIELD = "entire-field"
    USER_AND_ALLIES = "user-and-allies"
    ALL_POKEMON = "all-pokemon"
    ALL_ALLIES = "all-allies"

    @classmethod
    def from_id(cls, target_id: int) -> "MoveTarget":
        """Parse a target pattern from its numeric id.

        Examples:
            >>> MoveTarget.from_id(10)
            MoveTarget.SELECTED_POKEMON
        """
        members = list(cls)
        if not 1 <= target_id <= len(members):
            raise ValueError(f"Unknown move target id: {target_id}")
        return members[target_id - 1]


class Status(Enum):
    """Non-volatile status conditions."""

    NONE = "none"
    BURN = "brn"
    PARALYSIS = "par"
    POISON = "psn"
    TOXIC = "tox"
    SLEEP = "slp"
    FREEZE = "frz"

    @property
    def display_name(self) -> str:
        """Name used in battle transcripts."""
        return {
            Status.NONE: "",
            Status.BURN: "burn",
            Status.PARALYSIS: "paralysis",
            Status.POISON: "poison",
            Status.TOXIC: "b-poison",
            Status.SLEEP: "sleep",
            Status.FREEZE: "freeze",
        }[self]


class Weather(Enum):
    """Field weather conditions."""

    NONE = "none"
    SUN = "sun"
    RAIN = "rain"
    SANDSTORM = "sandstorm"
    HAIL = "hail"
    HARSH_SUN = "h-sun"
    HEAVY_RAIN = "h-rain"
    STRONG_WINDS = "h-wind"

    @property
    def is_sunny(self) -> bool:
        return self in (Weather.SUN, Weather.HARSH_SUN)

    @property
    def is_rainy(self) -> bool:
        return self in (Weather.RAIN, Weather.HEAVY_RAIN)

    @property
    def is_primal(self) -> bool:
        """True for the weathers that block ordinary weather changes."""
        return self in (Weather.HARSH_SUN, Weather.HEAVY_RAIN, Weather.STRONG_WINDS)


class Terrain(Enum):
    """Field terrain conditions."""

    NONE = "none"
    ELECTRIC = "electric"
    GRASSY = "grassy"
    PSYCHIC = "psychic"
    MISTY = "misty"


class Stat(Enum):
    """Stats that carry a stage in [-6, 6]."""

    ATK = "atk"
    DEF = "def"
    SPA = "spa"
    SPD = "spd"
    SPE = "spe"
    ACCURACY = "accuracy"
    EVASION = "evasion"

    @property
    def display_name(self) -> str:
        """Name used in battle transcripts."""
        return {
            Stat.ATK: "attack",
            Stat.DEF: "defense",
            Stat.SPA: "special attack",
            Stat.SPD: "special defense",
            Stat.SPE: "speed",
            Stat.ACCURACY: "accuracy",
            Stat.EVASION: "evasion",
        }[self]


BATTLE_STATS = (Stat.ATK, Stat.DEF, Stat.SPA, Stat.SPD, Stat.SPE)
ALL_STAGED_STATS = BATTLE_STATS + (Stat.ACCURACY, Stat.EVASION)


class Gender(Enum):
    """Combatant gender."""

    MALE = "male"
    FEMALE = "female"
    GENDERLESS = "genderless"
