from dataclasses import dataclass, field
from typing import Dict, Tuple

from python.duel.schema.enums import ElementType

T = ElementType

# Matchups that differ from neutral, as (attacking, defending) -> multiplier.
_NON_NEUTRAL: Dict[Tuple[ElementType, ElementType], float] = {
    (T.NORMAL, T.ROCK): 0.5,
    (T.NORMAL, T.GHOST): 0.0,
    (T.NORMAL, T.STEEL): 0.5,
    (T.FIGHTING, T.NORMAL): 2.0,
    (T.FIGHTING, T.FLYING): 0.5,
    (T.FIGHTING, T.POISON): 0.5,
    (T.FIGHTING, T.ROCK): 2.0,
    (T.FIGHTING, T.BUG): 0.5,
    (T.FIGHTING, T.GHOST): 0.0,
    (T.FIGHTING, T.STEEL): 2.0,
    (T.FIGHTING, T.PSYCHIC): 0.5,
    (T.FIGHTING, T.ICE): 2.0,
    (T.FIGHTING, T.DARK): 2.0,
    (T.FIGHTING, T.FAIRY): 0.5,
    (T.FLYING, T.FIGHTING): 2.0,
    (T.FLYING, T.ROCK): 0.5,
    (T.FLYING, T.BUG): 2.0,
    (T.FLYING, T.STEEL): 0.5,
    (T.FLYING, T.GRASS): 2.0,
    (T.FLYING, T.ELECTRIC): 0.5,
    (T.POISON, T.POISON): 0.5,
    (T.POISON, T.GROUND): 0.5,
    (T.POISON, T.ROCK): 0.5,
    (T.POISON, T.GHOST): 0.5,
    (T.POISON, T.STEEL): 0.0,
    (T.POISON, T.GRASS): 2.0,
    (T.POISON, T.FAIRY): 2.0,
    (T.GROUND, T.FLYING): 0.0,
    (T.GROUND, T.POISON): 2.0,
    (T.GROUND, T.ROCK): 2.0,
    (T.GROUND, T.BUG): 0.5,
    (T.GROUND, T.STEEL): 2.0,
    (T.GROUND, T.FIRE): 2.0,
    (T.GROUND, T.GRASS): 0.5,
    (T.GROUND, T.ELECTRIC): 2.0,
    (T.ROCK, T.FIGHTING): 0.5,
    (T.ROCK, T.FLYING): 2.0,
    (T.ROCK, T.GROUND): 0.5,
    (T.ROCK, T.BUG): 2.0,
    (T.ROCK, T.STEEL): 0.5,
    (T.ROCK, T.FIRE): 2.0,
    (T.ROCK, T.ICE): 2.0,
    (T.BUG, T.FIGHTING): 0.5,
    (T.BUG, T.FLYING): 0.5,
    (T.BUG, T.POISON): 0.5,
    (T.BUG, T.GHOST): 0.5,
    (T.BUG, T.STEEL): 0.5,
    (T.BUG, T.FIRE): 0.5,
    (T.BUG, T.GRASS): 2.0,
    (T.BUG, T.PSYCHIC): 2.0,
    (T.BUG, T.DARK): 2.0,
    (T.BUG, T.FAIRY): 0.5,
    (T.GHOST, T.NORMAL): 0.0,
    (T.GHOST, T.GHOST): 2.0,
    (T.GHOST, T.PSYCHIC): 2.0,
    (T.GHOST, T.DARK): 0.5,
    (T.STEEL, T.ROCK): 2.0,
    (T.STEEL, T.STEEL): 0.5,
    (T.STEEL, T.FIRE): 0.5,
    (T.STEEL, T.WATER): 0.5,
    (T.STEEL, T.ELECTRIC): 0.5,
    (T.STEEL, T.ICE): 2.0,
    (T.STEEL, T.FAIRY): 2.0,
    (T.FIRE, T.ROCK): 0.5,
    (T.FIRE, T.BUG): 2.0,
    (T.FIRE, T.STEEL): 2.0,
    (T.FIRE, T.FIRE): 0.5,
    (T.FIRE, T.WATER): 0.5,
    (T.FIRE, T.GRASS): 2.0,
    (T.FIRE, T.ICE): 2.0,
    (T.FIRE, T.DRAGON): 0.5,
    (T.WATER, T.GROUND): 2.0,
    (T.WATER, T.ROCK): 2.0,
    (T.WATER, T.FIRE): 2.0,
    (T.WATER, T.WATER): 0.5,
    (T.WATER, T.GRASS): 0.5,
    (T.WATER, T.DRAGON): 0.5,
    (T.GRASS, T.FLYING): 0.5,
    (T.GRASS, T.POISON): 0.5,
    (T.GRASS, T.GROUND): 2.0,
    (T.GRASS, T.ROCK): 2.0,
    (T.GRASS, T.BUG): 0.5,
    (T.GRASS, T.STEEL): 0.5,
    (T.GRASS, T.FIRE): 0.5,
    (T.GRASS, T.WATER): 2.0,
    (T.GRASS, T.GRASS): 0.5,
    (T.GRASS, T.DRAGON): 0.5,
    (T.ELECTRIC, T.FLYING): 2.0,
    (T.ELECTRIC, T.GROUND): 0.0,
    (T.ELECTRIC, T.WATER): 2.0,
    (T.ELECTRIC, T.GRASS): 0.5,
    (T.ELECTRIC, T.ELECTRIC): 0.5,
    (T.ELECTRIC, T.DRAGON): 0.5,
    (T.PSYCHIC, T.FIGHTING): 2.0,
    (T.PSYCHIC, T.POISON): 2.0,
    (T.PSYCHIC, T.STEEL): 0.5,
    (T.PSYCHIC, T.PSYCHIC): 0.5,
    (T.PSYCHIC, T.DARK): 0.0,
    (T.ICE, T.FLYING): 2.0,
    (T.ICE, T.GROUND): 2.0,
    (T.ICE, T.STEEL): 0.5,
    (T.ICE, T.FIRE): 0.5,
    (T.ICE, T.WATER): 0.5,
    (T.ICE, T.GRASS): 2.0,
    (T.ICE, T.ICE): 0.5,
    (T.ICE, T.DRAGON): 2.0,
    (T.DRAGON, T.STEEL): 0.5,
    (T.DRAGON, T.DRAGON): 2.0,
    (T.DRAGON, T.FAIRY): 0.0,
    (T.DARK, T.FIGHTING): 0.5,
    (T.DARK, T.GHOST): 2.0,
    (T.DARK, T.PSYCHIC): 2.0,
    (T.DARK, T.DARK): 0.5,
    (T.DARK, T.FAIRY): 0.5,
    (T.FAIRY, T.FIGHTING): 2.0,
    (T.FAIRY, T.POISON): 0.5,
    (T.FAIRY, T.STEEL): 0.5,
    (T.FAIRY, T.FIRE): 0.5,
    (T.FAIRY, T.DRAGON): 2.0,
    (T.FAIRY, T.DARK): 2.0,
}


@dataclass(frozen=True)
class TypeChart:
    effectiveness: Dict[Tuple[ElementType, ElementType], float] = field(
        default_factory=lambda: dict(_NON_NEUTRAL)
    )

    def get_effectiveness(
        self, attacking_type: ElementType, defending_type: ElementType
    ) -> float:
        """Multiplier for one attacking type into one defending type.

        Typeless on either side is always neutral.

        Raises:
            ValueError: If either argument is not an ElementType
        """
        if not isinstance(attacking_type, ElementType):
            raise ValueError(f"Unknown attacking type: {attacking_type}")
        if not isinstance(defending_type, ElementType):
            raise ValueError(f"Unknown defending type: {defending_type}")
        if ElementType.TYPELESS in (attacking_type, defending_type):
            return 1.0
        return self.effectiveness.get((attacking_type, defending_type), 1.0)
