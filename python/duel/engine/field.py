"""Weather and terrain changes together with the combatants that react to them."""

from typing import TYPE_CHECKING, Optional, Tuple

from python.duel.engine import stat_stages
from python.duel.schema.enums import ElementType, Stat, Terrain, Weather

if TYPE_CHECKING:
    from python.duel.schema.battle_state import Battle
    from python.duel.schema.combatant import Combatant

# Weather -> (Castform form, type it takes on).
_FORECAST_FORMS = {
    Weather.NONE: ("Castform", ElementType.NORMAL),
    Weather.HAIL: ("Castform-snowy", ElementType.ICE),
    Weather.SANDSTORM: ("Castform", ElementType.NORMAL),
    Weather.RAIN: ("Castform-rainy", ElementType.WATER),
    Weather.SUN: ("Castform-sunny", ElementType.FIRE),
    Weather.HEAVY_RAIN: ("Castform-rainy", ElementType.WATER),
    Weather.HARSH_SUN: ("Castform-sunny", ElementType.FIRE),
    Weather.STRONG_WINDS: ("Castform", ElementType.NORMAL),
}

_MIMICRY_TYPES = {
    Terrain.ELECTRIC: ElementType.ELECTRIC,
    Terrain.GRASSY: ElementType.GRASS,
    Terrain.MISTY: ElementType.FAIRY,
    Terrain.PSYCHIC: ElementType.PSYCHIC,
}

# Terrain -> (seed item, stat it raises).
_TERRAIN_SEEDS = {
    Terrain.ELECTRIC: ("electricseed", Stat.DEF),
    Terrain.GRASSY: ("grassyseed", Stat.DEF),
    Terrain.MISTY: ("mistyseed", Stat.SPD),
    Terrain.PSYCHIC: ("psychicseed", Stat.SPD),
}


def forecast_form(weather: Weather) -> Tuple[str, ElementType]:
    return _FORECAST_FORMS[weather]


def apply_forecast(poke: "Combatant", weather: Weather) -> str:
    """Switch a Forecast holder into the form matching `weather`."""
    if poke.ability != "forecast" or not poke.species.startswith("Castform"):
        return ""
    form, element = forecast_form(weather)
    if poke.species == form:
        return ""
    poke.species = form
    poke.types = [element]
    return f"{poke.name} transformed into a {element.value} type using its forecast!\n"


def set_weather(battle: "Battle", weather: Weather, setter: "Combatant") -> str:
    """Start `weather` and let every active Forecast holder react.

    Returns:
        Transcript, empty when the weather did not change
    """
    msg = battle.weather.set(weather, setter)
    if not msg:
        return msg
    for poke in battle.active_combatants():
        msg += apply_forecast(poke, weather)
    return msg


def apply_terrain_seed(poke: "Combatant", battle: "Battle") -> str:
    """Consume a seed matching the current terrain."""
    seed = _TERRAIN_SEEDS.get(battle.terrain.get())
    if seed is None:
        return ""
    item, stat = seed
    if not poke.held_item.holds(item):
        return ""
    msg = stat_stages.append_stat(
        poke, stat, 1, battle, poke, source=f"its {item[:-4]} seed"
    )
    poke.held_item.use()
    return msg


def set_terrain(battle: "Battle", terrain: Terrain, setter: "Combatant") -> str:
    """Start `terrain`; Mimicry holders change type and seeds are consumed."""
    if battle.terrain.get() is terrain:
        return battle.terrain.set(terrain, setter)
    msg = battle.terrain.set(terrain, setter)
    element = _MIMICRY_TYPES[terrain]
    for poke in battle.active_combatants():
        if poke.ability == "mimicry":
            poke.types = [element]
            msg += f"{poke.name} became a {element.value} type using its mimicry!\n"
        msg += apply_terrain_seed(poke, battle)
    return msg


def mimicry_type(terrain: Terrain) -> Optional[ElementType]:
    return _MIMICRY_TYPES.get(terrain)
