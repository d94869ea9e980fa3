"""Weather and terrain state shared by both sides of a duel."""

from typing import TYPE_CHECKING, Any, Optional

from python.duel.schema.enums import Terrain, Weather
from python.duel.schema.expiring import ExpiringEffect

if TYPE_CHECKING:
    from python.duel.schema.combatant import Combatant

_WEATHER_ANNOUNCEMENTS = {
    Weather.HAIL: "It starts to hail!",
    Weather.SANDSTORM: "A sandstorm is brewing up!",
    Weather.RAIN: "It starts to rain!",
    Weather.SUN: "The sunlight is strong!",
    Weather.HEAVY_RAIN: "Heavy rain begins to fall!",
    Weather.HARSH_SUN: "The sunlight is extremely harsh!",
    Weather.STRONG_WINDS: "The winds are extremely strong!",
}

_WEATHER_ROCKS = {
    Weather.HAIL: "icyrock",
    Weather.SANDSTORM: "smoothrock",
    Weather.RAIN: "damprock",
    Weather.SUN: "heatrock",
}

# Abilities that keep a primal weather alive while their holder is active.
_PRIMAL_SOURCES = {
    Weather.STRONG_WINDS: "deltastream",
    Weather.HARSH_SUN: "desolateland",
    Weather.HEAVY_RAIN: "primordialsea",
}


class WeatherState(ExpiringEffect):
    """The current weather and its remaining turns.

    Primal weathers have no timer and block every ordinary weather until they
    end. `get()` reports no weather while Cloud Nine or Air Lock is active.
    """

    def __init__(self, battle: Any = None):
        super().__init__(remaining=0)
        self.current = Weather.NONE
        self.battle = battle

    def get(self) -> Weather:
        if self.battle is not None:
            for poke in self.battle.active_combatants():
                if poke.ability in ("cloudnine", "airlock"):
                    return Weather.NONE
        return self.current

    def next_turn(self) -> bool:
        expired = super().next_turn()
        if expired:
            self.current = Weather.NONE
        return expired

    def set(self, weather: Weather, setter: "Combatant") -> str:
        """Start a new weather.

        Args:
            weather: Weather to start
            setter: Combatant causing the change, its rock extends the timer

        Returns:
            Transcript, empty when nothing changed
        """
        if self.current is weather:
            return ""
        if weather is Weather.NONE:
            self.end()
            return ""
        turns: Optional[int] = None
        if not weather.is_primal:
            if self.current.is_primal:
                return ""
            turns = 8 if setter.held_item.name == _WEATHER_ROCKS[weather] else 5
        self.current = weather
        self.set_turns(turns)
        return _WEATHER_ANNOUNCEMENTS[weather] + "\n"

    def end(self) -> None:
        self.current = Weather.NONE
        self.set_turns(0)

    def recheck_primal(self) -> bool:
        """End a primal weather whose source left the field.

        Returns:
            True if the weather ended
        """
        source = _PRIMAL_SOURCES.get(self.current)
        if source is None:
            return False
        actives = self.battle.active_combatants() if self.battle is not None else []
        if any(poke.ability == source for poke in actives):
            return False
        self.end()
        return True


class TerrainState(ExpiringEffect):
    """The current terrain and its remaining turns."""

    def __init__(self) -> None:
        super().__init__(remaining=0)
        self.current = Terrain.NONE

    def get(self) -> Terrain:
        return self.current

    def next_turn(self) -> bool:
        expired = super().next_turn()
        if expired:
            self.current = Terrain.NONE
        return expired

    def set(self, terrain: Terrain, setter: "Combatant") -> str:
        if self.current is terrain:
            return f"There's already a {terrain.value} terrain!\n"
        turns = 8 if setter.held_item.name == "terrainextender" else 5
        self.current = terrain
        self.set_turns(turns)
        article = "an" if terrain is Terrain.ELECTRIC else "a"
        return f"{setter.name} creates {article} {terrain.value} terrain!\n"

    def end(self) -> None:
        self.current = Terrain.NONE
        self.set_turns(0)
