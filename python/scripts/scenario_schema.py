from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class CombatantSpec(BaseModel):
    name: str = Field(description="Display name used in transcripts")
    level: int = Field(default=50, ge=1, le=100)
    types: List[str] = Field(description="Element type names, e.g. ['fire', 'flying']")
    moves: List[str] = Field(
        description="Names of the move records the combatant knows"
    )
    base_stats: Optional[Dict[str, int]] = Field(
        default=None,
        description="Species base stats keyed hp, atk, def, spa, spd, spe",
    )
    stats: Optional[Dict[str, int]] = Field(
        default=None,
        description="Computed stats keyed atk, def, spa, spd, spe (used with max_hp)",
    )
    max_hp: Optional[int] = Field(default=None, ge=1)
    ability: str = ""
    item: Optional[str] = None
    nature: str = "hardy"

    @model_validator(mode="after")
    def _check_stats(self) -> "CombatantSpec":
        if self.base_stats is None and (self.stats is None or self.max_hp is None):
            raise ValueError(
                f"{self.name} needs base_stats, or stats together with max_hp"
            )
        return self


class Scenario(BaseModel):
    moves: List[Dict[str, Any]] = Field(
        description="Move records for MoveTemplate.from_dict"
    )
    attacker: CombatantSpec
    defender: CombatantSpec
    use: str = Field(description="Name of the attacker's move to use")

    @model_validator(mode="after")
    def _check_move_names(self) -> "Scenario":
        if self.use not in self.attacker.moves:
            raise ValueError(f"{self.attacker.name} does not know {self.use}")
        return self
