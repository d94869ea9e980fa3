from dataclasses import dataclass
from typing import Any, Dict, Optional

from python.duel.data.base import DuelDataObject
from python.duel.schema.enums import DamageClass, ElementType, MoveTarget
from python.duel.schema.object_name_normalizer import pretty_name

CONFUSION_MOVE_ID = 0xCFCF


@dataclass(frozen=True)
class MoveTemplate(DuelDataObject):
    """Immutable move data shared by every slot that carries the move."""

    id: int
    name: str
    power: Optional[int]
    pp: int
    accuracy: Optional[int]
    priority: int
    type: ElementType
    damage_class: DamageClass
    effect: int
    effect_chance: Optional[int] = None
    target: MoveTarget = MoveTarget.SELECTED_POKEMON
    crit_rate: int = 0
    min_hits: Optional[int] = None
    max_hits: Optional[int] = None

    @property
    def pretty_name(self) -> str:
        return pretty_name(self.name)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MoveTemplate":
        """Build a template from a move data record.

        Accepts either this class's field names with enum values, or the raw
        data dump layout ("identifier", "type_id", "damage_class_id",
        "effect_id", "target_id") with numeric ids.

        Args:
            data: Move record

        Returns:
            MoveTemplate built from the record

        Example:
            >>> MoveTemplate.from_dict({"id": 33, "identifier": "tackle",
            ...     "power": 40, "pp": 35, "accuracy": 100, "priority": 0,
            ...     "type_id": 1, "damage_class_id": 2, "effect_id": 1,
            ...     "target_id": 10})
        """
        record = dict(data)
        if "identifier" in record:
            record["name"] = record.pop("identifier")
        if "type_id" in record:
            record["type"] = ElementType.from_id(int(record.pop("type_id")))
        if "damage_class_id" in record:
            record["damage_class"] = DamageClass.from_id(
                int(record.pop("damage_class_id"))
            )
        if "effect_id" in record:
            record["effect"] = int(record.pop("effect_id"))
        if "target_id" in record:
            record["target"] = MoveTarget.from_id(int(record.pop("target_id")))
        for key, enum_cls in (
            ("type", ElementType),
            ("damage_class", DamageClass),
            ("target", MoveTarget),
        ):
            if isinstance(record.get(key), str):
                record[key] = enum_cls(record[key])
        if record.get("crit_rate") is None:
            record["crit_rate"] = 0
        return super().from_dict(record)


@dataclass(eq=False)
class MoveInstance:
    """A move slot owned by one combatant.

    Slots compare by identity: two combatants that know the same move hold two
    distinct slots with their own PP.
    """

    template: MoveTemplate
    pp: int = -1
    starting_pp: int = -1
    used: bool = False

    def __post_init__(self) -> None:
        if self.starting_pp < 0:
            self.starting_pp = self.template.pp
        if self.pp < 0:
            self.pp = self.starting_pp

    @classmethod
    def from_template(cls, template: MoveTemplate) -> "MoveInstance":
        return cls(template=template)

    @property
    def id(self) -> int:
        return self.template.id

    @property
    def name(self) -> str:
        return self.template.name

    @property
    def pretty_name(self) -> str:
        return self.template.pretty_name

    @property
    def power(self) -> Optional[int]:
        return self.template.power

    @property
    def accuracy(self) -> Optional[int]:
        return self.template.accuracy

    @property
    def priority(self) -> int:
        return self.template.priority

    @property
    def type(self) -> ElementType:
        return self.template.type

    @property
    def damage_class(self) -> DamageClass:
        return self.template.damage_class

    @property
    def effect(self) -> int:
        return self.template.effect

    @property
    def effect_chance(self) -> Optional[int]:
        return self.template.effect_chance

    @property
    def target(self) -> MoveTarget:
        return self.template.target

    @property
    def crit_rate(self) -> int:
        return self.template.crit_rate

    @property
    def min_hits(self) -> Optional[int]:
        return self.template.min_hits

    @property
    def max_hits(self) -> Optional[int]:
        return self.template.max_hits

    def consume_pp(self, amount: int = 1) -> int:
        """Spend PP, never dropping below zero.

        Returns:
            PP remaining after the spend
        """
        self.pp = max(0, self.pp - amount)
        return self.pp

    def restore_pp(self, amount: int) -> int:
        """Give PP back, never exceeding the starting value.

        Returns:
            PP remaining after the restore
        """
        self.pp = min(self.starting_pp, self.pp + amount)
        return self.pp

    def replace_template(
        self, template: MoveTemplate, pp: Optional[int] = None
    ) -> None:
        """Overwrite the slot in place, as mimic-style effects do."""
        self.template = template
        self.starting_pp = template.pp if pp is None else pp
        self.pp = self.starting_pp
        self.used = False

    def copy(self) -> "MoveInstance":
        return MoveInstance(
            template=self.template, pp=self.pp, starting_pp=self.starting_pp
        )

    def __repr__(self) -> str:
        return f"MoveInstance({self.name}, pp={self.pp}/{self.starting_pp})"


def struggle() -> MoveInstance:
    """The move used when a combatant has nothing else left."""
    return MoveInstance.from_template(
        MoveTemplate(
            id=165,
            name="struggle",
            power=50,
            pp=999999999999,
            accuracy=None,
            priority=0,
            type=ElementType.TYPELESS,
            damage_class=DamageClass.PHYSICAL,
            effect=255,
            target=MoveTarget.SELECTED_POKEMON,
        )
    )


def confusion() -> MoveInstance:
    """The self-hit a confused combatant lands on itself."""
    return MoveInstance.from_template(
        MoveTemplate(
            id=CONFUSION_MOVE_ID,
            name="confusion",
            power=40,
            pp=999999999999,
            accuracy=None,
            priority=0,
            type=ElementType.TYPELESS,
            damage_class=DamageClass.PHYSICAL,
            effect=1,
            target=MoveTarget.USER,
        )
    )


def present(power: int) -> MoveInstance:
    """A Present strike at one of its rolled powers."""
    return MoveInstance.from_template(
        MoveTemplate(
            id=217,
            name="present",
            power=power,
            pp=999999999999,
            accuracy=90,
            priority=0,
            type=ElementType.NORMAL,
            damage_class=DamageClass.PHYSICAL,
            effect=123,
            target=MoveTarget.SELECTED_POKEMON,
        )
    )


def beat_up_strike(raw_attack: int) -> MoveInstance:
    """The strike a healthy party member contributes to Beat Up."""
    return MoveInstance.from_template(
        MoveTemplate(
            id=251,
            name="beat-up",
            power=raw_attack // 10 + 5,
            pp=100,
            accuracy=100,
            priority=0,
            type=ElementType.DARK,
            damage_class=DamageClass.PHYSICAL,
            effect=1,
            target=MoveTarget.SELECTED_POKEMON,
        )
    )
