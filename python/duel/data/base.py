from dataclasses import dataclass, fields
from typing import Any, Dict, TypeVar

T = TypeVar("T", bound="DuelDataObject")


@dataclass(frozen=True)
class DuelDataObject:
    @classmethod
    def from_dict(cls: type[T], data: Dict[str, Any]) -> T:
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})
