"""Shared Kernel - Snapshot value types shared across bounded contexts.

These types are intentionally minimal and shared between:
- Changes Context (adapts native documents into values and diffs them)
- Case Events Context (reads the change trees built from them)

A snapshot value is one of four closed shapes: absent, scalar, mapping
or sequence. Native documents are converted into these shapes once, by
the snapshot adapter, so the diff engine never inspects raw Python
objects.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Tuple, Union


class ValueShape(enum.Enum):
    """Structural shape of a snapshot value."""
    ABSENT = "absent"
    SCALAR = "scalar"
    MAPPING = "mapping"
    SEQUENCE = "sequence"


class _Absent:
    """Marker for a side of a comparison that does not exist.

    Distinct from ``None``: a field holding ``None`` is a present null
    scalar, while an absent field is missing from the snapshot entirely.
    """
    shape = ValueShape.ABSENT
    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def to_native(self) -> "_Absent":
        return self

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __copy__(self) -> "_Absent":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "_Absent":
        return self

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()


class ChangeType(str, enum.Enum):
    """Classification of a before/after pair."""
    ADDED = "added"
    REMOVED = "removed"
    UPDATED = "updated"
    UNCHANGED = "unchanged"

    @property
    def is_change(self) -> bool:
        return self is not ChangeType.UNCHANGED


@dataclass(frozen=True)
class Scalar:
    """A leaf value: string, number, boolean, null or an opaque object.

    Opaque objects (bytes, timestamps, references) are never diffed
    structurally; they compare by their own equality.
    """
    value: Any

    shape = ValueShape.SCALAR

    def to_native(self) -> Any:
        return self.value


@dataclass(frozen=True)
class MappingValue:
    """An unordered set of named fields."""
    fields: Mapping[str, "SnapshotValue"]

    shape = ValueShape.MAPPING

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def get(self, name: str) -> "SnapshotValue":
        return self.fields.get(name, ABSENT)

    def keys(self) -> List[str]:
        return list(self.fields.keys())

    def to_native(self) -> Dict[str, Any]:
        return {name: value.to_native() for name, value in self.fields.items()}

    @classmethod
    def empty(cls) -> "MappingValue":
        return cls(fields={})


@dataclass(frozen=True)
class SequenceValue:
    """An ordered list of values, aligned by position when compared."""
    items: Tuple["SnapshotValue", ...]

    shape = ValueShape.SEQUENCE

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __iter__(self) -> Iterator["SnapshotValue"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def at(self, index: int) -> "SnapshotValue":
        """Return the item at ``index`` or ``ABSENT`` past the end."""
        if 0 <= index < len(self.items):
            return self.items[index]
        return ABSENT

    def to_native(self) -> List[Any]:
        return [item.to_native() for item in self.items]

    @classmethod
    def empty(cls) -> "SequenceValue":
        return cls(items=())


SnapshotValue = Union[_Absent, Scalar, MappingValue, SequenceValue]
