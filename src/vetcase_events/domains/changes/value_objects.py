"""Changes Domain Value Objects.

The change tree is a closed set of immutable nodes:

- FieldChange: a leaf comparison (scalars, or containers of different kinds)
- ObjectChange: both sides were mappings (or absent)
- SequenceChange: both sides were sequences (or absent)

DocumentChange is the root produced for one write on one document.
Nodes are never mutated after construction. Navigation helpers return
``None`` or empty results for paths that do not exist, so readers never
have to guard against missing fields themselves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from vetcase_events.domains.shared.kernel import ABSENT, ChangeType


def _render(value: Any) -> Any:
    """Render a native value for ``to_dict`` output."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    return value


@dataclass(frozen=True)
class FieldChange:
    """Leaf comparison of two values.

    ``old_value`` / ``new_value`` hold native Python values; a side that
    does not exist is ``ABSENT`` (``None`` is a present null).
    """
    old_value: Any
    new_value: Any
    change_type: ChangeType

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"change_type": self.change_type.value}
        if self.old_value is not ABSENT:
            result["old_value"] = _render(self.old_value)
        if self.new_value is not ABSENT:
            result["new_value"] = _render(self.new_value)
        return result


class _FieldsMixin:
    """Navigation shared by nodes that carry named child changes."""

    fields: Mapping[str, "ChangeNode"]

    def child(self, name: str) -> Optional["ChangeNode"]:
        """Return the change for ``name`` or None when the field never existed."""
        return self.fields.get(name)

    def new_value_of(self, name: str) -> Any:
        """Return the new value of a leaf field, or ``ABSENT``.

        Non-leaf children (nested mappings or sequences) also yield
        ``ABSENT``: only scalar leaves carry a readable value.
        """
        node = self.fields.get(name)
        if isinstance(node, FieldChange):
            return node.new_value
        return ABSENT

    def changed_fields(self) -> Dict[str, "ChangeNode"]:
        return {
            name: node
            for name, node in self.fields.items()
            if node.change_type.is_change
        }


@dataclass(frozen=True)
class ObjectChange(_FieldsMixin):
    """Per-field comparison of two mappings."""
    change_type: ChangeType
    fields: Mapping[str, "ChangeNode"] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "change_type": self.change_type.value,
            "fields": {name: node.to_dict() for name, node in self.fields.items()},
        }


@dataclass(frozen=True)
class SequenceChange:
    """Index-aligned comparison of two sequences.

    ``elements[i]`` classifies ``before[i]`` against ``after[i]``; the
    shorter side contributes ``ABSENT`` past its end.
    """
    change_type: ChangeType
    elements: Tuple["ChangeNode", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))

    def at(self, index: int) -> Optional["ChangeNode"]:
        if 0 <= index < len(self.elements):
            return self.elements[index]
        return None

    def elements_with(self, *change_types: ChangeType) -> List["ChangeNode"]:
        """Elements whose change type is one of ``change_types``, in order."""
        wanted = frozenset(change_types)
        return [element for element in self.elements if element.change_type in wanted]

    def elements_excluding(self, change_types: Iterable[ChangeType]) -> List["ChangeNode"]:
        """Elements whose change type is not in ``change_types``, in order."""
        ignored = frozenset(change_types)
        return [element for element in self.elements if element.change_type not in ignored]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "change_type": self.change_type.value,
            "elements": [element.to_dict() for element in self.elements],
        }


ChangeNode = Union[FieldChange, ObjectChange, SequenceChange]


@dataclass(frozen=True)
class DocumentChange(_FieldsMixin):
    """Change tree for one write on one document.

    ``change_type`` reflects presence and deep equality of the whole
    document; unlike nested containers it is never collapsed.
    """
    document_id: str
    event_id: str
    occurred_at: datetime
    change_type: ChangeType
    fields: Mapping[str, ChangeNode] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def has_changes(self) -> bool:
        return self.change_type.is_change

    def to_dict(self) -> Dict[str, Any]:
        return {
            "document_id": self.document_id,
            "event_id": self.event_id,
            "occurred_at": self.occurred_at.isoformat(),
            "change_type": self.change_type.value,
            "fields": {name: node.to_dict() for name, node in self.fields.items()},
        }

    def __repr__(self) -> str:
        return (
            f"DocumentChange(document={self.document_id}, event={self.event_id}, "
            f"type={self.change_type.value}, changed={len(self.changed_fields())})"
        )
