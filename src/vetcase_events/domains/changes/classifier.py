"""
Value classification for before/after snapshot pairs.

Decides, for a single pair, whether it was added, removed, updated or
left unchanged, and builds the matching change node. Containers of the
same kind are recursed into; anything else is an opaque leaf.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Union

from vetcase_events.domains.changes.value_objects import (
    ChangeNode,
    FieldChange,
    ObjectChange,
    SequenceChange,
)
from vetcase_events.domains.shared.kernel import (
    ABSENT,
    ChangeType,
    MappingValue,
    SequenceValue,
    SnapshotValue,
    ValueShape,
    _Absent,
)

_SEQUENCE_OR_ABSENT = frozenset({ValueShape.SEQUENCE, ValueShape.ABSENT})
_MAPPING_OR_ABSENT = frozenset({ValueShape.MAPPING, ValueShape.ABSENT})


def _scalars_equal(a: Any, b: Any) -> bool:
    # Booleans are their own type in a document: True never equals 1.
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    return bool(a == b)


def deep_equal(a: SnapshotValue, b: SnapshotValue) -> bool:
    """Structural equality over snapshot values.

    Scalars compare by value, sequences by length and pairwise by index,
    mappings by key set and per-key value. Different shapes are unequal.
    """
    if a.shape is not b.shape:
        return False
    if a.shape is ValueShape.ABSENT:
        return True
    if a.shape is ValueShape.SCALAR:
        return _scalars_equal(a.value, b.value)
    if a.shape is ValueShape.SEQUENCE:
        return len(a) == len(b) and all(
            deep_equal(left, right) for left, right in zip(a.items, b.items)
        )
    return a.fields.keys() == b.fields.keys() and all(
        deep_equal(value, b.fields[name]) for name, value in a.fields.items()
    )


def shallow_change_type(before: SnapshotValue, after: SnapshotValue) -> ChangeType:
    """Classify a pair by presence and deep equality only."""
    if before is ABSENT and after is not ABSENT:
        return ChangeType.ADDED
    if before is not ABSENT and after is ABSENT:
        return ChangeType.REMOVED
    if before is not ABSENT and not deep_equal(before, after):
        return ChangeType.UPDATED
    return ChangeType.UNCHANGED


def collapse_change_type(shallow: ChangeType, children: Iterable[ChangeNode]) -> ChangeType:
    """Apply the collapse rule to a container.

    An UPDATED container whose children are all UNCHANGED is reported as
    UNCHANGED. ADDED and REMOVED containers keep their classification.
    """
    if shallow is ChangeType.UPDATED and all(
        child.change_type is ChangeType.UNCHANGED for child in children
    ):
        return ChangeType.UNCHANGED
    return shallow


def union_keys(before: MappingValue, after: MappingValue) -> List[str]:
    """Field names of both sides: before's order first, then names only in after."""
    names = list(before.fields.keys())
    seen = set(names)
    names.extend(name for name in after.fields.keys() if name not in seen)
    return names


class ValueClassifier:
    """Recursively classifies before/after pairs into change nodes.

    Sequences are tried first, so a pair where both sides are absent is
    an empty, unchanged sequence. A mapping facing a sequence (or a
    scalar) is never diffed structurally: it becomes a FieldChange.
    """

    def classify(self, before: SnapshotValue, after: SnapshotValue) -> ChangeNode:
        """Classify a single pair.

        Args:
            before: Value before the write, or ``ABSENT``.
            after: Value after the write, or ``ABSENT``.

        Returns:
            SequenceChange, ObjectChange or FieldChange depending on the
            shapes of both sides.
        """
        shallow = shallow_change_type(before, after)
        shapes = {before.shape, after.shape}

        if shapes <= _SEQUENCE_OR_ABSENT:
            elements = self.classify_elements(
                before if before is not ABSENT else SequenceValue.empty(),
                after if after is not ABSENT else SequenceValue.empty(),
            )
            return SequenceChange(
                change_type=collapse_change_type(shallow, elements),
                elements=tuple(elements),
            )

        if shapes <= _MAPPING_OR_ABSENT:
            fields = self.classify_fields(before, after)
            return ObjectChange(
                change_type=collapse_change_type(shallow, fields.values()),
                fields=fields,
            )

        return FieldChange(
            old_value=before.to_native(),
            new_value=after.to_native(),
            change_type=shallow,
        )

    def classify_elements(
        self, before: SequenceValue, after: SequenceValue
    ) -> List[ChangeNode]:
        """Classify two sequences index by index over the longer length."""
        length = max(len(before), len(after))
        return [self.classify(before.at(index), after.at(index)) for index in range(length)]

    def classify_fields(
        self,
        before: Union[MappingValue, _Absent],
        after: Union[MappingValue, _Absent],
    ) -> Dict[str, ChangeNode]:
        """Classify two mappings per field name in the union of both key sets."""
        before_map = before if before is not ABSENT else MappingValue.empty()
        after_map = after if after is not ABSENT else MappingValue.empty()
        return {
            name: self.classify(before_map.get(name), after_map.get(name))
            for name in union_keys(before_map, after_map)
        }
