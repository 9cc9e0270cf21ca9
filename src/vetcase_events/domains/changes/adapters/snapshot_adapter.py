"""Snapshot adapter: native documents into shared-kernel values.

The trigger subsystem hands over documents as plain Python structures
(dicts, lists, strings, numbers, timestamps, bytes). This adapter is the
only place that inspects those native types; everything downstream works
on ``SnapshotValue`` shapes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional, Union

from vetcase_events.domains.shared.kernel import (
    ABSENT,
    MappingValue,
    Scalar,
    SequenceValue,
    SnapshotValue,
    _Absent,
)

DEFAULT_MAX_DEPTH = 64
# Upper bound on max_depth. Diffing recurses a few frames per nesting level,
# so deeper limits would hit the interpreter recursion limit first.
MAX_DEPTH_LIMIT = 200

_KERNEL_TYPES = (_Absent, Scalar, MappingValue, SequenceValue)


class InvalidSnapshot(ValueError):
    """Raised when a native document cannot be represented as a snapshot."""


class SnapshotDepthExceeded(InvalidSnapshot):
    """Raised when a document nests deeper than the configured limit."""

    def __init__(self, max_depth: int, path: str) -> None:
        self.max_depth = max_depth
        self.path = path
        super().__init__(
            f"Snapshot nesting exceeds {max_depth} levels at '{path}'"
        )


class SnapshotAdapter:
    """Converts native documents into ``SnapshotValue`` trees.

    Mappings become ``MappingValue``, lists and tuples become
    ``SequenceValue``, everything else (including bytes and datetimes)
    becomes an opaque ``Scalar``. Values that are already kernel values
    pass through unchanged.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        if max_depth > MAX_DEPTH_LIMIT:
            raise ValueError(
                f"max_depth must be at most {MAX_DEPTH_LIMIT}, got {max_depth}"
            )
        self.max_depth = max_depth

    def document(self, native: Optional[Mapping[str, Any]]) -> Union[MappingValue, _Absent]:
        """Convert a whole document; ``None`` means the document does not exist.

        Raises:
            InvalidSnapshot: If the root is neither a mapping nor None.
        """
        if native is None or native is ABSENT:
            return ABSENT
        if isinstance(native, MappingValue):
            return native
        if not isinstance(native, Mapping):
            raise InvalidSnapshot(
                f"Document root must be a mapping, got {type(native).__name__}"
            )
        return self._convert(native, depth=0, path="$")

    def value(self, native: Any) -> SnapshotValue:
        """Convert a single field value; ``None`` is a present null scalar."""
        return self._convert(native, depth=0, path="$")

    def _convert(self, native: Any, depth: int, path: str) -> SnapshotValue:
        if isinstance(native, _KERNEL_TYPES):
            return native
        if depth > self.max_depth:
            raise SnapshotDepthExceeded(self.max_depth, path)

        if isinstance(native, Mapping):
            fields = {}
            for key, item in native.items():
                if not isinstance(key, str):
                    raise InvalidSnapshot(
                        f"Field names must be strings, got {type(key).__name__} at '{path}'"
                    )
                fields[key] = self._convert(item, depth + 1, f"{path}.{key}")
            return MappingValue(fields=fields)

        if isinstance(native, (list, tuple)):
            return SequenceValue(
                items=tuple(
                    self._convert(item, depth + 1, f"{path}[{index}]")
                    for index, item in enumerate(native)
                )
            )

        return Scalar(native)
