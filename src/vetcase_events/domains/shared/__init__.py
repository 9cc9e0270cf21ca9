"""Shared Kernel - Types shared across bounded contexts.

This module contains the minimal set of types that are shared between
the Changes Context and the Case Events Context.
"""

from vetcase_events.domains.shared.kernel import (
    ABSENT,
    ChangeType,
    MappingValue,
    Scalar,
    SequenceValue,
    SnapshotValue,
    ValueShape,
)

__all__ = [
    "ABSENT",
    "ChangeType",
    "MappingValue",
    "Scalar",
    "SequenceValue",
    "SnapshotValue",
    "ValueShape",
]
