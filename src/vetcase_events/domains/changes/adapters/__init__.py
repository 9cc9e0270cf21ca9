"""Adapters translating external document representations for the Changes Context."""

from vetcase_events.domains.changes.adapters.snapshot_adapter import (
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
    InvalidSnapshot,
    SnapshotAdapter,
    SnapshotDepthExceeded,
)

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_LIMIT",
    "InvalidSnapshot",
    "SnapshotAdapter",
    "SnapshotDepthExceeded",
]
