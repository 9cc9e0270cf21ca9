"""Changes Bounded Context.

Structural change detection between two snapshots of a document.

Key Components:
- SnapshotAdapter: converts native documents into shared-kernel values
- ValueClassifier: classifies one before/after pair, recursing into containers
- DocumentChangeBuilder: builds the DocumentChange tree for a document write

Example Usage:
    from vetcase_events.domains.changes import build_document_change

    change = build_document_change(
        "case-1", "evt-1", "2024-05-01T10:00:00Z",
        before={"name": "Rex"},
        after={"name": "Rex", "inputs": [{"id": "abc"}]},
    )
    change.child("inputs").change_type   # ChangeType.ADDED
"""

from vetcase_events.domains.changes.adapters import (
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
    InvalidSnapshot,
    SnapshotAdapter,
    SnapshotDepthExceeded,
)
from vetcase_events.domains.changes.classifier import (
    ValueClassifier,
    collapse_change_type,
    deep_equal,
    shallow_change_type,
)
from vetcase_events.domains.changes.diff_service import (
    DocumentChangeBuilder,
    build_document_change,
)
from vetcase_events.domains.changes.value_objects import (
    ChangeNode,
    DocumentChange,
    FieldChange,
    ObjectChange,
    SequenceChange,
)

__all__ = [
    # Value Objects
    "ChangeNode",
    "DocumentChange",
    "FieldChange",
    "ObjectChange",
    "SequenceChange",
    # Adapters
    "DEFAULT_MAX_DEPTH",
    "MAX_DEPTH_LIMIT",
    "InvalidSnapshot",
    "SnapshotAdapter",
    "SnapshotDepthExceeded",
    # Domain Services
    "DocumentChangeBuilder",
    "ValueClassifier",
    "build_document_change",
    "collapse_change_type",
    "deep_equal",
    "shallow_change_type",
]
