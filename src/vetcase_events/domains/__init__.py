"""Domain-Driven Design bounded contexts for vet case change handling.

This package contains:
- Shared Kernel: snapshot value shapes and ChangeType
- Changes Context: structural diff of document snapshots
- Case Events Context: detection and dispatch of vet case events
"""

from vetcase_events.domains.shared import (
    ABSENT,
    ChangeType,
)

from vetcase_events.domains.changes import (
    DocumentChange,
    DocumentChangeBuilder,
    FieldChange,
    ObjectChange,
    SequenceChange,
    build_document_change,
)

from vetcase_events.domains.case_events import (
    CaseChangeInterpreter,
    CaseEventDispatcher,
    InputsAdded,
    RequestsChanged,
)

__all__ = [
    # Shared Kernel
    "ABSENT",
    "ChangeType",
    # Changes Domain
    "DocumentChange",
    "DocumentChangeBuilder",
    "FieldChange",
    "ObjectChange",
    "SequenceChange",
    "build_document_change",
    # Case Events Domain
    "CaseChangeInterpreter",
    "CaseEventDispatcher",
    "InputsAdded",
    "RequestsChanged",
]
