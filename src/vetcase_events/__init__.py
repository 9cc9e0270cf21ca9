"""vetcase-events: turns vet case document writes into domain events.

Compares the before/after snapshots of each write, builds a typed change
tree and recognises the events that drive downstream processing
(transcription of new inputs, generation of content requests).
"""

__version__ = "0.1.0"

from vetcase_events.config import CaseEventsConfig, ConfigError, load_config
from vetcase_events.container import ServiceContainer, get_container, reset_container
from vetcase_events.domains.case_events import (
    CaseChangeInterpreter,
    CaseEventDispatcher,
    InputsAdded,
    RequestsChanged,
)
from vetcase_events.domains.changes import (
    DocumentChange,
    DocumentChangeBuilder,
    build_document_change,
)
from vetcase_events.domains.shared import ABSENT, ChangeType
from vetcase_events.entrypoints import CaseWriteTrigger, DocumentWrittenEvent, TriggerResult

__all__ = [
    "__version__",
    "ABSENT",
    "CaseChangeInterpreter",
    "CaseEventDispatcher",
    "CaseEventsConfig",
    "CaseWriteTrigger",
    "ChangeType",
    "ConfigError",
    "DocumentChange",
    "DocumentChangeBuilder",
    "DocumentWrittenEvent",
    "InputsAdded",
    "RequestsChanged",
    "ServiceContainer",
    "TriggerResult",
    "build_document_change",
    "get_container",
    "load_config",
    "reset_container",
]
