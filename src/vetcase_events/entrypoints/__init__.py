"""Entry points invoked by external trigger subsystems."""

from vetcase_events.entrypoints.triggers import (
    CaseWriteTrigger,
    DocumentWrittenEvent,
    TriggerResult,
)

__all__ = [
    "CaseWriteTrigger",
    "DocumentWrittenEvent",
    "TriggerResult",
]
