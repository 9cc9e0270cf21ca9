"""Case Events Bounded Context.

Recognises business events in the change tree of a vet case write and
routes them to the use cases that process them.
"""
from .entities import CaseFields
from .events import CaseEvent, ContentRequestRef, InputsAdded, RequestsChanged
from .detectors import (
    ChangeDetector, InputsAddedDetector, RequestsChangedDetector,
    default_detectors,
)
from .services import (
    CaseChangeInterpreter, CaseEventDispatcher, DispatchFailure,
    DispatchReport, ProcessContentRequestUseCase, ProcessInputSourceUseCase,
)

__all__ = [
    "CaseFields",
    "CaseEvent", "ContentRequestRef", "InputsAdded", "RequestsChanged",
    "ChangeDetector", "InputsAddedDetector", "RequestsChangedDetector",
    "default_detectors",
    "CaseChangeInterpreter", "CaseEventDispatcher", "DispatchFailure",
    "DispatchReport", "ProcessContentRequestUseCase", "ProcessInputSourceUseCase",
]
