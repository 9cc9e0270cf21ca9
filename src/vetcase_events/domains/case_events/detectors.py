"""Case Events Detectors.

Each detector walks one path of a vet case DocumentChange and yields at
most one event. Detectors are pure: they never mutate the tree, and a
missing or unexpectedly shaped path simply yields no event.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar, FrozenSet, List, Optional, Protocol, runtime_checkable

from vetcase_events.domains.changes.value_objects import (
    DocumentChange,
    ObjectChange,
    SequenceChange,
)
from vetcase_events.domains.shared.kernel import ABSENT, ChangeType

from .entities import CaseFields
from .events import CaseEvent, ContentRequestRef, InputsAdded, RequestsChanged

logger = logging.getLogger(__name__)


@runtime_checkable
class ChangeDetector(Protocol):
    """Protocol for a detector run by the CaseChangeInterpreter."""
    name: str

    def detect(self, change: DocumentChange) -> Optional[CaseEvent]: ...


@dataclass(frozen=True)
class InputsAddedDetector:
    """Detects input sources written together with the ``inputs`` field.

    Fires only when the ``inputs`` field itself went from absent to
    present. Appending to an already populated ``inputs`` list classifies
    the field as UPDATED and therefore does not fire.
    """
    name: str = "inputs_added"

    def detect(self, change: DocumentChange) -> Optional[InputsAdded]:
        inputs = change.child(CaseFields.INPUTS)
        if not isinstance(inputs, SequenceChange):
            return None
        if inputs.change_type is not ChangeType.ADDED:
            return None

        added_ids: List[str] = []
        for element in inputs.elements_with(ChangeType.ADDED):
            input_id = (
                element.new_value_of(CaseFields.INPUT_ID)
                if isinstance(element, ObjectChange)
                else ABSENT
            )
            if input_id is ABSENT:
                logger.warning(
                    "Skipping added input without an id on document %s",
                    change.document_id,
                )
                continue
            added_ids.append(input_id)

        if not added_ids:
            return None
        return InputsAdded(
            document_id=change.document_id,
            added_ids=tuple(added_ids),
            source_event_id=change.event_id,
            occurred_at=change.occurred_at,
        )


@dataclass(frozen=True)
class RequestsChangedDetector:
    """Detects content requests that were added or updated.

    Contents and requests that were removed or left unchanged are
    ignored. Items are flattened in content order, then request order.
    """
    name: str = "requests_changed"

    IGNORED: ClassVar[FrozenSet[ChangeType]] = frozenset(
        {ChangeType.REMOVED, ChangeType.UNCHANGED}
    )

    def detect(self, change: DocumentChange) -> Optional[RequestsChanged]:
        contents = change.child(CaseFields.CONTENTS)
        if not isinstance(contents, SequenceChange):
            return None
        if contents.change_type in self.IGNORED:
            return None

        items: List[ContentRequestRef] = []
        for content in contents.elements_excluding(self.IGNORED):
            if not isinstance(content, ObjectChange):
                continue
            requests = content.child(CaseFields.REQUESTS)
            if not isinstance(requests, SequenceChange):
                continue
            items.extend(self._collect(change.document_id, content, requests))

        if not items:
            return None
        return RequestsChanged(
            document_id=change.document_id,
            items=tuple(items),
            source_event_id=change.event_id,
            occurred_at=change.occurred_at,
        )

    def _collect(
        self,
        document_id: str,
        content: ObjectChange,
        requests: SequenceChange,
    ) -> List[ContentRequestRef]:
        content_id = content.new_value_of(CaseFields.CONTENT_ID)
        if content_id is ABSENT:
            logger.warning(
                "Skipping changed content without a contentId on document %s",
                document_id,
            )
            return []

        refs: List[ContentRequestRef] = []
        for request in requests.elements_excluding(self.IGNORED):
            request_id = (
                request.new_value_of(CaseFields.REQUEST_ID)
                if isinstance(request, ObjectChange)
                else ABSENT
            )
            if request_id is ABSENT:
                logger.warning(
                    "Skipping changed request without a requestId in content %s of document %s",
                    content_id,
                    document_id,
                )
                continue
            refs.append(
                ContentRequestRef(
                    document_id=document_id,
                    content_id=content_id,
                    request_id=request_id,
                )
            )
        return refs


def default_detectors() -> List[ChangeDetector]:
    """Detectors in their fixed evaluation order."""
    return [InputsAddedDetector(), RequestsChangedDetector()]
