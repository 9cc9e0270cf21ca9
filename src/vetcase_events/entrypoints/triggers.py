"""Document write trigger for vet cases.

Entry point invoked by the write-trigger subsystem each time a vet case
document is created, updated or deleted. It validates the delivered
envelope, builds the change tree, detects case events and dispatches
them to the registered use cases.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from vetcase_events.config import CaseEventsConfig
from vetcase_events.domains.case_events import (
    CaseChangeInterpreter,
    CaseEvent,
    CaseEventDispatcher,
    DispatchReport,
)
from vetcase_events.domains.changes import (
    DocumentChange,
    DocumentChangeBuilder,
    SnapshotAdapter,
)

logger = logging.getLogger(__name__)


class DocumentWrittenEvent(BaseModel):
    """Envelope delivered for one write on one document.

    ``before`` is None for a creation and ``after`` is None for a
    deletion.
    """

    model_config = ConfigDict(frozen=True)

    document_id: str = Field(..., min_length=1, description="Identifier of the written document")
    event_id: str = Field(..., min_length=1, description="Identifier of the write event")
    occurred_at: datetime = Field(..., description="When the write happened")
    before: Optional[Dict[str, Any]] = Field(default=None, description="Document data before the write")
    after: Optional[Dict[str, Any]] = Field(default=None, description="Document data after the write")


@dataclass(frozen=True)
class TriggerResult:
    """What one trigger invocation computed and dispatched."""
    change: DocumentChange
    events: Tuple[CaseEvent, ...]
    report: DispatchReport

    def to_dict(self) -> Dict[str, Any]:
        return {
            "change": self.change.to_dict(),
            "events": [event.to_dict() for event in self.events],
            "report": self.report.to_dict(),
        }


@dataclass
class CaseWriteTrigger:
    """Handles vet case document writes end to end.

    The diff and detection steps are synchronous and pure; only the
    dispatch step awaits the use cases. Collaborators left unset are
    built from ``config``; an explicitly passed ``builder`` keeps its own
    depth limit.
    """
    config: CaseEventsConfig = field(default_factory=CaseEventsConfig)
    builder: Optional[DocumentChangeBuilder] = None
    interpreter: CaseChangeInterpreter = field(default_factory=CaseChangeInterpreter)
    dispatcher: CaseEventDispatcher = field(default_factory=CaseEventDispatcher)

    def __post_init__(self) -> None:
        if self.builder is None:
            self.builder = DocumentChangeBuilder(
                adapter=SnapshotAdapter(max_depth=self.config.max_snapshot_depth)
            )

    def document_id_for(self, document_path: str) -> Optional[str]:
        """Return the case id if ``document_path`` names a vet case document."""
        parts = document_path.strip("/").split("/")
        if len(parts) == 2 and parts[0] == self.config.collection_name and parts[1]:
            return parts[1]
        return None

    def analyze(
        self, payload: Union[DocumentWrittenEvent, Mapping[str, Any]]
    ) -> Tuple[DocumentChange, List[CaseEvent]]:
        """Build the change tree and detect events without dispatching.

        Raises:
            pydantic.ValidationError: If the envelope is malformed.
            InvalidSnapshot: If a snapshot cannot be diffed.
        """
        written = _as_envelope(payload)
        change = self.builder.build(
            document_id=written.document_id,
            event_id=written.event_id,
            occurred_at=written.occurred_at,
            before=written.before,
            after=written.after,
        )
        return change, self.interpreter.detect_events(change)

    async def handle(
        self, payload: Union[DocumentWrittenEvent, Mapping[str, Any]]
    ) -> TriggerResult:
        """Process one document write.

        Args:
            payload: The write envelope, as a model or a plain mapping.

        Returns:
            TriggerResult with the change tree, detected events and the
            dispatch report (empty when dispatch is disabled).
        """
        change, events = self.analyze(payload)

        report = DispatchReport()
        if events and self.config.dispatch_enabled:
            report = await self.dispatcher.dispatch(events)
        elif events:
            logger.info(
                "Dispatch disabled; %d event(s) for document %s not dispatched",
                len(events),
                change.document_id,
            )

        if not report.ok:
            logger.warning(
                "Event %s on document %s finished with %d failed execution(s)",
                change.event_id,
                change.document_id,
                len(report.failures),
            )
        return TriggerResult(change=change, events=tuple(events), report=report)


def _as_envelope(payload: Union[DocumentWrittenEvent, Mapping[str, Any]]) -> DocumentWrittenEvent:
    if isinstance(payload, DocumentWrittenEvent):
        return payload
    return DocumentWrittenEvent.model_validate(dict(payload))
