"""Case Events Domain Services.

The CaseChangeInterpreter turns a DocumentChange into an ordered list of
case events. The CaseEventDispatcher hands those events to the use cases
that process them, through protocol-based anti-corruption layers: this
domain never imports the transcription or content generation
infrastructure directly.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Dict, List, Optional, Protocol, Sequence, runtime_checkable

from vetcase_events.domains.changes.value_objects import DocumentChange

from .detectors import ChangeDetector, default_detectors
from .events import CaseEvent, InputsAdded, RequestsChanged

logger = logging.getLogger(__name__)


@runtime_checkable
class ProcessInputSourceUseCase(Protocol):
    """Protocol for processing (transcribing) one input source of a case."""
    async def execute(self, case_id: str, input_source_id: str) -> Any: ...


@runtime_checkable
class ProcessContentRequestUseCase(Protocol):
    """Protocol for processing (generating) one content request of a case."""
    async def execute(self, case_id: str, content_id: str, request_id: str) -> Any: ...


@dataclass
class CaseChangeInterpreter:
    """Runs the detectors over a change tree in a fixed order.

    Each detector is independent: if one raises, the failure is logged
    and the remaining detectors still run.
    """
    detectors: List[ChangeDetector] = field(default_factory=default_detectors)

    def detect_events(self, change: DocumentChange) -> List[CaseEvent]:
        """Detect the case events carried by ``change``.

        Args:
            change: Change tree of one vet case write.

        Returns:
            Events in detector order; empty when nothing relevant changed.
        """
        events: List[CaseEvent] = []
        for detector in self.detectors:
            try:
                event = detector.detect(change)
            except Exception:
                logger.exception(
                    "Detector %s failed on document %s (event %s)",
                    detector.name,
                    change.document_id,
                    change.event_id,
                )
                continue
            if event is not None:
                logger.info("Detected %r from event %s", event, change.event_id)
                events.append(event)
        return events


@dataclass(frozen=True)
class DispatchFailure:
    """One use case execution that raised."""
    event_type: str
    item: Any
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "item": self.item.to_dict() if hasattr(self.item, "to_dict") else self.item,
            "error": self.error,
        }


@dataclass
class DispatchReport:
    """Outcome of dispatching a batch of case events."""
    dispatched: int = 0
    failures: List[DispatchFailure] = field(default_factory=list)
    skipped_events: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dispatched": self.dispatched,
            "failures": [failure.to_dict() for failure in self.failures],
            "skipped_events": list(self.skipped_events),
        }


@dataclass
class CaseEventDispatcher:
    """Routes case events to their use cases.

    Events are handled in order. The items of a single event (one per
    input id, one per content request) run concurrently; a failing item
    is logged and recorded without affecting its siblings or later
    events. Events with no registered use case are skipped.
    """
    input_source_use_case: Optional[ProcessInputSourceUseCase] = None
    content_request_use_case: Optional[ProcessContentRequestUseCase] = None

    async def dispatch(self, events: Sequence[CaseEvent]) -> DispatchReport:
        """Dispatch ``events`` and report what ran and what failed."""
        report = DispatchReport()
        for event in events:
            if isinstance(event, InputsAdded):
                await self._dispatch_inputs(event, report)
            elif isinstance(event, RequestsChanged):
                await self._dispatch_requests(event, report)
            else:
                logger.warning("No handler for event %r", event)
                report.skipped_events.append(type(event).__name__)
        return report

    async def _dispatch_inputs(self, event: InputsAdded, report: DispatchReport) -> None:
        if self.input_source_use_case is None:
            logger.warning(
                "No input source use case registered; skipping %s", event.event_type
            )
            report.skipped_events.append(event.event_type)
            return
        use_case = self.input_source_use_case
        await self._run_all(
            event,
            list(event.added_ids),
            [
                use_case.execute(case_id=event.document_id, input_source_id=input_id)
                for input_id in event.added_ids
            ],
            report,
        )

    async def _dispatch_requests(self, event: RequestsChanged, report: DispatchReport) -> None:
        if self.content_request_use_case is None:
            logger.warning(
                "No content request use case registered; skipping %s", event.event_type
            )
            report.skipped_events.append(event.event_type)
            return
        use_case = self.content_request_use_case
        await self._run_all(
            event,
            list(event.items),
            [
                use_case.execute(
                    case_id=item.document_id,
                    content_id=item.content_id,
                    request_id=item.request_id,
                )
                for item in event.items
            ],
            report,
        )

    async def _run_all(
        self,
        event: CaseEvent,
        items: List[Any],
        calls: List[Awaitable[Any]],
        report: DispatchReport,
    ) -> None:
        results = await asyncio.gather(*calls, return_exceptions=True)
        for item, result in zip(items, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning(
                    "%s handler failed for %r: %s", event.event_type, item, result
                )
                report.failures.append(
                    DispatchFailure(event_type=event.event_type, item=item, error=str(result))
                )
            else:
                report.dispatched += 1
