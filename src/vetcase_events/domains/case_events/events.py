"""Case Events Domain Events.

Events recognised in a vet case change tree. They are derived on the
fly for each document write and handed to the dispatcher; they are not
stored. All events are frozen dataclasses.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class InputsAdded:
    """Emitted when a case's inputs are written for the first time.

    Consumers:
    - Input source processing (transcription of each added input)
    """
    document_id: str
    added_ids: Tuple[str, ...]
    source_event_id: Optional[str] = None
    occurred_at: Optional[datetime] = None

    @property
    def event_type(self) -> str:
        return "InputsAdded"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "document_id": self.document_id,
            "added_ids": list(self.added_ids),
            "source_event_id": self.source_event_id,
            "occurred_at": self.occurred_at.isoformat() if self.occurred_at else None,
        }

    def __repr__(self) -> str:
        return f"InputsAdded(document={self.document_id}, ids={list(self.added_ids)})"


@dataclass(frozen=True)
class ContentRequestRef:
    """Points at one request of one content of a case."""
    document_id: str
    content_id: str
    request_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "document_id": self.document_id,
            "content_id": self.content_id,
            "request_id": self.request_id,
        }


@dataclass(frozen=True)
class RequestsChanged:
    """Emitted when content requests were added or updated.

    Consumers:
    - Content request processing (generation for processing requests)
    """
    document_id: str
    items: Tuple[ContentRequestRef, ...]
    source_event_id: Optional[str] = None
    occurred_at: Optional[datetime] = None

    @property
    def event_type(self) -> str:
        return "RequestsChanged"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "document_id": self.document_id,
            "items": [item.to_dict() for item in self.items],
            "source_event_id": self.source_event_id,
            "occurred_at": self.occurred_at.isoformat() if self.occurred_at else None,
        }

    def __repr__(self) -> str:
        return f"RequestsChanged(document={self.document_id}, items={len(self.items)})"


CaseEvent = Union[InputsAdded, RequestsChanged]
