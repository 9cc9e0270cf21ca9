"""
Document change building.

Turns the before/after snapshots of one document write into a
DocumentChange: a typed tree describing, field by field, what was added,
removed, updated or left unchanged.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from pydantic import TypeAdapter

from vetcase_events.domains.changes.adapters.snapshot_adapter import SnapshotAdapter
from vetcase_events.domains.changes.classifier import ValueClassifier, shallow_change_type
from vetcase_events.domains.changes.value_objects import DocumentChange

logger = logging.getLogger(__name__)

_TIMESTAMP = TypeAdapter(datetime)


class DocumentChangeBuilder:
    """
    Builds DocumentChange trees from raw document snapshots.

    Pure: no I/O and no shared state, so a single builder can serve any
    number of concurrent trigger invocations.
    """

    def __init__(
        self,
        adapter: Optional[SnapshotAdapter] = None,
        classifier: Optional[ValueClassifier] = None,
    ) -> None:
        self.adapter = adapter or SnapshotAdapter()
        self.classifier = classifier or ValueClassifier()

    def build(
        self,
        document_id: str,
        event_id: str,
        occurred_at: Union[datetime, str],
        before: Optional[Mapping[str, Any]],
        after: Optional[Mapping[str, Any]],
    ) -> DocumentChange:
        """
        Compute the change tree for one document write.

        Args:
            document_id: Identifier of the written document.
            event_id: Identifier of the write event.
            occurred_at: When the write happened (datetime or ISO-8601 string).
            before: Document data before the write, or None if it did not exist.
            after: Document data after the write, or None if it was deleted.

        Returns:
            DocumentChange whose fields cover the union of both key sets.
            Both snapshots missing yields an UNCHANGED change with no fields.

        Raises:
            InvalidSnapshot: If a snapshot is not a mapping or nests too deep.
        """
        before_value = self.adapter.document(before)
        after_value = self.adapter.document(after)

        change = DocumentChange(
            document_id=document_id,
            event_id=event_id,
            occurred_at=_TIMESTAMP.validate_python(occurred_at),
            change_type=shallow_change_type(before_value, after_value),
            fields=self.classifier.classify_fields(before_value, after_value),
        )

        logger.debug(
            "Built change for document %s (event %s): %s, %d of %d fields changed",
            document_id,
            event_id,
            change.change_type.value,
            len(change.changed_fields()),
            len(change.fields),
        )
        return change


_default_builder: Optional[DocumentChangeBuilder] = None


def build_document_change(
    document_id: str,
    event_id: str,
    occurred_at: Union[datetime, str],
    before: Optional[Mapping[str, Any]],
    after: Optional[Mapping[str, Any]],
) -> DocumentChange:
    """Build a DocumentChange with a default-configured builder."""
    global _default_builder
    if _default_builder is None:
        _default_builder = DocumentChangeBuilder()
    return _default_builder.build(document_id, event_id, occurred_at, before, after)
