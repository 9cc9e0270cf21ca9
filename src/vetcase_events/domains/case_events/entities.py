"""Case Events Domain Entities.

Read-side description of the vet case aggregate: the field names the
detectors navigate in a change tree. The aggregate itself (and its
mutation rules) lives with the persistence collaborator.
"""
from __future__ import annotations

from typing import ClassVar


class CaseFields:
    """Field names of a vet case document and its nested records.

    Shape:
        inputs:   [{id, name, content, status, transcription?}]
        contents: [{contentId, customName, inputSource,
                    requests: [{requestId, templateName, instructions, result}]}]
    """
    INPUTS: ClassVar[str] = "inputs"
    INPUT_ID: ClassVar[str] = "id"

    CONTENTS: ClassVar[str] = "contents"
    CONTENT_ID: ClassVar[str] = "contentId"
    REQUESTS: ClassVar[str] = "requests"
    REQUEST_ID: ClassVar[str] = "requestId"
