"""Pytest fixtures for domain tests.

These fixtures support testing the bounded contexts:
- Changes Context
- Case Events Context
"""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from typing import Any, Dict

import pytest

from vetcase_events.domains.changes import DocumentChangeBuilder


# =============================================================================
# Changes Domain Fixtures
# =============================================================================


@pytest.fixture
def builder() -> DocumentChangeBuilder:
    """A default-configured document change builder."""
    return DocumentChangeBuilder()


@pytest.fixture
def occurred_at() -> datetime:
    return datetime(2021, 10, 1, tzinfo=timezone.utc)


# =============================================================================
# Case Events Domain Fixtures
# =============================================================================


@pytest.fixture
def audio_input() -> Dict[str, Any]:
    """An input source as written right after upload."""
    return {
        "id": "abc",
        "name": "audio",
        "status": "transcribing",
        "content": {"type": "bucket", "path": "cases/case-1/abc.webm"},
    }


@pytest.fixture
def soap_content() -> Dict[str, Any]:
    """A content with one SOAP request still being processed."""
    return {
        "contentId": "c1",
        "customName": "Consultation",
        "inputSource": {"id": "abc", "name": "audio", "status": "transcribed"},
        "requests": [
            {
                "requestId": "r1",
                "templateName": "SOAP",
                "instructions": "Summarise the visit",
                "result": {"status": "processing"},
            }
        ],
    }


@pytest.fixture
def vet_case(audio_input: Dict[str, Any], soap_content: Dict[str, Any]) -> Dict[str, Any]:
    """A fully populated vet case document."""
    return {
        "ownerId": "owner-1",
        "caseId": "case-1",
        "name": "Rex - limping",
        "inputs": [audio_input],
        "contents": [soap_content],
    }


@pytest.fixture
def vet_case_copy(vet_case: Dict[str, Any]):
    """Factory returning independent deep copies of the vet case."""
    def make() -> Dict[str, Any]:
        return copy.deepcopy(vet_case)
    return make
