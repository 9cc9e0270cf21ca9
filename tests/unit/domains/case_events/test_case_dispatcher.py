"""Tests for CaseEventDispatcher."""
import asyncio
from typing import List, Set, Tuple

import pytest

from vetcase_events.domains.case_events import (
    CaseEventDispatcher,
    ContentRequestRef,
    DispatchReport,
    InputsAdded,
    ProcessContentRequestUseCase,
    ProcessInputSourceUseCase,
    RequestsChanged,
)


# ── fakes ────────────────────────────────────────────────────────────


class FakeInputSourceUseCase:
    def __init__(self, failing: Set[str] = frozenset()):
        self.calls: List[Tuple[str, str]] = []
        self.failing = failing

    async def execute(self, case_id: str, input_source_id: str):
        await asyncio.sleep(0)
        self.calls.append((case_id, input_source_id))
        if input_source_id in self.failing:
            raise RuntimeError(f"transcription failed for {input_source_id}")
        return input_source_id


class FakeContentRequestUseCase:
    def __init__(self, failing: Set[str] = frozenset()):
        self.calls: List[Tuple[str, str, str]] = []
        self.failing = failing

    async def execute(self, case_id: str, content_id: str, request_id: str):
        await asyncio.sleep(0)
        self.calls.append((case_id, content_id, request_id))
        if request_id in self.failing:
            raise ValueError("generation failed")
        return request_id


def requests_changed(*pairs):
    return RequestsChanged(
        document_id="case-1",
        items=tuple(
            ContentRequestRef(document_id="case-1", content_id=c, request_id=r)
            for c, r in pairs
        ),
    )


@pytest.fixture
def inputs_use_case():
    return FakeInputSourceUseCase()


@pytest.fixture
def requests_use_case():
    return FakeContentRequestUseCase()


@pytest.fixture
def dispatcher(inputs_use_case, requests_use_case):
    return CaseEventDispatcher(
        input_source_use_case=inputs_use_case,
        content_request_use_case=requests_use_case,
    )


# ── protocols ────────────────────────────────────────────────────────


class TestUseCaseProtocols:
    def test_fakes_satisfy_protocols(self, inputs_use_case, requests_use_case):
        assert isinstance(inputs_use_case, ProcessInputSourceUseCase)
        assert isinstance(requests_use_case, ProcessContentRequestUseCase)


# ── dispatch ─────────────────────────────────────────────────────────


class TestDispatch:
    @pytest.mark.asyncio
    async def test_inputs_added_runs_once_per_id(self, dispatcher, inputs_use_case):
        report = await dispatcher.dispatch(
            [InputsAdded(document_id="case-1", added_ids=("a", "b"))]
        )

        assert sorted(inputs_use_case.calls) == [("case-1", "a"), ("case-1", "b")]
        assert report.dispatched == 2
        assert report.ok

    @pytest.mark.asyncio
    async def test_requests_changed_runs_once_per_item(self, dispatcher, requests_use_case):
        report = await dispatcher.dispatch([requests_changed(("c1", "r1"), ("c2", "r2"))])

        assert sorted(requests_use_case.calls) == [
            ("case-1", "c1", "r1"),
            ("case-1", "c2", "r2"),
        ]
        assert report.dispatched == 2

    @pytest.mark.asyncio
    async def test_both_events(self, dispatcher, inputs_use_case, requests_use_case):
        report = await dispatcher.dispatch(
            [
                InputsAdded(document_id="case-1", added_ids=("abc",)),
                requests_changed(("c1", "r1")),
            ]
        )

        assert inputs_use_case.calls == [("case-1", "abc")]
        assert requests_use_case.calls == [("case-1", "c1", "r1")]
        assert report.dispatched == 2

    @pytest.mark.asyncio
    async def test_no_events(self, dispatcher):
        report = await dispatcher.dispatch([])

        assert report == DispatchReport()


class TestDispatchFailures:
    @pytest.mark.asyncio
    async def test_failure_does_not_affect_siblings(self, requests_use_case):
        requests_use_case.failing = {"r1"}
        dispatcher = CaseEventDispatcher(content_request_use_case=requests_use_case)

        report = await dispatcher.dispatch([requests_changed(("c1", "r1"), ("c1", "r2"))])

        assert len(requests_use_case.calls) == 2
        assert report.dispatched == 1
        assert not report.ok
        failure = report.failures[0]
        assert failure.event_type == "RequestsChanged"
        assert failure.item.request_id == "r1"
        assert failure.error == "generation failed"

    @pytest.mark.asyncio
    async def test_failure_does_not_affect_later_events(self, inputs_use_case, requests_use_case):
        inputs_use_case.failing = {"abc"}
        dispatcher = CaseEventDispatcher(
            input_source_use_case=inputs_use_case,
            content_request_use_case=requests_use_case,
        )

        report = await dispatcher.dispatch(
            [
                InputsAdded(document_id="case-1", added_ids=("abc",)),
                requests_changed(("c1", "r1")),
            ]
        )

        assert requests_use_case.calls == [("case-1", "c1", "r1")]
        assert report.dispatched == 1
        assert report.to_dict()["failures"] == [
            {
                "event_type": "InputsAdded",
                "item": "abc",
                "error": "transcription failed for abc",
            }
        ]

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self):
        class CancellingUseCase:
            async def execute(self, case_id, input_source_id):
                raise asyncio.CancelledError()

        dispatcher = CaseEventDispatcher(input_source_use_case=CancellingUseCase())

        with pytest.raises(asyncio.CancelledError):
            await dispatcher.dispatch([InputsAdded(document_id="case-1", added_ids=("a",))])


class TestMissingUseCases:
    @pytest.mark.asyncio
    async def test_unregistered_use_case_is_skipped(self, inputs_use_case, caplog):
        dispatcher = CaseEventDispatcher(input_source_use_case=inputs_use_case)

        report = await dispatcher.dispatch(
            [
                requests_changed(("c1", "r1")),
                InputsAdded(document_id="case-1", added_ids=("abc",)),
            ]
        )

        assert report.skipped_events == ["RequestsChanged"]
        assert report.dispatched == 1
        assert report.ok
        assert "No content request use case registered" in caplog.text

    @pytest.mark.asyncio
    async def test_nothing_registered(self):
        report = await CaseEventDispatcher().dispatch(
            [InputsAdded(document_id="case-1", added_ids=("abc",))]
        )

        assert report.skipped_events == ["InputsAdded"]
        assert report.dispatched == 0
