"""Tests for EvaluationSlot -- debounced, latest-wins evaluation."""

from __future__ import annotations

import logging
import threading
import time

import pytest

from changelog_query.query.debounce import EvaluationSlot
from changelog_query.query.pipeline import QueryPipeline, QueryResult
from changelog_query.query.state import QueryState

from tests.conftest import make_record

RECORDS = [
    make_record(id=1, name="Ali"),
    make_record(id=2, name="Reza"),
    make_record(id=3, name="Sara"),
]


class Collector:
    """on_result callback that records results and signals arrivals."""

    def __init__(self) -> None:
        self.results: list[QueryResult] = []
        self.arrived = threading.Event()

    def __call__(self, result: QueryResult) -> None:
        self.results.append(result)
        self.arrived.set()

    def ids(self) -> list[list[int]]:
        return [[r.id for r in res.records] for res in self.results]


class BlockingPipeline(QueryPipeline):
    """Holds evaluations of name_filter == "slow" until released."""

    def __init__(self, records) -> None:
        super().__init__(records)
        self.started = threading.Event()
        self.release = threading.Event()
        self.finished = threading.Event()

    def evaluate(self, state: QueryState) -> QueryResult:
        if state.name_filter == "slow":
            self.started.set()
            self.release.wait(timeout=5.0)
            result = super().evaluate(QueryState(name_filter="sara"))
            self.finished.set()
            return result
        return super().evaluate(state)


@pytest.fixture
def pipeline() -> QueryPipeline:
    return QueryPipeline(RECORDS)


class TestScheduling:

    def test_delivers_after_delay(self, pipeline):
        sink = Collector()
        slot = EvaluationSlot(pipeline, sink, delay=0.05)
        slot.schedule(QueryState(name_filter="ali"))
        assert slot.pending
        assert sink.arrived.wait(timeout=2.0)
        assert sink.ids() == [[1]]
        assert not slot.pending
        assert slot.delivered_count == 1

    def test_only_latest_state_is_evaluated(self, pipeline):
        sink = Collector()
        slot = EvaluationSlot(pipeline, sink, delay=0.2)
        slot.schedule(QueryState(name_filter="ali"))
        slot.schedule(QueryState(name_filter="rez"))
        slot.schedule(QueryState(name_filter="sar"))
        assert sink.arrived.wait(timeout=2.0)
        time.sleep(0.3)
        assert sink.ids() == [[3]]
        assert pipeline.evaluation_count == 1

    def test_cancel_drops_pending(self, pipeline):
        sink = Collector()
        slot = EvaluationSlot(pipeline, sink, delay=0.05)
        slot.schedule(QueryState(name_filter="ali"))
        slot.cancel()
        assert not slot.pending
        time.sleep(0.2)
        assert sink.results == []

    def test_negative_delay_rejected(self, pipeline):
        with pytest.raises(ValueError, match="delay"):
            EvaluationSlot(pipeline, Collector(), delay=-1)


class TestFlush:

    def test_flush_runs_now(self, pipeline):
        sink = Collector()
        slot = EvaluationSlot(pipeline, sink, delay=10.0)
        slot.schedule(QueryState(name_filter="reza"))
        result = slot.flush()
        assert result is not None
        assert [r.id for r in result.records] == [2]
        assert sink.ids() == [[2]]
        assert not slot.pending

    def test_flush_with_nothing_pending(self, pipeline):
        slot = EvaluationSlot(pipeline, Collector(), delay=10.0)
        assert slot.flush() is None

    def test_flushed_timer_does_not_fire_again(self, pipeline):
        sink = Collector()
        slot = EvaluationSlot(pipeline, sink, delay=0.05)
        slot.schedule(QueryState(name_filter="ali"))
        slot.flush()
        time.sleep(0.2)
        assert len(sink.results) == 1


class TestLatestWins:

    def test_stale_result_discarded(self):
        pipeline = BlockingPipeline(RECORDS)
        sink = Collector()
        slot = EvaluationSlot(pipeline, sink, delay=0.0)

        slot.schedule(QueryState(name_filter="slow"))
        assert pipeline.started.wait(timeout=2.0)

        # A newer state is scheduled and delivered while the old one
        # is still evaluating.
        slot.schedule(QueryState(name_filter="ali"))
        assert sink.arrived.wait(timeout=2.0)
        assert sink.ids() == [[1]]

        pipeline.release.set()
        assert pipeline.finished.wait(timeout=2.0)
        time.sleep(0.1)
        assert sink.ids() == [[1]]
        assert slot.delivered_count == 1

    def test_cancel_during_evaluation_delivers_nothing(self):
        pipeline = BlockingPipeline(RECORDS)
        sink = Collector()
        slot = EvaluationSlot(pipeline, sink, delay=0.0)

        slot.schedule(QueryState(name_filter="slow"))
        assert pipeline.started.wait(timeout=2.0)
        slot.cancel()

        pipeline.release.set()
        assert pipeline.finished.wait(timeout=2.0)
        time.sleep(0.1)
        assert sink.results == []
        assert slot.delivered_count == 0

    def test_running_result_dropped_while_newer_state_waits(self):
        pipeline = BlockingPipeline(RECORDS)
        sink = Collector()
        slot = EvaluationSlot(pipeline, sink, delay=0.2)

        slot.schedule(QueryState(name_filter="slow"))
        assert pipeline.started.wait(timeout=2.0)

        # The newer state is still inside its delay when the old
        # evaluation completes.
        slot.schedule(QueryState(name_filter="ali"))
        pipeline.release.set()
        assert pipeline.finished.wait(timeout=2.0)

        assert sink.arrived.wait(timeout=2.0)
        time.sleep(0.1)
        assert sink.ids() == [[1]]
        assert slot.delivered_count == 1

    def test_flush_returns_result_even_if_superseded(self):
        pipeline = BlockingPipeline(RECORDS)
        sink = Collector()
        slot = EvaluationSlot(pipeline, sink, delay=10.0)
        slot.schedule(QueryState(name_filter="slow"))

        outcome: list[QueryResult | None] = []
        worker = threading.Thread(target=lambda: outcome.append(slot.flush()))
        worker.start()
        assert pipeline.started.wait(timeout=2.0)
        slot.cancel()
        pipeline.release.set()
        worker.join(timeout=2.0)

        assert [r.id for r in outcome[0].records] == [3]
        assert sink.results == []


class TestCallbackErrors:

    def test_callback_exception_is_logged_not_raised(self, pipeline, caplog):
        def boom(result):
            raise RuntimeError("render failed")

        slot = EvaluationSlot(pipeline, boom, delay=10.0)
        slot.schedule(QueryState(name_filter="ali"))
        with caplog.at_level(logging.ERROR, logger="changelog_query.query.debounce"):
            result = slot.flush()
        assert result is not None
        assert "Error in query result callback" in caplog.text
