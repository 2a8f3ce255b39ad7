"""EvaluationSlot: debounced, single-flight query evaluation.

Text inputs fire a state change per keystroke. Evaluating each one is
wasted work, and worse, an older evaluation finishing after a newer
one would overwrite fresh results with stale ones. The slot fixes both:

    slot.schedule(state_a)   # pending: a
    slot.schedule(state_b)   # a dropped, pending: b
    ... delay elapses ...    # on_result(evaluate(b))

There is at most one pending evaluation. Every schedule() and cancel()
bumps a generation counter. A result is delivered only if its generation
is still current once evaluation finishes, so a superseded or cancelled
evaluation delivers nothing, even one already running. Latest write wins.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable

from changelog_query.query.pipeline import QueryPipeline, QueryResult
from changelog_query.query.state import QueryState

log = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 0.6


class EvaluationSlot:
    """Single pending evaluation with a debounce delay.

    Args:
        pipeline: evaluates the states.
        on_result: called with each delivered QueryResult. Runs on the
            timer thread, or on the caller's thread for flush().
        delay: seconds to wait after the last schedule() call.
    """

    def __init__(
        self,
        pipeline: QueryPipeline,
        on_result: Callable[[QueryResult], None],
        delay: float = DEFAULT_DELAY_SECONDS,
    ) -> None:
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self._pipeline = pipeline
        self._on_result = on_result
        self._delay = delay
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending_state: QueryState | None = None
        self._generation = 0
        self._delivered = 0
        self._deliver_lock = threading.Lock()

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending_state is not None

    @property
    def delivered_count(self) -> int:
        """Number of results handed to on_result so far."""
        return self._delivered

    def schedule(self, state: QueryState) -> None:
        """Replace any pending evaluation with one for state."""
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            generation = self._generation
            self._pending_state = state
            timer = threading.Timer(self._delay, self._fire, args=(generation,))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        """Drop the pending evaluation, if any."""
        with self._lock:
            self._cancel_locked()
            self._generation += 1

    def flush(self) -> QueryResult | None:
        """Evaluate the pending state now, on this thread.

        Returns the evaluated result, or None if nothing was pending.
        """
        with self._lock:
            state = self._pending_state
            if state is None:
                return None
            generation = self._generation
            self._cancel_locked()
        return self._deliver(state, generation)

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._pending_state = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._pending_state is None:
                log.debug("Dropping superseded evaluation (generation %d)", generation)
                return
            state = self._pending_state
            self._pending_state = None
            self._timer = None
        self._deliver(state, generation)

    def _deliver(self, state: QueryState, generation: int) -> QueryResult:
        result = self._pipeline.evaluate(state)
        # A schedule() or cancel() that ran while evaluating bumped the
        # generation; the result is returned to flush() callers but never
        # handed to on_result.
        with self._deliver_lock:
            with self._lock:
                current = generation == self._generation
            if not current:
                log.debug("Discarding superseded result (generation %d)", generation)
                return result
            self._delivered += 1
            try:
                self._on_result(result)
            except Exception:
                log.exception("Error in query result callback")
        return result
