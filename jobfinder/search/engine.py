"""In-memory job search: fetch the baseline once, filter it on every edit.

States::

    IDLE --refresh()--> LOADING --ok--> READY
    LOADING --failure--> ERROR
    any state --refresh()--> LOADING

Criteria edits go through a :class:`Debouncer`, so typing a word triggers one
recompute instead of one per keystroke.  Recomputes never touch the network.
"""
from __future__ import annotations

import asyncio
from dataclasses import replace
from enum import Enum
from typing import Any, Callable

from jobfinder.errors import JobFinderError
from jobfinder.log import get_logger
from jobfinder.models import FilterCriteria, Job
from jobfinder.search.debounce import Debouncer
from jobfinder.search.filters import SalaryMode, filter_jobs

log = get_logger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.3
NO_RESULTS_MESSAGE = "No jobs found matching your criteria"


class EngineState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class SearchEngine:
    def __init__(
        self,
        fetch_jobs: Callable[[], list[Job]],
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        salary_mode: SalaryMode = SalaryMode.WITHIN,
    ) -> None:
        self._fetch_jobs = fetch_jobs
        self.salary_mode = salary_mode
        self.state = EngineState.IDLE
        self.criteria = FilterCriteria()
        self.baseline: list[Job] = []
        self.results: list[Job] = []
        self.error: str | None = None
        self.recompute_count = 0
        self._sequence = 0
        self._closed = False
        self._listeners: list[Callable[["SearchEngine"], Any]] = []
        self._debouncer = Debouncer(debounce_seconds, self._recompute)

    @classmethod
    def for_api(cls, api, **kwargs: Any) -> "SearchEngine":
        return cls(api.jobs.list, **kwargs)

    @property
    def no_results(self) -> bool:
        return self.state is EngineState.READY and not self.results

    @property
    def message(self) -> str | None:
        if self.state is EngineState.ERROR:
            return self.error
        if self.no_results:
            return NO_RESULTS_MESSAGE
        return None

    @property
    def debounce_seconds(self) -> float:
        return self._debouncer.delay

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: Callable[["SearchEngine"], Any]) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as exc:
                log.error("Search listener %r failed: %s", listener, exc)

    async def refresh(self) -> None:
        """Fetch the baseline again.  Only the most recent call may commit."""
        if self._closed:
            return
        self._sequence += 1
        sequence = self._sequence
        self.state = EngineState.LOADING
        self.error = None
        self._notify()

        try:
            jobs = await asyncio.to_thread(self._fetch_jobs)
        except JobFinderError as exc:
            self._fail(sequence, exc.user_message, exc)
            return
        except Exception as exc:
            self._fail(sequence, "Failed to load jobs", exc)
            return

        if not self._is_current(sequence):
            return
        self.baseline = list(jobs or [])
        self.state = EngineState.READY
        log.info("Loaded %d jobs", len(self.baseline))
        self._debouncer.cancel()
        self._recompute()

    load = refresh

    def _is_current(self, sequence: int) -> bool:
        if self._closed:
            log.debug("Dropping fetch #%d: engine closed", sequence)
            return False
        if sequence != self._sequence:
            log.debug("Dropping stale fetch #%d (latest is #%d)", sequence, self._sequence)
            return False
        return True

    def _fail(self, sequence: int, message: str, exc: BaseException) -> None:
        if not self._is_current(sequence):
            return
        log.warning("Loading jobs failed: %s", exc)
        self.state = EngineState.ERROR
        self.error = message
        self.baseline = []
        self.results = []
        self._notify()

    def update_criteria(self, **changes: Any) -> None:
        """Apply field edits and schedule a debounced recompute.

        Inside a running event loop the recompute waits for the quiet period;
        from plain synchronous code it happens before this returns.
        """
        if self._closed:
            return
        self.criteria = replace(self.criteria, **changes)
        self._debouncer.trigger()

    def set_criteria(self, criteria: FilterCriteria) -> None:
        if self._closed:
            return
        self.criteria = criteria
        self._debouncer.trigger()

    def search_now(self) -> list[Job]:
        """Recompute immediately, dropping any pending debounced run."""
        self._debouncer.cancel()
        self._recompute()
        return self.results

    def _recompute(self) -> None:
        if self._closed or self.state is not EngineState.READY:
            return
        self.results = filter_jobs(self.baseline, self.criteria, self.salary_mode)
        self.recompute_count += 1
        log.debug("Filtered %d -> %d jobs", len(self.baseline), len(self.results))
        if not self.results:
            log.info(NO_RESULTS_MESSAGE)
        self._notify()

    def job_types(self) -> list[str]:
        """Distinct job types in the baseline, first-seen order."""
        return list(dict.fromkeys(j.type for j in self.baseline if j.type))

    def close(self) -> None:
        self._closed = True
        self._debouncer.cancel()
        self._listeners.clear()
