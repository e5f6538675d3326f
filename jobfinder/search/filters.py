"""Match jobs against the user's filter criteria."""
from __future__ import annotations

import math
from enum import Enum
from typing import Iterable

from jobfinder.models import FilterCriteria, Job, to_number


class SalaryMode(str, Enum):
    # job range must sit inside the requested range
    WITHIN = "within"
    # job range only has to touch the requested range
    OVERLAP = "overlap"


def _normalize(s: str) -> str:
    return (s or "").lower()


def _contains(haystack: str, needle: str) -> bool:
    return not needle or _normalize(needle) in _normalize(haystack)


def matches_keyword(job: Job, keyword: str) -> bool:
    if not keyword:
        return True
    return _contains(job.title, keyword) or _contains(job.company, keyword)


def matches_location(job: Job, location: str) -> bool:
    return _contains(job.location, location)


def matches_job_type(job: Job, job_type: str) -> bool:
    return _contains(job.type, job_type)


def _job_range(job: Job) -> tuple[float, float]:
    salary = job.salary
    low = to_number(salary.minimum) if salary else None
    high = to_number(salary.maximum) if salary else None
    return (0.0 if low is None else low, math.inf if high is None else high)


def matches_salary(
    job: Job,
    salary_min: float | None = None,
    salary_max: float | None = None,
    mode: SalaryMode = SalaryMode.WITHIN,
) -> bool:
    """Bounds are inclusive.  Missing job bounds count as 0 and +inf."""
    want_low = 0.0 if salary_min is None else salary_min
    want_high = math.inf if salary_max is None else salary_max
    low, high = _job_range(job)
    if mode is SalaryMode.OVERLAP:
        return low <= want_high and high >= want_low
    return low >= want_low and high <= want_high


def job_matches(
    job: Job, criteria: FilterCriteria, salary_mode: SalaryMode = SalaryMode.WITHIN
) -> bool:
    return (
        matches_keyword(job, criteria.keyword)
        and matches_location(job, criteria.location)
        and matches_job_type(job, criteria.job_type)
        and matches_salary(job, criteria.salary_min, criteria.salary_max, salary_mode)
    )


def filter_jobs(
    jobs: Iterable[Job],
    criteria: FilterCriteria,
    salary_mode: SalaryMode = SalaryMode.WITHIN,
) -> list[Job]:
    """Keep the jobs that satisfy every criterion, in their incoming order."""
    return [j for j in jobs if job_matches(j, criteria, salary_mode)]
