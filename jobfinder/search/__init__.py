from .debounce import Debouncer
from .engine import EngineState, SearchEngine, NO_RESULTS_MESSAGE
from .filters import (
    SalaryMode,
    filter_jobs,
    job_matches,
    matches_job_type,
    matches_keyword,
    matches_location,
    matches_salary,
)

__all__ = [
    "Debouncer", "EngineState", "SearchEngine", "NO_RESULTS_MESSAGE",
    "SalaryMode", "filter_jobs", "job_matches", "matches_job_type",
    "matches_keyword", "matches_location", "matches_salary",
]
