"""Job-seeker flows: applying with a CV and keeping the CV list current."""
from __future__ import annotations

from pathlib import Path

from jobfinder.errors import ValidationFailure
from jobfinder.log import get_logger
from jobfinder.models import CV, Application

log = get_logger(__name__)


def default_cv(cvs: list[CV]) -> CV | None:
    """The CV preselected on the apply form: the first one listed."""
    return cvs[0] if cvs else None


def submit_application(api, job_id: str, cv_id: str | None, cover_letter: str = "") -> Application:
    if not cv_id:
        raise ValidationFailure("Please select a CV", field="cv_id")
    application = api.applications.apply(job_id, cv_id, cover_letter)
    log.info("Applied for job %s with CV %s", job_id, cv_id)
    return application


def upload_cv(api, path: str | Path, name: str | None = None) -> list[CV]:
    """Upload a CV and return the refreshed list."""
    api.cvs.upload(path, name)
    return api.cvs.list()


def remove_cv(api, cv_id: str) -> list[CV]:
    api.cvs.delete(cv_id)
    return api.cvs.list()


def edit_profile(api, changes: dict) -> dict:
    """Merge field edits into the stored profile and save it."""
    current = api.profiles.user()
    body = {k: v for k, v in current.items() if not k.startswith("_")}
    body.update(changes)
    return api.profiles.update_user(body)
