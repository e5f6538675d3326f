"""Employer flows: posting jobs, reviewing one's own postings and candidates."""
from __future__ import annotations

import re
from dataclasses import replace
from typing import Any

from jobfinder.errors import ValidationFailure
from jobfinder.log import get_logger
from jobfinder.models import (
    Application,
    ApplicationStatus,
    Job,
    Salary,
    User,
    parse_date,
    positive_int,
    to_number,
)

log = get_logger(__name__)

_REQUIRED = ("title", "company", "location")


def _split_lines(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if str(v).strip()]
    return [part.strip() for part in re.split(r"[\n,]", str(value)) if part.strip()]


def build_job(form: dict[str, Any]) -> Job:
    """Turn post-job form text into a Job ready for create/update."""
    missing = [f for f in _REQUIRED if not str(form.get(f) or "").strip()]
    if missing:
        raise ValidationFailure(f"Missing required field: {missing[0]}", field=missing[0])

    salary = form.get("salary") or {}
    return Job(
        id=str(form.get("id") or form.get("_id") or ""),
        title=str(form["title"]).strip(),
        company=str(form["company"]).strip(),
        location=str(form["location"]).strip(),
        type=str(form.get("type") or "").strip(),
        description=str(form.get("description") or "").strip(),
        requirements=_split_lines(form.get("requirements")),
        benefits=_split_lines(form.get("benefits")),
        salary=Salary(
            minimum=to_number(salary.get("min", form.get("salary_min"))),
            maximum=to_number(salary.get("max", form.get("salary_max"))),
            currency=salary.get("currency") or form.get("currency") or "USD",
        ),
        number_of_positions=positive_int(form.get("number_of_positions", form.get("numberOfPositions"))),
        application_deadline=parse_date(
            form.get("application_deadline", form.get("applicationDeadline"))
        ),
        industry=str(form.get("industry") or "").strip(),
    )


def post_job(api, form: dict[str, Any]) -> Job:
    job = api.jobs.create(build_job(form))
    log.info("Posted job %r", job.title)
    return job


def my_postings(api, user: User | None) -> list[Job]:
    """Jobs the server lists as posted, narrowed to the signed-in employer."""
    if user is None or not user.id:
        raise ValidationFailure("Sign in to see your postings")
    jobs = api.jobs.list(posted=True)
    return [j for j in jobs if j.posted_by == user.id]


def set_candidate_status(
    api, candidates: list[Application], application_id: str, status: str
) -> list[Application]:
    """Update a candidate remotely, then return the list with that status swapped in."""
    api.applications.update_status(application_id, status)
    value = ApplicationStatus.parse(status).value
    return [replace(c, status=value) if c.id == application_id else c for c in candidates]


def job_form(job: Job) -> dict[str, Any]:
    """The editable fields of a job, in the shape ``build_job`` reads."""
    return {
        "id": job.id,
        "title": job.title,
        "company": job.company,
        "location": job.location,
        "type": job.type,
        "description": job.description,
        "requirements": list(job.requirements),
        "benefits": list(job.benefits),
        "salary_min": job.salary.minimum,
        "salary_max": job.salary.maximum,
        "currency": job.salary.currency,
        "number_of_positions": job.number_of_positions,
        "application_deadline": job.application_deadline,
        "industry": job.industry,
    }


def edit_job(api, job_id: str, changes: dict[str, Any]) -> Job:
    """Apply form edits over the stored job and send the full record back."""
    form = job_form(api.jobs.get(job_id))
    form.update({k: v for k, v in changes.items() if v is not None})
    job = api.jobs.update(job_id, build_job(form))
    log.info("Updated job %s", job_id)
    return job


def edit_company_profile(api, changes: dict[str, Any]) -> dict[str, Any]:
    current = api.profiles.company()
    body = {k: v for k, v in current.items() if not k.startswith("_")}
    body.update(changes)
    return api.profiles.update_company(body)
