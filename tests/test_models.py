"""Tests for parsing API payloads and form input into models."""
from datetime import date

from jobfinder.models import (
    CV,
    Application,
    ApplicationStatus,
    FilterCriteria,
    Job,
    User,
    positive_int,
    to_number,
)


def test_job_from_api_full_payload():
    job = Job.from_api({
        "_id": "j1",
        "title": "Backend Engineer",
        "company": "Acme",
        "location": "Berlin",
        "type": "Full-time",
        "requirements": ["Python", "SQL"],
        "benefits": "Remote days",
        "salary": {"min": "3,000", "max": 5000, "currency": "EUR"},
        "numberOfPositions": "2",
        "applicationDeadline": "2026-12-31T00:00:00.000Z",
        "postedBy": {"_id": "emp-1", "name": "Boss"},
        "industry": "Software",
    })

    assert job.id == "j1"
    assert job.salary.minimum == 3000.0
    assert job.salary.maximum == 5000.0
    assert job.salary.currency == "EUR"
    assert job.benefits == ["Remote days"]
    assert job.number_of_positions == 2
    assert job.application_deadline == date(2026, 12, 31)
    assert job.posted_by == "emp-1"


def test_job_from_api_tolerates_missing_and_bad_fields():
    job = Job.from_api({"_id": "j2", "salary": {"min": "negotiable"}, "numberOfPositions": "abc"})

    assert job.title == ""
    assert job.salary.minimum is None
    assert job.salary.maximum is None
    assert job.salary.currency == "USD"
    assert job.number_of_positions == 1
    assert job.application_deadline is None


def test_job_payload_has_no_identifier():
    job = Job(id="j1", title="Dev", company="Acme", location="Berlin",
              application_deadline=date(2026, 1, 2))
    payload = job.to_payload()

    assert "_id" not in payload and "id" not in payload
    assert payload["applicationDeadline"] == "2026-01-02"
    assert payload["salary"] == {"min": None, "max": None, "currency": "USD"}


def test_criteria_from_form():
    criteria = FilterCriteria.from_form({
        "keyword": "  dev ", "jobType": "Part", "salary_min": "1000", "salary_max": "",
    })

    assert criteria == FilterCriteria(keyword="dev", job_type="Part", salary_min=1000.0)
    assert not criteria.is_empty
    assert FilterCriteria.from_form({}).is_empty


def test_to_number():
    assert to_number("12.5") == 12.5
    assert to_number(7) == 7.0
    assert to_number("") is None
    assert to_number("n/a") is None
    assert to_number(True) is None
    assert to_number(float("nan")) is None


def test_application_status_parse():
    assert ApplicationStatus.parse("accepted") is ApplicationStatus.ACCEPTED


def test_application_from_api_with_populated_job():
    app = Application.from_api({
        "_id": "a1",
        "job": {"_id": "j1", "title": "Dev"},
        "applicant": "u1",
        "status": "Rejected",
        "appliedDate": "2026-03-04",
    })

    assert app.job == "j1"
    assert app.job_title == "Dev"
    assert app.status == "Rejected"
    assert app.applied_date == date(2026, 3, 4)


def test_user_and_cv_from_api():
    assert User.from_api({"token": "t", "_id": "u1", "name": "Ann"}).id == "u1"
    assert User.from_api({"token": "t", "user": {"_id": "u2"}}).id == "u2"
    assert CV.from_api({"_id": "c1", "name": "resume.pdf"}).name == "resume.pdf"


def test_fractional_positions_never_drop_below_one():
    assert Job.from_api({"numberOfPositions": 0.5}).number_of_positions == 1
    assert Job.from_api({"numberOfPositions": "2.7"}).number_of_positions == 2
    assert Job.from_api({"numberOfPositions": -3}).number_of_positions == 1
    assert positive_int(float("inf")) == 1
    assert positive_int(None) == 1
