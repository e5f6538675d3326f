import json
import os
from unittest.mock import patch

import pytest
import requests

os.environ.setdefault("JOBFINDER_NO_LOG_FILE", "1")

from jobfinder.api import ApiClient, JobBoardApi  # noqa: E402
from jobfinder.models import Job, Salary  # noqa: E402
from jobfinder.session import MemoryTokenStore, SessionContext  # noqa: E402

BASE_URL = "https://jobs.example.test"


def _response(status=200, body=None):
    r = requests.Response()
    r.status_code = status
    r.encoding = "utf-8"
    if body is None:
        r._content = b""
    else:
        r._content = json.dumps(body).encode("utf-8")
        r.headers["Content-Type"] = "application/json"
    return r


@pytest.fixture
def make_response():
    """Factory for canned ``requests.Response`` objects."""
    return _response


@pytest.fixture
def http():
    """Every ``requests.Session.request`` call goes to this mock."""
    with patch.object(requests.Session, "request") as mock_request:
        mock_request.return_value = _response(200, [])
        yield mock_request


@pytest.fixture
def session():
    return SessionContext(MemoryTokenStore())


@pytest.fixture
def api(http, session):
    return JobBoardApi(ApiClient(BASE_URL, session, timeout=5))


def make_job(job_id, title, company="Acme", location="Berlin", type="Full-time",
             salary_min=None, salary_max=None, posted_by="emp-1"):
    return Job(
        id=job_id,
        title=title,
        company=company,
        location=location,
        type=type,
        salary=Salary(minimum=salary_min, maximum=salary_max),
        posted_by=posted_by,
    )


@pytest.fixture
def jobs():
    return [
        make_job("1", "Backend Engineer", "Acme", "Berlin", "Full-time", 4000, 6000),
        make_job("2", "Designer", "Acme", "Remote", "Part-time", 2000, 3000),
        make_job("3", "Data Intern", "Globex", "Berlin, DE", "Internship"),
        make_job("4", "Frontend Engineer", "Initech", "Hanoi", "Freelance", 3000, 5000),
    ]
