"""Tests for the command line front end."""
from jobfinder.api import ApiClient, JobBoardApi
from jobfinder.cli import build_engine, build_parser, main
from jobfinder.config import Settings

from conftest import BASE_URL

JOBS = [
    {"_id": "j1", "title": "Backend Engineer", "company": "Acme", "location": "Berlin",
     "type": "Full-time", "salary": {"min": 4000, "max": 6000}},
    {"_id": "j2", "title": "Designer", "company": "Acme", "location": "Remote", "type": "Part-time"},
]


def test_jobs_filters_locally(api, http, make_response, capsys):
    http.return_value = make_response(200, JOBS)

    code = main(["jobs", "--keyword", "backend"], api=api)

    out = capsys.readouterr().out
    assert code == 0
    assert "Search Results (1 of 2)" in out
    assert "Backend Engineer" in out
    assert "Designer" not in out
    assert http.call_count == 1


def test_jobs_reports_no_results(api, http, make_response, capsys):
    http.return_value = make_response(200, JOBS)

    code = main(["jobs", "--location", "Mars"], api=api)

    assert code == 0
    assert "No jobs found matching your criteria" in capsys.readouterr().out


def test_jobs_reports_fetch_error(api, http, make_response, capsys):
    http.return_value = make_response(500, {"message": "Database down"})

    code = main(["jobs"], api=api)

    assert code == 1
    assert "Database down" in capsys.readouterr().out


def test_login_failure_exit_code(api, http, make_response, capsys):
    http.return_value = make_response(401, {"message": "Invalid credentials"})

    code = main(["login", "a@b.com", "--password", "wrong"], api=api)

    assert code == 1
    assert "Invalid credentials" in capsys.readouterr().out


def test_apply_uses_first_cv(api, http, make_response, capsys):
    http.side_effect = [
        make_response(200, [{"_id": "c1", "name": "a.pdf"}, {"_id": "c2", "name": "b.pdf"}]),
        make_response(201, {"_id": "a1", "job": "j1"}),
    ]

    code = main(["apply", "j1", "--cover-letter", "Hi"], api=api)

    assert code == 0
    assert http.call_args.kwargs["json"] == {"jobId": "j1", "cvId": "c1", "coverLetter": "Hi"}


def test_apply_without_any_cv(api, http, make_response, capsys):
    http.return_value = make_response(200, [])

    code = main(["apply", "j1"], api=api)

    assert code == 1
    assert "Please select a CV" in capsys.readouterr().out


def test_jobs_debounce_comes_from_settings(http, session):
    api = JobBoardApi(ApiClient(BASE_URL, session), Settings(debounce_ms=150))
    args = build_parser().parse_args(["jobs"])

    assert args.debounce is None
    assert build_engine(api, args).debounce_seconds == 0.15


def test_jobs_debounce_flag_overrides_settings(api):
    args = build_parser().parse_args(["jobs", "--debounce", "0"])

    assert build_engine(api, args).debounce_seconds == 0.0


def test_edit_job_sends_merged_record(api, http, make_response, capsys):
    http.side_effect = [
        make_response(200, JOBS[0]),
        make_response(200, dict(JOBS[0], title="Staff Engineer")),
    ]

    code = main(["edit-job", "j1", "--title", "Staff Engineer", "--positions", "2"], api=api)

    assert code == 0
    assert "Job updated successfully" in capsys.readouterr().out
    body = http.call_args.kwargs["json"]
    assert http.call_args.args[0] == "PUT"
    assert body["title"] == "Staff Engineer"
    assert body["company"] == "Acme"
    assert body["numberOfPositions"] == 2
    assert body["salary"]["max"] == 6000


def test_edit_job_without_changes(api, http, capsys):
    code = main(["edit-job", "j1"], api=api)

    assert code == 1
    assert "Nothing to change" in capsys.readouterr().out
    http.assert_not_called()


def test_profile_set_updates_user_profile(api, http, make_response, capsys):
    http.side_effect = [
        make_response(200, {"_id": "p1", "bio": "old", "skills": ["Go"]}),
        make_response(200, {"bio": "Hello there", "skills": ["Go"]}),
    ]

    code = main(["profile", "--set", "bio=Hello there"], api=api)

    out = capsys.readouterr().out
    assert code == 0
    assert "Profile updated successfully" in out
    assert "bio: Hello there" in out
    assert http.call_args.args[1] == f"{BASE_URL}/api/user-profiles"
    assert http.call_args.kwargs["json"] == {"bio": "Hello there", "skills": ["Go"]}


def test_profile_set_company(api, http, make_response, capsys):
    http.side_effect = [
        make_response(200, {"name": "Acme"}),
        make_response(200, {"name": "Acme", "size": "50"}),
    ]

    code = main(["profile", "--company", "--set", "size=50"], api=api)

    assert code == 0
    assert http.call_args.args[1] == f"{BASE_URL}/api/company-profiles"
    assert http.call_args.kwargs["json"] == {"name": "Acme", "size": "50"}


def test_profile_set_rejects_malformed_pair(api, http, capsys):
    code = main(["profile", "--set", "bio"], api=api)

    assert code == 1
    assert "Expected key=value" in capsys.readouterr().out
    http.assert_not_called()
