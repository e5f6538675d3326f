"""Command line for the Job Finder client.

    python -m jobfinder login you@example.com
    python -m jobfinder jobs --keyword backend --location berlin
    python -m jobfinder apply <job_id> --cover-letter "Hello"
"""
from __future__ import annotations

import argparse
import asyncio
import getpass
import sys
from typing import Any

from jobfinder import applicant, employer
from jobfinder.api import JobBoardApi, get_api
from jobfinder.config import ensure_dirs, load_settings
from jobfinder.errors import JobFinderError, ValidationFailure
from jobfinder.log import get_logger
from jobfinder.models import CV, Application, FilterCriteria, Job
from jobfinder.search import SearchEngine

log = get_logger(__name__)


def _format_salary(job: Job) -> str:
    s = job.salary
    if s.minimum is None and s.maximum is None:
        return ""
    low = f"{s.minimum:,.0f}" if s.minimum is not None else "?"
    high = f"{s.maximum:,.0f}" if s.maximum is not None else "?"
    return f"{low}-{high} {s.currency}"


def _print_job(job: Job) -> None:
    extra = " · ".join(p for p in (job.type, _format_salary(job)) if p)
    print(f"  {job.id}  {job.title} @ {job.company}, {job.location}")
    if extra:
        print(f"      {extra}")


def _print_application(app: Application) -> None:
    label = app.job_title or app.job
    when = app.applied_date.isoformat() if app.applied_date else ""
    print(f"  {app.id}  {label:<30} {app.status:<12} {when}")


def _print_cv(cv: CV, selected: bool = False) -> None:
    marker = "*" if selected else " "
    print(f" {marker}{cv.id}  {cv.name}")


# ── Commands ─────────────────────────────────────────────────────────────


def cmd_login(api: JobBoardApi, args: argparse.Namespace) -> int:
    password = args.password or getpass.getpass("  Password: ")
    user = api.auth.login(args.email, password)
    print(f"  ✓ Signed in as {user.name or user.email} ({user.role or 'no role'})")
    return 0


def cmd_logout(api: JobBoardApi, args: argparse.Namespace) -> int:
    api.auth.logout()
    print("  ✓ Signed out")
    return 0


def cmd_register(api: JobBoardApi, args: argparse.Namespace) -> int:
    password = args.password or getpass.getpass("  Password: ")
    confirm = args.password or getpass.getpass("  Confirm password: ")
    api.auth.register({
        "name": args.name,
        "email": args.email,
        "password": password,
        "confirmPassword": confirm,
        "dateOfBirth": args.date_of_birth,
        "role": args.role,
        "gender": args.gender,
    })
    print("  ✓ Registered successfully! Sign in with `login`.")
    return 0


def cmd_role(api: JobBoardApi, args: argparse.Namespace) -> int:
    user = api.session.user
    if user is None:
        print("  ✗ Sign in first")
        return 1
    api.auth.update_role(user.id, args.role)
    print(f"  ✓ Role set to {args.role}")
    return 0


def build_engine(api: JobBoardApi, args: argparse.Namespace) -> SearchEngine:
    debounce = args.debounce if args.debounce is not None else api.settings.debounce_seconds
    return SearchEngine.for_api(api, debounce_seconds=debounce)


async def _run_search(engine: SearchEngine, criteria: FilterCriteria) -> SearchEngine:
    engine.criteria = criteria
    await engine.refresh()
    return engine


def cmd_jobs(api: JobBoardApi, args: argparse.Namespace) -> int:
    criteria = FilterCriteria.from_form({
        "keyword": args.keyword,
        "location": args.location,
        "job_type": args.type,
        "salary_min": args.min_salary,
        "salary_max": args.max_salary,
    })
    if args.remote:
        jobs = api.jobs.search(criteria)
        print(f"\n  Search Results ({len(jobs)})")
        for job in jobs:
            _print_job(job)
        return 0

    engine = asyncio.run(_run_search(build_engine(api, args), criteria))
    try:
        if engine.error:
            print(f"  ✗ {engine.error}")
            return 1
        print(f"\n  Search Results ({len(engine.results)} of {len(engine.baseline)})")
        if engine.no_results:
            print(f"  {engine.message}")
        for job in engine.results:
            _print_job(job)
        types = engine.job_types()
        if types and not criteria.job_type:
            print(f"\n  Job types: {', '.join(types)}")
    finally:
        engine.close()
    return 0


def cmd_job(api: JobBoardApi, args: argparse.Namespace) -> int:
    job = api.jobs.get(args.job_id)
    _print_job(job)
    if job.description:
        print(f"\n  {job.description}")
    for title, entries in (("Requirements", job.requirements), ("Benefits", job.benefits)):
        if entries:
            print(f"\n  {title}:")
            for entry in entries:
                print(f"    - {entry}")
    if job.application_deadline:
        print(f"\n  Apply by {job.application_deadline.isoformat()} · {job.number_of_positions} position(s)")
    return 0


def cmd_apply(api: JobBoardApi, args: argparse.Namespace) -> int:
    cv_id = args.cv
    if not cv_id:
        chosen = applicant.default_cv(api.cvs.list())
        cv_id = chosen.id if chosen else None
    applicant.submit_application(api, args.job_id, cv_id, args.cover_letter or "")
    print("  ✓ Application submitted successfully")
    return 0


def cmd_applications(api: JobBoardApi, args: argparse.Namespace) -> int:
    apps = api.applications.status() if args.status else api.applications.mine()
    if not apps:
        print("  No applications yet")
    for app in apps:
        _print_application(app)
    return 0


def cmd_cvs(api: JobBoardApi, args: argparse.Namespace) -> int:
    if args.action == "upload":
        if not args.target:
            print("  ✗ Give the path of the PDF to upload")
            return 1
        cvs = applicant.upload_cv(api, args.target, args.name)
        print("  ✓ CV uploaded successfully")
    elif args.action == "delete":
        if not args.target:
            print("  ✗ Give the id of the CV to delete")
            return 1
        cvs = applicant.remove_cv(api, args.target)
        print("  ✓ CV deleted successfully")
    else:
        cvs = api.cvs.list()
    if not cvs:
        print("  No CVs uploaded")
    first = applicant.default_cv(cvs)
    for cv in cvs:
        _print_cv(cv, selected=cv is first)
    return 0


def cmd_post(api: JobBoardApi, args: argparse.Namespace) -> int:
    job = employer.post_job(api, {
        "title": args.title,
        "company": args.company,
        "location": args.location,
        "type": args.type,
        "description": args.description,
        "requirements": args.requirements,
        "benefits": args.benefits,
        "salary_min": args.min_salary,
        "salary_max": args.max_salary,
        "currency": args.currency,
        "number_of_positions": args.positions,
        "application_deadline": args.deadline,
        "industry": args.industry,
    })
    print(f"  ✓ Job posted successfully ({job.id or 'pending id'})")
    return 0


def cmd_edit_job(api: JobBoardApi, args: argparse.Namespace) -> int:
    changes = {
        "title": args.title,
        "company": args.company,
        "location": args.location,
        "type": args.type,
        "description": args.description,
        "requirements": args.requirements,
        "benefits": args.benefits,
        "salary_min": args.min_salary,
        "salary_max": args.max_salary,
        "currency": args.currency,
        "number_of_positions": args.positions,
        "application_deadline": args.deadline,
        "industry": args.industry,
    }
    if all(v is None for v in changes.values()):
        print("  ✗ Nothing to change")
        return 1
    employer.edit_job(api, args.job_id, changes)
    print("  ✓ Job updated successfully")
    return 0


def cmd_delete_job(api: JobBoardApi, args: argparse.Namespace) -> int:
    api.jobs.delete(args.job_id)
    print("  ✓ Job deleted successfully")
    return 0


def cmd_postings(api: JobBoardApi, args: argparse.Namespace) -> int:
    jobs = employer.my_postings(api, api.session.user)
    if not jobs:
        print("  You have not posted any jobs")
    for job in jobs:
        _print_job(job)
    return 0


def cmd_candidates(api: JobBoardApi, args: argparse.Namespace) -> int:
    candidates = api.jobs.candidates(args.job_id)
    if not candidates:
        print("  No candidates yet")
    for app in candidates:
        _print_application(app)
    return 0


def cmd_set_status(api: JobBoardApi, args: argparse.Namespace) -> int:
    api.applications.update_status(args.application_id, args.status)
    print("  ✓ Application status updated successfully")
    return 0


def _parse_assignments(pairs: list[str]) -> dict[str, str]:
    changes: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValidationFailure(f"Expected key=value, got {pair!r}", field="set")
        changes[key.strip()] = value.strip()
    return changes


def cmd_profile(api: JobBoardApi, args: argparse.Namespace) -> int:
    if args.set:
        changes = _parse_assignments(args.set)
        if args.company:
            profile: dict[str, Any] = employer.edit_company_profile(api, changes)
        else:
            profile = applicant.edit_profile(api, changes)
        print("  ✓ Profile updated successfully")
    else:
        profile = api.profiles.company() if args.company else api.profiles.user()
    if not profile:
        print("  Profile is empty")
    for key, value in profile.items():
        if key.startswith("_"):
            continue
        print(f"  {key}: {value}")
    return 0


# ── Parser ───────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobfinder", description="Job Finder client")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("login", help="Sign in and remember the session")
    p.add_argument("email")
    p.add_argument("--password")
    p.set_defaults(func=cmd_login)

    p = sub.add_parser("logout", help="Forget the stored session")
    p.set_defaults(func=cmd_logout)

    p = sub.add_parser("register", help="Create an account")
    p.add_argument("name")
    p.add_argument("email")
    p.add_argument("--password")
    p.add_argument("--date-of-birth", required=True)
    p.add_argument("--role", choices=["jobseeker", "employer"], required=True)
    p.add_argument("--gender", choices=["male", "female", "other"], default="other")
    p.set_defaults(func=cmd_register)

    p = sub.add_parser("role", help="Switch between job seeker and employer")
    p.add_argument("role", choices=["jobseeker", "employer"])
    p.set_defaults(func=cmd_role)

    p = sub.add_parser("jobs", help="List jobs, filtered locally")
    p.add_argument("--keyword", default="")
    p.add_argument("--location", default="")
    p.add_argument("--type", default="")
    p.add_argument("--min-salary")
    p.add_argument("--max-salary")
    p.add_argument("--remote", action="store_true", help="Filter on the server instead")
    p.add_argument("--debounce", type=float, default=None,
                   help="Seconds to wait after an edit (default: debounce_ms from settings)")
    p.set_defaults(func=cmd_jobs)

    p = sub.add_parser("job", help="Show one job")
    p.add_argument("job_id")
    p.set_defaults(func=cmd_job)

    p = sub.add_parser("apply", help="Apply for a job")
    p.add_argument("job_id")
    p.add_argument("--cv", help="CV id (defaults to your first CV)")
    p.add_argument("--cover-letter", default="")
    p.set_defaults(func=cmd_apply)

    p = sub.add_parser("applications", help="Your applications")
    p.add_argument("--status", action="store_true", help="Use the status endpoint")
    p.set_defaults(func=cmd_applications)

    p = sub.add_parser("cvs", help="List, upload or delete CVs")
    p.add_argument("action", choices=["list", "upload", "delete"], nargs="?", default="list")
    p.add_argument("target", nargs="?", help="PDF path for upload, CV id for delete")
    p.add_argument("--name", help="Display name for an uploaded CV")
    p.set_defaults(func=cmd_cvs)

    p = sub.add_parser("post", help="Post a job")
    p.add_argument("title")
    p.add_argument("--company", required=True)
    p.add_argument("--location", required=True)
    p.add_argument("--type", default="Full-time")
    p.add_argument("--description", default="")
    p.add_argument("--requirements", default="", help="Comma separated")
    p.add_argument("--benefits", default="", help="Comma separated")
    p.add_argument("--min-salary")
    p.add_argument("--max-salary")
    p.add_argument("--currency", default="USD")
    p.add_argument("--positions", default="1")
    p.add_argument("--deadline", help="YYYY-MM-DD")
    p.add_argument("--industry", default="")
    p.set_defaults(func=cmd_post)

    p = sub.add_parser("edit-job", help="Change fields of one of your jobs")
    p.add_argument("job_id")
    p.add_argument("--title")
    p.add_argument("--company")
    p.add_argument("--location")
    p.add_argument("--type")
    p.add_argument("--description")
    p.add_argument("--requirements", help="Comma separated")
    p.add_argument("--benefits", help="Comma separated")
    p.add_argument("--min-salary")
    p.add_argument("--max-salary")
    p.add_argument("--currency")
    p.add_argument("--positions")
    p.add_argument("--deadline", help="YYYY-MM-DD")
    p.add_argument("--industry")
    p.set_defaults(func=cmd_edit_job)

    p = sub.add_parser("delete-job", help="Delete one of your jobs")
    p.add_argument("job_id")
    p.set_defaults(func=cmd_delete_job)

    p = sub.add_parser("postings", help="Jobs you posted")
    p.set_defaults(func=cmd_postings)

    p = sub.add_parser("candidates", help="Applicants for one of your jobs")
    p.add_argument("job_id")
    p.set_defaults(func=cmd_candidates)

    p = sub.add_parser("set-status", help="Shortlist, reject or accept a candidate")
    p.add_argument("application_id")
    p.add_argument("status", choices=["Pending", "Shortlisted", "Rejected", "Accepted"])
    p.set_defaults(func=cmd_set_status)

    p = sub.add_parser("profile", help="Show or edit your profile")
    p.add_argument("--company", action="store_true")
    p.add_argument("--set", action="append", default=[], metavar="KEY=VALUE",
                   help="Change a profile field; repeat for several")
    p.set_defaults(func=cmd_profile)

    return parser


def main(argv: list[str] | None = None, api: JobBoardApi | None = None) -> int:
    args = build_parser().parse_args(argv)
    if api is None:
        ensure_dirs()
        api = get_api(load_settings())
    try:
        return args.func(api, args)
    except JobFinderError as exc:
        log.debug("%s failed: %r", args.command, exc)
        print(f"  ✗ {exc.user_message}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
