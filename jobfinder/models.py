"""Data models for jobs, applications, CVs and the signed-in user."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any


class JobType(str, Enum):
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    INTERNSHIP = "Internship"
    FREELANCE = "Freelance"


class ApplicationStatus(str, Enum):
    PENDING = "Pending"
    SHORTLISTED = "Shortlisted"
    REJECTED = "Rejected"
    ACCEPTED = "Accepted"

    @classmethod
    def parse(cls, value: str) -> "ApplicationStatus":
        for status in cls:
            if status.value.lower() == str(value).strip().lower():
                return status
        raise ValueError(f"Unknown application status: {value!r}")


class Role(str, Enum):
    JOBSEEKER = "jobseeker"
    EMPLOYER = "employer"


def to_number(value: Any) -> float | None:
    """Parse a numeric API or form value; anything unparseable is None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else float(value)
    text = str(value).strip().replace(",", "")
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return None if math.isnan(number) else number


def positive_int(value: Any, default: int = 1) -> int:
    """Whole count of at least one; fractions round down but never below 1."""
    number = to_number(value)
    if number is None or number <= 0 or math.isinf(number):
        return default
    return max(1, int(number))


def parse_date(value: Any) -> date | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None


def _ref(value: Any) -> str:
    """Reference fields come back either as an id or a populated document."""
    if isinstance(value, dict):
        return str(value.get("_id") or value.get("id") or "")
    return "" if value is None else str(value)


def _text_list(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


@dataclass
class Salary:
    minimum: float | None = None
    maximum: float | None = None
    currency: str = "USD"

    @classmethod
    def from_api(cls, data: Any) -> "Salary":
        if not isinstance(data, dict):
            return cls()
        return cls(
            minimum=to_number(data.get("min")),
            maximum=to_number(data.get("max")),
            currency=data.get("currency") or "USD",
        )

    def to_payload(self) -> dict[str, Any]:
        return {"min": self.minimum, "max": self.maximum, "currency": self.currency}


@dataclass
class Job:
    id: str
    title: str
    company: str
    location: str
    type: str = ""
    description: str = ""
    requirements: list[str] = field(default_factory=list)
    benefits: list[str] = field(default_factory=list)
    salary: Salary = field(default_factory=Salary)
    number_of_positions: int = 1
    application_deadline: date | None = None
    posted_by: str = ""
    industry: str = ""
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Job":
        return cls(
            id=str(data.get("_id") or data.get("id") or ""),
            title=data.get("title") or "",
            company=data.get("company") or "",
            location=data.get("location") or "",
            type=data.get("type") or "",
            description=data.get("description") or "",
            requirements=_text_list(data.get("requirements")),
            benefits=_text_list(data.get("benefits")),
            salary=Salary.from_api(data.get("salary")),
            number_of_positions=positive_int(data.get("numberOfPositions")),
            application_deadline=parse_date(data.get("applicationDeadline")),
            posted_by=_ref(data.get("postedBy")),
            industry=data.get("industry") or "",
            raw=data,
        )

    def to_payload(self) -> dict[str, Any]:
        """Request body for create/update; the identifier travels in the path."""
        payload: dict[str, Any] = {
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "type": self.type,
            "description": self.description,
            "requirements": list(self.requirements),
            "benefits": list(self.benefits),
            "salary": self.salary.to_payload(),
            "numberOfPositions": self.number_of_positions,
            "industry": self.industry,
        }
        if self.application_deadline:
            payload["applicationDeadline"] = self.application_deadline.isoformat()
        return payload


@dataclass(frozen=True)
class FilterCriteria:
    keyword: str = ""
    location: str = ""
    job_type: str = ""
    salary_min: float | None = None
    salary_max: float | None = None

    @classmethod
    def from_form(cls, form: dict[str, Any]) -> "FilterCriteria":
        """Build criteria from raw text inputs; blank salary text means unset."""
        return cls(
            keyword=(form.get("keyword") or "").strip(),
            location=(form.get("location") or "").strip(),
            job_type=(form.get("job_type") or form.get("jobType") or "").strip(),
            salary_min=to_number(form.get("salary_min")),
            salary_max=to_number(form.get("salary_max")),
        )

    @property
    def is_empty(self) -> bool:
        return (
            not self.keyword
            and not self.location
            and not self.job_type
            and self.salary_min is None
            and self.salary_max is None
        )

    def to_query(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self.keyword:
            params["keyword"] = self.keyword
        if self.location:
            params["location"] = self.location
        if self.job_type:
            params["jobType"] = self.job_type
        if self.salary_min is not None:
            params["salaryMin"] = self.salary_min
        if self.salary_max is not None:
            params["salaryMax"] = self.salary_max
        return params


@dataclass
class Application:
    id: str
    job: str
    applicant: str = ""
    cover_letter: str = ""
    cv: str = ""
    status: str = ApplicationStatus.PENDING.value
    applied_date: date | None = None
    job_title: str = ""
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Application":
        job = data.get("job") or data.get("jobId")
        return cls(
            id=str(data.get("_id") or data.get("id") or ""),
            job=_ref(job),
            applicant=_ref(data.get("applicant") or data.get("user")),
            cover_letter=data.get("coverLetter") or "",
            cv=_ref(data.get("cv") or data.get("cvId")),
            status=data.get("status") or ApplicationStatus.PENDING.value,
            applied_date=parse_date(data.get("appliedDate") or data.get("createdAt")),
            job_title=job.get("title", "") if isinstance(job, dict) else "",
            raw=data,
        )


@dataclass
class CV:
    id: str
    name: str
    owner: str = ""
    url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CV":
        return cls(
            id=str(data.get("_id") or data.get("id") or ""),
            name=data.get("name") or data.get("fileName") or "",
            owner=_ref(data.get("user") or data.get("owner")),
            url=data.get("url") or data.get("fileUrl") or "",
        )


@dataclass
class User:
    id: str
    name: str = ""
    email: str = ""
    role: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "User":
        # signin returns the user fields next to the token, or nested under "user"
        data = data.get("user") if isinstance(data.get("user"), dict) else data
        return cls(
            id=str(data.get("_id") or data.get("id") or ""),
            name=data.get("name") or "",
            email=data.get("email") or "",
            role=data.get("role") or "",
        )

    def to_dict(self) -> dict[str, str]:
        return {"_id": self.id, "name": self.name, "email": self.email, "role": self.role}


@dataclass(frozen=True)
class AuthSession:
    token: str
    user: User | None = None
