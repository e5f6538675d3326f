"""Job postings: listing, search, CRUD and candidates."""
from __future__ import annotations

from typing import Any

from jobfinder.api.base import Resource, document, items
from jobfinder.errors import ValidationFailure
from jobfinder.models import Application, FilterCriteria, Job


def _require_id(job_id: str) -> str:
    if not str(job_id or "").strip():
        raise ValidationFailure("A job id is required", field="job_id")
    return str(job_id).strip()


class JobsResource(Resource):
    def list(self, posted: bool = False) -> list[Job]:
        params = {"posted": "true"} if posted else None
        payload = self.client.get("/api/jobs", params=params)
        return [Job.from_api(d) for d in items(payload, "jobs")]

    def search(self, criteria: FilterCriteria) -> list[Job]:
        payload = self.client.get("/api/jobs/search", params=criteria.to_query())
        return [Job.from_api(d) for d in items(payload, "jobs")]

    def get(self, job_id: str) -> Job:
        payload = self.client.get(f"/api/jobs/{_require_id(job_id)}")
        return Job.from_api(document(payload, "job"))

    def create(self, job: Job) -> Job:
        payload = self.client.post("/api/jobs", json=job.to_payload())
        return Job.from_api(document(payload, "job"))

    def update(self, job_id: str, changes: Job | dict[str, Any]) -> Job:
        body = changes.to_payload() if isinstance(changes, Job) else dict(changes)
        body.pop("_id", None)
        payload = self.client.put(f"/api/jobs/{_require_id(job_id)}", json=body)
        return Job.from_api(document(payload, "job"))

    def delete(self, job_id: str) -> Any:
        return self.client.delete(f"/api/jobs/{_require_id(job_id)}")

    def candidates(self, job_id: str) -> list[Application]:
        payload = self.client.get(f"/api/jobs/{_require_id(job_id)}/candidates")
        return [Application.from_api(d) for d in items(payload, "candidates", "applications")]
