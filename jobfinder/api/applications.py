"""Job applications from both sides of the marketplace."""
from __future__ import annotations

from jobfinder.api.base import Resource, document, items
from jobfinder.errors import ValidationFailure
from jobfinder.models import Application, ApplicationStatus


class ApplicationsResource(Resource):
    def apply(self, job_id: str, cv_id: str, cover_letter: str = "") -> Application:
        if not job_id:
            raise ValidationFailure("A job id is required", field="job_id")
        if not cv_id:
            raise ValidationFailure("Please select a CV", field="cv_id")
        payload = self.client.post(
            "/api/applications",
            json={"jobId": job_id, "cvId": cv_id, "coverLetter": cover_letter or ""},
        )
        return Application.from_api(document(payload, "application"))

    def mine(self) -> list[Application]:
        payload = self.client.get("/api/applications/user")
        return [Application.from_api(d) for d in items(payload, "applications")]

    def applied(self) -> list[Application]:
        payload = self.client.get("/api/applications/applied")
        return [Application.from_api(d) for d in items(payload, "applications")]

    def status(self) -> list[Application]:
        payload = self.client.get("/api/applications/status")
        return [Application.from_api(d) for d in items(payload, "applications")]

    def update_status(self, application_id: str, status: str) -> Application:
        if not application_id:
            raise ValidationFailure("An application id is required", field="application_id")
        try:
            value = ApplicationStatus.parse(status).value
        except ValueError as exc:
            raise ValidationFailure(str(exc), field="status") from exc
        payload = self.client.put(
            f"/api/applications/{application_id}/status", json={"status": value}
        )
        return Application.from_api(document(payload, "application"))
