"""CV documents: list, multipart upload and delete."""
from __future__ import annotations

from pathlib import Path
from typing import Any

from jobfinder.api.base import Resource, items
from jobfinder.errors import ValidationFailure
from jobfinder.log import get_logger
from jobfinder.models import CV

log = get_logger(__name__)

UPLOAD_FIELD = "cv"
UPLOAD_CONTENT_TYPE = "application/pdf"


class CVsResource(Resource):
    def list(self) -> list[CV]:
        payload = self.client.get("/api/cvs")
        return [CV.from_api(d) for d in items(payload, "cvs")]

    def upload(self, path: str | Path, name: str | None = None) -> Any:
        """Upload a local file as the ``cv`` part, always typed application/pdf."""
        file_path = Path(path).expanduser()
        if not file_path.is_file():
            raise ValidationFailure(f"File not found: {file_path}", field="path")

        file_name = name or file_path.name
        log.info("Uploading CV %s", file_name)
        with open(file_path, "rb") as fh:
            return self.client.post(
                "/api/cvs/upload",
                files={UPLOAD_FIELD: (file_name, fh, UPLOAD_CONTENT_TYPE)},
            )

    def delete(self, cv_id: str) -> Any:
        if not cv_id:
            raise ValidationFailure("A CV id is required", field="cv_id")
        return self.client.delete(f"/api/cvs/{cv_id}")
