"""Job-seeker and company profiles, passed through as plain dicts."""
from __future__ import annotations

from typing import Any

from jobfinder.api.base import Resource


class ProfilesResource(Resource):
    def user(self) -> dict[str, Any]:
        return self.client.get("/api/user-profiles") or {}

    def update_user(self, profile: dict[str, Any]) -> dict[str, Any]:
        return self.client.put("/api/user-profiles", json=profile) or {}

    def company(self) -> dict[str, Any]:
        return self.client.get("/api/company-profiles") or {}

    def update_company(self, profile: dict[str, Any]) -> dict[str, Any]:
        return self.client.put("/api/company-profiles", json=profile) or {}
