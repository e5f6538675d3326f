"""Sign-in, sign-up and role selection."""
from __future__ import annotations

from typing import Any

from jobfinder.api.base import Resource, document
from jobfinder.errors import ServerFailure, ValidationFailure
from jobfinder.log import get_logger
from jobfinder.models import Role, User

log = get_logger(__name__)

_SIGNUP_REQUIRED = ("name", "email", "password", "dateOfBirth")
_GENDERS = ("male", "female", "other")


def validate_signup(signup: dict[str, Any]) -> dict[str, Any]:
    """Check a sign-up form and return the body the server expects."""
    missing = [f for f in _SIGNUP_REQUIRED if not str(signup.get(f) or "").strip()]
    if missing or not signup.get("role"):
        raise ValidationFailure("Please fill all the fields", field=(missing or ["role"])[0])

    confirm = signup.get("confirmPassword")
    if confirm is not None and confirm != signup["password"]:
        raise ValidationFailure("Passwords do not match", field="confirmPassword")

    role = str(signup["role"]).strip().lower()
    if role not in {r.value for r in Role}:
        raise ValidationFailure(f"Unknown role: {signup['role']}", field="role")

    gender = str(signup.get("gender") or "other").strip().lower()
    if gender not in _GENDERS:
        gender = "other"

    body = {k: v for k, v in signup.items() if k != "confirmPassword"}
    body["role"] = role
    body["gender"] = gender
    return body


class AuthResource(Resource):
    def login(self, email: str, password: str) -> User:
        email = (email or "").strip()
        if not email or not password:
            raise ValidationFailure("Please fill all the fields")

        data = self.client.post("/api/users/signin", json={"email": email, "password": password})
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise ServerFailure("Sign-in response did not include a token")

        user = User.from_api(data)
        self.client.session.begin(token, user)
        return user

    def register(self, signup: dict[str, Any]) -> dict[str, Any]:
        body = validate_signup(signup)
        data = self.client.post("/api/users/signup", json=body)
        log.info("Registered %s as %s", body["email"], body["role"])
        return data if isinstance(data, dict) else {}

    def logout(self) -> None:
        self.client.session.clear()

    def restore(self) -> bool:
        """Bring back a persisted session, dropping it if the server refuses it."""
        session = self.client.session
        if not session.restore():
            return False
        try:
            profile = self.client.get("/api/user-profiles")
        except ServerFailure as exc:
            if exc.status in (401, 403):
                log.info("Persisted token rejected; signing out")
                session.clear()
                return False
            raise
        if session.user is None:
            user_doc = document(profile, "user")
            if user_doc.get("_id") or user_doc.get("id"):
                session.update_user(User.from_api(user_doc))
        return True

    def update_role(self, user_id: str, role: str) -> dict[str, Any]:
        role_value = str(role).strip().lower()
        if role_value not in {r.value for r in Role}:
            raise ValidationFailure(f"Unknown role: {role}", field="role")
        data = self.client.put(f"/api/users/{user_id}/role", json={"role": role_value})

        current = self.client.session.user
        if current is not None and current.id == user_id:
            self.client.session.update_user(
                User(id=current.id, name=current.name, email=current.email, role=role_value)
            )
        return data if isinstance(data, dict) else {}
