"""Bearer-token persistence and the process-wide session context."""
from __future__ import annotations

import json
from pathlib import Path

from jobfinder.log import get_logger
from jobfinder.models import AuthSession, User

log = get_logger(__name__)

TOKEN_KEY = "userToken"
USER_KEY = "user"


class MemoryTokenStore:
    """In-process key/value slot; nothing survives a restart."""

    def __init__(self) -> None:
        self._values: dict[str, object] = {}

    def get(self, key: str):
        return self._values.get(key)

    def set(self, key: str, value) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)


class FileTokenStore:
    """Durable key/value slot backed by a small JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log.warning("Unreadable session file %s: %s", self.path.name, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    def get(self, key: str):
        return self._read().get(key)

    def set(self, key: str, value) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


class SessionContext:
    """The signed-in identity, shared by the API client and the flows.

    Writes replace ``_current`` in a single assignment, so a request built
    after ``begin()``/``clear()`` always sees the latest token.
    """

    def __init__(self, store=None) -> None:
        self.store = store if store is not None else MemoryTokenStore()
        self._current: AuthSession | None = None

    @property
    def token(self) -> str | None:
        current = self._current
        return current.token if current else None

    @property
    def user(self) -> User | None:
        current = self._current
        return current.user if current else None

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    def restore(self) -> bool:
        """Load a persisted token at start-up.  Returns True if one was found."""
        token = self.store.get(TOKEN_KEY)
        if not token:
            return False
        user_data = self.store.get(USER_KEY)
        user = User.from_api(user_data) if isinstance(user_data, dict) else None
        self._current = AuthSession(token=str(token), user=user)
        log.debug("Restored persisted session")
        return True

    def begin(self, token: str, user: User | None = None) -> None:
        self._current = AuthSession(token=token, user=user)
        self.store.set(TOKEN_KEY, token)
        if user is not None:
            self.store.set(USER_KEY, user.to_dict())
        else:
            self.store.remove(USER_KEY)
        log.info("Signed in%s", f" as {user.email}" if user and user.email else "")

    def update_user(self, user: User) -> None:
        current = self._current
        if current is None:
            return
        self._current = AuthSession(token=current.token, user=user)
        self.store.set(USER_KEY, user.to_dict())

    def clear(self) -> None:
        was_signed_in = self._current is not None
        self._current = None
        self.store.remove(TOKEN_KEY)
        self.store.remove(USER_KEY)
        if was_signed_in:
            log.info("Session cleared")
