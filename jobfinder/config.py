"""Load client settings from config/settings.yaml, .env and the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from jobfinder.log import get_logger

log = get_logger(__name__)

load_dotenv()

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = PROJECT_ROOT / "config"
SETTINGS_PATH: Path = CONFIG_DIR / "settings.yaml"
DATA_DIR: Path = PROJECT_ROOT / "data"
LOGS_DIR: Path = PROJECT_ROOT / "logs"

DEFAULT_API_URL = "https://job-finder-api-2537e100618e.herokuapp.com"
DEFAULT_TIMEOUT = 15.0
DEFAULT_DEBOUNCE_MS = 300


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    token_file: Path = DATA_DIR / "session.json"

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        log.warning("Ignoring %s: expected a mapping, got %s", path.name, type(data).__name__)
        return {}
    return data


def load_settings(path: Path | None = None) -> Settings:
    """Defaults, overridden by the YAML file, overridden by env vars."""
    data = _read_yaml(path or SETTINGS_PATH)

    api_url = get_env("JOBFINDER_API_URL") or data.get("api_url") or DEFAULT_API_URL

    timeout_raw = get_env("JOBFINDER_TIMEOUT") or data.get("timeout", DEFAULT_TIMEOUT)
    try:
        timeout = float(timeout_raw)
    except (TypeError, ValueError):
        log.warning("Invalid timeout %r, using %.0fs", timeout_raw, DEFAULT_TIMEOUT)
        timeout = DEFAULT_TIMEOUT

    try:
        debounce_ms = int(data.get("debounce_ms", DEFAULT_DEBOUNCE_MS))
    except (TypeError, ValueError):
        debounce_ms = DEFAULT_DEBOUNCE_MS

    token_file_raw = get_env("JOBFINDER_TOKEN_FILE") or data.get("token_file")
    token_file = Path(token_file_raw) if token_file_raw else DATA_DIR / "session.json"
    if not token_file.is_absolute():
        token_file = PROJECT_ROOT / token_file

    return Settings(
        api_url=str(api_url).rstrip("/"),
        timeout=timeout,
        debounce_ms=debounce_ms,
        token_file=token_file,
    )


def ensure_dirs() -> None:
    for d in (DATA_DIR, LOGS_DIR):
        d.mkdir(parents=True, exist_ok=True)
