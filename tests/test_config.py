"""Tests for settings loading."""
from jobfinder.config import DEFAULT_API_URL, PROJECT_ROOT, load_settings


def test_defaults_without_file(tmp_path, monkeypatch):
    for key in ("JOBFINDER_API_URL", "JOBFINDER_TIMEOUT", "JOBFINDER_TOKEN_FILE"):
        monkeypatch.delenv(key, raising=False)

    settings = load_settings(tmp_path / "missing.yaml")

    assert settings.api_url == DEFAULT_API_URL
    assert settings.timeout == 15.0
    assert settings.debounce_seconds == 0.3


def test_yaml_then_env_precedence(tmp_path, monkeypatch):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "api_url: https://yaml.example/\ntimeout: 5\ndebounce_ms: 150\ntoken_file: data/x.json\n"
    )
    monkeypatch.delenv("JOBFINDER_TOKEN_FILE", raising=False)
    monkeypatch.delenv("JOBFINDER_TIMEOUT", raising=False)
    monkeypatch.setenv("JOBFINDER_API_URL", "https://env.example")

    settings = load_settings(path)

    assert settings.api_url == "https://env.example"
    assert settings.timeout == 5.0
    assert settings.debounce_ms == 150
    assert settings.token_file == PROJECT_ROOT / "data" / "x.json"


def test_bad_timeout_falls_back(tmp_path, monkeypatch):
    monkeypatch.setenv("JOBFINDER_TIMEOUT", "soon")
    assert load_settings(tmp_path / "missing.yaml").timeout == 15.0
