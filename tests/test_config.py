"""Tests for front_manager.config."""

from front_manager.config import Settings, load_settings


def test_defaults(monkeypatch, tmp_path):
    for name in ("FRONTS_API_BASE", "FRONTS_TIMEOUT", "FRONTS_CONFIRM_DELETIONS"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings(tmp_path / "missing.env")
    assert settings == Settings()
    assert settings.api_base == "http://localhost:3000"
    assert settings.confirm_deletions == frozenset({"danger"})


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("FRONTS_API_BASE", "http://fronts.local:8080")
    monkeypatch.setenv("FRONTS_TIMEOUT", "5")
    monkeypatch.setenv("FRONTS_CONFIRM_DELETIONS", "danger, secret ,")
    settings = load_settings(tmp_path / "missing.env")
    assert settings.api_base == "http://fronts.local:8080"
    assert settings.timeout == 5.0
    assert settings.confirm_deletions == frozenset({"danger", "secret"})


def test_env_file_is_read(monkeypatch, tmp_path):
    # registered so teardown removes whatever load_dotenv sets
    monkeypatch.setenv("FRONTS_API_BASE", "unset")
    monkeypatch.delenv("FRONTS_API_BASE")
    env_file = tmp_path / ".env"
    env_file.write_text("FRONTS_API_BASE=http://from-dotenv:3000\n")
    settings = load_settings(env_file)
    assert settings.api_base == "http://from-dotenv:3000"


def test_empty_confirm_list_disables_confirmation(monkeypatch, tmp_path):
    monkeypatch.setenv("FRONTS_CONFIRM_DELETIONS", "")
    assert load_settings(tmp_path / "missing.env").confirm_deletions == frozenset()
