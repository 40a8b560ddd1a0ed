import pytest
from pydantic import ValidationError

from analysis_model.core.config import Settings, _env_bool


def test_defaults():
    settings = Settings()

    assert settings.DEFAULT_CHARSET
    assert settings.FINGERPRINT_CONTEXT_LINES >= 0
    assert settings.SIMIAN_HIGH_THRESHOLD >= settings.SIMIAN_NORMAL_THRESHOLD


def test_values_are_validated():
    settings = Settings(FINGERPRINT_CONTEXT_LINES="5", FINGERPRINT_COLLAPSE_WHITESPACE="false")

    assert settings.FINGERPRINT_CONTEXT_LINES == 5
    assert settings.FINGERPRINT_COLLAPSE_WHITESPACE is False

    with pytest.raises(ValidationError):
        Settings(FILTERED_LOG_MAX_LINES="many")


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1", True), ("true", True), (" Yes ", True), ("on", True), ("0", False), ("off", False), ("", False)],
)
def test_env_bool(monkeypatch, value, expected):
    monkeypatch.setenv("SOME_FLAG", value)
    assert _env_bool("SOME_FLAG", "true") is expected


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("SOME_FLAG", raising=False)
    assert _env_bool("SOME_FLAG", "true") is True
    assert _env_bool("SOME_FLAG", "false") is False
