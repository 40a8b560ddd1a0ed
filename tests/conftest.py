from pathlib import Path

import pytest

from analysis_model.core.config import settings


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch):
    """Pin the tunables so tests never depend on the environment."""
    monkeypatch.setattr(settings, "DEFAULT_CHARSET", "utf-8")
    monkeypatch.setattr(settings, "FINGERPRINT_CONTEXT_LINES", 3)
    monkeypatch.setattr(settings, "FINGERPRINT_COLLAPSE_WHITESPACE", True)
    monkeypatch.setattr(settings, "FILTERED_LOG_MAX_LINES", 20)


@pytest.fixture
def write_file(tmp_path):
    """Write a text file below tmp_path and return its path."""

    def _write(name: str, content: str, encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding=encoding)
        return path

    return _write


@pytest.fixture
def source_lines() -> list[str]:
    """A small Python module used as fingerprint input."""
    return [
        "import os",
        "",
        "def greet(name):",
        "    msg = f'Hello {name}'",
        "    eval(msg)",
        "    return msg",
        "",
        "def other():",
        "    pass",
        "",
        "PASSWORD = 'secret123'",
        "print(PASSWORD)",
    ]
