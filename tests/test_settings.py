from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.append(str(Path(__file__).resolve().parents[1]))

from blockbuilder.core.settings import DEFAULT_THEME, SettingsManager


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("HISTORY_LIMIT", "LOG_LEVEL", "PREVIEW_DEBOUNCE_MS", "THEME"):
        monkeypatch.delenv(f"BLOCKBUILDER_{name}", raising=False)


def test_defaults_when_missing(tmp_path: Path) -> None:
    manager = SettingsManager(tmp_path / "settings.json")
    assert manager.history_limit == 0
    assert manager.log_level == "INFO"
    assert manager.preview_debounce_ms == 400
    assert manager.get("theme") == DEFAULT_THEME
    assert not (tmp_path / "settings.json").exists()


def test_set_persists(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "settings.json"
    manager = SettingsManager(path)
    manager.set("history_limit", 25)

    reloaded = SettingsManager(path)
    assert reloaded.history_limit == 25
    with pytest.raises(KeyError):
        manager.set("nonsense", 1)


def test_set_validates(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    manager = SettingsManager(path)
    manager.set("log_level", "debug")
    assert manager.log_level == "DEBUG"
    assert manager.get("log_level") == "DEBUG"
    assert json.loads(path.read_text(encoding="utf-8"))["log_level"] == "DEBUG"

    with pytest.raises(ValidationError):
        manager.set("history_limit", -3)
    with pytest.raises(ValidationError):
        manager.set("log_level", "chatty")
    assert manager.history_limit == 0
    assert manager.log_level == "DEBUG"


def test_unreadable_file_falls_back(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{oops", encoding="utf-8")
    manager = SettingsManager(path)
    assert manager.history_limit == 0


def test_bad_values_are_ignored(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"history_limit": "many", "log_level": "debug", "theme": {"shadow": "none"}, "extra": 1}),
        encoding="utf-8",
    )
    manager = SettingsManager(path)
    assert manager.history_limit == 0
    assert manager.log_level == "DEBUG"
    assert manager.theme["shadow"] == "none"
    assert manager.theme["primaryColor"] == DEFAULT_THEME["primaryColor"]


def test_environment_overrides_every_key(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"history_limit": 5, "preview_debounce_ms": 200}), encoding="utf-8")
    monkeypatch.setenv("BLOCKBUILDER_HISTORY_LIMIT", "10")
    monkeypatch.setenv("BLOCKBUILDER_PREVIEW_DEBOUNCE_MS", "50")
    monkeypatch.setenv("BLOCKBUILDER_LOG_LEVEL", "warning")

    manager = SettingsManager(path)
    assert manager.history_limit == 10
    assert manager.get("history_limit") == 10
    assert manager.preview_debounce_ms == 50
    assert manager.get("preview_debounce_ms") == 50
    assert manager.log_level == "WARNING"


def test_environment_is_not_written_back(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "settings.json"
    monkeypatch.setenv("BLOCKBUILDER_HISTORY_LIMIT", "10")
    manager = SettingsManager(path)
    manager.set("preview_debounce_ms", 250)

    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored == {"preview_debounce_ms": 250}
    assert manager.history_limit == 10
    assert manager.preview_debounce_ms == 250


def test_invalid_environment_value_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BLOCKBUILDER_HISTORY_LIMIT", "ten")
    with pytest.raises(ValidationError):
        SettingsManager(tmp_path / "settings.json")
