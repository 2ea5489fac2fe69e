"""User settings stored as JSON in the application data directory.

Values come from ``settings.json`` and can be overridden per run with
``BLOCKBUILDER_*`` environment variables (for example
``BLOCKBUILDER_HISTORY_LIMIT=50``). Overrides are never written back.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

logger = logging.getLogger(__name__)

APP_NAME = "BlockBuilder"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULT_THEME: Dict[str, str] = {
    "primaryColor": "#2563eb",
    "secondaryColor": "#1e40af",
    "accentColor": "#f59e0b",
    "borderRadius": "lg",
    "shadow": "soft",
    "stylePreset": "",
}


def app_data_dir() -> Path:
    """Return the platform-specific application data directory."""
    if os.name == "nt":
        base = Path(os.getenv("LOCALAPPDATA", Path.home()))
    else:
        base = Path.home() / ".local" / "share"
    return base / APP_NAME


class Settings(BaseSettings):
    """Editor settings; 0 for ``history_limit`` keeps every undo step."""

    history_limit: int = Field(0, ge=0)
    log_level: str = "INFO"
    preview_debounce_ms: int = Field(400, ge=0)
    theme: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_THEME))

    model_config = SettingsConfigDict(
        env_prefix="BLOCKBUILDER_",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment first so it wins over values read from settings.json.
        return env_settings, init_settings

    @field_validator("log_level", mode="before")
    @classmethod
    def _check_log_level(cls, value: Any) -> str:
        level = str(value or "").strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("theme", mode="before")
    @classmethod
    def _merge_theme(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        merged = dict(DEFAULT_THEME)
        merged.update({str(key): str(item) for key, item in value.items()})
        return merged


def _stored_values(data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate values read from disk, dropping the ones that do not validate."""
    data = {key: value for key, value in data.items() if key in Settings.model_fields}
    while True:
        try:
            # model_validate skips the environment; only the file is checked here.
            checked = Settings.model_validate(data)
        except ValidationError as exc:
            bad = {err["loc"][0] for err in exc.errors() if err["loc"] and err["loc"][0] in data}
            if not bad:
                raise
            logger.warning("Ignoring invalid settings %s: %s", ", ".join(sorted(map(str, bad))), exc)
            data = {key: value for key, value in data.items() if key not in bad}
            continue
        return {key: getattr(checked, key) for key in data}


class SettingsManager:
    """Very small settings helper storing JSON data."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path or app_data_dir() / "settings.json"
        self._stored: Dict[str, Any] = {}
        self.settings: Settings
        self.load()

    def load(self) -> None:
        data: Dict[str, Any] = {}
        if self.path.exists():
            try:
                loaded = json.loads(self.path.read_text(encoding="utf-8"))
                if isinstance(loaded, dict):
                    data = loaded
            except (OSError, ValueError) as exc:
                logger.warning("Ignoring unreadable settings file %s: %s", self.path, exc)
        self._stored = _stored_values(data)
        self.settings = Settings(**self._stored)

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._stored, indent=2, ensure_ascii=False), encoding="utf-8")

    @property
    def history_limit(self) -> int:
        return self.settings.history_limit

    @property
    def log_level(self) -> str:
        return self.settings.log_level

    @property
    def preview_debounce_ms(self) -> int:
        return self.settings.preview_debounce_ms

    @property
    def theme(self) -> Dict[str, str]:
        return dict(self.settings.theme)

    def get(self, key: str, default: Any = None) -> Any:
        return getattr(self.settings, key, default)

    def set(self, key: str, value: Any) -> None:
        """Validate and store ``value``; raises ``KeyError`` or ``ValidationError``."""
        if key not in Settings.model_fields:
            raise KeyError(key)
        candidate = self.settings.model_copy()
        setattr(candidate, key, value)
        self._stored[key] = getattr(candidate, key)
        self.save()
        self.settings = Settings(**self._stored)
