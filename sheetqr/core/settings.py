from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError


load_dotenv(override=False)

CONFIG_ENV = "SHEETQR_CONFIG"
HOME_ENV = "SHEETQR_HOME"
LOG_LEVEL_ENV = "SHEETQR_LOG_LEVEL"

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "settings.yaml"
DEFAULT_WORK_DIR = Path.home() / "SheetQR"


class ExtractSettings(BaseModel):
    """Row conversion tuning for sheet extraction."""

    model_config = ConfigDict(extra="forbid")

    max_workers: int = Field(default=4, ge=1)
    parallel_threshold: int = Field(default=256, ge=0)


class QRCodeSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    size: int = Field(default=200, gt=0)
    border: int = Field(default=4, ge=0)
    error_correction: str = "M"

    @field_validator("error_correction")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"L", "M", "Q", "H"}:
            raise ValueError("error_correction must be one of L, M, Q, H")
        return level


class CheatSheetSettings(BaseModel):
    """Layout of the printable label pages."""

    model_config = ConfigDict(extra="forbid")

    columns: int = Field(default=3, gt=0)
    rows: int = Field(default=5, gt=0)
    page_width: int = Field(default=1056, gt=0)
    page_height: int = Field(default=816, gt=0)
    gap: int = Field(default=8, ge=0)
    qr_size: int = Field(default=100, gt=0)
    upc_column: str = "UPC"
    description_column: str = "DESCRIPTION"
    file_prefix: str = "cheat-sheet"

    @property
    def per_page(self) -> int:
        return self.columns * self.rows


class Settings(BaseModel):
    """Validated runtime configuration."""

    model_config = ConfigDict(extra="forbid")

    work_dir: Path = DEFAULT_WORK_DIR
    log_level: str = "INFO"
    extract: ExtractSettings = Field(default_factory=ExtractSettings)
    qrcode: QRCodeSettings = Field(default_factory=QRCodeSettings)
    cheat_sheet: CheatSheetSettings = Field(default_factory=CheatSheetSettings)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level

    @field_validator("work_dir", mode="before")
    @classmethod
    def _default_work_dir(cls, value: Any) -> Any:
        if value in (None, ""):
            return DEFAULT_WORK_DIR
        return Path(str(value)).expanduser()


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a mapping: {path}")
    return data


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from YAML and apply environment overrides.

    Resolution order: explicit ``path``, then ``SHEETQR_CONFIG``, then the
    bundled ``config/settings.yaml``. ``SHEETQR_HOME`` and
    ``SHEETQR_LOG_LEVEL`` override the matching keys of the file.
    """

    env_path = os.getenv(CONFIG_ENV)
    cfg_path = Path(path) if path else Path(env_path) if env_path else DEFAULT_CONFIG_PATH
    data = _load_yaml(cfg_path)

    home = os.getenv(HOME_ENV)
    if home:
        data["work_dir"] = home
    level = os.getenv(LOG_LEVEL_ENV)
    if level:
        data["log_level"] = level

    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {cfg_path}: {exc}") from exc


def ensure_work_dirs(settings: Settings | None = None) -> dict[str, Path]:
    base = (settings or load_settings()).work_dir
    out = base / "out"
    logs = base / "logs"
    for p in (base, out, logs):
        p.mkdir(parents=True, exist_ok=True)
    return {"base": base, "out": out, "logs": logs}
