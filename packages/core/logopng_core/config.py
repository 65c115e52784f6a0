"""Persistent service settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 1
DEFAULT_LOGO_URL = "https://logo-api.g2.iterate.no/logo"


@dataclass
class FetchConfig:
    url: str = DEFAULT_LOGO_URL
    timeout_s: float = 10.0


@dataclass
class RefreshConfig:
    interval_s: float = 5.0


@dataclass
class StorageConfig:
    database_path: str | None = None


@dataclass
class LiveConfig:
    queue_size: int = 8


@dataclass
class DiagnosticsConfig:
    keep_log_files: int = 7
    log_dir: str | None = None
    log_level: str = "INFO"


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    fetch: FetchConfig = field(default_factory=FetchConfig)
    refresh: RefreshConfig = field(default_factory=RefreshConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    live: LiveConfig = field(default_factory=LiveConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)

    def database_path(self) -> Path:
        if self.storage.database_path:
            return Path(self.storage.database_path).expanduser()
        return config_root() / "timeline.db"

    def log_directory(self) -> Path:
        if self.diagnostics.log_dir:
            return Path(self.diagnostics.log_dir).expanduser()
        return config_root() / "logs"


def config_root() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "LogoPng"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "LogoPng"
    return Path.home() / ".config" / "logopng"


def config_path() -> Path:
    return config_root() / "config.json"


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in raw.items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_fetch(cfg: AppConfig) -> None:
    if not cfg.fetch.url:
        cfg.fetch.url = DEFAULT_LOGO_URL
    cfg.fetch.timeout_s = float(max(1.0, min(120.0, float(cfg.fetch.timeout_s))))


def _normalize_refresh(cfg: AppConfig) -> None:
    cfg.refresh.interval_s = float(max(1.0, min(3600.0, float(cfg.refresh.interval_s))))


def _normalize_live(cfg: AppConfig) -> None:
    cfg.live.queue_size = max(1, min(256, int(cfg.live.queue_size)))


def _normalize_diagnostics(cfg: AppConfig) -> None:
    cfg.diagnostics.keep_log_files = max(2, min(90, int(cfg.diagnostics.keep_log_files)))
    level = str(cfg.diagnostics.log_level).upper()
    cfg.diagnostics.log_level = level if level in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO"


def apply_env_overrides(cfg: AppConfig, environ: dict[str, str] | None = None) -> AppConfig:
    env = os.environ if environ is None else environ
    url = env.get("LOGOPNG_LOGO_URL", "").strip()
    if url:
        cfg.fetch.url = url
    database = env.get("LOGOPNG_DATABASE", "").strip()
    if database:
        cfg.storage.database_path = database
    log_dir = env.get("LOGOPNG_LOG_DIR", "").strip()
    if log_dir:
        cfg.diagnostics.log_dir = log_dir
    log_level = env.get("LOGOPNG_LOG_LEVEL", "").strip()
    if log_level:
        cfg.diagnostics.log_level = log_level
    refresh = env.get("LOGOPNG_REFRESH_S", "").strip()
    if refresh:
        try:
            cfg.refresh.interval_s = float(refresh)
        except ValueError:
            pass
    _normalize_refresh(cfg)
    _normalize_diagnostics(cfg)
    return cfg


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except Exception:
        return AppConfig()
    if not isinstance(data, dict):
        return AppConfig()

    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        fetch=_merge(FetchConfig, data.get("fetch", {})),
        refresh=_merge(RefreshConfig, data.get("refresh", {})),
        storage=_merge(StorageConfig, data.get("storage", {})),
        live=_merge(LiveConfig, data.get("live", {})),
        diagnostics=_merge(DiagnosticsConfig, data.get("diagnostics", {})),
    )

    _normalize_fetch(cfg)
    _normalize_refresh(cfg)
    _normalize_live(cfg)
    _normalize_diagnostics(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
