"""Core services for the logo cache, refresh pipeline, persistence, and history."""

from .app import LogoApp, render_logo_png
from .cache import LogoCache, ReadWriteLock
from .config import AppConfig, apply_env_overrides, load_config, save_config
from .errors import FetchError, LogoError, StoreError
from .fetch import LogoFetcher
from .live import LiveBroadcaster, Subscription
from .models import CycleResult, CycleState, PersistOutcome, TimelineEntry
from .pipeline import UpdatePipeline
from .scheduler import RefreshLoop
from .store import TimelineStore
from .timeline import HistoryPayload, encode_history, query_history

__all__ = [
    "AppConfig",
    "CycleResult",
    "CycleState",
    "FetchError",
    "HistoryPayload",
    "LiveBroadcaster",
    "LogoApp",
    "LogoCache",
    "LogoError",
    "LogoFetcher",
    "PersistOutcome",
    "ReadWriteLock",
    "RefreshLoop",
    "StoreError",
    "Subscription",
    "TimelineEntry",
    "TimelineStore",
    "UpdatePipeline",
    "apply_env_overrides",
    "encode_history",
    "load_config",
    "query_history",
    "render_logo_png",
    "save_config",
]
