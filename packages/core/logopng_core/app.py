"""Process-lifetime wiring of cache, collaborators and refresh loop."""

from __future__ import annotations

from logopng_renderer import RenderOptions, render_png

from .cache import LogoCache
from .config import AppConfig
from .fetch import LogoFetcher
from .live import LiveBroadcaster
from .logging_setup import get_logger
from .pipeline import UpdatePipeline
from .scheduler import RefreshLoop
from .store import TimelineStore
from .timeline import HistoryPayload, query_history


def render_logo_png(cache: LogoCache, options: RenderOptions | None = None) -> bytes:
    """Render the current cached logo; the cache is read once so the view is never torn."""
    return render_png(cache.read_snapshot(), options)


class LogoApp:
    def __init__(self, config: AppConfig | None = None) -> None:
        self.config = config or AppConfig()
        self.cache = LogoCache()
        self.store = TimelineStore(self.config.database_path())
        self.live = LiveBroadcaster(queue_size=self.config.live.queue_size)
        self.fetcher = LogoFetcher(url=self.config.fetch.url, timeout_s=self.config.fetch.timeout_s)
        self.pipeline = UpdatePipeline(self.fetcher, self.cache, broadcaster=self.live, store=self.store)
        self.refresh = RefreshLoop(self.pipeline, interval_s=self.config.refresh.interval_s)
        self._logger = get_logger()

    def open(self) -> LogoApp:
        self.store.create_schema_if_absent()
        self._logger.info(f"timeline store ready at {self.store.path}", extra={"event": "store_ready"})
        return self

    def close(self) -> None:
        self.refresh.stop()
        self.live.close()

    def __enter__(self) -> LogoApp:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def render(self, options: RenderOptions | None = None) -> bytes:
        return render_logo_png(self.cache, options)

    def history(self, limit: int | None = None) -> HistoryPayload:
        return query_history(self.store, limit)
