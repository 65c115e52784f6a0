"""CLI entrypoints for refreshing, rendering, and exporting logo history."""

from __future__ import annotations

import argparse
import json
import sys
import time
from dataclasses import asdict
from pathlib import Path

from logopng_core import (
    AppConfig,
    FetchError,
    LogoApp,
    StoreError,
    apply_env_overrides,
    load_config,
)
from logopng_core.logging_setup import configure_logging, install_crash_hooks
from logopng_renderer import RenderError, RenderOptions


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def _character(value: str) -> int:
    n = int(value)
    if not 0 <= n <= 6:
        raise argparse.ArgumentTypeError(f"character must be in 0..6, got {n}")
    return n


def _load_config(args: argparse.Namespace) -> AppConfig:
    cfg = apply_env_overrides(load_config(Path(args.config) if args.config else None))
    if args.database:
        cfg.storage.database_path = args.database
    return cfg


def _open_app(args: argparse.Namespace) -> LogoApp:
    return LogoApp(args.app_config)


def _write_output(out: str, data: bytes) -> None:
    if out == "-":
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    else:
        Path(out).expanduser().write_bytes(data)


def cmd_refresh(args: argparse.Namespace) -> int:
    with _open_app(args) as app:
        result = app.pipeline.run_cycle()
    _print_json(
        {
            "changed": result.changed,
            "state": result.state.value,
            "png_bytes": len(result.png) if result.png else 0,
            "subscribers_notified": result.subscribers_notified,
            "broadcast_error": result.broadcast_error,
            "persist": asdict(result.persist) if result.persist else None,
            "duration_s": result.duration_s,
        }
    )
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    options = RenderOptions.from_query(size=args.size, character=args.character, crop=args.crop)
    with _open_app(args) as app:
        # Read-only: load the cache directly, no broadcast or snapshot insert.
        app.cache.swap_if_changed(app.fetcher.fetch_current_description())
        png = app.render(options)
    _write_output(args.out, png)
    if args.out != "-":
        _print_json({"out": args.out, "bytes": len(png)})
    return 0


def cmd_history(args: argparse.Namespace) -> int:
    with _open_app(args) as app:
        payload = app.history(args.limit)
    if args.decode:
        _print_json(payload.decode())
        return 0
    _write_output(args.out, payload.body)
    if args.out != "-":
        _print_json({"out": args.out, "bytes": len(payload.body), "headers": payload.headers()})
    return 0


def cmd_watch(args: argparse.Namespace) -> int:
    install_crash_hooks(args.app_config)
    with _open_app(args) as app:
        if args.interval:
            app.refresh.interval_s = args.interval
        app.refresh.start()
        try:
            while app.refresh.running:
                time.sleep(1.0)
        except KeyboardInterrupt:
            pass
        _print_json({"cycles": app.refresh.cycles, "failures": app.refresh.failures})
    return 0


def cmd_init_db(args: argparse.Namespace) -> int:
    with _open_app(args) as app:
        _print_json({"database": str(app.store.path), "snapshots": app.store.count()})
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    cfg = args.app_config
    payload = asdict(cfg)
    payload["effective_database_path"] = str(cfg.database_path())
    payload["effective_log_dir"] = str(cfg.log_directory())
    _print_json(payload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="logopng", description="Pixel logo renderer and timeline tools")
    parser.add_argument("--config", default=None, help="Path to config.json")
    parser.add_argument("--database", default=None, help="Override timeline database path")
    sub = parser.add_subparsers(dest="command", required=True)

    refresh_cmd = sub.add_parser("refresh", help="Run one fetch/compare/render/persist cycle")
    refresh_cmd.set_defaults(func=cmd_refresh)

    render_cmd = sub.add_parser("render", help="Fetch the current logo and write it as PNG without storing it")
    render_cmd.add_argument("--size", type=_positive_int, default=None, help="Pixel scale factor")
    render_cmd.add_argument("--character", type=_character, default=None, help="Render a single character (0-6)")
    render_cmd.add_argument("--crop", action="store_true", help="Trim empty top margin in character mode")
    render_cmd.add_argument("--out", default="logo.png", help="Output path, '-' for stdout")
    render_cmd.set_defaults(func=cmd_render)

    history_cmd = sub.add_parser("history", help="Export stored snapshots as gzip JSON")
    history_cmd.add_argument("--limit", type=_positive_int, default=None)
    history_cmd.add_argument("--out", default="history.json.gz", help="Output path, '-' for stdout")
    history_cmd.add_argument("--decode", action="store_true", help="Print decompressed JSON instead")
    history_cmd.set_defaults(func=cmd_history)

    watch_cmd = sub.add_parser("watch", help="Refresh periodically until interrupted")
    watch_cmd.add_argument("--interval", type=float, default=None, help="Seconds between refresh cycles")
    watch_cmd.set_defaults(func=cmd_watch)

    init_cmd = sub.add_parser("init-db", help="Create the timeline table if missing")
    init_cmd.set_defaults(func=cmd_init_db)

    config_cmd = sub.add_parser("config", help="Print effective configuration")
    config_cmd.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.app_config = _load_config(args)
    configure_logging(args.app_config)
    try:
        return int(args.func(args))
    except (FetchError, StoreError, RenderError) as exc:
        _print_json({"success": False, "error": type(exc).__name__, "detail": str(exc)})
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
