"""Remote logo description client."""

from __future__ import annotations

import json
import os
import ssl
import urllib.error
import urllib.request

import certifi

from logopng_renderer import LogoDescription

from .config import DEFAULT_LOGO_URL
from .errors import FetchError


def _build_ssl_context() -> ssl.SSLContext:
    ca_bundle = os.environ.get("LOGOPNG_CA_BUNDLE", "").strip()
    if ca_bundle:
        return ssl.create_default_context(cafile=ca_bundle)
    return ssl.create_default_context(cafile=certifi.where())


class LogoFetcher:
    def __init__(self, url: str = DEFAULT_LOGO_URL, timeout_s: float = 10.0) -> None:
        self.url = url
        self.timeout_s = timeout_s

    def _request(self) -> urllib.request.Request:
        return urllib.request.Request(
            self.url,
            headers={
                "User-Agent": "logopng/0.1",
                "Accept": "application/json",
            },
        )

    def fetch_current_description(self) -> LogoDescription:
        context = _build_ssl_context() if self.url.startswith("https") else None
        try:
            with urllib.request.urlopen(self._request(), timeout=self.timeout_s, context=context) as resp:
                body = resp.read()
        except urllib.error.HTTPError as exc:
            raise FetchError(f"logo api returned HTTP {exc.code}", url=self.url) from exc
        except (urllib.error.URLError, OSError) as exc:
            raise FetchError(f"logo api unreachable: {exc}", url=self.url) from exc

        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise FetchError(f"logo api returned invalid JSON: {exc}", url=self.url) from exc

        try:
            return LogoDescription.from_payload(payload)
        except ValueError as exc:
            raise FetchError(f"logo api returned malformed logo: {exc}", url=self.url) from exc
