from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace

logger = logging.getLogger("msgraph_snippets")

DEFAULT_BASE_URL = "https://graph.microsoft.com"
DEFAULT_API_VERSION = "v1.0"


@dataclass(slots=True)
class GraphSettings:
    """Connection information for the Microsoft Graph REST API."""

    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    access_token: str | None = None
    timeout: int = 30
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "GraphSettings":
        def _int_env(name: str, default: int) -> int:
            raw = os.getenv(name)
            if not raw:
                return default
            try:
                return int(raw)
            except ValueError:
                logger.warning("Invalid integer for %s: %s", name, raw)
                return default

        return cls(
            base_url=os.getenv("GRAPH_BASE_URL", DEFAULT_BASE_URL),
            api_version=os.getenv("GRAPH_API_VERSION", DEFAULT_API_VERSION),
            access_token=os.getenv("GRAPH_ACCESS_TOKEN") or None,
            timeout=_int_env("GRAPH_TIMEOUT", 30),
            log_level=os.getenv("SNIPPETS_LOG_LEVEL", "INFO"),
        )

    def with_token(self, access_token: str | None) -> "GraphSettings":
        """Return a copy carrying ``access_token`` when one is given."""
        if not access_token:
            return self
        return replace(self, access_token=access_token)

    def client_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Accept": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers


__all__ = ["GraphSettings", "DEFAULT_BASE_URL", "DEFAULT_API_VERSION"]
