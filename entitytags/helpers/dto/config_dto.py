"""
Config domain DTOs.

Data transfer objects for configuration service results.

Rules:
- Import only stdlib and typing (no entitytags.* imports)
- Pure data structures only (no I/O, no DB access, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class ConfigResult:
    """Result from config_svc.get_config - wraps configuration dict."""

    config: dict[str, Any]


@dataclass(frozen=True)
class StoreConfig:
    """Connection settings for the durable store and the search index."""

    arango_hosts: str
    arango_username: str
    arango_password: str
    arango_db_name: str
    elasticsearch_url: str
    entity_tags_collection: str
    elasticsearch_index: str


@dataclass(frozen=True)
class ApiConfig:
    """Bind address for the HTTP surface."""

    host: str
    port: int
