#!/usr/bin/env python3
# ======================================================================
#  Config Service - Configuration loading and caching
#  - Loads config from YAML and env vars
#  - Caches composed config for the life of the process
# ======================================================================

from __future__ import annotations

import contextlib
import logging
import os
from typing import Any

import yaml

from entitytags.helpers.dto.config_dto import ApiConfig, ConfigResult, StoreConfig

# Keys that may be overridden from the environment (ENTITYTAGS_<KEY>)
ALLOWED_ENV_KEYS = {
    "arango_hosts",
    "arango_username",
    "arango_password",
    "arango_db_name",
    "elasticsearch_url",
    "elasticsearch_index",
    "entity_tags_collection",
    "log_dir",
    "api_host",
    "api_port",
}

# Env values are strings; only these keys are converted
INT_ENV_KEYS = {"api_port"}


class ConfigService:
    """
    Service for loading and caching application configuration.

    Loads config from multiple sources (defaults → YAML → overrides → env)
    and caches the result.
    """

    def __init__(self, overrides: dict[str, Any] | None = None) -> None:
        """Initialize ConfigService with empty cache.

        Args:
            overrides: Values applied after YAML files and before env vars
        """
        self._config: dict[str, Any] | None = None
        self._overrides = overrides
        self._logger = logging.getLogger(__name__)

    def get_config(self) -> ConfigResult:
        """
        Get the composed configuration (composed once, then cached).

        Returns:
            ConfigResult wrapping the complete configuration dict
        """
        if self._config is None:
            self._config = self._compose(self._overrides)
        return ConfigResult(config=self._config)

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dotted path.

        Example:
            >>> service.get("elasticsearch_index")
            'entity_tags'
            >>> service.get("missing.key", 2)
            2
        """
        node: Any = self.get_config().config
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def make_store_config(self) -> StoreConfig:
        """Extract connection settings for both stores."""
        cfg = self.get_config().config
        return StoreConfig(
            arango_hosts=str(cfg["arango_hosts"]),
            arango_username=str(cfg["arango_username"]),
            arango_password=str(cfg["arango_password"]),
            arango_db_name=str(cfg["arango_db_name"]),
            elasticsearch_url=str(cfg["elasticsearch_url"]),
            entity_tags_collection=str(cfg["entity_tags_collection"]),
            elasticsearch_index=str(cfg["elasticsearch_index"]),
        )

    def make_api_config(self) -> ApiConfig:
        cfg = self.get_config().config
        return ApiConfig(host=str(cfg["api_host"]), port=int(cfg["api_port"]))

    def get_accounts(self) -> list[dict[str, Any]]:
        """Configured cloud accounts (``[{name, account_id, cloud_provider}]``)."""
        accounts = self.get("accounts", [])
        return list(accounts) if isinstance(accounts, list) else []

    # ----------------------------------------------------------------------
    # Private composition logic
    # ----------------------------------------------------------------------

    def _compose(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Load final configuration from:
          1) Built-in defaults
          2) /etc/entitytags/config.yaml  (if present)
          3) ./config/config.yaml
          4) $CONFIG_PATH (if set)
          5) overrides dict passed in
          6) Environment variables (ENTITYTAGS_*)

        Returns merged config as dict.
        """
        cfg = self._default_config()

        self._deep_merge(cfg, self._load_yaml("/etc/entitytags/config.yaml"))
        self._deep_merge(cfg, self._load_yaml(os.path.join(os.getcwd(), "config", "config.yaml")))

        env_path = os.getenv("CONFIG_PATH")
        if env_path:
            self._deep_merge(cfg, self._load_yaml(env_path))

        if overrides:
            self._deep_merge(cfg, overrides)

        self._apply_env_overrides(cfg)

        with contextlib.suppress(Exception):
            self._logger.debug("compose() loaded config; keys: %s", list(cfg.keys()))

        return cfg

    def _default_config(self) -> dict[str, Any]:
        """Base defaults for every user-configurable setting."""
        return {
            # Durable store (ArangoDB)
            "arango_hosts": "http://localhost:8529",
            "arango_username": "entitytags",
            "arango_password": "entitytags_password",
            "arango_db_name": "entitytags",
            "entity_tags_collection": "entity_tags",
            # Search index (Elasticsearch)
            "elasticsearch_url": "http://localhost:9200",
            "elasticsearch_index": "entity_tags",
            # Account registry used to resolve entity refs to record ids
            "accounts": [],
            # Logging (None = console only)
            "log_dir": None,
            # HTTP API
            "api_host": "0.0.0.0",
            "api_port": 8357,
        }

    def _deep_merge(self, a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
        """
        Recursively merge dict b into dict a (mutates a, returns it).
        """
        for k, v in b.items():
            if isinstance(v, dict) and isinstance(a.get(k), dict):
                self._deep_merge(a[k], v)
            else:
                a[k] = v
        return a

    def _load_yaml(self, path: str) -> dict[str, Any]:
        """
        Load a YAML file; returns {} if not found or invalid.
        """
        if not path or not os.path.exists(path):
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            self._logger.warning(f"Ignoring unreadable config file {path}: {e}")
            return {}
        return loaded if isinstance(loaded, dict) else {}

    def _apply_env_overrides(self, cfg: dict[str, Any]) -> None:
        """
        Support environment overrides for whitelisted keys.

        Supported formats:
          ENTITYTAGS_ARANGO_HOSTS=http://arangodb:8529
          ENTITYTAGS_ELASTICSEARCH_URL=http://es:9200
          ENTITYTAGS_API_PORT=9000
        """
        for k, v in os.environ.items():
            if not k.startswith("ENTITYTAGS_"):
                continue

            key = k[len("ENTITYTAGS_") :].lower()
            if key not in ALLOWED_ENV_KEYS:
                self._logger.debug(f"Ignoring environment override for unknown key: {key}")
                continue

            cfg[key] = int(v) if key in INT_ENV_KEYS and v.isdigit() else v
