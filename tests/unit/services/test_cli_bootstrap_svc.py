"""Unit tests for the service container used by the CLI and the API."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from arango.exceptions import ArangoError
from elasticsearch import ConnectionError as ESConnectionError

from entitytags.helpers.exceptions import UpstreamUnavailableError
from entitytags.services.config_svc import ConfigService
from entitytags.services.infrastructure.cli_bootstrap_svc import get_database, get_entity_tags_service

CONNECT_PATH = "entitytags.services.infrastructure.cli_bootstrap_svc.Database.connect"


class TestBootstrap:
    @pytest.mark.unit
    def test_get_database_passes_store_config(self, clean_env) -> None:
        config = ConfigService(overrides={"elasticsearch_index": "idx", "arango_db_name": "tagsdb"})

        with patch(CONNECT_PATH) as mock_connect:
            db = get_database(config)

        assert db is mock_connect.return_value
        db.entity_tags.ensure_collection.assert_called_once()
        db.entity_tags_index.ensure_index.assert_called_once()
        kwargs = mock_connect.call_args.kwargs
        assert kwargs["index_name"] == "idx"
        assert kwargs["arango_db_name"] == "tagsdb"
        assert kwargs["collection_name"] == "entity_tags"

    @pytest.mark.unit
    def test_service_gets_accounts(self, clean_env) -> None:
        config = ConfigService(overrides={"accounts": [{"name": "prod", "account_id": "1"}]})

        with patch(CONNECT_PATH):
            service = get_entity_tags_service(config)

        assert service.accounts.by_name("prod").account_id == "1"


class TestStoresNotReady:
    @pytest.mark.unit
    @pytest.mark.parametrize("error", [ConnectionRefusedError("refused"), ArangoError("unauthorized")])
    def test_durable_store_unreachable(self, clean_env, error) -> None:
        with patch(CONNECT_PATH) as mock_connect:
            db = mock_connect.return_value
            db.entity_tags.ensure_collection.side_effect = error

            with pytest.raises(UpstreamUnavailableError) as exc_info:
                get_database(ConfigService())

        assert exc_info.value.store == "durable_store"
        assert exc_info.value.cause is error
        db.entity_tags_index.ensure_index.assert_not_called()
        db.close.assert_called_once()

    @pytest.mark.unit
    def test_search_index_unreachable(self, clean_env) -> None:
        error = ESConnectionError("connection refused")
        with patch(CONNECT_PATH) as mock_connect:
            db = mock_connect.return_value
            db.entity_tags_index.ensure_index.side_effect = error

            with pytest.raises(UpstreamUnavailableError) as exc_info:
                get_database(ConfigService())

        assert exc_info.value.store == "search_index"
        db.close.assert_called_once()
