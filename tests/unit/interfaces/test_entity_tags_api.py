"""Unit tests for the entity tags HTTP endpoint."""

from __future__ import annotations

import pytest
from arango.exceptions import ArangoError
from elasticsearch import ConnectionError as ESConnectionError
from fastapi.testclient import TestClient

from entitytags.interfaces.api.api_app import api_app
from entitytags.interfaces.api.web.dependencies import get_entity_tags_service
from entitytags.services.domain.entity_tags_svc import EntityTagsService

URL = "/api/entity-tags/bulk-delete"


@pytest.fixture
def client(fake_db):
    """TestClient wired to a service over the in-memory stores (lifespan not run)."""
    service = EntityTagsService(fake_db)
    api_app.dependency_overrides[get_entity_tags_service] = lambda: service
    try:
        yield TestClient(api_app)
    finally:
        api_app.dependency_overrides.clear()


class TestBulkDeleteEndpoint:
    @pytest.mark.unit
    def test_success(self, client, fake_db, record_factory) -> None:
        fake_db.seed([record_factory("r1", [("owner", "x"), ("team", "x")]), record_factory("r2", [("owner", "x")])])

        response = client.post(URL, json={"ids": ["r1", "r2"], "tags": ["owner"]})

        assert response.status_code == 200
        body = response.json()
        assert (body["cycles"], body["deleted"], body["updated"]) == (1, 1, 1)
        assert body["history"][-1]["status"] == "Deleted 1 and updated 1 entity tags"

    @pytest.mark.unit
    def test_camel_case_selection(self, client, fake_db, record_factory) -> None:
        fake_db.seed([record_factory("r1", [("a", "cost")], entity_type="cluster")])

        response = client.post(URL, json={"entityType": "cluster", "namespace": "cost"})

        assert response.status_code == 200
        assert response.json()["deleted"] == 1

    @pytest.mark.unit
    def test_validation_error_is_400(self, client, fake_db) -> None:
        response = client.post(URL, json={"ids": ["r1"], "entityType": "cluster", "tags": ["a"]})

        assert response.status_code == 400
        assert "Exactly one of 'ids', 'entityRefs', or 'entityType'" in response.json()["detail"]
        assert fake_db.calls == []

    @pytest.mark.unit
    def test_malformed_body_is_400(self, client) -> None:
        response = client.post(URL, json={"ids": "not-a-list", "tags": ["a"]})

        assert response.status_code == 400
        assert response.json()["detail"]["errors"][0][0] == "ids"

    @pytest.mark.unit
    def test_index_unavailable_is_503(self, client, fake_db) -> None:
        fake_db.entity_tags_index.failures[("query", None)] = ESConnectionError("down")

        response = client.post(URL, json={"entityType": "cluster", "tags": ["a"]})

        assert response.status_code == 503

    @pytest.mark.unit
    def test_write_failure_is_500_with_history(self, client, fake_db, record_factory) -> None:
        fake_db.seed([record_factory("r1", [("owner", "x")])])
        fake_db.entity_tags.failures[("delete", "r1")] = ArangoError("boom")

        response = client.post(URL, json={"ids": ["r1"], "tags": ["owner"]})

        assert response.status_code == 500
        detail = response.json()["detail"]
        assert detail["store"] == "durable_store"
        assert detail["record_id"] == "r1"
        assert "Deleting 1 entity tags" in detail["history"]

    @pytest.mark.unit
    def test_unknown_account_is_400(self, client) -> None:
        ref = {"cloudProvider": "aws", "entityType": "cluster", "entityId": "c1", "account": "nope"}

        response = client.post(URL, json={"entityRefs": [ref], "tags": ["a"]})

        assert response.status_code == 400
        assert "nope" in response.json()["detail"]


class TestServiceUnavailable:
    @pytest.mark.unit
    def test_missing_service_is_503(self) -> None:
        api_app.state.entity_tags_service = None

        response = TestClient(api_app).post(URL, json={"ids": ["r1"], "tags": ["a"]})

        assert response.status_code == 503
