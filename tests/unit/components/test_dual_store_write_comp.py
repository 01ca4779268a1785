"""Unit tests for dual store write ordering and failure handling."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from arango.exceptions import ArangoError
from elasticsearch import ApiError
from elasticsearch import ConnectionError as ESConnectionError
from elasticsearch.helpers import BulkIndexError

from entitytags.components.entity_tags.dual_store_write_comp import (
    BASE_PHASE,
    delete_records,
    update_records,
    write_partition,
)
from entitytags.components.tasks.task_status_comp import Task
from entitytags.helpers.dto.bulk_delete_dto import PagePartition
from entitytags.helpers.exceptions import StoreWriteFailedError, UpstreamUnavailableError


class TestDeleteRecords:
    @pytest.mark.unit
    def test_index_delete_precedes_durable_delete(self, fake_db, record_factory) -> None:
        records = [record_factory("r1"), record_factory("r2")]
        fake_db.seed(records)

        assert delete_records(fake_db, records, Task()) == 2

        assert fake_db.calls == [
            ("search_index", "delete", "r1"),
            ("durable_store", "delete", "r1"),
            ("search_index", "delete", "r2"),
            ("durable_store", "delete", "r2"),
        ]
        assert fake_db.entity_tags.docs == {}
        assert fake_db.entity_tags_index.docs == {}

    @pytest.mark.unit
    def test_status_messages(self, fake_db, record_factory) -> None:
        task = Task()

        delete_records(fake_db, [record_factory("r1")], task)

        assert [(e.phase, e.status) for e in task.history] == [
            (BASE_PHASE, "Deleting 1 entity tags"),
            (BASE_PHASE, "Deleted 1 entity tags"),
        ]

    @pytest.mark.unit
    def test_empty_list_reports_nothing(self, fake_db) -> None:
        task = Task()

        assert delete_records(fake_db, [], task) == 0
        assert task.history == []
        assert fake_db.calls == []

    @pytest.mark.unit
    def test_durable_failure_leaves_index_deleted(self, fake_db, record_factory) -> None:
        """No rollback: the record stays out of the index."""
        records = [record_factory("r1"), record_factory("r2")]
        fake_db.seed(records)
        fake_db.entity_tags.failures[("delete", "r1")] = ArangoError("boom")

        with pytest.raises(StoreWriteFailedError) as exc_info:
            delete_records(fake_db, records, Task())

        assert exc_info.value.store == "durable_store"
        assert exc_info.value.record_id == "r1"
        assert "r1" not in fake_db.entity_tags_index.docs
        assert "r1" in fake_db.entity_tags.docs
        assert ("search_index", "delete", "r2") not in fake_db.calls

    @pytest.mark.unit
    def test_index_failure_leaves_durable_untouched(self, fake_db, record_factory) -> None:
        fake_db.seed([record_factory("r1")])
        fake_db.entity_tags_index.failures[("delete", "r1")] = ApiError("rejected", MagicMock(status=500), {})

        with pytest.raises(StoreWriteFailedError) as exc_info:
            delete_records(fake_db, [record_factory("r1")], Task())

        assert exc_info.value.store == "search_index"
        assert ("durable_store", "delete", "r1") not in fake_db.calls


class TestUpdateRecords:
    @pytest.mark.unit
    def test_durable_saves_precede_one_bulk_index(self, fake_db, record_factory) -> None:
        records = [record_factory("r1", [("a", "x")]), record_factory("r2", [("b", "x")])]

        assert update_records(fake_db, records, Task()) == 2

        assert fake_db.calls == [
            ("durable_store", "save", "r1"),
            ("durable_store", "save", "r2"),
            ("search_index", "bulk_index", ["r1", "r2"]),
        ]

    @pytest.mark.unit
    def test_status_messages(self, fake_db, record_factory) -> None:
        task = Task()

        update_records(fake_db, [record_factory("r1", [("a", "x")])], task)

        assert [e.status for e in task.history] == [
            "Updating 1 entity tags in durable store",
            "Updating 1 entity tags in search index",
            "Updated 1 entity tags in search index",
        ]

    @pytest.mark.unit
    def test_save_failure_stops_before_index(self, fake_db, record_factory) -> None:
        records = [record_factory("r1", [("a", "x")]), record_factory("r2", [("b", "x")])]
        fake_db.entity_tags.failures[("save", "r2")] = ArangoError("rejected")

        with pytest.raises(StoreWriteFailedError) as exc_info:
            update_records(fake_db, records, Task())

        assert exc_info.value.store == "durable_store"
        assert exc_info.value.record_id == "r2"
        assert "r1" in fake_db.entity_tags.docs
        assert all(call[1] != "bulk_index" for call in fake_db.calls)

    @pytest.mark.unit
    def test_bulk_index_failure_keeps_durable_writes(self, fake_db, record_factory) -> None:
        records = [record_factory("r1", [("a", "x")])]
        fake_db.entity_tags_index.failures[("bulk_index", None)] = BulkIndexError("1 document(s) failed", [{}])

        with pytest.raises(StoreWriteFailedError) as exc_info:
            update_records(fake_db, records, Task())

        assert exc_info.value.store == "search_index"
        assert exc_info.value.record_id is None
        assert "r1" in fake_db.entity_tags.docs


class TestWritePartition:
    @pytest.mark.unit
    def test_deletes_before_updates(self, fake_db, record_factory) -> None:
        partition = PagePartition(to_delete=[record_factory("r2")], to_update=[record_factory("r1", [("a", "x")])])

        assert write_partition(fake_db, partition, Task()) == (1, 1)
        assert [call[1] for call in fake_db.calls] == ["delete", "delete", "save", "bulk_index"]


class TestUnreachableStores:
    """Connection failures surface as UpstreamUnavailableError, not as write failures."""

    @pytest.mark.unit
    def test_index_unreachable_on_delete(self, fake_db, record_factory) -> None:
        fake_db.entity_tags_index.failures[("delete", "r1")] = ESConnectionError("down")

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            delete_records(fake_db, [record_factory("r1")], Task())

        assert exc_info.value.store == "search_index"
        assert ("durable_store", "delete", "r1") not in fake_db.calls

    @pytest.mark.unit
    def test_durable_unreachable_on_save(self, fake_db, record_factory) -> None:
        fake_db.entity_tags.failures[("save", "r1")] = ConnectionRefusedError("refused")

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            update_records(fake_db, [record_factory("r1", [("a", "x")])], Task())

        assert exc_info.value.store == "durable_store"
        assert all(call[1] != "bulk_index" for call in fake_db.calls)

    @pytest.mark.unit
    def test_index_unreachable_on_bulk_index(self, fake_db, record_factory) -> None:
        fake_db.entity_tags_index.failures[("bulk_index", None)] = ESConnectionError("down")

        with pytest.raises(UpstreamUnavailableError):
            update_records(fake_db, [record_factory("r1", [("a", "x")])], Task())

        assert "r1" in fake_db.entity_tags.docs
