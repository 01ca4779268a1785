"""
Pytest fixtures and configuration for the test suite.

Strategy:
- Unit tests never touch a real ArangoDB or Elasticsearch
- Operations classes are tested against MagicMock clients (query text, bind vars)
- Workflows and services run against in-memory stand-ins for both stores that
  honor the same filter semantics as the search index and record call order
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

# Add project root to path so tests can import entitytags package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from entitytags.helpers.dto.bulk_delete_dto import EntityTagsFilter  # noqa: E402
from entitytags.helpers.dto.entity_tags_dto import EntityRef, EntityTag, EntityTags  # noqa: E402

# === RECORD FACTORY ===


def make_record(
    record_id: str,
    tags: list[tuple[str, str]] | None = None,
    entity_type: str = "servergroup",
) -> EntityTags:
    """Build an EntityTags record from (name, namespace) pairs."""
    return EntityTags(
        id=record_id,
        entity_ref=EntityRef(entity_type=entity_type, entity_id=record_id, cloud_provider="aws"),
        tags=[EntityTag(name=name, namespace=namespace, value=f"{name}-value") for name, namespace in tags or []],
    )


def _copy(record: EntityTags) -> EntityTags:
    return EntityTags.from_dict(record.to_dict())


# === IN-MEMORY STORES ===


class FakeSearchIndex:
    """In-memory stand-in for EntityTagsIndexOperations.

    Set failures[(op, record_id)] to an exception to make that call raise.
    op is one of "query", "bulk_index", "delete"; record_id is None for
    query and bulk_index.
    """

    def __init__(self, calls: list[tuple[str, str, Any]]) -> None:
        self.docs: dict[str, EntityTags] = {}
        self.calls = calls
        self.failures: dict[tuple[str, str | None], BaseException] = {}
        self.queries: list[EntityTagsFilter] = []

    def seed(self, records: list[EntityTags]) -> None:
        for record in records:
            self.docs[record.id] = _copy(record)

    def _matches(self, record: EntityTags, page_filter: EntityTagsFilter) -> bool:
        if page_filter.entity_type is not None and record.entity_ref.entity_type != page_filter.entity_type:
            return False
        if page_filter.ids is not None and record.id not in page_filter.ids:
            return False
        if page_filter.namespace is not None and not any(t.namespace == page_filter.namespace for t in record.tags):
            return False
        return page_filter.tag_name is None or record.get_tag(page_filter.tag_name) is not None

    def query(self, page_filter: EntityTagsFilter) -> list[EntityTags]:
        self.queries.append(page_filter)
        self.calls.append(("search_index", "query", None))
        if ("query", None) in self.failures:
            raise self.failures[("query", None)]
        matched = sorted((r for r in self.docs.values() if self._matches(r, page_filter)), key=lambda r: r.id)
        return [_copy(r) for r in matched[: page_filter.limit]]

    def bulk_index(self, records: list[EntityTags]) -> int:
        self.calls.append(("search_index", "bulk_index", [r.id for r in records]))
        if ("bulk_index", None) in self.failures:
            raise self.failures[("bulk_index", None)]
        for record in records:
            self.docs[record.id] = _copy(record)
        return len(records)

    def delete(self, record_id: str) -> bool:
        self.calls.append(("search_index", "delete", record_id))
        if ("delete", record_id) in self.failures:
            raise self.failures[("delete", record_id)]
        return self.docs.pop(record_id, None) is not None


class FakeDurableStore:
    """In-memory stand-in for EntityTagsOperations (same failure hook as FakeSearchIndex)."""

    def __init__(self, calls: list[tuple[str, str, Any]]) -> None:
        self.docs: dict[str, EntityTags] = {}
        self.calls = calls
        self.failures: dict[tuple[str, str | None], BaseException] = {}

    def seed(self, records: list[EntityTags]) -> None:
        for record in records:
            self.docs[record.id] = _copy(record)

    def get(self, record_id: str) -> EntityTags | None:
        record = self.docs.get(record_id)
        return _copy(record) if record is not None else None

    def save(self, record: EntityTags) -> None:
        self.calls.append(("durable_store", "save", record.id))
        if ("save", record.id) in self.failures:
            raise self.failures[("save", record.id)]
        self.docs[record.id] = _copy(record)

    def delete(self, record_id: str) -> None:
        self.calls.append(("durable_store", "delete", record_id))
        if ("delete", record_id) in self.failures:
            raise self.failures[("delete", record_id)]
        self.docs.pop(record_id, None)


class FakeDatabase:
    """Database stand-in exposing both stores and a shared call log."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, Any]] = []
        self.entity_tags = FakeDurableStore(self.calls)
        self.entity_tags_index = FakeSearchIndex(self.calls)
        self.closed = False

    def seed(self, records: list[EntityTags]) -> None:
        """Put the same records in both stores."""
        self.entity_tags.seed(records)
        self.entity_tags_index.seed(records)

    def close(self) -> None:
        self.closed = True


# === FIXTURES ===


@pytest.fixture
def fake_db() -> FakeDatabase:
    """Provide an empty in-memory Database stand-in."""
    return FakeDatabase()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Strip ENTITYTAGS_* / CONFIG_PATH env vars and run from an empty directory."""
    import os

    for key in list(os.environ):
        if key.startswith("ENTITYTAGS_") or key == "CONFIG_PATH":
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a fast unit test (no external services)")
    config.addinivalue_line("markers", "integration: mark test as integration test (requires ArangoDB and Elasticsearch)")


@pytest.fixture
def record_factory():
    """Provide make_record for building EntityTags records in tests."""
    return make_record
