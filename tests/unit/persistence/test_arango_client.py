"""Unit tests for the ArangoDB handle and its bind_vars check."""

from unittest.mock import MagicMock

import pytest

from entitytags.helpers.dto.entity_tags_dto import EntityTags
from entitytags.persistence.arango_client import ArangoHandle, _plain_json


class TestPlainJson:
    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["s", 1, 1.5, True, None])
    def test_scalars_pass_through(self, value) -> None:
        assert _plain_json(value) == value

    @pytest.mark.unit
    def test_tuples_become_lists(self) -> None:
        assert _plain_json({"ids": ("a", "b")}) == {"ids": ["a", "b"]}

    @pytest.mark.unit
    def test_nested_containers(self) -> None:
        value = {"docs": [{"tags": [{"name": "owner", "value": {"k": [1, 2]}}]}]}

        assert _plain_json(value) == value

    @pytest.mark.unit
    def test_dto_rejected_with_path(self) -> None:
        """DTOs must be converted with .to_dict() by the caller."""
        with pytest.raises(TypeError, match=r"\$\.docs\[0\].*EntityTags"):
            _plain_json({"docs": [EntityTags(id="r1")]})


class TestArangoHandle:
    @pytest.mark.unit
    def test_execute_checks_bind_vars(self) -> None:
        raw = MagicMock()
        db = ArangoHandle(raw)

        db.aql.execute("RETURN @ids", bind_vars={"ids": ("a",)})

        raw.aql.execute.assert_called_once_with("RETURN @ids", bind_vars={"ids": ["a"]})

    @pytest.mark.unit
    def test_execute_without_bind_vars(self) -> None:
        raw = MagicMock()

        ArangoHandle(raw).aql.execute("RETURN 1")

        raw.aql.execute.assert_called_once_with("RETURN 1", bind_vars={})

    @pytest.mark.unit
    def test_collection_management_delegates(self) -> None:
        raw = MagicMock()
        raw.has_collection.return_value = False
        db = ArangoHandle(raw)

        assert db.has_collection("entity_tags") is False
        db.create_collection("entity_tags")

        raw.has_collection.assert_called_once_with("entity_tags")
        raw.create_collection.assert_called_once_with("entity_tags")
