"""ArangoDB connection for the durable entity tags store.

python-arango pools HTTP connections per client; one handle per process.
"""

from __future__ import annotations

from typing import Any

from arango import ArangoClient
from arango.aql import AQL
from arango.database import StandardDatabase

_SCALARS = (str, int, float, bool, type(None))


def _plain_json(value: Any, *, _path: str = "$") -> Any:
    """Return value as plain JSON (tuples become lists).

    Entity tag values are opaque payloads. Anything that is not a JSON
    scalar, dict or list/tuple (including DTOs that were not passed through
    to_dict()) is rejected here instead of failing on the server.

    Raises:
        TypeError: With the offending path, e.g. "$.docs[0]"
    """
    if isinstance(value, _SCALARS):
        return value
    if isinstance(value, dict):
        return {str(key): _plain_json(item, _path=f"{_path}.{key}") for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_plain_json(item, _path=f"{_path}[{i}]") for i, item in enumerate(value)]
    raise TypeError(f"Bind value at {_path} is not plain JSON: {type(value).__name__}. Call to_dict() first.")


class _CheckedAQL:
    """AQL executor that checks bind_vars with _plain_json first."""

    def __init__(self, aql: AQL) -> None:
        self._aql = aql

    def execute(self, query: str, bind_vars: dict[str, Any] | None = None, **kwargs: Any) -> Any:
        return self._aql.execute(query, bind_vars=_plain_json(bind_vars or {}), **kwargs)


class ArangoHandle:
    """The subset of StandardDatabase the entity tags operations use."""

    def __init__(self, db: StandardDatabase) -> None:
        self._db = db
        self.aql = _CheckedAQL(db.aql)

    def has_collection(self, name: str) -> bool:
        return bool(self._db.has_collection(name))

    def create_collection(self, name: str) -> None:
        self._db.create_collection(name)


def create_arango_client(
    hosts: str = "http://localhost:8529",
    username: str = "entitytags",
    password: str = "entitytags_password",
    db_name: str = "entitytags",
) -> ArangoHandle:
    """Open the entity tags database.

    python-arango connects lazily, so an unreachable server surfaces on the
    first request (a requests ConnectionError, which is an OSError).
    """
    client = ArangoClient(hosts=hosts)
    return ArangoHandle(client.db(db_name, username=username, password=password))
