"""Custom exceptions used across multiple layers.

Rules:
- Only put exceptions here if they need to be raised in one layer and caught in another.
- Keep exceptions simple and focused.
- No I/O, no config loading, no complex logic.
"""

from __future__ import annotations

from typing import Literal

StoreName = Literal["durable_store", "search_index"]


class UpstreamUnavailableError(Exception):
    """Raised when the search index or durable store cannot be reached."""

    def __init__(self, store: StoreName, cause: BaseException | None = None) -> None:
        self.store = store
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{store} unavailable{detail}")


class StoreWriteFailedError(Exception):
    """Raised when a single write (save, bulk index or delete) fails.

    Records written earlier in the same page stay written; there is no rollback.
    """

    def __init__(self, store: StoreName, record_id: str | None, cause: BaseException) -> None:
        self.store = store
        self.record_id = record_id
        self.cause = cause
        target = record_id if record_id is not None else "batch"
        super().__init__(f"{store} write failed for {target}: {cause}")


class InvalidSelectionError(Exception):
    """Raised when a request reaches the core without exactly one selection mode."""


class InvalidRequestError(ValueError):
    """Raised when a bulk delete request fails decoding or validation.

    errors holds (field, message) pairs.
    """

    def __init__(self, errors: list[tuple[str, str]]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors))


class AccountNotFoundError(LookupError):
    """Raised when an entity reference names an account that is not configured."""
