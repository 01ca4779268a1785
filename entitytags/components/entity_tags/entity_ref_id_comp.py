"""Entity ref id derivation - deterministic record ids for cloud resources.

A record id is a pure function of the resource reference and its account:

    {cloud_provider}:{entity_type}:{entity_id}:{account_id or account}:{region}

lower-cased. References that only name the account are completed with the
account id from the configured account registry (and vice versa) before the
id is built, so both spellings of the same reference map to one record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from entitytags.helpers.dto.entity_tags_dto import EntityRef
from entitytags.helpers.exceptions import AccountNotFoundError

logger = logging.getLogger(__name__)

ID_PATTERN = "{{cloudProvider}}:{{entityType}}:{{entityId}}:{{account}}:{{region}}"


@dataclass(frozen=True)
class AccountCredentials:
    """A configured cloud account: display name plus provider account id."""

    name: str
    account_id: str
    cloud_provider: str | None = None


@dataclass(frozen=True)
class EntityRefId:
    """Derived record id and the pattern it was built from."""

    id: str
    id_pattern: str


class AccountRegistry:
    """Lookup of configured accounts by name or by account id."""

    def __init__(self, accounts: list[AccountCredentials] | None = None) -> None:
        self._by_name: dict[str, AccountCredentials] = {}
        self._by_id: dict[str, AccountCredentials] = {}
        for account in accounts or []:
            self._by_name[account.name] = account
            self._by_id[account.account_id] = account

    @classmethod
    def from_config(cls, entries: list[dict[str, Any]] | None) -> AccountRegistry:
        """Build from config entries like ``{"name": "prod", "account_id": "1234"}``."""
        accounts = [
            AccountCredentials(
                name=str(entry["name"]),
                account_id=str(entry["account_id"]),
                cloud_provider=entry.get("cloud_provider"),
            )
            for entry in entries or []
        ]
        return cls(accounts)

    def by_name(self, name: str) -> AccountCredentials | None:
        return self._by_name.get(name)

    def by_account_id(self, account_id: str) -> AccountCredentials | None:
        return self._by_id.get(account_id)

    def __len__(self) -> int:
        return len(self._by_name)


def complete_entity_ref(entity_ref: EntityRef, accounts: AccountRegistry) -> EntityRef:
    """Fill in whichever of account / account_id the reference is missing.

    Raises:
        AccountNotFoundError: If the reference names an account that is not configured
    """
    if entity_ref.account is not None and entity_ref.account_id is None:
        credentials = accounts.by_name(entity_ref.account)
        if credentials is None:
            msg = f"No account configured with name '{entity_ref.account}'"
            raise AccountNotFoundError(msg)
        return replace(entity_ref, account_id=credentials.account_id)

    if entity_ref.account is None and entity_ref.account_id is not None:
        credentials = accounts.by_account_id(entity_ref.account_id)
        if credentials is not None:
            return replace(entity_ref, account=credentials.name)

    return entity_ref


def build_entity_ref_id(
    cloud_provider: str | None,
    entity_type: str | None,
    entity_id: str | None,
    account_id_or_name: str | None,
    region: str | None,
) -> EntityRefId:
    """Build the record id from its parts (missing parts render as "None", as stored upstream)."""
    record_id = f"{cloud_provider}:{entity_type}:{entity_id}:{account_id_or_name}:{region}".lower()
    return EntityRefId(id=record_id, id_pattern=ID_PATTERN)


def derive_entity_ref_id(entity_ref: EntityRef, accounts: AccountRegistry) -> EntityRefId:
    """Derive the record id for a resource reference.

    Args:
        entity_ref: Reference as supplied by the caller
        accounts: Account registry used to resolve account name <-> id

    Returns:
        EntityRefId with the deterministic id

    Raises:
        AccountNotFoundError: If the reference names an unknown account
    """
    completed = complete_entity_ref(entity_ref, accounts)
    return build_entity_ref_id(
        completed.cloud_provider,
        completed.entity_type,
        completed.entity_id,
        completed.account_id or completed.account,
        completed.region,
    )
