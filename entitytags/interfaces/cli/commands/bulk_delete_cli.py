"""
Bulk delete command: strip tags or a namespace from selected entity tags.
"""

from __future__ import annotations

import argparse
import json

from entitytags.components.tasks.task_status_comp import Task
from entitytags.helpers.exceptions import (
    AccountNotFoundError,
    InvalidRequestError,
    InvalidSelectionError,
    StoreWriteFailedError,
    UpstreamUnavailableError,
)
from entitytags.interfaces.api.types.entity_tags_types import decode_bulk_delete_request
from entitytags.interfaces.cli.cli_ui import InfoPanel, print_error, print_success, print_warning, show_task_history
from entitytags.services.infrastructure.cli_bootstrap_svc import get_entity_tags_service


def _payload_from_args(args: argparse.Namespace) -> dict:
    """Build the same payload shape the HTTP endpoint accepts."""
    payload: dict = {
        "ids": list(args.id or []),
        "entityRefs": [json.loads(raw) for raw in args.entity_ref or []],
        "entityType": args.entity_type,
        "namespace": args.namespace,
    }
    if args.tag:
        payload["tags"] = list(args.tag)
    return payload


def cmd_bulk_delete(args: argparse.Namespace) -> int:
    """
    Remove tag names or a namespace from every selected record.

    Exit codes: 0 on success, 1 when a store fails, 2 for an invalid request.
    """
    try:
        request = decode_bulk_delete_request(_payload_from_args(args))
    except json.JSONDecodeError as e:
        print_error(f"--entity-ref must be a JSON object: {e}")
        return 2
    except InvalidRequestError as e:
        print_error(f"Invalid request: {e}")
        return 2

    target = ", ".join(request.tags) if request.tags else f"namespace {request.namespace}"
    if request.ids:
        selection = f"{len(request.ids)} id(s)"
    elif request.entity_refs:
        selection = f"{len(request.entity_refs)} entity ref(s)"
    else:
        selection = f"entity type {request.entity_type}"
    content = f"""[bold]Selection:[/bold] {selection}
[bold]Removing:[/bold] {target}"""
    InfoPanel.show("Bulk Delete Entity Tags", content)

    try:
        service = get_entity_tags_service()
    except UpstreamUnavailableError as e:
        print_error(str(e))
        return 1

    task = Task()
    try:
        outcome = service.bulk_delete(request, task=task)
    except (InvalidRequestError, InvalidSelectionError, AccountNotFoundError) as e:
        print_error(str(e))
        return 2
    except UpstreamUnavailableError as e:
        print_error(str(e))
        return 1
    except StoreWriteFailedError as e:
        print_error(str(e))
        print_warning("Writes before this failure were not rolled back")
        show_task_history(task.history)
        return 1
    finally:
        service.db.close()

    show_task_history(outcome.task.history)
    result = outcome.result
    if result.fetched == 0:
        print_warning("No entity tags matched the selection")
        return 0
    print_success(f"Deleted {result.deleted} and updated {result.updated} entity tags in {result.cycles} cycle(s)")
    return 0
