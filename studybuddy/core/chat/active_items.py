"""
Active item tracking.

Maintains the per-chat list of documents a conversation can refer back to.
Pure functions; callers persist the result.

Dependencies: pydantic, studybuddy.models
System role: Context bookkeeping for the turn orchestrator
"""

import logging
from typing import Any, Iterable

from pydantic import ValidationError

from studybuddy.models.chat import ActionType, ActiveItem, IntentType

logger = logging.getLogger(__name__)

DEFAULT_MAX_PER_TYPE = 5


def clean_active_items(items: Iterable[Any] | None) -> list[ActiveItem]:
    """
    Validate stored active items, dropping malformed entries.

    Args:
        items: ActiveItem instances or raw dicts from the context column

    Returns:
        Valid items in their original order
    """
    cleaned: list[ActiveItem] = []
    for item in items or []:
        if isinstance(item, ActiveItem):
            cleaned.append(item)
            continue
        try:
            cleaned.append(ActiveItem.model_validate(item))
        except ValidationError:
            logger.warning("Dropping malformed active item", extra={"item": repr(item)})
    return cleaned


def latest_active_item(items: Iterable[ActiveItem], item_type: IntentType) -> ActiveItem | None:
    """Most recently added item of ``item_type``."""
    matches = [item for item in items if item.type == item_type]
    return matches[-1] if matches else None


def next_active_items(
    current: Iterable[Any] | None,
    intent_type: IntentType,
    action: ActionType | None,
    affected_id: Any,
    max_per_type: int = DEFAULT_MAX_PER_TYPE,
) -> list[ActiveItem]:
    """
    Compute the active item list after a turn.

    Args:
        current: Items stored before the turn
        intent_type: Turn intent type
        action: Effective action (create, update or delete)
        affected_id: Id of the created, updated or deleted document
        max_per_type: Cap on items kept per document type

    Returns:
        New active item list

    Rules:
        - create appends, evicting the oldest items of the same type at the cap
        - delete removes every item whose id equals affected_id
        - update, query turns and turns without an id leave the list as-is
    """
    items = clean_active_items(current)

    if intent_type == IntentType.QUERY or affected_id is None:
        return items

    affected = str(affected_id).strip()
    if not affected:
        return items

    if action == ActionType.DELETE:
        return [item for item in items if item.id != affected]

    if action != ActionType.CREATE:
        return items

    same_type = [item for item in items if item.type == intent_type]
    overflow = len(same_type) - max_per_type + 1
    if overflow > 0:
        evicted = {id(item) for item in same_type[:overflow]}
        items = [item for item in items if id(item) not in evicted]

    items.append(ActiveItem(type=intent_type, id=affected))
    return items
