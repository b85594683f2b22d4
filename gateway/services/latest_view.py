# gateway/services/latest_view.py
# Picks the default view to show a user

from __future__ import annotations

from typing import Any, Iterable

from gateway.constants import SYSTEM_OWNER


def partition_views(
    views: Iterable[dict[str, Any]], username: str
) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """Split views into (user-owned, system-owned), keeping input order.

    Views owned by anyone else are dropped.
    """
    user_views: list[dict[str, Any]] = []
    system_views: list[dict[str, Any]] = []
    for view in views:
        owner = (view.get("meta") or {}).get("owner")
        if owner == username:
            user_views.append(view)
        if owner == SYSTEM_OWNER:
            system_views.append(view)
    return user_views, system_views


def resolve_latest_view(
    views: Iterable[dict[str, Any]], username: str
) -> dict[str, Any] | None:
    """Return the view to show ``username`` by default.

    ``views`` must already be ordered by meta.timeUpdated, newest first.
    The user's newest view wins; otherwise the newest system view; otherwise None.
    """
    user_views, system_views = partition_views(views, username)
    if user_views:
        return user_views[0]
    if system_views:
        return system_views[0]
    return None
