# gateway/repositories/view_repository.py
# Repository for saved UI views stored as JSON documents

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass
from typing import Any, Callable

from sqlalchemy import and_, delete, insert, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from gateway.constants import SYSTEM_OWNER, VIEW_ID_ALPHABET, VIEW_ID_LENGTH
from gateway.exceptions import DatabaseError
from gateway.models.view_table import view_owner, view_table, view_time_updated
from gateway.services.latest_view import resolve_latest_view
from gateway.utils.logger import log_exception, log_info

# Errors that mean the store could not serve the call
STORAGE_ERRORS = (SQLAlchemyError, OSError)


def generate_view_id(length: int = VIEW_ID_LENGTH) -> str:
    """Generate a random alphanumeric view id."""
    return ''.join(secrets.choice(VIEW_ID_ALPHABET) for _ in range(length))


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


@dataclass
class DeleteResult:
    deleted: bool
    next_view: dict[str, Any] | None = None


def summarize_view(view: dict[str, Any]) -> dict[str, Any]:
    """Reduce a view document to its listing fields."""
    return {"id": view.get("id"), "meta": view.get("meta"), "name": view.get("name")}


def _owned_by(view_id: str, username: str):
    """Row filter for mutations: the id must match and the caller must own it."""
    return and_(view_table.c.id == view_id, view_owner == username)


class ViewRepository:
    """Repository for view persistence.

    Reads are collection-wide; update and delete are scoped to the owner.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        version: str,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[], str] = generate_view_id,
    ):
        self._session_factory = session_factory
        self._version = version
        self._clock = clock
        self._id_factory = id_factory

    async def list_views(self) -> list[dict[str, Any]]:
        """All views as {id, meta, name}, most recently updated first."""
        stmt = select(view_table.c.view).order_by(view_time_updated.desc(), view_table.c.id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                views = result.scalars().all()
        except STORAGE_ERRORS as e:
            raise self._storage_error(e, "list_views") from e
        return [summarize_view(view) for view in views]

    async def get_view(self, view_id: str) -> dict[str, Any] | None:
        """Full view document by id. Returns None if not found."""
        stmt = select(view_table.c.view).where(view_table.c.id == view_id)
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                view = result.scalar_one_or_none()
        except STORAGE_ERRORS as e:
            raise self._storage_error(e, "get_view") from e
        if view is None:
            log_info(f"ViewRepository: view not found id={view_id}")
        return view

    async def get_latest_view(self, username: str) -> dict[str, Any] | None:
        """The user's newest view, else the newest system view, else None."""
        stmt = (
            select(view_table.c.view)
            .where(or_(view_owner == username, view_owner == SYSTEM_OWNER))
            .order_by(view_time_updated.desc(), view_table.c.id)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                views = result.scalars().all()
        except STORAGE_ERRORS as e:
            raise self._storage_error(e, "get_latest_view") from e
        return resolve_latest_view(views, username)

    async def create_view(
        self, username: str, name: str, payload: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Store a new view owned by ``username``.

        Returns the stored document, or None if no row was inserted.
        """
        view_id = self._id_factory()
        now = self._clock()
        meta = {
            "owner": username,
            "timeCreated": now,
            "timeUpdated": now,
            "version": self._version,
        }
        document = {**payload, "id": view_id, "meta": meta, "name": name}

        try:
            async with self._session_factory.begin() as session:
                result = await session.execute(
                    insert(view_table).values(id=view_id, view=document)
                )
                inserted = result.rowcount
        except IntegrityError:
            log_info(f"ViewRepository: id collision, view not created id={view_id}")
            return None
        except STORAGE_ERRORS as e:
            raise self._storage_error(e, "create_view") from e

        if inserted != 1:
            log_info(f"ViewRepository: view not created id={view_id}")
            return None
        log_info(f"ViewRepository: created view id={view_id} owner={username}")
        return document

    async def update_view(
        self, username: str, view_id: str, payload: dict[str, Any]
    ) -> dict[str, Any] | None:
        """Replace the content of a view owned by ``username``.

        meta is carried forward with a fresh timeUpdated. Returns the stored
        document, or None when the view is missing or owned by someone else.
        """
        try:
            async with self._session_factory.begin() as session:
                result = await session.execute(
                    select(view_table.c.view)
                    .where(_owned_by(view_id, username))
                    .with_for_update()
                )
                current = result.scalar_one_or_none()
                if current is None:
                    log_info(f"ViewRepository: update rejected id={view_id} user={username}")
                    return None

                document = self._merge_update(view_id, current, payload)
                result = await session.execute(
                    update(view_table)
                    .where(_owned_by(view_id, username))
                    .values(view=document)
                    .returning(view_table.c.view)
                )
                stored = result.scalar_one_or_none()
        except STORAGE_ERRORS as e:
            raise self._storage_error(e, "update_view") from e

        if stored is None:
            log_info(f"ViewRepository: view not updated id={view_id} user={username}")
            return None
        log_info(f"ViewRepository: updated view id={view_id} owner={username}")
        return stored

    async def delete_view(self, username: str, view_id: str) -> DeleteResult:
        """Delete a view owned by ``username`` and resolve the user's next view."""
        try:
            async with self._session_factory.begin() as session:
                result = await session.execute(
                    delete(view_table).where(_owned_by(view_id, username))
                )
                deleted = result.rowcount
        except STORAGE_ERRORS as e:
            raise self._storage_error(e, "delete_view") from e

        if deleted != 1:
            log_info(f"ViewRepository: delete rejected id={view_id} user={username}")
            return DeleteResult(deleted=False)

        log_info(f"ViewRepository: deleted view id={view_id} owner={username}")
        next_view = await self.get_latest_view(username)
        return DeleteResult(deleted=True, next_view=next_view)

    def _merge_update(
        self, view_id: str, current: dict[str, Any], payload: dict[str, Any]
    ) -> dict[str, Any]:
        meta = dict(current.get("meta") or {})
        # timeUpdated never moves backwards, even if the clock does
        meta["timeUpdated"] = max(self._clock(), meta.get("timeUpdated", 0))

        document = {k: v for k, v in payload.items() if k not in ("id", "meta")}
        document.setdefault("name", current.get("name"))
        document["id"] = view_id
        document["meta"] = meta
        return document

    def _storage_error(self, e: Exception, operation: str) -> DatabaseError:
        log_exception(e, f"ViewRepository.{operation}")
        return DatabaseError(
            message="View storage is unavailable",
            details={"operation": operation},
        )
