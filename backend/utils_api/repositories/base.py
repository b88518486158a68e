"""
Generic, entity-parameterised data access over SQLAlchemy.

Filters are plain mappings of attribute name to value.  Keys may be given in
snake case or camel case (``deletedAt``); ``None`` matches ``IS NULL`` and a
list/tuple/set matches ``IN``.  Soft-deleted rows are hidden from every lookup
unless :class:`FindOptions` asks for them with ``with_deleted=True``.

Each operation commits on its own.  Multi-step operations such as
``update`` (write, then re-read) are therefore not atomic with respect to
concurrent writers, and ``find_or_create`` can create duplicates when two
callers race on the same missing filter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Type, TypeVar, Union

from sqlalchemy import Select, inspect, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement

from ..core.exceptions import EntityNotFound
from ..core.security import now_utc
from ..db.base import BaseEntity
from ..db.naming import snake_case

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=BaseEntity)

Where = Mapping[str, Any]


@dataclass
class FindOptions:
    where: Where = field(default_factory=dict)
    relations: Sequence[str] = ()
    # Attribute names, prefix with "-" for descending order.
    order_by: Sequence[str] = ()
    skip: Optional[int] = None
    take: Optional[int] = None
    with_deleted: bool = False


@dataclass(frozen=True)
class UpdateResult:
    affected: Optional[int]

    @property
    def found(self) -> bool:
        return bool(self.affected)


Query = Union[Where, FindOptions]


class BaseRepository(Generic[EntityT]):
    def __init__(self, session: AsyncSession, entity_class: Type[EntityT]) -> None:
        self.session = session
        self.entity_class = entity_class
        self._mapper = inspect(entity_class)

    @property
    def entity_name(self) -> str:
        return self.entity_class.__name__

    async def create(self, data: EntityT | Mapping[str, Any]) -> EntityT:
        entity = data if isinstance(data, self.entity_class) else self._build(data)
        self.session.add(entity)
        await self.session.commit()
        await self.session.refresh(entity)
        return entity

    async def find_or_create(self, where: Query, data: EntityT | Mapping[str, Any]) -> EntityT:
        entity = await self.find_one(where)
        if entity is not None:
            return entity
        return await self.create(data)

    async def find(self, options: FindOptions | None = None) -> List[EntityT]:
        stmt = self._select(options or FindOptions())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_one(self, query: Query) -> EntityT | None:
        options = self._as_options(query)
        stmt = self._select(options).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def find_one_or_fail(self, query: Query) -> EntityT:
        entity = await self.find_one(query)
        return self._ensure_found(entity)

    async def update(
        self,
        where: Where,
        patch: Mapping[str, Any],
        relations: Sequence[str] | None = None,
    ) -> EntityT | None:
        values = self._resolve_values(patch)
        if not values:
            raise ValueError(f"Update values are missing for {self.entity_name}")

        stmt = (
            update(self.entity_class)
            .where(*self._conditions(where), self._live())
            .values(values)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.commit()
        return await self.find_one(FindOptions(where=where, relations=relations or ()))

    async def update_or_fail(
        self,
        where: Where,
        patch: Mapping[str, Any],
        relations: Sequence[str] | None = None,
    ) -> EntityT:
        updated = await self.update(where, patch, relations)
        return self._ensure_found(updated)

    async def soft_delete(self, where: Where) -> UpdateResult:
        return await self._stamp_deleted(where, deleted=True)

    async def delete_or_fail(self, where: Where) -> bool:
        result = await self.soft_delete(where)
        self._ensure_found(result)
        return True

    async def restore(self, where: Where) -> UpdateResult:
        return await self._stamp_deleted(where, deleted=False)

    async def restore_or_fail(self, where: Where) -> bool:
        result = await self.restore(where)
        self._ensure_found(result)
        return True

    async def _stamp_deleted(self, where: Where, *, deleted: bool) -> UpdateResult:
        deleted_at = self.entity_class.deleted_at
        stmt = (
            update(self.entity_class)
            .where(
                *self._conditions(where),
                deleted_at.is_(None) if deleted else deleted_at.is_not(None),
            )
            .values(deleted_at=now_utc() if deleted else None)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return UpdateResult(affected=result.rowcount)

    def _ensure_found(self, result: Any) -> Any:
        if result is None or (isinstance(result, UpdateResult) and not result.found):
            logger.debug("%s lookup matched nothing", self.entity_name)
            raise EntityNotFound(self.entity_name)
        return result

    def _build(self, data: Mapping[str, Any]) -> EntityT:
        return self.entity_class(**self._resolve_values(data))

    def _as_options(self, query: Query) -> FindOptions:
        if isinstance(query, FindOptions):
            return query
        return FindOptions(where=query)

    def _select(self, options: FindOptions) -> Select:
        stmt = select(self.entity_class).where(*self._conditions(options.where))
        if not options.with_deleted:
            stmt = stmt.where(self._live())
        for name in options.relations:
            stmt = stmt.options(selectinload(self._relationship(name)))
        for name in options.order_by:
            descending = name.startswith("-")
            column = self._column(name.lstrip("-"))
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        if options.skip is not None:
            stmt = stmt.offset(options.skip)
        if options.take is not None:
            stmt = stmt.limit(options.take)
        # Bulk updates bypass the identity map, so reads must overwrite it.
        return stmt.execution_options(populate_existing=True)

    def _live(self) -> ColumnElement[bool]:
        return self.entity_class.deleted_at.is_(None)

    def _conditions(self, where: Where) -> List[ColumnElement[bool]]:
        clauses: List[ColumnElement[bool]] = []
        for key, value in where.items():
            column = self._column(key)
            if value is None:
                clauses.append(column.is_(None))
            elif isinstance(value, (list, tuple, set, frozenset)):
                clauses.append(column.in_(list(value)))
            else:
                clauses.append(column == value)
        return clauses

    def _resolve_values(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        return {self._attribute_name(key): value for key, value in data.items()}

    def _attribute_name(self, key: str) -> str:
        name = snake_case(key)
        if name not in self._mapper.column_attrs:
            raise ValueError(f"{self.entity_name} has no attribute {key!r}")
        return name

    def _column(self, key: str) -> Any:
        return getattr(self.entity_class, self._attribute_name(key))

    def _relationship(self, key: str) -> Any:
        name = snake_case(key)
        if name not in self._mapper.relationships:
            raise ValueError(f"{self.entity_name} has no relation {key!r}")
        return getattr(self.entity_class, name)


__all__ = ["BaseRepository", "FindOptions", "UpdateResult"]
