from __future__ import annotations

from typing import Any, Generic, List, Mapping, Sequence, TypeVar

from ..db.base import BaseEntity
from ..repositories.base import BaseRepository, FindOptions, Query, Where

EntityT = TypeVar("EntityT", bound=BaseEntity)
RepositoryT = TypeVar("RepositoryT", bound=BaseRepository)


class BaseService(Generic[EntityT, RepositoryT]):
    """
    Identity-centric CRUD conveniences over a :class:`BaseRepository`.

    The service is entity-agnostic: no validation, authorization or
    transaction composition happens here.  Every ``*_or_fail`` / ``*_by_id``
    method raises :class:`~utils_api.core.exceptions.EntityNotFound` when
    nothing matches.
    """

    def __init__(self, repository: RepositoryT) -> None:
        self.repository = repository

    async def find(self, options: FindOptions | None = None) -> List[EntityT]:
        """
        Fetch every live entity matching ``options``; an empty list when none.

        >>> await user_service.find(FindOptions(where={"name": "John Doe"}))
        """
        return await self.repository.find(options)

    async def find_one(self, query: Query) -> EntityT | None:
        return await self.repository.find_one(query)

    async def find_one_or_fail(self, query: Query) -> EntityT:
        return await self.repository.find_one_or_fail(query)

    async def find_one_by_id_or_fail(self, id: int) -> EntityT:
        return await self.find_one_or_fail({"id": id})

    async def create(self, data: EntityT | Mapping[str, Any]) -> EntityT | None:
        """
        Persist ``data`` and re-read it by its assigned id so storage-computed
        fields (timestamps) are reflected in the returned entity.
        """
        created = await self.repository.create(data)
        return await self.find_one({"id": created.id})

    async def update(
        self,
        where: Where,
        data: Mapping[str, Any],
        relations: Sequence[str] | None = None,
    ) -> EntityT:
        return await self.repository.update_or_fail(where, data, relations)

    async def update_by_id(
        self,
        id: int,
        data: Mapping[str, Any],
        relations: Sequence[str] | None = None,
    ) -> EntityT:
        return await self.update({"id": id}, data, relations)

    async def delete_by_id(self, id: int) -> bool:
        return await self.repository.delete_or_fail({"id": id})

    async def restore_by_id(self, id: int) -> bool:
        return await self.repository.restore_or_fail({"id": id})

    async def count(self, where: Where | None = None) -> int:
        # Loads every match; callers with large result sets should query
        # the storage-side count instead.
        matches = await self.repository.find(FindOptions(where=where or {}))
        return len(matches)


__all__ = ["BaseService"]
