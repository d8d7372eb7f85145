"""Generic persistence operations over an ``AsyncSession``.

Every call outside ``transaction()`` commits on its own. Inside
``transaction()`` the calls only flush, and the block commits or rolls back
as a whole. Rows with ``deleted_at`` set are invisible to lookups unless
``include_deleted=True`` is passed; models without that column are
always visible.
"""

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from sqlalchemy import ColumnElement, exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from readlog.models.audit import utcnow

ModelT = TypeVar("ModelT")


class Repository:
    def __init__(self, session: AsyncSession):
        self.session = session
        self._in_transaction = False

    @staticmethod
    def _visible(model, include_deleted: bool) -> list[ColumnElement[bool]]:
        if include_deleted or not hasattr(model, "deleted_at"):
            return []
        return [model.deleted_at.is_(None)]

    async def _persist(self) -> None:
        if self._in_transaction:
            await self.session.flush()
            return
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def find_by_id(self, model: type[ModelT], pk: int, include_deleted: bool = False) -> ModelT | None:
        stmt = select(model).where(model.id == pk, *self._visible(model, include_deleted))
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def find_where(
        self,
        model: type[ModelT],
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
        include_deleted: bool = False,
    ) -> Sequence[ModelT]:
        stmt = select(model).where(*criteria, *self._visible(model, include_deleted)).order_by(*order_by)
        return (await self.session.execute(stmt)).scalars().all()

    async def exists_where(self, model, *criteria: ColumnElement[bool], include_deleted: bool = False) -> bool:
        stmt = select(exists().where(*criteria, *self._visible(model, include_deleted)))
        return bool((await self.session.execute(stmt)).scalar())

    async def create(self, obj: ModelT) -> ModelT:
        self.session.add(obj)
        await self._persist()
        await self.session.refresh(obj)
        return obj

    async def update(self, obj: ModelT, fields: dict[str, Any]) -> ModelT:
        for key, value in fields.items():
            setattr(obj, key, value)
        await self._persist()
        await self.session.refresh(obj)
        return obj

    async def soft_delete(self, obj) -> None:
        obj.deleted_at = utcnow()
        await self._persist()

    async def hard_delete(self, obj) -> None:
        await self.session.delete(obj)
        await self._persist()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        self._in_transaction = True
        try:
            yield self.session
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        finally:
            self._in_transaction = False
