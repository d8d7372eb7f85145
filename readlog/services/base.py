import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from readlog.errors import PersistenceError
from readlog.repository import Repository


class Service:
    def __init__(self, session: AsyncSession, logger: logging.Logger):
        self.repo = Repository(session)
        self.logger = logger

    @contextmanager
    def db_errors(self, message: str, **context) -> Iterator[None]:
        """Log any database failure in the block and re-raise it as ``PersistenceError(message)``."""
        try:
            yield
        except SQLAlchemyError:
            self.logger.exception("%s %s", message, context or "")
            raise PersistenceError(message) from None


async def soft_delete_entity(service: Service, entity, actor_id: int, label: str) -> None:
    """Record the actor in ``deleted_by``, then mark the row deleted.

    The two writes are separate persistence calls. A failed ``deleted_by``
    write is logged and the deletion still goes ahead; only a failure of the
    deletion itself is raised.
    """
    entity_id = entity.id
    audited = True
    try:
        await service.repo.update(entity, {"deleted_by": actor_id})
    except SQLAlchemyError:
        service.logger.exception("Failed to update deleted_by for %s %s", label, entity_id)
        audited = False

    with service.db_errors(f"Failed to soft delete {label}", id=entity_id):
        if not audited:
            await service.repo.session.refresh(entity)
        await service.repo.soft_delete(entity)
    service.logger.info("%s %s soft deleted by %s", label, entity_id, actor_id)
