"""Repository abstractions for domain services."""

from __future__ import annotations

from typing import Generic, Sequence, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

ModelT = TypeVar("ModelT")


class AsyncRepository(Generic[ModelT]):
    """Base repository exposing the SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        if session is None:
            raise TypeError(f"{type(self).__name__} requires an AsyncSession")
        self._session = session

    @property
    def session(self) -> AsyncSession:
        return self._session

    def detach(self, instances: Sequence[ModelT]) -> list[ModelT]:
        """Remove loaded rows from the unit of work so edits never flush implicitly."""
        detached = list(instances)
        for instance in detached:
            self.session.expunge(instance)
        return detached
