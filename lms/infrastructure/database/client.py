"""Isolated database client. The single entry point services use to reach the store."""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from sqlalchemy.ext.asyncio import AsyncSession

from lms.core.context import IsolationContext
from lms.infrastructure.database.dispatcher import ModelRegistry, SqlAlchemyDispatcher
from lms.isolation.operation import Operation, Verb
from lms.isolation.pipeline import IsolationPipeline

Predicate = Mapping[str, Any]
OrderBy = Union[Mapping[str, str], Sequence[Mapping[str, str]]]


class IsolatedDatabase:
    """
    Every call becomes an Operation, is rewritten by the isolation pipeline
    (soft-delete, then tenant scoping), and only then reaches the dispatcher.
    """

    def __init__(
        self,
        session: AsyncSession,
        pipeline: IsolationPipeline,
        registry: Optional[ModelRegistry] = None,
    ) -> None:
        self._session = session
        self._pipeline = pipeline
        self._dispatcher = SqlAlchemyDispatcher(session, registry)

    @property
    def pipeline(self) -> IsolationPipeline:
        return self._pipeline

    async def execute(self, operation: Operation, context: Optional[IsolationContext] = None) -> Any:
        rewritten = self._pipeline.rewrite(operation, context)
        return await self._dispatcher.dispatch(rewritten)

    def model(self, name: str) -> "ModelDelegate":
        return ModelDelegate(self, name)

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()


class ModelDelegate:
    """Per-model accessor: db.model("Course").find_many(where=...)."""

    def __init__(self, db: IsolatedDatabase, model: str) -> None:
        self._db = db
        self._model = model

    async def _run(
        self,
        verb: Verb,
        where: Optional[Predicate] = None,
        data: Optional[Mapping[str, Any]] = None,
        **options: Any,
    ) -> Any:
        options = {k: v for k, v in options.items() if v is not None}
        return await self._db.execute(
            Operation(model=self._model, verb=verb, where=where, data=data, options=options)
        )

    async def find_unique(self, where: Predicate):
        return await self._run(Verb.FIND_UNIQUE, where)

    async def find_first(self, where: Optional[Predicate] = None, order_by: Optional[OrderBy] = None):
        return await self._run(Verb.FIND_FIRST, where, order_by=order_by)

    async def find_many(
        self,
        where: Optional[Predicate] = None,
        order_by: Optional[OrderBy] = None,
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> list:
        return await self._run(Verb.FIND_MANY, where, order_by=order_by, skip=skip, take=take)

    async def count(self, where: Optional[Predicate] = None) -> int:
        return await self._run(Verb.COUNT, where)

    async def aggregate(
        self,
        where: Optional[Predicate] = None,
        *,
        count: bool = False,
        sum: Optional[List[str]] = None,
        avg: Optional[List[str]] = None,
        min: Optional[List[str]] = None,
        max: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        return await self._run(
            Verb.AGGREGATE, where, count=count or None, sum=sum, avg=avg, min=min, max=max
        )

    async def group_by(self, by: List[str], where: Optional[Predicate] = None) -> List[Dict[str, Any]]:
        return await self._run(Verb.GROUP_BY, where, by=by)

    async def create(self, data: Mapping[str, Any]):
        return await self._run(Verb.CREATE, data=data)

    async def update(self, where: Predicate, data: Mapping[str, Any]):
        return await self._run(Verb.UPDATE, where, data)

    async def update_many(self, where: Optional[Predicate], data: Mapping[str, Any]) -> Dict[str, int]:
        return await self._run(Verb.UPDATE_MANY, where, data)

    async def delete(self, where: Predicate, data: Optional[Mapping[str, Any]] = None):
        """Soft-deletes for ordinary models; `data` is merged into the deletion update."""
        return await self._run(Verb.DELETE, where, data)

    async def delete_many(
        self, where: Optional[Predicate] = None, data: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, int]:
        return await self._run(Verb.DELETE_MANY, where, data)
