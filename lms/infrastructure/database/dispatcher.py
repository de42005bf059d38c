"""Query dispatcher: executes an already-isolated Operation against an AsyncSession."""

from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from sqlalchemy import and_, delete, func, inspect, not_, or_, select, true, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from lms.infrastructure.database import models  # noqa: F401  registers mappers
from lms.infrastructure.database.exceptions import (
    InvalidPredicateError,
    RecordNotFoundError,
    UnknownFieldError,
    UnknownModelError,
)
from lms.infrastructure.database.session import Base
from lms.isolation.operation import Operation, Verb

_OPERATORS: Dict[str, Callable[[Any, Any], ColumnElement]] = {
    "equals": lambda c, v: c.is_(None) if v is None else c == v,
    "not": lambda c, v: c.is_not(None) if v is None else c != v,
    "in": lambda c, v: c.in_(list(v)),
    "not_in": lambda c, v: c.not_in(list(v)),
    "gt": lambda c, v: c > v,
    "gte": lambda c, v: c >= v,
    "lt": lambda c, v: c < v,
    "lte": lambda c, v: c <= v,
    "contains": lambda c, v: c.contains(v),
    "startswith": lambda c, v: c.startswith(v),
}

_AGGREGATES = {
    "sum": func.sum,
    "avg": func.avg,
    "min": func.min,
    "max": func.max,
}


class ModelRegistry:
    """Maps model names (mapped class names) to declarative classes and their columns."""

    def __init__(self, base=Base) -> None:
        self._models = {mapper.class_.__name__: mapper.class_ for mapper in base.registry.mappers}

    def resolve(self, name: str) -> type:
        try:
            return self._models[name]
        except KeyError:
            raise UnknownModelError(f"Unknown model '{name}'") from None

    def column(self, model: type, field: str):
        if field not in inspect(model).column_attrs.keys():
            raise UnknownFieldError(f"Model '{model.__name__}' has no field '{field}'")
        return getattr(model, field)

    def names(self) -> List[str]:
        return sorted(self._models)


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, Mapping):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    raise InvalidPredicateError(f"Combinator expects a predicate or a list of predicates, got {type(value).__name__}")


class PredicateBuilder:
    """Translates the mapping predicate grammar into a SQLAlchemy boolean clause."""

    def __init__(self, registry: ModelRegistry) -> None:
        self._registry = registry

    def build(self, model: type, where: Optional[Mapping[str, Any]]) -> ColumnElement:
        if not where:
            return true()
        if not isinstance(where, Mapping):
            raise InvalidPredicateError(f"Predicate must be a mapping, got {type(where).__name__}")
        clauses = []
        for key, value in where.items():
            if key == "AND":
                clauses.append(and_(true(), *[self.build(model, p) for p in _as_list(value)]))
            elif key == "OR":
                parts = [self.build(model, p) for p in _as_list(value)]
                if not parts:
                    raise InvalidPredicateError("OR requires at least one predicate")
                clauses.append(or_(*parts))
            elif key == "NOT":
                clauses.append(not_(and_(true(), *[self.build(model, p) for p in _as_list(value)])))
            else:
                clauses.append(self._field(self._registry.column(model, key), value))
        return and_(*clauses)

    def _field(self, column, value: Any) -> ColumnElement:
        if isinstance(value, Mapping):
            parts = []
            for op, operand in value.items():
                builder = _OPERATORS.get(op)
                if builder is None:
                    raise InvalidPredicateError(f"Unsupported operator '{op}'")
                parts.append(builder(column, operand))
            return and_(true(), *parts)
        if isinstance(value, (list, tuple, set, frozenset)):
            return column.in_(list(value))
        if value is None:
            return column.is_(None)
        return column == value


class SqlAlchemyDispatcher:
    """
    Executes one Operation. Knows nothing about tenants or soft-delete: by the time an
    operation gets here the isolation pipeline has already rewritten it.
    Mutations are flushed, not committed; the session owner decides the transaction boundary.
    """

    def __init__(self, session: AsyncSession, registry: Optional[ModelRegistry] = None) -> None:
        self._session = session
        self._registry = registry or ModelRegistry()
        self._predicates = PredicateBuilder(self._registry)
        self._handlers: Dict[Verb, Callable[[type, Operation], Awaitable[Any]]] = {
            Verb.FIND_UNIQUE: self._find_first,
            Verb.FIND_FIRST: self._find_first,
            Verb.FIND_MANY: self._find_many,
            Verb.COUNT: self._count,
            Verb.AGGREGATE: self._aggregate,
            Verb.GROUP_BY: self._group_by,
            Verb.CREATE: self._create,
            Verb.UPDATE: self._update,
            Verb.UPDATE_MANY: self._update_many,
            Verb.DELETE: self._delete,
            Verb.DELETE_MANY: self._delete_many,
        }

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def dispatch(self, operation: Operation) -> Any:
        model = self._registry.resolve(operation.model)
        return await self._handlers[operation.verb](model, operation)

    # ---------- reads ----------

    async def _find_first(self, model: type, operation: Operation):
        stmt = self._ordered(
            select(model).where(self._predicates.build(model, operation.where)),
            model,
            operation.options,
        ).limit(1)
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def _find_many(self, model: type, operation: Operation) -> list:
        stmt = self._ordered(
            select(model).where(self._predicates.build(model, operation.where)),
            model,
            operation.options,
        )
        skip = operation.options.get("skip")
        take = operation.options.get("take")
        if skip:
            stmt = stmt.offset(skip)
        if take is not None:
            stmt = stmt.limit(take)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def _count(self, model: type, operation: Operation) -> int:
        stmt = select(func.count()).select_from(model).where(
            self._predicates.build(model, operation.where)
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def _aggregate(self, model: type, operation: Operation) -> Dict[str, Any]:
        columns = []
        if operation.options.get("count"):
            columns.append(func.count().label("count"))
        for name, fn in _AGGREGATES.items():
            for field in operation.options.get(name, ()):
                columns.append(fn(self._registry.column(model, field)).label(f"{name}__{field}"))
        if not columns:
            raise InvalidPredicateError("aggregate requires at least one of count, sum, avg, min, max")

        stmt = select(*columns).select_from(model).where(
            self._predicates.build(model, operation.where)
        )
        row = (await self._session.execute(stmt)).mappings().one()

        out: Dict[str, Any] = {}
        for label, value in row.items():
            if label == "count":
                out["count"] = int(value)
            else:
                name, field = label.split("__", 1)
                out.setdefault(name, {})[field] = value
        return out

    async def _group_by(self, model: type, operation: Operation) -> List[Dict[str, Any]]:
        by = operation.options.get("by") or []
        if not by:
            raise InvalidPredicateError("group_by requires at least one 'by' field")
        by_columns = [self._registry.column(model, field) for field in by]
        stmt = (
            select(*by_columns, func.count().label("count"))
            .select_from(model)
            .where(self._predicates.build(model, operation.where))
            .group_by(*by_columns)
            .order_by(*by_columns)
        )
        result = await self._session.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    # ---------- writes ----------

    async def _create(self, model: type, operation: Operation):
        data = self._checked_payload(model, operation.data)
        instance = model(**data)
        self._session.add(instance)
        await self._session.flush()
        await self._session.refresh(instance)
        return instance

    async def _update(self, model: type, operation: Operation):
        data = self._checked_payload(model, operation.data)
        instance = await self._find_first(model, operation)
        if instance is None:
            raise RecordNotFoundError(f"No {model.__name__} matches {dict(operation.where or {})}")
        for field, value in data.items():
            setattr(instance, field, value)
        await self._session.flush()
        await self._session.refresh(instance)
        return instance

    async def _update_many(self, model: type, operation: Operation) -> Dict[str, int]:
        data = self._checked_payload(model, operation.data)
        stmt = (
            update(model)
            .where(self._predicates.build(model, operation.where))
            .values(**data)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return {"count": result.rowcount}

    async def _delete(self, model: type, operation: Operation):
        instance = await self._find_first(model, operation)
        if instance is None:
            raise RecordNotFoundError(f"No {model.__name__} matches {dict(operation.where or {})}")
        await self._session.delete(instance)
        await self._session.flush()
        return instance

    async def _delete_many(self, model: type, operation: Operation) -> Dict[str, int]:
        stmt = (
            delete(model)
            .where(self._predicates.build(model, operation.where))
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return {"count": result.rowcount}

    # ---------- helpers ----------

    def _checked_payload(self, model: type, data: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        payload = dict(data or {})
        for field in payload:
            self._registry.column(model, field)
        return payload

    def _ordered(self, stmt, model: type, options: Mapping[str, Any]):
        order_by = options.get("order_by")
        if not order_by:
            return stmt
        for spec in _as_list(order_by):
            for field, direction in spec.items():
                column = self._registry.column(model, field)
                if direction == "asc":
                    stmt = stmt.order_by(column.asc())
                elif direction == "desc":
                    stmt = stmt.order_by(column.desc())
                else:
                    raise InvalidPredicateError(f"Unsupported sort direction '{direction}'")
        return stmt
