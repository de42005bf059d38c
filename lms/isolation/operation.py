"""Operation descriptor: one pending database call, as an immutable typed command."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional


class Verb(str, Enum):
    """Closed set of database verbs understood by the interceptors and the dispatcher."""

    FIND_UNIQUE = "find_unique"
    FIND_FIRST = "find_first"
    FIND_MANY = "find_many"
    COUNT = "count"
    AGGREGATE = "aggregate"
    GROUP_BY = "group_by"
    CREATE = "create"
    UPDATE = "update"
    UPDATE_MANY = "update_many"
    DELETE = "delete"
    DELETE_MANY = "delete_many"


READ_VERBS: FrozenSet[Verb] = frozenset(
    {
        Verb.FIND_UNIQUE,
        Verb.FIND_FIRST,
        Verb.FIND_MANY,
        Verb.COUNT,
        Verb.AGGREGATE,
        Verb.GROUP_BY,
    }
)

# Writes that carry a `where` predicate
FILTERED_WRITE_VERBS: FrozenSet[Verb] = frozenset(
    {Verb.UPDATE, Verb.UPDATE_MANY, Verb.DELETE, Verb.DELETE_MANY}
)

CREATE_VERBS: FrozenSet[Verb] = frozenset({Verb.CREATE})

# delete verb -> update verb it becomes under soft-delete
DELETE_REWRITES: Dict[Verb, Verb] = {
    Verb.DELETE: Verb.UPDATE,
    Verb.DELETE_MANY: Verb.UPDATE_MANY,
}


@dataclass(frozen=True)
class Operation:
    """
    A pending call against one model. Interceptors never mutate an Operation;
    they return a new one via replace(). Filter predicates use the mapping
    grammar understood by the dispatcher (equality, operator dicts, AND/OR/NOT).
    """

    model: str
    verb: Verb
    where: Optional[Mapping[str, Any]] = None
    data: Optional[Mapping[str, Any]] = None
    options: Mapping[str, Any] = field(default_factory=dict)

    def replace(self, **changes: Any) -> "Operation":
        return replace(self, **changes)

    @property
    def is_read(self) -> bool:
        return self.verb in READ_VERBS


def with_default(bag: Optional[Mapping[str, Any]], key: str, value: Any) -> Mapping[str, Any]:
    """
    Return bag with key=value added unless key is already a top-level entry.
    Presence is checked shallowly: a key mentioned only inside AND/OR/NOT does not count.
    Raises TypeError when bag is not a mapping.
    """
    if bag is None:
        return {key: value}
    if not isinstance(bag, Mapping):
        raise TypeError(f"Expected a mapping, got {type(bag).__name__}")
    if key in bag:
        return bag
    return {**bag, key: value}


def merged(bag: Optional[Mapping[str, Any]], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a new dict of bag updated with overrides (overrides win). Raises TypeError for non-mappings."""
    if bag is None:
        return dict(overrides)
    if not isinstance(bag, Mapping):
        raise TypeError(f"Expected a mapping, got {type(bag).__name__}")
    return {**bag, **overrides}
