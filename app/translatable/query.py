"""Query predicate descriptions for locale filtering.

Drivers never run queries. They describe the predicate ("this JSON path is
not null", or an OR of such predicates) and the host's query builder turns
the description into SQL through the QueryBuilder protocol.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Protocol, Sequence, Tuple, Union, runtime_checkable

from translatable.models import PATH_SEPARATOR


@runtime_checkable
class QueryBuilder(Protocol):
    """Subset of a host query builder that locale filters need."""

    def where_not_null(self, column: str) -> Any:
        """Constrain to rows where the column path is not null."""
        ...

    def where_any(self, predicates: Sequence["Predicate"]) -> Any:
        """Constrain to rows matching at least one predicate."""
        ...


@dataclass(frozen=True)
class NotNull:
    """Column path existence predicate.

    Attributes:
        path: Column name followed by JSON keys, e.g. ("extra", "fr", "title").
    """

    path: Tuple[str, ...]

    @property
    def column(self) -> str:
        """Path in arrow notation (e.g., "extra->fr->title")."""
        return PATH_SEPARATOR.join(self.path)

    def apply(self, query: QueryBuilder) -> Any:
        return query.where_not_null(self.column)

    def render(self) -> str:
        return f"{self.column} IS NOT NULL"


@dataclass(frozen=True)
class AnyOf:
    """OR-composition of predicates."""

    predicates: Tuple["Predicate", ...]

    def apply(self, query: QueryBuilder) -> Any:
        return query.where_any(self.predicates)

    def render(self) -> str:
        if not self.predicates:
            return "FALSE"
        return "(" + " OR ".join(p.render() for p in self.predicates) + ")"


Predicate = Union[NotNull, AnyOf]


def not_null(*path: str) -> NotNull:
    return NotNull(tuple(path))


def any_of(predicates: Iterable[Predicate]) -> AnyOf:
    return AnyOf(tuple(predicates))
