"""Predicate construction for the event listing queries.

A Predicate is an ordered list of SQL condition templates plus the values
bound to them. Templates are fixed strings defined in this module; request
values only ever travel as bound parameters. Each value-bearing condition
gets the next positional bind name (``p0``, ``p1``, ...), so building the same
descriptor twice yields identical conditions and parameters.

Templates reference the table aliases used by the executor: ``e`` (events),
``et`` (event_types) and ``l`` (locations).
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Tuple

from sqlalchemy import bindparam, text
from sqlalchemy.sql.elements import TextClause

from ..config.settings import SEARCH_LANGUAGE
from ..models import EventStatus
from ..models.event import search_document
from ..utils.timezone import ensure_oslo_timezone
from .filters import FilterDescriptor

@dataclass(frozen=True)
class Predicate:
    """Conditions and their positionally aligned parameters."""
    conditions: Tuple[str, ...]
    params: Tuple[Any, ...]

    @staticmethod
    def param_name(index: int) -> str:
        return f"p{index}"

    @property
    def where_clause(self) -> str:
        return " AND ".join(self.conditions)

    def to_sql(self) -> TextClause:
        """The conditions as a single bound SQL clause."""
        binds = [
            bindparam(self.param_name(i), value)
            for i, value in enumerate(self.params)
        ]
        return text(self.where_clause).bindparams(*binds)

    def paginated(self, limit: int, offset: int) -> "PagedPredicate":
        """Row-fetch variant with limit and offset appended."""
        return PagedPredicate(self.conditions, self.params + (limit, offset))

@dataclass(frozen=True)
class PagedPredicate(Predicate):
    """A Predicate whose last two parameters are the page limit and offset."""

    @property
    def filter(self) -> Predicate:
        """The filtering part, identical to the count predicate."""
        return Predicate(self.conditions, self.params[:-2])

    def to_sql(self) -> TextClause:
        """WHERE clause only; limit and offset are applied by the executor."""
        return self.filter.to_sql()

    @property
    def limit(self) -> int:
        return self.params[-2]

    @property
    def offset(self) -> int:
        return self.params[-1]

    def paginated(self, limit: int, offset: int) -> "PagedPredicate":
        return self.filter.paginated(limit, offset)

class PredicateBuilder:
    """Accumulates conditions, numbering bind parameters in insertion order."""

    def __init__(self):
        self._conditions: List[str] = []
        self._params: List[Any] = []

    def add(self, template: str, value: Any) -> "PredicateBuilder":
        """
        Append a condition bound to one value.

        ``template`` uses ``{param}`` where the bind placeholder goes; it may
        appear more than once but is always bound to the same value.
        """
        name = Predicate.param_name(len(self._params))
        self._conditions.append(template.format(param=f":{name}"))
        self._params.append(value)
        return self

    def build(self) -> Predicate:
        return Predicate(tuple(self._conditions), tuple(self._params))

def _escape_like(value: str) -> str:
    return value.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')

def add_search_condition(
    builder: PredicateBuilder,
    term: str,
    dialect: str,
    language: str
) -> None:
    """Full-text search on title and description."""
    if dialect == 'postgresql':
        # Interpolated into the SQL text, so it must be a plain configuration name
        if not language.isidentifier():
            raise ValueError(f"Invalid text search configuration: {language!r}")
        document = search_document(language, 'e')
        builder.add(f"{document} @@ plainto_tsquery('{language}', {{param}})", term)
    else:
        builder.add(
            "(lower(e.title) LIKE {param} ESCAPE '\\' "
            "OR lower(coalesce(e.description, '')) LIKE {param} ESCAPE '\\')",
            f"%{_escape_like(term.lower())}%",
        )

def build_predicate(
    descriptor: FilterDescriptor,
    now: datetime,
    dialect: str = 'postgresql',
    search_language: str = SEARCH_LANGUAGE
) -> Predicate:
    """
    Convert a FilterDescriptor into the predicate shared by the count and row queries.

    The three visibility conditions always come first so their parameter
    positions never move. Optional filters follow in a fixed order: city,
    event type, end date, featured, search.

    Args:
        descriptor: Normalized request filters
        now: Current time; the lower start-date bound when the caller gave none
        dialect: SQL dialect name, selects the search implementation
        search_language: Postgres text search configuration

    Returns:
        Predicate: Conditions and parameters without pagination
    """
    lower_bound = descriptor.start_date or now

    builder = PredicateBuilder()
    builder.add("e.status = {param}", EventStatus.APPROVED.value)
    builder.add("e.is_cancelled = {param}", False)
    builder.add("e.start_date >= {param}", ensure_oslo_timezone(lower_bound))

    if descriptor.city:
        builder.add("lower(l.city) = lower({param})", descriptor.city)

    if descriptor.event_type:
        builder.add("et.slug = {param}", descriptor.event_type)

    if descriptor.end_date:
        builder.add("e.start_date <= {param}", ensure_oslo_timezone(descriptor.end_date))

    if descriptor.featured_only:
        builder.add("e.is_featured = {param}", True)

    if descriptor.search:
        add_search_condition(builder, descriptor.search, dialect, search_language)

    return builder.build()
