# src/search_criteria/base/query.py
import logging
from enum import Enum
from typing import List, Optional, Type, TypeVar, Union

from .criteria import Criteria, MatchAllCriteria, StringCriteria
from .exceptions import InvalidArgumentError, UnsupportedOperationError
from .field import Field, to_field
from .sort import DEFAULT_PAGE_SIZE, PageRequest, Sort

# --- Setup Logging ---
log = logging.getLogger(__name__)

DEFAULT_FACET_LIMIT = 10
DEFAULT_FACET_MIN_COUNT = 1

Q = TypeVar("Q", bound="Query")


# --- Query Envelope ---
class Query:
    """
    Wraps a root criteria together with pagination, sort, filter queries and
    projection fields. Builder methods return ``self`` for chaining.
    """

    _criteria: Optional[Criteria]
    _page_request: Optional[PageRequest]
    _sort: Optional[Sort]
    _filter_queries: List["Query"]
    _projection_on_fields: List[Field]

    def __init__(
        self,
        criteria: Optional[Criteria] = None,
        page_request: Optional[PageRequest] = None,
    ):
        self._criteria = None
        self._page_request = None
        self._sort = None
        self._filter_queries = []
        self._projection_on_fields = []
        if criteria is not None:
            self.add_criteria(criteria)
        if page_request is not None:
            self.set_page_request(page_request)

    @classmethod
    def from_query(cls: Type[Q], source: Optional["Query"]) -> Optional[Q]:
        """
        Copies criteria, filter queries, projection and sort of ``source`` into a
        new query. Pagination is not carried over, so the copy can serve as a
        count-only query.
        """
        if source is None:
            return None
        query = cls()
        query._copy_from(source)
        log.debug(f"Derived {type(query).__name__} from {source!r}")
        return query

    def _copy_from(self, source: "Query") -> None:
        self._criteria = source.criteria
        self._filter_queries.extend(source.filter_queries)
        self._projection_on_fields.extend(source.projection_on_fields)
        self.add_sort(source.sort)

    # --- Criteria ---
    @property
    def criteria(self) -> Optional[Criteria]:
        return self._criteria

    def add_criteria(self, criteria: Criteria) -> "Query":
        """Sets the root criteria, or ANDs ``criteria`` into the existing one."""
        if criteria is None:
            raise InvalidArgumentError("Cannot add None criteria.")
        if not isinstance(criteria, Criteria):
            raise InvalidArgumentError(
                f"Expected Criteria, got {type(criteria).__name__}"
            )
        if criteria.field is None and not isinstance(
            criteria, (StringCriteria, MatchAllCriteria)
        ):
            raise InvalidArgumentError("Cannot add criteria for None field.")

        if self._criteria is None:
            self._criteria = criteria
        else:
            self._criteria.and_(criteria)
        return self

    # --- Pagination & Sort ---
    @property
    def page_request(self) -> Optional[PageRequest]:
        return self._page_request

    @property
    def offset(self) -> int:
        return self._page_request.offset if self._page_request else 0

    @property
    def limit(self) -> int:
        return self._page_request.size if self._page_request else DEFAULT_PAGE_SIZE

    def set_page_request(self, page_request: PageRequest) -> "Query":
        """Replaces pagination and merges the page request's sort into this query's sort."""
        if page_request is None:
            raise InvalidArgumentError("Page request must not be None.")
        self._page_request = page_request
        return self.add_sort(page_request.sort)

    @property
    def sort(self) -> Optional[Sort]:
        return self._sort

    def add_sort(self, sort: Optional[Sort]) -> "Query":
        """Appends ``sort`` to the accumulated sort; None is ignored."""
        if sort is None:
            return self
        self._sort = sort if self._sort is None else self._sort.and_(sort)
        log.debug(f"Accumulated sort is now {self._sort!r}")
        return self

    # --- Filter queries ---
    @property
    def filter_queries(self) -> List["Query"]:
        return list(self._filter_queries)

    def add_filter_query(self, filter_query: "Query") -> "Query":
        if filter_query is None:
            raise InvalidArgumentError("Filter query must not be None.")
        self._filter_queries.append(filter_query)
        return self

    # --- Projection ---
    @property
    def projection_on_fields(self) -> List[Field]:
        return list(self._projection_on_fields)

    def add_projection_on_field(self, field: Union[str, Field]) -> "Query":
        if field is None:
            raise InvalidArgumentError("Field for projection must not be None.")
        self._projection_on_fields.append(to_field(field))
        return self

    def add_projection_on_fields(self, *fields: Union[str, Field]) -> "Query":
        if not fields:
            raise InvalidArgumentError("Cannot add projection on None/empty field list.")
        for field in fields:
            self.add_projection_on_field(field)
        return self

    # --- Grouping ---
    def add_group_by_field(self, field: Union[str, Field]) -> "Query":
        raise UnsupportedOperationError("Grouping is not implemented yet.")

    def __repr__(self) -> str:
        parts = [f"criteria={self._criteria!r}"]
        if self._page_request is not None:
            parts.append(f"offset={self.offset!r}")
            parts.append(f"limit={self.limit!r}")
        if self._sort is not None:
            parts.append(f"sort={self._sort!r}")
        if self._filter_queries:
            parts.append(f"filter_queries={len(self._filter_queries)}")
        if self._projection_on_fields:
            parts.append(
                f"projection={[f.name for f in self._projection_on_fields]!r}"
            )
        return f"{type(self).__name__}({', '.join(parts)})"


class FilterQuery(Query):
    """A query added to another query only for its criteria, as a non-scoring filter."""


# --- Facets ---
class FacetSort(Enum):
    COUNT = "count"
    TERM = "term"


class FacetOptions:
    """Fields to aggregate on, with a per-field bucket limit and sort mode."""

    def __init__(self, *fields: Union[str, Field]):
        if not fields:
            raise InvalidArgumentError("Facet options require at least one field.")
        self._facet_on_fields: List[Field] = []
        self._facet_limit = DEFAULT_FACET_LIMIT
        self._facet_sort = FacetSort.COUNT
        for field in fields:
            self.add_facet_on_field(field)

    def add_facet_on_field(self, field: Union[str, Field]) -> "FacetOptions":
        if field is None:
            raise InvalidArgumentError("Cannot facet on None field.")
        self._facet_on_fields.append(to_field(field))
        return self

    @property
    def facet_on_fields(self) -> List[Field]:
        return list(self._facet_on_fields)

    def has_fields(self) -> bool:
        return bool(self._facet_on_fields)

    @property
    def facet_limit(self) -> int:
        return self._facet_limit

    def set_facet_limit(self, rows_to_return: int) -> "FacetOptions":
        """Sets the number of buckets per field; values below 1 are raised to 1."""
        if not isinstance(rows_to_return, int) or isinstance(rows_to_return, bool):
            raise InvalidArgumentError(
                f"Facet limit must be an integer, got {rows_to_return!r}"
            )
        self._facet_limit = max(1, rows_to_return)
        return self

    @property
    def facet_sort(self) -> FacetSort:
        return self._facet_sort

    def set_facet_sort(self, facet_sort: FacetSort) -> "FacetOptions":
        if facet_sort is None:
            raise InvalidArgumentError("FacetSort must not be None.")
        if not isinstance(facet_sort, FacetSort):
            raise InvalidArgumentError(f"Expected FacetSort, got {facet_sort!r}")
        self._facet_sort = facet_sort
        return self

    @property
    def facet_min_count(self) -> int:
        return DEFAULT_FACET_MIN_COUNT

    def set_facet_min_count(self, min_count: int) -> "FacetOptions":
        raise UnsupportedOperationError("Overriding the facet min count is not supported.")

    @property
    def page_request(self) -> PageRequest:
        return PageRequest(0, self._facet_limit)

    def set_page_request(self, page_request: PageRequest) -> "FacetOptions":
        raise UnsupportedOperationError("Paging through facets is not supported.")

    def __repr__(self) -> str:
        return (
            f"FacetOptions(fields={[f.name for f in self._facet_on_fields]!r}, "
            f"limit={self._facet_limit!r}, sort={self._facet_sort.name})"
        )


class FacetQuery(Query):
    """A query that additionally aggregates on the fields of its facet options."""

    _facet_options: Optional[FacetOptions]

    def __init__(
        self,
        criteria: Optional[Criteria] = None,
        page_request: Optional[PageRequest] = None,
    ):
        self._facet_options = None
        super().__init__(criteria, page_request)

    def _copy_from(self, source: "Query") -> None:
        super()._copy_from(source)
        if isinstance(source, FacetQuery):
            self._facet_options = source.facet_options

    @property
    def facet_options(self) -> Optional[FacetOptions]:
        return self._facet_options

    def set_facet_options(self, facet_options: Optional[FacetOptions]) -> "FacetQuery":
        if facet_options is not None and not facet_options.has_fields():
            raise InvalidArgumentError("Cannot set facet options without facet fields.")
        self._facet_options = facet_options
        return self

    def has_facet_options(self) -> bool:
        return self._facet_options is not None
