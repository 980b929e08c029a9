# src/search_criteria/request/assembler.py
import logging
from typing import Any, Dict, List, Optional

from search_criteria.base.exceptions import InvalidArgumentError
from search_criteria.base.field import Field
from search_criteria.base.query import FacetOptions, FacetQuery, FacetSort, Query
from search_criteria.base.sort import Direction, Sort
from search_criteria.base.translators import (
    FilterTranslator,
    LeafTranslator,
    ScoredQueryTranslator,
)

# --- Setup Logging ---
log = logging.getLogger(__name__)

SearchRequest = Dict[str, Any]

_FACET_ORDER = {
    FacetSort.COUNT: {"_count": "desc"},
    FacetSort.TERM: {"_key": "asc"},
}


class SearchRequestAssembler:
    """
    Merges a query's criteria, pagination, sort, filter queries, projection and
    facet options into one search request description.

    The result is a plain dict, ready to be JSON-encoded and handed to the
    transport that executes it.
    """

    def __init__(
        self,
        scored_translator: Optional[LeafTranslator] = None,
        filter_translator: Optional[LeafTranslator] = None,
    ):
        self._scored_translator = scored_translator or ScoredQueryTranslator()
        self._filter_translator = filter_translator or FilterTranslator()
        self._logger = log

    def get_query(self, query: Query) -> Optional[Dict[str, Any]]:
        """Returns the scored tree of the query's root criteria, or None without one."""
        if query.criteria is None:
            return None
        return query.criteria.emit(self._scored_translator)

    def build(self, query: Query) -> SearchRequest:
        """Builds the full search request for ``query``."""
        if query is None:
            raise InvalidArgumentError("Cannot construct a search request from None.")
        if query.criteria is None:
            raise InvalidArgumentError("Query has to have a criteria.")

        request: SearchRequest = {"query": self.get_query(query)}
        self._append_pagination(request, query)
        self._append_sort(request, query.sort)
        self._append_filter_queries(request, query.filter_queries)
        self._append_projection(request, query.projection_on_fields)
        if isinstance(query, FacetQuery):
            self._append_facets(request, query.facet_options)

        self._logger.info(
            f"Built search request with sections {sorted(request.keys())!r} for {query!r}"
        )
        return request

    def build_count(self, query: Query) -> SearchRequest:
        """Builds a request carrying only the query clause, for counting matches."""
        if query is None:
            raise InvalidArgumentError("Cannot construct a count request from None.")
        request: SearchRequest = {}
        tree = self.get_query(query)
        if tree is not None:
            request["query"] = tree
        self._logger.debug(f"Built count request for {query!r}")
        return request

    # --- Sections ---
    def _append_pagination(self, request: SearchRequest, query: Query) -> None:
        if query.page_request is None:
            return
        request["from"] = query.offset
        request["size"] = query.limit

    def _append_sort(self, request: SearchRequest, sort: Optional[Sort]) -> None:
        if sort is None:
            return
        request["sort"] = [
            {
                order.field_name: {
                    "order": "asc" if order.direction is Direction.ASC else "desc"
                }
            }
            for order in sort
        ]

    def _append_filter_queries(
        self, request: SearchRequest, filter_queries: List[Query]
    ) -> None:
        filters = [
            fq.criteria.emit(self._filter_translator)
            for fq in filter_queries
            if fq.criteria is not None
        ]
        if len(filters) < len(filter_queries):
            self._logger.debug(
                f"Skipped {len(filter_queries) - len(filters)} filter query(ies) without criteria"
            )
        if filters:
            request["filter"] = {"bool": {"must": filters}}

    def _append_projection(self, request: SearchRequest, fields: List[Field]) -> None:
        if not fields:
            return
        request["_source"] = [field.name for field in fields]

    def _append_facets(
        self, request: SearchRequest, facet_options: Optional[FacetOptions]
    ) -> None:
        if facet_options is None or not facet_options.has_fields():
            return
        aggregations = request.setdefault("aggregations", {})
        for field in facet_options.facet_on_fields:
            aggregations[field.name] = {
                "terms": {
                    "field": field.name,
                    "size": facet_options.facet_limit,
                    "order": dict(_FACET_ORDER[facet_options.facet_sort]),
                }
            }
