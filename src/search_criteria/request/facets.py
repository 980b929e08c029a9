# src/search_criteria/request/facets.py
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from search_criteria.base.exceptions import InvalidArgumentError
from search_criteria.base.query import FacetQuery

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FacetEntry:
    """One bucket of a facet: a distinct value of ``field`` and its document count."""

    field: str
    value: Any
    count: int


def facet_results_from_response(
    query: FacetQuery, response: Optional[Mapping[str, Any]]
) -> Dict[str, List[FacetEntry]]:
    """
    Reads the terms aggregations requested by ``query`` out of a search response.

    Results are keyed by field name, in the order the facet options list the
    fields; buckets keep the order the engine returned them in. Fields missing
    from the response are reported with an empty list.
    """
    if query is None:
        raise InvalidArgumentError("Cannot convert response for None query.")
    if not query.has_facet_options() or not response:
        return {}
    aggregations = response.get("aggregations")
    if not aggregations:
        return {}

    results: Dict[str, List[FacetEntry]] = {}
    for field in query.facet_options.facet_on_fields:
        section = aggregations.get(field.name)
        if section is None:
            log.warning(f"Facet field '{field.name}' missing from search response")
            results[field.name] = []
            continue
        results[field.name] = [
            FacetEntry(field.name, bucket.get("key"), int(bucket.get("doc_count", 0)))
            for bucket in section.get("buckets", [])
        ]
    log.debug(
        f"Converted facet results for {len(results)} field(s): {list(results.keys())!r}"
    )
    return results
