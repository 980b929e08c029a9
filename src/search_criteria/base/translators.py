# src/search_criteria/base/translators.py
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .entries import (
    BetweenEntry,
    ConjunctionOperator,
    ContainsEntry,
    CriteriaEntry,
    EndsWithEntry,
    EqualsEntry,
    ExpressionEntry,
    FuzzyEntry,
    InEntry,
    NearEntry,
    StartsWithEntry,
)
from .utils import escape_criteria_value, prepare_for_request

if TYPE_CHECKING:
    from .criteria import Criteria

# --- Setup Logging ---
log = logging.getLogger(__name__)

WILDCARD = "*"

Clause = Dict[str, Any]


# --- Leaf Translator Strategy ---
class LeafTranslator(ABC):
    """
    Turns the entries of a single criteria node into clauses of one tree form.

    The chain walk in :func:`build_tree` is shared by every tree form; a
    translator only decides how each entry, each node's conjunctive group
    and the final boolean node are spelled.
    """

    #: Key under which a node's own clauses are grouped.
    group_key: str = "must"

    def __init__(self, analyze_wildcard: bool = True):
        self.analyze_wildcard = analyze_wildcard

    # --- Node level ---
    def leaf_tree(self, criteria: "Criteria") -> Clause:
        """Builds the conjunctive group of all entries attached to ``criteria``."""
        clauses = criteria.leaf_clauses(self)
        tree = self.group(clauses, criteria.boost_factor)
        if criteria.negating:
            tree = self.negate(tree)
        return tree

    def group(self, clauses: List[Clause], boost: Optional[float]) -> Clause:
        return {"bool": {self.group_key: clauses}}

    def negate(self, tree: Clause) -> Clause:
        return {"bool": {"must_not": [tree]}}

    def combine(self, must: List[Clause], should: List[Clause]) -> Clause:
        """Builds the boolean node holding the members of one chain."""
        node: Dict[str, Any] = {}
        if must:
            node["must"] = must
        if should:
            node["should"] = should
        return {"bool": node}

    # --- Entry level ---
    def translate_entry(self, field_name: str, entry: CriteriaEntry) -> Clause:
        """Dispatches one entry to the matching clause builder."""
        if isinstance(entry, EqualsEntry):
            return self.equals(field_name, prepare_for_request(entry.value))
        if isinstance(entry, BetweenEntry):
            return self.between(
                field_name,
                prepare_for_request(entry.lower_bound),
                prepare_for_request(entry.upper_bound),
            )
        if isinstance(entry, ContainsEntry):
            return self.wildcard(
                field_name, WILDCARD + escape_criteria_value(entry.value) + WILDCARD
            )
        if isinstance(entry, StartsWithEntry):
            return self.wildcard(field_name, escape_criteria_value(entry.value) + WILDCARD)
        if isinstance(entry, EndsWithEntry):
            return self.wildcard(field_name, WILDCARD + escape_criteria_value(entry.value))
        if isinstance(entry, FuzzyEntry):
            return self.fuzzy(
                field_name, escape_criteria_value(entry.value), entry.min_similarity
            )
        if isinstance(entry, ExpressionEntry):
            return self.expression(field_name, entry.value)
        if isinstance(entry, NearEntry):
            return self.near(field_name, self.geo_distance(field_name, entry))
        if isinstance(entry, InEntry):
            return self.in_(field_name, [prepare_for_request(v) for v in entry.values])
        log.error(f"Unsupported criteria entry type during translation: {type(entry)}")
        raise TypeError(f"Unsupported criteria entry type: {type(entry).__name__}")

    @abstractmethod
    def equals(self, field_name: str, value: Any) -> Clause: ...

    @abstractmethod
    def near(self, field_name: str, geo_distance: Clause) -> Clause: ...

    def between(self, field_name: str, lower: Any, upper: Any) -> Clause:
        bounds: Dict[str, Any] = {}
        if lower is not None:
            bounds["gte"] = lower
        if upper is not None:
            bounds["lte"] = upper
        return {"range": {field_name: bounds}}

    def wildcard(self, field_name: str, pattern: str) -> Clause:
        return {
            "query_string": {
                "default_field": field_name,
                "query": pattern,
                "analyze_wildcard": self.analyze_wildcard,
            }
        }

    def fuzzy(
        self, field_name: str, value: str, min_similarity: Optional[str]
    ) -> Clause:
        options: Dict[str, Any] = {"value": value}
        if min_similarity is not None:
            options["fuzziness"] = min_similarity
        return {"fuzzy": {field_name: options}}

    def expression(self, field_name: str, expression: str) -> Clause:
        return {"query_string": {"default_field": field_name, "query": expression}}

    def in_(self, field_name: str, values: List[Any]) -> Clause:
        return {"terms": {field_name: values}}

    def geo_distance(self, field_name: str, entry: NearEntry) -> Clause:
        return {
            "geo_distance": {
                "distance": entry.distance.render(),
                field_name: {
                    "lat": entry.location.latitude,
                    "lon": entry.location.longitude,
                },
            }
        }

    def query_string(self, query: str) -> Clause:
        return {"query_string": {"query": query}}

    def match_all(self) -> Clause:
        return {"match_all": {}}


class ScoredQueryTranslator(LeafTranslator):
    """Emits clauses that contribute to relevance scoring."""

    group_key = "must"

    def group(self, clauses: List[Clause], boost: Optional[float]) -> Clause:
        tree = super().group(clauses, boost)
        if boost is not None:
            tree["bool"]["boost"] = boost
        return tree

    def equals(self, field_name: str, value: Any) -> Clause:
        return {"match": {field_name: {"query": value}}}

    def near(self, field_name: str, geo_distance: Clause) -> Clause:
        return {"bool": {"must": [self.match_all()], "filter": [geo_distance]}}


class FilterTranslator(LeafTranslator):
    """Emits non-scoring clauses; boost factors are not carried over."""

    group_key = "filter"

    def equals(self, field_name: str, value: Any) -> Clause:
        return {"term": {field_name: value}}

    def near(self, field_name: str, geo_distance: Clause) -> Clause:
        return geo_distance


# --- Chain Walk ---
def build_tree(criteria: "Criteria", translator: LeafTranslator) -> Clause:
    """
    Walks the chain ``criteria`` belongs to and folds it into one boolean node.

    The FIRST member is held back until the next connector tells whether it
    joins ``must`` or ``should``; a chain of one member ends up as the sole
    ``must`` child. Sub-criteria are emitted recursively as a whole.
    """
    chain = criteria.chain
    chain.seal()

    must: List[Clause] = []
    should: List[Clause] = []
    pending: Optional[Clause] = None

    for member, operator in chain.members():
        if operator is ConjunctionOperator.FIRST:
            pending = translator.leaf_tree(member)
            continue

        target = (
            must
            if operator in (ConjunctionOperator.AND, ConjunctionOperator.AND_SUBCRITERIA)
            else should
        )
        if pending is not None:
            target.append(pending)
            pending = None

        if operator in (ConjunctionOperator.AND, ConjunctionOperator.OR):
            target.append(translator.leaf_tree(member))
        else:
            target.append(member.emit(translator))

    if pending is not None:
        must.append(pending)

    tree = translator.combine(must, should)
    log.debug(
        f"Built {type(translator).__name__} tree for chain of {len(chain)} member(s)"
    )
    return tree
