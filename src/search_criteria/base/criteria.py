# src/search_criteria/base/criteria.py
import logging
import math
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

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
from .exceptions import ChainSealedError, InvalidArgumentError
from .field import Field, to_field
from .geo import Distance, GeoLocation
from .translators import (
    Clause,
    FilterTranslator,
    LeafTranslator,
    ScoredQueryTranslator,
    build_tree,
)

# --- Setup Logging ---
log = logging.getLogger(__name__)

CRITERIA_VALUE_SEPARATOR = " "

_COLLECTION_TYPES = (list, tuple, set, frozenset)


# --- Criteria Chain ---
class CriteriaChain:
    """
    Ordered (criteria, connector) pairs shared by every node built from one root.

    The chain is append-only while criteria are being built and becomes
    read-only the first time it is emitted.
    """

    def __init__(self):
        self._members: List[Tuple["Criteria", ConjunctionOperator]] = []
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        self._sealed = True

    def append(self, criteria: "Criteria", operator: ConjunctionOperator) -> None:
        if self._sealed:
            raise ChainSealedError(
                f"Cannot add {criteria!r} to a criteria chain that has already been emitted."
            )
        if self.contains(criteria):
            log.debug(f"Criteria {criteria!r} already part of chain; ignoring {operator.name}")
            return
        self._members.append((criteria, operator))
        log.debug(f"Appended {criteria!r} to chain as {operator.name}")

    def contains(self, criteria: "Criteria") -> bool:
        return any(member is criteria for member, _ in self._members)

    def references(self, chain: "CriteriaChain") -> bool:
        """True if ``chain`` is this chain or is reachable through sub-criteria."""
        if chain is self:
            return True
        return any(
            member.chain.references(chain)
            for member, operator in self._members
            if operator
            in (ConjunctionOperator.AND_SUBCRITERIA, ConjunctionOperator.OR_SUBCRITERIA)
        )

    def members(self) -> Tuple[Tuple["Criteria", ConjunctionOperator], ...]:
        return tuple(self._members)

    def __iter__(self) -> Iterator[Tuple["Criteria", ConjunctionOperator]]:
        return iter(self.members())

    def __len__(self) -> int:
        return len(self._members)


# --- Criteria ---
class Criteria:
    """
    Criteria is the central class when constructing queries. It follows a
    fluent API style, which allows to easily chain together multiple criteria.

    Example::

        Criteria.where("title").starts_with("py").and_("year").between(2000, 2010)
    """

    _field: Optional[Field]
    _entries: List[CriteriaEntry]
    _negating: bool
    _boost: Optional[float]
    _chain: CriteriaChain

    def __init__(
        self, field: Union[str, Field], chain: Optional[CriteriaChain] = None
    ):
        self._init_node(to_field(field), chain)

    def _init_node(self, field: Optional[Field], chain: Optional[CriteriaChain]):
        self._field = field
        self._entries = []
        self._negating = False
        self._boost = None
        if chain is None:
            self._chain = CriteriaChain()
            self._chain.append(self, ConjunctionOperator.FIRST)
        else:
            self._chain = chain

    @classmethod
    def where(cls, field: Union[str, Field]) -> "Criteria":
        """Creates a new root criteria for the given field."""
        return Criteria(field)

    # --- Accessors ---
    @property
    def field(self) -> Optional[Field]:
        return self._field

    @property
    def entries(self) -> Tuple[CriteriaEntry, ...]:
        return tuple(self._entries)

    @property
    def negating(self) -> bool:
        return self._negating

    @property
    def boost_factor(self) -> Optional[float]:
        return self._boost

    @property
    def chain(self) -> CriteriaChain:
        return self._chain

    # --- Chaining ---
    def and_(self, target: Union[str, Field, "Criteria"], *more: "Criteria") -> "Criteria":
        """
        Chain using AND.

        Given a field, a new sibling criteria on that field is appended and
        returned so that further predicates apply to it. Given one or more
        criteria, each is appended as a sub-criteria and ``self`` is returned.
        """
        if target is None or isinstance(target, Criteria):
            for criteria in (target,) + more:
                self._append_subcriteria(criteria, ConjunctionOperator.AND_SUBCRITERIA)
            return self
        if more:
            raise InvalidArgumentError(
                "Only criteria can be combined in a single and_() call, not fields."
            )
        return self._append_sibling(target, ConjunctionOperator.AND)

    def or_(self, target: Union[str, Field, "Criteria"]) -> "Criteria":
        """Chain using OR. Mirrors :meth:`and_` for a single field or criteria."""
        if target is None or isinstance(target, Criteria):
            self._append_subcriteria(target, ConjunctionOperator.OR_SUBCRITERIA)
            return self
        return self._append_sibling(target, ConjunctionOperator.OR)

    def _append_sibling(
        self, field: Union[str, Field], operator: ConjunctionOperator
    ) -> "Criteria":
        sibling = Criteria(to_field(field), self._chain)
        self._chain.append(sibling, operator)
        return sibling

    def _append_subcriteria(
        self, criteria: Optional["Criteria"], operator: ConjunctionOperator
    ) -> None:
        if criteria is None:
            raise InvalidArgumentError("Cannot chain 'None' criteria.")
        if criteria.chain.references(self._chain):
            raise InvalidArgumentError(
                f"Cannot chain {criteria!r}: it already contains this criteria chain."
            )
        self._chain.append(criteria, operator)

    # --- Leaf predicates ---
    def _check_open(self) -> None:
        if self._chain.sealed:
            raise ChainSealedError(
                f"Cannot modify {self!r}: its chain has already been emitted."
            )

    def _add_entry(self, entry: CriteriaEntry) -> "Criteria":
        self._check_open()
        if not any(entry.same_as(existing) for existing in self._entries):
            self._entries.append(entry)
        log.debug(f"Added {entry!r} to {self!r}")
        return self

    def is_(self, value: Any) -> "Criteria":
        """Exact match on the value, no wildcards."""
        return self._add_entry(EqualsEntry(value))

    def between(self, lower_bound: Any, upper_bound: Any) -> "Criteria":
        """Range ``[lower_bound TO upper_bound]``; either bound may be None, not both."""
        if lower_bound is None and upper_bound is None:
            raise InvalidArgumentError("Range [* TO *] is not allowed.")
        return self._add_entry(BetweenEntry(lower_bound, upper_bound))

    def greater_than_equal(self, lower_bound: Any) -> "Criteria":
        return self.between(lower_bound, None)

    def less_than_equal(self, upper_bound: Any) -> "Criteria":
        return self.between(None, upper_bound)

    def contains(self, value: str) -> "Criteria":
        """
        Match with leading and trailing wildcards.

        Leading wildcards may be slow or unsupported depending on the index.
        """
        self._assert_no_blank_in_wildcarded_query(value, True, True)
        return self._add_entry(ContainsEntry(value))

    def starts_with(self, value: str) -> "Criteria":
        self._assert_no_blank_in_wildcarded_query(value, False, True)
        return self._add_entry(StartsWithEntry(value))

    def ends_with(self, value: str) -> "Criteria":
        self._assert_no_blank_in_wildcarded_query(value, True, False)
        return self._add_entry(EndsWithEntry(value))

    def fuzzy(self, value: str, min_similarity: Optional[str] = None) -> "Criteria":
        if value is None:
            raise InvalidArgumentError("Fuzzy value must not be None.")
        return self._add_entry(FuzzyEntry(str(value), min_similarity))

    def expression(self, expression: str) -> "Criteria":
        """Raw query-string expression, passed through unescaped."""
        if expression is None:
            raise InvalidArgumentError("Expression must not be None.")
        return self._add_entry(ExpressionEntry(str(expression)))

    def near(
        self,
        location: GeoLocation,
        distance: Union[Distance, float, int, None] = None,
    ) -> "Criteria":
        """Geo-distance constraint around ``location``; a missing distance means 0."""
        if location is None:
            raise InvalidArgumentError("Location for 'near' must not be None.")
        if not isinstance(location, GeoLocation):
            raise InvalidArgumentError(
                f"Location for 'near' must be a GeoLocation, got {type(location).__name__}"
            )
        if distance is None:
            distance = Distance(0)
        elif not isinstance(distance, Distance):
            distance = Distance(distance)
        if distance.value < 0:
            raise InvalidArgumentError("Distance must not be negative.")
        return self._add_entry(NearEntry(location, distance))

    def in_(self, *values: Any) -> "Criteria":
        """
        Match any of the given values.

        Accepts either varargs (``in_(1, 2, 3)``) or a single collection
        (``in_([1, 2, 3])``). Nested collections are flattened one level.
        """
        if not values:
            raise InvalidArgumentError("At least one element has to be present for 'in'.")
        if len(values) == 1:
            single = values[0]
            if single is None:
                raise InvalidArgumentError("Collection of 'in' values must not be None.")
            items = list(single) if _is_collection(single) else [single]
        else:
            if _is_collection(values[1]):
                raise InvalidArgumentError(
                    "At least one element of argument of type "
                    f"{type(values[1]).__name__} has to be present; pass a single collection instead."
                )
            items = list(values)

        flattened: List[Any] = []
        for item in items:
            if _is_collection(item):
                flattened.extend(item)
            else:
                flattened.append(item)
        if not flattened:
            raise InvalidArgumentError("At least one element has to be present for 'in'.")
        return self._add_entry(InEntry(tuple(flattened)))

    def not_(self) -> "Criteria":
        """Negates the predicates of this node."""
        self._check_open()
        self._negating = True
        return self

    def boost(self, boost: float) -> "Criteria":
        """Boost positive hits on this node with the given factor, e.g. ^2.3."""
        if not isinstance(boost, (int, float)) or isinstance(boost, bool):
            raise InvalidArgumentError(f"Boost must be a number, got {type(boost).__name__}")
        if not math.isfinite(boost):
            raise InvalidArgumentError(f"Boost must be a finite number, got {boost!r}")
        if boost < 0:
            raise InvalidArgumentError("Boost must not be negative.")
        self._check_open()
        self._boost = float(boost)
        return self

    def _assert_no_blank_in_wildcarded_query(
        self, value: str, leading_wildcard: bool, trailing_wildcard: bool
    ) -> None:
        if value is None:
            raise InvalidArgumentError("Wildcard value must not be None.")
        if CRITERIA_VALUE_SEPARATOR in value:
            pattern = (
                ("*" if leading_wildcard else "")
                + f'"{value}"'
                + ("*" if trailing_wildcard else "")
            )
            log.warning(f"Rejected wildcard value containing a blank: {value!r}")
            raise InvalidArgumentError(
                f"Cannot construct query '{pattern}'. Use expression or multiple clauses instead."
            )

    # --- Emission ---
    def leaf_clauses(self, translator: LeafTranslator) -> List[Clause]:
        """Translates this node's own entries, in insertion order."""
        return [translator.translate_entry(self._field.name, e) for e in self._entries]

    def emit(self, translator: LeafTranslator) -> Clause:
        """Emits the full tree of this criteria's chain in the translator's form."""
        return build_tree(self, translator)

    def to_scored_query(self) -> Dict[str, Any]:
        return self.emit(ScoredQueryTranslator())

    def to_filter(self) -> Dict[str, Any]:
        return self.emit(FilterTranslator())

    def __repr__(self) -> str:
        parts = [f"field={self._field.name!r}" if self._field else "field=None"]
        if self._entries:
            parts.append(f"entries={len(self._entries)}")
        if self._negating:
            parts.append("negating=True")
        if self._boost is not None:
            parts.append(f"boost={self._boost!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


def where(field: Union[str, Field]) -> Criteria:
    """Static factory creating a new root criteria for ``field``."""
    return Criteria.where(field)


def _is_collection(value: Any) -> bool:
    return isinstance(value, _COLLECTION_TYPES)


# --- Special Criteria ---
class StringCriteria(Criteria):
    """A criteria holding a raw query string instead of field predicates."""

    def __init__(self, query_string: str):
        if not query_string or not isinstance(query_string, str):
            raise InvalidArgumentError("Query string for criteria must not be None/empty.")
        self._query_string = query_string
        self._init_node(None, None)

    @property
    def query_string(self) -> str:
        return self._query_string

    def _add_entry(self, entry: CriteriaEntry) -> "Criteria":
        raise InvalidArgumentError(
            "StringCriteria has no field; chain a field with and_()/or_() to add predicates."
        )

    def leaf_clauses(self, translator: LeafTranslator) -> List[Clause]:
        return [translator.query_string(self._query_string)]

    def __repr__(self) -> str:
        return f"StringCriteria(query_string={self._query_string!r})"


class MatchAllCriteria(Criteria):
    """Matches every document; emits a bare match-all in either form."""

    def __init__(self):
        self._init_node(None, None)

    def _add_entry(self, entry: CriteriaEntry) -> "Criteria":
        raise InvalidArgumentError("MatchAllCriteria does not accept predicates.")

    def and_(self, target, *more):
        raise InvalidArgumentError(
            "MatchAllCriteria cannot be extended; add it as sub-criteria of another criteria."
        )

    def or_(self, target):
        raise InvalidArgumentError(
            "MatchAllCriteria cannot be extended; add it as sub-criteria of another criteria."
        )

    def leaf_clauses(self, translator: LeafTranslator) -> List[Clause]:
        return [translator.match_all()]

    def emit(self, translator: LeafTranslator) -> Clause:
        self._chain.seal()
        return translator.match_all()

    def __repr__(self) -> str:
        return "MatchAllCriteria()"
