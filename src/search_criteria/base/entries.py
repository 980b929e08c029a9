# src/search_criteria/base/entries.py

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar, Optional, Tuple

from .geo import Distance, GeoLocation


class ConjunctionOperator(Enum):
    """How a chain member combines with the members before it."""

    FIRST = "first"
    AND = "and"
    OR = "or"
    AND_SUBCRITERIA = "and_subcriteria"
    OR_SUBCRITERIA = "or_subcriteria"


class OperationKey(Enum):
    """Operation kinds a single criteria entry can carry."""

    EQUALS = "equals"
    BETWEEN = "between"
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    FUZZY = "fuzzy"
    EXPRESSION = "expression"
    NEAR = "near"
    IN = "in"


# --- Criteria Entry Classes ---
# One frozen class per OperationKey. Translators dispatch on the class, so
# adding a kind here means adding a branch to every LeafTranslator.
@dataclass(frozen=True)
class CriteriaEntry:
    key: ClassVar[OperationKey]

    def same_as(self, other: "CriteriaEntry") -> bool:
        """
        Equality that also compares value types, so ``is_(1)`` and
        ``is_(True)`` count as different predicates.
        """
        if type(self) is not type(other):
            return False
        return all(
            _typed(getattr(self, f.name)) == _typed(getattr(other, f.name))
            for f in fields(self)
        )


def _typed(value: Any) -> Any:
    if isinstance(value, tuple):
        return (tuple, tuple(_typed(item) for item in value))
    return (type(value), value)


@dataclass(frozen=True)
class EqualsEntry(CriteriaEntry):
    key: ClassVar[OperationKey] = OperationKey.EQUALS
    value: Any


@dataclass(frozen=True)
class BetweenEntry(CriteriaEntry):
    key: ClassVar[OperationKey] = OperationKey.BETWEEN
    lower_bound: Any
    upper_bound: Any


@dataclass(frozen=True)
class ContainsEntry(CriteriaEntry):
    key: ClassVar[OperationKey] = OperationKey.CONTAINS
    value: str


@dataclass(frozen=True)
class StartsWithEntry(CriteriaEntry):
    key: ClassVar[OperationKey] = OperationKey.STARTS_WITH
    value: str


@dataclass(frozen=True)
class EndsWithEntry(CriteriaEntry):
    key: ClassVar[OperationKey] = OperationKey.ENDS_WITH
    value: str


@dataclass(frozen=True)
class FuzzyEntry(CriteriaEntry):
    key: ClassVar[OperationKey] = OperationKey.FUZZY
    value: str
    min_similarity: Optional[str] = None


@dataclass(frozen=True)
class ExpressionEntry(CriteriaEntry):
    key: ClassVar[OperationKey] = OperationKey.EXPRESSION
    value: str


@dataclass(frozen=True)
class NearEntry(CriteriaEntry):
    key: ClassVar[OperationKey] = OperationKey.NEAR
    location: GeoLocation
    distance: Distance


@dataclass(frozen=True)
class InEntry(CriteriaEntry):
    key: ClassVar[OperationKey] = OperationKey.IN
    values: Tuple[Any, ...]
